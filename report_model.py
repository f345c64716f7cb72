from enum import Enum
from typing import Optional, Tuple, Union

from pydantic import BaseModel, ConfigDict

Value = Union[int, str, None]


class Presence(str, Enum):
    PRESENT = "present"
    MISSING = "missing"   # absence is an SEO defect
    NULL = "null"         # absence is only informational


class ReportItem(BaseModel):
    model_config = ConfigDict(frozen=True)

    label: str
    value: Value = None
    presence: Presence = Presence.NULL

    @classmethod
    def from_value(cls, label: str, value: Value, missing_is_defect: bool = False) -> "ReportItem":
        """
        Builds an item whose presence follows from the value itself.
        Empty strings are normalised to None; numbers always count as content.
        """
        if isinstance(value, str) and not value.strip():
            value = None
        if value is None:
            presence = Presence.MISSING if missing_is_defect else Presence.NULL
        else:
            presence = Presence.PRESENT
        return cls(label=label, value=value, presence=presence)


class ReportSection(BaseModel):
    model_config = ConfigDict(frozen=True)

    title: str
    items: Tuple[ReportItem, ...] = ()


class ReportModel(BaseModel):
    model_config = ConfigDict(frozen=True)

    url: Optional[str] = None
    sections: Tuple[ReportSection, ...] = ()

    def section(self, title: str) -> Optional[ReportSection]:
        for section in self.sections:
            if section.title == title:
                return section
        return None
