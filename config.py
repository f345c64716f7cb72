import logging
import os
from dataclasses import dataclass, field

from dotenv import load_dotenv

load_dotenv()

# Wait between the page's load event and reading the document. An empirical
# value, not a guarantee: tags injected later than this are reported missing.
SETTLE_DELAY_SECONDS = 1.0
REQUEST_TIMEOUT_SECONDS = 15
BROWSER_TIMEOUT_SECONDS = 30
DEFAULT_MATCH_PATTERNS = ("*://*/*",)

LOG_FORMAT = '%(asctime)s - %(levelname)s - %(message)s'
LOG_DATEFMT = '%Y-%m-%d %H:%M:%S'


def _env_float(name: str, default: float) -> float:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        value = float(raw)
    except ValueError:
        logging.warning(f"{name}={raw!r} is not a number, using {default}")
        return default
    if value < 0:
        logging.warning(f"{name}={raw!r} is negative, using {default}")
        return default
    return value


def _env_patterns(name: str, default: tuple) -> tuple:
    raw = os.getenv(name)
    if not raw:
        return default
    patterns = tuple(p.strip() for p in raw.split(",") if p.strip())
    return patterns or default


@dataclass(frozen=True)
class Settings:
    settle_delay: float = SETTLE_DELAY_SECONDS
    request_timeout: float = REQUEST_TIMEOUT_SECONDS
    browser_timeout: float = BROWSER_TIMEOUT_SECONDS
    match_patterns: tuple = field(default=DEFAULT_MATCH_PATTERNS)
    log_level: str = "INFO"


def get_settings() -> Settings:
    return Settings(
        settle_delay=_env_float("SEO_OVERLAY_SETTLE_DELAY", SETTLE_DELAY_SECONDS),
        request_timeout=_env_float("SEO_OVERLAY_REQUEST_TIMEOUT", REQUEST_TIMEOUT_SECONDS),
        browser_timeout=_env_float("SEO_OVERLAY_BROWSER_TIMEOUT", BROWSER_TIMEOUT_SECONDS),
        match_patterns=_env_patterns("SEO_OVERLAY_MATCH", DEFAULT_MATCH_PATTERNS),
        log_level=(os.getenv("SEO_OVERLAY_LOG_LEVEL") or "INFO").upper(),
    )


def configure_logging(settings: Settings | None = None) -> None:
    settings = settings or get_settings()
    logging.basicConfig(
        level=getattr(logging, settings.log_level, logging.INFO),
        format=LOG_FORMAT,
        datefmt=LOG_DATEFMT
    )
