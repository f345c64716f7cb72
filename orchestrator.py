import asyncio
import logging
from enum import Enum
from typing import Callable, Optional

from config import SETTLE_DELAY_SECONDS
from document import PageDocument
from extractor import extract
from overlay import OverlayRenderer, PanelHandle


class State(str, Enum):
    IDLE = "idle"
    WAITING_FOR_LOAD = "waiting_for_load"
    SETTLING = "settling"
    RENDERED = "rendered"


class Orchestrator:
    """
    Runs extraction and rendering exactly once for a page view.

    The host reports when the page (including subresources) has loaded, then
    the orchestrator waits `settle_delay` seconds before reading the document,
    so metadata that scripts add shortly after load is picked up. The delay is
    a heuristic: anything injected later than that is reported as missing.

    A host provides `on_load(callback)`, `call_later(delay, callback)`,
    `snapshot() -> PageDocument` and `attach(handle)`.
    """

    def __init__(
        self,
        host,
        settle_delay: float = SETTLE_DELAY_SECONDS,
        on_rendered: Optional[Callable[[PanelHandle], None]] = None,
        on_error: Optional[Callable[[BaseException], None]] = None,
    ):
        self.host = host
        self.settle_delay = settle_delay
        self.on_rendered = on_rendered
        self.on_error = on_error
        self.state = State.IDLE
        self.panel: Optional[PanelHandle] = None

    def start(self) -> None:
        if self.state != State.IDLE:
            raise RuntimeError(f"Orchestrator already started (state: {self.state.value})")
        self.state = State.WAITING_FOR_LOAD
        logging.info("Waiting for page load...")
        self.host.on_load(self._loaded)

    def _loaded(self) -> None:
        if self.state != State.WAITING_FOR_LOAD:
            return
        self.state = State.SETTLING
        logging.info(f"Page loaded, settling for {self.settle_delay}s before analysis")
        self.host.call_later(self.settle_delay, self._settled)

    def _settled(self) -> None:
        if self.state != State.SETTLING:
            return
        try:
            document = self.host.snapshot()
            model = extract(document)
            handle = OverlayRenderer(document).render(model)
            self.host.attach(handle)
        except Exception as e:
            logging.exception(f"Rendering the SEO panel failed: {e}")
            if self.on_error is None:
                raise
            self.on_error(e)
            return
        self.panel = handle
        self.state = State.RENDERED
        if self.on_rendered is not None:
            self.on_rendered(handle)


class StaticPage:
    """Host for an already-parsed document, driven by the running asyncio loop."""

    def __init__(self, document: PageDocument, loop: Optional[asyncio.AbstractEventLoop] = None):
        self.document = document
        self.loop = loop or asyncio.get_running_loop()

    def on_load(self, callback: Callable[[], None]) -> None:
        # a parsed document has nothing left to load
        self.loop.call_soon(callback)

    def call_later(self, delay: float, callback: Callable[[], None]) -> None:
        self.loop.call_later(delay, callback)

    def snapshot(self) -> PageDocument:
        return self.document

    def attach(self, handle: PanelHandle) -> None:
        # the renderer already wrote the panel into this document
        pass


async def inspect_document(document: PageDocument, settle_delay: float = SETTLE_DELAY_SECONDS) -> PanelHandle:
    loop = asyncio.get_running_loop()
    done = loop.create_future()

    def _finish(handle: PanelHandle) -> None:
        if not done.done():
            done.set_result(handle)

    def _fail(error: BaseException) -> None:
        if not done.done():
            done.set_exception(error)

    Orchestrator(StaticPage(document, loop), settle_delay, on_rendered=_finish, on_error=_fail).start()
    return await done
