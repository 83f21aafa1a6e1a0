"""Paste capture: isolate the pasted content, clean it, put it back.

A paste is handled in two steps. on_paste() runs before the browser inserts
anything and moves the insertion point somewhere harmless (the isolation).
One tick later on_capture_settled() reads what landed there, returns the live
document to its previous state, and inserts the cleaned content at the
original cursor. Whatever happens in between, the work area is discarded and
the capture state reset before the tick ends.
"""

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Optional

from bs4 import Tag

from .deep_clean import HtmlDeepCleaner
from .host import EditorHost
from .insert import CursorAwareInserter
from .selection import Range, parse_fragment

logger = logging.getLogger(__name__)

DUMMY_ID = "_pasteclean_pasted_content"
DUMMY_HTML = (
    f'<div id="{DUMMY_ID}" contenteditable="true" '
    'style="position:absolute;left:-10000px;height:1px"></div>'
)

PLACEHOLDER_CLASS = "_pasteclean_placeholder"
PLACEHOLDER_HTML = f'<span class="{PLACEHOLDER_CLASS}"></span>'


class PasteCleanError(Exception):
    """Base class for paste cleaning errors."""


class CaptureError(PasteCleanError):
    """The host could not provide what isolating a paste needs."""


@dataclass
class CaptureState:
    """State of the paste currently being captured."""
    active: bool = False
    saved_selection: Optional[Range] = None
    saved_document_snapshot: Optional[str] = None
    work_area: Optional[Tag] = None


@dataclass
class CapturedPaste:
    """Raw pasted HTML and where the cleaned version belongs."""
    html: str
    range: Optional[Range]


class CaptureStrategy(ABC):
    """How pasted content is kept apart from the live document."""

    @property
    @abstractmethod
    def name(self) -> str:
        pass

    @property
    @abstractmethod
    def slug(self) -> str:
        pass

    @abstractmethod
    def isolate(self, host: EditorHost, state: CaptureState) -> None:
        """Redirect the upcoming native paste away from the live document."""
        pass

    @abstractmethod
    def release(self, host: EditorHost, state: CaptureState) -> CapturedPaste:
        """Collect the pasted content and restore the live document."""
        pass

    @abstractmethod
    def discard(self, host: EditorHost, state: CaptureState) -> None:
        """Remove any leftover work area or placeholder. Safe to call twice."""
        pass


class DummyGrabStrategy(CaptureStrategy):
    """Let the paste land in an off-screen element next to the editor.

    The live document is never touched until the cleaned content goes in.
    """

    @property
    def name(self) -> str:
        return "DummyGrab"

    @property
    def slug(self) -> str:
        return "dummy-grab"

    def isolate(self, host: EditorHost, state: CaptureState) -> None:
        editor = host.editor
        if editor.parent is None:
            raise CaptureError("Editor is not attached to a page")

        state.saved_selection = host.save_selection()
        dummy = parse_fragment(DUMMY_HTML)[0]
        editor.insert_after(dummy)
        host.set_selection(Range.select_node_contents(dummy))
        state.work_area = dummy

    def release(self, host: EditorHost, state: CaptureState) -> CapturedPaste:
        dummy = state.work_area
        html = dummy.decode_contents() if dummy is not None else ""
        self.discard(host, state)
        return CapturedPaste(html=html, range=host.restore_selection(state.saved_selection))

    def discard(self, host: EditorHost, state: CaptureState) -> None:
        if state.work_area is not None and state.work_area.parent is not None:
            state.work_area.extract()
        state.work_area = None


class SwapRestoreStrategy(CaptureStrategy):
    """Empty the editor so the paste lands alone, then swap the document back.

    A placeholder marks the cursor inside the saved snapshot.
    """

    @property
    def name(self) -> str:
        return "SwapRestore"

    @property
    def slug(self) -> str:
        return "swap-restore"

    def isolate(self, host: EditorHost, state: CaptureState) -> None:
        host.insert_content_at_cursor(PLACEHOLDER_HTML)
        state.saved_document_snapshot = host.get_html()
        host.set_html("")

    def release(self, host: EditorHost, state: CaptureState) -> CapturedPaste:
        try:
            html = host.get_html()
        finally:
            host.set_html(state.saved_document_snapshot or "")

        placeholder = host.editor.find("span", class_=PLACEHOLDER_CLASS)
        if placeholder is None:
            logger.warning("Paste placeholder missing after restoring the document")
            return CapturedPaste(html=html, range=None)

        rng = Range.select_node(placeholder)
        host.set_selection(rng)
        return CapturedPaste(html=html, range=rng)

    def discard(self, host: EditorHost, state: CaptureState) -> None:
        for placeholder in host.editor.find_all("span", class_=PLACEHOLDER_CLASS):
            placeholder.decompose()
        state.saved_document_snapshot = None


CAPTURE_STRATEGIES = {
    "dummy-grab": DummyGrabStrategy,
    "swap-restore": SwapRestoreStrategy,
}


class PasteCaptureController:
    """Owns the capture lifecycle of one editor.

    Only one capture runs at a time. A paste arriving while a capture is
    pending is rejected: it gets no work area and no settle callback of its
    own, and whatever the browser inserts for it lands in the work area that
    is already in place.
    """

    def __init__(
        self,
        host: EditorHost,
        cleaner: Optional[HtmlDeepCleaner] = None,
        strategy: Optional[CaptureStrategy] = None,
        inserter: Optional[CursorAwareInserter] = None,
    ):
        self.host = host
        self.cleaner = cleaner or HtmlDeepCleaner(host.sanitize_html)
        self.strategy = strategy or DummyGrabStrategy()
        self.inserter = inserter or CursorAwareInserter(host)
        self.state = CaptureState()
        self.rejected = 0

    @property
    def active(self) -> bool:
        return self.state.active

    def attach(self) -> None:
        self.host.on_paste(self.on_paste)

    def on_paste(self, event=None) -> bool:
        """Start capturing a paste. Returns False if the paste was rejected."""
        if self.state.active:
            self.rejected += 1
            logger.info("Paste ignored: another paste is still being captured")
            return False

        state = CaptureState(active=True)
        self.state = state
        try:
            self.strategy.isolate(self.host, state)
        except CaptureError as e:
            logger.warning("Could not isolate paste: %s", e)
            self.strategy.discard(self.host, state)
            self.state = CaptureState()
            return False

        # Read back only after the native paste has landed.
        self.host.defer(self.on_capture_settled)
        return True

    def on_capture_settled(self) -> None:
        state = self.state
        if not state.active:
            return

        try:
            captured = self.strategy.release(self.host, state)

            if not captured.html:
                logger.debug("Empty paste; deleting selection only")
                self._delete_selection(captured.range)
                return

            html = self._clean(captured.html)
            self.inserter.insert_at_selection(html, captured.range)
        except PasteCleanError as e:
            logger.warning("Paste capture failed: %s", e)
        finally:
            self.strategy.discard(self.host, state)
            self.state = CaptureState()

    def _clean(self, raw_html: str) -> str:
        """Deep clean, falling back to the host sanitizer, then to the raw paste."""
        try:
            return self.cleaner.deep_clean(raw_html)
        except Exception:
            logger.exception("Deep clean failed; falling back to host sanitizer")

        try:
            return self.host.sanitize_html(raw_html)
        except Exception:
            logger.exception("Host sanitizer failed; pasting raw content")

        return raw_html

    def _delete_selection(self, rng: Optional[Range]) -> None:
        if rng is None:
            return
        rng.delete_contents()
        self.host.set_selection(rng)
