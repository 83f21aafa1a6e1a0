"""Interface of the rich-text editor that hosts the paste cleaner."""

from abc import ABC, abstractmethod
from contextlib import AbstractContextManager
from typing import Any, Callable, Optional

from bs4 import PageElement, Tag

from .selection import Range


class EditorHost(ABC):
    """Services the paste pipeline consumes from its editor.

    ``editor`` is the content element of the live document; it must sit inside
    a larger page tree so a work area can be attached next to it.
    """

    @property
    @abstractmethod
    def editor(self) -> Tag:
        pass

    @abstractmethod
    def on_paste(self, handler: Callable[..., Any]) -> None:
        """Register a handler fired once per paste gesture, before the native insert."""
        pass

    @abstractmethod
    def defer(self, callback: Callable[[], Any]) -> None:
        """Run callback after the current UI event has finished processing."""
        pass

    # Selection

    @abstractmethod
    def get_selection(self) -> Optional[Range]:
        pass

    @abstractmethod
    def set_selection(self, rng: Optional[Range]) -> None:
        pass

    @abstractmethod
    def save_selection(self) -> Optional[Range]:
        """Remember the current selection and return the saved copy."""
        pass

    @abstractmethod
    def restore_selection(self, saved: Optional[Range] = None) -> Optional[Range]:
        """Make a saved selection current again.

        Returns the restored range, or None when it is no longer valid.
        """
        pass

    # Content

    @abstractmethod
    def sanitize_html(self, html: str) -> str:
        """The host's generic HTML cleaner."""
        pass

    @abstractmethod
    def insert_content_at_cursor(self, html: str) -> None:
        pass

    @abstractmethod
    def get_html(self) -> str:
        pass

    @abstractmethod
    def set_html(self, html: str) -> None:
        pass

    # Layout

    @abstractmethod
    def positioned_layout(self) -> AbstractContextManager:
        """Context in which measure() offsets are relative to the editor."""
        pass

    @abstractmethod
    def measure(self, node: PageElement) -> tuple[int, int]:
        """Return (top offset, height) of a node."""
        pass

    @abstractmethod
    def get_scroll_top(self) -> int:
        pass

    @abstractmethod
    def set_scroll_top(self, value: int) -> None:
        pass

    @abstractmethod
    def get_viewport_height(self) -> int:
        pass
