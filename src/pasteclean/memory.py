"""In-memory editor host backed by a BeautifulSoup page.

MemoryEditor plays the browser's part of the paste choreography: paste()
fires the registered handlers, then performs the native insertion at
whatever the selection is at that moment; deferred callbacks wait in a FIFO
queue until run_pending() is called.
"""

import logging
from collections import deque
from contextlib import contextmanager
from typing import Any, Callable, Iterator, Optional

from bs4 import BeautifulSoup, NavigableString, PageElement, Tag

from .host import EditorHost
from .sanitize import basic_sanitize
from .selection import Range, parse_fragment

logger = logging.getLogger(__name__)

PAGE_TEMPLATE = '<div id="page"><div class="editor_content" contenteditable="true"></div></div>'

# Elements counted as one rendered line each by the layout model
BLOCK_TAGS = ["p", "div", "li", "tr", "br", "h1", "h2", "h3", "h4", "h5", "h6", "blockquote", "pre"]


class MemoryEditor(EditorHost):
    """Editor host that keeps the page, selection and layout in memory.

    Layout is a block model: every top-level node of the editor is as tall as
    the number of block elements it holds times line_height. Offsets include
    page_offset unless measured inside positioned_layout(), the way a browser
    reports offsetTop against the nearest positioned ancestor.
    """

    def __init__(
        self,
        html: str = "",
        viewport_height: int = 200,
        line_height: int = 20,
        page_offset: int = 120,
        sanitizer: Callable[[str], str] = basic_sanitize,
    ):
        self.page = BeautifulSoup(PAGE_TEMPLATE, "html.parser")
        self._editor = self.page.find("div", class_="editor_content")
        self._sanitizer = sanitizer
        self._handlers: list[Callable[..., Any]] = []
        self._pending: deque = deque()
        self._selection: Optional[Range] = None
        self._saved: Optional[Range] = None
        self._positioned = False
        self._scroll_top = 0

        self.viewport_height = viewport_height
        self.line_height = line_height
        self.page_offset = page_offset

        self.set_html(html)
        self.move_cursor_to_end()

    @property
    def editor(self) -> Tag:
        return self._editor

    # Events

    def on_paste(self, handler: Callable[..., Any]) -> None:
        self._handlers.append(handler)

    def defer(self, callback: Callable[[], Any]) -> None:
        self._pending.append(callback)

    def run_pending(self) -> int:
        """Run deferred callbacks in FIFO order, including ones they defer."""
        count = 0
        while self._pending:
            callback = self._pending.popleft()
            callback()
            count += 1
        return count

    @property
    def pending(self) -> int:
        return len(self._pending)

    def paste(self, html: str) -> None:
        """Simulate a paste gesture of clipboard html."""
        for handler in list(self._handlers):
            handler()

        rng = self._selection
        if rng is None:
            logger.debug("Native paste dropped: no selection")
            return
        self._insert_at(rng, html)

    # Selection

    def get_selection(self) -> Optional[Range]:
        return self._selection

    def set_selection(self, rng: Optional[Range]) -> None:
        self._selection = rng

    def save_selection(self) -> Optional[Range]:
        self._saved = self._selection.copy() if self._selection else None
        return self._saved

    def restore_selection(self, saved: Optional[Range] = None) -> Optional[Range]:
        saved = saved or self._saved
        if saved is None or not saved.is_within(self._editor):
            self._selection = None
            return None
        self._selection = saved.copy()
        return self._selection

    def move_cursor_to_end(self) -> Range:
        self._selection = Range.collapsed_at(self._editor, len(self._editor.contents))
        return self._selection

    def select(self, container, start: int, end: Optional[int] = None) -> Range:
        self._selection = Range(container, start, end)
        return self._selection

    # Content

    def sanitize_html(self, html: str) -> str:
        return self._sanitizer(html)

    def insert_content_at_cursor(self, html: str) -> None:
        rng = self._selection or self.move_cursor_to_end()
        self._insert_at(rng, html)

    def get_html(self) -> str:
        return self._editor.decode_contents()

    def set_html(self, html: str) -> None:
        self._editor.clear()
        for node in parse_fragment(html):
            self._editor.append(node)
        self._selection = Range.collapsed_at(self._editor, 0)

    def _insert_at(self, rng: Range, html: str) -> None:
        rng.delete_contents()
        nodes = parse_fragment(html)
        rng.insert_nodes(nodes)
        if nodes:
            rng.collapse_after(nodes[-1])

    # Layout

    @contextmanager
    def positioned_layout(self) -> Iterator[None]:
        previous = self._positioned
        self._positioned = True
        try:
            yield
        finally:
            self._positioned = previous

    def measure(self, node: PageElement) -> tuple[int, int]:
        block = node
        while block is not None and block.parent is not self._editor:
            block = block.parent
        if block is None:
            raise ValueError("Node is not inside the editor")

        top = 0
        for sibling in self._editor.contents:
            if sibling is block:
                break
            top += self._height(sibling)
        if not self._positioned:
            top += self.page_offset
        return top, self._height(block)

    def content_height(self) -> int:
        return sum(self._height(node) for node in self._editor.contents)

    def _height(self, node: PageElement) -> int:
        if isinstance(node, NavigableString):
            return self.line_height if node.strip() else 0
        lines = len(node.find_all(BLOCK_TAGS))
        return max(1, lines) * self.line_height

    def get_scroll_top(self) -> int:
        return self._scroll_top

    def set_scroll_top(self, value: int) -> None:
        self._scroll_top = max(0, int(value))

    def get_viewport_height(self) -> int:
        return self.viewport_height
