"""Insertion of cleaned content at a saved selection."""

import logging
from typing import Optional

from bs4 import PageElement

from .host import EditorHost
from .selection import Range, parse_fragment

logger = logging.getLogger(__name__)

# Room kept below the pasted content when scrolling it into view
SCROLL_BUFFER = 32


class CursorAwareInserter:
    """Inserts HTML at a range, moves the cursor after it and scrolls to it."""

    def __init__(self, host: EditorHost, scroll_buffer: int = SCROLL_BUFFER):
        self.host = host
        self.scroll_buffer = scroll_buffer

    def insert_at_selection(self, html: str, saved_range: Optional[Range]) -> Optional[PageElement]:
        """Replace the range's contents with html.

        Returns the last inserted top-level node, or None when nothing was
        inserted. Without a usable range the content is dropped.
        """
        if saved_range is None or not saved_range.is_within(self.host.editor):
            logger.warning("No selection to paste into; dropping %d chars of content", len(html))
            return None

        nodes = parse_fragment(html)
        saved_range.delete_contents()

        if not nodes:
            saved_range.collapse()
            self.host.set_selection(saved_range)
            return None

        last_node = nodes[-1]
        saved_range.insert_nodes(nodes)
        saved_range.collapse_after(last_node)
        self.host.set_selection(saved_range)

        self.scroll_into_view(last_node)
        return last_node

    def scroll_into_view(self, node: PageElement) -> None:
        """Scroll the editor so the bottom of node plus the buffer is visible."""
        with self.host.positioned_layout():
            top, height = self.host.measure(node)

        bottom = top + height + self.scroll_buffer
        view_top = self.host.get_scroll_top()
        view_height = self.host.get_viewport_height()

        if bottom < view_top or bottom > view_top + view_height:
            self.host.set_scroll_top(max(0, bottom - view_height))
            logger.debug("Scrolled editor to %d", max(0, bottom - view_height))
