"""Removal of degenerate Word markup before list reconstruction."""

import logging
import re

from bs4 import Tag

logger = logging.getLogger(__name__)

BOOKMARK_PATTERN = re.compile(r"mso-bookmark", re.IGNORECASE)


class MarkupPreCleaner:
    """Strips bookmark spans, empty font tags and name-only anchors.

    The three rules are independent of each other.
    """

    def __init__(self, bookmark_pattern: re.Pattern = BOOKMARK_PATTERN):
        self.bookmark_pattern = bookmark_pattern

    def pre_clean(self, fragment: Tag) -> Tag:
        self.unwrap_bookmarks(fragment)
        self.remove_empty_fonts(fragment)
        self.strip_named_anchors(fragment)
        return fragment

    def unwrap_bookmarks(self, fragment: Tag) -> int:
        """Replace bookmark spans with their children."""
        count = 0
        # Last to first, so inner bookmarks are handled before their parents.
        for span in reversed(fragment.find_all("span", style=True)):
            if self.bookmark_pattern.search(_style_of(span)):
                span.unwrap()
                count += 1
        if count:
            logger.debug("Unwrapped %d bookmark spans", count)
        return count

    def remove_empty_fonts(self, fragment: Tag) -> int:
        count = 0
        for font in fragment.find_all("font"):
            if font.decomposed:
                continue
            if not font.get_text().strip():
                font.decompose()
                count += 1
        if count:
            logger.debug("Removed %d empty font tags", count)
        return count

    def strip_named_anchors(self, fragment: Tag) -> int:
        """Unwrap anchors that only carry a name, or drop them when empty."""
        count = 0
        for anchor in fragment.find_all("a", attrs={"name": True}):
            if anchor.decomposed or anchor.has_attr("href"):
                continue
            if anchor.contents:
                anchor.unwrap()
            else:
                anchor.decompose()
            count += 1
        return count


def _style_of(tag: Tag) -> str:
    value = tag.get("style", "")
    if isinstance(value, list):
        return " ".join(value)
    return value
