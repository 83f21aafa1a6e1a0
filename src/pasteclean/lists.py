"""Reconstruction of Word pseudo-lists into real list markup.

Word exports top-level list items as paragraphs carrying an ``mso-list``
directive in their style attribute, with the bullet or number rendered as a
leading text node or span. Deeper levels usually arrive as real lists already.
There is no reliable way to tell ordered from unordered lists from the
directive alone, so every reconstructed list is a ``ul``.
"""

import logging
import re
from dataclasses import dataclass, field
from typing import Optional

from bs4 import BeautifulSoup, Comment, Declaration, NavigableString, PageElement, Tag

logger = logging.getLogger(__name__)

LIST_PATTERN = re.compile(r"mso-list:.+?level(\d+)", re.IGNORECASE)

# Text of an element that is nothing but a bullet or number, e.g. "·", "o", "§", "1.", "a)", "iv."
MARKER_GLYPH = re.compile(
    r"^\(?(?:[·•▪●◦–—§Ø*o-]|(?:\d+|[a-zA-Z]|[ivxlcdmIVXLCDM]+)[.)])$"
)

# Leading bullet or number typed into the item text itself. Letters are left
# out so that words such as "o" or "a)" survive.
TEXT_MARKER = re.compile(
    r"^[\s\xa0]*"
    r"(?:[·•▪●◦–—§Ø*-]|\(?\d+[.)])"
    r"(?:[\s\xa0]+|$)"
)

# Word tags its generated bullet spans with this style.
IGNORE_STYLE = re.compile(r"mso-list:\s*ignore", re.IGNORECASE)


@dataclass
class ListGroup:
    """A run of pseudo-list paragraphs collapsing into one list."""
    level: int
    container: Tag
    items: list[Tag] = field(default_factory=list)


def _is_skippable(node: PageElement) -> bool:
    # Conditional sections such as <![if !supportLists]> parse as declarations.
    if isinstance(node, (Comment, Declaration)):
        return True
    return isinstance(node, NavigableString) and not node.strip()


def _new_tag(node: PageElement, name: str) -> Tag:
    root = node
    while root.parent is not None:
        root = root.parent
    if isinstance(root, BeautifulSoup):
        return root.new_tag(name)
    return Tag(name=name)


def _is_marker_element(tag: Tag) -> bool:
    """Return True if tag holds only a list bullet or number."""
    for styled in [tag, *tag.find_all(style=True)]:
        style = styled.get("style") or ""
        if isinstance(style, list):
            style = " ".join(style)
        if IGNORE_STYLE.search(style):
            return True
    text = tag.get_text().strip()
    return not text or MARKER_GLYPH.match(text) is not None


class ListReconstructor:
    """Rewrites pseudo-list paragraphs into ``ul``/``li`` structures."""

    def __init__(self, list_pattern: re.Pattern = LIST_PATTERN):
        self.list_pattern = list_pattern

    def reconstruct(self, fragment: Tag) -> Tag:
        groups = self.collapse_pseudo_lists(fragment)
        merged = self.merge_adjacent_lists(fragment)
        if groups or merged:
            logger.debug("Built %d lists, merged %d adjacent lists", len(groups), merged)
        return fragment

    def list_level(self, el: Tag) -> Optional[int]:
        """Return the mso-list level of an element, or None if it has none."""
        style = el.get("style")
        if not style:
            return None
        if isinstance(style, list):
            style = " ".join(style)
        match = self.list_pattern.search(style)
        if match is None:
            return None
        try:
            return int(match.group(1))
        except (IndexError, TypeError, ValueError):
            return 0

    def collapse_pseudo_lists(self, fragment: Tag) -> list[ListGroup]:
        """First pass: turn runs of pseudo-list paragraphs into lists."""
        groups: list[ListGroup] = []
        group: Optional[ListGroup] = None

        for el in list(fragment.find_all(True, recursive=False)):
            level = self.list_level(el)
            if level is None or not self._strip_marker(el):
                group = None
                continue

            if group is None:
                group = ListGroup(level=level, container=_new_tag(el, "ul"))
                el.insert_before(group.container)
                groups.append(group)

            item = _new_tag(el, "li")
            for child in list(el.contents):
                item.append(child.extract())
            group.container.append(item)
            group.items.append(item)
            el.decompose()

        return groups

    def merge_adjacent_lists(self, fragment: Tag) -> int:
        """Second pass: fold each ``ul`` into a directly preceding ``ul``."""
        merged = 0
        previous: Optional[Tag] = None

        for el in list(fragment.find_all(True, recursive=False)):
            if el.name == "ul" and previous is not None and previous.name == "ul":
                for child in list(el.contents):
                    previous.append(child.extract())
                el.decompose()
                merged += 1
            else:
                previous = el

        return merged

    def _strip_marker(self, el: Tag) -> bool:
        """Remove the bullet/number marker from a pseudo-list paragraph.

        Only bullet-like nodes are removed: an element holding nothing but a
        glyph (or tagged mso-list:Ignore), or a glyph typed at the start of
        the text. Returns False when the paragraph has no node to inspect;
        it is then left untouched.
        """
        point = el.contents[0] if el.contents else None
        while point is not None and _is_skippable(point):
            point = point.next_sibling

        if isinstance(point, Tag) and point.name == "font":
            point = point.contents[0] if point.contents else None

        if point is None:
            logger.debug("Pseudo-list paragraph without marker node left as is")
            return False

        if isinstance(point, NavigableString):
            text = str(point)
            remainder = TEXT_MARKER.sub("", text, count=1)
            if not remainder.strip():
                point.extract()
            elif remainder != text:
                point.replace_with(NavigableString(remainder))
        elif _is_marker_element(point):
            point.decompose()
        else:
            logger.debug("Pseudo-list item starts with content, no marker removed")
        return True
