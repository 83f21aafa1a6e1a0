"""Cursor and selection ranges over a BeautifulSoup tree.

A Range has one container and two offsets. For a Tag container the offsets
are child indices; for a text node they are character offsets. Ranges whose
boundaries sit in different containers are not modelled.
"""

from typing import Optional, Union

from bs4 import BeautifulSoup, NavigableString, PageElement, Tag

Container = Union[Tag, NavigableString]


def parse_fragment(html: str) -> list[PageElement]:
    """Parse html into detached top-level nodes, ready for insertion."""
    soup = BeautifulSoup(html, "html.parser")
    return [node.extract() for node in list(soup.contents)]


class Range:
    """A selection between two boundary points in one container."""

    def __init__(self, container: Container, start: int = 0, end: Optional[int] = None):
        self.container = container
        self.start = start
        self.end = start if end is None else end
        if self.end < self.start:
            raise ValueError(f"Range end {self.end} is before start {self.start}")

    def __repr__(self) -> str:
        name = getattr(self.container, "name", None) or "#text"
        return f"Range({name}, {self.start}, {self.end})"

    @classmethod
    def select_node(cls, node: PageElement) -> "Range":
        """Range covering exactly one node within its parent."""
        parent = node.parent
        if parent is None:
            raise ValueError("Cannot select a detached node")
        index = parent.index(node)
        return cls(parent, index, index + 1)

    @classmethod
    def select_node_contents(cls, tag: Tag) -> "Range":
        return cls(tag, 0, len(tag.contents))

    @classmethod
    def collapsed_at(cls, container: Container, offset: int = 0) -> "Range":
        return cls(container, offset, offset)

    @property
    def collapsed(self) -> bool:
        return self.start == self.end

    @property
    def is_text(self) -> bool:
        return isinstance(self.container, NavigableString)

    def copy(self) -> "Range":
        return Range(self.container, self.start, self.end)

    def is_within(self, root: Tag) -> bool:
        """Return True if the container is root or one of its descendants."""
        node = self.container
        while node is not None:
            if node is root:
                return True
            node = node.parent
        return False

    def selected_nodes(self) -> list[PageElement]:
        if self.is_text:
            return []
        return list(self.container.contents[self.start:self.end])

    def delete_contents(self) -> None:
        """Remove everything inside the range and collapse it to its start."""
        if self.collapsed:
            return

        if self.is_text:
            text = str(self.container)
            remaining = NavigableString(text[:self.start] + text[self.end:])
            self.container.replace_with(remaining)
            self.container = remaining
        else:
            for node in self.selected_nodes():
                node.extract()
        self.end = self.start

    def insert_nodes(self, nodes: list[PageElement]) -> None:
        """Insert detached nodes at the start of the range.

        A text container is split at the insertion point. Afterwards the
        range covers the inserted nodes.
        """
        if self.is_text:
            self._split_text()

        for i, node in enumerate(nodes):
            self.container.insert(self.start + i, node)
        self.end = self.start + len(nodes)

    def collapse(self, to_start: bool = True) -> None:
        if to_start:
            self.end = self.start
        else:
            self.start = self.end

    def collapse_after(self, node: PageElement) -> None:
        """Collapse the range to the point right after node."""
        parent = node.parent
        if parent is None:
            raise ValueError("Cannot collapse after a detached node")
        index = parent.index(node) + 1
        self.container = parent
        self.start = self.end = index

    def _split_text(self) -> None:
        text_node = self.container
        parent = text_node.parent
        if parent is None:
            raise ValueError("Cannot insert into a detached text node")

        text = str(text_node)
        index = parent.index(text_node)
        before = NavigableString(text[:self.start])
        after = NavigableString(text[self.start:])
        text_node.replace_with(before)
        parent.insert(index + 1, after)

        self.container = parent
        self.start = self.end = index + 1
