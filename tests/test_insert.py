"""Tests for cursor-aware insertion."""

from bs4 import BeautifulSoup

from pasteclean.insert import CursorAwareInserter
from pasteclean.memory import MemoryEditor
from pasteclean.selection import Range


def paragraphs(count: int) -> str:
    return "".join(f"<p>line {i}</p>" for i in range(count))


class TestInsertAtSelection:
    def test_replaces_selection_and_moves_cursor_after(self):
        editor = MemoryEditor("<p>one</p><p>two</p>")
        inserter = CursorAwareInserter(editor)
        last = inserter.insert_at_selection("<p>new</p><p>last</p>", Range(editor.editor, 1, 2))

        assert editor.get_html() == "<p>one</p><p>new</p><p>last</p>"
        assert last.name == "p" and last.get_text() == "last"
        sel = editor.get_selection()
        assert sel.container is editor.editor
        assert (sel.start, sel.end) == (3, 3)

    def test_single_node_is_last_node(self):
        editor = MemoryEditor("<p>one</p>")
        last = CursorAwareInserter(editor).insert_at_selection(
            "<ul><li>x</li></ul>", Range.collapsed_at(editor.editor, 0)
        )

        assert last.name == "ul"
        assert editor.get_html() == "<ul><li>x</li></ul><p>one</p>"

    def test_insert_inside_text(self):
        editor = MemoryEditor("<p>hello world</p>")
        text = editor.editor.p.contents[0]
        CursorAwareInserter(editor).insert_at_selection("<b>big</b>", Range(text, 6, 11))

        assert editor.get_html() == "<p>hello <b>big</b></p>"

    def test_missing_range_drops_content(self):
        editor = MemoryEditor("<p>one</p>")
        result = CursorAwareInserter(editor).insert_at_selection("<p>new</p>", None)

        assert result is None
        assert editor.get_html() == "<p>one</p>"

    def test_range_outside_editor_drops_content(self):
        editor = MemoryEditor("<p>one</p>")
        elsewhere = BeautifulSoup("<div></div>", "html.parser").div
        result = CursorAwareInserter(editor).insert_at_selection("<p>new</p>", Range.collapsed_at(elsewhere, 0))

        assert result is None
        assert editor.get_html() == "<p>one</p>"
        assert str(elsewhere) == "<div></div>"

    def test_empty_content_only_deletes_selection(self):
        editor = MemoryEditor("<p>one</p><p>two</p>")
        result = CursorAwareInserter(editor).insert_at_selection("", Range(editor.editor, 0, 1))

        assert result is None
        assert editor.get_html() == "<p>two</p>"
        assert editor.get_selection().start == 0


class TestScrolling:
    def test_scrolls_down_to_pasted_content(self):
        editor = MemoryEditor(paragraphs(10), viewport_height=100, line_height=20)
        CursorAwareInserter(editor).insert_at_selection("<p>new</p>", editor.move_cursor_to_end())

        # bottom of new paragraph (200 + 20) plus 32 buffer, minus viewport
        assert editor.get_scroll_top() == 152

    def test_offsets_measured_relative_to_editor(self):
        editor = MemoryEditor(paragraphs(10), viewport_height=100, line_height=20, page_offset=500)
        CursorAwareInserter(editor).insert_at_selection("<p>new</p>", editor.move_cursor_to_end())

        assert editor.get_scroll_top() == 152

    def test_visible_content_does_not_scroll(self):
        editor = MemoryEditor("<p>a</p>", viewport_height=200, line_height=20)
        editor.set_scroll_top(0)
        CursorAwareInserter(editor).insert_at_selection("<p>b</p>", editor.move_cursor_to_end())

        assert editor.get_scroll_top() == 0

    def test_scrolls_up_to_content_above_view(self):
        editor = MemoryEditor(paragraphs(30), viewport_height=100, line_height=20)
        editor.set_scroll_top(300)
        CursorAwareInserter(editor).insert_at_selection("<p>top</p>", Range.collapsed_at(editor.editor, 0))

        assert editor.get_scroll_top() == 0

    def test_custom_buffer(self):
        editor = MemoryEditor(paragraphs(10), viewport_height=100, line_height=20)
        CursorAwareInserter(editor, scroll_buffer=0).insert_at_selection("<p>new</p>", editor.move_cursor_to_end())

        assert editor.get_scroll_top() == 120
