"""Tests for the in-memory editor host."""

from pasteclean.memory import MemoryEditor
from pasteclean.selection import Range


class TestEvents:
    def test_paste_fires_handlers_before_native_insert(self):
        editor = MemoryEditor("<p>a</p>")
        seen = []
        editor.on_paste(lambda: seen.append(editor.get_html()))
        editor.paste("<p>b</p>")

        assert seen == ["<p>a</p>"]
        assert editor.get_html() == "<p>a</p><p>b</p>"

    def test_deferred_callbacks_run_in_order(self):
        editor = MemoryEditor()
        order = []
        editor.defer(lambda: order.append(1))
        editor.defer(lambda: editor.defer(lambda: order.append(3)))
        editor.defer(lambda: order.append(2))

        assert editor.pending == 3
        assert editor.run_pending() == 4
        assert order == [1, 2, 3]

    def test_paste_without_selection_is_dropped(self):
        editor = MemoryEditor("<p>a</p>")
        editor.set_selection(None)
        editor.paste("<p>b</p>")

        assert editor.get_html() == "<p>a</p>"


class TestContent:
    def test_cursor_starts_at_end(self):
        editor = MemoryEditor("<p>a</p><p>b</p>")
        sel = editor.get_selection()

        assert sel.container is editor.editor
        assert (sel.start, sel.end) == (2, 2)

    def test_set_html_resets_selection(self):
        editor = MemoryEditor("<p>a</p>")
        editor.set_html("")

        assert editor.get_html() == ""
        assert editor.get_selection().start == 0

    def test_insert_content_replaces_selection(self):
        editor = MemoryEditor("<p>a</p><p>b</p>")
        editor.select(editor.editor, 0, 1)
        editor.insert_content_at_cursor("<hr/>")

        assert editor.get_html() == "<hr/><p>b</p>"
        assert editor.get_selection().start == 1

    def test_restore_selection(self):
        editor = MemoryEditor("<p>a</p>")
        editor.select(editor.editor, 0, 1)
        editor.save_selection()
        editor.move_cursor_to_end()

        restored = editor.restore_selection()
        assert (restored.start, restored.end) == (0, 1)

    def test_restore_selection_outside_editor(self):
        editor = MemoryEditor("<p>a</p>")
        stale = Range.collapsed_at(editor.editor.p, 0)
        editor.editor.p.extract()

        assert editor.restore_selection(stale) is None
        assert editor.get_selection() is None


class TestLayout:
    def test_measure_is_editor_relative_only_when_positioned(self):
        editor = MemoryEditor("<p>a</p><ul><li>1</li><li>2</li></ul>", line_height=10, page_offset=100)
        ul = editor.editor.ul

        assert editor.measure(ul) == (110, 20)
        with editor.positioned_layout():
            assert editor.measure(ul) == (10, 20)
        assert editor.measure(ul) == (110, 20)

    def test_measure_nested_node_uses_top_level_block(self):
        editor = MemoryEditor("<p>a</p><p>b <b>c</b></p>", line_height=10)
        with editor.positioned_layout():
            assert editor.measure(editor.editor.b) == (10, 10)

    def test_scroll_top_clamped(self):
        editor = MemoryEditor()
        editor.set_scroll_top(-50)
        assert editor.get_scroll_top() == 0

    def test_content_height(self):
        editor = MemoryEditor("<p>a</p>\n<p>b</p>", line_height=15)
        assert editor.content_height() == 30
