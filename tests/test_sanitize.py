"""Tests for markup repairs and the basic sanitizer."""

from pasteclean.sanitize import basic_sanitize, repair_markup


class TestRepairMarkup:
    def test_list_type_removed(self):
        assert repair_markup('<ul type="disc"><li>a</li></ul>') == "<ul><li>a</li></ul>"

    def test_list_type_removed_other_attributes_kept(self):
        assert repair_markup('<ol class="steps" type="1" start="3">') == '<ol class="steps" start="3">'

    def test_type_on_other_tags_kept(self):
        html = '<input type="text"><li type="disc">x</li>'
        assert repair_markup(html) == html

    def test_line_height_normal_removed(self):
        assert repair_markup('<p style="color:red;line-height:normal">x</p>') == '<p style="color:red;">x</p>'
        assert repair_markup('<p style="line-height: normal;color:red">x</p>') == '<p style="color:red">x</p>'

    def test_other_line_heights_kept(self):
        html = '<p style="line-height:150%">x</p>'
        assert repair_markup(html) == html

    def test_tab_stops_removed(self):
        assert repair_markup('<p style="tab-stops:.5in;color:red">x</p>') == '<p style="color:red">x</p>'

    def test_empty_style_removed(self):
        assert repair_markup('<p style="">x</p><b style=";">y</b>') == "<p>x</p><b>y</b>"

    def test_style_emptied_by_repairs_removed(self):
        assert repair_markup('<p style="line-height:normal">x</p>') == "<p>x</p>"

    def test_escaped_quotes_in_style(self):
        html = '<span style="font:12pt &quot;Times New Roman&quot;">x</span>'
        assert repair_markup(html) == "<span style=\"font:12pt 'Times New Roman'\">x</span>"

    def test_escaped_quotes_outside_style_kept(self):
        html = '<a title="&quot;x&quot;">y</a> &quot;z&quot;'
        assert repair_markup(html) == html

    def test_empty_input(self):
        assert repair_markup("") == ""

    def test_single_quoted_line_height_removed(self):
        html = "<p style='font:11pt \"Calibri\";line-height:normal;'>x</p>"
        assert repair_markup(html) == "<p style='font:11pt \"Calibri\";'>x</p>"

    def test_single_quoted_tab_stops_removed(self):
        html = "<p style='font:11pt \"Calibri\";tab-stops:1in;'>x</p>"
        assert repair_markup(html) == "<p style='font:11pt \"Calibri\";'>x</p>"

    def test_single_quoted_style_emptied_by_repairs_removed(self):
        assert repair_markup("<p style='line-height:normal'>x</p>") == "<p>x</p>"

    def test_single_quoted_list_type_removed(self):
        assert repair_markup("<ol type='a' start=\"2\">") == '<ol start="2">'

    def test_repairs_stay_inside_style_value(self):
        html = "<p style='font:\"A\"' title=\"line-height:normal;tab-stops:1in\">x</p>"
        assert repair_markup(html) == html

    def test_escaped_quotes_in_single_quoted_style(self):
        assert repair_markup("<p style='font:&quot;A&quot;'>x</p>") == "<p style='font:\"A\"'>x</p>"


class TestBasicSanitize:
    def test_comments_removed(self):
        html = "<p><!--[if gte mso 9]><xml><w:WordDocument></w:WordDocument></xml><![endif]-->Hi</p>"
        assert basic_sanitize(html) == "<p>Hi</p>"

    def test_office_tags_unwrapped(self):
        assert basic_sanitize('<p class="MsoNormal">Text<o:p></o:p></p>') == "<p>Text</p>"

    def test_script_and_style_removed(self):
        assert basic_sanitize("<style>p{}</style><p>a</p><script>alert(1)</script>") == "<p>a</p>"

    def test_unsafe_attributes_removed(self):
        html = '<a href="javascript:alert(1)" onclick="x()">y</a><img src="a.png" onerror="x()">'
        assert basic_sanitize(html) == '<a>y</a><img src="a.png"/>'

    def test_font_unwrapped(self):
        assert basic_sanitize('<p><font color="red">hi</font></p>') == "<p>hi</p>"

    def test_lang_removed(self):
        assert basic_sanitize('<span lang="EN-US">x</span>') == "<span>x</span>"

    def test_non_word_classes_kept(self):
        assert basic_sanitize('<p class="MsoNormal intro">x</p>') == '<p class="intro">x</p>'

    def test_styles_left_for_pipeline(self):
        html = '<p style="color:red">x</p>'
        assert basic_sanitize(html) == html

    def test_blank_input(self):
        assert basic_sanitize("  \n") == ""
