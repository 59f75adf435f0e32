"""Unit tests for ignore marker wrapping and restoration."""

from lxml import etree

from deeplxml.protection import (
    order_markers,
    restore_translated_text,
    strip_ignore_tags,
    wrap_ignore_markers,
)


def wrap(xml, markers):
    """Wrap the markers in a parsed element and serialize it again."""
    element = wrap_ignore_markers(etree.fromstring(xml), markers)
    return etree.tostring(element, encoding='unicode')


class TestWrapIgnoreMarkers:

    def test_no_markers_returns_element_unchanged(self):
        assert wrap("<s>Hello world</s>", []) == "<s>Hello world</s>"

    def test_wraps_every_occurrence(self):
        result = wrap("<s>world, world</s>", ["world"])
        assert result == "<s><deeplignore>world</deeplignore>, <deeplignore>world</deeplignore></s>"

    def test_wraps_inside_markup(self):
        result = wrap("<s><p>Hello <b>world</b></p></s>", ["world"])
        assert result == "<s><p>Hello <b><deeplignore>world</deeplignore></b></p></s>"

    def test_wraps_in_tails_and_keeps_order(self):
        result = wrap("<s>A <b>x</b> world and world!</s>", ["world"])
        assert result == (
            "<s>A <b>x</b> <deeplignore>world</deeplignore> and "
            "<deeplignore>world</deeplignore>!</s>"
        )

    def test_longer_marker_wins_over_contained_marker(self):
        result = wrap("<s>hello world, world</s>", ["world", "hello world"])
        assert result == (
            "<s><deeplignore>hello world</deeplignore>, "
            "<deeplignore>world</deeplignore></s>"
        )

    def test_marker_is_matched_literally(self):
        result = wrap("<s>Costs 5.00 (net)</s>", ["5.00 (net)"])
        assert result == "<s>Costs <deeplignore>5.00 (net)</deeplignore></s>"

    def test_attributes_and_tag_names_are_not_touched(self):
        result = wrap('<s><a href="/Hello">Hello</a> <b>bold</b></s>', ["Hello", "b"])
        assert result == (
            '<s><a href="/Hello"><deeplignore>Hello</deeplignore></a> '
            '<b><deeplignore>b</deeplignore>old</b></s>'
        )

    def test_special_characters_are_escaped_on_serialization(self):
        result = wrap("<s>Fish &amp; Chips</s>", ["Chips"])
        assert result == "<s>Fish &amp; <deeplignore>Chips</deeplignore></s>"

    def test_equal_length_markers_keep_insertion_order(self):
        assert order_markers(["abc", "xyz", "longer"]) == ["longer", "abc", "xyz"]

    def test_empty_markers_are_skipped(self):
        assert order_markers(["", "a"]) == ["a"]


class TestRestoreTranslatedText:

    def test_strips_wrappers_but_keeps_content(self):
        text = "<p>Hallo <b><deeplignore>world</deeplignore></b></p>"
        assert strip_ignore_tags(text) == "<p>Hallo <b>world</b></p>"

    def test_strips_self_closing_wrapper(self):
        assert strip_ignore_tags("a<deeplignore/>b") == "ab"

    def test_decodes_entities(self):
        assert restore_translated_text("Fish &amp; Chips &lt;3") == "Fish & Chips <3"

    def test_text_without_wrappers_is_untouched(self):
        assert strip_ignore_tags("<p>Hallo</p>") == "<p>Hallo</p>"
