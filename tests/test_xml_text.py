"""Unit tests for tokml.core.xml_text."""

from tokml.core.xml_text import attr, encode, tag, to_text


def test_encode_escapes_each_special_character_once():
    assert encode("&<>\"'") == "&amp;&lt;&gt;&quot;&apos;"


def test_encode_does_not_double_escape_in_one_pass():
    # An existing entity is escaped as text, exactly once.
    assert encode("&amp;") == "&amp;amp;"


def test_encode_none_is_empty():
    assert encode(None) == ""


def test_encode_stringifies_scalars():
    assert encode(42) == "42"
    assert encode(1.5) == "1.5"
    assert encode(True) == "true"
    assert encode(False) == "false"


def test_to_text_serializes_nested_values_as_json():
    assert to_text({"a": 1}) == '{"a":1}'
    assert to_text([1, "x"]) == '[1,"x"]'


def test_attr_empty():
    assert attr(None) == ""
    assert attr({}) == ""


def test_attr_escapes_values_and_keeps_order():
    assert attr({"name": 'a"b', "x": 0.5}) == ' name="a&quot;b" x="0.5"'


class TestTag:
    def test_contents_only(self):
        assert tag("name", "Trail") == "<name>Trail</name>"

    def test_no_contents_is_not_self_closing(self):
        assert tag("ExtendedData") == "<ExtendedData></ExtendedData>"

    def test_attributes_only(self):
        assert tag("hotSpot", {"x": 0.5}) == '<hotSpot x="0.5"></hotSpot>'

    def test_attributes_and_contents(self):
        assert tag("Data", {"name": "k"}, "<value>v</value>") == (
            '<Data name="k"><value>v</value></Data>'
        )

    def test_contents_are_inserted_raw(self):
        assert tag("description", "<b>") == "<description><b></description>"

    def test_numeric_contents(self):
        assert tag("width", 2) == "<width>2</width>"

    def test_none_contents(self):
        assert tag("name", {}, None) == "<name></name>"
