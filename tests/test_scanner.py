import time

from xpath_locator.models import TagKind
from xpath_locator.scanner import find_name_attribute, parse_attributes, scan_tags


def test_scan_tag_kinds():
    tags = scan_tags('<root><item id="1"/></root>')

    assert [t.name for t in tags] == ["root", "item", "root"]
    assert [t.kind for t in tags] == [TagKind.OPEN, TagKind.SELF_CLOSING, TagKind.CLOSE]
    assert tags[1].raw_text == '<item id="1"/>'
    assert tags[1].attributes == {"id": "1"}


def test_scan_offsets_are_increasing():
    text = "<a><b>x</b><c/></a>"
    tags = scan_tags(text)

    offsets = [t.offset for t in tags]
    assert offsets == sorted(offsets)
    assert len(set(offsets)) == len(offsets)
    for tag in tags:
        assert text[tag.offset : tag.end_offset] == tag.raw_text


def test_scan_line_and_column():
    text = "<a>\n  <b/>\n\n    <c>\n</a>"
    tags = scan_tags(text)

    positions = [(t.name, t.line, t.column) for t in tags]
    assert positions == [("a", 0, 0), ("b", 1, 2), ("c", 3, 4), ("a", 4, 0)]


def test_scan_name_characters():
    tags = scan_tags("<xs:element/><my.tag-name/><_private/>")
    assert [t.name for t in tags] == ["xs:element", "my.tag-name", "_private"]


def test_scan_whitespace_before_slashes():
    tags = scan_tags("<br /><  / br>")
    assert tags[0].kind == TagKind.SELF_CLOSING
    assert tags[0].name == "br"
    assert tags[1].kind == TagKind.CLOSE
    assert tags[1].name == "br"


def test_slash_inside_quoted_value_is_not_self_closing():
    tags = scan_tags('<a href="x/">')
    assert tags[0].kind == TagKind.OPEN
    assert tags[0].attributes == {"href": "x/"}


def test_closing_tag_with_trailing_slash_is_close():
    tags = scan_tags("</a/>")
    assert tags[0].kind == TagKind.CLOSE


def test_scan_ignores_non_tags():
    tags = scan_tags("a < b and 1<2 > 0 <>")
    assert tags == []


def test_scan_window_reports_document_positions():
    text = "<a>\n<b>\n<c/>\n</b>\n</a>"
    start = text.index("<b>")
    end = text.index("</a>")
    tags = scan_tags(text, start, end)

    assert [t.name for t in tags] == ["b", "c", "b"]
    assert tags[0].offset == start
    assert (tags[1].line, tags[1].column) == (2, 0)


def test_parse_attributes_quoting_styles():
    attrs = parse_attributes("""a="one" b='two' c=three d=""")
    assert attrs == {"a": "one", "b": "two", "c": "three", "d": ""}


def test_parse_attributes_last_duplicate_wins():
    attrs = parse_attributes('name="first" id="1" name="second"')
    assert attrs == {"name": "second", "id": "1"}
    assert list(attrs) == ["name", "id"]


def test_parse_attributes_skips_malformed_fragments():
    attrs = parse_attributes('disabled ="x" checked name = "ok" =broken')
    assert attrs == {"disabled": "x", "name": "ok"}


def test_parse_attributes_namespaced():
    attrs = parse_attributes('xmlns:xs="http://www.w3.org/2001/XMLSchema" xml:lang="en"')
    assert attrs["xmlns:xs"] == "http://www.w3.org/2001/XMLSchema"
    assert attrs["xml:lang"] == "en"


def test_find_name_attribute_uses_first_listed():
    attributes = {"id": "123", "label": "MyLabel", "name": "MyName"}

    assert find_name_attribute(attributes, ["name", "id", "label"]) == "MyName"
    assert find_name_attribute(attributes, ["id", "name", "label"]) == "123"
    assert find_name_attribute(attributes, ["label", "name", "id"]) == "MyLabel"


def test_find_name_attribute_skips_blank_values():
    attributes = {"name": "", "id": "  ", "label": "MyLabel"}
    assert find_name_attribute(attributes, ["name", "id", "label"]) == "MyLabel"


def test_find_name_attribute_absent():
    assert find_name_attribute({"class": "x"}, ["name", "id"]) is None
    assert find_name_attribute({}, ["name"]) is None
    assert find_name_attribute({"name": "MyName"}, []) is None


# Inputs that make a backtracking tokenizer go quadratic; a linear scan
# handles each of them in milliseconds.
PATHOLOGICAL_INPUTS = [
    "<a " + "b" * 200_000 + ">",
    "<" + " " * 200_000 + "!",
    "<a" + " " * 200_000,
    "<" + "a" * 200_000,
    "<a" * 100_000,
    '<a x="' + "y" * 200_000,
]


def test_scan_pathological_inputs_finish_quickly():
    for text in PATHOLOGICAL_INPUTS:
        started = time.perf_counter()
        scan_tags(text)
        assert time.perf_counter() - started < 2.0, text[:20]


def test_scan_long_valueless_attribute_run():
    text = "<a " + "b" * 200_000 + ">"
    tags = scan_tags(text)

    assert len(tags) == 1
    assert tags[0].name == "a"
    assert tags[0].attributes == {}


def test_parse_attributes_long_runs():
    started = time.perf_counter()
    assert parse_attributes("x" * 200_000) == {}
    assert parse_attributes(" ".join(["flag"] * 50_000) + ' name="ok"') == {"name": "ok"}
    assert time.perf_counter() - started < 2.0
