import pytest

from prlist.infrastructure.section_file import (
    END_MARKER,
    START_MARKER,
    splice,
    update_section_file,
)

DOC = (
    "# Hello\n"
    "\n"
    "<!--START_SECTION:prlist-->\n"
    "- old entry\n"
    "<!--END_SECTION:prlist-->\n"
    "footer\n"
)


def test_replaces_section_byte_exact():
    result = splice(DOC, START_MARKER, END_MARKER, "- [a/b](link)")

    assert result == (
        "# Hello\n"
        "\n"
        "<!--START_SECTION:prlist-->\n"
        "- [a/b](link)\n"
        "<!--END_SECTION:prlist-->\n"
        "footer\n"
    )


def test_newline_terminated_text_is_not_doubled():
    once = splice(DOC, START_MARKER, END_MARKER, "- x\n")

    assert "- x\n<!--END_SECTION:prlist-->\nfooter\n" in once


def test_empty_text_clears_section():
    result = splice(DOC, START_MARKER, END_MARKER, "")

    assert result == (
        "# Hello\n\n<!--START_SECTION:prlist-->\n<!--END_SECTION:prlist-->\nfooter\n"
    )


def test_end_marker_at_end_of_file_gets_no_newline():
    doc = "<!--START_SECTION:prlist-->\n<!--END_SECTION:prlist-->"

    assert splice(doc, START_MARKER, END_MARKER, "x") == (
        "<!--START_SECTION:prlist-->\nx\n<!--END_SECTION:prlist-->"
    )


@pytest.mark.parametrize("text", ["", "- a", "- a\n- b\n", "<ul>\n</ul>"])
def test_splice_is_idempotent(text):
    once = splice(DOC, START_MARKER, END_MARKER, text)

    assert splice(once, START_MARKER, END_MARKER, text) == once


@pytest.mark.parametrize("doc", [
    "no markers here\n",
    "<!--START_SECTION:prlist-->\nonly start\n",
    "only end\n<!--END_SECTION:prlist-->\n",
    "",
])
def test_missing_marker_leaves_document_unchanged(doc):
    assert splice(doc, START_MARKER, END_MARKER, "new") == doc


def test_start_marker_must_begin_a_line():
    doc = "text <!--START_SECTION:prlist-->\nold\n<!--END_SECTION:prlist-->\n"

    assert splice(doc, START_MARKER, END_MARKER, "new") == doc


def test_start_marker_line_with_trailing_text_is_not_a_section():
    doc = "<!--START_SECTION:prlist--> keep me\nold\n<!--END_SECTION:prlist-->\n"

    assert splice(doc, START_MARKER, END_MARKER, "new") == doc


def test_crlf_document_keeps_crlf_inside_section():
    doc = DOC.replace("\n", "\r\n")

    once = splice(doc, START_MARKER, END_MARKER, "- a\n- b")

    assert once == (
        "# Hello\r\n\r\n"
        "<!--START_SECTION:prlist-->\r\n"
        "- a\r\n- b\r\n"
        "<!--END_SECTION:prlist-->\r\n"
        "footer\r\n"
    )
    assert splice(once, START_MARKER, END_MARKER, "- a\n- b") == once


def test_only_first_section_is_replaced():
    doc = DOC + DOC

    result = splice(doc, START_MARKER, END_MARKER, "new")

    assert result.count("- old entry") == 1
    assert result.startswith("# Hello\n\n<!--START_SECTION:prlist-->\nnew\n<!--END_SECTION:prlist-->\n")


def test_backslashes_in_text_are_literal():
    result = splice(DOC, START_MARKER, END_MARKER, r"- [a\\b](x) \1")

    assert r"- [a\\b](x) \1" in result


def test_update_section_file_rewrites_in_place(tmp_path):
    target = tmp_path / "README.md"
    target.write_bytes(DOC.replace("\n", "\r\n").encode("utf-8"))

    assert update_section_file(str(target), "- new") is True

    content = target.read_bytes().decode("utf-8")
    assert "<!--START_SECTION:prlist-->\r\n- new\r\n<!--END_SECTION:prlist-->\r\nfooter\r\n" in content
    assert "\n" not in content.replace("\r\n", "")
    assert content.startswith("# Hello\r\n\r\n")


def test_update_section_file_reports_no_change(tmp_path):
    target = tmp_path / "README.md"
    target.write_text(DOC, encoding="utf-8")

    assert update_section_file(str(target), "- old entry") is False
    assert target.read_text(encoding="utf-8") == DOC


def test_update_section_file_without_markers(tmp_path):
    target = tmp_path / "README.md"
    target.write_text("plain\n", encoding="utf-8")

    assert update_section_file(str(target), "- new") is False
    assert target.read_text(encoding="utf-8") == "plain\n"


def test_update_section_file_missing_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        update_section_file(str(tmp_path / "missing.md"), "- new")
