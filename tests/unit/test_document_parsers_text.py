"""Unit tests for document_parsers.text_parser."""

from augrag.infrastructure.document_parsers.text_parser import (
    decode_text,
    parse_html,
    parse_md,
    parse_txt,
    strip_html,
)


class TestDecodeText:
    """Tests for decode_text."""

    def test_utf8_decode(self) -> None:
        assert decode_text(b"Hello \xd0\x9c\xd0\xb8\xd1\x80") == "Hello Мир"

    def test_fallback_cp1251(self) -> None:
        # invalid UTF-8 but valid cp1251
        assert decode_text(b"\xcc\xe8\xf0") == "Мир"

    def test_utf8_fails_cp1251_fails_uses_replace(self) -> None:
        # 0x98 is unmapped in cp1251
        text = decode_text(b"\x98\x99\x9a")
        assert "�" in text


class TestParseTxtAndMd:
    """Tests for parse_txt and parse_md."""

    def test_parse_txt(self) -> None:
        result = parse_txt(b"plain text", filename="a.txt")
        assert result.text == "plain text"
        assert result.source_type == "txt"

    def test_parse_txt_without_filename(self) -> None:
        assert parse_txt(b"x").source_type == "txt"

    def test_filename_without_suffix_uses_default_type(self) -> None:
        assert parse_txt(b"x", filename="noext").source_type == "txt"

    def test_parse_md_kept_as_is(self) -> None:
        result = parse_md(b"# Title\n\nbody", filename="readme.md")
        assert result.text == "# Title\n\nbody"
        assert result.source_type == "md"


class TestParseHtml:
    """Tests for strip_html and parse_html."""

    def test_tags_removed_and_whitespace_collapsed(self) -> None:
        markup = "<html><body><h1>Title</h1>\n\n<p>First   line.</p><p>Second.</p></body></html>"
        assert strip_html(markup) == "Title First line. Second."

    def test_script_and_style_dropped(self) -> None:
        markup = (
            "<style>p { color: red; }</style><p>Visible.</p>"
            "<SCRIPT type='text/javascript'>alert('x')</SCRIPT>"
        )
        assert strip_html(markup) == "Visible."

    def test_entities_unescaped(self) -> None:
        assert strip_html("<p>Fish &amp; chips&nbsp;&lt;3</p>") == "Fish & chips <3"

    def test_parse_html(self) -> None:
        result = parse_html(b"<p>Hello <b>world</b></p>", filename="page.htm")
        assert result.text == "Hello world"
        assert result.source_type == "htm"
