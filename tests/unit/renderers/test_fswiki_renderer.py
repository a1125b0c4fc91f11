#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Unit tests for the canonical FSWiki renderer."""

from io import BytesIO, StringIO
from pathlib import Path

import pytest

from fswikifmt.events import Event, EventKind, inline, text
from fswikifmt.exceptions import InvalidOptionsError
from fswikifmt.options import FswikiFormatOptions, FswikiParserOptions
from fswikifmt.parsers.fswiki import FswikiParser
from fswikifmt.renderers.fswiki import FswikiRenderer, render_comment, render_inline, render_plugin


def fmt(source: str, **options) -> str:
    events = FswikiParser().parse(source)
    return FswikiRenderer(FswikiFormatOptions(**options)).render_to_string(events)


@pytest.mark.unit
class TestFswikiRendererBasics:
    """Tests for basic rendering behavior."""

    def test_empty_stream(self) -> None:
        """Test that no events render to an empty string."""
        assert FswikiRenderer().render_to_string([]) == ""

    def test_no_blank_line_after_last_block(self) -> None:
        """Test that the output ends with a single line break."""
        assert fmt("!Title") == "! Title\n"

    def test_default_options(self) -> None:
        """Test that the renderer defaults to right-aligned tables."""
        renderer = FswikiRenderer()

        assert renderer.options.table_align == "right"
        assert renderer.options.table_insert_space is False

    def test_rejects_wrong_options_type(self) -> None:
        """Test that parser options are rejected by the renderer."""
        with pytest.raises(InvalidOptionsError):
            FswikiRenderer(FswikiParserOptions())  # type: ignore[arg-type]

    def test_renderer_is_reusable(self) -> None:
        """Test that state does not leak between renders."""
        renderer = FswikiRenderer()
        events = FswikiParser().parse("*a\n,b")

        assert renderer.render_to_string(events) == renderer.render_to_string(events)


@pytest.mark.unit
class TestFswikiRendererBlocks:
    """Tests for block layout and spacing."""

    @pytest.mark.parametrize(
        "source,expected",
        [
            ("!Small", "! Small\n"),
            ("!!Medium", "!! Medium\n"),
            ("!!!Big", "!!! Big\n"),
            ("!   spaced   ", "! spaced\n"),
            ("!!", "!!\n"),
        ],
    )
    def test_headings(self, source: str, expected: str) -> None:
        """Test heading markers and spacing."""
        assert fmt(source) == expected

    def test_blank_line_between_headings(self) -> None:
        """Test that consecutive headings are separated by one blank line."""
        assert fmt("!!!A\n!!B") == "!!! A\n\n!! B\n"

    def test_extra_blank_lines_collapse(self) -> None:
        """Test that several blank lines become one."""
        assert fmt("first\n\n\n\nsecond") == "first\n\nsecond\n"

    def test_paragraph_whitespace(self) -> None:
        """Test that paragraph lines lose surrounding whitespace."""
        assert fmt("a  \n\tb \t") == "a\nb\n"

    def test_paragraph_keeps_whitespace_before_block_marker(self) -> None:
        """Test that a tab-indented line starting with a marker stays a paragraph."""
        result = fmt("\t!a\n\t*b\n\tc")

        assert result == "\t!a\n\t*b\nc\n"
        assert fmt(result) == result

    def test_heading_then_paragraph(self) -> None:
        """Test the heading and paragraph layout."""
        assert fmt("!Title\n\nSome '''bold''' here") == "! Title\n\nSome'''bold'''here\n"

    @pytest.mark.parametrize(
        "source,expected",
        [
            ("Some '''bold''' here", "Some'''bold'''here\n"),
            ("!a ''b'' c", "! a''b''c\n"),
            ("* x '''y'''  z", "* x'''y'''z\n"),
            ("'''a ''b'' c'''", "'''a''b''c'''\n"),
        ],
    )
    def test_inline_text_is_trimmed(self, source: str, expected: str) -> None:
        """Test that every text run loses its surrounding whitespace."""
        assert fmt(source) == expected

    @pytest.mark.parametrize(
        "source,expected",
        [
            ("x ' ''a''", "x ' ''a''\n"),
            ("''a''  'b", "''a'' 'b\n"),
            ("''a''   ''b''", "''a'' ''b''\n"),
        ],
    )
    def test_space_kept_between_apostrophes(self, source: str, expected: str) -> None:
        """Test that trimming never joins a literal apostrophe with a marker."""
        result = fmt(source)

        assert result == expected
        assert fmt(result) == result

    def test_lists(self) -> None:
        """Test list markers, nesting, and the blank line after a closed list."""
        assert fmt("*a\n**b\n+c") == "* a\n** b\n\n+ c\n"

    def test_nested_list_uses_innermost_marker(self) -> None:
        """Test that a nested item repeats its own list's marker."""
        assert fmt("*a\n++b\n*c") == "* a\n++ b\n* c\n"

    def test_deep_list_item(self) -> None:
        """Test an item that opens three levels at once."""
        assert fmt("+++x") == "+++ x\n"

    def test_empty_list_item(self) -> None:
        """Test that an empty item is a bare marker."""
        assert fmt("*\n**") == "*\n**\n"

    def test_list_then_heading(self) -> None:
        """Test that a blank line follows a list closed to depth zero."""
        assert fmt("*a\n!h") == "* a\n\n! h\n"

    def test_preformatted(self) -> None:
        """Test that preformatted lines are written verbatim after one space."""
        assert fmt(" a\n   b  ") == " a\n   b  \n"

    def test_preformatted_after_paragraph(self) -> None:
        """Test the blank line between a paragraph and a preformatted block."""
        assert fmt("text\n code") == "text\n\n code\n"

    def test_comments(self) -> None:
        """Test comment spacing after the marker."""
        assert fmt("// note") == "//note\n"
        assert fmt("//  note") == "//  note\n"
        assert render_comment("") == "//\n"

    def test_comment_between_paragraphs(self) -> None:
        """Test that a comment follows the blank line after a paragraph."""
        assert fmt("a\n//c\nb") == "a\n\n//c\nb\n"

    def test_comment_inside_list(self) -> None:
        """Test that a comment inside a list is written between items."""
        assert fmt("*a\n//c\n*b") == "* a\n//c\n* b\n"

    def test_single_line_plugins(self) -> None:
        """Test plugins with and without arguments."""
        assert fmt("{{toc}}") == "{{toc}}\n"
        assert fmt("{{ref image.png,Caption}}") == "{{ref image.png,Caption}}\n"

    def test_plugins_are_separate_blocks(self) -> None:
        """Test the blank line after each plugin."""
        assert fmt("{{toc}}\n{{recent 5}}") == "{{toc}}\n\n{{recent 5}}\n"

    def test_multi_line_plugin_verbatim(self) -> None:
        """Test that a plugin block body is reproduced byte for byte."""
        source = "{{pre lang\n  ''raw''  \n\n!x\n}}"

        assert fmt(source) == source + "\n"

    def test_unterminated_plugin_is_closed(self) -> None:
        """Test that the formatter writes the missing close marker."""
        assert fmt("{{pre\nx") == "{{pre\nx\n}}\n"


@pytest.mark.unit
class TestFswikiRendererTables:
    """Tests for table layout."""

    def test_right_alignment(self) -> None:
        """Test the default right alignment."""
        assert fmt(",a,bb\n,ccc,d") == ",  a,bb\n,ccc, d\n"

    def test_left_alignment_leaves_last_cell(self) -> None:
        """Test that left alignment does not pad the final cell."""
        assert fmt(",a,bb\n,ccc,d", table_align="left") == ",a  ,bb\n,ccc,d\n"

    def test_insert_space(self) -> None:
        """Test a space after every cell except the last."""
        assert fmt(",a,bb\n,ccc,d", table_insert_space=True) == ",  a ,bb\n,ccc , d\n"

    def test_cells_are_stripped(self) -> None:
        """Test that whitespace around cell text is removed before padding."""
        assert fmt(",  a  ,b") == ",a,b\n"

    def test_ragged_rows_right(self) -> None:
        """Test that short rows get empty padded cells."""
        assert fmt(",a\n,b,c") == ",a, \n,b,c\n"

    def test_ragged_rows_left(self) -> None:
        """Test that an empty last cell is not padded under left alignment."""
        assert fmt(",a\n,b,c", table_align="left") == ",a,\n,b,c\n"

    def test_comma_cell_is_quoted(self) -> None:
        """Test that a cell containing a comma is wrapped in quotes."""
        assert fmt(',"x,y",z\n,1,2') == ',"x,y",z\n,    1,2\n'

    def test_wide_characters(self) -> None:
        """Test that wide characters count as two columns."""
        assert fmt(",日本,x\n,a,y") == ",日本,x\n,   a,y\n"

    def test_inline_markup_counts_toward_width(self) -> None:
        """Test that markup characters are part of the cell width."""
        assert fmt(",'''b'''\n,a") == ",'''b'''\n,      a\n"

    def test_cell_text_is_trimmed_before_measuring(self) -> None:
        """Test that whitespace around marked-up text does not widen a column."""
        assert fmt(",a '''b''' c,d") == ",a'''b'''c,d\n"
        assert fmt(",a '''b''' c,d\n,x,y") == ",a'''b'''c,d\n,        x,y\n"

    def test_comment_stays_after_its_row(self) -> None:
        """Test that comments inside a table follow the preceding row."""
        assert fmt(",a\n//c\n,bb") == ", a\n//c\n,bb\n"

    def test_trailing_comment_in_table(self) -> None:
        """Test a comment after the last row."""
        assert fmt(",a\n//c") == ",a\n//c\n"

    def test_table_after_list(self) -> None:
        """Test the blank line between a list and a table."""
        assert fmt("*a\n,b") == "* a\n\n,b\n"

    def test_separate_tables_are_aligned_separately(self) -> None:
        """Test that column widths do not carry over between tables."""
        assert fmt(",aaaa\n\n,b") == ",aaaa\n\n,b\n"


@pytest.mark.unit
class TestRenderHelpers:
    """Tests for the module-level rendering helpers."""

    def test_render_inline(self) -> None:
        """Test rendering every inline kind."""
        children = [
            text("a"),
            Event(EventKind.STRONG_OPEN),
            text("b"),
            Event(EventKind.STRONG_CLOSE),
            Event(EventKind.SOFT_BREAK),
            Event(EventKind.EMPHASIS_OPEN),
            text("c"),
            Event(EventKind.EMPHASIS_CLOSE),
        ]

        assert render_inline(children) == "a'''b'''\n''c''"

    def test_render_inline_trims_each_text(self) -> None:
        """Test trimming with and without a protected line start."""
        children = [text("\t,x "), Event(EventKind.EMPHASIS_OPEN), text(" y "), Event(EventKind.EMPHASIS_CLOSE)]

        assert render_inline(children) == ",x''y''"
        assert render_inline(children, keep_line_start=True) == "\t,x''y''"

    def test_render_plugin_forms(self) -> None:
        """Test the three plugin layouts."""
        assert render_plugin(Event(EventKind.PLUGIN, tag="toc")) == "{{toc}}"
        assert render_plugin(Event(EventKind.PLUGIN, tag="ref", content="a.png")) == "{{ref a.png}}"
        block = Event(EventKind.PLUGIN, tag="pre", argument="lang", content="\nbody\n")
        assert render_plugin(block) == "{{pre lang\nbody\n}}"
        bare_block = Event(EventKind.PLUGIN, tag="pre", content="\n")
        assert render_plugin(bare_block) == "{{pre\n}}"

    def test_hand_built_stream(self) -> None:
        """Test rendering events that were not produced by the parser."""
        events = [
            Event(EventKind.HEADING_OPEN, level=2),
            inline(text("Head")),
            Event(EventKind.HEADING_CLOSE, level=2),
            Event(EventKind.PARAGRAPH_OPEN),
            inline(text("one"), Event(EventKind.SOFT_BREAK), text("two")),
            Event(EventKind.PARAGRAPH_CLOSE),
        ]

        assert FswikiRenderer().render_to_string(events) == "!! Head\n\none\ntwo\n"


@pytest.mark.unit
class TestFswikiRendererOutput:
    """Tests for writing rendered output."""

    def test_render_to_text_stream(self) -> None:
        """Test writing to a text stream."""
        output = StringIO()

        FswikiRenderer().render(FswikiParser().parse("*a"), output)

        assert output.getvalue() == "* a\n"

    def test_render_to_binary_stream(self) -> None:
        """Test writing UTF-8 bytes to a binary stream."""
        output = BytesIO()

        FswikiRenderer().render(FswikiParser().parse("!日本"), output)

        assert output.getvalue() == "! 日本\n".encode("utf-8")

    def test_render_to_path(self, tmp_path: Path) -> None:
        """Test writing to a file path."""
        path = tmp_path / "out.wiki"

        FswikiRenderer().render(FswikiParser().parse("a\nb"), path)

        assert path.read_bytes() == b"a\nb\n"
