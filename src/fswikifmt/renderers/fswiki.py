#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/fswikifmt/renderers/fswiki.py
"""Canonical FSWiki rendering from an event stream.

This module provides the FswikiRenderer class, the formatter half of the
package. It replays an event stream once and writes the canonical markup
for it: one space after heading and list markers, one blank line between
blocks, and tables whose columns are padded to a common display width.

"""

from __future__ import annotations

import logging

from fswikifmt.constants import (
    COMMENT_MARKER,
    EMPHASIS_MARKER,
    HEADING_LEVEL_BASE,
    HEADING_MARKER,
    ORDERED_LIST_MARKER,
    PLUGIN_CLOSE_MARKER,
    PLUGIN_OPEN_MARKER,
    PREFORMATTED_MARKER,
    STRONG_MARKER,
    TABLE_MARKER,
    TABLE_QUOTE,
    UNORDERED_LIST_MARKER,
)
from fswikifmt.events import Event, EventKind, EventVisitor
from fswikifmt.options.fswiki import FswikiFormatOptions
from fswikifmt.renderers.base import BaseRenderer
from fswikifmt.utils.text import display_width, fill_left, fill_right

logger = logging.getLogger(__name__)

_SPAN_MARKUP = {
    EventKind.STRONG_OPEN: STRONG_MARKER,
    EventKind.STRONG_CLOSE: STRONG_MARKER,
    EventKind.EMPHASIS_OPEN: EMPHASIS_MARKER,
    EventKind.EMPHASIS_CLOSE: EMPHASIS_MARKER,
}

_LINE_START_MARKERS = (
    HEADING_MARKER,
    UNORDERED_LIST_MARKER,
    ORDERED_LIST_MARKER,
    TABLE_MARKER,
    COMMENT_MARKER,
    PLUGIN_OPEN_MARKER,
)

_APOSTROPHE = EMPHASIS_MARKER[0]


def _render_text(content: str, after: str, before_span: bool, at_line_start: bool) -> str:
    stripped = content.strip()
    if at_line_start and stripped.startswith(_LINE_START_MARKERS):
        leading = content[: len(content) - len(content.lstrip())]
    elif (
        after == _APOSTROPHE
        and content[:1].isspace()
        and (stripped.startswith(_APOSTROPHE) or (not stripped and before_span))
    ):
        leading = " "
    else:
        leading = ""
    trailing = " " if before_span and stripped.endswith(_APOSTROPHE) and content[-1:].isspace() else ""
    return leading + stripped + trailing


def render_inline(children: list[Event], keep_line_start: bool = False) -> str:
    """Render inline child events back to markup.

    Every text run is trimmed of surrounding whitespace, so ``a '''b''' c``
    renders as ``a'''b'''c``. A single space is kept where trimming would
    put an apostrophe of the text directly against a ``''`` or ``'''``
    marker, since the merged run would be read as a different marker.

    Parameters
    ----------
    children : list of Event
        Children of an INLINE event
    keep_line_start : bool, default = False
        Keep the leading whitespace of a line whose trimmed text would start
        with a block marker (``!``, ``*``, ``,`` ...). Used for paragraph
        lines, where that whitespace is all that makes the line a paragraph.

    Returns
    -------
    str
        Markup text; soft breaks become line breaks

    """
    parts: list[str] = []
    after = ""
    line_start = True
    for index, child in enumerate(children):
        if child.kind is EventKind.TEXT:
            following = children[index + 1] if index + 1 < len(children) else None
            before_span = following is not None and following.kind in _SPAN_MARKUP
            part = _render_text(child.content, after, before_span, keep_line_start and line_start)
            line_start = False
        elif child.kind is EventKind.SOFT_BREAK:
            part = "\n"
            line_start = True
        else:
            part = _SPAN_MARKUP.get(child.kind, "")
            line_start = False
        parts.append(part)
        if part:
            after = part[-1]
    return "".join(parts)


def render_comment(content: str) -> str:
    """Render a comment line, including its line break.

    The parser drops one space after ``//``; a comment whose content still
    starts with a space gets that space back so re-parsing yields the same
    content.
    """
    separator = " " if content.startswith(" ") else ""
    return f"{COMMENT_MARKER}{separator}{content}\n"


def render_plugin(event: Event) -> str:
    """Render a plugin event, without the trailing line break."""
    if event.content.startswith("\n"):
        opener = event.tag + (f" {event.argument}" if event.argument else "")
        return f"{PLUGIN_OPEN_MARKER}{opener}{event.content}{PLUGIN_CLOSE_MARKER}"
    if not event.content:
        return f"{PLUGIN_OPEN_MARKER}{event.tag}{PLUGIN_CLOSE_MARKER}"
    return f"{PLUGIN_OPEN_MARKER}{event.tag} {event.content}{PLUGIN_CLOSE_MARKER}"


class _TableBuffer:
    """Rows of one table, collected until the table closes."""

    def __init__(self) -> None:
        self.rows: list[list[str]] = []
        self.comments: list[str] = []
        self.widths: list[int] = [0]
        self.row_index = 0
        self.cell_index = 0

    def start_row(self) -> None:
        self.cell_index = 0
        self.rows.append([""] * len(self.widths))
        self.comments.append("")

    def end_row(self) -> None:
        self.row_index += 1

    def start_cell(self) -> None:
        if self.cell_index >= len(self.widths):
            for row in self.rows:
                row.append("")
            self.widths.append(0)

    def end_cell(self) -> None:
        self.cell_index += 1

    def set_cell(self, text: str) -> None:
        if TABLE_MARKER in text:
            text = f"{TABLE_QUOTE}{text}{TABLE_QUOTE}"
        self.rows[self.row_index][self.cell_index] = text
        self.widths[self.cell_index] = max(self.widths[self.cell_index], display_width(text))

    def add_comment(self, line: str) -> None:
        # Attach to the most recently closed row
        self.comments[self.row_index - 1] += line

    def render(self, align: str, insert_space: bool) -> str:
        lines = []
        for row, comments in zip(self.rows, self.comments):
            parts = []
            last = len(row) - 1
            for index, cell in enumerate(row):
                if align == "right":
                    cell = fill_left(cell, self.widths[index])
                elif index != last:
                    cell = fill_right(cell, self.widths[index])
                if insert_space and index != last:
                    cell += " "
                parts.append(f"{TABLE_MARKER}{cell}")
            lines.append("".join(parts) + "\n" + comments)
        return "".join(lines)


class FswikiRenderer(EventVisitor, BaseRenderer):
    r"""Render an event stream as canonical FSWiki markup.

    The renderer walks the stream once. Text outside tables is written as
    it arrives; table rows are buffered until TABLE_CLOSE so that every
    column can be padded to its widest cell. Comments inside a table are
    attached to the row closed just before them and written after it.

    Blocks are separated by exactly one blank line: after a heading, a
    paragraph, a preformatted block, a plugin, a table, and a list that
    closes back to depth zero. No blank line follows the last block.

    Parameters
    ----------
    options : FswikiFormatOptions or None, default = None
        Table layout options

    Examples
    --------
    Basic usage:

        >>> from fswikifmt.parsers.fswiki import FswikiParser
        >>> events = FswikiParser().parse("!Title\nbody")
        >>> FswikiRenderer().render_to_string(events)
        '! Title\n\nbody\n'

    """

    def __init__(self, options: FswikiFormatOptions | None = None):
        """Initialize the renderer with options."""
        BaseRenderer._validate_options_type(options, FswikiFormatOptions, "fswiki")
        options = options or FswikiFormatOptions()
        BaseRenderer.__init__(self, options)
        self.options: FswikiFormatOptions = options
        self._reset()

    def _reset(self) -> None:
        self._output: list[str] = []
        self._blank_pending = False
        self._list_markers: list[str] = []
        self._prefix = ""
        self._in_paragraph = False
        self._table: _TableBuffer | None = None

    def render_to_string(self, events: list[Event]) -> str:
        """Render an event stream to canonical markup.

        Parameters
        ----------
        events : list of Event
            Balanced event stream, as produced by FswikiParser

        Returns
        -------
        str
            Canonical document text

        """
        self._reset()
        for event in events:
            event.accept(self)
        result = "".join(self._output)
        self._reset()
        return result

    def _write(self, text: str) -> None:
        if self._blank_pending:
            self._output.append("\n")
            self._blank_pending = False
        self._output.append(text)

    def _end_block(self) -> None:
        self._blank_pending = True

    # ------------------------------------------------------------------
    # Headings and paragraphs
    # ------------------------------------------------------------------

    def _flush_prefix(self) -> None:
        if self._prefix:
            self._write(self._prefix)
            self._prefix = ""

    def visit_heading_open(self, event: Event) -> None:
        """Queue the heading marker; ``!!!`` is level 1, ``!`` level 3."""
        self._prefix = HEADING_MARKER * (HEADING_LEVEL_BASE - event.level)

    def visit_heading_close(self, event: Event) -> None:
        self._flush_prefix()
        self._write("\n")
        self._end_block()

    def visit_paragraph_open(self, event: Event) -> None:
        self._in_paragraph = True

    def visit_paragraph_close(self, event: Event) -> None:
        self._in_paragraph = False
        self._write("\n")
        self._end_block()

    # ------------------------------------------------------------------
    # Lists
    # ------------------------------------------------------------------

    def visit_unordered_list_open(self, event: Event) -> None:
        self._list_markers.append(UNORDERED_LIST_MARKER)

    def visit_ordered_list_open(self, event: Event) -> None:
        self._list_markers.append(ORDERED_LIST_MARKER)

    def _close_list(self) -> None:
        self._list_markers.pop()
        if not self._list_markers:
            self._end_block()

    def visit_unordered_list_close(self, event: Event) -> None:
        self._close_list()

    def visit_ordered_list_close(self, event: Event) -> None:
        self._close_list()

    def visit_list_item_open(self, event: Event) -> None:
        """Write the innermost list's marker once per nesting level."""
        depth = len(self._list_markers)
        self._prefix = self._list_markers[-1] * depth

    def visit_list_item_close(self, event: Event) -> None:
        self._flush_prefix()
        self._write("\n")

    # ------------------------------------------------------------------
    # Leaf blocks
    # ------------------------------------------------------------------

    def visit_preformatted(self, event: Event) -> None:
        for line in event.content.split("\n"):
            self._write(f"{PREFORMATTED_MARKER}{line}\n")
        self._end_block()

    def visit_plugin(self, event: Event) -> None:
        self._write(render_plugin(event) + "\n")
        self._end_block()

    def visit_comment(self, event: Event) -> None:
        line = render_comment(event.content)
        if self._table is not None:
            self._table.add_comment(line)
        else:
            self._write(line)

    # ------------------------------------------------------------------
    # Tables
    # ------------------------------------------------------------------

    def visit_table_open(self, event: Event) -> None:
        self._table = _TableBuffer()

    def visit_table_close(self, event: Event) -> None:
        table = self._table
        self._table = None
        if table is None:
            return
        logger.debug(f"Rendering table with {len(table.rows)} rows and {len(table.widths)} columns")
        self._write(table.render(self.options.table_align, self.options.table_insert_space))
        self._end_block()

    def visit_table_row_open(self, event: Event) -> None:
        if self._table is not None:
            self._table.start_row()

    def visit_table_row_close(self, event: Event) -> None:
        if self._table is not None:
            self._table.end_row()

    def _start_cell(self, event: Event) -> None:
        if self._table is not None:
            self._table.start_cell()

    def _end_cell(self, event: Event) -> None:
        if self._table is not None:
            self._table.end_cell()

    visit_table_header_cell_open = _start_cell
    visit_table_data_cell_open = _start_cell
    visit_table_header_cell_close = _end_cell
    visit_table_data_cell_close = _end_cell

    # ------------------------------------------------------------------
    # Inline content
    # ------------------------------------------------------------------

    def visit_inline(self, event: Event) -> None:
        """Render inline content into the current cell or the output.

        A heading or list item marker is followed by one space unless the
        text is empty.
        """
        if self._table is not None:
            self._table.set_cell(render_inline(event.children))
        elif self._in_paragraph:
            self._write(render_inline(event.children, keep_line_start=True))
        elif self._prefix:
            rendered = render_inline(event.children)
            self._write(f"{self._prefix} {rendered}" if rendered else self._prefix)
            self._prefix = ""
        else:
            self._write(render_inline(event.children))
