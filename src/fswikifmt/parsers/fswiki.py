#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/fswikifmt/parsers/fswiki.py
"""FSWiki markup to event stream parser.

This module reads FSWiki markup line by line. Each line is classified by
its leading characters; a small cross-line state machine (see
``_block_state``) turns changes between consecutive lines into balanced
open/close events, and the text of headings, list items, paragraphs and
table cells is parsed for inline markup.

No input is rejected. Anything that is not recognized markup becomes
paragraph text.

"""

from __future__ import annotations

import logging
from dataclasses import replace
from typing import Iterable, Optional

from fswikifmt.constants import (
    COMMENT_MARKER,
    EMPHASIS_MARKER,
    HEADING_LEVEL_BASE,
    HEADING_MARKER,
    MAX_HEADING_MARKERS,
    MAX_LIST_DEPTH,
    ORDERED_LIST_MARKER,
    PLUGIN_CLOSE_MARKER,
    PLUGIN_OPEN_MARKER,
    PREFORMATTED_MARKER,
    STRONG_MARKER,
    TABLE_MARKER,
    TABLE_QUOTE,
    UNORDERED_LIST_MARKER,
)
from fswikifmt.events import Event, EventKind
from fswikifmt.options.fswiki import FswikiParserOptions
from fswikifmt.parsers._block_state import EMPTY_LIST_TYPES, BlockState, ListType, transition
from fswikifmt.parsers.base import BaseParser, ParserInput
from fswikifmt.utils.text import split_lines

logger = logging.getLogger(__name__)

_LIST_MARKERS = {
    UNORDERED_LIST_MARKER: ListType.UNORDERED,
    ORDERED_LIST_MARKER: ListType.ORDERED,
}


def _strip_one_space(text: str) -> str:
    return text[1:] if text.startswith(" ") else text


def _count_prefix(line: str, marker: str, limit: int) -> int:
    count = 0
    while count < limit and line.startswith(marker, count):
        count += 1
    return count


# =============================================================================
# Inline markup
# =============================================================================


def _match_span(
    text: str, pos: int, marker: str, open_kind: EventKind, close_kind: EventKind
) -> Optional[tuple[list[Event], int]]:
    body_start = pos + len(marker)
    close = text.find(marker, body_start)
    if close == -1:
        return None
    events = [Event(open_kind), *parse_inline(text[body_start:close]), Event(close_kind)]
    return events, close + len(marker)


def parse_inline(text: str) -> list[Event]:
    """Parse strong and emphasis markup in one line of text.

    The line is scanned left to right. At each position ``'''`` is tried
    first and ``''`` only when no strong span starts there. A marker opens
    a span reaching to the next occurrence of the same marker; the span's
    interior is parsed recursively. Unmatched markers stay literal text.

    Parameters
    ----------
    text : str
        Text of a heading, list item, paragraph line or table cell

    Returns
    -------
    list of Event
        TEXT, STRONG_OPEN/CLOSE and EMPHASIS_OPEN/CLOSE events. Empty text
        runs are not emitted.

    Examples
    --------
    >>> [e.kind.value for e in parse_inline("a '''b''' c")]
    ['text', 'strong_open', 'text', 'strong_close', 'text']

    """
    children: list[Event] = []
    start = 0
    pos = 0
    while pos < len(text):
        span = None
        if text.startswith(STRONG_MARKER, pos):
            span = _match_span(text, pos, STRONG_MARKER, EventKind.STRONG_OPEN, EventKind.STRONG_CLOSE)
        if span is None and text.startswith(EMPHASIS_MARKER, pos):
            span = _match_span(text, pos, EMPHASIS_MARKER, EventKind.EMPHASIS_OPEN, EventKind.EMPHASIS_CLOSE)
        if span is None:
            pos += 1
            continue

        events, end = span
        if start < pos:
            children.append(Event(EventKind.TEXT, content=text[start:pos]))
        children.extend(events)
        pos = start = end

    if start < len(text):
        children.append(Event(EventKind.TEXT, content=text[start:]))
    return children


# =============================================================================
# Table rows
# =============================================================================


def split_table_row(line: str) -> list[str]:
    """Split a table line into raw cell texts.

    Cells are separated by commas; the line's leading comma opens the first
    cell. A cell whose text (after optional spaces) starts with a double
    quote runs to the next double quote, so commas inside the quotes are
    literal. Text between the closing quote and the next comma is kept. A
    quote that is never closed is ordinary text.

    Parameters
    ----------
    line : str
        Table line, starting with a comma

    Returns
    -------
    list of str
        Raw cell texts, at least one

    Examples
    --------
    >>> split_table_row(',a,"1,000",b')
    ['a', '1,000', 'b']
    >>> split_table_row(",a,")
    ['a', '']

    """
    cells: list[str] = []
    pos = 1 if line.startswith(TABLE_MARKER) else 0
    while True:
        body = pos
        while body < len(line) and line[body] in " \t":
            body += 1
        if line.startswith(TABLE_QUOTE, body):
            close = line.find(TABLE_QUOTE, body + 1)
            if close != -1:
                next_comma = line.find(TABLE_MARKER, close + 1)
                tail_end = len(line) if next_comma == -1 else next_comma
                cells.append(line[body + 1 : close] + line[close + 1 : tail_end])
                if next_comma == -1:
                    return cells
                pos = next_comma + 1
                continue

        next_comma = line.find(TABLE_MARKER, pos)
        if next_comma == -1:
            cells.append(line[pos:])
            return cells
        cells.append(line[pos:next_comma])
        pos = next_comma + 1


# =============================================================================
# Parser
# =============================================================================


class FswikiParser(BaseParser):
    r"""Convert FSWiki markup to an event stream.

    Lines are classified by their leading characters, in this order:

    - ``!!!`` / ``!!`` / ``!``: heading (levels 1 / 2 / 3)
    - ``***`` / ``**`` / ``*``: unordered list item (depth 3 / 2 / 1)
    - ``+++`` / ``++`` / ``+``: ordered list item (depth 3 / 2 / 1)
    - a space: preformatted line
    - ``,``: table row
    - ``//``: comment
    - ``{{``: plugin
    - empty or whitespace only: block separator
    - anything else: paragraph text

    Once a plugin is opened without ``}}`` on the same line, following
    lines are captured verbatim until a line that is exactly ``}}``.

    Parameters
    ----------
    options : FswikiParserOptions or None, default = None
        Input decoding options

    Examples
    --------
    Basic parsing:

        >>> parser = FswikiParser()
        >>> events = parser.parse("!Title\n\nSome '''bold''' text")

    """

    def __init__(self, options: FswikiParserOptions | None = None):
        """Initialize the FSWiki parser with options."""
        BaseParser._validate_options_type(options, FswikiParserOptions, "fswiki")
        super().__init__(options)
        self._reset()

    def _reset(self) -> None:
        self._events: list[Event] = []
        self._prev = BlockState()
        self._list_types = EMPTY_LIST_TYPES
        self._preformatted: Optional[Event] = None
        self._plugin: Optional[Event] = None

    def parse(self, input_data: ParserInput) -> list[Event]:
        """Parse FSWiki input into an event stream.

        Parameters
        ----------
        input_data : str, bytes, Path, IO[bytes] or IO[str]
            Document text, raw bytes, a path, or an open file

        Returns
        -------
        list of Event
            Balanced event stream for the whole document

        Raises
        ------
        FileError
            If the input cannot be read

        """
        content = self._load_text_content(input_data)
        return self.parse_lines(split_lines(content))

    def parse_lines(self, lines: Iterable[str]) -> list[Event]:
        """Parse an iterable of lines (without line terminators).

        Parameters
        ----------
        lines : iterable of str
            Document lines

        Returns
        -------
        list of Event
            Balanced event stream

        """
        self._reset()
        line_count = 0
        for line in lines:
            self._parse_line(line)
            line_count += 1
        self._advance(BlockState())

        events = self._events
        logger.debug(f"Parsed {line_count} lines into {len(events)} events")
        self._reset()
        return events

    # ------------------------------------------------------------------
    # State handling
    # ------------------------------------------------------------------

    def _advance(self, cur: BlockState) -> None:
        events, self._list_types = transition(self._prev, cur, self._list_types)
        self._events.extend(events)

    def _emit(self, kind: EventKind, **fields: object) -> Event:
        event = Event(kind, **fields)  # type: ignore[arg-type]
        self._events.append(event)
        return event

    def _append_inline(self, text: str) -> None:
        children = parse_inline(text)
        last = self._events[-1] if self._events else None
        if last is not None and last.kind is EventKind.INLINE:
            last.children.append(Event(EventKind.SOFT_BREAK))
            last.children.extend(children)
        else:
            self._emit(EventKind.INLINE, children=children)

    # ------------------------------------------------------------------
    # Line classification
    # ------------------------------------------------------------------

    def _parse_line(self, line: str) -> None:
        if self._prev.plugin:
            self._continue_plugin(line)
            return

        if line.startswith(HEADING_MARKER):
            state = self._parse_heading(line)
        elif line[:1] in _LIST_MARKERS:
            state = self._parse_list_item(line)
        elif line.startswith(PREFORMATTED_MARKER):
            state = self._parse_preformatted(line[len(PREFORMATTED_MARKER) :])
        elif line.startswith(TABLE_MARKER):
            state = self._parse_table_row(line)
        elif line.startswith(COMMENT_MARKER):
            state = self._parse_comment(_strip_one_space(line[len(COMMENT_MARKER) :]))
        elif line.startswith(PLUGIN_OPEN_MARKER):
            state = self._parse_plugin(_strip_one_space(line[len(PLUGIN_OPEN_MARKER) :]))
        elif not line.strip():
            state = BlockState()
            self._advance(state)
        else:
            state = self._parse_paragraph(line)

        self._prev = state

    def _parse_heading(self, line: str) -> BlockState:
        count = _count_prefix(line, HEADING_MARKER, MAX_HEADING_MARKERS)
        level = HEADING_LEVEL_BASE - count
        state = BlockState()
        self._advance(state)
        self._emit(EventKind.HEADING_OPEN, level=level)
        self._append_inline(_strip_one_space(line[count:]))
        self._emit(EventKind.HEADING_CLOSE, level=level)
        return state

    def _parse_list_item(self, line: str) -> BlockState:
        marker = line[0]
        depth = _count_prefix(line, marker, MAX_LIST_DEPTH)
        state = BlockState(list_depth=depth, list_type=_LIST_MARKERS[marker])
        self._advance(state)
        self._emit(EventKind.LIST_ITEM_OPEN)
        self._append_inline(_strip_one_space(line[depth:]))
        self._emit(EventKind.LIST_ITEM_CLOSE)
        return state

    def _parse_preformatted(self, text: str) -> BlockState:
        state = BlockState(preformatted=True)
        self._advance(state)
        if self._preformatted is not None and self._prev.preformatted:
            self._preformatted.content += "\n" + text
        else:
            # transition() has just emitted the PREFORMATTED event
            self._preformatted = self._events[-1]
            self._preformatted.content = text
        return state

    def _parse_table_row(self, line: str) -> BlockState:
        header = not self._prev.table
        state = BlockState(table=True)
        self._advance(state)

        if header:
            open_kind, close_kind = EventKind.TABLE_HEADER_CELL_OPEN, EventKind.TABLE_HEADER_CELL_CLOSE
        else:
            open_kind, close_kind = EventKind.TABLE_DATA_CELL_OPEN, EventKind.TABLE_DATA_CELL_CLOSE

        self._emit(EventKind.TABLE_ROW_OPEN)
        for cell in split_table_row(line):
            self._emit(open_kind)
            self._append_inline(cell)
            self._emit(close_kind)
        self._emit(EventKind.TABLE_ROW_CLOSE)
        return state

    def _parse_comment(self, text: str) -> BlockState:
        # Lists and tables stay open across a comment; inline runs do not
        state = replace(self._prev, paragraph=False, preformatted=False)
        self._advance(state)
        self._emit(EventKind.COMMENT, content=text)
        return state

    def _parse_plugin(self, body: str) -> BlockState:
        # Trailing whitespace after the close marker still closes the plugin
        single_line = body.rstrip().endswith(PLUGIN_CLOSE_MARKER)
        if single_line:
            body = body.rstrip()[: -len(PLUGIN_CLOSE_MARKER)]
        parts = body.split(maxsplit=1)
        tag = parts[0] if parts else ""
        argument = parts[1] if len(parts) > 1 else ""

        state = BlockState(plugin=not single_line)
        self._advance(state)
        if single_line:
            self._emit(EventKind.PLUGIN, tag=tag, content=argument)
        else:
            self._plugin = self._emit(EventKind.PLUGIN, tag=tag, argument=argument, content="\n")
        return state

    def _continue_plugin(self, line: str) -> None:
        if line == PLUGIN_CLOSE_MARKER:
            self._plugin = None
            self._prev = replace(self._prev, plugin=False)
        elif self._plugin is not None:
            self._plugin.content += line + "\n"

    def _parse_paragraph(self, line: str) -> BlockState:
        state = BlockState(paragraph=True)
        self._advance(state)
        self._append_inline(line)
        return state
