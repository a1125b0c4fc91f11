#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/fswikifmt/parsers/_block_state.py
"""Cross-line block state for the FSWiki parser.

Each source line is classified into a :class:`BlockState` describing which
multi-line constructs it belongs to. :func:`transition` compares the state
of the previous line with the state of the current one and returns the
open/close events needed to move between them. It is a pure function: the
per-depth list types are passed in and the updated tuple is returned.

"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional

from fswikifmt.constants import MAX_LIST_DEPTH
from fswikifmt.events import Event, EventKind


class ListType(Enum):
    """Kind of list opened at a nesting depth."""

    UNORDERED = "unordered"
    ORDERED = "ordered"


_LIST_OPEN = {
    ListType.UNORDERED: EventKind.UNORDERED_LIST_OPEN,
    ListType.ORDERED: EventKind.ORDERED_LIST_OPEN,
}
_LIST_CLOSE = {
    ListType.UNORDERED: EventKind.UNORDERED_LIST_CLOSE,
    ListType.ORDERED: EventKind.ORDERED_LIST_CLOSE,
}

# Index i holds the type of the list open at depth i + 1
ListTypes = tuple[Optional[ListType], ...]
EMPTY_LIST_TYPES: ListTypes = (None,) * MAX_LIST_DEPTH


@dataclass(frozen=True)
class BlockState:
    """Snapshot of the multi-line constructs a line belongs to.

    Parameters
    ----------
    paragraph : bool
        Line continues or starts a paragraph
    list_depth : int
        List nesting depth of the line's item, 0 outside lists
    list_type : ListType or None
        Type requested by the line's list marker
    preformatted : bool
        Line belongs to a preformatted block
    table : bool
        Line is a table row
    plugin : bool
        A multi-line plugin block is open after this line

    """

    paragraph: bool = False
    list_depth: int = 0
    list_type: Optional[ListType] = None
    preformatted: bool = False
    table: bool = False
    plugin: bool = False


def _target_list_types(prev: BlockState, cur: BlockState, list_types: ListTypes) -> list[Optional[ListType]]:
    # Levels above the current item keep the type they were opened with;
    # the item's own level and any newly opened levels take the new type.
    target: list[Optional[ListType]] = []
    for index in range(cur.list_depth):
        if index < prev.list_depth and index < cur.list_depth - 1:
            target.append(list_types[index])
        else:
            target.append(cur.list_type)
    return target


def transition(prev: BlockState, cur: BlockState, list_types: ListTypes) -> tuple[list[Event], ListTypes]:
    """Compute the events that move the document from ``prev`` to ``cur``.

    Everything that closes is emitted before anything that opens, which
    keeps the stream properly nested: paragraph close, list closes (deepest
    first, each with the type remembered for its depth), table close, then
    list opens, preformatted block, table open and paragraph open.

    A list level stays open only while its remembered type matches the
    type wanted at that depth; an item switching type at an open depth
    closes that depth and every deeper one, then reopens them.

    Parameters
    ----------
    prev : BlockState
        State after the previous line
    cur : BlockState
        State requested by the current line
    list_types : tuple
        Remembered list type per depth (length ``MAX_LIST_DEPTH``)

    Returns
    -------
    tuple[list[Event], tuple]
        Events to emit and the updated per-depth list types

    Examples
    --------
    >>> events, types = transition(BlockState(), BlockState(list_depth=2, list_type=ListType.ORDERED),
    ...                            EMPTY_LIST_TYPES)
    >>> [e.kind.value for e in events]
    ['ordered_list_open', 'ordered_list_open']

    """
    events: list[Event] = []
    new_types = list(list_types)

    if prev.paragraph and not cur.paragraph:
        events.append(Event(EventKind.PARAGRAPH_CLOSE))

    target = _target_list_types(prev, cur, list_types)
    keep = 0
    while keep < min(prev.list_depth, cur.list_depth) and list_types[keep] == target[keep]:
        keep += 1

    for index in range(prev.list_depth - 1, keep - 1, -1):
        list_type = list_types[index]
        if list_type is not None:
            events.append(Event(_LIST_CLOSE[list_type]))
        new_types[index] = None

    if prev.table and not cur.table:
        events.append(Event(EventKind.TABLE_CLOSE))

    for index in range(keep, cur.list_depth):
        list_type = target[index]
        if list_type is not None:
            events.append(Event(_LIST_OPEN[list_type]))
        new_types[index] = list_type

    if cur.preformatted and not prev.preformatted:
        events.append(Event(EventKind.PREFORMATTED))

    if cur.table and not prev.table:
        events.append(Event(EventKind.TABLE_OPEN))

    if cur.paragraph and not prev.paragraph:
        events.append(Event(EventKind.PARAGRAPH_OPEN))

    return events, tuple(new_types)
