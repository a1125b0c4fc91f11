#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/fswikifmt/events.py
"""Event types for the parsed document stream.

A parsed document is a flat, ordered list of :class:`Event` values rather
than a tree. Structure is implied by event order: every ``*_OPEN`` kind is
balanced by the matching ``*_CLOSE`` kind, properly nested. Leaf events
(``PREFORMATTED``, ``COMMENT``, ``PLUGIN``) carry their payload directly,
and an ``INLINE`` event holds the rendered content of one logical block as
a list of inline child events.

Event Kinds
-----------
Block-level structure:
    - HEADING_OPEN / HEADING_CLOSE (carry ``level``)
    - PARAGRAPH_OPEN / PARAGRAPH_CLOSE
    - UNORDERED_LIST_OPEN / UNORDERED_LIST_CLOSE
    - ORDERED_LIST_OPEN / ORDERED_LIST_CLOSE
    - LIST_ITEM_OPEN / LIST_ITEM_CLOSE
    - TABLE_OPEN / TABLE_CLOSE, TABLE_ROW_OPEN / TABLE_ROW_CLOSE
    - TABLE_HEADER_CELL_OPEN / TABLE_HEADER_CELL_CLOSE
    - TABLE_DATA_CELL_OPEN / TABLE_DATA_CELL_CLOSE
    - PREFORMATTED, COMMENT, PLUGIN (leaves)
    - INLINE (container for inline children)

Inline children:
    - TEXT, SOFT_BREAK
    - STRONG_OPEN / STRONG_CLOSE, EMPHASIS_OPEN / EMPHASIS_CLOSE

"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class EventKind(Enum):
    """Discriminator for :class:`Event`."""

    HEADING_OPEN = "heading_open"
    HEADING_CLOSE = "heading_close"
    PARAGRAPH_OPEN = "paragraph_open"
    PARAGRAPH_CLOSE = "paragraph_close"
    UNORDERED_LIST_OPEN = "unordered_list_open"
    UNORDERED_LIST_CLOSE = "unordered_list_close"
    ORDERED_LIST_OPEN = "ordered_list_open"
    ORDERED_LIST_CLOSE = "ordered_list_close"
    LIST_ITEM_OPEN = "list_item_open"
    LIST_ITEM_CLOSE = "list_item_close"
    PREFORMATTED = "preformatted"
    TABLE_OPEN = "table_open"
    TABLE_CLOSE = "table_close"
    TABLE_ROW_OPEN = "table_row_open"
    TABLE_ROW_CLOSE = "table_row_close"
    TABLE_HEADER_CELL_OPEN = "table_header_cell_open"
    TABLE_HEADER_CELL_CLOSE = "table_header_cell_close"
    TABLE_DATA_CELL_OPEN = "table_data_cell_open"
    TABLE_DATA_CELL_CLOSE = "table_data_cell_close"
    STRONG_OPEN = "strong_open"
    STRONG_CLOSE = "strong_close"
    EMPHASIS_OPEN = "emphasis_open"
    EMPHASIS_CLOSE = "emphasis_close"
    INLINE = "inline"
    TEXT = "text"
    SOFT_BREAK = "soft_break"
    COMMENT = "comment"
    PLUGIN = "plugin"


# Open kind -> close kind, used to check balancing
CLOSING_KINDS: dict[EventKind, EventKind] = {
    EventKind.HEADING_OPEN: EventKind.HEADING_CLOSE,
    EventKind.PARAGRAPH_OPEN: EventKind.PARAGRAPH_CLOSE,
    EventKind.UNORDERED_LIST_OPEN: EventKind.UNORDERED_LIST_CLOSE,
    EventKind.ORDERED_LIST_OPEN: EventKind.ORDERED_LIST_CLOSE,
    EventKind.LIST_ITEM_OPEN: EventKind.LIST_ITEM_CLOSE,
    EventKind.TABLE_OPEN: EventKind.TABLE_CLOSE,
    EventKind.TABLE_ROW_OPEN: EventKind.TABLE_ROW_CLOSE,
    EventKind.TABLE_HEADER_CELL_OPEN: EventKind.TABLE_HEADER_CELL_CLOSE,
    EventKind.TABLE_DATA_CELL_OPEN: EventKind.TABLE_DATA_CELL_CLOSE,
    EventKind.STRONG_OPEN: EventKind.STRONG_CLOSE,
    EventKind.EMPHASIS_OPEN: EventKind.EMPHASIS_CLOSE,
}


@dataclass
class Event:
    """One element of the parsed document stream.

    Only the fields relevant to ``kind`` are populated; the rest keep their
    defaults.

    Parameters
    ----------
    kind : EventKind
        What this event represents
    level : int, default 0
        Heading level for HEADING_OPEN / HEADING_CLOSE (1-3, 3 is the smallest)
    content : str, default ""
        Literal text for TEXT, PREFORMATTED, COMMENT and PLUGIN events. A
        multi-line plugin body starts with a line break.
    tag : str, default ""
        Plugin name for PLUGIN events
    argument : str, default ""
        Text following the tag on the opening line of a multi-line plugin
    children : list of Event
        Inline children of an INLINE event

    """

    kind: EventKind
    level: int = 0
    content: str = ""
    tag: str = ""
    argument: str = ""
    children: list[Event] = field(default_factory=list)

    def accept(self, visitor: EventVisitor) -> Any:
        """Dispatch this event to ``visitor``."""
        return visitor.visit(self)


def text(content: str) -> Event:
    """Build a TEXT event."""
    return Event(EventKind.TEXT, content=content)


def inline(*children: Event) -> Event:
    """Build an INLINE event holding ``children``."""
    return Event(EventKind.INLINE, children=list(children))


def is_balanced(events: list[Event]) -> bool:
    """Check that open/close events are balanced and properly nested.

    Inline children are checked as their own sequence.

    Parameters
    ----------
    events : list of Event
        Event stream to check

    Returns
    -------
    bool
        True when every open event is closed by its own kind, in order

    """
    stack: list[EventKind] = []
    for event in events:
        if event.kind in CLOSING_KINDS:
            stack.append(CLOSING_KINDS[event.kind])
        elif event.kind in CLOSING_KINDS.values():
            if not stack or stack.pop() != event.kind:
                return False
        if event.kind is EventKind.INLINE and not is_balanced(event.children):
            return False
    return not stack


class EventVisitor:
    """Base class for objects that consume an event stream.

    ``visit`` dispatches on the event kind to a ``visit_<kind>`` method
    (for example ``visit_heading_open``). Kinds without a handler fall back
    to :meth:`generic_visit`, which ignores the event.

    Examples
    --------
    Counting list items:

        >>> class ItemCounter(EventVisitor):
        ...     def __init__(self):
        ...         self.count = 0
        ...
        ...     def visit_list_item_open(self, event):
        ...         self.count += 1
        ...
        >>> counter = ItemCounter()
        >>> for event in events:
        ...     event.accept(counter)

    """

    def visit(self, event: Event) -> Any:
        """Dispatch ``event`` to its handler."""
        handler = getattr(self, f"visit_{event.kind.value}", self.generic_visit)
        return handler(event)

    def generic_visit(self, event: Event) -> Any:
        """Handle an event kind that has no dedicated method."""
        return None
