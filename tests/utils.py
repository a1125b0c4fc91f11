"""Helpers shared by the fswikifmt tests."""

from fswikifmt.events import Event, EventKind


def kinds(events: list[Event]) -> list[str]:
    """Return the kind values of an event stream, for compact assertions."""
    return [event.kind.value for event in events]


def inline_texts(events: list[Event]) -> list[str]:
    """Return the concatenated TEXT content of every INLINE event."""
    result = []
    for event in events:
        if event.kind is EventKind.INLINE:
            result.append("".join(child.content for child in event.children if child.kind is EventKind.TEXT))
    return result


def events_of(events: list[Event], kind: EventKind) -> list[Event]:
    """Return the events of one kind, in stream order."""
    return [event for event in events if event.kind is kind]
