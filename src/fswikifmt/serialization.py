#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/fswikifmt/serialization.py
"""JSON serialization and deserialization for event streams.

This module converts event streams to plain dictionaries and JSON and back,
mainly for inspecting what the parser produced (``fswikifmt --dump-events``)
and for writing event-level test fixtures.

Only fields that differ from their defaults are written, so a dump stays
readable:

    {"kind": "heading_open", "level": 3}
    {"kind": "inline", "children": [{"kind": "text", "content": "Title"}]}

Examples
--------
Serialize a parsed document:

    >>> from fswikifmt.parsers.fswiki import FswikiParser
    >>> events = FswikiParser().parse("!Title")
    >>> print(events_to_json(events, indent=2))

Load it back:

    >>> events = json_to_events(json_str)

"""

from __future__ import annotations

import json
import logging
from typing import Any

from fswikifmt.events import Event, EventKind

logger = logging.getLogger(__name__)

SCHEMA_VERSION = 1

_SCALAR_FIELDS = ("level", "content", "tag", "argument")


def event_to_dict(event: Event) -> dict[str, Any]:
    """Convert one event (and its inline children) to a dictionary.

    Parameters
    ----------
    event : Event
        Event to convert

    Returns
    -------
    dict
        ``{"kind": ...}`` plus every field that is not at its default

    """
    result: dict[str, Any] = {"kind": event.kind.value}
    for name in _SCALAR_FIELDS:
        value = getattr(event, name)
        if value:
            result[name] = value
    if event.children:
        result["children"] = [event_to_dict(child) for child in event.children]
    return result


def events_to_dicts(events: list[Event]) -> list[dict[str, Any]]:
    """Convert an event stream to a list of dictionaries."""
    return [event_to_dict(event) for event in events]


def dict_to_event(data: dict[str, Any]) -> Event:
    """Convert a dictionary produced by :func:`event_to_dict` back to an event.

    Parameters
    ----------
    data : dict
        Dictionary representation of an event

    Returns
    -------
    Event
        Reconstructed event

    Raises
    ------
    ValueError
        If ``kind`` is missing or unknown

    Examples
    --------
    >>> dict_to_event({"kind": "text", "content": "Hello"}).content
    'Hello'

    """
    kind_value = data.get("kind")
    if not kind_value:
        raise ValueError("Dictionary must contain 'kind' field")
    try:
        kind = EventKind(kind_value)
    except ValueError as e:
        raise ValueError(f"Unknown event kind: {kind_value}") from e

    return Event(
        kind,
        level=int(data.get("level", 0)),
        content=str(data.get("content", "")),
        tag=str(data.get("tag", "")),
        argument=str(data.get("argument", "")),
        children=[dict_to_event(child) for child in data.get("children", [])],
    )


def dicts_to_events(data: list[dict[str, Any]]) -> list[Event]:
    """Convert a list of dictionaries back to an event stream."""
    return [dict_to_event(item) for item in data]


def events_to_json(events: list[Event], indent: int | None = None) -> str:
    """Serialize an event stream to a JSON string with schema versioning.

    Parameters
    ----------
    events : list of Event
        Event stream to serialize
    indent : int or None, default = None
        Number of spaces for indentation (None for compact format)

    Returns
    -------
    str
        ``{"schema_version": 1, "events": [...]}`` as JSON

    """
    payload = {"schema_version": SCHEMA_VERSION, "events": events_to_dicts(events)}
    # Keep non-ASCII document text readable
    return json.dumps(payload, indent=indent, ensure_ascii=False)


def json_to_events(json_str: str) -> list[Event]:
    """Deserialize a JSON string produced by :func:`events_to_json`.

    A bare JSON list of event dictionaries is accepted as well.

    Parameters
    ----------
    json_str : str
        JSON text

    Returns
    -------
    list of Event
        Reconstructed event stream

    Raises
    ------
    ValueError
        If the schema version is unsupported or an event is invalid
    json.JSONDecodeError
        If the JSON text is malformed

    """
    data = json.loads(json_str)
    if isinstance(data, list):
        return dicts_to_events(data)

    schema_version = data.get("schema_version", SCHEMA_VERSION)
    if schema_version != SCHEMA_VERSION:
        raise ValueError(
            f"Unsupported schema version: {schema_version}. "
            f"This version of fswikifmt supports schema version {SCHEMA_VERSION} only."
        )
    events = dicts_to_events(data.get("events", []))
    logger.debug(f"Loaded {len(events)} events from JSON")
    return events
