"""fswikifmt - A canonical formatter for FSWiki markup.

fswikifmt reads documents written in FSWiki wiki markup, parses them into a
flat stream of open/close events, and writes the stream back out in one
canonical layout: one space after heading and list markers, one blank line
between blocks, and tables padded so that their columns line up.

Formatting is idempotent. Running the formatter over its own output returns
the same text.

Key Features
------------
- Headings, nested ordered and unordered lists, preformatted blocks
- Tables with quoted cells and column alignment by display width
- Strong and emphasis inline markup
- Comments and plugin blocks preserved verbatim
- Encoding detection for byte input
- Command-line tool with in-place rewrite, check and diff modes

Examples
--------
Formatting text:

    >>> from fswikifmt import format_text
    >>> print(format_text("!Title\\n\\n,a,bb\\n,ccc,d"), end="")
    ! Title
    <BLANKLINE>
    ,  a,bb
    ,ccc, d

Working with the event stream:

    >>> from fswikifmt import parse_events, format_events
    >>> events = parse_events("* one\\n** two")
    >>> text = format_events(events, table_align="left")

"""

#  Copyright (c) 2025 Tom Villani, Ph.D.

import sys

if sys.version_info < (3, 10):
    raise ImportError(
        "fswikifmt requires Python 3.10 or later. "
        f"You are using Python {sys.version_info.major}.{sys.version_info.minor}."
    )

__version__ = "1.0.0"

from fswikifmt.api import (
    check_document,
    format_document,
    format_events,
    format_text,
    load_document_text,
    parse_events,
)
from fswikifmt.events import Event, EventKind, EventVisitor
from fswikifmt.exceptions import (
    ConfigError,
    FileAccessError,
    FileError,
    FileNotFoundError,
    FswikiFmtError,
    InvalidOptionsError,
    OutputWriteError,
    ValidationError,
)
from fswikifmt.options import FswikiFormatOptions, FswikiParserOptions
from fswikifmt.parsers import FswikiParser
from fswikifmt.renderers import FswikiRenderer

__all__ = [
    "__version__",
    "format_text",
    "format_document",
    "format_events",
    "parse_events",
    "check_document",
    "load_document_text",
    "Event",
    "EventKind",
    "EventVisitor",
    "FswikiParser",
    "FswikiRenderer",
    "FswikiFormatOptions",
    "FswikiParserOptions",
    "FswikiFmtError",
    "ValidationError",
    "InvalidOptionsError",
    "ConfigError",
    "FileError",
    "FileNotFoundError",
    "FileAccessError",
    "OutputWriteError",
]
