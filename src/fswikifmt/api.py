#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/fswikifmt/api.py
"""High-level entry points for parsing and formatting FSWiki documents.

Every function here accepts a document as ``str`` text, raw ``bytes``, a
:class:`pathlib.Path`, or an open file object. A ``str`` is always treated
as document text; pass a ``Path`` to read a file.

Keyword arguments matching option fields are split between the parser
and the formatter options by field name, so

    >>> format_document(Path("page.wiki"), table_align="left", encoding="euc-jp")

is shorthand for passing both option objects explicitly.

"""

from __future__ import annotations

import logging
from dataclasses import fields
from pathlib import Path
from typing import IO, Any, Optional, Union

from fswikifmt.events import Event
from fswikifmt.exceptions import ValidationError
from fswikifmt.options.fswiki import FswikiFormatOptions, FswikiParserOptions
from fswikifmt.parsers.base import ParserInput
from fswikifmt.parsers.fswiki import FswikiParser
from fswikifmt.renderers.fswiki import FswikiRenderer
from fswikifmt.utils.io_utils import write_content

logger = logging.getLogger(__name__)


def _split_kwargs(
    options: Optional[FswikiFormatOptions],
    parser_options: Optional[FswikiParserOptions],
    kwargs: dict[str, Any],
) -> tuple[FswikiFormatOptions, FswikiParserOptions]:
    """Merge keyword overrides into the formatter and parser options.

    Raises
    ------
    ValidationError
        If a keyword matches no option field

    """
    options = options or FswikiFormatOptions()
    parser_options = parser_options or FswikiParserOptions()

    format_fields = {f.name for f in fields(FswikiFormatOptions)}
    parser_fields = {f.name for f in fields(FswikiParserOptions)}
    format_kwargs = {}
    parser_kwargs = {}
    for key, value in kwargs.items():
        if key in format_fields:
            format_kwargs[key] = value
        elif key in parser_fields:
            parser_kwargs[key] = value
        else:
            raise ValidationError(f"Unknown option: {key}", parameter_name=key, parameter_value=value)

    if format_kwargs:
        options = options.create_updated(**format_kwargs)
    if parser_kwargs:
        parser_options = parser_options.create_updated(**parser_kwargs)
    return options, parser_options


def load_document_text(source: ParserInput, parser_options: Optional[FswikiParserOptions] = None) -> str:
    """Read a document source into text without parsing it.

    Parameters
    ----------
    source : str, bytes, Path, IO[bytes] or IO[str]
        Document source
    parser_options : FswikiParserOptions, optional
        Decoding options for byte input

    Returns
    -------
    str
        Decoded document text

    Raises
    ------
    FileError
        If the source cannot be read or decoded

    """
    return FswikiParser(parser_options)._load_text_content(source)


def parse_events(
    source: ParserInput,
    *,
    parser_options: Optional[FswikiParserOptions] = None,
    **kwargs: Any,
) -> list[Event]:
    """Parse a document into its event stream.

    Parameters
    ----------
    source : str, bytes, Path, IO[bytes] or IO[str]
        Document source
    parser_options : FswikiParserOptions, optional
        Decoding options for byte input
    kwargs : Any
        Individual parser option overrides

    Returns
    -------
    list of Event
        Balanced event stream

    Examples
    --------
    >>> [e.kind.value for e in parse_events("* item")]
    ['unordered_list_open', 'list_item_open', 'inline', 'list_item_close', 'unordered_list_close']

    """
    _, parser_options = _split_kwargs(None, parser_options, kwargs)
    return FswikiParser(parser_options).parse(source)


def format_events(events: list[Event], options: Optional[FswikiFormatOptions] = None, **kwargs: Any) -> str:
    """Render an event stream as canonical FSWiki text.

    Parameters
    ----------
    events : list of Event
        Balanced event stream
    options : FswikiFormatOptions, optional
        Table layout options
    kwargs : Any
        Individual formatter option overrides

    Returns
    -------
    str
        Canonical document text

    """
    options, _ = _split_kwargs(options, None, kwargs)
    return FswikiRenderer(options).render_to_string(events)


def format_text(text: str, options: Optional[FswikiFormatOptions] = None, **kwargs: Any) -> str:
    """Format FSWiki text into its canonical form.

    Parameters
    ----------
    text : str
        Document text
    options : FswikiFormatOptions, optional
        Table layout options
    kwargs : Any
        Individual formatter option overrides (``table_align``,
        ``table_insert_space``)

    Returns
    -------
    str
        Canonical document text

    Examples
    --------
    >>> format_text("!Title\\n\\nSome '''bold''' here")
    "! Title\\n\\nSome'''bold'''here\\n"
    >>> format_text(",a,bb\\n,ccc,d")
    ',  a,bb\\n,ccc, d\\n'

    """
    options, _ = _split_kwargs(options, None, kwargs)
    events = FswikiParser().parse(text)
    return FswikiRenderer(options).render_to_string(events)


def format_document(
    source: ParserInput,
    options: Optional[FswikiFormatOptions] = None,
    *,
    parser_options: Optional[FswikiParserOptions] = None,
    output: Union[str, Path, IO[bytes], IO[str], None] = None,
    **kwargs: Any,
) -> str:
    """Read, parse and format a document.

    Parameters
    ----------
    source : str, bytes, Path, IO[bytes] or IO[str]
        Document source
    options : FswikiFormatOptions, optional
        Table layout options
    parser_options : FswikiParserOptions, optional
        Decoding options for byte input
    output : str, Path, IO[bytes], IO[str] or None, optional
        When given, the formatted text is also written there
    kwargs : Any
        Individual option overrides, split between formatter and parser
        options by field name

    Returns
    -------
    str
        Canonical document text

    Raises
    ------
    FileError
        If the source cannot be read
    OutputWriteError
        If ``output`` cannot be written

    """
    options, parser_options = _split_kwargs(options, parser_options, kwargs)
    events = FswikiParser(parser_options).parse(source)
    formatted = FswikiRenderer(options).render_to_string(events)
    if output is not None:
        write_content(formatted, output)
    return formatted


def check_document(
    source: ParserInput,
    options: Optional[FswikiFormatOptions] = None,
    *,
    parser_options: Optional[FswikiParserOptions] = None,
    **kwargs: Any,
) -> bool:
    """Report whether a document is already in canonical form.

    Parameters
    ----------
    source : str, bytes, Path, IO[bytes] or IO[str]
        Document source
    options : FswikiFormatOptions, optional
        Table layout options the canonical form is computed with
    parser_options : FswikiParserOptions, optional
        Decoding options for byte input
    kwargs : Any
        Individual option overrides

    Returns
    -------
    bool
        True when formatting would not change the document

    """
    options, parser_options = _split_kwargs(options, parser_options, kwargs)
    text = load_document_text(source, parser_options)
    formatted = format_text(text, options)
    logger.debug(f"Canonical check: {'unchanged' if formatted == text else 'changed'}")
    return formatted == text
