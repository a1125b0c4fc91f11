#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/fswikifmt/logging_utils.py
"""Logging setup for the fswikifmt command-line interface.

The CLI formats many documents per run, possibly in worker processes, so
every log record carries the name of the document being processed when
there is one. ``document_context`` sets that name for the current context
and ``DocumentFilter`` copies it onto records; the console format prints it
in front of the message::

    DEBUG: docs/page.wiki: 42 events, changed=True

Records logged outside any document (option and config handling) print
without the prefix.
"""

from __future__ import annotations

import logging
import sys
from contextlib import contextmanager
from contextvars import ContextVar
from typing import Iterator, Optional

CONSOLE_FORMAT = "%(levelname)s: %(document_prefix)s%(message)s"
TRACE_FORMAT = "[%(asctime)s] [%(levelname)s] [%(name)s] %(document_prefix)s%(message)s"
TRACE_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

_current_document: ContextVar[Optional[str]] = ContextVar("fswikifmt_document", default=None)


def current_document() -> Optional[str]:
    """Return the name of the document being processed, if any."""
    return _current_document.get()


@contextmanager
def document_context(name: str) -> Iterator[None]:
    """Tag log records emitted inside the block with a document name.

    Parameters
    ----------
    name : str
        Path or display name of the document

    Examples
    --------
    >>> with document_context("page.wiki"):
    ...     current_document()
    'page.wiki'

    """
    token = _current_document.set(name)
    try:
        yield
    finally:
        _current_document.reset(token)


class DocumentFilter(logging.Filter):
    """Add ``document`` and ``document_prefix`` attributes to log records."""

    def filter(self, record: logging.LogRecord) -> bool:
        document = _current_document.get()
        record.document = document
        record.document_prefix = f"{document}: " if document else ""
        return True


def resolve_log_level(log_level: int | str) -> int:
    """Turn a level name such as ``"debug"`` into its numeric value.

    Unknown names resolve to ``logging.WARNING``.
    """
    if isinstance(log_level, int):
        return log_level
    return getattr(logging, str(log_level).upper(), logging.WARNING)


def _make_handler(handler: logging.Handler, level: int, formatter: logging.Formatter) -> logging.Handler:
    handler.setLevel(level)
    handler.setFormatter(formatter)
    handler.addFilter(DocumentFilter())
    return handler


def configure_logging(
    log_level: int | str,
    log_file: Optional[str] = None,
    trace_mode: bool = False,
) -> logging.Logger:
    """Configure root logging handlers for the CLI.

    Log output goes to stderr so it never mixes with formatted documents
    written to stdout. Each message is prefixed with the current document
    name (see :func:`document_context`).

    Parameters
    ----------
    log_level : int | str
        Numeric logging level or string name (e.g., "INFO").
    log_file : str, optional
        Path to a log file that receives the same records.
    trace_mode : bool, default False
        Log at DEBUG with timestamps and logger names.

    Returns
    -------
    logging.Logger
        The configured root logger instance.

    """
    resolved_level = logging.DEBUG if trace_mode else resolve_log_level(log_level)

    root_logger = logging.getLogger()
    root_logger.setLevel(resolved_level)
    root_logger.handlers.clear()

    if trace_mode:
        formatter = logging.Formatter(TRACE_FORMAT, datefmt=TRACE_DATE_FORMAT)
    else:
        formatter = logging.Formatter(CONSOLE_FORMAT)

    root_logger.addHandler(_make_handler(logging.StreamHandler(sys.stderr), resolved_level, formatter))

    if log_file:
        try:
            file_handler = logging.FileHandler(log_file, mode="a", encoding="utf-8")
        except OSError as exc:
            root_logger.warning("Could not create log file %s: %s", log_file, exc)
        else:
            root_logger.addHandler(_make_handler(file_handler, resolved_level, formatter))
            root_logger.info("Logging to file: %s", log_file)

    return root_logger
