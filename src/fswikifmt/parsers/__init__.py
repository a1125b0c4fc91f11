#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/fswikifmt/parsers/__init__.py
"""Parsers turning FSWiki markup into an event stream."""

from fswikifmt.parsers.base import BaseParser
from fswikifmt.parsers.fswiki import FswikiParser, parse_inline, split_table_row

__all__ = ["BaseParser", "FswikiParser", "parse_inline", "split_table_row"]
