#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Options classes for fswikifmt parsing and formatting."""

from fswikifmt.options.base import BaseParserOptions, BaseRendererOptions, CloneFrozenMixin
from fswikifmt.options.fswiki import FswikiFormatOptions, FswikiParserOptions

__all__ = [
    "BaseParserOptions",
    "BaseRendererOptions",
    "CloneFrozenMixin",
    "FswikiFormatOptions",
    "FswikiParserOptions",
]
