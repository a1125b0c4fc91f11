#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/fswikifmt/utils/__init__.py
"""Utility modules for fswikifmt.

This package contains helpers for decoding input, measuring text and
writing output.
"""

from fswikifmt.utils.encoding import decode_text, detect_encoding
from fswikifmt.utils.io_utils import write_content
from fswikifmt.utils.text import display_width, fill_left, fill_right, split_lines

__all__ = [
    "decode_text",
    "detect_encoding",
    "display_width",
    "fill_left",
    "fill_right",
    "split_lines",
    "write_content",
]
