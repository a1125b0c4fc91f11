#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Constants and default values for fswikifmt.

This module centralizes the markup markers and default configuration values
used by the parser, the formatter and the command-line interface.

Constants are organized by category:
1. Type Definitions - Literal types
2. Block Markers - Line prefixes recognized by the parser
3. Inline Markers - Emphasis and strong delimiters
4. Formatter Defaults - Table layout options
5. Input Decoding - Encoding detection settings
6. CLI - Environment variables and configuration files
"""

from __future__ import annotations

from typing import Literal

# =============================================================================
# Type Definitions
# =============================================================================

TableAlign = Literal["left", "right"]
TABLE_ALIGN_CHOICES: tuple[str, ...] = ("left", "right")

# =============================================================================
# Block Markers
# =============================================================================

HEADING_MARKER = "!"
UNORDERED_LIST_MARKER = "*"
ORDERED_LIST_MARKER = "+"
PREFORMATTED_MARKER = " "
TABLE_MARKER = ","
COMMENT_MARKER = "//"
PLUGIN_OPEN_MARKER = "{{"
PLUGIN_CLOSE_MARKER = "}}"
TABLE_QUOTE = '"'

# Headings use 1-3 markers; stored levels are inverted (``!!!`` -> 1, ``!`` -> 3)
MAX_HEADING_MARKERS = 3
HEADING_LEVEL_BASE = 4

# Lists nest at most three levels deep
MAX_LIST_DEPTH = 3

# =============================================================================
# Inline Markers
# =============================================================================

STRONG_MARKER = "'''"
EMPHASIS_MARKER = "''"

# =============================================================================
# Formatter Defaults
# =============================================================================

DEFAULT_TABLE_ALIGN: TableAlign = "right"
DEFAULT_TABLE_INSERT_SPACE = False

# =============================================================================
# Input Decoding
# =============================================================================

DEFAULT_DETECT_ENCODING = True
DEFAULT_FALLBACK_ENCODINGS: tuple[str, ...] = ("utf-8", "utf-8-sig", "latin-1")
DEFAULT_CHARDET_SAMPLE_SIZE = 8192
DEFAULT_CHARDET_CONFIDENCE_THRESHOLD = 0.7

# =============================================================================
# CLI
# =============================================================================

ENV_PREFIX = "FSWIKIFMT_"
CONFIG_FILENAMES: tuple[str, ...] = (
    ".fswikifmt.toml",
    ".fswikifmt.yaml",
    ".fswikifmt.yml",
    ".fswikifmt.json",
)
PYPROJECT_SECTION = "fswikifmt"
STDIN_MARKER = "-"
