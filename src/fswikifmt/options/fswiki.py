#  Copyright (c) 2025 Tom Villani, Ph.D.
# fswikifmt/options/fswiki.py
"""Configuration options for FSWiki parsing and formatting.

The markup itself is interpreted without options; the parser options only
control how byte input is decoded into text. The renderer options control
the layout of tables in the canonical output.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional

from fswikifmt.constants import (
    DEFAULT_CHARDET_CONFIDENCE_THRESHOLD,
    DEFAULT_DETECT_ENCODING,
    DEFAULT_FALLBACK_ENCODINGS,
    DEFAULT_TABLE_ALIGN,
    DEFAULT_TABLE_INSERT_SPACE,
    TABLE_ALIGN_CHOICES,
    TableAlign,
)
from fswikifmt.exceptions import ValidationError
from fswikifmt.options.base import BaseParserOptions, BaseRendererOptions


@dataclass(frozen=True)
class FswikiFormatOptions(BaseRendererOptions):
    """Configuration options for canonical FSWiki output.

    Parameters
    ----------
    table_align : {"left", "right"}, default "right"
        How table cells are padded to their column width. Right alignment
        pads on the left; left alignment pads on the right and never pads
        the last cell of a row.
    table_insert_space : bool, default False
        Whether to insert a space after every cell except the last one of a
        row, before the next comma.

    Examples
    --------
    Left-aligned tables with spacing:
        >>> options = FswikiFormatOptions(table_align="left", table_insert_space=True)
        >>> renderer = FswikiRenderer(options)

    """

    table_align: TableAlign = field(
        default=DEFAULT_TABLE_ALIGN,
        metadata={
            "help": "Table cell alignment: left or right",
            "choices": TABLE_ALIGN_CHOICES,
        },
    )
    table_insert_space: bool = field(
        default=DEFAULT_TABLE_INSERT_SPACE,
        metadata={
            "help": "Insert a space after each non-final table cell",
        },
    )

    def __post_init__(self) -> None:
        """Validate the table alignment value.

        Raises
        ------
        ValidationError
            If ``table_align`` is not one of the supported values.

        """
        super().__post_init__()
        if self.table_align not in TABLE_ALIGN_CHOICES:
            raise ValidationError(
                f"table_align must be one of {', '.join(TABLE_ALIGN_CHOICES)}, got {self.table_align!r}",
                parameter_name="table_align",
                parameter_value=self.table_align,
            )


@dataclass(frozen=True)
class FswikiParserOptions(BaseParserOptions):
    """Configuration options for reading FSWiki documents.

    Parameters
    ----------
    encoding : str or None, default None
        Encoding used to decode byte input. When None the encoding is
        detected.
    detect_encoding : bool, default True
        Whether to try chardet detection before the fallback encodings.
    fallback_encodings : tuple of str
        Encodings tried in order when detection is disabled or inconclusive.
    confidence_threshold : float, default 0.7
        Minimum chardet confidence for a detected encoding to be used.

    """

    encoding: Optional[str] = field(
        default=None,
        metadata={"help": "Decode input with this encoding instead of detecting it"},
    )
    detect_encoding: bool = field(
        default=DEFAULT_DETECT_ENCODING,
        metadata={"help": "Detect the input encoding with chardet"},
    )
    fallback_encodings: tuple[str, ...] = field(
        default=DEFAULT_FALLBACK_ENCODINGS,
        metadata={"help": "Encodings tried in order when detection fails"},
    )
    confidence_threshold: float = field(
        default=DEFAULT_CHARDET_CONFIDENCE_THRESHOLD,
        metadata={"help": "Minimum chardet confidence for a detected encoding"},
    )

    def __post_init__(self) -> None:
        """Validate the detection threshold.

        Raises
        ------
        ValidationError
            If ``confidence_threshold`` is outside 0.0-1.0.

        """
        super().__post_init__()
        if not 0.0 <= self.confidence_threshold <= 1.0:
            raise ValidationError(
                f"confidence_threshold must be between 0.0 and 1.0, got {self.confidence_threshold}",
                parameter_name="confidence_threshold",
                parameter_value=self.confidence_threshold,
            )
