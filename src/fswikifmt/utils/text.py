#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/fswikifmt/utils/text.py
"""Text helpers shared by the parser and the formatter.

Column widths are measured in terminal cells rather than code points so
that tables containing East Asian wide characters still line up when
viewed in a monospace editor.
"""

from __future__ import annotations

from wcwidth import wcswidth, wcwidth


def display_width(text: str) -> int:
    """Return the number of terminal cells ``text`` occupies.

    Wide characters count as two cells and combining characters as zero.
    Control characters, which wcwidth reports as -1, count as zero.

    Parameters
    ----------
    text : str
        Text to measure

    Returns
    -------
    int
        Display width in cells

    Examples
    --------
    >>> display_width("abc")
    3
    >>> display_width("日本")
    4

    """
    width = wcswidth(text)
    if width >= 0:
        return width
    return sum(max(wcwidth(char), 0) for char in text)


def fill_left(text: str, width: int) -> str:
    """Pad ``text`` with spaces on the left up to ``width`` cells."""
    return " " * max(width - display_width(text), 0) + text


def fill_right(text: str, width: int) -> str:
    """Pad ``text`` with spaces on the right up to ``width`` cells."""
    return text + " " * max(width - display_width(text), 0)


def split_lines(text: str) -> list[str]:
    r"""Split document text into logical lines.

    Lines are separated by ``\n``; a ``\r`` left at the end of a line (from
    CRLF input) is dropped. A final line break does not produce an extra
    empty line, and other Unicode line separators are kept as content.

    Parameters
    ----------
    text : str
        Full document text

    Returns
    -------
    list of str
        Lines without their terminators

    Examples
    --------
    >>> split_lines("a\r\nb\n")
    ['a', 'b']
    >>> split_lines("")
    []

    """
    if not text:
        return []
    lines = text.split("\n")
    if lines[-1] == "":
        lines.pop()
    return [line[:-1] if line.endswith("\r") else line for line in lines]
