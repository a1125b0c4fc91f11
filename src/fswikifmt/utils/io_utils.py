#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/fswikifmt/utils/io_utils.py
"""I/O utilities for handling output destinations."""

from __future__ import annotations

import io
from io import StringIO
from pathlib import Path
from typing import IO, Union, cast

from fswikifmt.exceptions import OutputWriteError


def _is_binary_stream(output: object) -> bool:
    if isinstance(output, io.TextIOBase):
        return False
    if isinstance(output, (io.BufferedIOBase, io.RawIOBase)):
        return True
    mode = getattr(output, "mode", "")
    return isinstance(mode, str) and "b" in mode


def write_content(
    content: str,
    output: Union[str, Path, IO[bytes], IO[str], None],
    encoding: str = "utf-8",
) -> StringIO | None:
    """Write formatted text to an output destination.

    Parameters
    ----------
    content : str
        Text to write
    output : str, Path, IO[bytes], IO[str], or None
        Output destination. Can be:
        - None: content is returned as a StringIO
        - str or Path: content is written to the file at that path
        - IO[bytes]: content is encoded and written
        - IO[str]: content is written as-is
    encoding : str, default "utf-8"
        Encoding for file paths and binary streams

    Returns
    -------
    StringIO or None
        A StringIO holding ``content`` when ``output`` is None, otherwise None

    Raises
    ------
    OutputWriteError
        If writing to a file path fails
    TypeError
        If ``output`` is not a supported destination

    Examples
    --------
    >>> write_content("! Title\\n", None).read()
    '! Title\\n'

    """
    if output is None:
        return StringIO(content)

    if isinstance(output, (str, Path)):
        output_path = Path(output)
        try:
            # newline="" keeps line breaks exactly as formatted
            with open(output_path, "w", encoding=encoding, newline="") as handle:
                handle.write(content)
        except OSError as e:
            raise OutputWriteError(str(output_path), original_error=e) from e
        return None

    if hasattr(output, "write"):
        if _is_binary_stream(output):
            cast(IO[bytes], output).write(content.encode(encoding))
        else:
            cast(IO[str], output).write(content)
        return None

    raise TypeError(f"Unsupported output type: {type(output)}")
