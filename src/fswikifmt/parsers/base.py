#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/fswikifmt/parsers/base.py
"""Base class for document parsers.

The BaseParser owns everything that happens before markup is interpreted:
validating the options object and turning the caller's input (text, bytes,
a path or a file object) into a single string. Reading is the only step
of the pipeline that can fail.

"""

from __future__ import annotations

import builtins
import logging
from abc import ABC, abstractmethod
from pathlib import Path
from typing import IO, Union

from fswikifmt.events import Event
from fswikifmt.exceptions import FileAccessError, FileNotFoundError, InvalidOptionsError, ValidationError
from fswikifmt.options.fswiki import FswikiParserOptions
from fswikifmt.utils.encoding import decode_text

logger = logging.getLogger(__name__)

ParserInput = Union[str, bytes, Path, IO[bytes], IO[str]]


class BaseParser(ABC):
    """Abstract base class for parsers producing an event stream.

    Parameters
    ----------
    options : FswikiParserOptions or None, default = None
        Input decoding options. If None, default options are used.

    Notes
    -----
    ``parse`` accepts:
    - str: the document text itself (never interpreted as a path)
    - bytes: raw document bytes, decoded per the options
    - Path: a file to read
    - IO[bytes] or IO[str]: an open file object, read to the end

    """

    def __init__(self, options: FswikiParserOptions | None = None):
        """Initialize the parser with optional configuration."""
        self.options: FswikiParserOptions = options or FswikiParserOptions()

    @staticmethod
    def _validate_options_type(options: object, expected_type: type, parser_name: str) -> None:
        """Validate that options are of the correct type for this parser.

        Raises
        ------
        InvalidOptionsError
            If options are not None and not an instance of expected_type

        """
        if options is not None and not isinstance(options, expected_type):
            raise InvalidOptionsError(
                component_name=parser_name,
                expected_type=expected_type,
                received_type=type(options),
            )

    @abstractmethod
    def parse(self, input_data: ParserInput) -> list[Event]:
        """Parse the input document into an event stream.

        Parameters
        ----------
        input_data : str, bytes, Path, IO[bytes] or IO[str]
            The document to parse

        Returns
        -------
        list of Event
            The document's event stream

        Raises
        ------
        FileError
            If the input cannot be read

        """
        raise NotImplementedError

    def _decode(self, data: bytes) -> str:
        return decode_text(
            data,
            encoding=self.options.encoding,
            detect=self.options.detect_encoding,
            fallback_encodings=self.options.fallback_encodings,
            confidence_threshold=self.options.confidence_threshold,
        )

    def _load_text_content(self, input_data: ParserInput) -> str:
        """Load document text from any supported input type.

        Parameters
        ----------
        input_data : str, bytes, Path, IO[bytes] or IO[str]
            Input data to load

        Returns
        -------
        str
            Document text

        Raises
        ------
        FileNotFoundError
            If a path does not exist
        FileAccessError
            If a path or stream cannot be read, or its bytes cannot be
            decoded with a forced encoding
        ValidationError
            If the input type is not supported

        """
        if isinstance(input_data, str):
            return input_data
        if isinstance(input_data, bytes):
            return self._decode_or_raise(input_data, "<bytes>")
        if isinstance(input_data, Path):
            try:
                data = input_data.read_bytes()
            except builtins.FileNotFoundError as e:
                raise FileNotFoundError(str(input_data), original_error=e) from e
            except OSError as e:
                raise FileAccessError(str(input_data), original_error=e) from e
            return self._decode_or_raise(data, str(input_data))
        if hasattr(input_data, "read"):
            name = str(getattr(input_data, "name", "<stream>"))
            try:
                content = input_data.read()
            except OSError as e:
                raise FileAccessError(name, original_error=e) from e
            if isinstance(content, bytes):
                return self._decode_or_raise(content, name)
            return content
        raise ValidationError(
            f"Unsupported input type: {type(input_data).__name__}",
            parameter_name="input_data",
            parameter_value=input_data,
        )

    def _decode_or_raise(self, data: bytes, name: str) -> str:
        logger.debug(f"Decoding {len(data)} bytes from {name}")
        try:
            return self._decode(data)
        except (UnicodeDecodeError, LookupError) as e:
            raise FileAccessError(name, message=f"Cannot decode {name} as {self.options.encoding}: {e}") from e
