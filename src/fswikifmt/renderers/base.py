#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/fswikifmt/renderers/base.py
"""Base class for event stream renderers.

This module defines the abstract base class renderers inherit from. A
renderer consumes a complete event stream and produces text; writing that
text to a destination is shared here.

"""

from __future__ import annotations

from abc import ABC, abstractmethod
from pathlib import Path
from typing import IO, Union

from fswikifmt.events import Event
from fswikifmt.exceptions import InvalidOptionsError
from fswikifmt.options.base import BaseRendererOptions
from fswikifmt.utils.io_utils import write_content


class BaseRenderer(ABC):
    """Abstract base class for all event stream renderers.

    Parameters
    ----------
    options : BaseRendererOptions or None, default = None
        Format-specific rendering options

    """

    def __init__(self, options: BaseRendererOptions | None = None):
        """Initialize the renderer with optional configuration."""
        self.options = options

    @staticmethod
    def _validate_options_type(options: object, expected_type: type, renderer_name: str) -> None:
        """Validate that options are of the correct type for this renderer.

        Raises
        ------
        InvalidOptionsError
            If options are not None and not an instance of expected_type

        """
        if options is not None and not isinstance(options, expected_type):
            raise InvalidOptionsError(
                component_name=renderer_name,
                expected_type=expected_type,
                received_type=type(options),
            )

    @abstractmethod
    def render_to_string(self, events: list[Event]) -> str:
        """Render an event stream to a string.

        Parameters
        ----------
        events : list of Event
            Balanced event stream, as produced by a parser

        Returns
        -------
        str
            Rendered document

        """
        raise NotImplementedError

    def render(self, events: list[Event], output: Union[str, Path, IO[bytes], IO[str]]) -> None:
        """Render an event stream and write it to ``output``.

        Parameters
        ----------
        events : list of Event
            Balanced event stream
        output : str, Path, IO[bytes] or IO[str]
            File path or file-like object to write to

        Raises
        ------
        OutputWriteError
            If the output file cannot be written

        """
        write_content(self.render_to_string(events), output)
