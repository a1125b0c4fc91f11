#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/fswikifmt/options/base.py
"""Base classes for parser and renderer options.

Options are frozen dataclasses. Each field may carry ``metadata`` with a
``help`` string and optional ``choices`` or ``cli_name``; the command-line
interface builds its flags from that metadata.
"""

from __future__ import annotations

import sys
from dataclasses import dataclass, fields, replace
from typing import Any

if sys.version_info >= (3, 11):
    from typing import Self
else:
    from typing_extensions import Self


@dataclass(frozen=True)
class CloneFrozenMixin:
    """Mixin providing frozen dataclass cloning capabilities."""

    def create_updated(self, **kwargs: Any) -> Self:
        """Create a new instance with updated field values.

        Parameters
        ----------
        **kwargs : Any
            Field names and their new values

        Returns
        -------
        Self
            New instance with specified fields updated

        """
        return replace(self, **kwargs)

    @classmethod
    def from_mapping(cls, values: dict[str, Any]) -> Self:
        """Build options from a mapping, ignoring keys that are not fields.

        Keys may use dashes instead of underscores, as configuration files
        often do.

        Parameters
        ----------
        values : dict
            Candidate field values

        Returns
        -------
        Self
            New options instance

        """
        names = {f.name for f in fields(cls)}
        kwargs = {}
        for key, value in values.items():
            name = key.replace("-", "_")
            if name in names:
                kwargs[name] = value
        return cls(**kwargs)


@dataclass(frozen=True)
class BaseRendererOptions(CloneFrozenMixin):
    """Base class for all renderer options.

    Notes
    -----
    Subclasses define format-specific rendering options as frozen dataclass fields.

    """

    def __post_init__(self) -> None:
        """Validate field values. Subclasses extend this."""
        pass


@dataclass(frozen=True)
class BaseParserOptions(CloneFrozenMixin):
    """Base class for all parser options.

    Notes
    -----
    Subclasses define format-specific parsing options as frozen dataclass fields.

    """

    def __post_init__(self) -> None:
        """Validate field values. Subclasses extend this."""
        pass
