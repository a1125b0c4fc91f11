#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/fswikifmt/renderers/__init__.py
"""Renderers turning an event stream back into text."""

from fswikifmt.renderers.base import BaseRenderer
from fswikifmt.renderers.fswiki import FswikiRenderer, render_comment, render_inline, render_plugin

__all__ = ["BaseRenderer", "FswikiRenderer", "render_comment", "render_inline", "render_plugin"]
