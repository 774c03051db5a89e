"""
Debug inspection of continuation trees.
"""

from .registry import DebugRegistry
from .render import render_state, status_of

__all__ = [
    "DebugRegistry",
    "render_state",
    "status_of",
]
