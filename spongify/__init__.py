"""
SpOnGiFy
========
Alternate the case of text, LiKe ThIs.
"""

__version__ = "1.0.0"

from .alternator import Advance, CaseAlternator, spongify, spongify_lines
from .exceptions import SpongifyError, SpongifyIOError
from .styles import Style, StyleError, StyleKind

__all__ = [
    "Advance",
    "CaseAlternator",
    "spongify",
    "spongify_lines",
    "SpongifyError",
    "SpongifyIOError",
    "Style",
    "StyleError",
    "StyleKind",
]
