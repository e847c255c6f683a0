"""
SpOnGiFy - Exceptions
=====================
"""


class SpongifyError(Exception):
    """Base class for errors raised by spongify."""


class SpongifyIOError(SpongifyError):
    """Reading input or delivering output failed."""
