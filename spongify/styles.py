"""
SpOnGiFy - Capitalization Styles
================================
The closed set of case styles and the parsing of ``--style`` arguments.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Dict, Tuple

from .exceptions import SpongifyError


class StyleError(SpongifyError, ValueError):
    """Raised when a style argument cannot be understood."""


class StyleKind(Enum):
    """How the case of each alphabetic character is chosen."""
    ALTERNATING = "alternating"
    LIKE_THIS = "like-this"
    RANDOM = "random"


ALTERNATING_KEYWORDS = {"alternating", "alternate"}
RANDOM_KEYWORD = "random"

# Upper first, then lower, forever.
ALTERNATING_PATTERN: Tuple[bool, ...] = (True, False)


def pattern_from_reference(reference: str) -> Tuple[bool, ...]:
    """
    Read the case pattern out of a reference string.

    Args:
        reference: Sample text such as ``"LiKe ThIs"``

    Returns:
        One boolean per alphabetic character, True meaning upper case
    """
    return tuple(char.isupper() for char in reference if char.isalpha())


@dataclass(frozen=True)
class Style:
    """A selected case style plus the data it carries."""

    kind: StyleKind
    reference: str = ""
    pattern: Tuple[bool, ...] = ()

    @classmethod
    def alternating(cls) -> "Style":
        return cls(StyleKind.ALTERNATING, pattern=ALTERNATING_PATTERN)

    @classmethod
    def random(cls) -> "Style":
        return cls(StyleKind.RANDOM)

    @classmethod
    def like_this(cls, reference: str) -> "Style":
        return cls(
            StyleKind.LIKE_THIS,
            reference=reference,
            pattern=pattern_from_reference(reference)
        )

    @classmethod
    def parse(cls, text: str) -> "Style":
        """
        Turn a ``--style`` argument into a Style.

        Keywords are matched case-insensitively: ``alternating`` (or
        ``alternate``) and anything containing ``random``. Every other
        string is taken as a reference for its case pattern.

        Raises:
            StyleError: If the argument is empty
        """
        if text is None or not text.strip():
            raise StyleError("style must not be empty")

        keyword = text.strip().lower()
        if keyword in ALTERNATING_KEYWORDS:
            return cls.alternating()
        if RANDOM_KEYWORD in keyword:
            return cls.random()
        return cls.like_this(text)

    @property
    def effective_pattern(self) -> Tuple[bool, ...]:
        """Pattern actually cycled through; a reference without letters falls back to alternating."""
        return self.pattern or ALTERNATING_PATTERN

    def __str__(self) -> str:
        if self.kind is StyleKind.LIKE_THIS:
            return self.reference
        return self.kind.value


# Styles shown by --list-styles, keyed by the argument that selects them.
NAMED_STYLES: Dict[str, str] = {
    "alternating": "Upper case first, toggling on every letter",
    "LiKe ThIs": "Same as alternating, spelled as a reference",
    "lIkE tHiS": "Lower case first, toggling on every letter",
    "random": "Each letter upper or lower at random",
}
