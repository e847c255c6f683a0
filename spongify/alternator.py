"""
SpOnGiFy - Case Alternator
==========================
Recases the alphabetic characters of a text stream according to a Style.
Non-alphabetic characters pass through untouched and, by default, do not
move the cursor.
"""

import logging
import random
from enum import Enum
from typing import Iterable, Iterator, Optional

from .styles import Style, StyleKind

logger = logging.getLogger("spongify.alternator")


def _recase(char: str, upper: bool) -> str:
    """Recase a single character, keeping it as-is if the mapping is not one-to-one."""
    mapped = char.upper() if upper else char.lower()
    if len(mapped) != 1:
        return char
    return mapped


class Advance(Enum):
    """Which characters move the cursor."""
    LETTERS = "letters"
    NON_WHITESPACE = "non-space"
    EVERY_CHARACTER = "all"

    def counts(self, char: str) -> bool:
        if self is Advance.LETTERS:
            return char.isalpha()
        if self is Advance.NON_WHITESPACE:
            return not char.isspace()
        return True


class CaseAlternator:
    """
    Stateful, single-pass case transform.

    One instance holds one cursor. Feeding it several chunks continues the
    alternation where the previous chunk stopped; call ``reset()`` (or build
    a new instance) before an unrelated input.

    Args:
        style: The style to apply
        rng: Source of randomness for the random style; anything with a
            ``random()`` method returning a float in [0, 1)
        advance: Which characters move the cursor; only letters by default.
            The other modes still recase letters only.
    """

    def __init__(
        self,
        style: Style,
        rng: Optional[random.Random] = None,
        advance: Advance = Advance.LETTERS
    ):
        self.style = style
        self.advance = advance
        self.rng = rng or random.Random()
        self.pattern = style.effective_pattern
        self.cursor = 0

        if style.kind is StyleKind.LIKE_THIS and not style.pattern:
            logger.debug(f"Reference {style.reference!r} has no letters, alternating instead")

    def reset(self):
        """Move the cursor back to the start of the pattern."""
        self.cursor = 0

    def next_is_upper(self) -> bool:
        """Decide the case of the next alphabetic character and advance."""
        if self.style.kind is StyleKind.RANDOM:
            upper = self.rng.random() < 0.5
        else:
            upper = self.pattern[self.cursor % len(self.pattern)]
        self.cursor += 1
        return upper

    def transform(self, chars: Iterable[str]) -> Iterator[str]:
        """Lazily yield the recased characters, one per input character."""
        for char in chars:
            if char.isalpha():
                yield _recase(char, self.next_is_upper())
                continue
            if self.advance.counts(char):
                self.cursor += 1
            yield char

    def apply(self, text: str) -> str:
        """Recase a whole string."""
        return "".join(self.transform(text))

    def __call__(self, text: str) -> str:
        return self.apply(text)


def spongify(
    text: str,
    style: Optional[Style] = None,
    rng: Optional[random.Random] = None,
    advance: Advance = Advance.LETTERS
) -> str:
    """Recase ``text`` with a fresh alternator (alternating by default)."""
    return CaseAlternator(style or Style.alternating(), rng=rng, advance=advance).apply(text)


def spongify_lines(
    lines: Iterable[str],
    alternator: CaseAlternator,
    reset_per_line: bool = True
) -> Iterator[str]:
    """
    Recase a stream of lines one at a time.

    Args:
        lines: Lines without their line terminators
        alternator: The alternator whose cursor is used
        reset_per_line: Start every line at the beginning of the pattern;
            when False the cursor carries over from line to line

    Yields:
        Each recased line as soon as its input line has been read
    """
    for line in lines:
        if reset_per_line:
            alternator.reset()
        yield alternator.apply(line)
