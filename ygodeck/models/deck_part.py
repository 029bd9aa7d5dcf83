"""
Deck partitions.

A deck is always split into the same fixed partitions. Their iteration
order (Main, Extra, Side) is part of every deck code format, so anything
that walks a deck part by part must use DEFAULT_DECK_PARTS.
"""

from dataclasses import dataclass
from enum import Enum


class DeckPart(str, Enum):
    """Fixed sections of a deck."""

    MAIN = "main"
    EXTRA = "extra"
    SIDE = "side"


DEFAULT_DECK_PARTS: tuple[DeckPart, ...] = (DeckPart.MAIN, DeckPart.EXTRA, DeckPart.SIDE)


@dataclass(frozen=True, slots=True)
class DeckPartLimits:
    """
    Capacity bounds of a deck part under one format.

    Attributes:
        min: Fewest cards a legal deck part may hold
        max: Most cards a deck part may hold
    """

    min: int
    max: int

    def is_full(self, count: int) -> bool:
        """True if no further card fits into a part holding `count` cards."""
        return count >= self.max
