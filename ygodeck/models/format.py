"""
Formats and their rulesets.

A format ("ruleset") decides the capacity of every deck part and which card
groups are restricted to a single card per deck. Rulesets are looked up in
the RULESETS table; adding a format means adding a table entry, never a new
branch in validation code.

INVARIANT: every ruleset defines limits for exactly the DEFAULT_DECK_PARTS,
in that order.
"""

from collections.abc import Mapping
from dataclasses import dataclass
from enum import Enum

from ygodeck.models.card_type import CardTypeGroup
from ygodeck.models.deck_part import DeckPart, DeckPartLimits


class Format(str, Enum):
    """Supported formats."""

    TCG = "tcg"
    OCG = "ocg"
    GOAT = "goat"
    SPEED_DUEL = "speed_duel"


@dataclass(frozen=True)
class Ruleset:
    """
    Deck construction rules of a format.

    Attributes:
        format: The format these rules belong to
        deck_parts: Capacity bounds per deck part, in wire order
        singleton_groups: Card groups allowed at most once per deck
    """

    format: Format
    deck_parts: Mapping[DeckPart, DeckPartLimits]
    singleton_groups: frozenset[CardTypeGroup]

    def limits(self, deck_part: DeckPart) -> DeckPartLimits:
        """
        Get capacity bounds of a deck part.

        Raises:
            KeyError: If the deck part is not part of this ruleset
        """
        return self.deck_parts[deck_part]


_STANDARD_DECK_PARTS: dict[DeckPart, DeckPartLimits] = {
    DeckPart.MAIN: DeckPartLimits(min=40, max=60),
    DeckPart.EXTRA: DeckPartLimits(min=0, max=15),
    DeckPart.SIDE: DeckPartLimits(min=0, max=15),
}

_SPEED_DUEL_DECK_PARTS: dict[DeckPart, DeckPartLimits] = {
    DeckPart.MAIN: DeckPartLimits(min=20, max=30),
    DeckPart.EXTRA: DeckPartLimits(min=0, max=5),
    DeckPart.SIDE: DeckPartLimits(min=0, max=5),
}

SINGLETON_GROUPS = frozenset({CardTypeGroup.SKILL})

RULESETS: dict[Format, Ruleset] = {
    Format.TCG: Ruleset(Format.TCG, _STANDARD_DECK_PARTS, SINGLETON_GROUPS),
    Format.OCG: Ruleset(Format.OCG, _STANDARD_DECK_PARTS, SINGLETON_GROUPS),
    Format.GOAT: Ruleset(Format.GOAT, _STANDARD_DECK_PARTS, SINGLETON_GROUPS),
    Format.SPEED_DUEL: Ruleset(Format.SPEED_DUEL, _SPEED_DUEL_DECK_PARTS, SINGLETON_GROUPS),
}

DEFAULT_FORMAT = Format.TCG


def get_ruleset(format: Format) -> Ruleset:
    """
    Get the ruleset of a format.

    Raises:
        KeyError: If the format has no ruleset. Passing an unknown format
            is a programming error, not a recoverable condition.
    """
    return RULESETS[format]
