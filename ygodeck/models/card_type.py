"""
Card types and the deck parts they may be placed in.

Eligibility is plain data: a card type carries the set of deck parts it is
allowed in, and "may this card go into part P" is a membership test.

CARD_TYPES maps the type names used by the public card data API to the
CardType instances the rest of the package works with.
"""

from dataclasses import dataclass
from enum import Enum

from ygodeck.models.deck_part import DeckPart


class CardTypeGroup(str, Enum):
    """Coarse grouping of card types."""

    MONSTER = "monster"
    SPELL = "spell"
    TRAP = "trap"
    SKILL = "skill"


@dataclass(frozen=True, slots=True)
class CardType:
    """
    A card type.

    Attributes:
        name: Type name as it appears in card data (e.g., "Fusion Monster")
        group: Coarse group of the type
        sort_group: Ordinal used when sorting cards by type
        deck_parts: Deck parts cards of this type may be placed in
    """

    name: str
    group: CardTypeGroup
    sort_group: int
    deck_parts: frozenset[DeckPart]


MAIN_DECK_PARTS = frozenset({DeckPart.MAIN, DeckPart.SIDE})
EXTRA_DECK_PARTS = frozenset({DeckPart.EXTRA})

_MAIN_DECK_MONSTER_TYPES = (
    "Normal Monster",
    "Normal Tuner Monster",
    "Effect Monster",
    "Tuner Monster",
    "Flip Monster",
    "Flip Effect Monster",
    "Flip Tuner Effect Monster",
    "Spirit Monster",
    "Union Effect Monster",
    "Gemini Monster",
    "Toon Monster",
    "Ritual Monster",
    "Ritual Effect Monster",
    "Pendulum Normal Monster",
    "Pendulum Effect Monster",
    "Pendulum Tuner Effect Monster",
    "Pendulum Flip Effect Monster",
    "Pendulum Effect Ritual Monster",
)

_EXTRA_DECK_MONSTER_TYPES = (
    "Fusion Monster",
    "Pendulum Effect Fusion Monster",
    "Synchro Monster",
    "Synchro Tuner Monster",
    "Synchro Pendulum Effect Monster",
    "XYZ Monster",
    "XYZ Pendulum Effect Monster",
    "Link Monster",
)


def _build_card_types() -> dict[str, CardType]:
    types: list[CardType] = []
    for name in _MAIN_DECK_MONSTER_TYPES:
        types.append(CardType(name, CardTypeGroup.MONSTER, 0, MAIN_DECK_PARTS))
    types.append(CardType("Spell Card", CardTypeGroup.SPELL, 1, MAIN_DECK_PARTS))
    types.append(CardType("Trap Card", CardTypeGroup.TRAP, 2, MAIN_DECK_PARTS))
    for name in _EXTRA_DECK_MONSTER_TYPES:
        types.append(CardType(name, CardTypeGroup.MONSTER, 3, EXTRA_DECK_PARTS))
    types.append(CardType("Skill Card", CardTypeGroup.SKILL, 4, MAIN_DECK_PARTS))
    # Tokens exist in card data but never belong in a deck
    types.append(CardType("Token", CardTypeGroup.MONSTER, 5, frozenset()))
    return {card_type.name: card_type for card_type in types}


CARD_TYPES: dict[str, CardType] = _build_card_types()
