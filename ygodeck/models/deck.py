from dataclasses import dataclass, field

from ygodeck.models.card import Card
from ygodeck.models.deck_part import DEFAULT_DECK_PARTS, DeckPart


def _empty_parts() -> dict[DeckPart, list[Card]]:
    return {deck_part: [] for deck_part in DEFAULT_DECK_PARTS}


@dataclass
class Deck:
    """
    A named, partitioned list of cards.

    INVARIANT: `parts` holds exactly one list per deck part, even when empty.
    Card order within a part is significant and survives encoding.

    Attributes:
        name: Deck name, None if unnamed
        parts: Cards per deck part, in insertion order (duplicates allowed)
    """

    name: str | None = None
    parts: dict[DeckPart, list[Card]] = field(default_factory=_empty_parts)

    def cards(self, deck_part: DeckPart) -> list[Card]:
        """Cards of a deck part (the live list, not a copy)."""
        return self.parts[deck_part]

    def __len__(self) -> int:
        """Total number of cards across all deck parts."""
        return sum(len(cards) for cards in self.parts.values())
