from collections.abc import Mapping
from dataclasses import dataclass, field

from ygodeck.models.ban_state import BanState
from ygodeck.models.card_type import CardType, CardTypeGroup
from ygodeck.models.deck_part import DeckPart
from ygodeck.models.format import Format


@dataclass(frozen=True, slots=True)
class Card:
    """
    A card as provided by the card catalog.

    Cards are owned by the catalog and only referenced by decks.

    Attributes:
        passcode: Decimal identifier printed on the card (e.g., "5050644")
        name: Card name
        type: Card type, deciding which deck parts the card may go into
        description: Card text
        sub_type: Monster race or spell/trap property (e.g., "Dragon", "Quick-Play")
        attribute: Monster attribute (e.g., "LIGHT")
        atk: Monster attack points
        defense: Monster defense points
        level: Monster level or rank
        pendulum_scale: Pendulum scale
        link_rating: Link rating of link monsters
        link_markers: Link arrow directions
        archetype: Archetype the card belongs to
        banlist: Ban state per format. Formats without an entry are unlimited.
    """

    passcode: str
    name: str
    type: CardType
    description: str = ""
    sub_type: str = ""
    attribute: str | None = None
    atk: int | None = None
    defense: int | None = None
    level: int | None = None
    pendulum_scale: int | None = None
    link_rating: int | None = None
    link_markers: tuple[str, ...] | None = None
    archetype: str | None = None
    banlist: Mapping[Format, BanState] = field(default_factory=dict, hash=False)

    @property
    def group(self) -> CardTypeGroup:
        return self.type.group

    def ban_state(self, format: Format) -> BanState:
        """Ban state of this card in a format."""
        return self.banlist.get(format, BanState.UNLIMITED)

    def can_go_into(self, deck_part: DeckPart) -> bool:
        """True if this card's type is eligible for the deck part."""
        return deck_part in self.type.deck_parts
