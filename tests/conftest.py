from collections.abc import Callable

import pytest

from ygodeck.models.ban_state import BanState
from ygodeck.models.card import Card
from ygodeck.models.card_type import CardType, CardTypeGroup
from ygodeck.models.deck_part import DeckPart
from ygodeck.models.format import Format
from ygodeck.services.card_database import MemoryCardDatabase
from ygodeck.services.deck_service import DeckService
from ygodeck.services.deck_uri_encoding import DeckUriEncodingService

CardFactory = Callable[..., Card]


def create_card_type(
    name: str = "Spell Card",
    group: CardTypeGroup = CardTypeGroup.SPELL,
    sort_group: int = 0,
    deck_parts: frozenset[DeckPart] = frozenset({DeckPart.MAIN, DeckPart.SIDE}),
) -> CardType:
    return CardType(name=name, group=group, sort_group=sort_group, deck_parts=deck_parts)


def create_card(
    passcode: str = "123",
    name: str = "name",
    type: CardType | None = None,
    banlist: dict[Format, BanState] | None = None,
) -> Card:
    return Card(
        passcode=passcode,
        name=name,
        type=type if type is not None else create_card_type(),
        banlist=banlist or {},
    )


@pytest.fixture
def make_card() -> CardFactory:
    """Factory for cards with spell defaults."""
    return create_card


@pytest.fixture
def make_card_type() -> Callable[..., CardType]:
    """Factory for card types with spell defaults."""
    return create_card_type


@pytest.fixture
def extra_deck_type() -> CardType:
    return create_card_type(
        name="Fusion Monster",
        group=CardTypeGroup.MONSTER,
        sort_group=3,
        deck_parts=frozenset({DeckPart.EXTRA}),
    )


@pytest.fixture
def skill_type() -> CardType:
    return create_card_type(name="Skill Card", group=CardTypeGroup.SKILL, sort_group=4)


@pytest.fixture
def catalog_cards() -> dict[str, Card]:
    """Cards available in the card database, keyed by passcode."""
    passcodes = ["123", "456", "789", "999", "999999999", "5050644", "29189613", "38148100"]
    return {
        passcode: create_card(passcode=passcode, name=f"Card {passcode}") for passcode in passcodes
    }


@pytest.fixture
def card_database(catalog_cards: dict[str, Card]) -> MemoryCardDatabase:
    return MemoryCardDatabase(catalog_cards.values())


@pytest.fixture
def deck_service() -> DeckService:
    return DeckService()


@pytest.fixture
def codec(card_database: MemoryCardDatabase, deck_service: DeckService) -> DeckUriEncodingService:
    return DeckUriEncodingService(card_database, deck_service)


@pytest.fixture
def sample_card_data() -> list[dict]:
    """Card entries in the public card-data API layout."""
    return [
        {
            "id": 5050644,
            "name": "Pot of Desires",
            "type": "Spell Card",
            "desc": "Banish 10 cards from the top of your Deck, face-down; draw 2 cards.",
            "race": "Normal",
            "banlist_info": {"ban_tcg": "Limited", "ban_ocg": "Semi-Limited"},
        },
        {
            "id": 29189613,
            "name": "Maxx \"C\"",
            "type": "Effect Monster",
            "desc": "During either player's turn: You can send this card from your hand...",
            "atk": 500,
            "def": 200,
            "level": 2,
            "race": "Insect",
            "attribute": "EARTH",
            "banlist_info": {"ban_tcg": "Banned"},
        },
        {
            "id": 38148100,
            "name": "Knightmare Phoenix",
            "type": "Link Monster",
            "desc": "2 monsters with different names",
            "atk": 1900,
            "race": "Fiend",
            "attribute": "FIRE",
            "archetype": "Knightmare",
            "linkval": 2,
            "linkmarkers": ["Top", "Bottom-Right"],
        },
    ]
