"""
ygodeck services.

Deck validation and deck code encoding on top of a card database.
"""

from ygodeck.services.card_database import (
    CardDatabase,
    MemoryCardDatabase,
    get_card_database,
    load_card_database,
)
from ygodeck.services.deck_service import DeckService
from ygodeck.services.deck_uri_encoding import DeckUriEncodingService, decode_legacy_value

__all__ = [
    "CardDatabase",
    "DeckService",
    "DeckUriEncodingService",
    "MemoryCardDatabase",
    "decode_legacy_value",
    "get_card_database",
    "load_card_database",
]
