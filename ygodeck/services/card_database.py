"""
Card database service.

The deck codec only needs a lookup capability: "is there a card with this
passcode" and "give me the card for this passcode". CardDatabase describes
that capability; MemoryCardDatabase is the in-memory implementation loaded
from card data files in the public card-data API layout.

Passcode equality is exact string match of the decimal form.
"""

import json
import logging
from collections.abc import Iterable, Iterator
from functools import lru_cache
from pathlib import Path
from typing import Any, Protocol

from pydantic import BaseModel, Field

from ygodeck.config import settings
from ygodeck.models.ban_state import BanState
from ygodeck.models.card import Card
from ygodeck.models.card_type import CARD_TYPES
from ygodeck.models.format import Format

logger = logging.getLogger(__name__)

# Ban state names as they appear in "banlist_info"
BAN_STATE_NAMES: dict[str, BanState] = {
    "Unlimited": BanState.UNLIMITED,
    "Semi-Limited": BanState.SEMI_LIMITED,
    "Limited": BanState.LIMITED,
    "Banned": BanState.BANNED,
    "Not in Format": BanState.NOT_IN_FORMAT,
}


class CardDatabase(Protocol):
    """Read-only card lookup by passcode."""

    def has_card(self, passcode: str) -> bool: ...

    def get_card(self, passcode: str) -> Card: ...


class MemoryCardDatabase:
    """Card database held in a dict keyed by passcode."""

    def __init__(self, cards: Iterable[Card] = ()) -> None:
        self._cards: dict[str, Card] = {}
        for card in cards:
            self.add_card(card)

    def add_card(self, card: Card) -> None:
        """Add a card, replacing any card with the same passcode."""
        self._cards[card.passcode] = card

    def has_card(self, passcode: str) -> bool:
        return passcode in self._cards

    def get_card(self, passcode: str) -> Card:
        """
        Get the card for a passcode.

        Raises:
            KeyError: If no card has this passcode. Check has_card() first.
        """
        return self._cards[passcode]

    def __contains__(self, passcode: str) -> bool:
        return self.has_card(passcode)

    def __iter__(self) -> Iterator[Card]:
        return iter(self._cards.values())

    def __len__(self) -> int:
        return len(self._cards)


class RawBanlistInfo(BaseModel):
    """Ban states of a card entry. Missing formats are unlimited."""

    ban_tcg: str | None = None
    ban_ocg: str | None = None
    ban_goat: str | None = None


class RawCard(BaseModel):
    """A card entry as found in card data files."""

    id: int
    name: str
    type: str
    desc: str = ""
    race: str = ""
    attribute: str | None = None
    atk: int | None = None
    defense: int | None = Field(default=None, alias="def")
    level: int | None = None
    scale: int | None = None
    linkval: int | None = None
    linkmarkers: list[str] | None = None
    archetype: str | None = None
    banlist_info: RawBanlistInfo | None = None


def _parse_ban_state(name: str) -> BanState:
    try:
        return BAN_STATE_NAMES[name]
    except KeyError:
        raise ValueError(f"Unknown ban state '{name}'") from None


def _link_banlist(banlist_info: RawBanlistInfo | None) -> dict[Format, BanState]:
    if banlist_info is None:
        return {}

    banlist: dict[Format, BanState] = {}
    for format, name in (
        (Format.TCG, banlist_info.ban_tcg),
        (Format.OCG, banlist_info.ban_ocg),
        (Format.GOAT, banlist_info.ban_goat),
    ):
        if name is not None:
            banlist[format] = _parse_ban_state(name)
    return banlist


def link_card(raw: RawCard) -> Card:
    """
    Turn a raw card entry into a Card.

    Args:
        raw: Validated card entry

    Returns:
        Card with its type resolved against CARD_TYPES

    Raises:
        ValueError: If the card type or a ban state is unknown
    """
    card_type = CARD_TYPES.get(raw.type)
    if card_type is None:
        raise ValueError(f"Unknown card type '{raw.type}' for card {raw.id}")

    return Card(
        passcode=str(raw.id),
        name=raw.name,
        type=card_type,
        description=raw.desc,
        sub_type=raw.race,
        attribute=raw.attribute,
        atk=raw.atk,
        defense=raw.defense,
        level=raw.level,
        pendulum_scale=raw.scale,
        link_rating=raw.linkval,
        link_markers=tuple(raw.linkmarkers) if raw.linkmarkers is not None else None,
        archetype=raw.archetype,
        banlist=_link_banlist(raw.banlist_info),
    )


def load_card_database(path: Path | None = None) -> MemoryCardDatabase:
    """
    Load card database from file.

    Accepts both the API response shape ({"data": [...]}) and a bare list
    of card entries.

    Args:
        path: Path to JSON file. Defaults to the configured card_database_path

    Returns:
        MemoryCardDatabase holding every card in the file.

    Raises:
        FileNotFoundError: If database file doesn't exist
        ValueError: If the file holds no card list or an entry is invalid
            (pydantic.ValidationError included)
    """
    if path is None:
        path = settings.card_database_path

    if not path.exists():
        raise FileNotFoundError(f"Card database not found at {path}.")

    with open(path, encoding="utf-8") as f:
        raw: Any = json.load(f)

    entries = raw.get("data") if isinstance(raw, dict) else raw
    if not isinstance(entries, list):
        raise ValueError(f"Card database at {path} has no card list.")

    database = MemoryCardDatabase()
    for entry in entries:
        database.add_card(link_card(RawCard.model_validate(entry)))

    logger.info("Loaded %d cards from %s", len(database), path)
    return database


@lru_cache(maxsize=1)
def get_card_database() -> MemoryCardDatabase:
    """
    Get cached card database from the configured path.

    Raises:
        FileNotFoundError: If database file doesn't exist
    """
    return load_card_database()
