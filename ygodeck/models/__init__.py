from ygodeck.models.ban_state import BAN_STATE_COUNTS, BanState
from ygodeck.models.card import Card
from ygodeck.models.card_type import CARD_TYPES, CardType, CardTypeGroup
from ygodeck.models.deck import Deck
from ygodeck.models.deck_part import DEFAULT_DECK_PARTS, DeckPart, DeckPartLimits
from ygodeck.models.failure import (
    ApiResponse,
    DeckCodecError,
    DeckStructureError,
    FailureDetail,
    FailureKind,
    KnownError,
    LegacyEntryError,
    OutcomeType,
    PasscodeRangeError,
    UnknownCardError,
    create_known_failure,
    create_success,
    finalize_response,
)
from ygodeck.models.format import DEFAULT_FORMAT, RULESETS, Format, Ruleset, get_ruleset

__all__ = [
    "ApiResponse",
    "BAN_STATE_COUNTS",
    "BanState",
    "CARD_TYPES",
    "Card",
    "CardType",
    "CardTypeGroup",
    "DEFAULT_DECK_PARTS",
    "DEFAULT_FORMAT",
    "Deck",
    "DeckCodecError",
    "DeckPart",
    "DeckPartLimits",
    "DeckStructureError",
    "FailureDetail",
    "FailureKind",
    "Format",
    "KnownError",
    "LegacyEntryError",
    "OutcomeType",
    "PasscodeRangeError",
    "RULESETS",
    "Ruleset",
    "UnknownCardError",
    "create_known_failure",
    "create_success",
    "finalize_response",
    "get_ruleset",
]
