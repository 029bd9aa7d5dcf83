"""
Deck code command line tool.

Converts deck codes between formats and shows their contents:

    ygodeck convert "ydke://...!...!...!" --from ydke --to query
    ygodeck --catalog cards.json show "q2aAgBOM..." --from query --format goat
    ygodeck show "ydke://...!...!...!" --from ydke --sort

Failures are printed as a JSON failure envelope and exit with status 1.
"""

import argparse
import logging
import sys
from collections.abc import Sequence
from pathlib import Path
from typing import Any

from ygodeck.config import settings
from ygodeck.models.deck import Deck
from ygodeck.models.deck_part import DEFAULT_DECK_PARTS
from ygodeck.models.failure import (
    DeckCodecError,
    FailureKind,
    create_known_failure,
    create_success,
    finalize_response,
)
from ygodeck.models.format import Format
from ygodeck.services.card_database import CardDatabase, get_card_database, load_card_database
from ygodeck.services.deck_service import DeckService
from ygodeck.services.deck_uri_encoding import DeckUriEncodingService

logger = logging.getLogger(__name__)

SOURCE_FORMATS = ("ydke", "query", "legacy")
TARGET_FORMATS = ("ydke", "query")


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser."""
    parser = argparse.ArgumentParser(prog="ygodeck", description="Deck code converter")
    parser.add_argument(
        "--catalog",
        type=Path,
        default=None,
        help="card database JSON file (defaults to the configured card_database_path)",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="enable debug logging")

    subparsers = parser.add_subparsers(dest="command", required=True)

    convert = subparsers.add_parser("convert", help="re-encode a deck code")
    convert.add_argument("value", help="deck code to decode")
    convert.add_argument("--from", dest="source", choices=SOURCE_FORMATS, required=True)
    convert.add_argument("--to", dest="target", choices=TARGET_FORMATS, required=True)
    convert.add_argument(
        "--sort", action="store_true", help="sort each deck part before encoding"
    )

    show = subparsers.add_parser("show", help="print the cards of a deck code as JSON")
    show.add_argument("value", help="deck code to decode")
    show.add_argument("--from", dest="source", choices=SOURCE_FORMATS, required=True)
    show.add_argument(
        "--format",
        type=Format,
        choices=list(Format),
        default=settings.default_format,
        help="format to check the deck against",
    )
    show.add_argument("--sort", action="store_true", help="sort each deck part")

    return parser


def decode_deck(codec: DeckUriEncodingService, value: str, source: str) -> Deck:
    """Decode a deck code of the given source format."""
    if source == "ydke":
        return codec.from_uri(value)
    if source == "query":
        return codec.from_url_query_param_value(value)
    return codec.from_legacy_url_query_param_value(value)


def encode_deck(codec: DeckUriEncodingService, deck: Deck, target: str) -> str:
    """Encode a deck to the given target format."""
    if target == "ydke":
        return codec.to_uri(deck)
    return codec.to_url_query_param_value(deck)


def describe_deck(deck: Deck, deck_service: DeckService, format: Format) -> dict[str, Any]:
    """JSON-ready summary of a deck and its legality under a format."""
    return {
        "name": deck.name,
        "parts": {
            deck_part.value: [card.passcode for card in deck.cards(deck_part)]
            for deck_part in DEFAULT_DECK_PARTS
        },
        "format": format.value,
        "violations": deck_service.find_violations(deck, format),
    }


def _load_catalog(path: Path | None) -> CardDatabase:
    if path is None:
        return get_card_database()
    return load_card_database(path)


def run(argv: Sequence[str] | None = None) -> int:
    """Run the tool and return the exit status."""
    args = build_parser().parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose or settings.debug else settings.log_level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    try:
        card_database = _load_catalog(args.catalog)
    except (FileNotFoundError, ValueError) as e:
        logger.error("Failed to load card database: %s", e)
        failure = create_known_failure(FailureKind.CATALOG_UNAVAILABLE, str(e))
        print(failure.model_dump_json(indent=2))
        return 1

    deck_service = DeckService()
    codec = DeckUriEncodingService(card_database, deck_service)

    try:
        deck = decode_deck(codec, args.value, args.source)
        if args.sort:
            deck_service.sort(deck)
        if args.command == "convert":
            print(encode_deck(codec, deck, args.target))
        else:
            response = create_success(describe_deck(deck, deck_service, args.format))
            print(response.model_dump_json(indent=2))
    except DeckCodecError as e:
        logger.error("Failed to %s deck code: %s", args.command, e)
        print(finalize_response(e.to_response()).model_dump_json(indent=2))
        return 1

    return 0


def main() -> None:
    """CLI entry point."""
    sys.exit(run())


if __name__ == "__main__":
    main()
