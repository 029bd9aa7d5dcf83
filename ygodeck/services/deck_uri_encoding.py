"""
Deck code encoding.

Turns decks into short, URL-transportable strings and back. Three formats
are supported, all walking deck parts in DEFAULT_DECK_PARTS order:

    ydke URI (encode + decode)
        "ydke://" + base64(card blocks) + "!" for every deck part.
        Standard base64 alphabet, padding kept, trailing "!" after the last
        part. Read and written by simulators and bots. No deck name.

    Query parameter value (encode + decode)
        Card blocks of every part, each part followed by an all-zero
        delimiter block, then the UTF-8 deck name (no length prefix).
        Compressed with raw DEFLATE and base64 encoded with "+/=" replaced
        by "_-~".

    Legacy query parameter value (decode only)
        "|" separated parts of ";" separated passcodes, "*<digit><passcode>"
        for repeated cards, behind a caller-supplied decoding step
        (zlib + base64 by default). No deck name.

A card block is the passcode as an unsigned 32 bit little-endian integer.
Passcodes are always > 0, so a block can never collide with the delimiter.

All decoding is all-or-nothing: malformed input raises a DeckCodecError
subclass and no partial deck is returned.
"""

import base64
import binascii
import logging
import re
import struct
import zlib
from collections.abc import Callable, Iterator

from ygodeck.models.card import Card
from ygodeck.models.deck import Deck
from ygodeck.models.deck_part import DEFAULT_DECK_PARTS
from ygodeck.models.failure import (
    DeckStructureError,
    LegacyEntryError,
    PasscodeRangeError,
    UnknownCardError,
)
from ygodeck.services.card_database import CardDatabase
from ygodeck.services.deck_service import DeckService

logger = logging.getLogger(__name__)

# A 32 bit integer is able to store all 8 digit passcodes
BLOCK_BYTE_SIZE = 4
LIMIT = 2 ** (BLOCK_BYTE_SIZE * 8)
BLOCK_STRUCT = struct.Struct("<I")

URL_QUERY_PARAM_VALUE_DELIMITER_BLOCK = bytes(BLOCK_BYTE_SIZE)

YDKE_URI_PROTOCOL = "ydke://"
YDKE_DELIMITER = "!"

# Applied in this order when encoding; decoding applies the reverse pairs in the same order
URI_SAFE_SUBSTITUTIONS: tuple[tuple[str, str], ...] = (("+", "_"), ("/", "-"), ("=", "~"))

LEGACY_DECK_PART_DELIMITER = "|"
LEGACY_PASSCODE_DELIMITER = ";"
LEGACY_CARD_AMOUNT_PREFIX = "*"

# Only a single digit is read, so runs of 10+ copies were never representable
LEGACY_COUNTED_ENTRY_PATTERN = re.compile(r"^\*([0-9])(.*)$", re.DOTALL)


def encode_base64(data: bytes, uri_safe: bool = False) -> str:
    """Base64 encode bytes, optionally with the query parameter safe alphabet."""
    encoded = base64.b64encode(data).decode("ascii")
    if uri_safe:
        for original, replacement in URI_SAFE_SUBSTITUTIONS:
            encoded = encoded.replace(original, replacement)
    return encoded


def decode_base64(value: str, uri_safe: bool = False) -> bytes:
    """
    Base64 decode a string, optionally from the query parameter safe alphabet.

    Raises:
        DeckStructureError: If the value is not valid base64
    """
    if uri_safe:
        for original, replacement in URI_SAFE_SUBSTITUTIONS:
            value = value.replace(replacement, original)
    try:
        return base64.b64decode(value, validate=True)
    except (binascii.Error, ValueError) as e:
        raise DeckStructureError("Deck code is not valid base64.", detail=str(e)) from e


def deflate_raw(data: bytes) -> bytes:
    """Compress with headerless DEFLATE."""
    compressor = zlib.compressobj(wbits=-zlib.MAX_WBITS)
    return compressor.compress(data) + compressor.flush()


def inflate_raw(data: bytes) -> bytes:
    """
    Decompress headerless DEFLATE data.

    Raises:
        DeckStructureError: If the data is corrupt or incomplete
    """
    try:
        return zlib.decompress(data, wbits=-zlib.MAX_WBITS)
    except zlib.error as e:
        raise DeckStructureError("Deck code could not be decompressed.", detail=str(e)) from e


def decode_legacy_value(value: str) -> str:
    """
    Default decoding step of legacy query parameter values.

    Legacy values are zlib-wrapped DEFLATE data in standard base64.

    Raises:
        DeckStructureError: If the value is not valid base64 or zlib data
    """
    compressed = decode_base64(value)
    try:
        return zlib.decompress(compressed).decode("utf-8")
    except (zlib.error, UnicodeDecodeError) as e:
        raise DeckStructureError("Deck code could not be decompressed.", detail=str(e)) from e


def encode_number(passcode: str) -> bytes:
    """
    Encode a passcode as a card block.

    Raises:
        PasscodeRangeError: If the passcode is not a decimal number
            with 0 < passcode < LIMIT
    """
    if not (passcode.isascii() and passcode.isdigit()):
        raise PasscodeRangeError(passcode, LIMIT)
    number = int(passcode)
    if number <= 0 or number >= LIMIT:
        raise PasscodeRangeError(passcode, LIMIT)
    return BLOCK_STRUCT.pack(number)


def decode_number(block: bytes) -> int:
    """
    Decode a card block to its passcode number.

    Raises:
        DeckStructureError: If the block is shorter than BLOCK_BYTE_SIZE
    """
    if len(block) != BLOCK_BYTE_SIZE:
        raise DeckStructureError(
            f"Deck code is truncated: expected a {BLOCK_BYTE_SIZE} byte block "
            f"but found {len(block)} bytes."
        )
    (number,) = BLOCK_STRUCT.unpack(block)
    return number


def parse_legacy_entry(entry: str) -> tuple[int, str]:
    """
    Split a legacy entry into copy count and passcode.

    "123" is one copy of 123, "*3123" is three copies of 123.

    Raises:
        LegacyEntryError: If a counted entry has no single digit count
    """
    if not entry.startswith(LEGACY_CARD_AMOUNT_PREFIX):
        return 1, entry

    match = LEGACY_COUNTED_ENTRY_PATTERN.match(entry)
    if match is None:
        raise LegacyEntryError(entry)
    count, passcode = match.groups()
    return int(count), passcode


class DeckUriEncodingService:
    """
    Encodes decks to deck codes and decodes them again.

    Stateless apart from its read-only collaborators: the card database
    resolves decoded passcodes, the deck service creates empty decks.
    """

    def __init__(self, card_database: CardDatabase, deck_service: DeckService) -> None:
        self._card_database = card_database
        self._deck_service = deck_service

    def to_uri(self, deck: Deck) -> str:
        """
        Encode a deck to a ydke URI.

        The deck name is not stored in the URI.

        Raises:
            PasscodeRangeError: If a card's passcode cannot be encoded
        """
        encoded_deck_parts = [
            encode_base64(self._encode_card_blocks(deck.cards(deck_part)))
            for deck_part in DEFAULT_DECK_PARTS
        ]
        return YDKE_URI_PROTOCOL + YDKE_DELIMITER.join(encoded_deck_parts) + YDKE_DELIMITER

    def from_uri(self, uri: str) -> Deck:
        """
        Decode a deck from a ydke URI.

        The returned deck is always unnamed.

        Raises:
            DeckStructureError: If the URI is malformed: it lacks the
                "ydke://" prefix, does not end with "!" (text after the last
                delimiter is rejected, not ignored), has a delimiter count
                other than three, or holds invalid base64 or partial blocks
            UnknownCardError: If a passcode is not in the card database
        """
        if not uri.startswith(YDKE_URI_PROTOCOL):
            raise DeckStructureError(f"Expected URI to start with '{YDKE_URI_PROTOCOL}'.")

        uri_parts = uri[len(YDKE_URI_PROTOCOL) :].split(YDKE_DELIMITER)
        # Always one longer than there are deck parts due to the trailing delimiter
        trailing = uri_parts.pop()
        if trailing:
            raise DeckStructureError(f"Expected URI to end with '{YDKE_DELIMITER}'.")

        if len(uri_parts) != len(DEFAULT_DECK_PARTS):
            raise DeckStructureError(
                f"Expected URI to have {len(DEFAULT_DECK_PARTS)} delimiters "
                f"but found {len(uri_parts)}."
            )

        deck = self._deck_service.create_empty_deck()
        for deck_part, uri_part in zip(DEFAULT_DECK_PARTS, uri_parts):
            deck.cards(deck_part).extend(self._decode_card_blocks(decode_base64(uri_part)))

        logger.debug("Decoded %d cards from ydke URI", len(deck))
        return deck

    def to_url_query_param_value(self, deck: Deck) -> str:
        """
        Encode a deck to a URI query parameter safe string.

        Byte layout before compression:
            <card blocks of Main> <delimiter block>
            <card blocks of Extra> <delimiter block>
            <card blocks of Side> <delimiter block>
            <UTF-8 deck name, only if the deck has a non-empty name>

        Raises:
            PasscodeRangeError: If a card's passcode cannot be encoded
        """
        result = bytearray()
        for deck_part in DEFAULT_DECK_PARTS:
            result += self._encode_card_blocks(deck.cards(deck_part))
            result += URL_QUERY_PARAM_VALUE_DELIMITER_BLOCK
        if deck.name:
            result += deck.name.encode("utf-8")

        return encode_base64(deflate_raw(bytes(result)), uri_safe=True)

    def from_url_query_param_value(self, query_param_value: str) -> Deck:
        """
        Decode a deck from a value created by to_url_query_param_value().

        Raises:
            DeckStructureError: If the value is corrupt or truncated
            UnknownCardError: If a passcode is not in the card database
        """
        inflated = inflate_raw(decode_base64(query_param_value, uri_safe=True))

        deck = self._deck_service.create_empty_deck()
        last_deck_part_index = len(DEFAULT_DECK_PARTS) - 1
        deck_part_index = 0
        metadata_start: int | None = None

        for block_start in range(0, len(inflated), BLOCK_BYTE_SIZE):
            block_end = block_start + BLOCK_BYTE_SIZE
            block = inflated[block_start:block_end]

            if block == URL_QUERY_PARAM_VALUE_DELIMITER_BLOCK:
                # After the last deck part, metadata starts
                if deck_part_index == last_deck_part_index:
                    metadata_start = block_end
                    break
                deck_part_index += 1
            else:
                deck_part = DEFAULT_DECK_PARTS[deck_part_index]
                deck.cards(deck_part).append(self._decode_card_block(block))

        if metadata_start is None:
            raise DeckStructureError(
                f"Deck code is truncated: found {deck_part_index} of "
                f"{len(DEFAULT_DECK_PARTS)} deck part delimiters."
            )

        if metadata_start < len(inflated):
            try:
                deck.name = inflated[metadata_start:].decode("utf-8")
            except UnicodeDecodeError as e:
                raise DeckStructureError("Deck name is not valid UTF-8.", detail=str(e)) from e

        logger.debug("Decoded %d cards from query parameter value", len(deck))
        return deck

    def from_legacy_url_query_param_value(
        self,
        value: str,
        decoder: Callable[[str], str] = decode_legacy_value,
    ) -> Deck:
        """
        Decode a deck from a legacy query parameter value.

        Args:
            value: Legacy query parameter value
            decoder: Turns the value into the plain "|"/";" text layout.
                Pass an identity function for already decoded text.

        Returns:
            Unnamed deck.

        Raises:
            DeckStructureError: If the value has more parts than a deck
            LegacyEntryError: If an entry's copy count is malformed
            UnknownCardError: If a passcode is not in the card database
        """
        logger.warning("Decoding deck from deprecated legacy query parameter value")
        deck_part_lists = decoder(value).split(LEGACY_DECK_PART_DELIMITER)

        if len(deck_part_lists) > len(DEFAULT_DECK_PARTS):
            raise DeckStructureError(
                f"Expected at most {len(DEFAULT_DECK_PARTS)} deck parts "
                f"but found {len(deck_part_lists)}."
            )

        deck = self._deck_service.create_empty_deck()
        for deck_part, deck_part_list in zip(DEFAULT_DECK_PARTS, deck_part_lists):
            if not deck_part_list:
                continue

            deck_part_cards = deck.cards(deck_part)
            for entry in deck_part_list.split(LEGACY_PASSCODE_DELIMITER):
                count, passcode = parse_legacy_entry(entry)
                card = self._resolve_card(passcode)
                deck_part_cards.extend([card] * count)

        logger.debug("Decoded %d cards from legacy query parameter value", len(deck))
        return deck

    def _encode_card_blocks(self, cards: list[Card]) -> bytes:
        return b"".join(encode_number(card.passcode) for card in cards)

    def _decode_card_blocks(self, data: bytes) -> Iterator[Card]:
        if len(data) % BLOCK_BYTE_SIZE:
            raise DeckStructureError(
                f"Deck part of {len(data)} bytes is not a multiple of {BLOCK_BYTE_SIZE} bytes."
            )
        for block_start in range(0, len(data), BLOCK_BYTE_SIZE):
            yield self._decode_card_block(data[block_start : block_start + BLOCK_BYTE_SIZE])

    def _decode_card_block(self, block: bytes) -> Card:
        return self._resolve_card(str(decode_number(block)))

    def _resolve_card(self, passcode: str) -> Card:
        if not self._card_database.has_card(passcode):
            raise UnknownCardError(passcode)
        return self._card_database.get_card(passcode)
