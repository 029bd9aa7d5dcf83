"""
Deck service.

Adds cards to and removes cards from decks, and decides whether a card may
be added under a format's rules.

can_add() is a predicate: "cannot add" is an expected outcome and returns
False. Passing a format or deck part the ruleset does not know is a
programming error and raises KeyError.

add_card() and remove_card() do not consult any ruleset. Callers check
can_add() first.
"""

import logging
from collections import Counter

from ygodeck.models.card import Card
from ygodeck.models.deck import Deck
from ygodeck.models.deck_part import DEFAULT_DECK_PARTS, DeckPart
from ygodeck.models.format import Format, get_ruleset

logger = logging.getLogger(__name__)


class DeckService:
    """Stateless deck operations."""

    def create_empty_deck(self) -> Deck:
        """Create an unnamed deck with one empty list per deck part."""
        return Deck(name=None, parts={deck_part: [] for deck_part in DEFAULT_DECK_PARTS})

    def get_all_cards(self, deck: Deck) -> list[Card]:
        """All cards of a deck, Main then Extra then Side, duplicates included."""
        return [card for deck_part in DEFAULT_DECK_PARTS for card in deck.cards(deck_part)]

    def count_copies(self, deck: Deck, card: Card) -> int:
        """Copies of a card (by passcode) across the whole deck."""
        return sum(1 for other in self.get_all_cards(deck) if other.passcode == card.passcode)

    def can_add(self, deck: Deck, deck_part: DeckPart, format: Format, card: Card) -> bool:
        """
        Check if a card may be added to a deck part under a format.

        Checks, in order:
        1. The card's type is eligible for the deck part
        2. The deck part is not full
        3. The card's ban state allows another copy in the deck
        4. Singleton groups (e.g. skills) hold no other card in the deck

        Args:
            deck: Deck to check against (not modified)
            deck_part: Deck part the card would be added to
            format: Format whose rules apply
            card: Card to add

        Returns:
            True if the card may be added

        Raises:
            KeyError: If the format or deck part is unknown
        """
        ruleset = get_ruleset(format)
        limits = ruleset.limits(deck_part)

        if not card.can_go_into(deck_part):
            logger.debug("%s cannot go into %s deck", card.passcode, deck_part.value)
            return False

        if limits.is_full(len(deck.cards(deck_part))):
            logger.debug("%s deck is full under %s", deck_part.value, ruleset.format.value)
            return False

        ban_state = card.ban_state(ruleset.format)
        if self.count_copies(deck, card) >= ban_state.count:
            logger.debug("%s is %s under %s", card.passcode, ban_state.value, ruleset.format.value)
            return False

        if card.group in ruleset.singleton_groups and any(
            other.group == card.group for other in self.get_all_cards(deck)
        ):
            logger.debug("Deck already holds a %s card", card.group.value)
            return False

        return True

    def add_card(self, deck: Deck, deck_part: DeckPart, card: Card) -> Deck:
        """Append a card to a deck part. Modifies and returns the deck."""
        deck.cards(deck_part).append(card)
        return deck

    def remove_card(self, deck: Deck, deck_part: DeckPart, card: Card) -> Deck:
        """
        Remove the first copy of a card (by passcode) from a deck part.

        Modifies and returns the deck. Removing a card that is not in the
        deck part leaves the deck unchanged.
        """
        cards = deck.cards(deck_part)
        for index, other in enumerate(cards):
            if other.passcode == card.passcode:
                del cards[index]
                break
        return deck

    def sort(self, deck: Deck) -> Deck:
        """
        Order each deck part by card type group, then by name.

        Monsters come first, then spells, traps, extra deck monsters and
        skills. Copies of a card stay next to each other. Modifies and
        returns the deck.
        """
        for deck_part in DEFAULT_DECK_PARTS:
            deck.cards(deck_part).sort(
                key=lambda card: (card.type.sort_group, card.name, card.passcode)
            )
        return deck

    def find_violations(self, deck: Deck, format: Format) -> list[str]:
        """
        Check a whole deck against a format's rules.

        Use this for decks that were not built through can_add(), such as
        decoded deck codes.

        Args:
            deck: Deck to check
            format: Format whose rules apply

        Returns:
            List of violation messages (empty if the deck is legal)

        Raises:
            KeyError: If the format is unknown
        """
        ruleset = get_ruleset(format)
        violations: list[str] = []

        for deck_part, limits in ruleset.deck_parts.items():
            cards = deck.cards(deck_part)
            if len(cards) < limits.min:
                violations.append(
                    f"{deck_part.value} deck has {len(cards)} cards but needs at least {limits.min}"
                )
            elif len(cards) > limits.max:
                violations.append(
                    f"{deck_part.value} deck has {len(cards)} cards but allows at most {limits.max}"
                )

            misplaced: set[str] = set()
            for card in cards:
                if not card.can_go_into(deck_part) and card.passcode not in misplaced:
                    misplaced.add(card.passcode)
                    violations.append(
                        f"'{card.name}' ({card.passcode}) cannot go into the {deck_part.value} deck"
                    )

        all_cards = self.get_all_cards(deck)
        cards_by_passcode = {card.passcode: card for card in all_cards}
        for passcode, copies in Counter(card.passcode for card in all_cards).items():
            card = cards_by_passcode[passcode]
            ban_state = card.ban_state(ruleset.format)
            if copies > ban_state.count:
                violations.append(
                    f"'{card.name}' ({passcode}) has {copies} copies "
                    f"but {ban_state.value} allows {ban_state.count}"
                )

        for group in sorted(ruleset.singleton_groups, key=lambda g: g.value):
            group_count = sum(1 for card in all_cards if card.group == group)
            if group_count > 1:
                violations.append(f"Deck has {group_count} {group.value} cards but allows 1")

        return violations
