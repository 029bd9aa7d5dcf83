import pytest

from ygodeck.models.ban_state import BanState
from ygodeck.models.card_type import CARD_TYPES, CardTypeGroup
from ygodeck.models.deck import Deck
from ygodeck.models.deck_part import DEFAULT_DECK_PARTS, DeckPart, DeckPartLimits
from ygodeck.models.failure import (
    ApiResponse,
    FailureKind,
    OutcomeType,
    create_known_failure,
    create_success,
    finalize_response,
)
from ygodeck.models.format import RULESETS, Format, get_ruleset


class TestCard:
    def test_card_immutable(self, make_card) -> None:
        card = make_card(passcode="123")
        with pytest.raises(AttributeError):
            card.passcode = "456"  # type: ignore[misc]

    def test_ban_state_defaults_to_unlimited(self, make_card) -> None:
        card = make_card(banlist={Format.OCG: BanState.BANNED})

        assert card.ban_state(Format.OCG) == BanState.BANNED
        assert card.ban_state(Format.TCG) == BanState.UNLIMITED

    def test_can_go_into(self, make_card, extra_deck_type) -> None:
        spell = make_card()
        fusion = make_card(type=extra_deck_type)

        assert spell.can_go_into(DeckPart.MAIN) is True
        assert spell.can_go_into(DeckPart.EXTRA) is False
        assert fusion.can_go_into(DeckPart.EXTRA) is True
        assert fusion.can_go_into(DeckPart.SIDE) is False

    def test_group(self, make_card, skill_type) -> None:
        assert make_card(type=skill_type).group == CardTypeGroup.SKILL


class TestBanState:
    @pytest.mark.parametrize(
        ("ban_state", "count"),
        [
            (BanState.UNLIMITED, 3),
            (BanState.SEMI_LIMITED, 2),
            (BanState.LIMITED, 1),
            (BanState.BANNED, 0),
            (BanState.NOT_IN_FORMAT, 0),
        ],
    )
    def test_count(self, ban_state: BanState, count: int) -> None:
        assert ban_state.count == count


class TestCardTypes:
    def test_extra_deck_types(self) -> None:
        for name in ("Fusion Monster", "Synchro Monster", "XYZ Monster", "Link Monster"):
            assert CARD_TYPES[name].deck_parts == frozenset({DeckPart.EXTRA})

    def test_main_deck_types(self) -> None:
        assert CARD_TYPES["Spell Card"].deck_parts == frozenset({DeckPart.MAIN, DeckPart.SIDE})
        assert CARD_TYPES["Trap Card"].group == CardTypeGroup.TRAP
        assert CARD_TYPES["Effect Monster"].group == CardTypeGroup.MONSTER

    def test_tokens_fit_nowhere(self) -> None:
        assert CARD_TYPES["Token"].deck_parts == frozenset()


class TestRulesets:
    def test_every_format_has_a_ruleset(self) -> None:
        assert set(RULESETS) == set(Format)

    def test_rulesets_cover_default_deck_parts_in_order(self) -> None:
        for ruleset in RULESETS.values():
            assert tuple(ruleset.deck_parts) == DEFAULT_DECK_PARTS

    def test_standard_limits(self) -> None:
        ruleset = get_ruleset(Format.TCG)

        assert ruleset.limits(DeckPart.MAIN) == DeckPartLimits(min=40, max=60)
        assert ruleset.limits(DeckPart.EXTRA) == DeckPartLimits(min=0, max=15)
        assert ruleset.limits(DeckPart.SIDE) == DeckPartLimits(min=0, max=15)

    def test_speed_duel_limits(self) -> None:
        ruleset = get_ruleset(Format.SPEED_DUEL)

        assert ruleset.limits(DeckPart.MAIN) == DeckPartLimits(min=20, max=30)
        assert ruleset.limits(DeckPart.EXTRA).max == 5

    def test_skills_are_singletons(self) -> None:
        assert CardTypeGroup.SKILL in get_ruleset(Format.OCG).singleton_groups

    def test_unknown_format(self) -> None:
        with pytest.raises(KeyError):
            get_ruleset("rush")  # type: ignore[arg-type]

    def test_is_full(self) -> None:
        limits = DeckPartLimits(min=0, max=15)

        assert limits.is_full(14) is False
        assert limits.is_full(15) is True


class TestDeck:
    def test_default_deck_has_every_part(self) -> None:
        deck = Deck()

        assert deck.name is None
        assert list(deck.parts) == list(DEFAULT_DECK_PARTS)
        assert len(deck) == 0

    def test_len_counts_all_parts(self, make_card) -> None:
        card = make_card()
        deck = Deck(parts={DeckPart.MAIN: [card, card], DeckPart.EXTRA: [], DeckPart.SIDE: [card]})

        assert len(deck) == 3


class TestFailureEnvelope:
    def test_success_response_structure(self) -> None:
        response = ApiResponse.success({"data": "value"})

        assert response.outcome == OutcomeType.SUCCESS
        assert response.data == {"data": "value"}
        assert response.failure is None

    def test_create_success_is_finalized(self) -> None:
        response = create_success({"name": "foo"})

        assert finalize_response(response) is response

    def test_create_known_failure(self) -> None:
        response = create_known_failure(FailureKind.CATALOG_UNAVAILABLE, "file missing")

        assert response.outcome == OutcomeType.KNOWN_FAILURE
        assert response.failure is not None
        assert response.failure.detail == "file missing"

    def test_finalize_rejects_failure_without_details(self) -> None:
        response: ApiResponse[None] = ApiResponse(outcome=OutcomeType.KNOWN_FAILURE)

        with pytest.raises(ValueError):
            finalize_response(response)
