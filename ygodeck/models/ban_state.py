from enum import Enum


class BanState(str, Enum):
    """Per-format legality tier of a card."""

    UNLIMITED = "unlimited"
    SEMI_LIMITED = "semi_limited"
    LIMITED = "limited"
    BANNED = "banned"
    NOT_IN_FORMAT = "not_in_format"

    @property
    def count(self) -> int:
        """Maximum number of copies allowed in a single deck."""
        return BAN_STATE_COUNTS[self]


BAN_STATE_COUNTS: dict[BanState, int] = {
    BanState.UNLIMITED: 3,
    BanState.SEMI_LIMITED: 2,
    BanState.LIMITED: 1,
    BanState.BANNED: 0,
    BanState.NOT_IN_FORMAT: 0,
}
