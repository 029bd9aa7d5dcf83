"""
Failure Envelope — Classified, Inspectable Failures.

Every failure a caller may want to explain to a user is raised as a
KnownError carrying a FailureKind. Deck code failures come in four kinds:

- PASSCODE_OUT_OF_RANGE: a passcode cannot be written as a card block
- MALFORMED_DECK_CODE: wrong delimiter counts, truncated or corrupt data
- UNKNOWN_CARD: a decoded passcode has no catalog entry
- MALFORMED_LEGACY_ENTRY: a legacy entry carries an unreadable copy count

All of them are unrecoverable at the point of detection. No partial deck is
ever returned alongside one of these errors.

Errors convert to an ApiResponse envelope through `to_response()`, which is
what the command line tool prints.
"""

from enum import Enum
from typing import Any, Generic, TypeVar

from pydantic import BaseModel, Field


class FailureKind(str, Enum):
    """Classification of failure types."""

    # Deck code failures
    PASSCODE_OUT_OF_RANGE = "passcode_out_of_range"
    MALFORMED_DECK_CODE = "malformed_deck_code"
    UNKNOWN_CARD = "unknown_card"
    MALFORMED_LEGACY_ENTRY = "malformed_legacy_entry"

    # Catalog failures
    CATALOG_UNAVAILABLE = "catalog_unavailable"


class OutcomeType(str, Enum):
    """High-level outcome classification."""

    SUCCESS = "success"
    KNOWN_FAILURE = "known_failure"


T = TypeVar("T")


class FailureDetail(BaseModel):
    """Detailed information about a failure."""

    kind: FailureKind = Field(
        ...,
        description="Classification of the failure",
    )
    message: str = Field(
        ...,
        description="User-appropriate explanation of what went wrong",
    )
    detail: str | None = Field(
        default=None,
        description="Additional technical detail (optional)",
    )
    suggestion: str | None = Field(
        default=None,
        description="Suggested action for the user",
    )


class ApiResponse(BaseModel, Generic[T]):
    """
    Response envelope for everything shown to a user.

    Every response is classified as a success or a known failure,
    so no failure reaches the user unexplained.
    """

    outcome: OutcomeType = Field(
        ...,
        description="High-level classification of the result",
    )
    data: T | None = Field(
        default=None,
        description="Response data (present on success)",
    )
    failure: FailureDetail | None = Field(
        default=None,
        description="Failure details (present on non-success)",
    )

    @classmethod
    def success(cls, data: T) -> "ApiResponse[T]":
        """Create a success response."""
        return cls(outcome=OutcomeType.SUCCESS, data=data)

    @classmethod
    def known_failure(
        cls,
        kind: FailureKind,
        message: str,
        detail: str | None = None,
        suggestion: str | None = None,
    ) -> "ApiResponse[Any]":
        """
        Create a known failure response.

        Use when the system knows exactly why the operation failed.
        Example: a deck code referencing an unknown card.
        """
        return cls(
            outcome=OutcomeType.KNOWN_FAILURE,
            failure=FailureDetail(
                kind=kind,
                message=message,
                detail=detail,
                suggestion=suggestion,
            ),
        )


class KnownError(Exception):
    """
    Base class for exceptions that represent known, explainable failures.

    Subclass this for errors where the system knows exactly what went wrong.
    """

    def __init__(
        self,
        kind: FailureKind,
        message: str,
        detail: str | None = None,
        suggestion: str | None = None,
    ):
        self.kind = kind
        self.message = message
        self.detail = detail
        self.suggestion = suggestion
        super().__init__(message)

    def to_response(self) -> ApiResponse[Any]:
        """Convert to an ApiResponse."""
        return ApiResponse.known_failure(
            kind=self.kind,
            message=self.message,
            detail=self.detail,
            suggestion=self.suggestion,
        )


class DeckCodecError(KnownError):
    """Base class for all deck encoding and decoding failures."""


class PasscodeRangeError(DeckCodecError):
    """
    Raised when a passcode cannot be encoded as a card block.

    Passcodes must be decimal numbers in the range 0 < passcode < 2**32.
    Zero is reserved for the deck part delimiter block.
    """

    def __init__(self, passcode: str, limit: int):
        self.passcode = passcode
        self.limit = limit
        super().__init__(
            kind=FailureKind.PASSCODE_OUT_OF_RANGE,
            message=f"Passcode '{passcode}' is out of range (has to be > 0 and < {limit}).",
            suggestion="Remove the card from the deck before sharing it.",
        )


class DeckStructureError(DeckCodecError):
    """
    Raised when a deck code is structurally broken.

    Covers wrong delimiter counts, truncated byte streams, invalid base64
    and corrupt compressed data.
    """

    def __init__(self, message: str, detail: str | None = None):
        super().__init__(
            kind=FailureKind.MALFORMED_DECK_CODE,
            message=message,
            detail=detail,
            suggestion="The deck code is corrupted. Copy the complete link again.",
        )


class UnknownCardError(DeckCodecError):
    """Raised when a decoded passcode has no entry in the card catalog."""

    def __init__(self, passcode: str):
        self.passcode = passcode
        super().__init__(
            kind=FailureKind.UNKNOWN_CARD,
            message=f"Could not find card for passcode '{passcode}'.",
            suggestion="The deck references a card that is not in the card database.",
        )


class LegacyEntryError(DeckCodecError):
    """Raised when a legacy deck code entry has an unreadable copy count."""

    def __init__(self, entry: str):
        self.entry = entry
        super().__init__(
            kind=FailureKind.MALFORMED_LEGACY_ENTRY,
            message=f"Malformed legacy deck entry '{entry}'.",
            detail="Counted entries must look like '*<digit><passcode>'.",
            suggestion="The deck code is corrupted. Copy the complete link again.",
        )


def finalize_response(response: ApiResponse[Any]) -> ApiResponse[Any]:
    """
    Check a response before it is shown to a user.

    Args:
        response: The ApiResponse to finalize

    Returns:
        The same response

    Raises:
        ValueError: If response structure is invalid
    """
    if response.outcome == OutcomeType.SUCCESS:
        if response.failure is not None:
            raise ValueError("Success response must not have failure details")
    else:
        if response.failure is None:
            raise ValueError(f"{response.outcome.value} response must have failure details")

    return response


def create_known_failure(
    kind: FailureKind,
    reason: str,
) -> ApiResponse[Any]:
    """
    Create a known failure response.

    The message is standardized. Only the reason (technical detail) varies.

    Args:
        kind: The classification of the failure
        reason: Technical description of what went wrong

    Returns:
        A finalized known failure response
    """
    response: ApiResponse[Any] = ApiResponse(
        outcome=OutcomeType.KNOWN_FAILURE,
        failure=FailureDetail(
            kind=kind,
            message="The operation failed due to a known issue.",
            detail=reason,
            suggestion="Check the error details and adjust your request.",
        ),
    )

    return finalize_response(response)


def create_success(data: T) -> ApiResponse[T]:
    """
    Create a success response.

    Args:
        data: The response data

    Returns:
        A finalized success response
    """
    response = ApiResponse[T](outcome=OutcomeType.SUCCESS, data=data)
    return finalize_response(response)
