"""Typed rule violations raised when an action is rejected.

Every rejection is non-fatal: the engine raises before producing a new state,
so the state handed in is always left as it was.
"""

from __future__ import annotations

from enum import Enum


class ErrorKind(Enum):
    INVALID_TURN = "InvalidTurn"
    INVALID_PHASE = "InvalidPhase"
    INVALID_BID_AMOUNT = "InvalidBidAmount"
    BID_NOT_HIGHER_THAN_CURRENT = "BidNotHigherThanCurrent"
    TEAM_BID_RESTRICTED = "TeamBidRestricted"
    CARD_NOT_IN_HAND = "CardNotInHand"
    MUST_FOLLOW_LEAD_SUIT = "MustFollowLeadSuit"
    TRUMP_HIDDEN_LEAD_RESTRICTED = "TrumpHiddenLeadRestricted"
    TRUMP_ASKED_MUST_FOLLOW_TRUMP = "TrumpAskedMustFollowTrump"
    TRUMP_ALREADY_REVEALED = "TrumpAlreadyRevealed"
    TRUMP_ASK_NOT_ALLOWED = "TrumpAskNotAllowed"
    TRICK_DISPLAY_LOCKED = "TrickDisplayLocked"
    INSUFFICIENT_PLAYERS = "InsufficientPlayers"
    SEAT_UNAVAILABLE = "SeatUnavailable"
    INVALID_DECK = "InvalidDeck"
    STALE_TRANSITION = "StaleTransition"

    def __str__(self) -> str:
        return self.value


class RuleViolation(ValueError):
    """Base class for rejected actions."""

    kind: ErrorKind

    def __init__(self, message: str = "") -> None:
        super().__init__(message or self.kind.value)
        self.message = message or self.kind.value

    def to_dict(self) -> dict[str, str]:
        return {"error": self.kind.value, "message": self.message}


class InvalidTurn(RuleViolation):
    """Raised when a player acts out of turn."""

    kind = ErrorKind.INVALID_TURN


class InvalidPhase(RuleViolation):
    """Raised when the action is not accepted in the current phase."""

    kind = ErrorKind.INVALID_PHASE


class InvalidBidAmount(RuleViolation):
    kind = ErrorKind.INVALID_BID_AMOUNT


class BidNotHigherThanCurrent(RuleViolation):
    kind = ErrorKind.BID_NOT_HIGHER_THAN_CURRENT


class TeamBidRestricted(RuleViolation):
    """Raised when a player tries to raise over their own partnership."""

    kind = ErrorKind.TEAM_BID_RESTRICTED


class CardNotInHand(RuleViolation):
    kind = ErrorKind.CARD_NOT_IN_HAND


class MustFollowLeadSuit(RuleViolation):
    kind = ErrorKind.MUST_FOLLOW_LEAD_SUIT


class TrumpHiddenLeadRestricted(RuleViolation):
    """Raised when the bid winner plays trump in a way that would expose it."""

    kind = ErrorKind.TRUMP_HIDDEN_LEAD_RESTRICTED


class TrumpAskedMustFollowTrump(RuleViolation):
    """Raised when a player who asked for trump does not play it."""

    kind = ErrorKind.TRUMP_ASKED_MUST_FOLLOW_TRUMP


class TrumpAlreadyRevealed(RuleViolation):
    kind = ErrorKind.TRUMP_ALREADY_REVEALED


class TrumpAskNotAllowed(RuleViolation):
    """Raised when asking for trump while leading or holding the lead suit."""

    kind = ErrorKind.TRUMP_ASK_NOT_ALLOWED


class TrickDisplayLocked(RuleViolation):
    """Raised for trick actions while a completed trick is still on display."""

    kind = ErrorKind.TRICK_DISPLAY_LOCKED


class InsufficientPlayers(RuleViolation):
    kind = ErrorKind.INSUFFICIENT_PLAYERS


class SeatUnavailable(RuleViolation):
    kind = ErrorKind.SEAT_UNAVAILABLE


class InvalidDeck(RuleViolation):
    kind = ErrorKind.INVALID_DECK


class StaleTransition(RuleViolation):
    """Raised when a scheduled transition no longer matches the state."""

    kind = ErrorKind.STALE_TRANSITION
