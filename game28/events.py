"""Events describing what an applied action changed."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Union

from .cards import Card
from .scoring import RoundOutcome
from .state import Phase


@dataclass(frozen=True)
class RoundStarted:
    dealer_position: int
    first_bidder: int


@dataclass(frozen=True)
class BidPlaced:
    player: int
    amount: Optional[int]


@dataclass(frozen=True)
class PhaseChanged:
    previous: Phase
    phase: Phase


@dataclass(frozen=True)
class RoundVoided:
    """Every seat passed without a bid; the cards must be dealt again."""

    dealer_position: int


@dataclass(frozen=True)
class TrumpSelected:
    player: int


@dataclass(frozen=True)
class TrumpRevealed:
    asked_by: int
    trump_card: Card


@dataclass(frozen=True)
class CardPlayed:
    player: int
    card: Card


@dataclass(frozen=True)
class TrickCompleted:
    trick_number: int
    winner: int
    points: int


@dataclass(frozen=True)
class TrickClearScheduled:
    trick_number: int
    delay: float


@dataclass(frozen=True)
class TrickCleared:
    trick_number: int
    next_player: int


@dataclass(frozen=True)
class TrickClearCancelled:
    trick_number: int


@dataclass(frozen=True)
class RoundCompleted:
    outcome: RoundOutcome


@dataclass(frozen=True)
class RoundReset:
    dealer_position: int


Event = Union[
    RoundStarted,
    BidPlaced,
    PhaseChanged,
    RoundVoided,
    TrumpSelected,
    TrumpRevealed,
    CardPlayed,
    TrickCompleted,
    TrickClearScheduled,
    TrickCleared,
    TrickClearCancelled,
    RoundCompleted,
    RoundReset,
]
