"""Actions accepted by the round reducer."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Tuple, Union

from .cards import Card


@dataclass(frozen=True)
class StartRound:
    player: int
    deck: Tuple[Card, ...]


@dataclass(frozen=True)
class PlaceBid:
    """A numeric bid, or a pass when ``amount`` is None."""

    player: int
    amount: Optional[int] = None

    @classmethod
    def pass_(cls, player: int) -> "PlaceBid":
        return cls(player=player, amount=None)


@dataclass(frozen=True)
class SelectTrump:
    player: int
    card: Card


@dataclass(frozen=True)
class AskTrump:
    player: int


@dataclass(frozen=True)
class PlayCard:
    player: int
    card: Card


@dataclass(frozen=True)
class ClearTrick:
    """Scheduled transition that takes a displayed trick off the table."""

    trick_number: int


@dataclass(frozen=True)
class ResetRound:
    player: int


Action = Union[StartRound, PlaceBid, SelectTrump, AskTrump, PlayCard, ClearTrick, ResetRound]
