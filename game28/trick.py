"""Trick representation and resolution."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Sequence, Tuple

from .cards import Card, Suit, trick_value

TRICK_SIZE = 4
TRUMP_BASE = 1000
LEAD_BASE = 100


@dataclass(frozen=True)
class TrickPlay:
    player: str
    card: Card
    position: int


@dataclass(frozen=True)
class CompletedTrick:
    plays: Tuple[TrickPlay, ...]
    winner: int
    points: int

    @property
    def winning_play(self) -> TrickPlay:
        for play in self.plays:
            if play.position == self.winner:
                return play
        raise ValueError("Winner did not play in this trick.")


def lead_suit(plays: Sequence[TrickPlay]) -> Optional[Suit]:
    return plays[0].card.suit if plays else None


def ranked_value(card: Card, led: Suit, trump: Optional[Suit]) -> int:
    """Trump plays outrank lead-suit plays, which outrank everything else."""
    if trump is not None and card.suit is trump:
        return TRUMP_BASE + trick_value(card.rank)
    if card.suit is led:
        return LEAD_BASE + trick_value(card.rank)
    return 0


def resolve_trick(plays: Sequence[TrickPlay], trump: Optional[Suit]) -> int:
    """Return the index of the winning play.

    Plays are scanned in order and a later play only takes over on a strictly
    higher value, so an exact tie stays with the earlier play.
    """
    if not plays:
        raise ValueError("Cannot determine winner on empty trick.")
    led = plays[0].card.suit
    winning_index = 0
    highest = -1
    for index, play in enumerate(plays):
        value = ranked_value(play.card, led, trump)
        if value > highest:
            highest = value
            winning_index = index
    return winning_index
