"""Immutable round state for 28."""

from __future__ import annotations

from dataclasses import dataclass, replace
from enum import Enum
from typing import Iterable, Optional, Tuple

from .cards import Card, Suit
from .deck import PLAYER_COUNT
from .scoring import RoundOutcome, team_of
from .trick import CompletedTrick, TrickPlay

Hands = Tuple[Tuple[Card, ...], ...]

EMPTY_HANDS: Hands = ((),) * PLAYER_COUNT


class Phase(Enum):
    LOBBY = "lobby"
    BIDDING = "bidding"
    TRUMP_SELECTION = "trumpSelection"
    PLAYING = "playing"
    GAME_OVER = "gameOver"

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class Player:
    id: str
    name: str
    position: int

    @property
    def team(self) -> int:
        return team_of(self.position)


@dataclass(frozen=True)
class Bid:
    """A bid in submission order; ``amount is None`` marks a pass."""

    player: int
    amount: Optional[int]
    order: int

    @property
    def is_pass(self) -> bool:
        return self.amount is None


@dataclass(frozen=True)
class PendingTrickClear:
    """A completed trick on display, waiting for the scheduled clear."""

    trick_number: int
    next_player: int


@dataclass(frozen=True)
class RoundState:
    phase: Phase = Phase.LOBBY
    players: Tuple[Player, ...] = ()
    hands: Hands = EMPTY_HANDS
    reserves: Hands = EMPTY_HANDS
    current_bidder: Optional[int] = None
    highest_bid: Optional[int] = None
    bid_winner: Optional[int] = None
    pass_count: int = 0
    bids: Tuple[Bid, ...] = ()
    trump_card: Optional[Card] = None
    trump_revealed: bool = False
    trump_asked_by: Optional[int] = None
    trump_played_after_ask: bool = False
    current_trick: Tuple[TrickPlay, ...] = ()
    completed_tricks: Tuple[CompletedTrick, ...] = ()
    current_player: Optional[int] = None
    dealer_position: int = 0
    team_tricks: Tuple[int, int] = (0, 0)
    team_points: Tuple[int, int] = (0, 0)
    pending_trick_clear: Optional[PendingTrickClear] = None
    outcome: Optional[RoundOutcome] = None
    round_number: int = 0

    @property
    def trump_suit(self) -> Optional[Suit]:
        return self.trump_card.suit if self.trump_card is not None else None

    @property
    def trick_locked(self) -> bool:
        return self.pending_trick_clear is not None

    def player_at(self, position: int) -> Player:
        for player in self.players:
            if player.position == position:
                return player
        raise KeyError(f"No player seated at position {position}.")

    def position_of(self, player_id: str) -> int:
        for player in self.players:
            if player.id == player_id:
                return player.position
        raise KeyError(f"Unknown player {player_id!r}.")

    def hand(self, position: int) -> Tuple[Card, ...]:
        return self.hands[position]

    def played_cards(self) -> list[Card]:
        cards = [play.card for trick in self.completed_tricks for play in trick.plays]
        if self.pending_trick_clear is None:
            cards.extend(play.card for play in self.current_trick)
        return cards

    def evolve(self, **changes) -> "RoundState":
        return replace(self, **changes)


def next_seat(position: int) -> int:
    return (position + 1) % PLAYER_COUNT


def replace_hand(hands: Hands, position: int, cards: Iterable[Card]) -> Hands:
    updated = list(hands)
    updated[position] = tuple(cards)
    return tuple(updated)


def add_to_team(values: Tuple[int, int], team: int, amount: int) -> Tuple[int, int]:
    updated = list(values)
    updated[team] += amount
    return updated[0], updated[1]
