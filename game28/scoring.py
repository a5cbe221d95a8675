"""Round scoring helpers for 28."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Sequence, Tuple

from .rules import TOTAL_POINTS
from .trick import CompletedTrick, TrickPlay

TRICKS_PER_ROUND = 8


class ScoringError(ValueError):
    """Raised when a round cannot be scored."""


def team_of(position: int) -> int:
    """Team 0 holds seats 0 and 2, team 1 holds seats 1 and 3."""
    return position % 2


def trick_points(plays: Iterable[TrickPlay]) -> int:
    return sum(play.card.point_value() for play in plays)


@dataclass(frozen=True)
class RoundOutcome:
    team_points: Tuple[int, int]
    team_tricks: Tuple[int, int]
    bidding_team: int
    bid: int
    bid_made: bool

    @property
    def winning_team(self) -> int:
        return self.bidding_team if self.bid_made else 1 - self.bidding_team


def tally(completed: Sequence[CompletedTrick]) -> Tuple[Tuple[int, int], Tuple[int, int]]:
    """Return per-team (points, tricks) accumulated over completed tricks."""
    points = [0, 0]
    tricks = [0, 0]
    for trick in completed:
        team = team_of(trick.winner)
        points[team] += trick.points
        tricks[team] += 1
    return (points[0], points[1]), (tricks[0], tricks[1])


def score_round(
    completed: Sequence[CompletedTrick],
    *,
    bid_winner: int,
    highest_bid: int,
) -> RoundOutcome:
    if len(completed) != TRICKS_PER_ROUND:
        raise ScoringError(f"A round has {TRICKS_PER_ROUND} tricks, got {len(completed)}.")
    points, tricks = tally(completed)
    if sum(points) != TOTAL_POINTS:
        raise ScoringError(f"Point cards must total {TOTAL_POINTS}, got {sum(points)}.")

    bidding_team = team_of(bid_winner)
    return RoundOutcome(
        team_points=points,
        team_tricks=tricks,
        bidding_team=bidding_team,
        bid=highest_bid,
        bid_made=points[bidding_team] >= highest_bid,
    )
