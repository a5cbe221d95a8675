"""Bidding rules and the partnership restriction."""

from __future__ import annotations

from typing import Optional, Sequence

from .errors import BidNotHigherThanCurrent, InvalidBidAmount, InvalidTurn, TeamBidRestricted
from .rules import DEFAULT_RULES, RuleSet
from .scoring import team_of
from .state import Bid, RoundState

MIN_BID = DEFAULT_RULES.min_bid
MAX_BID = DEFAULT_RULES.max_bid
PASS = None

PASSES_TO_CLOSE = 3
PASSES_TO_VOID = 4


def is_valid_bid(
    amount: int,
    highest_bid: Optional[int],
    *,
    min_bid: int = MIN_BID,
    max_bid: int = MAX_BID,
) -> bool:
    if amount < min_bid or amount > max_bid:
        return False
    if highest_bid is not None and amount <= highest_bid:
        return False
    return True


def can_bid(position: int, bids: Sequence[Bid], bid_winner: Optional[int]) -> bool:
    """Return True if ``position`` may place a numeric bid.

    A member of the partnership holding the highest bid may only raise once an
    opponent has bid after the winning bid.
    """
    if bid_winner is None:
        return True
    team = team_of(position)
    if team != team_of(bid_winner):
        return True

    winning_order = None
    for bid in bids:
        if bid.player == bid_winner and not bid.is_pass:
            winning_order = bid.order
    if winning_order is None:
        return True

    return any(
        not bid.is_pass and bid.order > winning_order and team_of(bid.player) != team
        for bid in bids
    )


def check_bid(
    state: RoundState,
    position: int,
    amount: Optional[int],
    rules: RuleSet = DEFAULT_RULES,
) -> None:
    """Raise a ``RuleViolation`` if the bid (or pass) cannot be placed."""
    if position != state.current_bidder:
        raise InvalidTurn(f"Seat {state.current_bidder} is due to bid, not seat {position}.")
    if amount is PASS:
        return
    if not can_bid(position, state.bids, state.bid_winner):
        raise TeamBidRestricted(
            "Your teammate has the highest bid. You can only bid after an opponent raises."
        )
    if amount < rules.min_bid or amount > rules.max_bid:
        raise InvalidBidAmount(f"Bid must be between {rules.min_bid} and {rules.max_bid}.")
    if not is_valid_bid(amount, state.highest_bid, min_bid=rules.min_bid, max_bid=rules.max_bid):
        raise BidNotHigherThanCurrent(f"Bid must be higher than {state.highest_bid}.")


def bidding_closed(pass_count: int, bid_winner: Optional[int]) -> bool:
    return bid_winner is not None and pass_count >= PASSES_TO_CLOSE


def all_passed(pass_count: int, bid_winner: Optional[int]) -> bool:
    return bid_winner is None and pass_count >= PASSES_TO_VOID
