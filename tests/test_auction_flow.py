import pytest

from game28.actions import PlaceBid, PlayCard
from game28.bidding import can_bid, is_valid_bid
from game28.cards import card_from_id
from game28.errors import (
    BidNotHigherThanCurrent,
    InvalidBidAmount,
    InvalidPhase,
    InvalidTurn,
    TeamBidRestricted,
)
from game28.events import RoundVoided
from game28.game import apply
from game28.state import Bid, Phase


def run_bids(state, *actions):
    for action in actions:
        state = apply(state, action).state
    return state


def test_is_valid_bid_examples():
    assert is_valid_bid(20, 19)
    assert not is_valid_bid(13, None)
    assert not is_valid_bid(20, 20)
    assert is_valid_bid(14, None)
    assert is_valid_bid(28, 27)
    assert not is_valid_bid(29, None)


def test_first_bidder_sits_after_dealer(dealt):
    assert dealt.phase == Phase.BIDDING
    assert dealt.current_bidder == 1
    assert all(len(hand) == 4 for hand in dealt.hands)


def test_competitive_auction_flow(dealt):
    state = run_bids(
        dealt,
        PlaceBid(player=1, amount=16),
        PlaceBid(player=2, amount=17),
        PlaceBid(player=3, amount=18),
        PlaceBid(player=0, amount=19),
        PlaceBid(player=1, amount=20),
    )
    assert state.highest_bid == 20
    assert state.bid_winner == 1

    with pytest.raises(TeamBidRestricted):
        apply(run_bids(state, PlaceBid.pass_(2)), PlaceBid(player=3, amount=21))

    state = run_bids(state, PlaceBid.pass_(2), PlaceBid.pass_(3), PlaceBid.pass_(0))
    assert state.phase == Phase.TRUMP_SELECTION
    assert state.current_player == 1

    numeric = [bid.amount for bid in state.bids if bid.amount is not None]
    assert numeric == sorted(numeric)
    winning = [bid for bid in state.bids if bid.player == state.bid_winner and bid.amount is not None][-1]
    assert winning.amount == state.highest_bid


def test_teammate_cannot_raise_partner(dealt):
    state = run_bids(dealt, PlaceBid(player=1, amount=16), PlaceBid.pass_(2))

    with pytest.raises(TeamBidRestricted):
        apply(state, PlaceBid(player=3, amount=17))

    # Passing is always allowed.
    state = apply(state, PlaceBid.pass_(3)).state
    assert state.current_bidder == 0


def test_rejections_leave_state_unchanged(dealt):
    with pytest.raises(InvalidTurn):
        apply(dealt, PlaceBid(player=2, amount=16))
    with pytest.raises(InvalidBidAmount):
        apply(dealt, PlaceBid(player=1, amount=13))
    with pytest.raises(InvalidBidAmount):
        apply(dealt, PlaceBid(player=1, amount=29))

    state = apply(dealt, PlaceBid(player=1, amount=18)).state
    with pytest.raises(BidNotHigherThanCurrent):
        apply(state, PlaceBid(player=2, amount=18))
    assert state.highest_bid == 18
    assert state.current_bidder == 2
    assert dealt.highest_bid is None


def test_passes_before_first_bid_do_not_close_auction(dealt):
    state = run_bids(dealt, PlaceBid.pass_(1), PlaceBid.pass_(2), PlaceBid.pass_(3))
    assert state.phase == Phase.BIDDING

    state = run_bids(state, PlaceBid(player=0, amount=14))
    assert state.pass_count == 0

    state = run_bids(state, PlaceBid.pass_(1), PlaceBid.pass_(2), PlaceBid.pass_(3))
    assert state.phase == Phase.TRUMP_SELECTION
    assert state.bid_winner == 0
    assert state.highest_bid == 14


def test_all_pass_voids_the_deal(dealt):
    state = run_bids(dealt, PlaceBid.pass_(1), PlaceBid.pass_(2), PlaceBid.pass_(3))
    transition = apply(state, PlaceBid.pass_(0))

    assert transition.state.phase == Phase.LOBBY
    assert transition.state.dealer_position == dealt.dealer_position
    assert any(isinstance(event, RoundVoided) for event in transition.events)
    assert all(len(hand) == 0 for hand in transition.state.hands)


def test_can_bid_scans_submission_order():
    bids = (Bid(player=1, amount=16, order=0), Bid(player=2, amount=None, order=1))
    assert can_bid(0, bids, bid_winner=1)
    assert can_bid(2, bids, bid_winner=1)
    assert not can_bid(3, bids, bid_winner=1)
    assert not can_bid(1, bids, bid_winner=1)
    assert can_bid(3, (), bid_winner=None)

    answered = bids + (Bid(player=2, amount=17, order=2),)
    assert can_bid(3, answered, bid_winner=1)


def test_actions_outside_phase_are_rejected(dealt):
    with pytest.raises(InvalidPhase):
        apply(dealt, PlayCard(player=1, card=card_from_id("hearts-J")))
