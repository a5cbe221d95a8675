"""Shared fixtures for the 28 engine tests."""

import pytest

from game28.actions import PlaceBid, SelectTrump, StartRound
from game28.cards import card_from_id
from game28.deck import build_deck
from game28.game import apply, new_table
from game28.state import Phase, Player, RoundState
from game28.trick import TrickPlay

PLAYERS = tuple(Player(id=f"p{seat}", name=f"Player {seat}", position=seat) for seat in range(4))


def cards(*ids):
    return tuple(card_from_id(card_id) for card_id in ids)


@pytest.fixture
def lobby():
    return new_table(PLAYERS)


@pytest.fixture
def dealt(lobby):
    """Unshuffled deal, dealer at seat 0.

    First hands: seat 0 hearts 7-10, seat 1 hearts J-A, seat 2 diamonds 7-10,
    seat 3 diamonds J-A. Reserves: seat 0 clubs 7-10, seat 1 clubs J-A,
    seat 2 spades 7-10, seat 3 spades J-A.
    """
    return apply(lobby, StartRound(player=0, deck=tuple(build_deck()))).state


@pytest.fixture
def trump_selection(dealt):
    state = dealt
    for action in (
        PlaceBid(player=1, amount=16),
        PlaceBid.pass_(2),
        PlaceBid.pass_(3),
        PlaceBid.pass_(0),
    ):
        state = apply(state, action).state
    return state


@pytest.fixture
def playing(trump_selection):
    """Seat 1 won at 16 and hid the jack of hearts; seat 1 leads."""
    return apply(trump_selection, SelectTrump(player=1, card=card_from_id("hearts-J"))).state


@pytest.fixture
def make_state():
    """Build a PLAYING state from card ids.

    ``trick`` is a sequence of ``(position, card_id)`` already on the table.
    """

    def factory(
        hands,
        *,
        trump="spades-9",
        bid_winner=0,
        revealed=False,
        trick=(),
        current=0,
        asked_by=None,
    ):
        plays = tuple(
            TrickPlay(player=f"p{seat}", card=card_from_id(card_id), position=seat) for seat, card_id in trick
        )
        return RoundState(
            phase=Phase.PLAYING,
            players=PLAYERS,
            hands=tuple(cards(*hand) for hand in hands),
            highest_bid=16,
            bid_winner=bid_winner,
            trump_card=card_from_id(trump),
            trump_revealed=revealed,
            trump_asked_by=asked_by,
            current_trick=plays,
            current_player=current,
        )

    return factory
