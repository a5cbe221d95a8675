import pytest

from game28.actions import AskTrump, PlayCard, SelectTrump
from game28.cards import card_from_id
from game28.errors import (
    CardNotInHand,
    InvalidTurn,
    MustFollowLeadSuit,
    TrumpAlreadyRevealed,
    TrumpAskedMustFollowTrump,
    TrumpAskNotAllowed,
    TrumpHiddenLeadRestricted,
)
from game28.events import TrumpRevealed
from game28.game import apply
from game28.mechanics import can_ask_for_trump, can_play_card, legal_moves
from game28.rules import RuleSet
from game28.state import Phase
from game28.trump import TrumpStatus, trump_status

from conftest import cards


def test_must_follow_lead_suit_when_possible(make_state):
    state = make_state(
        [["spades-9"], ["hearts-A", "clubs-J", "diamonds-7"], [], []],
        trick=[(0, "hearts-7")],
        current=1,
    )
    assert not can_play_card(state, 1, card_from_id("clubs-J"))
    assert legal_moves(state, 1) == [card_from_id("hearts-A")]
    with pytest.raises(MustFollowLeadSuit):
        apply(state, PlayCard(player=1, card=card_from_id("clubs-J")))


def test_void_player_may_play_anything(make_state):
    state = make_state(
        [["spades-9"], ["clubs-J", "diamonds-7", "spades-7"], [], []],
        trick=[(0, "hearts-7")],
        current=1,
    )
    assert legal_moves(state, 1) == list(cards("diamonds-7", "clubs-J", "spades-7"))


def test_card_must_be_in_hand(make_state):
    state = make_state([["spades-9", "hearts-7"], [], [], []])
    with pytest.raises(CardNotInHand):
        apply(state, PlayCard(player=0, card=card_from_id("hearts-A")))
    with pytest.raises(InvalidTurn):
        apply(state, PlayCard(player=1, card=card_from_id("hearts-A")))


def test_trump_selection_comes_from_first_four_cards(trump_selection):
    with pytest.raises(InvalidTurn):
        apply(trump_selection, SelectTrump(player=2, card=card_from_id("diamonds-7")))
    with pytest.raises(CardNotInHand):
        # Reserve cards are not dealt until trump is chosen.
        apply(trump_selection, SelectTrump(player=1, card=card_from_id("clubs-J")))

    state = apply(trump_selection, SelectTrump(player=1, card=card_from_id("hearts-J"))).state
    assert state.phase == Phase.PLAYING
    assert trump_status(state) is TrumpStatus.HIDDEN
    assert card_from_id("hearts-J") in state.hand(1)
    assert all(len(hand) == 8 for hand in state.hands)
    assert state.current_player == 1


def test_bid_winner_cannot_lead_trump_suit_while_hidden(playing):
    # Seat 1 holds hearts J, Q, K, A and clubs J, Q, K, A.
    with pytest.raises(TrumpHiddenLeadRestricted):
        apply(playing, PlayCard(player=1, card=card_from_id("hearts-A")))
    assert legal_moves(playing, 1) == list(cards("clubs-J", "clubs-Q", "clubs-K", "clubs-A"))


def test_bid_winner_may_lead_trump_when_hand_is_all_trump(make_state):
    state = make_state([["spades-9", "spades-7"], [], [], []])
    assert can_play_card(state, 0, card_from_id("spades-7"))
    assert can_play_card(state, 0, card_from_id("spades-9"))


def test_trump_card_only_variant(playing):
    rules = RuleSet(trump_lead_rule="trump_card_only")
    assert can_play_card(playing, 1, card_from_id("hearts-A"), rules)
    assert not can_play_card(playing, 1, card_from_id("hearts-J"), rules)
    with pytest.raises(TrumpHiddenLeadRestricted):
        apply(playing, PlayCard(player=1, card=card_from_id("hearts-J")), rules)


def test_trump_card_only_variant_allows_lone_trump_card(make_state):
    rules = RuleSet(trump_lead_rule="trump_card_only")
    state = make_state([["spades-9", "hearts-7"], [], [], []])
    assert can_play_card(state, 0, card_from_id("spades-9"), rules)
    # The canonical rule still refuses it.
    assert not can_play_card(state, 0, card_from_id("spades-9"))


def test_hidden_trump_card_played_when_void_in_lead(make_state):
    state = make_state(
        [["spades-9", "spades-J", "clubs-7"], [], [], []],
        trick=[(3, "hearts-7")],
        current=0,
    )
    assert can_play_card(state, 0, card_from_id("spades-9"))


def test_hidden_trump_card_held_back_when_following_trump_suit(make_state):
    state = make_state(
        [["spades-9", "spades-J", "clubs-7"], [], [], []],
        trick=[(3, "spades-7")],
        current=0,
    )
    with pytest.raises(TrumpHiddenLeadRestricted):
        apply(state, PlayCard(player=0, card=card_from_id("spades-9")))
    with pytest.raises(MustFollowLeadSuit):
        apply(state, PlayCard(player=0, card=card_from_id("clubs-7")))
    assert legal_moves(state, 0) == [card_from_id("spades-J")]

    lone = make_state([["spades-9", "clubs-7"], [], [], []], trick=[(3, "spades-7")], current=0)
    assert legal_moves(lone, 0) == [card_from_id("spades-9")]

    revealed = make_state(
        [["spades-9", "spades-J", "clubs-7"], [], [], []],
        trick=[(3, "spades-7")],
        current=0,
        revealed=True,
    )
    assert legal_moves(revealed, 0) == list(cards("spades-9", "spades-J"))


def test_ask_for_trump_reveals_and_obliges(make_state):
    state = make_state(
        [["spades-9"], ["spades-7", "clubs-8", "diamonds-9"], [], []],
        trick=[(0, "hearts-K")],
        current=1,
    )
    assert can_ask_for_trump(state, 1)

    transition = apply(state, AskTrump(player=1))
    asked = transition.state
    assert asked.trump_revealed
    assert asked.trump_asked_by == 1
    assert transition.events == (TrumpRevealed(asked_by=1, trump_card=card_from_id("spades-9")),)

    with pytest.raises(TrumpAskedMustFollowTrump):
        apply(asked, PlayCard(player=1, card=card_from_id("clubs-8")))
    assert legal_moves(asked, 1) == [card_from_id("spades-7")]

    played = apply(asked, PlayCard(player=1, card=card_from_id("spades-7"))).state
    assert played.trump_played_after_ask
    assert played.trump_revealed

    with pytest.raises(TrumpAlreadyRevealed):
        apply(asked, AskTrump(player=1))


def test_asker_without_trump_plays_freely(make_state):
    state = make_state(
        [["spades-9"], ["clubs-8", "diamonds-9"], [], []],
        trick=[(0, "hearts-K")],
        current=1,
    )
    asked = apply(state, AskTrump(player=1)).state
    assert legal_moves(asked, 1) == list(cards("diamonds-9", "clubs-8"))


def test_cannot_ask_while_holding_lead_suit_or_leading(make_state):
    holding = make_state(
        [["spades-9"], ["hearts-7", "clubs-8"], [], []],
        trick=[(0, "hearts-K")],
        current=1,
    )
    with pytest.raises(TrumpAskNotAllowed):
        apply(holding, AskTrump(player=1))

    leading = make_state([["spades-9"], ["clubs-8"], [], []], current=1)
    with pytest.raises(TrumpAskNotAllowed):
        apply(leading, AskTrump(player=1))

    with pytest.raises(InvalidTurn):
        apply(holding, AskTrump(player=2))
    assert not can_ask_for_trump(leading, 1)
