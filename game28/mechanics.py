"""Legal move generation for 28."""

from __future__ import annotations

from typing import List

from .cards import Card, sort_cards
from .errors import (
    CardNotInHand,
    InvalidPhase,
    InvalidTurn,
    MustFollowLeadSuit,
    RuleViolation,
    TrickDisplayLocked,
    TrumpAskedMustFollowTrump,
    TrumpHiddenLeadRestricted,
)
from .rules import DEFAULT_RULES, RuleSet
from .state import Phase, RoundState
from .trick import lead_suit
from .trump import asker_obligation, can_ask, hidden_follow_allowed, hidden_lead_allowed, is_hidden


def check_play(
    state: RoundState,
    position: int,
    card: Card,
    rules: RuleSet = DEFAULT_RULES,
) -> None:
    """Raise a ``RuleViolation`` if ``card`` cannot be played by ``position``."""
    if state.phase is not Phase.PLAYING:
        raise InvalidPhase(f"Cards cannot be played during {state.phase}.")
    if position != state.current_player:
        raise InvalidTurn("Not this player's turn.")
    if state.trick_locked:
        raise TrickDisplayLocked("Please wait while the trick is being displayed.")

    hand = state.hand(position)
    if card not in hand:
        raise CardNotInHand(f"{card} is not in hand.")

    obligation = asker_obligation(state, position)
    if obligation is not None and card.suit is not obligation:
        raise TrumpAskedMustFollowTrump("You must play a trump suit card since you asked for trump.")

    led = lead_suit(state.current_trick)
    if led is not None and card.suit is not led and any(c.suit is led for c in hand):
        raise MustFollowLeadSuit(f"You must follow {led}.")

    if position != state.bid_winner or not is_hidden(state):
        return
    assert state.trump_card is not None
    if led is None:
        if not hidden_lead_allowed(card, hand, state.trump_card, rules.trump_lead_rule):
            raise TrumpHiddenLeadRestricted("You cannot lead with trump suit until trump is revealed.")
    elif not hidden_follow_allowed(card, hand, led, state.trump_card):
        raise TrumpHiddenLeadRestricted("The trump card stays hidden while you can follow with another card.")


def can_play_card(
    state: RoundState,
    position: int,
    card: Card,
    rules: RuleSet = DEFAULT_RULES,
) -> bool:
    try:
        check_play(state, position, card, rules)
    except RuleViolation:
        return False
    return True


def legal_moves(state: RoundState, position: int, rules: RuleSet = DEFAULT_RULES) -> List[Card]:
    """Return the subset of the hand that may be played right now."""
    if state.phase is not Phase.PLAYING or position != state.current_player or state.trick_locked:
        return []
    return [card for card in sort_cards(state.hand(position)) if can_play_card(state, position, card, rules)]


def can_ask_for_trump(state: RoundState, position: int) -> bool:
    return state.phase is Phase.PLAYING and can_ask(state, position)
