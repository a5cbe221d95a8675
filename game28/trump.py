"""Hidden-trump selection, the ask-for-trump protocol and hidden-trump restrictions."""

from __future__ import annotations

from enum import Enum, auto
from typing import Optional, Sequence

from .cards import Card, Suit
from .errors import (
    CardNotInHand,
    InvalidPhase,
    InvalidTurn,
    TrumpAlreadyRevealed,
    TrumpAskNotAllowed,
)
from .state import RoundState
from .trick import lead_suit


class TrumpStatus(Enum):
    UNSET = auto()
    HIDDEN = auto()
    REVEALED = auto()


def trump_status(state: RoundState) -> TrumpStatus:
    if state.trump_card is None:
        return TrumpStatus.UNSET
    return TrumpStatus.REVEALED if state.trump_revealed else TrumpStatus.HIDDEN


def is_hidden(state: RoundState) -> bool:
    return trump_status(state) is TrumpStatus.HIDDEN


def check_trump_selection(state: RoundState, position: int, card: Card) -> None:
    if position != state.bid_winner:
        raise InvalidTurn("Only the bid winner can select trump.")
    if card not in state.hand(position):
        raise CardNotInHand(f"{card} is not in the bid winner's hand.")


def hidden_lead_allowed(card: Card, hand: Sequence[Card], trump_card: Card, rule: str) -> bool:
    """Return True if the bid winner may lead ``card`` while trump is hidden."""
    if rule == "trump_card_only":
        if card != trump_card:
            return True
        same_suit = [c for c in hand if c.suit is trump_card.suit]
        return len(same_suit) == 1

    if card.suit is not trump_card.suit:
        return True
    return all(c.suit is trump_card.suit for c in hand)


def hidden_follow_allowed(card: Card, hand: Sequence[Card], led: Suit, trump_card: Card) -> bool:
    """Return True if the bid winner may follow with ``card`` while trump is hidden.

    The designated trump card stays back unless the bid winner is void in the
    lead suit or it is their only card of that suit.
    """
    if card != trump_card:
        return True
    led_cards = [c for c in hand if c.suit is led]
    return not led_cards or led_cards == [trump_card]


def check_ask(state: RoundState, position: int) -> None:
    """Raise a ``RuleViolation`` unless ``position`` may ask for trump now."""
    if state.trump_card is None:
        raise InvalidPhase("Trump has not been selected yet.")
    if state.trump_revealed:
        raise TrumpAlreadyRevealed("Trump has already been revealed.")
    if position != state.current_player:
        raise InvalidTurn("Only the player on turn can ask for trump.")

    led = lead_suit(state.current_trick)
    if led is None:
        raise TrumpAskNotAllowed("You cannot ask for trump on a trick you are leading.")
    if any(card.suit is led for card in state.hand(position)):
        raise TrumpAskNotAllowed(f"You hold {led} and must follow suit.")


def can_ask(state: RoundState, position: int) -> bool:
    if state.trick_locked:
        return False
    try:
        check_ask(state, position)
    except (InvalidPhase, InvalidTurn, TrumpAlreadyRevealed, TrumpAskNotAllowed):
        return False
    return True


def asker_obligation(state: RoundState, position: int) -> Optional[Suit]:
    """Return the suit the asker must play next, if any."""
    if state.trump_asked_by != position or state.trump_played_after_ask:
        return None
    trump = state.trump_suit
    if trump is None:
        return None
    if any(card.suit is trump for card in state.hand(position)):
        return trump
    return None
