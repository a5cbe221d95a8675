"""Deck creation, shuffling and dealing for 28."""

from __future__ import annotations

import random
from typing import List, Protocol, Sequence, Tuple

from .cards import Card, RANK_ORDER, SUIT_ORDER

DECK_SIZE = 32
PLAYER_COUNT = 4
FIRST_DEAL = 4


class ShuffleSource(Protocol):
    def shuffle(self, x: list) -> None:
        ...


def build_deck() -> List[Card]:
    """Return the ordered 32-card deck."""
    return [Card(suit, rank) for suit in SUIT_ORDER for rank in RANK_ORDER]


def default_rng() -> random.SystemRandom:
    """Entropy source used when the host does not supply one."""
    return random.SystemRandom()


def shuffle(deck: Sequence[Card], rng: ShuffleSource) -> List[Card]:
    """Return a shuffled copy of ``deck``; the input is left untouched."""
    cards = list(deck)
    rng.shuffle(cards)
    return cards


def validate_deck(deck: Sequence[Card]) -> None:
    cards = list(deck)
    if len(cards) != DECK_SIZE:
        raise ValueError(f"Deck must contain exactly {DECK_SIZE} cards, got {len(cards)}.")
    if set(cards) != set(build_deck()):
        raise ValueError("Deck must contain each of the 32 cards exactly once.")


def deal(deck: Sequence[Card]) -> Tuple[List[List[Card]], List[List[Card]]]:
    """Deal four cards to each seat, then four more held back in reserve.

    Seats bid on their first four cards; the reserve joins the hand once trump
    has been chosen.
    """
    validate_deck(deck)
    cards = list(deck)
    second = FIRST_DEAL * PLAYER_COUNT

    first_hands = [cards[i * FIRST_DEAL : (i + 1) * FIRST_DEAL] for i in range(PLAYER_COUNT)]
    reserves = [
        cards[second + i * FIRST_DEAL : second + (i + 1) * FIRST_DEAL] for i in range(PLAYER_COUNT)
    ]
    return first_hands, reserves
