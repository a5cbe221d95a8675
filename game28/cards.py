"""Card-related data structures and helpers for 28."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Iterable, List, Mapping, Optional


class Suit(Enum):
    HEARTS = "hearts"
    DIAMONDS = "diamonds"
    CLUBS = "clubs"
    SPADES = "spades"

    def __str__(self) -> str:
        return self.value


class Rank(Enum):
    SEVEN = "7"
    EIGHT = "8"
    NINE = "9"
    TEN = "10"
    JACK = "J"
    QUEEN = "Q"
    KING = "K"
    ACE = "A"

    def __str__(self) -> str:
        return self.value


# Rank order used for dealing and display.
RANK_ORDER: list[Rank] = list(Rank)
SUIT_ORDER: list[Suit] = list(Suit)

# Base trick strength. Only J, 9, A and 10 carry weight.
TRICK_VALUES: dict[Rank, int] = {
    Rank.JACK: 3,
    Rank.NINE: 2,
    Rank.ACE: 1,
    Rank.TEN: 1,
    Rank.KING: 0,
    Rank.QUEEN: 0,
    Rank.EIGHT: 0,
    Rank.SEVEN: 0,
}

# Card point values; the deck totals 28.
CARD_POINTS: dict[Rank, int] = {
    Rank.JACK: 3,
    Rank.NINE: 2,
    Rank.ACE: 1,
    Rank.TEN: 1,
    Rank.KING: 0,
    Rank.QUEEN: 0,
    Rank.EIGHT: 0,
    Rank.SEVEN: 0,
}

TRUMP_BONUS = 100

_RANK_LABELS: dict[Rank, str] = {
    Rank.JACK: "Jack",
    Rank.QUEEN: "Queen",
    Rank.KING: "King",
    Rank.ACE: "Ace",
}


@dataclass(frozen=True)
class Card:
    """Immutable representation of a playing card."""

    suit: Suit
    rank: Rank

    @property
    def id(self) -> str:
        return f"{self.suit.value}-{self.rank.value}"

    def point_value(self) -> int:
        return CARD_POINTS[self.rank]

    def __str__(self) -> str:
        return self.id


def trick_value(rank: Rank) -> int:
    return TRICK_VALUES[rank]


def point_value(rank: Rank) -> int:
    return CARD_POINTS[rank]


def card_strength(card: Card, trump_card: Optional[Card]) -> int:
    """Heuristic ranking of a card; trump-suit cards sort above the rest.

    Trick resolution does not use this (see ``trick.ranked_value``).
    """
    value = TRICK_VALUES[card.rank]
    if trump_card is not None and card.suit is trump_card.suit:
        value += TRUMP_BONUS
    return value


def sort_key(card: Card) -> tuple[int, int]:
    return SUIT_ORDER.index(card.suit), RANK_ORDER.index(card.rank)


def sort_cards(cards: Iterable[Card]) -> List[Card]:
    """Return cards grouped by suit and ordered 7..A within each suit."""
    return sorted(cards, key=sort_key)


def serialize_card(card: Card) -> dict[str, str]:
    return {"suit": card.suit.value, "rank": card.rank.value, "id": card.id}


def deserialize_card(payload: Mapping[str, str]) -> Card:
    suit_name = str(payload["suit"]).lower()
    rank_name = str(payload["rank"]).upper()
    try:
        return Card(Suit(suit_name), Rank(rank_name))
    except ValueError as exc:
        raise ValueError(f"Unknown card {payload!r}") from exc


def card_from_id(card_id: str) -> Card:
    """Parse ids such as ``"hearts-J"``."""
    suit_name, sep, rank_name = card_id.partition("-")
    if not sep:
        raise ValueError(f"Malformed card id {card_id!r}")
    return deserialize_card({"suit": suit_name, "rank": rank_name})


def card_label(card: Card) -> str:
    rank = _RANK_LABELS.get(card.rank, card.rank.value)
    return f"{rank} of {card.suit.value.title()}"
