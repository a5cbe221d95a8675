"""Baseline greedy bot."""

from __future__ import annotations

from collections import Counter
from typing import Optional, Sequence

from game28.bidding import can_bid
from game28.cards import Card, Suit, card_strength, trick_value
from game28.mechanics import legal_moves
from game28.rules import DEFAULT_RULES, RuleSet
from game28.state import RoundState
from game28.trick import TrickPlay, resolve_trick

from .base import BotStrategy


def _longest_suit(cards: Sequence[Card]) -> Suit:
    counts = Counter(card.suit for card in cards)
    return max(counts, key=lambda suit: (counts[suit], sum(trick_value(c.rank) for c in cards if c.suit is suit)))


def hand_estimate(cards: Sequence[Card]) -> int:
    """Rough bid target from the first four cards."""
    suit = _longest_suit(cards)
    strength = sum(trick_value(card.rank) for card in cards)
    length_bonus = 2 * sum(1 for card in cards if card.suit is suit)
    return 12 + strength + length_bonus


class GreedyBot(BotStrategy):
    name = "Greedy"

    def choose_bid(self, state: RoundState, position: int, rules: RuleSet = DEFAULT_RULES) -> Optional[int]:
        if not can_bid(position, state.bids, state.bid_winner):
            return None
        target = min(hand_estimate(state.hand(position)), rules.max_bid)
        floor = rules.min_bid if state.highest_bid is None else state.highest_bid + 1
        if state.bid_winner is None and not state.bids:
            # Open the auction so the deal is not thrown in.
            return max(floor, target)
        if floor > target:
            return None
        return floor

    def choose_trump(self, state: RoundState, position: int) -> Card:
        cards = state.hand(position)
        suit = _longest_suit(cards)
        in_suit = [card for card in cards if card.suit is suit]
        # Weakest card of the longest suit.
        return min(in_suit, key=lambda card: trick_value(card.rank))

    def wants_trump(self, state: RoundState, position: int) -> bool:
        if not state.current_trick:
            return False
        leader = state.current_trick[resolve_trick(state.current_trick, None)]
        return leader.position % 2 != position % 2

    def choose_card(self, state: RoundState, position: int, rules: RuleSet = DEFAULT_RULES) -> Card:
        legal = legal_moves(state, position, rules)
        if not legal:
            raise RuntimeError("No legal plays available for bot.")
        trump_card = state.trump_card if (state.trump_revealed or position == state.bid_winner) else None
        if not state.current_trick:
            return max(legal, key=lambda card: card_strength(card, trump_card))

        trump = trump_card.suit if trump_card else None
        winners = []
        for card in legal:
            trial = state.current_trick + (TrickPlay(player="", card=card, position=position),)
            if trial[resolve_trick(trial, trump)].position == position:
                winners.append(card)
        if winners:
            return min(winners, key=lambda card: card_strength(card, trump_card))
        return min(legal, key=lambda card: card_strength(card, trump_card))
