"""Random baseline bot."""

from __future__ import annotations

import random
from typing import Optional

from game28.bidding import can_bid
from game28.cards import Card
from game28.mechanics import legal_moves
from game28.rules import DEFAULT_RULES, RuleSet
from game28.state import RoundState

from .base import BotStrategy

# Random bids stay modest so rounds remain playable.
RANDOM_BID_CEILING = 20


class RandomBot(BotStrategy):
    name = "Random"

    def __init__(self, seed: Optional[int] = None, *, ask_rate: float = 0.5) -> None:
        self._rng = random.Random(seed)
        self.ask_rate = ask_rate

    def choose_bid(self, state: RoundState, position: int, rules: RuleSet = DEFAULT_RULES) -> Optional[int]:
        if not can_bid(position, state.bids, state.bid_winner):
            return None
        floor = rules.min_bid if state.highest_bid is None else state.highest_bid + 1
        ceiling = min(rules.max_bid, RANDOM_BID_CEILING)
        if floor > ceiling:
            return None
        if state.bid_winner is not None and self._rng.random() < 0.5:
            return None
        return self._rng.randint(floor, ceiling)

    def choose_trump(self, state: RoundState, position: int) -> Card:
        return self._rng.choice(list(state.hand(position)))

    def wants_trump(self, state: RoundState, position: int) -> bool:
        return self._rng.random() < self.ask_rate

    def choose_card(self, state: RoundState, position: int, rules: RuleSet = DEFAULT_RULES) -> Card:
        legal = legal_moves(state, position, rules)
        if not legal:
            raise RuntimeError("No legal plays available for bot.")
        return self._rng.choice(legal)
