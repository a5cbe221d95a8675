"""Common bot strategy interfaces."""

from __future__ import annotations

from typing import Optional

from game28.cards import Card
from game28.mechanics import legal_moves
from game28.rules import DEFAULT_RULES, RuleSet
from game28.state import RoundState


class BotStrategy:
    """Base class for bot policies.

    Bots receive the full ``RoundState`` but only read their own seat's hand.
    """

    name: str = "BaseBot"

    def on_round_start(self, state: RoundState, position: int) -> None:
        """Optional hook invoked once the cards are dealt."""
        return None

    def choose_bid(self, state: RoundState, position: int, rules: RuleSet = DEFAULT_RULES) -> Optional[int]:
        """Return a bid amount, or None to pass."""
        return None

    def choose_trump(self, state: RoundState, position: int) -> Card:
        """Return the card from hand to set aside as trump."""
        return state.hand(position)[0]

    def wants_trump(self, state: RoundState, position: int) -> bool:
        """Return True to ask for trump when allowed."""
        return False

    def choose_card(self, state: RoundState, position: int, rules: RuleSet = DEFAULT_RULES) -> Card:
        legal = legal_moves(state, position, rules)
        if not legal:
            raise RuntimeError("No legal plays available for bot.")
        return legal[0]
