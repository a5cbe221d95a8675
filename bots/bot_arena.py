"""Simple bot arena for 28."""

from __future__ import annotations

import argparse
import logging
import random
from typing import Dict, Iterable, Optional, Sequence

from game28.actions import AskTrump, ClearTrick, PlaceBid, PlayCard, ResetRound, SelectTrump, StartRound
from game28.deck import build_deck, shuffle
from game28.game import apply, new_table
from game28.mechanics import can_ask_for_trump
from game28.rules import DEFAULT_RULES, RuleSet
from game28.state import Phase, Player, RoundState

from .base import BotStrategy
from .baseline_greedy import GreedyBot
from .random_bot import RandomBot

log = logging.getLogger(__name__)

BOT_REGISTRY: Dict[str, type[BotStrategy]] = {
    "greedy": GreedyBot,
    "random": RandomBot,
}

MAX_DEALS = 20


def seat_bots(bots: Sequence[BotStrategy]) -> RoundState:
    if len(bots) != 4:
        raise ValueError("A table needs exactly four bots.")
    players = [Player(id=f"bot{seat}", name=f"{bot.name} {seat}", position=seat) for seat, bot in enumerate(bots)]
    return new_table(players)


def _deal(state: RoundState, bots: Sequence[BotStrategy], rng: random.Random, rules: RuleSet) -> RoundState:
    deck = tuple(shuffle(build_deck(), rng))
    state = apply(state, StartRound(player=state.dealer_position, deck=deck), rules).state
    for seat, bot in enumerate(bots):
        bot.on_round_start(state, seat)
    return state


def _resolve_bidding(state: RoundState, bots: Sequence[BotStrategy], rules: RuleSet) -> RoundState:
    while state.phase is Phase.BIDDING:
        seat = state.current_bidder
        assert seat is not None
        amount = bots[seat].choose_bid(state, seat, rules)
        state = apply(state, PlaceBid(player=seat, amount=amount), rules).state
    return state


def _play_out(state: RoundState, bots: Sequence[BotStrategy], rules: RuleSet) -> RoundState:
    while state.phase is Phase.PLAYING:
        if state.pending_trick_clear is not None:
            state = apply(state, ClearTrick(trick_number=state.pending_trick_clear.trick_number), rules).state
            continue
        seat = state.current_player
        assert seat is not None
        bot = bots[seat]
        if can_ask_for_trump(state, seat) and bot.wants_trump(state, seat):
            state = apply(state, AskTrump(player=seat), rules).state
        card = bot.choose_card(state, seat, rules)
        state = apply(state, PlayCard(player=seat, card=card), rules).state
    return state


def play_round(
    state: RoundState,
    bots: Sequence[BotStrategy],
    *,
    rng: random.Random,
    rules: RuleSet = DEFAULT_RULES,
) -> RoundState:
    """Play one round from the lobby to game over, re-dealing thrown-in hands."""
    for _ in range(MAX_DEALS):
        state = _resolve_bidding(_deal(state, bots, rng, rules), bots, rules)
        if state.phase is Phase.TRUMP_SELECTION:
            break
        log.debug("Deal thrown in; dealing again")
    else:
        raise RuntimeError(f"No bid after {MAX_DEALS} deals.")

    winner = state.bid_winner
    assert winner is not None
    trump = bots[winner].choose_trump(state, winner)
    state = apply(state, SelectTrump(player=winner, card=trump), rules).state
    return _play_out(state, bots, rules)


def run_match(
    bots: Sequence[BotStrategy],
    *,
    n_rounds: int = 10,
    seed: Optional[int] = None,
    rules: RuleSet = DEFAULT_RULES,
) -> dict:
    rng = random.Random(seed)
    state = seat_bots(bots)
    history = []
    wins = [0, 0]
    for _ in range(n_rounds):
        state = play_round(state, bots, rng=rng, rules=rules)
        outcome = state.outcome
        assert outcome is not None
        wins[outcome.winning_team] += 1
        history.append(
            {
                "team_points": outcome.team_points,
                "bidding_team": outcome.bidding_team,
                "bid": outcome.bid,
                "bid_made": outcome.bid_made,
            }
        )
        state = apply(state, ResetRound(player=0), rules).state
    return {"wins": wins, "history": history}


def main(argv: Iterable[str] | None = None) -> None:
    parser = argparse.ArgumentParser(description="Run a bot match.")
    parser.add_argument("--team-a", default="greedy", choices=BOT_REGISTRY.keys())
    parser.add_argument("--team-b", default="random", choices=BOT_REGISTRY.keys())
    parser.add_argument("--n", type=int, default=10, help="Number of rounds to play.")
    parser.add_argument("--seed", type=int, default=42)
    args = parser.parse_args(argv)

    team_a = BOT_REGISTRY[args.team_a]
    team_b = BOT_REGISTRY[args.team_b]
    bots = [team_a(), team_b(), team_a(), team_b()]
    results = run_match(bots, n_rounds=args.n, seed=args.seed)

    print(f"Round wins after {args.n} rounds: {results['wins']}")
    made = sum(1 for entry in results["history"] if entry["bid_made"])
    print(f"Bid success rate: {made}/{len(results['history'])}")


if __name__ == "__main__":
    main()
