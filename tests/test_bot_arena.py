from bots.baseline_greedy import GreedyBot, hand_estimate
from bots.bot_arena import run_match
from bots.random_bot import RandomBot
from game28.cards import card_from_id


def test_run_match_executes():
    bots = [GreedyBot(), RandomBot(seed=1), GreedyBot(), RandomBot(seed=2)]
    results = run_match(bots, n_rounds=3, seed=7)
    assert sum(results["wins"]) == 3
    assert len(results["history"]) == 3
    assert all(sum(entry["team_points"]) == 28 for entry in results["history"])


def test_greedy_estimate_rewards_long_strong_suits():
    strong = [card_from_id(card_id) for card_id in ("spades-J", "spades-9", "spades-A", "hearts-7")]
    weak = [card_from_id(card_id) for card_id in ("spades-7", "hearts-8", "clubs-Q", "diamonds-K")]
    assert hand_estimate(strong) > hand_estimate(weak)
