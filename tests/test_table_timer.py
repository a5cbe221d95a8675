from game28.actions import AskTrump, PlaceBid, PlayCard, ResetRound, SelectTrump, StartRound
from game28.cards import card_from_id
from game28.deck import build_deck
from game28.rules import RuleSet
from game28.state import Phase
from game28.table import ManualScheduler, Table


def opened_table(rules=None):
    scheduler = ManualScheduler()
    table = Table(scheduler, rules=rules)
    for seat in range(4):
        assert table.seat(f"p{seat}", f"Player {seat}") == seat
    table.submit(StartRound(player=0, deck=tuple(build_deck())))
    for action in (PlaceBid(player=1, amount=16), PlaceBid.pass_(2), PlaceBid.pass_(3), PlaceBid.pass_(0)):
        table.submit(action)
    table.submit(SelectTrump(player=1, card=card_from_id("hearts-J")))
    return table, scheduler


def finish_first_trick(table):
    table.submit(PlayCard(player=1, card=card_from_id("clubs-A")))
    table.submit(AskTrump(player=2))
    table.submit(PlayCard(player=2, card=card_from_id("spades-7")))
    table.submit(PlayCard(player=3, card=card_from_id("spades-J")))
    table.submit(PlayCard(player=0, card=card_from_id("clubs-10")))


def test_trick_clears_when_timer_fires():
    table, scheduler = opened_table(RuleSet(trick_display_delay=2.5))
    finish_first_trick(table)

    assert scheduler.pending == 1
    assert table.state.trick_locked
    assert scheduler.advance(1.0) == 0
    assert table.state.trick_locked

    assert scheduler.advance(2.0) == 1
    assert scheduler.now == 3.0
    assert not table.state.trick_locked
    assert table.state.current_trick == ()
    assert table.state.current_player == 1


def test_reset_cancels_scheduled_clear():
    table, scheduler = opened_table()
    finish_first_trick(table)
    assert scheduler.pending == 1

    table.submit(ResetRound(player=0))
    assert scheduler.pending == 0
    assert scheduler.advance(60.0) == 0
    assert table.state.phase == Phase.LOBBY
    assert table.state.dealer_position == 1


def test_stale_timer_firing_is_dropped():
    table, scheduler = opened_table()
    finish_first_trick(table)
    before = table.state

    table._fire_clear(trick_number=7)
    assert table.state == before


def test_listeners_receive_transitions():
    table, scheduler = opened_table()
    seen = []
    table.subscribe(lambda transition: seen.append(transition.state.current_player))
    table.submit(PlayCard(player=1, card=card_from_id("clubs-A")))
    assert seen == [2]
