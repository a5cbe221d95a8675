"""Round orchestration for 28: a pure reducer over ``RoundState``.

``apply(state, action)`` either returns a ``Transition`` holding the next state
and the events it produced, or raises a ``RuleViolation``. The state passed in
is never modified, so a rejected action leaves the round exactly as it was.

Phase transition table::

    LOBBY            StartRound
    BIDDING          PlaceBid, ResetRound
    TRUMP_SELECTION  SelectTrump, ResetRound
    PLAYING          AskTrump, PlayCard, ClearTrick, ResetRound
    GAME_OVER        ResetRound
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable, Dict, Iterable, Optional, Tuple

from .actions import Action, AskTrump, ClearTrick, PlaceBid, PlayCard, ResetRound, SelectTrump, StartRound
from .bidding import all_passed, bidding_closed, check_bid
from .cards import sort_cards
from .deck import PLAYER_COUNT, deal
from .errors import (
    InsufficientPlayers,
    InvalidDeck,
    InvalidPhase,
    InvalidTurn,
    RuleViolation,
    SeatUnavailable,
    StaleTransition,
    TrickDisplayLocked,
)
from .events import (
    BidPlaced,
    CardPlayed,
    Event,
    PhaseChanged,
    RoundCompleted,
    RoundReset,
    RoundStarted,
    RoundVoided,
    TrickClearCancelled,
    TrickClearScheduled,
    TrickCleared,
    TrickCompleted,
    TrumpRevealed,
    TrumpSelected,
)
from .mechanics import check_play
from .rules import DEFAULT_RULES, RuleSet
from .scoring import TRICKS_PER_ROUND, score_round, team_of, trick_points
from .state import (
    Bid,
    PendingTrickClear,
    Phase,
    Player,
    RoundState,
    add_to_team,
    next_seat,
    replace_hand,
)
from .trick import TRICK_SIZE, CompletedTrick, TrickPlay, resolve_trick
from .trump import check_ask, check_trump_selection

log = logging.getLogger(__name__)


@dataclass(frozen=True)
class Transition:
    state: RoundState
    events: Tuple[Event, ...]


TRANSITIONS: Dict[Phase, Tuple[type, ...]] = {
    Phase.LOBBY: (StartRound,),
    Phase.BIDDING: (PlaceBid, ResetRound),
    Phase.TRUMP_SELECTION: (SelectTrump, ResetRound),
    Phase.PLAYING: (AskTrump, PlayCard, ClearTrick, ResetRound),
    Phase.GAME_OVER: (ResetRound,),
}


def new_table(players: Iterable[Player] = (), *, dealer_position: int = 0) -> RoundState:
    seated = tuple(sorted(players, key=lambda p: p.position))
    return RoundState(phase=Phase.LOBBY, players=seated, dealer_position=dealer_position % PLAYER_COUNT)


def seat_player(
    state: RoundState,
    player_id: str,
    name: str,
    position: Optional[int] = None,
) -> RoundState:
    """Return a lobby state with one more player seated."""
    if state.phase is not Phase.LOBBY:
        raise InvalidPhase("Players can only be seated in the lobby.")
    taken = {player.position for player in state.players}
    if any(player.id == player_id for player in state.players):
        raise SeatUnavailable(f"Player {player_id!r} is already seated.")
    if position is None:
        free = [seat for seat in range(PLAYER_COUNT) if seat not in taken]
        if not free:
            raise SeatUnavailable("The table is full.")
        position = free[0]
    if position not in range(PLAYER_COUNT) or position in taken:
        raise SeatUnavailable(f"Seat {position} is not available.")
    seated = tuple(sorted(state.players + (Player(player_id, name, position),), key=lambda p: p.position))
    return state.evolve(players=seated)


def apply(state: RoundState, action: Action, rules: Optional[RuleSet] = None) -> Transition:
    rules = rules or DEFAULT_RULES
    if isinstance(action, ClearTrick) and state.phase is not Phase.PLAYING:
        raise StaleTransition("No trick is waiting to be cleared.")
    if not isinstance(action, TRANSITIONS[state.phase]):
        raise InvalidPhase(f"{type(action).__name__} is not allowed during {state.phase}.")

    handler = _HANDLERS[type(action)]
    try:
        transition = handler(state, action, rules)
    except RuleViolation as exc:
        log.debug("Rejected %s in %s: %s", type(action).__name__, state.phase, exc.kind)
        raise
    log.debug("Applied %s: %s -> %s", type(action).__name__, state.phase, transition.state.phase)
    return transition


def _phase_change(before: RoundState, after: RoundState) -> Tuple[Event, ...]:
    if before.phase is after.phase:
        return ()
    return (PhaseChanged(previous=before.phase, phase=after.phase),)


def _start_round(state: RoundState, action: StartRound, rules: RuleSet) -> Transition:
    if len(state.players) != PLAYER_COUNT:
        raise InsufficientPlayers(f"Need exactly {PLAYER_COUNT} players to start, have {len(state.players)}.")
    if action.player not in range(PLAYER_COUNT):
        raise InvalidTurn("Only a seated player can start the round.")
    try:
        first_hands, reserves = deal(action.deck)
    except ValueError as exc:
        raise InvalidDeck(str(exc)) from exc

    first_bidder = next_seat(state.dealer_position)
    new_state = RoundState(
        phase=Phase.BIDDING,
        players=state.players,
        hands=tuple(tuple(sort_cards(hand)) for hand in first_hands),
        reserves=tuple(tuple(sort_cards(hand)) for hand in reserves),
        current_bidder=first_bidder,
        dealer_position=state.dealer_position,
        round_number=state.round_number + 1,
    )
    log.info("Round %d started, dealer seat %d", new_state.round_number, state.dealer_position)
    events = (RoundStarted(dealer_position=state.dealer_position, first_bidder=first_bidder),)
    return Transition(new_state, events + _phase_change(state, new_state))


def _place_bid(state: RoundState, action: PlaceBid, rules: RuleSet) -> Transition:
    check_bid(state, action.player, action.amount, rules)
    bids = state.bids + (Bid(player=action.player, amount=action.amount, order=len(state.bids)),)
    events: Tuple[Event, ...] = (BidPlaced(player=action.player, amount=action.amount),)

    if action.amount is not None:
        new_state = state.evolve(
            bids=bids,
            highest_bid=action.amount,
            bid_winner=action.player,
            pass_count=0,
            current_bidder=next_seat(action.player),
        )
        return Transition(new_state, events)

    pass_count = state.pass_count + 1
    if bidding_closed(pass_count, state.bid_winner):
        new_state = state.evolve(
            bids=bids,
            pass_count=pass_count,
            phase=Phase.TRUMP_SELECTION,
            current_bidder=None,
            current_player=state.bid_winner,
        )
        log.info("Bidding closed: seat %s won at %s", state.bid_winner, state.highest_bid)
        return Transition(new_state, events + _phase_change(state, new_state))

    if all_passed(pass_count, state.bid_winner):
        new_state = new_table(state.players, dealer_position=state.dealer_position).evolve(
            round_number=state.round_number
        )
        log.info("All seats passed; round %d voided", state.round_number)
        events += (RoundVoided(dealer_position=state.dealer_position),)
        return Transition(new_state, events + _phase_change(state, new_state))

    new_state = state.evolve(bids=bids, pass_count=pass_count, current_bidder=next_seat(action.player))
    return Transition(new_state, events)


def _select_trump(state: RoundState, action: SelectTrump, rules: RuleSet) -> Transition:
    check_trump_selection(state, action.player, action.card)
    hands = tuple(
        tuple(sort_cards(state.hands[seat] + state.reserves[seat])) for seat in range(PLAYER_COUNT)
    )
    new_state = state.evolve(
        phase=Phase.PLAYING,
        hands=hands,
        reserves=((),) * PLAYER_COUNT,
        trump_card=action.card,
        trump_revealed=False,
        current_trick=(),
        current_player=next_seat(state.dealer_position),
    )
    events = (TrumpSelected(player=action.player),)
    return Transition(new_state, events + _phase_change(state, new_state))


def _ask_trump(state: RoundState, action: AskTrump, rules: RuleSet) -> Transition:
    if state.trick_locked:
        raise TrickDisplayLocked("Please wait while the trick is being displayed.")
    check_ask(state, action.player)
    assert state.trump_card is not None
    new_state = state.evolve(
        trump_revealed=True,
        trump_asked_by=action.player,
        trump_played_after_ask=False,
    )
    log.debug("Seat %d asked for trump", action.player)
    return Transition(new_state, (TrumpRevealed(asked_by=action.player, trump_card=state.trump_card),))


def _play_card(state: RoundState, action: PlayCard, rules: RuleSet) -> Transition:
    position = action.player
    card = action.card
    check_play(state, position, card, rules)

    hand = tuple(c for c in state.hand(position) if c != card)
    play = TrickPlay(player=state.player_at(position).id, card=card, position=position)
    trick = state.current_trick + (play,)
    played_after_ask = state.trump_played_after_ask or (
        state.trump_asked_by == position and card.suit is state.trump_suit
    )
    events: Tuple[Event, ...] = (CardPlayed(player=position, card=card),)

    if len(trick) < TRICK_SIZE:
        new_state = state.evolve(
            hands=replace_hand(state.hands, position, hand),
            current_trick=trick,
            current_player=next_seat(position),
            trump_played_after_ask=played_after_ask,
        )
        return Transition(new_state, events)

    winner = trick[resolve_trick(trick, state.trump_suit)].position
    points = trick_points(trick)
    completed = state.completed_tricks + (CompletedTrick(plays=trick, winner=winner, points=points),)
    team = team_of(winner)
    trick_number = len(completed)
    events += (TrickCompleted(trick_number=trick_number, winner=winner, points=points),)

    resolved = state.evolve(
        hands=replace_hand(state.hands, position, hand),
        current_trick=trick,
        completed_tricks=completed,
        current_player=winner,
        team_points=add_to_team(state.team_points, team, points),
        team_tricks=add_to_team(state.team_tricks, team, 1),
        trump_asked_by=None,
        trump_played_after_ask=False,
    )

    if trick_number < TRICKS_PER_ROUND:
        new_state = resolved.evolve(
            pending_trick_clear=PendingTrickClear(trick_number=trick_number, next_player=winner)
        )
        events += (TrickClearScheduled(trick_number=trick_number, delay=rules.trick_display_delay),)
        return Transition(new_state, events)

    assert state.bid_winner is not None and state.highest_bid is not None
    outcome = score_round(completed, bid_winner=state.bid_winner, highest_bid=state.highest_bid)
    new_state = resolved.evolve(phase=Phase.GAME_OVER, current_trick=(), outcome=outcome)
    log.info(
        "Round %d over: points %s, bid %d %s",
        state.round_number,
        outcome.team_points,
        outcome.bid,
        "made" if outcome.bid_made else "lost",
    )
    events += (RoundCompleted(outcome=outcome),)
    return Transition(new_state, events + _phase_change(state, new_state))


def _clear_trick(state: RoundState, action: ClearTrick, rules: RuleSet) -> Transition:
    pending = state.pending_trick_clear
    if pending is None or pending.trick_number != action.trick_number:
        raise StaleTransition(f"Trick {action.trick_number} is not waiting to be cleared.")
    new_state = state.evolve(
        current_trick=(),
        current_player=pending.next_player,
        pending_trick_clear=None,
    )
    return Transition(new_state, (TrickCleared(trick_number=pending.trick_number, next_player=pending.next_player),))


def _reset_round(state: RoundState, action: ResetRound, rules: RuleSet) -> Transition:
    if action.player not in {player.position for player in state.players}:
        raise InvalidTurn("Only a seated player can reset the round.")
    events: Tuple[Event, ...] = ()
    if state.pending_trick_clear is not None:
        events += (TrickClearCancelled(trick_number=state.pending_trick_clear.trick_number),)

    dealer = next_seat(state.dealer_position)
    new_state = new_table(state.players, dealer_position=dealer).evolve(round_number=state.round_number)
    events += (RoundReset(dealer_position=dealer),)
    log.info("Round %d reset; dealer moves to seat %d", state.round_number, dealer)
    return Transition(new_state, events + _phase_change(state, new_state))


_HANDLERS: Dict[type, Callable[[RoundState, Action, RuleSet], Transition]] = {
    StartRound: _start_round,
    PlaceBid: _place_bid,
    SelectTrump: _select_trump,
    AskTrump: _ask_trump,
    PlayCard: _play_card,
    ClearTrick: _clear_trick,
    ResetRound: _reset_round,
}
