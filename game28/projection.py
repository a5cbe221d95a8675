"""Read-only views of a round for rendering layers and agents."""

from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Optional

from .cards import Card, card_label, serialize_card, sort_cards
from .mechanics import can_ask_for_trump, legal_moves
from .rules import DEFAULT_RULES, RuleSet
from .state import Phase, RoundState
from .trick import TrickPlay


@dataclass
class PlayerView:
    id: str
    name: str
    position: int
    team: int
    card_count: int
    is_dealer: bool


@dataclass
class TrickPlayView:
    player: str
    position: int
    card: dict
    label: str


@dataclass
class BidView:
    player: int
    amount: Optional[int]


@dataclass
class OutcomeView:
    team_points: list[int]
    team_tricks: list[int]
    bidding_team: int
    bid: int
    bid_made: bool


@dataclass
class TableView:
    phase: str
    viewer: Optional[int]
    round_number: int
    dealer_position: int
    players: list[PlayerView]
    hand: list[dict]
    hand_labels: list[str]
    legal_moves: list[dict]
    can_ask_for_trump: bool
    current_bidder: Optional[int]
    current_player: Optional[int]
    highest_bid: Optional[int]
    bid_winner: Optional[int]
    bids: list[BidView]
    trump_card: Optional[dict]
    trump_suit: Optional[str]
    trump_revealed: bool
    trump_asked_by: Optional[int]
    must_play_trump: bool
    current_trick: list[TrickPlayView]
    tricks_played: int
    team_points: list[int]
    team_tricks: list[int]
    trick_on_display: bool
    outcome: Optional[OutcomeView]


def _play_view(play: TrickPlay) -> TrickPlayView:
    return TrickPlayView(
        player=play.player,
        position=play.position,
        card=serialize_card(play.card),
        label=card_label(play.card),
    )


def _trump_visible(state: RoundState, viewer: Optional[int]) -> bool:
    if state.trump_card is None:
        return False
    return state.trump_revealed or (viewer is not None and viewer == state.bid_winner)


def project(state: RoundState, viewer: Optional[int] = None, rules: RuleSet = DEFAULT_RULES) -> TableView:
    """Return what ``viewer`` may see; ``None`` gives a spectator view.

    Only the viewer's own cards are listed. The trump card is shown to the bid
    winner, and to everybody once it has been revealed.
    """
    own_hand: list[Card] = []
    moves: list[Card] = []
    can_ask = False
    must_play_trump = False
    if viewer is not None and viewer in range(len(state.hands)):
        own_hand = sort_cards(state.hand(viewer))
        moves = legal_moves(state, viewer, rules)
        can_ask = can_ask_for_trump(state, viewer)
        must_play_trump = (
            state.trump_asked_by == viewer
            and not state.trump_played_after_ask
            and any(card.suit is state.trump_suit for card in own_hand)
        )

    show_trump = _trump_visible(state, viewer)
    outcome = None
    if state.outcome is not None:
        outcome = OutcomeView(
            team_points=list(state.outcome.team_points),
            team_tricks=list(state.outcome.team_tricks),
            bidding_team=state.outcome.bidding_team,
            bid=state.outcome.bid,
            bid_made=state.outcome.bid_made,
        )

    current_trick = list(state.current_trick)
    if state.phase is Phase.GAME_OVER and state.completed_tricks:
        current_trick = list(state.completed_tricks[-1].plays)

    return TableView(
        phase=state.phase.value,
        viewer=viewer,
        round_number=state.round_number,
        dealer_position=state.dealer_position,
        players=[
            PlayerView(
                id=player.id,
                name=player.name,
                position=player.position,
                team=player.team,
                card_count=len(state.hand(player.position)) + len(state.reserves[player.position]),
                is_dealer=player.position == state.dealer_position,
            )
            for player in state.players
        ],
        hand=[serialize_card(card) for card in own_hand],
        hand_labels=[card_label(card) for card in own_hand],
        legal_moves=[serialize_card(card) for card in moves],
        can_ask_for_trump=can_ask,
        current_bidder=state.current_bidder,
        current_player=state.current_player,
        highest_bid=state.highest_bid,
        bid_winner=state.bid_winner,
        bids=[BidView(player=bid.player, amount=bid.amount) for bid in state.bids],
        trump_card=serialize_card(state.trump_card) if show_trump and state.trump_card else None,
        trump_suit=state.trump_card.suit.value if show_trump and state.trump_card else None,
        trump_revealed=state.trump_revealed,
        trump_asked_by=state.trump_asked_by,
        must_play_trump=must_play_trump,
        current_trick=[_play_view(play) for play in current_trick],
        tricks_played=len(state.completed_tricks),
        team_points=list(state.team_points),
        team_tricks=list(state.team_tricks),
        trick_on_display=state.trick_locked,
        outcome=outcome,
    )


def view_to_dict(view: TableView) -> dict:
    return asdict(view)
