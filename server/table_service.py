"""REST service hosting 28 tables in memory."""

from __future__ import annotations

import logging
import random
import threading
import uuid
from typing import Callable, Dict, Hashable, Literal, Optional

from fastapi import FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel

from game28.actions import AskTrump, PlaceBid, PlayCard, ResetRound, SelectTrump, StartRound
from game28.cards import deserialize_card
from game28.deck import build_deck, default_rng, shuffle
from game28.errors import RuleViolation
from game28.projection import project, view_to_dict
from game28.rules import RuleSet, rules_from_env
from game28.table import Table

log = logging.getLogger(__name__)


class ThreadingScheduler:
    """Timer collaborator backed by ``threading.Timer``."""

    def __init__(self) -> None:
        self._timers: Dict[str, threading.Timer] = {}
        self._lock = threading.Lock()

    def schedule_once(self, delay: float, callback: Callable[[], None]) -> str:
        token = uuid.uuid4().hex

        def run() -> None:
            with self._lock:
                if self._timers.pop(token, None) is None:
                    return
            callback()

        timer = threading.Timer(delay, run)
        timer.daemon = True
        with self._lock:
            self._timers[token] = timer
        timer.start()
        return token

    def cancel(self, token: Hashable) -> None:
        with self._lock:
            timer = self._timers.pop(str(token), None)
        if timer is not None:
            timer.cancel()


class CardPayload(BaseModel):
    suit: str
    rank: str


class SeatRequest(BaseModel):
    player_id: Optional[str] = None
    name: str
    position: Optional[int] = None


class ActionRequest(BaseModel):
    kind: Literal["start_round", "place_bid", "pass", "select_trump", "ask_trump", "play_card", "reset_round"]
    player: int
    amount: Optional[int] = None
    card: Optional[CardPayload] = None


class CreateTableRequest(BaseModel):
    seed: Optional[int] = None


class HostedTable:
    def __init__(self, table: Table, rng: random.Random) -> None:
        self.table = table
        self.rng = rng


tables: Dict[str, HostedTable] = {}
rules: RuleSet = rules_from_env()
scheduler = ThreadingScheduler()


app = FastAPI(title="28 Table Service")
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


def ensure_table(table_id: str) -> HostedTable:
    hosted = tables.get(table_id)
    if hosted is None:
        raise HTTPException(status_code=404, detail="Table not found")
    return hosted


def rejected(exc: RuleViolation) -> HTTPException:
    return HTTPException(status_code=409, detail=exc.to_dict())


def build_action(request: ActionRequest, hosted: HostedTable):
    if request.kind == "start_round":
        return StartRound(player=request.player, deck=tuple(shuffle(build_deck(), hosted.rng)))
    if request.kind == "pass":
        return PlaceBid.pass_(request.player)
    if request.kind == "place_bid":
        if request.amount is None:
            raise HTTPException(status_code=422, detail="place_bid requires an amount")
        return PlaceBid(player=request.player, amount=request.amount)
    if request.kind == "ask_trump":
        return AskTrump(player=request.player)
    if request.kind == "reset_round":
        return ResetRound(player=request.player)

    if request.card is None:
        raise HTTPException(status_code=422, detail=f"{request.kind} requires a card")
    try:
        card = deserialize_card(request.card.model_dump())
    except ValueError as exc:
        raise HTTPException(status_code=422, detail=str(exc)) from exc
    if request.kind == "select_trump":
        return SelectTrump(player=request.player, card=card)
    return PlayCard(player=request.player, card=card)


@app.post("/tables")
def create_table(request: CreateTableRequest) -> Dict[str, object]:
    rng = random.Random(request.seed) if request.seed is not None else default_rng()
    table_id = uuid.uuid4().hex
    tables[table_id] = HostedTable(Table(scheduler, rules=rules), rng)
    log.info("Created table %s", table_id)
    return {"table_id": table_id, "state": view_to_dict(project(tables[table_id].table.state))}


@app.post("/tables/{table_id}/seats")
def take_seat(table_id: str, request: SeatRequest) -> Dict[str, object]:
    hosted = ensure_table(table_id)
    player_id = request.player_id or uuid.uuid4().hex
    try:
        position = hosted.table.seat(player_id, request.name, request.position)
    except RuleViolation as exc:
        raise rejected(exc) from exc
    return {
        "player_id": player_id,
        "position": position,
        "state": view_to_dict(project(hosted.table.state, position, rules)),
    }


@app.post("/tables/{table_id}/actions")
def submit_action(table_id: str, request: ActionRequest) -> Dict[str, object]:
    hosted = ensure_table(table_id)
    action = build_action(request, hosted)
    try:
        transition = hosted.table.submit(action)
    except RuleViolation as exc:
        raise rejected(exc) from exc
    return {
        "events": [type(event).__name__ for event in transition.events],
        "state": view_to_dict(project(transition.state, request.player, rules)),
    }


@app.get("/tables/{table_id}")
def get_table(table_id: str, viewer: Optional[int] = None) -> Dict[str, object]:
    hosted = ensure_table(table_id)
    return {"state": view_to_dict(project(hosted.table.state, viewer, rules))}
