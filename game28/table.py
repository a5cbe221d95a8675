"""Single-writer table wrapper that owns the post-trick display timer.

The host supplies a ``Scheduler``; the table requests one cancelable clear per
completed trick and routes the firing back through ``apply`` as a
``ClearTrick`` action, so a reset in between can never be overwritten by a
late timer.
"""

from __future__ import annotations

import heapq
import itertools
import logging
import threading
from typing import Callable, Dict, Hashable, List, Optional, Protocol, Tuple

from .actions import Action, ClearTrick
from .errors import StaleTransition
from .events import TrickClearCancelled, TrickClearScheduled
from .game import Transition, apply, new_table, seat_player
from .rules import DEFAULT_RULES, RuleSet
from .state import RoundState

log = logging.getLogger(__name__)

Listener = Callable[[Transition], None]


class Scheduler(Protocol):
    def schedule_once(self, delay: float, callback: Callable[[], None]) -> Hashable:
        ...

    def cancel(self, token: Hashable) -> None:
        ...


class ManualScheduler:
    """Deterministic scheduler driven by ``advance``."""

    def __init__(self) -> None:
        self.now = 0.0
        self._counter = itertools.count()
        self._queue: List[Tuple[float, int]] = []
        self._callbacks: Dict[int, Callable[[], None]] = {}

    def schedule_once(self, delay: float, callback: Callable[[], None]) -> int:
        token = next(self._counter)
        self._callbacks[token] = callback
        heapq.heappush(self._queue, (self.now + delay, token))
        return token

    def cancel(self, token: Hashable) -> None:
        self._callbacks.pop(token, None)

    @property
    def pending(self) -> int:
        return len(self._callbacks)

    def advance(self, seconds: Optional[float] = None) -> int:
        """Move the clock forward (to the next due callback if ``seconds`` is None)."""
        if seconds is None:
            live = [due for due, token in self._queue if token in self._callbacks]
            target = min(live) if live else self.now
        else:
            target = self.now + seconds
        fired = 0
        while self._queue and self._queue[0][0] <= target:
            due, token = heapq.heappop(self._queue)
            callback = self._callbacks.pop(token, None)
            if callback is None:
                continue
            self.now = due
            callback()
            fired += 1
        self.now = max(self.now, target)
        return fired


class Table:
    """Holds the current ``RoundState`` and serialises every change to it."""

    def __init__(
        self,
        scheduler: Scheduler,
        *,
        state: Optional[RoundState] = None,
        rules: Optional[RuleSet] = None,
    ) -> None:
        self.scheduler = scheduler
        self.rules = rules or DEFAULT_RULES
        self._state = state or new_table()
        self._lock = threading.RLock()
        self._clear_token: Optional[Hashable] = None
        self._listeners: List[Listener] = []

    @property
    def state(self) -> RoundState:
        return self._state

    def subscribe(self, listener: Listener) -> None:
        self._listeners.append(listener)

    def seat(self, player_id: str, name: str, position: Optional[int] = None) -> int:
        with self._lock:
            self._state = seat_player(self._state, player_id, name, position)
            return self._state.position_of(player_id)

    def submit(self, action: Action) -> Transition:
        with self._lock:
            transition = apply(self._state, action, self.rules)
            self._state = transition.state
            self._handle_events(transition)
        for listener in self._listeners:
            listener(transition)
        return transition

    def _handle_events(self, transition: Transition) -> None:
        for event in transition.events:
            if isinstance(event, TrickClearScheduled):
                self._cancel_clear()
                trick_number = event.trick_number
                self._clear_token = self.scheduler.schedule_once(
                    event.delay, lambda: self._fire_clear(trick_number)
                )
            elif isinstance(event, TrickClearCancelled):
                self._cancel_clear()

    def _cancel_clear(self) -> None:
        if self._clear_token is not None:
            self.scheduler.cancel(self._clear_token)
            self._clear_token = None

    def _fire_clear(self, trick_number: int) -> None:
        with self._lock:
            self._clear_token = None
        try:
            self.submit(ClearTrick(trick_number=trick_number))
        except StaleTransition:
            log.info("Dropped stale clear for trick %d", trick_number)
