"""Turn orchestration for one CPU opponent.

A turn moves through ``IDLE -> REQUESTING -> VALIDATING -> ACCEPTED | REJECTED``
and back to ``IDLE``. Requests are synchronous: the caller blocks while the
script runs, and a second request for the same player is refused until the
first one has resolved.
"""

from __future__ import annotations

import logging
from enum import Enum
from pathlib import Path
from typing import Iterable, Optional, Sequence, Union

from . import board_codec, validator
from .config import HostConfig
from .errors import OpponentNotReadyError, TurnInProgressError
from .events import EventBus, MoveAcceptedEvent, ScriptErrorEvent
from .script_host import ScriptHost
from .types import BoardSnapshot, LoadResult, MoveResult

logger = logging.getLogger(__name__)


class TurnState(Enum):
    """State of the current CPU turn."""

    IDLE = "idle"
    REQUESTING = "requesting"
    VALIDATING = "validating"
    ACCEPTED = "accepted"
    REJECTED = "rejected"


class OpponentController:
    """Drive one request/response cycle per CPU turn.

    Usage:
        controller = OpponentController(HostConfig(...), events=bus)
        if controller.load_script("cpu/random_cpu.py"):
            result = controller.request_move(board, possible_move_count=12)
    """

    def __init__(self, config: HostConfig, events: Optional[EventBus] = None) -> None:
        self.events = events or EventBus()
        self.host = ScriptHost(config, events=self.events)
        self.state = TurnState.IDLE
        self.last_result: Optional[MoveResult] = None

    @property
    def player_id(self) -> int:
        return self.host.player_id

    @property
    def ready(self) -> bool:
        return self.host.ready

    def load_script(self, path: Union[str, Path]) -> LoadResult:
        if self.state is not TurnState.IDLE:
            raise TurnInProgressError(f"CPU {self.player_id} cannot reload during a turn")
        return self.host.load_script(path)

    def request_move(
        self,
        snapshot: BoardSnapshot,
        possible_move_count: int,
        legal_moves: Optional[Iterable[Sequence[int]]] = None,
    ) -> MoveResult:
        """Ask the script for a move on ``snapshot`` and validate the answer.

        Emits :class:`MoveAcceptedEvent` or :class:`ScriptErrorEvent` and
        returns the same outcome. ``snapshot`` is only read.
        """

        if not self.host.ready:
            raise OpponentNotReadyError(f"CPU {self.player_id} has no successfully loaded script")
        if self.state is not TurnState.IDLE:
            raise TurnInProgressError(f"CPU {self.player_id} already has a move request in progress")

        board_json = board_codec.encode(snapshot)
        moves_json = board_codec.encode_moves(legal_moves)
        board_size = len(snapshot)
        self.state = TurnState.REQUESTING
        try:
            outcome = self.host.call_entry_point(possible_move_count, board_json, moves_json)
            self.state = TurnState.VALIDATING
            result = validator.validate(outcome, board_size)
            if result.failure is not None:
                self.state = TurnState.REJECTED
                logger.error(
                    "CPU %d script failed on move request: %s", self.player_id, result.failure.describe()
                )
                self.events.emit(ScriptErrorEvent.from_failure(self.player_id, result.failure))
            elif result.move is not None:
                self.state = TurnState.ACCEPTED
                logger.debug(
                    "CPU %d move: %s (of %d possible)",
                    self.player_id,
                    result.move.as_list(),
                    possible_move_count,
                )
                self.events.emit(MoveAcceptedEvent.from_move(self.player_id, result.move))
            self.last_result = result
            return result
        finally:
            self.state = TurnState.IDLE

    def unload(self) -> None:
        self.host.unload()
