"""Registry of CPU opponents for one match.

Each CPU player gets its own :class:`OpponentController` and therefore its own
script host and environment; nothing is shared between players except the
event bus the front end listens on. Loading a new setup tears down every
existing host first.
"""

from __future__ import annotations

import logging
from typing import Dict, Iterable, List, Optional, Sequence

from .config import OpponentSetup
from .controller import OpponentController
from .events import EventBus
from .types import BoardSnapshot, LoadResult, MoveResult

logger = logging.getLogger(__name__)


class CpuOpponents:
    """Create, load and tear down the script hosts of all CPU players."""

    def __init__(self, events: Optional[EventBus] = None) -> None:
        self.events = events or EventBus()
        self._controllers: Dict[int, OpponentController] = {}

    def configure(self, setup: OpponentSetup) -> Dict[int, LoadResult]:
        """Replace all CPU opponents with the ones listed in ``setup``.

        Returns the load result per player id. Players whose script failed to
        load stay registered but not ready.
        """

        self.teardown()
        results: Dict[int, LoadResult] = {}
        for player_id, path in sorted(setup.scripts.items()):
            controller = OpponentController(setup.host_config(player_id), events=self.events)
            self._controllers[player_id] = controller
            results[player_id] = controller.load_script(path)
        loaded = [pid for pid, result in results.items() if result.ok]
        logger.info("Configured %d CPU opponent(s), ready: %s", len(results), loaded)
        return results

    def controller(self, player_id: int) -> OpponentController:
        try:
            return self._controllers[player_id]
        except KeyError as exc:
            raise KeyError(f"No CPU opponent configured for player {player_id}") from exc

    def is_cpu(self, player_id: int) -> bool:
        return player_id in self._controllers

    def player_ids(self) -> List[int]:
        return sorted(self._controllers)

    def ready_player_ids(self) -> List[int]:
        return [pid for pid in self.player_ids() if self._controllers[pid].ready]

    def request_move(
        self,
        player_id: int,
        snapshot: BoardSnapshot,
        possible_move_count: int,
        legal_moves: Optional[Iterable[Sequence[int]]] = None,
    ) -> MoveResult:
        return self.controller(player_id).request_move(snapshot, possible_move_count, legal_moves)

    def teardown(self) -> None:
        """Unload every script host and forget all CPU players."""

        for controller in self._controllers.values():
            controller.unload()
        if self._controllers:
            logger.debug("Tore down CPU opponents %s", sorted(self._controllers))
        self._controllers.clear()
