"""Per-player host for CPU move scripts.

Each :class:`ScriptHost` owns one private globals dictionary in which the CPU
script is compiled and executed. Scripts see the values from
:meth:`HostConfig.environment`, a ``log`` callable, a read-only ``game``
accessor and, for each call, ``board_json`` and ``legal_moves_json``.
"""

from __future__ import annotations

import builtins
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Optional, Union

from .config import HostConfig
from .errors import (
    OpponentNotReadyError,
    ScriptContractError,
    ScriptError,
    ScriptIOError,
    ScriptRuntimeError,
    ScriptSyntaxError,
    describe_exception,
    script_line,
)
from .events import EventBus, ScriptErrorEvent
from .types import LoadResult, ScriptFailure

logger = logging.getLogger(__name__)

SCRIPT_MODULE_NAME = "__cpu_script__"
# Interpreter shutdown signals are not script failures.
SCRIPT_PASSTHROUGH = (KeyboardInterrupt, GeneratorExit)


class GameApi:
    """Read-only view of the match configuration bound as ``game`` for scripts."""

    __slots__ = ("_config", "_host")

    def __init__(self, config: HostConfig, host: "ScriptHost") -> None:
        self._config = config
        self._host = host

    def get_id(self) -> int:
        return self._config.player_id

    def get_num_of_players(self) -> int:
        return self._config.num_players

    def get_height_to_win(self) -> int:
        return self._config.height_to_win

    def get_towers_to_win(self) -> int:
        return self._config.towers_to_win

    def get_board_dimension_x(self) -> int:
        return self._config.board_width

    def get_board_dimension_y(self) -> int:
        return self._config.board_height

    def get_outside(self) -> str:
        return self._config.out_marker

    def get_padding(self) -> str:
        return self._config.pad_marker

    def log(self, message: str) -> None:
        self._host.log(message)


@dataclass(frozen=True)
class CallOutcome:
    """Raw result of one entry-point call; ``error`` is set if the call raised."""

    value: Any = None
    error: Optional[ScriptFailure] = None


class ScriptHost:
    """Load, evaluate and call one CPU script for a single player."""

    def __init__(self, config: HostConfig, events: Optional[EventBus] = None) -> None:
        self.config = config
        self.events = events or EventBus()
        self._game_api = GameApi(config, self)
        self._globals: Dict[str, Any] = self._fresh_globals("<no script>")
        self._script_path: Optional[str] = None
        self._ready = False

    @property
    def player_id(self) -> int:
        return self.config.player_id

    @property
    def ready(self) -> bool:
        return self._ready

    @property
    def script_path(self) -> Optional[str]:
        return self._script_path

    def log(self, message: str) -> None:
        """Log callback exposed to scripts; accepts a single string."""

        logger.debug("CPU %d - %s", self.player_id, message)

    def _fresh_globals(self, filename: str) -> Dict[str, Any]:
        namespace: Dict[str, Any] = {
            "__builtins__": builtins,
            "__name__": SCRIPT_MODULE_NAME,
            "__file__": filename,
            "board_json": "[]",
            "legal_moves_json": "[]",
        }
        self._publish(namespace)
        return namespace

    def _publish(self, namespace: Dict[str, Any]) -> None:
        namespace.update(self.config.environment())
        namespace["log"] = self.log
        namespace["game"] = self._game_api

    def load_script(self, path: Union[str, Path]) -> LoadResult:
        """Read and evaluate a script file, replacing any previously loaded script.

        On failure the host is left not ready, the failure is logged and a
        :class:`ScriptErrorEvent` is emitted.
        """

        self._ready = False
        filename = str(Path(path).resolve())
        try:
            namespace = self._evaluate(filename)
        except ScriptError as exc:
            failure = exc.to_failure()
            self._report(failure)
            return LoadResult(path=filename, failure=failure)

        self._publish(namespace)
        self._globals = namespace
        self._script_path = filename
        self._ready = True
        return LoadResult(path=filename)

    def _evaluate(self, filename: str) -> Dict[str, Any]:
        try:
            source = Path(filename).read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as exc:
            raise ScriptIOError(f"Couldn't open script file {filename}: {exc}") from exc
        self.log(f"Script: {filename}")

        namespace = self._fresh_globals(filename)
        try:
            code = compile(source, filename, "exec")
            exec(code, namespace)
        except SCRIPT_PASSTHROUGH:
            raise
        except BaseException as exc:
            raise ScriptSyntaxError(describe_exception(exc), script_line(exc, filename)) from exc

        entry_point = self.config.entry_point
        if not callable(namespace.get(entry_point)):
            raise ScriptContractError(f"function {entry_point}() not found or not callable")
        return namespace

    def call_entry_point(
        self, possible_move_count: int, board_json: str, legal_moves_json: str = "[]"
    ) -> CallOutcome:
        """Bind the per-turn board and call the entry point once."""

        if not self._ready:
            raise OpponentNotReadyError(f"CPU {self.player_id} has no successfully loaded script")
        namespace = self._globals
        self._publish(namespace)
        namespace["board_json"] = board_json
        namespace["legal_moves_json"] = legal_moves_json
        entry = namespace[self.config.entry_point]
        try:
            value = entry(possible_move_count)
        except SCRIPT_PASSTHROUGH:
            raise
        except BaseException as exc:
            error = ScriptRuntimeError(
                f"Error calling {self.config.entry_point}(): {describe_exception(exc)}",
                script_line(exc, self._script_path or ""),
            )
            return CallOutcome(error=error.to_failure())
        return CallOutcome(value=value)

    def _report(self, failure: ScriptFailure) -> None:
        logger.error("Error in CPU %d script: %s", self.player_id, failure.describe())
        self.events.emit(ScriptErrorEvent.from_failure(self.player_id, failure))

    def unload(self) -> None:
        """Drop the script environment; the host must be reloaded before use."""

        self._ready = False
        self._script_path = None
        self._globals = self._fresh_globals("<no script>")
