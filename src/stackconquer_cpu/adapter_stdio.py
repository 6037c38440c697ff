"""Stdio adapter for out-of-process game front ends.

This adapter consumes a minimal line-oriented protocol over stdin and drives a
single CPU player:

- ``INIT <player_id> <width> <height> <height_to_win> [out] [pad]``
- ``LOAD <script path>`` answers ``READY`` or ``ERROR <kind> <line|-> <message>``
- ``STATE <possible_move_count> <board json>``
- ``GO`` answers ``MOVE <from> <count> <to>`` or ``ERROR <kind> <line|-> <message>``

Script failures are reported and the session continues; malformed protocol
input ends the session with ``ERROR protocol``.
"""

from __future__ import annotations

import argparse
import logging
import sys
from dataclasses import dataclass
from typing import Iterable, List, Optional

from pydantic import ValidationError

from . import board_codec
from .config import FIELD_OUT, FIELD_PAD, HostConfig
from .controller import OpponentController
from .errors import OpponentNotReadyError
from .types import Cell, ScriptFailure

logger = logging.getLogger(__name__)


class AdapterInputError(Exception):
    """Raised when the adapter receives invalid input."""


def _parse_int(token: str, name: str) -> int:
    try:
        return int(token)
    except ValueError as exc:
        raise AdapterInputError(f"{name} must be an integer") from exc


def _format_failure(failure: ScriptFailure) -> str:
    line = "-" if failure.line is None else str(failure.line)
    message = " ".join(failure.message.split())
    return f"ERROR {failure.kind.value} {line} {message}"


@dataclass
class AdapterContext:
    controller: Optional[OpponentController] = None
    pending_board: Optional[List[Cell]] = None
    pending_possible: Optional[int] = None


class StdioAdapter:
    """Line-oriented adapter that plays CPU moves via stdin/stdout."""

    def __init__(self, *, stdin=None, stdout=None) -> None:
        self.stdin = stdin or sys.stdin
        self.stdout = stdout or sys.stdout
        self.ctx = AdapterContext()

    def _reply(self, text: str) -> None:
        print(text, file=self.stdout)
        self.stdout.flush()

    def _emit_error_and_exit(self, message: str) -> int:
        logger.error("Protocol error: %s", message)
        self._reply(f"ERROR protocol - {message}")
        return 1

    def _require_controller(self) -> OpponentController:
        if self.ctx.controller is None:
            raise AdapterInputError("INIT required first")
        return self.ctx.controller

    def _handle_init(self, tokens: List[str]) -> None:
        if len(tokens) < 5:
            raise AdapterInputError("INIT requires player, width, height and height_to_win")
        try:
            config = HostConfig(
                player_id=_parse_int(tokens[1], "player"),
                board_width=_parse_int(tokens[2], "width"),
                board_height=_parse_int(tokens[3], "height"),
                height_to_win=_parse_int(tokens[4], "height_to_win"),
                out_marker=tokens[5] if len(tokens) > 5 else FIELD_OUT,
                pad_marker=tokens[6] if len(tokens) > 6 else FIELD_PAD,
            )
        except ValidationError as exc:
            raise AdapterInputError(f"invalid INIT values ({exc.error_count()} error(s))") from exc
        self.ctx = AdapterContext(controller=OpponentController(config))

    def _handle_load(self, rest: str) -> None:
        controller = self._require_controller()
        if not rest:
            raise AdapterInputError("LOAD requires a script path")
        result = controller.load_script(rest)
        if result.failure is not None:
            self._reply(_format_failure(result.failure))
        else:
            self._reply("READY")

    def _handle_state(self, tokens: List[str]) -> None:
        self._require_controller()
        if len(tokens) < 3:
            raise AdapterInputError("STATE requires possible move count and board json")
        possible = _parse_int(tokens[1], "possible move count")
        try:
            board = board_codec.decode(tokens[2])
        except board_codec.BoardCodecError as exc:
            raise AdapterInputError(str(exc)) from exc
        self.ctx.pending_board = board
        self.ctx.pending_possible = possible

    def _handle_go(self) -> None:
        controller = self._require_controller()
        if self.ctx.pending_board is None or self.ctx.pending_possible is None:
            raise AdapterInputError("GO received before STATE")
        try:
            result = controller.request_move(self.ctx.pending_board, self.ctx.pending_possible)
        except OpponentNotReadyError as exc:
            self._reply(f"ERROR NotReady - {exc}")
            return
        if result.failure is not None:
            self._reply(_format_failure(result.failure))
        elif result.move is not None:
            move = result.move
            self._reply(f"MOVE {move.from_index} {move.count} {move.to_index}")

    def run(self) -> int:
        try:
            for raw_line in self.stdin:
                line = raw_line.strip()
                if not line:
                    continue
                cmd = line.split(maxsplit=1)[0].upper()
                if cmd == "INIT":
                    self._handle_init(line.split())
                elif cmd == "LOAD":
                    parts = line.split(maxsplit=1)
                    self._handle_load(parts[1] if len(parts) > 1 else "")
                elif cmd == "STATE":
                    self._handle_state(line.split(maxsplit=2))
                elif cmd == "GO":
                    self._handle_go()
                else:
                    raise AdapterInputError(f"Unknown command '{cmd}'")
            return 0
        except AdapterInputError as exc:
            return self._emit_error_and_exit(str(exc))


def configure_logging(debug: bool = False, log_file: Optional[str] = None) -> None:
    """Send engine logs to stderr, or to ``log_file`` when given."""

    handler: logging.Handler
    if log_file:
        handler = logging.FileHandler(log_file, mode="w", encoding="utf-8")
    else:
        handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter("%(asctime)s %(levelname)s %(name)s: %(message)s"))
    root = logging.getLogger("stackconquer_cpu")
    root.handlers[:] = [handler]
    root.setLevel(logging.DEBUG if debug else logging.WARNING)


def main(argv: Optional[Iterable[str]] = None) -> None:
    parser = argparse.ArgumentParser(description="Stdio adapter for StackAndConquer CPU scripts")
    parser.add_argument(
        "--debug",
        action="store_true",
        help="Log script output and accepted moves (logs go to stderr unless --log-file is set)",
    )
    parser.add_argument(
        "--log-file",
        type=str,
        help="Write the debug log to this file instead of stderr",
    )
    args = parser.parse_args(list(argv) if argv is not None else None)

    configure_logging(debug=args.debug, log_file=args.log_file)
    adapter = StdioAdapter()
    sys.exit(adapter.run())


if __name__ == "__main__":
    main()
