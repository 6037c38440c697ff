"""Structural validation of moves returned by CPU scripts.

Checks run in order and the first failure wins:

1. the entry-point call itself must not have raised (``ScriptRuntimeError``);
2. the value must be a sequence of exactly three items (``MoveShapeError``);
3. every item must be a finite number (``MoveTypeError``);
4. ``from`` is ``PLACE_STONE`` or a board index, ``count > 0`` and ``to`` is a
   board index (``MoveRangeError``).

Rule legality (does the stack exist, is the target reachable) belongs to the
rules engine and is not checked here.
"""

from __future__ import annotations

import math
import numbers
from collections.abc import Mapping, Sequence
from typing import Any, List

from .errors import MoveRangeError, MoveShapeError, MoveTypeError, ScriptError
from .script_host import CallOutcome
from .types import PLACE_STONE, MoveResult, ProposedMove

MOVE_LENGTH = 3


def _as_items(value: Any) -> List[Any]:
    if isinstance(value, (str, bytes, bytearray, Mapping)) or not isinstance(value, Sequence):
        raise MoveShapeError(f"expected an array of {MOVE_LENGTH} numbers, got {type(value).__name__}")
    # Length first so oversized sequences are never copied.
    try:
        length = len(value)
    except Exception as exc:
        raise MoveShapeError(f"array length unavailable: {type(exc).__name__}") from exc
    if length != MOVE_LENGTH:
        raise MoveShapeError(f"expected an array of {MOVE_LENGTH} numbers, got length {length}")
    try:
        items = list(value)
    except Exception as exc:
        raise MoveShapeError(f"array items unreadable: {type(exc).__name__}") from exc
    if len(items) != MOVE_LENGTH:
        raise MoveShapeError(f"expected an array of {MOVE_LENGTH} numbers, got {len(items)} items")
    return items


def _as_int(name: str, item: Any) -> int:
    # bool is an int subclass but never a meaningful board value.
    if isinstance(item, bool) or not isinstance(item, numbers.Real):
        raise MoveTypeError(f"'{name}' must be a number, got {type(item).__name__}")
    try:
        if isinstance(item, numbers.Integral):
            return int(item)
        if not math.isfinite(item):
            raise MoveTypeError(f"'{name}' must be a finite number, got {type(item).__name__}")
        return int(item)
    except MoveTypeError:
        raise
    except Exception as exc:
        raise MoveTypeError(f"'{name}' is not convertible to an integer: {type(exc).__name__}") from exc


def _check_range(move: ProposedMove, board_size: int) -> None:
    if not (move.from_index == PLACE_STONE or 0 <= move.from_index < board_size):
        raise MoveRangeError(f"'from' {move.from_index} outside board of size {board_size}")
    if move.count <= 0:
        raise MoveRangeError(f"'count' must be positive, got {move.count}")
    if not 0 <= move.to_index < board_size:
        raise MoveRangeError(f"'to' {move.to_index} outside board of size {board_size}")


def decode_move(value: Any, board_size: int) -> ProposedMove:
    """Decode a raw script return value, raising a ``ScriptError`` subclass."""

    items = _as_items(value)
    from_index, count, to_index = (
        _as_int(name, item) for name, item in zip(("from", "count", "to"), items)
    )
    move = ProposedMove(from_index=from_index, count=count, to_index=to_index)
    _check_range(move, board_size)
    return move


def validate_value(value: Any, board_size: int) -> MoveResult:
    """Validate a raw return value; never raises for bad script output."""

    try:
        return MoveResult.accepted(decode_move(value, board_size))
    except ScriptError as exc:
        return MoveResult.rejected(exc.to_failure())


def validate(outcome: CallOutcome, board_size: int) -> MoveResult:
    """Validate the outcome of an entry-point call against a board of ``board_size`` cells."""

    if board_size < 0:
        raise ValueError("board_size must not be negative")
    if outcome.error is not None:
        return MoveResult.rejected(outcome.error)
    return validate_value(outcome.value, board_size)
