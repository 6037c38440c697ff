"""Serialization of board state for CPU scripts.

Scripts receive the board as compact JSON text. Encoding is deterministic:
equal snapshots always produce byte-identical output.
"""

from __future__ import annotations

import json
from typing import Iterable, List, Optional, Sequence

from .types import BoardSnapshot, Cell


class BoardCodecError(ValueError):
    """Raised when a snapshot cannot be serialized."""


def _check_cell(index: int, cell: Cell) -> Cell:
    if isinstance(cell, bool) or not isinstance(cell, (str, int)):
        raise BoardCodecError(f"cell {index} has unsupported type {type(cell).__name__}")
    return cell


def encode(snapshot: BoardSnapshot) -> str:
    """Encode a row-major board snapshot as a compact JSON array."""

    cells: List[Cell] = [_check_cell(i, cell) for i, cell in enumerate(snapshot)]
    return json.dumps(cells, separators=(",", ":"), ensure_ascii=False)


def encode_moves(moves: Optional[Iterable[Sequence[int]]]) -> str:
    """Encode legal moves as a compact JSON array of ``[from, count, to]`` lists."""

    if moves is None:
        return "[]"
    payload: List[List[int]] = []
    for move in moves:
        values = list(move)
        if len(values) != 3:
            raise BoardCodecError(f"legal move must have 3 values, got {values!r}")
        payload.append([int(v) for v in values])
    return json.dumps(payload, separators=(",", ":"))


def decode(text: str) -> List[Cell]:
    """Decode board JSON produced by :func:`encode`."""

    try:
        cells = json.loads(text)
    except json.JSONDecodeError as exc:
        raise BoardCodecError(f"board is not valid JSON: {exc.msg}") from exc
    if not isinstance(cells, list):
        raise BoardCodecError("board JSON must be an array")
    return [_check_cell(i, cell) for i, cell in enumerate(cells)]
