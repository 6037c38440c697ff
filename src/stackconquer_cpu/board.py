"""Board layout helpers for callers that build snapshots.

The game keeps its board as one flat, row-major list. Playable fields are
surrounded by a padding frame ``height_to_win`` cells wide so scripts can step
in any direction without bounds checks; irregular boards mark unused fields
inside the frame with the out marker. The engine only reads snapshots; these
helpers are for front ends that build them.
"""

from __future__ import annotations

from typing import List

from .types import PLACE_STONE, Cell  # noqa: F401  re-exported for callers

EMPTY = ""


def row_length(width: int, padding: int) -> int:
    return width + 2 * padding


def padded_board(width: int, height: int, padding: int, pad_marker: str, empty: str = EMPTY) -> List[Cell]:
    """Return an empty ``width`` x ``height`` board wrapped in a padding frame."""

    if width < 1 or height < 1:
        raise ValueError("board dimensions must be positive")
    if padding < 0:
        raise ValueError("padding must not be negative")
    cols = row_length(width, padding)
    rows = height + 2 * padding
    cells: List[Cell] = []
    for r in range(rows):
        for c in range(cols):
            inside = padding <= r < padding + height and padding <= c < padding + width
            cells.append(empty if inside else pad_marker)
    return cells


def index_of(row: int, col: int, cols: int) -> int:
    """Convert a (row, col) pair into a flat board index."""

    if row < 0 or col < 0 or col >= cols:
        raise ValueError(f"row/col out of bounds: {(row, col)}")
    return row * cols + col


def tower_height(cell: Cell) -> int:
    """Number of stones in a tower cell; markers and empty fields count as 0."""

    if isinstance(cell, int):
        return 0
    return len(cell) if cell.isdigit() else 0


def is_playable(cell: Cell, out_marker: str, pad_marker: str) -> bool:
    return cell not in (out_marker, pad_marker)
