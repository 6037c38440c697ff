"""Core data structures for the CPU move engine.

Board reminders:
- The board is a flat, row-major list of cells including the padding frame.
- A cell is a tower string read bottom to top ("12" = player 1 stone under a
  player 2 stone), ``""`` for an empty field, or the out/pad marker.
- A proposed move is ``(from, count, to)``; ``from == PLACE_STONE`` places a new stone.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import List, Optional, Sequence, Union

# In-band sentinel: existing scripts return -1 as ``from`` to place a stone at
# ``to``. It is not a board index even though it is a plain integer.
PLACE_STONE = -1

Cell = Union[str, int]
BoardSnapshot = Sequence[Cell]


class FailureKind(Enum):
    """Kinds of CPU script failures."""

    SCRIPT_IO = "ScriptIOError"
    SCRIPT_SYNTAX = "ScriptSyntaxError"
    SCRIPT_CONTRACT = "ScriptContractError"
    SCRIPT_RUNTIME = "ScriptRuntimeError"
    MOVE_SHAPE = "MoveShapeError"
    MOVE_TYPE = "MoveTypeError"
    MOVE_RANGE = "MoveRangeError"


@dataclass(frozen=True)
class ProposedMove:
    """A structurally valid move returned by a CPU script."""

    from_index: int
    count: int
    to_index: int

    @property
    def places_stone(self) -> bool:
        return self.from_index == PLACE_STONE

    def as_list(self) -> List[int]:
        return [self.from_index, self.count, self.to_index]


@dataclass(frozen=True)
class ScriptFailure:
    """Structured description of why a script could not produce a move."""

    kind: FailureKind
    message: str
    line: Optional[int] = None

    def describe(self) -> str:
        where = f" at line {self.line}" if self.line is not None else ""
        return f"{self.kind.value}{where}: {self.message}"


@dataclass(frozen=True)
class MoveResult:
    """Tagged outcome of one move request: either ``move`` or ``failure`` is set."""

    move: Optional[ProposedMove] = None
    failure: Optional[ScriptFailure] = None

    def __post_init__(self) -> None:
        if (self.move is None) == (self.failure is None):
            raise ValueError("MoveResult requires exactly one of move or failure")

    @property
    def ok(self) -> bool:
        return self.move is not None

    @classmethod
    def accepted(cls, move: ProposedMove) -> "MoveResult":
        return cls(move=move)

    @classmethod
    def rejected(cls, failure: ScriptFailure) -> "MoveResult":
        return cls(failure=failure)


@dataclass(frozen=True)
class LoadResult:
    """Outcome of loading a CPU script; truthy on success."""

    path: str
    failure: Optional[ScriptFailure] = None

    @property
    def ok(self) -> bool:
        return self.failure is None

    def __bool__(self) -> bool:
        return self.ok
