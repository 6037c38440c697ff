"""Scripted CPU opponents for StackAndConquer."""

from .board_codec import encode, encode_moves
from .config import DEFAULT_ENTRY_POINT, HostConfig, OpponentSetup
from .controller import OpponentController, TurnState
from .errors import (
    MoveRangeError,
    MoveShapeError,
    MoveTypeError,
    OpponentNotReadyError,
    ScriptContractError,
    ScriptError,
    ScriptIOError,
    ScriptRuntimeError,
    ScriptSyntaxError,
    TurnInProgressError,
)
from .events import EventBus, EventType, MoveAcceptedEvent, ScriptErrorEvent
from .opponents import CpuOpponents
from .script_host import ScriptHost
from .types import PLACE_STONE, FailureKind, LoadResult, MoveResult, ProposedMove, ScriptFailure
from .validator import validate, validate_value

__all__ = [
    "CpuOpponents",
    "DEFAULT_ENTRY_POINT",
    "EventBus",
    "EventType",
    "FailureKind",
    "HostConfig",
    "LoadResult",
    "MoveAcceptedEvent",
    "MoveRangeError",
    "MoveResult",
    "MoveShapeError",
    "MoveTypeError",
    "OpponentController",
    "OpponentNotReadyError",
    "OpponentSetup",
    "PLACE_STONE",
    "ProposedMove",
    "ScriptContractError",
    "ScriptError",
    "ScriptErrorEvent",
    "ScriptFailure",
    "ScriptHost",
    "ScriptIOError",
    "ScriptRuntimeError",
    "ScriptSyntaxError",
    "TurnInProgressError",
    "TurnState",
    "encode",
    "encode_moves",
    "validate",
    "validate_value",
]
