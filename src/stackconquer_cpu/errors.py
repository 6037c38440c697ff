"""Exception taxonomy for CPU script failures.

These exceptions are raised inside the script host and the move validator
only; both convert them into :class:`~stackconquer_cpu.types.ScriptFailure`
before returning to their callers.
"""

from __future__ import annotations

import traceback
from typing import Optional

from .types import FailureKind, ScriptFailure


class ScriptError(Exception):
    """Base class for failures caused by a CPU script."""

    kind: FailureKind

    def __init__(self, message: str, line: Optional[int] = None) -> None:
        super().__init__(message)
        self.message = message
        self.line = line

    def to_failure(self) -> ScriptFailure:
        return ScriptFailure(kind=self.kind, message=self.message, line=self.line)


class ScriptIOError(ScriptError):
    """The script file could not be read."""

    kind = FailureKind.SCRIPT_IO


class ScriptSyntaxError(ScriptError):
    """Compiling or evaluating the script source failed."""

    kind = FailureKind.SCRIPT_SYNTAX


class ScriptContractError(ScriptError):
    """The entry point is missing or not callable."""

    kind = FailureKind.SCRIPT_CONTRACT


class ScriptRuntimeError(ScriptError):
    """Calling the entry point raised."""

    kind = FailureKind.SCRIPT_RUNTIME


class MoveShapeError(ScriptError):
    """The entry point did not return a sequence of exactly three values."""

    kind = FailureKind.MOVE_SHAPE


class MoveTypeError(ScriptError):
    """A returned move element is not a finite number."""

    kind = FailureKind.MOVE_TYPE


class MoveRangeError(ScriptError):
    """A returned move element is outside the board."""

    kind = FailureKind.MOVE_RANGE


class OpponentNotReadyError(RuntimeError):
    """A move was requested from a host without a successfully loaded script."""


class TurnInProgressError(RuntimeError):
    """A second move was requested before the previous one resolved."""


def script_line(exc: BaseException, filename: str) -> Optional[int]:
    """Return the innermost traceback line that belongs to ``filename``."""

    if isinstance(exc, SyntaxError) and exc.filename == filename:
        return exc.lineno
    line: Optional[int] = None
    for frame in traceback.extract_tb(exc.__traceback__):
        if frame.filename == filename:
            line = frame.lineno
    return line


def _safe_str(value: object) -> str:
    try:
        return str(value)
    except Exception:
        return "<unprintable>"


def describe_exception(exc: BaseException) -> str:
    """Format an exception raised by script code as ``Type: message``."""

    if isinstance(exc, SyntaxError):
        text = _safe_str(exc.msg)
    else:
        text = _safe_str(exc)
    return f"{type(exc).__name__}: {text}" if text else type(exc).__name__
