"""Events emitted to the surrounding game controller."""

from __future__ import annotations

import logging
from enum import Enum
from typing import Callable, Dict, List, Optional, Union

from pydantic import BaseModel, ConfigDict

from .types import FailureKind, ProposedMove, ScriptFailure

logger = logging.getLogger(__name__)


class EventType(str, Enum):
    MOVE_ACCEPTED = "move_accepted"
    SCRIPT_ERROR = "script_error"


class MoveAcceptedEvent(BaseModel):
    """A CPU player produced a structurally valid move."""

    model_config = ConfigDict(frozen=True)

    player_id: int
    from_index: int
    count: int
    to_index: int

    @property
    def event_type(self) -> EventType:
        return EventType.MOVE_ACCEPTED

    @classmethod
    def from_move(cls, player_id: int, move: ProposedMove) -> "MoveAcceptedEvent":
        return cls(
            player_id=player_id,
            from_index=move.from_index,
            count=move.count,
            to_index=move.to_index,
        )


class ScriptErrorEvent(BaseModel):
    """A CPU script failed; the front end should warn the user."""

    model_config = ConfigDict(frozen=True)

    player_id: int
    kind: FailureKind
    message: str
    line: Optional[int] = None

    @property
    def event_type(self) -> EventType:
        return EventType.SCRIPT_ERROR

    @classmethod
    def from_failure(cls, player_id: int, failure: ScriptFailure) -> "ScriptErrorEvent":
        return cls(player_id=player_id, kind=failure.kind, message=failure.message, line=failure.line)


Event = Union[MoveAcceptedEvent, ScriptErrorEvent]
EventCallback = Callable[[Event], None]


class EventBus:
    """Synchronous publish/subscribe hub for engine events.

    Usage:
        bus = EventBus()
        bus.subscribe(EventType.SCRIPT_ERROR, show_warning)
        bus.emit(ScriptErrorEvent(...))
    """

    def __init__(self) -> None:
        self._subscribers: Dict[EventType, List[EventCallback]] = {}

    def subscribe(self, event_type: EventType, callback: EventCallback) -> None:
        """Register a callback for an event type."""
        self._subscribers.setdefault(event_type, []).append(callback)

    def unsubscribe(self, event_type: EventType, callback: EventCallback) -> bool:
        """Remove a callback. Returns True if found and removed."""
        callbacks = self._subscribers.get(event_type, [])
        if callback in callbacks:
            callbacks.remove(callback)
            return True
        return False

    def emit(self, event: Event) -> int:
        """Deliver an event to all subscribers.

        Returns the number of callbacks that completed without raising.
        """
        callbacks = list(self._subscribers.get(event.event_type, []))
        invoked = 0
        for callback in callbacks:
            try:
                callback(event)
                invoked += 1
            except Exception:
                logger.exception("Event callback failed for %s", event.event_type.value)
        return invoked

    def subscriber_count(self, event_type: EventType) -> int:
        return len(self._subscribers.get(event_type, []))
