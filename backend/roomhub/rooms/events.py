"""Structured room events published by the registry."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from dataclasses import field
import logging
import threading
from typing import Any

logger = logging.getLogger(__name__)

EVENT_PROTOCOL_VERSION = 1

ROOM_CREATED = "ROOM_CREATED"
ROOM_DELETED = "ROOM_DELETED"
PLAYER_ADDED = "PLAYER_ADDED"
PLAYER_REMOVED = "PLAYER_REMOVED"
PLAYER_REJECTED = "PLAYER_REJECTED"
ROOM_STATE_CHANGED = "ROOM_STATE_CHANGED"
ROOM_LOCK_CHANGED = "ROOM_LOCK_CHANGED"
ROOM_CYCLE_CHANGED = "ROOM_CYCLE_CHANGED"
PLAYER_READY_CHANGED = "PLAYER_READY_CHANGED"
ROOM_OWNER_CHANGED = "ROOM_OWNER_CHANGED"
EMPTY_ROOMS_CLEANED = "EMPTY_ROOMS_CLEANED"


@dataclass(frozen=True, slots=True)
class RoomEvent:
    """One registry mutation, with the identifiers and counts it touched."""

    type: str
    payload: dict[str, Any] = field(default_factory=dict)

    def as_message(self) -> dict[str, Any]:
        return {"v": EVENT_PROTOCOL_VERSION, "type": self.type, "payload": dict(self.payload)}


RoomEventListener = Callable[[RoomEvent], None]


class RoomEventHub:
    """Fan out room events to subscribed listeners.

    Delivery is best-effort: a listener that raises is logged and skipped,
    the publishing registry operation still completes.
    """

    def __init__(self) -> None:
        self._listeners: list[RoomEventListener] = []
        self._guard = threading.Lock()

    def subscribe(self, listener: RoomEventListener) -> Callable[[], None]:
        """Register ``listener`` and return a callable that removes it."""
        with self._guard:
            self._listeners.append(listener)

        def _unsubscribe() -> None:
            with self._guard:
                if listener in self._listeners:
                    self._listeners.remove(listener)

        return _unsubscribe

    def publish(self, event_type: str, **payload: Any) -> RoomEvent:
        event = RoomEvent(type=event_type, payload=payload)
        with self._guard:
            listeners = list(self._listeners)
        for listener in listeners:
            try:
                listener(event)
            except Exception:
                logger.exception("room event listener failed type=%s", event.type)
        return event

    def __len__(self) -> int:
        with self._guard:
            return len(self._listeners)


__all__ = [
    "EMPTY_ROOMS_CLEANED",
    "EVENT_PROTOCOL_VERSION",
    "PLAYER_ADDED",
    "PLAYER_READY_CHANGED",
    "PLAYER_REJECTED",
    "PLAYER_REMOVED",
    "ROOM_CREATED",
    "ROOM_CYCLE_CHANGED",
    "ROOM_DELETED",
    "ROOM_LOCK_CHANGED",
    "ROOM_OWNER_CHANGED",
    "ROOM_STATE_CHANGED",
    "RoomEvent",
    "RoomEventHub",
    "RoomEventListener",
]
