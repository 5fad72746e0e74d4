"""Process-wide runtime state shared by the hosting session server."""

from __future__ import annotations

from roomhub.core.config import Settings
from roomhub.core.config import load_settings
from roomhub.core.logging import configure_logging
from roomhub.rooms.registry import RoomRegistry

settings = load_settings()
room_registry = RoomRegistry(default_max_players=settings.roomhub_default_max_players)


def startup() -> None:
    """Reload settings, apply logging config and reset the in-memory registry."""
    global settings, room_registry
    settings = load_settings()
    configure_logging(settings)
    room_registry = RoomRegistry(default_max_players=settings.roomhub_default_max_players)


__all__ = [
    "Settings",
    "room_registry",
    "settings",
    "startup",
]
