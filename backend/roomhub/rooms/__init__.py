"""Room domain package."""

from roomhub.rooms.events import RoomEvent
from roomhub.rooms.events import RoomEventHub
from roomhub.rooms.models import CreateRoomRequest
from roomhub.rooms.registry import DEFAULT_MAX_PLAYERS
from roomhub.rooms.registry import AddPlayerResult
from roomhub.rooms.registry import DuplicateRoomError
from roomhub.rooms.registry import PlayerInfo
from roomhub.rooms.registry import Room
from roomhub.rooms.registry import RoomError
from roomhub.rooms.registry import RoomRegistry

__all__ = [
    "DEFAULT_MAX_PLAYERS",
    "AddPlayerResult",
    "CreateRoomRequest",
    "DuplicateRoomError",
    "PlayerInfo",
    "Room",
    "RoomError",
    "RoomEvent",
    "RoomEventHub",
    "RoomRegistry",
]
