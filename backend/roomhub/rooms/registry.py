"""In-memory room domain models and registry."""

from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager
from dataclasses import dataclass
from dataclasses import field
from enum import Enum
import logging
import threading
import time
from typing import Any

from roomhub.rooms import events
from roomhub.rooms.events import RoomEventHub

logger = logging.getLogger(__name__)

DEFAULT_MAX_PLAYERS = 8
SELECT_CHART_STATE = "SelectChart"

# Opaque payloads owned by external collaborators.
UserInfo = Any
RoomState = Any


def initial_room_state() -> dict[str, str]:
    """Return a fresh copy of the state every new room starts in."""
    return {"state": SELECT_CHART_STATE}


class RoomError(Exception):
    """Base class for room-domain errors."""


class DuplicateRoomError(RoomError):
    """Raised when creating a room whose id is already registered."""


class AddPlayerResult(Enum):
    """Outcome of an admission attempt."""

    ADDED = "added"
    ROOM_NOT_FOUND = "room_not_found"
    ROOM_FULL = "room_full"
    ROOM_LOCKED = "room_locked"


@dataclass(slots=True)
class PlayerInfo:
    """Membership record of one player in one room."""

    user: UserInfo
    connection_id: str
    is_ready: bool = False


@dataclass(slots=True)
class Room:
    """Room aggregate state."""

    room_id: str
    name: str
    owner_id: int
    players: dict[int, PlayerInfo]
    max_players: int = DEFAULT_MAX_PLAYERS
    password: str | None = None
    state: RoomState = field(default_factory=initial_room_state)
    locked: bool = False
    cycle: bool = False
    live: bool = True
    created_at: float = field(default_factory=time.time)

    @property
    def player_count(self) -> int:
        return len(self.players)

    @property
    def ready_count(self) -> int:
        return sum(1 for player in self.players.values() if player.is_ready)

    def has_player(self, user_id: int) -> bool:
        return user_id in self.players


class RoomRegistry:
    """In-memory registry for all live rooms.

    Rooms returned by the registry are the live records; mutate them only
    through registry methods so the membership and ownership invariants hold.
    Every public method runs under one re-entrant lock, so compound
    check-then-mutate sequences are atomic even with threaded callers.
    Events are published before the lock is released, so listeners observe
    mutations in the order they were applied.
    """

    def __init__(
        self,
        default_max_players: int = DEFAULT_MAX_PLAYERS,
        event_hub: RoomEventHub | None = None,
    ) -> None:
        if default_max_players < 1:
            raise ValueError("default_max_players must be >= 1")

        self._rooms: dict[str, Room] = {}
        self._lock = threading.RLock()
        self._default_max_players = default_max_players
        self.events = event_hub if event_hub is not None else RoomEventHub()

    @contextmanager
    def lock(self) -> Iterator[None]:
        """Hold the registry write lock across several operations."""
        with self._lock:
            yield

    def create_room(
        self,
        room_id: str,
        name: str,
        owner_id: int,
        owner_info: UserInfo,
        connection_id: str,
        max_players: int | None = None,
        password: str | None = None,
    ) -> Room:
        """Create a room with the owner seeded as its only, not-ready player."""
        if max_players is None:
            max_players = self._default_max_players
        if max_players < 1:
            raise ValueError("max_players must be >= 1")

        with self._lock:
            if room_id in self._rooms:
                raise DuplicateRoomError(f"room_id={room_id} already exists")

            room = Room(
                room_id=room_id,
                name=name,
                owner_id=owner_id,
                players={owner_id: PlayerInfo(user=owner_info, connection_id=connection_id)},
                max_players=max_players,
                password=password,
            )
            self._rooms[room_id] = room
            total_rooms = len(self._rooms)

            logger.info(
                "room created room_id=%s name=%s owner_id=%s total_rooms=%d",
                room_id,
                name,
                owner_id,
                total_rooms,
            )
            self.events.publish(
                events.ROOM_CREATED,
                room_id=room_id,
                name=name,
                owner_id=owner_id,
                total_rooms=total_rooms,
            )
            return room

    def get_room(self, room_id: str) -> Room | None:
        """Return the live room record, or None if room_id is unknown."""
        with self._lock:
            return self._rooms.get(room_id)

    def delete_room(self, room_id: str) -> bool:
        with self._lock:
            room = self._rooms.pop(room_id, None)
            if room is None:
                return False
            total_rooms = len(self._rooms)

            logger.info("room deleted room_id=%s total_rooms=%d", room_id, total_rooms)
            self.events.publish(events.ROOM_DELETED, room_id=room_id, total_rooms=total_rooms)
            return True

    def list_rooms(self) -> list[Room]:
        """Return all rooms; callers must not depend on the order."""
        with self._lock:
            return list(self._rooms.values())

    def count(self) -> int:
        with self._lock:
            return len(self._rooms)

    def __len__(self) -> int:
        return self.count()

    def __contains__(self, room_id: object) -> bool:
        with self._lock:
            return room_id in self._rooms

    def get_player(self, room_id: str, user_id: int) -> PlayerInfo | None:
        with self._lock:
            room = self._rooms.get(room_id)
            if room is None:
                return None
            return room.players.get(user_id)

    def try_add_player(
        self,
        room_id: str,
        user_id: int,
        user_info: UserInfo,
        connection_id: str,
    ) -> AddPlayerResult:
        """Admit a player and report why admission was refused, if it was.

        An existing member is overwritten in place (reconnect): the new info and
        connection replace the old ones and ready resets to False.
        """
        with self._lock:
            room = self._rooms.get(room_id)
            if room is None:
                result = AddPlayerResult.ROOM_NOT_FOUND
            elif len(room.players) >= room.max_players:
                result = AddPlayerResult.ROOM_FULL
            elif room.locked:
                result = AddPlayerResult.ROOM_LOCKED
            else:
                result = AddPlayerResult.ADDED

            if result is not AddPlayerResult.ADDED:
                logger.warning(
                    "player rejected room_id=%s user_id=%s reason=%s",
                    room_id,
                    user_id,
                    result.value,
                )
                self.events.publish(
                    events.PLAYER_REJECTED,
                    room_id=room_id,
                    user_id=user_id,
                    reason=result.value,
                )
                return result

            room.players[user_id] = PlayerInfo(user=user_info, connection_id=connection_id)
            player_count = len(room.players)
            logger.info(
                "player added room_id=%s user_id=%s player_count=%d",
                room_id,
                user_id,
                player_count,
            )
            self.events.publish(
                events.PLAYER_ADDED,
                room_id=room_id,
                user_id=user_id,
                player_count=player_count,
            )
            return result

    def add_player_to_room(
        self,
        room_id: str,
        user_id: int,
        user_info: UserInfo,
        connection_id: str,
    ) -> bool:
        """Return True when the player was admitted; see try_add_player for reasons."""
        result = self.try_add_player(room_id, user_id, user_info, connection_id)
        return result is AddPlayerResult.ADDED

    def remove_player_from_room(self, room_id: str, user_id: int) -> bool:
        """Remove a player, deleting the room if it empties.

        When the owner leaves, ownership goes to the first player left in the
        room's membership order. No join order is tracked, so this is only a
        deterministic pick, not the longest-standing member.
        """
        with self._lock:
            room = self._rooms.get(room_id)
            if room is None or not room.has_player(user_id):
                return False

            del room.players[user_id]
            player_count = len(room.players)
            logger.info(
                "player removed room_id=%s user_id=%s player_count=%d",
                room_id,
                user_id,
                player_count,
            )
            self.events.publish(
                events.PLAYER_REMOVED,
                room_id=room_id,
                user_id=user_id,
                player_count=player_count,
            )

            if not room.players:
                self.delete_room(room_id)
            elif room.owner_id == user_id:
                self.change_room_owner(room_id, self._pick_next_owner(room))
            return True

    def get_room_by_user_id(self, user_id: int) -> Room | None:
        """Return the first room holding user_id as a member."""
        with self._lock:
            for room in self._rooms.values():
                if room.has_player(user_id):
                    return room
            return None

    def set_room_state(self, room_id: str, state: RoomState) -> bool:
        """Replace the room state wholesale; transitions are not validated here."""
        with self._lock:
            room = self._rooms.get(room_id)
            if room is None:
                return False
            room.state = state

            logger.debug("room state changed room_id=%s state=%r", room_id, state)
            self.events.publish(events.ROOM_STATE_CHANGED, room_id=room_id, state=state)
            return True

    def set_room_locked(self, room_id: str, locked: bool) -> bool:
        with self._lock:
            room = self._rooms.get(room_id)
            if room is None:
                return False
            room.locked = locked

            logger.debug("room lock changed room_id=%s locked=%s", room_id, locked)
            self.events.publish(events.ROOM_LOCK_CHANGED, room_id=room_id, locked=locked)
            return True

    def set_room_cycle(self, room_id: str, cycle: bool) -> bool:
        with self._lock:
            room = self._rooms.get(room_id)
            if room is None:
                return False
            room.cycle = cycle

            logger.debug("room cycle changed room_id=%s cycle=%s", room_id, cycle)
            self.events.publish(events.ROOM_CYCLE_CHANGED, room_id=room_id, cycle=cycle)
            return True

    def set_player_ready(self, room_id: str, user_id: int, ready: bool) -> bool:
        with self._lock:
            room = self._rooms.get(room_id)
            if room is None:
                return False
            player = room.players.get(user_id)
            if player is None:
                return False
            player.is_ready = ready

            logger.debug(
                "player ready changed room_id=%s user_id=%s ready=%s",
                room_id,
                user_id,
                ready,
            )
            self.events.publish(
                events.PLAYER_READY_CHANGED,
                room_id=room_id,
                user_id=user_id,
                ready=ready,
                ready_count=room.ready_count,
            )
            return True

    def is_room_owner(self, room_id: str, user_id: int) -> bool:
        with self._lock:
            room = self._rooms.get(room_id)
            return room is not None and room.owner_id == user_id

    def change_room_owner(self, room_id: str, new_owner_id: int) -> bool:
        """Hand ownership to a current member; non-members are refused."""
        with self._lock:
            room = self._rooms.get(room_id)
            if room is None or not room.has_player(new_owner_id):
                return False
            previous_owner_id = room.owner_id
            room.owner_id = new_owner_id

            logger.info("room owner changed room_id=%s new_owner_id=%s", room_id, new_owner_id)
            self.events.publish(
                events.ROOM_OWNER_CHANGED,
                room_id=room_id,
                previous_owner_id=previous_owner_id,
                new_owner_id=new_owner_id,
            )
            return True

    def cleanup_empty_rooms(self) -> int:
        """Delete rooms left without players and return how many were removed."""
        with self._lock:
            empty_room_ids = [room_id for room_id, room in self._rooms.items() if not room.players]
            for room_id in empty_room_ids:
                self.delete_room(room_id)

            if empty_room_ids:
                logger.info("empty rooms cleaned up count=%d", len(empty_room_ids))
                self.events.publish(
                    events.EMPTY_ROOMS_CLEANED,
                    room_ids=empty_room_ids,
                    count=len(empty_room_ids),
                )
            return len(empty_room_ids)

    @staticmethod
    def _pick_next_owner(room: Room) -> int:
        return next(iter(room.players))


__all__ = [
    "AddPlayerResult",
    "DEFAULT_MAX_PLAYERS",
    "DuplicateRoomError",
    "PlayerInfo",
    "Room",
    "RoomError",
    "RoomRegistry",
    "RoomState",
    "SELECT_CHART_STATE",
    "UserInfo",
    "initial_room_state",
]
