"""RR-UT-01~06 room creation, lookup and deletion tests."""

from __future__ import annotations

import pytest

from room_testkit import assert_registry_invariants
from room_testkit import create_room
from room_testkit import user_info
from roomhub.rooms.models import CreateRoomRequest
from roomhub.rooms.registry import DEFAULT_MAX_PLAYERS
from roomhub.rooms.registry import DuplicateRoomError
from roomhub.rooms.registry import RoomError
from roomhub.rooms.registry import RoomRegistry


def test_rr_ut_01_create_room_defaults(registry: RoomRegistry) -> None:
    """Input: create room without options -> Output: owner is sole not-ready player."""
    room = create_room(registry, room_id="r1", owner_id=7)

    assert room.room_id == "r1"
    assert room.name == "room-r1"
    assert room.owner_id == 7
    assert list(room.players) == [7]
    assert room.players[7].user == user_info(7)
    assert room.players[7].connection_id == "conn-7"
    assert room.players[7].is_ready is False
    assert room.max_players == DEFAULT_MAX_PLAYERS == 8
    assert room.password is None
    assert room.state == {"state": "SelectChart"}
    assert room.locked is False
    assert room.cycle is False
    assert room.live is True
    assert room.created_at > 0
    assert registry.get_room("r1") is room
    assert_registry_invariants(registry)


def test_rr_ut_02_duplicate_room_id_is_rejected(registry: RoomRegistry) -> None:
    """Input: create r1 twice -> Output: DuplicateRoomError and original room untouched."""
    original = create_room(registry, room_id="r1", owner_id=1, max_players=4)

    with pytest.raises(DuplicateRoomError):
        create_room(registry, room_id="r1", owner_id=2, max_players=2)

    assert issubclass(DuplicateRoomError, RoomError)
    assert registry.count() == 1
    room = registry.get_room("r1")
    assert room is original
    assert room.owner_id == 1
    assert list(room.players) == [1]
    assert room.max_players == 4


def test_rr_ut_03_get_room_returns_none_for_unknown_id(registry: RoomRegistry) -> None:
    """Input: lookup unknown id -> Output: None, no error."""
    assert registry.get_room("missing") is None
    assert "missing" not in registry


def test_rr_ut_04_delete_room_reports_removal(registry: RoomRegistry) -> None:
    """Input: delete existing then delete again -> Output: True then False."""
    create_room(registry, room_id="r1")
    create_room(registry, room_id="r2", owner_id=2)

    assert registry.delete_room("r1") is True
    assert registry.delete_room("r1") is False
    assert registry.get_room("r1") is None
    assert registry.count() == 1
    assert len(registry) == 1


def test_rr_ut_05_list_rooms_and_count(registry: RoomRegistry) -> None:
    """Input: three rooms -> Output: list holds all three and count matches."""
    for index in range(3):
        create_room(registry, room_id=f"r{index}", owner_id=index + 1)

    rooms = registry.list_rooms()
    assert {room.room_id for room in rooms} == {"r0", "r1", "r2"}
    assert registry.count() == 3

    rooms.clear()
    assert registry.count() == 3


def test_rr_ut_06_create_room_from_request_model() -> None:
    """Input: CreateRoomRequest dump -> Output: room built with request options."""
    registry = RoomRegistry(default_max_players=4)
    request = CreateRoomRequest(
        room_id="lobby",
        name="Friday",
        owner_id=10,
        owner_info={"name": "host"},
        connection_id="c-10",
        password="secret",
    )

    room = registry.create_room(**request.model_dump())

    assert room.max_players == 4
    assert room.password == "secret"
    assert room.players[10].user == {"name": "host"}


@pytest.mark.parametrize("max_players", [0, -1])
def test_rr_ut_06_create_room_rejects_non_positive_capacity(
    registry: RoomRegistry,
    max_players: int,
) -> None:
    """Input: max_players < 1 -> Output: ValueError and nothing registered."""
    with pytest.raises(ValueError):
        create_room(registry, max_players=max_players)

    assert registry.count() == 0


def test_rr_ut_06_registry_rejects_non_positive_default_capacity() -> None:
    """Input: default_max_players=0 -> Output: ValueError."""
    with pytest.raises(ValueError):
        RoomRegistry(default_max_players=0)
