"""Room view builders for lobby listings and room snapshots."""

from __future__ import annotations

from roomhub.rooms.registry import PlayerInfo
from roomhub.rooms.registry import Room


def room_summary(room: Room) -> dict[str, object]:
    return {
        "room_id": room.room_id,
        "name": room.name,
        "player_count": room.player_count,
        "max_players": room.max_players,
        "locked": room.locked,
        "has_password": room.password is not None,
    }


def player_detail(user_id: int, player: PlayerInfo) -> dict[str, object]:
    return {
        "user_id": user_id,
        "user": player.user,
        "is_ready": player.is_ready,
    }


def room_detail(room: Room) -> dict[str, object]:
    return {
        **room_summary(room),
        "owner_id": room.owner_id,
        "state": room.state,
        "cycle": room.cycle,
        "live": room.live,
        "created_at": room.created_at,
        "players": [player_detail(user_id, player) for user_id, player in room.players.items()],
    }
