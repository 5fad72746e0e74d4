"""Pydantic models for room creation requests."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel
from pydantic import Field


class CreateRoomRequest(BaseModel):
    """Options accepted by RoomRegistry.create_room."""

    room_id: str = Field(min_length=1)
    name: str
    owner_id: int
    owner_info: Any = None
    connection_id: str
    max_players: int | None = Field(default=None, ge=1)
    password: str | None = None
