"""Shared fixtures for room registry tests."""

from __future__ import annotations

import pytest

from roomhub.rooms.events import RoomEvent
from roomhub.rooms.registry import RoomRegistry


@pytest.fixture
def registry() -> RoomRegistry:
    return RoomRegistry()


@pytest.fixture
def recorded_events(registry: RoomRegistry) -> list[RoomEvent]:
    """Events published by ``registry`` in publish order."""
    captured: list[RoomEvent] = []
    registry.events.subscribe(captured.append)
    return captured
