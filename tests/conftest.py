"""Shared fixtures for the sync room tests."""

import asyncio
import random

import pytest
import pytest_asyncio
from fastapi.testclient import TestClient

from Public.WebSocket.Libs import SyncRoom
from Public.WebSocket.Models import RoomConfig


def drain(queue: asyncio.Queue) -> list:
    """Return everything currently waiting in an outbound queue."""
    items = []
    while not queue.empty():
        items.append(queue.get_nowait())
    return items


def watcher_ids(metadata) -> list[int]:
    return [w.id for w in metadata.snapshot.watchers]


@pytest_asyncio.fixture
async def room():
    """A started room named foo with a seeded name decorator."""
    sync_room = SyncRoom("foo", RoomConfig(url="X"), rng=random.Random(0))
    sync_room.start()
    yield sync_room
    await sync_room.stop()


@pytest.fixture
def client():
    """TestClient with the lifespan running and a room foo defined."""
    from Core import kekik_FastAPI

    with TestClient(kekik_FastAPI) as test_client:
        test_client.app.state.room_directory.define("foo", RoomConfig(url="X"))
        yield test_client
