"""Tests for the room directory."""

import pytest

from Public.WebSocket.Libs import RoomDirectory, SyncRoom
from Public.WebSocket.Models import RoomConfig


@pytest.fixture
def room_dir(tmp_path):
    (tmp_path / "foo.yml").write_text(
        "url: https://example.com/foo.mp4\n"
        "subs:\n"
        "  - lang: en\n"
        "    url: https://example.com/foo.en.vtt\n",
        encoding="utf-8",
    )
    (tmp_path / "bar.yml").write_text("url: https://example.com/bar.mp4\n", encoding="utf-8")
    (tmp_path / "broken.yml").write_text("subs: []\n", encoding="utf-8")
    return tmp_path


def test_load_definitions_from_yaml(room_dir):
    directory = RoomDirectory()

    assert directory.load_definitions(str(room_dir / "*.yml")) == 2
    assert set(directory.definitions) == {"foo", "bar"}

    foo = directory.definitions["foo"]
    assert foo.url == "https://example.com/foo.mp4"
    assert [(s.lang, s.url) for s in foo.subs] == [("en", "https://example.com/foo.en.vtt")]
    assert directory.definitions["bar"].subs == []


def test_reload_replaces_definitions(room_dir, tmp_path_factory):
    directory = RoomDirectory()
    directory.load_definitions(str(room_dir / "*.yml"))

    empty = tmp_path_factory.mktemp("empty")
    assert directory.load_definitions(str(empty / "*.yml")) == 0
    assert directory.definitions == {}


@pytest.mark.asyncio
async def test_find_room_creates_once_and_starts_it():
    directory = RoomDirectory(queue_size=8, watcher_queue_size=4)
    directory.define("foo", RoomConfig(url="X"))
    try:
        room = await directory.find_room("foo")
        assert room is not None
        assert room.running
        assert room.url == "X"
        assert await directory.find_room("foo") is room
        assert directory.rooms == {"foo": room}
    finally:
        await directory.close()

    assert not room.running
    assert directory.rooms == {}


@pytest.mark.asyncio
async def test_find_unknown_room_returns_none():
    directory = RoomDirectory()

    assert await directory.find_room("nope") is None
    assert directory.rooms == {}


@pytest.mark.asyncio
async def test_add_room_registers_prestarted_room():
    directory = RoomDirectory()
    room = SyncRoom("eager", RoomConfig(url="Y"))
    try:
        await directory.add_room(room)

        assert room.running
        assert await directory.find_room("eager") is room
    finally:
        await directory.close()


@pytest.mark.asyncio
async def test_snapshot_carries_subtitles():
    directory = RoomDirectory()
    directory.define("foo", RoomConfig.model_validate({"url": "X", "subs": [{"lang": "tr", "url": "S"}]}))
    try:
        room = await directory.find_room("foo")
        snapshot = await room.snapshot()
        assert [(s.lang, s.url) for s in snapshot.subtitles] == [("tr", "S")]
    finally:
        await directory.close()


def test_load_definitions_from_toml_and_yaml(room_dir):
    (room_dir / "baz.toml").write_text(
        'url = "https://example.com/baz.mp4"\n'
        "\n"
        "[[subs]]\n"
        'lang = "de"\n'
        'url = "https://example.com/baz.de.vtt"\n',
        encoding="utf-8",
    )
    directory = RoomDirectory()

    pattern = str(room_dir / "*.yml") + ";" + str(room_dir / "*.toml")
    assert directory.load_definitions(pattern) == 3
    assert set(directory.definitions) == {"foo", "bar", "baz"}

    baz = directory.definitions["baz"]
    assert baz.url == "https://example.com/baz.mp4"
    assert [(s.lang, s.url) for s in baz.subs] == [("de", "https://example.com/baz.de.vtt")]


def test_malformed_definition_files_are_skipped(room_dir):
    (room_dir / "kirik.yml").write_text("url: [unterminated\n", encoding="utf-8")
    (room_dir / "kirik.toml").write_text('url = "no closing quote\n', encoding="utf-8")
    directory = RoomDirectory()

    pattern = str(room_dir / "*.yml") + ";" + str(room_dir / "*.toml")
    assert directory.load_definitions(pattern) == 2
    assert set(directory.definitions) == {"foo", "bar"}


@pytest.mark.asyncio
async def test_get_room_never_starts_a_room():
    directory = RoomDirectory()
    directory.define("foo", RoomConfig(url="X"))
    try:
        assert await directory.get_room("foo") is None
        assert directory.rooms == {}

        room = await directory.find_room("foo")
        assert await directory.get_room("foo") is room
    finally:
        await directory.close()
