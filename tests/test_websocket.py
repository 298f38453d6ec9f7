"""End-to-end tests through the FastAPI WebSocket endpoint."""

import pytest
from fastapi import WebSocketDisconnect
from starlette.testclient import WebSocketDenialResponse

from Public.WebSocket.Routers.sync_room import reddet_oda_yok


def ids_of(metadata: dict) -> list[int]:
    assert metadata["type"] == "metadata"
    return [w["id"] for w in metadata["snapshot"]["watchers"]]


def test_scenario(client):
    with client.websocket_connect("/api/foo/Alice/") as alice:
        assert alice.receive_json() == {"type": "id", "id": 1}
        meta = alice.receive_json()
        assert ids_of(meta) == [1]
        assert meta["snapshot"]["name"] == "foo"
        assert meta["snapshot"]["url"] == "X"
        assert meta["snapshot"]["watchers"][0]["displayName"].endswith(" Alice")

        with client.websocket_connect("/api/foo/Bob/") as bob:
            assert bob.receive_json() == {"type": "id", "id": 2}
            assert ids_of(bob.receive_json()) == [1, 2]
            assert ids_of(alice.receive_json()) == [1, 2]

            alice.send_json({"type": "play", "requestId": 5, "time": 12.3})

            expected = {"type": "play", "id": 1, "requestId": 5, "time": 12.3}
            assert alice.receive_json() == expected
            assert bob.receive_json() == expected

        assert ids_of(alice.receive_json()) == [1]


def test_client_supplied_id_is_ignored(client):
    with client.websocket_connect("/api/foo/Alice/") as alice:
        alice.receive_json()
        alice.receive_json()

        alice.send_json({"type": "seek", "id": 99, "requestId": "abc", "time": 3.5})

        assert alice.receive_json() == {"type": "seek", "id": 1, "requestId": "abc", "time": 3.5}


def test_status_is_reflected_in_metadata(client):
    with client.websocket_connect("/api/foo/Alice/") as alice:
        alice.receive_json()
        alice.receive_json()

        alice.send_json({"type": "status", "position": 8.0, "buffered": 20.0, "playbackState": "playing"})

        [watcher] = alice.receive_json()["snapshot"]["watchers"]
        assert watcher["position"] == 8.0
        assert watcher["buffered"] == 20.0
        assert watcher["playbackState"] == "playing"


def test_unknown_room_is_rejected_with_http_404(client):
    with pytest.raises(WebSocketDenialResponse) as exc_info:
        with client.websocket_connect("/api/nope/Alice/"):
            pass

    assert exc_info.value.status_code == 404
    assert exc_info.value.json() == {"success": False, "message": "Oda bulunamadı"}


@pytest.mark.asyncio
async def test_unknown_room_falls_back_to_close_code_without_denial_support():
    class BareWebSocket:
        scope = {"type": "websocket", "extensions": {}}
        closed_with = None

        async def close(self, code=1000):
            self.closed_with = code

    websocket = BareWebSocket()
    await reddet_oda_yok(websocket)

    assert websocket.closed_with == 4404


@pytest.mark.parametrize(
    ("send", "code"),
    [
        (lambda ws: ws.send_text("{not json"), 1007),
        (lambda ws: ws.send_json({"type": "join", "name": "Mallory"}), 1007),
        (lambda ws: ws.send_bytes(b"\x00\x01"), 1003),
    ],
)
def test_protocol_error_closes_only_that_connection(client, send, code):
    with client.websocket_connect("/api/foo/Alice/") as alice:
        alice.receive_json()
        alice.receive_json()

        with client.websocket_connect("/api/foo/Mallory/") as mallory:
            assert mallory.receive_json() == {"type": "id", "id": 2}
            mallory.receive_json()
            assert ids_of(alice.receive_json()) == [1, 2]

            send(mallory)

            with pytest.raises(WebSocketDisconnect) as exc_info:
                mallory.receive_json()
            assert exc_info.value.code == code

        # Alice sees Mallory leave and keeps working
        assert ids_of(alice.receive_json()) == [1]

        alice.send_json({"type": "pause", "requestId": 1, "time": 0.0})
        assert alice.receive_json() == {"type": "pause", "id": 1, "requestId": 1, "time": 0.0}


def test_health(client):
    response = client.get("/api/v1/health")

    assert response.status_code == 200
    body = response.json()
    assert body["success"] is True
    assert body["status"] == "healthy"


def test_room_snapshot_endpoint(client):
    with client.websocket_connect("/api/foo/Alice/") as alice:
        alice.receive_json()
        alice.receive_json()

        response = client.get("/api/v1/rooms/foo")

    assert response.status_code == 200
    assert response.json()["active"] is True
    snapshot = response.json()["snapshot"]
    assert snapshot["name"] == "foo"
    assert [w["id"] for w in snapshot["watchers"]] == [1]


def test_room_snapshot_does_not_start_idle_room(client):
    response = client.get("/api/v1/rooms/foo")

    assert response.status_code == 200
    body = response.json()
    assert body["active"] is False
    assert body["snapshot"]["url"] == "X"
    assert body["snapshot"]["watchers"] == []
    assert "foo" not in client.app.state.room_directory.rooms


def test_room_snapshot_unknown_room(client):
    response = client.get("/api/v1/rooms/nope")

    assert response.status_code == 404
    assert response.json() == {"success": False, "message": "Oda bulunamadı"}


def test_room_listing(client):
    response = client.get("/api/v1/rooms")

    assert response.status_code == 200
    rooms = {room["name"]: room for room in response.json()["rooms"]}
    assert rooms["foo"]["url"] == "X"
    assert rooms["foo"]["active"] is False
