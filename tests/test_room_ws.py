"""Tests for the draft room WebSocket."""
import pytest
from fastapi.testclient import TestClient
from starlette.websockets import WebSocketDisconnect

from draft_counter.api.websockets.room_ws import SYNC_DISABLED_CODE
from draft_counter.main import app
from draft_counter.services.counter_store import CounterStore
from draft_counter.services.room_broadcaster import RoomBroadcaster
from draft_counter.services.room_manager import RoomManager


@pytest.fixture
def client():
    store = CounterStore()
    store.load_counters("my_hero,enemy_hero,score\nKhufra,Fanny,6.5\nChou,Ling,5.5\n")
    # Set services directly on app.state; TestClient is not entered so lifespan does not run
    app.state.store = store
    app.state.rooms = RoomManager()
    app.state.broadcaster = RoomBroadcaster()
    return TestClient(app)


def test_connect_sends_room_view(client):
    with client.websocket_connect("/ws/rooms/scrim") as websocket:
        data = websocket.receive_json()
        assert data["type"] == "room"
        assert data["state"]["room"] == "scrim"
        assert data["win_rate"] is None
        assert app.state.broadcaster.connection_count("scrim") == 1


def test_pick_sends_recomputed_view(client):
    with client.websocket_connect("/ws/rooms/scrim") as websocket:
        websocket.receive_json()
        websocket.send_json({"type": "pick", "team": "B", "index": 0, "value": "Fanny"})

        view = websocket.receive_json()
        assert view["type"] == "room"
        assert view["state"]["team_b"][0] == "Fanny"
        assert view["suggestions"]["chosen"] == ["Khufra"]


def test_other_clients_receive_suggestions_and_win_rate(client):
    with client.websocket_connect("/ws/rooms/scrim") as first, \
            client.websocket_connect("/ws/rooms/scrim") as second:
        first.receive_json()
        second.receive_json()

        first.send_json({"type": "pick", "team": "B", "index": 0, "value": "Fanny"})
        first.receive_json()
        view = second.receive_json()
        assert view["type"] == "room"
        assert view["suggestions"]["assignment"]["Fanny"]["hero"] == "Khufra"
        assert view["win_rate"] is None

        second.send_json({"type": "pick", "team": "A", "index": 0, "value": "Khufra"})
        second.receive_json()
        view = first.receive_json()
        assert view["state"]["team_a"][0] == "Khufra"
        assert view["win_rate"]["total"] == 6.5
        assert view["lane_picks"][0]["hero"] == "Khufra"


def test_empty_room_is_dropped_when_last_client_leaves(client):
    with client.websocket_connect("/ws/rooms/drop-in") as websocket:
        websocket.receive_json()
        assert "drop-in" in app.state.rooms.rooms
    with client.websocket_connect("/ws/rooms/kept") as websocket:
        websocket.receive_json()
        websocket.send_json({"type": "ban", "team": "A", "index": 0, "value": "Fanny"})
        websocket.receive_json()

    assert "drop-in" not in app.state.rooms.rooms
    assert app.state.rooms.rooms["kept"].bans_a[0] == "Fanny"


def test_finalize_and_set_k(client):
    with client.websocket_connect("/ws/rooms/scrim") as websocket:
        websocket.receive_json()
        websocket.send_json({"type": "ban", "team": "A", "index": 1, "value": "kufra"})
        websocket.receive_json()

        websocket.send_json({"type": "finalize_ban", "team": "A", "index": 1})
        view = websocket.receive_json()
        assert view["state"]["bans_a"][1] == "Khufra"

        websocket.send_json({"type": "set_k", "k": 9})
        assert websocket.receive_json()["state"]["k"] == 5


@pytest.mark.parametrize(
    "message",
    [
        "not json",
        '{"type": "teleport"}',
        '{"type": "pick", "team": "C", "index": 0, "value": "Fanny"}',
        '{"type": "pick", "team": "A", "index": 7, "value": "Fanny"}',
    ],
)
def test_bad_messages_get_error_reply(client, message):
    with client.websocket_connect("/ws/rooms/scrim") as websocket:
        websocket.receive_json()
        websocket.send_text(message)
        reply = websocket.receive_json()
        assert reply["type"] == "error"

        # Connection stays usable
        websocket.send_json({"type": "reset"})
        assert websocket.receive_json()["type"] == "room"


def test_sync_disabled_closes_connection(client):
    app.state.broadcaster = None
    with pytest.raises(WebSocketDisconnect) as exc_info:
        with client.websocket_connect("/ws/rooms/scrim") as websocket:
            websocket.receive_json()
    assert exc_info.value.code == SYNC_DISABLED_CODE
