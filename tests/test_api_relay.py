import pytest

INITIAL = {"type": "sensor", "payload": {"angle": 0.0, "rep": 0, "running": False}}


def telemetry(angle, rep, running=True):
    return {"type": "sensor", "payload": {"angle": angle, "rep": rep, "running": running}}


@pytest.mark.parametrize("path", ["/ws", "/api/relay/ws"])
def test_new_connection_receives_current_state(client, path):
    with client.websocket_connect(path) as ws:
        assert ws.receive_json() == INITIAL


def test_telemetry_reaches_every_connection(client):
    with client.websocket_connect("/ws") as device, client.websocket_connect("/ws") as dashboard:
        assert device.receive_json() == INITIAL
        assert dashboard.receive_json() == INITIAL

        device.send_json(telemetry(45.5, 2))

        expected = telemetry(45.5, 2)
        assert device.receive_json() == expected
        assert dashboard.receive_json() == expected


def test_control_reaches_others_but_not_sender(client):
    with client.websocket_connect("/ws") as dashboard, client.websocket_connect("/ws") as device:
        dashboard.receive_json()
        device.receive_json()

        dashboard.send_json({"type": "control", "running": True})
        assert device.receive_json() == {"type": "control", "running": True}

        # The sender's next frame is the telemetry that follows, not its own command
        device.send_json(telemetry(10, 0))
        assert dashboard.receive_json() == telemetry(10, 0)


def test_malformed_frames_do_not_break_the_connection(client):
    with client.websocket_connect("/ws") as ws:
        ws.receive_json()

        ws.send_text("{broken")
        ws.send_json({"type": "sensor", "payload": {"angle": 1}})
        ws.send_json(telemetry(12, 1))

        assert ws.receive_json() == telemetry(12, 1)


def test_relay_state_endpoint(client):
    with client.websocket_connect("/ws") as ws:
        ws.receive_json()
        ws.send_json(telemetry(33, 4, running=False))
        ws.receive_json()

        data = client.get("/api/relay/state").json()["data"]

    assert data["connections"] == 1
    assert data["state"]["angle"] == 33.0
    assert data["state"]["rep"] == 4
    assert data["state"]["running"] is False
