import asyncio

from visitdesk.services.notifications import CheckInHub, hub


class FakeSocket:
    def __init__(self, fail=False):
        self.sent = []
        self.accepted = False
        self.fail = fail

    async def accept(self):
        self.accepted = True

    async def send_json(self, message):
        if self.fail and self.accepted and self.sent:
            raise RuntimeError("socket closed")
        self.sent.append(message)


def test_connect_sends_greeting():
    local = CheckInHub()
    ws = FakeSocket()
    asyncio.run(local.connect(ws))
    assert ws.accepted
    assert ws.sent[0]["type"] == "connection"
    assert ws in local.connections


def test_broadcast_reaches_every_client_and_drops_dead_ones():
    local = CheckInHub()
    good, dead = FakeSocket(), FakeSocket(fail=True)

    async def scenario():
        await local.connect(good)
        await local.connect(dead)
        await local.broadcast_check_in({"id": 1, "badgeId": "VIS-00001", "fullName": "Jean Mukendi"}, None)

    asyncio.run(scenario())

    message = good.sent[-1]
    assert message["type"] == "check-in"
    assert message["visitor"]["badgeId"] == "VIS-00001"
    assert message["purpose"] == "Not specified"
    assert "timestamp" in message
    assert local.connections == {good}


def test_broadcast_with_no_clients_is_a_no_op():
    asyncio.run(CheckInHub().broadcast({"type": "check-in"}))


def test_websocket_endpoint_greets_and_unregisters(client):
    with client.websocket_connect("/ws") as ws:
        greeting = ws.receive_json()
        assert greeting["type"] == "connection"
        assert len(hub.connections) >= 1


def test_check_in_broadcasts_to_dashboards(client, monkeypatch):
    received = []

    async def record(message):
        received.append(message)

    monkeypatch.setattr(hub, "broadcast", record)
    r = client.post("/api/visitors/check-in", json={
        "fullName": "Jean Mukendi",
        "yearOfBirth": 1985,
        "phoneNumber": "0812345678",
        "purpose": "Meeting",
    })
    assert r.status_code == 201, r.text

    assert len(received) == 1
    assert received[0]["type"] == "check-in"
    assert received[0]["purpose"] == "Meeting"
    assert received[0]["visitor"]["badgeId"] == r.json()["visitor"]["badgeId"]
