"""Admin dashboard API."""
import csv
import io

import pytest

from tests.conftest import check_in_payload


def _check_in(client, **overrides):
    r = client.post("/api/visitors/check-in", json=check_in_payload(**overrides))
    assert r.status_code == 201, r.text
    return r.json()


@pytest.mark.parametrize(
    "method,path",
    [
        ("GET", "/api/admin/current-visitors"),
        ("GET", "/api/admin/visit-history"),
        ("GET", "/api/admin/visitors"),
        ("GET", "/api/admin/stats"),
        ("GET", "/api/admin/system-logs"),
        ("POST", "/api/admin/auto-checkout"),
        ("GET", "/api/admin/trash"),
        ("GET", "/api/admin/visitor-reports"),
    ],
)
def test_admin_routes_require_login(client, method, path):
    assert client.request(method, path).status_code == 401


def test_current_visitors_and_history(admin_client):
    a = _check_in(admin_client)
    b = _check_in(admin_client, fullName="Grace Ilunga", phoneNumber="0822222222")
    admin_client.post("/api/admin/check-out-visitor", json={"visitId": a["visit"]["id"]})

    current = admin_client.get("/api/admin/current-visitors").json()
    assert [row["visit"]["id"] for row in current] == [b["visit"]["id"]]
    assert current[0]["visitor"]["fullName"] == "Grace Ilunga"

    history = admin_client.get("/api/admin/visit-history").json()
    assert [row["visit"]["id"] for row in history] == [a["visit"]["id"]]
    assert history[0]["visit"]["checkOutTime"] is not None


def test_admin_check_out_same_rules_as_kiosk(admin_client):
    visit_id = _check_in(admin_client)["visit"]["id"]
    assert admin_client.post("/api/admin/check-out-visitor", json={"visitId": visit_id}).status_code == 200
    assert admin_client.post("/api/admin/check-out-visitor", json={"visitId": visit_id}).status_code == 400
    assert admin_client.post("/api/admin/check-out-visitor", json={"visitId": 999}).status_code == 404


def test_visitor_search(admin_client):
    jean = _check_in(admin_client, email="jean.mukendi@gmail.com")["visitor"]
    grace = _check_in(admin_client, fullName="Grace Ilunga", phoneNumber="0822222222")["visitor"]

    everyone = admin_client.get("/api/admin/visitors").json()
    assert [v["id"] for v in everyone] == [grace["id"], jean["id"]]

    assert [v["id"] for v in admin_client.get("/api/admin/visitors", params={"search": "ilunga"}).json()] == [grace["id"]]
    assert [v["id"] for v in admin_client.get("/api/admin/visitors", params={"search": "gmail"}).json()] == [jean["id"]]
    assert [v["id"] for v in admin_client.get("/api/admin/visitors", params={"search": "0822"}).json()] == [grace["id"]]
    by_badge = admin_client.get("/api/admin/all-visitors", params={"search": jean["badgeId"]}).json()
    assert [v["id"] for v in by_badge] == [jean["id"]]


def test_visitor_detail(admin_client):
    created = _check_in(admin_client)
    visitor_id = created["visitor"]["id"]
    admin_client.post("/api/visitors/check-in/returning", json={"visitorId": visitor_id})

    r = admin_client.get(f"/api/admin/visitors/{visitor_id}")
    assert r.status_code == 200, r.text
    assert r.json()["visitor"]["id"] == visitor_id
    assert len(r.json()["visits"]) == 2
    assert admin_client.get("/api/admin/visitors/999").status_code == 404


def test_update_visitor_only_writes_sent_fields(admin_client):
    visitor = _check_in(admin_client, email="jean.mukendi@gmail.com")["visitor"]

    r = admin_client.put("/api/admin/update-visitor", json={"id": visitor["id"], "municipality": "Lemba"})
    assert r.status_code == 200, r.text
    updated = r.json()
    assert updated["municipality"] == "Lemba"
    assert updated["email"] == "jean.mukendi@gmail.com"
    assert updated["fullName"] == "Jean Mukendi"

    r = admin_client.put("/api/admin/update-visitor", json={"id": visitor["id"], "email": None})
    assert r.json()["email"] is None

    assert admin_client.put("/api/admin/update-visitor", json={"id": visitor["id"], "fullName": None}).status_code == 400
    assert admin_client.put("/api/admin/update-visitor", json={"id": visitor["id"], "phoneNumber": "123"}).status_code == 422
    assert admin_client.put("/api/admin/update-visitor", json={"id": 999, "municipality": "Lemba"}).status_code == 404


def test_verify_visitor(admin_client):
    visitor_id = _check_in(admin_client)["visitor"]["id"]
    r = admin_client.post("/api/admin/verify-visitor", json={"visitorId": visitor_id, "verified": True})
    assert r.status_code == 200
    assert r.json()["verified"] is True


def test_update_visit_purpose(admin_client):
    visit_id = _check_in(admin_client)["visit"]["id"]
    r = admin_client.post("/api/admin/update-visit-purpose", json={"visitId": visit_id, "purpose": "Interview"})
    assert r.status_code == 200
    assert r.json()["purpose"] == "Interview"
    assert admin_client.post("/api/admin/update-visit-purpose", json={"visitId": 999, "purpose": "x"}).status_code == 404


def test_set_visit_partner(admin_client):
    a = _check_in(admin_client)["visit"]["id"]
    b = _check_in(admin_client, fullName="Grace Ilunga", phoneNumber="0822222222")["visit"]["id"]
    c = _check_in(admin_client, fullName="David Kalala", phoneNumber="0833333333")["visit"]["id"]

    r = admin_client.post("/api/admin/set-visit-partner", json={"visitId": a, "partnerId": b})
    assert r.status_code == 200, r.text
    assert r.json()["visit"]["partnerId"] == b
    assert r.json()["partner"]["partnerId"] == a

    admin_client.post("/api/admin/set-visit-partner", json={"visitId": a, "partnerId": c})
    partners = {row["visit"]["id"]: row["visit"]["partnerId"] for row in admin_client.get("/api/admin/current-visitors").json()}
    assert partners == {a: c, b: None, c: a}

    r = admin_client.post("/api/admin/set-visit-partner", json={"visitId": a, "partnerId": None})
    assert r.json()["partner"] is None
    partners = {row["visit"]["id"]: row["visit"]["partnerId"] for row in admin_client.get("/api/admin/current-visitors").json()}
    assert partners == {a: None, b: None, c: None}

    assert admin_client.post("/api/admin/set-visit-partner", json={"visitId": a, "partnerId": a}).status_code == 400
    assert admin_client.post("/api/admin/set-visit-partner", json={"visitId": a, "partnerId": 999}).status_code == 404


def test_manual_auto_checkout(admin_client, admin):
    _check_in(admin_client)
    _check_in(admin_client, fullName="Grace Ilunga", phoneNumber="0822222222")

    r = admin_client.post("/api/admin/auto-checkout")
    assert r.status_code == 200, r.text
    assert r.json()["count"] == 2
    assert admin_client.get("/api/admin/current-visitors").json() == []

    logs = admin_client.get("/api/admin/system-logs").json()
    assert logs[0]["action"] == "MANUAL_CHECKOUT"
    assert logs[0]["userId"] == admin.id
    assert logs[0]["affectedRecords"] == 2


def test_stats(admin_client):
    visit_id = _check_in(admin_client)["visit"]["id"]
    _check_in(admin_client, fullName="Grace Ilunga", phoneNumber="0822222222")
    admin_client.post("/api/visitors/check-out", json={"visitId": visit_id})

    r = admin_client.get("/api/admin/stats")
    assert r.status_code == 200
    stats = r.json()
    assert stats["totalVisitorsToday"] == 2
    assert stats["currentlyCheckedIn"] == 1
    assert stats["totalRegisteredVisitors"] == 2
    assert stats["totalVisitsAllTime"] == 2


def test_export_json_and_csv(admin_client):
    visitor = _check_in(admin_client)["visitor"]

    rows = admin_client.get("/api/admin/export").json()
    assert len(rows) == 1
    assert rows[0]["BadgeId"] == visitor["badgeId"]
    assert rows[0]["VisitStatus"] == "Active"

    r = admin_client.get("/api/admin/export", params={"format": "csv"})
    assert r.status_code == 200
    assert r.headers["content-type"].startswith("text/csv")
    parsed = list(csv.DictReader(io.StringIO(r.text)))
    assert parsed[0]["VisitorName"] == "Jean Mukendi"

    bad_range = admin_client.get("/api/admin/export", params={"startDate": "2026-05-02", "endDate": "2026-05-01"})
    assert bad_range.status_code == 400
    assert admin_client.get("/api/admin/export", params={"format": "xml"}).status_code == 422


def test_system_logs_limit(admin_client):
    first = _check_in(admin_client)
    admin_client.post("/api/visitors/check-in/returning", json={"visitorId": first["visitor"]["id"]})
    admin_client.post("/api/visitors/check-in/returning", json={"visitorId": first["visitor"]["id"]})

    logs = admin_client.get("/api/admin/system-logs", params={"limit": 1}).json()
    assert len(logs) == 1
    assert admin_client.get("/api/admin/system-logs", params={"limit": 0}).status_code == 400
