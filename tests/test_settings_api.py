# tests/test_settings_api.py
from http import HTTPStatus


def test_read_default_settings(client, admin_headers):
    response = client.get("/settings", headers=admin_headers)
    assert response.status_code == HTTPStatus.OK

    data = response.json()
    assert data["forward_window_months"] == 2
    assert data["claims_paused"] is False
    assert data["default_event_duration_minutes"] == 60


def test_update_settings_changes_default_duration(client, admin_headers):
    response = client.put(
        "/settings",
        json={
            "forward_window_months": 1,
            "claims_paused": False,
            "default_event_duration_minutes": 45,
            "org_name": "Math Department",
            "org_description": "Weekly office hours",
        },
        headers=admin_headers,
    )
    assert response.status_code == HTTPStatus.OK
    assert response.json()["org_name"] == "Math Department"

    series = client.post(
        "/series",
        json={"title": "Office Hours", "frequency": "WEEKLY", "weekday": "MON", "start_utc": 0},
        headers=admin_headers,
    )
    assert series.json()["default_duration_minutes"] == 45


def test_settings_update_after_reads_is_persisted(client, admin_headers):
    client.get("/settings", headers=admin_headers)
    client.get("/sessions/unclaimed", headers=admin_headers)

    updated = client.put(
        "/settings",
        json={
            "forward_window_months": 3,
            "claims_paused": True,
            "default_event_duration_minutes": 30,
            "org_name": "Office Hours",
        },
        headers=admin_headers,
    )
    assert updated.status_code == HTTPStatus.OK

    data = client.get("/settings", headers=admin_headers).json()
    assert data["forward_window_months"] == 3
    assert data["claims_paused"] is True
