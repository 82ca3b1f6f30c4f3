# tests/test_sessions_api.py
from datetime import datetime, timezone
from http import HTTPStatus

HOUR = 60 * 60 * 1_000_000_000


def _nanos(*args) -> int:
    return int(datetime(*args, tzinfo=timezone.utc).timestamp()) * 1_000_000_000


OCCURRENCE = _nanos(2025, 1, 8, 15)
JANUARY = {"window_start": _nanos(2025, 1, 1), "window_end": _nanos(2025, 2, 1)}


def _create_weekly_series(client, admin_headers) -> str:
    response = client.post(
        "/series",
        json={
            "title": "Office Hours",
            "frequency": "WEEKLY",
            "weekday": "WED",
            "start_utc": _nanos(2025, 1, 1, 15),
        },
        headers=admin_headers,
    )
    assert response.status_code == HTTPStatus.CREATED
    return response.json()["series_id"]


def test_list_sessions_requires_authentication(client):
    assert client.get("/sessions", params=JANUARY).status_code == HTTPStatus.UNAUTHORIZED


def test_list_sessions_in_window(client, admin_headers):
    series_id = _create_weekly_series(client, admin_headers)

    response = client.get("/sessions", params=JANUARY, headers=admin_headers)
    assert response.status_code == HTTPStatus.OK

    data = response.json()
    assert [s["start_utc"] for s in data] == [
        _nanos(2025, 1, d, 15) for d in (1, 8, 15, 22, 29)
    ]
    assert all(s["series_id"] == series_id for s in data)
    assert all(s["end_utc"] - s["start_utc"] == HOUR for s in data)
    assert all(s["host_principal"] is None for s in data)


def test_inverted_window_is_rejected(client, admin_headers):
    response = client.get(
        "/sessions",
        params={"window_start": JANUARY["window_end"], "window_end": JANUARY["window_start"]},
        headers=admin_headers,
    )
    assert response.status_code == HTTPStatus.BAD_REQUEST


def test_create_one_off_session(client, admin_headers):
    response = client.post(
        "/sessions",
        json={"title": "Exam prep", "start_utc": OCCURRENCE, "end_utc": OCCURRENCE + HOUR},
        headers=admin_headers,
    )
    assert response.status_code == HTTPStatus.CREATED

    created = response.json()
    assert created["series_id"] is None
    assert created["status"] == "ACTIVE"

    listed = client.get("/sessions", params=JANUARY, headers=admin_headers).json()
    assert [s["session_id"] for s in listed] == [created["session_id"]]


def test_create_one_off_with_end_before_start_rejected(client, admin_headers):
    response = client.post(
        "/sessions",
        json={"title": "Broken", "start_utc": OCCURRENCE, "end_utc": OCCURRENCE - 1},
        headers=admin_headers,
    )
    assert response.status_code == HTTPStatus.BAD_REQUEST
    assert response.json()["detail"] == "End time must be after start time"


def test_edit_and_cancel_occurrence(client, admin_headers):
    series_id = _create_weekly_series(client, admin_headers)

    edited = client.patch(
        "/sessions/occurrence",
        json={
            "series_id": series_id,
            "occurrence_start_utc": OCCURRENCE,
            "start_utc": OCCURRENCE + HOUR,
            "end_utc": OCCURRENCE + 2 * HOUR,
            "notes": "Moved one hour later",
        },
        headers=admin_headers,
    )
    assert edited.status_code == HTTPStatus.OK
    assert edited.json()["start_utc"] == OCCURRENCE + HOUR
    assert edited.json()["occurrence_start_utc"] == OCCURRENCE

    cancelled = client.post(
        "/sessions/occurrence/cancel",
        json={"series_id": series_id, "occurrence_start_utc": OCCURRENCE},
        headers=admin_headers,
    )
    assert cancelled.status_code == HTTPStatus.OK
    assert cancelled.json()["status"] == "CANCELLED"

    listed = client.get("/sessions", params=JANUARY, headers=admin_headers).json()
    assert OCCURRENCE not in [s["occurrence_start_utc"] for s in listed]
    assert len(listed) == 4


def test_unclaimed_queue_lists_future_sessions_without_host(client, admin_headers):
    _create_weekly_series(client, admin_headers)

    response = client.get("/sessions/unclaimed", headers=admin_headers)
    assert response.status_code == HTTPStatus.OK

    data = response.json()
    assert len(data) >= 8
    assert all(s["host_principal"] is None for s in data)
    assert [s["start_utc"] for s in data] == sorted(s["start_utc"] for s in data)


def test_public_view_shows_host_name_only(client, admin_headers):
    series_id = _create_weekly_series(client, admin_headers)
    client.post(
        "/coverage/assign",
        json={
            "series_id": series_id,
            "occurrence_start_utc": OCCURRENCE,
            "host_principal": "admin-principal",
        },
        headers=admin_headers,
    )

    response = client.get("/sessions/public", params=JANUARY)
    assert response.status_code == HTTPStatus.OK

    data = response.json()
    assert len(data) == 5
    assert data[1]["host_name"] == "Ada Admin"
    assert "host_principal" not in data[1]
    assert data[0]["host_name"] is None


def test_out_of_range_window_is_rejected(client, admin_headers):
    _create_weekly_series(client, admin_headers)

    response = client.get(
        "/sessions",
        params={
            "window_start": 18_400_000_000_000_000_000,
            "window_end": 18_500_000_000_000_000_000,
        },
        headers=admin_headers,
    )
    assert response.status_code == HTTPStatus.UNPROCESSABLE_ENTITY


def test_out_of_range_one_off_is_rejected(client, admin_headers):
    response = client.post(
        "/sessions",
        json={"title": "Far future", "start_utc": 2**63, "end_utc": 2**63 + HOUR},
        headers=admin_headers,
    )
    assert response.status_code == HTTPStatus.UNPROCESSABLE_ENTITY
