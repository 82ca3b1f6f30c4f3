# tests/test_coverage_api.py
from datetime import datetime, timezone
from http import HTTPStatus

HOUR = 60 * 60 * 1_000_000_000


def _nanos(*args) -> int:
    return int(datetime(*args, tzinfo=timezone.utc).timestamp()) * 1_000_000_000


OCCURRENCE = _nanos(2025, 1, 8, 15)


def _setup(client, admin_headers) -> tuple[str, dict]:
    """
    Create a weekly series and an ordinary member; return the series id and
    the member's headers.
    """
    series = client.post(
        "/series",
        json={
            "title": "Office Hours",
            "frequency": "WEEKLY",
            "weekday": "WED",
            "start_utc": _nanos(2025, 1, 1, 15),
        },
        headers=admin_headers,
    ).json()
    client.post(
        "/users",
        json={"principal": "member-api", "name": "Member", "email": "member@example.org"},
        headers=admin_headers,
    )
    return series["series_id"], {"X-Principal": "member-api"}


def _assign_payload(series_id: str, host: str = "member-api", **extra) -> dict:
    payload = {
        "series_id": series_id,
        "occurrence_start_utc": OCCURRENCE,
        "host_principal": host,
    }
    payload.update(extra)
    return payload


def _set_claims_paused(client, admin_headers, paused: bool) -> None:
    response = client.put(
        "/settings",
        json={
            "forward_window_months": 2,
            "claims_paused": paused,
            "default_event_duration_minutes": 60,
            "org_name": "Office Hours",
        },
        headers=admin_headers,
    )
    assert response.status_code == HTTPStatus.OK


def test_member_claims_and_releases_session(client, admin_headers):
    series_id, member_headers = _setup(client, admin_headers)

    claimed = client.post("/coverage/assign", json=_assign_payload(series_id), headers=member_headers)
    assert claimed.status_code == HTTPStatus.OK
    assert claimed.json()["host_principal"] == "member-api"

    released = client.post(
        "/coverage/unassign",
        json={"series_id": series_id, "occurrence_start_utc": OCCURRENCE},
        headers=member_headers,
    )
    assert released.status_code == HTTPStatus.OK
    assert released.json()["host_principal"] is None


def test_claims_paused_returns_conflict_for_members(client, admin_headers):
    series_id, member_headers = _setup(client, admin_headers)
    _set_claims_paused(client, admin_headers, True)

    response = client.post("/coverage/assign", json=_assign_payload(series_id), headers=member_headers)
    assert response.status_code == HTTPStatus.CONFLICT
    assert response.json()["detail"] == "Claims are currently paused"

    as_admin = client.post("/coverage/assign", json=_assign_payload(series_id), headers=admin_headers)
    assert as_admin.status_code == HTTPStatus.OK


def test_out_of_office_blocks_claim(client, admin_headers):
    series_id, member_headers = _setup(client, admin_headers)
    ooo = client.put(
        "/users/me/out-of-office",
        json=[{"start_utc": OCCURRENCE, "end_utc": OCCURRENCE + HOUR}],
        headers=member_headers,
    )
    assert ooo.status_code == HTTPStatus.OK

    response = client.post("/coverage/assign", json=_assign_payload(series_id), headers=member_headers)
    assert response.status_code == HTTPStatus.CONFLICT


def test_admin_override_only_for_admins(client, admin_headers):
    series_id, member_headers = _setup(client, admin_headers)
    client.put(
        "/users/me/out-of-office",
        json=[{"start_utc": OCCURRENCE, "end_utc": OCCURRENCE + HOUR}],
        headers=member_headers,
    )

    denied = client.post(
        "/coverage/assign",
        json=_assign_payload(series_id, admin_override=True),
        headers=member_headers,
    )
    assert denied.status_code == HTTPStatus.UNAUTHORIZED

    allowed = client.post(
        "/coverage/assign",
        json=_assign_payload(series_id, admin_override=True),
        headers=admin_headers,
    )
    assert allowed.status_code == HTTPStatus.OK
    assert allowed.json()["host_principal"] == "member-api"


def test_assign_non_occurrence_instant_not_found(client, admin_headers):
    series_id, member_headers = _setup(client, admin_headers)

    response = client.post(
        "/coverage/assign",
        json=_assign_payload(series_id, occurrence_start_utc=OCCURRENCE + 1),
        headers=member_headers,
    )
    assert response.status_code == HTTPStatus.NOT_FOUND


def test_coverage_stats_one_entry_per_month(client, admin_headers):
    _setup(client, admin_headers)

    response = client.get("/coverage/stats", params={"months": 3}, headers=admin_headers)
    assert response.status_code == HTTPStatus.OK

    data = response.json()
    assert len(data) == 3
    for entry in data:
        assert entry["total_sessions"] >= 4
        assert entry["covered_sessions"] == 0
        assert entry["coverage_pct"] == 0.0
    assert data[0]["window_end_utc"] == data[1]["window_start_utc"]


def test_coverage_stats_rejects_zero_months(client, admin_headers):
    response = client.get("/coverage/stats", params={"months": 0}, headers=admin_headers)
    assert response.status_code == HTTPStatus.UNPROCESSABLE_ENTITY
