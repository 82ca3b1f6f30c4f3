# tests/test_auth_api.py
from http import HTTPStatus


def _create_member(client, admin_headers, principal: str = "member-api") -> dict:
    response = client.post(
        "/users",
        json={"principal": principal, "name": "Member", "email": f"{principal}@example.org"},
        headers=admin_headers,
    )
    assert response.status_code == HTTPStatus.CREATED
    return {"X-Principal": principal}


def test_missing_principal_header_is_unauthorized(client):
    response = client.get("/users/me")

    assert response.status_code == HTTPStatus.UNAUTHORIZED
    assert response.json()["detail"] == "Missing X-Principal header."


def test_unknown_principal_is_unauthorized(client):
    response = client.get("/users/me", headers={"X-Principal": "stranger"})
    assert response.status_code == HTTPStatus.UNAUTHORIZED


def test_bootstrap_admin_exists_after_startup(client, admin_headers):
    response = client.get("/users/me", headers=admin_headers)

    assert response.status_code == HTTPStatus.OK
    data = response.json()
    assert data["principal"] == "admin-principal"
    assert data["name"] == "Ada Admin"
    assert data["role"] == "ADMIN"


def test_non_admin_cannot_use_admin_routes(client, admin_headers):
    member_headers = _create_member(client, admin_headers)

    assert client.get("/users", headers=member_headers).status_code == HTTPStatus.UNAUTHORIZED
    assert client.get("/series", headers=member_headers).status_code == HTTPStatus.UNAUTHORIZED
    assert (
        client.get("/notifications/pending", headers=member_headers).status_code
        == HTTPStatus.UNAUTHORIZED
    )


def test_disabled_user_is_locked_out(client, admin_headers):
    member_headers = _create_member(client, admin_headers, principal="to-disable")

    response = client.post("/users/to-disable/disable", headers=admin_headers)
    assert response.status_code == HTTPStatus.OK
    assert response.json()["status"] == "DISABLED"

    assert client.get("/users/me", headers=member_headers).status_code == HTTPStatus.UNAUTHORIZED

    client.post("/users/to-disable/enable", headers=admin_headers)
    assert client.get("/users/me", headers=member_headers).status_code == HTTPStatus.OK


def test_duplicate_authorization_conflicts(client, admin_headers):
    _create_member(client, admin_headers, principal="dup")

    response = client.post(
        "/users",
        json={"principal": "dup", "name": "Dup", "email": "dup@example.org"},
        headers=admin_headers,
    )
    assert response.status_code == HTTPStatus.CONFLICT
    assert response.json()["detail"] == "User already exists"


def test_admin_updates_user_by_principal(client, admin_headers):
    """
    Routes with a `principal` path parameter coexist with the X-Principal
    header used for authentication.
    """
    member_headers = _create_member(client, admin_headers, principal="renamed")

    response = client.put(
        "/users/renamed",
        json={"name": "Renamed Member", "email": "renamed@example.org", "role": "USER"},
        headers=admin_headers,
    )
    assert response.status_code == HTTPStatus.OK
    assert response.json()["name"] == "Renamed Member"

    me = client.get("/users/me", headers=member_headers)
    assert me.json()["principal"] == "renamed"
