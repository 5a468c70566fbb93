from newsdesk.core.security import TokenService

from .conftest import PASSWORD, TEST_SECRET


def _register(client, username, role="user", token=None):
    headers = {"Authorization": f"Bearer {token}"} if token else {}
    return client.post(
        "/api/auth/register",
        json={"username": username, "email": f"{username}@newsapp.com", "password": PASSWORD, "role": role},
        headers=headers,
    )


def _login(client, username, password=PASSWORD):
    return client.post("/api/auth/login", json={"username": username, "password": password})


def _bearer(token):
    return {"Authorization": f"Bearer {token}"}


def test_register_bootstraps_super_admin_then_users(client):
    first = _register(client, "chief")
    second = _register(client, "reader", role="admin")

    assert first.status_code == 201
    assert first.json()["message"] == "Super Admin registered successfully"
    assert first.json()["data"]["admin"]["role"] == "super_admin"
    assert first.json()["data"]["token"]
    assert second.status_code == 201
    assert second.json()["data"]["admin"]["role"] == "user"


def test_login_returns_public_account_and_token(client):
    _register(client, "chief")

    response = _login(client, "Chief@NewsApp.com")

    assert response.status_code == 200
    body = response.json()
    assert body["success"] is True
    assert body["message"] == "Login successful"
    assert body["data"]["admin"]["username"] == "chief"
    assert body["data"]["admin"]["last_login_at"] is not None
    assert "password_hash" not in body["data"]["admin"]


def test_login_failures_and_lockout(client):
    _register(client, "chief")

    for _ in range(5):
        failed = _login(client, "chief", "wrong-password")
        assert failed.status_code == 401
        assert failed.json() == {"success": False, "message": "Invalid credentials"}

    locked = _login(client, "chief")
    assert locked.status_code == 423
    assert locked.json()["success"] is False
    assert "temporarily locked" in locked.json()["message"]


def test_create_admin_is_super_admin_only(client):
    chief_token = _register(client, "chief").json()["data"]["token"]
    chief_id = client.post("/api/auth/verify", headers=_bearer(chief_token)).json()["data"]["admin"]["id"]
    payload = {"username": "editor", "email": "editor@newsapp.com", "password": PASSWORD}

    created = client.post("/api/auth/create-admin", json=payload, headers=_bearer(chief_token))
    assert created.status_code == 201
    assert created.json()["data"]["admin"]["role"] == "admin"
    assert created.json()["data"]["admin"]["created_by"] == chief_id

    editor_token = _login(client, "editor").json()["data"]["token"]
    denied = client.post(
        "/api/auth/create-admin",
        json={"username": "second", "email": "second@newsapp.com", "password": PASSWORD},
        headers=_bearer(editor_token),
    )
    assert denied.status_code == 403
    assert denied.json()["message"] == "Only Super Admin can create admin users"

    anonymous = client.post("/api/auth/create-admin", json=payload)
    assert anonymous.status_code == 401
    assert anonymous.json()["message"] == "Access denied. No token provided."


def test_duplicate_and_invalid_registrations(client):
    _register(client, "chief")

    duplicate = _register(client, "CHIEF")
    assert duplicate.status_code == 400
    assert duplicate.json()["message"] == "Username or email already exists"

    invalid_email = client.post(
        "/api/auth/register",
        json={"username": "reader", "email": "not-an-email", "password": PASSWORD},
    )
    assert invalid_email.status_code == 400
    assert "email" in invalid_email.json()["errors"]

    short_password = client.post(
        "/api/auth/register",
        json={"username": "reader", "email": "reader@newsapp.com", "password": "123"},
    )
    assert short_password.status_code == 400
    assert "password" in short_password.json()["errors"]


def test_verify_rejects_bad_tokens(client):
    assert client.post("/api/auth/verify").status_code == 401

    response = client.post("/api/auth/verify", headers=_bearer("not-a-token"))
    assert response.status_code == 401
    assert response.json()["message"] == "Invalid token"


def test_admin_routes_enforce_role_hierarchy(client):
    chief_token = _register(client, "chief").json()["data"]["token"]
    reader_token = _register(client, "reader").json()["data"]["token"]

    assert client.get("/api/admin/me", headers=_bearer(reader_token)).status_code == 403
    assert client.get("/api/admin/me", headers=_bearer(chief_token)).json()["username"] == "chief"

    assert client.get("/api/admin/accounts", headers=_bearer(reader_token)).status_code == 403
    accounts = client.get("/api/admin/accounts", headers=_bearer(chief_token))
    assert accounts.status_code == 200
    assert {account["username"] for account in accounts.json()} == {"chief", "reader"}
    assert all("password_hash" not in account for account in accounts.json())


def test_deactivated_account_token_stops_working(client):
    chief_token = _register(client, "chief").json()["data"]["token"]
    reader = _register(client, "reader").json()["data"]
    reader_token = reader["token"]
    assert client.post("/api/auth/verify", headers=_bearer(reader_token)).status_code == 200

    response = client.patch(
        f"/api/admin/accounts/{reader['admin']['id']}",
        json={"is_active": False},
        headers=_bearer(chief_token),
    )
    assert response.status_code == 200
    assert response.json()["is_active"] is False

    assert client.post("/api/auth/verify", headers=_bearer(reader_token)).status_code == 401
    assert _login(client, "reader").status_code == 401


def test_patch_unknown_account_returns_404(client):
    chief_token = _register(client, "chief").json()["data"]["token"]

    response = client.patch("/api/admin/accounts/missing", json={"is_active": False}, headers=_bearer(chief_token))

    assert response.status_code == 404
    assert response.json() == {"success": False, "message": "Account not found"}


def test_health(client):
    assert client.get("/health").json()["success"] is True


def test_super_admin_token_registers_admins(client):
    chief_token = _register(client, "chief").json()["data"]["token"]

    response = _register(client, "editor", role="admin", token=chief_token)

    assert response.status_code == 201
    assert response.json()["message"] == "Admin registered successfully"
    assert response.json()["data"]["admin"]["role"] == "admin"


def test_first_registration_with_leftover_token_still_bootstraps(client):
    leftover = TokenService(secret_key=TEST_SECRET).issue("gone-account-id")

    response = _register(client, "chief", token=leftover)

    assert response.status_code == 201
    assert response.json()["message"] == "Super Admin registered successfully"
    assert response.json()["data"]["admin"]["role"] == "super_admin"

    elevated = _register(client, "editor", role="admin", token=leftover)
    assert elevated.status_code == 401
