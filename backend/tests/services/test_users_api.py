"""Users API — HTTP surface over UserRecordService.

Tests cover:
    - POST creates (201), normalizes, never returns the password
    - Validation failures map to 400 with MISSING_FIELD / INVALID_EMAIL
    - GET unknown id maps to 404 USER_NOT_FOUND
    - DELETE unknown id returns rows_affected 0
    - Duplicate nickname maps to 409 DUPLICATE_RECORD
    - Escaped nicknames over the column size map to 400 FIELD_TOO_LONG
    - Out-of-range ids rejected before reaching the service
"""

import pytest


async def _create(client, nickname="bob", email="bob@x.com", password="secret"):
    return await client.post(
        "/api/v1/users",
        json={"nickname": nickname, "email": email, "password": password},
    )


async def test_create_returns_201_without_password(client):
    res = await _create(client, nickname="  bob  ")
    assert res.status_code == 201
    body = res.json()
    assert body["nickname"] == "bob"
    assert body["email"] == "bob@x.com"
    assert "password" not in body
    assert "password_digest" not in body
    assert body["id"] >= 1


async def test_create_escapes_markup(client):
    res = await _create(client, nickname="<script>x</script>")
    assert res.json()["nickname"] == "&lt;script&gt;x&lt;/script&gt;"


@pytest.mark.parametrize("missing", ["nickname", "password", "email"])
async def test_create_missing_field_returns_400(client, missing):
    payload = {"nickname": "bob", "email": "bob@x.com", "password": "secret"}
    payload[missing] = "   " if missing != "password" else ""
    res = await client.post("/api/v1/users", json=payload)
    assert res.status_code == 400
    error = res.json()["error"]
    assert error["code"] == "MISSING_FIELD"
    assert error["message"] == f"{missing.capitalize()} required"


async def test_create_invalid_email_returns_400(client):
    res = await _create(client, email="not-an-email")
    assert res.status_code == 400
    assert res.json()["error"]["code"] == "INVALID_EMAIL"


async def test_create_password_over_bcrypt_limit_returns_400(client):
    res = await _create(client, password="x" * 73)
    assert res.status_code == 400
    assert res.json()["error"]["code"] == "VALIDATION_ERROR"


async def test_create_password_with_nul_byte_returns_400(client):
    res = await _create(client, password="pw\x00pw")
    assert res.status_code == 400
    assert res.json()["error"]["code"] == "INVALID_PASSWORD"


async def test_create_escaped_nickname_over_limit_returns_400(client):
    res = await _create(client, nickname="<" * 255)
    assert res.status_code == 400
    error = res.json()["error"]
    assert error["code"] == "FIELD_TOO_LONG"
    assert error["message"] == "Nickname too long (max 255 bytes)"


async def test_create_duplicate_nickname_returns_409(client):
    await _create(client)
    res = await _create(client, email="other@x.com")
    assert res.status_code == 409
    error = res.json()["error"]
    assert error["code"] == "DUPLICATE_RECORD"
    assert error["category"] == "conflict"


async def test_list_users(client):
    await _create(client, nickname="ann", email="ann@x.com")
    await _create(client, nickname="ben", email="ben@x.com")
    res = await client.get("/api/v1/users")
    assert res.status_code == 200
    assert sorted(u["nickname"] for u in res.json()["users"]) == ["ann", "ben"]


async def test_get_user(client):
    created = (await _create(client)).json()
    res = await client.get(f"/api/v1/users/{created['id']}")
    assert res.status_code == 200
    assert res.json()["nickname"] == "bob"


async def test_get_unknown_user_returns_404(client):
    res = await client.get("/api/v1/users/999")
    assert res.status_code == 404
    error = res.json()["error"]
    assert error["code"] == "USER_NOT_FOUND"
    assert error["context"]["user_id"] == 999


@pytest.mark.parametrize("user_id", ["0", "4294967296", "abc"])
async def test_out_of_range_id_returns_400(client, user_id):
    res = await client.get(f"/api/v1/users/{user_id}")
    assert res.status_code == 400
    assert res.json()["error"]["code"] == "VALIDATION_ERROR"


async def test_update_user(client):
    created = (await _create(client)).json()
    res = await client.put(
        f"/api/v1/users/{created['id']}",
        json={"nickname": "robert", "email": "robert@x.com", "password": "new"},
    )
    assert res.status_code == 200
    body = res.json()
    assert body["id"] == created["id"]
    assert body["nickname"] == "robert"
    assert body["created_at"] == created["created_at"]


async def test_update_requires_nickname(client):
    created = (await _create(client)).json()
    res = await client.put(
        f"/api/v1/users/{created['id']}",
        json={"email": "bob@x.com", "password": "new"},
    )
    assert res.status_code == 400
    assert res.json()["error"]["code"] == "MISSING_FIELD"


async def test_update_unknown_user_returns_404(client):
    res = await client.put(
        "/api/v1/users/999",
        json={"nickname": "bob", "email": "bob@x.com", "password": "pw"},
    )
    assert res.status_code == 404


async def test_delete_user(client):
    created = (await _create(client)).json()
    res = await client.delete(f"/api/v1/users/{created['id']}")
    assert res.status_code == 200
    assert res.json() == {"rows_affected": 1}
    assert (await client.get(f"/api/v1/users/{created['id']}")).status_code == 404


async def test_delete_unknown_user_returns_zero_rows(client):
    res = await client.delete("/api/v1/users/999")
    assert res.status_code == 200
    assert res.json() == {"rows_affected": 0}


async def test_health_liveness(client):
    res = await client.get("/api/v1/health/")
    assert res.status_code == 200
    assert res.json()["status"] == "healthy"


async def test_health_readiness(client):
    res = await client.get("/api/v1/health/ready")
    assert res.status_code == 200
    assert res.json()["checks"]["database"] == "healthy"
