import httpx

from tests.conftest import ADMIN, API, bearer, make_settings
from vitrina.main import create_app


async def test_register_then_duplicate(client, tokens, db):
    r = await client.post(f"{API}/auth/register", json={"email": "a@x.com", "password": "ab"})
    assert r.status_code == 200
    body = r.json()
    assert body["token_type"] == "bearer"
    claims = tokens.verify(body["access_token"])
    user = await db["user"].find_one({"email": "a@x.com"})
    assert claims["sub"] == str(user["_id"])
    assert claims["role"] == "user"
    assert "password" not in user and user["password_hash"] != "ab"

    r = await client.post(f"{API}/auth/register", json={"email": "a@x.com", "password": "ab"})
    assert r.status_code == 400
    assert r.json()["message"] == "User already exists"
    assert await db["user"].count_documents({}) == 1


async def test_register_duplicate_phone_with_new_email(client, db):
    await client.post(f"{API}/auth/register", json={"phone": "+998 90 111", "password": "ab"})
    r = await client.post(f"{API}/auth/register", json={"phone": "+99890111", "email": "b@x.com", "password": "ab"})
    assert r.status_code == 400
    assert await db["user"].count_documents({}) == 1


async def test_register_needs_email_or_phone(client):
    r = await client.post(f"{API}/auth/register", json={"password": "ab"})
    assert r.status_code == 400
    r = await client.post(f"{API}/auth/register", json={"email": "c@x.com", "password": "a"})
    assert r.status_code == 400


async def test_user_login(client):
    await client.post(f"{API}/auth/register", json={"email": "a@x.com", "password": "ab"})
    r = await client.post(f"{API}/auth/login", json={"email": "A@x.com", "password": "ab"})
    assert r.status_code == 200
    assert r.json()["access_token"]

    r = await client.post(f"{API}/auth/login", json={"email": "a@x.com", "password": "zz"})
    assert r.status_code == 400
    assert r.json()["message"] == "Invalid credentials"
    r = await client.post(f"{API}/auth/login", json={"email": "nobody@x.com", "password": "ab"})
    assert r.status_code == 400


async def test_me_for_user_and_admin(client, user_headers, admin_headers):
    r = await client.get(f"{API}/auth/me", headers=user_headers)
    assert r.status_code == 200
    assert r.json()["email"] == "user@x.com"
    assert "password_hash" not in r.json()

    r = await client.get(f"{API}/auth/me", headers=admin_headers)
    assert r.json()["username"] == ADMIN["username"]
    assert "refresh_token_hash" not in r.json()


async def test_admin_login_returns_both_tokens(admin_login, tokens, db):
    access = tokens.verify(admin_login["access_token"])
    assert access["role"] == "admin"
    assert access["exp"] - access["iat"] == 30 * 86400
    refresh = tokens.verify(admin_login["refresh_token"], expected_type="refresh")
    admin = await db["admin"].find_one({"username": ADMIN["username"]})
    assert refresh["sub"] == str(admin["_id"])
    assert admin["last_visit"] is not None


async def test_admin_login_wrong_password(client, admin_login):
    r = await client.post(f"{API}/auth/login/admin", json={"username": ADMIN["username"], "password": "nope"})
    assert r.status_code == 400
    assert r.json()["message"] == "Invalid credentials"


async def test_refresh_rotation(client, admin_login, tokens):
    r1 = admin_login["refresh_token"]
    r = await client.post(f"{API}/auth/login/admin", json={"username": ADMIN["username"], "password": ADMIN["password"]})
    r2 = r.json()["refresh_token"]
    assert r1 != r2

    r = await client.post(f"{API}/auth/refresh-token", json={"refresh_token": r1})
    assert r.status_code == 403
    assert r.json()["message"] == "Invalid refresh token"

    r = await client.post(f"{API}/auth/refresh-token", json={"refresh_token": r2})
    assert r.status_code == 200
    assert tokens.verify(r.json()["access_token"])["role"] == "admin"


async def test_refresh_with_garbage_is_unauthorized(client, admin_login):
    r = await client.post(f"{API}/auth/refresh-token", json={"refresh_token": "garbage"})
    assert r.status_code == 401
    r = await client.post(f"{API}/auth/refresh-token", json={"refresh_token": admin_login["access_token"]})
    assert r.status_code == 401


async def test_missing_and_invalid_tokens(client, tokens):
    r = await client.get(f"{API}/auth/me")
    assert r.status_code == 401
    assert r.json()["message"] == "Missing token"

    r = await client.get(f"{API}/auth/me", headers={"Authorization": "Token abc"})
    assert r.status_code == 401

    r = await client.get(f"{API}/auth/me", headers=bearer("abc.def.ghi"))
    assert r.status_code == 401

    r = await client.get(f"{API}/auth/me", headers=bearer(tokens.issue_refresh("abc")))
    assert r.status_code == 401


async def test_expired_token_is_unauthorized(db):
    app = create_app(make_settings(user_access_token_expire_days=-1), db=db)
    async with httpx.AsyncClient(transport=httpx.ASGITransport(app=app), base_url="http://test") as c:
        r = await c.post(f"{API}/auth/register", json={"email": "old@x.com", "password": "ab"})
        r = await c.get(f"{API}/auth/me", headers=bearer(r.json()["access_token"]))
    assert r.status_code == 401
    assert r.json()["message"] == "Token expired"


async def test_login_is_throttled(db):
    app = create_app(make_settings(login_rate_per_min=2), db=db)
    async with httpx.AsyncClient(transport=httpx.ASGITransport(app=app), base_url="http://test") as c:
        codes = [
            (await c.post(f"{API}/auth/login", json={"email": "x@x.com", "password": "ab"})).status_code
            for _ in range(3)
        ]
        app.state.rate_limiter.reset()
        after_reset = await c.post(f"{API}/auth/login", json={"email": "x@x.com", "password": "ab"})
    assert codes == [400, 400, 429]
    assert after_reset.status_code == 400
