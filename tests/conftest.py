import httpx
import pytest
from mongomock_motor import AsyncMongoMockClient

from vitrina.core.config import Settings
from vitrina.main import create_app

API = "/api/v1"

ADMIN = {"username": "root", "fullname": "Root Admin", "phone": "+998900000001", "password": "secret"}


def make_settings(**overrides) -> Settings:
    values = dict(
        jwt_secret="test-secret",
        password_time_cost=1,
        password_memory_cost=8,
        password_parallelism=1,
        login_rate_per_min=1000,
        log_level="WARNING",
    )
    values.update(overrides)
    return Settings(_env_file=None, **values)


def bearer(token: str) -> dict:
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def settings():
    return make_settings()


@pytest.fixture
def db():
    return AsyncMongoMockClient()["vitrina_test"]


@pytest.fixture
def app(settings, db):
    return create_app(settings, db=db)


@pytest.fixture
def tokens(app):
    return app.state.tokens


@pytest.fixture
def hasher(app):
    return app.state.hasher


@pytest.fixture
async def client(app):
    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://test") as c:
        yield c


@pytest.fixture
async def admin_login(client):
    """Crea el primer admin (sin token) y devuelve su respuesta de login."""
    r = await client.post(f"{API}/users/admin", json=ADMIN)
    assert r.status_code == 201, r.text
    r = await client.post(f"{API}/auth/login/admin", json={"username": ADMIN["username"], "password": ADMIN["password"]})
    assert r.status_code == 200, r.text
    return r.json()


@pytest.fixture
def admin_headers(admin_login):
    return bearer(admin_login["access_token"])


@pytest.fixture
async def user_headers(client):
    r = await client.post(f"{API}/auth/register", json={"email": "user@x.com", "password": "ab", "fullname": "Ann"})
    assert r.status_code == 200, r.text
    return bearer(r.json()["access_token"])
