# pairchat/tests/conftest.py

import random
import string

import pytest
from fakeredis import aioredis
from httpx import AsyncClient, ASGITransport

from pairchat.config import AppConfig
from pairchat.gateways.user_gateway import UserGateway
from pairchat.infrastructure.database import create_database, create_engine
from pairchat.infrastructure.security import SecurityService
from pairchat.infrastructure.uow import UnitOfWork
from pairchat.main import Application

TEST_PASSWORD = "testpassword"


def random_username(prefix: str = "testuser") -> str:
    suffix = "".join(random.choices(string.ascii_lowercase + string.digits, k=10))
    return f"{prefix}_{suffix}"


@pytest.fixture(scope="function")
def app_config():
    """
    Provide a test configuration backed by a private in-memory SQLite database.
    """
    return AppConfig(
        DATABASE_URL="sqlite+aiosqlite:///:memory:",
        SECRET_KEY="test_secret_key",
        PROJECT_NAME="Test PairChat",
        API_V1_STR="/api/v1",
        ALGORITHM="HS256",
        ACCESS_TOKEN_EXPIRE_MINUTES=5,
        REDIS_HOST=None,
        OUTBOUND_QUEUE_SIZE=8,
        SEND_TIMEOUT_SECONDS=1.0,
    )


@pytest.fixture(scope="function")
def security_service(app_config):
    return SecurityService(app_config)


@pytest.fixture(scope="function")
async def mock_redis():
    """Provide a fake Redis client for testing."""
    redis = aioredis.FakeRedis(decode_responses=True)
    yield redis
    await redis.flushall()
    await redis.aclose()


@pytest.fixture(scope="function")
async def database(app_config):
    """A connected database whose tables exist."""
    database = create_database(create_engine(app_config.DATABASE_URL))
    await database.connect()
    yield database
    await database.disconnect()


@pytest.fixture(scope="function")
async def db_session(database):
    """Provide a SQLAlchemy session for testing."""
    async with database.session() as session:
        yield session


@pytest.fixture(scope="function")
async def uow():
    """Provide a UnitOfWork instance for testing."""
    return UnitOfWork()


@pytest.fixture(scope="function")
async def app(app_config, database):
    """Create the FastAPI app on top of the test database."""
    application = Application(config=app_config, database=database)
    return application.create_app()


@pytest.fixture(scope="function")
async def client(app):
    """Provide an HTTP client with the test app."""
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac


async def create_user(db_session, security_service, username: str | None = None):
    user_gateway = UserGateway(db_session, UnitOfWork())
    user = (
        await user_gateway.insert_user(
            username or random_username(),
            security_service.get_password_hash(TEST_PASSWORD),
        )
    ).unwrap()
    await db_session.commit()
    return user


@pytest.fixture(scope="function")
async def test_user(db_session, security_service):
    """Create a test user in the database."""
    return await create_user(db_session, security_service)


@pytest.fixture(scope="function")
async def test_user2(db_session, security_service):
    """Create a second test user in the database."""
    return await create_user(db_session, security_service, random_username("testuser2"))


async def login(client: AsyncClient, username: str) -> dict[str, str]:
    response = await client.post(
        "/api/v1/login", json={"username": username, "password": TEST_PASSWORD}
    )
    assert response.status_code == 200, f"Login failed: {response.json()}"
    access_token = response.json().get("accessToken")
    assert access_token is not None, "Access token was not returned in the response"
    return {"Authorization": f"Bearer {access_token}"}


@pytest.fixture(scope="function")
def make_user(db_session, security_service):
    async def _make_user(username: str | None = None):
        return await create_user(db_session, security_service, username)

    return _make_user


@pytest.fixture(scope="function")
def login_as(client):
    async def _login_as(username: str) -> dict[str, str]:
        return await login(client, username)

    return _login_as


@pytest.fixture(scope="function")
async def auth_header(client, test_user):
    """Provide an authorization header for authenticated requests."""
    return await login(client, test_user.username)


@pytest.fixture(scope="function")
async def auth_header2(client, test_user2):
    return await login(client, test_user2.username)
