"""Pytest configuration and shared fixtures."""

import uuid
from collections.abc import AsyncIterator, Awaitable, Callable, Iterator

import pytest
from fastapi.testclient import TestClient

from organiza.core.config import Settings
from organiza.core.db_client import MEMORY_PATH, Database
from organiza.core.schema import init_db
from organiza.domain.user import User, UserCreate
from organiza.main import create_app
from organiza.services.session_service import SessionIssuer
from organiza.services.stats_service import StatsService
from organiza.services.task_service import TaskRepository
from organiza.services.user_service import UserRepository


TEST_SECRET = "test-secret-key"
TEST_BCRYPT_ROUNDS = 4
DEFAULT_PASSWORD = "secret123"


@pytest.fixture
def test_settings(tmp_path) -> Settings:
    """Settings pointing at a throwaway database file."""
    return Settings(
        sqlite_db_path=str(tmp_path / "organiza_test.db"),
        jwt_secret=TEST_SECRET,
        bcrypt_rounds=TEST_BCRYPT_ROUNDS,
        environment="test",
        logfire_token=None,
    )


@pytest.fixture
async def database() -> AsyncIterator[Database]:
    """Fresh in-memory database with the schema applied."""
    db = Database(MEMORY_PATH)
    await db.connect()
    await init_db(db)
    yield db
    await db.close()


@pytest.fixture
def user_repository(database: Database) -> UserRepository:
    return UserRepository(database, bcrypt_rounds=TEST_BCRYPT_ROUNDS)


@pytest.fixture
def task_repository(database: Database) -> TaskRepository:
    return TaskRepository(database)


@pytest.fixture
def stats_service(database: Database) -> StatsService:
    return StatsService(database)


@pytest.fixture
def session_issuer() -> SessionIssuer:
    return SessionIssuer(TEST_SECRET, max_age_seconds=86400)


@pytest.fixture
def user_factory(user_repository: UserRepository) -> Callable[..., Awaitable[User]]:
    """Factory for registering users with custom data.

    Usage:
        user = await user_factory(name="Ana", email="ana@x.com")
    """

    async def _create_user(**kwargs) -> User:
        data = UserCreate(
            name=kwargs.get("name", f"User {uuid.uuid4().hex[:8]}"),
            email=kwargs.get("email", f"user_{uuid.uuid4().hex[:8]}@test.local"),
            password=kwargs.get("password", DEFAULT_PASSWORD),
        )
        return await user_repository.register(data)

    return _create_user


@pytest.fixture
def client(test_settings: Settings) -> Iterator[TestClient]:
    """FastAPI test client with the lifespan (database, schema) running."""
    with TestClient(create_app(test_settings)) as test_client:
        yield test_client


@pytest.fixture
def auth_headers(client: TestClient) -> Callable[..., dict[str, str]]:
    """Register a user through the API, log in, and return bearer headers.

    Usage:
        headers = auth_headers("Ana", "ana@x.com")
    """

    def _login(name: str | None = None, email: str | None = None, password: str = DEFAULT_PASSWORD) -> dict[str, str]:
        email = email or f"user_{uuid.uuid4().hex[:8]}@test.local"
        register = client.post(
            "/api/auth/register",
            json={"name": name or "Test User", "email": email, "password": password},
        )
        assert register.status_code == 201, register.text

        login = client.post("/api/auth/login", json={"email": email, "password": password})
        assert login.status_code == 200, login.text
        return {"Authorization": f"Bearer {login.json()['token']}"}

    return _login
