# tests/conftest.py
import os
import tempfile

# Settings are read once and cached, so the test environment must be in
# place before anything from `office_hours` is imported.
_TEST_DB_DIR = tempfile.mkdtemp(prefix="office_hours_test_")

os.environ["APP_ENV"] = "test"
os.environ["DB_URL"] = f"sqlite+aiosqlite:///{_TEST_DB_DIR}/office_hours_test.db"
os.environ["BOOTSTRAP_ADMIN_PRINCIPAL"] = "admin-principal"
os.environ["BOOTSTRAP_ADMIN_NAME"] = "Ada Admin"
os.environ["BOOTSTRAP_ADMIN_EMAIL"] = "ada@example.org"

import pytest  # noqa: E402
import pytest_asyncio  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402

from office_hours.db.session import AsyncSessionLocal, reset_schema_sync  # noqa: E402
from office_hours.main import create_app  # noqa: E402
from office_hours.schemas.user import Role, UserCreate  # noqa: E402
from office_hours.services.store import ScheduleStore  # noqa: E402
from office_hours.services.user_admin import authorize_user  # noqa: E402


@pytest.fixture(autouse=True)
def _reset_db() -> None:
    """
    Automatically reset the DB before each test.

    Every test gets a clean schema and empty tables.
    """
    reset_schema_sync()


@pytest_asyncio.fixture
async def db():
    async with AsyncSessionLocal() as session:
        yield session


@pytest.fixture
def store(db) -> ScheduleStore:
    return ScheduleStore(db)


@pytest_asyncio.fixture
async def admin(store):
    return await authorize_user(
        store,
        UserCreate(principal="admin-1", name="Admin One", email="admin1@example.org", role=Role.ADMIN),
    )


@pytest_asyncio.fixture
async def member(store):
    return await authorize_user(
        store,
        UserCreate(principal="member-1", name="Member One", email="member1@example.org"),
    )


@pytest.fixture
def client() -> TestClient:
    """
    TestClient over a fresh application.

    Entering the client runs the lifespan, which creates the tables and the
    bootstrap administrator (`admin-principal`).
    """
    app = create_app()
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def admin_headers() -> dict:
    return {"X-Principal": "admin-principal"}
