"""
pytest configuration and fixtures for the users API test suite
The app runs in-process over httpx's ASGI transport; storage is an in-memory fake.
"""

import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).resolve().parents[2] / "src"))
sys.path.insert(0, str(Path(__file__).parent))

import httpx
import pytest
import pytest_asyncio

from app import app
from services.users_service import UsersService, get_users_service
from infrastructure import FakePool, InMemoryUsersTable


@pytest.fixture
def users_table():
    """Fresh in-memory users table per test"""
    return InMemoryUsersTable()


@pytest.fixture
def fake_pool(users_table):
    return FakePool(users_table)


@pytest.fixture
def use_pool():
    """Route the users endpoints to the given pool"""
    def _use(pool):
        app.dependency_overrides[get_users_service] = lambda: UsersService(pool)
    yield _use
    app.dependency_overrides.clear()


@pytest_asyncio.fixture
async def client(use_pool, fake_pool):
    """HTTP client against the app backed by the in-memory table"""
    use_pool(fake_pool)
    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://test") as http_client:
        yield http_client
