"""
pytest fixtures: an app wired to in-memory repositories and an httpx client
"""

import httpx
import pytest
import pytest_asyncio

from timesheet_rest.app import create_app
from timesheet_rest.services.registry import RepositoryRegistry
from tests.doubles import InMemoryRepository


@pytest.fixture
def repositories() -> RepositoryRegistry:
    return RepositoryRegistry(
        timesheets=InMemoryRepository(),
        projects=InMemoryRepository(),
        employees=InMemoryRepository(),
    )


@pytest.fixture
def app(repositories):
    return create_app(repositories=repositories)


@pytest_asyncio.fixture
async def client(app):
    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://testserver") as client:
        yield client
