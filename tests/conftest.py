"""
Shared pytest fixtures and configuration for all tests.
"""

import os
from collections.abc import AsyncGenerator, Awaitable, Callable, Generator
from typing import Any

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from usergraph.store import UserStore


@pytest_asyncio.fixture(scope="function")
async def store() -> AsyncGenerator[UserStore, None]:
    """Provide a fresh in-memory user store with tables created."""
    user_store = UserStore.from_url("sqlite+aiosqlite://")
    await user_store.init()
    yield user_store
    await user_store.close()


@pytest_asyncio.fixture(scope="function")
async def seeded_store(store: UserStore) -> UserStore:
    """Store holding a small fixed set of users."""
    for id, name in [
        ("1", "Alice"),
        ("2", "bob"),
        ("3", "Bob"),
        ("4", "Carol"),
        ("5", "dave"),
    ]:
        await store.create(name=name, id=id)
    return store


@pytest_asyncio.fixture(scope="function")
async def api_client(store: UserStore) -> AsyncGenerator[AsyncClient, None]:
    """HTTP client wired in-process to an app serving the test store."""
    from usergraph.api.app import create_app

    app = create_app(store=store)
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client


@pytest.fixture
def gql(api_client: AsyncClient) -> Callable[..., Awaitable[dict[str, Any]]]:
    """POST a GraphQL document through the API client and return the decoded body."""

    async def execute(query: str, variables: dict[str, Any] | None = None) -> dict[str, Any]:
        payload: dict[str, Any] = {"query": query}
        if variables is not None:
            payload["variables"] = variables
        response = await api_client.post("/graphql", json=payload)
        assert response.status_code < 500
        return response.json()

    return execute


@pytest.fixture(autouse=True)
def reset_environment() -> Generator[None, None, None]:
    """Reset environment variables for each test."""
    original_env = os.environ.copy()
    yield
    os.environ.clear()
    os.environ.update(original_env)
