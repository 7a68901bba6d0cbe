"""Pytest fixtures and shared test configuration.

Provides reusable fixtures for unit and integration tests.

Fixtures:
    - backend: mutable in-memory backend state
    - service_client: RagServiceClient wired to the fake backend over ASGI
    - store: fresh StateStore
    - controller: InteractionController over store and service_client
"""

import pytest
from httpx import ASGITransport

from rag_console.client.config import ClientConfig
from rag_console.client.service import RagServiceClient
from rag_console.controller import InteractionController
from rag_console.state.store import StateStore
from tests.fake_backend import FakeBackend, create_fake_backend


@pytest.fixture
def backend() -> FakeBackend:
    """Return an empty fake backend offering two models.

    Returns:
        FakeBackend instance shared with the ASGI app.
    """
    return FakeBackend()


@pytest.fixture
def service_client(backend: FakeBackend) -> RagServiceClient:
    """Create a backend client talking to the fake backend in-process.

    Args:
        backend: Fake backend state served by the ASGI app.

    Returns:
        RagServiceClient using ASGI transport.
    """
    transport = ASGITransport(app=create_fake_backend(backend))
    return RagServiceClient(ClientConfig(base_url="http://test"), transport=transport)


@pytest.fixture
def store() -> StateStore:
    return StateStore()


@pytest.fixture
def controller(store: StateStore, service_client: RagServiceClient) -> InteractionController:
    return InteractionController(store, service_client)
