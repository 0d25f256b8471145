"""API test fixtures — SessionEngine on fakes + FastAPI test client.

Invariants:
    - Every test gets a fresh SessionEngine driven by FakeScheduler
    - get_engine dependency overridden; overrides cleared after each test

Design Decisions:
    - httpx AsyncClient over ASGITransport does not run the lifespan, so the
      engine is supplied by override instead of app.state
"""

import random

import pytest
from httpx import ASGITransport, AsyncClient

from collective_embedding.api.dependencies import get_engine
from collective_embedding.core.session_engine import SessionEngine
from collective_embedding.main import app
from tests.fakes import FakeScheduler, RecordingPublisher


@pytest.fixture
def publisher():
    return RecordingPublisher()


@pytest.fixture
def scheduler():
    return FakeScheduler()


@pytest.fixture
def engine(publisher, scheduler):
    return SessionEngine(publisher, scheduler, rng=random.Random(11))


@pytest.fixture
async def client(engine):
    """FastAPI test client with the engine dependency overridden."""
    app.dependency_overrides[get_engine] = lambda: engine

    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test",
    ) as c:
        yield c

    app.dependency_overrides.clear()
