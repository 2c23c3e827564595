"""
Pytest configuration and shared fixtures.
"""

from collections.abc import AsyncGenerator

import pytest
import pytest_asyncio
from fastapi import FastAPI
from httpx import ASGITransport, AsyncClient

from workpoll.api.main import create_app
from workpoll.client import make_user_agent
from workpoll.config import Settings
from workpoll.registry import WorkRegistry

BASE_URL = "http://test"


class FakeClock:
    """
    Controllable monotonic clock.

    ``sleep`` records the requested delay and advances time instead of
    waiting, so registry and client share one deterministic timeline.
    """

    def __init__(self, start: float = 1000.0):
        self.now = start
        self.sleeps: list[float] = []

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds

    async def sleep(self, seconds: float) -> None:
        self.sleeps.append(seconds)
        self.advance(seconds)


class FixedDuration:
    """Duration picker returning a settable value."""

    def __init__(self, seconds: int = 7):
        self.seconds = seconds

    def __call__(self) -> int:
        return self.seconds


@pytest.fixture
def clock() -> FakeClock:
    """Create a fake clock."""
    return FakeClock()


@pytest.fixture
def duration() -> FixedDuration:
    """Create a fixed duration picker (7 seconds unless changed)."""
    return FixedDuration()


@pytest.fixture
def registry(clock: FakeClock, duration: FixedDuration) -> WorkRegistry:
    """Create a registry on the fake clock."""
    return WorkRegistry(clock=clock, duration_picker=duration)


@pytest.fixture
def test_settings() -> Settings:
    """Create test settings."""
    return Settings(
        log_level="DEBUG",
        log_format="console",
        client_max_attempts=64,
        client_max_elapsed_seconds=60.0,
        client_max_redirects=5,
    )


@pytest.fixture
def app(registry: WorkRegistry) -> FastAPI:
    """Create a FastAPI app serving the test registry."""
    return create_app(registry=registry)


@pytest_asyncio.fixture
async def client(app: FastAPI) -> AsyncGenerator[AsyncClient]:
    """Create a plain async HTTP client that never follows anything."""
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url=BASE_URL) as client:
        yield client


@pytest_asyncio.fixture
async def user_agent(
    app: FastAPI,
    clock: FakeClock,
    test_settings: Settings,
) -> AsyncGenerator[AsyncClient]:
    """Create a polling client against the app, waiting on the fake clock."""
    async with make_user_agent(
        test_settings,
        transport=ASGITransport(app=app),
        base_url=BASE_URL,
        sleep=clock.sleep,
        clock=clock,
    ) as user_agent:
        yield user_agent
