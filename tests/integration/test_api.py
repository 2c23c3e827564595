"""
Integration tests for the API endpoints.
"""

from datetime import timedelta
from uuid import UUID, uuid4

import pytest
from httpx import AsyncClient

from tests.conftest import FakeClock, FixedDuration
from workpoll.types.api import WorkOutput


class TestHealthAPI:
    """Integration tests for health endpoints."""

    @pytest.mark.asyncio
    async def test_health(self, client: AsyncClient):
        """Test the liveness payload."""
        response = await client.get("/health")

        assert response.status_code == 200
        assert response.json() == {"status": "UP"}

    @pytest.mark.asyncio
    async def test_metrics(self, client: AsyncClient):
        """Test Prometheus metrics are exposed."""
        await client.post("/start_work")

        response = await client.get("/metrics")

        assert response.status_code == 200
        assert "work_submitted_total" in response.text
        assert "api_requests_total" in response.text

    @pytest.mark.asyncio
    async def test_cors_preflight(self, client: AsyncClient):
        """Test cross-origin POSTs are allowed."""
        response = await client.options(
            "/start_work",
            headers={
                "Origin": "http://example.com",
                "Access-Control-Request-Method": "POST",
            },
        )

        assert response.status_code == 200
        assert response.headers["access-control-allow-origin"] == "*"


class TestWorkAPI:
    """Integration tests for work endpoints."""

    @pytest.mark.asyncio
    async def test_start_work(self, client: AsyncClient):
        """Test submission answers 303 with a status location and half-duration hint."""
        response = await client.post("/start_work")

        assert response.status_code == 303
        location = response.headers["Location"]
        assert location.startswith("/work/")
        UUID(location.removeprefix("/work/"))
        assert response.headers["Retry-After"] == "3"

    @pytest.mark.asyncio
    async def test_poll_pending(self, client: AsyncClient):
        """Test an immediate poll redirects to itself with a 1 second hint."""
        location = (await client.post("/start_work")).headers["Location"]

        response = await client.get(location)

        assert response.status_code == 303
        assert response.headers["Location"] == location
        assert response.headers["Retry-After"] == "1"

    @pytest.mark.asyncio
    async def test_poll_done(
        self,
        client: AsyncClient,
        clock: FakeClock,
        duration: FixedDuration,
    ):
        """Test a one second job is done after 1.1 seconds."""
        duration.seconds = 1
        location = (await client.post("/start_work")).headers["Location"]
        clock.advance(1.1)

        response = await client.get(location)

        assert response.status_code == 200
        data = response.json()
        assert data == {
            "work_id": location.removeprefix("/work/"),
            "duration": {"secs": 1, "nanos": 0},
            "nb_get_call": 0,
        }
        output = WorkOutput.model_validate(data)
        assert output.duration.to_timedelta() == timedelta(seconds=1)
        assert output.nb_get_call == 0

    @pytest.mark.asyncio
    async def test_poll_counts_pending_calls(self, client: AsyncClient, clock: FakeClock):
        """Test nb_get_call counts only the pending polls."""
        location = (await client.post("/start_work")).headers["Location"]
        for _ in range(4):
            await client.get(location)
            clock.advance(1)
        clock.advance(3)

        first = await client.get(location)
        second = await client.get(location)

        assert first.status_code == 200
        assert first.json()["nb_get_call"] == 4
        assert second.json() == first.json()

    @pytest.mark.asyncio
    async def test_poll_unknown(self, client: AsyncClient):
        """Test an unused identifier is a 404 with an empty body."""
        response = await client.get(f"/work/{uuid4()}")

        assert response.status_code == 404
        assert response.content == b""

    @pytest.mark.asyncio
    @pytest.mark.parametrize("work_id", ["not-a-uuid", "12345", "work-%20x"])
    async def test_poll_unparsable_id(self, client: AsyncClient, work_id: str):
        """Test an identifier that is not a UUID is unknown, not invalid."""
        response = await client.get(f"/work/{work_id}")

        assert response.status_code == 404
        assert response.content == b""

    @pytest.mark.asyncio
    async def test_start_work_ignores_body(self, client: AsyncClient):
        """Test a request body is accepted and ignored."""
        response = await client.post("/start_work", json={"anything": True})

        assert response.status_code == 303
