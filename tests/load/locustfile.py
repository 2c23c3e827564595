"""
Locust load testing for the work polling API.

Run with:
    locust -f tests/load/locustfile.py --host=http://localhost:8080

Or headless:
    locust -f tests/load/locustfile.py --host=http://localhost:8080 \
        --headless -u 100 -r 10 --run-time 5m
"""

import random
import uuid

from locust import HttpUser, between, task


class WorkPollingUser(HttpUser):
    """
    Simulated client for load testing the work registry.

    Simulates realistic traffic patterns:
    - Work submissions
    - Polls honoring Retry-After, without waiting (registry lock contention)
    - Polls of unknown ids
    - Health checks
    """

    wait_time = between(0.5, 2)

    def on_start(self):
        """Called when a user starts."""
        self.locations: list[str] = []

    @task(5)
    def start_work(self):
        """Submit a new job and remember its status resource."""
        with self.client.post(
            "/start_work",
            allow_redirects=False,
            name="/start_work [POST]",
            catch_response=True,
        ) as response:
            if response.status_code != 303:
                response.failure(f"Expected 303, got {response.status_code}")
                return

            location = response.headers.get("Location", "")
            if not location.startswith("/work/") or "Retry-After" not in response.headers:
                response.failure("Missing Location or Retry-After")
                return

            self.locations.append(location)
            # Keep only recent locations
            if len(self.locations) > 100:
                self.locations = self.locations[-100:]

    @task(10)
    def poll_work(self):
        """Poll a previously submitted job once."""
        if not self.locations:
            return

        location = random.choice(self.locations)
        with self.client.get(
            location,
            allow_redirects=False,
            name="/work/{work_id} [GET]",
            catch_response=True,
        ) as response:
            if response.status_code == 303:
                if response.headers.get("Retry-After") != "1":
                    response.failure("Pending poll without a 1 second hint")
            elif response.status_code == 200:
                self.locations.remove(location)
            else:
                response.failure(f"Unexpected status {response.status_code}")

    @task(1)
    def poll_unknown(self):
        """Poll an identifier that was never issued."""
        with self.client.get(
            f"/work/{uuid.uuid4()}",
            allow_redirects=False,
            name="/work/{unknown} [GET]",
            catch_response=True,
        ) as response:
            if response.status_code == 404:
                response.success()
            else:
                response.failure(f"Expected 404, got {response.status_code}")

    @task(1)
    def health_check(self):
        """Check API health."""
        self.client.get("/health", name="/health [GET]")
