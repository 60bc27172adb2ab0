from __future__ import annotations

from typing import Any, Callable

import httpx
import pytest
from fastapi.testclient import TestClient

from incident_relay.config import Settings
from incident_relay.main import create_app

AUTH_TOKEN = "relay-secret"
DESTINATION = "https://discord.example/api/webhooks/123/abc"


class RecordingDestination:
    """Stands in for the Discord webhook; records every outbound request."""

    def __init__(self) -> None:
        self.calls: list[httpx.Request] = []
        self.status_code = 204
        self.error: type[httpx.HTTPError] | None = None

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.calls.append(request)
        if self.error is not None:
            raise self.error("simulated transport failure", request=request)
        return httpx.Response(self.status_code, text="")


@pytest.fixture
def relay_settings() -> Settings:
    return Settings(
        _env_file=None,
        app_env="testing",
        auth_token=AUTH_TOKEN,
        destination_webhook_url=DESTINATION,
    )


@pytest.fixture
def destination() -> RecordingDestination:
    return RecordingDestination()


@pytest.fixture
def http_client(destination) -> httpx.AsyncClient:
    return httpx.AsyncClient(transport=httpx.MockTransport(destination), timeout=10.0)


@pytest.fixture
def make_client(relay_settings, http_client) -> Callable[..., TestClient]:
    def _make(**overrides: Any) -> TestClient:
        settings = relay_settings.model_copy(update=overrides)
        return TestClient(create_app(settings, http_client))
    return _make


@pytest.fixture
def client(make_client):
    with make_client() as c:
        yield c


@pytest.fixture
def incident_payload() -> Callable[..., dict]:
    def _payload(**incident: Any) -> dict:
        body = {
            "incident_id": "0.nqz3n5ccay8u",
            "scoping_project_id": "demo-project",
            "resource_id": "",
            "resource_name": "demo-project VM Instance labels {instance_id=123}",
            "state": "open",
            "started_at": 1700000000,
            "policy_name": "CPU utilization high",
            "condition_name": "VM Instance - CPU utilization",
            "url": "https://console.cloud.google.com/monitoring/alerting/incidents/0.nqz3n5ccay8u",
            "summary": "CPU utilization for demo-project is above the threshold of 0.9.",
        }
        body.update(incident)
        return {"incident": body, "version": "1.2"}
    return _payload
