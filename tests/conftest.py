from datetime import datetime, timedelta, timezone

import pytest
from cloud_alm_mcp.api import build_clients
from cloud_alm_mcp.core.config import Config


class FakeClock:
    """Manually advanced clock for token expiry tests."""

    def __init__(self, start: datetime):
        self.now = start

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **delta) -> None:
        self.now = self.now + timedelta(**delta)


@pytest.fixture
def oauth_config() -> Config:
    return Config(
        tenant="acme",
        region="eu10",
        client_id="client-id",
        client_secret="client-secret",
    )


@pytest.fixture
def sandbox_config() -> Config:
    return Config(sandbox=True, api_key="sandbox-key")


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock(datetime(2024, 1, 1, 12, 0, tzinfo=timezone.utc))


@pytest.fixture
def token_payload():
    return {"access_token": "tok-1", "token_type": "bearer", "expires_in": 3600}


@pytest.fixture
def sandbox_clients(sandbox_config):
    return build_clients(sandbox_config)


@pytest.fixture
def oauth_clients(oauth_config):
    return build_clients(oauth_config)
