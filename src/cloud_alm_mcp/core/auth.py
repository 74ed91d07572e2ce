"""OAuth2 client-credentials token management with a static-key sandbox mode."""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Callable, Optional, Tuple

import httpx
from pydantic import BaseModel, ConfigDict, ValidationError

from .config import Config
from .errors import (
    CalmTransportError,
    NoCredentialError,
    TokenParseError,
    TokenRequestError,
)

API_KEY_HEADER = "APIKey"
AUTHORIZATION_HEADER = "Authorization"


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class TokenResponse(BaseModel):
    access_token: str
    token_type: str = "bearer"
    expires_in: int
    scope: str = ""

    model_config = ConfigDict(extra="ignore")


@dataclass(frozen=True)
class Credential:
    """A bearer token and the instant the issuing server says it expires."""

    token: str
    expires_at: datetime

    def is_stale(self, buffer: timedelta, now: datetime) -> bool:
        return now + buffer >= self.expires_at


class CredentialManager:
    """
    Produces a currently valid credential for SAP Cloud ALM requests.

    - Sandbox mode: hands out the configured API key, no network calls.
    - OAuth2 mode: caches one bearer token and fetches a new one once the
      cached token is within ``token_refresh_buffer_seconds`` of expiry.

    One instance is shared by every ODataClient so all API families reuse
    the same token.
    """

    def __init__(
        self,
        config: Config,
        *,
        http: Optional[httpx.AsyncClient] = None,
        clock: Optional[Callable[[], datetime]] = None,
        logger: Optional[logging.Logger] = None,
    ):
        self.config = config
        self.log = logger or logging.getLogger("cloud_alm_mcp.auth")
        self._clock = clock or _utcnow
        self._owns_http = http is None
        self.http = http or httpx.AsyncClient(timeout=config.timeout_seconds)
        self._cached: Optional[Credential] = None
        self._lock = asyncio.Lock()

    @property
    def sandbox(self) -> bool:
        return self.config.sandbox

    @property
    def refresh_buffer(self) -> timedelta:
        return timedelta(seconds=self.config.token_refresh_buffer_seconds)

    async def aclose(self) -> None:
        if self._owns_http:
            await self.http.aclose()

    async def __aenter__(self) -> "CredentialManager":
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.aclose()

    async def get_credential(self) -> str:
        """
        Return the API key (sandbox) or a bearer token that is not stale.

        Raises:
            NoCredentialError: sandbox mode without an api_key.
            TokenRequestError: token endpoint answered non-2xx.
            TokenParseError: token response could not be understood.
            CalmTransportError: token endpoint unreachable / timed out.
        """
        if self.sandbox:
            if not self.config.api_key:
                raise NoCredentialError()
            return self.config.api_key

        async with self._lock:
            cached = self._cached

        if cached is not None and not cached.is_stale(
            self.refresh_buffer, self._clock()
        ):
            return cached.token

        credential = await self._fetch_credential()
        return credential.token

    def auth_header(self, credential: str) -> Tuple[str, str]:
        """Header name/value carrying ``credential`` for the active mode."""
        if self.sandbox:
            return API_KEY_HEADER, credential
        return AUTHORIZATION_HEADER, f"Bearer {credential}"

    async def _fetch_credential(self) -> Credential:
        token_url = self.config.token_url
        if not token_url:
            raise TokenParseError("No token URL in sandbox mode")
        if not self.config.client_id:
            raise TokenParseError("Missing client_id")
        if not self.config.client_secret:
            raise TokenParseError("Missing client_secret")

        self.log.debug("auth.token_fetch", extra={"url": token_url})

        try:
            resp = await self.http.post(
                token_url,
                auth=httpx.BasicAuth(self.config.client_id, self.config.client_secret),
                data={"grant_type": "client_credentials"},
                headers={"Accept": "application/json"},
            )
        except httpx.HTTPError as exc:
            raise CalmTransportError(
                f"Network/timeout error calling POST {token_url}: {exc}",
                method="POST",
                url=token_url,
            ) from exc

        if not resp.is_success:
            self.log.debug(
                "auth.token_failed",
                extra={"url": token_url, "status": resp.status_code},
            )
            raise TokenRequestError(status_code=resp.status_code, body=resp.text)

        try:
            token = TokenResponse.model_validate_json(resp.content)
        except ValidationError as exc:
            raise TokenParseError(f"Failed to parse token response: {exc}") from exc

        credential = Credential(
            token=token.access_token,
            expires_at=self._clock() + timedelta(seconds=token.expires_in),
        )

        async with self._lock:
            self._cached = credential

        self.log.debug(
            "auth.token_acquired",
            extra={"expires_at": credential.expires_at.isoformat()},
        )
        return credential

    def __repr__(self) -> str:
        if self.sandbox:
            return "CredentialManager(mode='sandbox')"
        return (
            f"CredentialManager(tenant={self.config.tenant!r}, "
            f"region={self.config.region!r})"
        )


__all__ = [
    "API_KEY_HEADER",
    "AUTHORIZATION_HEADER",
    "Credential",
    "CredentialManager",
    "TokenResponse",
]
