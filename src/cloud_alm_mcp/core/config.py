from __future__ import annotations

import json
import os
from pathlib import Path
from typing import Any, Dict, Optional

from dotenv import load_dotenv
from pydantic import BaseModel, ConfigDict, ValidationError, model_validator

from .errors import ConfigError

SANDBOX_BASE_URL = "https://sandbox.api.sap.com/SAPCALM"

VALID_REGIONS = (
    "eu10",
    "eu20",
    "us10",
    "ap10",
    "jp10",
    "eu10-004",
    "ca10",
    "eu11",
    "cn20",
)

# Service path per API family, appended to the base URL (+ "/api" in OAuth2 mode)
SERVICE_PATHS: Dict[str, str] = {
    "features": "calm-features/v1",
    "documents": "calm-documents/v1",
    "tasks": "calm-tasks/v1",
    "projects": "calm-projects/v1",
    "testmanagement": "calm-testmanagement/v1",
    "processhierarchy": "calm-processhierarchy/v1",
    "analytics": "calm-analytics/v1/odata/v4/analytics",
    "processmonitoring": "calm-processmonitoring/v1",
    "logs": "calm-logs/v1",
}

CONFIG_PATH_ENV = "CALM_CONFIG"
DEFAULT_CONFIG_FILE = "config.json"

_ENV_FIELDS = {
    "sandbox": "CALM_SANDBOX",
    "api_key": "CALM_API_KEY",
    "tenant": "CALM_TENANT",
    "region": "CALM_REGION",
    "client_id": "CALM_CLIENT_ID",
    "client_secret": "CALM_CLIENT_SECRET",
    "debug": "CALM_DEBUG",
    "timeout_seconds": "CALM_TIMEOUT_SECONDS",
    "token_refresh_buffer_seconds": "CALM_TOKEN_REFRESH_BUFFER_SECONDS",
}


class Config(BaseModel):
    """
    Connection settings for one SAP Cloud ALM tenant.

    Two modes:
      - sandbox: static ``api_key`` against the SAP API Business Hub sandbox
      - OAuth2 (default): client credentials for ``tenant``/``region``
    """

    sandbox: bool = False
    api_key: Optional[str] = None
    tenant: Optional[str] = None
    region: Optional[str] = None
    client_id: Optional[str] = None
    client_secret: Optional[str] = None
    debug: bool = False
    timeout_seconds: float = 30.0
    token_refresh_buffer_seconds: int = 5

    model_config = ConfigDict(extra="ignore", frozen=True)

    @model_validator(mode="after")
    def _check_mode_fields(self) -> "Config":
        if self.timeout_seconds <= 0:
            raise ValueError("timeout_seconds must be > 0")
        if self.token_refresh_buffer_seconds < 0:
            raise ValueError("token_refresh_buffer_seconds must be >= 0")

        if self.sandbox:
            if not self.api_key:
                raise ValueError(
                    "Missing required field: api_key (required in sandbox mode)"
                )
            return self

        for name in ("tenant", "region", "client_id", "client_secret"):
            if not getattr(self, name):
                raise ValueError(f"Missing required field: {name}")

        if self.region not in VALID_REGIONS:
            raise ValueError(
                f"Invalid region '{self.region}'. Valid regions: {list(VALID_REGIONS)}"
            )
        return self

    @property
    def token_url(self) -> Optional[str]:
        """OAuth2 token endpoint; None in sandbox mode."""
        if self.sandbox:
            return None
        return (
            f"https://{self.tenant}.authentication.{self.region}"
            ".hana.ondemand.com/oauth/token"
        )

    @property
    def api_base_url(self) -> str:
        if self.sandbox:
            return SANDBOX_BASE_URL
        return f"https://{self.tenant}.{self.region}.alm.cloud.sap"

    @property
    def api_path_prefix(self) -> str:
        # Sandbox exposes services directly; tenants serve them under /api
        return "" if self.sandbox else "/api"

    def service_url(self, service: str) -> str:
        """Base URL for one API family, e.g. ``service_url("features")``."""
        try:
            path = SERVICE_PATHS[service]
        except KeyError as exc:
            raise ConfigError(f"Unknown service: {service}") from exc
        return f"{self.api_base_url}{self.api_path_prefix}/{path}"

    def describe(self) -> Dict[str, Any]:
        """Non-secret summary for startup logging."""
        if self.sandbox:
            return {"mode": "sandbox", "base_url": self.api_base_url}
        return {"mode": "oauth2", "tenant": self.tenant, "region": self.region}


def _validate(data: Dict[str, Any], source: str) -> Config:
    try:
        return Config.model_validate(data)
    except ValidationError as exc:
        messages = "; ".join(err["msg"] for err in exc.errors())
        raise ConfigError(f"Invalid configuration in {source}: {messages}") from exc


def load_config(path: str | Path) -> Config:
    """Load and validate a JSON configuration file."""
    path = Path(path).expanduser()
    try:
        raw = path.read_text(encoding="utf-8")
    except OSError as exc:
        raise ConfigError(f"Cannot read config file {path}: {exc}") from exc

    try:
        data = json.loads(raw)
    except json.JSONDecodeError as exc:
        raise ConfigError(f"Invalid JSON in config file {path}: {exc.msg}") from exc
    if not isinstance(data, dict):
        raise ConfigError(f"Config file {path} must contain a JSON object")

    return _validate(data, str(path))


def load_env_config(*, use_dotenv: bool = True) -> Config:
    """Build a Config from CALM_* environment variables (optional .env)."""
    if use_dotenv:
        load_dotenv()
    data: Dict[str, Any] = {}
    for field, env_name in _ENV_FIELDS.items():
        value = os.getenv(env_name, "").strip()
        if value:
            data[field] = value
    return _validate(data, "environment")


def resolve_config(path: Optional[str] = None, *, use_dotenv: bool = True) -> Config:
    """
    Pick the configuration source:
    explicit path > $CALM_CONFIG > ./config.json (if present) > environment.
    """
    if use_dotenv:
        load_dotenv()
    candidate = path or os.getenv(CONFIG_PATH_ENV, "").strip()
    if candidate:
        return load_config(candidate)
    if Path(DEFAULT_CONFIG_FILE).is_file():
        return load_config(DEFAULT_CONFIG_FILE)
    return load_env_config(use_dotenv=False)


__all__ = [
    "Config",
    "SANDBOX_BASE_URL",
    "SERVICE_PATHS",
    "VALID_REGIONS",
    "load_config",
    "load_env_config",
    "resolve_config",
]
