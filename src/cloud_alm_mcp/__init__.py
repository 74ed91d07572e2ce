"""cloud_alm_mcp package exports."""

from .api import ApiClients, build_clients
from .core import (
    CalmClientError,
    CalmHTTPError,
    CalmParseError,
    CalmTransportError,
    Config,
    ConfigError,
    CredentialManager,
    ODataClient,
    ODataError,
    ODataQuery,
    SortOrder,
    resolve_config,
)

__version__ = "0.1.0"

__all__ = [
    # Clients
    "ApiClients",
    "build_clients",
    "CredentialManager",
    "ODataClient",
    # Queries
    "ODataQuery",
    "SortOrder",
    # Config
    "Config",
    "resolve_config",
    # Exceptions
    "CalmClientError",
    "CalmHTTPError",
    "CalmParseError",
    "CalmTransportError",
    "ConfigError",
    "ODataError",
]
