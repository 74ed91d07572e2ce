"""Core domain surface for cloud-alm-mcp (transport-agnostic)."""

from .auth import API_KEY_HEADER, Credential, CredentialManager
from .client import ODataClient
from .config import Config, load_config, load_env_config, resolve_config
from .errors import (
    CalmAuthError,
    CalmClientError,
    CalmHTTPError,
    CalmParseError,
    CalmTransportError,
    ConfigError,
    NoCredentialError,
    ODataError,
    TokenParseError,
    TokenRequestError,
    ToolFailure,
)
from .odata import (
    KeyStyle,
    ODataCollection,
    ODataErrorResponse,
    ODataQuery,
    SortOrder,
)
from .registry import (
    discover_tool_modules,
    iter_tool_functions,
    register_discovered_tools,
)
from .resources import EntitySet
from .responses import normalize_error

__all__ = [
    # Auth
    "API_KEY_HEADER",
    "Credential",
    "CredentialManager",
    # Client
    "ODataClient",
    "EntitySet",
    # OData
    "KeyStyle",
    "ODataCollection",
    "ODataErrorResponse",
    "ODataQuery",
    "SortOrder",
    "normalize_error",
    # Config helpers
    "Config",
    "load_config",
    "load_env_config",
    "resolve_config",
    # Exceptions
    "CalmClientError",
    "ConfigError",
    "CalmTransportError",
    "CalmAuthError",
    "NoCredentialError",
    "TokenRequestError",
    "TokenParseError",
    "CalmHTTPError",
    "ODataError",
    "CalmParseError",
    "ToolFailure",
    # Registry helpers
    "discover_tool_modules",
    "iter_tool_functions",
    "register_discovered_tools",
]
