"""
Error taxonomy shared by the credential manager, the OData client and the
tool boundary.

Every error carries a stable ``kind`` and a ``to_dict()`` payload so callers
can branch on status/code instead of parsing free-text messages.
"""

from __future__ import annotations

import json
from typing import Any, Dict, List, Optional


class CalmClientError(Exception):
    """Base error for client failures."""

    kind = "client_error"

    def to_dict(self) -> Dict[str, Any]:
        return {"kind": self.kind, "message": str(self)}


class ConfigError(CalmClientError, ValueError):
    """Raised when configuration is missing or invalid."""

    kind = "config"


class CalmTransportError(CalmClientError):
    """Network, TLS or timeout failure; no HTTP response was received."""

    kind = "transport"

    def __init__(
        self, message: str, *, method: Optional[str] = None, url: Optional[str] = None
    ):
        super().__init__(message)
        self.method = method
        self.url = url


class CalmAuthError(CalmClientError):
    kind = "auth"


class NoCredentialError(CalmAuthError):
    kind = "no_credential"

    def __init__(self, message: str = "No token available"):
        super().__init__(message)


class TokenRequestError(CalmAuthError):
    kind = "token_request_failed"

    def __init__(self, *, status_code: int, body: str):
        super().__init__(f"Token request failed with status {status_code}: {body}")
        self.status_code = status_code
        self.body = body

    def to_dict(self) -> Dict[str, Any]:
        payload = super().to_dict()
        payload["status_code"] = self.status_code
        return payload


class TokenParseError(CalmAuthError):
    kind = "token_parse"

    def __init__(self, detail: str):
        super().__init__(f"Token parse error: {detail}")
        self.detail = detail


class CalmHTTPError(CalmClientError):
    """Non-2xx response from a resource endpoint."""

    kind = "http"

    def __init__(
        self,
        *,
        status_code: int,
        body: str,
        method: Optional[str] = None,
        url: Optional[str] = None,
        message: Optional[str] = None,
    ):
        super().__init__(message or f"HTTP error {status_code}: {body}")
        self.status_code = status_code
        self.body = body
        self.method = method
        self.url = url

    @property
    def is_not_found(self) -> bool:
        return self.status_code == 404

    @property
    def is_auth_failure(self) -> bool:
        return self.status_code in (401, 403)

    def to_dict(self) -> Dict[str, Any]:
        payload = super().to_dict()
        payload["status_code"] = self.status_code
        return payload


class ODataError(CalmHTTPError):
    """Non-2xx response whose body matched the OData error envelope."""

    kind = "odata"

    def __init__(
        self,
        *,
        status_code: int,
        code: str,
        message: str,
        body: str = "",
        details: Optional[List[Dict[str, Any]]] = None,
        method: Optional[str] = None,
        url: Optional[str] = None,
    ):
        super().__init__(
            status_code=status_code,
            body=body,
            method=method,
            url=url,
            message=f"OData error [{code}]: {message}",
        )
        self.code = code
        self.message = message
        self.details = details or []

    def to_dict(self) -> Dict[str, Any]:
        payload = super().to_dict()
        payload["code"] = self.code
        if self.details:
            payload["details"] = self.details
        return payload


class CalmParseError(CalmClientError):
    """2xx response whose body could not be decoded into the expected shape."""

    kind = "response_parse"

    def __init__(self, message: str, *, excerpt: str = ""):
        super().__init__(message)
        self.excerpt = excerpt


class ToolFailure(Exception):
    """
    Raised at the tool boundary. The text is the JSON form of the underlying
    error payload so MCP clients still see kind/status/code.
    """

    def __init__(self, payload: Dict[str, Any]):
        super().__init__(json.dumps(payload, ensure_ascii=False))
        self.payload = payload

    @classmethod
    def from_error(cls, exc: CalmClientError) -> "ToolFailure":
        return cls(exc.to_dict())


__all__ = [
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
]
