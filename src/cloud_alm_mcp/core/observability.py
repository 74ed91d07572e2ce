from __future__ import annotations

import logging
import time
from typing import Any, Dict, Optional

from .errors import CalmClientError

EVENT_LOGGER = "cloud_alm_mcp.observability"

# Attributes every LogRecord already carries; extras may not overwrite them.
RESERVED_LOG_KEYS = frozenset(
    vars(logging.LogRecord("", logging.INFO, "", 0, "", (), None))
) | {"message", "asctime"}


def elapsed_ms(start: float) -> int:
    """Milliseconds since a ``time.perf_counter()`` reading."""
    return int((time.perf_counter() - start) * 1000)


def event_fields(fields: Dict[str, Any]) -> Dict[str, Any]:
    """Drop unset values and reserved LogRecord attributes."""
    return {
        k: v
        for k, v in fields.items()
        if v is not None and k not in RESERVED_LOG_KEYS
    }


def log_event(
    event: str,
    logger: logging.Logger | None = None,
    *,
    level: int = logging.INFO,
    **fields: Any,
) -> None:
    """Emit ``event`` as the message, with ``fields`` attached as extras."""
    log = logger or logging.getLogger(EVENT_LOGGER)
    log.log(level, event, extra=event_fields(fields))


def log_tool_call(
    tool: str, start: float, error: Optional[CalmClientError] = None
) -> None:
    """Record one MCP tool invocation as a ``tool_call`` event."""
    if error is None:
        log_event("tool_call", tool=tool, status="ok", duration_ms=elapsed_ms(start))
        return
    log_event(
        "tool_call",
        tool=tool,
        status="error",
        kind=error.kind,
        error_type=type(error).__name__,
        duration_ms=elapsed_ms(start),
    )


def log_request(
    logger: logging.Logger,
    method: str,
    url: str,
    *,
    status: Any,
    start: Optional[float] = None,
    error_type: Optional[str] = None,
) -> None:
    """Record one outbound Cloud ALM request at debug level."""
    log_event(
        "odata.request",
        logger,
        level=logging.DEBUG,
        method=method,
        url=url,
        status=status,
        duration_ms=elapsed_ms(start) if start is not None else None,
        error_type=error_type,
    )


__all__ = ["elapsed_ms", "log_event", "log_request", "log_tool_call"]
