from __future__ import annotations

import json
from typing import Any, Optional, Type

from pydantic import BaseModel, TypeAdapter, ValidationError

from .errors import CalmHTTPError, CalmParseError, ODataError
from .odata import ODataErrorResponse

EXCERPT_LIMIT = 200


def body_excerpt(text: str, limit: int = EXCERPT_LIMIT) -> str:
    if len(text) <= limit:
        return text
    return text[:limit] + "...(truncated)"


def normalize_error(
    status_code: int,
    body: str,
    *,
    method: Optional[str] = None,
    url: Optional[str] = None,
) -> CalmHTTPError:
    """
    Turn a non-2xx response into the most specific error available.

    Returns (never raises) an ODataError when the body is an OData error
    envelope, else a plain CalmHTTPError carrying the raw body.
    """
    try:
        envelope = ODataErrorResponse.model_validate_json(body or "")
    except ValidationError:
        return CalmHTTPError(status_code=status_code, body=body, method=method, url=url)

    return ODataError(
        status_code=status_code,
        code=envelope.error.code,
        message=envelope.error.message,
        details=[d.model_dump(exclude_none=True) for d in envelope.error.details],
        body=body,
        method=method,
        url=url,
    )


def decode_json(
    text: str,
    *,
    model: Optional[Type[Any]] = None,
    method: str = "GET",
    url: str = "",
) -> Any:
    """
    Decode a success body, optionally validating it against ``model``.
    Failures raise CalmParseError with a bounded excerpt of the body.
    """
    excerpt = body_excerpt(text)
    if model is None:
        try:
            return json.loads(text)
        except json.JSONDecodeError as exc:
            raise CalmParseError(
                f"Expected JSON from {method} {url}: {exc.msg} - Body: {excerpt!r}",
                excerpt=excerpt,
            ) from exc

    try:
        if isinstance(model, type) and issubclass(model, BaseModel):
            return model.model_validate_json(text)
        return TypeAdapter(model).validate_json(text)
    except ValidationError as exc:
        raise CalmParseError(
            f"Failed to parse response from {method} {url} as "
            f"{getattr(model, '__name__', model)}: "
            f"{exc.error_count()} error(s) - Body: {excerpt!r}",
            excerpt=excerpt,
        ) from exc


__all__ = ["EXCERPT_LIMIT", "body_excerpt", "normalize_error", "decode_json"]
