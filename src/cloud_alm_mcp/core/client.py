from __future__ import annotations

import logging
import time
from typing import Any, Dict, Mapping, Optional, Sequence, Type, TypeVar

import httpx
from pydantic import BaseModel

from .auth import CredentialManager
from .errors import CalmTransportError
from .observability import log_request
from .odata import KeyStyle, ODataCollection, ODataQuery, key_path
from .responses import body_excerpt, decode_json, normalize_error

T = TypeVar("T")

DEBUG_PREVIEW_LIMIT = 500


def _encode_body(body: Any) -> Any:
    """Serialize a request body, omitting unset (None) fields."""
    if isinstance(body, BaseModel):
        return body.model_dump(mode="json", by_alias=True, exclude_none=True)
    if isinstance(body, Mapping):
        return {k: v for k, v in body.items() if v is not None}
    return body


class ODataClient:
    """
    Shared HTTP client for one SAP Cloud ALM API family.
    - Owns URL assembly, auth header attachment and response interpretation
    - Returns pydantic models when ``model`` is given, raw JSON otherwise
    - No retries; every failure is raised to the caller as a CalmClientError
    """

    def __init__(
        self,
        *,
        base_url: str,
        credentials: CredentialManager,
        timeout_seconds: float = 30.0,
        debug: bool = False,
        logger: Optional[logging.Logger] = None,
        http: Optional[httpx.AsyncClient] = None,
    ):
        base_url = (base_url or "").rstrip("/")
        if not base_url:
            raise ValueError("base_url must be provided.")

        self.base_url = base_url
        self.credentials = credentials
        self.timeout_seconds = timeout_seconds
        self.debug = debug
        self.log = logger or logging.getLogger("cloud_alm_mcp.client")

        self._owns_http = http is None
        self.http = http or httpx.AsyncClient(timeout=timeout_seconds)

    async def aclose(self) -> None:
        if self._owns_http:
            await self.http.aclose()

    async def __aenter__(self) -> "ODataClient":
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.aclose()

    def __repr__(self) -> str:
        return f"ODataClient(base_url={self.base_url!r}, debug={self.debug})"

    # --- URL helpers ------------------------------------------------------ #

    def build_url(
        self,
        endpoint: str,
        *,
        key: Optional[str] = None,
        key_style: KeyStyle = KeyStyle.SEGMENT,
        query: Optional[ODataQuery] = None,
    ) -> str:
        url = f"{self.base_url}{endpoint}"
        if key is not None:
            url += key_path(key, key_style)
        if query is not None:
            url += query.to_query_string()
        return url

    # --- Core request ----------------------------------------------------- #

    async def request(
        self,
        method: str,
        url: str,
        *,
        params: Optional[Dict[str, Any]] = None,
        json: Any = None,
        model: Optional[Type[Any]] = None,
        expect_body: bool = True,
    ) -> Any:
        """
        Issue one authenticated request against an absolute ``url``.
        - Raises CalmTransportError on network/timeout errors (no retry)
        - Raises CalmHTTPError / ODataError on non-2xx responses
        - Raises CalmParseError if a 2xx body does not decode
        - Returns None when ``expect_body`` is False or a write returns no body
        """
        method = method.upper()
        credential = await self.credentials.get_credential()
        header_name, header_value = self.credentials.auth_header(credential)

        headers = {header_name: header_value, "Accept": "application/json"}
        if json is not None:
            headers["Content-Type"] = "application/json"

        start = time.perf_counter()
        try:
            resp = await self.http.request(
                method,
                url,
                params=params,
                json=_encode_body(json) if json is not None else None,
                headers=headers,
            )
        except httpx.HTTPError as exc:
            log_request(
                self.log,
                method,
                url,
                status="exception",
                start=start,
                error_type=type(exc).__name__,
            )
            raise CalmTransportError(
                f"Network/timeout error calling {method} {url}: {exc}",
                method=method,
                url=url,
            ) from exc

        log_request(
            self.log,
            method,
            str(resp.request.url),
            status=resp.status_code,
            start=start,
        )

        text = resp.text
        if not resp.is_success:
            if self.debug:
                self.log.debug(
                    "odata.error_body: %s",
                    body_excerpt(text, DEBUG_PREVIEW_LIMIT),
                    extra={"status": resp.status_code},
                )
            raise normalize_error(resp.status_code, text, method=method, url=url)

        if self.debug:
            self.log.debug(
                "odata.response: %s", body_excerpt(text, DEBUG_PREVIEW_LIMIT)
            )

        if not expect_body:
            return None
        if not text.strip() and method != "GET":
            # 201/204 without payload on writes
            return None
        return decode_json(text, model=model, method=method, url=url)

    # --- OData operations ------------------------------------------------- #

    async def get_collection(
        self,
        endpoint: str,
        query: Optional[ODataQuery] = None,
        *,
        model: Optional[Type[T]] = None,
    ) -> ODataCollection[T]:
        """GET a collection envelope and decode ``value`` items as ``model``."""
        item_type = model if model is not None else Dict[str, Any]
        url = self.build_url(endpoint, query=query)
        return await self.request("GET", url, model=ODataCollection[item_type])

    async def get_collection_raw(
        self, endpoint: str, query: Optional[ODataQuery] = None
    ) -> Any:
        """GET a collection as untyped JSON."""
        return await self.request("GET", self.build_url(endpoint, query=query))

    async def get_entity_by_key(
        self,
        endpoint: str,
        key: str,
        *,
        model: Optional[Type[T]] = None,
        key_style: KeyStyle = KeyStyle.SEGMENT,
    ) -> Any:
        url = self.build_url(endpoint, key=key, key_style=key_style)
        return await self.request("GET", url, model=model)

    async def get_entity_with_expand(
        self,
        endpoint: str,
        key: str,
        expand: Sequence[str],
        *,
        model: Optional[Type[T]] = None,
        key_style: KeyStyle = KeyStyle.SEGMENT,
    ) -> Any:
        query = ODataQuery().expand(expand) if expand else None
        url = self.build_url(endpoint, key=key, key_style=key_style, query=query)
        return await self.request("GET", url, model=model)

    async def create_entity(
        self, endpoint: str, body: Any, *, model: Optional[Type[T]] = None
    ) -> Any:
        return await self.request(
            "POST", self.build_url(endpoint), json=body, model=model
        )

    async def update_entity_by_key(
        self,
        endpoint: str,
        key: str,
        body: Any,
        *,
        model: Optional[Type[T]] = None,
        key_style: KeyStyle = KeyStyle.SEGMENT,
    ) -> Any:
        """PATCH with partial-update semantics: None fields are not sent."""
        url = self.build_url(endpoint, key=key, key_style=key_style)
        return await self.request("PATCH", url, json=body, model=model)

    async def delete_entity_by_key(
        self,
        endpoint: str,
        key: str,
        *,
        key_style: KeyStyle = KeyStyle.SEGMENT,
    ) -> None:
        """DELETE; any 2xx (including 204 No Content) is success."""
        url = self.build_url(endpoint, key=key, key_style=key_style)
        await self.request("DELETE", url, expect_body=False)

    # --- Plain REST helpers (tasks, projects, logs) ------------------------ #

    async def get_json(
        self,
        endpoint: str,
        *,
        params: Optional[Dict[str, Any]] = None,
        model: Optional[Type[T]] = None,
    ) -> Any:
        return await self.request(
            "GET", self.build_url(endpoint), params=_drop_none(params), model=model
        )

    async def post_json(
        self,
        endpoint: str,
        body: Any,
        *,
        params: Optional[Dict[str, Any]] = None,
        model: Optional[Type[T]] = None,
    ) -> Any:
        return await self.request(
            "POST",
            self.build_url(endpoint),
            params=_drop_none(params),
            json=body,
            model=model,
        )

    async def patch_json(
        self, endpoint: str, body: Any, *, model: Optional[Type[T]] = None
    ) -> Any:
        return await self.request(
            "PATCH", self.build_url(endpoint), json=body, model=model
        )

    async def delete(self, endpoint: str) -> None:
        await self.request("DELETE", self.build_url(endpoint), expect_body=False)


def _drop_none(params: Optional[Dict[str, Any]]) -> Optional[Dict[str, Any]]:
    if params is None:
        return None
    cleaned: Dict[str, Any] = {}
    for key, value in params.items():
        if value is None:
            continue
        if isinstance(value, bool):
            value = "true" if value else "false"
        cleaned[key] = value
    return cleaned


__all__ = ["ODataClient"]
