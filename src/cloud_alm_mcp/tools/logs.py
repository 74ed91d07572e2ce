from __future__ import annotations

from typing import Any, Dict, Optional

from cloud_alm_mcp.api import ApiClients, GetLogsParams, PostLogsParams
from cloud_alm_mcp.tools._payloads import raw


async def get_logs(
    clients: ApiClients,
    provider: str,
    *,
    format: Optional[str] = None,
    version: Optional[str] = None,
    period: Optional[str] = None,
    from_time: Optional[str] = None,
    to_time: Optional[str] = None,
    limit: Optional[int] = None,
    offset: Optional[int] = None,
    service_id: Optional[str] = None,
) -> Dict[str, Any]:
    """Get outbound logs in OpenTelemetry format. Requires provider."""
    params = GetLogsParams(
        provider=provider,
        format=format,
        version=version,
        period=period,
        from_time=from_time,
        to_time=to_time,
        limit=limit,
        offset=offset,
        service_id=service_id,
    )
    return raw(await clients.logs.get_logs(params))


async def post_logs(
    clients: ApiClients,
    use_case: str,
    service_id: str,
    logs: Dict[str, Any],
    *,
    version: Optional[str] = None,
    dev: Optional[bool] = None,
    tag: Optional[str] = None,
) -> Dict[str, Any]:
    """[EXPERIMENTAL] Push inbound logs (OpenTelemetry JSON) for a use case and service."""  # noqa: E501
    params = PostLogsParams(
        use_case=use_case, service_id=service_id, version=version, dev=dev, tag=tag
    )
    result = await clients.logs.post_logs(params, logs)
    if result is None:
        return {"accepted": True}
    return raw(result)
