from __future__ import annotations

from typing import Any, Dict, Optional

from cloud_alm_mcp.api import ApiClients
from cloud_alm_mcp.core.odata import ODataQuery
from cloud_alm_mcp.tools._payloads import raw


async def query_analytics_dataset(
    clients: ApiClients,
    provider: str,
    *,
    filter: Optional[str] = None,
    select: Optional[str] = None,
    orderby: Optional[str] = None,
    top: Optional[int] = None,
    skip: Optional[int] = None,
) -> Dict[str, Any]:
    """Query a generic analytics dataset by provider name (see list_analytics_providers)."""  # noqa: E501
    if not provider.strip():
        raise ValueError("provider must not be empty")
    query = ODataQuery.from_params(
        filter=filter, select=select, orderby=orderby, top=top, skip=skip
    )
    return raw(await clients.analytics.query_dataset(provider, query))


async def list_analytics_providers(clients: ApiClients) -> Dict[str, Any]:
    """List available analytics data providers."""
    return raw(await clients.analytics.list_providers())


async def get_analytics_requirements(
    clients: ApiClients,
    *,
    filter: Optional[str] = None,
    select: Optional[str] = None,
    top: Optional[int] = None,
    skip: Optional[int] = None,
) -> Dict[str, Any]:
    """Get requirements analytics data."""
    query = ODataQuery.from_params(filter=filter, select=select, top=top, skip=skip)
    return raw(await clients.analytics.get_requirements(query))


async def get_analytics_tasks(
    clients: ApiClients,
    *,
    filter: Optional[str] = None,
    select: Optional[str] = None,
    top: Optional[int] = None,
    skip: Optional[int] = None,
) -> Dict[str, Any]:
    """Get tasks analytics data."""
    query = ODataQuery.from_params(filter=filter, select=select, top=top, skip=skip)
    return raw(await clients.analytics.get_tasks(query))


async def get_analytics_alerts(
    clients: ApiClients,
    *,
    filter: Optional[str] = None,
    select: Optional[str] = None,
    top: Optional[int] = None,
    skip: Optional[int] = None,
) -> Dict[str, Any]:
    """Get alerts analytics data."""
    query = ODataQuery.from_params(filter=filter, select=select, top=top, skip=skip)
    return raw(await clients.analytics.get_alerts(query))
