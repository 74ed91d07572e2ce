from __future__ import annotations

from typing import Any, Dict, Optional

from cloud_alm_mcp.api import ApiClients
from cloud_alm_mcp.core.odata import ODataQuery
from cloud_alm_mcp.tools._payloads import raw


async def list_monitoring_events(
    clients: ApiClients,
    *,
    filter: Optional[str] = None,
    select: Optional[str] = None,
    orderby: Optional[str] = None,
    top: Optional[int] = None,
    skip: Optional[int] = None,
) -> Dict[str, Any]:
    """List process monitoring events with OData filtering."""
    query = ODataQuery.from_params(
        filter=filter, select=select, orderby=orderby, top=top, skip=skip
    )
    return raw(await clients.processmonitoring.list_events(query))


async def get_monitoring_event(clients: ApiClients, id: str) -> Dict[str, Any]:
    """Get a monitoring event by ID."""
    return raw(await clients.processmonitoring.get_event(id))


async def list_monitoring_services(
    clients: ApiClients,
    *,
    filter: Optional[str] = None,
    select: Optional[str] = None,
    top: Optional[int] = None,
    skip: Optional[int] = None,
) -> Dict[str, Any]:
    """List monitored services with OData filtering."""
    query = ODataQuery.from_params(filter=filter, select=select, top=top, skip=skip)
    return raw(await clients.processmonitoring.list_services(query))
