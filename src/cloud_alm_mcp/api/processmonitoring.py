from __future__ import annotations

from typing import Any, Optional

from ..core.client import ODataClient
from ..core.odata import ODataQuery


class ProcessMonitoringClient:
    """Business process monitoring events and services (raw JSON)."""

    def __init__(self, client: ODataClient):
        self.client = client

    async def list_events(self, query: Optional[ODataQuery] = None) -> Any:
        return await self.client.get_collection_raw("/Events", query)

    async def get_event(self, event_id: str) -> Any:
        return await self.client.get_entity_by_key("/Events", event_id)

    async def list_services(self, query: Optional[ODataQuery] = None) -> Any:
        return await self.client.get_collection_raw("/Services", query)

    def __repr__(self) -> str:
        return f"ProcessMonitoringClient(base_url={self.client.base_url!r})"
