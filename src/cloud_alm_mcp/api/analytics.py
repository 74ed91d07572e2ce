from __future__ import annotations

from typing import Any, Optional

from ..core.client import ODataClient
from ..core.odata import KeyStyle, ODataQuery, key_path


class AnalyticsClient:
    """
    Analytics OData v4 service. Datasets vary by provider, so every result
    is returned as raw JSON rather than a typed model.
    """

    def __init__(self, client: ODataClient):
        self.client = client

    async def query_dataset(
        self, provider: str, query: Optional[ODataQuery] = None
    ) -> Any:
        endpoint = "/DataSet" + key_path(provider, KeyStyle.PARENTHESES)
        return await self.client.get_collection_raw(endpoint, query)

    async def get_requirements(self, query: Optional[ODataQuery] = None) -> Any:
        return await self.client.get_collection_raw("/Requirements", query)

    async def get_tasks(self, query: Optional[ODataQuery] = None) -> Any:
        return await self.client.get_collection_raw("/Tasks", query)

    async def get_alerts(self, query: Optional[ODataQuery] = None) -> Any:
        return await self.client.get_collection_raw("/Alerts", query)

    async def list_providers(self) -> Any:
        return await self.client.get_collection_raw("/Providers")

    def __repr__(self) -> str:
        return f"AnalyticsClient(base_url={self.client.base_url!r})"
