from __future__ import annotations

from typing import Any, Optional, Sequence

from ..core.client import ODataClient
from ..core.odata import ODataCollection, ODataQuery
from ..core.resources import EntitySet
from ..models import HierarchyNode, HierarchyNodeCreateInput, HierarchyNodeUpdateInput


class ProcessHierarchyClient:
    """Process hierarchy nodes (calm-processhierarchy/v1)."""

    def __init__(self, client: ODataClient):
        self.client = client
        self.nodes: EntitySet[HierarchyNode] = EntitySet(
            client, "/HierarchyNodes", HierarchyNode
        )

    async def list_nodes(
        self, query: Optional[ODataQuery] = None
    ) -> ODataCollection[HierarchyNode]:
        return await self.nodes.list(query)

    async def get_node(self, uuid: str) -> HierarchyNode:
        return await self.nodes.get(uuid)

    async def get_node_with_expand(self, uuid: str, expand: Sequence[str]) -> Any:
        """Expand e.g. ``toParentNode`` or ``toChildNodes``."""
        return await self.nodes.get_expanded(uuid, expand)

    async def create_node(self, body: HierarchyNodeCreateInput) -> HierarchyNode:
        return await self.nodes.create(body)

    async def update_node(
        self, uuid: str, body: HierarchyNodeUpdateInput
    ) -> HierarchyNode:
        return await self.nodes.update(uuid, body)

    async def delete_node(self, uuid: str) -> None:
        await self.nodes.delete(uuid)

    def __repr__(self) -> str:
        return f"ProcessHierarchyClient(base_url={self.client.base_url!r})"
