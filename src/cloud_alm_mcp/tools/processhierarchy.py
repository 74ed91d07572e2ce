from __future__ import annotations

from typing import Any, Dict, Optional

from cloud_alm_mcp.api import ApiClients
from cloud_alm_mcp.core.odata import ODataQuery, split_csv
from cloud_alm_mcp.models import HierarchyNodeCreateInput, HierarchyNodeUpdateInput
from cloud_alm_mcp.tools._payloads import collection, deleted, dump, raw


async def list_hierarchy_nodes(
    clients: ApiClients,
    *,
    filter: Optional[str] = None,
    select: Optional[str] = None,
    expand: Optional[str] = None,
    orderby: Optional[str] = None,
    top: Optional[int] = None,
    skip: Optional[int] = None,
) -> Dict[str, Any]:
    """List process hierarchy nodes with OData filtering."""
    query = ODataQuery.from_params(
        filter=filter,
        select=select,
        expand=expand,
        orderby=orderby,
        top=top,
        skip=skip,
    )
    return collection(await clients.processhierarchy.list_nodes(query))


async def get_hierarchy_node(
    clients: ApiClients, uuid: str, expand: Optional[str] = None
) -> Dict[str, Any]:
    """Get a hierarchy node by UUID. Expand toParentNode, toChildNodes or toExternalReferences."""  # noqa: E501
    relations = split_csv(expand)
    if relations:
        expanded = await clients.processhierarchy.get_node_with_expand(uuid, relations)
        return raw(expanded)
    return dump(await clients.processhierarchy.get_node(uuid))


async def create_hierarchy_node(
    clients: ApiClients, data: HierarchyNodeCreateInput
) -> Dict[str, Any]:
    """[EXPERIMENTAL] Create a hierarchy node. Requires title."""
    created = await clients.processhierarchy.create_node(data)
    return dump(created) if created is not None else {"created": True}


async def update_hierarchy_node(
    clients: ApiClients, uuid: str, data: HierarchyNodeUpdateInput
) -> Dict[str, Any]:
    """[EXPERIMENTAL] Update a hierarchy node."""
    updated = await clients.processhierarchy.update_node(uuid, data)
    return dump(updated) if updated is not None else {"updated": True, "uuid": uuid}


async def delete_hierarchy_node(clients: ApiClients, uuid: str) -> Dict[str, Any]:
    """[EXPERIMENTAL] Delete a hierarchy node by UUID."""
    await clients.processhierarchy.delete_node(uuid)
    return deleted(uuid)
