from __future__ import annotations

from typing import Any, Dict, Optional

from cloud_alm_mcp.api import ApiClients
from cloud_alm_mcp.core.odata import ODataQuery, split_csv
from cloud_alm_mcp.models import (
    ExternalReferenceCreateInput,
    FeatureCreateInput,
    FeatureUpdateInput,
)
from cloud_alm_mcp.tools._payloads import collection, deleted, dump, raw


async def list_features(
    clients: ApiClients,
    *,
    filter: Optional[str] = None,
    select: Optional[str] = None,
    expand: Optional[str] = None,
    orderby: Optional[str] = None,
    top: Optional[int] = None,
    skip: Optional[int] = None,
) -> Dict[str, Any]:
    """List features with OData filtering ($filter, $select, $expand, $orderby, $top, $skip)."""  # noqa: E501
    query = ODataQuery.from_params(
        filter=filter,
        select=select,
        expand=expand,
        orderby=orderby,
        top=top,
        skip=skip,
    )
    return collection(await clients.features.list_features(query))


async def get_feature(
    clients: ApiClients, uuid: str, expand: Optional[str] = None
) -> Dict[str, Any]:
    """Get a single feature by UUID. Optionally expand related entities (comma-separated)."""  # noqa: E501
    relations = split_csv(expand)
    if relations:
        return raw(await clients.features.get_feature_with_expand(uuid, relations))
    return dump(await clients.features.get_feature(uuid))


async def create_feature(
    clients: ApiClients, data: FeatureCreateInput
) -> Dict[str, Any]:
    """[EXPERIMENTAL] Create a feature. Requires title and project_id."""
    created = await clients.features.create_feature(data)
    return dump(created) if created is not None else {"created": True}


async def update_feature(
    clients: ApiClients, uuid: str, data: FeatureUpdateInput
) -> Dict[str, Any]:
    """[EXPERIMENTAL] Update a feature. Only provided fields are changed."""
    updated = await clients.features.update_feature(uuid, data)
    return dump(updated) if updated is not None else {"updated": True, "uuid": uuid}


async def delete_feature(clients: ApiClients, uuid: str) -> Dict[str, Any]:
    """[EXPERIMENTAL] Delete a feature by UUID."""
    await clients.features.delete_feature(uuid)
    return deleted(uuid)


async def list_external_references(
    clients: ApiClients,
    *,
    filter: Optional[str] = None,
    top: Optional[int] = None,
    skip: Optional[int] = None,
) -> Dict[str, Any]:
    """List external references with OData filtering."""
    query = ODataQuery.from_params(filter=filter, top=top, skip=skip)
    return collection(await clients.features.list_external_references(query))


async def create_external_reference(
    clients: ApiClients, data: ExternalReferenceCreateInput
) -> Dict[str, Any]:
    """[EXPERIMENTAL] Attach an external reference (name, url) to a feature."""
    created = await clients.features.create_external_reference(data)
    return dump(created) if created is not None else {"created": True}


async def delete_external_reference(
    clients: ApiClients, id: str, parent_uuid: str
) -> Dict[str, Any]:
    """[EXPERIMENTAL] Delete an external reference by its id and parent feature UUID."""  # noqa: E501
    await clients.features.delete_external_reference(id, parent_uuid)
    return deleted(id, parent_uuid=parent_uuid)


async def list_feature_priorities(clients: ApiClients) -> Dict[str, Any]:
    """List available feature priorities."""
    return collection(await clients.features.list_priorities())


async def list_feature_statuses(clients: ApiClients) -> Dict[str, Any]:
    """List available feature statuses."""
    return collection(await clients.features.list_statuses())
