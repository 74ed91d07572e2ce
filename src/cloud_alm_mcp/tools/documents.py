from __future__ import annotations

from typing import Any, Dict, Optional

from cloud_alm_mcp.api import ApiClients
from cloud_alm_mcp.core.odata import ODataQuery
from cloud_alm_mcp.models import DocumentCreateInput, DocumentUpdateInput
from cloud_alm_mcp.tools._payloads import collection, deleted, dump


async def list_documents(
    clients: ApiClients,
    *,
    filter: Optional[str] = None,
    select: Optional[str] = None,
    orderby: Optional[str] = None,
    top: Optional[int] = None,
    skip: Optional[int] = None,
) -> Dict[str, Any]:
    """List documents with OData filtering."""
    query = ODataQuery.from_params(
        filter=filter, select=select, orderby=orderby, top=top, skip=skip
    )
    return collection(await clients.documents.list_documents(query))


async def get_document(clients: ApiClients, uuid: str) -> Dict[str, Any]:
    """Get a single document by UUID."""
    return dump(await clients.documents.get_document(uuid))


async def create_document(
    clients: ApiClients, data: DocumentCreateInput
) -> Dict[str, Any]:
    """[EXPERIMENTAL] Create a document. Requires title."""
    created = await clients.documents.create_document(data)
    return dump(created) if created is not None else {"created": True}


async def update_document(
    clients: ApiClients, uuid: str, data: DocumentUpdateInput
) -> Dict[str, Any]:
    """[EXPERIMENTAL] Update a document. Only provided fields are changed."""
    updated = await clients.documents.update_document(uuid, data)
    return dump(updated) if updated is not None else {"updated": True, "uuid": uuid}


async def delete_document(clients: ApiClients, uuid: str) -> Dict[str, Any]:
    """[EXPERIMENTAL] Delete a document by UUID."""
    await clients.documents.delete_document(uuid)
    return deleted(uuid)


async def list_document_types(clients: ApiClients) -> Dict[str, Any]:
    """List available document types."""
    return collection(await clients.documents.list_types())


async def list_document_statuses(clients: ApiClients) -> Dict[str, Any]:
    """List available document statuses."""
    return collection(await clients.documents.list_statuses())
