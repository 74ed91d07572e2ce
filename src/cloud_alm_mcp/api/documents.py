from __future__ import annotations

from typing import Optional

from ..core.client import ODataClient
from ..core.odata import ODataCollection, ODataQuery
from ..core.resources import EntitySet
from ..models import CodeValue, Document, DocumentCreateInput, DocumentUpdateInput


class DocumentsClient:
    """Documents OData service (calm-documents/v1)."""

    def __init__(self, client: ODataClient):
        self.client = client
        self.documents: EntitySet[Document] = EntitySet(client, "/Documents", Document)
        self.types: EntitySet[CodeValue] = EntitySet(
            client, "/DocumentTypes", CodeValue
        )
        self.statuses: EntitySet[CodeValue] = EntitySet(
            client, "/DocumentStatuses", CodeValue
        )

    async def list_documents(
        self, query: Optional[ODataQuery] = None
    ) -> ODataCollection[Document]:
        return await self.documents.list(query)

    async def get_document(self, uuid: str) -> Document:
        return await self.documents.get(uuid)

    async def create_document(self, body: DocumentCreateInput) -> Document:
        return await self.documents.create(body)

    async def update_document(self, uuid: str, body: DocumentUpdateInput) -> Document:
        return await self.documents.update(uuid, body)

    async def delete_document(self, uuid: str) -> None:
        await self.documents.delete(uuid)

    async def list_types(self) -> ODataCollection[CodeValue]:
        return await self.types.list()

    async def list_statuses(self) -> ODataCollection[CodeValue]:
        return await self.statuses.list()

    def __repr__(self) -> str:
        return f"DocumentsClient(base_url={self.client.base_url!r})"
