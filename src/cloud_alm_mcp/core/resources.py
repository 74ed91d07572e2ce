"""
Entity-set composition: a base path plus an entity model bound to one
ODataClient. Domain clients are built from these instead of repeating the
GET/POST/PATCH/DELETE plumbing per resource.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Generic, Optional, Sequence, Type, TypeVar

from .client import ODataClient
from .odata import KeyStyle, ODataCollection, ODataQuery

T = TypeVar("T")


@dataclass(frozen=True)
class EntitySet(Generic[T]):
    client: ODataClient
    path: str
    model: Optional[Type[T]] = None
    key_style: KeyStyle = KeyStyle.SEGMENT

    async def list(self, query: Optional[ODataQuery] = None) -> ODataCollection[T]:
        return await self.client.get_collection(self.path, query, model=self.model)

    async def list_raw(self, query: Optional[ODataQuery] = None) -> Any:
        return await self.client.get_collection_raw(self.path, query)

    async def get(self, key: str) -> T:
        return await self.client.get_entity_by_key(
            self.path, key, model=self.model, key_style=self.key_style
        )

    async def get_expanded(self, key: str, expand: Sequence[str]) -> Any:
        """Expanded entities keep navigation properties, so they stay raw JSON."""
        return await self.client.get_entity_with_expand(
            self.path, key, expand, key_style=self.key_style
        )

    async def create(self, body: Any) -> T:
        return await self.client.create_entity(self.path, body, model=self.model)

    async def update(self, key: str, body: Any) -> T:
        return await self.client.update_entity_by_key(
            self.path, key, body, model=self.model, key_style=self.key_style
        )

    async def delete(self, key: str) -> None:
        await self.client.delete_entity_by_key(
            self.path, key, key_style=self.key_style
        )


__all__ = ["EntitySet"]
