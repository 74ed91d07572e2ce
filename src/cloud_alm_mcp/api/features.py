from __future__ import annotations

from typing import Any, Optional, Sequence

from ..core.client import ODataClient
from ..core.odata import ODataCollection, ODataQuery, encode_component
from ..core.resources import EntitySet
from ..models import (
    CodeValue,
    ExternalReference,
    ExternalReferenceCreateInput,
    Feature,
    FeatureCreateInput,
    FeatureUpdateInput,
)


class FeaturesClient:
    """Features OData service (calm-features/v1)."""

    def __init__(self, client: ODataClient):
        self.client = client
        self.features: EntitySet[Feature] = EntitySet(client, "/Features", Feature)
        self.external_references: EntitySet[ExternalReference] = EntitySet(
            client, "/ExternalReferences", ExternalReference
        )
        self.priorities: EntitySet[CodeValue] = EntitySet(
            client, "/FeaturePriorities", CodeValue
        )
        self.statuses: EntitySet[CodeValue] = EntitySet(
            client, "/FeatureStatus", CodeValue
        )

    async def list_features(
        self, query: Optional[ODataQuery] = None
    ) -> ODataCollection[Feature]:
        return await self.features.list(query)

    async def get_feature(self, uuid: str) -> Feature:
        return await self.features.get(uuid)

    async def get_feature_with_expand(self, uuid: str, expand: Sequence[str]) -> Any:
        return await self.features.get_expanded(uuid, expand)

    async def create_feature(self, body: FeatureCreateInput) -> Feature:
        return await self.features.create(body)

    async def update_feature(self, uuid: str, body: FeatureUpdateInput) -> Feature:
        return await self.features.update(uuid, body)

    async def delete_feature(self, uuid: str) -> None:
        await self.features.delete(uuid)

    async def list_external_references(
        self, query: Optional[ODataQuery] = None
    ) -> ODataCollection[ExternalReference]:
        return await self.external_references.list(query)

    async def create_external_reference(
        self, body: ExternalReferenceCreateInput
    ) -> ExternalReference:
        return await self.external_references.create(body)

    async def delete_external_reference(self, ref_id: str, parent_uuid: str) -> None:
        # Composite key addressed as two path segments.
        endpoint = (
            f"/ExternalReferences/{encode_component(ref_id)}"
            f"/{encode_component(parent_uuid)}"
        )
        await self.client.delete(endpoint)

    async def list_priorities(self) -> ODataCollection[CodeValue]:
        return await self.priorities.list()

    async def list_statuses(self) -> ODataCollection[CodeValue]:
        return await self.statuses.list()

    def __repr__(self) -> str:
        return f"FeaturesClient(base_url={self.client.base_url!r})"
