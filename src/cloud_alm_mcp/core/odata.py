"""
OData v4 query builder and payload envelopes.

``ODataQuery`` is an immutable value: every facet setter returns a new query,
so a base query can be shared and specialised per call.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from enum import Enum
from typing import Any, Dict, Generic, List, Optional, Sequence, Tuple, TypeVar
from urllib.parse import quote

from pydantic import BaseModel, ConfigDict, Field

T = TypeVar("T")


class SortOrder(str, Enum):
    ASC = "asc"
    DESC = "desc"

    @classmethod
    def parse(cls, value: Optional[str]) -> "SortOrder":
        """Lenient parser: anything other than 'desc' sorts ascending."""
        if value and value.strip().lower() == "desc":
            return cls.DESC
        return cls.ASC


class KeyStyle(str, Enum):
    """How an entity key is appended to an endpoint path."""

    SEGMENT = "segment"  # /Features/<key>
    PARENTHESES = "parentheses"  # /DataSet('<key>')


def encode_component(value: str) -> str:
    # Every reserved character is escaped; only unreserved ones survive.
    return quote(value, safe="")


def split_csv(raw: Optional[str]) -> List[str]:
    if not raw:
        return []
    return [part.strip() for part in raw.split(",") if part.strip()]


@dataclass(frozen=True)
class ODataQuery:
    filter_expr: Optional[str] = None
    select_fields: Tuple[str, ...] = ()
    expand_fields: Tuple[str, ...] = ()
    order_by: Tuple[Tuple[str, SortOrder], ...] = ()
    top_n: Optional[int] = None
    skip_n: Optional[int] = None
    include_count: bool = False
    search_text: Optional[str] = None

    # --- Facet setters --------------------------------------------------- #

    def filter(self, expression: str) -> "ODataQuery":
        return replace(self, filter_expr=expression)

    def select(self, fields: Sequence[str]) -> "ODataQuery":
        return replace(self, select_fields=tuple(fields))

    def expand(self, relations: Sequence[str]) -> "ODataQuery":
        return replace(self, expand_fields=tuple(relations))

    def orderby(self, field: str, order: SortOrder = SortOrder.ASC) -> "ODataQuery":
        return replace(self, order_by=self.order_by + ((field, SortOrder(order)),))

    def top(self, limit: int) -> "ODataQuery":
        if limit < 0:
            raise ValueError("top must be >= 0")
        return replace(self, top_n=limit)

    def skip(self, offset: int) -> "ODataQuery":
        if offset < 0:
            raise ValueError("skip must be >= 0")
        return replace(self, skip_n=offset)

    def count(self, enabled: bool = True) -> "ODataQuery":
        return replace(self, include_count=enabled)

    def search(self, text: str) -> "ODataQuery":
        return replace(self, search_text=text)

    # --- Serialization --------------------------------------------------- #

    @property
    def is_empty(self) -> bool:
        return not self.to_query_string()

    def to_query_string(self) -> str:
        """
        Render facets as ``?$filter=...&$select=...``; empty string if unset.
        Facet order is fixed: filter, select, expand, orderby, top, skip,
        count, search.
        """
        params: List[str] = []

        if self.filter_expr is not None:
            params.append(f"$filter={encode_component(self.filter_expr)}")
        if self.select_fields:
            params.append(f"$select={','.join(self.select_fields)}")
        if self.expand_fields:
            params.append(f"$expand={','.join(self.expand_fields)}")
        if self.order_by:
            order = ",".join(f"{field} {way.value}" for field, way in self.order_by)
            params.append(f"$orderby={order}")
        if self.top_n is not None:
            params.append(f"$top={self.top_n}")
        if self.skip_n is not None:
            params.append(f"$skip={self.skip_n}")
        if self.include_count:
            params.append("$count=true")
        if self.search_text is not None:
            params.append(f"$search={encode_component(self.search_text)}")

        return "?" + "&".join(params) if params else ""

    @classmethod
    def from_params(
        cls,
        *,
        filter: Optional[str] = None,
        select: Optional[str] = None,
        expand: Optional[str] = None,
        orderby: Optional[str] = None,
        top: Optional[int] = None,
        skip: Optional[int] = None,
        count: bool = False,
        search: Optional[str] = None,
    ) -> Optional["ODataQuery"]:
        """
        Build a query from tool-style string parameters.

        ``select``/``expand`` are comma-separated; ``orderby`` accepts
        ``"modifiedAt desc, title"`` (direction defaults to asc).
        Returns None when no facet was supplied.
        """
        query = cls()
        if filter:
            query = query.filter(filter)
        if select:
            query = query.select(split_csv(select))
        if expand:
            query = query.expand(split_csv(expand))
        for clause in split_csv(orderby):
            field, _, direction = clause.partition(" ")
            query = query.orderby(field, SortOrder.parse(direction))
        if top is not None:
            query = query.top(top)
        if skip is not None:
            query = query.skip(skip)
        if count:
            query = query.count()
        if search:
            query = query.search(search)
        return None if query.is_empty else query


def key_path(key: str, style: KeyStyle = KeyStyle.SEGMENT) -> str:
    """Address an entity key: ``/abc`` or ``('abc')`` (quotes doubled)."""
    if not key:
        return ""
    if style is KeyStyle.PARENTHESES:
        escaped = key.replace("'", "''")
        return f"('{encode_component(escaped)}')"
    return f"/{encode_component(key)}"


# --- Envelopes -------------------------------------------------------------- #


class ODataCollection(BaseModel, Generic[T]):
    """OData v4 collection response: ``{"@odata.count": n, "value": [...]}``."""

    context: Optional[str] = Field(default=None, alias="@odata.context")
    count: Optional[int] = Field(default=None, alias="@odata.count")
    next_link: Optional[str] = Field(default=None, alias="@odata.nextLink")
    value: List[T]

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    def to_payload(self) -> Dict[str, Any]:
        """JSON-ready dict using wire names; unset metadata omitted."""
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)


class ODataErrorItem(BaseModel):
    code: Optional[str] = None
    message: str
    target: Optional[str] = None

    model_config = ConfigDict(extra="ignore")


class ODataErrorDetail(BaseModel):
    code: str
    message: str
    details: List[ODataErrorItem] = Field(default_factory=list)

    model_config = ConfigDict(extra="ignore")


class ODataErrorResponse(BaseModel):
    error: ODataErrorDetail

    model_config = ConfigDict(extra="ignore")


__all__ = [
    "SortOrder",
    "KeyStyle",
    "ODataQuery",
    "ODataCollection",
    "ODataErrorItem",
    "ODataErrorDetail",
    "ODataErrorResponse",
    "encode_component",
    "key_path",
]
