from __future__ import annotations

from typing import Any, Dict, Iterable, Optional

from pydantic import BaseModel

from cloud_alm_mcp.core.odata import ODataCollection


def dump(obj: Any) -> Any:
    """JSON-ready representation of a model (wire names, no nulls)."""
    if isinstance(obj, BaseModel):
        return obj.model_dump(mode="json", by_alias=True, exclude_none=True)
    return obj


def collection(result: ODataCollection) -> Dict[str, Any]:
    return result.to_payload()


def items(result: Iterable[Any]) -> Dict[str, Any]:
    """Wrap a plain REST array so every tool returns an object."""
    values = [dump(item) for item in result]
    return {"count": len(values), "items": values}


def deleted(key: str, **extra: Optional[str]) -> Dict[str, Any]:
    payload: Dict[str, Any] = {"deleted": True, "uuid": key}
    payload.update({k: v for k, v in extra.items() if v is not None})
    return payload


def raw(result: Any) -> Dict[str, Any]:
    """Raw JSON results that are not objects get wrapped under ``value``."""
    if isinstance(result, dict):
        return result
    return {"value": result}
