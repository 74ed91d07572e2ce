"""
Logs service (calm-logs/v1). Reads and pushes OpenTelemetry-style log
records; payloads are passed through as raw JSON.
"""

from __future__ import annotations

from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict

from ..core.client import ODataClient


class GetLogsParams(BaseModel):
    provider: str
    format: Optional[str] = None
    version: Optional[str] = None
    period: Optional[str] = None
    from_time: Optional[str] = None
    to_time: Optional[str] = None
    limit: Optional[int] = None
    offset: Optional[int] = None
    service_id: Optional[str] = None
    observed_timestamp: Optional[str] = None
    on_limit: Optional[str] = None

    model_config = ConfigDict(extra="forbid")

    def to_params(self) -> Dict[str, Any]:
        return {
            "provider": self.provider,
            "format": self.format,
            "version": self.version,
            "period": self.period,
            "from": self.from_time,
            "to": self.to_time,
            "limit": self.limit,
            "offset": self.offset,
            "logsFilters[serviceId]": self.service_id,
            "observedTimestamp": self.observed_timestamp,
            "onLimit": self.on_limit,
        }


class PostLogsParams(BaseModel):
    use_case: str
    service_id: str
    version: Optional[str] = None
    dev: Optional[bool] = None
    tag: Optional[str] = None

    model_config = ConfigDict(extra="forbid")

    def to_params(self) -> Dict[str, Any]:
        return {
            "useCase": self.use_case,
            "serviceId": self.service_id,
            "version": self.version,
            "dev": self.dev,
            "tag": self.tag,
        }


class LogsClient:
    def __init__(self, client: ODataClient):
        self.client = client

    async def get_logs(self, params: GetLogsParams) -> Any:
        return await self.client.get_json("/logs", params=params.to_params())

    async def post_logs(self, params: PostLogsParams, logs: Any) -> Any:
        return await self.client.post_json("/logs", logs, params=params.to_params())

    def __repr__(self) -> str:
        return f"LogsClient(base_url={self.client.base_url!r})"
