"""Domain clients for the SAP Cloud ALM API families."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional

import httpx

from ..core.auth import CredentialManager
from ..core.client import ODataClient
from ..core.config import Config
from .analytics import AnalyticsClient
from .documents import DocumentsClient
from .features import FeaturesClient
from .logs import GetLogsParams, LogsClient, PostLogsParams
from .processhierarchy import ProcessHierarchyClient
from .processmonitoring import ProcessMonitoringClient
from .projects import ProjectsClient
from .tasks import TaskListParams, TasksClient
from .testmanagement import TestManagementClient

log = logging.getLogger("cloud_alm_mcp.api")


@dataclass
class ApiClients:
    """Every domain client, sharing one credential manager and one transport."""

    config: Config
    credentials: CredentialManager
    http: httpx.AsyncClient
    features: FeaturesClient
    documents: DocumentsClient
    tasks: TasksClient
    projects: ProjectsClient
    testmanagement: TestManagementClient
    processhierarchy: ProcessHierarchyClient
    analytics: AnalyticsClient
    processmonitoring: ProcessMonitoringClient
    logs: LogsClient
    owns_http: bool = True

    async def aclose(self) -> None:
        if self.owns_http:
            await self.http.aclose()

    async def __aenter__(self) -> "ApiClients":
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.aclose()


def build_clients(
    config: Config, *, http: Optional[httpx.AsyncClient] = None
) -> ApiClients:
    """
    Wire the domain clients for ``config``.

    A single httpx.AsyncClient backs the token exchange and every API family;
    passing ``http`` keeps ownership with the caller.
    """
    owns_http = http is None
    http = http or httpx.AsyncClient(timeout=config.timeout_seconds)
    credentials = CredentialManager(config, http=http)

    def odata(service: str) -> ODataClient:
        return ODataClient(
            base_url=config.service_url(service),
            credentials=credentials,
            timeout_seconds=config.timeout_seconds,
            debug=config.debug,
            http=http,
        )

    clients = ApiClients(
        config=config,
        credentials=credentials,
        http=http,
        features=FeaturesClient(odata("features")),
        documents=DocumentsClient(odata("documents")),
        tasks=TasksClient(odata("tasks")),
        projects=ProjectsClient(odata("projects")),
        testmanagement=TestManagementClient(odata("testmanagement")),
        processhierarchy=ProcessHierarchyClient(odata("processhierarchy")),
        analytics=AnalyticsClient(odata("analytics")),
        processmonitoring=ProcessMonitoringClient(odata("processmonitoring")),
        logs=LogsClient(odata("logs")),
        owns_http=owns_http,
    )
    log.info("API clients ready", extra={"mode": config.describe().get("mode")})
    return clients


__all__ = [
    "AnalyticsClient",
    "ApiClients",
    "DocumentsClient",
    "FeaturesClient",
    "GetLogsParams",
    "LogsClient",
    "PostLogsParams",
    "ProcessHierarchyClient",
    "ProcessMonitoringClient",
    "ProjectsClient",
    "TaskListParams",
    "TasksClient",
    "TestManagementClient",
    "build_clients",
]
