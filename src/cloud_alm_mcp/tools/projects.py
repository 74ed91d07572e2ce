from __future__ import annotations

from typing import Any, Dict

from cloud_alm_mcp.api import ApiClients
from cloud_alm_mcp.models import ProjectCreateInput
from cloud_alm_mcp.tools._payloads import dump, items


async def list_projects(clients: ApiClients) -> Dict[str, Any]:
    """List all accessible projects."""
    return items(await clients.projects.list_projects())


async def get_project(clients: ApiClients, id: str) -> Dict[str, Any]:
    """Get project details by ID."""
    return dump(await clients.projects.get_project(id))


async def create_project(
    clients: ApiClients, data: ProjectCreateInput
) -> Dict[str, Any]:
    """[EXPERIMENTAL] Create a project."""
    created = await clients.projects.create_project(data)
    return dump(created) if created is not None else {"created": True}


async def list_project_timeboxes(
    clients: ApiClients, project_id: str
) -> Dict[str, Any]:
    """List timeboxes (sprints) for a project."""
    return items(await clients.projects.list_timeboxes(project_id))


async def list_project_teams(clients: ApiClients, project_id: str) -> Dict[str, Any]:
    """List team members for a project."""
    return items(await clients.projects.list_team_members(project_id))


async def list_programs(clients: ApiClients) -> Dict[str, Any]:
    """List all programs."""
    return items(await clients.projects.list_programs())


async def get_program(clients: ApiClients, id: str) -> Dict[str, Any]:
    """Get program details by ID."""
    return dump(await clients.projects.get_program(id))
