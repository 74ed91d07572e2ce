from __future__ import annotations

from typing import Any, Dict, Optional

from cloud_alm_mcp.api import ApiClients, TaskListParams
from cloud_alm_mcp.core.odata import split_csv
from cloud_alm_mcp.models import (
    TaskCommentCreateInput,
    TaskCreateInput,
    TaskUpdateInput,
)
from cloud_alm_mcp.tools._payloads import deleted, dump, items

MAX_LIMIT = 1000


async def list_tasks(
    clients: ApiClients,
    project_id: str,
    *,
    offset: Optional[int] = None,
    limit: Optional[int] = None,
    task_type: Optional[str] = None,
    status: Optional[str] = None,
    sub_status: Optional[str] = None,
    assignee_id: Optional[str] = None,
    last_changed_date: Optional[str] = None,
    tags: Optional[str] = None,
) -> Dict[str, Any]:
    """List tasks for a project. Filter by type (CALMTASK, CALMUS, CALMREQ...), status, assignee or comma-separated tags."""  # noqa: E501
    if offset is not None and offset < 0:
        raise ValueError("offset must be >= 0")
    if limit is not None:
        limit = max(1, min(limit, MAX_LIMIT))

    params = TaskListParams(
        project_id=project_id,
        offset=offset,
        limit=limit,
        task_type=task_type,
        status=status,
        sub_status=sub_status,
        assignee_id=assignee_id,
        last_changed_date=last_changed_date,
        tags=split_csv(tags) or None,
    )
    return items(await clients.tasks.list_tasks(params))


async def get_task(clients: ApiClients, uuid: str) -> Dict[str, Any]:
    """Get a single task by UUID with full details."""
    return dump(await clients.tasks.get_task(uuid))


async def create_task(clients: ApiClients, data: TaskCreateInput) -> Dict[str, Any]:
    """[EXPERIMENTAL] Create a task. Requires project_id, title and type."""
    created = await clients.tasks.create_task(data)
    return dump(created) if created is not None else {"created": True}


async def update_task(
    clients: ApiClients, uuid: str, data: TaskUpdateInput
) -> Dict[str, Any]:
    """[EXPERIMENTAL] Update a task. Only provided fields are changed."""
    updated = await clients.tasks.update_task(uuid, data)
    return dump(updated) if updated is not None else {"updated": True, "uuid": uuid}


async def delete_task(clients: ApiClients, uuid: str) -> Dict[str, Any]:
    """[EXPERIMENTAL] Delete a task by UUID."""
    await clients.tasks.delete_task(uuid)
    return deleted(uuid)


async def list_task_comments(clients: ApiClients, task_id: str) -> Dict[str, Any]:
    """List comments on a task."""
    return items(await clients.tasks.list_task_comments(task_id))


async def create_task_comment(
    clients: ApiClients, task_id: str, content: str
) -> Dict[str, Any]:
    """[EXPERIMENTAL] Add a comment to a task."""
    if not content.strip():
        raise ValueError("content must not be empty")
    created = await clients.tasks.create_task_comment(
        task_id, TaskCommentCreateInput(content=content)
    )
    return dump(created) if created is not None else {"created": True}


async def list_task_references(clients: ApiClients, task_id: str) -> Dict[str, Any]:
    """List external references of a task."""
    return items(await clients.tasks.list_task_references(task_id))


async def list_workstreams(clients: ApiClients, project_id: str) -> Dict[str, Any]:
    """List workstreams for a project."""
    return items(await clients.tasks.list_workstreams(project_id))


async def list_deliverables(clients: ApiClients, project_id: str) -> Dict[str, Any]:
    """List deliverables for a project."""
    return items(await clients.tasks.list_deliverables(project_id))
