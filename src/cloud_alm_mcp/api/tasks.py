"""
Tasks service (calm-tasks/v1). Plain REST, not OData: collections come back
as bare JSON arrays and filtering uses ordinary query parameters.
"""

from __future__ import annotations

from typing import List, Optional, Sequence

from pydantic import BaseModel, ConfigDict

from ..core.client import ODataClient
from ..core.odata import encode_component
from ..models import (
    Deliverable,
    Task,
    TaskComment,
    TaskCommentCreateInput,
    TaskCreateInput,
    TaskReference,
    TaskUpdateInput,
    Workstream,
)


class TaskListParams(BaseModel):
    project_id: str
    offset: Optional[int] = None
    limit: Optional[int] = None
    task_type: Optional[str] = None
    status: Optional[str] = None
    sub_status: Optional[str] = None
    assignee_id: Optional[str] = None
    last_changed_date: Optional[str] = None
    tags: Optional[Sequence[str]] = None

    model_config = ConfigDict(extra="forbid")

    def to_params(self) -> dict:
        return {
            "projectId": self.project_id,
            "offset": self.offset,
            "limit": self.limit,
            "type": self.task_type,
            "status": self.status,
            "subStatus": self.sub_status,
            "assigneeId": self.assignee_id,
            "lastChangedDate": self.last_changed_date,
            # repeated ?tags=a&tags=b
            "tags": list(self.tags) if self.tags else None,
        }


class TasksClient:
    def __init__(self, client: ODataClient):
        self.client = client

    async def list_tasks(self, params: TaskListParams) -> List[Task]:
        return await self.client.get_json(
            "/tasks", params=params.to_params(), model=List[Task]
        )

    async def get_task(self, task_id: str) -> Task:
        return await self.client.get_json(
            f"/tasks/{encode_component(task_id)}", model=Task
        )

    async def create_task(self, body: TaskCreateInput) -> Task:
        return await self.client.post_json("/tasks", body, model=Task)

    async def update_task(self, task_id: str, body: TaskUpdateInput) -> Task:
        return await self.client.patch_json(
            f"/tasks/{encode_component(task_id)}", body, model=Task
        )

    async def delete_task(self, task_id: str) -> None:
        await self.client.delete(f"/tasks/{encode_component(task_id)}")

    async def list_task_comments(self, task_id: str) -> List[TaskComment]:
        return await self.client.get_json(
            f"/tasks/{encode_component(task_id)}/comments", model=List[TaskComment]
        )

    async def create_task_comment(
        self, task_id: str, body: TaskCommentCreateInput
    ) -> TaskComment:
        return await self.client.post_json(
            f"/tasks/{encode_component(task_id)}/comments", body, model=TaskComment
        )

    async def list_task_references(self, task_id: str) -> List[TaskReference]:
        return await self.client.get_json(
            f"/tasks/{encode_component(task_id)}/references",
            model=List[TaskReference],
        )

    async def list_workstreams(self, project_id: str) -> List[Workstream]:
        return await self.client.get_json(
            "/workstreams", params={"projectId": project_id}, model=List[Workstream]
        )

    async def list_deliverables(self, project_id: str) -> List[Deliverable]:
        return await self.client.get_json(
            "/deliverables",
            params={"projectId": project_id},
            model=List[Deliverable],
        )

    def __repr__(self) -> str:
        return f"TasksClient(base_url={self.client.base_url!r})"
