from __future__ import annotations

from typing import List

from ..core.client import ODataClient
from ..core.odata import encode_component
from ..models import Program, Project, ProjectCreateInput, TeamMember, Timebox


class ProjectsClient:
    """Projects service (calm-projects/v1), plain REST with JSON arrays."""

    def __init__(self, client: ODataClient):
        self.client = client

    async def list_projects(self) -> List[Project]:
        return await self.client.get_json("/projects", model=List[Project])

    async def get_project(self, project_id: str) -> Project:
        return await self.client.get_json(
            f"/projects/{encode_component(project_id)}", model=Project
        )

    async def create_project(self, body: ProjectCreateInput) -> Project:
        return await self.client.post_json("/projects", body, model=Project)

    async def list_timeboxes(self, project_id: str) -> List[Timebox]:
        return await self.client.get_json(
            f"/projects/{encode_component(project_id)}/timeboxes",
            model=List[Timebox],
        )

    async def list_team_members(self, project_id: str) -> List[TeamMember]:
        return await self.client.get_json(
            f"/projects/{encode_component(project_id)}/teams",
            model=List[TeamMember],
        )

    async def list_programs(self) -> List[Program]:
        return await self.client.get_json("/programs", model=List[Program])

    async def get_program(self, program_id: str) -> Program:
        return await self.client.get_json(
            f"/programs/{encode_component(program_id)}", model=Program
        )

    def __repr__(self) -> str:
        return f"ProjectsClient(base_url={self.client.base_url!r})"
