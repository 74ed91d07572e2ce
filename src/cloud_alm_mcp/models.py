from __future__ import annotations

from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class CalmEntity(BaseModel):
    """
    Base for SAP Cloud ALM payloads. Wire names are camelCase; every field is
    optional because the APIs omit properties freely depending on $select.
    """

    model_config = ConfigDict(
        alias_generator=to_camel, populate_by_name=True, extra="ignore"
    )

    def to_payload(self) -> Dict[str, Any]:
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)


class CalmInput(BaseModel):
    """Base for request bodies. Unset fields are never sent (no nulling)."""

    model_config = ConfigDict(
        alias_generator=to_camel, populate_by_name=True, extra="forbid"
    )

    def to_payload(self) -> Dict[str, Any]:
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)


class CodeValue(BaseModel):
    """Code list entry (priorities, statuses, document types)."""

    code: str
    name: str

    model_config = ConfigDict(extra="ignore")


# --- Features -------------------------------------------------------------- #


class Feature(CalmEntity):
    uuid: Optional[str] = None
    display_id: Optional[str] = None
    title: Optional[str] = None
    description: Optional[str] = None
    project_id: Optional[str] = None
    status_code: Optional[str] = None
    priority_code: Optional[int] = None
    release_id: Optional[str] = None
    scope_id: Optional[str] = None
    responsible_id: Optional[str] = None
    modified_at: Optional[str] = None
    created_at: Optional[str] = None
    feature_type: Optional[str] = Field(default=None, alias="type")
    workstream_id: Optional[str] = None
    tags: List[str] = Field(default_factory=list)


class ExternalReference(BaseModel):
    # This entity set uses snake_case property names on the wire.
    id: Optional[str] = None
    parent_uuid: Optional[str] = None
    name: Optional[str] = None
    url: Optional[str] = None

    model_config = ConfigDict(extra="ignore")

    def to_payload(self) -> Dict[str, Any]:
        return self.model_dump(mode="json", exclude_none=True)


class FeatureCreateInput(CalmInput):
    title: str
    project_id: str
    description: Optional[str] = None
    priority_code: Optional[str] = None
    status_code: Optional[str] = None
    release_id: Optional[str] = None
    scope_id: Optional[str] = None


class FeatureUpdateInput(CalmInput):
    title: Optional[str] = None
    description: Optional[str] = None
    priority_code: Optional[str] = None
    status_code: Optional[str] = None
    release_id: Optional[str] = None
    scope_id: Optional[str] = None


class ExternalReferenceCreateInput(BaseModel):
    id: str
    parent_uuid: str
    name: str
    url: Optional[str] = None

    model_config = ConfigDict(extra="forbid")


# --- Documents ------------------------------------------------------------- #


class Document(CalmEntity):
    uuid: Optional[str] = None
    display_id: Optional[str] = None
    title: Optional[str] = None
    content: Optional[str] = None
    status_code: Optional[int] = None
    priority_code: Optional[int] = None
    type_code: Optional[str] = Field(default=None, alias="documentTypeCode")
    source_code: Optional[str] = None
    project_id: Optional[str] = None
    scope_id: Optional[str] = None
    modified_at: Optional[str] = None
    created_at: Optional[str] = None
    tags: List[str] = Field(default_factory=list)


class DocumentCreateInput(CalmInput):
    title: str
    content: Optional[str] = None
    project_id: Optional[str] = None
    type_code: Optional[str] = None
    status_code: Optional[str] = None
    priority_code: Optional[str] = None


class DocumentUpdateInput(CalmInput):
    title: Optional[str] = None
    content: Optional[str] = None
    status_code: Optional[str] = None
    priority_code: Optional[str] = None
    type_code: Optional[str] = None


# --- Tasks ------------------------------------------------------------------ #


class Task(CalmEntity):
    id: Optional[str] = None
    project_id: Optional[str] = None
    title: Optional[str] = None
    description: Optional[str] = None
    task_type: Optional[str] = Field(default=None, alias="type")
    status: Optional[str] = None
    sub_status: Optional[str] = None
    external_id: Optional[str] = None
    due_date: Optional[str] = None
    priority_id: Optional[int] = None
    assignee_id: Optional[str] = None
    assignee_name: Optional[str] = None
    timebox_name: Optional[str] = None
    timebox_start_date: Optional[str] = None
    timebox_end_date: Optional[str] = None
    last_changed_date: Optional[str] = None


class TaskComment(CalmEntity):
    id: Optional[str] = None
    task_id: Optional[str] = None
    content: Optional[str] = None
    created_at: Optional[str] = None
    created_by: Optional[str] = None


class TaskReference(CalmEntity):
    id: Optional[str] = None
    task_id: Optional[str] = None
    external_id: Optional[str] = None
    external_system: Optional[str] = None
    url: Optional[str] = None


class Workstream(CalmEntity):
    id: Optional[str] = None
    project_id: Optional[str] = None
    name: Optional[str] = None
    description: Optional[str] = None


class Deliverable(CalmEntity):
    id: Optional[str] = None
    project_id: Optional[str] = None
    name: Optional[str] = None
    description: Optional[str] = None


class TaskCreateInput(CalmInput):
    project_id: str
    title: str
    task_type: str = Field(alias="type")
    description: Optional[str] = None
    priority_id: Optional[int] = None
    assignee_id: Optional[str] = None
    due_date: Optional[str] = None


class TaskUpdateInput(CalmInput):
    title: Optional[str] = None
    description: Optional[str] = None
    status: Optional[str] = None
    priority_id: Optional[int] = None
    assignee_id: Optional[str] = None
    due_date: Optional[str] = None


class TaskCommentCreateInput(CalmInput):
    content: str


# --- Projects -------------------------------------------------------------- #


class Project(CalmEntity):
    id: Optional[str] = None
    name: Optional[str] = None
    description: Optional[str] = None
    status: Optional[str] = None
    project_type: Optional[str] = Field(default=None, alias="type")
    program_id: Optional[str] = None
    created_at: Optional[str] = None
    modified_at: Optional[str] = None


class Program(CalmEntity):
    id: Optional[str] = None
    name: Optional[str] = None
    description: Optional[str] = None


class Timebox(CalmEntity):
    id: Optional[str] = None
    name: Optional[str] = None
    project_id: Optional[str] = None
    start_date: Optional[str] = None
    end_date: Optional[str] = None
    status: Optional[str] = None


class TeamMember(CalmEntity):
    id: Optional[str] = None
    user_id: Optional[str] = None
    user_name: Optional[str] = None
    email: Optional[str] = None
    role: Optional[str] = None
    project_id: Optional[str] = None


class ProjectCreateInput(CalmInput):
    name: str
    description: Optional[str] = None
    program_id: Optional[str] = None


# --- Test management ------------------------------------------------------- #


class TestCase(CalmEntity):
    __test__ = False  # not a pytest class

    uuid: Optional[str] = None
    title: Optional[str] = None
    description: Optional[str] = None
    status_code: Optional[str] = None
    project_id: Optional[str] = None
    modified_at: Optional[str] = None
    created_at: Optional[str] = None


class TestActivity(CalmEntity):
    __test__ = False

    uuid: Optional[str] = None
    title: Optional[str] = None
    description: Optional[str] = None
    sequence: Optional[int] = None
    parent_id: Optional[str] = Field(default=None, alias="parent_ID")
    modified_at: Optional[str] = None


class TestAction(CalmEntity):
    __test__ = False

    uuid: Optional[str] = None
    title: Optional[str] = None
    description: Optional[str] = None
    expected_result: Optional[str] = None
    sequence: Optional[int] = None
    is_evidence_required: Optional[bool] = None
    parent_id: Optional[str] = Field(default=None, alias="parent_ID")
    modified_at: Optional[str] = None


class TestCaseCreateInput(CalmInput):
    __test__ = False

    title: str
    description: Optional[str] = None
    project_id: Optional[str] = None


class TestCaseUpdateInput(CalmInput):
    __test__ = False

    title: Optional[str] = None
    description: Optional[str] = None
    status_code: Optional[str] = None


class TestActivityCreateInput(CalmInput):
    __test__ = False

    title: str
    parent_id: str = Field(alias="parent_ID")
    description: Optional[str] = None
    sequence: Optional[int] = None


class TestActionCreateInput(CalmInput):
    __test__ = False

    title: str
    parent_id: str = Field(alias="parent_ID")
    description: Optional[str] = None
    expected_result: Optional[str] = None
    sequence: Optional[int] = None
    is_evidence_required: Optional[bool] = None


# --- Process hierarchy ----------------------------------------------------- #


class HierarchyNode(CalmEntity):
    uuid: Optional[str] = None
    display_id: Optional[str] = None
    title: Optional[str] = None
    description: Optional[str] = None
    hierarchy_level: Optional[int] = None
    sequence: Optional[int] = None
    parent_titles: Optional[str] = None
    parent_node_uuid: Optional[str] = None
    root_node_uuid: Optional[str] = None
    created_at: Optional[str] = None
    modified_at: Optional[str] = None


class HierarchyNodeCreateInput(CalmInput):
    title: str
    description: Optional[str] = None
    parent_node_uuid: Optional[str] = None
    sequence: Optional[int] = None


class HierarchyNodeUpdateInput(CalmInput):
    title: Optional[str] = None
    description: Optional[str] = None
    sequence: Optional[int] = None
