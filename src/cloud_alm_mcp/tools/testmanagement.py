from __future__ import annotations

from typing import Any, Dict, Optional

from cloud_alm_mcp.api import ApiClients
from cloud_alm_mcp.core.odata import ODataQuery
from cloud_alm_mcp.models import (
    TestActionCreateInput,
    TestActivityCreateInput,
    TestCaseCreateInput,
    TestCaseUpdateInput,
)
from cloud_alm_mcp.tools._payloads import collection, deleted, dump


def _query(filter, select, orderby, top, skip) -> Optional[ODataQuery]:
    return ODataQuery.from_params(
        filter=filter, select=select, orderby=orderby, top=top, skip=skip
    )


async def list_testcases(
    clients: ApiClients,
    *,
    filter: Optional[str] = None,
    select: Optional[str] = None,
    orderby: Optional[str] = None,
    top: Optional[int] = None,
    skip: Optional[int] = None,
) -> Dict[str, Any]:
    """List manual test cases with OData filtering."""
    query = _query(filter, select, orderby, top, skip)
    return collection(await clients.testmanagement.list_testcases(query))


async def get_testcase(clients: ApiClients, uuid: str) -> Dict[str, Any]:
    """Get a manual test case by UUID."""
    return dump(await clients.testmanagement.get_testcase(uuid))


async def create_testcase(
    clients: ApiClients, data: TestCaseCreateInput
) -> Dict[str, Any]:
    """[EXPERIMENTAL] Create a manual test case."""
    created = await clients.testmanagement.create_testcase(data)
    return dump(created) if created is not None else {"created": True}


async def update_testcase(
    clients: ApiClients, uuid: str, data: TestCaseUpdateInput
) -> Dict[str, Any]:
    """[EXPERIMENTAL] Update a manual test case."""
    updated = await clients.testmanagement.update_testcase(uuid, data)
    return dump(updated) if updated is not None else {"updated": True, "uuid": uuid}


async def delete_testcase(clients: ApiClients, uuid: str) -> Dict[str, Any]:
    """[EXPERIMENTAL] Delete a manual test case by UUID."""
    await clients.testmanagement.delete_testcase(uuid)
    return deleted(uuid)


async def list_test_activities(
    clients: ApiClients,
    *,
    filter: Optional[str] = None,
    select: Optional[str] = None,
    orderby: Optional[str] = None,
    top: Optional[int] = None,
    skip: Optional[int] = None,
) -> Dict[str, Any]:
    """List test activities, e.g. filter "parent_ID eq '<testcase uuid>'"."""
    query = _query(filter, select, orderby, top, skip)
    return collection(await clients.testmanagement.list_activities(query))


async def create_test_activity(
    clients: ApiClients, data: TestActivityCreateInput
) -> Dict[str, Any]:
    """[EXPERIMENTAL] Create a test activity under a test case (parent_ID)."""
    created = await clients.testmanagement.create_activity(data)
    return dump(created) if created is not None else {"created": True}


async def list_test_actions(
    clients: ApiClients,
    *,
    filter: Optional[str] = None,
    select: Optional[str] = None,
    orderby: Optional[str] = None,
    top: Optional[int] = None,
    skip: Optional[int] = None,
) -> Dict[str, Any]:
    """List test actions with OData filtering."""
    query = _query(filter, select, orderby, top, skip)
    return collection(await clients.testmanagement.list_actions(query))


async def create_test_action(
    clients: ApiClients, data: TestActionCreateInput
) -> Dict[str, Any]:
    """[EXPERIMENTAL] Create a test action under an activity (parent_ID)."""
    created = await clients.testmanagement.create_action(data)
    return dump(created) if created is not None else {"created": True}
