from __future__ import annotations

from typing import Optional

from ..core.client import ODataClient
from ..core.odata import ODataCollection, ODataQuery
from ..core.resources import EntitySet
from ..models import (
    TestAction,
    TestActionCreateInput,
    TestActivity,
    TestActivityCreateInput,
    TestCase,
    TestCaseCreateInput,
    TestCaseUpdateInput,
)


class TestManagementClient:
    """
    Manual test cases (calm-testmanagement/v1).

    Activities belong to a test case and actions belong to an activity; both
    link to their parent through the ``parent_ID`` property.
    """

    __test__ = False

    def __init__(self, client: ODataClient):
        self.client = client
        self.testcases: EntitySet[TestCase] = EntitySet(
            client, "/ManualTestCases", TestCase
        )
        self.activities: EntitySet[TestActivity] = EntitySet(
            client, "/Activities", TestActivity
        )
        self.actions: EntitySet[TestAction] = EntitySet(client, "/Actions", TestAction)

    async def list_testcases(
        self, query: Optional[ODataQuery] = None
    ) -> ODataCollection[TestCase]:
        return await self.testcases.list(query)

    async def get_testcase(self, uuid: str) -> TestCase:
        return await self.testcases.get(uuid)

    async def create_testcase(self, body: TestCaseCreateInput) -> TestCase:
        return await self.testcases.create(body)

    async def update_testcase(self, uuid: str, body: TestCaseUpdateInput) -> TestCase:
        return await self.testcases.update(uuid, body)

    async def delete_testcase(self, uuid: str) -> None:
        await self.testcases.delete(uuid)

    async def list_activities(
        self, query: Optional[ODataQuery] = None
    ) -> ODataCollection[TestActivity]:
        return await self.activities.list(query)

    async def create_activity(self, body: TestActivityCreateInput) -> TestActivity:
        return await self.activities.create(body)

    async def list_actions(
        self, query: Optional[ODataQuery] = None
    ) -> ODataCollection[TestAction]:
        return await self.actions.list(query)

    async def create_action(self, body: TestActionCreateInput) -> TestAction:
        return await self.actions.create(body)

    def __repr__(self) -> str:
        return f"TestManagementClient(base_url={self.client.base_url!r})"
