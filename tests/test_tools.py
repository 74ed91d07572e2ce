import json

import pytest
import respx
from cloud_alm_mcp.core.errors import ODataError
from cloud_alm_mcp.models import FeatureUpdateInput, HierarchyNodeCreateInput
from cloud_alm_mcp.tools.analytics import query_analytics_dataset
from cloud_alm_mcp.tools.documents import delete_document, list_document_types
from cloud_alm_mcp.tools.features import (
    delete_external_reference,
    get_feature,
    list_features,
    update_feature,
)
from cloud_alm_mcp.tools.logs import post_logs
from cloud_alm_mcp.tools.processhierarchy import (
    create_hierarchy_node,
    list_hierarchy_nodes,
)
from cloud_alm_mcp.tools.projects import list_projects
from cloud_alm_mcp.tools.tasks import create_task_comment, list_tasks
from httpx import Response

TOKEN_URL = "https://acme.authentication.eu10.hana.ondemand.com/oauth/token"
FEATURES = "https://acme.eu10.alm.cloud.sap/api/calm-features/v1"
SANDBOX = "https://sandbox.api.sap.com/SAPCALM"


def _mock_token():
    return respx.post(TOKEN_URL).mock(
        return_value=Response(200, json={"access_token": "tok", "expires_in": 3600})
    )


@pytest.mark.asyncio
@respx.mock
async def test_list_features_end_to_end(oauth_clients):
    _mock_token()
    route = respx.get(f"{FEATURES}/Features").mock(
        return_value=Response(
            200,
            json={
                "@odata.context": "$metadata#Features",
                "value": [
                    {
                        "uuid": "f1",
                        "displayId": "6-1",
                        "title": "Login",
                        "projectId": "abc",
                        "priorityCode": 20,
                        "unknownField": "ignored",
                    }
                ],
            },
        )
    )

    async with oauth_clients:
        result = await list_features(
            oauth_clients,
            filter="projectId eq 'abc'",
            orderby="modifiedAt desc",
            top=50,
        )

    request = route.calls[0].request
    assert str(request.url) == (
        f"{FEATURES}/Features"
        "?$filter=projectId%20eq%20%27abc%27&$orderby=modifiedAt%20desc&$top=50"
    )
    assert request.headers["Authorization"] == "Bearer tok"
    assert result == {
        "@odata.context": "$metadata#Features",
        "value": [
            {
                "uuid": "f1",
                "displayId": "6-1",
                "title": "Login",
                "projectId": "abc",
                "priorityCode": 20,
                "tags": [],
            }
        ],
    }


@pytest.mark.asyncio
@respx.mock
async def test_list_tools_without_params_send_no_query(sandbox_clients):
    features = respx.get(f"{SANDBOX}/calm-features/v1/Features").mock(
        return_value=Response(200, json={"value": []})
    )
    nodes = respx.get(f"{SANDBOX}/calm-processhierarchy/v1/HierarchyNodes").mock(
        return_value=Response(200, json={"value": []})
    )

    async with sandbox_clients:
        await list_features(sandbox_clients)
        await list_hierarchy_nodes(sandbox_clients)

    for route in (features, nodes):
        url = route.calls[0].request.url
        assert "$top" not in str(url)
        assert url.query == b""


@pytest.mark.asyncio
@respx.mock
async def test_get_feature_not_found_raises_odata_error(oauth_clients):
    _mock_token()
    respx.get(f"{FEATURES}/Features/abc-123").mock(
        return_value=Response(
            404, json={"error": {"code": "404", "message": "not found"}}
        )
    )

    async with oauth_clients:
        with pytest.raises(ODataError) as exc:
            await get_feature(oauth_clients, "abc-123")

    assert exc.value.to_dict()["code"] == "404"


@pytest.mark.asyncio
@respx.mock
async def test_get_feature_with_expand_returns_raw(sandbox_clients):
    route = respx.get(f"{SANDBOX}/calm-features/v1/Features/f1").mock(
        return_value=Response(
            200, json={"uuid": "f1", "toExternalReferences": [{"id": "r1"}]}
        )
    )

    async with sandbox_clients:
        result = await get_feature(
            sandbox_clients, "f1", expand="toExternalReferences, toStatus"
        )

    assert route.calls[0].request.url.query == (
        b"$expand=toExternalReferences,toStatus"
    )
    assert result["toExternalReferences"] == [{"id": "r1"}]


@pytest.mark.asyncio
@respx.mock
async def test_update_feature_sends_only_given_fields(sandbox_clients):
    route = respx.patch(f"{SANDBOX}/calm-features/v1/Features/f1").mock(
        return_value=Response(204)
    )

    async with sandbox_clients:
        result = await update_feature(
            sandbox_clients, "f1", FeatureUpdateInput(status_code="IN_PROGRESS")
        )

    assert json.loads(route.calls[0].request.content) == {
        "statusCode": "IN_PROGRESS"
    }
    assert result == {"updated": True, "uuid": "f1"}


@pytest.mark.asyncio
@respx.mock
async def test_delete_tools_report_deleted_key(sandbox_clients):
    respx.delete(f"{SANDBOX}/calm-documents/v1/Documents/d1").mock(
        return_value=Response(204)
    )
    respx.delete(f"{SANDBOX}/calm-features/v1/ExternalReferences/r1/f1").mock(
        return_value=Response(204)
    )

    async with sandbox_clients:
        doc = await delete_document(sandbox_clients, "d1")
        ref = await delete_external_reference(sandbox_clients, "r1", "f1")

    assert doc == {"deleted": True, "uuid": "d1"}
    assert ref == {"deleted": True, "uuid": "r1", "parent_uuid": "f1"}


@pytest.mark.asyncio
@respx.mock
async def test_list_document_types(sandbox_clients):
    respx.get(f"{SANDBOX}/calm-documents/v1/DocumentTypes").mock(
        return_value=Response(
            200, json={"value": [{"code": "SPEC", "name": "Specification"}]}
        )
    )

    async with sandbox_clients:
        result = await list_document_types(sandbox_clients)

    assert result == {"value": [{"code": "SPEC", "name": "Specification"}]}


@pytest.mark.asyncio
@respx.mock
async def test_list_tasks_wraps_array(sandbox_clients):
    route = respx.get(f"{SANDBOX}/calm-tasks/v1/tasks").mock(
        return_value=Response(
            200,
            json=[
                {"id": "t1", "title": "A", "status": "OPEN"},
                {"id": "t2", "title": "B", "status": "DONE"},
            ],
        )
    )

    async with sandbox_clients:
        result = await list_tasks(
            sandbox_clients, "p1", limit=5000, tags="urgent, backend,"
        )

    params = route.calls[0].request.url.params
    assert params.get_list("tags") == ["urgent", "backend"]
    assert params["limit"] == "1000"
    assert params["projectId"] == "p1"
    assert result["count"] == 2
    assert result["items"][1] == {"id": "t2", "title": "B", "status": "DONE"}


@pytest.mark.asyncio
async def test_list_tasks_rejects_negative_offset(sandbox_clients):
    with pytest.raises(ValueError):
        await list_tasks(sandbox_clients, "p1", offset=-1)


@pytest.mark.asyncio
async def test_blank_comment_rejected(sandbox_clients):
    with pytest.raises(ValueError):
        await create_task_comment(sandbox_clients, "t1", "   ")


@pytest.mark.asyncio
@respx.mock
async def test_list_projects(sandbox_clients):
    respx.get(f"{SANDBOX}/calm-projects/v1/projects").mock(
        return_value=Response(200, json=[{"id": "p1", "name": "Alpha", "type": "X"}])
    )

    async with sandbox_clients:
        result = await list_projects(sandbox_clients)

    assert result == {"count": 1, "items": [{"id": "p1", "name": "Alpha", "type": "X"}]}


@pytest.mark.asyncio
@respx.mock
async def test_create_hierarchy_node(sandbox_clients):
    route = respx.post(f"{SANDBOX}/calm-processhierarchy/v1/HierarchyNodes").mock(
        return_value=Response(201, json={"uuid": "n1", "title": "Order to Cash"})
    )

    async with sandbox_clients:
        result = await create_hierarchy_node(
            sandbox_clients,
            HierarchyNodeCreateInput(title="Order to Cash", parent_node_uuid="root"),
        )

    assert json.loads(route.calls[0].request.content) == {
        "title": "Order to Cash",
        "parentNodeUuid": "root",
    }
    assert result == {"uuid": "n1", "title": "Order to Cash"}


@pytest.mark.asyncio
@respx.mock
async def test_query_analytics_dataset(sandbox_clients):
    route = respx.get(
        f"{SANDBOX}/calm-analytics/v1/odata/v4/analytics/DataSet('SAP.Tasks')"
    ).mock(return_value=Response(200, json={"value": []}))

    async with sandbox_clients:
        result = await query_analytics_dataset(
            sandbox_clients, "SAP.Tasks", filter="status eq 'OPEN'", top=10
        )

    assert result == {"value": []}
    assert route.calls[0].request.url.query == (
        b"$filter=status%20eq%20%27OPEN%27&$top=10"
    )


@pytest.mark.asyncio
async def test_query_analytics_dataset_requires_provider(sandbox_clients):
    with pytest.raises(ValueError):
        await query_analytics_dataset(sandbox_clients, " ")


@pytest.mark.asyncio
@respx.mock
async def test_post_logs_without_response_body(sandbox_clients):
    respx.post(f"{SANDBOX}/calm-logs/v1/logs").mock(return_value=Response(204))

    async with sandbox_clients:
        result = await post_logs(
            sandbox_clients, "custom", "svc", {"resourceLogs": []}, tag="nightly"
        )

    assert result == {"accepted": True}
