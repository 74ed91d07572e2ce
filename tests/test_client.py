import json
import logging

import httpx
import pytest
import pytest_asyncio
import respx
from cloud_alm_mcp.core.auth import CredentialManager
from cloud_alm_mcp.core.client import ODataClient
from cloud_alm_mcp.core.errors import (
    CalmHTTPError,
    CalmParseError,
    CalmTransportError,
    ODataError,
)
from cloud_alm_mcp.core.odata import ODataQuery, SortOrder
from cloud_alm_mcp.models import Feature, FeatureUpdateInput
from httpx import Response

TOKEN_URL = "https://acme.authentication.eu10.hana.ondemand.com/oauth/token"
BASE = "https://x"


def _mock_token(token="tok-1"):
    return respx.post(TOKEN_URL).mock(
        return_value=Response(200, json={"access_token": token, "expires_in": 3600})
    )


@pytest_asyncio.fixture
async def client(oauth_config, clock):
    async with httpx.AsyncClient() as http:
        credentials = CredentialManager(oauth_config, clock=clock, http=http)
        yield ODataClient(base_url=BASE + "/", credentials=credentials, http=http)


@pytest.mark.asyncio
@respx.mock
async def test_get_by_key_sends_bearer_and_decodes(client):
    _mock_token()
    route = respx.get(f"{BASE}/Features/abc-123").mock(
        return_value=Response(200, json={"uuid": "abc-123", "title": "Login"})
    )

    async with client:
        feature = await client.get_entity_by_key("/Features", "abc-123", model=Feature)

    assert feature.title == "Login"
    sent = route.calls[0].request.headers
    assert sent["Authorization"] == "Bearer tok-1"
    assert sent["Accept"] == "application/json"


@pytest.mark.asyncio
@respx.mock
async def test_not_found_envelope_becomes_odata_error(client):
    _mock_token()
    respx.get(f"{BASE}/Features/abc-123").mock(
        return_value=Response(
            404, json={"error": {"code": "404", "message": "not found"}}
        )
    )

    async with client:
        with pytest.raises(ODataError) as exc:
            await client.get_entity_by_key("/Features", "abc-123", model=Feature)

    assert exc.value.status_code == 404
    assert exc.value.code == "404"
    assert exc.value.message == "not found"
    assert exc.value.is_not_found


@pytest.mark.asyncio
@respx.mock
async def test_collection_url_carries_encoded_query(client):
    _mock_token()
    route = respx.get(f"{BASE}/Features").mock(
        return_value=Response(
            200,
            json={
                "@odata.count": 1,
                "value": [{"uuid": "f1", "title": "A", "type": "standard"}],
            },
        )
    )
    query = (
        ODataQuery()
        .filter("projectId eq 'abc'")
        .orderby("modifiedAt", SortOrder.DESC)
        .top(50)
    )

    async with client:
        result = await client.get_collection("/Features", query, model=Feature)

    assert str(route.calls[0].request.url) == (
        f"{BASE}/Features"
        "?$filter=projectId%20eq%20%27abc%27&$orderby=modifiedAt%20desc&$top=50"
    )
    assert result.count == 1
    assert result.value[0].feature_type == "standard"


@pytest.mark.asyncio
@respx.mock
async def test_raw_collection_without_model(client):
    _mock_token()
    respx.get(f"{BASE}/Providers").mock(
        return_value=Response(200, json={"value": [{"name": "SAP.Alerts"}]})
    )

    async with client:
        result = await client.get_collection_raw("/Providers")

    assert result == {"value": [{"name": "SAP.Alerts"}]}


@pytest.mark.asyncio
@respx.mock
async def test_delete_accepts_no_content(client):
    _mock_token()
    route = respx.delete(f"{BASE}/Features/abc").mock(return_value=Response(204))

    async with client:
        result = await client.delete_entity_by_key("/Features", "abc")

    assert result is None
    assert route.called


@pytest.mark.asyncio
@respx.mock
async def test_patch_omits_unset_fields(client):
    _mock_token()
    route = respx.patch(f"{BASE}/Features/abc").mock(
        return_value=Response(200, json={"uuid": "abc", "title": "New"})
    )

    async with client:
        updated = await client.update_entity_by_key(
            "/Features", "abc", FeatureUpdateInput(title="New"), model=Feature
        )

    request = route.calls[0].request
    assert json.loads(request.content) == {"title": "New"}
    assert request.headers["Content-Type"] == "application/json"
    assert updated.title == "New"


@pytest.mark.asyncio
@respx.mock
async def test_create_with_empty_body_returns_none(client):
    _mock_token()
    respx.post(f"{BASE}/Features").mock(return_value=Response(201, text=""))

    async with client:
        result = await client.create_entity(
            "/Features", {"title": "T", "projectId": "p", "description": None}
        )

    assert result is None


@pytest.mark.asyncio
@respx.mock
async def test_success_with_garbage_body_raises_parse_error(client):
    _mock_token()
    respx.get(f"{BASE}/Features/abc").mock(
        return_value=Response(200, text="<html>maintenance</html>")
    )

    async with client:
        with pytest.raises(CalmParseError) as exc:
            await client.get_entity_by_key("/Features", "abc", model=Feature)

    assert exc.value.excerpt == "<html>maintenance</html>"


@pytest.mark.asyncio
@respx.mock
async def test_plain_http_error_keeps_body(client):
    _mock_token()
    respx.get(f"{BASE}/Features").mock(return_value=Response(503, text="busy"))

    async with client:
        with pytest.raises(CalmHTTPError) as exc:
            await client.get_collection("/Features")

    assert type(exc.value) is CalmHTTPError
    assert exc.value.body == "busy"
    assert exc.value.method == "GET"


@pytest.mark.asyncio
@respx.mock
async def test_network_failure_raises_transport_error(client):
    _mock_token()
    respx.get(f"{BASE}/Features").mock(side_effect=httpx.ReadTimeout("slow"))

    async with client:
        with pytest.raises(CalmTransportError) as exc:
            await client.get_collection("/Features")

    assert exc.value.url == f"{BASE}/Features"


@pytest.mark.asyncio
@respx.mock
async def test_sandbox_uses_api_key_header(sandbox_config):
    route = respx.get(f"{BASE}/Documents").mock(
        return_value=Response(200, json={"value": []})
    )
    credentials = CredentialManager(sandbox_config)

    async with ODataClient(base_url=BASE, credentials=credentials) as client:
        await client.get_collection("/Documents")
    await credentials.aclose()

    sent = route.calls[0].request.headers
    assert sent["APIKey"] == "sandbox-key"
    assert "Authorization" not in sent


@pytest.mark.asyncio
@respx.mock
async def test_rest_params_drop_none_and_render_bools(client):
    _mock_token()
    route = respx.get(f"{BASE}/tasks").mock(return_value=Response(200, json=[]))

    async with client:
        await client.get_json(
            "/tasks", params={"projectId": "p1", "limit": None, "dev": True}
        )

    assert route.calls[0].request.url.params.get("projectId") == "p1"
    assert route.calls[0].request.url.params.get("dev") == "true"
    assert "limit" not in route.calls[0].request.url.params


@pytest.mark.asyncio
@respx.mock
async def test_request_is_logged_at_debug(client, caplog):
    _mock_token()
    respx.get(f"{BASE}/Features").mock(return_value=Response(200, json={"value": []}))

    async with client:
        with caplog.at_level(logging.DEBUG, logger="cloud_alm_mcp.client"):
            await client.get_collection("/Features")

    record = next(r for r in caplog.records if r.getMessage() == "odata.request")
    assert record.status == 200
    assert record.method == "GET"
    assert record.duration_ms >= 0


@pytest.mark.asyncio
async def test_empty_base_url_rejected(oauth_config):
    async with CredentialManager(oauth_config) as credentials:
        with pytest.raises(ValueError):
            ODataClient(base_url="", credentials=credentials)
