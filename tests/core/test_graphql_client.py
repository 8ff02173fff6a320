import json

import httpx
import pytest
from httpx import Response

from linear_cli.core import graphql_client as client_module
from linear_cli.core.exceptions import (
    APIConnectionError,
    APIHTTPError,
    ConfigurationError,
    GraphQLResponseError,
    LinearAPIError,
)
from linear_cli.core.graphql_client import (
    GraphQLClient,
    get_graphql_client,
    get_nodes,
    get_root_field,
)

API_URL = "https://api.linear.app/graphql"


@pytest.mark.asyncio
async def test_execute_posts_query_and_variables(respx_mock, api_settings):
    """Test that execute sends {query, variables} with the API key header."""
    route = respx_mock.post(API_URL).mock(
        return_value=Response(200, json={"data": {"teams": {"nodes": []}}})
    )
    client = GraphQLClient()

    data = await client.execute("query($k: String!) { x }", {"k": "BLU"})

    assert data == {"teams": {"nodes": []}}
    request = route.calls.last.request
    assert request.headers["Authorization"] == "lin_api_test"
    assert request.headers["Content-Type"] == "application/json"
    assert json.loads(request.content) == {
        "query": "query($k: String!) { x }",
        "variables": {"k": "BLU"},
    }
    await client.close()


@pytest.mark.asyncio
async def test_execute_omits_missing_variables(respx_mock, api_settings):
    route = respx_mock.post(API_URL).mock(
        return_value=Response(200, json={"data": {"ok": True}})
    )
    client = GraphQLClient()

    await client.execute("query { ok }")

    assert json.loads(route.calls.last.request.content) == {"query": "query { ok }"}
    await client.close()


@pytest.mark.asyncio
async def test_execute_without_data_raises(respx_mock, api_settings):
    respx_mock.post(API_URL).mock(
        side_effect=[Response(200, json={}), Response(200, json={"data": None})]
    )
    client = GraphQLClient()

    for _ in range(2):
        with pytest.raises(LinearAPIError, match="Response contained no data"):
            await client.execute("query { ok }")
    await client.close()


@pytest.mark.asyncio
async def test_execute_returns_empty_data_object(respx_mock, api_settings):
    respx_mock.post(API_URL).mock(return_value=Response(200, json={"data": {}}))
    client = GraphQLClient()

    assert await client.execute("query { ok }") == {}
    await client.close()


@pytest.mark.asyncio
async def test_client_honours_proxy_environment(api_settings):
    client = GraphQLClient()

    assert client.client.trust_env is True
    await client.close()


@pytest.mark.asyncio
async def test_graphql_errors_raise(respx_mock, api_settings):
    errors = [{"message": "Entity not found", "path": ["issue"]}]
    respx_mock.post(API_URL).mock(
        return_value=Response(200, json={"data": None, "errors": errors})
    )
    client = GraphQLClient()

    with pytest.raises(GraphQLResponseError) as exc_info:
        await client.execute("query { issue }")

    assert exc_info.value.errors == errors
    assert str(exc_info.value).startswith("GraphQL errors:")
    assert "Entity not found" in str(exc_info.value)
    await client.close()


@pytest.mark.asyncio
async def test_http_error_raises(respx_mock, api_settings):
    respx_mock.post(API_URL).mock(return_value=Response(401, text="unauthorized"))
    client = GraphQLClient()

    with pytest.raises(APIHTTPError) as exc_info:
        await client.execute("query { ok }")

    assert exc_info.value.status_code == 401
    assert str(exc_info.value) == "HTTP 401: Unauthorized"
    await client.close()


@pytest.mark.asyncio
async def test_server_error_not_retried_by_default(respx_mock, api_settings):
    route = respx_mock.post(API_URL).mock(return_value=Response(503))
    client = GraphQLClient()

    with pytest.raises(APIHTTPError) as exc_info:
        await client.execute("query { ok }")

    assert exc_info.value.status_code == 503
    assert route.call_count == 1
    await client.close()


@pytest.mark.asyncio
async def test_server_error_retried_when_enabled(respx_mock, api_settings):
    route = respx_mock.post(API_URL)
    route.side_effect = [
        Response(502),
        Response(200, json={"data": {"ok": True}}),
    ]
    client = GraphQLClient(max_attempts=3)
    client.RETRY_MIN_WAIT = 0
    client.RETRY_MAX_WAIT = 0

    data = await client.execute("query { ok }")

    assert data == {"ok": True}
    assert route.call_count == 2
    await client.close()


@pytest.mark.asyncio
async def test_connect_error_raises(respx_mock, api_settings):
    respx_mock.post(API_URL).mock(side_effect=httpx.ConnectError("boom"))
    client = GraphQLClient()

    with pytest.raises(APIConnectionError):
        await client.execute("query { ok }")
    await client.close()


@pytest.mark.asyncio
async def test_invalid_json_raises(respx_mock, api_settings):
    respx_mock.post(API_URL).mock(return_value=Response(200, text="<html>oops"))
    client = GraphQLClient()

    with pytest.raises(LinearAPIError):
        await client.execute("query { ok }")
    await client.close()


@pytest.mark.asyncio
async def test_missing_api_key_raises(respx_mock, monkeypatch, api_settings):
    monkeypatch.setattr(api_settings, "LINEAR_API_KEY", None)
    client = GraphQLClient()

    with pytest.raises(ConfigurationError):
        await client.execute("query { ok }")
    await client.close()


@pytest.mark.asyncio
async def test_explicit_api_key_overrides_settings(respx_mock, api_settings):
    route = respx_mock.post(API_URL).mock(
        return_value=Response(200, json={"data": {}})
    )
    client = GraphQLClient(api_key="lin_api_other")

    await client.execute("query { ok }")

    assert route.calls.last.request.headers["Authorization"] == "lin_api_other"
    await client.close()


@pytest.mark.asyncio
async def test_singleton_reused(api_settings):
    client_module._graphql_client = None

    first = get_graphql_client()
    assert get_graphql_client() is first

    await first.close()
    client_module._graphql_client = None


class TestRootFieldHelpers:
    """测试从 data 中取根字段"""

    def test_get_root_field(self):
        assert get_root_field({"issueCreate": {"success": True}}, "issueCreate") == {
            "success": True
        }

    @pytest.mark.parametrize("data", [{}, {"issueCreate": None}])
    def test_get_root_field_missing(self, data):
        with pytest.raises(LinearAPIError, match="Response is missing field: issueCreate"):
            get_root_field(data, "issueCreate")

    def test_get_nodes(self):
        assert get_nodes({"teams": {"nodes": [{"id": "t1"}]}}, "teams") == [{"id": "t1"}]

    @pytest.mark.parametrize(
        "data",
        [{"teams": {}}, {"teams": {"nodes": None}}, {"teams": []}],
    )
    def test_get_nodes_without_list(self, data):
        with pytest.raises(LinearAPIError, match="teams.nodes"):
            get_nodes(data, "teams")
