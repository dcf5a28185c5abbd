"""HttpxTransport のユニットテスト（respx モック）"""

import json

import httpx
import pytest
import respx

from k1s0_graphql_http import (
    GraphQlClientError,
    GraphQlClientErrorCodes,
    GraphQlError,
    GraphQlHttpConfig,
    HttpxTransport,
    InMemoryTransport,
    Upload,
    graphql_client,
    http_transport_factory,
)

ENDPOINT = "http://graphql-server:8080/graphql"


def make_config(**kwargs) -> GraphQlHttpConfig:
    return GraphQlHttpConfig(endpoint_url=ENDPOINT, **kwargs)


@respx.mock
async def test_json_query_success() -> None:
    """JSON リクエストで data が返ること。"""
    route = respx.post(ENDPOINT).mock(
        return_value=httpx.Response(200, json={"data": {"me": {"id": 1}}})
    )
    query = graphql_client(http_transport_factory(make_config()))

    result = await query("query { me { id } }", {"id": "1"})

    assert result == {"me": {"id": 1}}
    request = route.calls.last.request
    assert request.headers["content-type"] == "application/json"
    assert request.headers["accept"] == "application/json"
    assert json.loads(request.read()) == {"query": "query { me { id } }", "variables": {"id": "1"}}


@respx.mock
async def test_graphql_errors_raise_graphql_error() -> None:
    """errors を含むレスポンスで GraphQlError が発生すること。"""
    respx.post(ENDPOINT).mock(
        return_value=httpx.Response(
            200,
            json={"errors": [{"message": "unauthorized", "extensions": {"code": 401}}]},
        )
    )
    query = graphql_client(http_transport_factory(make_config()))
    with pytest.raises(GraphQlError) as exc_info:
        await query("query { me }")
    assert exc_info.value.codes == [401]


@respx.mock
async def test_multipart_upload() -> None:
    """ファイルを含む変数で multipart/form-data が送られること。"""
    route = respx.post(ENDPOINT).mock(
        return_value=httpx.Response(200, json={"data": {"upload": "ok"}})
    )
    query = graphql_client(http_transport_factory(make_config()))
    upload = Upload(content=b"file-content", filename="report.csv", content_type="text/csv")

    result = await query("mutation ($file: Upload!) { upload(file: $file) }", {"file": upload})

    assert result == {"upload": "ok"}
    request = route.calls.last.request
    assert request.headers["content-type"].startswith("multipart/form-data; boundary=")
    content = request.read()
    assert b'name="operations"' in content
    assert b'name="map"' in content
    assert b'{"0": ["variables.file"]}' in content
    assert b'name="0"; filename="report.csv"' in content
    assert b"file-content" in content


@respx.mock
async def test_api_key_and_bearer_headers() -> None:
    """設定のヘッダーが付与されること。"""
    route = respx.post(ENDPOINT).mock(return_value=httpx.Response(200, json={"data": {}}))
    transport = HttpxTransport(make_config(api_key="test-key", bearer_token="token"))
    await transport.post("", "{}", headers={"Accept": "application/json"})
    request = route.calls.last.request
    assert request.headers["x-api-key"] == "test-key"
    assert request.headers["authorization"] == "Bearer token"


@respx.mock
async def test_path_is_appended_to_endpoint() -> None:
    route = respx.post(f"{ENDPOINT}/admin").mock(return_value=httpx.Response(200, json={"data": {}}))
    transport = HttpxTransport(make_config())
    await transport.post("/admin", "{}", headers={})
    assert route.called


@respx.mock
async def test_http_error() -> None:
    """HTTP 500 で GraphQlClientError(HTTP_ERROR) になること。"""
    respx.post(ENDPOINT).mock(return_value=httpx.Response(500, text="Internal Server Error"))
    transport = HttpxTransport(make_config())
    with pytest.raises(GraphQlClientError) as exc_info:
        await transport.post("", "{}", headers={})
    assert exc_info.value.code == GraphQlClientErrorCodes.HTTP_ERROR


@respx.mock
async def test_invalid_json_response() -> None:
    respx.post(ENDPOINT).mock(return_value=httpx.Response(200, text="<html></html>"))
    transport = HttpxTransport(make_config())
    with pytest.raises(GraphQlClientError) as exc_info:
        await transport.post("", "{}", headers={})
    assert exc_info.value.code == GraphQlClientErrorCodes.INVALID_RESPONSE


@respx.mock
async def test_non_object_json_response() -> None:
    respx.post(ENDPOINT).mock(return_value=httpx.Response(200, json=[1, 2]))
    transport = HttpxTransport(make_config())
    with pytest.raises(GraphQlClientError) as exc_info:
        await transport.post("", "{}", headers={})
    assert exc_info.value.code == GraphQlClientErrorCodes.INVALID_RESPONSE


async def test_network_error_propagates() -> None:
    """ネットワークエラーが httpx の例外のまま伝播すること。"""
    with respx.mock:
        respx.post(ENDPOINT).mock(side_effect=httpx.ConnectError("Connection refused"))
        query = graphql_client(http_transport_factory(make_config()))
        with pytest.raises(httpx.ConnectError):
            await query("query { me }")


async def test_in_memory_transport_without_response() -> None:
    transport = InMemoryTransport()
    with pytest.raises(GraphQlClientError) as exc_info:
        await transport.post("", "{}", headers={})
    assert exc_info.value.code == GraphQlClientErrorCodes.INVALID_RESPONSE
