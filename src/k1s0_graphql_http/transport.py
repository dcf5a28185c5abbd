"""GraphQL トランスポート実装"""

from __future__ import annotations

from collections.abc import Awaitable, Callable, Mapping
from dataclasses import dataclass
from typing import Any, Protocol

import httpx
import structlog

from .config import GraphQlHttpConfig
from .exceptions import GraphQlClientError, GraphQlClientErrorCodes
from .request import MultipartBody

logger = structlog.get_logger(__name__)


class GraphQlTransport(Protocol):
    """POST を実行してデコード済み JSON エンベロープを返すトランスポート。"""

    async def post(
        self,
        path: str,
        body: str | MultipartBody,
        headers: Mapping[str, str],
    ) -> Mapping[str, Any]: ...


TransportFactory = Callable[[], "GraphQlTransport | Awaitable[GraphQlTransport]"]


class HttpxTransport:
    """httpx を使った GraphQL HTTP トランスポート。"""

    def __init__(self, config: GraphQlHttpConfig) -> None:
        self._config = config
        self._headers = config.default_headers()

    def _make_client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(
            headers=self._headers,
            timeout=self._config.timeout_seconds,
        )

    def _url(self, path: str) -> str:
        if not path:
            return self._config.endpoint_url
        return f"{self._config.endpoint_url.rstrip('/')}/{path.lstrip('/')}"

    def _handle_error(self, resp: httpx.Response) -> None:
        if resp.status_code >= 400:
            logger.warning(
                "graphql_http_error",
                url=str(resp.request.url),
                status_code=resp.status_code,
            )
            raise GraphQlClientError(
                code=GraphQlClientErrorCodes.HTTP_ERROR,
                message=f"HTTP {resp.status_code}: {resp.text}",
            )

    async def post(
        self,
        path: str,
        body: str | MultipartBody,
        headers: Mapping[str, str],
    ) -> Mapping[str, Any]:
        """ボディを POST し、レスポンスの JSON オブジェクトを返す。"""
        async with self._make_client() as client:
            if isinstance(body, MultipartBody):
                resp = await client.post(
                    self._url(path),
                    data=body.fields,
                    files={k: f.to_httpx_file() for k, f in body.files.items()},
                    headers=dict(headers),
                )
            else:
                resp = await client.post(
                    self._url(path),
                    content=body,
                    headers=dict(headers),
                )
        self._handle_error(resp)
        try:
            data = resp.json()
        except ValueError as e:
            raise GraphQlClientError(
                code=GraphQlClientErrorCodes.INVALID_RESPONSE,
                message=f"Response is not valid JSON: {e}",
                cause=e,
            ) from e
        if not isinstance(data, dict):
            raise GraphQlClientError(
                code=GraphQlClientErrorCodes.INVALID_RESPONSE,
                message=f"Response is not a JSON object: {type(data).__name__}",
            )
        return data


def http_transport_factory(config: GraphQlHttpConfig) -> Callable[[], Awaitable[HttpxTransport]]:
    """HttpxTransport を返す非同期ファクトリを生成する。"""
    transport = HttpxTransport(config)

    async def factory() -> HttpxTransport:
        return transport

    return factory


@dataclass
class RecordedRequest:
    """InMemoryTransport が受け取った POST。"""

    path: str
    body: str | MultipartBody
    headers: dict[str, str]


class InMemoryTransport:
    """In-memory transport for testing.

    Queued envelopes are returned in order, one per POST.
    """

    def __init__(self, *responses: Mapping[str, Any]) -> None:
        self._responses: list[Mapping[str, Any]] = list(responses)
        self.requests: list[RecordedRequest] = []

    def add_response(self, response: Mapping[str, Any]) -> None:
        self._responses.append(response)

    async def post(
        self,
        path: str,
        body: str | MultipartBody,
        headers: Mapping[str, str],
    ) -> Mapping[str, Any]:
        self.requests.append(RecordedRequest(path=path, body=body, headers=dict(headers)))
        if not self._responses:
            raise GraphQlClientError(
                code=GraphQlClientErrorCodes.INVALID_RESPONSE,
                message="No response queued",
            )
        return self._responses.pop(0)
