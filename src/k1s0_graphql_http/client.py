"""GraphQL クライアントのエントリポイント"""

from __future__ import annotations

import inspect
from collections.abc import Awaitable, Callable, Sequence
from typing import Any

import structlog

from .exceptions import GraphQlClientError, GraphQlClientErrorCodes, GraphQlError
from .request import MultipartBody, build_request
from .transport import GraphQlTransport, TransportFactory
from .types import GraphQlResponse

logger = structlog.get_logger(__name__)

NO_DATA_MESSAGE = "no data returned"


class GraphQlClient:
    """トランスポートファクトリ経由で GraphQL クエリを実行するクライアント。

    ファクトリは呼び出しごとに 1 回呼ばれる。トランスポートの再利用は
    ファクトリ側の責務とする。
    """

    def __init__(self, transport_factory: TransportFactory) -> None:
        self._transport_factory = transport_factory

    async def _transport(self) -> GraphQlTransport:
        transport = self._transport_factory()
        if inspect.isawaitable(transport):
            transport = await transport
        return transport

    async def execute(self, query: str | Sequence[str], variables: Any = None) -> Any:
        """クエリを実行して data を返す。

        errors が空でなければ GraphQlError、data が無ければ
        GraphQlClientError(NO_DATA) を送出する。トランスポートの例外はそのまま伝播する。
        """
        request = build_request(query, variables)
        logger.debug(
            "graphql_request",
            multipart=isinstance(request.body, MultipartBody),
            files=len(request.body.files) if isinstance(request.body, MultipartBody) else 0,
        )

        transport = await self._transport()
        envelope = await transport.post("", request.body, headers=request.headers)

        response = GraphQlResponse.from_dict(envelope)
        if response.has_errors:
            err = GraphQlError.from_response(response)
            logger.warning("graphql_errors", codes=err.codes, count=len(err.errors))
            raise err
        if not response.has_data:
            logger.warning("graphql_no_data")
            raise GraphQlClientError(
                code=GraphQlClientErrorCodes.NO_DATA,
                message=NO_DATA_MESSAGE,
            )
        return response.data

    async def __call__(self, query: str | Sequence[str], variables: Any = None) -> Any:
        return await self.execute(query, variables)


def graphql_client(
    transport_factory: TransportFactory,
) -> Callable[..., Awaitable[Any]]:
    """transport_factory を使う再利用可能なクエリ関数を返す。"""
    return GraphQlClient(transport_factory).execute
