"""graphql_http ライブラリの例外型定義"""

from __future__ import annotations

import traceback
from collections.abc import Mapping
from typing import Any

from .types import GraphQlErrorObject, GraphQlResponse

GRAPHQL_ERROR_NAME = "GraphQlError"
UNKNOWN_ERROR_MESSAGE = "unknown error"


class GraphQlError(Exception):
    """GraphQL レスポンスの errors 配列を正規化したエラー。

    判定は name 属性のタグで行う。クラス同一性はラップやシリアライズを
    跨ぐと失われるため isinstance は使わない。
    """

    def __init__(self, message: str = UNKNOWN_ERROR_MESSAGE) -> None:
        super().__init__(message)
        self.message = message
        self.codes: list[Any] = []
        self.errors: list[GraphQlErrorObject] = []
        self.stack = _capture_stack(message)

    @property
    def name(self) -> str:
        """判定用タグ。読み取り専用。"""
        return GRAPHQL_ERROR_NAME

    def __str__(self) -> str:
        return self.message

    @classmethod
    def from_response(
        cls, response: GraphQlResponse[Any] | Mapping[str, Any]
    ) -> GraphQlError:
        """レスポンスエンベロープから GraphQlError を生成する。

        errors が無い、または空の場合は "unknown error" と空リストを持つエラーを返す。
        コードは出現順に収集し、重複は除去しない。
        """
        if not isinstance(response, GraphQlResponse):
            response = GraphQlResponse.from_dict(response)
        err = cls(UNKNOWN_ERROR_MESSAGE)
        if response.errors is not None:
            err.errors = list(response.errors)
            if err.errors:
                err.message = err.errors[0].message
                err.args = (err.message,)
                err.codes = [e.code for e in err.errors if e.code]
        return err

    @staticmethod
    def from_error(err: BaseException | None) -> GraphQlError | None:
        """err が GraphQlError タグを持つ場合はそのまま返し、それ以外は None を返す。"""
        if getattr(err, "name", None) == GRAPHQL_ERROR_NAME:
            return err  # type: ignore[return-value]
        return None

    @staticmethod
    def has_error_code(err: BaseException | None, code: Any) -> bool:
        """err が GraphQlError であり codes に code を含むかどうか。"""
        gql_err = GraphQlError.from_error(err)
        if gql_err is None:
            return False
        return code in gql_err.codes


def _capture_stack(message: str) -> str:
    try:
        # 最後の 2 フレームは __init__ と _capture_stack 自身
        return "".join(traceback.format_stack()[:-2])
    except Exception:
        return _synthesize_stack(message)


def _synthesize_stack(message: str) -> str:
    """使い捨ての例外のトレースバックからスタック文字列を組み立てる。"""
    try:
        raise Exception(message)
    except Exception as e:
        frame = e.__traceback__.tb_frame  # type: ignore[union-attr]
        # 最後の 3 フレームは __init__、_capture_stack、_synthesize_stack
        frames = traceback.extract_stack(frame)[:-3]
        return "".join(traceback.format_list(frames) + traceback.format_exception_only(e))


class GraphQlClientError(Exception):
    """graphql_http ライブラリの GraphQL 以外のエラー。"""

    def __init__(
        self,
        code: str,
        message: str,
        cause: Exception | None = None,
    ) -> None:
        super().__init__(message)
        self.code = code
        if cause is not None:
            self.__cause__ = cause

    def __str__(self) -> str:
        return f"{self.code}: {super().__str__()}"


class GraphQlClientErrorCodes:
    """GraphQlClientError のエラーコード定数。"""

    NO_DATA: str = "NO_DATA"
    HTTP_ERROR: str = "HTTP_ERROR"
    INVALID_RESPONSE: str = "INVALID_RESPONSE"
    INVALID_VARIABLES: str = "INVALID_VARIABLES"
