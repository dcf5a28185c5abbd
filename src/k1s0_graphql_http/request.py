"""GraphQL HTTP リクエストの組み立て"""

from __future__ import annotations

import json
from collections.abc import Sequence
from dataclasses import dataclass, field
from typing import Any

from .exceptions import GraphQlClientError, GraphQlClientErrorCodes
from .upload import Upload, as_upload, is_text_stream, is_upload
from .walker import Visit, clone_tree, walk_object

JSON_CONTENT_TYPE = "application/json"


@dataclass
class ExtractedFiles:
    """ファイル抽出結果。variables はファイルを None に置き換えた複製。"""

    variables: Any
    file_map: dict[str, list[str]] = field(default_factory=dict)
    files: dict[str, Upload] = field(default_factory=dict)


@dataclass
class MultipartBody:
    """multipart/form-data のボディ。files は map のインデックス順に並ぶ。"""

    fields: dict[str, str]
    files: dict[str, Upload]


@dataclass
class GraphQlRequest:
    """トランスポートに渡す POST ボディとヘッダー。"""

    body: str | MultipartBody
    headers: dict[str, str]

    @property
    def is_multipart(self) -> bool:
        return isinstance(self.body, MultipartBody)


def join_query(query: str | Sequence[str]) -> str:
    """複数のクエリを改行で連結して 1 つのドキュメントにする。"""
    if isinstance(query, str):
        return query
    return "\n".join(query)


def _variables_path(path: str) -> str:
    return f"variables.{path}" if path else "variables"


def extract_files(variables: Any) -> ExtractedFiles:
    """変数ツリーからファイル値を取り出す。

    呼び出し元の variables は変更しない。ファイルは走査順に "0", "1", ... の
    インデックスを振り、map には "variables." を前置したパスを記録する。
    テキストストリームは GraphQlClientError(INVALID_VARIABLES) とする。
    """
    result = ExtractedFiles(variables=clone_tree(variables))

    def visit(value: Any, path: str) -> Visit:
        if is_text_stream(value):
            raise GraphQlClientError(
                code=GraphQlClientErrorCodes.INVALID_VARIABLES,
                message=f"Text stream at {_variables_path(path)}: open files in binary mode",
            )
        if not is_upload(value):
            return Visit.KEEP
        index = str(len(result.file_map))
        result.file_map[index] = [_variables_path(path)]
        result.files[index] = as_upload(value)
        return Visit.DISCARD

    walk_object(result.variables, visit)
    # ルートには親コンテナが無いため、ここで null にする
    if is_upload(result.variables):
        result.variables = None
    return result


def build_request(query: str | Sequence[str], variables: Any = None) -> GraphQlRequest:
    """クエリと変数から JSON または multipart のリクエストを組み立てる。"""
    query = join_query(query)
    headers: dict[str, str] = {"Accept": JSON_CONTENT_TYPE}

    extracted = extract_files(variables) if variables is not None else ExtractedFiles(variables=None)
    operations = json.dumps({"query": query, "variables": extracted.variables})

    if not extracted.file_map:
        headers["Content-Type"] = JSON_CONTENT_TYPE
        return GraphQlRequest(body=operations, headers=headers)

    body = MultipartBody(
        fields={
            "operations": operations,
            "map": json.dumps(extracted.file_map),
        },
        files=extracted.files,
    )
    return GraphQlRequest(body=body, headers=headers)
