"""変数ツリーの再帰走査"""

from __future__ import annotations

from collections.abc import Callable
from enum import Enum
from typing import Any

from .upload import is_upload


class Visit(Enum):
    """ビジターの戻り値。DISCARD を返した葉は親コンテナ上で None に置き換えられる。"""

    KEEP = "KEEP"
    DISCARD = "DISCARD"


Visitor = Callable[[Any, str], "Visit | bool"]


def make_path(path: str, key: str | int) -> str:
    """親パスとキーをドット区切りで連結する。空要素は含めない。"""
    return ".".join(str(p) for p in (path, key) if p != "")


def _discarded(result: Visit | bool) -> bool:
    return result is Visit.DISCARD or result is False


def _walk(value: Any, visitor: Visitor, path: str) -> Visit | bool:
    if value is not None and not is_upload(value):
        if isinstance(value, list):
            for i, v in enumerate(value):
                if _discarded(_walk(v, visitor, make_path(path, i))):
                    value[i] = None
            return Visit.KEEP
        if isinstance(value, dict):
            for k in list(value):
                if _discarded(_walk(value[k], visitor, make_path(path, k))):
                    value[k] = None
            return Visit.KEEP
    return visitor(value, path)


def walk_object(value: Any, visitor: Visitor) -> None:
    """value を深さ優先で走査し、葉ごとに visitor(leaf, path) を呼ぶ。

    visitor が False または Visit.DISCARD を返した要素はリスト/辞書上で
    その場で None に置き換える。ルート自体が葉の場合はパス "" で一度だけ
    呼ばれ、置き換えは行わない。value が None の場合は何もしない。
    循環参照は検出しない。
    """
    if value is None:
        return
    _walk(value, visitor, "")


def clone_tree(value: Any) -> Any:
    """辞書とリストだけを複製したツリーを返す。タプルはリストに変換し、葉は共有する。"""
    if is_upload(value):
        return value
    if isinstance(value, dict):
        return {k: clone_tree(v) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [clone_tree(v) for v in value]
    return value
