"""GraphQL multipart アップロード用ファイル値"""

from __future__ import annotations

import io
import os
from dataclasses import dataclass
from typing import IO, Any

DEFAULT_FILENAME = "blob"
DEFAULT_CONTENT_TYPE = "application/octet-stream"


@dataclass
class Upload:
    """変数ツリーに埋め込むファイル値。

    content にはバイト列またはバイナリストリームを渡す。
    ツリー走査では常に葉として扱われ、中身は辿らない。
    変数に直接置かれた bytes/bytearray も Upload として送信される。
    """

    content: bytes | IO[bytes]
    filename: str | None = None
    content_type: str = DEFAULT_CONTENT_TYPE

    @classmethod
    def from_stream(cls, stream: IO[bytes], content_type: str = DEFAULT_CONTENT_TYPE) -> Upload:
        """オープン済みストリームから Upload を生成する。ファイル名はストリームの name から取る。"""
        name = getattr(stream, "name", None)
        filename = os.path.basename(name) if isinstance(name, str) else None
        return cls(content=stream, filename=filename, content_type=content_type)

    def to_httpx_file(self) -> tuple[str, bytes | IO[bytes], str]:
        """httpx の files 引数に渡せるタプルを返す。"""
        return (self.filename or DEFAULT_FILENAME, self.content, self.content_type)


def is_text_stream(value: Any) -> bool:
    return isinstance(value, io.TextIOBase)


def is_upload(value: Any) -> bool:
    """value がファイル値 (Upload、バイナリストリーム、bytes/bytearray) かどうか。

    テキストストリームはファイル値として扱わない。
    """
    if is_text_stream(value):
        return False
    return isinstance(value, (Upload, io.IOBase, bytes, bytearray))


def as_upload(value: Any) -> Upload:
    if isinstance(value, Upload):
        return value
    if isinstance(value, (bytes, bytearray)):
        return Upload(content=bytes(value))
    return Upload.from_stream(value)
