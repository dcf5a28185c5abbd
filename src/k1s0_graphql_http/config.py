"""GraphQL HTTP トランスポート設定（pydantic BaseModel）"""

from __future__ import annotations

from pydantic import BaseModel, Field


class GraphQlHttpConfig(BaseModel):
    """httpx トランスポートの接続設定。"""

    endpoint_url: str
    api_key: str = ""
    bearer_token: str = ""
    timeout_seconds: float = Field(default=10.0, gt=0)
    headers: dict[str, str] = Field(default_factory=dict)

    def default_headers(self) -> dict[str, str]:
        """全リクエストに付与する静的ヘッダーを返す。"""
        headers = dict(self.headers)
        if self.api_key:
            headers["X-API-Key"] = self.api_key
        if self.bearer_token:
            headers["Authorization"] = f"Bearer {self.bearer_token}"
        return headers
