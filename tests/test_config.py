"""設定と型のユニットテスト"""

import pytest
from pydantic import ValidationError

from k1s0_graphql_http import ErrorLocation, GraphQlErrorObject, GraphQlHttpConfig, GraphQlResponse


def test_config_defaults() -> None:
    config = GraphQlHttpConfig(endpoint_url="http://localhost:8080/graphql")
    assert config.timeout_seconds == 10.0
    assert config.default_headers() == {}


def test_config_default_headers() -> None:
    """api_key と bearer_token がヘッダーに反映されること。"""
    config = GraphQlHttpConfig(
        endpoint_url="http://localhost:8080/graphql",
        api_key="key",
        bearer_token="tok",
        headers={"X-Tenant-Id": "t1"},
    )
    assert config.default_headers() == {
        "X-Tenant-Id": "t1",
        "X-API-Key": "key",
        "Authorization": "Bearer tok",
    }


def test_config_rejects_non_positive_timeout() -> None:
    with pytest.raises(ValidationError):
        GraphQlHttpConfig(endpoint_url="http://localhost", timeout_seconds=0)


def test_config_requires_endpoint() -> None:
    with pytest.raises(ValidationError):
        GraphQlHttpConfig()  # type: ignore[call-arg]


def test_response_from_dict() -> None:
    response = GraphQlResponse.from_dict(
        {
            "data": {"user": None},
            "errors": [
                {
                    "message": "Not found",
                    "locations": [{"line": 1, "column": 5}],
                    "path": ["user"],
                    "extensions": {"code": 404},
                }
            ],
        }
    )
    assert response.has_errors is True
    assert response.has_data is True
    assert response.errors is not None
    error = response.errors[0]
    assert error.message == "Not found"
    assert error.locations == [ErrorLocation(line=1, column=5)]
    assert error.path == ["user"]
    assert error.code == 404


def test_response_missing_data() -> None:
    response = GraphQlResponse.from_dict({})
    assert response.has_data is False
    assert response.has_errors is False


def test_response_empty_errors() -> None:
    response = GraphQlResponse.from_dict({"data": {"name": "test"}, "errors": []})
    assert response.has_errors is False


def test_error_object_without_extensions() -> None:
    error = GraphQlErrorObject.from_dict({"message": "test error"})
    assert error.code is None
    assert error.locations is None
    assert error.path is None


def test_error_object_from_string() -> None:
    """マッピングでないエントリは文字列化してメッセージにすること。"""
    error = GraphQlErrorObject.from_dict("bare message")
    assert error.message == "bare message"
    assert error.extensions == {}
    assert error.code is None
