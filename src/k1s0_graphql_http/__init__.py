"""k1s0 GraphQL HTTP client library."""

from .client import GraphQlClient, graphql_client
from .config import GraphQlHttpConfig
from .exceptions import GraphQlClientError, GraphQlClientErrorCodes, GraphQlError
from .request import (
    ExtractedFiles,
    GraphQlRequest,
    MultipartBody,
    build_request,
    extract_files,
    join_query,
)
from .transport import (
    GraphQlTransport,
    HttpxTransport,
    InMemoryTransport,
    RecordedRequest,
    http_transport_factory,
)
from .types import ErrorLocation, GraphQlErrorObject, GraphQlResponse
from .upload import Upload, is_upload
from .walker import Visit, clone_tree, make_path, walk_object

__all__ = [
    "ErrorLocation",
    "ExtractedFiles",
    "GraphQlClient",
    "GraphQlClientError",
    "GraphQlClientErrorCodes",
    "GraphQlError",
    "GraphQlErrorObject",
    "GraphQlHttpConfig",
    "GraphQlRequest",
    "GraphQlResponse",
    "GraphQlTransport",
    "HttpxTransport",
    "InMemoryTransport",
    "MultipartBody",
    "RecordedRequest",
    "Upload",
    "Visit",
    "build_request",
    "clone_tree",
    "extract_files",
    "graphql_client",
    "http_transport_factory",
    "is_upload",
    "join_query",
    "make_path",
    "walk_object",
]
