"""Typed async HTTP API clients from declarative endpoint descriptions.

```python
from apiforge import BaseApi, Json, StatusCode, delete, get, post


class JsonPlaceholder(BaseApi):
    @get("/todos/{id}")
    async def todo(self, id: int) -> Todo: ...

    @post("/todos")
    async def create_todo(self, request: Json[CreateTodo]) -> Todo: ...

    @delete("/todos/{id}")
    async def delete_todo(self, id: int) -> StatusCode: ...


api = JsonPlaceholder.from_env(base_url="https://jsonplaceholder.typicode.com")
todo = await api.todo(1)
```
"""

from ._client import Api, BaseApi
from ._config import ClientConfig, create_client
from ._generator import (
    EndpointDeclaration,
    bind_endpoints,
    call_endpoint,
    compile_endpoint,
    define_api,
    delete,
    endpoint,
    endpoints_of,
    get,
    head,
    options,
    patch,
    post,
    put,
)
from ._pipeline import execute
from ._transport import RetryTransport
from ._utils import (
    NO_BODY,
    Body,
    DecodedJson,
    EndpointDescriptor,
    Form,
    Json,
    Multipart,
    MultipartForm,
    NoBody,
    RawBytes,
    RawText,
    RequestDraft,
    ResultKind,
    StatusCode,
    decode_response,
    setup_logging,
)
from .models.errors import (
    ApiError,
    BodyReadError,
    DecodeError,
    DefinitionError,
    PreRequestError,
    TransportError,
)
from .version import __version__

__all__ = [
    "Api",
    "ApiError",
    "BaseApi",
    "Body",
    "BodyReadError",
    "ClientConfig",
    "DecodeError",
    "DecodedJson",
    "DefinitionError",
    "EndpointDeclaration",
    "EndpointDescriptor",
    "Form",
    "Json",
    "Multipart",
    "MultipartForm",
    "NO_BODY",
    "NoBody",
    "PreRequestError",
    "RawBytes",
    "RawText",
    "RequestDraft",
    "ResultKind",
    "RetryTransport",
    "StatusCode",
    "TransportError",
    "__version__",
    "bind_endpoints",
    "call_endpoint",
    "compile_endpoint",
    "create_client",
    "decode_response",
    "define_api",
    "delete",
    "endpoint",
    "endpoints_of",
    "execute",
    "get",
    "head",
    "options",
    "patch",
    "post",
    "put",
    "setup_logging",
]
