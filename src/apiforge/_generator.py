"""Turn endpoint declarations into async client methods.

Endpoints can be declared as data:

```python
Todos = define_api(
    "Todos",
    [
        EndpointDeclaration("todo", "GET", "/todos/{id}", params=("id",), result=Todo),
        EndpointDeclaration("delete_todo", "DELETE", "/todos/{id}", params=("id",), result=StatusCode),
    ],
)
```

or with decorators on stub methods, where the signature provides the
parameters and the annotations provide the body and result kinds:

```python
class Todos(BaseApi):
    @get("/todos/{id}")
    async def todo(self, id: int) -> Todo: ...

    @post("/todos")
    async def create_todo(self, request: Json[CreateTodo]) -> Todo: ...
```

Both forms build the same ``EndpointDescriptor`` and every generated method
runs through ``execute`` followed by ``decode_response``. Invalid
declarations raise ``DefinitionError`` while the class is being defined.
"""

import inspect
from dataclasses import dataclass
from typing import (
    Any,
    Awaitable,
    Callable,
    Iterable,
    Mapping,
    Optional,
    Sequence,
    TypeVar,
    get_args,
    get_origin,
    get_type_hints,
)

from httpx import URL

from ._client import Api, BaseApi
from ._pipeline import execute
from ._utils import (
    NO_BODY,
    Body,
    DecodedJson,
    EndpointDescriptor,
    Json,
    Multipart,
    MultipartForm,
    RawBytes,
    RawText,
    ResultKind,
    StatusCode,
    decode_response,
)
from ._utils._body import BODY_KINDS
from .models.errors import DefinitionError

F = TypeVar("F", bound=Callable[..., Awaitable[Any]])

ENDPOINT_ATTRIBUTE = "__endpoint__"

_RESULT_KINDS = (StatusCode, RawText, RawBytes, DecodedJson)


def as_result_kind(name: str, result: Any) -> ResultKind:
    """Map a result declaration (kind instance or type) to a ``ResultKind``."""
    if isinstance(result, _RESULT_KINDS):
        return result
    if result in (StatusCode, RawText, RawBytes):
        return result()
    if result is str:
        return RawText()
    if result is bytes:
        return RawBytes()
    if get_origin(result) is Json:
        return DecodedJson(get_args(result)[0])
    if (
        result is None
        or result is type(None)
        or result is DecodedJson
        or as_body_kind(result) is not None
    ):
        raise DefinitionError(name, f"unsupported result declaration {result!r}")
    return DecodedJson(result)


def as_body_kind(annotation: Any) -> Optional[type]:
    origin = get_origin(annotation) or annotation
    if isinstance(origin, type) and origin in BODY_KINDS:
        return origin
    return None


@dataclass(frozen=True)
class EndpointDeclaration:
    """One endpoint described as data.

    Attributes:
        name: Name of the generated method.
        method: HTTP verb.
        url: URL template; placeholders name entries of ``params``.
        params: Ordered parameter names. The body parameter, if any, comes first.
        body: ``Json``, ``Form`` or ``Multipart`` (``Json[T]`` is accepted too).
        body_param: Name of the parameter carrying the body.
        result: A ``ResultKind`` or a type: ``StatusCode``, ``str``, ``bytes``,
            or any type to validate the JSON body into.
        doc: Docstring of the generated method.
    """

    name: str
    method: str
    url: str
    params: Sequence[str] = ()
    body: Any = None
    body_param: Optional[str] = None
    result: Any = str
    doc: Optional[str] = None

    def describe(self) -> EndpointDescriptor:
        body_kind = None
        if self.body is not None:
            body_kind = as_body_kind(self.body)
            if body_kind is None:
                raise DefinitionError(self.name, f"unsupported body kind {self.body!r}")
        return EndpointDescriptor(
            name=self.name,
            method=self.method,
            url_template=self.url,
            params=tuple(self.params),
            body_kind=body_kind,
            body_param=self.body_param,
            result=as_result_kind(self.name, self.result),
        )


def _wrap_body(descriptor: EndpointDescriptor, arguments: Mapping[str, Any]) -> Body:
    if descriptor.body_param is None:
        return NO_BODY
    value = arguments[descriptor.body_param]
    kind = descriptor.body_kind
    if isinstance(value, kind):  # type: ignore[arg-type]
        return value
    if kind is Multipart:
        if not isinstance(value, MultipartForm):
            raise TypeError(
                f"{descriptor.name}() expects a MultipartForm for "
                f"'{descriptor.body_param}', got {type(value).__name__}"
            )
        return Multipart(value)
    return kind(value)  # type: ignore[misc]


def _build_url(descriptor: EndpointDescriptor, arguments: Mapping[str, Any]) -> URL:
    url = URL(descriptor.format_url(arguments))
    query = {
        name: arguments[name]
        for name in descriptor.query_params
        if arguments.get(name) is not None
    }
    if query:
        url = url.copy_merge_params(query)
    return url


async def call_endpoint(
    api: Api, descriptor: EndpointDescriptor, arguments: Mapping[str, Any]
) -> Any:
    """Execute ``descriptor`` with already-bound ``arguments`` and decode the result."""
    url = _build_url(descriptor, arguments)
    response = await execute(api, descriptor.method, url, _wrap_body(descriptor, arguments))
    return await decode_response(response, descriptor.result, endpoint=descriptor.name)


def _signature_for(descriptor: EndpointDescriptor) -> inspect.Signature:
    parameters = [inspect.Parameter("self", inspect.Parameter.POSITIONAL_OR_KEYWORD)]
    parameters.extend(
        inspect.Parameter(name, inspect.Parameter.POSITIONAL_OR_KEYWORD)
        for name in descriptor.params
    )
    return inspect.Signature(parameters)


def build_method(
    descriptor: EndpointDescriptor,
    signature: Optional[inspect.Signature] = None,
    doc: Optional[str] = None,
) -> Callable[..., Awaitable[Any]]:
    """Create the async method that runs ``descriptor``."""
    signature = signature or _signature_for(descriptor)
    # the leading parameter is the client itself
    call_signature = signature.replace(parameters=list(signature.parameters.values())[1:])

    async def method(self: Api, *args: Any, **kwargs: Any) -> Any:
        try:
            bound = call_signature.bind(*args, **kwargs)
        except TypeError as e:
            raise TypeError(f"{descriptor.name}(): {e}") from None
        bound.apply_defaults()
        return await call_endpoint(self, descriptor, bound.arguments)

    method.__name__ = descriptor.name
    method.__qualname__ = descriptor.name
    method.__doc__ = doc or f"{descriptor.method} {descriptor.url_template}"
    method.__signature__ = signature  # type: ignore[attr-defined]
    setattr(method, ENDPOINT_ATTRIBUTE, descriptor)
    return method


def compile_endpoint(declaration: EndpointDeclaration) -> Callable[..., Awaitable[Any]]:
    return build_method(declaration.describe(), doc=declaration.doc)


def _describe_stub(func: Callable[..., Any], method: str, url: str) -> EndpointDescriptor:
    name = func.__name__
    if not inspect.iscoroutinefunction(func):
        raise DefinitionError(name, "endpoints must be declared with 'async def'")

    try:
        hints = get_type_hints(func, include_extras=True)
    except Exception as e:
        raise DefinitionError(name, f"cannot resolve annotations: {e}") from e

    parameters = list(inspect.signature(func).parameters.values())
    if not parameters:
        raise DefinitionError(name, "endpoint methods must accept 'self'")

    body_param = None
    body_kind = None
    for parameter in parameters[1:]:
        if parameter.kind in (parameter.VAR_POSITIONAL, parameter.VAR_KEYWORD):
            raise DefinitionError(name, f"variadic parameter '{parameter.name}'")
        kind = as_body_kind(hints.get(parameter.name))
        if kind is None:
            continue
        if body_param is not None:
            raise DefinitionError(name, "only one body parameter is allowed")
        body_param, body_kind = parameter.name, kind

    if "return" not in hints:
        raise DefinitionError(name, "missing return annotation")

    return EndpointDescriptor(
        name=name,
        method=method,
        url_template=url,
        params=tuple(p.name for p in parameters[1:]),
        body_kind=body_kind,
        body_param=body_param,
        result=as_result_kind(name, hints["return"]),
    )


def endpoint(method: str, url: str) -> Callable[[F], F]:
    """Declare the decorated stub as an endpoint called with ``method`` on ``url``."""

    def decorator(func: F) -> F:
        descriptor = _describe_stub(func, method, url)
        generated = build_method(descriptor, inspect.signature(func), func.__doc__)
        generated.__module__ = func.__module__
        generated.__qualname__ = func.__qualname__
        generated.__annotations__ = dict(func.__annotations__)
        return generated  # type: ignore[return-value]

    return decorator


def get(url: str) -> Callable[[F], F]:
    return endpoint("GET", url)


def post(url: str) -> Callable[[F], F]:
    return endpoint("POST", url)


def put(url: str) -> Callable[[F], F]:
    return endpoint("PUT", url)


def patch(url: str) -> Callable[[F], F]:
    return endpoint("PATCH", url)


def delete(url: str) -> Callable[[F], F]:
    return endpoint("DELETE", url)


def head(url: str) -> Callable[[F], F]:
    return endpoint("HEAD", url)


def options(url: str) -> Callable[[F], F]:
    return endpoint("OPTIONS", url)


def bind_endpoints(cls: type, declarations: Iterable[EndpointDeclaration]) -> type:
    """Attach one generated method per declaration to ``cls``."""
    for declaration in declarations:
        if declaration.name in cls.__dict__:
            raise DefinitionError(
                declaration.name, f"'{cls.__name__}' already defines this attribute"
            )
        generated = compile_endpoint(declaration)
        generated.__module__ = cls.__module__
        generated.__qualname__ = f"{cls.__qualname__}.{declaration.name}"
        setattr(cls, declaration.name, generated)
    return cls


def define_api(
    name: str,
    declarations: Iterable[EndpointDeclaration] = (),
    *,
    base: type = BaseApi,
) -> type:
    """Create a client class named ``name``.

    Without declarations this is the bare client: a ``BaseApi`` subclass
    wrapping a default transport, ready to be extended with hooks.
    """
    if not issubclass(base, Api):
        raise TypeError(f"base must implement Api, got {base!r}")
    cls = type(name, (base,), {"__doc__": f"Client generated for {name}."})
    return bind_endpoints(cls, declarations)


def endpoints_of(cls: type) -> dict[str, EndpointDescriptor]:
    """Return the endpoint descriptors declared on ``cls`` and its bases."""
    found: dict[str, EndpointDescriptor] = {}
    for klass in reversed(cls.__mro__):
        for attr, value in vars(klass).items():
            descriptor = getattr(value, ENDPOINT_ATTRIBUTE, None)
            if isinstance(descriptor, EndpointDescriptor):
                found[attr] = descriptor
    return found
