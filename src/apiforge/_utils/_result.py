from dataclasses import dataclass, field
from logging import getLogger
from typing import Any, Generic, Optional, TypeVar, Union

import httpx
from pydantic import TypeAdapter, ValidationError

from ..models.errors import BodyReadError, DecodeError

T = TypeVar("T")

logger = getLogger("apiforge")


@dataclass(frozen=True)
class StatusCode:
    """Return only the numeric HTTP status."""


@dataclass(frozen=True)
class RawText:
    """Return the body decoded as text."""


@dataclass(frozen=True)
class RawBytes:
    """Return the body as bytes."""


@dataclass(frozen=True)
class DecodedJson(Generic[T]):
    """Validate the JSON body into ``type``."""

    type: Any
    _adapter: TypeAdapter = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "_adapter", TypeAdapter(self.type))

    def validate(self, content: bytes) -> T:
        return self._adapter.validate_json(content)


ResultKind = Union[StatusCode, RawText, RawBytes, DecodedJson[Any]]


def _describe(response: httpx.Response) -> str:
    try:
        return f"{response.request.method} {response.request.url}"
    except RuntimeError:
        # responses built by hooks may not be bound to a request
        return "<unbound response>"


async def _drain(response: httpx.Response) -> bytes:
    try:
        return await response.aread()
    except (httpx.HTTPError, httpx.StreamError) as e:
        raise BodyReadError(response.status_code, _describe(response), e) from e


async def decode_response(
    response: httpx.Response,
    kind: ResultKind,
    endpoint: Optional[str] = None,
) -> Any:
    """Turn a pipelined response into the value ``kind`` describes.

    The response is closed once decoding finishes, whatever the outcome.
    HTTP status alone never makes decoding fail.

    Raises:
        BodyReadError: The body could not be fully read.
        DecodeError: The body is not valid JSON for the expected type.
    """
    try:
        if isinstance(kind, StatusCode):
            return response.status_code
        content = await _drain(response)
        if isinstance(kind, RawBytes):
            return content
        if isinstance(kind, RawText):
            return response.text
        if isinstance(kind, DecodedJson):
            try:
                return kind.validate(content)
            except ValidationError as e:
                name = endpoint or _describe(response)
                logger.debug(f"Decode failed for {name}: {e.error_count()} error(s)")
                raise DecodeError(
                    name,
                    response.status_code,
                    content.decode(response.encoding or "utf-8", errors="replace"),
                    e,
                ) from e
        raise TypeError(f"Unsupported result kind: {type(kind).__name__}")
    finally:
        await response.aclose()
