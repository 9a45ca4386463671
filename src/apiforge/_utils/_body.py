from dataclasses import dataclass, field
from typing import Any, Generic, Mapping, TypeVar, Union

from pydantic_core import to_json, to_jsonable_python

T = TypeVar("T")


@dataclass(frozen=True)
class NoBody:
    """The request carries no payload."""


@dataclass(frozen=True)
class Json(Generic[T]):
    """Serialize ``payload`` to JSON and send it as ``application/json``.

    Used as an annotation (``request: Json[CreateTodo]``) it marks the body
    parameter of a declared endpoint.
    """

    payload: T

    def encode(self) -> bytes:
        return to_json(self.payload, by_alias=True)


@dataclass(frozen=True)
class Form(Generic[T]):
    """Send ``payload`` URL-encoded as ``application/x-www-form-urlencoded``."""

    payload: T

    def encode(self) -> dict[str, Any]:
        data = to_jsonable_python(self.payload, by_alias=True)
        if not isinstance(data, Mapping):
            raise TypeError(
                f"Form payload must serialize to a mapping, got {type(data).__name__}"
            )
        # unset optional fields are left out of the form
        return {key: value for key, value in data.items() if value is not None}


@dataclass(frozen=True)
class MultipartForm:
    """Pre-built multipart form.

    ``data`` holds plain fields, ``files`` follows the httpx ``files`` format
    (``{"name": (filename, content, content_type)}``).
    """

    data: dict[str, Any] = field(default_factory=dict)
    files: dict[str, Any] = field(default_factory=dict)

    def text(self, name: str, value: str) -> "MultipartForm":
        return MultipartForm(data={**self.data, name: value}, files=self.files)

    def file(
        self,
        name: str,
        content: bytes,
        *,
        filename: str | None = None,
        content_type: str | None = None,
    ) -> "MultipartForm":
        part = (filename or name, content, content_type or "application/octet-stream")
        return MultipartForm(data=self.data, files={**self.files, name: part})


@dataclass(frozen=True)
class Multipart:
    """Replace the request body with a pre-built multipart form."""

    form: MultipartForm


Body = Union[NoBody, Json[Any], Form[Any], Multipart]

NO_BODY = NoBody()

# Classes accepted as a declared body kind.
BODY_KINDS = (Json, Form, Multipart)
