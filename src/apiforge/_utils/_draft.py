import base64
from typing import Any, Mapping, Optional

from httpx import URL, AsyncClient, Headers, QueryParams, Request

from ._body import Body, Form, Json, Multipart, NoBody
from .constants import HEADER_AUTHORIZATION


def _text_parts(data: Mapping[str, Any]) -> list[tuple[str, tuple[None, str]]]:
    """Express plain form fields as multipart parts without a filename."""
    parts = []
    for name, value in data.items():
        values = value if isinstance(value, (list, tuple)) else [value]
        parts.extend((name, (None, str(item))) for item in values)
    return parts


class RequestDraft:
    """A request that has not been sent yet.

    The draft is what ``Api.pre_request`` receives: method and URL are set,
    and hooks may add headers or query parameters before the body is attached
    and the request goes out on the transport.
    """

    def __init__(self, method: str, url: URL | str) -> None:
        self.method = method.upper()
        self.url = URL(url)
        self.headers = Headers()
        self.params = QueryParams()
        self._content: Optional[bytes] = None
        self._data: Optional[dict[str, Any]] = None
        self._files: Any = None

    def __repr__(self) -> str:
        return f"<RequestDraft({self.method!r}, {str(self.url)!r})>"

    def header(self, name: str, value: str) -> "RequestDraft":
        self.headers[name] = value
        return self

    def with_headers(self, headers: Mapping[str, str]) -> "RequestDraft":
        self.headers.update(headers)
        return self

    def query(self, params: Mapping[str, Any]) -> "RequestDraft":
        self.params = self.params.merge(params)
        return self

    def bearer_auth(self, token: str) -> "RequestDraft":
        return self.header(HEADER_AUTHORIZATION, f"Bearer {token}")

    def basic_auth(self, username: str, password: Optional[str] = None) -> "RequestDraft":
        credentials = f"{username}:{password or ''}".encode()
        return self.header(
            HEADER_AUTHORIZATION, f"Basic {base64.b64encode(credentials).decode('ascii')}"
        )

    def attach(self, body: Body) -> "RequestDraft":
        """Attach ``body`` according to its variant."""
        if isinstance(body, NoBody):
            return self
        if isinstance(body, Json):
            self._content = body.encode()
            self._data = self._files = None
            self.headers["Content-Type"] = "application/json"
        elif isinstance(body, Form):
            self._data = body.encode()
            self._content = self._files = None
        elif isinstance(body, Multipart):
            # httpx generates the boundary, a stale content type would break it
            self.headers.pop("Content-Type", None)
            self._content = None
            if body.form.files:
                self._data = dict(body.form.data)
                self._files = dict(body.form.files)
            else:
                # text-only forms still go out as multipart/form-data
                self._data = None
                self._files = _text_parts(body.form.data)
        else:
            raise TypeError(f"Unsupported body variant: {type(body).__name__}")
        return self

    def build(self, client: AsyncClient) -> Request:
        """Turn the draft into an ``httpx.Request`` bound to ``client``."""
        kwargs: dict[str, Any] = {"headers": self.headers}
        if self.params:
            kwargs["params"] = self.params
        if self._content is not None:
            kwargs["content"] = self._content
        if self._data is not None:
            kwargs["data"] = self._data
        if self._files:
            kwargs["files"] = self._files
        return client.build_request(self.method, self.url, **kwargs)
