from abc import ABC, abstractmethod
from logging import getLogger
from typing import Any, Optional, Union

from httpx import URL, AsyncClient, Response

from ._config import ClientConfig, create_client
from ._pipeline import execute
from ._utils import NO_BODY, Body, RequestDraft, setup_logging


class Api(ABC):
    """The contract every API client implements.

    A concrete client owns one ``httpx.AsyncClient`` and may override the two
    hooks to add cross-cutting behavior (authentication, tracing headers,
    cookie capture) to every declared endpoint at once.

    Example:
        ```python
        class ExampleApi(Api):
            def __init__(self, username: str, password: str) -> None:
                self._client = AsyncClient(base_url="https://example.com")
                self.username = username
                self.password = password

            @property
            def client(self) -> AsyncClient:
                return self._client

            def pre_request(self, draft: RequestDraft) -> RequestDraft:
                return draft.basic_auth(self.username, self.password)

            @get("/example")
            async def example(self) -> str: ...
        ```
    """

    @property
    @abstractmethod
    def client(self) -> AsyncClient:
        """The transport handle used for every request of this client."""

    def pre_request(self, draft: RequestDraft) -> RequestDraft:
        """Modify the request before its body is attached and it is sent.

        Must return the draft to send. Raising aborts the call; nothing
        reaches the transport. An ``ApiError`` subclass propagates unchanged,
        any other exception is wrapped in ``PreRequestError`` (the original
        stays available as ``error`` and ``__cause__``).
        """
        return draft

    def post_response(self, response: Response) -> Response:
        """Inspect or replace the response before it is decoded.

        The returned response is the one handed to decoding. Implementations
        that update client state here must not share the client between
        overlapping calls unless that state is synchronized.
        """
        return response

    async def request(
        self, method: str, url: Union[URL, str], body: Body = NO_BODY
    ) -> Response:
        """Run one exchange through the pipeline and return the unread response."""
        return await execute(self, method, url, body)


class BaseApi(Api):
    """Minimal client wrapping a freshly constructed default transport.

    Subclass it and declare endpoints to get a ready-to-use client; override
    the hooks when the API needs more.
    """

    def __init__(
        self,
        client: Optional[AsyncClient] = None,
        *,
        config: Optional[ClientConfig] = None,
    ) -> None:
        self._config = config or ClientConfig()
        if self._config.debug:
            setup_logging(debug=True)
        self._client = client if client is not None else create_client(self._config)
        self._logger = getLogger("apiforge")
        self._logger.debug(f"{type(self).__name__} created (base_url={self._client.base_url})")

    @classmethod
    def new(cls, **kwargs: Any) -> "BaseApi":
        return cls(**kwargs)

    @classmethod
    def from_env(cls, **overrides: Any) -> "BaseApi":
        """Construct the client from ``APIFORGE_*`` environment variables."""
        return cls(config=ClientConfig.from_env(**overrides))

    @property
    def client(self) -> AsyncClient:
        return self._client

    @property
    def config(self) -> ClientConfig:
        return self._config

    async def aclose(self) -> None:
        await self._client.aclose()

    async def __aenter__(self) -> "BaseApi":
        return self

    async def __aexit__(self, *args: Any) -> None:
        await self.aclose()
