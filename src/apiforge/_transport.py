from logging import getLogger
from typing import Optional

import httpx
from tenacity import (
    AsyncRetrying,
    retry_if_exception,
    stop_after_attempt,
    wait_exponential,
)
from tenacity.wait import wait_base

logger = getLogger("apiforge")


def is_retryable_exception(exception: BaseException) -> bool:
    return isinstance(exception, (httpx.ConnectError, httpx.ConnectTimeout))


class RetryTransport(httpx.AsyncBaseTransport):
    """Transport wrapper retrying connection failures with exponential backoff.

    Only failures that happen before the request reached the server are
    retried; HTTP status codes are handed back untouched.
    """

    def __init__(
        self,
        transport: Optional[httpx.AsyncBaseTransport] = None,
        *,
        retries: int = 3,
        wait: Optional[wait_base] = None,
    ) -> None:
        self._transport = transport or httpx.AsyncHTTPTransport()
        self._retries = retries
        self._wait = wait or wait_exponential(multiplier=1, min=1, max=10)

    async def handle_async_request(self, request: httpx.Request) -> httpx.Response:
        async for attempt in AsyncRetrying(
            stop=stop_after_attempt(self._retries + 1),
            retry=retry_if_exception(is_retryable_exception),
            wait=self._wait,
            reraise=True,
        ):
            with attempt:
                if attempt.retry_state.attempt_number > 1:
                    logger.warning(
                        f"Retrying {request.method} {request.url} "
                        f"(attempt {attempt.retry_state.attempt_number}/{self._retries + 1})"
                    )
                return await self._transport.handle_async_request(request)
        raise AssertionError("unreachable")

    async def aclose(self) -> None:
        await self._transport.aclose()
