from logging import getLogger
from typing import TYPE_CHECKING, Mapping, Union

import httpx
from opentelemetry import trace

from ._utils import NO_BODY, Body, RequestDraft
from ._utils.constants import REDACTED_HEADERS
from .models.errors import ApiError, PreRequestError, TransportError

if TYPE_CHECKING:
    from ._client import Api

logger = getLogger("apiforge")
tracer = trace.get_tracer("apiforge")


def _loggable_headers(headers: Mapping[str, str]) -> dict[str, str]:
    return {
        name: "***" if name.lower() in REDACTED_HEADERS else value
        for name, value in headers.items()
    }


async def execute(
    api: "Api",
    method: str,
    url: Union[httpx.URL, str],
    body: Body = NO_BODY,
) -> httpx.Response:
    """Run one HTTP exchange for ``api``.

    The draft goes through ``api.pre_request`` before the body is attached,
    is sent on ``api.client``, and the response is passed through
    ``api.post_response``. The returned response body is left unread so
    callers decide how to consume it; the status code is never checked here.

    Raises:
        PreRequestError: The pre-request hook failed or returned no draft;
            nothing was sent.
        TransportError: The transport failed to deliver the request.
    """
    client = api.client
    draft = RequestDraft(method, url)

    try:
        draft = api.pre_request(draft)
    except ApiError:
        raise
    except Exception as e:
        raise PreRequestError(
            f"pre_request hook of {type(api).__name__} failed: {e}", error=e
        ) from e
    if not isinstance(draft, RequestDraft):
        raise PreRequestError(
            f"pre_request hook of {type(api).__name__} must return a RequestDraft, "
            f"got {type(draft).__name__}"
        )

    request = draft.attach(body).build(client)

    logger.debug(f"Request: {request.method} {request.url}")
    logger.debug(f"HEADERS: {_loggable_headers(request.headers)}")

    with tracer.start_as_current_span(
        request.method,
        kind=trace.SpanKind.CLIENT,
        attributes={
            "http.request.method": request.method,
            "url.full": str(request.url),
        },
    ) as span:
        try:
            response = await client.send(request, stream=True)
        except httpx.HTTPError as e:
            logger.debug(f"Transport failure: {request.method} {request.url}: {e!r}")
            raise TransportError(request.method, str(request.url), e) from e
        span.set_attribute("http.response.status_code", response.status_code)

    logger.debug(f"Response: {response.status_code} {request.method} {request.url}")

    try:
        return api.post_response(response)
    except BaseException:
        await response.aclose()
        raise
