from typing import Optional


class ApiError(Exception):
    """Base class for every failure of a single API call."""

    def __init__(self, message: str):
        self.message = message
        super().__init__(self.message)


class PreRequestError(ApiError):
    """Raised when a ``pre_request`` hook refuses to produce a request.

    Nothing has been sent when this error surfaces. When the hook raised some
    other exception, it is kept on ``error`` (and as ``__cause__``).
    """

    def __init__(self, message: str, error: Optional[BaseException] = None):
        self.error = error
        super().__init__(message)


class TransportError(ApiError):
    """Connection, TLS, DNS or timeout failure reported by the transport."""

    def __init__(self, method: str, url: str, error: BaseException):
        self.method = method
        self.url = url
        self.error = error
        super().__init__(f"{method} {url} failed: {type(error).__name__}: {error}")


class BodyReadError(ApiError):
    """Raised when the response body could not be fully drained."""

    def __init__(self, status_code: int, url: str, error: BaseException):
        self.status_code = status_code
        self.url = url
        self.error = error
        super().__init__(
            f"Failed to read response body from {url} (status {status_code}): {error}"
        )


class DecodeError(ApiError):
    """Raised when a response body does not deserialize into the expected type.

    Attributes:
        endpoint: Name of the endpoint (or ``METHOD url`` for ad hoc calls).
        status_code: HTTP status of the response that failed to decode.
        body: Raw body excerpt, truncated to ``MAX_BODY_EXCERPT`` characters.
    """

    MAX_BODY_EXCERPT = 512

    def __init__(
        self, endpoint: str, status_code: int, body: str, error: BaseException
    ):
        self.endpoint = endpoint
        self.status_code = status_code
        self.body = body[: self.MAX_BODY_EXCERPT]
        self.error = error
        super().__init__(
            f"Failed to decode response of {endpoint} (status {status_code}): {error}"
        )


class DefinitionError(Exception):
    """Raised while a client class is being defined from invalid declarations."""

    def __init__(self, endpoint: str, reason: str):
        self.endpoint = endpoint
        self.reason = reason
        self.message = f"Invalid endpoint declaration '{endpoint}': {reason}"
        super().__init__(self.message)
