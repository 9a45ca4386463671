from .errors import (
    ApiError,
    BodyReadError,
    DecodeError,
    DefinitionError,
    PreRequestError,
    TransportError,
)

__all__ = [
    "ApiError",
    "BodyReadError",
    "DecodeError",
    "DefinitionError",
    "PreRequestError",
    "TransportError",
]
