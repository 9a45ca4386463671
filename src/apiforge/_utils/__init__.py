from ._body import NO_BODY, Body, Form, Json, Multipart, MultipartForm, NoBody
from ._draft import RequestDraft
from ._endpoint import EndpointDescriptor, template_fields
from ._logs import setup_logging
from ._result import (
    DecodedJson,
    RawBytes,
    RawText,
    ResultKind,
    StatusCode,
    decode_response,
)

__all__ = [
    "NO_BODY",
    "Body",
    "DecodedJson",
    "EndpointDescriptor",
    "Form",
    "Json",
    "Multipart",
    "MultipartForm",
    "NoBody",
    "RawBytes",
    "RawText",
    "RequestDraft",
    "ResultKind",
    "StatusCode",
    "decode_response",
    "setup_logging",
    "template_fields",
]
