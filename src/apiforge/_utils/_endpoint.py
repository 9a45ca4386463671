import re
from dataclasses import dataclass, field
from string import Formatter
from typing import Any, Mapping, Optional

from ..models.errors import DefinitionError
from ._body import BODY_KINDS
from ._result import RawText, ResultKind

HTTP_METHODS = frozenset(
    {"GET", "POST", "PUT", "PATCH", "DELETE", "HEAD", "OPTIONS", "TRACE", "CONNECT"}
)

_FIELD_ROOT = re.compile(r"[.\[]")


def template_fields(name: str, url_template: str) -> tuple[str, ...]:
    """Return the parameter names referenced by ``url_template``.

    Only named placeholders are accepted. ``{item.id}`` and ``{ids[0]}``
    reference the ``item`` and ``ids`` parameters.
    """
    fields: list[str] = []
    try:
        parsed = list(Formatter().parse(url_template))
    except ValueError as e:
        raise DefinitionError(
            name, f"malformed URL template {url_template!r}: {e}"
        ) from e

    for _, field_name, _, _ in parsed:
        if field_name is None:
            continue
        root = _FIELD_ROOT.split(field_name, maxsplit=1)[0]
        if not root or root.isdigit():
            raise DefinitionError(
                name, f"URL template {url_template!r} uses a positional placeholder"
            )
        if root not in fields:
            fields.append(root)
    return tuple(fields)


@dataclass(frozen=True)
class EndpointDescriptor:
    """Static description of one API call.

    Built once when the client class is defined and shared by every
    invocation of the generated method.
    """

    name: str
    method: str
    url_template: str
    params: tuple[str, ...] = ()
    body_kind: Optional[type] = None
    body_param: Optional[str] = None
    result: ResultKind = RawText()
    path_params: tuple[str, ...] = field(init=False, default=(), compare=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "method", self.method.upper())
        if self.method not in HTTP_METHODS:
            raise DefinitionError(self.name, f"unknown HTTP method {self.method!r}")

        if len(set(self.params)) != len(self.params):
            raise DefinitionError(self.name, "duplicate parameter names")

        if self.body_kind is not None and self.body_kind not in BODY_KINDS:
            raise DefinitionError(self.name, f"unsupported body kind {self.body_kind!r}")
        if self.body_param is not None and self.body_kind is None:
            raise DefinitionError(
                self.name, f"body parameter '{self.body_param}' has no body kind"
            )
        if self.body_kind is not None and self.body_param is None:
            raise DefinitionError(self.name, "body kind declared without a body parameter")
        if self.body_param is not None and (
            not self.params or self.params[0] != self.body_param
        ):
            raise DefinitionError(
                self.name,
                f"body parameter '{self.body_param}' must be the first parameter",
            )

        fields = template_fields(self.name, self.url_template)
        for field_name in fields:
            if field_name not in self.params or field_name == self.body_param:
                raise DefinitionError(
                    self.name,
                    f"URL placeholder '{{{field_name}}}' does not match any parameter",
                )
        object.__setattr__(self, "path_params", fields)

    @property
    def query_params(self) -> tuple[str, ...]:
        """Declared parameters that are neither the body nor in the URL path."""
        return tuple(
            p for p in self.params if p != self.body_param and p not in self.path_params
        )

    def format_url(self, arguments: Mapping[str, Any]) -> str:
        values = {k: v for k, v in arguments.items() if k != self.body_param}
        return self.url_template.format(**values)

    def __str__(self) -> str:
        return f"{self.name} ({self.method} {self.url_template})"
