from os import environ as env
from typing import Any, Optional

import httpx
from dotenv import load_dotenv
from pydantic import BaseModel, Field, field_validator

from ._transport import RetryTransport
from ._utils.constants import (
    DEFAULT_TIMEOUT,
    ENV_BASE_URL,
    ENV_DEBUG,
    ENV_RETRIES,
    ENV_TIMEOUT,
    HEADER_USER_AGENT,
)
from .version import __version__


class ClientConfig(BaseModel):
    base_url: str = ""
    timeout: float = DEFAULT_TIMEOUT
    follow_redirects: bool = False
    headers: dict[str, str] = Field(default_factory=dict)
    retries: int = Field(default=0, ge=0)
    debug: bool = False

    @field_validator("base_url", mode="before")
    @classmethod
    def validate_url(cls, value: Optional[str]) -> str:
        if not value:
            return ""
        url = httpx.URL(value)
        assert url.scheme in ("http", "https"), "Invalid URL scheme"
        return value

    @classmethod
    def from_env(cls, **overrides: Any) -> "ClientConfig":
        """Build a config from ``APIFORGE_*`` variables (and ``.env``).

        Keyword arguments that are not ``None`` take precedence over the
        environment.
        """
        load_dotenv()

        values: dict[str, Any] = {}
        if env.get(ENV_BASE_URL):
            values["base_url"] = env[ENV_BASE_URL]
        if env.get(ENV_TIMEOUT):
            values["timeout"] = env[ENV_TIMEOUT]
        if env.get(ENV_RETRIES):
            values["retries"] = env[ENV_RETRIES]
        if env.get(ENV_DEBUG):
            values["debug"] = env[ENV_DEBUG]

        values.update({k: v for k, v in overrides.items() if v is not None})
        return cls.model_validate(values)


def get_httpx_client_kwargs(config: ClientConfig) -> dict[str, Any]:
    kwargs: dict[str, Any] = {
        "timeout": httpx.Timeout(config.timeout),
        "follow_redirects": config.follow_redirects,
        "headers": {
            HEADER_USER_AGENT: f"apiforge/{__version__}",
            **config.headers,
        },
    }
    if config.base_url:
        kwargs["base_url"] = config.base_url
    if config.retries:
        kwargs["transport"] = RetryTransport(retries=config.retries)
    return kwargs


def create_client(config: Optional[ClientConfig] = None) -> httpx.AsyncClient:
    """Create the default transport handle for a client."""
    return httpx.AsyncClient(**get_httpx_client_kwargs(config or ClientConfig()))
