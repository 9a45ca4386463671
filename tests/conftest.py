import sys
from pathlib import Path

import httpx
import pytest

# Ensure local source package (src/apiforge) is importable before tests collect
_PROJECT_ROOT: Path = Path(__file__).resolve().parents[1]
_SRC_PATH: Path = _PROJECT_ROOT / "src"
if _SRC_PATH.exists():
    sys.path.insert(0, str(_SRC_PATH))

from tests.utils.doubles import RecordingTransport  # noqa: E402


@pytest.fixture
def anyio_backend() -> str:
    return "asyncio"


@pytest.fixture
def base_url() -> str:
    return "https://test.example.com"


@pytest.fixture
def secret() -> str:
    return "secret-token"


@pytest.fixture
def transport() -> RecordingTransport:
    return RecordingTransport()


@pytest.fixture
def client(transport: RecordingTransport, base_url: str) -> httpx.AsyncClient:
    return httpx.AsyncClient(transport=transport, base_url=base_url)


@pytest.fixture(autouse=True)
def clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Clean environment variables before each test."""
    for name in (
        "APIFORGE_BASE_URL",
        "APIFORGE_TIMEOUT",
        "APIFORGE_RETRIES",
        "APIFORGE_DEBUG",
    ):
        monkeypatch.delenv(name, raising=False)
