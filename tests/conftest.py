import sys
from pathlib import Path

import pytest
from click.testing import CliRunner

# Ensure local source package (src/ccw) is importable before tests collect
_PROJECT_ROOT: Path = Path(__file__).resolve().parents[1]
_SRC_PATH: Path = _PROJECT_ROOT / "src"
if _SRC_PATH.exists():
    sys.path.insert(0, str(_SRC_PATH))

_MOCKS_PATH: Path = Path(__file__).resolve().parent / "utils" / "mocks"


@pytest.fixture
def runner() -> CliRunner:
    """Provide a Click CLI test runner."""
    return CliRunner()


@pytest.fixture(autouse=True)
def clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Clean environment variables before each test."""
    from ccw._utils._service_url_overrides import clear_overrides_cache

    for name in (
        "CCW_USERNAME",
        "CCW_PASSWORD",
        "CCW_CLIENT_ID",
        "CCW_CLIENT_SECRET",
        "CCW_QUOTING_URL",
        "CCW_IDENTITY_URL",
    ):
        monkeypatch.delenv(name, raising=False)
    clear_overrides_cache()


@pytest.fixture
def token_url() -> str:
    return "https://sso.example.com/as/token.oauth2"


@pytest.fixture
def quote_base_url() -> str:
    return "https://api.example.com/commerce/QUOTING/v1"


@pytest.fixture
def credentials_env(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("CCW_USERNAME", "test-user")
    monkeypatch.setenv("CCW_PASSWORD", "test-password")
    monkeypatch.setenv("CCW_CLIENT_ID", "test-client-id")
    monkeypatch.setenv("CCW_CLIENT_SECRET", "test-client-secret")


@pytest.fixture
def token_response() -> dict:
    return {
        "access_token": "test-access-token",
        "token_type": "Bearer",
        "expires_in": 3599,
    }


@pytest.fixture
def acquire_quote_xml() -> str:
    return (_MOCKS_PATH / "acquire_quote_response.xml").read_text()


@pytest.fixture
def anyio_backend() -> str:
    """The SDK's async paths are built on asyncio; run anyio tests on it only."""
    return "asyncio"
