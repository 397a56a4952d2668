import logging

import httpx
import pytest
from pydantic import ValidationError
from pytest_httpx import HTTPXMock

from ccw import CCW, Config, ConfigurationError
from ccw._utils._service_url_overrides import clear_overrides_cache
from ccw._utils.constants import DEFAULT_QUOTE_BASE_URL, DEFAULT_TOKEN_URL


class TestCCW:
    class TestCredentials:
        def test_credentials_from_environment(self, credentials_env: None) -> None:
            client = CCW()

            assert client.config.token_url == DEFAULT_TOKEN_URL
            assert client.config.quote_base_url == DEFAULT_QUOTE_BASE_URL
            assert client.quotes.base_url == DEFAULT_QUOTE_BASE_URL

        def test_explicit_credentials(self) -> None:
            client = CCW(
                username="user",
                password="secret",
                client_id="id",
                client_secret="client-secret",
            )

            assert client.config.timeout == 10.0

        def test_missing_credentials(self) -> None:
            with pytest.raises(ConfigurationError) as exc_info:
                CCW()

            assert exc_info.value.missing == [
                "username",
                "password",
                "client_id",
                "client_secret",
            ]

        def test_partially_missing_credentials(
            self, monkeypatch: pytest.MonkeyPatch
        ) -> None:
            monkeypatch.setenv("CCW_USERNAME", "user")
            monkeypatch.setenv("CCW_PASSWORD", "secret")

            with pytest.raises(ConfigurationError) as exc_info:
                CCW(client_id="id")

            assert exc_info.value.missing == ["client_secret"]
            assert "client_secret" in exc_info.value.message

        def test_secrets_not_in_repr(self, credentials_env: None) -> None:
            client = CCW()

            assert "test-password" not in repr(client.__dict__)
            assert "test-client-secret" not in repr(client.__dict__)

    class TestEndpoints:
        def test_environment_overrides(
            self, credentials_env: None, monkeypatch: pytest.MonkeyPatch
        ) -> None:
            monkeypatch.setenv("CCW_IDENTITY_URL", "http://localhost:9000/token")
            monkeypatch.setenv("CCW_QUOTING_URL", "http://localhost:8080/QUOTING/v1/")
            clear_overrides_cache()

            client = CCW()

            assert client.config.token_url == "http://localhost:9000/token"
            assert client.config.quote_base_url == "http://localhost:8080/QUOTING/v1"

        def test_arguments_win_over_environment(
            self, credentials_env: None, monkeypatch: pytest.MonkeyPatch
        ) -> None:
            monkeypatch.setenv("CCW_QUOTING_URL", "http://localhost:8080")
            clear_overrides_cache()

            client = CCW(quote_base_url="https://api.example.com/QUOTING/v1/")

            assert client.config.quote_base_url == "https://api.example.com/QUOTING/v1"

        def test_invalid_url(self, credentials_env: None) -> None:
            with pytest.raises(ValidationError):
                CCW(token_url="not a url")

    class TestAuthenticate:
        def test_authenticate(
            self,
            httpx_mock: HTTPXMock,
            credentials_env: None,
            token_url: str,
            token_response: dict,
        ) -> None:
            httpx_mock.add_response(url=token_url, json=token_response)

            client = CCW(token_url=token_url)
            token = client.authenticate()
            again = client.authenticate()

            assert token.access_token == "test-access-token"
            assert again is token
            assert len(httpx_mock.get_requests()) == 1

        def test_nothing_logged_above_debug(
            self,
            httpx_mock: HTTPXMock,
            credentials_env: None,
            token_url: str,
            token_response: dict,
            caplog: pytest.LogCaptureFixture,
        ) -> None:
            httpx_mock.add_response(url=token_url, json=token_response)

            with caplog.at_level(logging.DEBUG, logger="ccw"):
                CCW(token_url=token_url).authenticate()

            assert [r for r in caplog.records if r.levelno >= logging.INFO] == []
            assert "test-password" not in caplog.text
            assert "test-access-token" not in caplog.text

    class TestLifecycle:
        def test_context_manager_closes_own_client(self, credentials_env: None) -> None:
            with CCW() as client:
                inner = client._client

            assert inner.is_closed

        @pytest.mark.anyio
        async def test_sync_exit_leaves_async_client_to_aclose(
            self, credentials_env: None
        ) -> None:
            with CCW() as client:
                pass

            assert client._client.is_closed
            assert not client._client_async.is_closed

            await client.aclose()

            assert client._client_async.is_closed

        def test_injected_client_is_left_open(self, credentials_env: None) -> None:
            http_client = httpx.Client()

            with CCW(http_client=http_client):
                pass

            assert not http_client.is_closed
            http_client.close()

        @pytest.mark.anyio
        async def test_async_context_manager(self, credentials_env: None) -> None:
            async with CCW() as client:
                inner = client._client_async

            assert inner.is_closed
            assert client._client.is_closed


class TestConfig:
    def test_defaults(self) -> None:
        config = Config()

        assert config.token_url == DEFAULT_TOKEN_URL
        assert config.quote_base_url == DEFAULT_QUOTE_BASE_URL
        assert config.timeout == 10.0
        assert config.debug is False

    def test_trailing_slash_stripped(self) -> None:
        config = Config(quote_base_url="https://api.example.com/QUOTING/v1/")

        assert config.quote_base_url == "https://api.example.com/QUOTING/v1"

    @pytest.mark.parametrize("timeout", [0, -1])
    def test_timeout_must_be_positive(self, timeout: float) -> None:
        with pytest.raises(ValidationError):
            Config(timeout=timeout)

    def test_non_http_scheme_rejected(self) -> None:
        with pytest.raises(ValidationError):
            Config(token_url="ftp://sso.example.com/token")
