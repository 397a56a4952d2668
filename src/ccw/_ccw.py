from os import environ as env
from typing import Optional

from dotenv import load_dotenv
from httpx import AsyncClient, Client

from ._config import Config
from ._services import QuotesService, TokenManager
from ._utils._logs import setup_logging
from ._utils._rate_limiter import RateLimiter
from ._utils._service_url_overrides import get_service_override
from ._utils._ssl_context import get_httpx_client_kwargs
from ._utils.constants import (
    DEFAULT_TIMEOUT,
    ENV_CLIENT_ID,
    ENV_CLIENT_SECRET,
    ENV_PASSWORD,
    ENV_USERNAME,
)
from .models.auth import AccessToken, Credentials
from .models.errors import ConfigurationError

load_dotenv()


class CCW:
    """Client for the Cisco Commerce Workspace APIs.

    Use ``with CCW()`` for synchronous code and ``async with CCW()`` when
    awaiting the ``*_async`` methods; only the latter closes both HTTP clients.

    One instance owns one set of credentials, the token cache guarding them,
    and the rate limiter every request goes through. Share a single instance
    between threads rather than creating one per call.

    Credentials not passed explicitly are read from ``CCW_USERNAME``,
    ``CCW_PASSWORD``, ``CCW_CLIENT_ID`` and ``CCW_CLIENT_SECRET``.

    Args:
        username: CCW account user name.
        password: CCW account password.
        client_id: OAuth2 client identifier.
        client_secret: OAuth2 client secret.
        http_client: Optional client to send synchronous requests with.
        http_client_async: Optional client to send asynchronous requests with.
        token_url: Identity endpoint. Defaults to ``CCW_IDENTITY_URL`` or production.
        quote_base_url: Quote API base URL. Defaults to ``CCW_QUOTING_URL`` or production.
        timeout: Default timeout in seconds for blocking operations.
        debug: Enable DEBUG logging on the ``ccw`` logger.

    Raises:
        ConfigurationError: If any of the four credentials is empty.

    Examples:
        ```python
        from ccw import CCW

        with CCW() as client:
            quote = client.quotes.acquire_by_deal_id("123456")
        ```
    """

    def __init__(
        self,
        username: Optional[str] = None,
        password: Optional[str] = None,
        client_id: Optional[str] = None,
        client_secret: Optional[str] = None,
        *,
        http_client: Optional[Client] = None,
        http_client_async: Optional[AsyncClient] = None,
        token_url: Optional[str] = None,
        quote_base_url: Optional[str] = None,
        timeout: float = DEFAULT_TIMEOUT,
        debug: bool = False,
    ) -> None:
        credentials = Credentials(
            username=username or env.get(ENV_USERNAME, ""),
            password=password or env.get(ENV_PASSWORD, ""),
            client_id=client_id or env.get(ENV_CLIENT_ID, ""),
            client_secret=client_secret or env.get(ENV_CLIENT_SECRET, ""),
        )
        missing = credentials.missing_fields()
        if missing:
            raise ConfigurationError(missing)

        config_values: dict = {"timeout": timeout, "debug": debug}
        token_url_value = token_url or get_service_override("identity")
        quote_base_url_value = quote_base_url or get_service_override("quoting")
        if token_url_value:
            config_values["token_url"] = token_url_value
        if quote_base_url_value:
            config_values["quote_base_url"] = quote_base_url_value
        self._config = Config(**config_values)

        setup_logging(self._config.debug)

        client_kwargs = get_httpx_client_kwargs(self._config.timeout)
        self._owns_client = http_client is None
        self._owns_client_async = http_client_async is None
        self._client = http_client or Client(**client_kwargs)
        self._client_async = http_client_async or AsyncClient(**client_kwargs)

        self._token_manager = TokenManager(
            credentials, self._config.token_url, self._client
        )
        self._rate_limiter = RateLimiter()

        self.quotes = QuotesService(
            self._config,
            self._token_manager,
            self._rate_limiter,
            self._client,
            self._client_async,
        )

    @property
    def config(self) -> Config:
        return self._config

    def authenticate(self, timeout: Optional[float] = None) -> AccessToken:
        """Make sure a usable access token is cached and return it.

        Raises:
            AuthenticationError: If the identity server rejects the credentials.
        """
        return self._token_manager.ensure_token(
            timeout if timeout is not None else self._config.timeout
        )

    def close(self) -> None:
        """Close the synchronous HTTP client if this instance created it.

        An ``httpx.AsyncClient`` can only be closed from a coroutine, so the
        async client this instance created stays open. Code that used the
        ``*_async`` methods should call :meth:`aclose` or use ``async with``.
        """
        if self._owns_client:
            self._client.close()

    async def aclose(self) -> None:
        """Close both HTTP clients this instance created."""
        if self._owns_client_async:
            await self._client_async.aclose()
        self.close()

    def __enter__(self) -> "CCW":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    async def __aenter__(self) -> "CCW":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()
