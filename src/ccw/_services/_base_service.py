from logging import getLogger
from typing import Any, Optional, Union

from httpx import URL, AsyncClient, Client, Response

from .._config import Config
from .._utils._errors import error_for_response, is_error_status
from .._utils._rate_limiter import RateLimiter
from .._utils._xml import XmlNode
from .._utils.constants import HEADER_AUTHORIZATION, LOGGER_NAME
from ..models.auth import AccessToken
from ._token_manager import TokenManager


class BaseService:
    """Authenticated XML request execution shared by all services.

    Every call passes the client-wide rate limiter, then makes sure the token
    manager holds a usable token, then sends the request with a bearer
    header. Nothing is retried.
    """

    def __init__(
        self,
        config: Config,
        token_manager: TokenManager,
        rate_limiter: RateLimiter,
        client: Client,
        client_async: AsyncClient,
    ) -> None:
        self._logger = getLogger(LOGGER_NAME)
        self._config = config
        self._token_manager = token_manager
        self._rate_limiter = rate_limiter
        self._client = client
        self._client_async = client_async

    def request_xml(
        self,
        method: str,
        url: Union[URL, str],
        *,
        timeout: Optional[float] = None,
        **kwargs: Any,
    ) -> Optional[XmlNode]:
        """Send an authenticated request and decode the XML response.

        Args:
            method: HTTP method.
            url: Absolute request URL.
            timeout: Seconds to allow for the rate limiter wait and for each
                HTTP round trip. Defaults to the client's configured timeout.
            **kwargs: Passed through to ``httpx.Client.request``.

        Returns:
            Optional[XmlNode]: The response document root, or ``None`` for a
            201 response, which carries no body.

        Raises:
            BadRequestError, UnauthorizedError, ForbiddenError, InternalError,
            UnknownError: For error status codes. The body is not read.
            AuthenticationError: If a token cannot be acquired.
            xml.etree.ElementTree.ParseError: If the body is not valid XML.
        """
        timeout = timeout if timeout is not None else self._config.timeout
        self._rate_limiter.wait(timeout)
        token = self._token_manager.ensure_token(timeout)

        kwargs["headers"] = {**kwargs.get("headers", {}), **self.auth_headers(token)}
        response = self._client.request(method, url, timeout=timeout, **kwargs)
        return self._decode(response)

    async def request_xml_async(
        self,
        method: str,
        url: Union[URL, str],
        *,
        timeout: Optional[float] = None,
        **kwargs: Any,
    ) -> Optional[XmlNode]:
        """Asynchronous variant of :meth:`request_xml`.

        Cancelling the awaiting task cancels the rate limiter wait and the
        HTTP call.
        """
        timeout = timeout if timeout is not None else self._config.timeout
        await self._rate_limiter.wait_async()
        token = await self._token_manager.ensure_token_async(timeout)

        kwargs["headers"] = {**kwargs.get("headers", {}), **self.auth_headers(token)}
        response = await self._client_async.request(
            method, url, timeout=timeout, **kwargs
        )
        return self._decode(response)

    def auth_headers(self, token: AccessToken) -> dict[str, str]:
        return {HEADER_AUTHORIZATION: f"Bearer {token.access_token}"}

    def _decode(self, response: Response) -> Optional[XmlNode]:
        if is_error_status(response.status_code):
            raise error_for_response(response)
        if response.status_code == 201:
            return None
        return XmlNode.parse(response.content)
