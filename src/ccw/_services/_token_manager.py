import asyncio
import threading
from datetime import datetime, timedelta, timezone
from logging import getLogger
from typing import Callable, Optional

from httpx import Client, Response
from pydantic import ValidationError

from .._utils.constants import (
    CONTENT_TYPE_FORM,
    HEADER_CONTENT_TYPE,
    LOGGER_NAME,
    TOKEN_EXPIRY_MARGIN,
)
from ..models.auth import AccessToken, Credentials, TokenError
from ..models.errors import AuthenticationError


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class TokenManager:
    """Owns the credentials and the cached access token for one client.

    The token is checked and, when missing or within five minutes of expiry,
    replaced inside a single critical section. Concurrent callers wait on the
    lock instead of issuing their own credential exchange, so at most one
    exchange is in flight per manager. Failures are not retried.

    Args:
        credentials: The password-grant credentials.
        token_url: The identity server's token endpoint.
        client: HTTP client used for the exchange.
        clock: Returns the current time as an aware datetime.
    """

    EXPIRY_MARGIN = timedelta(seconds=TOKEN_EXPIRY_MARGIN)

    def __init__(
        self,
        credentials: Credentials,
        token_url: str,
        client: Client,
        *,
        clock: Callable[[], datetime] = _utcnow,
    ) -> None:
        self._logger = getLogger(LOGGER_NAME)
        self._credentials = credentials
        self._token_url = token_url
        self._client = client
        self._clock = clock
        self._token: Optional[AccessToken] = None
        self._lock = threading.Lock()

    @property
    def token(self) -> Optional[AccessToken]:
        return self._token

    def is_usable(self, token: Optional[AccessToken]) -> bool:
        return token is not None and token.remaining(self._clock()) > self.EXPIRY_MARGIN

    def ensure_token(self, timeout: Optional[float] = None) -> AccessToken:
        """Return a usable token, fetching a new one if needed.

        Args:
            timeout: Timeout in seconds for the credential exchange.

        Returns:
            AccessToken: The cached or freshly fetched token.

        Raises:
            AuthenticationError: If the identity server rejects the credentials
                or answers with a malformed token body.
            httpx.HTTPError: On transport failures.
        """
        with self._lock:
            if self.is_usable(self._token):
                return self._token  # type: ignore[return-value]
            try:
                token = self._fetch_token(timeout)
            except Exception as e:
                self._logger.warning(f"error retrieving token: {e}")
                raise
            self._token = token
            self._logger.debug(f"Token refreshed, expires at {token.expires_at}")
            return token

    async def ensure_token_async(self, timeout: Optional[float] = None) -> AccessToken:
        """Asynchronous variant of :meth:`ensure_token`.

        Runs the same critical section on a worker thread so sync and async
        callers share one lock and one cached token.
        """
        return await asyncio.to_thread(self.ensure_token, timeout)

    def invalidate(self) -> None:
        """Drop the cached token so the next call re-authenticates."""
        with self._lock:
            self._token = None

    def _fetch_token(self, timeout: Optional[float]) -> AccessToken:
        kwargs = {} if timeout is None else {"timeout": timeout}
        response = self._client.post(
            self._token_url,
            data=self._credentials.form_data(),
            headers={HEADER_CONTENT_TYPE: CONTENT_TYPE_FORM},
            **kwargs,
        )
        if response.status_code != 200:
            raise AuthenticationError(self._error_description(response))

        try:
            token = AccessToken.model_validate(response.json())
        except (ValueError, ValidationError):
            raise AuthenticationError("malformed token response") from None
        return token.with_expiry(self._clock())

    @staticmethod
    def _error_description(response: Response) -> str:
        try:
            error = TokenError.model_validate(response.json())
        except (ValueError, ValidationError):
            return f"{response.status_code} {response.reason_phrase}"
        return error.error_description or error.error or str(response.status_code)
