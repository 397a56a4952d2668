from typing import Optional

from httpx import AsyncClient, Client

from .._config import Config
from .._utils._rate_limiter import RateLimiter
from .._utils._templates import render_acquire_quote_request
from .._utils._xml import XmlNode
from .._utils.constants import CONTENT_TYPE_XML, HEADER_ACCEPT, HEADER_CONTENT_TYPE
from ..models.errors import UpstreamRejectedError
from ..models.quotes import AcquireQuoteResponse
from ..tracing import traced
from ._base_service import BaseService
from ._quote_projection import project_acquire_quote
from ._token_manager import TokenManager


class QuotesService(BaseService):
    """Service for the CCW Quote API.

    Quotes are the priced bill of materials attached to a deal. The service
    base URL defaults to the production endpoint and can be changed through
    :attr:`base_url` after the client is created.
    """

    def __init__(
        self,
        config: Config,
        token_manager: TokenManager,
        rate_limiter: RateLimiter,
        client: Client,
        client_async: AsyncClient,
    ) -> None:
        super().__init__(config, token_manager, rate_limiter, client, client_async)
        self.base_url = config.quote_base_url

    @traced(name="quotes_acquire_by_deal_id", input_attributes=("deal_id",))
    def acquire_by_deal_id(
        self, deal_id: str, *, timeout: Optional[float] = None
    ) -> AcquireQuoteResponse:
        """Retrieve the quote for a deal.

        Args:
            deal_id (str): The deal identifier assigned by Cisco.
            timeout (Optional[float]): Seconds to allow for each blocking step.
                Defaults to the client's configured timeout.

        Returns:
            AcquireQuoteResponse: The quote header, parties and line items.

        Raises:
            UpstreamRejectedError: If the quoting service refuses the request,
                for example for an unknown deal.
            APIError: If the service answers with an error status.
            AuthenticationError: If the credential exchange fails.

        Examples:
            ```python
            from ccw import CCW

            client = CCW()

            quote = client.quotes.acquire_by_deal_id("123456")
            print(quote.model_dump_json(by_alias=True))
            ```
        """
        document = self.request_xml(
            "POST",
            self._acquire_url,
            content=render_acquire_quote_request(deal_id),
            headers=self._xml_headers,
            timeout=timeout,
        )
        return self._project(document)

    @traced(name="quotes_acquire_by_deal_id", input_attributes=("deal_id",))
    async def acquire_by_deal_id_async(
        self, deal_id: str, *, timeout: Optional[float] = None
    ) -> AcquireQuoteResponse:
        """Asynchronously retrieve the quote for a deal.

        Args:
            deal_id (str): The deal identifier assigned by Cisco.
            timeout (Optional[float]): Seconds to allow for each HTTP round trip.

        Returns:
            AcquireQuoteResponse: The quote header, parties and line items.
        """
        document = await self.request_xml_async(
            "POST",
            self._acquire_url,
            content=render_acquire_quote_request(deal_id),
            headers=self._xml_headers,
            timeout=timeout,
        )
        return self._project(document)

    @property
    def _acquire_url(self) -> str:
        return f"{self.base_url}/AcquireQuoteService"

    @property
    def _xml_headers(self) -> dict[str, str]:
        return {HEADER_ACCEPT: CONTENT_TYPE_XML, HEADER_CONTENT_TYPE: CONTENT_TYPE_XML}

    def _project(self, document: Optional[XmlNode]) -> AcquireQuoteResponse:
        if document is None:
            raise UpstreamRejectedError("Empty", "the quoting service returned no quote")
        return project_acquire_quote(document)
