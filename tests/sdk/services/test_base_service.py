import xml.etree.ElementTree as ET
from typing import Generator

import httpx
import pytest
from pytest_httpx import HTTPXMock

from ccw._config import Config
from ccw._services._base_service import BaseService
from ccw._services._token_manager import TokenManager
from ccw._utils._rate_limiter import RateLimiter
from ccw.models.auth import AccessToken, Credentials
from ccw.models.errors import (
    AuthenticationError,
    BadRequestError,
    ForbiddenError,
    InternalError,
    UnauthorizedError,
    UnknownError,
)

ENDPOINT = "https://api.example.com/commerce/QUOTING/v1/Echo"
DOCUMENT = b"<Envelope><Body><Echo>hello</Echo></Body></Envelope>"


@pytest.fixture
def config(token_url: str, quote_base_url: str) -> Config:
    return Config(token_url=token_url, quote_base_url=quote_base_url)


@pytest.fixture
def http_client() -> Generator[httpx.Client, None, None]:
    with httpx.Client() as client:
        yield client


@pytest.fixture
def http_client_async() -> httpx.AsyncClient:
    return httpx.AsyncClient()


@pytest.fixture
def service(
    config: Config,
    token_url: str,
    http_client: httpx.Client,
    http_client_async: httpx.AsyncClient,
) -> BaseService:
    credentials = Credentials(
        username="test-user",
        password="test-password",
        client_id="test-client-id",
        client_secret="test-client-secret",
    )
    token_manager = TokenManager(credentials, token_url, http_client)
    return BaseService(
        config, token_manager, RateLimiter(), http_client, http_client_async
    )


@pytest.fixture
def mock_token(httpx_mock: HTTPXMock, token_url: str, token_response: dict) -> None:
    httpx_mock.add_response(url=token_url, method="POST", json=token_response)


class TestBaseService:
    def test_auth_headers(self, service: BaseService) -> None:
        token = AccessToken(access_token="abc", expires_in=60)

        assert service.auth_headers(token) == {"Authorization": "Bearer abc"}

    class TestRequestXml:
        def test_simple_request(
            self,
            httpx_mock: HTTPXMock,
            service: BaseService,
            mock_token: None,
        ) -> None:
            httpx_mock.add_response(
                url=ENDPOINT, method="POST", status_code=200, content=DOCUMENT
            )

            document = service.request_xml(
                "POST",
                ENDPOINT,
                content="<Ping/>",
                headers={"Content-Type": "application/xml"},
            )

            assert document is not None
            assert document.name == "Envelope"
            assert document.find_text("Body", "Echo") == "hello"

            sent_request = httpx_mock.get_request(url=ENDPOINT)
            if sent_request is None:
                raise Exception("No request was sent")

            assert sent_request.method == "POST"
            assert sent_request.headers["Authorization"] == "Bearer test-access-token"
            assert sent_request.headers["Content-Type"] == "application/xml"
            assert sent_request.content == b"<Ping/>"

        def test_token_is_reused_across_requests(
            self,
            httpx_mock: HTTPXMock,
            service: BaseService,
            mock_token: None,
            token_url: str,
        ) -> None:
            httpx_mock.add_response(url=ENDPOINT, content=DOCUMENT, is_reusable=True)

            service.request_xml("POST", ENDPOINT)
            service.request_xml("POST", ENDPOINT)

            assert len(httpx_mock.get_requests(url=token_url)) == 1
            assert len(httpx_mock.get_requests(url=ENDPOINT)) == 2

        def test_created_returns_none(
            self,
            httpx_mock: HTTPXMock,
            service: BaseService,
            mock_token: None,
        ) -> None:
            httpx_mock.add_response(url=ENDPOINT, status_code=201, content=b"")

            assert service.request_xml("POST", ENDPOINT) is None

        @pytest.mark.parametrize(
            "status_code, error_class, message",
            [
                (400, BadRequestError, "ccw: bad request"),
                (401, UnauthorizedError, "ccw: unauthorized request"),
                (403, ForbiddenError, "ccw: forbidden"),
                (500, InternalError, "ccw: internal error"),
                (404, UnknownError, "ccw: unexpected error occurred"),
                (418, UnknownError, "ccw: unexpected error occurred"),
                (502, UnknownError, "ccw: unexpected error occurred"),
            ],
        )
        def test_error_status_mapping(
            self,
            httpx_mock: HTTPXMock,
            service: BaseService,
            mock_token: None,
            status_code: int,
            error_class: type,
            message: str,
        ) -> None:
            httpx_mock.add_response(
                url=ENDPOINT,
                status_code=status_code,
                content=b"<Fault>details the client never reads</Fault>",
            )

            with pytest.raises(error_class) as exc_info:
                service.request_xml("POST", ENDPOINT)

            assert exc_info.value.status_code == status_code
            assert exc_info.value.message == message

        def test_invalid_xml_body(
            self,
            httpx_mock: HTTPXMock,
            service: BaseService,
            mock_token: None,
        ) -> None:
            httpx_mock.add_response(url=ENDPOINT, content=b"<Envelope><Body>")

            with pytest.raises(ET.ParseError):
                service.request_xml("POST", ENDPOINT)

        def test_authentication_failure_skips_request(
            self,
            httpx_mock: HTTPXMock,
            service: BaseService,
            token_url: str,
        ) -> None:
            httpx_mock.add_response(
                url=token_url,
                status_code=401,
                json={"error": "invalid_client", "error_description": "Bad client"},
            )

            with pytest.raises(AuthenticationError):
                service.request_xml("POST", ENDPOINT)

            assert httpx_mock.get_requests(url=ENDPOINT) == []

        def test_transport_error_passes_through(
            self,
            httpx_mock: HTTPXMock,
            service: BaseService,
            mock_token: None,
        ) -> None:
            httpx_mock.add_exception(httpx.ReadTimeout("timed out"), url=ENDPOINT)

            with pytest.raises(httpx.ReadTimeout):
                service.request_xml("POST", ENDPOINT)

        def test_rate_limiter_timeout_sends_nothing(
            self,
            httpx_mock: HTTPXMock,
            config: Config,
            token_url: str,
            http_client: httpx.Client,
            http_client_async: httpx.AsyncClient,
        ) -> None:
            credentials = Credentials(
                username="u", password="p", client_id="c", client_secret="s"
            )
            limiter = RateLimiter(rate=0.001)
            limiter.reserve()
            service = BaseService(
                config,
                TokenManager(credentials, token_url, http_client),
                limiter,
                http_client,
                http_client_async,
            )

            with pytest.raises(TimeoutError):
                service.request_xml("POST", ENDPOINT, timeout=0.5)

            assert httpx_mock.get_requests() == []

    class TestRequestXmlAsync:
        @pytest.mark.anyio
        async def test_simple_request_async(
            self,
            httpx_mock: HTTPXMock,
            service: BaseService,
            mock_token: None,
        ) -> None:
            httpx_mock.add_response(
                url=ENDPOINT, method="POST", status_code=200, content=DOCUMENT
            )

            document = await service.request_xml_async("POST", ENDPOINT)

            assert document is not None
            assert document.find_text("Body", "Echo") == "hello"

            sent_request = httpx_mock.get_request(url=ENDPOINT)
            if sent_request is None:
                raise Exception("No request was sent")

            assert sent_request.headers["Authorization"] == "Bearer test-access-token"

        @pytest.mark.anyio
        async def test_error_status_async(
            self,
            httpx_mock: HTTPXMock,
            service: BaseService,
            mock_token: None,
        ) -> None:
            httpx_mock.add_response(url=ENDPOINT, status_code=403)

            with pytest.raises(ForbiddenError):
                await service.request_xml_async("POST", ENDPOINT)

        @pytest.mark.anyio
        async def test_created_returns_none_async(
            self,
            httpx_mock: HTTPXMock,
            service: BaseService,
            mock_token: None,
        ) -> None:
            httpx_mock.add_response(url=ENDPOINT, status_code=201)

            assert await service.request_xml_async("POST", ENDPOINT) is None
