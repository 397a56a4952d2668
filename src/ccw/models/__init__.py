from .auth import AccessToken, Credentials, TokenError
from .errors import (
    APIError,
    AuthenticationError,
    BadRequestError,
    CCWError,
    ConfigurationError,
    ForbiddenError,
    InternalError,
    MalformedDurationError,
    NotFoundError,
    UnauthorizedError,
    UnknownError,
    UpstreamRejectedError,
)
from .quotes import AcquireQuoteResponse, Address, Company, Contact, LineItem

__all__ = [
    "AccessToken",
    "Credentials",
    "TokenError",
    "APIError",
    "AuthenticationError",
    "BadRequestError",
    "CCWError",
    "ConfigurationError",
    "ForbiddenError",
    "InternalError",
    "MalformedDurationError",
    "NotFoundError",
    "UnauthorizedError",
    "UnknownError",
    "UpstreamRejectedError",
    "AcquireQuoteResponse",
    "Address",
    "Company",
    "Contact",
    "LineItem",
]
