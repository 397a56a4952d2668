"""Python client for the Cisco Commerce Workspace (CCW) quoting API."""

from ._ccw import CCW
from ._config import Config
from ._utils._errors import status_code_for
from .models import (
    AcquireQuoteResponse,
    Address,
    APIError,
    AuthenticationError,
    BadRequestError,
    CCWError,
    Company,
    ConfigurationError,
    Contact,
    ForbiddenError,
    InternalError,
    LineItem,
    MalformedDurationError,
    NotFoundError,
    UnauthorizedError,
    UnknownError,
    UpstreamRejectedError,
)

__all__ = [
    "CCW",
    "Config",
    "AcquireQuoteResponse",
    "Address",
    "APIError",
    "AuthenticationError",
    "BadRequestError",
    "CCWError",
    "Company",
    "ConfigurationError",
    "Contact",
    "ForbiddenError",
    "InternalError",
    "LineItem",
    "MalformedDurationError",
    "NotFoundError",
    "UnauthorizedError",
    "UnknownError",
    "UpstreamRejectedError",
    "status_code_for",
]
