from typing import Optional


class CCWError(Exception):
    """Base class for every error raised by the CCW client."""

    def __init__(self, message: str):
        self.message = message
        super().__init__(self.message)


class ConfigurationError(CCWError):
    def __init__(
        self,
        missing: Optional[list[str]] = None,
        message: str = "Missing required parameters. Please set CCW_USERNAME, CCW_PASSWORD, CCW_CLIENT_ID and CCW_CLIENT_SECRET or pass them to the client.",
    ):
        self.missing = missing or []
        if self.missing:
            message = f"{message} Missing: {', '.join(self.missing)}"
        super().__init__(message)


class AuthenticationError(CCWError):
    """Raised when the identity endpoint rejects the credential exchange.

    The description is taken verbatim from the ``error_description`` field of
    the identity server's error body.
    """

    def __init__(self, description: str):
        self.description = description
        super().__init__(f"ccw: authentication failed: {description}")


class APIError(CCWError):
    """An HTTP error status returned by the quoting service."""

    default_message = "ccw: unexpected error occurred"

    def __init__(self, status_code: int, message: Optional[str] = None):
        self.status_code = status_code
        super().__init__(message or self.default_message)


class BadRequestError(APIError):
    default_message = "ccw: bad request"


class UnauthorizedError(APIError):
    default_message = "ccw: unauthorized request"


class ForbiddenError(APIError):
    default_message = "ccw: forbidden"


class NotFoundError(APIError):
    """Reserved for front-ends mapping a missing resource.

    The request executor never produces this error itself.
    """

    default_message = "ccw: not found"

    def __init__(self, status_code: int = 404, message: Optional[str] = None):
        super().__init__(status_code, message)


class InternalError(APIError):
    default_message = "ccw: internal error"


class UnknownError(APIError):
    default_message = "ccw: unexpected error occurred"


class MalformedDurationError(CCWError, ValueError):
    def __init__(self, value: str):
        self.value = value
        super().__init__(f"ccw: malformed ISO-8601 duration {value!r}")


class UpstreamRejectedError(CCWError):
    """Raised when the quoting service answers but refuses the operation.

    This is the business-logic failure path (``ChangeStatus/Reason`` other
    than ``Success``), distinct from transport and HTTP status errors.
    """

    def __init__(self, reason: str, detail: str = ""):
        self.reason = reason
        self.detail = detail
        super().__init__(f"{reason}: {detail}")
