import httpx

from ..models.errors import (
    APIError,
    BadRequestError,
    ForbiddenError,
    InternalError,
    NotFoundError,
    UnauthorizedError,
    UnknownError,
)

_ERRORS_BY_STATUS: dict[int, type[APIError]] = {
    400: BadRequestError,
    401: UnauthorizedError,
    403: ForbiddenError,
    500: InternalError,
}


def is_error_status(status_code: int) -> bool:
    return status_code < 200 or status_code >= 400


def error_for_response(response: httpx.Response) -> APIError:
    """Classify an error response into the client's error taxonomy.

    The response body is not read.
    """
    error_class = _ERRORS_BY_STATUS.get(response.status_code, UnknownError)
    return error_class(response.status_code)


def status_code_for(error: BaseException) -> int:
    """Map an error to the HTTP status a front-end should answer with.

    Args:
        error: Any exception raised by the client.

    Returns:
        int: 404, 400, 401 or 403 for the matching taxonomy members, 500 for
        everything else.
    """
    if isinstance(error, NotFoundError):
        return 404
    if isinstance(error, BadRequestError):
        return 400
    if isinstance(error, UnauthorizedError):
        return 401
    if isinstance(error, ForbiddenError):
        return 403
    return 500
