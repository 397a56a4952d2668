from ._duration import parse_duration_days, parse_duration_months
from ._errors import status_code_for
from ._rate_limiter import RateLimiter
from ._xml import XmlNode

__all__ = [
    "parse_duration_days",
    "parse_duration_months",
    "status_code_for",
    "RateLimiter",
    "XmlNode",
]
