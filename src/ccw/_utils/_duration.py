"""ISO-8601 duration helpers for quote line effectivity periods.

The quoting service only ever populates the month and day components of a
duration, so hours, minutes and seconds are validated but never counted.
"""

import math
import re

from ..models.errors import MalformedDurationError

_ISO_DURATION = re.compile(
    r"P(?:([0-9]+)Y)?(?:([0-9]+)M)?(?:([0-9]+)D)?"
    r"T(?:([0-9]+)H)?(?:([0-9]+)M)?(?:([0-9]+(?:\.[0-9]+)?)S)?"
)

DAYS_PER_MONTH = 30


def _match(iso_duration: str) -> re.Match[str]:
    match = _ISO_DURATION.fullmatch(iso_duration)
    if match is None:
        raise MalformedDurationError(iso_duration)
    return match


def _round(value: float) -> float:
    # half away from zero, two decimals
    return math.copysign(math.floor(abs(value) * 100 + 0.5), value) / 100


def parse_duration_months(iso_duration: str) -> float:
    """Convert an ISO-8601 duration to a number of months.

    Days are folded in as ``days / 30``.

    Args:
        iso_duration: A duration such as ``P0Y26M16DT0H0M``.

    Returns:
        float: Months rounded to two decimal places.

    Raises:
        MalformedDurationError: If the string is not a supported duration.
    """
    match = _match(iso_duration)
    months = 0.0
    if match.group(2):
        months += float(match.group(2))
    if match.group(3):
        months += float(match.group(3)) / DAYS_PER_MONTH
    return _round(months)


def parse_duration_days(iso_duration: str) -> float:
    """Convert an ISO-8601 duration to a number of days.

    Args:
        iso_duration: A duration such as ``P0Y0M14DT0H0M``.

    Returns:
        float: Days rounded to two decimal places.

    Raises:
        MalformedDurationError: If the string is not a supported duration.
    """
    match = _match(iso_duration)
    days = 0.0
    if match.group(3):
        days += float(match.group(3))
    return _round(days)
