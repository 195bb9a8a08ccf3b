"""Field level validation rules.

Each rule takes the raw string value and either returns the parsed value or
raises ``InvalidConfiguration`` with a message naming the key.
"""

import re
from typing import FrozenSet

from ..dateformat import MetadataDateFormat
from .base import InvalidConfiguration

MIN_FEED_URLS = 3

# Range of a signed 32-bit integer
INT_MIN = -(2**31)
INT_MAX = 2**31 - 1

_INTEGER = re.compile(r"[+-]?[0-9]+")


def require_non_empty(key: str, value: str) -> str:
    """Reject an empty value."""
    if not value:
        raise InvalidConfiguration(f"{key} may not be empty")
    return value


def parse_bool(value: str) -> bool:
    """Only ``true``, ignoring case and surrounding whitespace, is true."""
    return value.strip().lower() == "true"


def parse_name_set(value: str) -> FrozenSet[str]:
    """Parse a comma separated list of names.

    Entries are trimmed and empty entries dropped.

    Example:
        >>> sorted(parse_name_set("a, b,,c"))
        ['a', 'b', 'c']
    """
    return frozenset(item.strip() for item in value.split(",") if item.strip())


def _parse_int(value: str) -> int:
    if not _INTEGER.fullmatch(value):
        raise ValueError(f"For input string: {value!r}")
    number = int(value)
    if not INT_MIN <= number <= INT_MAX:
        raise ValueError(f"Value out of range: {value!r}")
    return number


def parse_max_feed_urls(key: str, value: str) -> int:
    """Parse the feed batch size.

    Raises:
        InvalidConfiguration: If the value is not a decimal 32-bit integer
            or is smaller than ``MIN_FEED_URLS``.
    """
    try:
        max_urls = _parse_int(value)
    except ValueError as e:
        raise InvalidConfiguration(f"Invalid {key} value: {value}") from e
    if max_urls < MIN_FEED_URLS:
        raise InvalidConfiguration(
            f"{key} must be greater than {MIN_FEED_URLS - 1}: {max_urls}"
        )
    return max_urls


def validate_date_format(key: str, value: str) -> str:
    """Check that a date pattern compiles.

    Raises:
        InvalidConfiguration: If the pattern is rejected.
    """
    try:
        MetadataDateFormat(value)
    except ValueError as e:
        raise InvalidConfiguration(f"Invalid {key} value: {e}") from e
    return value
