"""
Utility functions for request signing

This module provides the timestamp codec used for the signed ``date`` line
and the argument checks shared by the signing and verification operations.
"""

import re
from datetime import datetime, timezone
from typing import Any, Optional

from ..exceptions import ValidationError

# English names, independent of the host locale
WEEKDAY_NAMES = ('Mon', 'Tue', 'Wed', 'Thu', 'Fri', 'Sat', 'Sun')
MONTH_NAMES = ('Jan', 'Feb', 'Mar', 'Apr', 'May', 'Jun',
               'Jul', 'Aug', 'Sep', 'Oct', 'Nov', 'Dec')

TIMEZONE_NAME = 'GMT'

DATE_PATTERN = re.compile(
    r'^(?P<weekday>[A-Z][a-z]{2}) (?P<month>[A-Z][a-z]{2}) (?P<day>\d{1,2}) '
    r'(?P<hour>\d{2}):(?P<minute>\d{2}):(?P<second>\d{2}) (?P<year>\d{4}) (?P<zone>GMT|UTC)$'
)

# Double quotes and control characters would break the header template
UNSAFE_IDENTIFIER_CHARS = re.compile(r'["\x00-\x1f\x7f]')


def format_date(date: datetime) -> str:
    """
    Format a datetime as the date string used in the signing string.

    The pattern is ``EEE MMM d HH:mm:ss yyyy zzz`` in English and always in
    UTC, e.g. ``Thu Jan 1 00:00:00 1970 GMT``. Naive datetimes are taken to
    be in the host's local time, like ``datetime.astimezone``.

    Args:
        date: Datetime to format

    Returns:
        str: Formatted date string
    """
    if not isinstance(date, datetime):
        raise ValidationError(f"Date must be a datetime, got {type(date).__name__}")

    utc = date.astimezone(timezone.utc)

    return (
        f"{WEEKDAY_NAMES[utc.weekday()]} {MONTH_NAMES[utc.month - 1]} {utc.day} "
        f"{utc.hour:02d}:{utc.minute:02d}:{utc.second:02d} {utc.year:04d} {TIMEZONE_NAME}"
    )


def now() -> str:
    """
    The current timestamp in UTC as a date string.

    Returns:
        str: Current date string in the signing format
    """
    return format_date(datetime.now(timezone.utc))


def parse_date(value: str) -> datetime:
    """
    Parse a date string produced by ``format_date``.

    Verification never calls this: it signs the date string exactly as
    received.

    Args:
        value: Date string such as ``Thu Jan 1 00:00:00 1970 GMT``

    Returns:
        datetime: Timezone-aware UTC datetime

    Raises:
        ValidationError: If the string does not follow the date pattern
    """
    if not isinstance(value, str):
        raise ValidationError(f"Date string must be str, got {type(value).__name__}")

    match = DATE_PATTERN.match(value)
    if not match:
        raise ValidationError(f"Invalid date string: {value}", details={"date": value})

    if match.group('month') not in MONTH_NAMES or match.group('weekday') not in WEEKDAY_NAMES:
        raise ValidationError(f"Invalid date string: {value}", details={"date": value})

    try:
        parsed = datetime(
            int(match.group('year')),
            MONTH_NAMES.index(match.group('month')) + 1,
            int(match.group('day')),
            int(match.group('hour')),
            int(match.group('minute')),
            int(match.group('second')),
            tzinfo=timezone.utc
        )
    except ValueError as e:
        raise ValidationError(f"Invalid date string: {value}", details={"date": value}) from e

    if WEEKDAY_NAMES[parsed.weekday()] != match.group('weekday'):
        raise ValidationError(
            f"Weekday does not match date: {value}",
            details={"date": value}
        )

    return parsed


def require_present(value: Any, name: str) -> Any:
    """
    Check that a required argument was given.

    Raises:
        ValidationError: If ``value`` is None
    """
    if value is None:
        raise ValidationError(f"{name} must be present", details={"argument": name})
    return value


def validate_identifier(value: Optional[str], name: str) -> str:
    """
    Validate a login or fingerprint for inclusion in the keyId.

    Args:
        value: Identifier to validate
        name: Argument name used in error messages

    Returns:
        str: The identifier unchanged

    Raises:
        ValidationError: If the identifier is missing, empty, or unsafe
    """
    require_present(value, name)

    if not isinstance(value, str):
        raise ValidationError(
            f"{name} must be a string, got {type(value).__name__}",
            details={"argument": name}
        )

    if not value:
        raise ValidationError(f"{name} must not be empty", details={"argument": name})

    if UNSAFE_IDENTIFIER_CHARS.search(value):
        raise ValidationError(
            f"{name} contains quote or control characters",
            details={"argument": name}
        )

    return value


def to_bytes(data: Any, name: str) -> bytes:
    """
    Coerce signable data to bytes.

    Strings are encoded as UTF-8; bytes-like objects are copied.

    Raises:
        ValidationError: If ``data`` is None or not str/bytes-like
    """
    require_present(data, name)

    if isinstance(data, str):
        return data.encode('utf-8')
    if isinstance(data, (bytes, bytearray, memoryview)):
        return bytes(data)

    raise ValidationError(
        f"{name} must be bytes or str, got {type(data).__name__}",
        details={"argument": name}
    )
