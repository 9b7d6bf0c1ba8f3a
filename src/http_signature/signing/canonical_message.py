"""
Canonical message construction for HTTP signatures

The canonical message is the exact byte sequence that gets signed. In header
mode it is the ``date`` line; in raw mode it is the caller's payload.
"""

from typing import Union

from .utils import require_present, to_bytes

SIGNING_STRING_TEMPLATE = "date: {}"


def build_signing_string(date: str) -> str:
    """
    Build the signing string for an Authorization header.

    The date is used verbatim: no trimming, case folding or reformatting.

    Args:
        date: Date string, normally the value of the HTTP Date header

    Returns:
        str: ``"date: " + date``
    """
    require_present(date, "Date")
    return SIGNING_STRING_TEMPLATE.format(date)


def build_canonical_message(date: str) -> bytes:
    """
    Build the canonical message for header mode as UTF-8 bytes.

    Args:
        date: Date string to sign

    Returns:
        bytes: UTF-8 encoding of the signing string
    """
    return build_signing_string(date).encode('utf-8')


def build_raw_message(data: Union[bytes, bytearray, memoryview, str]) -> bytes:
    """
    Build the canonical message for raw mode.

    Args:
        data: Payload to sign, possibly empty; str is encoded as UTF-8

    Returns:
        bytes: The payload unchanged
    """
    return to_bytes(data, "Data")
