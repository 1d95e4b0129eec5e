"""
Utility functions for certsign.
"""

from datetime import datetime, timezone

TIMESTAMP_FORMAT = "%Y-%m-%dT%H:%M:%SZ"


def int_to_bytes(value: int) -> bytes:
    """
    Big-endian, minimal-length encoding of a non-negative integer.

    Zero encodes to an empty byte string.
    """
    return value.to_bytes((value.bit_length() + 7) // 8, byteorder='big')


def format_timestamp(moment: datetime) -> str:
    """
    Render a datetime as an RFC 3339 UTC timestamp, e.g. 2019-01-01T00:00:00Z.

    Naive datetimes are taken to be UTC already.
    """
    if moment.tzinfo is not None:
        moment = moment.astimezone(timezone.utc)
    return moment.strftime(TIMESTAMP_FORMAT)


def to_bytes(value, encoding: str = 'utf-8') -> bytes:
    """Return value as bytes, encoding text with the given codec."""
    if isinstance(value, str):
        return value.encode(encoding)
    return bytes(value)
