"""
Binary codec.

Converts between raw bytes and the three presentations accepted for messages
and signatures: raw bytes ("binary"), hex text and base64 text. With no
format given, decoding tries raw bytes, then hex, then base64.
"""

import base64
import binascii
from typing import Union

from .exceptions import MalformedEncoding, UnrecognizedEncoding, UnsupportedEncoding

BINARY = "binary"
HEX = "hex"
BASE64 = "base64"

FORMATS = (BINARY, HEX, BASE64)

Encodable = Union[bytes, bytearray, memoryview, str]


def decode_bytes(value) -> bytes:
    """
    Accept a value that is already a byte sequence.

    Raises:
        MalformedEncoding: If value is not bytes-like
    """
    if isinstance(value, (bytes, bytearray, memoryview)):
        return bytes(value)
    raise MalformedEncoding("not a byte array")


def decode_hex(value) -> bytes:
    """
    Decode a hex string (either case, no separators).

    Raises:
        MalformedEncoding: If value is not a valid hex string
    """
    if not isinstance(value, str):
        raise MalformedEncoding("not a hex string")
    try:
        return binascii.unhexlify(value)
    except (binascii.Error, ValueError) as e:
        raise MalformedEncoding(f"invalid hex string: {e}") from e


def decode_base64(value) -> bytes:
    """
    Decode a standard (padded) base64 string.

    Raises:
        MalformedEncoding: If value is not a valid base64 string
    """
    if not isinstance(value, str):
        raise MalformedEncoding("not a base64 string")
    try:
        return base64.b64decode(value, validate=True)
    except (binascii.Error, ValueError) as e:
        raise MalformedEncoding(f"invalid base64 string: {e}") from e


_DECODERS = {
    BINARY: decode_bytes,
    HEX: decode_hex,
    BASE64: decode_base64,
}


def decode(value: Encodable, format: str = "") -> bytes:
    """
    Decode a binary value presented in the given format.

    Args:
        value: Raw bytes, or a hex/base64 string
        format: "binary", "hex", "base64", or "" to auto-detect

    Returns:
        Decoded bytes

    Raises:
        UnsupportedEncoding: If format is not recognized
        MalformedEncoding: If value does not fit the explicit format
        UnrecognizedEncoding: If auto-detection fails
    """
    if format:
        decoder = _DECODERS.get(format)
        if decoder is None:
            raise UnsupportedEncoding(f"unsupported binary encoding: {format}")
        return decoder(value)
    return decode_detect(value)


def decode_detect(value: Encodable) -> bytes:
    """Decode by trying raw bytes, hex and base64 in that order."""
    for decoder in (decode_bytes, decode_hex, decode_base64):
        try:
            return decoder(value)
        except MalformedEncoding:
            continue
    raise UnrecognizedEncoding("unrecognized binary encoding")


def encode(value: bytes, format: str = "") -> Union[bytes, str]:
    """
    Encode raw bytes into the requested format.

    Args:
        value: Bytes to encode
        format: "" or "binary" for raw bytes, "hex" or "base64" for text

    Returns:
        bytes for raw output, str for hex/base64

    Raises:
        UnsupportedEncoding: If format is not recognized
    """
    if format in ("", BINARY):
        return bytes(value)
    if format == HEX:
        return binascii.hexlify(value).decode('ascii')
    if format == BASE64:
        return base64.b64encode(value).decode('ascii')
    raise UnsupportedEncoding(f"unsupported binary encoding: {format}")
