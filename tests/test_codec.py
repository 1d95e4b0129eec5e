import pytest

from certsign.common import codec
from certsign.common.exceptions import (
    EncodingError,
    MalformedEncoding,
    UnrecognizedEncoding,
    UnsupportedEncoding,
)


def test_encode_formats():
    """Test encoding raw bytes into each output format"""
    value = b"\xde\xad\xbe\xef"

    assert codec.encode(value) == value
    assert codec.encode(value, "binary") == value
    assert codec.encode(value, "hex") == "deadbeef"
    assert codec.encode(value, "base64") == "3q2+7w=="


def test_encode_unsupported_format():
    """Test that an unknown output format is rejected"""
    with pytest.raises(UnsupportedEncoding):
        codec.encode(b"data", "base32")


def test_decode_explicit_formats():
    """Test decoding with an explicit format"""
    assert codec.decode(b"\x00\x01", "binary") == b"\x00\x01"
    assert codec.decode(bytearray(b"\x00\x01"), "binary") == b"\x00\x01"
    assert codec.decode("DEADBEEF", "hex") == b"\xde\xad\xbe\xef"
    assert codec.decode("3q2+7w==", "base64") == b"\xde\xad\xbe\xef"


def test_decode_explicit_format_mismatch():
    """Test that a value not matching its declared format is malformed"""
    with pytest.raises(MalformedEncoding):
        codec.decode("not hex", "hex")
    with pytest.raises(MalformedEncoding):
        codec.decode("***", "base64")
    with pytest.raises(MalformedEncoding):
        codec.decode("text", "binary")


def test_decode_unsupported_format():
    """Test that an unknown input format is rejected"""
    with pytest.raises(UnsupportedEncoding):
        codec.decode("abcd", "base32")


def test_decode_detects_bytes_first():
    """Test that bytes are taken as-is even if they look like hex"""
    assert codec.decode(b"deadbeef") == b"deadbeef"


def test_decode_detects_hex_before_base64():
    """Test that a string valid as both hex and base64 decodes as hex"""
    assert codec.decode("deadbeef") == b"\xde\xad\xbe\xef"


def test_decode_detects_base64():
    """Test auto-detection falling through to base64"""
    assert codec.decode("aGVsbG8=") == b"hello"


def test_decode_unrecognized():
    """Test that undecodable input reports an unrecognized encoding"""
    with pytest.raises(UnrecognizedEncoding):
        codec.decode("hello world!")
    with pytest.raises(UnrecognizedEncoding):
        codec.decode(12345)


def test_empty_values():
    """Test that empty input survives every format"""
    for fmt in codec.FORMATS:
        assert codec.decode(codec.encode(b"", fmt), fmt) == b""


def test_round_trip_with_detection():
    """Test that hex and base64 output decodes back without a format hint"""
    value = bytes(range(256))
    assert codec.decode(codec.encode(value, "hex")) == value
    assert codec.decode(codec.encode(value, "base64")) == value


def test_encoding_errors_share_base():
    """Test the codec exception hierarchy"""
    assert issubclass(UnsupportedEncoding, EncodingError)
    assert issubclass(UnrecognizedEncoding, EncodingError)
    assert issubclass(MalformedEncoding, EncodingError)
