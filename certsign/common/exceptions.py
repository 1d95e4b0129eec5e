"""
Custom exceptions for certsign.

Every failure raised by the library derives from CertSignException so callers
can catch the whole family at once, or a single stage (codec, parsing,
signing) through the intermediate classes.
"""


class CertSignException(Exception):
    """Base exception for certsign errors."""
    pass


# Binary codec

class EncodingError(CertSignException):
    """Binary value could not be encoded or decoded."""
    pass


class UnsupportedEncoding(EncodingError):
    """Requested binary encoding is not one of binary, hex, base64."""
    pass


class UnrecognizedEncoding(EncodingError):
    """Auto-detection found no encoding that fits the value."""
    pass


class MalformedEncoding(EncodingError):
    """Value is not valid in the explicitly requested encoding."""
    pass


# Certificate and key parsing

class PemDecodeError(CertSignException):
    """No usable PEM block in the input."""
    pass


class CertificateParseError(CertSignException):
    """Certificate DER could not be parsed."""
    pass


class KeyParseError(CertSignException):
    """Public or private key could not be parsed."""
    pass


class UnsupportedAlgorithm(KeyParseError):
    """Key algorithm or curve outside RSA, DSA and the NIST ECDSA curves."""
    pass


class DecryptionError(KeyParseError):
    """Encrypted private key could not be decrypted."""
    pass


class PasswordRequired(KeyParseError):
    """Private key is encrypted and no password was given."""
    pass


# Signature engine

class SignatureError(CertSignException):
    """Signing or verification could not be carried out."""
    pass


class InvalidKey(SignatureError):
    """Key is not an RSA, DSA or ECDSA key of the expected kind."""
    pass


class UnsupportedPaddingScheme(SignatureError):
    """Padding scheme is unknown or does not apply to the key."""
    pass


class UnsupportedDigest(SignatureError):
    """Digest algorithm name is not supported."""
    pass


class SigningFailed(SignatureError):
    """Backend refused to produce a signature."""
    pass


class MalformedSignatureEncoding(SignatureError):
    """DSA/ECDSA signature is not a DER (r, s) sequence."""
    pass


class InvalidSigningOptions(SignatureError):
    """Signing options contain unknown keys or invalid values."""
    pass
