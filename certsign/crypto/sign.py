"""
Digital Signatures

Signs and verifies message digests with RSA (PKCS#1 v1.5 or PSS), DSA and
ECDSA keys. DSA and ECDSA signatures are DER sequences of the two integers
(r, s). Every operation works on a precomputed digest; the one-shot helpers
hash the message first.

A signature that does not match is a normal False result. Only malformed
input (wrong key kind, unknown digest or padding, undecodable signature)
raises.
"""

import logging
from typing import Mapping, Optional, Union

from cryptography.exceptions import InvalidSignature
from cryptography.hazmat.primitives import hashes
from cryptography.hazmat.primitives.asymmetric import dsa, ec, padding, rsa
from cryptography.hazmat.primitives.asymmetric.utils import Prehashed, decode_dss_signature

from ..common import codec
from ..common.exceptions import (
    EncodingError,
    InvalidKey,
    InvalidSigningOptions,
    MalformedEncoding,
    MalformedSignatureEncoding,
    SignatureError,
    SigningFailed,
    UnsupportedPaddingScheme,
)
from ..common.models import (
    DSAPrivateKey,
    DSAPublicKey,
    ECDSAPrivateKey,
    ECDSAPublicKey,
    RSAPrivateKey,
    RSAPublicKey,
    SigningOptions,
)
from .digest import compute, resolve

logger = logging.getLogger(__name__)

PKCS1V15 = "pkcs1v15"
PSS = "pss"

OptionsInput = Optional[Union[SigningOptions, Mapping]]


def coerce_options(options: OptionsInput) -> SigningOptions:
    """
    Normalize an options mapping into SigningOptions.

    Raises:
        InvalidSigningOptions: On unknown keys or invalid values
    """
    if options is None:
        return SigningOptions()
    if isinstance(options, SigningOptions):
        return options
    try:
        return SigningOptions.model_validate(dict(options))
    except (TypeError, ValueError) as e:
        raise InvalidSigningOptions(f"invalid signing options: {e}") from e


def validate_private_key(key):
    """
    Check that key is a private key variant backed by a matching key object.

    Raises:
        InvalidKey: Otherwise
    """
    if isinstance(key, RSAPrivateKey):
        if not isinstance(key.handle, rsa.RSAPrivateKey):
            raise InvalidKey("invalid RSA private key")
    elif isinstance(key, DSAPrivateKey):
        if not isinstance(key.handle, dsa.DSAPrivateKey):
            raise InvalidKey("invalid DSA private key")
    elif isinstance(key, ECDSAPrivateKey):
        if not isinstance(key.handle, ec.EllipticCurvePrivateKey):
            raise InvalidKey("invalid ECDSA private key")
    else:
        raise InvalidKey("invalid private key")


def validate_public_key(key):
    """
    Check that key is a public key variant backed by a matching key object.

    Raises:
        InvalidKey: Otherwise
    """
    if isinstance(key, RSAPublicKey):
        if not isinstance(key.handle, rsa.RSAPublicKey):
            raise InvalidKey("invalid RSA public key")
    elif isinstance(key, DSAPublicKey):
        if not isinstance(key.handle, dsa.DSAPublicKey):
            raise InvalidKey("invalid DSA public key")
    elif isinstance(key, ECDSAPublicKey):
        if not isinstance(key.handle, ec.EllipticCurvePublicKey):
            raise InvalidKey("invalid ECDSA public key")
    else:
        raise InvalidKey("invalid public key")


def rsa_padding(
    algorithm: hashes.HashAlgorithm,
    options: SigningOptions,
    signing: bool,
) -> padding.AsymmetricPadding:
    """
    Padding for an RSA operation.

    A PSS salt length of 0 means the digest length when signing and
    auto-detection when verifying.

    Raises:
        UnsupportedPaddingScheme: If options.padding_scheme is unknown
    """
    scheme = options.padding_scheme
    if scheme in ("", PKCS1V15):
        return padding.PKCS1v15()
    if scheme == PSS:
        salt_length = options.salt_length
        if not salt_length:
            salt_length = padding.PSS.DIGEST_LENGTH if signing else padding.PSS.AUTO
        return padding.PSS(mgf=padding.MGF1(algorithm), salt_length=salt_length)
    raise UnsupportedPaddingScheme(f"unsupported type: {scheme}")


def check_padding(key, options: SigningOptions):
    """
    Check that the requested padding applies to the key's algorithm.

    Raises:
        UnsupportedPaddingScheme: If it does not
    """
    scheme = options.padding_scheme
    if isinstance(key, (RSAPrivateKey, RSAPublicKey)):
        if scheme not in ("", PKCS1V15, PSS):
            raise UnsupportedPaddingScheme(f"unsupported type: {scheme}")
    elif scheme:
        raise UnsupportedPaddingScheme(
            f"padding type {scheme!r} does not apply to {key.algorithm} keys"
        )


def _check_digest(algorithm: hashes.HashAlgorithm, digest: bytes):
    if len(digest) != algorithm.digest_size:
        raise SignatureError(
            f"digest is {len(digest)} bytes, {algorithm.name} produces {algorithm.digest_size}"
        )


def sign_prehashed(
    private_key,
    algorithm: hashes.HashAlgorithm,
    digest: bytes,
    options: OptionsInput = None,
    format: str = "",
) -> Union[bytes, str]:
    """
    Sign a precomputed digest.

    Args:
        private_key: RSAPrivateKey, DSAPrivateKey or ECDSAPrivateKey
        algorithm: Digest algorithm that produced digest
        digest: Raw digest bytes
        options: Signing options (RSA padding and PSS salt length)
        format: Output encoding ("", "binary", "hex" or "base64")

    Returns:
        Signature, raw bytes or encoded text per format

    Raises:
        InvalidKey: If private_key is not a supported private key
        UnsupportedPaddingScheme: If the padding is unknown or not applicable
        SigningFailed: If the backend cannot produce the signature
    """
    validate_private_key(private_key)
    options = coerce_options(options)
    check_padding(private_key, options)
    _check_digest(algorithm, digest)

    if isinstance(private_key, RSAPrivateKey):
        args = (rsa_padding(algorithm, options, signing=True), Prehashed(algorithm))
    elif isinstance(private_key, DSAPrivateKey):
        args = (Prehashed(algorithm),)
    elif isinstance(private_key, ECDSAPrivateKey):
        args = (ec.ECDSA(Prehashed(algorithm)),)
    else:
        raise InvalidKey("invalid private key")

    try:
        signature = private_key.handle.sign(digest, *args)
    except ValueError as e:
        raise SigningFailed(f"failed to sign message: {e}") from e

    logger.debug(f"Signed {algorithm.name} digest with {private_key.algorithm} key")
    return codec.encode(signature, format)


def verify_prehashed(
    public_key,
    algorithm: hashes.HashAlgorithm,
    digest: bytes,
    signature: bytes,
    options: OptionsInput = None,
) -> bool:
    """
    Verify a signature over a precomputed digest.

    Args:
        public_key: RSAPublicKey, DSAPublicKey or ECDSAPublicKey
        algorithm: Digest algorithm that produced digest
        digest: Raw digest bytes
        signature: Raw signature bytes
        options: Signing options (RSA padding and PSS salt length)

    Returns:
        True if the signature is valid, False otherwise

    Raises:
        InvalidKey: If public_key is not a supported public key
        UnsupportedPaddingScheme: If the padding is unknown or not applicable
        MalformedSignatureEncoding: If a DSA/ECDSA signature is not DER (r, s)
    """
    validate_public_key(public_key)
    options = coerce_options(options)
    check_padding(public_key, options)
    _check_digest(algorithm, digest)

    if isinstance(public_key, RSAPublicKey):
        args = (rsa_padding(algorithm, options, signing=False), Prehashed(algorithm))
    elif isinstance(public_key, DSAPublicKey):
        decode_dss(public_key, signature)
        args = (Prehashed(algorithm),)
    elif isinstance(public_key, ECDSAPublicKey):
        decode_dss(public_key, signature)
        args = (ec.ECDSA(Prehashed(algorithm)),)
    else:
        raise InvalidKey("invalid public key")

    try:
        public_key.handle.verify(signature, digest, *args)
    except InvalidSignature:
        logger.debug(f"{public_key.algorithm} signature over {algorithm.name} digest did not verify")
        return False
    return True


def decode_dss(public_key, signature: bytes) -> tuple[int, int]:
    """
    Split a DER-encoded DSA/ECDSA signature into (r, s).

    Raises:
        MalformedSignatureEncoding: If signature is not a DER (r, s) sequence
    """
    try:
        return decode_dss_signature(signature)
    except ValueError as e:
        raise MalformedSignatureEncoding(f"invalid {public_key.algorithm} signature: {e}") from e


def _prepare(key, validate, digest_name: str, options: OptionsInput):
    validate(key)
    algorithm = resolve(digest_name)
    options = coerce_options(options)
    check_padding(key, options)
    return algorithm, options


def sign_digest(private_key, digest_name: str, digest: bytes, options: OptionsInput = None, format: str = ""):
    """Sign a precomputed digest produced by the named algorithm."""
    algorithm, options = _prepare(private_key, validate_private_key, digest_name, options)
    return sign_prehashed(private_key, algorithm, digest, options, format)


def verify_digest(public_key, digest_name: str, digest: bytes, signature: bytes, options: OptionsInput = None) -> bool:
    """Verify a signature over a precomputed digest produced by the named algorithm."""
    algorithm, options = _prepare(public_key, validate_public_key, digest_name, options)
    return verify_prehashed(public_key, algorithm, digest, signature, options)


def decode_signature(encoded) -> bytes:
    try:
        return codec.decode_detect(encoded)
    except EncodingError as e:
        raise type(e)(f"could not decode signature: {e}") from e


def encode_text(text) -> bytes:
    """
    UTF-8 bytes of a text message.

    Raises:
        MalformedEncoding: If text is not a str
    """
    if not isinstance(text, str):
        raise MalformedEncoding(f"expected text, got {type(text).__name__}")
    return text.encode('utf-8')


def decode_plaintext(encoded) -> bytes:
    try:
        return codec.decode_detect(encoded)
    except EncodingError as e:
        raise type(e)(f"could not decode data: {e}") from e


def sign(private_key, digest_name: str, data, format: str = "", options: OptionsInput = None):
    """
    Sign a message.

    Args:
        private_key: Private key variant from parse_private_key
        digest_name: Digest algorithm name, e.g. "sha256"
        data: Message as raw bytes, or hex/base64 text (auto-detected)
        format: Output encoding ("", "binary", "hex" or "base64")
        options: Signing options, e.g. {"type": "pss", "saltLength": 32}

    Returns:
        Signature in the requested format
    """
    algorithm, options = _prepare(private_key, validate_private_key, digest_name, options)
    digest = compute(algorithm, decode_plaintext(data))
    return sign_prehashed(private_key, algorithm, digest, options, format)


def sign_string(private_key, digest_name: str, text: str, format: str = "", options: OptionsInput = None):
    """Sign the UTF-8 encoding of a text message."""
    algorithm, options = _prepare(private_key, validate_private_key, digest_name, options)
    digest = compute(algorithm, encode_text(text))
    return sign_prehashed(private_key, algorithm, digest, options, format)


def verify(public_key, digest_name: str, data, signature, options: OptionsInput = None) -> bool:
    """
    Verify a message signature.

    Args:
        public_key: Public key variant from parse_public_key or a certificate
        digest_name: Digest algorithm name, e.g. "sha256"
        data: Message as raw bytes, or hex/base64 text (auto-detected)
        signature: Signature as raw bytes, or hex/base64 text (auto-detected)
        options: Signing options used when the signature was made

    Returns:
        True if the signature is valid, False otherwise
    """
    algorithm, options = _prepare(public_key, validate_public_key, digest_name, options)
    digest = compute(algorithm, decode_plaintext(data))
    return verify_prehashed(public_key, algorithm, digest, decode_signature(signature), options)


def verify_string(public_key, digest_name: str, text: str, signature, options: OptionsInput = None) -> bool:
    """Verify a signature over the UTF-8 encoding of a text message."""
    algorithm, options = _prepare(public_key, validate_public_key, digest_name, options)
    digest = compute(algorithm, encode_text(text))
    return verify_prehashed(public_key, algorithm, digest, decode_signature(signature), options)
