"""
Chunked signing and verification.

A Signer or Verifier accumulates message bytes across update() calls and
hashes everything accumulated so far each time sign() or verify() is called.
Finishing does not reset the buffer: a later update() extends the same
message and a later sign()/verify() covers the longer message.

Instances are not thread-safe; use one per signing session.
"""

import logging

from ..common import codec
from .digest import compute, resolve
from .sign import (
    OptionsInput,
    coerce_options,
    decode_signature,
    sign_prehashed,
    validate_private_key,
    validate_public_key,
    verify_prehashed,
)

logger = logging.getLogger(__name__)


class _Accumulator:

    def __init__(self, digest_name: str, options: OptionsInput = None):
        self.digest_name = digest_name
        self.algorithm = resolve(digest_name)
        self.options = coerce_options(options)
        self._plaintext = bytearray()

    def update(self, data, format: str = ""):
        """
        Append a chunk of the message.

        Args:
            data: Raw bytes, or hex/base64 text
            format: "binary", "hex", "base64", or "" to auto-detect

        Returns:
            self, so calls can be chained
        """
        self._plaintext.extend(codec.decode(data, format))
        return self

    @property
    def size(self) -> int:
        """Number of message bytes accumulated so far."""
        return len(self._plaintext)

    def digest(self) -> bytes:
        return compute(self.algorithm, bytes(self._plaintext))


class Signer(_Accumulator):
    """Produces a signature over chunked input."""

    def sign(self, private_key, format: str = ""):
        """
        Sign everything accumulated so far.

        Args:
            private_key: Private key variant from parse_private_key
            format: Output encoding ("", "binary", "hex" or "base64")

        Returns:
            Signature in the requested format
        """
        validate_private_key(private_key)
        logger.debug(f"Signing {self.size} accumulated bytes with {self.digest_name}")
        return sign_prehashed(private_key, self.algorithm, self.digest(), self.options, format)


class Verifier(_Accumulator):
    """Verifies a signature over chunked input."""

    def verify(self, public_key, signature) -> bool:
        """
        Verify a signature over everything accumulated so far.

        Args:
            public_key: Public key variant
            signature: Raw bytes, or hex/base64 text (auto-detected)

        Returns:
            True if the signature is valid, False otherwise
        """
        validate_public_key(public_key)
        signature = decode_signature(signature)
        logger.debug(f"Verifying {self.size} accumulated bytes with {self.digest_name}")
        return verify_prehashed(public_key, self.algorithm, self.digest(), signature, self.options)


def create_sign(digest_name: str, options: OptionsInput = None) -> Signer:
    """
    Create a chunked signer.

    Raises:
        UnsupportedDigest: If digest_name is not supported
        InvalidSigningOptions: If options are invalid
    """
    return Signer(digest_name, options)


def create_verify(digest_name: str, options: OptionsInput = None) -> Verifier:
    """
    Create a chunked verifier.

    Raises:
        UnsupportedDigest: If digest_name is not supported
        InvalidSigningOptions: If options are invalid
    """
    return Verifier(digest_name, options)
