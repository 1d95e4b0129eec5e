"""
Conversion of backend key objects into tagged key variants.

Dispatch is fixed: rsaEncryption (1.2.840.113549.1.1.1) gives RSA,
id-dsa (1.2.840.10040.4.1) gives DSA, and id-ecPublicKey
(1.2.840.10045.2.1) on one of the NIST named curves gives ECDSA. Everything
else is UnsupportedAlgorithm.
"""

import logging

from cryptography.hazmat.primitives.asymmetric import dsa, ec, rsa

from ..common.exceptions import UnsupportedAlgorithm
from ..common.models import (
    DSAParameters,
    DSAPrivateKey,
    DSAPublicKey,
    ECDSAPrivateKey,
    ECDSAPublicKey,
    PrivateKey,
    PublicKey,
    RSAPrivateKey,
    RSAPublicKey,
)

logger = logging.getLogger(__name__)

RSA_OID = "1.2.840.113549.1.1.1"
DSA_OID = "1.2.840.10040.4.1"
EC_PUBLIC_KEY_OID = "1.2.840.10045.2.1"

KEY_ALGORITHMS = {
    RSA_OID: "RSA",
    DSA_OID: "DSA",
    EC_PUBLIC_KEY_OID: "ECDSA",
}

SUPPORTED_CURVES = frozenset({"secp224r1", "secp256r1", "secp384r1", "secp521r1"})


def algorithm_for_oid(oid: str) -> str:
    """
    Map a SubjectPublicKeyInfo algorithm OID to its variant tag.

    Raises:
        UnsupportedAlgorithm: If the OID is not in the dispatch table
    """
    try:
        return KEY_ALGORITHMS[oid]
    except KeyError:
        raise UnsupportedAlgorithm(f"unsupported public key algorithm OID: {oid}") from None


def _check_curve(curve: ec.EllipticCurve) -> str:
    if curve.name not in SUPPORTED_CURVES:
        raise UnsupportedAlgorithm(f"unsupported elliptic curve: {curve.name}")
    return curve.name


def _dsa_parameters(numbers: dsa.DSAParameterNumbers) -> DSAParameters:
    return DSAParameters(p=numbers.p, q=numbers.q, g=numbers.g)


def public_key_from_native(key) -> PublicKey:
    """
    Wrap a cryptography public key object in its variant.

    Raises:
        UnsupportedAlgorithm: For any key type outside RSA, DSA and ECDSA
    """
    if isinstance(key, rsa.RSAPublicKey):
        numbers = key.public_numbers()
        return RSAPublicKey(n=numbers.n, e=numbers.e, handle=key)
    if isinstance(key, dsa.DSAPublicKey):
        numbers = key.public_numbers()
        return DSAPublicKey(
            parameters=_dsa_parameters(numbers.parameter_numbers),
            y=numbers.y,
            handle=key,
        )
    if isinstance(key, ec.EllipticCurvePublicKey):
        curve = _check_curve(key.curve)
        numbers = key.public_numbers()
        return ECDSAPublicKey(curve=curve, x=numbers.x, y=numbers.y, handle=key)

    logger.debug(f"Rejecting public key of type {type(key).__name__}")
    raise UnsupportedAlgorithm(f"unsupported public key algorithm: {type(key).__name__}")


def private_key_from_native(key) -> PrivateKey:
    """
    Wrap a cryptography private key object in its variant.

    Raises:
        UnsupportedAlgorithm: For any key type outside RSA, DSA and ECDSA
    """
    if isinstance(key, rsa.RSAPrivateKey):
        numbers = key.private_numbers()
        return RSAPrivateKey(
            n=numbers.public_numbers.n,
            e=numbers.public_numbers.e,
            d=numbers.d,
            primes=(numbers.p, numbers.q),
            handle=key,
        )
    if isinstance(key, dsa.DSAPrivateKey):
        numbers = key.private_numbers()
        public_numbers = numbers.public_numbers
        return DSAPrivateKey(
            parameters=_dsa_parameters(public_numbers.parameter_numbers),
            y=public_numbers.y,
            x=numbers.x,
            handle=key,
        )
    if isinstance(key, ec.EllipticCurvePrivateKey):
        curve = _check_curve(key.curve)
        numbers = key.private_numbers()
        return ECDSAPrivateKey(
            curve=curve,
            x=numbers.public_numbers.x,
            y=numbers.public_numbers.y,
            d=numbers.private_value,
            handle=key,
        )

    logger.debug(f"Rejecting private key of type {type(key).__name__}")
    raise UnsupportedAlgorithm(f"unsupported private key algorithm: {type(key).__name__}")
