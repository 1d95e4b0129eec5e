"""
X.509 Certificate and Key Parsing (PKI)

Decodes PEM-wrapped DER into typed values:
- Certificates (subject, issuer, validity, alternative names, fingerprint,
  public key, signature algorithm)
- Public keys (SubjectPublicKeyInfo or PKCS#1 RSA)
- Private keys (PKCS#1 RSA, traditional DSA, SEC1 EC, PKCS#8), including
  legacy password-encrypted PEM blocks

Parsing establishes no trust: signatures, validity and revocation are not
checked.
"""

import logging
from typing import Optional, Union

from cryptography import x509
from cryptography.exceptions import UnsupportedAlgorithm as BackendUnsupportedAlgorithm
from cryptography.hazmat.primitives import hashes, serialization
from cryptography.x509.oid import SignatureAlgorithmOID

from ..common.exceptions import (
    CertificateParseError,
    DecryptionError,
    KeyParseError,
    PasswordRequired,
    PemDecodeError,
    UnsupportedAlgorithm,
)
from ..common.models import Certificate, DistinguishedName, PrivateKey, PublicKey
from ..common.utils import to_bytes
from .keys import algorithm_for_oid, private_key_from_native, public_key_from_native
from .names import decode_name
from .pem import ENCRYPTED_PKCS8_LABEL, PemBlock, find_pem_block

logger = logging.getLogger(__name__)

PemInput = Union[str, bytes]

CERTIFICATE_LABEL = "CERTIFICATE"
PUBLIC_KEY_LABELS = ("PUBLIC KEY", "RSA PUBLIC KEY")

# Label -> expected algorithm; None accepts any supported algorithm
PRIVATE_KEY_LABELS = {
    "RSA PRIVATE KEY": "RSA",
    "DSA PRIVATE KEY": "DSA",
    "EC PRIVATE KEY": "ECDSA",
    "PRIVATE KEY": None,
    "ENCRYPTED PRIVATE KEY": None,
}

SIGNATURE_ALGORITHMS = {
    SignatureAlgorithmOID.RSA_WITH_MD5: "MD5-RSA",
    SignatureAlgorithmOID.RSA_WITH_SHA1: "SHA1-RSA",
    SignatureAlgorithmOID.RSA_WITH_SHA224: "SHA224-RSA",
    SignatureAlgorithmOID.RSA_WITH_SHA256: "SHA256-RSA",
    SignatureAlgorithmOID.RSA_WITH_SHA384: "SHA384-RSA",
    SignatureAlgorithmOID.RSA_WITH_SHA512: "SHA512-RSA",
    SignatureAlgorithmOID.DSA_WITH_SHA1: "DSA-SHA1",
    SignatureAlgorithmOID.DSA_WITH_SHA224: "DSA-SHA224",
    SignatureAlgorithmOID.DSA_WITH_SHA256: "DSA-SHA256",
    SignatureAlgorithmOID.ECDSA_WITH_SHA1: "ECDSA-SHA1",
    SignatureAlgorithmOID.ECDSA_WITH_SHA224: "ECDSA-SHA224",
    SignatureAlgorithmOID.ECDSA_WITH_SHA256: "ECDSA-SHA256",
    SignatureAlgorithmOID.ECDSA_WITH_SHA384: "ECDSA-SHA384",
    SignatureAlgorithmOID.ECDSA_WITH_SHA512: "ECDSA-SHA512",
    SignatureAlgorithmOID.ED25519: "Ed25519",
}


def _find(pem: PemInput, kind: str, labels) -> PemBlock:
    try:
        return find_pem_block(pem, labels)
    except PemDecodeError as e:
        raise PemDecodeError(f"failed to decode {kind} PEM file: {e}") from e


# Certificates

def parse_certificate(pem: PemInput) -> Certificate:
    """
    Parse a PEM-encoded X.509 certificate.

    Args:
        pem: PEM text containing a CERTIFICATE block

    Returns:
        Certificate

    Raises:
        PemDecodeError: If no PEM block can be decoded
        CertificateParseError: If the block is not a well-formed certificate
        UnsupportedAlgorithm: If the certificate key is not RSA, DSA or ECDSA
    """
    block = _find(pem, "certificate", (CERTIFICATE_LABEL,))
    if block.label != CERTIFICATE_LABEL:
        raise CertificateParseError(
            f"failed to parse certificate: unexpected PEM block type {block.label}"
        )

    try:
        cert = x509.load_pem_x509_certificate(block.data)
    except ValueError as e:
        raise CertificateParseError(f"failed to parse certificate: {e}") from e

    try:
        certificate = Certificate(
            subject=decode_name(cert.subject),
            issuer=decode_name(cert.issuer),
            not_before=cert.not_valid_before_utc,
            not_after=cert.not_valid_after_utc,
            alt_names=tuple(get_certificate_alt_names(cert)),
            fingerprint=get_certificate_fingerprint(cert),
            public_key=get_certificate_public_key(cert),
            signature_algorithm=get_signature_algorithm(cert),
        )
    except ValueError as e:
        raise CertificateParseError(f"failed to parse certificate: {e}") from e

    logger.debug(
        f"Parsed certificate for {certificate.subject.common_name!r} "
        f"({certificate.public_key.algorithm}, {certificate.signature_algorithm})"
    )
    return certificate


parse = parse_certificate


def load_certificate(cert_path: str) -> Certificate:
    """
    Load and parse a certificate from a PEM file.

    Args:
        cert_path: Path to certificate file

    Returns:
        Certificate
    """
    with open(cert_path, "rb") as f:
        return parse_certificate(f.read())


def get_certificate_fingerprint(cert: x509.Certificate) -> bytes:
    """
    SHA-1 fingerprint of the certificate's DER encoding.

    Returns:
        20 raw bytes
    """
    return cert.fingerprint(hashes.SHA1())


def get_certificate_alt_names(cert: x509.Certificate) -> list[str]:
    """
    DNS names, email addresses, IP addresses and URIs from the SAN extension,
    in the order they are encoded.
    """
    try:
        extension = cert.extensions.get_extension_for_class(x509.SubjectAlternativeName)
    except x509.ExtensionNotFound:
        return []

    names = []
    for general_name in extension.value:
        if isinstance(general_name, (x509.DNSName, x509.RFC822Name, x509.UniformResourceIdentifier)):
            names.append(general_name.value)
        elif isinstance(general_name, x509.IPAddress):
            names.append(str(general_name.value))
        else:
            logger.debug(f"Skipping alternative name of type {type(general_name).__name__}")
    return names


def get_certificate_public_key(cert: x509.Certificate) -> PublicKey:
    """Public key variant of the certificate, dispatched on its algorithm OID."""
    algorithm_for_oid(cert.public_key_algorithm_oid.dotted_string)
    try:
        native = cert.public_key()
    except BackendUnsupportedAlgorithm as e:
        raise UnsupportedAlgorithm(f"unsupported certificate public key: {e}") from e
    return public_key_from_native(native)


def get_signature_algorithm(cert: x509.Certificate) -> str:
    """
    Readable signature algorithm label, e.g. SHA256-RSA.

    Unknown algorithms are reported by dotted OID.
    """
    oid = cert.signature_algorithm_oid
    if oid == SignatureAlgorithmOID.RSASSA_PSS:
        try:
            return f"{cert.signature_hash_algorithm.name.upper()}-RSAPSS"
        except BackendUnsupportedAlgorithm:
            return "RSAPSS"
    return SIGNATURE_ALGORITHMS.get(oid, oid.dotted_string)


def get_subject(pem: PemInput) -> DistinguishedName:
    """Subject of a PEM-encoded certificate."""
    return parse_certificate(pem).subject


def get_issuer(pem: PemInput) -> DistinguishedName:
    """Issuer of a PEM-encoded certificate."""
    return parse_certificate(pem).issuer


def get_alt_names(pem: PemInput) -> tuple[str, ...]:
    """Subject alternative names of a PEM-encoded certificate."""
    return parse_certificate(pem).alt_names


# Keys

def parse_public_key(pem: PemInput) -> PublicKey:
    """
    Parse a PEM-encoded public key.

    Args:
        pem: PEM text containing a PUBLIC KEY or RSA PUBLIC KEY block

    Returns:
        RSAPublicKey, DSAPublicKey or ECDSAPublicKey

    Raises:
        PemDecodeError: If no PEM block can be decoded
        KeyParseError: If the block is not a well-formed public key
        UnsupportedAlgorithm: If the key is not RSA, DSA or ECDSA
    """
    block = _find(pem, "public key", PUBLIC_KEY_LABELS)
    if block.label not in PUBLIC_KEY_LABELS:
        raise KeyParseError(f"failed to parse public key: unexpected PEM block type {block.label}")

    try:
        native = serialization.load_pem_public_key(block.data)
    except BackendUnsupportedAlgorithm as e:
        raise UnsupportedAlgorithm(f"unsupported public key algorithm: {e}") from e
    except ValueError as e:
        raise KeyParseError(f"failed to parse public key: {e}") from e

    key = public_key_from_native(native)
    logger.debug(f"Parsed {key.algorithm} public key")
    return key


def parse_private_key(pem: PemInput, password: Optional[Union[str, bytes]] = None) -> PrivateKey:
    """
    Parse a PEM-encoded private key, decrypting it if needed.

    Args:
        pem: PEM text containing a private key block
        password: Password for encrypted blocks (ignored for clear ones)

    Returns:
        RSAPrivateKey, DSAPrivateKey or ECDSAPrivateKey

    Raises:
        PemDecodeError: If no PEM block can be decoded
        PasswordRequired: If the block is encrypted and password is None
        DecryptionError: If the password is wrong or the cipher unsupported
        KeyParseError: If the decoded block is not a well-formed private key
        UnsupportedAlgorithm: If the key is not RSA, DSA or ECDSA
    """
    block = _find(pem, "private key", PRIVATE_KEY_LABELS)
    if block.label not in PRIVATE_KEY_LABELS:
        raise KeyParseError(f"failed to parse private key: unexpected PEM block type {block.label}")

    encrypted = block.encrypted
    if encrypted and password is None:
        raise PasswordRequired(f"{block.label} is encrypted and no password was given")
    if encrypted and block.label != ENCRYPTED_PKCS8_LABEL:
        logger.warning(f"Decrypting legacy encrypted {block.label} block; consider re-encoding as PKCS#8")

    try:
        native = serialization.load_pem_private_key(
            block.data,
            password=to_bytes(password) if encrypted else None,
        )
    except BackendUnsupportedAlgorithm as e:
        if encrypted:
            raise DecryptionError(f"failed to decrypt private key: {e}") from e
        raise UnsupportedAlgorithm(f"unsupported private key algorithm: {e}") from e
    except TypeError as e:
        # loader disagrees with the header about encryption
        raise PasswordRequired(f"failed to load private key: {e}") from e
    except ValueError as e:
        if encrypted:
            raise DecryptionError("failed to decrypt private key: incorrect password?") from e
        raise KeyParseError(f"failed to parse private key: {e}") from e

    key = private_key_from_native(native)
    expected = PRIVATE_KEY_LABELS[block.label]
    if expected is not None and key.algorithm != expected:
        raise KeyParseError(f"failed to parse private key: {block.label} holds a {key.algorithm} key")

    logger.debug(f"Parsed {key.algorithm} private key")
    return key
