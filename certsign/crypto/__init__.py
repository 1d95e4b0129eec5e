"""
Certificate, key and signature operations for certsign.

This package provides:
- PEM/DER parsing of X.509 certificates and RSA, DSA, ECDSA keys
- Legacy password-encrypted PEM private keys
- Signing and verification (PKCS#1 v1.5, PSS, DSA, ECDSA)
- Chunked signers and verifiers
"""

from .incremental import Signer, Verifier, create_sign, create_verify
from .pki import (
    get_alt_names,
    get_issuer,
    get_subject,
    load_certificate,
    parse,
    parse_certificate,
    parse_private_key,
    parse_public_key,
)
from .sign import sign, sign_digest, sign_string, verify, verify_digest, verify_string

__all__ = [
    'parse',
    'parse_certificate',
    'load_certificate',
    'get_subject',
    'get_issuer',
    'get_alt_names',
    'parse_public_key',
    'parse_private_key',
    'sign',
    'sign_string',
    'sign_digest',
    'verify',
    'verify_string',
    'verify_digest',
    'create_sign',
    'create_verify',
    'Signer',
    'Verifier',
]
