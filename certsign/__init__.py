"""
certsign

Certificate and key material engine:
- PEM/DER decoding of X.509 certificates and RSA, DSA, ECDSA keys
- Legacy password-encrypted PEM private keys
- Digest-based signing and verification (PKCS#1 v1.5, PSS, DSA, ECDSA)
- Incremental (chunked) signers and verifiers
"""

__version__ = "1.0.0"
