#!/usr/bin/env python3
"""
Certificate Inspection Tool

Prints the identity and key data of a PEM certificate:
subject, issuer, validity window, alternative names, SHA-1 fingerprint,
signature algorithm and public key summary.

Usage:
    python scripts/inspect_cert.py --cert certs/server_cert.pem
    python scripts/inspect_cert.py --cert certs/server_cert.pem --json
"""

import argparse
import logging
import os
import sys

sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from certsign.common.config import configure_logging
from certsign.common.exceptions import CertSignException
from certsign.common.utils import format_timestamp
from certsign.crypto.pki import load_certificate

logger = logging.getLogger("inspect_cert")


def describe_name(name) -> str:
    return ", ".join(f"{entry.type}={entry.value}" for entry in name.names)


def describe_key(key) -> str:
    if key.algorithm == "RSA":
        return f"RSA {key.key_size} bits, e={key.e}"
    if key.algorithm == "DSA":
        return f"DSA {key.key_size} bits"
    return f"ECDSA on {key.curve}"


def print_certificate(cert):
    """Print a parsed certificate in readable form."""
    print("\n" + "="*70)
    print("  CERTIFICATE")
    print("="*70)
    print(f"\n    Subject:     {describe_name(cert.subject)}")
    print(f"    Common Name: {cert.subject.common_name or 'UNKNOWN'}")
    print(f"    Issuer:      {describe_name(cert.issuer)}")
    print(f"    Valid from:  {format_timestamp(cert.not_before)}")
    print(f"    Valid until: {format_timestamp(cert.not_after)}")
    print(f"    Signature:   {cert.signature_algorithm}")
    print(f"    Public key:  {describe_key(cert.public_key)}")
    print(f"    Fingerprint: {cert.fingerprint.hex(':')}")
    if cert.alt_names:
        print("    Alt names:")
        for alt_name in cert.alt_names:
            print(f"      - {alt_name}")
    print("="*70 + "\n")


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(
        description="Inspect a PEM-encoded X.509 certificate"
    )
    parser.add_argument(
        "--cert",
        required=True,
        help="Path to certificate file"
    )
    parser.add_argument(
        "--json",
        action="store_true",
        help="Print the certificate as JSON"
    )

    args = parser.parse_args(argv)
    configure_logging()

    try:
        cert = load_certificate(args.cert)
    except FileNotFoundError as e:
        print(f"\n[ERROR] File not found: {e}")
        return 1
    except CertSignException as e:
        logger.error(f"Could not parse {args.cert}: {e}")
        print(f"\n[ERROR] {e}")
        return 1

    if args.json:
        print(cert.model_dump_json(by_alias=True, indent=2))
    else:
        print_certificate(cert)
    return 0


if __name__ == "__main__":
    sys.exit(main())
