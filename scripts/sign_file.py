#!/usr/bin/env python3
"""
File Signing and Verification Tool

Streams a file through a chunked signer and prints the signature, or, with
--verify, streams it through a chunked verifier and reports the result.

Usage:
    python scripts/sign_file.py --key certs/client_key.pem --in report.pdf
    python scripts/sign_file.py --key certs/client_key.pem --in report.pdf --pss --salt-length 32
    python scripts/sign_file.py --cert certs/client_cert.pem --in report.pdf --verify <signature>
"""

import argparse
import getpass
import logging
import os
import sys

sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from certsign.common.config import configure_logging, get_settings
from certsign.common.exceptions import CertSignException, PasswordRequired
from certsign.crypto.incremental import create_sign, create_verify
from certsign.crypto.pki import load_certificate, parse_private_key, parse_public_key

logger = logging.getLogger("sign_file")

CHUNK_SIZE = 64 * 1024


def read_chunks(path: str):
    with open(path, "rb") as f:
        while True:
            chunk = f.read(CHUNK_SIZE)
            if not chunk:
                return
            yield chunk


def load_private_key(key_path: str, password=None, prompt: bool = False):
    """
    Load a private key, asking for the password if the key is encrypted.

    Args:
        key_path: Path to private key file
        password: Password, if known
        prompt: Ask interactively when the key turns out to be encrypted

    Returns:
        Private key variant
    """
    with open(key_path, "rb") as f:
        pem = f.read()
    try:
        return parse_private_key(pem, password)
    except PasswordRequired:
        if not prompt:
            raise
        return parse_private_key(pem, getpass.getpass("  Key password: "))


def load_public_key(args):
    if args.cert:
        return load_certificate(args.cert).public_key
    with open(args.pubkey, "rb") as f:
        return parse_public_key(f.read())


def build_options(args) -> dict:
    options = {}
    if args.pss:
        options["type"] = "pss"
        options["saltLength"] = args.salt_length
    return options


def sign_file(args, settings) -> int:
    key = load_private_key(args.key, args.password, prompt=sys.stdin.isatty())
    signer = create_sign(args.digest or settings.digest, build_options(args))
    for chunk in read_chunks(args.input):
        signer.update(chunk)

    signature = signer.sign(key, args.format or settings.signature_format)
    logger.info(f"Signed {signer.size} bytes from {args.input} with {key.algorithm} key")
    print(signature if isinstance(signature, str) else signature.hex())
    return 0


def verify_file(args, settings) -> int:
    key = load_public_key(args)
    verifier = create_verify(args.digest or settings.digest, build_options(args))
    for chunk in read_chunks(args.input):
        verifier.update(chunk)

    if verifier.verify(key, args.verify):
        print(f"[✓] Signature VALID for {args.input}")
        return 0
    print(f"[✗] Signature INVALID for {args.input}")
    return 1


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(
        description="Sign a file, or verify a file signature"
    )
    parser.add_argument("--in", dest="input", required=True, help="File to sign or verify")
    parser.add_argument("--key", help="Path to PEM private key (signing)")
    parser.add_argument("--password", help="Password for an encrypted private key")
    parser.add_argument("--verify", metavar="SIGNATURE", help="Hex or base64 signature to check")
    parser.add_argument("--cert", help="Path to PEM certificate (verification)")
    parser.add_argument("--pubkey", help="Path to PEM public key (verification)")
    parser.add_argument("--digest", help="Digest algorithm (default from CERTSIGN_DIGEST)")
    parser.add_argument("--format", choices=["binary", "hex", "base64"],
                        help="Signature output format (default from CERTSIGN_SIGNATURE_FORMAT)")
    parser.add_argument("--pss", action="store_true", help="Use RSA-PSS padding")
    parser.add_argument("--salt-length", type=int, default=0,
                        help="PSS salt length (0 = digest length)")

    args = parser.parse_args(argv)

    if args.verify is None and not args.key:
        parser.error("--key is required for signing")
    if args.verify is not None and not (args.cert or args.pubkey):
        parser.error("--cert or --pubkey is required with --verify")

    settings = get_settings()
    configure_logging(settings.log_level)

    try:
        if args.verify is not None:
            return verify_file(args, settings)
        return sign_file(args, settings)
    except FileNotFoundError as e:
        print(f"\n[ERROR] File not found: {e}")
    except CertSignException as e:
        logger.error(f"{type(e).__name__}: {e}")
        print(f"\n[ERROR] {e}")
    return 2


if __name__ == "__main__":
    sys.exit(main())
