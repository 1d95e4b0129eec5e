"""
Test Configuration and Fixtures
PEM certificates and keys are read from tests/fixtures
"""

import logging
import os

import pytest

from certsign.crypto.pki import parse_private_key, parse_public_key

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)

FIXTURES_DIR = os.path.join(os.path.dirname(__file__), "fixtures")

PRIVATE_KEY_PASSWORD = "1234"


def read_fixture(name: str) -> str:
    with open(os.path.join(FIXTURES_DIR, name), "r") as f:
        return f.read()


def fixture_path(name: str) -> str:
    return os.path.join(FIXTURES_DIR, name)


@pytest.fixture(scope="session")
def rsa_cert_pem():
    return read_fixture("rsa_cert.pem")


@pytest.fixture(scope="session")
def dsa_cert_pem():
    return read_fixture("dsa_cert.pem")


@pytest.fixture(scope="session")
def ecdsa_cert_pem():
    return read_fixture("ecdsa_cert.pem")


@pytest.fixture(scope="session")
def rsa_public_key_pem():
    return read_fixture("rsa_public_key.pem")


@pytest.fixture(scope="session")
def dsa_public_key_pem():
    return read_fixture("dsa_public_key.pem")


@pytest.fixture(scope="session")
def ecdsa_public_key_pem():
    return read_fixture("ecdsa_public_key.pem")


@pytest.fixture(scope="session")
def rsa_private_key_pem():
    return read_fixture("rsa_private_key.pem")


@pytest.fixture(scope="session")
def rsa_private_key_encrypted_pem():
    return read_fixture("rsa_private_key_encrypted.pem")


@pytest.fixture(scope="session")
def dsa_private_key_pem():
    return read_fixture("dsa_private_key.pem")


@pytest.fixture(scope="session")
def ecdsa_private_key_pem():
    return read_fixture("ecdsa_private_key.pem")


@pytest.fixture(scope="session")
def keypairs():
    """Matching (private, public) key variants per algorithm."""
    return {
        "RSA": (
            parse_private_key(read_fixture("rsa_private_key.pem")),
            parse_public_key(read_fixture("rsa_public_key.pem")),
        ),
        "DSA": (
            parse_private_key(read_fixture("dsa_private_key.pem")),
            parse_public_key(read_fixture("dsa_public_key.pem")),
        ),
        "ECDSA": (
            parse_private_key(read_fixture("ecdsa_private_key.pem")),
            parse_public_key(read_fixture("ecdsa_public_key.pem")),
        ),
    }
