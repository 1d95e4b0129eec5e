"""
Command line tools under scripts/, driven through their main() functions.
"""

import importlib.util
import json
import os

import pytest

from .conftest import PRIVATE_KEY_PASSWORD, fixture_path

SCRIPTS_DIR = os.path.join(os.path.dirname(__file__), "..", "scripts")


def load_script(name: str):
    spec = importlib.util.spec_from_file_location(name, os.path.join(SCRIPTS_DIR, f"{name}.py"))
    module = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(module)
    return module


@pytest.fixture(scope="module")
def inspect_cert():
    return load_script("inspect_cert")


@pytest.fixture(scope="module")
def sign_file():
    return load_script("sign_file")


@pytest.fixture
def document(tmp_path):
    path = tmp_path / "minutes.txt"
    path.write_bytes(b"Minutes of the Exumbran Council\n" * 5000)
    return path


@pytest.fixture(autouse=True)
def clean_environment(monkeypatch):
    for name in ("CERTSIGN_LOG_LEVEL", "CERTSIGN_DIGEST", "CERTSIGN_SIGNATURE_FORMAT"):
        monkeypatch.delenv(name, raising=False)


def test_inspect_certificate(inspect_cert, capsys):
    """Test the readable certificate report"""
    assert inspect_cert.main(["--cert", fixture_path("rsa_cert.pem")]) == 0

    out = capsys.readouterr().out
    assert "Common Name: excouncil.zz" in out
    assert "SHA256-RSA" in out
    assert "RSA 2048 bits, e=65537" in out
    assert "2019-01-01T00:00:00Z" in out
    assert "55:77:03:c7" in out
    assert "- http://learning.excouncil.zz/index.html" in out


def test_inspect_certificate_json(inspect_cert, capsys):
    assert inspect_cert.main(["--cert", fixture_path("dsa_cert.pem"), "--json"]) == 0

    data = json.loads(capsys.readouterr().out)
    assert data["signatureAlgorithm"] == "DSA-SHA256"
    assert data["publicKey"]["algorithm"] == "DSA"
    assert data["altNames"] == []


def test_inspect_rejects_non_certificate(inspect_cert, capsys):
    assert inspect_cert.main(["--cert", fixture_path("rsa_public_key.pem")]) == 1
    assert "[ERROR]" in capsys.readouterr().out


def test_inspect_missing_file(inspect_cert, tmp_path, capsys):
    assert inspect_cert.main(["--cert", str(tmp_path / "missing.pem")]) == 1
    assert "File not found" in capsys.readouterr().out


def test_sign_and_verify_file(sign_file, document, capsys):
    """Test signing a file and verifying it against the public key"""
    assert sign_file.main([
        "--in", str(document),
        "--key", fixture_path("rsa_private_key.pem"),
        "--format", "hex",
    ]) == 0
    signature = capsys.readouterr().out.strip()
    int(signature, 16)

    assert sign_file.main([
        "--in", str(document),
        "--pubkey", fixture_path("rsa_public_key.pem"),
        "--verify", signature,
    ]) == 0
    assert "Signature VALID" in capsys.readouterr().out

    document.write_bytes(b"tampered")
    assert sign_file.main([
        "--in", str(document),
        "--pubkey", fixture_path("rsa_public_key.pem"),
        "--verify", signature,
    ]) == 1
    assert "Signature INVALID" in capsys.readouterr().out


def test_sign_file_pss_with_encrypted_key(sign_file, document, capsys):
    assert sign_file.main([
        "--in", str(document),
        "--key", fixture_path("rsa_private_key_encrypted.pem"),
        "--password", PRIVATE_KEY_PASSWORD,
        "--digest", "sha1",
        "--pss", "--salt-length", "20",
    ]) == 0
    signature = capsys.readouterr().out.strip()

    assert sign_file.main([
        "--in", str(document),
        "--pubkey", fixture_path("rsa_public_key.pem"),
        "--digest", "sha1",
        "--pss",
        "--verify", signature,
    ]) == 0


def test_sign_file_uses_environment_defaults(sign_file, document, monkeypatch, capsys):
    monkeypatch.setenv("CERTSIGN_SIGNATURE_FORMAT", "hex")
    monkeypatch.setenv("CERTSIGN_DIGEST", "sha512")

    assert sign_file.main([
        "--in", str(document),
        "--key", fixture_path("ecdsa_private_key.pem"),
    ]) == 0
    signature = capsys.readouterr().out.strip()

    assert sign_file.main([
        "--in", str(document),
        "--pubkey", fixture_path("ecdsa_public_key.pem"),
        "--verify", signature,
    ]) == 0


def test_sign_file_requires_password(sign_file, document, capsys):
    assert sign_file.main([
        "--in", str(document),
        "--key", fixture_path("rsa_private_key_encrypted.pem"),
    ]) == 2
    assert "[ERROR]" in capsys.readouterr().out


def test_sign_file_missing_input(sign_file, tmp_path, capsys):
    assert sign_file.main([
        "--in", str(tmp_path / "missing.bin"),
        "--key", fixture_path("rsa_private_key.pem"),
    ]) == 2
    assert "File not found" in capsys.readouterr().out


def test_sign_file_argument_errors(sign_file, document):
    with pytest.raises(SystemExit):
        sign_file.main(["--in", str(document)])
    with pytest.raises(SystemExit):
        sign_file.main(["--in", str(document), "--verify", "00"])
