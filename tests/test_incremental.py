import pytest

from certsign.common.exceptions import (
    InvalidKey,
    InvalidSigningOptions,
    MalformedEncoding,
    UnsupportedDigest,
    UnsupportedPaddingScheme,
)
from certsign.crypto.incremental import Signer, Verifier, create_sign, create_verify
from certsign.crypto.sign import sign, verify

MESSAGE = b"The Exumbran Council convenes at dawn."


def chunks(data: bytes, size: int):
    return [data[i:i + size] for i in range(0, len(data), size)]


@pytest.mark.parametrize("algorithm", ["RSA", "DSA", "ECDSA"])
def test_chunked_signature_verifies(keypairs, algorithm):
    """Test that a chunked signature verifies one-shot and chunked"""
    private_key, public_key = keypairs[algorithm]

    signer = create_sign("sha256")
    for chunk in chunks(MESSAGE, 5):
        signer.update(chunk)
    signature = signer.sign(private_key)

    assert verify(public_key, "sha256", MESSAGE, signature)

    verifier = create_verify("sha256")
    for chunk in chunks(MESSAGE, 7):
        verifier.update(chunk)
    assert verifier.verify(public_key, signature)


def test_chunking_does_not_change_signature(keypairs):
    """Test that PKCS#1 v1.5 output is independent of chunk boundaries"""
    private_key, _ = keypairs["RSA"]
    expected = sign(private_key, "sha256", MESSAGE, "hex")

    for size in (1, 3, len(MESSAGE)):
        signer = create_sign("sha256")
        for chunk in chunks(MESSAGE, size):
            signer.update(chunk)
        assert signer.sign(private_key, "hex") == expected


def test_update_chains(keypairs):
    private_key, public_key = keypairs["ECDSA"]

    signer = create_sign("sha384").update(b"The Exumbran ").update(b"Council convenes at dawn.")

    assert isinstance(signer, Signer)
    assert signer.size == len(MESSAGE)
    assert create_verify("sha384").update(MESSAGE).verify(public_key, signer.sign(private_key))


def test_update_formats(keypairs):
    """Test hex, base64 and auto-detected chunk encodings"""
    private_key, _ = keypairs["RSA"]
    expected = sign(private_key, "sha256", b"\xde\xad\xbe\xef\x00\x01")

    signer = create_sign("sha256")
    signer.update("dead", "hex")
    signer.update("vu8=", "base64")
    signer.update(b"\x00", "binary")
    signer.update("01")

    assert signer.sign(private_key) == expected


def test_update_rejects_mismatched_format():
    with pytest.raises(MalformedEncoding):
        create_sign("sha256").update("zz", "hex")


def test_sign_does_not_reset(keypairs):
    """Test that signing again after more updates covers the longer message"""
    private_key, public_key = keypairs["RSA"]

    signer = create_sign("sha256").update(b"first")
    first = signer.sign(private_key)
    assert signer.sign(private_key) == first

    signer.update(b" second")
    second = signer.sign(private_key)

    assert second != first
    assert verify(public_key, "sha256", b"first second", second)


def test_verify_does_not_reset(keypairs):
    private_key, public_key = keypairs["DSA"]
    signature = sign(private_key, "sha256", MESSAGE, "base64")

    verifier = create_verify("sha256").update(MESSAGE)

    assert verifier.verify(public_key, signature)
    assert verifier.verify(public_key, signature)
    verifier.update(b"!")
    assert not verifier.verify(public_key, signature)


def test_chunked_pss(keypairs):
    private_key, public_key = keypairs["RSA"]
    options = {"type": "pss", "saltLength": 16}

    signer = create_sign("sha256", options)
    for chunk in chunks(MESSAGE, 4):
        signer.update(chunk)
    signature = signer.sign(private_key, "base64")

    verifier = create_verify("sha256", {"type": "pss"})
    assert isinstance(verifier, Verifier)
    assert verifier.update(MESSAGE).verify(public_key, signature)
    assert not create_verify("sha256").update(MESSAGE).verify(public_key, signature)


def test_empty_message(keypairs):
    private_key, public_key = keypairs["ECDSA"]
    signature = create_sign("sha256").sign(private_key)
    assert create_verify("sha256").verify(public_key, signature)
    assert verify(public_key, "sha256", b"", signature)


def test_create_rejects_bad_arguments():
    with pytest.raises(UnsupportedDigest):
        create_sign("whirlpool")
    with pytest.raises(UnsupportedDigest):
        create_verify("whirlpool")
    with pytest.raises(InvalidSigningOptions):
        create_sign("sha256", {"saltLength": -5})


def test_finalize_rejects_bad_keys(keypairs):
    rsa_private, rsa_public = keypairs["RSA"]
    ecdsa_private, _ = keypairs["ECDSA"]

    with pytest.raises(InvalidKey):
        create_sign("sha256").update(MESSAGE).sign(rsa_public)
    with pytest.raises(InvalidKey):
        create_verify("sha256").update(MESSAGE).verify(rsa_private, b"\x00")
    with pytest.raises(UnsupportedPaddingScheme):
        create_sign("sha256", {"type": "pss"}).update(MESSAGE).sign(ecdsa_private)
