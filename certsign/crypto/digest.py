"""
Digest algorithms selectable by name.
"""

from cryptography.hazmat.primitives import hashes

from ..common.exceptions import UnsupportedDigest

DIGESTS = {
    "md5": hashes.MD5,
    "sha1": hashes.SHA1,
    "sha224": hashes.SHA224,
    "sha256": hashes.SHA256,
    "sha384": hashes.SHA384,
    "sha512": hashes.SHA512,
    "sha512_224": hashes.SHA512_224,
    "sha512_256": hashes.SHA512_256,
    "sha3_224": hashes.SHA3_224,
    "sha3_256": hashes.SHA3_256,
    "sha3_384": hashes.SHA3_384,
    "sha3_512": hashes.SHA3_512,
}


def resolve(name: str) -> hashes.HashAlgorithm:
    """
    Look up a digest algorithm by name (case-insensitive).

    Raises:
        UnsupportedDigest: If the name is not supported
    """
    factory = DIGESTS.get(name.lower()) if isinstance(name, str) else None
    if factory is None:
        raise UnsupportedDigest(f"unsupported digest algorithm: {name}")
    return factory()


def compute(algorithm: hashes.HashAlgorithm, data: bytes) -> bytes:
    """Raw digest of data."""
    hasher = hashes.Hash(algorithm)
    hasher.update(data)
    return hasher.finalize()
