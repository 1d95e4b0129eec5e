"""
Common utilities, value types and exceptions for certsign.
"""

from .codec import decode, encode
from .exceptions import *
from .models import (
    Certificate,
    DistinguishedName,
    NameEntry,
    PrivateKey,
    PublicKey,
    SigningOptions,
)

__all__ = [
    'decode',
    'encode',
    'Certificate',
    'DistinguishedName',
    'NameEntry',
    'PrivateKey',
    'PublicKey',
    'SigningOptions',
]
