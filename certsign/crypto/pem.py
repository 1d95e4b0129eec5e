"""
PEM envelope lookup.

Decoding and decryption of PEM blocks (including legacy
"Proc-Type: 4,ENCRYPTED" / "DEK-Info" private keys) is done by
cryptography's load_pem_* loaders. This module only locates the block a
caller is after and reports its label and whether it is encrypted, so the
caller can choose the loader and map its failures.
"""

import re
from typing import Iterable, NamedTuple, Optional, Union

from ..common.exceptions import PemDecodeError

PEM_BLOCK = re.compile(
    r"-----BEGIN (?P<label>[^-\r\n]+)-----"
    r"(?P<body>.*?)"
    r"-----END (?P=label)-----",
    re.DOTALL,
)

LEGACY_ENCRYPTION = re.compile(r"^\s*Proc-Type:\s*4,\s*ENCRYPTED\s*$", re.MULTILINE)

ENCRYPTED_PKCS8_LABEL = "ENCRYPTED PRIVATE KEY"


class PemBlock(NamedTuple):
    label: str
    data: bytes

    @property
    def encrypted(self) -> bool:
        if self.label == ENCRYPTED_PKCS8_LABEL:
            return True
        return LEGACY_ENCRYPTION.search(self.data.decode('latin-1')) is not None


def find_pem_block(data: Union[str, bytes], labels: Optional[Iterable[str]] = None) -> PemBlock:
    """
    Locate a PEM block in data.

    Args:
        data: PEM text (str or bytes)
        labels: Preferred labels; the first block carrying one of them is
            returned, otherwise the first block of any label

    Returns:
        PemBlock holding the label and the block text as bytes

    Raises:
        PemDecodeError: If data holds no BEGIN/END block
    """
    if isinstance(data, (bytes, bytearray)):
        data = bytes(data).decode('latin-1')
    if not isinstance(data, str):
        raise PemDecodeError("PEM input must be str or bytes")

    blocks = list(PEM_BLOCK.finditer(data))
    if not blocks:
        raise PemDecodeError("no PEM block found")

    wanted = set(labels or ())
    match = next((m for m in blocks if m.group("label").strip() in wanted), blocks[0])
    return PemBlock(
        label=match.group("label").strip(),
        data=match.group(0).encode('latin-1'),
    )
