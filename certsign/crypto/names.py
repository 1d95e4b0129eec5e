"""
Distinguished name decoding.
"""

from cryptography import x509

from ..common.models import DistinguishedName, NameEntry


def attribute_value(attribute: x509.NameAttribute) -> str:
    # X500UniqueIdentifier and friends carry bit strings
    value = attribute.value
    if isinstance(value, bytes):
        return value.hex()
    return value


def decode_name(name: x509.Name) -> DistinguishedName:
    """
    Flatten an X.509 name into ordered (OID, value) entries.

    Attributes of a multi-valued RDN each get their own entry, in the order
    they are encoded.

    Args:
        name: Subject or issuer name

    Returns:
        DistinguishedName
    """
    entries = [
        NameEntry(type=attribute.oid.dotted_string, value=attribute_value(attribute))
        for rdn in name.rdns
        for attribute in rdn
    ]
    return DistinguishedName(names=tuple(entries))
