"""
Value types for certificates, keys and signing options, using Pydantic.

All models are frozen. Field names are snake_case in Python; camelCase
aliases give the script-facing view through ``model_dump(by_alias=True)``.
Key variants carry an ``algorithm`` tag that discriminates the
PublicKey/PrivateKey unions, and an opaque ``handle`` to the backend key
object that is never serialized.
"""

from datetime import datetime
from typing import Annotated, Any, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, computed_field, field_serializer
from pydantic.alias_generators import to_camel
from cryptography.x509.oid import NameOID

from .utils import format_timestamp, int_to_bytes


class _Frozen(BaseModel):
    model_config = ConfigDict(
        frozen=True,
        alias_generator=to_camel,
        populate_by_name=True,
    )


# Distinguished names

class NameEntry(_Frozen):
    """One attribute of a distinguished name."""
    type: str = Field(..., description="Attribute OID in dotted form")
    value: str


class DistinguishedName(_Frozen):
    """
    Ordered attribute list of a subject or issuer.

    Convenience fields are projections over ``names``: single-valued fields
    take the last matching entry and are None when there is none.
    """
    names: tuple[NameEntry, ...] = ()

    def values_for(self, oid: str) -> list[str]:
        """All values for an attribute OID, in encoding order."""
        return [entry.value for entry in self.names if entry.type == oid]

    def _last(self, oid: str) -> Optional[str]:
        values = self.values_for(oid)
        return values[-1] if values else None

    @computed_field
    @property
    def common_name(self) -> Optional[str]:
        return self._last(NameOID.COMMON_NAME.dotted_string)

    @computed_field
    @property
    def country(self) -> Optional[str]:
        return self._last(NameOID.COUNTRY_NAME.dotted_string)

    @computed_field
    @property
    def organization_name(self) -> Optional[str]:
        return self._last(NameOID.ORGANIZATION_NAME.dotted_string)

    @computed_field
    @property
    def organizational_unit_name(self) -> list[str]:
        return self.values_for(NameOID.ORGANIZATIONAL_UNIT_NAME.dotted_string)

    @computed_field
    @property
    def state_or_province_name(self) -> Optional[str]:
        return self._last(NameOID.STATE_OR_PROVINCE_NAME.dotted_string)

    @computed_field
    @property
    def locality_name(self) -> Optional[str]:
        return self._last(NameOID.LOCALITY_NAME.dotted_string)

    @computed_field
    @property
    def street_address(self) -> Optional[str]:
        return self._last(NameOID.STREET_ADDRESS.dotted_string)

    @computed_field
    @property
    def postal_code(self) -> Optional[str]:
        return self._last(NameOID.POSTAL_CODE.dotted_string)


# Keys

class _Key(_Frozen):
    """
    Base for key variants.

    Equality and hashing cover the key material only; the backend handle is
    identity-compared by cryptography and is left out.
    """

    def __eq__(self, other):
        if not isinstance(other, _Key):
            return NotImplemented
        return type(self) is type(other) and self.model_dump() == other.model_dump()

    def __hash__(self):
        return hash((type(self).__name__, self.model_dump_json()))


class RSAPublicKey(_Key):
    algorithm: Literal["RSA"] = "RSA"
    n: int = Field(..., description="Modulus")
    e: int = Field(..., description="Public exponent")
    handle: Any = Field(None, exclude=True, repr=False)

    @property
    def modulus_bytes(self) -> bytes:
        return int_to_bytes(self.n)

    @property
    def key_size(self) -> int:
        return self.n.bit_length()


class DSAParameters(_Frozen):
    p: int
    q: int
    g: int


class DSAPublicKey(_Key):
    algorithm: Literal["DSA"] = "DSA"
    parameters: DSAParameters
    y: int
    handle: Any = Field(None, exclude=True, repr=False)

    @property
    def key_size(self) -> int:
        return self.parameters.p.bit_length()


class ECDSAPublicKey(_Key):
    algorithm: Literal["ECDSA"] = "ECDSA"
    curve: str = Field(..., description="Named curve, e.g. secp256r1")
    x: int
    y: int
    handle: Any = Field(None, exclude=True, repr=False)


PublicKey = Annotated[
    Union[RSAPublicKey, DSAPublicKey, ECDSAPublicKey],
    Field(discriminator="algorithm"),
]


# Private keys

class RSAPrivateKey(_Key):
    algorithm: Literal["RSA"] = "RSA"
    n: int
    e: int
    d: int = Field(..., repr=False)
    primes: tuple[int, int] = Field(..., repr=False)
    handle: Any = Field(None, exclude=True, repr=False)

    @property
    def public_key(self) -> RSAPublicKey:
        return RSAPublicKey(n=self.n, e=self.e, handle=self.handle.public_key())


class DSAPrivateKey(_Key):
    algorithm: Literal["DSA"] = "DSA"
    parameters: DSAParameters
    y: int
    x: int = Field(..., repr=False)
    handle: Any = Field(None, exclude=True, repr=False)

    @property
    def public_key(self) -> DSAPublicKey:
        return DSAPublicKey(
            parameters=self.parameters, y=self.y, handle=self.handle.public_key()
        )


class ECDSAPrivateKey(_Key):
    algorithm: Literal["ECDSA"] = "ECDSA"
    curve: str
    x: int
    y: int
    d: int = Field(..., repr=False)
    handle: Any = Field(None, exclude=True, repr=False)

    @property
    def public_key(self) -> ECDSAPublicKey:
        return ECDSAPublicKey(
            curve=self.curve, x=self.x, y=self.y, handle=self.handle.public_key()
        )


PrivateKey = Annotated[
    Union[RSAPrivateKey, DSAPrivateKey, ECDSAPrivateKey],
    Field(discriminator="algorithm"),
]


# Certificates

class Certificate(_Frozen):
    """Parsed X.509 certificate."""
    subject: DistinguishedName
    issuer: DistinguishedName
    not_before: datetime
    not_after: datetime
    alt_names: tuple[str, ...] = ()
    fingerprint: bytes = Field(..., description="SHA-1 over the DER encoding")
    public_key: PublicKey
    signature_algorithm: str

    @field_serializer("not_before", "not_after")
    def _serialize_timestamp(self, moment: datetime) -> str:
        return format_timestamp(moment)

    @field_serializer("fingerprint", when_used="json")
    def _serialize_fingerprint(self, fingerprint: bytes) -> str:
        return fingerprint.hex()


# Signing options

class SigningOptions(BaseModel):
    """
    Options for a sign or verify call.

    ``type`` selects the RSA padding ("" or "pkcs1v15" for PKCS#1 v1.5,
    "pss" for PSS). ``saltLength`` applies to PSS only; 0 means the digest
    length when signing and auto-detection when verifying.
    """
    model_config = ConfigDict(frozen=True, extra="forbid", populate_by_name=True)

    padding_scheme: str = Field("", alias="type")
    salt_length: int = Field(0, alias="saltLength", ge=0)
