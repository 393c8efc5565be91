"""
Attribute-type registry — the closed vocabulary of RDN types.

Only the AttributeTypes the Open Finance Brasil certificate standard asks
an authorization server to accept are supported: the RFC 4514 descriptors
in string form, plus the OIDs of the Open Finance Brasil certificate
profile. Anything else is rejected, never coerced.

Each type carries static metadata:
  - label          — how the type is written by the serializer
  - case_sensitive — whether values keep their case for comparison
  - hex_encoded    — whether the serializer always writes #hex values

Member definition order is the registry index used to order comparable
DNs. The lookup table is built once at import time and is read-only.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, unique
from functools import total_ordering
from types import MappingProxyType
from typing import Mapping

from dn_parser.domain.text import ascii_lowercase, trim
from dn_parser.railway import Result, ResultFailures


@total_ordering
@unique
class AttributeType(Enum):
    """A relative distinguished name type."""

    CN = "cn"
    """Common name."""

    L = "l"
    """Locality name."""

    ST = "st"
    """State or province name."""

    O = "o"  # noqa: E741
    """Organization name."""

    OU = "ou"
    """Organizational unit name."""

    C = "c"
    """Country name."""

    STREET = "street"
    """Street address."""

    DC = "dc"
    """Domain component."""

    UID = "uid"
    """User ID."""

    BUSINESS_CATEGORY = "businesscategory"
    """Type of business category."""

    JURISDICTION_COUNTRY_NAME = "jurisdictioncountryname"
    """Jurisdiction country name."""

    SERIAL_NUMBER = "serialnumber"
    """CNPJ (national register of legal entities) of the certificate holder."""

    ORGANIZATION_IDENTIFIER = "organizationidentifier"
    """Participant code associated with the CNPJ in the Open Finance Brasil directory."""

    ORGANIZATIONAL_UNIT_NAME = "organizationalunitname"
    """Participant code associated with the CNPJ, in OID form (2.5.4.11)."""

    @property
    def index(self) -> int:
        return _INDEX[self]

    @property
    def label(self) -> str:
        return _METADATA[self].label

    @property
    def case_sensitive(self) -> bool:
        return _METADATA[self].case_sensitive

    @property
    def hex_encoded(self) -> bool:
        return _METADATA[self].hex_encoded

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, AttributeType):
            return NotImplemented
        return self.index < other.index


@dataclass(frozen=True, slots=True)
class AttributeTypeInfo:
    """Static per-type metadata."""

    label: str
    case_sensitive: bool
    hex_encoded: bool
    oid: str | None


_METADATA: Mapping[AttributeType, AttributeTypeInfo] = MappingProxyType({
    # https://datatracker.ietf.org/doc/html/rfc4519#section-2.3
    AttributeType.CN: AttributeTypeInfo("CN", True, False, "2.5.4.3"),
    # https://datatracker.ietf.org/doc/html/rfc4519#section-2.16
    AttributeType.L: AttributeTypeInfo("L", True, False, "2.5.4.7"),
    # https://datatracker.ietf.org/doc/html/rfc4519#section-2.33
    AttributeType.ST: AttributeTypeInfo("ST", True, False, "2.5.4.8"),
    # https://datatracker.ietf.org/doc/html/rfc4519#section-2.19
    AttributeType.O: AttributeTypeInfo("O", True, False, "2.5.4.10"),
    # 2.5.4.11 resolves to ORGANIZATIONAL_UNIT_NAME, so "ou" has no OID alias
    AttributeType.OU: AttributeTypeInfo("OU", True, False, None),
    # https://datatracker.ietf.org/doc/html/rfc4519#section-2.2
    AttributeType.C: AttributeTypeInfo("C", True, False, "2.5.4.6"),
    # https://datatracker.ietf.org/doc/html/rfc4519#section-2.34
    AttributeType.STREET: AttributeTypeInfo("Street", False, False, "2.5.4.9"),
    # https://datatracker.ietf.org/doc/html/rfc4519#section-2.4
    AttributeType.DC: AttributeTypeInfo("DC", False, False, "0.9.2342.19200300.100.1.25"),
    # https://datatracker.ietf.org/doc/html/rfc4519#section-2.39
    AttributeType.UID: AttributeTypeInfo("UID", False, False, "0.9.2342.19200300.100.1.1"),
    # https://datatracker.ietf.org/doc/html/rfc4519#section-2.1
    AttributeType.BUSINESS_CATEGORY: AttributeTypeInfo("2.5.4.15", False, True, "2.5.4.15"),
    # https://oidref.com/1.3.6.1.4.1.311.60.2.1.3
    AttributeType.JURISDICTION_COUNTRY_NAME: AttributeTypeInfo(
        "1.3.6.1.4.1.311.60.2.1.3", True, True, "1.3.6.1.4.1.311.60.2.1.3"
    ),
    # https://datatracker.ietf.org/doc/html/rfc4519#section-2.31
    AttributeType.SERIAL_NUMBER: AttributeTypeInfo("2.5.4.5", False, True, "2.5.4.5"),
    # https://oidref.com/2.5.4.97
    AttributeType.ORGANIZATION_IDENTIFIER: AttributeTypeInfo("2.5.4.97", False, True, "2.5.4.97"),
    AttributeType.ORGANIZATIONAL_UNIT_NAME: AttributeTypeInfo("2.5.4.11", True, True, "2.5.4.11"),
})

_INDEX: Mapping[AttributeType, int] = MappingProxyType(
    {attribute_type: position for position, attribute_type in enumerate(AttributeType)}
)


def _build_lookup() -> Mapping[str, AttributeType]:
    table: dict[str, AttributeType] = {}
    for attribute_type, info in _METADATA.items():
        table[attribute_type.value] = attribute_type
        if info.oid is not None:
            table[info.oid] = attribute_type
    return MappingProxyType(table)


_LOOKUP = _build_lookup()

_OID_PREFIX = "oid."


def resolve(text: str) -> Result[AttributeType]:
    """
    Resolve a short name or dotted OID to its AttributeType.

    Matching is ASCII case-insensitive and accepts an optional "oid."
    prefix (RFC 4514 LDAPv2 leftovers such as "OID.2.5.4.3").
    Fails with INVALID_TYPE carrying the text as written.
    """
    key = ascii_lowercase(trim(text))
    if key.startswith(_OID_PREFIX):
        key = key[len(_OID_PREFIX):]
    attribute_type = _LOOKUP.get(key)
    if attribute_type is None:
        return ResultFailures.invalid_type(text)
    return Result.success(attribute_type)


def label(attribute_type: AttributeType) -> str:
    return attribute_type.label


def requires_hex_encoding(attribute_type: AttributeType) -> bool:
    return attribute_type.hex_encoded


def is_case_sensitive(attribute_type: AttributeType) -> bool:
    return attribute_type.case_sensitive

