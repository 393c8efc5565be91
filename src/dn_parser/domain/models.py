"""
Domain models — immutable distinguished name value objects.

A distinguished name (DN) is a sequence of key-value pairs called
relative distinguished names (RDNs). RDNs are stored in canonical order:
least-specific first, the reverse of how RFC 4514 strings write them.

All models are frozen dataclasses. A DN is built either by the parser or
directly from RDNs (e.g. from a certificate's Name), and never changes
afterwards, so `serialize()` and `comparator()` are pure functions of it.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable, Iterator

from dn_parser.domain import serialization
from dn_parser.domain.attribute_types import AttributeType
from dn_parser.domain.comparison import ComparableDn, ComparableRdn
from dn_parser.railway import Result


@dataclass(frozen=True, slots=True)
class RelativeDistinguishedName:
    """
    A single type=value component of a DN.

    Multi-valued RDNs ("a=1+b=2") are not supported.
    """

    attribute_type: AttributeType
    value: str

    def comparator(self) -> Result[ComparableRdn]:
        return ComparableRdn.of(self)


@dataclass(frozen=True, slots=True)
class DistinguishedName:
    """
    An ordered, immutable sequence of RDNs.

    Duplicate attribute types are allowed and preserved.

    >>> dn = DistinguishedName([RelativeDistinguishedName(AttributeType.CN, "a")])
    >>> dn.serialize()
    'CN=a'
    """

    rdns: tuple[RelativeDistinguishedName, ...] = field(default=())

    def __init__(self, rdns: Iterable[RelativeDistinguishedName] = ()) -> None:
        object.__setattr__(self, "rdns", tuple(rdns))

    def find(self, attribute_type: AttributeType) -> str | None:
        """Value of the first RDN of the given type, in canonical order."""
        return next((rdn.value for rdn in self.rdns if rdn.attribute_type is attribute_type), None)

    def iterate(self) -> tuple[RelativeDistinguishedName, ...]:
        """All RDNs in canonical order (read-only)."""
        return self.rdns

    def comparator(self) -> Result[ComparableDn]:
        """
        Normalized projection of this DN for equality and ordering.

        RFC 4518 requires DN values to be prepared before comparison; see
        `dn_parser.domain.comparison`. Fails on prohibited characters or an
        organizationIdentifier without the OFBBR- marker.
        """
        return ComparableDn.of(self.rdns)

    def serialize(self) -> str:
        """Render in the Open Finance Brasil variant string format. Never fails."""
        return serialization.serialize(self.rdns)

    def __iter__(self) -> Iterator[RelativeDistinguishedName]:
        return iter(self.rdns)

    def __len__(self) -> int:
        return len(self.rdns)

    def __str__(self) -> str:
        return self.serialize()
