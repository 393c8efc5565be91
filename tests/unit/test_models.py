"""
Unit tests for domain models — value objects.

Verifies frozen dataclass behavior, lookup by attribute type and
read-only iteration.
"""

from __future__ import annotations

import pytest

from dn_parser.domain.attribute_types import AttributeType
from dn_parser.domain.models import DistinguishedName, RelativeDistinguishedName


@pytest.fixture()
def subject() -> DistinguishedName:
    """C=BR, O=Acme, OU=first, OU=second, CN=web in canonical order."""
    return DistinguishedName(
        [
            RelativeDistinguishedName(AttributeType.C, "BR"),
            RelativeDistinguishedName(AttributeType.O, "Acme"),
            RelativeDistinguishedName(AttributeType.OU, "first"),
            RelativeDistinguishedName(AttributeType.OU, "second"),
            RelativeDistinguishedName(AttributeType.CN, "web"),
        ]
    )


class TestDistinguishedName:
    """Verify DistinguishedName value object behavior."""

    def test_find_returns_first_match_in_canonical_order(self, subject: DistinguishedName) -> None:
        """
        GIVEN a DN with two OU RDNs
        WHEN find(OU) is called
        THEN the value of the first one in canonical order is returned.
        """
        assert subject.find(AttributeType.OU) == "first"

    def test_find_absent_type_returns_none(self, subject: DistinguishedName) -> None:
        assert subject.find(AttributeType.UID) is None

    def test_find_does_not_confuse_ou_with_its_oid_form(self) -> None:
        dn = DistinguishedName([RelativeDistinguishedName(AttributeType.ORGANIZATIONAL_UNIT_NAME, "x")])
        assert dn.find(AttributeType.OU) is None

    def test_iterate_preserves_order_and_duplicates(self, subject: DistinguishedName) -> None:
        assert [rdn.value for rdn in subject.iterate()] == ["BR", "Acme", "first", "second", "web"]

    def test_iterate_is_read_only(self, subject: DistinguishedName) -> None:
        """
        GIVEN a DN
        WHEN its RDN sequence is retrieved
        THEN it is an immutable tuple.
        """
        assert isinstance(subject.iterate(), tuple)

    def test_input_list_is_copied(self) -> None:
        rdns = [RelativeDistinguishedName(AttributeType.CN, "a")]
        dn = DistinguishedName(rdns)
        rdns.append(RelativeDistinguishedName(AttributeType.CN, "b"))
        assert len(dn) == 1

    def test_frozen_prevents_mutation(self, subject: DistinguishedName) -> None:
        with pytest.raises(AttributeError):
            subject.rdns = ()  # type: ignore[misc]

    def test_len_and_iter(self, subject: DistinguishedName) -> None:
        assert len(subject) == 5
        assert list(subject) == list(subject.iterate())

    def test_default_is_empty(self) -> None:
        dn = DistinguishedName()
        assert len(dn) == 0
        assert dn.find(AttributeType.CN) is None

    def test_equality_is_structural(self) -> None:
        """
        GIVEN two DNs built from equal RDNs
        WHEN compared with ==
        THEN they are equal and hash alike.
        """
        a = DistinguishedName([RelativeDistinguishedName(AttributeType.CN, "a")])
        b = DistinguishedName((RelativeDistinguishedName(AttributeType.CN, "a"),))
        assert a == b
        assert hash(a) == hash(b)

    def test_str_matches_serialize(self, subject: DistinguishedName) -> None:
        assert str(subject) == subject.serialize() == "CN=web,OU=second,OU=first,O=Acme,C=BR"


class TestRelativeDistinguishedName:
    def test_fields(self) -> None:
        rdn = RelativeDistinguishedName(AttributeType.UID, "u-1")
        assert rdn.attribute_type is AttributeType.UID
        assert rdn.value == "u-1"

    def test_frozen_prevents_mutation(self) -> None:
        rdn = RelativeDistinguishedName(AttributeType.UID, "u-1")
        with pytest.raises(AttributeError):
            rdn.attribute_type = AttributeType.CN  # type: ignore[misc]
