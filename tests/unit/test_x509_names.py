"""
Unit tests for the X.509 adapter.

Certificates are generated on the fly with cryptography, so no fixture
files are needed.
"""

from __future__ import annotations

from typing import Callable

import pytest
from cryptography import x509
from cryptography.hazmat.primitives import serialization
from cryptography.x509.oid import NameOID

from dn_parser.adapters.x509_names import from_x509_name, issuer_of, load_certificate, subject_of
from dn_parser.domain.attribute_types import AttributeType
from dn_parser.matching import comparable
from dn_parser.railway import ErrorCode, ResultAssertions


@pytest.fixture()
def open_finance_certificate(
    open_finance_name: x509.Name, certificate_factory: Callable[..., x509.Certificate]
) -> x509.Certificate:
    issuer = x509.Name([x509.NameAttribute(NameOID.COMMON_NAME, "Open Finance Brasil SANDBOX Issuing CA - G1")])
    return certificate_factory(open_finance_name, issuer)


class TestLoadCertificate:
    @pytest.mark.parametrize("encoding", [serialization.Encoding.PEM, serialization.Encoding.DER])
    def test_loads_pem_and_der(
        self, open_finance_certificate: x509.Certificate, encoding: serialization.Encoding
    ) -> None:
        raw = open_finance_certificate.public_bytes(encoding)
        loaded = ResultAssertions.assert_success(load_certificate(raw))
        assert loaded.serial_number == open_finance_certificate.serial_number

    def test_pem_with_leading_whitespace(self, open_finance_certificate: x509.Certificate) -> None:
        raw = b"\n  " + open_finance_certificate.public_bytes(serialization.Encoding.PEM)
        ResultAssertions.assert_success(load_certificate(raw))

    @pytest.mark.parametrize(
        "raw",
        [b"", b"not a certificate", b"-----BEGIN CERTIFICATE-----\nAAAA\n-----END CERTIFICATE-----\n"],
    )
    def test_garbage_is_rejected(self, raw: bytes) -> None:
        """
        GIVEN bytes that are not a certificate
        WHEN loaded
        THEN CERTIFICATE_DECODING_FAILED is returned with the cause attached.
        """
        error = ResultAssertions.assert_failure(load_certificate(raw), ErrorCode.CERTIFICATE_DECODING_FAILED)
        assert error.exception is not None


class TestSubjectAndIssuer:
    def test_subject_keeps_asn1_order(self, open_finance_certificate: x509.Certificate) -> None:
        raw = open_finance_certificate.public_bytes(serialization.Encoding.DER)
        dn = ResultAssertions.assert_success(subject_of(raw))
        assert dn.iterate()[0].attribute_type is AttributeType.BUSINESS_CATEGORY
        assert dn.iterate()[-1].attribute_type is AttributeType.CN
        assert dn.find(AttributeType.ORGANIZATION_IDENTIFIER) == "OFBBR-d7384bd0-842f-43c5-be02-9d2b2d5efc2c"

    def test_issuer(self, open_finance_certificate: x509.Certificate) -> None:
        raw = open_finance_certificate.public_bytes(serialization.Encoding.PEM)
        dn = ResultAssertions.assert_success(issuer_of(raw))
        assert dn.serialize() == r"CN=Open\ Finance\ Brasil\ SANDBOX\ Issuing\ CA\ -\ G1"

    def test_subject_matches_registered_hex_string(
        self, open_finance_certificate: x509.Certificate, open_finance_subject: str
    ) -> None:
        """
        GIVEN a certificate whose subject cryptography decodes to plain strings
        WHEN compared with the #hex string form carrying ASN.1 tag bytes
        THEN both comparable DNs are equal.
        """
        raw = open_finance_certificate.public_bytes(serialization.Encoding.PEM)
        dn = ResultAssertions.assert_success(subject_of(raw))
        assert ResultAssertions.assert_success(dn.comparator()) == ResultAssertions.assert_success(
            comparable(open_finance_subject)
        )

    def test_undecodable_certificate_short_circuits(self) -> None:
        ResultAssertions.assert_failure(subject_of(b"\x30\x00"), ErrorCode.CERTIFICATE_DECODING_FAILED)


class TestFromX509Name:
    def test_empty_name(self) -> None:
        dn = ResultAssertions.assert_success(from_x509_name(x509.Name([])))
        assert len(dn) == 0

    def test_multi_valued_rdn_is_rejected(self) -> None:
        """
        GIVEN a Name with one RDN holding two attributes
        WHEN converted
        THEN UNSUPPORTED_MULTI_VALUE_RDNS is returned.
        """
        name = x509.Name(
            [
                x509.RelativeDistinguishedName(
                    [
                        x509.NameAttribute(NameOID.COMMON_NAME, "a"),
                        x509.NameAttribute(NameOID.ORGANIZATION_NAME, "b"),
                    ]
                )
            ]
        )
        ResultAssertions.assert_failure(from_x509_name(name), ErrorCode.UNSUPPORTED_MULTI_VALUE_RDNS)

    def test_unsupported_attribute_is_rejected(self) -> None:
        name = x509.Name([x509.NameAttribute(NameOID.EMAIL_ADDRESS, "me@example.com")])
        error = ResultAssertions.assert_failure(from_x509_name(name), ErrorCode.INVALID_TYPE)
        assert error.text == "1.2.840.113549.1.9.1"

    def test_values_are_kept_verbatim(self) -> None:
        name = x509.Name([x509.NameAttribute(NameOID.COMMON_NAME, "a,b=c")])
        dn = ResultAssertions.assert_success(from_x509_name(name))
        assert dn.find(AttributeType.CN) == "a,b=c"
        assert dn.serialize() == r"CN=a\,b\=c"
