"""
Shared test fixtures and helpers for the dn-parser test suite.

Provides the reference Open Finance Brasil subject DN (as found in a
directory-issued client certificate) and a builder for throwaway X.509
certificates generated with cryptography.
"""

from __future__ import annotations

import datetime
from typing import Callable

import pytest
from cryptography import x509
from cryptography.hazmat.primitives import hashes
from cryptography.hazmat.primitives.asymmetric import ec

# Subject of a sandbox directory certificate. The #hex values still carry
# their ASN.1 tag and length bytes (0c = UTF8String, 13 = PrintableString).
OPEN_FINANCE_SUBJECT = (
    "CN=web.conftpp.directory.openbankingbrasil.org.br,"
    "UID=bc97b8f0-cae0-4f2f-9978-d93f0e56a833,"
    "2.5.4.97=#0c2a4f464242522d64373338346264302d383432662d343363352d626530322d396432623264356566633263,"
    "L=SAO PAULO,"
    "ST=SP,"
    "O=Chicago Advisory Partners,"
    "C=BR,"
    "2.5.4.5=#130e3433313432363636303030313937,"
    "1.3.6.1.4.1.311.60.2.1.3=#13024252,"
    "2.5.4.15=#0c1450726976617465204f7267616e697a6174696f6e"
)

ORGANIZATION_IDENTIFIER_OID = x509.ObjectIdentifier("2.5.4.97")


@pytest.fixture()
def open_finance_subject() -> str:
    """Return the reference Open Finance Brasil subject DN string."""
    return OPEN_FINANCE_SUBJECT


@pytest.fixture()
def open_finance_name() -> x509.Name:
    """
    The reference subject as a cryptography Name, in ASN.1 order.

    Values are the plain strings (no tag bytes), as cryptography decodes them.
    """
    return x509.Name(
        [
            x509.NameAttribute(x509.oid.NameOID.BUSINESS_CATEGORY, "Private Organization"),
            x509.NameAttribute(x509.oid.NameOID.JURISDICTION_COUNTRY_NAME, "BR"),
            x509.NameAttribute(x509.oid.NameOID.SERIAL_NUMBER, "43142666000197"),
            x509.NameAttribute(x509.oid.NameOID.COUNTRY_NAME, "BR"),
            x509.NameAttribute(x509.oid.NameOID.ORGANIZATION_NAME, "Chicago Advisory Partners"),
            x509.NameAttribute(x509.oid.NameOID.STATE_OR_PROVINCE_NAME, "SP"),
            x509.NameAttribute(x509.oid.NameOID.LOCALITY_NAME, "SAO PAULO"),
            x509.NameAttribute(ORGANIZATION_IDENTIFIER_OID, "OFBBR-d7384bd0-842f-43c5-be02-9d2b2d5efc2c"),
            x509.NameAttribute(x509.oid.NameOID.USER_ID, "bc97b8f0-cae0-4f2f-9978-d93f0e56a833"),
            x509.NameAttribute(
                x509.oid.NameOID.COMMON_NAME, "web.conftpp.directory.openbankingbrasil.org.br"
            ),
        ]
    )


def build_certificate(subject: x509.Name, issuer: x509.Name | None = None) -> x509.Certificate:
    """Create a short-lived self-signed (or issuer-named) EC certificate."""
    key = ec.generate_private_key(ec.SECP256R1())
    now = datetime.datetime.now(datetime.UTC)
    return (
        x509.CertificateBuilder()
        .subject_name(subject)
        .issuer_name(issuer if issuer is not None else subject)
        .public_key(key.public_key())
        .serial_number(x509.random_serial_number())
        .not_valid_before(now)
        .not_valid_after(now + datetime.timedelta(days=1))
        .sign(key, hashes.SHA256())
    )


@pytest.fixture()
def certificate_factory() -> Callable[..., x509.Certificate]:
    """Return the certificate builder."""
    return build_certificate

