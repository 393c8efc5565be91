"""
X.509 adapter — certificate subject/issuer → DistinguishedName.

Adapter layer built on cryptography (PyCA): the certificate is loaded
(PEM or DER), and its x509.Name is converted attribute by attribute
instead of round-tripping through `Name.rfc4514_string()`, whose escaping
does not cover "=" and would be rejected by the parser.

Pipeline:
  raw PEM/DER bytes
    → cryptography: load_pem_x509_certificate / load_der_x509_certificate
    → x509.Name (RDNs in ASN.1 order, least-specific first)
    → registry lookup of each attribute OID
    → DistinguishedName (canonical order == ASN.1 order)

Failures:
  - undecodable certificate     → CERTIFICATE_DECODING_FAILED
  - multi-valued RDN            → UNSUPPORTED_MULTI_VALUE_RDNS
  - attribute OID not supported → INVALID_TYPE
"""

from __future__ import annotations

import structlog
from cryptography import x509

from dn_parser.domain.attribute_types import resolve
from dn_parser.domain.models import DistinguishedName, RelativeDistinguishedName
from dn_parser.railway import ErrorCode, Result, ResultFailures

log = structlog.get_logger()

_PEM_MARKER = b"-----BEGIN"


def load_certificate(raw: bytes) -> Result[x509.Certificate]:
    """Load a PEM or DER encoded X.509 certificate."""
    if raw.lstrip().startswith(_PEM_MARKER):
        result = Result.from_computation(
            lambda: x509.load_pem_x509_certificate(raw),
            ErrorCode.CERTIFICATE_DECODING_FAILED,
            "Failed to load PEM certificate",
        )
    else:
        result = Result.from_computation(
            lambda: x509.load_der_x509_certificate(raw),
            ErrorCode.CERTIFICATE_DECODING_FAILED,
            "Failed to load DER certificate",
        )
    return result.peek_failure(
        lambda err: log.warning("certificate.load_failed", size=len(raw), error=err.message)
    )


def _to_rdn(rdn: x509.RelativeDistinguishedName) -> Result[RelativeDistinguishedName]:
    attributes = list(rdn)
    if len(attributes) != 1:
        return ResultFailures.unsupported_multi_value_rdns()
    attribute = attributes[0]
    if not isinstance(attribute.value, str):
        # Only x500UniqueIdentifier carries bytes, and it is not a supported type
        return ResultFailures.invalid_type(attribute.oid.dotted_string)
    return resolve(attribute.oid.dotted_string).map(
        lambda attribute_type: RelativeDistinguishedName(attribute_type, attribute.value)
    )


def from_x509_name(name: x509.Name) -> Result[DistinguishedName]:
    """Convert a cryptography Name, keeping its RDN order."""
    return Result.all_of(_to_rdn(rdn) for rdn in name.rdns).map(DistinguishedName)


def subject_of(raw: bytes) -> Result[DistinguishedName]:
    """DistinguishedName of the certificate's subject."""
    return load_certificate(raw).flat_map(lambda cert: from_x509_name(cert.subject))


def issuer_of(raw: bytes) -> Result[DistinguishedName]:
    """DistinguishedName of the certificate's issuer."""
    return load_certificate(raw).flat_map(lambda cert: from_x509_name(cert.issuer))
