"""
Matching pipeline — decide whether two DN strings denote the same entity.

Used when a client registers with a `tls_client_auth_subject_dn` and
later presents a certificate whose subject is encoded differently (hex
values with ASN.1 tag bytes, different case for case-insensitive types).

    parse(text) → comparator() ─┐
                                ├─ equal? → Result[bool]
    parse(text) → comparator() ─┘

Either side failing to parse or normalize short-circuits to that failure.
"""

from __future__ import annotations

import structlog

from dn_parser.domain.comparison import ComparableDn
from dn_parser.domain.models import DistinguishedName
from dn_parser.parser import parse
from dn_parser.railway import Result

log = structlog.get_logger()


def comparable(text: str) -> Result[ComparableDn]:
    """Parse a DN string and project it for comparison."""
    return parse(text).flat_map(DistinguishedName.comparator)


def same_entity(left: str, right: str) -> Result[bool]:
    """
    True when both strings parse and normalize to equal comparable DNs.

    Returns a failure (never False) when either side is unparsable, so
    callers can tell "different entity" from "invalid DN".
    """
    return Result.combine(
        comparable(left),
        comparable(right),
        lambda a, b: a == b,
    ).peek(lambda matched: log.debug("dn.match.compared", matched=matched))


def matches_any(candidate: DistinguishedName, registered: list[str]) -> Result[bool]:
    """
    True when `candidate` denotes the same entity as any registered DN string.

    All registered strings must be valid; the first invalid one fails the call.
    """
    return Result.combine(
        candidate.comparator(),
        Result.all_of(comparable(text) for text in registered),
        lambda wanted, known: wanted in known,
    )
