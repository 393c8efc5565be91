"""
Comparison normalizer — RFC 4518 string preparation for DN matching.

Certificates from different issuers encode the same subject in different
ways (ASN.1 tag bytes left in #hex values, stray control characters,
different case). Values are prepared before comparison:

  1. every character is classified (see `classify`) and either rejected,
     mapped to a space, dropped, or kept
  2. case-insensitive types are ASCII-lowercased
  3. organizationIdentifier is cut down to the Open Finance participant
     code: everything before the first "ofbbr-" is discarded
  4. leading and trailing spaces are trimmed

This is a subset of RFC 4518 section 2: only the character classes the
Open Finance profile needs are implemented, there is no general Unicode
normalization.

<https://datatracker.ietf.org/doc/html/rfc4518#section-2>
"""

from __future__ import annotations

import unicodedata
from dataclasses import dataclass
from enum import Enum, unique
from typing import TYPE_CHECKING, Iterable

from dn_parser.domain.attribute_types import AttributeType
from dn_parser.domain.text import ascii_lowercase, is_white_space
from dn_parser.railway import Result, ResultFailures

if TYPE_CHECKING:
    from dn_parser.domain.models import RelativeDistinguishedName

ORGANIZATION_IDENTIFIER_MARKER = "ofbbr-"


@unique
class CharacterClass(Enum):
    """Outcome of classifying one character, in priority order."""

    PROHIBITED = "prohibited"
    SPACE = "space"
    IGNORED = "ignored"
    KEEP = "keep"


# Inclusive code point ranges
_PROHIBITED_RANGES: tuple[tuple[int, int], ...] = (
    (0x0340, 0x0341),
    (0x200E, 0x200F),
    (0x202A, 0x202E),
    (0x206A, 0x206F),
    (0xE000, 0xF8FF),
    (0xF0000, 0xFFFFD),
    (0x100000, 0x10FFFD),
    (0xFFFD, 0xFFFD),
)

_SPACE_CODE_POINTS = frozenset((0x0009, 0x000A, 0x000B, 0x000C, 0x000D, 0x0085))

_IGNORED_RANGES: tuple[tuple[int, int], ...] = (
    (0x00AD, 0x00AD),
    (0x1806, 0x1806),
    (0x034F, 0x034F),
    (0x180B, 0x180D),
    (0xFE0F, 0xFF00),
    (0xFFFC, 0xFFFC),
    (0x200B, 0x200B),
)


def _in_ranges(code_point: int, ranges: tuple[tuple[int, int], ...]) -> bool:
    return any(low <= code_point <= high for low, high in ranges)


def classify(char: str) -> CharacterClass:
    """Classify a single character for comparison."""
    code_point = ord(char)
    if _in_ranges(code_point, _PROHIBITED_RANGES):
        return CharacterClass.PROHIBITED
    if code_point in _SPACE_CODE_POINTS or is_white_space(char):
        return CharacterClass.SPACE
    if _in_ranges(code_point, _IGNORED_RANGES) or unicodedata.category(char) == "Cc":
        return CharacterClass.IGNORED
    return CharacterClass.KEEP


def _map_characters(value: str) -> Result[str]:
    kept: list[str] = []
    for char in value:
        match classify(char):
            case CharacterClass.PROHIBITED:
                return ResultFailures.unexpected_character(char)
            case CharacterClass.SPACE:
                kept.append(" ")
            case CharacterClass.IGNORED:
                pass
            case CharacterClass.KEEP:
                kept.append(char)
    return Result.success("".join(kept))


def _strip_before_marker(value: str) -> Result[str]:
    # Open Finance DCR 1.0 section 7.1.2: "apply a filter using regular
    # expression to retrieve the org_id after ('OFBBR-')". Any amount of
    # leading garbage is allowed; the value is already lowercase here.
    position = value.find(ORGANIZATION_IDENTIFIER_MARKER)
    if position < 0:
        return ResultFailures.invalid_value(AttributeType.ORGANIZATION_IDENTIFIER, value)
    return Result.success(value[position:])


def prepare_value(attribute_type: AttributeType, value: str) -> Result[str]:
    """Normalize one RDN value of the given type for comparison."""
    prepared = _map_characters(value)
    if not attribute_type.case_sensitive:
        prepared = prepared.map(ascii_lowercase)
    if attribute_type is AttributeType.ORGANIZATION_IDENTIFIER:
        prepared = prepared.flat_map(_strip_before_marker)
    return prepared.map(lambda text: text.strip(" "))


@dataclass(frozen=True, slots=True, order=True)
class ComparableRdn:
    """
    A normalized RDN, used only for equality and ordering.

    Ordered by attribute type registry index, then by normalized value.
    """

    attribute_type: AttributeType
    value: str

    @staticmethod
    def of(rdn: RelativeDistinguishedName) -> Result[ComparableRdn]:
        return prepare_value(rdn.attribute_type, rdn.value).map(
            lambda value: ComparableRdn(attribute_type=rdn.attribute_type, value=value)
        )


@dataclass(frozen=True, slots=True, order=True)
class ComparableDn:
    """
    A normalized DN, used only for equality and ordering.

    Two DNs denote the same entity iff their ComparableDn are equal.
    Ordering is lexicographic over the RDNs in canonical order, so it can
    be used as a sort or dictionary key.
    """

    rdns: tuple[ComparableRdn, ...] = ()

    @staticmethod
    def of(rdns: Iterable[RelativeDistinguishedName]) -> Result[ComparableDn]:
        return Result.all_of(ComparableRdn.of(rdn) for rdn in rdns).map(
            lambda prepared: ComparableDn(rdns=tuple(prepared))
        )
