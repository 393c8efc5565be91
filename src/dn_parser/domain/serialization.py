"""
Serializer — renders RDNs into the Open Finance Brasil DN string variant.

Section 7.1.2 of the Open Finance Brasil DCR 1.0 standard fixes the
format the authorization server compares against the registered
`tls_client_auth_subject_dn`:

  - most-specific RDN first (the reverse of canonical storage order)
  - RDNs joined with "," and written as Label=Value
  - the five OID-labelled types always written as # + lowercase hex of
    the value's UTF-8 bytes
  - every other value backslash-escapes each reserved symbol, wherever
    it appears, and is never double-quoted
  - whitespace other than a space at either edge of a value is written
    as hex escapes (a tab becomes \\09), so the parser does not trim it away

Escaping everything unconditionally is more than RFC 4514 strictly
requires but always re-parses to the same value.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Iterable

from dn_parser.domain.text import trim_end, trim_start

if TYPE_CHECKING:
    from dn_parser.domain.models import RelativeDistinguishedName

ESCAPABLE_SYMBOLS: frozenset[str] = frozenset(' "#+,;<=>\\')


def _hex_escape(char: str) -> str:
    return "".join(f"\\{byte:02x}" for byte in char.encode("utf-8"))


def escape_value(value: str) -> str:
    """Prefix every reserved symbol with a backslash; hex-escape other edge whitespace."""
    leading = len(value) - len(trim_start(value))
    trailing = len(trim_end(value))
    escaped = []
    for position, char in enumerate(value):
        if char in ESCAPABLE_SYMBOLS:
            escaped.append(f"\\{char}")
        elif position < leading or position >= trailing:
            escaped.append(_hex_escape(char))
        else:
            escaped.append(char)
    return "".join(escaped)


def serialize_rdn(rdn: RelativeDistinguishedName) -> str:
    attribute_type = rdn.attribute_type
    if attribute_type.hex_encoded:
        return f"{attribute_type.label}=#{rdn.value.encode('utf-8').hex()}"
    return f"{attribute_type.label}={escape_value(rdn.value)}"


def serialize(rdns: Iterable[RelativeDistinguishedName]) -> str:
    """Serialize RDNs given in canonical order. Never fails."""
    return ",".join(serialize_rdn(rdn) for rdn in reversed(tuple(rdns)))
