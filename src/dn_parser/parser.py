"""
Parsing engine — RFC 4514 string → DistinguishedName.

The format is simple enough that the parser is written by hand: one
forward scan over the UTF-8 bytes of the input, followed by an EOF
marker, with no backtracking.

    DN    = RDN ("," RDN)* | ""
    RDN   = Type "=" Value
    Type  = text up to "=", trimmed, resolved by the attribute-type registry
    Value = escaped text | "#" hex octets

Escapes are handled by a small explicit state value threaded through the
loop:

    NORMAL ──"\\"──→ STARTED ──reserved symbol──→ NORMAL (emit symbol)
                        │
                        └──hex digit──→ HEX_PENDING ──hex digit──→ NORMAL (emit byte)

Not supported: multi-valued RDNs ("+"), LDAPv2 quoting. The string form
lists the most-specific RDN first; the parsed DN stores them reversed.
"""

from __future__ import annotations

import string
from dataclasses import dataclass
from enum import Enum, auto
from itertools import chain
from typing import Iterator

import structlog

from dn_parser.domain.attribute_types import AttributeType, resolve
from dn_parser.domain.models import DistinguishedName, RelativeDistinguishedName
from dn_parser.domain.serialization import ESCAPABLE_SYMBOLS
from dn_parser.domain.text import trim, trim_end, trim_start
from dn_parser.railway import ParseError, Result, ResultFailures

log = structlog.get_logger()

_COMMA = ord(",")
_EQUALS = ord("=")
_BACKSLASH = ord("\\")
_OCTOTHORPE = ord("#")
_PLUS = ord("+")

_ESCAPABLE_BYTES = frozenset(ord(symbol) for symbol in ESCAPABLE_SYMBOLS)
_HEX_DIGITS = frozenset(string.hexdigits)

# Appended after the last input byte
_EOF = None


class _EscapePhase(Enum):
    NORMAL = auto()
    STARTED = auto()
    HEX_PENDING = auto()


@dataclass(frozen=True, slots=True)
class _Escaping:
    """Escape sub-machine state. `first` holds the first hex digit while HEX_PENDING."""

    phase: _EscapePhase = _EscapePhase.NORMAL
    first: int = 0

    @property
    def is_pending(self) -> bool:
        return self.phase is not _EscapePhase.NORMAL

    def consume(self, byte: int) -> Result[tuple[_Escaping, int | None]]:
        """Feed one byte; returns the next state and the decoded byte, if complete."""
        match self.phase:
            case _EscapePhase.STARTED:
                if byte in _ESCAPABLE_BYTES:
                    return Result.success((_NOT_ESCAPING, byte))
                return Result.success((_Escaping(_EscapePhase.HEX_PENDING, byte), None))
            case _EscapePhase.HEX_PENDING:
                return _decode_hex_pair(self.first, byte).map(lambda decoded: (_NOT_ESCAPING, decoded))
        raise TypeError("unreachable")  # pragma: no cover


_NOT_ESCAPING = _Escaping()
_ESCAPE_STARTED = _Escaping(_EscapePhase.STARTED)


def _decode_hex_pair(high: int, low: int) -> Result[int]:
    pair = bytes((high, low)).decode("latin-1")
    if not all(digit in _HEX_DIGITS for digit in pair):
        return ResultFailures.hex_decoding_failed(pair)
    return Result.success(int(pair, 16))


def _decode_hex_value(text: str) -> Result[str]:
    """Decode a #hex value body; the octets must form valid UTF-8."""
    if len(text) % 2 or not all(digit in _HEX_DIGITS for digit in text):
        return ResultFailures.hex_decoding_failed(text)
    return _decode_utf8(bytes.fromhex(text))


def _decode_utf8(raw: bytes | bytearray) -> Result[str]:
    try:
        return Result.success(raw.decode("utf-8"))
    except UnicodeDecodeError as e:
        return ResultFailures.utf8_decoding_failed(e)


def _missing(at_eof: bool) -> Result:
    """The error for an RDN that ends before it is complete."""
    return ResultFailures.unexpected_eof() if at_eof else ResultFailures.unexpected_character(",")


class _Scanner:
    """Mutable per-call scan state. Never shared between calls."""

    def __init__(self) -> None:
        self.rdns: list[RelativeDistinguishedName] = []
        self.acc = bytearray()
        self.escaping = _NOT_ESCAPING
        self.value_is_hex = False
        self.attribute_type: AttributeType | None = None
        # Byte span of acc holding escaped bytes; edge whitespace inside it is kept
        self.escaped_from: int | None = None
        self.escaped_to = 0

    def feed(self, item: int | None) -> Result | None:
        """Consume one byte (or EOF). Returns a failure to abort, None to continue."""
        if self.escaping.is_pending:
            if item is _EOF:
                # Cannot end a DN with a backslash
                return ResultFailures.unexpected_eof()
            stepped = self.escaping.consume(item)
            if stepped.is_failure():
                return stepped
            self.escaping, decoded = stepped.value()
            if decoded is not None:
                self._append_escaped(decoded)
            return None

        if item is _EOF or item == _COMMA:
            return self._finish_rdn(at_eof=item is _EOF)
        if item == _EQUALS:
            return self._finish_type()
        if item == _BACKSLASH:
            self.escaping = _ESCAPE_STARTED
        elif item == _OCTOTHORPE and not self.acc:
            # "#" right after the equals sign starts a hex-encoded value
            self.value_is_hex = True
        elif item == _PLUS:
            return ResultFailures.unsupported_multi_value_rdns()
        else:
            self.acc.append(item)
        return None

    def _append_escaped(self, byte: int) -> None:
        if self.escaped_from is None:
            self.escaped_from = len(self.acc)
        self.acc.append(byte)
        self.escaped_to = len(self.acc)

    def _reset_accumulator(self) -> None:
        self.acc.clear()
        self.escaped_from = None
        self.escaped_to = 0

    def _trim_unescaped(self, text: str) -> str:
        """Trim edge whitespace, except whitespace that was written escaped."""
        if self.escaped_from is None:
            return trim(text)
        # Escapes start and end on character boundaries once the whole of acc is valid UTF-8
        start = len(self.acc[: self.escaped_from].decode("utf-8"))
        end = len(text) - len(self.acc[self.escaped_to :].decode("utf-8"))
        return trim_start(text[:start]) + text[start:end] + trim_end(text[end:])

    def _finish_type(self) -> Result | None:
        if self.attribute_type is not None:
            # 'a = b = c' is not a valid RDN
            return ResultFailures.unexpected_character("=")
        decoded = _decode_utf8(self.acc)
        if decoded.is_failure():
            return decoded
        type_text = trim(decoded.value())
        if not type_text:
            return ResultFailures.unexpected_character("=")
        resolved = resolve(type_text)
        if resolved.is_failure():
            return resolved
        self.attribute_type = resolved.value()
        self._reset_accumulator()
        return None

    def _finish_rdn(self, at_eof: bool) -> Result | None:
        decoded = _decode_utf8(self.acc)
        if decoded.is_failure():
            return decoded
        value = self._trim_unescaped(decoded.value())
        if not value:
            if at_eof and self.attribute_type is None:
                # Empty input, or EOF right after a complete RDN
                return None
            return _missing(at_eof)
        if self.attribute_type is None:
            return _missing(at_eof)

        if self.value_is_hex:
            self.value_is_hex = False
            hex_decoded = _decode_hex_value(value)
            if hex_decoded.is_failure():
                return hex_decoded
            value = hex_decoded.value()

        self.rdns.append(RelativeDistinguishedName(self.attribute_type, value))
        self.attribute_type = None
        self._reset_accumulator()
        return None


def _items(text: str) -> Iterator[int | None]:
    return chain(text.encode("utf-8"), (_EOF,))


def _scan(text: str) -> Result[DistinguishedName]:
    scanner = _Scanner()
    for item in _items(text):
        failure = scanner.feed(item)
        if failure is not None:
            return failure
    # The string form lists RDNs most-specific first; store them the other way round
    return Result.success(DistinguishedName(reversed(scanner.rdns)))


def _log_rejection(error: ParseError) -> None:
    log.debug("dn.parse.rejected", code=error.code.value, reason=error.message)


def parse(text: str) -> Result[DistinguishedName]:
    """
    Parse an RFC 4514 DN string.

    Returns Success(DistinguishedName), possibly empty, or a Failure whose
    ParseError.code says why the text was rejected. Never raises for
    malformed input and never returns a partial DN.
    """
    return _scan(text).peek_failure(_log_rejection)
