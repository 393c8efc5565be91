"""
Failure description — structured error information for the failure track.

Every way a distinguished name can be rejected has one ErrorCode. The
ParseError carries the code, a human-readable message and the typed
details that code needs (the offending character, the unresolvable type
text, the attribute type whose business rule failed).

Enum + frozen dataclass give us __eq__, __hash__ and __repr__ for free,
and Enum members are singleton-comparable with `is`.
"""

from __future__ import annotations

import traceback
from dataclasses import dataclass, field
from enum import Enum, unique
from typing import TYPE_CHECKING, Optional

if TYPE_CHECKING:
    from dn_parser.domain.attribute_types import AttributeType


@unique
class ErrorCode(Enum):
    """
    Structured error codes for the failure track.

    All of them are terminal: there is no I/O behind a parse, so nothing
    is worth retrying. Callers reject the DN (or the certificate carrying
    it) on any failure.
    """

    HEX_DECODING_FAILED = "HEX_DECODING_FAILED"
    """Malformed or odd-length hex in an escape sequence or a #hex value."""

    INVALID_TYPE = "INVALID_TYPE"
    """Attribute type not present in the registry."""

    INVALID_VALUE = "INVALID_VALUE"
    """A type-specific business rule was violated."""

    UNEXPECTED_CHARACTER = "UNEXPECTED_CHARACTER"
    """A structural or prohibited character where it is forbidden."""

    UNEXPECTED_EOF = "UNEXPECTED_EOF"
    """Input ended mid-token, mid-escape or mid-value."""

    UNSUPPORTED_MULTI_VALUE_RDNS = "UNSUPPORTED_MULTI_VALUE_RDNS"
    """A '+' was found; multi-valued RDNs are not supported."""

    UTF8_DECODING_FAILED = "UTF8_DECODING_FAILED"
    """Decoded bytes are not valid UTF-8 text."""

    CERTIFICATE_DECODING_FAILED = "CERTIFICATE_DECODING_FAILED"
    """Raw bytes are neither a PEM nor a DER X.509 certificate."""


@dataclass(frozen=True, slots=True)
class ParseError:
    """
    Immutable failure descriptor.

    Only the detail fields relevant to `code` are populated:

      - UNEXPECTED_CHARACTER → `character`
      - INVALID_TYPE         → `text` (the type as written)
      - INVALID_VALUE        → `attribute_type` and `text` (the value)

    >>> err = ParseError(ErrorCode.UNEXPECTED_CHARACTER, "unexpected character: ','", character=",")
    >>> err.character
    ','
    """

    code: ErrorCode
    message: str
    character: Optional[str] = None
    text: Optional[str] = None
    attribute_type: Optional[AttributeType] = None
    exception: Optional[BaseException] = field(default=None, repr=False, compare=False)

    def full_stack_trace(self) -> str:
        """Message followed by the formatted exception chain, when there is one."""
        if self.exception is None:
            return self.message
        tb = "".join(
            traceback.format_exception(type(self.exception), self.exception, self.exception.__traceback__)
        )
        return f"{self.message}\n{tb}"
