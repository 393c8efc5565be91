"""
Convenience factory methods for the DN failure taxonomy.

Keeps message wording and detail fields consistent wherever a failure is
produced:

    # Instead of:
    Result.failure_from(ParseError(ErrorCode.UNEXPECTED_CHARACTER, "...", character=","))

    # Write:
    ResultFailures.unexpected_character(",")
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from dn_parser.railway.failure import ErrorCode, ParseError
from dn_parser.railway.result import Result

if TYPE_CHECKING:
    from dn_parser.domain.attribute_types import AttributeType


class ResultFailures:
    """Factory methods, one per ErrorCode."""

    @staticmethod
    def hex_decoding_failed(text: str) -> Result:
        return Result.failure_from(
            ParseError(ErrorCode.HEX_DECODING_FAILED, f"could not decode hex string: {text!r}")
        )

    @staticmethod
    def invalid_type(text: str) -> Result:
        return Result.failure_from(
            ParseError(ErrorCode.INVALID_TYPE, f"invalid RDN type: {text}", text=text)
        )

    @staticmethod
    def invalid_value(attribute_type: AttributeType, value: str) -> Result:
        return Result.failure_from(
            ParseError(
                ErrorCode.INVALID_VALUE,
                f"invalid value for {attribute_type.name}: {value}",
                text=value,
                attribute_type=attribute_type,
            )
        )

    @staticmethod
    def unexpected_character(character: str) -> Result:
        return Result.failure_from(
            ParseError(
                ErrorCode.UNEXPECTED_CHARACTER,
                f"unexpected character: {character!r}",
                character=character,
            )
        )

    @staticmethod
    def unexpected_eof() -> Result:
        return Result.failure_from(ParseError(ErrorCode.UNEXPECTED_EOF, "unexpected EOF"))

    @staticmethod
    def unsupported_multi_value_rdns() -> Result:
        return Result.failure_from(
            ParseError(ErrorCode.UNSUPPORTED_MULTI_VALUE_RDNS, "multi-value RDNs are not supported")
        )

    @staticmethod
    def utf8_decoding_failed(exception: UnicodeDecodeError) -> Result:
        return Result.failure_from(
            ParseError(
                ErrorCode.UTF8_DECODING_FAILED,
                f"found a non-UTF-8 string: {exception.reason}",
                exception=exception,
            )
        )
