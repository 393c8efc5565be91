"""
Small text helpers shared by the parser and the comparison normalizer.

Python's str.strip() and str.isspace() treat U+001C-U+001F as whitespace
even though they are not Unicode White_Space; DN trimming and RFC 4518
space mapping use the Unicode property, so it is spelled out here.
"""

from __future__ import annotations

import string

# Unicode White_Space property (PropList.txt)
WHITE_SPACE: frozenset[str] = frozenset(
    map(
        chr,
        (
            *range(0x0009, 0x000D + 1),
            0x0020,
            0x0085,
            0x00A0,
            0x1680,
            *range(0x2000, 0x200A + 1),
            0x2028,
            0x2029,
            0x202F,
            0x205F,
            0x3000,
        ),
    )
)
_WHITE_SPACE_CHARS = "".join(sorted(WHITE_SPACE))

_ASCII_LOWER = str.maketrans(string.ascii_uppercase, string.ascii_lowercase)


def is_white_space(char: str) -> bool:
    return char in WHITE_SPACE


def trim(value: str) -> str:
    """Strip leading and trailing Unicode White_Space."""
    return value.strip(_WHITE_SPACE_CHARS)


def trim_start(value: str) -> str:
    return value.lstrip(_WHITE_SPACE_CHARS)


def trim_end(value: str) -> str:
    return value.rstrip(_WHITE_SPACE_CHARS)


def ascii_lowercase(value: str) -> str:
    """Lowercase A-Z only; non-ASCII letters are left untouched."""
    return value.translate(_ASCII_LOWER)
