"""
dn_parser — X.509 distinguished name parser for Open Finance Brasil.

Parses RFC 4514 DN strings from certificate subject/issuer fields,
normalizes values for cross-issuer comparison (RFC 4518, subset) and
re-serializes them in the variant format of the Open Finance Brasil
Dynamic Client Registration standard.

Built on the Railway-Oriented Programming (ROP) Result type: malformed
input is returned as a typed failure, never raised.

    from dn_parser import AttributeType, parse

    dn = parse("CN=web.example.org.br,2.5.4.97=#4f464242522d31").value()
    dn.find(AttributeType.CN)   # 'web.example.org.br'
    dn.serialize()              # 'CN=web.example.org.br,2.5.4.97=#4f464242522d31'
"""

from dn_parser.domain.attribute_types import AttributeType
from dn_parser.domain.comparison import ComparableDn, ComparableRdn
from dn_parser.domain.models import DistinguishedName, RelativeDistinguishedName
from dn_parser.parser import parse
from dn_parser.railway import ErrorCode, ParseError, Result

__all__ = [
    "AttributeType",
    "ComparableDn",
    "ComparableRdn",
    "DistinguishedName",
    "ErrorCode",
    "ParseError",
    "RelativeDistinguishedName",
    "Result",
    "parse",
]

__version__ = "0.1.0"
