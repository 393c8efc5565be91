"""
Railway-Oriented Programming support for dn_parser.

Explicit, composable error handling: malformed input travels on the
failure track as a typed ParseError instead of being raised.

    from dn_parser.railway import ErrorCode, Result

    result = parse("CN=a,+").map(lambda dn: dn.serialize())
    if not result:
        assert result.error().code is ErrorCode.UNSUPPORTED_MULTI_VALUE_RDNS
"""

from dn_parser.railway.assertions import ResultAssertions
from dn_parser.railway.failure import ErrorCode, ParseError
from dn_parser.railway.result import Failure, Result, Success
from dn_parser.railway.result_failures import ResultFailures

__all__ = [
    "Result",
    "Success",
    "Failure",
    "ErrorCode",
    "ParseError",
    "ResultFailures",
    "ResultAssertions",
]
