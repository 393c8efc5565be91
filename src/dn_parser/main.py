"""
Command-line entry point — `dn-parser`.

Composition root for the CLI: loads settings, configures structlog and
dispatches to one sub-command. Every sub-command runs a Result pipeline
and turns its outcome into output plus an exit code:

    dn-parser serialize 'cn = a, O=x'         → CN=a,O=x
    dn-parser compare 'UID=ABC' 'uid=abc'     → exit 0 when same entity
    dn-parser find 'CN=a,UID=x' uid           → x
    dn-parser certificate cert.pem --issuer   → issuer DN, serialized

Exit codes: 0 success, 1 rejected input (or "different entity" for
compare), 2 usage or configuration error.
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import Sequence

import structlog
from pydantic import ValidationError

from dn_parser.adapters.x509_names import issuer_of, subject_of
from dn_parser.config import AppSettings
from dn_parser.domain.attribute_types import resolve
from dn_parser.matching import same_entity
from dn_parser.parser import parse
from dn_parser.railway import ParseError, Result

EXIT_OK = 0
EXIT_REJECTED = 1
EXIT_USAGE = 2

log = structlog.get_logger()


def configure_structlog(log_level: str = "WARNING", log_format: str = "console") -> None:
    """
    Configure structlog for the CLI.

    Logs go to stderr so stdout only carries command output.
    """
    renderer = (
        structlog.processors.JSONRenderer()
        if log_format == "json"
        else structlog.dev.ConsoleRenderer()
    )
    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            structlog.processors.StackInfoRenderer(),
            structlog.dev.set_exc_info,
            structlog.processors.TimeStamper(fmt="iso"),
            renderer,
        ],
        wrapper_class=structlog.make_filtering_bound_logger(
            getattr(logging, log_level.upper(), logging.WARNING)
        ),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(file=sys.stderr),
        cache_logger_on_first_use=False,
    )


def _emit(text: str) -> int:
    sys.stdout.write(f"{text}\n")
    return EXIT_OK


def _reject(error: ParseError) -> int:
    log.info("cli.command_failed", code=error.code.value, reason=error.message)
    sys.stderr.write(f"error: {error.message}\n")
    return EXIT_REJECTED


def _run_serialize(args: argparse.Namespace) -> int:
    return parse(args.dn).either(lambda dn: _emit(dn.serialize()), _reject)


def _report_match(matched: bool) -> int:
    _emit("same entity" if matched else "different entities")
    return EXIT_OK if matched else EXIT_REJECTED


def _run_compare(args: argparse.Namespace) -> int:
    return same_entity(args.left, args.right).either(_report_match, _reject)


def _report_found(found: str | None) -> int:
    if found is None:
        sys.stderr.write("error: attribute not present\n")
        return EXIT_REJECTED
    return _emit(found)


def _run_find(args: argparse.Namespace) -> int:
    # Success cannot wrap None, so the optional value travels in a 1-tuple
    return Result.combine(
        resolve(args.type),
        parse(args.dn),
        lambda attribute_type, dn: (dn.find(attribute_type),),
    ).either(lambda found: _report_found(found[0]), _reject)


def _run_certificate(args: argparse.Namespace) -> int:
    try:
        raw = Path(args.path).read_bytes()
    except OSError as e:
        sys.stderr.write(f"error: cannot read {args.path}: {e.strerror}\n")
        return EXIT_USAGE
    extract = issuer_of if args.issuer else subject_of
    return extract(raw).either(lambda dn: _emit(dn.serialize()), _reject)


def build_argument_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="dn-parser",
        description="Parse, compare and serialize X.509 distinguished names (Open Finance Brasil variant).",
    )
    commands = parser.add_subparsers(dest="command", required=True)

    serialize_cmd = commands.add_parser("serialize", help="re-serialize a DN string")
    serialize_cmd.add_argument("dn")
    serialize_cmd.set_defaults(handler=_run_serialize)

    compare_cmd = commands.add_parser("compare", help="check whether two DNs denote the same entity")
    compare_cmd.add_argument("left")
    compare_cmd.add_argument("right")
    compare_cmd.set_defaults(handler=_run_compare)

    find_cmd = commands.add_parser("find", help="print the first value of an attribute type")
    find_cmd.add_argument("dn")
    find_cmd.add_argument("type", help="short name or OID, e.g. cn or 2.5.4.97")
    find_cmd.set_defaults(handler=_run_find)

    certificate_cmd = commands.add_parser("certificate", help="serialize a certificate's subject DN")
    certificate_cmd.add_argument("path", help="PEM or DER certificate file")
    certificate_cmd.add_argument("--issuer", action="store_true", help="use the issuer instead of the subject")
    certificate_cmd.set_defaults(handler=_run_certificate)

    return parser


def main(argv: Sequence[str] | None = None) -> int:
    """Parse arguments, load settings and run one sub-command."""
    try:
        settings = AppSettings()
    except ValidationError as e:
        sys.stderr.write(f"FATAL: Configuration error — {e}\n")
        return EXIT_USAGE

    configure_structlog(settings.log_level, settings.log_format)
    args = build_argument_parser().parse_args(argv)
    log.debug("cli.command_started", command=args.command)
    return args.handler(args)


if __name__ == "__main__":
    sys.exit(main())
