"""planlint command-line interface.

Usage
-----
Validate a JSON plan description::

    planlint validate plan.json

Render it for PostgreSQL::

    planlint render plan.json --dialect postgres

Read from stdin, treat warnings as errors, skip a rule::

    cat plan.json | planlint validate - --strict --disable AmbiguousOuterJoin

Exit codes: 0 ok, 1 validation failed, 2 the description could not be
parsed or built.
"""
from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path

from planlint.build.description import plan_from_json
from planlint.compile import CompilerFactory, QueryRenderer
from planlint.errors import PlanLintError
from planlint.schema.config import LintConfig
from planlint.schema.issues import IssueCode, ValidationResult
from planlint.validate.validator import PlanValidator

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_INVALID = 1
EXIT_ERROR = 2


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="planlint",
        description="Validate and render structured query plans.",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging.")

    common = argparse.ArgumentParser(add_help=False)
    common.add_argument("plan", help="Path to a JSON plan description, or '-' for stdin.")
    common.add_argument(
        "--strict", action="store_true", help="Treat warnings as errors."
    )
    common.add_argument(
        "--disable",
        action="append",
        default=[],
        choices=[code.value for code in IssueCode],
        metavar="RULE",
        help="Skip a rule (repeatable).",
    )

    sub = parser.add_subparsers(dest="command", required=True)

    validate_cmd = sub.add_parser("validate", parents=[common], help="Validate a plan.")
    validate_cmd.add_argument(
        "--json", action="store_true", help="Print the ValidationResult as JSON on stdout."
    )

    render_cmd = sub.add_parser("render", parents=[common], help="Validate and render a plan.")
    render_cmd.add_argument(
        "--dialect",
        default="ansi",
        help=f"Target dialect ({', '.join(CompilerFactory.registered_targets())}).",
    )
    return parser


def _read_plan(source: str) -> str:
    if source == "-":
        return sys.stdin.read()
    return Path(source).read_text(encoding="utf-8")


def _config(args: argparse.Namespace) -> LintConfig:
    builder = LintConfig.builder().disable(*args.disable).strict(args.strict)
    if getattr(args, "dialect", None):
        builder = builder.dialect(args.dialect)
    return builder.build()


def _report(result: ValidationResult) -> None:
    for issue in result.issues:
        print(str(issue), file=sys.stderr)


def main(argv: list[str] | None = None) -> int:
    """Run the CLI and return the process exit code."""
    args = _build_parser().parse_args(argv)
    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")

    config = _config(args)
    try:
        raw = _read_plan(args.plan)
        plan = plan_from_json(raw)
        result = PlanValidator(config).validate(plan)

        if args.command == "validate":
            if args.json:
                print(result.model_dump_json(indent=2))
            _report(result)
            return EXIT_OK if result.ok else EXIT_INVALID

        _report(result)
        if not result.ok:
            return EXIT_INVALID
        compiler = CompilerFactory.create(config.dialect)
        print(QueryRenderer(compiler).render(plan))
        return EXIT_OK
    except (OSError, UnicodeDecodeError) as exc:
        print(f"error: cannot read plan: {exc}", file=sys.stderr)
        return EXIT_ERROR
    except PlanLintError as exc:
        logger.debug("Plan could not be processed", exc_info=True)
        print(json.dumps(exc.to_error_response()), file=sys.stderr)
        return EXIT_ERROR


if __name__ == "__main__":
    sys.exit(main())
