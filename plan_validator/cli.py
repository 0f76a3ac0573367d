"""Command-line interface for validating plan files.

Usage:
    plan-validator plan.json --task "Launch the beta"
    cat request.json | plan-validator - --json

The input is either a JSON list of steps or a request object of the form
``{"task": "...", "plan": [...]}``.

Exit codes:
    0: Plan validated without failed findings
    1: Plan validated with at least one failed finding
    2: Unreadable input, bad configuration or fallback result
"""

import argparse
import json
import sys
from pathlib import Path
from typing import Any, TextIO

from pydantic import ValidationError

from .formatters import format_validation_for_display
from .guardrails.config import load_validator_config
from .guardrails.engine import PlanValidatorEngineConfig
from .validator import PlanValidator
from .validator_logging import get_logger, setup_logging

logger = get_logger("cli")

EXIT_OK = 0
EXIT_FAILED_FINDINGS = 1
EXIT_ERROR = 2


class InputError(ValueError):
    """Raised when the plan input cannot be used."""


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="plan-validator",
        description="Validate a task plan for feasibility, resources, "
        "timeline, dependencies and risk.",
    )
    parser.add_argument("plan", help="Plan JSON file, or - to read stdin")
    parser.add_argument("--task", default=None, help="Task the plan is for")
    parser.add_argument("--config", type=Path, default=None, help="Config JSON file")
    parser.add_argument(
        "--json", action="store_true", help="Print the result as JSON"
    )
    parser.add_argument(
        "--hide-passed", action="store_true", help="Only list problems"
    )
    parser.add_argument(
        "--parallel", action="store_true", help="Run the rules concurrently"
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    return parser


def read_request(source: str, stdin: TextIO | None = None) -> dict[str, Any]:
    """Read a plan or validation request from a file or stdin.

    Returns:
        Request with "task" and "plan" keys.

    Raises:
        InputError: If the input is missing, not JSON, or has no plan.
    """
    try:
        if source == "-":
            raw = (stdin or sys.stdin).read()
        else:
            raw = Path(source).read_text()
    except OSError as e:
        raise InputError(f"Cannot read plan: {e}") from None

    try:
        data = json.loads(raw)
    except json.JSONDecodeError as e:
        raise InputError(f"Plan is not valid JSON: {e}") from None

    if isinstance(data, list):
        return {"task": "", "plan": data}

    if isinstance(data, dict):
        if data.get("plan") is None:
            raise InputError("Missing required parameter: plan")
        return {"task": data.get("task") or "", "plan": data["plan"]}

    raise InputError("Plan must be a JSON list of steps or a request object")


def main(argv: list[str] | None = None, stdout: TextIO | None = None) -> int:
    """Run the command line tool and return its exit code."""
    args = build_parser().parse_args(argv)
    out = stdout or sys.stdout
    setup_logging(verbose=args.verbose)

    try:
        request = read_request(args.plan)
        config = load_validator_config(args.config)
    except (InputError, FileNotFoundError, ValueError, ValidationError) as e:
        logger.debug(f"Rejected input {args.plan}: {e}")
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_ERROR

    task = args.task if args.task is not None else request["task"]
    validator = PlanValidator(
        config=config,
        engine_config=PlanValidatorEngineConfig(parallel_execution=args.parallel),
    )
    result = validator.validate(task, request["plan"])

    if args.json:
        print(json.dumps(result.to_dict(), indent=2), file=out)
    else:
        print(
            format_validation_for_display(result, include_passed=not args.hide_passed),
            file=out,
        )

    if not result.success:
        return EXIT_ERROR
    return EXIT_FAILED_FINDINGS if result.has_failures else EXIT_OK


if __name__ == "__main__":
    sys.exit(main())
