"""
Command line entry point for formcore.
"""

from __future__ import annotations

import argparse
import json
from importlib.metadata import PackageNotFoundError, version
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from .blueprints import load_blueprint, summarize_blueprint
from .evaluator import FormEvaluator
from .logging import configure_logging, logger
from .models.blueprint import FormBlueprint


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="formcore",
        description="formcore CLI: evaluate tax form blueprints against taxpayer data.",
    )
    parser.add_argument(
        "--version",
        action="store_true",
        help="Print the installed formcore version and exit.",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Emit INFO logs to stderr.",
    )
    parser.add_argument(
        "--log-level",
        help="Log level for stderr diagnostics (overrides FORMCORE_LOG_LEVEL).",
    )
    subparsers = parser.add_subparsers(dest="command")

    evaluate = subparsers.add_parser(
        "evaluate",
        help="Resolve, format and validate every field of a blueprint.",
    )
    validate = subparsers.add_parser(
        "validate",
        help="Validate a record against a blueprint (exit code 1 when invalid).",
    )
    for sub in (evaluate, validate):
        sub.add_argument("--blueprint", required=True, help="Path to the blueprint JSON file.")
        sub.add_argument("--data", required=True, help="Path to the taxpayer data JSON file.")

    summarize = subparsers.add_parser(
        "summarize",
        help="Print page and field counts of a blueprint.",
    )
    summarize.add_argument("--blueprint", required=True, help="Path to the blueprint JSON file.")
    return parser


def _load_blueprint(parser: argparse.ArgumentParser, path: str) -> FormBlueprint:
    try:
        return load_blueprint(Path(path))
    except OSError as exc:
        parser.error(f"Failed to read --blueprint: {exc}")
    except ValidationError as exc:
        parser.error(f"Invalid blueprint {path}: {exc}")


def _load_data(parser: argparse.ArgumentParser, path: str) -> Any:
    try:
        return json.loads(Path(path).read_text(encoding="utf-8"))
    except OSError as exc:
        parser.error(f"Failed to read --data: {exc}")
    except json.JSONDecodeError as exc:
        parser.error(f"Failed to parse --data JSON: {exc}")


def _print(payload: Any) -> None:
    print(json.dumps(payload, ensure_ascii=False, indent=2))


def main(argv: list[str] | None = None) -> int:
    parser = _build_parser()
    args = parser.parse_args(argv)

    if args.log_level:
        configure_logging(args.log_level)
    elif args.verbose:
        configure_logging("INFO")
    else:
        configure_logging()

    if args.version:
        try:
            print(version("formcore"))
        except PackageNotFoundError:
            print("formcore (not installed)")
        return 0

    if args.command == "summarize":
        _print(summarize_blueprint(_load_blueprint(parser, args.blueprint)))
        return 0

    if args.command in ("evaluate", "validate"):
        blueprint = _load_blueprint(parser, args.blueprint)
        record = _load_data(parser, args.data)
        logger.info("%s %s with data from %s", args.command.capitalize(), blueprint.id, args.data)
        evaluator = FormEvaluator()

        if args.command == "validate":
            result = evaluator.validation_engine.validate_form(blueprint, record)
            _print(result.model_dump(mode="json", by_alias=True))
            return 0 if result.is_valid else 1

        evaluation = evaluator.evaluate_form(blueprint, record)
        _print(evaluation.model_dump(mode="json", by_alias=True, exclude_none=True))
        return 0

    parser.print_help()
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
