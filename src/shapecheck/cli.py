"""Command-line interface router for shapecheck."""

from __future__ import annotations

import argparse
import importlib
import json
import sys
import tomllib
from collections.abc import Mapping, Sequence
from pathlib import Path
from typing import Any

from shapecheck.checker import as_runtime_type, validate_shape
from shapecheck.config import Settings, SettingsError, load_settings
from shapecheck.constants import LOG_LEVELS
from shapecheck.errors import MalformedDefinitionError
from shapecheck.inference import infer
from shapecheck.observability import correlation_scope, setup_logging, shutdown_logging
from shapecheck.types import ObjectShape, RuntimeType
from shapecheck.utils.jsonvalues import canonical_json

STDIN_DOCUMENT = "-"


class CLIError(RuntimeError):
    """Typed CLI failure with an explicit process exit code."""

    def __init__(self, message: str, exit_code: int = 2) -> None:
        super().__init__(message)
        self.message = message
        self.exit_code = exit_code

    def __str__(self) -> str:
        return self.message


# ---------------------------------------------------------------------------
# Parser
# ---------------------------------------------------------------------------


def build_parser() -> argparse.ArgumentParser:
    """Build the argparse command router."""

    parser = argparse.ArgumentParser(
        prog="shapecheck",
        description=(
            "shapecheck — recursive runtime shape checking for loosely-typed data.\n\n"
            "Common workflows:\n"
            "  shapecheck check app.schemas:USER user.json   Check a document against a shape\n"
            "  shapecheck infer user.json                    Print a document's inferred type\n"
        ),
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    common = argparse.ArgumentParser(add_help=False)
    common.add_argument(
        "--config",
        dest="config_path",
        default=None,
        help="Path to a settings TOML file (default: ./shapecheck.toml or [tool.shapecheck]).",
    )
    common.add_argument(
        "--log-level",
        choices=LOG_LEVELS,
        default=None,
        help="Override logging.level for this invocation.",
    )

    subparsers = parser.add_subparsers(dest="command", required=True)

    check_parser = subparsers.add_parser(
        "check",
        parents=[common],
        help="Check a JSON or TOML document against a shape",
        description=(
            "Import a shape (module:attribute) and check a document against it.\n"
            "Exit status is 0 when the document conforms and 1 when it does not.\n\n"
            "Examples:\n"
            "  shapecheck check app.schemas:USER user.json\n"
            "  shapecheck check app.schemas:USER - --format json < user.json\n"
        ),
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    check_parser.add_argument("shape_ref", help="Shape to import, as module:attribute")
    check_parser.add_argument("document", help="Path to a .json/.toml document, or - for stdin")
    check_parser.add_argument(
        "--exhaustive",
        action="store_true",
        default=None,
        help="Reject values that match more than one union member or enum entry",
    )
    check_parser.add_argument(
        "--format",
        dest="output_format",
        choices=("text", "json"),
        default="text",
        help="Output format (default: text)",
    )
    check_parser.set_defaults(handler=_cmd_check)

    infer_parser = subparsers.add_parser(
        "infer",
        parents=[common],
        help="Print the inferred type of a document",
    )
    infer_parser.add_argument("document", help="Path to a .json/.toml document, or - for stdin")
    infer_parser.set_defaults(handler=_cmd_infer)

    return parser


def run_cli(argv: Sequence[str] | None = None) -> int:
    """Parse argv, route to a command handler, and return process exit code."""

    parser = build_parser()
    namespace = parser.parse_args(list(argv) if argv is not None else None)
    handler = getattr(namespace, "handler", None)
    if not callable(handler):
        parser.print_help(sys.stderr)
        return 2

    try:
        result = handler(namespace)
    except (CLIError, SettingsError) as exc:
        print(f"error: {exc}", file=sys.stderr)
        return exc.exit_code if isinstance(exc, CLIError) else 2
    finally:
        shutdown_logging()
    return int(result)


# ---------------------------------------------------------------------------
# Command handlers
# ---------------------------------------------------------------------------


def _cmd_check(args: argparse.Namespace) -> int:
    settings = _load_effective_settings(args, exhaustive=args.exhaustive)
    expected = _resolve_shape(args.shape_ref)
    document = _load_document(args.document)

    with correlation_scope(document=args.document, shape=args.shape_ref):
        result = validate_shape(document, expected, exhaustive=settings.exhaustive)

    if args.output_format == "json":
        payload: dict[str, Any] = {
            "valid": result.is_valid,
            "shape": args.shape_ref,
            "document": args.document,
            "failure": result.failure.to_dict() if result.failure is not None else None,
        }
        print(canonical_json(payload))
    elif result.failure is None:
        print(f"ok: {args.document} conforms to {args.shape_ref}")
    else:
        message = result.failure.describe(max_value_length=settings.max_value_length)
        print(f"{args.document}: {message}")
    return 0 if result.is_valid else 1


def _cmd_infer(args: argparse.Namespace) -> int:
    _load_effective_settings(args)
    document = _load_document(args.document)
    print(infer(document).name)
    return 0


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _load_effective_settings(
    args: argparse.Namespace,
    *,
    exhaustive: bool | None = None,
) -> Settings:
    settings = load_settings(
        args.config_path,
        cli_overrides={
            "logging.level": args.log_level,
            "check.exhaustive": exhaustive,
        },
    )
    setup_logging(settings)
    return settings


def _resolve_shape(shape_ref: str) -> RuntimeType:
    module_name, separator, attribute_path = shape_ref.partition(":")
    if not separator or not module_name or not attribute_path:
        raise CLIError(f"shape reference must look like module:attribute, got {shape_ref!r}")

    try:
        target: object = importlib.import_module(module_name)
    except ImportError as exc:
        raise CLIError(f"unable to import shape module {module_name!r}: {exc}") from exc

    for part in attribute_path.split("."):
        try:
            target = getattr(target, part)
        except AttributeError as exc:
            raise CLIError(f"{shape_ref!r} does not name an attribute ({part!r} missing)") from exc

    if not isinstance(target, (RuntimeType, ObjectShape, Mapping)):
        raise CLIError(
            f"{shape_ref!r} must be a runtime type, ObjectShape, or mapping, "
            f"got {type(target).__name__}"
        )
    try:
        return as_runtime_type(target)
    except MalformedDefinitionError as exc:
        raise CLIError(f"{shape_ref!r} is not a valid shape: {exc}") from exc


def _load_document(document: str) -> object:
    label = "<stdin>" if document == STDIN_DOCUMENT else document
    try:
        return _read_document(document)
    except UnicodeDecodeError as exc:
        raise CLIError(f"invalid document {label}: not valid UTF-8 ({exc.reason})") from exc
    except RecursionError as exc:
        raise CLIError(f"invalid document {label}: nesting is too deep to parse") from exc


def _read_document(document: str) -> object:
    if document == STDIN_DOCUMENT:
        return _parse_json(sys.stdin.read(), "<stdin>")

    path = Path(document)
    try:
        if path.suffix.lower() == ".toml":
            with path.open("rb") as handle:
                return tomllib.load(handle)
        text = path.read_text(encoding="utf-8")
    except FileNotFoundError as exc:
        raise CLIError(f"document not found: {path}") from exc
    except tomllib.TOMLDecodeError as exc:
        raise CLIError(f"invalid TOML in {path}: {exc}") from exc
    except OSError as exc:
        raise CLIError(f"unable to read document {path}: {exc}") from exc
    return _parse_json(text, str(path))


def _parse_json(text: str, label: str) -> object:
    try:
        return json.loads(text)
    except json.JSONDecodeError as exc:
        raise CLIError(f"invalid JSON in {label}: {exc}") from exc


__all__ = ["CLIError", "build_parser", "run_cli"]
