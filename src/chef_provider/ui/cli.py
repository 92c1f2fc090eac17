"""Command-line interface router for chef-provider."""

from __future__ import annotations

import argparse
import json
import os
import sys
from collections.abc import Mapping, Sequence
from dataclasses import dataclass

from chef_provider.auth.credentials import CredentialSourceError
from chef_provider.config import (
    ConfigLoadError,
    ConfigValidationError,
    assemble_config,
    effective_config,
    load_provider_attributes,
    translate_attributes,
    validate_server_url,
)
from chef_provider.constants import (
    ATTR_ALLOW_UNVERIFIED_SSL,
    ATTR_CLIENT_NAME,
    ATTR_KEY_MATERIAL,
    ATTR_SERVER_URL,
    ENV_LOG_FORMAT,
    ENV_LOG_LEVEL,
)
from chef_provider.observability import configure_logging, correlation_scope
from chef_provider.state import normalize_run_list, normalize_structured


@dataclass(frozen=True, slots=True)
class CLIError(RuntimeError):
    """Typed CLI failure with an explicit process exit code."""

    message: str
    exit_code: int = 2

    def __str__(self) -> str:
        return self.message


# ---------------------------------------------------------------------------
# Parser
# ---------------------------------------------------------------------------


def build_parser() -> argparse.ArgumentParser:
    """Build the argparse command router."""

    parser = argparse.ArgumentParser(
        prog="chef-provider",
        description=(
            "chef-provider: configuration checks and state normalization.\n\n"
            "Common workflows:\n"
            "  chef-provider check --config provider.toml   Validate and resolve settings\n"
            "  chef-provider validate-url URL               Check a Chef server URL\n"
            "  chef-provider normalize-json '{...}'         Canonical structured state\n"
            "  chef-provider normalize-run-list foo         Canonical run-list entries\n"
        ),
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "--log-level",
        default=os.environ.get(ENV_LOG_LEVEL, "WARNING"),
        help=f"Log level (default: ${ENV_LOG_LEVEL} or WARNING).",
    )
    parser.add_argument(
        "--log-format",
        default=os.environ.get(ENV_LOG_FORMAT, "json"),
        choices=("json", "text"),
        help=f"Log output format on stderr (default: ${ENV_LOG_FORMAT} or json).",
    )

    subparsers = parser.add_subparsers(dest="command", required=True)

    # check ---------------------------------------------------------------
    check_parser = subparsers.add_parser(
        "check",
        help="Validate provider attributes and resolve the client key.",
    )
    check_parser.add_argument(
        "--config",
        dest="config_path",
        default=None,
        help="TOML file with a [provider] table.",
    )
    check_parser.add_argument("--server-url", default=None, help="Chef server URL.")
    check_parser.add_argument("--client-name", default=None, help="Chef client name.")
    check_parser.add_argument(
        "--key-material",
        default=None,
        help="Client key material (prefer CHEF_PRIVATE_KEY_FILE or CHEF_KEY_MATERIAL).",
    )
    check_parser.add_argument(
        "--allow-unverified-ssl",
        action="store_true",
        default=None,
        help="Permit unverifiable SSL certificates.",
    )
    check_parser.add_argument(
        "--json", action="store_true", default=False, help="Emit a JSON payload."
    )
    check_parser.set_defaults(handler=_cmd_check)

    # validate-url --------------------------------------------------------
    url_parser = subparsers.add_parser("validate-url", help="Check a Chef server URL.")
    url_parser.add_argument("url")
    url_parser.set_defaults(handler=_cmd_validate_url)

    # normalize-json ------------------------------------------------------
    json_parser = subparsers.add_parser(
        "normalize-json",
        help="Print the canonical form of a JSON object (stdin when omitted or '-').",
    )
    json_parser.add_argument("value", nargs="?", default="-")
    json_parser.set_defaults(handler=_cmd_normalize_json)

    # normalize-run-list --------------------------------------------------
    run_list_parser = subparsers.add_parser(
        "normalize-run-list",
        help="Print canonical run-list entries, one per line.",
    )
    run_list_parser.add_argument("entries", nargs="+")
    run_list_parser.set_defaults(handler=_cmd_normalize_run_list)

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
        configure_logging(namespace.log_level, log_format=namespace.log_format)
    except ValueError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 2

    # CLIError is handled inside the scope; contextlib cannot reassign
    # __traceback__ on a frozen dataclass exception.
    with correlation_scope(command=namespace.command):
        try:
            result = handler(namespace)
        except CLIError as exc:
            print(f"error: {exc}", file=sys.stderr)
            return exc.exit_code
    return int(result)


# ---------------------------------------------------------------------------
# Command handlers
# ---------------------------------------------------------------------------


def _cmd_check(args: argparse.Namespace) -> int:
    overrides: dict[str, object] = {
        ATTR_SERVER_URL: args.server_url,
        ATTR_CLIENT_NAME: args.client_name,
        ATTR_KEY_MATERIAL: args.key_material,
        ATTR_ALLOW_UNVERIFIED_SSL: args.allow_unverified_ssl,
    }
    try:
        raw = load_provider_attributes(args.config_path, cli_overrides=overrides)
    except ConfigLoadError as exc:
        raise CLIError(str(exc)) from exc

    try:
        attributes, issues = translate_attributes(raw)
        config = assemble_config(attributes, issues)
    except (ConfigValidationError, CredentialSourceError) as exc:
        raise CLIError(str(exc)) from exc

    # Warnings already reach stderr as provider_attribute_warning events.
    if not args.json:
        print(json.dumps(effective_config(config), indent=2, sort_keys=True, ensure_ascii=False))
        return 0

    _emit_json(
        {
            "command": "check",
            "config": effective_config(config),
            "warnings": [f"{item.path}: {item.message}" for item in issues],
        }
    )
    return 0


def _cmd_validate_url(args: argparse.Namespace) -> int:
    warnings, errors = validate_server_url(args.url)
    for warning in warnings:
        print(f"warning: {warning}", file=sys.stderr)
    if errors:
        raise CLIError("; ".join(errors))
    print("ok")
    return 0


def _cmd_normalize_json(args: argparse.Namespace) -> int:
    text = sys.stdin.read() if args.value == "-" else args.value
    print(normalize_structured(text))
    return 0


def _cmd_normalize_run_list(args: argparse.Namespace) -> int:
    for entry in normalize_run_list(args.entries):
        print(entry)
    return 0


def _emit_json(payload: Mapping[str, object]) -> None:
    """Emit a JSON payload to stdout with deterministic formatting."""

    print(json.dumps(payload, sort_keys=True, separators=(",", ":"), ensure_ascii=False))


__all__ = ["CLIError", "build_parser", "run_cli"]
