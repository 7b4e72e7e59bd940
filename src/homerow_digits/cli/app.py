"""CLI application entry point and command routing for homerow-digits.

This module is the **sole error boundary** for the entire application.
It catches :class:`~homerow_digits.exceptions.HomeRowDigitsError`,
``KeyboardInterrupt``, and any unexpected ``Exception``, rendering
user-friendly messages and returning well-defined exit codes.

Commands
--------
* ``homerow-digits layouts``            — list key presets and digit orders
* ``homerow-digits show``               — print the resolved key → digit mapping
* ``homerow-digits type KEY...``        — replay keys and print the resulting text
* ``homerow-digits doctor``             — environment diagnostics
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from homerow_digits.cli import exit_codes
from homerow_digits.cli.console import err_console, escape
from homerow_digits.config import DigitsConfig, override_config
from homerow_digits.exceptions import ConfigError, HomeRowDigitsError
from homerow_digits.utils.logging import setup_logging
from homerow_digits.version import __version__

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Argument parser
# ---------------------------------------------------------------------------

def _add_config_options(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "-c", "--config",
        type=Path,
        default=None,
        help="YAML config file (default: $HOMEROW_DIGITS_CONFIG or "
        "~/.config/homerow-digits/config.yaml)",
    )
    parser.add_argument("--layout", help="Key preset name, overrides the config file")
    parser.add_argument(
        "--keys",
        dest="explicit_keys",
        help="Explicit keys, one character each (overrides --layout)",
    )
    parser.add_argument(
        "--digit-order",
        help="Digit order preset name or a string of digits such as 0123456789",
    )


def _build_parser() -> argparse.ArgumentParser:
    """Construct the top-level argument parser."""
    parser = argparse.ArgumentParser(
        prog="homerow-digits",
        description="Type numeric prefix counts and numbers from the home row.",
    )
    parser.add_argument(
        "-V",
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Log debug output to stderr.",
    )
    subparsers = parser.add_subparsers(dest="command")

    subparsers.add_parser("layouts", help="List key presets and digit orders")

    show_parser = subparsers.add_parser("show", help="Show the resolved key to digit mapping")
    _add_config_options(show_parser)
    show_parser.add_argument(
        "--yaml",
        action="store_true",
        help="Print the effective configuration as YAML instead of a table",
    )

    type_parser = subparsers.add_parser(
        "type",
        help="Replay keys through the mapping and print the resulting text",
    )
    _add_config_options(type_parser)
    type_parser.add_argument(
        "typed_keys",
        nargs="+",
        metavar="KEY",
        help="Keys to press; SPC, TAB, RET and MINUS name awkward keys, "
        "longer tokens are split into single keys",
    )
    type_parser.add_argument("--commit", action="append", default=None, help="Commit key")
    type_parser.add_argument(
        "--continue",
        dest="commit_and_continue",
        action="append",
        default=None,
        help="Commit-and-continue key",
    )
    type_parser.add_argument("--decimal", action="append", default=None, help="Decimal key")
    type_parser.add_argument("--decimal-text", default=None, help="Decimal separator text")
    type_parser.add_argument(
        "--quiet",
        action="store_true",
        help="Print only the resulting text, not the status messages",
    )

    doctor_parser = subparsers.add_parser("doctor", help="Run environment diagnostics")
    doctor_parser.add_argument("-c", "--config", type=Path, default=None)

    return parser


# ---------------------------------------------------------------------------
# Configuration assembly
# ---------------------------------------------------------------------------

def _effective_config(args: argparse.Namespace) -> DigitsConfig:
    """Load the config file and apply command-line overrides."""
    from homerow_digits.cli.session import parse_key
    from homerow_digits.infra.config_loader import load_config

    config = load_config(args.config)
    layout: str | list[str] | None = args.layout
    if args.explicit_keys:
        layout = list(args.explicit_keys)

    overrides: dict[str, object] = {
        "layout": layout,
        "digit_order": args.digit_order,
    }
    # Key names such as RET are accepted in the file and on the command line.
    for option, field in (
        (None, "negative_keys"),
        ("commit", "commit_keys"),
        ("commit_and_continue", "commit_and_continue_keys"),
        ("decimal", "decimal_keys"),
    ):
        values = getattr(args, option, None) if option else None
        overrides[field] = [parse_key(value) for value in values or getattr(config, field)]
    decimal_text = getattr(args, "decimal_text", None)
    if decimal_text is not None:
        overrides["decimal_text"] = decimal_text
    return override_config(config, **overrides)


# ---------------------------------------------------------------------------
# Command dispatch
# ---------------------------------------------------------------------------

def _handle_layouts() -> int:
    from homerow_digits.cli.tables import print_layouts

    print_layouts()
    return exit_codes.SUCCESS


def _handle_show(args: argparse.Namespace) -> int:
    from homerow_digits.cli.tables import print_mapping
    from homerow_digits.core.resolver import resolve_from_config
    from homerow_digits.infra.config_loader import dump_config

    config = _effective_config(args)
    if args.yaml:
        print(dump_config(config), end="")
        return exit_codes.SUCCESS
    print_mapping(resolve_from_config(config))
    return exit_codes.SUCCESS


def _handle_type(args: argparse.Namespace) -> int:
    from homerow_digits.cli.session import expand_tokens, run_session

    config = _effective_config(args)
    outcome = run_session(config, expand_tokens(args.typed_keys))

    for warning in outcome.warnings:
        err_console.print(f"[yellow]Warning:[/yellow] {escape(warning)}")
    if not args.quiet:
        for message in outcome.messages:
            err_console.print(f"[dim]{escape(message)}[/dim]")
    print(outcome.text)
    return exit_codes.SUCCESS


def _handle_doctor(args: argparse.Namespace) -> int:
    from homerow_digits.cli.doctor import run_doctor

    return run_doctor(args.config)


# ---------------------------------------------------------------------------
# Main entry point
# ---------------------------------------------------------------------------

def main(argv: list[str] | None = None) -> int:
    """Run the homerow-digits CLI.

    Parameters
    ----------
    argv:
        Explicit argument list.  When ``None`` (default), ``sys.argv[1:]``
        is used.  Accepting *argv* enables deterministic testing without
        monkeypatching.

    Returns
    -------
    int
        OS process exit code.
    """
    parser = _build_parser()
    args = parser.parse_args(argv)
    setup_logging("DEBUG" if args.verbose else "WARNING")

    if args.command is None:
        parser.print_help()
        return exit_codes.SUCCESS
    if args.command == "layouts":
        return _handle_layouts()
    if args.command == "show":
        return _handle_show(args)
    if args.command == "type":
        return _handle_type(args)
    return _handle_doctor(args)


# ---------------------------------------------------------------------------
# Script-level error boundary
# ---------------------------------------------------------------------------

def cli() -> None:
    """Top-level error boundary invoked by the console-script entry point.

    Wraps :func:`main` and guarantees the process never exits with a raw
    stack trace during normal usage.
    """
    try:
        code = main()
        sys.exit(code)
    except ConfigError as exc:
        _report(exc)
        sys.exit(exit_codes.CONFIG_ERROR)
    except HomeRowDigitsError as exc:
        _report(exc)
        sys.exit(exit_codes.GENERAL_ERROR)
    except KeyboardInterrupt:
        err_console.print("\n[yellow]Aborted by user.[/yellow]")
        sys.exit(exit_codes.KEYBOARD_INTERRUPT)
    except Exception as exc:  # noqa: BLE001
        logger.debug("Unexpected error", exc_info=True)
        err_console.print(
            "[bold red]Unexpected error.[/bold red] "
            "Please report this issue.\n"
            f"  {type(exc).__name__}: {escape(str(exc))}"
        )
        sys.exit(exit_codes.UNEXPECTED_ERROR)


def _report(exc: HomeRowDigitsError) -> None:
    err_console.print(f"[bold red]Error:[/bold red] {escape(str(exc))}")
    if exc.hint:
        err_console.print(f"[yellow]Hint:[/yellow] {escape(exc.hint)}")
