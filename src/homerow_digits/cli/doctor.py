"""``homerow-digits doctor`` — environment and configuration diagnostics.

Collects version information and checks that the active configuration
file loads and installs cleanly, then renders a summary table.  This
module lives in the CLI layer; it only collects and displays.
"""

from __future__ import annotations

import platform
import sys
from importlib import metadata
from pathlib import Path

from homerow_digits.cli import exit_codes
from homerow_digits.cli.console import console
from homerow_digits.cli.tables import print_table
from homerow_digits.core.registry import KeymapRegistry
from homerow_digits.exceptions import HomeRowDigitsError
from homerow_digits.infra.config_loader import default_config_path, load_config
from homerow_digits.version import __version__

OK = "OK"
WARN = "WARN"
FAIL = "FAIL"


# ---------------------------------------------------------------------------
# Diagnostic collectors
# ---------------------------------------------------------------------------

def _python_version_check() -> tuple[str, str, str]:
    """Return (label, value, status) for the Python version row."""
    version = platform.python_version()
    ok = sys.version_info[:2] >= (3, 10)
    return "Python", version, OK if ok else f"{FAIL} (>=3.10 required)"


def _os_check() -> tuple[str, str, str]:
    """Return (label, value, status) for the OS row."""
    system = {"Darwin": "macOS"}.get(platform.system(), platform.system())
    return "OS", f"{system} {platform.release()} ({platform.machine()})", OK


def _distribution_check(label: str, distribution: str, *, required: bool = True) -> tuple[str, str, str]:
    """Return (label, value, status) for an installed distribution."""
    try:
        version = metadata.version(distribution)
    except metadata.PackageNotFoundError:
        return label, "NOT INSTALLED", FAIL if required else WARN
    return label, version, OK


def _config_check(path: Path) -> tuple[str, str, str]:
    """Return (label, value, status) for the configuration file row."""
    if not path.exists():
        return "config", f"{path} (defaults)", OK
    try:
        config = load_config(path)
        handle = KeymapRegistry().install(config)
    except HomeRowDigitsError as exc:
        return "config", f"{path}: {exc}", FAIL
    warned = bool(handle.mapping.warnings)
    handle.dispose()
    return "config", str(path), WARN if warned else OK


def _homerow_version_check() -> tuple[str, str, str]:
    return "homerow-digits", __version__, OK


def collect_checks(config_path: Path | None = None) -> list[tuple[str, str, str]]:
    path = config_path if config_path is not None else default_config_path()
    return [
        _homerow_version_check(),
        _python_version_check(),
        _distribution_check("pydantic", "pydantic"),
        _distribution_check("PyYAML", "PyYAML"),
        _distribution_check("rich", "rich", required=False),
        _os_check(),
        _config_check(path),
    ]


# ---------------------------------------------------------------------------
# Public entry point
# ---------------------------------------------------------------------------

def run_doctor(config_path: Path | None = None) -> int:
    """Run all checks and print a summary.

    Returns
    -------
    int
        :data:`exit_codes.SUCCESS` when no check fails,
        :data:`exit_codes.GENERAL_ERROR` otherwise.
    """
    checks = collect_checks(config_path)
    has_failure = any(status.startswith(FAIL) for _, _, status in checks)

    print_table(
        "homerow-digits doctor",
        ("Component", "Value", "Status"),
        checks,
    )

    if has_failure:
        console.print("[bold red]Some checks failed.[/bold red]")
        return exit_codes.GENERAL_ERROR
    console.print("[bold green]All checks passed.[/bold green]")
    return exit_codes.SUCCESS
