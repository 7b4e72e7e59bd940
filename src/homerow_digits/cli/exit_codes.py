"""Process exit codes returned by :func:`homerow_digits.cli.app.cli`.

Every exit path of the CLI uses one of these names.
"""

from __future__ import annotations

SUCCESS: int = 0
"""The command finished normally."""

GENERAL_ERROR: int = 1
"""A HomeRowDigitsError other than a configuration error was reported,
or ``doctor`` found a failing check."""

UNEXPECTED_ERROR: int = 2
"""An exception outside the HomeRowDigitsError hierarchy reached ``cli()``."""

CONFIG_ERROR: int = 3
"""The configuration file or layout options were rejected."""

KEYBOARD_INTERRUPT: int = 130
"""Interrupted with Ctrl+C (128 + SIGINT)."""
