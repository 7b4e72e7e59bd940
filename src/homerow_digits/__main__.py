"""Allow ``python -m homerow_digits`` invocation.

Delegates to the CLI error-boundary entry point so that
``python -m homerow_digits`` behaves identically to the
``homerow-digits`` console script.
"""

from __future__ import annotations

from homerow_digits.cli.app import cli

if __name__ == "__main__":
    cli()
