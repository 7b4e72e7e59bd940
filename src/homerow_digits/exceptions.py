"""Custom exception hierarchy for homerow-digits.

All exceptions that cross layer boundaries must inherit from
:class:`HomeRowDigitsError`.  Raw third-party exceptions (pydantic,
PyYAML, ``OSError``) must NEVER propagate beyond the layer that calls
the library — they are caught and re-raised as a typed subclass
defined here.

Hierarchy
---------
HomeRowDigitsError
├── ConfigError
│   └── ConfigFileError
├── TranslationError
├── HandleDisposedError
└── EnvironmentError
"""

from __future__ import annotations


class HomeRowDigitsError(Exception):
    """Base exception for all homerow-digits errors.

    Every user-visible error condition maps to a subclass of this
    exception so that the CLI error boundary can render a clean message
    without leaking internal stack traces.
    """

    def __init__(self, message: str, *, hint: str | None = None) -> None:
        super().__init__(message)
        self.hint: str | None = hint
        """Optional actionable guidance shown below the error message."""


# --- Configuration ---------------------------------------------------------

class ConfigError(HomeRowDigitsError):
    """Raised when a layout or key configuration is inconsistent."""


class ConfigFileError(ConfigError):
    """Raised when a configuration file cannot be read or validated."""


# --- Keypress handling -----------------------------------------------------

class TranslationError(HomeRowDigitsError):
    """Raised when a dispatched key is absent from the active mapping."""

    def __init__(self, message: str, *, key: str, hint: str | None = None) -> None:
        super().__init__(message, hint=hint)
        self.key: str = key


class HandleDisposedError(HomeRowDigitsError):
    """Raised when a disposed installation is asked to handle a key."""


# --- Environment / tooling -------------------------------------------------

class EnvironmentError(HomeRowDigitsError):
    """Raised when an optional runtime dependency is not available."""


def format_key(key: str) -> str:
    """Render *key* for messages, spelling out invisible keys."""
    names = {" ": "SPC", "\t": "TAB", "\n": "RET"}
    return names.get(key, key)
