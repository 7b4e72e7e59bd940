"""Infrastructure layer — configuration files and in-memory host sinks.

Every raw third-party exception must be caught here and re-raised as a
:class:`~homerow_digits.exceptions.HomeRowDigitsError` subclass.

Rules
-----
* No imports from ``cli``.
* No user-facing output (no ``print()``, no Rich rendering).
"""

from homerow_digits.infra.buffer import MessageLog, TextBuffer
from homerow_digits.infra.config_loader import (
    default_config_path,
    dump_config,
    load_config,
    load_yaml,
)

__all__: list[str] = [
    "MessageLog",
    "TextBuffer",
    "default_config_path",
    "dump_config",
    "load_config",
    "load_yaml",
]
