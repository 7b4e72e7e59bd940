"""The ``type`` command — replay keys through a registry.

A stand-in host: committed text goes into a :class:`TextBuffer`, status
messages into a :class:`MessageLog`.  A key the installation does not
bind ends the prefix and is inserted as ordinary text, repeated by the
prefix count the way an editor repeats self-inserting keys.  A negative
prefix inserts nothing.
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from dataclasses import dataclass

from homerow_digits.config import DigitsConfig
from homerow_digits.core import prefix_arg
from homerow_digits.core.registry import KeymapRegistry
from homerow_digits.infra.buffer import MessageLog, TextBuffer

KEY_NAMES: dict[str, str] = {
    "SPC": " ",
    "TAB": "\t",
    "RET": "\n",
    "MINUS": "-",
}
"""Spellings accepted on the command line for awkward keys."""


def parse_key(token: str) -> str:
    """Turn one command-line token into a key (``SPC`` → space)."""
    return KEY_NAMES.get(token, token)


def expand_tokens(tokens: Iterable[str]) -> list[str]:
    """Parse tokens into keys.

    A token that is a key name stays whole; any other token of several
    characters is split into one key per character, so ``asd`` is three
    keypresses.
    """
    keys: list[str] = []
    for token in tokens:
        if token in KEY_NAMES or len(token) <= 1:
            keys.append(parse_key(token))
        else:
            keys.extend(token)
    return keys


@dataclass(frozen=True, slots=True)
class SessionOutcome:
    text: str
    messages: tuple[str, ...]
    warnings: tuple[str, ...]


def run_session(config: DigitsConfig, keys: Sequence[str], *, initial_text: str = "") -> SessionOutcome:
    """Install *config*, feed *keys*, commit whatever is pending, and report.

    Raises
    ------
    ConfigError
        If *config* cannot be installed.
    """
    buffer = TextBuffer(initial_text)
    log = MessageLog()
    registry = KeymapRegistry(text_sink=buffer, status_sink=log)

    with registry.install(config) as handle:
        for key in keys:
            result = registry.dispatch(key)
            if not result.handled and not prefix_arg.is_negative(result.prefix):
                buffer.insert(key * prefix_arg.numeric_value(result.prefix))
        # End of input acts as a final commit.
        if handle.accumulator.has_input:
            buffer.insert(handle.accumulator.commit_and_reset().text)
        warnings = handle.mapping.warnings

    return SessionOutcome(text=buffer.text, messages=tuple(log.messages), warnings=warnings)
