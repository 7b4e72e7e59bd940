"""Domain models for homerow-digits.

:class:`LayoutMapping` and the result types are **frozen** dataclasses —
immutable value objects.  :class:`AccumulatorState` is the single
mutable record, owned by exactly one
:class:`~homerow_digits.core.accumulator.Accumulator`.

No I/O, no dependencies on external packages.
"""

from __future__ import annotations

import enum
from collections.abc import Iterator
from dataclasses import dataclass, field
from typing import Final, Union

from homerow_digits.exceptions import ConfigError, format_key


# ---------------------------------------------------------------------------
# Prefix argument shape
# ---------------------------------------------------------------------------

class _BareMinus:
    """Sentinel type for a lone negative sign with no digits yet."""

    _instance: _BareMinus | None = None

    def __new__(cls) -> _BareMinus:
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "BARE_MINUS"

    def __reduce__(self) -> str:
        return "BARE_MINUS"


BARE_MINUS: Final = _BareMinus()
"""The ``-`` prefix: negative, but no digit typed yet."""

PrefixValue = Union[int, _BareMinus, None]
"""Host-native prefix argument: ``None`` (unset), an ``int``, or :data:`BARE_MINUS`."""

DIGIT_CHARACTERS: Final[frozenset[str]] = frozenset("0123456789")


# ---------------------------------------------------------------------------
# Key -> digit mapping
# ---------------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class LayoutMapping:
    """Ordered, validated pairing of input keys to digit characters.

    Construction raises :class:`~homerow_digits.exceptions.ConfigError`
    when the two sequences differ in length, a key repeats, a key is
    empty, or a digit entry is not one of ``'0'``–``'9'``.
    """

    keys: tuple[str, ...]
    """Input keys, in layout order."""

    digits: tuple[str, ...]
    """Digit characters, parallel to :attr:`keys`."""

    layout_name: str | None = None
    """Preset the keys came from, or ``None`` for an explicit list."""

    digit_order_name: str | None = None
    """Preset the digits came from, or ``None`` for an explicit list."""

    numpad: bool = False
    """Whether the keys form a keypad-style cluster."""

    warnings: tuple[str, ...] = ()
    """Non-fatal configuration warnings collected during resolution."""

    _lookup: dict[str, str] = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        if len(self.keys) != len(self.digits):
            raise ConfigError(
                f"Layout has {len(self.keys)} keys but digit order has "
                f"{len(self.digits)} digits.",
                hint="Key and digit sequences must be the same length.",
            )
        if not self.keys:
            raise ConfigError("Layout must contain at least one key.")

        lookup: dict[str, str] = {}
        for key, digit in zip(self.keys, self.digits):
            if not key:
                raise ConfigError("Layout keys must be non-empty strings.")
            if key in lookup:
                raise ConfigError(
                    f"Key {format_key(key)!r} appears more than once in the layout.",
                )
            if digit not in DIGIT_CHARACTERS:
                raise ConfigError(
                    f"Invalid digit {digit!r} for key {format_key(key)!r}.",
                    hint="Digits must be single characters '0' through '9'.",
                )
            lookup[key] = digit
        object.__setattr__(self, "_lookup", lookup)

    def digit_for(self, key: str) -> str | None:
        """Return the digit bound to *key*, or ``None`` if unmapped."""
        return self._lookup.get(key)

    def items(self) -> Iterator[tuple[str, str]]:
        """Yield ``(key, digit)`` pairs in layout order."""
        return iter(zip(self.keys, self.digits))

    def as_dict(self) -> dict[str, str]:
        return dict(self._lookup)

    def __contains__(self, key: object) -> bool:
        return key in self._lookup

    def __len__(self) -> int:
        return len(self.keys)


# ---------------------------------------------------------------------------
# Accumulator state
# ---------------------------------------------------------------------------

class Phase(enum.Enum):
    """Two-state lifecycle of the accumulator."""

    IDLE = "idle"
    ACCUMULATING = "accumulating"


@dataclass(frozen=True, slots=True)
class AccumulatorSnapshot:
    """Read-only copy of :class:`AccumulatorState` at one instant."""

    pending: PrefixValue
    leading_zero_count: int
    already_emitted: tuple[str, ...]

    @property
    def phase(self) -> Phase:
        if self.pending is None and self.leading_zero_count == 0 and not self.already_emitted:
            return Phase.IDLE
        return Phase.ACCUMULATING


@dataclass(slots=True)
class AccumulatorState:
    """Running numeric-prefix state.

    ``leading_zero_count`` exists because a plain integer cannot tell
    ``07`` from ``7``; ``already_emitted`` holds fragments committed by
    decimal continuations, for status display only.
    """

    pending: PrefixValue = None
    leading_zero_count: int = 0
    already_emitted: list[str] = field(default_factory=list)

    @property
    def phase(self) -> Phase:
        return self.snapshot().phase

    def reset(self) -> None:
        """Return to :attr:`Phase.IDLE`."""
        self.pending = None
        self.leading_zero_count = 0
        self.already_emitted.clear()

    def snapshot(self) -> AccumulatorSnapshot:
        return AccumulatorSnapshot(
            pending=self.pending,
            leading_zero_count=self.leading_zero_count,
            already_emitted=tuple(self.already_emitted),
        )


# ---------------------------------------------------------------------------
# Operation results
# ---------------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class TranslationResult:
    """Outcome of feeding one digit (or minus) key to the accumulator."""

    key: str
    digit: str | None
    """Resolved digit, or ``None`` for the negative-argument key."""

    pending: PrefixValue
    leading_zero_count: int
    status: str | None
    """Status line for the host, or ``None`` when display is disabled."""


@dataclass(frozen=True, slots=True)
class CommitResult:
    """Text produced by a commit, for the host to insert."""

    text: str
    """Exact text to insert at point."""

    fragment: str
    """Rendered number without delimiter or separator."""

    status: str | None = None
    continue_collecting: bool = False
    """Whether the host should keep collecting a fresh prefix argument."""
