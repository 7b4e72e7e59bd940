"""Core / service layer — key mapping and numeric accumulation.

Rules
-----
* No ``print()`` calls.
* No filesystem or network I/O.
* No imports from ``cli`` or ``infra``.
* Host effects (text insertion, status display) go through
  :mod:`homerow_digits.core.protocols`.
"""

from homerow_digits.core.accumulator import Accumulator
from homerow_digits.core.layouts import DIGIT_ORDERS, LAYOUT_PRESETS, DigitOrder, LayoutPreset
from homerow_digits.core.models import (
    BARE_MINUS,
    AccumulatorSnapshot,
    AccumulatorState,
    CommitResult,
    LayoutMapping,
    Phase,
    PrefixValue,
    TranslationResult,
)
from homerow_digits.core.protocols import StatusSink, TextSink
from homerow_digits.core.registry import (
    Binding,
    DispatchResult,
    InstallHandle,
    KeyAction,
    KeymapRegistry,
)
from homerow_digits.core.resolver import resolve_from_config, resolve_layout

__all__: list[str] = [
    "BARE_MINUS",
    "DIGIT_ORDERS",
    "LAYOUT_PRESETS",
    "Accumulator",
    "AccumulatorSnapshot",
    "AccumulatorState",
    "Binding",
    "CommitResult",
    "DigitOrder",
    "DispatchResult",
    "InstallHandle",
    "KeyAction",
    "KeymapRegistry",
    "LayoutMapping",
    "LayoutPreset",
    "Phase",
    "PrefixValue",
    "StatusSink",
    "TextSink",
    "TranslationResult",
    "resolve_from_config",
    "resolve_layout",
]
