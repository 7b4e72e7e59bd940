"""Layout resolver — turns configuration into a :class:`LayoutMapping`.

Pure construction: no I/O.  The one side channel is the warning issued
when a keypad preset is paired with a non-default digit order; it is
logged and recorded on the returned mapping, and resolution continues
with the caller's order.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence

from homerow_digits.config import DigitsConfig
from homerow_digits.core.layouts import (
    DEFAULT_DIGIT_ORDER,
    DIGIT_ORDERS,
    LAYOUT_PRESETS,
)
from homerow_digits.core.models import DIGIT_CHARACTERS, LayoutMapping
from homerow_digits.exceptions import ConfigError

logger = logging.getLogger(__name__)

LayoutSpec = str | Sequence[str]
DigitOrderSpec = str | Sequence[str]


def _resolve_keys(layout: LayoutSpec) -> tuple[tuple[str, ...], str | None, bool]:
    """Return ``(keys, preset_name, numpad)`` for *layout*."""
    if isinstance(layout, str):
        preset = LAYOUT_PRESETS.get(layout)
        if preset is None:
            raise ConfigError(
                f"Unknown layout preset: {layout!r}",
                hint="Available presets: " + ", ".join(LAYOUT_PRESETS),
            )
        return preset.keys, preset.name, preset.numpad
    return tuple(layout), None, False


def _resolve_digits(digit_order: DigitOrderSpec) -> tuple[tuple[str, ...], str | None]:
    """Return ``(digits, order_name)`` for *digit_order*.

    A string made only of digit characters is an explicit order, not a
    preset name.
    """
    if isinstance(digit_order, str):
        order = DIGIT_ORDERS.get(digit_order)
        if order is not None:
            return order.digits, order.name
        if digit_order and set(digit_order) <= DIGIT_CHARACTERS:
            return tuple(digit_order), None
        raise ConfigError(
            f"Unknown digit order: {digit_order!r}",
            hint="Available orders: " + ", ".join(DIGIT_ORDERS),
        )
    return tuple(str(digit) for digit in digit_order), None


def resolve_layout(
    layout: LayoutSpec,
    digit_order: DigitOrderSpec = DEFAULT_DIGIT_ORDER,
) -> LayoutMapping:
    """Build the key → digit mapping for *layout* and *digit_order*.

    Parameters
    ----------
    layout:
        A preset name from :data:`~homerow_digits.core.layouts.LAYOUT_PRESETS`
        or an explicit sequence of keys.
    digit_order:
        A preset name from :data:`~homerow_digits.core.layouts.DIGIT_ORDERS`
        or an explicit sequence of digit characters.

    Raises
    ------
    ConfigError
        On an unknown preset, a length mismatch, a duplicate or empty
        key, or a non-digit entry.  No partial mapping is returned.
    """
    keys, layout_name, numpad = _resolve_keys(layout)
    digits, order_name = _resolve_digits(digit_order)

    warnings: list[str] = []
    if numpad and digits != DIGIT_ORDERS[DEFAULT_DIGIT_ORDER].digits:
        message = (
            f"Layout {layout_name!r} is a keypad arrangement; digit order "
            f"{order_name or ''.join(digits)!r} will not match its visual layout."
        )
        logger.warning(message)
        warnings.append(message)

    mapping = LayoutMapping(
        keys=keys,
        digits=digits,
        layout_name=layout_name,
        digit_order_name=order_name,
        numpad=numpad,
        warnings=tuple(warnings),
    )
    logger.debug(
        "Resolved layout %s with %s digits (%d keys)",
        layout_name or "<custom>",
        order_name or "<custom>",
        len(mapping),
    )
    return mapping


def resolve_from_config(config: DigitsConfig) -> LayoutMapping:
    """Resolve the mapping selected by *config*."""
    return resolve_layout(config.layout, config.digit_order)
