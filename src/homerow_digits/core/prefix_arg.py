"""Numeric prefix-argument arithmetic.

Pure functions over :data:`~homerow_digits.core.models.PrefixValue`,
mirroring how an editor folds digit and minus keys into a prefix count:

* unset + ``d``       → ``d``
* ``v`` + ``d``       → ``v*10 + d`` (``v*10 - d`` when ``v`` is negative)
* ``-`` + ``d``       → ``-d`` (``-`` + ``0`` stays ``-``)
* negate ``v``        → ``-v``; negate ``-`` → unset; negate unset → ``-``
"""

from __future__ import annotations

from homerow_digits.core.models import BARE_MINUS, DIGIT_CHARACTERS, PrefixValue


def apply_digit(value: PrefixValue, digit: str) -> PrefixValue:
    """Fold *digit* (``'0'``–``'9'``) into *value*."""
    if digit not in DIGIT_CHARACTERS:
        raise ValueError(f"not a decimal digit: {digit!r}")
    number = int(digit)
    if value is BARE_MINUS:
        return BARE_MINUS if number == 0 else -number
    if isinstance(value, int):
        return value * 10 + (-number if value < 0 else number)
    return number


def negate(value: PrefixValue) -> PrefixValue:
    """Apply the minus key to *value*."""
    if value is BARE_MINUS:
        return None
    if isinstance(value, int):
        return -value
    return BARE_MINUS


def is_negative(value: PrefixValue) -> bool:
    return value is BARE_MINUS or (isinstance(value, int) and value < 0)


def is_zero(value: PrefixValue) -> bool:
    return isinstance(value, int) and value == 0


def numeric_value(value: PrefixValue) -> int:
    """Return the count a command receives for *value*.

    Unset reads as ``1`` and the bare minus as ``-1``.
    """
    if value is BARE_MINUS:
        return -1
    if isinstance(value, int):
        return value
    return 1


def render_number(value: PrefixValue, leading_zero_count: int = 0) -> str:
    """Render *value* as decimal text, restoring typed leading zeroes.

    When *value* is exactly zero, its own ``0`` supplies one of the
    counted zeroes.  :data:`BARE_MINUS` renders as ``"-"`` alone.
    """
    if value is BARE_MINUS:
        return "-"
    zeros = leading_zero_count
    if is_zero(value):
        zeros -= 1
    zeros = max(zeros, 0)
    if value is None:
        return "0" * zeros
    sign = "-" if value < 0 else ""
    return f"{sign}{'0' * zeros}{abs(value)}"
