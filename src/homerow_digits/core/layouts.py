"""Built-in key presets and digit orders.

Every preset is plain data; the resolver treats all of them alike.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Final


@dataclass(frozen=True, slots=True)
class LayoutPreset:
    """A named, ordered list of input keys."""

    name: str
    keys: tuple[str, ...]
    description: str
    numpad: bool = False


@dataclass(frozen=True, slots=True)
class DigitOrder:
    """A named, ordered list of digit characters."""

    name: str
    digits: tuple[str, ...]
    description: str


# ---------------------------------------------------------------------------
# Key presets
# ---------------------------------------------------------------------------

LAYOUT_PRESETS: Final[dict[str, LayoutPreset]] = {
    preset.name: preset
    for preset in (
        LayoutPreset("qwerty", tuple("asdfghjkl;"), "QWERTY home row"),
        LayoutPreset("dvorak", tuple("aoeuidhtns"), "Dvorak home row"),
        LayoutPreset("colemak", tuple("arstdhneio"), "Colemak home row"),
        LayoutPreset("colemak-dh", tuple("arstgmneio"), "Colemak Mod-DH home row"),
        LayoutPreset("workman", tuple("ashtgyneoi"), "Workman home row"),
        # Phone-style keypad under the right hand, space bar as the tenth key.
        LayoutPreset(
            "numpad",
            ("m", ",", ".", "j", "k", "l", "u", "i", "o", " "),
            "Keypad cluster on QWERTY (m,. / jkl / uio, SPC)",
            numpad=True,
        ),
    )
}

DEFAULT_LAYOUT: Final[str] = "qwerty"


# ---------------------------------------------------------------------------
# Digit orders
# ---------------------------------------------------------------------------

DIGIT_ORDERS: Final[dict[str, DigitOrder]] = {
    order.name: order
    for order in (
        DigitOrder("traditional", tuple("1234567890"), "Number row order, zero last"),
        DigitOrder("zero-first", tuple("0123456789"), "Ascending, zero first"),
        DigitOrder(
            "programmer-dvorak",
            tuple("7531902468"),
            "Programmer Dvorak number row",
        ),
    )
}

DEFAULT_DIGIT_ORDER: Final[str] = "traditional"
