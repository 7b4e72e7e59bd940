"""Tests for the layout resolver (core/resolver.py) and presets."""

from __future__ import annotations

import logging

import pytest

from homerow_digits.config import DigitsConfig
from homerow_digits.core.layouts import DIGIT_ORDERS, LAYOUT_PRESETS
from homerow_digits.core.resolver import resolve_from_config, resolve_layout
from homerow_digits.exceptions import ConfigError


class TestPresets:
    @pytest.mark.parametrize("name", sorted(LAYOUT_PRESETS))
    def test_every_preset_resolves_with_every_order(self, name: str) -> None:
        for order in DIGIT_ORDERS:
            mapping = resolve_layout(name, order)
            assert len(mapping.keys) == len(mapping.digits) == 10

    @pytest.mark.parametrize("order", sorted(DIGIT_ORDERS))
    def test_digit_orders_are_permutations(self, order: str) -> None:
        assert sorted(DIGIT_ORDERS[order].digits) == list("0123456789")

    def test_only_numpad_is_flagged(self) -> None:
        assert [p.name for p in LAYOUT_PRESETS.values() if p.numpad] == ["numpad"]


class TestResolveLayout:
    def test_qwerty_traditional(self) -> None:
        m = resolve_layout("qwerty")
        assert m.as_dict() == {
            "a": "1", "s": "2", "d": "3", "f": "4", "g": "5",
            "h": "6", "j": "7", "k": "8", "l": "9", ";": "0",
        }
        assert m.layout_name == "qwerty"
        assert m.digit_order_name == "traditional"
        assert m.warnings == ()

    def test_dvorak_zero_first(self) -> None:
        m = resolve_layout("dvorak", "zero-first")
        assert m.digit_for("a") == "0"
        assert m.digit_for("s") == "9"

    def test_numpad_places_space_as_zero(self) -> None:
        m = resolve_layout("numpad")
        assert m.numpad
        assert m.digit_for("m") == "1"
        assert m.digit_for("k") == "5"
        assert m.digit_for("o") == "9"
        assert m.digit_for(" ") == "0"

    def test_explicit_keys_and_digits(self) -> None:
        m = resolve_layout(["q", "w", "e"], ["7", "8", "9"])
        assert m.as_dict() == {"q": "7", "w": "8", "e": "9"}
        assert m.layout_name is None
        assert m.digit_order_name is None
        assert not m.numpad

    def test_digit_string_is_explicit_order(self) -> None:
        m = resolve_layout("colemak", "9876543210")
        assert m.digit_for("a") == "9"
        assert m.digit_order_name is None

    def test_integer_digits_are_accepted(self) -> None:
        m = resolve_layout(["x", "y"], [4, 2])  # type: ignore[list-item]
        assert m.as_dict() == {"x": "4", "y": "2"}

    def test_unknown_layout(self) -> None:
        with pytest.raises(ConfigError, match="Unknown layout preset") as exc_info:
            resolve_layout("azerty")
        assert exc_info.value.hint is not None
        assert "qwerty" in exc_info.value.hint

    def test_unknown_digit_order(self) -> None:
        with pytest.raises(ConfigError, match="Unknown digit order"):
            resolve_layout("qwerty", "backwards")

    def test_length_mismatch(self) -> None:
        with pytest.raises(ConfigError, match="same length|digit order has"):
            resolve_layout("qwerty", "12345")

    def test_duplicate_explicit_key(self) -> None:
        with pytest.raises(ConfigError, match="more than once"):
            resolve_layout(["a", "b", "a"], "123")


class TestNumpadWarning:
    def test_non_default_order_warns_but_resolves(self, caplog: pytest.LogCaptureFixture) -> None:
        with caplog.at_level(logging.WARNING, logger="homerow_digits.core.resolver"):
            m = resolve_layout("numpad", "zero-first")
        assert m.digit_for("m") == "0"
        assert len(m.warnings) == 1
        assert "keypad" in m.warnings[0]
        assert any("keypad" in record.getMessage() for record in caplog.records)

    def test_explicit_traditional_digits_do_not_warn(self) -> None:
        assert resolve_layout("numpad", "1234567890").warnings == ()

    def test_home_row_preset_never_warns(self) -> None:
        assert resolve_layout("workman", "programmer-dvorak").warnings == ()


class TestResolveFromConfig:
    def test_uses_config_fields(self) -> None:
        config = DigitsConfig(layout="colemak-dh", digit_order="zero-first")
        m = resolve_from_config(config)
        assert m.layout_name == "colemak-dh"
        assert m.digit_for("a") == "0"

    def test_default_config_is_qwerty(self) -> None:
        assert resolve_from_config(DigitsConfig()).layout_name == "qwerty"
