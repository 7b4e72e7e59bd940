"""Tests for the keymap registry (core/registry.py)."""

from __future__ import annotations

import pytest

from homerow_digits.config import DigitsConfig
from homerow_digits.core.models import BARE_MINUS, Phase
from homerow_digits.core.registry import KeyAction, KeymapRegistry
from homerow_digits.exceptions import ConfigError, HandleDisposedError, TranslationError
from homerow_digits.infra.buffer import MessageLog, TextBuffer


@pytest.fixture
def buffer() -> TextBuffer:
    return TextBuffer()


@pytest.fixture
def log() -> MessageLog:
    return MessageLog()


@pytest.fixture
def registry(buffer: TextBuffer, log: MessageLog) -> KeymapRegistry:
    return KeymapRegistry(text_sink=buffer, status_sink=log)


def _config(**kwargs: object) -> DigitsConfig:
    defaults: dict[str, object] = {
        "commit_keys": ["RET"],
        "commit_and_continue_keys": [","],
        "decimal_keys": ["."],
    }
    defaults.update(kwargs)
    return DigitsConfig(**defaults)  # type: ignore[arg-type]


def _press(registry: KeymapRegistry, keys: list[str]) -> None:
    for key in keys:
        registry.dispatch(key)


# ---------------------------------------------------------------------------
# install / dispose
# ---------------------------------------------------------------------------

class TestInstall:
    def test_binds_digits_and_roles(self, registry: KeymapRegistry) -> None:
        handle = registry.install(_config())
        assert handle.handle_id == 1
        assert registry.lookup("a").action is KeyAction.DIGIT  # type: ignore[union-attr]
        assert registry.lookup("-").action is KeyAction.NEGATE  # type: ignore[union-attr]
        assert registry.lookup("RET").action is KeyAction.COMMIT  # type: ignore[union-attr]
        assert registry.lookup(",").action is KeyAction.COMMIT_AND_CONTINUE  # type: ignore[union-attr]
        assert registry.lookup(".").action is KeyAction.COMMIT_WITH_DECIMAL  # type: ignore[union-attr]
        assert registry.lookup("q") is None

    def test_ids_increase(self, registry: KeymapRegistry) -> None:
        first = registry.install(DigitsConfig())
        second = registry.install(DigitsConfig(layout="dvorak"))
        assert (first.handle_id, second.handle_id) == (1, 2)
        assert registry.handles == (first, second)

    def test_key_with_two_roles_rejected(self, registry: KeymapRegistry) -> None:
        with pytest.raises(ConfigError, match="bound to both digit and commit"):
            registry.install(DigitsConfig(commit_keys=["a"]))
        assert registry.handles == ()

    def test_invalid_layout_installs_nothing(self, registry: KeymapRegistry) -> None:
        with pytest.raises(ConfigError):
            registry.install(DigitsConfig(layout="azerty"))
        assert registry.bindings() == []

    def test_dispose_removes_bindings(self, registry: KeymapRegistry) -> None:
        handle = registry.install(_config())
        handle.dispose()
        assert handle.disposed
        assert registry.lookup("a") is None
        assert registry.handles == ()

    def test_dispose_twice_is_harmless(self, registry: KeymapRegistry) -> None:
        handle = registry.install(_config())
        handle.dispose()
        handle.dispose()
        assert registry.handles == ()

    def test_context_manager_disposes(self, registry: KeymapRegistry) -> None:
        with registry.install(_config()) as handle:
            assert registry.lookup("a") is not None
        assert handle.disposed
        assert registry.lookup("a") is None

    def test_dispose_all(self, registry: KeymapRegistry) -> None:
        registry.install(DigitsConfig())
        registry.install(DigitsConfig(layout="colemak"))
        registry.dispose_all()
        assert registry.handles == ()


class TestShadowing:
    def test_newest_install_wins(self, registry: KeymapRegistry) -> None:
        registry.install(DigitsConfig())                          # a -> 1
        newer = registry.install(DigitsConfig(layout="colemak"))  # a -> 1, r -> 2 ...
        binding = registry.lookup("a")
        assert binding is not None
        assert binding.handle_id == newer.handle_id

    def test_disposing_newer_reveals_older(self, registry: KeymapRegistry) -> None:
        older = registry.install(DigitsConfig())
        newer = registry.install(DigitsConfig(layout="colemak"))
        newer.dispose()
        assert registry.lookup("a").handle_id == older.handle_id  # type: ignore[union-attr]

    def test_bindings_exclude_shadowed(self, registry: KeymapRegistry) -> None:
        registry.install(DigitsConfig())
        registry.install(DigitsConfig())
        keys = [binding.key for binding in registry.bindings()]
        assert len(keys) == len(set(keys)) == 11
        assert {binding.handle_id for binding in registry.bindings()} == {2}


# ---------------------------------------------------------------------------
# dispatch
# ---------------------------------------------------------------------------

class TestDispatch:
    def test_digits_update_status(self, registry: KeymapRegistry, log: MessageLog) -> None:
        registry.install(_config())
        result = registry.dispatch("a")
        assert result.handled
        assert result.action is KeyAction.DIGIT
        assert result.translation is not None
        assert result.translation.digit == "1"
        registry.dispatch("s")
        assert log.messages == ["C-u 1", "C-u 12"]

    def test_commit_inserts_text(self, registry: KeymapRegistry, buffer: TextBuffer) -> None:
        registry.install(_config())
        _press(registry, [";", ";", "g", "RET"])
        assert buffer.text == "005"

    def test_commit_and_continue(self, registry: KeymapRegistry, buffer: TextBuffer, log: MessageLog) -> None:
        registry.install(_config())
        _press(registry, ["a", "s", ",", "d", "RET"])
        assert buffer.text == "12 3"
        assert "C-u " in log.messages

    def test_decimal(self, registry: KeymapRegistry, buffer: TextBuffer, log: MessageLog) -> None:
        registry.install(_config())
        _press(registry, ["a", "s", ".", "g", "RET"])
        assert buffer.text == "12.5"
        assert log.current == "C-u 12.5"

    def test_negative(self, registry: KeymapRegistry, buffer: TextBuffer) -> None:
        registry.install(_config())
        _press(registry, ["-", "f", "RET"])
        assert buffer.text == "-4"

    def test_empty_commit_inserts_nothing(self, registry: KeymapRegistry, buffer: TextBuffer) -> None:
        registry.install(_config())
        result = registry.dispatch("RET")
        assert result.commit is not None
        assert result.commit.text == ""
        assert buffer.text == ""

    def test_unbound_key_cancels_and_reports_prefix(self, registry: KeymapRegistry) -> None:
        handle = registry.install(_config())
        _press(registry, ["d", "j"])
        result = registry.dispatch("x")
        assert not result.handled
        assert result.prefix == 37
        assert handle.accumulator.phase is Phase.IDLE

    def test_unbound_key_reports_bare_minus(self, registry: KeymapRegistry) -> None:
        registry.install(_config())
        registry.dispatch("-")
        assert registry.dispatch("x").prefix is BARE_MINUS

    def test_unbound_key_when_idle(self, registry: KeymapRegistry) -> None:
        registry.install(_config())
        result = registry.dispatch("x")
        assert not result.handled
        assert result.prefix is None

    def test_no_installations(self) -> None:
        assert not KeymapRegistry().dispatch("a").handled

    def test_status_disabled_shows_nothing(self, registry: KeymapRegistry, log: MessageLog) -> None:
        registry.install(_config(show_status_message=False))
        _press(registry, ["a", "s", "."])
        assert log.messages == []

    def test_works_without_sinks(self) -> None:
        registry = KeymapRegistry()
        registry.install(_config())
        _press(registry, ["a", "s"])
        result = registry.dispatch("RET")
        assert result.commit is not None
        assert result.commit.text == "12"


class TestHandlePress:
    def test_press_unbound_raises(self, registry: KeymapRegistry) -> None:
        handle = registry.install(_config())
        with pytest.raises(TranslationError) as exc_info:
            handle.press("q")
        assert exc_info.value.key == "q"

    def test_press_after_dispose_raises(self, registry: KeymapRegistry) -> None:
        handle = registry.install(_config())
        handle.dispose()
        with pytest.raises(HandleDisposedError):
            handle.press("a")

    def test_press_shadowed_handle_directly(self, registry: KeymapRegistry, buffer: TextBuffer) -> None:
        older = registry.install(_config())
        registry.install(_config(layout="dvorak"))
        older.press("a")
        older.press("RET")
        assert buffer.text == "1"


class TestCrossInstallation:
    def test_key_of_other_installation_resets_number(
        self, registry: KeymapRegistry, buffer: TextBuffer,
    ) -> None:
        first = registry.install(_config())
        registry.install(
            DigitsConfig(
                layout=list("zxcvbnm,./"),
                negative_keys=[],
                commit_keys=["q"],
            )
        )
        _press(registry, ["a", "q"])
        assert first.accumulator.phase is Phase.IDLE
        _press(registry, ["s", "RET"])
        assert buffer.text == "2"

    def test_owning_installation_keeps_its_number(self, registry: KeymapRegistry) -> None:
        first = registry.install(_config())
        second = registry.install(DigitsConfig(layout=list("zxcvbnm,./"), negative_keys=[]))
        _press(registry, ["a", "z", "x"])
        assert second.accumulator.state.pending == 12
        assert first.accumulator.phase is Phase.IDLE

    def test_fresh_decimal_segment_reports_no_prefix(self, registry: KeymapRegistry) -> None:
        registry.install(_config())
        _press(registry, ["a", "."])
        result = registry.dispatch("x")
        assert not result.handled
        assert result.prefix is None
