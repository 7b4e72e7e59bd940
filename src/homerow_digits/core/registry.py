"""Explicit key registry — installs and removes digit bindings.

A :class:`KeymapRegistry` owns the key → action table that a host would
otherwise keep in a global keymap.  Each :meth:`KeymapRegistry.install`
returns an :class:`InstallHandle` with its own accumulator; disposing
the handle removes exactly the bindings it added.

Several installations may coexist.  For a key bound by more than one,
the most recent installation wins until it is disposed.
"""

from __future__ import annotations

import enum
import itertools
import logging
from collections.abc import Iterator
from dataclasses import dataclass
from types import TracebackType

from homerow_digits.config import DigitsConfig
from homerow_digits.core.accumulator import Accumulator
from homerow_digits.core.models import (
    CommitResult,
    LayoutMapping,
    Phase,
    PrefixValue,
    TranslationResult,
)
from homerow_digits.core.protocols import StatusSink, TextSink
from homerow_digits.core.resolver import resolve_from_config
from homerow_digits.exceptions import (
    ConfigError,
    HandleDisposedError,
    TranslationError,
    format_key,
)

logger = logging.getLogger(__name__)


class KeyAction(enum.Enum):
    """What a bound key does."""

    DIGIT = "digit"
    NEGATE = "negate"
    COMMIT = "commit"
    COMMIT_AND_CONTINUE = "commit-and-continue"
    COMMIT_WITH_DECIMAL = "commit-with-decimal"


@dataclass(frozen=True, slots=True)
class Binding:
    key: str
    action: KeyAction
    handle_id: int


@dataclass(frozen=True, slots=True)
class DispatchResult:
    """Outcome of routing one key through the registry."""

    key: str
    handled: bool
    """``False`` when no installation binds the key."""

    action: KeyAction | None = None
    translation: TranslationResult | None = None
    commit: CommitResult | None = None
    prefix: PrefixValue = None
    """For an unhandled key: the prefix argument it ends, passed on to the host."""


def _collect_bindings(config: DigitsConfig, mapping: LayoutMapping) -> dict[str, KeyAction]:
    """Build the key table for one installation, rejecting duplicates."""
    table: dict[str, KeyAction] = {}
    groups: list[tuple[KeyAction, tuple[str, ...] | list[str]]] = [
        (KeyAction.DIGIT, mapping.keys),
        (KeyAction.NEGATE, config.negative_keys),
        (KeyAction.COMMIT, config.commit_keys),
        (KeyAction.COMMIT_AND_CONTINUE, config.commit_and_continue_keys),
        (KeyAction.COMMIT_WITH_DECIMAL, config.decimal_keys),
    ]
    for action, keys in groups:
        for key in keys:
            existing = table.get(key)
            if existing is not None:
                raise ConfigError(
                    f"Key {format_key(key)!r} is bound to both "
                    f"{existing.value} and {action.value}.",
                    hint="Each key may have only one role in a configuration.",
                )
            table[key] = action
    return table


class InstallHandle:
    """One live installation: its configuration, mapping and accumulator.

    Obtain instances from :meth:`KeymapRegistry.install`; do not
    construct directly.
    """

    def __init__(
        self,
        registry: KeymapRegistry,
        handle_id: int,
        config: DigitsConfig,
        mapping: LayoutMapping,
        table: dict[str, KeyAction],
    ) -> None:
        self._registry = registry
        self.handle_id: int = handle_id
        self.config: DigitsConfig = config
        self.mapping: LayoutMapping = mapping
        self.accumulator: Accumulator = Accumulator.from_config(config, mapping)
        self._table: dict[str, KeyAction] = table
        self._disposed: bool = False

    @property
    def disposed(self) -> bool:
        return self._disposed

    def bindings(self) -> list[Binding]:
        return [Binding(key, action, self.handle_id) for key, action in self._table.items()]

    def action_for(self, key: str) -> KeyAction | None:
        return self._table.get(key)

    def press(self, key: str) -> DispatchResult:
        """Handle *key* with this installation only.

        Raises
        ------
        HandleDisposedError
            After :meth:`dispose`.
        TranslationError
            If this installation does not bind *key*.
        """
        if self._disposed:
            raise HandleDisposedError(
                f"Installation {self.handle_id} has been disposed.",
            )
        action = self._table.get(key)
        if action is None:
            raise TranslationError(
                f"unmapped key {format_key(key)!r}",
                key=key,
                hint=f"Installation {self.handle_id} does not bind this key.",
            )
        return self._perform(key, action)

    def dispose(self) -> None:
        """Remove this installation's bindings.  Safe to call twice."""
        if self._disposed:
            return
        self._disposed = True
        self.accumulator.cancel()
        self._registry._remove(self)
        logger.info("Disposed installation %d", self.handle_id)

    def __enter__(self) -> InstallHandle:
        return self

    def __exit__(
        self,
        _exc_type: type[BaseException] | None,
        _exc: BaseException | None,
        _tb: TracebackType | None,
    ) -> None:
        self.dispose()

    # ------------------------------------------------------------------
    # Action execution
    # ------------------------------------------------------------------

    def _perform(self, key: str, action: KeyAction) -> DispatchResult:
        acc = self.accumulator
        if action is KeyAction.DIGIT:
            translation = acc.translate_keypress(key)
            self._registry._show(translation.status)
            return DispatchResult(key, True, action, translation=translation)
        if action is KeyAction.NEGATE:
            translation = acc.negative_argument(key)
            self._registry._show(translation.status)
            return DispatchResult(key, True, action, translation=translation)

        if action is KeyAction.COMMIT:
            commit = acc.commit_and_reset()
        elif action is KeyAction.COMMIT_AND_CONTINUE:
            commit = acc.commit_and_continue()
        else:
            commit = acc.commit_with_decimal()
        self._registry._insert(commit.text)
        self._registry._show(commit.status)
        return DispatchResult(key, True, action, commit=commit)


class KeymapRegistry:
    """Owner of all digit-entry bindings for one host.

    Parameters
    ----------
    text_sink:
        Receives committed text.  Optional; without one, commits are
        only reported through :class:`DispatchResult`.
    status_sink:
        Receives status messages when an installation enables them.
    """

    def __init__(
        self,
        text_sink: TextSink | None = None,
        status_sink: StatusSink | None = None,
    ) -> None:
        self._text_sink: TextSink | None = text_sink
        self._status_sink: StatusSink | None = status_sink
        self._handles: list[InstallHandle] = []
        self._ids: Iterator[int] = itertools.count(1)

    @property
    def handles(self) -> tuple[InstallHandle, ...]:
        return tuple(self._handles)

    def install(self, config: DigitsConfig) -> InstallHandle:
        """Resolve *config* and bind its keys.

        Raises
        ------
        ConfigError
            If the layout is invalid or a key is given two roles.
            Nothing is installed in that case.
        """
        mapping = resolve_from_config(config)
        table = _collect_bindings(config, mapping)
        handle = InstallHandle(self, next(self._ids), config, mapping, table)
        self._handles.append(handle)
        logger.info(
            "Installed %d bindings as installation %d (layout %s)",
            len(table),
            handle.handle_id,
            mapping.layout_name or "<custom>",
        )
        return handle

    def lookup(self, key: str) -> Binding | None:
        """Return the active binding for *key*, newest installation first."""
        for handle in reversed(self._handles):
            action = handle.action_for(key)
            if action is not None:
                return Binding(key, action, handle.handle_id)
        return None

    def bindings(self) -> list[Binding]:
        """All active bindings, shadowed ones excluded."""
        seen: set[str] = set()
        active: list[Binding] = []
        for handle in reversed(self._handles):
            for binding in handle.bindings():
                if binding.key not in seen:
                    seen.add(binding.key)
                    active.append(binding)
        return active

    def dispatch(self, key: str) -> DispatchResult:
        """Route *key* to the installation that binds it.

        Any other installation with a number in progress is reset first.
        An unbound key ends every number in progress and is reported as
        unhandled so the host can process it normally; its ``prefix`` is
        ``None`` when nothing was typed since the last commit.
        """
        handle = self._owner(key)
        prefix = self._cancel_accumulating(except_handle=handle)
        if handle is not None:
            return handle.press(key)
        return DispatchResult(key, False, prefix=prefix)

    def dispose_all(self) -> None:
        for handle in list(self._handles):
            handle.dispose()

    # ------------------------------------------------------------------
    # Internals used by InstallHandle
    # ------------------------------------------------------------------

    def _owner(self, key: str) -> InstallHandle | None:
        for handle in reversed(self._handles):
            if handle.action_for(key) is not None:
                return handle
        return None

    def _cancel_accumulating(self, except_handle: InstallHandle | None = None) -> PrefixValue:
        """Reset every accumulating installation but *except_handle*.

        Returns the pending value of the newest one that was reset.
        """
        prefix: PrefixValue = None
        for other in reversed(self._handles):
            acc = other.accumulator
            if other is except_handle or acc.phase is not Phase.ACCUMULATING:
                continue
            if prefix is None:
                prefix = acc.state.pending if acc.has_input else None
            acc.cancel()
        return prefix

    def _remove(self, handle: InstallHandle) -> None:
        self._handles.remove(handle)

    def _insert(self, text: str) -> None:
        if self._text_sink is not None and text:
            self._text_sink.insert(text)

    def _show(self, message: str | None) -> None:
        if self._status_sink is not None and message is not None:
            self._status_sink.show(message)
