"""Numeric accumulator — the running state behind home-row digit entry.

One :class:`Accumulator` per installation.  Each keypress is resolved
through the active :class:`~homerow_digits.core.models.LayoutMapping`
and folded into the pending prefix value; commits render that value as
text and hand it back to the caller for insertion.

State machine
-------------
``IDLE``
    Pending value unset, no counted zeroes, nothing emitted.
``ACCUMULATING``
    Anything else.  Every commit returns to ``IDLE``;
    :meth:`Accumulator.commit_with_decimal` then immediately re-enters
    ``ACCUMULATING`` with a zero-valued pending prefix.

Guarantees
----------
* No I/O, no ``print()``.
* A failed keypress leaves the state untouched.
"""

from __future__ import annotations

import logging

from homerow_digits.config import DigitsConfig
from homerow_digits.core import prefix_arg
from homerow_digits.core.models import (
    AccumulatorSnapshot,
    AccumulatorState,
    CommitResult,
    LayoutMapping,
    Phase,
    TranslationResult,
)
from homerow_digits.exceptions import TranslationError, format_key

logger = logging.getLogger(__name__)

CONTINUATION_DELIMITER = " "


class Accumulator:
    """Stateful digit accumulator bound to one layout mapping.

    Parameters
    ----------
    mapping:
        Resolved key → digit mapping.
    show_status:
        When false, results carry ``status=None``.
    prefix_indicator:
        Text placed before the number in status messages.
    decimal_text:
        Default separator for :meth:`commit_with_decimal`.
    """

    def __init__(
        self,
        mapping: LayoutMapping,
        *,
        show_status: bool = True,
        prefix_indicator: str = "C-u ",
        decimal_text: str = ".",
    ) -> None:
        self._mapping: LayoutMapping = mapping
        self._state: AccumulatorState = AccumulatorState()
        self.show_status: bool = show_status
        self.prefix_indicator: str = prefix_indicator
        self.decimal_text: str = decimal_text

    @classmethod
    def from_config(cls, config: DigitsConfig, mapping: LayoutMapping) -> Accumulator:
        return cls(
            mapping,
            show_status=config.show_status_message,
            prefix_indicator=config.prefix_indicator,
            decimal_text=config.decimal_text,
        )

    # ------------------------------------------------------------------
    # Accessors
    # ------------------------------------------------------------------

    @property
    def mapping(self) -> LayoutMapping:
        return self._mapping

    @property
    def state(self) -> AccumulatorSnapshot:
        """Read-only copy of the current state."""
        return self._state.snapshot()

    @property
    def phase(self) -> Phase:
        return self._state.phase

    @property
    def has_input(self) -> bool:
        """Whether anything was typed since the last commit.

        False in ``IDLE`` and in the fresh segment that follows a decimal
        separator.
        """
        state = self._state
        if state.pending is None:
            return False
        return not (prefix_arg.is_zero(state.pending) and state.leading_zero_count == 0)

    def rebind(self, mapping: LayoutMapping) -> None:
        """Switch to *mapping* after a configuration change.

        Any number in progress is discarded.
        """
        self._mapping = mapping
        self.cancel()

    # ------------------------------------------------------------------
    # Keypresses
    # ------------------------------------------------------------------

    def translate_keypress(self, key: str) -> TranslationResult:
        """Resolve *key* to a digit and fold it into the pending value.

        Raises
        ------
        TranslationError
            If *key* is not in the active mapping.  The state is left
            unchanged.
        """
        digit = self._mapping.digit_for(key)
        if digit is None:
            raise TranslationError(
                f"unmapped key {format_key(key)!r}",
                key=key,
                hint="The key is bound to digit entry but missing from the layout.",
            )

        state = self._state
        if state.pending is None:
            self._start_fresh()
        if digit == "0" and (state.pending is None or prefix_arg.is_zero(state.pending)):
            state.leading_zero_count += 1
        state.pending = prefix_arg.apply_digit(state.pending, digit)
        return self._result(key, digit)

    def negative_argument(self, key: str = "-") -> TranslationResult:
        """Apply the minus key to the pending value."""
        state = self._state
        if state.pending is None:
            self._start_fresh()
        state.pending = prefix_arg.negate(state.pending)
        return self._result(key, None)

    # ------------------------------------------------------------------
    # Rendering
    # ------------------------------------------------------------------

    def render(self) -> str:
        """Canonical text for the pending value, without resetting."""
        return prefix_arg.render_number(
            self._state.pending, self._state.leading_zero_count,
        )

    def status_text(self) -> str:
        """Status line: indicator, emitted fragments, then the number so far."""
        state = self._state
        number = self.render() if self.has_input else ""
        return f"{self.prefix_indicator}{''.join(state.already_emitted)}{number}"

    # ------------------------------------------------------------------
    # Commits
    # ------------------------------------------------------------------

    def commit_and_reset(self) -> CommitResult:
        """Render the pending value and return to ``IDLE``."""
        fragment = self.render()
        self._state.reset()
        logger.debug("Committed %r", fragment)
        return CommitResult(text=fragment, fragment=fragment)

    def commit_and_continue(self) -> CommitResult:
        """Commit, then ask the host to keep collecting a new number."""
        committed = self.commit_and_reset()
        return CommitResult(
            text=committed.fragment + CONTINUATION_DELIMITER,
            fragment=committed.fragment,
            status=self.prefix_indicator if self.show_status else None,
            continue_collecting=True,
        )

    def commit_with_decimal(self, decimal_text: str | None = None) -> CommitResult:
        """Commit with a decimal separator and start the fractional part.

        The rendered fragment plus separator is remembered in
        ``already_emitted`` so the status line keeps showing the whole
        number; the pending value restarts from zero.
        """
        separator = self.decimal_text if decimal_text is None else decimal_text
        state = self._state
        emitted = list(state.already_emitted)
        committed = self.commit_and_reset()
        text = committed.fragment + separator

        state.already_emitted.extend(emitted)
        state.already_emitted.append(text)
        state.pending = 0
        state.leading_zero_count = 0
        return CommitResult(
            text=text,
            fragment=committed.fragment,
            status=self.status_text() if self.show_status else None,
            continue_collecting=True,
        )

    def cancel(self) -> None:
        """Drop any number in progress."""
        if self._state.phase is Phase.ACCUMULATING:
            logger.debug("Cancelled pending prefix %r", self._state.pending)
        self._state.reset()

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _start_fresh(self) -> None:
        self._state.already_emitted.clear()
        self._state.leading_zero_count = 0

    def _result(self, key: str, digit: str | None) -> TranslationResult:
        state = self._state
        return TranslationResult(
            key=key,
            digit=digit,
            pending=state.pending,
            leading_zero_count=state.leading_zero_count,
            status=self.status_text() if self.show_status else None,
        )
