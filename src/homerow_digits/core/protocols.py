"""Protocols (interfaces) for the host collaborators.

The core never inserts text or displays messages itself.  It hands
rendered strings to objects satisfying these protocols; any object with
the right method satisfies them structurally (no explicit inheritance
required).
"""

from __future__ import annotations

from typing import Protocol


class TextSink(Protocol):
    """Receives committed text for insertion at the cursor."""

    def insert(self, text: str) -> None:
        """Insert *text* at the current cursor position.

        Called once per commit with the complete rendered fragment,
        including any trailing space or decimal separator.
        """
        ...  # pragma: no cover


class StatusSink(Protocol):
    """Receives transient status messages (the number being composed)."""

    def show(self, message: str) -> None:
        """Display *message*, replacing any previous status message."""
        ...  # pragma: no cover
