"""In-memory host collaborators.

:class:`TextBuffer` and :class:`MessageLog` satisfy the
:class:`~homerow_digits.core.protocols.TextSink` and
:class:`~homerow_digits.core.protocols.StatusSink` protocols
structurally.  The CLI ``type`` command drives a registry with them;
tests use them as fakes.
"""

from __future__ import annotations

import logging

logger = logging.getLogger(__name__)


class TextBuffer:
    """A document with the cursor kept at its end; inserts append."""

    def __init__(self, text: str = "") -> None:
        self._text: str = text

    @property
    def text(self) -> str:
        return self._text

    def insert(self, text: str) -> None:
        self._text += text


class MessageLog:
    """Records status messages; the last one is the visible message."""

    def __init__(self) -> None:
        self.messages: list[str] = []

    @property
    def current(self) -> str | None:
        return self.messages[-1] if self.messages else None

    def show(self, message: str) -> None:
        logger.debug("status: %s", message)
        self.messages.append(message)
