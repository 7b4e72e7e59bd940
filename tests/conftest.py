"""Shared pytest fixtures for the homerow-digits test suite.

Guidelines
----------
* Core tests must be pure — no side effects.
* Files are only written under ``tmp_path``.
* Tests must not depend on the user's real config file.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator

import pytest

from homerow_digits.core.accumulator import Accumulator
from homerow_digits.core.resolver import resolve_layout
from homerow_digits.infra.config_loader import CONFIG_ENV_VAR


@pytest.fixture(autouse=True)
def _isolated_config(monkeypatch: pytest.MonkeyPatch, tmp_path_factory: pytest.TempPathFactory) -> None:
    """Point the default config location at an empty directory."""
    home = tmp_path_factory.mktemp("config-home")
    monkeypatch.delenv(CONFIG_ENV_VAR, raising=False)
    monkeypatch.setenv("XDG_CONFIG_HOME", str(home))


@pytest.fixture(autouse=True)
def _reset_logging() -> Iterator[None]:
    """Drop handlers that CLI runs attach to the package logger."""
    yield
    logger = logging.getLogger("homerow_digits")
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
    logger.setLevel(logging.NOTSET)


@pytest.fixture
def qwerty_accumulator() -> Accumulator:
    """Accumulator on the QWERTY home row: a=1 s=2 … l=9 ;=0."""
    return Accumulator(resolve_layout("qwerty"))
