"""Table rendering for the ``layouts`` and ``show`` commands.

Rich tables when Rich is installed, aligned plain text otherwise.  No
business logic: rows are built from core data, then printed.
"""

from __future__ import annotations

import sys
from collections.abc import Sequence

from homerow_digits.cli.console import console, escape
from homerow_digits.core.layouts import (
    DEFAULT_DIGIT_ORDER,
    DEFAULT_LAYOUT,
    DIGIT_ORDERS,
    LAYOUT_PRESETS,
)
from homerow_digits.core.models import LayoutMapping
from homerow_digits.exceptions import format_key


# ---------------------------------------------------------------------------
# Row builders (pure)
# ---------------------------------------------------------------------------

def _display_keys(keys: Sequence[str]) -> str:
    return " ".join(format_key(key) for key in keys)


def layout_rows() -> list[tuple[str, str, str]]:
    """Return ``(name, keys, description)`` for every key preset."""
    rows = []
    for preset in LAYOUT_PRESETS.values():
        name = preset.name + (" (default)" if preset.name == DEFAULT_LAYOUT else "")
        rows.append((name, _display_keys(preset.keys), preset.description))
    return rows


def digit_order_rows() -> list[tuple[str, str, str]]:
    """Return ``(name, digits, description)`` for every digit order."""
    rows = []
    for order in DIGIT_ORDERS.values():
        name = order.name + (" (default)" if order.name == DEFAULT_DIGIT_ORDER else "")
        rows.append((name, " ".join(order.digits), order.description))
    return rows


def mapping_rows(mapping: LayoutMapping) -> list[tuple[str, str]]:
    return [(format_key(key), digit) for key, digit in mapping.items()]


# ---------------------------------------------------------------------------
# Rendering
# ---------------------------------------------------------------------------

def _print_plain(title: str, headers: Sequence[str], rows: Sequence[Sequence[str]]) -> None:
    widths = [
        max(len(headers[i]), *(len(row[i]) for row in rows)) if rows else len(headers[i])
        for i in range(len(headers))
    ]
    print(f"\n{title}", file=sys.stdout)
    print("  ".join(h.ljust(w) for h, w in zip(headers, widths)), file=sys.stdout)
    print("  ".join("-" * w for w in widths), file=sys.stdout)
    for row in rows:
        print("  ".join(cell.ljust(w) for cell, w in zip(row, widths)), file=sys.stdout)


def print_table(title: str, headers: Sequence[str], rows: Sequence[Sequence[str]]) -> None:
    """Print a titled table, falling back to plain text without Rich."""
    try:
        from rich.table import Table
    except ModuleNotFoundError:
        _print_plain(title, headers, rows)
        return

    table = Table(
        title=title,
        show_header=True,
        header_style="bold magenta",
        border_style="dim",
    )
    for header in headers:
        table.add_column(header)
    for row in rows:
        table.add_row(*(escape(cell) for cell in row))
    console.print(table)


def print_layouts() -> None:
    print_table("Key presets", ("Preset", "Keys", "Description"), layout_rows())
    print_table("Digit orders", ("Order", "Digits", "Description"), digit_order_rows())


def print_mapping(mapping: LayoutMapping) -> None:
    title = (
        f"{mapping.layout_name or 'custom keys'} / "
        f"{mapping.digit_order_name or 'custom digits'}"
    )
    print_table(title, ("Key", "Digit"), mapping_rows(mapping))
    for warning in mapping.warnings:
        console.print(f"[yellow]Warning:[/yellow] {escape(warning)}")
