"""Output formatting utilities for the CLI."""

from typing import List, Sequence

import click


def format_success(message: str) -> str:
    """Green, bold success line."""
    return click.style(f"✓ {message}", fg="green", bold=True)


def format_error(message: str) -> str:
    """Red, bold error line."""
    return click.style(f"✗ {message}", fg="red", bold=True)


def format_warning(message: str) -> str:
    """Yellow, bold warning line."""
    return click.style(f"⚠ {message}", fg="yellow", bold=True)


def format_info(message: str) -> str:
    """Blue info line."""
    return click.style(f"ℹ {message}", fg="blue")


def _is_numeric(cell: str) -> bool:
    stripped = "".join(cell.split())
    for symbol in (",", ".", "%", ":"):
        stripped = stripped.replace(symbol, "")
    return stripped.lstrip("-").isdigit()


def format_table(headers: Sequence[str], rows: Sequence[Sequence[object]]) -> str:
    """Format rows as a plain-text table.

    Numeric cells are right-aligned, text cells left-aligned.

    Args:
        headers: Column headers
        rows: Data rows (cells are converted with str())

    Returns:
        Table as a single string (empty string when there are no headers)
    """
    if not headers:
        return ""

    cells: List[List[str]] = [[str(c) for c in row[: len(headers)]] for row in rows]
    widths = [len(h) for h in headers]
    for row in cells:
        for i, cell in enumerate(row):
            widths[i] = max(widths[i], len(cell))

    separator = "+" + "+".join("-" * (w + 2) for w in widths) + "+"

    def render(row: Sequence[str], align_numbers: bool) -> str:
        rendered = []
        for i, cell in enumerate(row):
            if align_numbers and _is_numeric(cell):
                rendered.append(f" {cell:>{widths[i]}} ")
            else:
                rendered.append(f" {cell:<{widths[i]}} ")
        return "|" + "|".join(rendered) + "|"

    lines = [separator, render(list(headers), False), separator]
    if cells:
        lines.extend(render(row, True) for row in cells)
        lines.append(separator)
    return "\n".join(lines)
