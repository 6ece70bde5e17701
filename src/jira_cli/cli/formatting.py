"""Small text helpers for table cells."""

from __future__ import annotations

import textwrap


def display_number(number: float, decimals: int = 2) -> str:
    """Round to at most *decimals* places and drop trailing zeros.

    ``display_number(1.5) == "1.5"``, ``display_number(2.0) == "2"``.
    """
    rounded = round(number, decimals)
    if rounded == int(rounded):
        return str(int(rounded))
    return f"{rounded:.{decimals}f}".rstrip("0")


def display_hours(seconds: int) -> str:
    return display_number(seconds / 3600)


def display_text(text: str, width: int) -> str:
    """Wrap every line of *text* to *width*, trimming each line first."""
    return "\n".join(
        textwrap.fill(line.strip(), width=width) if line.strip() else ""
        for line in text.split("\n")
    )
