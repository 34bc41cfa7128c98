"""Theme-aware Rich rendering helpers shared across CLI commands."""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any

from rich.box import ROUNDED
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from ._theme import PANEL_PADDING, STATUS_ICONS


def key_value_panel(
    data: dict[str, Any],
    *,
    title: str | None = None,
    border: str = "bg.border",
) -> Panel:
    """Render a dict as an aligned key-value panel."""
    max_key_len = max((len(str(k)) for k in data), default=0)
    lines: list[str] = []
    for key, value in data.items():
        padded = str(key).ljust(max_key_len)
        lines.append(f"[bg.label]{padded}[/bg.label]  {escape(str(value))}")
    return Panel(
        "\n".join(lines),
        title=title,
        border_style=border,
        box=ROUNDED,
        padding=PANEL_PADDING,
    )


def status_table(
    rows: Sequence[tuple[str, str, str]],
    *,
    title: str | None = None,
    columns: tuple[str, str, str] = ("", "Candidate", "Status"),
) -> Table:
    """Render a status-icon table.

    Each row is ``(status_key, label, value)`` where *status_key* is one
    of ``"pass"``, ``"fail"``, ``"warn"``, or ``"info"``.
    """
    table = Table(title=title, title_style="bg.header", show_lines=False, padding=(0, 2))
    table.add_column(columns[0], width=3, no_wrap=True)
    table.add_column(columns[1], style="bg.label", overflow="fold")
    table.add_column(columns[2])

    style_map = {
        "pass": "bg.ok",
        "fail": "bg.err",
        "warn": "bg.caution",
        "info": "bg.info",
    }

    for status_key, label, value in rows:
        icon = STATUS_ICONS.get(status_key, STATUS_ICONS["info"])
        style = style_map.get(status_key, "")
        table.add_row(f"[{style}]{icon}[/{style}]", escape(label), value)

    return table
