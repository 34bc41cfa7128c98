"""Centralized color palette, Rich Theme, and shared constants."""

from __future__ import annotations

from dataclasses import dataclass

from rich.theme import Theme


@dataclass(frozen=True)
class ColorPalette:
    """Immutable color palette for the benchgate CLI.

    Tuned for dark CI log viewers; status colors stay legible when the log
    is rendered without a background.
    """

    primary: str = "#7AA2F7"
    success: str = "#A6E3A1"
    warning: str = "#F9E2AF"
    error: str = "#F38BA8"
    info: str = "#89DCEB"
    text: str = "#CDD6F4"
    text_muted: str = "#9399B2"
    border: str = "#585B70"


PALETTE = ColorPalette()

BG_THEME = Theme(
    {
        "bg.header": f"bold {PALETTE.primary}",
        "bg.label": f"bold {PALETTE.text}",
        "bg.muted": f"{PALETTE.text_muted}",
        "bg.pass": f"bold {PALETTE.success}",
        "bg.fail": f"bold {PALETTE.error}",
        "bg.warn": f"bold {PALETTE.warning}",
        "bg.info": f"{PALETTE.info}",
        "bg.ok": f"{PALETTE.success}",
        "bg.err": f"{PALETTE.error}",
        "bg.caution": f"{PALETTE.warning}",
        "bg.border": f"{PALETTE.border}",
        "bg.border.success": f"{PALETTE.success}",
        "bg.border.error": f"{PALETTE.error}",
    }
)

STATUS_ICONS: dict[str, str] = {
    "pass": "✓",
    "fail": "✗",
    "warn": "!",
    "info": "•",
}

PANEL_PADDING: tuple[int, int] = (1, 2)
