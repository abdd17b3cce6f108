# src/fun_todo/connectors/theme.py

"""Color & style helpers for the console.

Decisions:
- Truecolor preferred; falls back to the 256-color cube if unsupported.
- Whether color is on at all is decided by Settings.color_enabled
  (NO_COLOR / FORCE_COLOR / TTY detection live there).
"""
from __future__ import annotations

import os


def _use_truecolor() -> bool:
    colorterm = os.environ.get("COLORTERM", "").lower()
    return any(tok in colorterm for tok in ("truecolor", "24bit"))


def _hex_to_rgb(hex_code: str) -> tuple[int, int, int]:
    """Convert a hex color code to an RGB tuple."""
    h = hex_code.lstrip("#")
    return int(h[0:2], 16), int(h[2:4], 16), int(h[4:6], 16)


def _fg_256(r: int, g: int, b: int) -> str:
    """Approximate RGB to xterm 256-color cube."""
    def to_6(x: int) -> int:
        return int(round(x / 255 * 5))
    idx = 16 + 36 * to_6(r) + 6 * to_6(g) + to_6(b)
    return f"\033[38;5;{idx}m"


def fg(hex_code: str) -> str:
    """ANSI foreground sequence for a hex color."""
    r, g, b = _hex_to_rgb(hex_code)
    if _use_truecolor():
        return f"\033[38;2;{r};{g};{b}m"
    return _fg_256(r, g, b)


RESET = "\033[0m"
BOLD = "\033[1m"
DIM = "\033[2m"
STRIKE = "\033[9m"

HEADER_HEX = "#4D96FF"


class Theme:
    """Applies styles only when enabled, so callers never branch on color."""

    def __init__(self, enabled: bool) -> None:
        self.enabled = bool(enabled)

    def paint(self, text: str, *styles: str) -> str:
        if not self.enabled or not styles:
            return text
        return "".join(styles) + text + RESET

    def hex(self, text: str, hex_code: str, *styles: str) -> str:
        if not self.enabled:
            return text
        return self.paint(text, fg(hex_code), *styles)

    def header(self, text: str) -> str:
        return self.hex(text, HEADER_HEX, BOLD)
