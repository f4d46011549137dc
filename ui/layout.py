"""
CLI Games — ui/layout.py
Pure string layout: frames of styled lines, centering and boxes.

Nothing here touches a console. A Frame is what every screen renders;
ui/renderer.py is the only place that turns it into tcod draw calls.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, NamedTuple, Optional, Tuple

RGB = Tuple[int, int, int]

ROUNDED_BORDER = ("╭", "─", "╮", "│", "╰", "╯")


class TextLine(NamedTuple):
    text: str
    fg: Optional[RGB] = None
    bg: Optional[RGB] = None


@dataclass
class Frame:
    """One full screen of output, top to bottom."""
    lines: List[TextLine] = field(default_factory=list)

    def add(self, text: str = "", fg: Optional[RGB] = None, bg: Optional[RGB] = None) -> None:
        for part in text.split("\n"):
            self.lines.append(TextLine(part, fg, bg))

    @property
    def text(self) -> str:
        """The frame as a single UTF-8 text block."""
        return "\n".join(line.text for line in self.lines) + "\n"


def center_block(block: str, width: int) -> str:
    """
    Centers a multi-line block within width columns as one unit,
    so ASCII art keeps its internal alignment.
    """
    lines = block.strip("\n").split("\n")
    widest = max(len(line.rstrip()) for line in lines)
    pad = " " * max(0, (width - widest) // 2)
    return "\n".join((pad + line.rstrip()).rstrip() for line in lines)


def center_line(text: str, width: int) -> str:
    return text.center(width).rstrip()


def boxed(text: str, pad_x: int = 3, pad_y: int = 1) -> str:
    """Wraps text in a rounded border with padding."""
    tl, h, tr, v, bl, br = ROUNDED_BORDER
    inner = len(text) + pad_x * 2
    blank = f"{v}{' ' * inner}{v}"
    rows = [tl + h * inner + tr]
    rows += [blank] * pad_y
    rows.append(f"{v}{' ' * pad_x}{text}{' ' * pad_x}{v}")
    rows += [blank] * pad_y
    rows.append(bl + h * inner + br)
    return "\n".join(rows)


def banner(text: str) -> str:
    return f" {text} "


def help_line(*pairs: Tuple[str, str]) -> str:
    return " • ".join(f"{key}: {desc}" for key, desc in pairs)
