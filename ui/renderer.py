"""
CLI Games — ui/renderer.py
TCOD Renderer: draws screen frames onto the root console.
===============================================
Stack:       Python 3.11+ | tcod
Status:      Complete.
"""

from __future__ import annotations
from typing import Optional
import tcod

from ui.layout import Frame

DEFAULT_FG = (220, 220, 220)


class Renderer:
    """
    Manages the tcod root console and rendering loop.
    """
    def __init__(self, width: int, height: int, title: str = "CLI Games", margin: int = 1):
        self.width = width
        self.height = height
        self.title = title
        self.margin = margin
        self.root_console = tcod.console.Console(width, height)
        self.context: Optional[tcod.context.Context] = None

    def clear(self) -> None:
        """Clear the console with black."""
        self.root_console.clear()

    def draw(self, frame: Frame) -> None:
        """Prints a frame line by line, clipped to the console."""
        x = self.margin
        room = self.width - x
        for y, line in enumerate(frame.lines[: self.height - self.margin], start=self.margin):
            if not line.text or room <= 0:
                continue
            self.root_console.print(
                x, y, line.text[:room], fg=line.fg or DEFAULT_FG, bg=line.bg
            )

    def present(self, context: tcod.context.Context) -> None:
        """Present the current console to the screen."""
        context.present(self.root_console)
