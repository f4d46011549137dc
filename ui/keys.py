"""
CLI Games — ui/keys.py
Key bindings: logical actions mapped to physical key names.

Screens never look at tcod events directly. The Engine converts each
tcod KeyDown into a key name ("up", "enter", " ", "ctrl+c", "f", ...)
and every screen matches that name against its own bindings, so the
same physical key can mean different things on different screens.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Tuple

import tcod.event


@dataclass(frozen=True)
class KeyBinding:
    keys: Tuple[str, ...]
    help_key: str
    help_desc: str

    def matches(self, key: str) -> bool:
        return key in self.keys

    @property
    def help(self) -> Tuple[str, str]:
        return self.help_key, self.help_desc


def binding(*keys: str, help: Tuple[str, str]) -> KeyBinding:
    return KeyBinding(keys=tuple(keys), help_key=help[0], help_desc=help[1])


@dataclass(frozen=True)
class MainMenuKeyMap:
    up: KeyBinding = binding("up", "k", help=("up/k", "move up"))
    down: KeyBinding = binding("down", "j", help=("down/j", "move down"))
    select: KeyBinding = binding("enter", " ", help=("enter", "select"))
    quit: KeyBinding = binding("q", "ctrl+c", help=("q", "quit"))


@dataclass(frozen=True)
class CoinFlipKeyMap:
    flip: KeyBinding = binding("f", "enter", " ", help=("f/enter/space", "flip coin"))
    back: KeyBinding = binding("b", "esc", help=("b/esc", "back to menu"))
    quit: KeyBinding = binding("q", "ctrl+c", help=("q/ctrl+c", "quit"))


DEFAULT_MAIN_MENU_KEYS = MainMenuKeyMap()
DEFAULT_COIN_FLIP_KEYS = CoinFlipKeyMap()


_NAMED_KEYS = {
    tcod.event.KeySym.UP: "up",
    tcod.event.KeySym.DOWN: "down",
    tcod.event.KeySym.LEFT: "left",
    tcod.event.KeySym.RIGHT: "right",
    tcod.event.KeySym.RETURN: "enter",
    tcod.event.KeySym.KP_ENTER: "enter",
    tcod.event.KeySym.ESCAPE: "esc",
    tcod.event.KeySym.SPACE: " ",
    tcod.event.KeySym.TAB: "tab",
    tcod.event.KeySym.BACKSPACE: "backspace",
}


def key_name(event: tcod.event.KeyDown) -> Optional[str]:
    """Returns the key name for a tcod key press, or None for keys no screen binds."""
    sym = event.sym
    if event.mod & tcod.event.Modifier.CTRL:
        if tcod.event.KeySym.A <= sym <= tcod.event.KeySym.Z:
            return f"ctrl+{chr(sym)}"
        return None
    if sym in _NAMED_KEYS:
        return _NAMED_KEYS[sym]
    if tcod.event.KeySym.A <= sym <= tcod.event.KeySym.Z:
        return chr(sym)
    return None
