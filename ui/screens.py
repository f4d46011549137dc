"""
CLI Games — ui/screens.py
Implementations of the UI Screen States.

Each screen is a dataclass holding its own state plus a pair of module
functions registered in ui.states.SCREENS:

  MAIN_MENU  update_main_menu / render_main_menu
  COIN_FLIP  update_coin_flip / render_coin_flip

Coin Flip timeline
------------------
  Idle --flip--> Animating --(N-1 ticks)--> ShowingResult
  ShowingResult --flip--> Animating
  ShowingResult --auto-replay check, hold elapsed--> Animating

The coin lands on the tick that advances the step to the last index, so
COIN_FRAMES[N-1] is never on screen; frames 0..N-2 are shown in order.

Timers carry the token of the CoinFlipState that armed them. A timer is
acted on only if its token matches and the screen is still in the state
that timer expects; anything else is dropped.
"""

from __future__ import annotations

import itertools
from dataclasses import dataclass, field
from enum import Enum
from typing import ClassVar, List, Optional

from games.coinflip import CoinFlip, CoinSide
from games.data_loader import SettingsDef, ThemeDef, get_settings
from ui.keys import (
    CoinFlipKeyMap,
    MainMenuKeyMap,
    DEFAULT_COIN_FLIP_KEYS,
    DEFAULT_MAIN_MENU_KEYS,
)
from ui.layout import Frame, banner, boxed, center_block, center_line, help_line
from ui.states import (
    Event,
    KeyPress,
    ScreenID,
    TimerFired,
    TimerKind,
    TimerRequest,
    UpdateResult,
    register_screen,
)

# ================================================================================
# MAIN MENU
# ================================================================================

class MenuAction(Enum):
    OPEN_COIN_FLIP = "coin_flip"
    OPEN_DICE_ROLL = "dice_roll"
    OPEN_BLACKJACK = "blackjack"
    QUIT = "quit"


@dataclass(frozen=True)
class MenuEntry:
    label: str
    action: MenuAction


def default_entries() -> List[MenuEntry]:
    return [
        MenuEntry("Coin Flip", MenuAction.OPEN_COIN_FLIP),
        MenuEntry("Dice Roll", MenuAction.OPEN_DICE_ROLL),
        MenuEntry("Blackjack", MenuAction.OPEN_BLACKJACK),
        MenuEntry("Quit", MenuAction.QUIT),
    ]


MENU_TITLE = "CLI GAMES"
MENU_HELP = "Press q to quit, up/k and down/j to navigate, enter to select"


@dataclass
class MainMenuState:
    """The title screen."""
    screen_id: ClassVar[ScreenID] = ScreenID.MAIN_MENU

    settings: SettingsDef = field(default_factory=get_settings)
    entries: List[MenuEntry] = field(default_factory=default_entries)
    cursor: int = 0
    selected: int = -1
    notice: str = ""
    keys: MainMenuKeyMap = DEFAULT_MAIN_MENU_KEYS

    def __post_init__(self) -> None:
        if not self.entries:
            raise ValueError("Main menu needs at least one entry")


def _select_entry(state: MainMenuState) -> UpdateResult:
    state.selected = state.cursor
    entry = state.entries[state.cursor]

    if entry.action is MenuAction.OPEN_COIN_FLIP:
        return UpdateResult(CoinFlipState.fresh(state.settings))
    if entry.action is MenuAction.QUIT:
        return UpdateResult(state, quit=True)

    # Dice Roll and Blackjack are placeholders
    state.notice = f"{entry.label} is not available yet"
    return UpdateResult(state)


def update_main_menu(state: MainMenuState, event: Event, now: float) -> UpdateResult:
    if not isinstance(event, KeyPress):
        return UpdateResult(state)

    key = event.key
    if state.keys.quit.matches(key):
        return UpdateResult(state, quit=True)
    if state.keys.up.matches(key):
        state.cursor = max(0, state.cursor - 1)
        state.notice = ""
    elif state.keys.down.matches(key):
        state.cursor = min(len(state.entries) - 1, state.cursor + 1)
        state.notice = ""
    elif state.keys.select.matches(key):
        return _select_entry(state)

    return UpdateResult(state)


def render_main_menu(state: MainMenuState, theme: ThemeDef, now: float) -> Frame:
    frame = Frame()
    frame.add(banner(MENU_TITLE), fg=theme.title_fg, bg=theme.title_bg)
    frame.add()

    for i, entry in enumerate(state.entries):
        if i == state.cursor:
            frame.add(f"  ▸ {entry.label}", fg=theme.accent)
        else:
            frame.add(f"    {entry.label}", fg=theme.text)

    if state.notice:
        frame.add()
        frame.add(f"  {state.notice}", fg=theme.notice)

    frame.add()
    frame.add(f"    {MENU_HELP}", fg=theme.help)
    return frame

# ================================================================================
# COIN FLIP
# ================================================================================

# Rotation, not scaling: face, edge-on, the other face, edge-on again.
COIN_FRAMES = [
    r"""
   ______
  /      \
 |        |
 |  COIN  |
 |        |
  \______/
""",
    r"""
    ____
   /    \
  |      |
  |______|
""",
    r"""
     __
    |  |
    |  |
    |__|
""",
    r"""
      |
      |
      |
      |
""",
    r"""
      |
      |
      |
      |
""",
    r"""
     __
    |  |
    |  |
    |__|
""",
    r"""
    ____
   /    \
  |      |
  |______|
""",
    r"""
   ______
  /      \
 |        |
 |        |
 |        |
  \______/
""",
    r"""
    ____
   /    \
  |      |
  |______|
""",
    r"""
     __
    |  |
    |  |
    |__|
""",
    r"""
      |
      |
      |
      |
""",
    r"""
      |
      |
      |
      |
""",
    r"""
     __
    |  |
    |  |
    |__|
""",
    r"""
    ____
   /    \
  |      |
  |______|
""",
]

COIN_FLIP_TITLE = "COIN FLIP"
FLIP_PROMPT = "Press F or ENTER to flip the coin"

_TOKENS = itertools.count(1)


def result_coin(side: CoinSide) -> str:
    return "\n".join([
        "   ______",
        "  /      \\",
        " |        |",
        f" |{side.value:^8}|",
        " |        |",
        r"  \______/",
    ])


@dataclass
class CoinFlipState:
    """
    The coin flip game screen.
    result_started_at uses the same clock as the `now` passed to update/render.
    """
    screen_id: ClassVar[ScreenID] = ScreenID.COIN_FLIP

    settings: SettingsDef = field(default_factory=get_settings)
    coin: CoinFlip = field(default_factory=CoinFlip)
    flipping: bool = False
    animation_step: int = 0
    result: Optional[CoinSide] = None
    show_result: bool = False
    result_started_at: float = 0.0
    auto_flip: bool = True
    token: int = field(default_factory=lambda: next(_TOKENS))
    keys: CoinFlipKeyMap = DEFAULT_COIN_FLIP_KEYS

    @classmethod
    def fresh(cls, settings: SettingsDef) -> "CoinFlipState":
        return cls(
            settings=settings,
            coin=CoinFlip(settings.app.seed),
            auto_flip=settings.app.auto_replay,
        )

    @property
    def idle(self) -> bool:
        return not self.flipping and not self.show_result

    def remaining(self, now: float) -> float:
        """Seconds left before auto-replay, never negative."""
        elapsed = now - self.result_started_at
        return max(0.0, self.settings.timing.hold_duration - elapsed)


def _tick(state: CoinFlipState) -> TimerRequest:
    return TimerRequest(TimerKind.ANIMATION_TICK, state.settings.timing.tick_delay, state.token)


def _replay_check(state: CoinFlipState) -> TimerRequest:
    return TimerRequest(TimerKind.AUTO_REPLAY_CHECK, state.settings.timing.poll_delay, state.token)


def _start_flip(state: CoinFlipState) -> UpdateResult:
    state.flipping = True
    state.show_result = False
    state.animation_step = 0
    return UpdateResult(state, [_tick(state)])


def _on_animation_tick(state: CoinFlipState, now: float) -> UpdateResult:
    if not state.flipping:
        return UpdateResult(state)

    state.animation_step += 1
    if state.animation_step < len(COIN_FRAMES) - 1:
        return UpdateResult(state, [_tick(state)])

    # Last frame reached: the coin lands.
    state.result = state.coin.flip()
    state.flipping = False
    state.show_result = True
    state.animation_step = 0
    state.result_started_at = now

    if state.auto_flip:
        return UpdateResult(state, [_replay_check(state)])
    return UpdateResult(state)


def _on_auto_replay_check(state: CoinFlipState, now: float) -> UpdateResult:
    if not (state.show_result and state.auto_flip and not state.flipping):
        return UpdateResult(state)

    if now - state.result_started_at >= state.settings.timing.hold_duration:
        return _start_flip(state)
    return UpdateResult(state, [_replay_check(state)])


def update_coin_flip(state: CoinFlipState, event: Event, now: float) -> UpdateResult:
    if isinstance(event, KeyPress):
        key = event.key
        if state.keys.quit.matches(key):
            return UpdateResult(state, quit=True)
        if state.keys.back.matches(key):
            return UpdateResult(MainMenuState(settings=state.settings))
        if state.keys.flip.matches(key) and not state.flipping:
            return _start_flip(state)
        return UpdateResult(state)

    if isinstance(event, TimerFired) and event.token == state.token:
        if event.kind is TimerKind.ANIMATION_TICK:
            return _on_animation_tick(state, now)
        if event.kind is TimerKind.AUTO_REPLAY_CHECK:
            return _on_auto_replay_check(state, now)

    return UpdateResult(state)


def render_coin_flip(state: CoinFlipState, theme: ThemeDef, now: float) -> Frame:
    width = theme.content_width
    frame = Frame()
    frame.add(banner(COIN_FLIP_TITLE), fg=theme.title_fg, bg=theme.title_bg)
    frame.add()

    if state.flipping:
        frame.add(center_block(COIN_FRAMES[state.animation_step], width), fg=theme.coin)
    elif state.show_result and state.result is not None:
        frame.add(center_block(result_coin(state.result), width), fg=theme.coin)
        frame.add()
        frame.add(center_block(boxed(f"Result: {state.result.value}"), width), fg=theme.coin)
        frame.add()
        if state.auto_flip:
            countdown = f"Next flip in {state.remaining(now):.1f} seconds..."
            frame.add(center_line(countdown, width), fg=theme.countdown)
    else:
        frame.add(center_block(COIN_FRAMES[0], width), fg=theme.coin)
        frame.add()
        frame.add(center_line(FLIP_PROMPT, width), fg=theme.text)

    keys = state.keys
    frame.add()
    frame.add(help_line(keys.flip.help, keys.back.help, keys.quit.help), fg=theme.help)
    return frame


register_screen(ScreenID.MAIN_MENU, update_main_menu, render_main_menu)
register_screen(ScreenID.COIN_FLIP, update_coin_flip, render_coin_flip)
