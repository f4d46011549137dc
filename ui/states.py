"""
CLI Games — ui/states.py
State Machine defining the UI screens and event routing logic.

Screens are plain state objects tagged with a ScreenID. Their behaviour
lives in the SCREENS dispatch table (filled in by ui/screens.py), which
maps each tag to an (update, render) pair:

    update(state, event, now) -> UpdateResult
    render(state, theme, now) -> Frame

update never sleeps and never touches a clock of its own: anything that
should happen later is returned as a TimerRequest, and the Engine hands
it back as a TimerFired event once due. There is no cancellation; screens
guard every timer-driven transition against stale timers instead.
"""

from __future__ import annotations

import heapq
import itertools
import sys
import time
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable, Dict, List, NamedTuple, Optional, Tuple, Union

import tcod

from games.data_loader import SettingsDef, ThemeDef, get_settings
from ui.keys import key_name
from ui.layout import Frame
from ui.renderer import Renderer


class ScreenID(Enum):
    """Identifiers for the screens of the application."""
    MAIN_MENU = "main_menu"
    COIN_FLIP = "coin_flip"


class TimerKind(Enum):
    ANIMATION_TICK = "animation_tick"
    AUTO_REPLAY_CHECK = "auto_replay_check"


@dataclass(frozen=True)
class KeyPress:
    key: str


@dataclass(frozen=True)
class TimerFired:
    kind: TimerKind
    token: int = 0


Event = Union[KeyPress, TimerFired]


@dataclass(frozen=True)
class TimerRequest:
    """Ask the Engine to deliver TimerFired(kind, token) after delay seconds."""
    kind: TimerKind
    delay: float
    token: int = 0


@dataclass
class UpdateResult:
    """
    Outcome of one update call.
    screen: the screen that should be active afterwards (the same object if unchanged).
    timers: one-shot timers to arm.
    quit:   stop the event loop.
    """
    screen: Any
    timers: List[TimerRequest] = field(default_factory=list)
    quit: bool = False


class ScreenOps(NamedTuple):
    update: Callable[[Any, Event, float], UpdateResult]
    render: Callable[[Any, ThemeDef, float], Frame]


SCREENS: Dict[ScreenID, ScreenOps] = {}


def register_screen(screen_id: ScreenID, update, render) -> None:
    SCREENS[screen_id] = ScreenOps(update, render)


def update_screen(state: Any, event: Event, now: float) -> UpdateResult:
    return SCREENS[state.screen_id].update(state, event, now)


def render_screen(state: Any, theme: ThemeDef, now: float) -> Frame:
    return SCREENS[state.screen_id].render(state, theme, now)


class TimerQueue:
    """One-shot timers ordered by due time; ties fire in arming order."""

    def __init__(self) -> None:
        self._heap: List[Tuple[float, int, TimerFired]] = []
        self._seq = itertools.count()

    def __len__(self) -> int:
        return len(self._heap)

    def arm(self, request: TimerRequest, now: float) -> None:
        heapq.heappush(
            self._heap,
            (now + request.delay, next(self._seq), TimerFired(request.kind, request.token)),
        )

    def next_due(self) -> Optional[float]:
        return self._heap[0][0] if self._heap else None

    def pop_due(self, now: float) -> List[Tuple[float, TimerFired]]:
        due = []
        while self._heap and self._heap[0][0] <= now:
            at, _, event = heapq.heappop(self._heap)
            due.append((at, event))
        return due


class Engine:
    """
    Central loop controller handling TCOD context, Renderer, and screen tracking.
    """
    def __init__(
        self,
        renderer: Renderer,
        initial_state: Any,
        settings: Optional[SettingsDef] = None,
        clock: Callable[[], float] = time.monotonic,
    ):
        self.renderer = renderer
        self.settings = settings if settings is not None else get_settings()
        self.clock = clock
        self.active_state: Any = initial_state
        self.timers = TimerQueue()
        self.running = True

    def _trace(self, message: str) -> None:
        if self.settings.app.trace:
            print(f"[Engine] {message}", file=sys.stderr)

    def change_state(self, new_state: Any) -> None:
        """Transitions to a new active screen. The old one is discarded."""
        self._trace(f"{self.active_state.screen_id.value} -> {new_state.screen_id.value}")
        self.active_state = new_state

    def handle(self, event: Event, now: Optional[float] = None) -> None:
        """Routes one event to the active screen and applies the result."""
        if not self.running:
            return
        if now is None:
            now = self.clock()

        result = update_screen(self.active_state, event, now)

        if result.quit:
            self._trace("quit requested")
            self.running = False
            return
        if result.screen is not self.active_state:
            self.change_state(result.screen)
        for request in result.timers:
            self.timers.arm(request, now)

    def handle_tcod_event(self, event: tcod.event.Event) -> None:
        if isinstance(event, tcod.event.Quit):
            self.running = False
        elif isinstance(event, tcod.event.KeyDown):
            key = key_name(event)
            if key is not None:
                self.handle(KeyPress(key))

    def fire_due_timers(self, now: Optional[float] = None) -> int:
        """Delivers every timer due by now. Returns how many fired."""
        if now is None:
            now = self.clock()
        fired = 0
        for _, event in self.timers.pop_due(now):
            if not self.running:
                break
            self.handle(event, now)
            fired += 1
        return fired

    def render(self, now: Optional[float] = None) -> Frame:
        if now is None:
            now = self.clock()
        return render_screen(self.active_state, self.settings.theme, now)

    def _wait_timeout(self) -> Optional[float]:
        due = self.timers.next_due()
        if due is None:
            return None
        return max(0.0, due - self.clock())

    def run(self) -> None:
        """Main blocking event loop."""

        with tcod.context.new_terminal(
            self.renderer.width,
            self.renderer.height,
            title=self.renderer.title,
            vsync=True,
        ) as context:
            self.renderer.context = context

            while self.running:
                # 1. Render
                self.renderer.clear()
                self.renderer.draw(self.render())
                self.renderer.present(context)

                # 2. Handle inputs, waking early when a timer falls due
                for event in tcod.event.wait(self._wait_timeout()):
                    context.convert_event(event)
                    self.handle_tcod_event(event)
                    if not self.running:
                        break

                # 3. Deliver timers
                self.fire_due_timers()
