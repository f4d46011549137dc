"""
Engine: event routing, screen swaps, timer delivery and quitting.
"""
import pytest
import tcod.event

from games.coinflip import CoinSide
from games.data_loader import AppDef, SettingsDef
from ui.renderer import Renderer
from ui.states import (
    SCREENS,
    Engine,
    KeyPress,
    ScreenID,
    TimerFired,
    TimerKind,
    TimerQueue,
    TimerRequest,
)
from ui.screens import COIN_FRAMES, CoinFlipState, MainMenuState


class FakeClock:
    def __init__(self, t=0.0):
        self.t = t

    def __call__(self):
        return self.t


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def engine(clock):
    settings = SettingsDef()
    return Engine(Renderer(60, 30), MainMenuState(settings=settings), settings=settings, clock=clock)


def key(sym):
    return tcod.event.KeyDown(sym=sym, scancode=0, mod=tcod.event.Modifier.NONE)


def test_both_screens_are_registered():
    assert set(SCREENS) == {ScreenID.MAIN_MENU, ScreenID.COIN_FLIP}


def test_timer_queue_orders_by_due_time():
    queue = TimerQueue()
    queue.arm(TimerRequest(TimerKind.AUTO_REPLAY_CHECK, 0.5, 1), now=0.0)
    queue.arm(TimerRequest(TimerKind.ANIMATION_TICK, 0.1, 1), now=0.0)
    assert queue.next_due() == 0.1
    assert queue.pop_due(0.05) == []
    assert queue.pop_due(1.0) == [
        (0.1, TimerFired(TimerKind.ANIMATION_TICK, 1)),
        (0.5, TimerFired(TimerKind.AUTO_REPLAY_CHECK, 1)),
    ]
    assert queue.next_due() is None


def test_enter_opens_coin_flip(engine):
    engine.handle(KeyPress("enter"))
    assert isinstance(engine.active_state, CoinFlipState)
    assert engine.active_state.idle
    assert engine.running


def test_unimplemented_entry_keeps_menu(engine):
    menu = engine.active_state
    engine.handle(KeyPress("down"))
    engine.handle(KeyPress("enter"))
    assert engine.active_state is menu
    assert menu.cursor == 1
    assert len(engine.timers) == 0


def test_full_flip_through_engine(engine, clock):
    engine.handle(KeyPress("enter"))
    coin = engine.active_state
    engine.handle(KeyPress("f"))
    assert len(engine.timers) == 1

    # N-1 animation ticks, then the first auto-replay check is armed
    ticks = 0
    while coin.flipping:
        clock.t = engine.timers.next_due()
        ticks += engine.fire_due_timers()
    assert ticks == len(COIN_FRAMES) - 1
    assert coin.result in (CoinSide.HEADS, CoinSide.TAILS)
    assert coin.result_started_at == clock.t
    assert len(engine.timers) == 1

    # Polling continues until the hold time is over, then it flips again
    landed = clock.t
    while not coin.flipping:
        clock.t = engine.timers.next_due()
        engine.fire_due_timers()
    assert clock.t - landed >= 6.0
    assert coin.animation_step == 0
    assert "Next flip" not in engine.render().text


def test_stale_timer_after_back_does_not_touch_menu(engine, clock):
    engine.handle(KeyPress("enter"))
    coin = engine.active_state
    engine.handle(KeyPress("f"))
    while coin.flipping:
        clock.t = engine.timers.next_due()
        engine.fire_due_timers()
    assert len(engine.timers) == 1  # pending auto-replay check

    engine.handle(KeyPress("esc"))
    menu = engine.active_state
    assert isinstance(menu, MainMenuState)
    menu.cursor = 2

    clock.t += 10.0
    assert engine.fire_due_timers() == 1
    assert engine.active_state is menu
    assert menu.cursor == 2
    assert menu.selected == -1
    assert len(engine.timers) == 0


def test_stale_tick_after_reentering_coin_flip(engine, clock):
    engine.handle(KeyPress("enter"))
    engine.handle(KeyPress("f"))
    engine.handle(KeyPress("b"))
    engine.handle(KeyPress("enter"))
    second = engine.active_state
    engine.handle(KeyPress("f"))

    # Old tick and new tick are both pending; only the new one advances
    clock.t = 1.0
    engine.fire_due_timers()
    assert second.animation_step == 1


def test_quit_key_stops_loop(engine):
    engine.handle(KeyPress("q"))
    assert not engine.running
    # Nothing is processed after quitting
    engine.handle(KeyPress("enter"))
    assert isinstance(engine.active_state, MainMenuState)


def test_quit_entry_stops_loop(engine):
    for _ in range(3):
        engine.handle(KeyPress("down"))
    engine.handle(KeyPress("enter"))
    assert not engine.running


def test_tcod_events_are_translated(engine):
    engine.handle_tcod_event(key(tcod.event.KeySym.DOWN))
    assert engine.active_state.cursor == 1
    engine.handle_tcod_event(key(tcod.event.KeySym.UP))
    engine.handle_tcod_event(key(tcod.event.KeySym.RETURN))
    assert isinstance(engine.active_state, CoinFlipState)
    engine.handle_tcod_event(key(tcod.event.KeySym.F5))
    assert engine.active_state.idle
    engine.handle_tcod_event(key(tcod.event.KeySym.ESCAPE))
    assert isinstance(engine.active_state, MainMenuState)


def test_window_close_stops_loop(engine):
    engine.handle_tcod_event(tcod.event.Quit())
    assert not engine.running


def test_render_follows_active_screen(engine):
    assert "CLI GAMES" in engine.render().text
    engine.handle(KeyPress("enter"))
    assert "COIN FLIP" in engine.render().text


def test_trace_reports_transitions(clock, capsys):
    settings = SettingsDef(app=AppDef(trace=True))
    engine = Engine(Renderer(60, 30), MainMenuState(settings=settings), settings=settings, clock=clock)
    engine.handle(KeyPress("enter"))
    engine.handle(KeyPress("q"))
    err = capsys.readouterr().err
    assert "[Engine] main_menu -> coin_flip" in err
    assert "[Engine] quit requested" in err


def test_wait_timeout(engine, clock):
    assert engine._wait_timeout() is None
    engine.handle(KeyPress("enter"))
    engine.handle(KeyPress("f"))
    clock.t = 0.04
    assert engine._wait_timeout() == pytest.approx(0.06)
    clock.t = 5.0
    assert engine._wait_timeout() == 0.0
