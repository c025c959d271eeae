import itertools
import threading

import pytest

from blockfall.board import Board
from blockfall.driver import TickDriver
from blockfall.session import INITIAL_TICK_MS, TICK_STEP_MS, Command, Session
from blockfall.shapes import ShapeKind

from helpers import fill_row


class FakeClock:
    def __init__(self):
        self.current = 0.0

    def advance(self, delta):
        self.current += delta

    def __call__(self):
        return self.current


def o_session(board=None):
    return Session(kind_source=itertools.repeat(ShapeKind.O).__next__, board=board)


def test_ticks_only_once_a_full_interval_has_passed():
    driver = TickDriver(o_session())
    assert driver.advance(INITIAL_TICK_MS - 1) == 0
    assert driver.session.active_piece_snapshot().origin == (4, 0)
    assert driver.advance(1) == 1
    assert driver.session.active_piece_snapshot().origin == (4, 1)
    assert driver.advance(INITIAL_TICK_MS * 2) == 2


def test_interval_is_reread_after_each_tick():
    board = Board()
    fill_row(board, 19, skip=(4, 5))
    driver = TickDriver(o_session(board))

    # 18 gravity steps plus the lock that clears row 19.
    assert driver.advance(INITIAL_TICK_MS * 19) == 19
    assert driver.session.score == 100
    assert driver.session.tick_interval == INITIAL_TICK_MS - TICK_STEP_MS
    assert driver.drop_accum == 0

    assert driver.advance(INITIAL_TICK_MS - TICK_STEP_MS) == 1


def test_paused_session_does_not_accumulate_time():
    driver = TickDriver(o_session())
    driver.pause()
    assert driver.advance(10 * INITIAL_TICK_MS) == 0
    assert driver.drop_accum == 0
    driver.resume()
    assert driver.advance(INITIAL_TICK_MS) == 1


def test_poll_uses_elapsed_clock_time():
    clock = FakeClock()
    driver = TickDriver(o_session(), clock=clock)
    assert driver.poll() == 0
    clock.advance(INITIAL_TICK_MS)
    assert driver.poll() == 1
    clock.advance(INITIAL_TICK_MS / 2)
    assert driver.poll() == 0
    clock.advance(INITIAL_TICK_MS / 2)
    assert driver.poll() == 1


def test_resume_discards_time_spent_paused():
    clock = FakeClock()
    driver = TickDriver(o_session(), clock=clock)
    driver.poll()
    driver.pause()
    clock.advance(50 * INITIAL_TICK_MS)
    driver.resume()
    assert driver.poll() == 0
    assert driver.session.active_piece_snapshot().origin == (4, 0)


def test_game_over_stops_ticking_and_reset_clears_timers():
    driver = TickDriver(o_session())
    for _ in range(11):
        driver.command(Command.HARD_DROP)
    assert driver.session.is_over
    assert driver.advance(INITIAL_TICK_MS * 5) == 0

    driver.drop_accum = 123.0
    driver.last_ts = 456.0
    driver.reset()

    assert not driver.session.is_over
    assert driver.drop_accum == 0
    assert driver.last_ts is None


def test_negative_elapsed_time_is_rejected():
    driver = TickDriver(o_session())
    with pytest.raises(ValueError):
        driver.advance(-1)


def test_concurrent_input_and_ticks_are_serialised():
    driver = TickDriver(Session(seed=11))
    errors = []

    def ticker():
        try:
            for _ in range(200):
                driver.advance(INITIAL_TICK_MS)
        except Exception as exc:  # pragma: no cover - reported below
            errors.append(exc)

    def player():
        try:
            for cmd in itertools.islice(itertools.cycle(list(Command)), 200):
                driver.command(cmd)
        except Exception as exc:  # pragma: no cover - reported below
            errors.append(exc)

    threads = [threading.Thread(target=ticker), threading.Thread(target=player)]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()

    assert errors == []
    assert driver.session.score >= 0
    assert len(driver.session.board_snapshot()) == 20


class BlockingClock:
    """Clock whose second reading stalls until ``release`` is set."""

    def __init__(self):
        self.readings = iter([0.0, 10.0, 11.0])
        self.calls = 0
        self.entered = threading.Event()
        self.release = threading.Event()

    def __call__(self):
        self.calls += 1
        value = next(self.readings)
        if self.calls == 2:
            self.entered.set()
            self.release.wait(timeout=5)
        return value


def test_overlapping_polls_consume_timestamps_in_order():
    clock = BlockingClock()
    driver = TickDriver(o_session(), clock=clock)
    driver.poll()
    errors = []

    def poll():
        try:
            driver.poll()
        except Exception as exc:  # pragma: no cover - reported below
            errors.append(exc)

    slow = threading.Thread(target=poll)
    slow.start()
    assert clock.entered.wait(timeout=5)
    fast = threading.Thread(target=poll)
    fast.start()
    fast.join(timeout=0.05)
    clock.release.set()
    slow.join()
    fast.join()

    assert errors == []
    assert driver.last_ts == 11.0
