"""Game session state machine.

A :class:`Session` owns the board and the single falling piece.  Something
outside the engine (see :mod:`blockfall.driver`) calls :meth:`Session.tick` on
a cadence and :meth:`Session.apply_command` on input; everything else happens
synchronously inside those calls.

States
------
* falling: a piece is active and the session is neither paused nor over;
* paused: ticks and commands are ignored, all state is preserved;
* over: the last lock topped out; only :meth:`Session.reset` has an effect.
"""

from __future__ import annotations

import functools
import logging
import random
from enum import Enum
from typing import Callable, List, Optional

from .board import Board
from .collision import can_place, collides, rotate
from .piece import Piece, PieceSnapshot
from .shapes import ShapeKind, random_kind


LOGGER = logging.getLogger(__name__)

# Points awarded for clearing 0-4 rows with a single lock.
SCORE_TABLE = (0, 100, 300, 500, 800)

# Gravity timing in milliseconds.  Every lock that clears at least one row
# shortens the interval by one step, never going below the minimum.
INITIAL_TICK_MS = 800
TICK_STEP_MS = 10
MIN_TICK_MS = 100

KindSource = Callable[[], ShapeKind]


class Command(str, Enum):
    """Discrete input events understood by :meth:`Session.apply_command`."""

    MOVE_LEFT = "move_left"
    MOVE_RIGHT = "move_right"
    SOFT_DROP = "soft_drop"
    HARD_DROP = "hard_drop"
    ROTATE = "rotate"


class Session:
    """Mutable state for one game.

    Parameters
    ----------
    kind_source:
        Callable returning the kind of each newly spawned piece.  Defaults to
        uniform random draws from a :class:`random.Random` seeded with
        ``seed``.
    seed:
        Seed for the default kind source.  Ignored when ``kind_source`` is
        given.
    board:
        Optional pre-populated board to start from.  The session takes
        ownership of it; :meth:`reset` always starts from an empty board.
    eager_top_out:
        End the game as soon as a piece spawns on occupied cells instead of
        waiting for that piece to lock.
    """

    def __init__(
        self,
        *,
        kind_source: Optional[KindSource] = None,
        seed: Optional[int] = None,
        board: Optional[Board] = None,
        initial_tick_ms: int = INITIAL_TICK_MS,
        tick_step_ms: int = TICK_STEP_MS,
        min_tick_ms: int = MIN_TICK_MS,
        eager_top_out: bool = False,
    ) -> None:
        if min_tick_ms <= 0:
            raise ValueError("min_tick_ms must be positive")
        if initial_tick_ms < min_tick_ms:
            raise ValueError("initial_tick_ms must not be below min_tick_ms")
        if tick_step_ms < 0:
            raise ValueError("tick_step_ms must not be negative")

        if kind_source is None:
            kind_source = functools.partial(random_kind, random.Random(seed))
        self._next_kind = kind_source
        self._initial_tick_ms = initial_tick_ms
        self._tick_step_ms = tick_step_ms
        self._min_tick_ms = min_tick_ms
        self.eager_top_out = eager_top_out

        self._board = board if board is not None else Board()
        self._active: Piece
        self._score = 0
        self._tick_interval = initial_tick_ms
        self._paused = False
        self._over = False
        self.lines = 0
        self.pieces = 0
        self.last_cleared = 0
        self.spawn()

    # Observers --------------------------------------------------------
    @property
    def score(self) -> int:
        return self._score

    @property
    def tick_interval(self) -> int:
        """Milliseconds the driver should wait before the next tick."""

        return self._tick_interval

    @property
    def is_over(self) -> bool:
        return self._over

    @property
    def is_paused(self) -> bool:
        return self._paused

    def board_snapshot(self) -> List[List[int]]:
        """Return a copy of the locked cells."""

        return self._board.snapshot()

    def active_piece_snapshot(self) -> PieceSnapshot:
        """Return a frozen copy of the falling piece."""

        return self._active.snapshot()

    # Lifecycle --------------------------------------------------------
    def spawn(self) -> Piece:
        """Replace the active piece with a freshly drawn one at the spawn point.

        Overlap with locked cells is normally only noticed when the new piece
        locks.  With ``eager_top_out`` the game ends here instead.  Finished
        sessions keep their last piece.
        """

        if self._over:
            return self._active
        self._active = Piece.spawn(self._next_kind())
        LOGGER.debug("Spawned %s at %s", self._active.kind.value, self._active.origin)
        if self.eager_top_out and collides(self._board, self._active.shape, self._active.origin):
            self._game_over()
        return self._active

    def reset(self) -> None:
        """Start a new game.  Valid from any state, including game over."""

        self._board = Board()
        self._score = 0
        self._tick_interval = self._initial_tick_ms
        self._paused = False
        self._over = False
        self.lines = 0
        self.pieces = 0
        self.last_cleared = 0
        LOGGER.info("Game reset")
        self.spawn()

    def pause(self) -> None:
        if self._over:
            return
        self._paused = True
        LOGGER.debug("Paused")

    def resume(self) -> None:
        if self._over:
            return
        self._paused = False
        LOGGER.debug("Resumed")

    def toggle_pause(self) -> bool:
        """Flip the paused flag and return the new value."""

        if self._paused:
            self.resume()
        else:
            self.pause()
        return self._paused

    def _game_over(self) -> None:
        self._over = True
        LOGGER.info("Game over. Score: %d", self._score)

    def _accepting_input(self) -> bool:
        return not (self._over or self._paused)

    # Gravity ----------------------------------------------------------
    def tick(self) -> int:
        """Advance one gravity step and return the current tick interval.

        The piece moves down one row when it can; otherwise it locks.  Paused
        or finished sessions are left untouched.
        """

        if self._accepting_input() and not self._step_down():
            self._lock()
        return self._tick_interval

    def _step_down(self) -> bool:
        if can_place(self._board, self._active, dy=1):
            self._active.move(0, 1)
            return True
        return False

    def _lock(self) -> int:
        """Merge the active piece, clear rows, score and spawn the next piece.

        Returns the number of rows cleared.  A piece sitting on occupied cells
        (left there by a spawn overlap) or poking above the top row ends the
        game instead.
        """

        piece = self._active
        if collides(self._board, piece.shape, piece.origin) or not self._board.merge(
            piece.shape, piece.origin
        ):
            self.last_cleared = 0
            self._game_over()
            return 0

        self.pieces += 1
        cleared = self._board.clear_full_rows()
        self.last_cleared = cleared
        LOGGER.debug("Locked %s at %s", piece.kind.value, piece.origin)
        if cleared:
            self.lines += cleared
            self._score += SCORE_TABLE[min(cleared, len(SCORE_TABLE) - 1)]
            self._tick_interval = max(
                self._min_tick_ms, self._tick_interval - self._tick_step_ms
            )
            LOGGER.info("Cleared %d row(s). Score: %d", cleared, self._score)
        self.spawn()
        return cleared

    # Player input -----------------------------------------------------
    def move_horizontal(self, delta: int) -> bool:
        """Shift the piece ``delta`` columns if the target is free."""

        if not self._accepting_input():
            return False
        if can_place(self._board, self._active, dx=delta):
            self._active.move(delta, 0)
            return True
        return False

    def soft_drop(self) -> bool:
        """Move the piece down one row; return whether it moved.

        Unlike :meth:`tick` a blocked soft drop never locks the piece.
        """

        if not self._accepting_input():
            return False
        return self._step_down()

    def hard_drop(self) -> int:
        """Drop the piece as far as it goes and lock it exactly once.

        Returns the number of rows the piece fell.
        """

        if not self._accepting_input():
            return 0
        dropped = 0
        while self._step_down():
            dropped += 1
        self._lock()
        return dropped

    def rotate(self) -> bool:
        """Rotate the piece clockwise in place, without wall kicks."""

        if not self._accepting_input():
            return False
        rotated = rotate(self._active.shape)
        if can_place(self._board, self._active, shape=rotated):
            self._active.set_shape(rotated)
            return True
        return False

    def apply_command(self, cmd: Command) -> bool:
        """Apply a single input event and return whether it was accepted."""

        if not self._accepting_input():
            return False
        cmd = Command(cmd)
        if cmd is Command.MOVE_LEFT:
            return self.move_horizontal(-1)
        if cmd is Command.MOVE_RIGHT:
            return self.move_horizontal(1)
        if cmd is Command.SOFT_DROP:
            return self.soft_drop()
        if cmd is Command.ROTATE:
            return self.rotate()
        self.hard_drop()
        return True


__all__ = [
    "Command",
    "INITIAL_TICK_MS",
    "MIN_TICK_MS",
    "SCORE_TABLE",
    "Session",
    "TICK_STEP_MS",
]
