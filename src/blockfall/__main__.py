"""Simple ASCII demo for the falling-block engine.

Run with: `python -m blockfall`

Plays a short deterministic game without a display: each piece gets a few
random shifts and rotations and is then hard dropped, after which gravity runs
for a number of ticks.  The final frame is printed together with the score,
which makes this a handy smoke test for the whole engine.
"""

from __future__ import annotations

import argparse
import logging
import random
from typing import List, Optional, Sequence

from . import Command, Session, TickDriver, render_grid
from .utils import ACTIVE


LOGGER = logging.getLogger(__name__)

_CELL_CHARS = {0: ".", 1: "#", ACTIVE: "@"}

_STEERING = (Command.MOVE_LEFT, Command.MOVE_RIGHT, Command.ROTATE)


def format_grid(grid: List[List[int]]) -> str:
    return "\n".join("".join(_CELL_CHARS[cell] for cell in row) for row in grid)


def play(driver: TickDriver, *, pieces: int, ticks: int, rng: random.Random) -> None:
    """Hard drop ``pieces`` steered pieces, then let gravity run ``ticks`` times."""

    session = driver.session
    for _ in range(pieces):
        if session.is_over:
            break
        for _ in range(rng.randint(0, 5)):
            driver.command(rng.choice(_STEERING))
        driver.command(Command.HARD_DROP)
    for _ in range(ticks):
        if session.is_over:
            break
        driver.advance(session.tick_interval)


def parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument("--seed", type=int, default=0, help="Seed for pieces and steering.")
    parser.add_argument("--pieces", type=int, default=20, help="Number of pieces to hard drop.")
    parser.add_argument("--ticks", type=int, default=5, help="Gravity ticks to run afterwards.")
    parser.add_argument(
        "--log-level",
        default="WARNING",
        help="Logging level (e.g. DEBUG, INFO, WARNING).",
    )
    return parser.parse_args(argv)


def main(argv: Optional[Sequence[str]] = None) -> None:
    args = parse_args(argv)
    logging.basicConfig(
        level=getattr(logging, args.log_level.upper(), logging.WARNING),
        format="%(name)s: %(message)s",
    )

    session = Session(seed=args.seed)
    driver = TickDriver(session)
    play(driver, pieces=args.pieces, ticks=args.ticks, rng=random.Random(args.seed))

    print(format_grid(render_grid(session.board_snapshot(), session.active_piece_snapshot())))
    print(f"Score: {session.score}  Lines: {session.lines}  Interval: {session.tick_interval}ms")
    if session.is_over:
        print("Game over")
    LOGGER.info("Demo finished with score %d", session.score)


if __name__ == "__main__":
    main()
