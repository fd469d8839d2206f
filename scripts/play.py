"""Play Witch! in the terminal, one command per line.

Usage:
    uv run python scripts/play.py [--seed N] [--dwell SECONDS] [--verbose]

Type w/a/s/d (or h/j/k/l) and Enter to move; several keys on one line are
played in order.  ``r`` restarts after a win or a death, ``q`` quits.
"""

from __future__ import annotations

import argparse
import logging

from witch_rogue.presentation import RESTART, parse_key, render_text, status_line
from witch_rogue.sim.session import GameView, Session, SessionSettings


def draw(view: GameView) -> None:
    print()
    print(render_text(view))
    print(status_line(view))


def redraw_from_timer(view: GameView) -> None:
    # The main thread is blocked in input(); put the prompt back.
    draw(view)
    print("> ", end="", flush=True)


def main() -> None:
    parser = argparse.ArgumentParser(description="Play Witch! in the terminal")
    parser.add_argument("--seed", type=int, default=None, help="Master seed")
    parser.add_argument("--dwell", type=float, default=None, help="Level-cleared banner seconds")
    parser.add_argument("--verbose", action="store_true", help="Log game events")
    args = parser.parse_args()

    logging.basicConfig(
        level=logging.INFO if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    settings = SessionSettings.from_env()
    if args.seed is not None:
        settings.seed = args.seed
    if args.dwell is not None:
        settings.dwell_seconds = args.dwell

    session = Session(settings, on_change=redraw_from_timer)
    print(f"Seed: {session.seed}")
    draw(session.view())

    try:
        while True:
            line = input("> ").strip()
            if line == "q":
                break
            for key in line:
                command = parse_key(key, session.state.status)
                if command == RESTART:
                    session.restart()
                elif command is not None:
                    session.move(command)
            draw(session.view())
    except (EOFError, KeyboardInterrupt):
        pass
    finally:
        session.close()


if __name__ == "__main__":
    main()
