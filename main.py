from __future__ import annotations

import argparse
import logging
from pathlib import Path
from random import Random
from typing import List, Optional


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    p = argparse.ArgumentParser(description="Rescue Bot: snake on a minefield.")
    p.add_argument(
        "config",
        nargs="?",
        default="config.json",
        help="Path to the JSON config (default: config.json)",
    )
    p.add_argument("--name", type=str, default=None, help="Player name.")
    p.add_argument("--seed", type=int, default=None, help="Optional RNG seed.")
    p.add_argument(
        "--headless",
        action="store_true",
        help="Let the AI play without a window, logging each tick.",
    )
    p.add_argument(
        "--ticks",
        type=int,
        default=None,
        help="Stop a headless run after this many ticks.",
    )
    p.add_argument("--log-level", type=str, default="WARNING", help="Logging level.")
    return p.parse_args(argv)


def run_headless(args: argparse.Namespace) -> None:
    """Autoplay with sleep-paced ticks; the result goes to the leaderboard."""
    from config_io import load_json_config
    from config_parsing import parse_game_config
    from scoreboard import ScoreboardFile
    from session import GameSession, run_fixed_interval

    log = logging.getLogger("rescue_bot")
    cfg = parse_game_config(load_json_config(Path(args.config)))
    session = GameSession(args.name, cfg, Random(args.seed))
    last = run_fixed_interval(
        session,
        max_ticks=args.ticks,
        on_snapshot=lambda s: log.info(
            "tick %s head=%s score=%s level=%s lives=%s", s.tick, s.head, s.score, s.level, s.lives
        ),
    )
    if not session.is_over:
        session.request_quit()
        session.tick()
    record = session.final_record()
    if record is None:
        return
    _, new_record = ScoreboardFile(Path(cfg.scoreboard_file), cfg.leaderboard_size).record(record)
    print(
        f"{record.name}: score {record.score}, level {record.level} after {last.tick} ticks"
        + (" - NEW HIGH SCORE!" if new_record else "")
    )


def main() -> None:
    """Entrypoint for running the game from the command line."""
    args = parse_args()
    logging.basicConfig(
        level=getattr(logging, str(args.log_level).upper(), logging.WARNING),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    if args.headless:
        run_headless(args)
        return

    from game import Game  # local import keeps pygame out of headless runs

    Game(Path(args.config), name=args.name, seed=args.seed).run()


if __name__ == "__main__":
    main()
