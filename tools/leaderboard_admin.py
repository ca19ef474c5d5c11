"""
tools/leaderboard_admin.py
===========================

Command-line maintenance for the stored Hall of Fame.

    python tools/leaderboard_admin.py show
    python tools/leaderboard_admin.py clear

Uses the same AppConfig / JsonFileStore / LeaderboardStore as app.py, so the
storage path and key follow config.toml and the KUMOXI_* environment
variables.
"""

from __future__ import annotations

import argparse
import sys
from typing import List, Optional

from kumoxi_quiz.config import AppConfig, setup_logging
from kumoxi_quiz.leaderboard import LeaderboardStore
from kumoxi_quiz.storage import JsonFileStore


def build_store(config: AppConfig) -> LeaderboardStore:
    return LeaderboardStore(
        JsonFileStore(config.storage_path),
        key=config.leaderboard_key,
        limit=config.leaderboard_size,
    )


# -------------------------------------------------------------
#  Commands
# -------------------------------------------------------------
def cmd_show(store: LeaderboardStore) -> int:
    entries = store.load()
    if not entries:
        print("Leaderboard is empty.")
        return 0

    for idx, e in enumerate(entries, start=1):
        print(f"#{idx:<2} {e.name:<20} {e.score}/{e.total}  {e.category}  {e.date}")
    return 0


def cmd_clear(store: LeaderboardStore) -> int:
    if not store.clear():
        print("Failed to clear the leaderboard (see log).", file=sys.stderr)
        return 1
    print("Leaderboard cleared.")
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    parser = argparse.ArgumentParser(description="Manage the Kumoxi Quiz Hall of Fame")
    parser.add_argument("--config", default=None, help="path to config.toml")
    sub = parser.add_subparsers(dest="command", required=True)
    sub.add_parser("show", help="print the stored leaderboard")
    sub.add_parser("clear", help="delete the stored leaderboard")
    args = parser.parse_args(argv)

    config = AppConfig.load(args.config)
    setup_logging(config)
    store = build_store(config)

    if args.command == "show":
        return cmd_show(store)
    return cmd_clear(store)


if __name__ == "__main__":
    sys.exit(main())
