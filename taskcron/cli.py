"""Command line entry point: import tasks, then run the scheduler loop."""

from __future__ import annotations

import argparse
import sqlite3
import sys

from .runner import Scheduler
from .store import TaskStore

DB_FILE = "tasks.db"


def _parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="taskcron", description="Run scheduled shell commands stored in SQLite."
    )
    parser.add_argument("tasks_json", nargs="?", help="JSON file of tasks to import first")
    parser.add_argument("--db", default=DB_FILE, help="task database (default: tasks.db)")
    parser.add_argument("--log-dir", default=".", help="directory for task_<id>.log files")
    return parser


def main(argv: list[str] | None = None) -> int:
    args = _parser().parse_args(argv)
    try:
        store = TaskStore(args.db)
    except sqlite3.Error:
        print("Can't open DB", file=sys.stderr)
        return 1

    with store:
        if args.tasks_json:
            try:
                store.import_json(args.tasks_json)
            except (OSError, ValueError) as exc:
                print(f"JSON error: {exc}", file=sys.stderr)

        scheduler = Scheduler(store, args.log_dir)
        for task in store.load_enabled():
            scheduler.add(task)
        print("[*] Starting scheduler loop...")
        scheduler.run()
    return 0