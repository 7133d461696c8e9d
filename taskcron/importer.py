"""Bulk import of named task definitions into an existing task table."""

from __future__ import annotations

import json
import sqlite3
import sys
from contextlib import closing
from pathlib import Path
from typing import Any

_INSERT = (
    "INSERT OR REPLACE INTO tasks "
    "(name, command, run_at, interval, priority, enabled, max_retries, next_run) "
    "VALUES (?, ?, ?, ?, ?, ?, ?, ?);"
)


def _int(value: Any) -> int:
    if isinstance(value, int) and not isinstance(value, bool):
        return value
    return 0


def _str(value: Any) -> str | None:
    return value if isinstance(value, str) else None


def import_tasks(json_file: str | Path, db_file: str | Path) -> int:
    """Insert or replace every task in ``json_file`` in one transaction; return the count."""
    with open(json_file, encoding="utf-8") as fh:
        root = json.load(fh)
    if not isinstance(root, list):
        raise ValueError(f"{json_file}: expected a JSON array of tasks")

    rows = []
    for task in root:
        item = task if isinstance(task, dict) else {}
        run_at = _int(item.get("run_at"))
        rows.append(
            (
                _str(item.get("name")),
                _str(item.get("command")),
                run_at,
                _int(item.get("interval")),
                _int(item.get("priority")),
                1 if item.get("enabled") is True else 0,
                _int(item.get("max_retries")),
                run_at,
            )
        )

    with closing(sqlite3.connect(str(db_file))) as conn:
        with conn:
            conn.executemany(_INSERT, rows)
    return len(rows)


def main(argv: list[str] | None = None) -> int:
    args = sys.argv[1:] if argv is None else argv
    if len(args) < 2:
        print("Usage: taskcron-import <tasks.json> <tasks.db>", file=sys.stderr)
        return 1
    try:
        import_tasks(args[0], args[1])
    except (OSError, ValueError, sqlite3.Error) as exc:
        print(f"Error loading JSON: {exc}", file=sys.stderr)
        return 1
    print("Tasks imported successfully.")
    return 0