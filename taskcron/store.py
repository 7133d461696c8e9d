"""SQLite persistence for scheduled tasks."""

from __future__ import annotations

import sqlite3
from pathlib import Path

from .models import Task, load_tasks_json

_SCHEMA = (
    "CREATE TABLE IF NOT EXISTS tasks ("
    "id INTEGER PRIMARY KEY AUTOINCREMENT,"
    "run_at INTEGER,"
    "interval INTEGER,"
    "retries INTEGER DEFAULT 0,"
    "max_retries INTEGER DEFAULT 3,"
    "backoff INTEGER DEFAULT 0,"
    "priority INTEGER DEFAULT 0,"
    "enabled INTEGER DEFAULT 1,"
    "command TEXT)"
)

_INSERT = (
    "INSERT INTO tasks (run_at, interval, retries, max_retries, backoff, "
    "priority, enabled, command) VALUES (?, ?, ?, ?, ?, ?, ?, ?)"
)

_SAVE_STATE = "UPDATE tasks SET run_at=?, retries=?, backoff=?, enabled=? WHERE id=?"

_SELECT_ENABLED = (
    "SELECT id, run_at, interval, retries, max_retries, backoff, priority, "
    "enabled, command FROM tasks WHERE enabled=1 ORDER BY id"
)


class TaskStore:
    """A task table in an SQLite database file."""

    def __init__(self, path: str | Path) -> None:
        self.path = Path(path)
        self._conn = sqlite3.connect(str(self.path))
        self.create_schema()

    def create_schema(self) -> None:
        """Create the tasks table if it does not exist yet."""
        with self._conn:
            self._conn.execute(_SCHEMA)

    def insert_task(self, task: Task) -> int:
        """Store a new task, set its id and return it."""
        with self._conn:
            cur = self._conn.execute(
                _INSERT,
                (
                    task.run_at,
                    task.interval,
                    task.retries,
                    task.max_retries,
                    task.backoff,
                    task.priority,
                    int(task.enabled),
                    task.command,
                ),
            )
        task.id = cur.lastrowid
        return task.id

    def save_state(self, task: Task) -> None:
        """Persist the run time and retry state of an existing task."""
        if task.id is None:
            raise ValueError("task has not been stored yet")
        with self._conn:
            self._conn.execute(
                _SAVE_STATE,
                (task.run_at, task.retries, task.backoff, int(task.enabled), task.id),
            )

    def load_enabled(self) -> list[Task]:
        """Return every enabled task."""
        rows = self._conn.execute(_SELECT_ENABLED).fetchall()
        return [
            Task(
                id=row[0],
                run_at=row[1] or 0,
                interval=row[2] or 0,
                retries=row[3] or 0,
                max_retries=row[4] or 0,
                backoff=row[5] or 0,
                priority=row[6] or 0,
                enabled=bool(row[7]),
                command=row[8] or "",
            )
            for row in rows
        ]

    def import_json(self, path: str | Path) -> list[Task]:
        """Insert every task listed in a JSON file and return them."""
        tasks = load_tasks_json(path)
        for task in tasks:
            self.insert_task(task)
        return tasks

    def close(self) -> None:
        self._conn.close()

    def __enter__(self) -> "TaskStore":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()