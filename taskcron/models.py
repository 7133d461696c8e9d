"""Task records, the retry policy and loading task definitions from JSON."""

from __future__ import annotations

import json
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Mapping

MAX_BACKOFF = 3600
INITIAL_BACKOFF = 5


def next_backoff(current: int) -> int:
    """Return the retry delay that follows ``current`` seconds, capped at one hour."""
    if current == 0:
        return INITIAL_BACKOFF
    return min(current * 2, MAX_BACKOFF)


def _json_int(value: Any) -> int:
    if isinstance(value, int) and not isinstance(value, bool):
        return value
    return 0


@dataclass
class Task:
    """A scheduled shell command with its retry state."""

    command: str
    run_at: int = 0
    interval: int = 0
    retries: int = 0
    max_retries: int = 3
    backoff: int = 0
    priority: int = 0
    enabled: bool = True
    id: int | None = None

    def sort_key(self) -> tuple[int, int]:
        """Earlier run time first; on a tie, higher priority first."""
        return (self.run_at, -self.priority)

    def record_success(self, now: int) -> None:
        """Reset retry state and either schedule the next run or disable a one-shot task."""
        self.retries = 0
        self.backoff = 0
        if self.interval > 0:
            self.run_at = now + self.interval
        else:
            self.enabled = False

    def record_failure(self, now: int) -> bool:
        """Count a failed run. Return True if the task will be retried."""
        self.retries += 1
        if self.retries > self.max_retries:
            self.enabled = False
            return False
        self.backoff = next_backoff(self.backoff)
        self.run_at = now + self.backoff
        return True

    def delay(self, now: int) -> int:
        """Seconds from ``now`` until the task is due, never negative."""
        return max(self.run_at - now, 0)

    @classmethod
    def from_json(cls, item: Mapping[str, Any]) -> "Task":
        """Build a task from a decoded JSON object; missing numbers count as 0."""
        if not isinstance(item, Mapping):
            raise ValueError(f"task entry must be an object, got {type(item).__name__}")
        command = item.get("command")
        if not isinstance(command, str):
            raise ValueError("task entry has no string 'command'")
        return cls(
            command=command,
            run_at=_json_int(item.get("run_at")),
            interval=_json_int(item.get("interval")),
            retries=_json_int(item.get("retries")),
            max_retries=_json_int(item.get("max_retries")),
            backoff=_json_int(item.get("backoff")),
            priority=_json_int(item.get("priority")),
            enabled=item.get("enabled") is True,
        )


def load_tasks_json(path: str | Path) -> list[Task]:
    """Read a JSON array of task objects from ``path``."""
    with open(path, encoding="utf-8") as fh:
        root = json.load(fh)
    if not isinstance(root, list):
        raise ValueError(f"{path}: expected a JSON array of tasks")
    return [Task.from_json(item) for item in root]