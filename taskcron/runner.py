"""Running task commands and the timer loop that drives them."""

from __future__ import annotations

import heapq
import itertools
import subprocess
import time
from pathlib import Path
from typing import Callable

from .models import Task
from .store import TaskStore


def run_command(command: str) -> tuple[int, list[str]]:
    """Run ``command`` through /bin/sh; return its exit status and combined output lines."""
    proc = subprocess.run(
        ["/bin/sh", "-c", command],
        stdout=subprocess.PIPE,
        stderr=subprocess.STDOUT,
        text=True,
        errors="replace",
    )
    return proc.returncode, proc.stdout.splitlines()


def log_task_output(task_id: int | None, line: str, directory: str | Path = ".") -> Path:
    """Append one line of output to ``task_<id>.log`` in ``directory``."""
    path = Path(directory) / f"task_{task_id}.log"
    try:
        with open(path, "a", encoding="utf-8") as fh:
            fh.write(f"{line}\n")
    except OSError:
        pass
    return path


class Scheduler:
    """Runs tasks when they fall due, retrying failures with backoff."""

    def __init__(
        self,
        store: TaskStore | None = None,
        log_dir: str | Path = ".",
        clock: Callable[[], float] = time.time,
        sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        self.store = store
        self.log_dir = Path(log_dir)
        self._clock = clock
        self._sleep = sleep
        self._queue: list[tuple[int, int, int, Task]] = []
        self._counter = itertools.count()

    def __len__(self) -> int:
        return len(self._queue)

    def _now(self) -> int:
        return int(self._clock())

    def _push(self, task: Task) -> None:
        run_at, neg_priority = task.sort_key()
        heapq.heappush(self._queue, (run_at, neg_priority, next(self._counter), task))

    def add(self, task: Task) -> int:
        """Queue a task and return the delay in seconds until it runs."""
        delay = task.delay(self._now())
        self._push(task)
        print(f"[+] Scheduled task {task.id} in {delay} sec")
        return delay

    def run_task(self, task: Task) -> bool:
        """Run a task once, update its state and requeue it if still enabled."""
        if not task.enabled:
            return False
        print(f"[*] Running task {task.id}: {task.command}")
        status, lines = run_command(task.command)
        for line in lines:
            log_task_output(task.id, line, self.log_dir)

        now = self._now()
        succeeded = status == 0
        if succeeded:
            task.record_success(now)
        elif task.record_failure(now):
            print(f"[!] Task {task.id} failed. Retrying in {task.backoff} sec")
        else:
            print(f"[!] Task {task.id} failed permanently")

        if self.store is not None and task.id is not None:
            self.store.save_state(task)
        if task.enabled:
            self._push(task)
        return succeeded

    def run_pending(self) -> int:
        """Run every task that is due now; return how many ran."""
        now = self._now()
        due: list[Task] = []
        while self._queue and self._queue[0][0] <= now:
            due.append(heapq.heappop(self._queue)[3])
        for task in due:
            self.run_task(task)
        return len(due)

    def run(self) -> None:
        """Run tasks as they fall due until none remain queued."""
        while self._queue:
            self.run_pending()
            if self._queue:
                wait = self._queue[0][0] - self._clock()
                if wait > 0:
                    self._sleep(wait)