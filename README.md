# taskcron

taskcron is a small scheduler for shell commands. It keeps its tasks in a
SQLite database, so their state survives restarts. A task can run once or
repeat on a fixed interval. A failed run is retried with exponential backoff,
up to a maximum number of retries.

## Installation

```
pip install .
```

## Describing tasks

Tasks are written in a JSON file that holds an array of objects:

```json
[
  {
    "command": "echo hello",
    "run_at": 1700000000,
    "interval": 60,
    "priority": 5,
    "max_retries": 3,
    "enabled": true
  }
]
```

- `command`: the shell command, run with `/bin/sh -c`. It must be a string.
- `run_at`: the Unix time of the first run. A time in the past means the task
  runs at once.
- `interval`: the number of seconds between runs. `0` means the task runs once.
- `priority`: when two tasks are due at the same moment, the higher priority
  runs first.
- `max_retries`: the number of retries allowed after a failure before the task
  is disabled.
- `retries`, `backoff`: the starting retry state, normally left out.
- `enabled`: the task is enabled only when this is exactly `true`.

A number that is missing, or is not an integer, counts as `0`; this holds for
`max_retries` too, so give it explicitly if you want retries. A task without
`"enabled": true` is stored as disabled and is never scheduled.

## Running the scheduler

```
taskcron tasks.json
```

This creates the `tasks` table in `tasks.db` in the current directory if
needed, adds the tasks from `tasks.json` to it, and then starts the loop with
every enabled task in the database. Run `taskcron` with no argument to start
from the tasks already stored. If the JSON file cannot be read, the error is
printed and the scheduler still starts.

Options:

- `--db PATH`: the task database (default `tasks.db`).
- `--log-dir DIR`: where the log files are written (default `.`).

Each run's output, stdout and stderr together, is appended line by line to
`task_<id>.log`. When a run succeeds, its retry count and backoff are reset; a
repeating task is then scheduled again after its interval, and a one-off task
is disabled. When a run fails, the task waits 5 seconds before the next
attempt, and the wait doubles after each further failure, up to one hour. Once
the retries are used up, the task is disabled. After every run the task's
`run_at`, `retries`, `backoff` and `enabled` are written back to the database.
The loop ends when no enabled task is left.

## Importing into another task table

```
taskcron-import tasks.json tasks.db
```

This inserts or replaces every task from the JSON file in one transaction and
prints `Tasks imported successfully.`. Besides the fields above it reads a
`name` for each task, and it writes into a `tasks` table with the columns
`name, command, run_at, interval, priority, enabled, max_retries, next_run`
(`next_run` is set to `run_at`). On an error it prints the message and exits
with status 1.

## Using the library

```python
from taskcron.store import TaskStore
from taskcron.runner import Scheduler

with TaskStore("tasks.db") as store:
    store.import_json("tasks.json")
    scheduler = Scheduler(store, ".")
    for task in store.load_enabled():
        scheduler.add(task)
    scheduler.run()
```

- `taskcron.models`: the `Task` dataclass with its retry policy
  (`record_success`, `record_failure`, `delay`, `sort_key`), `next_backoff`
  and `load_tasks_json`.
- `taskcron.store`: `TaskStore`, the SQLite table (`create_schema`,
  `insert_task`, `save_state`, `load_enabled`, `import_json`).
- `taskcron.runner`: `run_command`, `log_task_output` and `Scheduler`
  (`add`, `run_task`, `run_pending`, `run`). `Scheduler` takes an optional
  clock and sleep function, which makes it easy to drive in tests.
- `taskcron.importer`: `import_tasks(json_file, db_file)`, which returns the
  number of tasks written.

## What taskcron does not do

- `taskcron-import` does not create its table. The table it writes to has
  `name` and `next_run` columns that the scheduler's own table lacks, so it
  only works on a database prepared with that layout; tasks it writes are not
  picked up by `taskcron`. To feed the scheduler, pass the JSON file to
  `taskcron` or use `TaskStore.import_json`.
- There are no cron-style expressions: a task has a start time and a fixed
  interval in seconds.
- The scheduler runs tasks one after another in the foreground; it does not
  detach as a daemon or run tasks in parallel.