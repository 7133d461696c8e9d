import json
import sqlite3

import pytest

from taskcron.importer import import_tasks, main


def make_db(path):
    conn = sqlite3.connect(str(path))
    conn.execute(
        "CREATE TABLE tasks (name TEXT UNIQUE, command TEXT, run_at INTEGER, "
        "interval INTEGER, priority INTEGER, enabled INTEGER, max_retries INTEGER, "
        "next_run INTEGER)"
    )
    conn.commit()
    conn.close()


def read_rows(path):
    conn = sqlite3.connect(str(path))
    rows = conn.execute(
        "SELECT name, command, run_at, interval, priority, enabled, max_retries, next_run "
        "FROM tasks ORDER BY name"
    ).fetchall()
    conn.close()
    return rows


def write_json(path, data):
    path.write_text(json.dumps(data))
    return path


def test_import_tasks_inserts_rows(tmp_path):
    db = tmp_path / "tasks.db"
    make_db(db)
    src = write_json(
        tmp_path / "tasks.json",
        [
            {
                "name": "backup",
                "command": "tar cf x.tar .",
                "run_at": 500,
                "interval": 60,
                "priority": 2,
                "enabled": True,
                "max_retries": 4,
            },
            {"name": "ping", "command": "true"},
        ],
    )
    assert import_tasks(src, db) == 2
    assert read_rows(db) == [
        ("backup", "tar cf x.tar .", 500, 60, 2, 1, 4, 500),
        ("ping", "true", 0, 0, 0, 0, 0, 0),
    ]


def test_import_tasks_replaces_by_name(tmp_path):
    db = tmp_path / "tasks.db"
    make_db(db)
    import_tasks(write_json(tmp_path / "a.json", [{"name": "job", "command": "old"}]), db)
    import_tasks(write_json(tmp_path / "b.json", [{"name": "job", "command": "new"}]), db)
    rows = read_rows(db)
    assert len(rows) == 1
    assert rows[0][1] == "new"


def test_import_tasks_rejects_non_array(tmp_path):
    db = tmp_path / "tasks.db"
    make_db(db)
    with pytest.raises(ValueError):
        import_tasks(write_json(tmp_path / "t.json", {"name": "x"}), db)


def test_import_tasks_requires_table(tmp_path):
    with pytest.raises(sqlite3.OperationalError):
        import_tasks(write_json(tmp_path / "t.json", [{"name": "x"}]), tmp_path / "empty.db")


def test_main_usage(capsys):
    assert main(["only-one"]) == 1
    assert "Usage" in capsys.readouterr().err


def test_main_success(tmp_path, capsys):
    db = tmp_path / "tasks.db"
    make_db(db)
    src = write_json(tmp_path / "t.json", [{"name": "x", "command": "true"}])
    assert main([str(src), str(db)]) == 0
    assert "Tasks imported successfully." in capsys.readouterr().out
    assert read_rows(db)[0][0] == "x"


def test_main_reports_bad_json(tmp_path, capsys):
    src = tmp_path / "t.json"
    src.write_text("not json")
    assert main([str(src), str(tmp_path / "tasks.db")]) == 1
    assert "Error loading JSON" in capsys.readouterr().err