import sqlite3
from pathlib import Path

import pytest

from src.adapters.sqlite.migrator import SQLiteMigrator

INITIAL = "0001_launch_your_store.sql"


@pytest.fixture
def temp_db_path(tmp_path):
    return str(tmp_path / "test_db.sqlite")


@pytest.fixture
def migrations_dir():
    return str(Path(__file__).parents[2] / "migrations")


def _tables(db_path: str) -> set[str]:
    conn = sqlite3.connect(db_path)
    try:
        rows = conn.execute("SELECT name FROM sqlite_master WHERE type='table'").fetchall()
        return {r[0] for r in rows}
    finally:
        conn.close()


def test_migrator_creates_tables(temp_db_path, migrations_dir):
    applied = SQLiteMigrator(temp_db_path, migrations_dir).run_migrations()

    assert applied == [INITIAL]
    assert {"_migrations", "users", "role_assignments", "options", "user_meta"} <= _tables(
        temp_db_path
    )


def test_migrator_is_idempotent(temp_db_path, migrations_dir):
    migrator = SQLiteMigrator(temp_db_path, migrations_dir)

    migrator.run_migrations()
    assert migrator.run_migrations() == []
    assert migrator.pending() == []

    conn = sqlite3.connect(temp_db_path)
    count = conn.execute("SELECT count(*) FROM _migrations WHERE filename = ?", (INITIAL,))
    assert count.fetchone()[0] == 1
    conn.close()


def test_down_section_not_applied(temp_db_path, tmp_path):
    mig_dir = tmp_path / "migs"
    mig_dir.mkdir()
    (mig_dir / "0001_t.sql").write_text(
        "-- Up\nCREATE TABLE t (id INTEGER);\n\n-- Down\nDROP TABLE t;\n"
    )

    SQLiteMigrator(temp_db_path, str(mig_dir)).run_migrations()

    assert "t" in _tables(temp_db_path)


def test_failed_migration_raises(temp_db_path, tmp_path):
    mig_dir = tmp_path / "migs"
    mig_dir.mkdir()
    (mig_dir / "0001_bad.sql").write_text("CREATE TABLE oops (;")

    migrator = SQLiteMigrator(temp_db_path, str(mig_dir))
    with pytest.raises(RuntimeError, match="0001_bad.sql"):
        migrator.run_migrations()
    assert migrator.pending() == ["0001_bad.sql"]
