import sqlite3
from collections.abc import Iterator
from contextlib import contextmanager
from datetime import UTC, datetime
from typing import Any
from uuid import UUID, uuid4

from src.domain.entities import User


# Helper to convert sqlite rows to dicts
def dict_factory(cursor: sqlite3.Cursor, row: Any) -> dict[str, Any]:
    d = {}
    for idx, col in enumerate(cursor.description):
        d[col[0]] = row[idx]
    return d


def _now() -> str:
    return datetime.now(UTC).isoformat()


class _SQLiteRepo:
    """One short-lived connection per operation."""

    def __init__(self, db_path: str):
        self.db_path = db_path

    @contextmanager
    def _connect(self) -> Iterator[sqlite3.Connection]:
        conn = sqlite3.connect(self.db_path)
        conn.row_factory = dict_factory
        conn.execute("PRAGMA foreign_keys = ON;")
        try:
            yield conn
        finally:
            conn.close()


class SQLiteOptionsStore(_SQLiteRepo):
    """Site options (name/value table). Implements OptionsStorePort."""

    def get(self, name: str) -> str | None:
        with self._connect() as conn:
            row = conn.execute(
                "SELECT option_value FROM options WHERE option_name = ?", (name,)
            ).fetchone()
        return row["option_value"] if row else None

    def set(self, name: str, value: str) -> None:
        with self._connect() as conn:
            conn.execute(
                """
                INSERT INTO options (option_name, option_value, updated_at)
                VALUES (?, ?, ?)
                ON CONFLICT(option_name) DO UPDATE SET
                    option_value=excluded.option_value,
                    updated_at=excluded.updated_at
            """,
                (name, value, _now()),
            )
            conn.commit()

    def add_if_absent(self, name: str, value: str) -> None:
        # Existing value wins; used for the share key
        with self._connect() as conn:
            conn.execute(
                "INSERT OR IGNORE INTO options (option_name, option_value, updated_at) "
                "VALUES (?, ?, ?)",
                (name, value, _now()),
            )
            conn.commit()


class SQLiteUserMetaStore(_SQLiteRepo):
    """Per-user metadata. The user row must exist."""

    def get(self, user_id: str, key: str) -> str | None:
        with self._connect() as conn:
            row = conn.execute(
                "SELECT meta_value FROM user_meta WHERE user_id = ? AND meta_key = ?",
                (str(user_id), key),
            ).fetchone()
        return row["meta_value"] if row else None

    def set(self, user_id: str, key: str, value: str) -> None:
        with self._connect() as conn:
            conn.execute(
                """
                INSERT INTO user_meta (user_id, meta_key, meta_value, updated_at)
                VALUES (?, ?, ?, ?)
                ON CONFLICT(user_id, meta_key) DO UPDATE SET
                    meta_value=excluded.meta_value,
                    updated_at=excluded.updated_at
            """,
                (str(user_id), key, value, _now()),
            )
            conn.commit()


class SQLiteUserRepo(_SQLiteRepo):
    """Store users and their role assignments."""

    def save(self, user: User) -> None:
        uid = str(user.id)
        with self._connect() as conn:
            conn.execute(
                """
                INSERT INTO users (
                    id, email, display_name, password_hash, status, created_at, updated_at
                ) VALUES (?, ?, ?, ?, ?, ?, ?)
                ON CONFLICT(id) DO UPDATE SET
                    email=excluded.email,
                    display_name=excluded.display_name,
                    password_hash=excluded.password_hash,
                    status=excluded.status,
                    updated_at=excluded.updated_at
            """,
                (
                    uid,
                    user.email,
                    user.display_name,
                    user.password_hash,
                    user.status,
                    user.created_at.isoformat(),
                    user.updated_at.isoformat(),
                ),
            )
            conn.execute("DELETE FROM role_assignments WHERE user_id = ?", (uid,))
            created = _now()
            conn.executemany(
                "INSERT INTO role_assignments (id, user_id, role, created_at) VALUES (?, ?, ?, ?)",
                [(str(uuid4()), uid, role, created) for role in dict.fromkeys(user.roles)],
            )
            conn.commit()

    def get_by_email(self, email: str) -> User | None:
        return self._get_one("email = ?", email)

    def get_by_id(self, user_id: UUID) -> User | None:
        return self._get_one("id = ?", str(user_id))

    def _get_one(self, where: str, value: str) -> User | None:
        with self._connect() as conn:
            row = conn.execute(f"SELECT * FROM users WHERE {where}", (value,)).fetchone()
            if not row:
                return None
            roles = [
                r["role"]
                for r in conn.execute(
                    "SELECT role FROM role_assignments WHERE user_id = ? ORDER BY rowid",
                    (row["id"],),
                ).fetchall()
            ]
        return User(
            id=UUID(row["id"]),
            email=row["email"],
            display_name=row["display_name"],
            password_hash=row["password_hash"],
            roles=roles,
            status=row["status"],
            created_at=datetime.fromisoformat(row["created_at"]),
            updated_at=datetime.fromisoformat(row["updated_at"]),
        )
