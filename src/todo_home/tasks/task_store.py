# src/todo_home/tasks/task_store.py

from __future__ import annotations

import contextlib
import logging
import sqlite3
import time
from collections.abc import Iterator
from datetime import date
from pathlib import Path
from typing import Any

from .errors import StoreUnavailable, ValidationError
from .task_models import Task

logger = logging.getLogger(__name__)

# Columns an update may touch. id / owner_id / created_at are immutable.
PATCHABLE_FIELDS = frozenset({"text", "due_date", "assignee", "completed", "completed_at"})


class TaskStore:
    """
    SQLite task store.

    Every read and write except count_tasks() is scoped by owner_id, so a task
    is only reachable by the user who created it.

    The schema is intentionally simple and migration-safe:
    - create table if missing
    - use PRAGMA table_info to detect missing columns
    - add columns with ALTER TABLE only when needed

    Thread-safety:
    - each method opens its own SQLite connection
    - find-and-update / delete are single statements (per-record atomic)

    sqlite3 errors are re-raised as StoreUnavailable.
    """

    def __init__(self, db_path: str | Path = "tasks.sqlite3") -> None:
        self._db_path = Path(db_path)
        self._db_path.parent.mkdir(parents=True, exist_ok=True)
        self._ensure_schema()
        try:
            total = self.count_tasks()
        except StoreUnavailable:
            total = -1
        logger.info("TaskStore ready db=%s total=%s", self._db_path, total)

    # ---- low-level helpers ----

    def _get_conn(self) -> sqlite3.Connection:
        conn = sqlite3.connect(str(self._db_path), timeout=30.0)
        conn.row_factory = sqlite3.Row
        self._configure_conn(conn)
        return conn

    @staticmethod
    def _configure_conn(conn: sqlite3.Connection) -> None:
        with contextlib.suppress(sqlite3.Error):
            conn.execute("PRAGMA journal_mode=WAL")

    @contextlib.contextmanager
    def _connect(self, op: str) -> Iterator[sqlite3.Connection]:
        try:
            conn = self._get_conn()
        except sqlite3.Error as e:
            raise StoreUnavailable(f"{op}: cannot open {self._db_path}: {e}") from e
        try:
            yield conn
        except sqlite3.Error as e:
            raise StoreUnavailable(f"{op} failed: {e}") from e
        finally:
            conn.close()

    def _ensure_schema(self) -> None:
        with self._connect("ensure_schema") as conn:
            cur = conn.cursor()

            cur.execute(
                """
                CREATE TABLE IF NOT EXISTS tasks (
                    id INTEGER PRIMARY KEY AUTOINCREMENT,
                    owner_id TEXT NOT NULL,
                    text TEXT NOT NULL,
                    due_date TEXT,
                    assignee TEXT NOT NULL,
                    completed INTEGER NOT NULL DEFAULT 0,
                    completed_at REAL,
                    created_at REAL NOT NULL,
                    updated_at REAL NOT NULL
                )
                """
            )

            # Migrations (safe): add missing columns.
            cur.execute("PRAGMA table_info(tasks)")
            cols = {row["name"] for row in cur.fetchall()}

            def add_col(name: str, decl: str) -> None:
                if name in cols:
                    return
                cur.execute(f"ALTER TABLE tasks ADD COLUMN {name} {decl}")
                logger.info("TaskStore migration: added column %s", name)

            add_col("due_date", "TEXT")
            add_col("assignee", "TEXT NOT NULL DEFAULT ''")
            add_col("completed", "INTEGER NOT NULL DEFAULT 0")
            add_col("completed_at", "REAL")
            add_col("updated_at", "REAL NOT NULL DEFAULT 0")

            cur.execute("CREATE INDEX IF NOT EXISTS idx_tasks_owner ON tasks(owner_id)")
            conn.commit()

    @staticmethod
    def _date_to_str(value: date | None) -> str | None:
        return value.isoformat() if value is not None else None

    @staticmethod
    def _str_to_date(raw: str | None) -> date | None:
        if not raw:
            return None
        try:
            return date.fromisoformat(raw)
        except ValueError:
            logger.warning("Ignoring malformed due_date in store: %r", raw)
            return None

    def _row_to_task(self, row: sqlite3.Row) -> Task:
        owner_id = str(row["owner_id"])
        return Task(
            id=int(row["id"]),
            owner_id=owner_id,
            text=str(row["text"] or ""),
            due_date=self._str_to_date(row["due_date"]),
            assignee=str(row["assignee"] or owner_id),
            completed=bool(row["completed"]),
            completed_at=float(row["completed_at"]) if row["completed_at"] is not None else None,
            created_at=float(row["created_at"] or 0.0),
            updated_at=float(row["updated_at"] or 0.0),
        )

    # ---- public API ----

    def count_tasks(self) -> int:
        with self._connect("count_tasks") as conn:
            (n,) = conn.execute("SELECT COUNT(*) FROM tasks").fetchone()
            return int(n)

    def create_task(
        self,
        *,
        owner_id: str,
        text: str,
        due_date: date | None = None,
        assignee: str | None = None,
    ) -> Task:
        if not owner_id:
            raise ValidationError("owner_id is required", field="owner_id")
        if not text or not text.strip():
            raise ValidationError("text is required", field="text")

        now = time.time()
        with self._connect("create_task") as conn:
            cur = conn.execute(
                """
                INSERT INTO tasks(
                    owner_id, text, due_date, assignee,
                    completed, completed_at, created_at, updated_at
                )
                VALUES (?, ?, ?, ?, 0, NULL, ?, ?)
                """,
                (
                    owner_id,
                    text.strip(),
                    self._date_to_str(due_date),
                    assignee or owner_id,
                    now,
                    now,
                ),
            )
            conn.commit()
            rowid = cur.lastrowid
            if rowid is None:
                raise StoreUnavailable("SQLite did not return lastrowid for tasks insert")
            row = conn.execute("SELECT * FROM tasks WHERE id = ?", (int(rowid),)).fetchone()

        task = self._row_to_task(row)
        logger.debug("Task added id=%s owner=%s due=%s", task.id, owner_id, due_date)
        return task

    def find_by_owner(self, owner_id: str) -> list[Task]:
        """All tasks of one owner, in insertion order (no view ordering applied)."""
        if not owner_id:
            return []
        with self._connect("find_by_owner") as conn:
            rows = conn.execute(
                "SELECT * FROM tasks WHERE owner_id = ? ORDER BY id ASC",
                (owner_id,),
            ).fetchall()
            return [self._row_to_task(r) for r in rows]

    def find_one(self, task_id: int, owner_id: str) -> Task | None:
        with self._connect("find_one") as conn:
            row = conn.execute(
                "SELECT * FROM tasks WHERE id = ? AND owner_id = ?",
                (int(task_id), owner_id),
            ).fetchone()
            return self._row_to_task(row) if row else None

    def update_one(self, task_id: int, owner_id: str, **fields: Any) -> bool:
        """
        Patch the given fields of (task_id, owner_id).

        None is a real value here (e.g. clearing due_date). Returns False and
        changes nothing if the task is absent or owned by someone else.
        """
        unknown = set(fields) - PATCHABLE_FIELDS
        if unknown:
            raise ValueError(f"cannot patch fields: {sorted(unknown)}")
        if not fields:
            return False

        assignments: list[str] = []
        params: list[Any] = []
        for name, value in fields.items():
            if name == "due_date":
                value = self._date_to_str(value)
            elif name == "completed":
                value = 1 if value else 0
            assignments.append(f"{name} = ?")
            params.append(value)

        assignments.append("updated_at = ?")
        params.append(time.time())
        params.extend((int(task_id), owner_id))

        sql = f"UPDATE tasks SET {', '.join(assignments)} WHERE id = ? AND owner_id = ?"

        with self._connect("update_one") as conn:
            cur = conn.execute(sql, params)
            conn.commit()
            return cur.rowcount == 1

    def delete_one(self, task_id: int, owner_id: str) -> bool:
        """Delete (task_id, owner_id); no-op (False) if absent."""
        with self._connect("delete_one") as conn:
            cur = conn.execute(
                "DELETE FROM tasks WHERE id = ? AND owner_id = ?",
                (int(task_id), owner_id),
            )
            conn.commit()
            return cur.rowcount == 1
