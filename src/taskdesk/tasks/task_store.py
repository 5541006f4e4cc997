# src/taskdesk/tasks/task_store.py

from __future__ import annotations

import contextlib
import logging
import sqlite3
from pathlib import Path

from .task_models import NAME_MAX_LENGTH, Task, now_iso

logger = logging.getLogger(__name__)

# SQLite INTEGER is a signed 64-bit value; larger ids cannot exist.
MAX_TASK_ID = 2**63 - 1


class TaskStore:
    """
    SQLite task store.

    The schema is intentionally simple and migration-safe:
    - create table if missing
    - use PRAGMA table_info to detect missing columns
    - add columns with ALTER TABLE only when needed

    Thread-safety:
    - each method opens its own SQLite connection (FastAPI runs sync routes
      in a worker thread pool)
    """

    def __init__(self, db_path: str | Path = "tasks.sqlite3") -> None:
        self._db_path = Path(db_path)
        self._db_path.parent.mkdir(parents=True, exist_ok=True)
        self._ensure_schema()
        logger.info("TaskStore ready db=%s total=%s", self._db_path, self.count_tasks())

    @property
    def db_path(self) -> Path:
        return self._db_path

    # ---- low-level helpers ----

    def _get_conn(self) -> sqlite3.Connection:
        conn = sqlite3.connect(str(self._db_path), timeout=30.0)
        conn.row_factory = sqlite3.Row
        self._configure_conn(conn)
        return conn

    @staticmethod
    def _configure_conn(conn: sqlite3.Connection) -> None:
        with contextlib.suppress(sqlite3.DatabaseError):
            conn.execute("PRAGMA journal_mode=WAL")

    def _ensure_schema(self) -> None:
        conn = self._get_conn()
        try:
            cur = conn.cursor()

            cur.execute(
                """
                CREATE TABLE IF NOT EXISTS tasks (
                    id INTEGER PRIMARY KEY AUTOINCREMENT,
                    name TEXT NOT NULL,
                    created TEXT NOT NULL,
                    updated TEXT,
                    done INTEGER NOT NULL DEFAULT 0
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

            add_col("created", "TEXT NOT NULL DEFAULT ''")
            add_col("updated", "TEXT")
            add_col("done", "INTEGER NOT NULL DEFAULT 0")

            conn.commit()
        finally:
            conn.close()

    @staticmethod
    def _valid_id(task_id: int) -> bool:
        return -MAX_TASK_ID - 1 <= int(task_id) <= MAX_TASK_ID

    @staticmethod
    def _clean_name(name: str) -> str:
        cleaned = (name or "").strip()
        if not cleaned:
            raise ValueError("name is required")
        if len(cleaned) > NAME_MAX_LENGTH:
            raise ValueError(f"name must be at most {NAME_MAX_LENGTH} characters")
        return cleaned

    @staticmethod
    def _row_to_task(row: sqlite3.Row) -> Task:
        return Task(
            id=int(row["id"]),
            name=str(row["name"] or ""),
            created=row["created"] or None,
            updated=row["updated"] or None,
            done=bool(row["done"]),
        )

    def _fetch(self, conn: sqlite3.Connection, task_id: int) -> Task | None:
        if not self._valid_id(task_id):
            return None
        row = conn.execute("SELECT * FROM tasks WHERE id = ?", (int(task_id),)).fetchone()
        return self._row_to_task(row) if row else None

    # ---- public API ----

    def count_tasks(self) -> int:
        conn = self._get_conn()
        try:
            (n,) = conn.execute("SELECT COUNT(*) FROM tasks").fetchone()
            return int(n)
        finally:
            conn.close()

    def list_tasks(self) -> list[Task]:
        conn = self._get_conn()
        try:
            rows = conn.execute("SELECT * FROM tasks ORDER BY id ASC").fetchall()
            return [self._row_to_task(r) for r in rows]
        finally:
            conn.close()

    def get_task(self, task_id: int) -> Task | None:
        conn = self._get_conn()
        try:
            return self._fetch(conn, task_id)
        finally:
            conn.close()

    def add_task(self, name: str, *, done: bool = False) -> Task:
        cleaned = self._clean_name(name)
        now = now_iso()

        conn = self._get_conn()
        try:
            cur = conn.execute(
                "INSERT INTO tasks(name, created, updated, done) VALUES (?, ?, ?, ?)",
                (cleaned, now, None, int(bool(done))),
            )
            conn.commit()
            rowid = cur.lastrowid
            if rowid is None:
                raise RuntimeError("SQLite did not return lastrowid for tasks insert")
            task = self._fetch(conn, int(rowid))
            if task is None:
                raise RuntimeError(f"Inserted task {rowid} vanished")
            logger.debug("Task added id=%s done=%s", task.id, task.done)
            return task
        finally:
            conn.close()

    def update_task(self, task_id: int, *, name: str, done: bool) -> Task | None:
        """
        Replace the editable fields of an existing task.

        `done` is monotonic: a request carrying done=False never reopens a
        finished task. Returns None if the task does not exist.
        """
        cleaned = self._clean_name(name)
        if not self._valid_id(task_id):
            return None

        conn = self._get_conn()
        try:
            cur = conn.execute(
                """
                UPDATE tasks
                SET name = ?,
                    done = MAX(done, ?),
                    updated = ?
                WHERE id = ?
                """,
                (cleaned, int(bool(done)), now_iso(), int(task_id)),
            )
            conn.commit()
            if cur.rowcount != 1:
                return None
            return self._fetch(conn, task_id)
        finally:
            conn.close()

    def mark_done(self, task_id: int) -> Task | None:
        """
        Transition a task to done.

        Idempotent: a task that is already done is returned as stored, without
        touching `updated`. Returns None if the task does not exist.
        """
        if not self._valid_id(task_id):
            return None
        conn = self._get_conn()
        try:
            conn.execute(
                "UPDATE tasks SET done = 1, updated = ? WHERE id = ? AND done = 0",
                (now_iso(), int(task_id)),
            )
            conn.commit()
            return self._fetch(conn, task_id)
        finally:
            conn.close()

    def delete_task(self, task_id: int) -> bool:
        if not self._valid_id(task_id):
            return False
        conn = self._get_conn()
        try:
            cur = conn.execute("DELETE FROM tasks WHERE id = ?", (int(task_id),))
            conn.commit()
            return cur.rowcount == 1
        finally:
            conn.close()
