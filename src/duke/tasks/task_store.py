# src/duke/tasks/task_store.py

from __future__ import annotations

import contextlib
import logging
import sqlite3
import time
from collections.abc import Sequence
from pathlib import Path

from .task_models import Task, TaskKind

logger = logging.getLogger(__name__)

_SAVED_AT_KEY = "saved_at"


class TaskStore:
    """
    SQLite snapshot store for the task list.

    Every write replaces the whole list in one transaction; there is no
    incremental diffing. A `meta` row records that a snapshot exists, so an
    empty saved list can be told apart from "never saved".

    The schema is migration-safe:
    - create tables if missing
    - use PRAGMA table_info to detect missing columns
    - add columns with ALTER TABLE only when needed

    Each method opens its own SQLite connection.
    """

    def __init__(self, db_path: str | Path = "tasks.sqlite3") -> None:
        self._db_path = Path(db_path)
        self._db_path.parent.mkdir(parents=True, exist_ok=True)
        self._ensure_schema()
        try:
            total = self.count_tasks()
        except sqlite3.Error:
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

    def _ensure_schema(self) -> None:
        conn = self._get_conn()
        try:
            cur = conn.cursor()

            cur.execute(
                """
                CREATE TABLE IF NOT EXISTS tasks (
                    position INTEGER PRIMARY KEY,
                    kind TEXT NOT NULL,
                    description TEXT NOT NULL,
                    done INTEGER NOT NULL DEFAULT 0,
                    label TEXT
                )
                """
            )
            cur.execute(
                """
                CREATE TABLE IF NOT EXISTS meta (
                    key TEXT PRIMARY KEY,
                    value TEXT NOT NULL
                )
                """
            )

            cur.execute("PRAGMA table_info(tasks)")
            cols = {row["name"] for row in cur.fetchall()}

            def add_col(name: str, decl: str) -> None:
                if name in cols:
                    return
                cur.execute(f"ALTER TABLE tasks ADD COLUMN {name} {decl}")
                logger.info("TaskStore migration: added column %s", name)

            add_col("done", "INTEGER NOT NULL DEFAULT 0")
            add_col("label", "TEXT")

            conn.commit()
        finally:
            conn.close()

    @staticmethod
    def _row_to_task(row: sqlite3.Row) -> Task | None:
        kind = TaskKind.from_db(row["kind"])
        if kind is None:
            logger.warning(
                "Skipping stored task with unknown kind=%r position=%s",
                row["kind"],
                row["position"],
            )
            return None
        return Task(
            kind=kind,
            description=str(row["description"] or ""),
            done=bool(row["done"]),
            label=None if kind is TaskKind.TODO else str(row["label"] or ""),
        )

    # ---- public API ----

    def count_tasks(self) -> int:
        conn = self._get_conn()
        try:
            cur = conn.cursor()
            cur.execute("SELECT COUNT(*) FROM tasks")
            (n,) = cur.fetchone()
            return int(n)
        finally:
            conn.close()

    def read_all(self) -> list[Task] | None:
        """
        Load the saved task sequence in position order.

        Returns None when no snapshot was ever written (or it cannot be read),
        so callers can fall back to an empty list.
        """
        try:
            conn = self._get_conn()
        except sqlite3.Error:
            logger.exception("Failed to open task db %s", self._db_path)
            return None
        try:
            cur = conn.cursor()
            cur.execute("SELECT 1 FROM meta WHERE key = ?", (_SAVED_AT_KEY,))
            if cur.fetchone() is None:
                return None
            cur.execute("SELECT * FROM tasks ORDER BY position ASC")
            out: list[Task] = []
            for row in cur.fetchall():
                task = self._row_to_task(row)
                if task is not None:
                    out.append(task)
            logger.debug("Read %d tasks from %s", len(out), self._db_path)
            return out
        except sqlite3.Error:
            logger.exception("Failed to read tasks from %s", self._db_path)
            return None
        finally:
            conn.close()

    def write_all(self, tasks: Sequence[Task]) -> bool:
        """Replace the stored snapshot with `tasks`. Returns False on failure."""
        rows = [
            (pos, task.kind.value, task.description, int(task.done), task.label)
            for pos, task in enumerate(tasks)
        ]
        try:
            conn = self._get_conn()
        except sqlite3.Error:
            logger.exception("Failed to open task db %s", self._db_path)
            return False
        try:
            with conn:
                conn.execute("DELETE FROM tasks")
                conn.executemany(
                    "INSERT INTO tasks(position, kind, description, done, label) "
                    "VALUES (?, ?, ?, ?, ?)",
                    rows,
                )
                conn.execute(
                    "INSERT OR REPLACE INTO meta(key, value) VALUES (?, ?)",
                    (_SAVED_AT_KEY, repr(time.time())),
                )
            logger.debug("Wrote %d tasks to %s", len(rows), self._db_path)
            return True
        except sqlite3.Error:
            logger.exception("Failed to write %d tasks to %s", len(rows), self._db_path)
            return False
        finally:
            conn.close()
