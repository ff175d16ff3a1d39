"""SQLite implementation of the execution store."""

from __future__ import annotations

import asyncio
import json
import sqlite3
from datetime import datetime
from pathlib import Path
from typing import Any

from .models import ExecutionRecord

_COLUMNS = (
    "execution_id, workflow_id, status, duration_ms, steps, input_data, error, recorded_at"
)


class SQLiteExecutionStore:
    """Persist execution history using SQLite."""

    def __init__(self, db_path: str | Path):
        self.db_path = str(db_path)
        self._conn = sqlite3.connect(self.db_path, check_same_thread=False)
        self._conn.row_factory = sqlite3.Row
        self._ensure_schema()

    # ------------------------------------------------------------------
    # Schema management
    def _ensure_schema(self) -> None:
        cur = self._conn.cursor()
        cur.execute(
            """
            CREATE TABLE IF NOT EXISTS workflow_executions (
                execution_id TEXT PRIMARY KEY,
                workflow_id TEXT,
                status TEXT NOT NULL,
                duration_ms INTEGER,
                steps INTEGER NOT NULL DEFAULT 0,
                input_data TEXT,
                error TEXT,
                recorded_at TEXT NOT NULL
            )
            """
        )
        self._conn.commit()

    # ------------------------------------------------------------------
    # Helper methods
    def _execute(self, query: str, *params: Any) -> None:
        cur = self._conn.cursor()
        cur.execute(query, params)
        self._conn.commit()

    def _fetchone(self, query: str, *params: Any) -> sqlite3.Row | None:
        cur = self._conn.cursor()
        cur.execute(query, params)
        return cur.fetchone()

    def _fetchall(self, query: str, *params: Any) -> list[sqlite3.Row]:
        cur = self._conn.cursor()
        cur.execute(query, params)
        return cur.fetchall()

    @staticmethod
    def _to_record(row: sqlite3.Row) -> ExecutionRecord:
        return ExecutionRecord(
            execution_id=row["execution_id"],
            workflow_id=row["workflow_id"],
            status=row["status"],
            duration_ms=row["duration_ms"],
            steps=row["steps"],
            input_data=json.loads(row["input_data"]) if row["input_data"] else {},
            error=row["error"],
            recorded_at=datetime.fromisoformat(row["recorded_at"]),
        )

    # ------------------------------------------------------------------
    # Store API
    async def record_execution(self, record: ExecutionRecord) -> None:
        await asyncio.to_thread(
            self._execute,
            f"INSERT OR REPLACE INTO workflow_executions ({_COLUMNS}) VALUES (?, ?, ?, ?, ?, ?, ?, ?)",
            record.execution_id,
            record.workflow_id,
            record.status,
            record.duration_ms,
            record.steps,
            json.dumps(record.input_data, default=str),
            record.error,
            record.recorded_at.isoformat(),
        )

    async def get_execution(self, execution_id: str) -> ExecutionRecord | None:
        row = await asyncio.to_thread(
            self._fetchone,
            f"SELECT {_COLUMNS} FROM workflow_executions WHERE execution_id = ?",
            execution_id,
        )
        return self._to_record(row) if row else None

    async def list_executions(self, limit: int | None = None) -> list[ExecutionRecord]:
        query = f"SELECT {_COLUMNS} FROM workflow_executions ORDER BY recorded_at DESC"
        params: tuple[Any, ...] = ()
        if limit is not None:
            query += " LIMIT ?"
            params = (limit,)
        rows = await asyncio.to_thread(self._fetchall, query, *params)
        return [self._to_record(r) for r in rows]
