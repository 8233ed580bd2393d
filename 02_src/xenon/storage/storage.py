"""SQLite storage implementation."""

import json
import uuid
from datetime import datetime, timezone
from pathlib import Path
from typing import Protocol

import aiosqlite

from ..config import resolve_db_path
from ..models import Report, Thought, TraceEvent


def _parse_ts(value: str) -> datetime:
    return datetime.fromisoformat(value).replace(tzinfo=timezone.utc)


class IStorage(Protocol):
    """Persistent storage for thoughts, reports and trace events (SQLite)."""

    async def init(self) -> None:
        """Initialize database and create tables."""
        ...

    async def close(self) -> None:
        """Close database connection."""
        ...

    # Thoughts
    async def save_thought(self, thought: Thought) -> None:
        """Save an agent thought."""
        ...

    async def get_thoughts(
        self, agent: str | None = None, limit: int = 100
    ) -> list[Thought]:
        """Get thoughts (newest first), optionally for one agent."""
        ...

    # Reports
    async def save_report(self, report: Report) -> None:
        """Save a final report."""
        ...

    async def get_reports(self, limit: int = 100) -> list[Report]:
        """Get reports (newest first)."""
        ...

    # TraceEvents
    async def save_trace_event(self, event: TraceEvent) -> None:
        """Save a trace event."""
        ...

    async def get_trace_events(
        self,
        after: datetime | None = None,
        event_types: list[str] | None = None,
        actor: str | None = None,
        limit: int = 100,
    ) -> list[TraceEvent]:
        """Get trace events with optional filters."""
        ...

    # Lifecycle
    async def clear(self) -> None:
        """Clear all data."""
        ...


class Storage:
    """SQLite storage implementation."""

    def __init__(self, db_path: str | Path | None = None):
        self._db_path = resolve_db_path(db_path)
        self._conn: aiosqlite.Connection | None = None

    async def init(self) -> None:
        """Initialize database and create tables."""
        self._conn = await aiosqlite.connect(self._db_path)

        schema_path = Path(__file__).parent / "schema.sql"
        with open(schema_path, "r", encoding="utf-8") as f:
            schema_sql = f.read()
        await self._conn.executescript(schema_sql)
        await self._conn.commit()

    async def close(self) -> None:
        """Close database connection."""
        if self._conn:
            await self._conn.close()
            self._conn = None

    def _require_conn(self) -> aiosqlite.Connection:
        if not self._conn:
            raise RuntimeError("Storage not initialized")
        return self._conn

    # Thoughts
    async def save_thought(self, thought: Thought) -> None:
        """Save an agent thought."""
        conn = self._require_conn()

        await conn.execute(
            """
            INSERT INTO thoughts (id, agent, text, tool_calls, tool_results, timestamp)
            VALUES (?, ?, ?, ?, ?, ?)
            """,
            (
                thought.id or str(uuid.uuid4()),
                thought.agent,
                thought.text,
                json.dumps(thought.tool_calls, default=str),
                json.dumps(thought.tool_results, default=str),
                thought.timestamp.isoformat(),
            ),
        )
        await conn.commit()

    async def get_thoughts(
        self, agent: str | None = None, limit: int = 100
    ) -> list[Thought]:
        """Get thoughts (newest first), optionally for one agent."""
        conn = self._require_conn()

        if agent:
            cursor = await conn.execute(
                """
                SELECT id, agent, text, tool_calls, tool_results, timestamp
                FROM thoughts
                WHERE agent = ?
                ORDER BY timestamp DESC
                LIMIT ?
                """,
                (agent, limit),
            )
        else:
            cursor = await conn.execute(
                """
                SELECT id, agent, text, tool_calls, tool_results, timestamp
                FROM thoughts
                ORDER BY timestamp DESC
                LIMIT ?
                """,
                (limit,),
            )
        rows = await cursor.fetchall()

        return [
            Thought(
                id=row[0],
                agent=row[1],
                text=row[2],
                tool_calls=json.loads(row[3]),
                tool_results=json.loads(row[4]),
                timestamp=_parse_ts(row[5]),
            )
            for row in rows
        ]

    # Reports
    async def save_report(self, report: Report) -> None:
        """Save a final report."""
        conn = self._require_conn()

        await conn.execute(
            """
            INSERT INTO reports (id, text, timestamp)
            VALUES (?, ?, ?)
            """,
            (report.id or str(uuid.uuid4()), report.text, report.timestamp.isoformat()),
        )
        await conn.commit()

    async def get_reports(self, limit: int = 100) -> list[Report]:
        """Get reports (newest first)."""
        conn = self._require_conn()

        cursor = await conn.execute(
            """
            SELECT id, text, timestamp
            FROM reports
            ORDER BY timestamp DESC
            LIMIT ?
            """,
            (limit,),
        )
        rows = await cursor.fetchall()

        return [
            Report(id=row[0], text=row[1], timestamp=_parse_ts(row[2]))
            for row in rows
        ]

    # TraceEvents
    async def save_trace_event(self, event: TraceEvent) -> None:
        """Save a trace event."""
        conn = self._require_conn()

        await conn.execute(
            """
            INSERT INTO trace_events (id, event_type, actor, data, timestamp)
            VALUES (?, ?, ?, ?, ?)
            """,
            (
                event.id or str(uuid.uuid4()),
                event.event_type,
                event.actor,
                json.dumps(event.data, default=str),
                event.timestamp.isoformat(),
            ),
        )
        await conn.commit()

    async def get_trace_events(
        self,
        after: datetime | None = None,
        event_types: list[str] | None = None,
        actor: str | None = None,
        limit: int = 100,
    ) -> list[TraceEvent]:
        """Get trace events with optional filters."""
        conn = self._require_conn()

        # Build query dynamically
        conditions = []
        params: list = []

        if after:
            conditions.append("timestamp > ?")
            params.append(after.isoformat())
        if event_types:
            placeholders = ",".join("?" * len(event_types))
            conditions.append(f"event_type IN ({placeholders})")
            params.extend(event_types)
        if actor:
            conditions.append("actor = ?")
            params.append(actor)

        where_clause = f"WHERE {' AND '.join(conditions)}" if conditions else ""

        query = f"""
            SELECT id, event_type, actor, data, timestamp
            FROM trace_events
            {where_clause}
            ORDER BY timestamp DESC
            LIMIT ?
        """
        params.append(limit)

        cursor = await conn.execute(query, params)
        rows = await cursor.fetchall()

        return [
            TraceEvent(
                id=row[0],
                event_type=row[1],
                actor=row[2],
                data=json.loads(row[3]),
                timestamp=_parse_ts(row[4]),
            )
            for row in rows
        ]

    # Lifecycle
    async def clear(self) -> None:
        """Clear all data."""
        conn = self._require_conn()

        for table in ("thoughts", "reports", "trace_events"):
            await conn.execute(f"DELETE FROM {table}")
        await conn.commit()
