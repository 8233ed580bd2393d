"""Thought log and report store.

Both operations are best effort: a failing store is logged and never
interrupts the decision cycle.
"""

import uuid
from dataclasses import asdict
from datetime import datetime, timezone
from typing import Protocol

from ..logging_config import get_logger
from ..models import Report, Thought, ToolCall, ToolResult
from ..storage import IStorage

logger = get_logger(__name__)


class IMemory(Protocol):
    """Fire-and-forget persistence for agent thoughts and final reports."""

    async def save_thought(
        self,
        agent: str,
        text: str,
        tool_calls: list[ToolCall] | None = None,
        tool_results: list[ToolResult] | None = None,
    ) -> None:
        """Append a thought to the log."""
        ...

    async def store_report(self, text: str) -> None:
        """Store a synthesized report."""
        ...


class Memory:
    """Storage-backed memory that never raises."""

    def __init__(self, storage: IStorage):
        self._storage = storage

    async def save_thought(
        self,
        agent: str,
        text: str,
        tool_calls: list[ToolCall] | None = None,
        tool_results: list[ToolResult] | None = None,
    ) -> None:
        """Append a thought to the log."""
        thought = Thought(
            id=str(uuid.uuid4()),
            agent=agent,
            text=text,
            timestamp=datetime.now(timezone.utc),
            tool_calls=[asdict(call) for call in tool_calls or []],
            tool_results=[asdict(result) for result in tool_results or []],
        )
        try:
            await self._storage.save_thought(thought)
        except Exception as e:
            logger.warning("Failed to save thought for %s: %s", agent, e)

    async def store_report(self, text: str) -> None:
        """Store a synthesized report."""
        report = Report(
            id=str(uuid.uuid4()),
            text=text,
            timestamp=datetime.now(timezone.utc),
        )
        try:
            await self._storage.save_report(report)
        except Exception as e:
            logger.warning("Failed to store report: %s", e)
