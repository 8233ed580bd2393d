"""Tracing and memory data models."""

from dataclasses import dataclass, field
from datetime import datetime


@dataclass
class TraceEvent:
    """A single observability event."""

    id: str
    event_type: str  # e.g. "message_emitted", "delivery_failed"
    actor: str  # who created this event
    data: dict  # self-contained data for display
    timestamp: datetime


@dataclass
class Thought:
    """Visible reasoning produced by an agent during one step."""

    id: str
    agent: str
    text: str
    timestamp: datetime
    tool_calls: list[dict] = field(default_factory=list)
    tool_results: list[dict] = field(default_factory=list)


@dataclass
class Report:
    """Final report synthesized after an execution."""

    id: str
    text: str
    timestamp: datetime
