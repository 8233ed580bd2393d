"""Core data models for Xenon."""

from .agents import Account, AgentName, Route
from .decision import Decision, Step, ToolCall, ToolResult
from .messages import (
    BusMessage,
    DeliveryFailure,
    DispatchInstruction,
    Envelope,
    ExecutionResult,
    IdleSignal,
    ObservationReport,
    ObserverFeedback,
)
from .tracing import Report, Thought, TraceEvent

__all__ = [
    # Agents
    "Account",
    "AgentName",
    "Route",
    # Messages
    "BusMessage",
    "DeliveryFailure",
    "DispatchInstruction",
    "Envelope",
    "ExecutionResult",
    "IdleSignal",
    "ObservationReport",
    "ObserverFeedback",
    # Decision
    "Decision",
    "Step",
    "ToolCall",
    "ToolResult",
    # Tracing
    "Report",
    "Thought",
    "TraceEvent",
]
