"""Xenon: autonomous multi-agent orchestration core."""

from .agents import Agent, Executor, Observer, Supervisor, TaskManager
from .app import Application, IApplication
from .config import Settings
from .errors import DecisionError, OrchestrationError, RouteAlreadyRegisteredError
from .event_bus import IMessageBus, MessageBus
from .llm import AnthropicDecisionCapability, IDecisionCapability
from .memory import IMemory, Memory
from .models import (
    Account,
    AgentName,
    Decision,
    DeliveryFailure,
    DispatchInstruction,
    Envelope,
    ExecutionResult,
    IdleSignal,
    ObservationReport,
    ObserverFeedback,
    Route,
    Step,
    ToolCall,
    ToolResult,
)
from .storage import IStorage, Storage
from .tools import Tool, Toolkit
from .tracker import ITracker, Tracker
from .wiring import topology, wire_agents

__all__ = [
    # Application
    "Application",
    "IApplication",
    "Settings",
    # Models
    "Account",
    "AgentName",
    "Route",
    "Envelope",
    "ObservationReport",
    "IdleSignal",
    "DispatchInstruction",
    "ExecutionResult",
    "ObserverFeedback",
    "DeliveryFailure",
    "Decision",
    "Step",
    "ToolCall",
    "ToolResult",
    # Components
    "IMessageBus",
    "MessageBus",
    "Agent",
    "Observer",
    "TaskManager",
    "Executor",
    "Supervisor",
    "IDecisionCapability",
    "AnthropicDecisionCapability",
    "Tool",
    "Toolkit",
    "IMemory",
    "Memory",
    "IStorage",
    "Storage",
    "ITracker",
    "Tracker",
    "topology",
    "wire_agents",
    # Errors
    "OrchestrationError",
    "RouteAlreadyRegisteredError",
    "DecisionError",
]
