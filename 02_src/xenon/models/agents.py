"""Agent names and the routes between them."""

from dataclasses import dataclass
from enum import Enum


class AgentName(str, Enum):
    """Participants of the orchestration graph."""

    OBSERVER = "observer"
    TASK_MANAGER = "task-manager"
    EXECUTOR = "executor"
    SUPERVISOR = "supervisor"
    BUS = "bus"


class Route(str, Enum):
    """One-way channel between two named participants."""

    OBSERVER_TO_TASK_MANAGER = "observer-task-manager"
    TASK_MANAGER_TO_EXECUTOR = "task-manager-executor"
    EXECUTOR_TO_TASK_MANAGER = "executor-task-manager"
    TASK_MANAGER_TO_OBSERVER = "task-manager-observer"
    BUS_TO_SUPERVISOR = "bus-supervisor"
    SUPERVISOR_TO_OBSERVER = "supervisor-observer"

    @property
    def source(self) -> AgentName:
        return _ENDPOINTS[self][0]

    @property
    def destination(self) -> AgentName:
        return _ENDPOINTS[self][1]

    @classmethod
    def between(cls, source: AgentName, destination: AgentName) -> "Route":
        """Look up the route for a (source, destination) pair."""
        for route, endpoints in _ENDPOINTS.items():
            if endpoints == (source, destination):
                return route
        raise ValueError(f"No route from {source.value} to {destination.value}")


_ENDPOINTS: dict[Route, tuple[AgentName, AgentName]] = {
    Route.OBSERVER_TO_TASK_MANAGER: (AgentName.OBSERVER, AgentName.TASK_MANAGER),
    Route.TASK_MANAGER_TO_EXECUTOR: (AgentName.TASK_MANAGER, AgentName.EXECUTOR),
    Route.EXECUTOR_TO_TASK_MANAGER: (AgentName.EXECUTOR, AgentName.TASK_MANAGER),
    Route.TASK_MANAGER_TO_OBSERVER: (AgentName.TASK_MANAGER, AgentName.OBSERVER),
    Route.BUS_TO_SUPERVISOR: (AgentName.BUS, AgentName.SUPERVISOR),
    Route.SUPERVISOR_TO_OBSERVER: (AgentName.SUPERVISOR, AgentName.OBSERVER),
}


@dataclass(frozen=True)
class Account:
    """Execution context held by the executor (one signing identity)."""

    address: str
    chain_id: int = 8453
    chain_name: str = "base"
