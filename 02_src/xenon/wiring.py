"""Orchestration topology: the only place routes are bound to agents."""

from .agents import Agent, Executor, Observer, Supervisor, TaskManager
from .event_bus import IMessageBus
from .logging_config import get_logger
from .models import Route

logger = get_logger(__name__)


def topology(
    observer: Observer,
    task_manager: TaskManager,
    executor: Executor,
    supervisor: Supervisor | None = None,
) -> dict[Route, Agent]:
    """Route table of the decision cycle."""
    table: dict[Route, Agent] = {
        Route.OBSERVER_TO_TASK_MANAGER: task_manager,
        Route.TASK_MANAGER_TO_EXECUTOR: executor,
        Route.EXECUTOR_TO_TASK_MANAGER: task_manager,
        Route.TASK_MANAGER_TO_OBSERVER: observer,
        Route.SUPERVISOR_TO_OBSERVER: observer,
    }
    if supervisor is not None:
        table[Route.BUS_TO_SUPERVISOR] = supervisor
    return table


def wire_agents(
    bus: IMessageBus,
    observer: Observer,
    task_manager: TaskManager,
    executor: Executor,
    supervisor: Supervisor | None = None,
) -> None:
    """Register every route of the topology on the bus."""
    for route, agent in topology(observer, task_manager, executor, supervisor).items():
        bus.register(route, agent.handler_for(route))
        logger.info(
            "Messages from %s to %s registered",
            route.source.value,
            route.destination.value,
            extra={"route": route},
        )
    logger.info("All agents registered")
