"""Agent contract shared by every participant of the orchestration graph."""

import asyncio
from abc import ABC, abstractmethod
from typing import Any, Awaitable, Callable

from ..llm import IDecisionCapability
from ..logging_config import get_logger
from ..memory import IMemory
from ..models import AgentName, BusMessage, Decision, Envelope, Route, Step
from ..tools import Toolkit

logger = get_logger(__name__)


RouteHandler = Callable[[BusMessage], Awaitable[Envelope | None]]


class Agent(ABC):
    """A named participant that reacts to messages on its inbound routes.

    Agents never hold the bus. A handler returns the follow-up ``Envelope``
    (or ``None``) and the bus emits it.
    """

    def __init__(
        self,
        name: AgentName,
        memory: IMemory | None = None,
        decision_timeout: float | None = None,
    ):
        self._name = name
        self._memory = memory
        self._decision_timeout = decision_timeout
        self._bound: dict[Route, RouteHandler] = {}

    @property
    def name(self) -> AgentName:
        return self._name

    @property
    @abstractmethod
    def routes(self) -> dict[Route, Callable[[Any], Awaitable[Envelope | None]]]:
        """Inbound routes and the method handling each."""
        ...

    async def handle_event(self, route: Route, message: BusMessage) -> Envelope | None:
        """Dispatch a message to the handler for ``route``; unknown routes are ignored."""
        handler = self.routes.get(route)
        if handler is None:
            logger.debug("%s ignoring message on %s", self._name.value, route.value)
            return None

        logger.info(
            "[%s] received data from [%s]",
            self._name.value,
            route.source.value,
            extra={"agent": self._name, "route": route},
        )
        return await handler(message)

    def handler_for(self, route: Route) -> RouteHandler:
        """Stable callable bound to one inbound route, for bus registration."""
        if route not in self._bound:

            async def handler(message: BusMessage) -> Envelope | None:
                return await self.handle_event(route, message)

            self._bound[route] = handler
        return self._bound[route]

    def envelope(self, destination: AgentName, message: BusMessage = None) -> Envelope:
        return Envelope(Route.between(self._name, destination), message)

    async def _decide(
        self,
        decision: IDecisionCapability,
        system: str,
        messages: list[dict],
        tools: Toolkit | None = None,
        max_steps: int = 1,
    ) -> Decision:
        """Invoke a decision capability under the configured timeout."""
        call = decision.invoke(
            system=system,
            messages=messages,
            tools=tools,
            max_steps=max_steps,
            on_step=self._on_step,
        )
        if self._decision_timeout is None:
            return await call
        return await asyncio.wait_for(call, timeout=self._decision_timeout)

    async def _on_step(self, step: Step) -> None:
        tools_called = ", ".join(call.name for call in step.tool_calls) or "none"
        logger.info(
            "[%s] step finished. tools called: %s",
            self._name.value,
            tools_called,
            extra={"agent": self._name},
        )
        if step.text and self._memory is not None:
            await self._memory.save_thought(
                agent=self._name.value,
                text=step.text,
                tool_calls=step.tool_calls,
                tool_results=step.tool_results,
            )
