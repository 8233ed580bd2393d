"""Observer agent: produces situation reports or an idle signal."""

from typing import Iterable

from pydantic import ValidationError

from ..llm import IDecisionCapability
from ..logging_config import get_logger
from ..memory import IMemory
from ..models import (
    AgentName,
    Envelope,
    IdleSignal,
    ObservationReport,
    ObserverFeedback,
    Route,
)
from ..tools import NO_FURTHER_ACTIONS, Tool, observer_toolkit
from ..tools.builtin import NoFurtherActionsArgs
from .base import Agent
from .prompts import (
    OBSERVER_STARTING_PROMPT,
    observer_feedback_prompt,
    observer_system_prompt,
)

logger = get_logger(__name__)


class Observer(Agent):
    """Generates reports about the observed account and its opportunities."""

    def __init__(
        self,
        decision: IDecisionCapability,
        memory: IMemory | None = None,
        tools: Iterable[Tool] = (),
        address: str | None = None,
        max_steps: int = 100,
        default_wait_time: float = 60.0,
        decision_timeout: float | None = None,
    ):
        super().__init__(AgentName.OBSERVER, memory, decision_timeout)
        self._decision = decision
        self._tools = list(tools)
        self._max_steps = max_steps
        self._default_wait_time = default_wait_time
        self.address = address

    @property
    def routes(self):
        return {
            Route.TASK_MANAGER_TO_OBSERVER: self._handle_feedback,
            Route.SUPERVISOR_TO_OBSERVER: self._handle_feedback,
        }

    async def _handle_feedback(self, feedback: ObserverFeedback | None) -> Envelope:
        if feedback is not None:
            logger.info("[%s] received message: %s", self.name.value, feedback.result)
        if not self.address:
            raise RuntimeError("Observer has no address to observe")
        return await self.start(self.address, feedback)

    async def start(
        self, address: str, previous: ObserverFeedback | None = None
    ) -> Envelope:
        """Observe ``address`` and return the report or idle signal to emit."""
        self.address = address
        toolkit = observer_toolkit(address, self._tools)
        system = observer_system_prompt(address)

        if previous is None:
            decision = await self._decide(
                self._decision,
                system=system,
                messages=[{"role": "user", "content": OBSERVER_STARTING_PROMPT}],
                tools=toolkit,
                max_steps=self._max_steps,
            )
            return self.envelope(
                AgentName.TASK_MANAGER, ObservationReport(report=decision.text)
            )

        messages = []
        if previous.report:
            messages.append({"role": "assistant", "content": previous.report})
        messages.append({"role": "user", "content": observer_feedback_prompt(previous.result)})

        decision = await self._decide(
            self._decision,
            system=system,
            messages=messages,
            tools=toolkit,
            max_steps=self._max_steps,
        )

        idle_call = decision.find_tool_call(NO_FURTHER_ACTIONS)
        if idle_call is not None:
            wait_time = self._wait_time(idle_call.args)
            logger.info("[%s] no further actions, waiting %ss", self.name.value, wait_time)
            return self.envelope(AgentName.TASK_MANAGER, IdleSignal(wait_time=wait_time))

        return self.envelope(
            AgentName.TASK_MANAGER, ObservationReport(report=decision.text)
        )

    def _wait_time(self, args: dict) -> float:
        try:
            return NoFurtherActionsArgs.model_validate(args).wait_time
        except ValidationError:
            logger.warning(
                "Invalid %s arguments %r, using default wait time",
                NO_FURTHER_ACTIONS,
                args,
            )
            return self._default_wait_time
