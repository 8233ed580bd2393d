"""Task manager agent: the decision point of the cycle."""

import asyncio

from ..llm import IDecisionCapability
from ..logging_config import get_logger
from ..memory import IMemory
from ..models import (
    AgentName,
    DispatchInstruction,
    Envelope,
    ExecutionResult,
    IdleSignal,
    ObservationReport,
    ObserverFeedback,
    Route,
    ToolCall,
)
from ..tools import SEND_MESSAGE_TO_EXECUTOR, SEND_MESSAGE_TO_OBSERVER, task_manager_toolkit
from .base import Agent
from .prompts import (
    DEFAULT_OBSERVER_GUIDANCE,
    final_report_prompt,
    final_report_system_prompt,
    task_manager_dispatch_prompt,
    task_manager_system_prompt,
)

logger = get_logger(__name__)


def _message_arg(call: ToolCall | None) -> str | None:
    if call is None:
        return None
    message = call.args.get("message")
    if isinstance(message, str) and message.strip():
        return message
    return None


class TaskManager(Agent):
    """Routes observer reports to the executor or back to the observer.

    Also owns the idle wait: an ``IdleSignal`` is honoured here, without
    consulting the decision capability.
    """

    def __init__(
        self,
        decision: IDecisionCapability,
        memory: IMemory | None = None,
        report_decision: IDecisionCapability | None = None,
        max_steps: int = 10,
        decision_timeout: float | None = None,
    ):
        super().__init__(AgentName.TASK_MANAGER, memory, decision_timeout)
        self._decision = decision
        self._report_decision = report_decision or decision
        self._max_steps = max_steps

    @property
    def routes(self):
        return {
            Route.OBSERVER_TO_TASK_MANAGER: self._handle_observer_report,
            Route.EXECUTOR_TO_TASK_MANAGER: self._handle_execution_result,
        }

    async def _handle_observer_report(
        self, message: ObservationReport | IdleSignal
    ) -> Envelope:
        if isinstance(message, IdleSignal):
            logger.info(
                "[%s] no further actions needed. waiting for %s seconds.",
                self.name.value,
                message.wait_time,
            )
            await asyncio.sleep(message.wait_time)
            # ask the observer for a new report
            return self.envelope(AgentName.OBSERVER, None)

        report = message.report
        logger.info("[%s] received a report from the observer:\n\n%s", self.name.value, report)

        decision = await self._decide(
            self._decision,
            system=task_manager_system_prompt(),
            messages=[{"role": "user", "content": task_manager_dispatch_prompt(report)}],
            tools=task_manager_toolkit(),
            max_steps=self._max_steps,
        )

        call = decision.tool_calls[0] if decision.tool_calls else None
        instruction = _message_arg(call)

        if call is not None and call.name == SEND_MESSAGE_TO_EXECUTOR and instruction:
            return self.envelope(
                AgentName.EXECUTOR,
                DispatchInstruction(instruction=instruction, report=report),
            )

        if call is None or call.name != SEND_MESSAGE_TO_OBSERVER or not instruction:
            logger.warning(
                "[%s] no usable tool selection (%s), asking for a new report",
                self.name.value,
                call.name if call else "none",
            )
            instruction = DEFAULT_OBSERVER_GUIDANCE

        return self.envelope(
            AgentName.OBSERVER, ObserverFeedback(result=instruction, report=report)
        )

    async def _handle_execution_result(self, message: ExecutionResult) -> Envelope:
        logger.info(
            "[%s] received result from the executor:\n\n%s", self.name.value, message.result
        )
        report = message.report or ""

        decision = await self._decide(
            self._report_decision,
            system=final_report_system_prompt(),
            messages=[
                {"role": "user", "content": final_report_prompt(report, message.result)}
            ],
            max_steps=self._max_steps,
        )

        if self._memory is not None:
            await self._memory.store_report(decision.text)

        return self.envelope(
            AgentName.OBSERVER,
            ObserverFeedback(result=decision.text, report=message.report),
        )
