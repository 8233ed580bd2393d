"""Executor agent: carries out instructions against the managed account."""

from typing import Iterable

from ..llm import IDecisionCapability
from ..logging_config import get_logger
from ..memory import IMemory
from ..models import (
    Account,
    AgentName,
    DispatchInstruction,
    Envelope,
    ExecutionResult,
    Route,
)
from ..tools import Tool, executor_toolkit
from .base import Agent
from .prompts import executor_prompt, executor_system_prompt

logger = get_logger(__name__)


class Executor(Agent):
    """Single-step adapter from instruction to outcome text."""

    def __init__(
        self,
        decision: IDecisionCapability,
        account: Account,
        memory: IMemory | None = None,
        tools: Iterable[Tool] = (),
        max_steps: int = 10,
        decision_timeout: float | None = None,
    ):
        super().__init__(AgentName.EXECUTOR, memory, decision_timeout)
        self._decision = decision
        self._account = account
        self._toolkit = executor_toolkit(account, tools)
        self._max_steps = max_steps

    @property
    def account(self) -> Account:
        return self._account

    @property
    def routes(self):
        return {Route.TASK_MANAGER_TO_EXECUTOR: self._handle_instruction}

    async def _handle_instruction(self, message: DispatchInstruction) -> Envelope:
        logger.info("[%s] executing: %s", self.name.value, message.instruction)

        decision = await self._decide(
            self._decision,
            system=executor_system_prompt(self._account),
            messages=[
                {
                    "role": "user",
                    "content": executor_prompt(message.instruction, message.report),
                }
            ],
            tools=self._toolkit,
            max_steps=self._max_steps,
        )

        return self.envelope(
            AgentName.TASK_MANAGER,
            ExecutionResult(result=decision.text, report=message.report),
        )
