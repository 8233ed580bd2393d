"""Decision capability implementation using Anthropic Claude API."""

import os
from typing import Awaitable, Callable, Protocol

import anthropic

from ..config import DEFAULT_MODEL
from ..errors import DecisionError
from ..logging_config import get_logger
from ..models import Decision, Step, ToolCall
from ..tools import Toolkit, render_output

logger = get_logger(__name__)


StepCallback = Callable[[Step], Awaitable[None]]


class IDecisionCapability(Protocol):
    """Turns context into free text and at most one selected tool call."""

    async def invoke(
        self,
        system: str,
        messages: list[dict],  # [{"role": "user", "content": "..."}]
        tools: Toolkit | None = None,
        max_steps: int = 1,
        on_step: StepCallback | None = None,
    ) -> Decision:
        """Run up to ``max_steps`` reasoning steps and return the decision."""
        ...


class AnthropicDecisionCapability:
    """Anthropic Claude API decision capability."""

    def __init__(
        self,
        api_key: str | None = None,
        model: str = DEFAULT_MODEL,
        max_tokens: int = 4096,
    ):
        self._api_key = api_key or os.getenv("ANTHROPIC_API_KEY")
        if not self._api_key:
            raise ValueError("ANTHROPIC_API_KEY environment variable not set")

        self._model = model
        self._max_tokens = max_tokens
        self._client = anthropic.AsyncAnthropic(api_key=self._api_key)

    @property
    def model(self) -> str:
        return self._model

    async def invoke(
        self,
        system: str,
        messages: list[dict],
        tools: Toolkit | None = None,
        max_steps: int = 1,
        on_step: StepCallback | None = None,
    ) -> Decision:
        """Run the tool loop until a final answer, a decision tool or the step limit."""
        conversation = list(messages)
        steps: list[Step] = []
        max_steps = max(1, max_steps)

        for _ in range(max_steps):
            step, assistant_content = await self._step(system, conversation, tools)
            steps.append(step)

            done = (
                not step.tool_calls
                or tools is None
                or any(tools.is_terminal(call) for call in step.tool_calls)
                or len(steps) == max_steps
            )

            if not done:
                for call in step.tool_calls:
                    step.tool_results.append(await tools.execute(call))

            await self._notify(on_step, step)

            if done:
                break

            # Feed tool results back for the next step
            conversation.append({"role": "assistant", "content": assistant_content})
            conversation.append(
                {
                    "role": "user",
                    "content": [
                        {
                            "type": "tool_result",
                            "tool_use_id": result.tool_call_id,
                            "content": render_output(result.output),
                            "is_error": result.is_error,
                        }
                        for result in step.tool_results
                    ],
                }
            )

        last = steps[-1]
        return Decision(text=last.text, tool_calls=list(last.tool_calls), steps=steps)

    async def _step(
        self, system: str, conversation: list[dict], tools: Toolkit | None
    ) -> tuple[Step, list[dict]]:
        request = {
            "model": self._model,
            "system": system,
            "messages": conversation,
            "max_tokens": self._max_tokens,
        }
        if tools is not None and len(tools):
            request["tools"] = tools.schemas()

        try:
            response = await self._client.messages.create(**request)
        except Exception as e:
            # Re-raise for handling by caller
            raise DecisionError(f"LLM API error: {e}") from e

        texts: list[str] = []
        calls: list[ToolCall] = []
        assistant_content: list[dict] = []

        for block in response.content:
            if block.type == "text":
                texts.append(block.text)
                assistant_content.append({"type": "text", "text": block.text})
            elif block.type == "tool_use":
                args = block.input if isinstance(block.input, dict) else {}
                calls.append(ToolCall(id=block.id, name=block.name, args=args))
                assistant_content.append(
                    {
                        "type": "tool_use",
                        "id": block.id,
                        "name": block.name,
                        "input": args,
                    }
                )

        return Step(text="\n".join(texts), tool_calls=calls), assistant_content

    async def _notify(self, on_step: StepCallback | None, step: Step) -> None:
        if on_step is None:
            return
        try:
            await on_step(step)
        except Exception as e:
            logger.warning("Step callback failed: %s", e, exc_info=True)
