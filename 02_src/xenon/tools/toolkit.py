"""Tool and Toolkit abstractions exposed to the decision capability."""

import json
from dataclasses import dataclass
from typing import Any, Awaitable, Callable, Iterable, Iterator

from pydantic import BaseModel, ValidationError

from ..logging_config import get_logger
from ..models import ToolCall, ToolResult

logger = get_logger(__name__)


ToolHandler = Callable[[Any], Awaitable[Any]]


@dataclass(frozen=True)
class Tool:
    """A named, schema-described operation.

    A tool without a handler is a *decision* tool: selecting it ends the
    capability's step loop and the caller interprets the call.
    """

    name: str
    description: str
    parameters: type[BaseModel]
    handler: ToolHandler | None = None

    @property
    def is_terminal(self) -> bool:
        return self.handler is None

    def schema(self) -> dict:
        """Return the Anthropic tool definition."""
        return {
            "name": self.name,
            "description": self.description,
            "input_schema": self.parameters.model_json_schema(),
        }


class Toolkit:
    """Mapping from tool name to Tool."""

    def __init__(self, tools: Iterable[Tool] = ()):
        self._tools: dict[str, Tool] = {}
        for tool in tools:
            self.add(tool)

    def add(self, tool: Tool) -> None:
        """Add a tool; a later tool with the same name replaces the earlier one."""
        self._tools[tool.name] = tool

    def get(self, name: str) -> Tool | None:
        return self._tools.get(name)

    def __contains__(self, name: object) -> bool:
        return name in self._tools

    def __iter__(self) -> Iterator[Tool]:
        return iter(self._tools.values())

    def __len__(self) -> int:
        return len(self._tools)

    @property
    def names(self) -> list[str]:
        return list(self._tools)

    def schemas(self) -> list[dict]:
        return [tool.schema() for tool in self._tools.values()]

    def is_terminal(self, call: ToolCall) -> bool:
        """Unknown tools are terminal too: there is nothing to execute."""
        tool = self._tools.get(call.name)
        return tool is None or tool.is_terminal

    async def execute(self, call: ToolCall) -> ToolResult:
        """Validate arguments and run the tool's handler."""
        tool = self._tools.get(call.name)
        if tool is None or tool.handler is None:
            return ToolResult(
                tool_call_id=call.id,
                name=call.name,
                output=f"Tool not executable: {call.name}",
                is_error=True,
            )

        try:
            args = tool.parameters.model_validate(call.args)
        except ValidationError as e:
            logger.warning("Invalid arguments for tool %s: %s", call.name, e)
            return ToolResult(
                tool_call_id=call.id,
                name=call.name,
                output=f"Invalid arguments: {e}",
                is_error=True,
            )

        try:
            output = await tool.handler(args)
        except Exception as e:
            logger.warning("Tool %s failed: %s", call.name, e, exc_info=True)
            return ToolResult(
                tool_call_id=call.id,
                name=call.name,
                output=f"Tool error: {e}",
                is_error=True,
            )

        return ToolResult(tool_call_id=call.id, name=call.name, output=output)


def render_output(output: Any) -> str:
    """Render a tool output as text for the model."""
    if isinstance(output, str):
        return output
    if isinstance(output, BaseModel):
        return output.model_dump_json()
    return json.dumps(output, default=str)
