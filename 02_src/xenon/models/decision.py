"""Decision capability data models."""

from dataclasses import dataclass, field
from typing import Any


@dataclass
class ToolCall:
    """A tool selected by the decision capability."""

    id: str
    name: str
    args: dict[str, Any] = field(default_factory=dict)


@dataclass
class ToolResult:
    """Output of one executed tool call."""

    tool_call_id: str
    name: str
    output: Any
    is_error: bool = False


@dataclass
class Step:
    """One reasoning step: visible text plus tool activity."""

    text: str = ""
    tool_calls: list[ToolCall] = field(default_factory=list)
    tool_results: list[ToolResult] = field(default_factory=list)


@dataclass
class Decision:
    """Final outcome of a capability invocation."""

    text: str = ""
    tool_calls: list[ToolCall] = field(default_factory=list)  # from the last step
    steps: list[Step] = field(default_factory=list)

    def find_tool_call(self, name: str) -> ToolCall | None:
        """Return the first call to the named tool, if any."""
        for call in self.tool_calls:
            if call.name == name:
                return call
        return None
