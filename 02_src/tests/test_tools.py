"""Tests for Tool and Toolkit."""

import pytest
from pydantic import BaseModel

from xenon.models import Account, ToolCall
from xenon.tools import (
    GET_ACCOUNT,
    NO_FURTHER_ACTIONS,
    SEND_MESSAGE_TO_EXECUTOR,
    SEND_MESSAGE_TO_OBSERVER,
    Tool,
    Toolkit,
    executor_toolkit,
    observer_toolkit,
    render_output,
    task_manager_toolkit,
)


class AmountArgs(BaseModel):
    amount: int


async def double(args: AmountArgs) -> int:
    return args.amount * 2


async def broken(args: AmountArgs) -> int:
    raise RuntimeError("rpc down")


class TestTool:
    """Tests for Tool."""

    def test_schema(self):
        """Test Anthropic tool schema."""
        tool = Tool(name="double", description="Double it", parameters=AmountArgs, handler=double)
        schema = tool.schema()

        assert schema["name"] == "double"
        assert schema["description"] == "Double it"
        assert schema["input_schema"]["properties"]["amount"]["type"] == "integer"
        assert not tool.is_terminal

    def test_terminal(self):
        """Test that a tool without handler is terminal."""
        assert Tool(name="t", description="d", parameters=AmountArgs).is_terminal


class TestToolkitExecute:
    """Tests for Toolkit.execute()."""

    @pytest.mark.asyncio
    async def test_execute(self):
        """Test executing a tool with validated arguments."""
        toolkit = Toolkit([Tool("double", "d", AmountArgs, double)])

        result = await toolkit.execute(ToolCall(id="1", name="double", args={"amount": 2}))

        assert result.output == 4
        assert not result.is_error
        assert result.tool_call_id == "1"

    @pytest.mark.asyncio
    async def test_invalid_arguments(self):
        """Test that invalid arguments become an error result."""
        toolkit = Toolkit([Tool("double", "d", AmountArgs, double)])

        result = await toolkit.execute(ToolCall(id="1", name="double", args={"amount": "x"}))

        assert result.is_error
        assert "Invalid arguments" in result.output

    @pytest.mark.asyncio
    async def test_handler_error(self):
        """Test that handler failures become an error result."""
        toolkit = Toolkit([Tool("broken", "d", AmountArgs, broken)])

        result = await toolkit.execute(ToolCall(id="1", name="broken", args={"amount": 1}))

        assert result.is_error
        assert "rpc down" in result.output

    @pytest.mark.asyncio
    async def test_unknown_tool(self):
        """Test that unknown tools are terminal and not executable."""
        toolkit = Toolkit()
        call = ToolCall(id="1", name="missing")

        assert toolkit.is_terminal(call)
        assert (await toolkit.execute(call)).is_error


class TestToolkits:
    """Tests for the per-agent toolkits."""

    def test_observer_toolkit(self):
        """Test observer tools always include the idle signal."""
        extra = Tool("double", "d", AmountArgs, double)
        toolkit = observer_toolkit("0x1", [extra])

        assert set(toolkit.names) == {GET_ACCOUNT, "double", NO_FURTHER_ACTIONS}

    def test_task_manager_toolkit(self):
        """Test task manager has exactly the two routing tools."""
        toolkit = task_manager_toolkit()

        assert set(toolkit.names) == {SEND_MESSAGE_TO_OBSERVER, SEND_MESSAGE_TO_EXECUTOR}
        assert all(tool.is_terminal for tool in toolkit)

    @pytest.mark.asyncio
    async def test_executor_toolkit_account(self):
        """Test that the account tool reports the executor's account."""
        account = Account(address="0x1", chain_id=1, chain_name="mainnet")
        toolkit = executor_toolkit(account)

        result = await toolkit.execute(ToolCall(id="1", name=GET_ACCOUNT))

        assert result.output == {"address": "0x1", "chain_id": 1, "chain_name": "mainnet"}


class TestRenderOutput:
    """Tests for render_output()."""

    def test_render(self):
        """Test rendering outputs as text."""
        assert render_output("plain") == "plain"
        assert render_output({"a": 1}) == '{"a": 1}'
        assert render_output(AmountArgs(amount=1)) == '{"amount":1}'
