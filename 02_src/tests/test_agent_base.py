"""Tests for the Agent contract."""

import asyncio

import pytest

from xenon.agents import Agent
from xenon.models import AgentName, Route, Step, ToolCall

from fakes import ScriptedDecision, text_decision


class EchoAgent(Agent):
    """Minimal agent answering on one route."""

    def __init__(self, memory=None, decision_timeout=None):
        super().__init__(AgentName.TASK_MANAGER, memory, decision_timeout)
        self.received = []

    @property
    def routes(self):
        return {Route.OBSERVER_TO_TASK_MANAGER: self._handle}

    async def _handle(self, message):
        self.received.append(message)
        return self.envelope(AgentName.OBSERVER, None)


class SlowDecision:
    async def invoke(self, **kwargs):
        await asyncio.sleep(60)


class TestAgentDispatch:
    """Tests for Agent.handle_event()."""

    @pytest.mark.asyncio
    async def test_known_route_dispatched(self):
        """Test dispatch to the route handler."""
        agent = EchoAgent()
        envelope = await agent.handle_event(Route.OBSERVER_TO_TASK_MANAGER, "msg")

        assert agent.received == ["msg"]
        assert envelope.route is Route.TASK_MANAGER_TO_OBSERVER

    @pytest.mark.asyncio
    async def test_unknown_route_ignored(self):
        """Test that unknown routes are ignored without error."""
        agent = EchoAgent()
        envelope = await agent.handle_event(Route.EXECUTOR_TO_TASK_MANAGER, "msg")

        assert envelope is None
        assert agent.received == []

    def test_handler_for_is_stable(self):
        """Test that the bound handler is the same object on every call."""
        agent = EchoAgent()
        first = agent.handler_for(Route.OBSERVER_TO_TASK_MANAGER)
        assert agent.handler_for(Route.OBSERVER_TO_TASK_MANAGER) is first
        assert agent.handler_for(Route.EXECUTOR_TO_TASK_MANAGER) is not first

    def test_name(self):
        """Test agent name."""
        assert EchoAgent().name is AgentName.TASK_MANAGER


class TestAgentDecide:
    """Tests for Agent._decide() and step recording."""

    @pytest.mark.asyncio
    async def test_timeout(self):
        """Test that a hung capability call is bounded by the timeout."""
        agent = EchoAgent(decision_timeout=0.01)

        with pytest.raises(asyncio.TimeoutError):
            await agent._decide(SlowDecision(), system="s", messages=[])

    @pytest.mark.asyncio
    async def test_steps_with_text_saved(self, mock_memory):
        """Test that steps with visible text go to the thought log."""
        agent = EchoAgent(memory=mock_memory)
        decision = ScriptedDecision(text_decision("thinking"))

        await agent._decide(decision, system="s", messages=[])

        mock_memory.save_thought.assert_awaited_once()
        kwargs = mock_memory.save_thought.await_args.kwargs
        assert kwargs["agent"] == "task-manager"
        assert kwargs["text"] == "thinking"

    @pytest.mark.asyncio
    async def test_steps_without_text_not_saved(self, mock_memory):
        """Test that silent steps are not logged."""
        agent = EchoAgent(memory=mock_memory)

        await agent._on_step(Step(text="", tool_calls=[ToolCall(id="1", name="t")]))

        mock_memory.save_thought.assert_not_awaited()
