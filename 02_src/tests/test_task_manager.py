"""Tests for TaskManager."""

import asyncio

import pytest

from xenon.agents import TaskManager
from xenon.agents.prompts import DEFAULT_OBSERVER_GUIDANCE
from xenon.models import (
    DispatchInstruction,
    ExecutionResult,
    IdleSignal,
    ObservationReport,
    ObserverFeedback,
    Route,
)
from xenon.tools import SEND_MESSAGE_TO_EXECUTOR, SEND_MESSAGE_TO_OBSERVER

from fakes import ScriptedDecision, text_decision, tool_decision


class TestTaskManagerIdle:
    """Tests for the idle/backoff transition."""

    @pytest.mark.asyncio
    async def test_waits_then_restarts_observer(self):
        """Test that the idle signal is honoured without a capability call."""
        decision = ScriptedDecision()
        task_manager = TaskManager(decision=decision)
        loop = asyncio.get_running_loop()

        started = loop.time()
        envelope = await task_manager.handle_event(
            Route.OBSERVER_TO_TASK_MANAGER, IdleSignal(wait_time=0.1)
        )
        elapsed = loop.time() - started

        assert elapsed >= 0.09
        assert envelope.route is Route.TASK_MANAGER_TO_OBSERVER
        assert envelope.message is None
        assert decision.calls == []

    @pytest.mark.asyncio
    async def test_idle_wait_is_cancellable(self):
        """Test that the idle wait can be interrupted."""
        task_manager = TaskManager(decision=ScriptedDecision())

        task = asyncio.create_task(
            task_manager.handle_event(
                Route.OBSERVER_TO_TASK_MANAGER, IdleSignal(wait_time=60)
            )
        )
        await asyncio.sleep(0.01)
        task.cancel()

        with pytest.raises(asyncio.CancelledError):
            await task


class TestTaskManagerDispatch:
    """Tests for routing an observer report."""

    @pytest.mark.asyncio
    async def test_dispatch_to_executor(self):
        """Test that the executor tool produces a dispatch instruction."""
        decision = ScriptedDecision(
            tool_decision(SEND_MESSAGE_TO_EXECUTOR, message="sell 10 units")
        )
        task_manager = TaskManager(decision=decision)

        envelope = await task_manager.handle_event(
            Route.OBSERVER_TO_TASK_MANAGER, ObservationReport(report="price is high")
        )

        assert envelope.route is Route.TASK_MANAGER_TO_EXECUTOR
        assert envelope.message == DispatchInstruction(
            instruction="sell 10 units", report="price is high"
        )

    @pytest.mark.asyncio
    async def test_decision_request(self):
        """Test that exactly the two routing tools are offered."""
        decision = ScriptedDecision(tool_decision(SEND_MESSAGE_TO_OBSERVER, message="m"))
        task_manager = TaskManager(decision=decision, max_steps=10)

        await task_manager.handle_event(
            Route.OBSERVER_TO_TASK_MANAGER, ObservationReport(report="price is high")
        )

        call = decision.calls[0]
        assert sorted(call["tools"].names) == sorted(
            [SEND_MESSAGE_TO_OBSERVER, SEND_MESSAGE_TO_EXECUTOR]
        )
        assert call["max_steps"] == 10
        assert "price is high" in call["messages"][0]["content"]

    @pytest.mark.asyncio
    async def test_guidance_to_observer(self):
        """Test that the observer tool sends its guidance back."""
        decision = ScriptedDecision(
            tool_decision(SEND_MESSAGE_TO_OBSERVER, message="check ETH liquidity")
        )
        task_manager = TaskManager(decision=decision)

        envelope = await task_manager.handle_event(
            Route.OBSERVER_TO_TASK_MANAGER, ObservationReport(report="r")
        )

        assert envelope.route is Route.TASK_MANAGER_TO_OBSERVER
        assert envelope.message == ObserverFeedback(result="check ETH liquidity", report="r")

    @pytest.mark.asyncio
    async def test_no_tool_defaults_to_observer(self):
        """Test default-on-ambiguity with zero tool calls."""
        task_manager = TaskManager(decision=ScriptedDecision(text_decision("hmm")))

        envelope = await task_manager.handle_event(
            Route.OBSERVER_TO_TASK_MANAGER, ObservationReport(report="r")
        )

        assert envelope.route is Route.TASK_MANAGER_TO_OBSERVER
        assert envelope.message.result == DEFAULT_OBSERVER_GUIDANCE
        assert envelope.message.result

    @pytest.mark.asyncio
    async def test_unknown_tool_defaults_to_observer(self):
        """Test default-on-ambiguity with an unrecognized tool."""
        task_manager = TaskManager(
            decision=ScriptedDecision(tool_decision("launch_rocket", message="now"))
        )

        envelope = await task_manager.handle_event(
            Route.OBSERVER_TO_TASK_MANAGER, ObservationReport(report="r")
        )

        assert envelope.route is Route.TASK_MANAGER_TO_OBSERVER
        assert envelope.message.result == DEFAULT_OBSERVER_GUIDANCE

    @pytest.mark.asyncio
    async def test_malformed_executor_call_defaults_to_observer(self):
        """Test that an executor call without a message is not dispatched."""
        task_manager = TaskManager(
            decision=ScriptedDecision(tool_decision(SEND_MESSAGE_TO_EXECUTOR))
        )

        envelope = await task_manager.handle_event(
            Route.OBSERVER_TO_TASK_MANAGER, ObservationReport(report="r")
        )

        assert envelope.route is Route.TASK_MANAGER_TO_OBSERVER
        assert envelope.message == ObserverFeedback(
            result=DEFAULT_OBSERVER_GUIDANCE, report="r"
        )


class TestTaskManagerExecutionResult:
    """Tests for synthesizing the final report."""

    @pytest.mark.asyncio
    async def test_synthesizes_and_forwards(self, mock_memory):
        """Test the final report path."""
        decision = ScriptedDecision()
        report_decision = ScriptedDecision(text_decision("cycle complete"))
        task_manager = TaskManager(
            decision=decision, memory=mock_memory, report_decision=report_decision
        )

        envelope = await task_manager.handle_event(
            Route.EXECUTOR_TO_TASK_MANAGER,
            ExecutionResult(result="sold", report="price is high"),
        )

        assert envelope.route is Route.TASK_MANAGER_TO_OBSERVER
        assert envelope.message == ObserverFeedback(
            result="cycle complete", report="price is high"
        )
        assert decision.calls == []
        assert report_decision.calls[0]["tools"] is None
        prompt = report_decision.calls[0]["messages"][0]["content"]
        assert "sold" in prompt and "price is high" in prompt
        mock_memory.store_report.assert_awaited_once_with("cycle complete")

    @pytest.mark.asyncio
    async def test_report_decision_defaults_to_decision(self):
        """Test that one capability can serve both calls."""
        decision = ScriptedDecision(text_decision("done"))
        task_manager = TaskManager(decision=decision)

        await task_manager.handle_event(
            Route.EXECUTOR_TO_TASK_MANAGER, ExecutionResult(result="sold", report="r")
        )

        assert len(decision.calls) == 1
