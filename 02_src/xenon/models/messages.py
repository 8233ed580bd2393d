"""Messages carried on the bus.

Each route carries exactly one message type:

    observer-task-manager   ObservationReport | IdleSignal
    task-manager-executor   DispatchInstruction
    executor-task-manager   ExecutionResult
    task-manager-observer   ObserverFeedback | None
    bus-supervisor          DeliveryFailure
    supervisor-observer     None

``None`` on a route towards the observer means "start a fresh observation".
"""

from dataclasses import dataclass
from typing import Literal, Union

from pydantic import BaseModel, ConfigDict, Field

from .agents import Route


class _Message(BaseModel):
    model_config = ConfigDict(frozen=True, extra="forbid")


class ObservationReport(_Message):
    """Situation report produced by the observer."""

    report: str


class IdleSignal(_Message):
    """Nothing to do: the task manager should wait before re-observing."""

    no_further_actions: Literal[True] = True
    wait_time: float = Field(ge=0, description="Seconds to wait")


class DispatchInstruction(_Message):
    """Work order from the task manager to the executor."""

    instruction: str
    report: str


class ExecutionResult(_Message):
    """Outcome of an executed instruction."""

    result: str
    report: str | None = None


class ObserverFeedback(_Message):
    """Guidance or execution summary sent back to the observer."""

    result: str
    report: str | None = None


class DeliveryFailure(_Message):
    """A handler raised while processing a message on ``route``."""

    route: Route
    error_type: str
    error: str


BusMessage = Union[
    ObservationReport,
    IdleSignal,
    DispatchInstruction,
    ExecutionResult,
    ObserverFeedback,
    DeliveryFailure,
    None,
]


@dataclass(frozen=True)
class Envelope:
    """A message addressed to a route, returned by handlers for emission."""

    route: Route
    message: BusMessage = None
