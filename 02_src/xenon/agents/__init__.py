"""Agents module."""

from .base import Agent, RouteHandler
from .executor import Executor
from .observer import Observer
from .supervisor import Supervisor
from .task_manager import TaskManager

__all__ = [
    "Agent",
    "RouteHandler",
    "Executor",
    "Observer",
    "Supervisor",
    "TaskManager",
]
