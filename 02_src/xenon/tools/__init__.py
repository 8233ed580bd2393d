"""Tools module."""

from .builtin import (
    GET_ACCOUNT,
    NO_FURTHER_ACTIONS,
    SEND_MESSAGE_TO_EXECUTOR,
    SEND_MESSAGE_TO_OBSERVER,
    executor_toolkit,
    get_account_tool,
    no_further_actions_tool,
    observer_toolkit,
    send_message_to_executor_tool,
    send_message_to_observer_tool,
    task_manager_toolkit,
)
from .toolkit import Tool, ToolHandler, Toolkit, render_output

__all__ = [
    "Tool",
    "ToolHandler",
    "Toolkit",
    "render_output",
    "GET_ACCOUNT",
    "NO_FURTHER_ACTIONS",
    "SEND_MESSAGE_TO_EXECUTOR",
    "SEND_MESSAGE_TO_OBSERVER",
    "executor_toolkit",
    "get_account_tool",
    "no_further_actions_tool",
    "observer_toolkit",
    "send_message_to_executor_tool",
    "send_message_to_observer_tool",
    "task_manager_toolkit",
]
