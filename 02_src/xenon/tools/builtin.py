"""Built-in tools and per-agent toolkit factories."""

from typing import Iterable

from pydantic import BaseModel, Field

from ..models import Account
from .toolkit import Tool, Toolkit

NO_FURTHER_ACTIONS = "no_further_actions"
SEND_MESSAGE_TO_OBSERVER = "send_message_to_observer"
SEND_MESSAGE_TO_EXECUTOR = "send_message_to_executor"
GET_ACCOUNT = "get_account"


class NoFurtherActionsArgs(BaseModel):
    wait_time: float = Field(
        ge=0, description="Seconds to wait before the next observation."
    )


class SendMessageArgs(BaseModel):
    message: str


class NoArgs(BaseModel):
    pass


def no_further_actions_tool() -> Tool:
    return Tool(
        name=NO_FURTHER_ACTIONS,
        description=(
            "Use this tool when no further actions are needed right now. "
            "Provide how many seconds to wait before observing again."
        ),
        parameters=NoFurtherActionsArgs,
    )


def send_message_to_observer_tool() -> Tool:
    return Tool(
        name=SEND_MESSAGE_TO_OBSERVER,
        description="Use this tool when you want to send a message to the observer.",
        parameters=SendMessageArgs,
    )


def send_message_to_executor_tool() -> Tool:
    return Tool(
        name=SEND_MESSAGE_TO_EXECUTOR,
        description="Use this tool when you want to send a message to the executor.",
        parameters=SendMessageArgs,
    )


def get_account_tool(account: Account) -> Tool:
    async def handler(_: NoArgs) -> dict:
        return {
            "address": account.address,
            "chain_id": account.chain_id,
            "chain_name": account.chain_name,
        }

    return Tool(
        name=GET_ACCOUNT,
        description="Get the address and chain of the account being managed.",
        parameters=NoArgs,
        handler=handler,
    )


def observer_toolkit(address: str, tools: Iterable[Tool] = ()) -> Toolkit:
    """Read-oriented tools plus the idle signal."""
    toolkit = Toolkit([get_account_tool(Account(address=address))])
    for tool in tools:
        toolkit.add(tool)
    toolkit.add(no_further_actions_tool())
    return toolkit


def task_manager_toolkit() -> Toolkit:
    """Exactly the two routing tools."""
    return Toolkit([send_message_to_observer_tool(), send_message_to_executor_tool()])


def executor_toolkit(account: Account, tools: Iterable[Tool] = ()) -> Toolkit:
    """Action-oriented tools bound to the executor's account."""
    toolkit = Toolkit([get_account_tool(account)])
    for tool in tools:
        toolkit.add(tool)
    return toolkit
