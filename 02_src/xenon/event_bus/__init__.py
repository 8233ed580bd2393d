"""EventBus module."""

from .event_bus import IMessageBus, MessageBus, RouteHandler

__all__ = ["IMessageBus", "MessageBus", "RouteHandler"]
