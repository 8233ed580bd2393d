"""Exceptions raised by the orchestration core."""


class OrchestrationError(Exception):
    """Base class for orchestration errors."""


class RouteAlreadyRegisteredError(OrchestrationError):
    """A handler is already bound to the route."""

    def __init__(self, route):
        self.route = route
        super().__init__(
            f"Route {route.value!r} already has a handler; pass replace=True to swap it"
        )


class DecisionError(OrchestrationError):
    """The decision capability failed to produce a decision."""
