"""MessageBus implementation: one handler per route, deliveries as owned tasks."""

import asyncio
from typing import Awaitable, Callable, Protocol

from ..errors import RouteAlreadyRegisteredError
from ..logging_config import get_logger
from ..models import BusMessage, DeliveryFailure, Envelope, Route
from ..tracker import ITracker

logger = get_logger(__name__)


RouteHandler = Callable[[BusMessage], Awaitable[Envelope | None]]


class IMessageBus(Protocol):
    """In-process router from route to a single handler."""

    def register(
        self, route: Route, handler: RouteHandler, *, replace: bool = False
    ) -> None:
        """Bind a handler to a route."""
        ...

    async def emit(self, route: Route, message: BusMessage = None) -> asyncio.Task | None:
        """Deliver a message to the route's handler, if any."""
        ...

    async def close(self) -> None:
        """Stop accepting messages and cancel in-flight deliveries."""
        ...


class MessageBus:
    """Route table plus the set of deliveries currently in flight.

    Each delivery runs in its own task, started in emission order. When the
    handler returns an ``Envelope`` the bus emits it; when it raises, the
    failure is reported on ``Route.BUS_TO_SUPERVISOR``.
    """

    def __init__(self, tracker: ITracker | None = None):
        self._tracker = tracker
        self._handlers: dict[Route, RouteHandler] = {}
        self._tasks: set[asyncio.Task] = set()
        self._closed = False

    @property
    def routes(self) -> list[Route]:
        return list(self._handlers)

    @property
    def closed(self) -> bool:
        return self._closed

    @property
    def in_flight(self) -> int:
        return len(self._tasks)

    def register(
        self, route: Route, handler: RouteHandler, *, replace: bool = False
    ) -> None:
        """Bind a handler to a route.

        Raises RouteAlreadyRegisteredError if the route is bound, unless
        ``replace`` is set (last registration wins).
        """
        if route in self._handlers and not replace:
            raise RouteAlreadyRegisteredError(route)
        self._handlers[route] = handler
        logger.debug("Registered handler for %s", route.value, extra={"route": route})

    def unregister(self, route: Route) -> None:
        """Remove the handler bound to a route, if any."""
        self._handlers.pop(route, None)

    def is_registered(self, route: Route) -> bool:
        return route in self._handlers

    async def emit(self, route: Route, message: BusMessage = None) -> asyncio.Task | None:
        """Schedule delivery of ``message`` to the handler bound to ``route``.

        Messages on unbound routes, or emitted after close(), are dropped.
        Returns the delivery task, or None when dropped.
        """
        if self._closed:
            logger.debug("Bus closed, dropping message on %s", route.value)
            return None

        handler = self._handlers.get(route)
        await self._track(route, message, delivered=handler is not None)

        if handler is None:
            logger.debug("No handler for %s, message dropped", route.value)
            return None

        task = asyncio.create_task(
            self._deliver(route, handler, message), name=f"deliver:{route.value}"
        )
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)
        return task

    async def drain(self) -> None:
        """Wait until no delivery is in flight, including follow-ups."""
        while self._tasks:
            await asyncio.gather(*list(self._tasks), return_exceptions=True)

    async def close(self) -> None:
        """Stop accepting messages and cancel in-flight deliveries."""
        self._closed = True
        tasks = list(self._tasks)
        for task in tasks:
            task.cancel()
        if tasks:
            await asyncio.gather(*tasks, return_exceptions=True)
        logger.info("MessageBus closed, %s deliveries cancelled", len(tasks))

    async def _deliver(
        self, route: Route, handler: RouteHandler, message: BusMessage
    ) -> None:
        try:
            reply = await handler(message)
        except Exception as e:
            logger.error(
                "Error in handler for %s: %s",
                route.value,
                e,
                exc_info=True,
                extra={"route": route},
            )
            if route is not Route.BUS_TO_SUPERVISOR:
                await self.emit(
                    Route.BUS_TO_SUPERVISOR,
                    DeliveryFailure(
                        route=route,
                        error_type=type(e).__name__,
                        error=str(e),
                    ),
                )
            return

        if reply is not None:
            await self.emit(reply.route, reply.message)

    async def _track(self, route: Route, message: BusMessage, delivered: bool) -> None:
        if self._tracker is None:
            return

        payload = message.model_dump(mode="json") if message is not None else None
        try:
            await self._tracker.track(
                event_type="message_emitted",
                actor=route.source.value,
                data={
                    "route": route.value,
                    "destination": route.destination.value,
                    "delivered": delivered,
                    "payload_summary": str(payload)[:100],
                },
            )
        except Exception as e:
            logger.warning("Failed to track message on %s: %s", route.value, e)
