"""Supervisor: turns delivery failures into a delayed cycle restart."""

import asyncio

from ..logging_config import get_logger
from ..models import AgentName, DeliveryFailure, Envelope, Route
from ..tracker import ITracker
from .base import Agent

logger = get_logger(__name__)


class Supervisor(Agent):
    """Receives failures reported by the bus."""

    def __init__(
        self,
        tracker: ITracker | None = None,
        restart: bool = True,
        backoff: float = 30.0,
    ):
        super().__init__(AgentName.SUPERVISOR)
        self._tracker = tracker
        self._restart = restart
        self._backoff = backoff
        self.failures = 0

    @property
    def routes(self):
        return {Route.BUS_TO_SUPERVISOR: self._handle_failure}

    async def _handle_failure(self, failure: DeliveryFailure) -> Envelope | None:
        self.failures += 1
        logger.error(
            "Delivery on %s failed with %s: %s",
            failure.route.value,
            failure.error_type,
            failure.error,
            extra={"route": failure.route},
        )

        await self._track(failure)

        if not self._restart:
            return None

        logger.info("Restarting the cycle in %s seconds", self._backoff)
        await asyncio.sleep(self._backoff)
        return self.envelope(AgentName.OBSERVER, None)

    async def _track(self, failure: DeliveryFailure) -> None:
        if self._tracker is None:
            return

        try:
            await self._tracker.track(
                event_type="delivery_failed",
                actor=self.name.value,
                data={
                    "route": failure.route.value,
                    "error_type": failure.error_type,
                    "error": failure.error,
                    "restart": self._restart,
                },
            )
        except Exception as e:
            logger.warning("Failed to track delivery failure: %s", e)
