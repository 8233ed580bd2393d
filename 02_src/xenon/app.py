"""Application bootstrap and lifecycle management."""

from typing import Iterable, Protocol

from .agents import Executor, Observer, Supervisor, TaskManager
from .config import Settings
from .event_bus import MessageBus
from .llm import AnthropicDecisionCapability, IDecisionCapability
from .logging_config import get_logger
from .memory import Memory
from .models import Account, Route
from .storage import IStorage, Storage
from .tools import Tool
from .tracker import ITracker, Tracker
from .wiring import wire_agents

logger = get_logger(__name__)


class IApplication(Protocol):
    """Bootstrap and lifecycle."""

    async def start(self, begin_cycle: bool = True) -> None:
        """Initialize components in dependency order."""
        ...

    async def stop(self) -> None:
        """Shutdown in reverse order."""
        ...

    async def reset(self) -> None:
        """Clear stored data and begin a fresh cycle."""
        ...


class Application:
    """Main application bootstrap."""

    def __init__(
        self,
        settings: Settings | None = None,
        decision: IDecisionCapability | None = None,
        report_decision: IDecisionCapability | None = None,
        account: Account | None = None,
        observer_tools: Iterable[Tool] = (),
        executor_tools: Iterable[Tool] = (),
    ):
        self._settings = settings or Settings.from_env()
        self._decision = decision
        self._report_decision = report_decision
        self._account = account
        self._observer_tools = list(observer_tools)
        self._executor_tools = list(executor_tools)

        # Components (will be initialized in start())
        self._storage: IStorage | None = None
        self._tracker: ITracker | None = None
        self._bus: MessageBus | None = None
        self._observer: Observer | None = None
        self._task_manager: TaskManager | None = None
        self._executor: Executor | None = None
        self._supervisor: Supervisor | None = None

    async def start(self, begin_cycle: bool = True) -> None:
        """Initialize components in dependency order."""
        if self._storage is not None:
            raise RuntimeError("Application already started")

        logger.info("Starting application")
        settings = self._settings

        # 0. Account (execution context for the executor)
        if self._account is None:
            if not settings.account_address:
                raise ValueError("ACCOUNT_ADDRESS environment variable not set")
            self._account = Account(
                address=settings.account_address,
                chain_id=settings.chain_id,
                chain_name=settings.chain_name,
            )

        # 1. Decision capabilities (no internal dependencies)
        if self._decision is None:
            self._decision = AnthropicDecisionCapability(
                api_key=settings.anthropic_api_key, model=settings.model_name
            )
        if self._report_decision is None:
            if settings.report_model_name == settings.model_name or not isinstance(
                self._decision, AnthropicDecisionCapability
            ):
                self._report_decision = self._decision
            else:
                self._report_decision = AnthropicDecisionCapability(
                    api_key=settings.anthropic_api_key,
                    model=settings.report_model_name,
                )
        logger.info("Decision capabilities initialized")

        # 2. Storage (no dependencies)
        self._storage = Storage(settings.db_path)
        await self._storage.init()
        logger.info("Storage initialized")

        # 3. Tracker (depends on Storage)
        self._tracker = Tracker(self._storage)

        # 4. Agents (depend on decision capabilities + Memory)
        memory = Memory(self._storage)
        self._observer = Observer(
            decision=self._decision,
            memory=memory,
            tools=self._observer_tools,
            address=self._account.address,
            max_steps=settings.observer_max_steps,
            default_wait_time=settings.default_wait_time,
            decision_timeout=settings.decision_timeout,
        )
        self._task_manager = TaskManager(
            decision=self._decision,
            memory=memory,
            report_decision=self._report_decision,
            max_steps=settings.task_manager_max_steps,
            decision_timeout=settings.decision_timeout,
        )
        self._executor = Executor(
            decision=self._decision,
            account=self._account,
            memory=memory,
            tools=self._executor_tools,
            max_steps=settings.executor_max_steps,
            decision_timeout=settings.decision_timeout,
        )
        self._supervisor = Supervisor(
            tracker=self._tracker,
            restart=settings.restart_on_failure,
            backoff=settings.failure_backoff,
        )
        logger.info("Agents initialized")

        # 5. MessageBus (depends on Tracker) + wiring
        self._wire()

        if begin_cycle:
            await self.begin_cycle()
        logger.info("All components initialized successfully")

    def _wire(self) -> None:
        self._bus = MessageBus(tracker=self._tracker)
        wire_agents(
            self._bus,
            self._observer,
            self._task_manager,
            self._executor,
            self._supervisor,
        )

    async def begin_cycle(self) -> None:
        """Start a fresh observation; it runs inside the bus error boundary."""
        await self.bus.emit(Route.SUPERVISOR_TO_OBSERVER, None)

    async def stop(self) -> None:
        """Shutdown in reverse order."""
        if self._bus:
            await self._bus.close()
            self._bus = None
        if self._storage:
            await self._storage.close()
            self._storage = None
            logger.info("Storage closed")

    async def reset(self) -> None:
        """Stop the running cycle, clear stored data and begin again."""
        if not self._storage:
            raise RuntimeError("Application not started")

        # 1. Cancel in-flight deliveries
        if self._bus:
            await self._bus.close()

        # 2. Clear storage
        if self._storage:
            await self._storage.clear()
            logger.info("Storage cleared")

        # 3. Fresh bus and a new cycle
        self._wire()
        await self.begin_cycle()
        logger.info("Reset complete")

    @property
    def storage(self) -> IStorage:
        """Get storage instance."""
        if not self._storage:
            raise RuntimeError("Application not started")
        return self._storage

    @property
    def bus(self) -> MessageBus:
        """Get message bus instance."""
        if not self._bus:
            raise RuntimeError("Application not started")
        return self._bus

    @property
    def observer(self) -> Observer:
        """Get observer agent."""
        if not self._observer:
            raise RuntimeError("Application not started")
        return self._observer

    @property
    def task_manager(self) -> TaskManager:
        """Get task manager agent."""
        if not self._task_manager:
            raise RuntimeError("Application not started")
        return self._task_manager

    @property
    def executor(self) -> Executor:
        """Get executor agent."""
        if not self._executor:
            raise RuntimeError("Application not started")
        return self._executor

    @property
    def supervisor(self) -> Supervisor:
        """Get supervisor agent."""
        if not self._supervisor:
            raise RuntimeError("Application not started")
        return self._supervisor
