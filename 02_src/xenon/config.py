"""Project-level configuration and path helpers."""

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Union

PROJECT_ROOT = Path(__file__).resolve().parent.parent.parent
DATA_DIR = PROJECT_ROOT / "03_data"
LOGS_DIR = PROJECT_ROOT / "04_logs"
DEFAULT_DB_PATH = DATA_DIR / "xenon.db"
DEFAULT_LOG_PATH = LOGS_DIR / "xenon.log"

DATA_DIR.mkdir(parents=True, exist_ok=True)
LOGS_DIR.mkdir(parents=True, exist_ok=True)

DEFAULT_MODEL = "claude-3-5-sonnet-20241022"
DEFAULT_REPORT_MODEL = "claude-3-5-haiku-20241022"


PathLike = Union[str, Path]


def resolve_db_path(env_value: PathLike | None = None) -> PathLike:
    """Resolve DATABASE_URL to an absolute path."""
    if not env_value:
        return DEFAULT_DB_PATH

    if str(env_value) == ":memory:":
        return ":memory:"

    candidate = Path(env_value)
    return candidate if candidate.is_absolute() else PROJECT_ROOT / candidate


def _env_bool(name: str, default: bool) -> bool:
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in ("1", "true", "yes", "on")


@dataclass
class Settings:
    """Runtime settings for the orchestration core."""

    anthropic_api_key: str | None = None
    model_name: str = DEFAULT_MODEL
    report_model_name: str = DEFAULT_REPORT_MODEL

    observer_max_steps: int = 100
    task_manager_max_steps: int = 10
    executor_max_steps: int = 10

    decision_timeout: float | None = 300.0  # seconds, None disables
    default_wait_time: float = 60.0  # seconds
    failure_backoff: float = 30.0  # seconds
    restart_on_failure: bool = True

    account_address: str | None = None
    chain_id: int = 8453
    chain_name: str = "base"

    db_path: PathLike = DEFAULT_DB_PATH

    @classmethod
    def from_env(cls) -> "Settings":
        """Build settings from environment variables."""
        timeout = float(os.getenv("DECISION_TIMEOUT", "300"))

        return cls(
            anthropic_api_key=os.getenv("ANTHROPIC_API_KEY"),
            model_name=os.getenv("MODEL_NAME", DEFAULT_MODEL),
            report_model_name=os.getenv("REPORT_MODEL_NAME", DEFAULT_REPORT_MODEL),
            observer_max_steps=int(os.getenv("OBSERVER_MAX_STEPS", "100")),
            task_manager_max_steps=int(os.getenv("TASK_MANAGER_MAX_STEPS", "10")),
            executor_max_steps=int(os.getenv("EXECUTOR_MAX_STEPS", "10")),
            decision_timeout=timeout if timeout > 0 else None,
            default_wait_time=float(os.getenv("DEFAULT_WAIT_TIME", "60")),
            failure_backoff=float(os.getenv("FAILURE_BACKOFF", "30")),
            restart_on_failure=_env_bool("RESTART_ON_FAILURE", True),
            account_address=os.getenv("ACCOUNT_ADDRESS"),
            chain_id=int(os.getenv("CHAIN_ID", "8453")),
            chain_name=os.getenv("CHAIN_NAME", "base"),
            db_path=resolve_db_path(os.getenv("DATABASE_URL")),
        )
