"""JSON logging for the decision cycle."""

import json
import logging
import logging.config
import os
from datetime import datetime, timezone
from pathlib import Path

from .config import DEFAULT_LOG_PATH
from .models import AgentName, Route

_QUIET_LOGGERS = ("anthropic", "httpx", "httpcore", "aiosqlite")


def _cycle_fields(record: logging.LogRecord) -> dict:
    """Collect the ``agent`` and ``route`` extras attached by the bus and agents."""
    fields = {}

    agent = getattr(record, "agent", None)
    if agent is not None:
        fields["agent"] = agent.value if isinstance(agent, AgentName) else str(agent)

    route = getattr(record, "route", None)
    if isinstance(route, Route):
        fields["route"] = route.value
        fields["source"] = route.source.value
        fields["destination"] = route.destination.value
    elif route is not None:
        fields["route"] = str(route)

    return fields


class JSONFormatter(logging.Formatter):
    """One JSON object per record; cycle fields are grouped under ``cycle``."""

    def format(self, record: logging.LogRecord) -> str:
        entry = {
            "timestamp": datetime.fromtimestamp(record.created, timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "location": f"{record.module}.{record.funcName}:{record.lineno}",
        }

        cycle = _cycle_fields(record)
        if cycle:
            entry["cycle"] = cycle

        if record.exc_info:
            entry["exception"] = self.formatException(record.exc_info)

        return json.dumps(entry, default=str)


def setup_logging(
    log_level: str | None = None,
    log_file: str | None = None,
    console: bool = True,
) -> None:
    """
    Configure the root logger.

    Args:
        log_level: Defaults to the LOG_LEVEL env var, then INFO.
        log_file: Rotating log file. Defaults to 04_logs/xenon.log.
        console: Also write records to stdout.
    """
    level = (log_level or os.getenv("LOG_LEVEL", "INFO")).upper()
    log_file = log_file or str(DEFAULT_LOG_PATH)
    Path(log_file).parent.mkdir(parents=True, exist_ok=True)

    handlers = {
        "file": {
            "class": "logging.handlers.RotatingFileHandler",
            "filename": log_file,
            "maxBytes": 10 * 1024 * 1024,
            "backupCount": 5,
            "formatter": "json",
            "encoding": "utf-8",
        },
    }
    if console:
        handlers["console"] = {
            "class": "logging.StreamHandler",
            "formatter": "json",
            "stream": "ext://sys.stdout",
        }

    logging.config.dictConfig(
        {
            "version": 1,
            "disable_existing_loggers": False,
            "formatters": {"json": {"()": JSONFormatter}},
            "handlers": handlers,
            "loggers": {name: {"level": "WARNING"} for name in _QUIET_LOGGERS},
            "root": {"level": level, "handlers": list(handlers)},
        }
    )


def get_logger(name: str) -> logging.Logger:
    """Module logger; pass ``extra={"agent": ..., "route": ...}`` for cycle fields."""
    return logging.getLogger(name)
