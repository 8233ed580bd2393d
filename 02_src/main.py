"""Main entry point for the Xenon orchestration core."""

import asyncio
import signal
from pathlib import Path

from dotenv import load_dotenv

from xenon.app import Application
from xenon.config import Settings
from xenon.logging_config import get_logger, setup_logging

logger = get_logger(__name__)


async def run() -> None:
    """Run the decision cycle until SIGINT/SIGTERM."""
    app = Application(settings=Settings.from_env())

    stop = asyncio.Event()
    loop = asyncio.get_running_loop()
    for sig in (signal.SIGINT, signal.SIGTERM):
        loop.add_signal_handler(sig, stop.set)

    await app.start()
    try:
        await stop.wait()
    finally:
        logger.info("Shutting down")
        await app.stop()


def main():
    """Run the application."""
    project_root = Path(__file__).resolve().parent.parent
    load_dotenv(project_root / ".env")
    setup_logging()

    asyncio.run(run())


if __name__ == "__main__":
    main()
