"""Pytest configuration and fixtures."""

import sys
from pathlib import Path
from unittest.mock import AsyncMock, Mock

import pytest
import pytest_asyncio

# Add parent directory to path
sys.path.insert(0, str(Path(__file__).parent.parent))


@pytest_asyncio.fixture
async def storage():
    """Create in-memory storage for testing."""
    from xenon.storage import Storage

    st = Storage(":memory:")
    await st.init()
    yield st
    await st.close()


@pytest.fixture
def tracker(storage):
    """Create Tracker with storage."""
    from xenon.tracker import Tracker

    return Tracker(storage=storage)


@pytest.fixture
def memory(storage):
    """Create Memory backed by storage."""
    from xenon.memory import Memory

    return Memory(storage)


@pytest.fixture
def mock_memory():
    """Create mock memory."""
    mem = Mock()
    mem.save_thought = AsyncMock()
    mem.store_report = AsyncMock()
    return mem


@pytest.fixture
def mock_tracker():
    """Create mock tracker."""
    tr = Mock()
    tr.track = AsyncMock()
    return tr


@pytest_asyncio.fixture
async def bus():
    """Create MessageBus, closed after the test."""
    from xenon.event_bus import MessageBus

    mb = MessageBus()
    yield mb
    await mb.close()


@pytest.fixture
def account():
    """Create test account."""
    from xenon.models import Account

    return Account(address="0xabc0000000000000000000000000000000000001")


@pytest.fixture
def settings():
    """Create settings for an in-memory, fast-backoff application."""
    from xenon.config import Settings

    return Settings(
        anthropic_api_key="test_key",
        decision_timeout=5.0,
        default_wait_time=0.01,
        failure_backoff=0.01,
        account_address="0xabc0000000000000000000000000000000000001",
        db_path=":memory:",
    )
