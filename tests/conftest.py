"""
Pytest Configuration and Fixtures

This module provides shared fixtures and configuration for all tests.
"""

import asyncio
import pytest
from typing import List

from txkv.cache.store import KVStore
from txkv.engine.executor import CommandExecutor
from txkv.engine.transaction import TransactionCoordinator
from txkv.protocol.parser import ProtocolParser
from txkv.session.stream_session import Session


# ============================================================================
# KVStore Fixtures
# ============================================================================

@pytest.fixture
def store() -> KVStore:
    """Create a fresh 64-bit KVStore instance."""
    return KVStore(bits=64)


@pytest.fixture
def small_store() -> KVStore:
    """Create an 8-bit KVStore for wraparound testing."""
    return KVStore(bits=8)


# ============================================================================
# Protocol Fixtures
# ============================================================================

@pytest.fixture
def parser() -> ProtocolParser:
    """Create a 64-bit ProtocolParser instance."""
    return ProtocolParser(bits=64)


# ============================================================================
# Engine Fixtures
# ============================================================================

@pytest.fixture
def executor(store: KVStore) -> CommandExecutor:
    """Create an executor bound to the store fixture."""
    return CommandExecutor(store)


@pytest.fixture
def coordinator(executor: CommandExecutor) -> TransactionCoordinator:
    """Create a coordinator in the IDLE state."""
    return TransactionCoordinator(executor)


# ============================================================================
# Session Fixtures
# ============================================================================

@pytest.fixture
def session(store: KVStore, parser: ProtocolParser) -> Session:
    """Create a non-verbose session over the store fixture."""
    return Session(store=store, parser=parser, verbose=False)


class RecordingWriter:
    """
    Stand-in for asyncio.StreamWriter that records everything written.

    Usage:
        writer = RecordingWriter()
        await session.handle_stream(reader, writer)
        assert writer.lines() == ["5"]
    """

    def __init__(self):
        self.buffer = bytearray()
        self.closed = False

    def write(self, data: bytes) -> None:
        self.buffer.extend(data)

    async def drain(self) -> None:
        await asyncio.sleep(0)

    def close(self) -> None:
        self.closed = True

    async def wait_closed(self) -> None:
        pass

    def lines(self) -> List[str]:
        return self.buffer.decode().splitlines()


@pytest.fixture
def writer() -> RecordingWriter:
    """Create a fresh RecordingWriter."""
    return RecordingWriter()


@pytest.fixture
def writer_factory():
    """Factory fixture for tests that need several writers."""
    return RecordingWriter


@pytest.fixture
def reader_factory():
    """
    Factory fixture to create pre-filled stream readers.

    Must be called from inside a running event loop.

    Usage:
        async def test_something(session, reader_factory, writer):
            reader = reader_factory("SET a 1", "GET a")
            await session.handle_stream(reader, writer)
    """
    def factory(*lines) -> asyncio.StreamReader:
        reader = asyncio.StreamReader()
        for line in lines:
            data = line if isinstance(line, bytes) else f"{line}\n".encode()
            reader.feed_data(data)
        reader.feed_eof()
        return reader
    return factory


# ============================================================================
# Pytest Configuration
# ============================================================================

def pytest_configure(config):
    """Configure custom pytest markers."""
    config.addinivalue_line(
        "markers", "integration: marks tests as integration tests"
    )


# Configure asyncio mode for pytest-asyncio
pytest_plugins = ['pytest_asyncio']
