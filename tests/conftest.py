"""
Shared fixtures for StarBind tests.

The remote client is replaced by an ``AsyncMock`` spec'd on ``RemoteClient``:
calls are recorded the moment ``get``/``post``/``put`` are invoked, and the
response (or failure) is delivered when the entity's task awaits it.
"""

from unittest.mock import AsyncMock

import pytest

from starbind import InMemoryRemoteClient, RemoteClient


@pytest.fixture
def remote():
    """Mocked remote client"""
    return AsyncMock(spec=RemoteClient)


@pytest.fixture
def memory_remote():
    """In-memory REST resource"""
    return InMemoryRemoteClient()


class EventRecorder:
    """Callable handler that remembers every call it receives"""

    def __init__(self):
        self.calls = []

    def __call__(self, *args):
        self.calls.append(args)

    @property
    def count(self) -> int:
        return len(self.calls)


@pytest.fixture
def recorder_factory():
    """Factory for fresh event recorders"""
    return EventRecorder
