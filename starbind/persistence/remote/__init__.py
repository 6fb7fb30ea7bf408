"""
Remote clients - transports entities synchronize through.
"""

from .interface import RemoteClient, RemoteResponse, RemoteError, SyncError
from .http import HttpxRemoteClient
from .memory import InMemoryRemoteClient

__all__ = [
    "RemoteClient", "RemoteResponse", "RemoteError", "SyncError",
    "HttpxRemoteClient", "InMemoryRemoteClient",
]
