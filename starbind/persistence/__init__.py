"""
Persistence - Synchronizing entities with remote REST resources.
"""

from .remote import (
    RemoteClient, RemoteResponse, RemoteError, SyncError,
    HttpxRemoteClient, InMemoryRemoteClient,
)
from .sync import ApiSync, MissingIdentifierError

__all__ = [
    "ApiSync", "MissingIdentifierError",
    "RemoteClient", "RemoteResponse", "RemoteError", "SyncError",
    "HttpxRemoteClient", "InMemoryRemoteClient",
]
