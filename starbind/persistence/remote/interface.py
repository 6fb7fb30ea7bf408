"""
Remote Client Interface

💾 Standard Transport Contract:
Entities and collections never talk to the network directly. They are handed a
``RemoteClient`` that performs REST verbs against URLs with JSON bodies and
returns decoded responses, so any transport (HTTP, in-memory, mocks) can be
injected.
"""

from abc import ABC, abstractmethod
from typing import Any, Dict, Optional

from pydantic import BaseModel, Field


class SyncError(Exception):
    """Base exception for synchronization errors"""
    pass


class RemoteError(SyncError):
    """
    Raised by remote clients when a request fails.

    Covers transport failures (``status_code`` is None) and non-success HTTP
    responses. The instance is passed as-is to ``error`` event handlers.
    """

    def __init__(
        self,
        message: str,
        *,
        method: str,
        url: str,
        status_code: Optional[int] = None,
        data: Any = None,
    ):
        super().__init__(message)
        self.method = method
        self.url = url
        self.status_code = status_code
        self.data = data

    def __repr__(self) -> str:
        return (
            f"RemoteError({str(self)!r}, method={self.method!r}, url={self.url!r}, "
            f"status_code={self.status_code!r})"
        )


class RemoteResponse(BaseModel):
    """Decoded response returned by a remote client"""
    status_code: int = Field(default=200, description="HTTP status code")
    data: Any = Field(default=None, description="Decoded JSON payload")
    headers: Dict[str, str] = Field(default_factory=dict, description="Response headers")


class RemoteClient(ABC):
    """
    Abstract remote client.

    Implementations raise ``RemoteError`` for every failure so callers can
    treat transport and HTTP errors uniformly.
    """

    @abstractmethod
    async def get(self, url: str) -> RemoteResponse:
        """Read a record or a listing"""
        pass

    @abstractmethod
    async def post(self, url: str, body: Dict[str, Any]) -> RemoteResponse:
        """Create a record"""
        pass

    @abstractmethod
    async def put(self, url: str, body: Dict[str, Any]) -> RemoteResponse:
        """Replace a record"""
        pass


__all__ = ["RemoteClient", "RemoteResponse", "RemoteError", "SyncError"]
