"""
ApiSync - REST synchronization strategy

Maps entity operations onto REST verbs for one resource path:

    fetch(id)   GET  {base}/{id}
    save(data)  POST {base}         when data has no id
                PUT  {base}/{id}    when it does
    list()      GET  {base}

Each method returns the remote client's pending request. Nothing is sent
until that awaitable first runs, which for entities and collections is when
their task gets its first turn on the event loop.
"""

import logging
from typing import Any, Awaitable, Dict, Mapping, Optional, Tuple

from .remote.interface import RemoteClient, RemoteResponse, SyncError

logger = logging.getLogger(__name__)


class MissingIdentifierError(SyncError):
    """Raised when an operation needs an id the entity does not have"""
    pass


class ApiSync:
    """Synchronization strategy bound to a resource URL"""

    def __init__(self, remote: RemoteClient, resource_url: str):
        self.remote = remote
        self.resource_url = resource_url.rstrip("/")

    def url_for(self, entity_id: Optional[Any] = None) -> str:
        if entity_id is None:
            return self.resource_url
        return f"{self.resource_url}/{entity_id}"

    def route(self, data: Mapping[str, Any]) -> Tuple[str, str]:
        """HTTP verb and URL ``save`` uses for ``data``"""
        entity_id = data.get("id")
        if entity_id is not None:
            return "PUT", self.url_for(entity_id)
        return "POST", self.resource_url

    def fetch(self, entity_id: Any) -> Awaitable[RemoteResponse]:
        if entity_id is None:
            raise MissingIdentifierError(f"Cannot fetch from {self.resource_url} without an id")

        url = self.url_for(entity_id)
        logger.debug(f"Fetching {url}")
        return self.remote.get(url)

    def save(self, data: Mapping[str, Any]) -> Awaitable[RemoteResponse]:
        body: Dict[str, Any] = dict(data)
        method, url = self.route(body)

        if method == "PUT":
            logger.debug(f"Updating {url}")
            return self.remote.put(url, body)

        # No id yet; the server assigns one
        body.pop("id", None)
        logger.debug(f"Creating in {url}")
        return self.remote.post(url, body)

    def list(self) -> Awaitable[RemoteResponse]:
        logger.debug(f"Listing {self.resource_url}")
        return self.remote.get(self.resource_url)

    def __repr__(self) -> str:
        return f"ApiSync({self.resource_url!r})"


__all__ = ["ApiSync", "MissingIdentifierError"]
