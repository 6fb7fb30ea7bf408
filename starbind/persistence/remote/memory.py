"""
Memory Remote Client - In-Process REST Resource

🧠 Development and Testing Backend:
Behaves like a small JSON REST server kept in memory. Records are grouped by
collection path (``/users``) and addressed as ``{path}/{id}``. Data is lost
when the instance goes away.
"""

import asyncio
import copy
import logging
from typing import Any, Dict, Iterable, List, Optional, Tuple

from .interface import RemoteClient, RemoteError, RemoteResponse

logger = logging.getLogger(__name__)


class InMemoryRemoteClient(RemoteClient):
    """
    In-memory remote client.

    ``POST`` assigns incrementing integer ids, ``PUT`` replaces an existing
    record and ``GET`` reads either one record or a whole collection in
    insertion order. Unknown records answer with a 404 ``RemoteError``.
    Every request is recorded in ``calls`` as ``(method, url, body)``.
    """

    def __init__(self):
        self._collections: Dict[str, Dict[str, Dict[str, Any]]] = {}
        self.calls: List[Tuple[str, str, Optional[Dict[str, Any]]]] = []

    def seed(self, base: str, records: Iterable[Dict[str, Any]]) -> None:
        """Pre-load records under ``base``, assigning ids where missing"""
        collection = self._collections.setdefault(self._normalize(base), {})
        for record in records:
            record = copy.deepcopy(dict(record))
            if record.get("id") is None:
                record["id"] = self._next_id(collection)
            collection[str(record["id"])] = record

    def records(self, base: str) -> List[Dict[str, Any]]:
        """Snapshot of the records stored under ``base``"""
        return copy.deepcopy(list(self._collections.get(self._normalize(base), {}).values()))

    async def get(self, url: str) -> RemoteResponse:
        self.calls.append(("GET", url, None))
        await asyncio.sleep(0)

        path = self._normalize(url)
        if path in self._collections:
            return RemoteResponse(data=self.records(path))

        collection, record_id = self._locate("GET", url)
        return RemoteResponse(data=copy.deepcopy(collection[record_id]))

    async def post(self, url: str, body: Dict[str, Any]) -> RemoteResponse:
        self.calls.append(("POST", url, copy.deepcopy(body)))
        await asyncio.sleep(0)

        collection = self._collections.setdefault(self._normalize(url), {})
        record = copy.deepcopy(dict(body))
        record["id"] = self._next_id(collection)
        collection[str(record["id"])] = record
        logger.debug(f"Created {url}/{record['id']}")
        return RemoteResponse(status_code=201, data=copy.deepcopy(record))

    async def put(self, url: str, body: Dict[str, Any]) -> RemoteResponse:
        self.calls.append(("PUT", url, copy.deepcopy(body)))
        await asyncio.sleep(0)

        collection, record_id = self._locate("PUT", url)
        record = copy.deepcopy(dict(body))
        record["id"] = collection[record_id]["id"]
        collection[record_id] = record
        return RemoteResponse(data=copy.deepcopy(record))

    def _locate(self, method: str, url: str) -> Tuple[Dict[str, Dict[str, Any]], str]:
        base, _, record_id = self._normalize(url).rpartition("/")
        collection = self._collections.get(base)
        if collection is None or record_id not in collection:
            raise RemoteError(
                f"{method} {url} returned 404",
                method=method,
                url=url,
                status_code=404,
                data={"detail": "Not found"},
            )
        return collection, record_id

    @staticmethod
    def _next_id(collection: Dict[str, Dict[str, Any]]) -> int:
        numeric = [record["id"] for record in collection.values() if isinstance(record.get("id"), int)]
        return max(numeric, default=0) + 1

    @staticmethod
    def _normalize(url: str) -> str:
        return url.rstrip("/")


__all__ = ["InMemoryRemoteClient"]
