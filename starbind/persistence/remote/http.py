"""
HTTP Remote Client - httpx transport

🌐 REST over HTTP:
Production ``RemoteClient`` built on ``httpx.AsyncClient``. Relative resource
URLs such as ``/users/1`` are resolved against the configured base URL.
"""

import logging
from typing import Any, Dict, Optional

import httpx
from pydantic import TypeAdapter

from .interface import RemoteClient, RemoteError, RemoteResponse
from ...infrastructure.configuration import RemoteConfig, get_config

logger = logging.getLogger(__name__)

# Request bodies may carry datetimes, UUIDs, enums...
_json_body = TypeAdapter(Any)


class HttpxRemoteClient(RemoteClient):
    """
    Remote client performing real HTTP requests.

    A caller-supplied ``httpx.AsyncClient`` is used as-is and left open on
    ``aclose()``; otherwise one is created from ``RemoteConfig`` and owned by
    this instance. Without a config the global one (``get_config()``) is used.
    """

    def __init__(
        self,
        config: Optional[RemoteConfig] = None,
        client: Optional[httpx.AsyncClient] = None,
    ):
        self.config = config or get_config().remote
        self._owns_client = client is None
        self._client = client or httpx.AsyncClient(
            base_url=self.config.base_url,
            timeout=self.config.timeout,
            headers=self.config.headers,
        )

    async def get(self, url: str) -> RemoteResponse:
        return await self._request("GET", url)

    async def post(self, url: str, body: Dict[str, Any]) -> RemoteResponse:
        return await self._request("POST", url, body)

    async def put(self, url: str, body: Dict[str, Any]) -> RemoteResponse:
        return await self._request("PUT", url, body)

    async def _request(self, method: str, url: str, body: Optional[Dict[str, Any]] = None) -> RemoteResponse:
        payload = _json_body.dump_python(body, mode="json") if body is not None else None
        logger.debug(f"{method} {url}")

        try:
            response = await self._client.request(method, url, json=payload)
        except httpx.HTTPError as e:
            raise RemoteError(f"{method} {url} failed: {e}", method=method, url=url) from e

        data = self._decode(response)
        if response.is_error:
            raise RemoteError(
                f"{method} {url} returned {response.status_code}",
                method=method,
                url=url,
                status_code=response.status_code,
                data=data,
            )

        logger.debug(f"{method} {url} -> {response.status_code}")
        return RemoteResponse(
            status_code=response.status_code,
            data=data,
            headers=dict(response.headers),
        )

    @staticmethod
    def _decode(response: httpx.Response) -> Any:
        if not response.content:
            return None
        try:
            return response.json()
        except ValueError:
            return response.text

    async def aclose(self):
        """Close the underlying client if this instance created it"""
        if self._owns_client:
            await self._client.aclose()

    async def __aenter__(self) -> 'HttpxRemoteClient':
        return self

    async def __aexit__(self, exc_type, exc_value, traceback):
        await self.aclose()


__all__ = ["HttpxRemoteClient"]
