"""
Composition-Based Entity - Local State + Remote Persistence

🏗️ Clean Architecture Entity:
An entity *has* an attribute store, an event emitter and a synchronization
strategy; it inherits none of them. Reads and writes go to the store, every
write is announced through the emitter, and ``fetch``/``save`` go through the
sync strategy and report back as ``change`` or ``error`` events.

Example:
    user = User.build_user({"name": "John"}, remote)
    user.on("change", lambda: render(user))
    await user.save()
"""

import asyncio
import logging
from typing import Any, Awaitable, ClassVar, Dict, Generic, Mapping, Optional, Set, Type, TypeVar

from .attributes import AttributeStore, UNDEFINED
from ..events.emitter import EventEmitter, EntityEvent, EventName, EventHandler
from ..persistence.remote.interface import RemoteClient, RemoteError, RemoteResponse
from ..persistence.sync import ApiSync, MissingIdentifierError

logger = logging.getLogger(__name__)

T = TypeVar("T", bound=Mapping[str, Any])
E = TypeVar("E", bound="Entity")


class Entity(Generic[T]):
    """
    Entity bound to a REST resource.

    ``fetch`` and ``save`` return immediately with an ``asyncio.Task`` (a
    running event loop is required); the request goes out when that task
    first runs. The task resolves to the record merged from the server, or
    ``None`` if the remote call failed; remote failures are only reported
    through the ``error`` event, never raised.
    """

    # Resource path, e.g. "/users"; subclasses set this
    resource_url: ClassVar[str] = ""

    def __init__(self, attributes: AttributeStore[T], events: EventEmitter, sync: ApiSync):
        self.attributes = attributes
        self.events = events
        self.sync = sync
        self._pending: Set["asyncio.Task[Optional[Dict[str, Any]]]"] = set()

    @classmethod
    def build(
        cls: Type[E],
        attributes: Optional[T] = None,
        *,
        remote: RemoteClient,
        resource_url: Optional[str] = None,
    ) -> E:
        """Create an entity wired to ``remote``; no request is made"""
        url = resource_url or cls.resource_url
        if not url:
            raise ValueError(f"{cls.__name__} has no resource_url")
        return cls(AttributeStore(attributes), EventEmitter(), ApiSync(remote, url))

    # Event Operations (delegated to the emitter)

    def on(self, event: EventName, handler: EventHandler) -> None:
        self.events.on(event, handler)

    def off(self, event: EventName, handler: Optional[EventHandler] = None) -> bool:
        return self.events.off(event, handler)

    def trigger(self, event: EventName, *args: Any) -> int:
        return self.events.trigger(event, *args)

    # Attribute Operations (delegated to the store)

    def get(self, key: str) -> Any:
        return self.attributes.get(key)

    def get_all(self) -> Dict[str, Any]:
        return self.attributes.get_all()

    def set(self, update: Mapping[str, Any]) -> None:
        """Merge ``update`` and emit ``change``, even if nothing differed"""
        self.attributes.set(update)
        self.trigger(EntityEvent.CHANGE)

    @property
    def is_new(self) -> bool:
        """True until the entity carries an id"""
        entity_id = self.get("id")
        return entity_id is UNDEFINED or entity_id is None

    @property
    def pending(self) -> int:
        """Number of synchronization calls still in flight"""
        return len(self._pending)

    # Synchronization Operations (delegated to the sync strategy)

    def fetch(self) -> "asyncio.Task[Optional[Dict[str, Any]]]":
        """
        Reload this entity from ``{resource}/{id}``.

        Raises:
            MissingIdentifierError: if the entity has no id; nothing is sent
        """
        if self.is_new:
            raise MissingIdentifierError(f"Cannot fetch {type(self).__name__} without an id")

        entity_id = self.get("id")
        loop = asyncio.get_running_loop()
        return self._schedule(loop, self.sync.fetch(entity_id), "GET", self.sync.url_for(entity_id))

    def save(self) -> "asyncio.Task[Optional[Dict[str, Any]]]":
        """Create (POST) or update (PUT) depending on whether an id is present"""
        data = self.get_all()
        method, url = self.sync.route(data)
        loop = asyncio.get_running_loop()
        return self._schedule(loop, self.sync.save(data), method, url)

    def _schedule(
        self,
        loop: asyncio.AbstractEventLoop,
        pending: Awaitable[RemoteResponse],
        method: str,
        url: str,
    ) -> "asyncio.Task[Optional[Dict[str, Any]]]":
        task = loop.create_task(
            self._settle(pending, method, url),
            name=f"{type(self).__name__} {method} {url}",
        )
        self._pending.add(task)
        task.add_done_callback(self._pending.discard)
        return task

    async def _settle(self, pending: Awaitable[RemoteResponse], method: str, url: str) -> Optional[Dict[str, Any]]:
        try:
            response = await pending
            record = self._record_from(response, method, url)
        except Exception as error:
            logger.warning(f"{self!r} {method} {url} failed: {error}")
            self.trigger(EntityEvent.ERROR, error)
            return None

        logger.debug(f"{self!r} {method} {url} settled")
        self.set(record)
        return record

    def _record_from(self, response: RemoteResponse, method: str, url: str) -> Dict[str, Any]:
        data = response.data
        if data is None:
            return {}
        if not isinstance(data, Mapping):
            raise RemoteError(
                f"{method} {url} expected a JSON object, got {type(data).__name__}",
                method=method,
                url=url,
                status_code=response.status_code,
                data=data,
            )
        return dict(data)

    def __repr__(self) -> str:
        return f"{type(self).__name__}(id={self.get('id')!r})"


__all__ = ["Entity"]
