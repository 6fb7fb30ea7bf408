"""
Collection - Ordered entities backed by a listing endpoint

A collection owns an event emitter and a list of entities (``models``), all
built by the same factory. ``fetch`` replaces ``models`` with whatever the
listing endpoint returns, in server order, and emits a single ``change`` on
the collection itself.
"""

import asyncio
import logging
from typing import Any, Callable, Generic, Iterator, List, Mapping, Optional, Type, TypeVar

from .entity import Entity
from ..events.emitter import EventEmitter, EntityEvent, EventName, EventHandler
from ..persistence.remote.interface import RemoteClient, RemoteError, RemoteResponse
from ..persistence.sync import ApiSync

logger = logging.getLogger(__name__)

E = TypeVar("E", bound=Entity)

EntityFactory = Callable[[Mapping[str, Any]], E]


class Collection(Generic[E]):
    """
    Collection of entities of one kind.

    There is no collection-level create or save; entities are saved one at a
    time.
    """

    def __init__(self, sync: ApiSync, build: EntityFactory):
        self.sync = sync
        self.events = EventEmitter()
        self.models: List[E] = []
        self._build = build
        self._pending: set = set()

    @classmethod
    def of(cls, entity_class: Type[E], remote: RemoteClient) -> 'Collection[E]':
        """Collection of ``entity_class`` listed from its ``resource_url``"""
        return cls(
            ApiSync(remote, entity_class.resource_url),
            lambda record: entity_class.build(record, remote=remote),
        )

    # Event Operations

    def on(self, event: EventName, handler: EventHandler) -> None:
        self.events.on(event, handler)

    def off(self, event: EventName, handler: Optional[EventHandler] = None) -> bool:
        return self.events.off(event, handler)

    def trigger(self, event: EventName, *args: Any) -> int:
        return self.events.trigger(event, *args)

    # Synchronization

    def fetch(self) -> "asyncio.Task[Optional[List[E]]]":
        """Replace ``models`` with the listing; resolves to the new models or None"""
        loop = asyncio.get_running_loop()
        task = loop.create_task(self._settle(self.sync.list()), name=f"{type(self).__name__}.fetch")
        self._pending.add(task)
        task.add_done_callback(self._pending.discard)
        return task

    async def _settle(self, pending) -> Optional[List[E]]:
        try:
            response: RemoteResponse = await pending
            records = self._records_from(response)
            models = [self._build(record) for record in records]
        except Exception as error:
            logger.warning(f"Listing {self.sync.resource_url} failed: {error}")
            self.trigger(EntityEvent.ERROR, error)
            return None

        self.models = models
        logger.debug(f"Listed {len(self.models)} records from {self.sync.resource_url}")
        self.trigger(EntityEvent.CHANGE)
        return self.models

    def _records_from(self, response: RemoteResponse) -> List[Mapping[str, Any]]:
        if not isinstance(response.data, list):
            raise RemoteError(
                f"Listing expected a JSON array, got {type(response.data).__name__}",
                method="GET",
                url=self.sync.resource_url,
                status_code=response.status_code,
                data=response.data,
            )

        for index, record in enumerate(response.data):
            if not isinstance(record, Mapping):
                raise RemoteError(
                    f"Listing item {index} is not a JSON object, got {type(record).__name__}",
                    method="GET",
                    url=self.sync.resource_url,
                    status_code=response.status_code,
                    data=response.data,
                )
        return response.data

    @property
    def pending(self) -> int:
        """Number of fetches still in flight"""
        return len(self._pending)

    # Sequence access to models

    def __len__(self) -> int:
        return len(self.models)

    def __iter__(self) -> Iterator[E]:
        return iter(self.models)

    def __getitem__(self, index: int) -> E:
        return self.models[index]

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.sync.resource_url!r}, models={len(self.models)})"


__all__ = ["Collection", "EntityFactory"]
