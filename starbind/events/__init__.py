"""
Events - Named publish/subscribe for entities and collections.
"""

from .emitter import EventEmitter, EntityEvent, EventName, EventHandler, event_key

__all__ = ["EventEmitter", "EntityEvent", "EventName", "EventHandler", "event_key"]
