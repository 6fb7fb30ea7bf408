"""
StarBind - Reactive Entities over REST

⭐ Local state + remote persistence in one object ⭐

🎯 entities/       - Entities, attribute stores and collections
🚀 events/         - Synchronous named publish/subscribe
💾 persistence/    - Sync strategy and remote clients (httpx, in-memory)
🔧 infrastructure/ - Configuration and logging
👤 models/         - Ready-made models (User)

Quick Start:
    from starbind import HttpxRemoteClient, User

    async with HttpxRemoteClient() as remote:
        user = User.build_user({"name": "John", "age": 27}, remote)
        user.on("change", lambda: print(user.get("id")))
        user.on("error", lambda error: print("save failed:", error))
        await user.save()
"""

from .events import EventEmitter, EntityEvent
from .entities import AttributeStore, UNDEFINED, Entity, Collection
from .persistence import (
    ApiSync, MissingIdentifierError,
    RemoteClient, RemoteResponse, RemoteError, SyncError,
    HttpxRemoteClient, InMemoryRemoteClient,
)
from .infrastructure import (
    SyncConfig, RemoteConfig, LoggingConfig, Environment,
    get_config, set_config, configure_logging,
)
from .models import User, UserProps

__version__ = "0.1.0"

__all__ = [
    # Core
    "Entity", "Collection", "AttributeStore", "UNDEFINED",
    "EventEmitter", "EntityEvent",

    # Synchronization
    "ApiSync", "RemoteClient", "RemoteResponse",
    "HttpxRemoteClient", "InMemoryRemoteClient",

    # Errors
    "SyncError", "MissingIdentifierError", "RemoteError",

    # Configuration
    "SyncConfig", "RemoteConfig", "LoggingConfig", "Environment",
    "get_config", "set_config", "configure_logging",

    # Models
    "User", "UserProps",
]
