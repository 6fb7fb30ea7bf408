"""
Entities - The Heart of StarBind

🎯 Entity-Centric Design:
Entities hold attributes, announce changes and synchronize with a REST
resource. Collections group entities of one kind behind a listing endpoint.

Example:
    from starbind.entities import Entity

    class Post(Entity):
        resource_url = "/posts"

    post = Post.build({"title": "Hello"}, remote=client)
    post.on("change", refresh)
    post.save()
"""

from .attributes import AttributeStore, UNDEFINED
from .entity import Entity
from .collection import Collection, EntityFactory

__all__ = ["AttributeStore", "UNDEFINED", "Entity", "Collection", "EntityFactory"]
