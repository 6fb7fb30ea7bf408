"""
User model - entity bound to the ``/users`` resource.
"""

from typing import Optional, TypedDict

from ..entities import Collection, Entity
from ..persistence.remote.interface import RemoteClient


class UserProps(TypedDict, total=False):
    id: int
    name: str
    age: int


class User(Entity[UserProps]):
    """A user record synchronized with ``{base_url}/users``"""

    resource_url = "/users"

    @classmethod
    def build_user(cls, attributes: Optional[UserProps], remote: RemoteClient) -> 'User':
        return cls.build(attributes, remote=remote)

    @classmethod
    def build_user_collection(cls, remote: RemoteClient) -> Collection['User']:
        return Collection.of(cls, remote)


__all__ = ["User", "UserProps"]
