"""
Attribute Store - Mutable key/value state owned by an entity.
"""

from typing import Any, Dict, Generic, Mapping, Optional, TypeVar

T = TypeVar("T", bound=Mapping[str, Any])


class _Undefined:
    """Marker for attributes that were never set"""

    _instance = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __bool__(self) -> bool:
        return False

    def __repr__(self) -> str:
        return "UNDEFINED"

    def __reduce__(self):
        return (_Undefined, ())


UNDEFINED: Any = _Undefined()


class AttributeStore(Generic[T]):
    """
    Key/value map with merge-on-write semantics.

    A key that was never stored reads back as ``UNDEFINED``, which is distinct
    from a stored ``None``, empty string or zero.
    """

    def __init__(self, initial: Optional[T] = None):
        self._data: Dict[str, Any] = dict(initial or {})

    def get(self, key: str) -> Any:
        return self._data.get(key, UNDEFINED)

    def set(self, update: Mapping[str, Any]) -> None:
        """Merge ``update`` into the store, leaving other keys untouched"""
        self._data.update(update)

    def get_all(self) -> Dict[str, Any]:
        """Shallow copy of every stored attribute"""
        return dict(self._data)

    def __contains__(self, key: object) -> bool:
        return key in self._data

    def __len__(self) -> int:
        return len(self._data)

    def __repr__(self) -> str:
        return f"AttributeStore({self._data!r})"


__all__ = ["AttributeStore", "UNDEFINED"]
