"""
Extra properties are ad-hoc, dynamically keyed attributes that can be attached to any build object (the project,
a task or a source set) outside of its statically declared fields. They are populated while the build script
is executed and are typically read back by task actions during the execution phase.
"""

from __future__ import annotations

import logging
from typing import Any, Callable, Generic, Iterator, MutableMapping, TypeVar

from nr.stream import Supplier

T = TypeVar("T")
logger = logging.getLogger(__name__)


class UnknownPropertyError(KeyError):
    """
    Raised when an extra property is read that was never set on the object.
    """

    def __init__(self, owner: str, key: str) -> None:
        super().__init__(owner, key)
        self.owner = owner
        self.key = key

    def __str__(self) -> str:
        return f"cannot get extra property {self.key!r} as it does not exist on {self.owner}"


class ExtraProperties(MutableMapping[str, Any]):
    """
    The extra property bag of a build object. Keys are strings and unique within the bag, the last write wins.
    Setting a key to `None` makes it present with a null value, which is different from a key that was never
    set at all. A :class:`Supplier` stored in the bag is resolved on first read and replaced by its value.
    """

    def __init__(self, owner: str) -> None:
        self._owner = owner
        self._values: dict[str, Any] = {}

    def __repr__(self) -> str:
        return f"ExtraProperties(owner={self._owner!r}, keys={list(self._values)})"

    @property
    def owner(self) -> str:
        return self._owner

    def __getitem__(self, key: str) -> Any:
        try:
            value = self._values[key]
        except KeyError:
            raise UnknownPropertyError(self._owner, key) from None
        if isinstance(value, Supplier):
            resolved = value.get()
            # The supplier may have written to the same key while it was computing.
            if self._values.get(key) is value:
                self._values[key] = resolved
            return resolved
        return value

    def __setitem__(self, key: str, value: Any) -> None:
        if not isinstance(key, str):
            raise TypeError(f"extra property keys must be strings, got {type(key).__name__}")
        self._values[key] = value

    def __delitem__(self, key: str) -> None:
        try:
            del self._values[key]
        except KeyError:
            raise UnknownPropertyError(self._owner, key) from None

    def __iter__(self) -> Iterator[str]:
        return iter(self._values)

    def __len__(self) -> int:
        return len(self._values)

    def __contains__(self, key: object) -> bool:
        return key in self._values

    def has(self, key: str) -> bool:
        return key in self._values

    def set(self, key: str, value: Any) -> None:
        self[key] = value

    def define(self, name: str, default: T | Supplier[T]) -> ExtraProperty[T]:
        """
        Define a named extra property and return a handle to it. If *default* is a :class:`Supplier`, it will be
        invoked once when the property is first read. Any other value is stored as-is.
        """

        if isinstance(default, Supplier):
            logger.debug("defining lazy extra property %r on %s", name, self._owner)
            self[name] = default.once()
        else:
            logger.debug("defining extra property %r on %s", name, self._owner)
            self[name] = default
        return ExtraProperty(self, name)

    def lazy(self, name: str, func: Callable[[], T]) -> ExtraProperty[T]:
        return self.define(name, Supplier.of_callable(func))

    def properties(self) -> dict[str, Any]:
        """
        Returns a snapshot of all properties in the bag. Pending lazy values are resolved.
        """

        return {key: self[key] for key in list(self._values)}


class ExtraProperty(Generic[T]):
    """
    A handle to a named value in an :class:`ExtraProperties` bag. Reads always go through the bag, thus a
    handle observes values that are written to the same key later.
    """

    def __init__(self, bag: ExtraProperties, name: str) -> None:
        self._bag = bag
        self._name = name

    def __repr__(self) -> str:
        return f"ExtraProperty(name={self._name!r}, owner={self._bag.owner!r})"

    def __str__(self) -> str:
        return str(self.get())

    @property
    def name(self) -> str:
        return self._name

    def get(self) -> T:
        return self._bag[self._name]  # type: ignore[no-any-return]

    def set(self, value: T) -> None:
        self._bag[self._name] = value

    def is_present(self) -> bool:
        return self._name in self._bag
