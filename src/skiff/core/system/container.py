from __future__ import annotations

import logging
from typing import Callable, Generic, Iterator, TypeVar

from skiff.core.system.extra import ExtraProperties

T = TypeVar("T", bound="NamedObject")
logger = logging.getLogger(__name__)


class UnknownObjectError(KeyError):
    """
    Raised when a named object is looked up in a container that does not contain it.
    """

    def __init__(self, container: str, name: str) -> None:
        super().__init__(container, name)
        self.container = container
        self.name = name

    def __str__(self) -> str:
        return f"{self.container} does not contain an object named {self.name!r}"


class NamedObject:
    """
    Base class for build objects that are identified by a name and carry an extra property bag.
    """

    def __init__(self, name: str) -> None:
        if not name:
            raise ValueError("name must not be empty")
        self.name = name
        self.extra = ExtraProperties(self._describe())

    def _describe(self) -> str:
        return f"{type(self).__name__.lower()} {self.name!r}"

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.name!r})"


class NamedContainer(Generic[T]):
    """
    A collection of uniquely named objects. Iteration is always in name order.

    Actions registered with :meth:`all` are live; they are applied to the objects already in the container
    and to every object added afterwards.
    """

    def __init__(self, display_name: str, factory: Callable[[str], T] | None = None) -> None:
        self._display_name = display_name
        self._factory = factory
        self._objects: dict[str, T] = {}
        self._all_actions: list[Callable[[T], object]] = []

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.names()})"

    def __iter__(self) -> Iterator[T]:
        return iter([self._objects[name] for name in self.names()])

    def __len__(self) -> int:
        return len(self._objects)

    def __contains__(self, name: object) -> bool:
        return name in self._objects

    def __getitem__(self, name: str) -> T:
        try:
            return self._objects[name]
        except KeyError:
            raise UnknownObjectError(self._display_name, name) from None

    def names(self) -> list[str]:
        return sorted(self._objects)

    def get(self, name: str) -> T | None:
        return self._objects.get(name)

    def add(self, obj: T) -> T:
        if obj.name in self._objects:
            raise ValueError(f"{self._display_name} already contains an object named {obj.name!r}")
        self._objects[obj.name] = obj
        logger.debug("added %r to %s", obj, self._display_name)
        for action in self._all_actions:
            action(obj)
        return obj

    def create(self, name: str, configure: Callable[[T], object] | None = None) -> T:
        if self._factory is None:
            raise TypeError(f"{self._display_name} does not support creating objects")
        obj = self.add(self._factory(name))
        if configure is not None:
            configure(obj)
        return obj

    def maybe_create(self, name: str) -> T:
        if name in self._objects:
            return self._objects[name]
        return self.create(name)

    def configure(self, name: str, action: Callable[[T], object]) -> T:
        obj = self[name]
        action(obj)
        return obj

    def all(self, action: Callable[[T], object]) -> None:
        self._all_actions.append(action)
        for obj in list(self):
            action(obj)

    def matching(self, predicate: Callable[[T], bool]) -> FilteredContainer[T]:
        return FilteredContainer(self, predicate)


class FilteredContainer(Generic[T]):
    """
    A live view on a :class:`NamedContainer` that only yields the objects matching a predicate. The predicate is
    evaluated every time the view is iterated.
    """

    def __init__(self, parent: NamedContainer[T], predicate: Callable[[T], bool]) -> None:
        self._parent = parent
        self._predicate = predicate

    def __iter__(self) -> Iterator[T]:
        return (obj for obj in self._parent if self._predicate(obj))

    def __len__(self) -> int:
        return sum(1 for _ in self)

    def names(self) -> list[str]:
        return [obj.name for obj in self]

    def matching(self, predicate: Callable[[T], bool]) -> FilteredContainer[T]:
        return FilteredContainer(self._parent, lambda obj: self._predicate(obj) and predicate(obj))
