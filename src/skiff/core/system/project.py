from __future__ import annotations

import contextlib
import importlib
import logging
from pathlib import Path
from typing import TYPE_CHECKING, Callable, ClassVar, Iterator

from skiff.core.system.extra import ExtraProperties
from skiff.core.system.source_set import SourceSetContainer
from skiff.core.system.task import Task, TaskContainer

if TYPE_CHECKING:
    from skiff.core.system.context import Context

logger = logging.getLogger(__name__)

#: A plugin is a function that configures a project.
Plugin = Callable[["Project"], None]

#: Plugins that can be applied by name. The value is the import path of the plugin function.
BUILTIN_PLUGINS: dict[str, str] = {
    "java": "skiff.core.lib.java:apply",
}


class ProjectLoaderError(Exception):
    def __init__(self, project: Project, message: str) -> None:
        super().__init__(project, message)
        self.project = project
        self.message = message

    def __str__(self) -> str:
        return f"[{self.project.path}] {self.message}"


class Project:
    """
    A project owns the tasks and source sets defined by its build script. Every project also carries an extra
    property bag in which named values of the build are defined.
    """

    _current: ClassVar[Project | None] = None

    def __init__(self, name: str, directory: Path, context: Context) -> None:
        self.name = name
        self.directory = directory
        self.context = context
        self.extra = ExtraProperties(f"project {self.path!r}")
        self.tasks = TaskContainer(self)
        self.source_sets = SourceSetContainer(self)
        self._applied_plugins: list[str] = []

    def __repr__(self) -> str:
        return f"Project({self.name})"

    @property
    def path(self) -> str:
        return ":"

    def path_of(self, name: str) -> str:
        """
        Returns the absolute path of a member of this project.
        """

        return f":{name}"

    def task(
        self,
        name: str,
        configure: Callable[[Task], object] | None = None,
        *,
        description: str | None = None,
        group: str | None = None,
    ) -> Task:
        return self.tasks.register(name, configure, description=description, group=group)

    def apply_plugin(self, plugin: str | Plugin) -> None:
        """
        Apply a plugin to the project, either by its name or by passing the plugin function directly. Applying
        the same plugin twice has no effect.
        """

        if isinstance(plugin, str):
            key = plugin
            try:
                module_name, member_name = BUILTIN_PLUGINS[plugin].split(":")
            except KeyError:
                raise ValueError(f"unknown plugin: {plugin!r}") from None
            func: Plugin = getattr(importlib.import_module(module_name), member_name)
        else:
            key = f"{plugin.__module__}.{plugin.__qualname__}"
            func = plugin

        if key in self._applied_plugins:
            return
        logger.debug("applying plugin %s to project %s", key, self.path)
        func(self)
        self._applied_plugins.append(key)

    def has_plugin(self, name: str) -> bool:
        return name in self._applied_plugins

    @staticmethod
    def current() -> Project:
        """
        Returns the project whose build script is currently being executed.
        """

        if Project._current is None:
            raise RuntimeError("no current project")
        return Project._current

    @contextlib.contextmanager
    def as_current(self) -> Iterator[Project]:
        prev, Project._current = Project._current, self
        try:
            yield self
        finally:
            Project._current = prev
