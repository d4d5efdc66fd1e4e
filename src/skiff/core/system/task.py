from __future__ import annotations

import dataclasses
import enum
import logging
from typing import TYPE_CHECKING, Callable

from skiff.core.system.container import NamedContainer, NamedObject

if TYPE_CHECKING:
    from skiff.core.system.project import Project

logger = logging.getLogger(__name__)

#: A deferred action receives the task it is attached to.
TaskAction = Callable[["Task"], object]


class TaskStatusType(enum.Enum):
    SUCCEEDED = enum.auto()
    FAILED = enum.auto()
    UP_TO_DATE = enum.auto()


@dataclasses.dataclass(frozen=True)
class TaskStatus:
    type: TaskStatusType
    message: str | None = None

    @staticmethod
    def succeeded(message: str | None = None) -> TaskStatus:
        return TaskStatus(TaskStatusType.SUCCEEDED, message)

    @staticmethod
    def failed(message: str | None = None) -> TaskStatus:
        return TaskStatus(TaskStatusType.FAILED, message)

    @staticmethod
    def up_to_date(message: str | None = None) -> TaskStatus:
        return TaskStatus(TaskStatusType.UP_TO_DATE, message)


class Task(NamedObject):
    """
    A named unit of work in a project. A task does nothing by itself; its behaviour is defined by the deferred
    actions attached to it during the configuration phase, which are run when the task is executed.

    Actions added with :meth:`do_first` run before all other actions, most recently added first. Actions added
    with :meth:`do_last` run in the order they were added.
    """

    def __init__(self, name: str, project: Project) -> None:
        self.project = project
        super().__init__(name)
        self.description: str | None = None
        self.group: str | None = None
        self._first_actions: list[TaskAction] = []
        self._last_actions: list[TaskAction] = []

    def _describe(self) -> str:
        return f"task {self.path!r}"

    @property
    def path(self) -> str:
        return self.project.path_of(self.name)

    def get_description(self) -> str | None:
        return self.description

    def do_first(self, action: TaskAction) -> TaskAction:
        self._first_actions.insert(0, action)
        return action

    def do_last(self, action: TaskAction) -> TaskAction:
        self._last_actions.append(action)
        return action

    def actions(self) -> list[TaskAction]:
        return self._first_actions + self._last_actions

    def execute(self) -> TaskStatus:
        actions = self.actions()
        if not actions:
            return TaskStatus.up_to_date("no actions")
        for action in actions:
            logger.debug("running action %r of %s", action, self.path)
            action(self)
        return TaskStatus.succeeded()


class TaskContainer(NamedContainer[Task]):
    def __init__(self, project: Project) -> None:
        super().__init__(f"project {project.path!r} tasks", lambda name: Task(name, project))
        self._project = project

    def register(
        self,
        name: str,
        configure: Callable[[Task], object] | None = None,
        *,
        description: str | None = None,
        group: str | None = None,
    ) -> Task:
        task = Task(name, self._project)
        task.description = description
        task.group = group
        self.add(task)
        if configure is not None:
            configure(task)
        logger.debug("registered %s", task.path)
        return task
