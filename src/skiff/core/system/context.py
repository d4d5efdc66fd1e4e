from __future__ import annotations

import logging
from pathlib import Path
from typing import Iterable, Sequence

from kraken.common import PythonScriptRunner

from skiff.core.system.project import Project, ProjectLoaderError
from skiff.core.system.task import Task, TaskStatus

BUILD_SCRIPT = ".skiff.py"
logger = logging.getLogger(__name__)


class BuildError(Exception):
    """
    Raised when one or more tasks failed during the execution phase.
    """

    def __init__(self, failed_tasks: Iterable[str]) -> None:
        self.failed_tasks = sorted(failed_tasks)

    def __str__(self) -> str:
        if len(self.failed_tasks) == 1:
            return f'task "{self.failed_tasks[0]}" failed'
        else:
            return "tasks " + ", ".join(f'"{task}"' for task in self.failed_tasks) + " failed"


class ExecutorObserver:
    """
    Receives notifications about the tasks run by :meth:`Context.execute`. The default implementation does
    nothing.
    """

    def before_execute_task(self, task: Task) -> None:
        pass

    def after_execute_task(self, task: Task, status: TaskStatus) -> None:
        pass


class Context:
    """
    The build context holds the root project. A build happens in two phases: first the build script is executed
    with :meth:`load_project` (the configuration phase), then the requested tasks run their deferred actions
    with :meth:`execute` (the execution phase).
    """

    def __init__(self, observer: ExecutorObserver | None = None) -> None:
        self.observer = observer or ExecutorObserver()
        self._root_project: Project | None = None
        self._runner = PythonScriptRunner([BUILD_SCRIPT])

    @property
    def root_project(self) -> Project:
        if self._root_project is None:
            raise RuntimeError("Context.root_project is not set")
        return self._root_project

    @root_project.setter
    def root_project(self, project: Project) -> None:
        self._root_project = project

    def load_project(self, directory: Path, script: Path | None = None) -> Project:
        """
        Create the root project for *directory* and execute its build script. If *script* is not specified,
        the `.skiff.py` file in the directory is used.
        """

        directory = directory.absolute()
        project = Project(directory.name, directory, self)
        script = script or self._runner.find_script(directory)
        if script is None or not script.is_file():
            raise ProjectLoaderError(project, f"no build script found in {script or directory}")

        logger.debug("loading project %s from %s", project.path, script)
        with project.as_current():
            try:
                self._runner.execute_script(script, {})
            except Exception as exc:
                raise ProjectLoaderError(project, f"failed to execute build script {script}: {exc}") from exc

        self._root_project = project
        return project

    def resolve_tasks(self, names: Sequence[str] | None = None) -> list[Task]:
        """
        Resolve task names (optionally prefixed with `:`) to tasks of the root project. If *names* is `None`,
        all tasks are returned in name order.
        """

        tasks = self.root_project.tasks
        if names is None:
            return list(tasks)
        return [tasks[name.lstrip(":")] for name in names]

    def execute(self, tasks: Sequence[str | Task] | None = None) -> None:
        """
        Run the deferred actions of the given tasks, in the order given. Execution stops at the first task that
        fails, which is reported with a :class:`BuildError`.
        """

        if tasks is None:
            selected = self.resolve_tasks()
        else:
            selected = [t if isinstance(t, Task) else self.resolve_tasks([t])[0] for t in tasks]

        for task in selected:
            self.observer.before_execute_task(task)
            logger.debug("executing %s", task.path)
            try:
                status = task.execute()
            except Exception as exc:
                logger.exception("unhandled exception in %s", task.path)
                status = TaskStatus.failed(f"unhandled exception: {exc}")
                self.observer.after_execute_task(task, status)
                raise BuildError([task.path]) from exc
            self.observer.after_execute_task(task, status)
