from __future__ import annotations

import builtins
import sys
from functools import partial
from typing import TextIO

from termcolor import colored

from skiff.core.system.context import ExecutorObserver
from skiff.core.system.task import Task, TaskStatus, TaskStatusType

print = partial(builtins.print, flush=True)

COLORS_BY_STATUS = {
    TaskStatusType.FAILED: "red",
    TaskStatusType.SUCCEEDED: "green",
    TaskStatusType.UP_TO_DATE: "green",
}


def status_to_text(status: TaskStatus, colored: bool = True) -> str:
    if colored:
        from termcolor import colored as _colored
    else:

        def _colored(s: str, *args: object, **kwargs: object) -> str:
            return s

    result = _colored(status.type.name, COLORS_BY_STATUS[status.type], attrs=["bold"])  # type: ignore[arg-type]
    if status.message:
        result += f" ({status.message})"
    return result


class ColoredPrintingExecutorObserver(ExecutorObserver):
    """
    Prints the name and the result of every executed task. Task status lines go to stderr so they don't mix
    with the output that task actions write to stdout.
    """

    def __init__(self, stream: TextIO | None = None) -> None:
        self._stream = stream

    def before_execute_task(self, task: Task) -> None:
        print(">", task.path, colored("RUNNING", "cyan"), file=self._stream or sys.stderr)

    def after_execute_task(self, task: Task, status: TaskStatus) -> None:
        print(">", task.path, status_to_text(status), file=self._stream or sys.stderr)
