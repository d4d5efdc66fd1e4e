from __future__ import annotations

import argparse
import dataclasses
from pathlib import Path


@dataclasses.dataclass(frozen=True)
class BuildOptions:
    project_dir: Path
    script: Path | None

    @staticmethod
    def add_to_parser(parser: argparse.ArgumentParser) -> None:
        group = parser.add_argument_group("build options")
        group.add_argument(
            "-p",
            "--project-dir",
            metavar="PATH",
            type=Path,
            default=Path.cwd(),
            help="the root project directory (default: %(default)s)",
        )
        group.add_argument(
            "--script",
            metavar="PATH",
            type=Path,
            default=None,
            help="the build script to execute (default: <project-dir>/.skiff.py)",
        )

    @classmethod
    def collect(cls, args: argparse.Namespace) -> BuildOptions:
        return cls(
            project_dir=args.project_dir,
            script=args.script,
        )


@dataclasses.dataclass(frozen=True)
class GraphOptions:
    tasks: list[str]

    @staticmethod
    def add_to_parser(parser: argparse.ArgumentParser) -> None:
        parser.add_argument("tasks", metavar="task", nargs="*", help="one or more tasks to select")

    @classmethod
    def collect(cls, args: argparse.Namespace) -> GraphOptions:
        return cls(tasks=args.tasks)


@dataclasses.dataclass(frozen=True)
class RunOptions:
    skip_build: bool
    allow_no_tasks: bool

    @staticmethod
    def add_to_parser(parser: argparse.ArgumentParser) -> None:
        group = parser.add_argument_group("run options")
        group.add_argument(
            "-s",
            "--skip-build",
            action="store_true",
            help="just load the project, do not run any tasks",
        )
        group.add_argument(
            "--allow-no-tasks",
            action="store_true",
            help="don't error if no tasks got selected",
        )

    @classmethod
    def collect(cls, args: argparse.Namespace) -> RunOptions:
        return cls(skip_build=args.skip_build, allow_no_tasks=args.allow_no_tasks)
