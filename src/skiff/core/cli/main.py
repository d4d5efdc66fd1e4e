from __future__ import annotations

import argparse
import builtins
import logging
import os
import sys
from functools import partial
from typing import TYPE_CHECKING, Any, NoReturn

if TYPE_CHECKING:
    from skiff.core.cli.option_sets import BuildOptions, GraphOptions, RunOptions
    from skiff.core.system.context import Context
    from skiff.core.system.task import Task

logger = logging.getLogger(__name__)
print = partial(builtins.print, flush=True)


def _get_argument_parser(prog: str) -> argparse.ArgumentParser:
    import textwrap

    from kraken.common import LoggingOptions, propagate_argparse_formatter_to_subparser

    from skiff.core.cli.option_sets import BuildOptions, GraphOptions, RunOptions

    parser = argparse.ArgumentParser(
        prog,
        formatter_class=lambda prog: argparse.RawDescriptionHelpFormatter(prog, width=120, max_help_position=60),
        description=textwrap.dedent(
            """
            The skiff build model.

            Build scripts register tasks and source sets and attach extra properties to them; tasks run their
            deferred actions when selected on the command-line.
            """
        ),
    )
    subparsers = parser.add_subparsers(dest="cmd")

    run = subparsers.add_parser("run", aliases=["r"])
    LoggingOptions.add_to_parser(run)
    BuildOptions.add_to_parser(run)
    GraphOptions.add_to_parser(run)
    RunOptions.add_to_parser(run)

    query = subparsers.add_parser("query", aliases=["q"])
    query_subparsers = query.add_subparsers(dest="query_cmd")

    ls = query_subparsers.add_parser("ls", description="list all tasks and source sets in the build")
    LoggingOptions.add_to_parser(ls)
    BuildOptions.add_to_parser(ls)

    describe = query_subparsers.add_parser(
        "describe",
        aliases=["d"],
        description="describe one or more tasks and their extra properties in detail",
    )
    LoggingOptions.add_to_parser(describe)
    BuildOptions.add_to_parser(describe)
    GraphOptions.add_to_parser(describe)

    propagate_argparse_formatter_to_subparser(parser)
    return parser


def _load_build_state(build_options: BuildOptions) -> Context:
    """
    Executes the build script of the project directory, i.e. the configuration phase of the build.
    """

    from skiff.core.system.context import Context

    context = Context()
    context.load_project(build_options.project_dir, build_options.script)
    return context


def run(build_options: BuildOptions, graph_options: GraphOptions, run_options: RunOptions) -> None:
    from skiff.core.cli.executor import ColoredPrintingExecutorObserver
    from skiff.core.system.context import BuildError

    context = _load_build_state(build_options)
    context.observer = ColoredPrintingExecutorObserver()

    selected = context.resolve_tasks(graph_options.tasks)

    if run_options.skip_build:
        print("note: skipped build due to -s,--skip-build option.", file=sys.stderr)
        sys.exit(0)
    else:
        if not selected:
            if run_options.allow_no_tasks:
                print("note: no tasks were selected (--allow-no-tasks)", file=sys.stderr)
                sys.exit(0)
            else:
                print("error: no tasks were selected", file=sys.stderr)
                sys.exit(1)

        try:
            context.execute(selected)
        except BuildError as exc:
            print(file=sys.stderr)
            print("error:", exc, file=sys.stderr)
            sys.exit(1)


def ls(context: Context) -> None:
    import textwrap

    from kraken.common import get_terminal_width
    from termcolor import colored

    project = context.root_project
    tasks = list(project.tasks)
    width = get_terminal_width(120)
    longest_name = max(map(len, (t.path for t in tasks)), default=0) + 1

    print()
    print(colored("Tasks", "blue", attrs=["bold", "underline"]))
    print()

    def _print_task(task: Task) -> None:
        line = [task.path.ljust(longest_name)]
        remaining_width = width - len(line[0]) - 2
        description = task.get_description()
        if description:
            if remaining_width <= 0:
                remaining_width = width
            for part in textwrap.wrap(
                description,
                remaining_width,
                subsequent_indent=(width - remaining_width) * " ",
            ):
                line.append(part)
                line.append("\n")
            line.pop()
        print("  " + " ".join(line))

    for task in tasks:
        _print_task(task)

    print()
    print(colored("Source sets", "blue", attrs=["bold", "underline"]))
    print()

    for source_set in project.source_sets:
        print("  " + source_set.name)

    print()


def describe(context: Context, graph_options: GraphOptions) -> None:
    from termcolor import colored

    project = context.root_project
    tasks = context.resolve_tasks(graph_options.tasks or None)
    print("selected", len(tasks), "task(s)")
    print()

    def _print_extra(title: str, extra: dict[str, Any]) -> None:
        print("  " + colored(title, attrs=["bold"]) + f" ({len(extra)})")
        longest_key = max(map(len, extra), default=0)
        for key, value in extra.items():
            print("".ljust(4), (key + ":").ljust(longest_key + 1), colored(str(value), "blue"))

    for task in tasks:
        print("Task", colored(task.path, attrs=["bold", "underline"]))
        print("  Description:", task.get_description())
        print("  Group:", task.group)
        print("  Actions:", len(task.actions()))
        _print_extra("Extra properties", task.extra.properties())
        print()

    for source_set in project.source_sets:
        print("Source set", colored(source_set.name, attrs=["bold", "underline"]))
        _print_extra("Extra properties", source_set.extra.properties())
        print()

    print("Project", colored(project.name, attrs=["bold", "underline"]))
    _print_extra("Extra properties", project.extra.properties())


def main_internal(prog: str, argv: list[str] | None) -> NoReturn:
    from kraken.common import LoggingOptions

    from skiff.core.cli.option_sets import BuildOptions, GraphOptions, RunOptions
    from skiff.core.system.container import UnknownObjectError
    from skiff.core.system.project import ProjectLoaderError

    parser = _get_argument_parser(prog)
    args = parser.parse_args(sys.argv[1:] if argv is None else argv)

    if not args.cmd:
        parser.print_usage()
        sys.exit(0)

    if LoggingOptions.available(args):
        LoggingOptions.collect(args).init_logging()

    try:
        if args.cmd in ("run", "r"):
            run(BuildOptions.collect(args), GraphOptions.collect(args), RunOptions.collect(args))

        elif args.cmd in ("query", "q"):
            if not args.query_cmd:
                parser.print_usage()
                sys.exit(0)

            context = _load_build_state(BuildOptions.collect(args))

            if args.query_cmd == "ls":
                ls(context)
            elif args.query_cmd in ("describe", "d"):
                describe(context, GraphOptions.collect(args))
            else:
                assert False, args.query_cmd

        else:
            parser.print_usage()

    except (ProjectLoaderError, UnknownObjectError) as exc:
        logger.debug("build failed", exc_info=True)
        print("error:", exc, file=sys.stderr)
        sys.exit(1)

    sys.exit(0)


def main(prog: str = "skiff", argv: list[str] | None = None) -> NoReturn:
    profile_outfile = os.getenv("SKIFF_PROFILING")
    if profile_outfile:
        import cProfile as profile

        with open(profile_outfile, "w"):  # Make sure the file exists
            pass

        prof = profile.Profile()
        try:
            prof.runcall(main_internal, prog, argv)
        finally:
            prof.dump_stats(profile_outfile)
    else:
        main_internal(prog, argv)


if __name__ == "__main__":
    main()
