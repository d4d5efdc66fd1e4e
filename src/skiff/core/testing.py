"""
Provides pytest fixtures for testing build scripts and plugins.
"""

from pathlib import Path
from tempfile import TemporaryDirectory
from typing import Iterator

from pytest import fixture

from skiff.core.system.context import Context
from skiff.core.system.project import Project


@fixture
def skiff_ctx() -> Context:
    return Context()


@fixture
def skiff_project(skiff_ctx: Context) -> Iterator[Project]:
    with TemporaryDirectory() as tempdir:
        project = Project("test", Path(tempdir), skiff_ctx)
        skiff_ctx.root_project = project
        with project.as_current():
            yield project
