from __future__ import annotations

import enum
from pathlib import Path
from typing import TYPE_CHECKING

from skiff.core.system.container import NamedContainer, NamedObject

if TYPE_CHECKING:
    from skiff.core.system.project import Project


class Purpose(str, enum.Enum):
    """
    The conventional values for the `purpose` extra property of a source set. Members compare equal to
    their string value.
    """

    PRODUCTION = "production"
    TEST = "test"

    def __str__(self) -> str:
        return self.value


class SourceSet(NamedObject):
    """
    A named grouping of source files. By convention, the sources live in `src/<name>/java` and the resources
    in `src/<name>/resources` relative to the project directory.
    """

    def __init__(self, name: str, project: Project) -> None:
        self.project = project
        super().__init__(name)
        base = project.directory / "src" / name
        self.java_dirs: list[Path] = [base / "java"]
        self.resources_dirs: list[Path] = [base / "resources"]

    def _describe(self) -> str:
        return f"source set {self.name!r} of project {self.project.path!r}"

    def source_files(self) -> list[Path]:
        files: list[Path] = []
        for directory in self.java_dirs:
            if directory.is_dir():
                files.extend(path for path in directory.rglob("*") if path.is_file())
        return sorted(files)


class SourceSetContainer(NamedContainer[SourceSet]):
    def __init__(self, project: Project) -> None:
        super().__init__(f"project {project.path!r} source sets", lambda name: SourceSet(name, project))
