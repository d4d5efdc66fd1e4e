"""
This module exports the public API of the skiff build model.

Build scripts should only import from this module.
"""

from nr.stream import Supplier

from skiff.core.system.container import FilteredContainer, NamedContainer, UnknownObjectError
from skiff.core.system.context import BuildError, Context
from skiff.core.system.extra import ExtraProperties, ExtraProperty, UnknownPropertyError
from skiff.core.system.project import Project, ProjectLoaderError
from skiff.core.system.source_set import Purpose, SourceSet
from skiff.core.system.task import Task, TaskStatus, TaskStatusType

__all__ = [
    "BuildError",
    "Context",
    "ExtraProperties",
    "ExtraProperty",
    "FilteredContainer",
    "NamedContainer",
    "Project",
    "ProjectLoaderError",
    "Purpose",
    "SourceSet",
    "Supplier",
    "Task",
    "TaskStatus",
    "TaskStatusType",
    "UnknownObjectError",
    "UnknownPropertyError",
]
