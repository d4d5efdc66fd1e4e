"""
The `java` plugin. It creates the conventional `main` and `test` source sets of a project.
"""

from __future__ import annotations

import logging

from skiff.core.system.project import Project

MAIN_SOURCE_SET = "main"
TEST_SOURCE_SET = "test"
logger = logging.getLogger(__name__)


def apply(project: Project) -> None:
    for name in (MAIN_SOURCE_SET, TEST_SOURCE_SET):
        project.source_sets.maybe_create(name)
    logger.debug("created source sets %s in project %s", project.source_sets.names(), project.path)
