from pathlib import Path
from tempfile import TemporaryDirectory
from typing import Iterator

from pytest import fixture

from skiff.core.testing import skiff_ctx, skiff_project  # noqa: F401

EXAMPLES_DIR = Path(__file__).parent.parent / "examples"


@fixture
def tempdir() -> Iterator[Path]:
    with TemporaryDirectory() as tempdir:
        yield Path(tempdir)


@fixture
def extra_properties_example() -> Path:
    return EXAMPLES_DIR / "extra-properties"
