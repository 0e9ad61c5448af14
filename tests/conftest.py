import pytest

from declmeta import MetadataRegistry
from tests.fixtures import sample


@pytest.fixture
def dotted():
    """Build dotted names for declarations in the sample module."""

    def _dotted(name: str) -> str:
        return f"{sample.__name__}.{name}"

    return _dotted


@pytest.fixture
def registry():
    """Provide an empty registry isolated from the default one."""
    return MetadataRegistry()
