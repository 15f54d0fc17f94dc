"""Pytest configuration.

Run pytest from this project's root. pythonpath in pyproject.toml puts src/
and the project root on sys.path, so tests import ``vertex_lint`` and the
shared ``tests.estree_builders`` fixtures directly.
"""

from collections.abc import Iterator

import pytest

from vertex_lint.infrastructure.di.container import VertexLintContainer


@pytest.fixture(autouse=True)
def _reset_container() -> Iterator[None]:
    """Keep the process-wide container from leaking configuration between tests."""
    VertexLintContainer._instance = None
    yield
    VertexLintContainer._instance = None
