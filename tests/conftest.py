"""Shared fixtures for dashplus tests."""

from collections.abc import Callable

import pytest

from dashplus.backends.memory import MemoryBackend
from dashplus.cli import configure_logging
from dashplus.graph.queries import GraphQueries

GraphBuilder = Callable[..., MemoryBackend]


@pytest.fixture(autouse=True)
def quiet_logging() -> None:
    """Keep log lines out of captured command output."""
    configure_logging("critical")


@pytest.fixture
def backend() -> MemoryBackend:
    """Create an empty in-memory backend."""
    return MemoryBackend()


@pytest.fixture
def queries(backend: MemoryBackend) -> GraphQueries:
    """Create graph queries over the in-memory backend."""
    return GraphQueries(backend)


@pytest.fixture
def build_graph(backend: MemoryBackend) -> GraphBuilder:
    """Populate the backend from task ids and (source, target, type) triples.

    Link ids are ``source-target-type`` so tests can refer to them.
    """

    def build(tasks: str | list[str], links: list[tuple[str, str, str]] = ()) -> MemoryBackend:
        for task_id in tasks:
            backend.add_task(f"Task {task_id}", task_id=task_id)
        for source_id, target_id, link_type in links:
            backend.add_link(source_id, target_id, link_type, link_id=f"{source_id}-{target_id}-{link_type}")
        return backend

    return build
