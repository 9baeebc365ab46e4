"""Property tests over randomly generated cyclic graphs."""

import random

import pytest

from dashplus.backends.memory import MemoryBackend
from dashplus.graph.queries import CHAIN_DEPTH_CAP, GraphQueries
from dashplus.models import LINK_TYPES

SEEDS = range(20)


def random_backend(seed: int, max_nodes: int = 12, max_edges: int = 40) -> MemoryBackend:
    """Build a random graph, cycles and parallel edges included."""
    rng = random.Random(seed)
    backend = MemoryBackend()
    node_ids = [f"n{i}" for i in range(rng.randint(2, max_nodes))]
    for node_id in node_ids:
        backend.add_task(f"Task {node_id}", task_id=node_id, project_id=rng.choice([None, None, "p1"]))
    for _ in range(rng.randint(0, max_edges)):
        source_id, target_id = rng.sample(node_ids, 2)
        backend.add_link(source_id, target_id, rng.choice(LINK_TYPES), strength=rng.choice([None, rng.random()]))
    return backend


@pytest.mark.parametrize("seed", SEEDS)
def test_all_queries_terminate(seed: int) -> None:
    """Test that every query finishes within its bounds on cyclic input."""
    backend = random_backend(seed)
    queries = GraphQueries(backend)

    for task in backend.list_tasks():
        for record in queries.get_backlinks(task.id, depth=4, include_indirect=True)["backlinks"]:
            assert 1 <= record.depth <= 4
        for record in queries.get_forward_links(task.id, depth=4, include_indirect=True)["forward_links"]:
            assert 1 <= record.depth <= 4
        for record in queries.get_blocking_chain(task.id)["blocked_tasks"]:
            assert 0 <= record.depth <= CHAIN_DEPTH_CAP
        for record in queries.get_dependency_chain(task.id)["dependencies"]:
            assert 0 <= record.depth <= CHAIN_DEPTH_CAP
        queries.get_neighborhood(task.id)
        queries.get_related_graph(task.id, depth=3)
        queries.get_task_importance(task.id)

    queries.get_orphan_tasks()
    queries.get_tasks_in_cycles()


@pytest.mark.parametrize("seed", SEEDS)
def test_backlink_depth_monotonicity(seed: int) -> None:
    """Test that a deeper walk only adds records beyond the shallower depth."""
    backend = random_backend(seed)
    queries = GraphQueries(backend)

    for task in backend.list_tasks():
        previous: list[tuple[str, int]] = []
        for depth in range(1, 6):
            records = queries.get_backlinks(task.id, depth=depth, include_indirect=True)["backlinks"]
            current = [(record.link.id, record.depth) for record in records]
            assert all(d <= depth for _, d in current)
            assert sorted(pair for pair in current if pair[1] <= depth - 1) == sorted(previous)
            previous = current


@pytest.mark.parametrize("seed", SEEDS)
def test_cycle_records_are_closed(seed: int) -> None:
    """Test that every reported cycle starts and ends on the same task."""
    backend = random_backend(seed)
    queries = GraphQueries(backend)

    cycles = [cycle for task in backend.list_tasks() for cycle in queries.detect_cycles(task.id)["cycles"]]
    cycles.extend(queries.get_related_graph("n0", depth=4).cycles)

    for cycle in cycles:
        assert cycle.path[0] == cycle.path[-1]
        assert cycle.length == len(cycle.path) - 1
        assert len(cycle.link_types) == cycle.length
        # Only the closing task repeats
        assert len(set(cycle.path)) == cycle.length


@pytest.mark.parametrize("seed", SEEDS)
def test_related_graph_has_unique_edges(seed: int) -> None:
    """Test that each link appears at most once in a related graph."""
    backend = random_backend(seed)
    queries = GraphQueries(backend)

    for task in backend.list_tasks():
        graph = queries.get_related_graph(task.id, depth=3)
        edge_ids = [edge.id for edge in graph.edges]
        node_ids = [node.id for node in graph.nodes]
        assert len(edge_ids) == len(set(edge_ids)) == graph.edge_count
        assert len(node_ids) == len(set(node_ids)) == graph.node_count
        assert all(edge.source in node_ids and edge.target in node_ids for edge in graph.edges)
