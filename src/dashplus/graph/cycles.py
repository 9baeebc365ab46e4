"""Cycle detection over the task link graph.

Cycles are ordinary data here ("A waits on B, B waits on C, C waits on A" is a
real deadlock worth showing), so detection only ever reports them.
"""

from collections.abc import Callable, Iterable, Iterator
from typing import Any

import structlog

from dashplus.backend import Backend
from dashplus.models import CycleRecord, GraphEdge

logger = structlog.get_logger()

Neighbors = Callable[[str], Iterable[tuple[str, str]]]


def _dfs(root: str, neighbors: Neighbors, visited: set[str], cycles: list[CycleRecord]) -> None:
    """Depth-first search from ``root`` appending every cycle closed on the stack.

    ``neighbors`` yields (link type, next task id) pairs. The search uses an
    explicit stack of neighbor iterators instead of recursion.
    """
    path = [root]
    path_types: list[str] = []
    on_stack = {root: 0}
    visited.add(root)
    stack: list[Iterator[tuple[str, str]]] = [iter(neighbors(root))]

    while stack:
        try:
            link_type, next_id = next(stack[-1])
        except StopIteration:
            stack.pop()
            del on_stack[path.pop()]
            if path_types:
                path_types.pop()
            continue

        if next_id in on_stack:
            start = on_stack[next_id]
            cycle = CycleRecord(path=path[start:] + [next_id], link_types=path_types[start:] + [link_type])
            logger.debug("Cycle detected", path=cycle.path)
            cycles.append(cycle)
            continue
        if next_id in visited:
            continue

        visited.add(next_id)
        on_stack[next_id] = len(path)
        path.append(next_id)
        path_types.append(link_type)
        stack.append(iter(neighbors(next_id)))


def detect_cycles(backend: Backend, task_id: str) -> dict[str, Any]:
    """Detect cycles reachable along outgoing links from a task.

    Args:
        backend: Store to read links from
        task_id: Task to start the search from

    Returns:
        Dictionary with ``task_id``, ``has_cycles`` and ``cycles``
    """

    def neighbors(current_id: str) -> Iterable[tuple[str, str]]:
        return [(link.link_type, link.target_id) for link in backend.links_by_source(current_id)]

    cycles: list[CycleRecord] = []
    _dfs(task_id, neighbors, set(), cycles)

    logger.debug("Cycle detection finished", task_id=task_id, cycles=len(cycles))
    return {
        "task_id": task_id,
        "has_cycles": len(cycles) > 0,
        "cycles": cycles,
    }


def detect_cycles_in_graph(node_ids: Iterable[str], edges: Iterable[GraphEdge]) -> list[CycleRecord]:
    """Detect cycles in an explicit node and edge set.

    Only edges whose source is in ``node_ids`` are followed. A search is
    started from every node not reached by an earlier search.
    """
    node_ids = list(node_ids)
    adjacency: dict[str, list[tuple[str, str]]] = {node_id: [] for node_id in node_ids}
    for edge in edges:
        if edge.source in adjacency:
            adjacency[edge.source].append((edge.link_type, edge.target))

    def neighbors(current_id: str) -> Iterable[tuple[str, str]]:
        return adjacency.get(current_id, [])

    cycles: list[CycleRecord] = []
    visited: set[str] = set()
    for node_id in node_ids:
        if node_id not in visited:
            _dfs(node_id, neighbors, visited, cycles)

    return cycles
