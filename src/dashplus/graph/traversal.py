"""Depth-bounded walkers over the task link graph."""

from collections import deque
from collections.abc import Collection

import structlog

from dashplus.backend import Backend, TaskNotFoundError
from dashplus.models import Link, TraversalRecord

logger = structlog.get_logger()

OUTGOING = "outgoing"
INCOMING = "incoming"
BOTH = "both"
DIRECTIONS = (OUTGOING, INCOMING, BOTH)


def coerce_depth(depth: object, default: int) -> int:
    """Return ``depth`` if it is a positive integer, otherwise ``default``."""
    if isinstance(depth, bool) or not isinstance(depth, int) or depth < 1:
        logger.debug("Invalid depth, using default", depth=depth, default=default)
        return default
    return depth


def _edges(backend: Backend, task_id: str, direction: str) -> list[tuple[Link, str]]:
    """List (link, far end id) pairs leaving ``task_id`` in ``direction``."""
    edges: list[tuple[Link, str]] = []
    if direction in (OUTGOING, BOTH):
        edges.extend((link, link.target_id) for link in backend.links_by_source(task_id))
    if direction in (INCOMING, BOTH):
        edges.extend((link, link.source_id) for link in backend.links_by_target(task_id))
    return edges


def walk(
    backend: Backend,
    seed_id: str,
    max_depth: int = 1,
    direction: str = OUTGOING,
    link_types: Collection[str] | str | None = None,
) -> list[TraversalRecord]:
    """Walk the link graph breadth-first from a seed task.

    Every edge leaving an expanded task yields one record carrying the task at
    the far end and the edge's 1-indexed hop distance from the seed. A task is
    expanded at most once, at the depth it was first discovered, so cyclic
    graphs terminate. Edges whose far end is missing from the store are
    skipped with a warning.

    Args:
        backend: Store to read tasks and links from
        seed_id: Task to start from
        max_depth: Maximum hop distance of returned records
        direction: One of ``outgoing``, ``incoming`` or ``both``
        link_types: Optional set of link types to follow (None follows all,
            a single string is one type)

    Returns:
        Traversal records in discovery order
    """
    if direction not in DIRECTIONS:
        raise ValueError(f"Unknown direction: {direction}")
    if isinstance(link_types, str):
        link_types = {link_types}

    records: list[TraversalRecord] = []
    visited = {seed_id}
    queue: deque[tuple[str, int]] = deque([(seed_id, 1)])

    while queue:
        current_id, depth = queue.popleft()
        for link, other_id in _edges(backend, current_id, direction):
            if link_types is not None and link.link_type not in link_types:
                continue

            try:
                task = backend.read_task(other_id)
            except TaskNotFoundError:
                logger.warning("Task not found, skipping link", task_id=other_id, link_id=link.id)
                continue

            records.append(TraversalRecord(task=task, link=link, depth=depth))

            if depth < max_depth and other_id not in visited:
                visited.add(other_id)
                queue.append((other_id, depth + 1))

    logger.debug(
        "Traversal finished",
        seed_id=seed_id,
        direction=direction,
        max_depth=max_depth,
        records=len(records),
        visited=len(visited),
    )
    return records
