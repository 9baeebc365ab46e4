"""Graph queries over tasks and their typed links."""

from collections.abc import Iterable
from dataclasses import replace
from typing import Any

import structlog

from dashplus.backend import Backend, ProjectNotFoundError, TaskNotFoundError
from dashplus.graph.cycles import detect_cycles, detect_cycles_in_graph
from dashplus.graph.importance import score_importance
from dashplus.graph.traversal import BOTH, INCOMING, OUTGOING, coerce_depth, walk
from dashplus.models import (
    BLOCKING_LINK_TYPES,
    GraphEdge,
    GraphNode,
    GraphSnapshot,
    ImportanceReport,
    Link,
    Task,
    TraversalRecord,
)

logger = structlog.get_logger()

# Hard limit on blocking and dependency chain depth, whatever the graph looks like
CHAIN_DEPTH_CAP = 10

PROJECT_LINK_TYPE = "project"


def _task_node(task: Task) -> GraphNode:
    return GraphNode(
        id=task.id,
        type="task",
        content=task.content,
        status=task.status,
        symbol=task.symbol,
        project_id=task.project_id,
    )


def _link_edge(link: Link) -> GraphEdge:
    return GraphEdge(
        id=link.id,
        source=link.source_id,
        target=link.target_id,
        link_type=link.link_type,
        label=link.label,
        strength=link.strength,
    )


class GraphQueries:
    """Read-only queries over the task link graph held by a backend.

    Every call walks the graph from scratch; nothing is cached between calls.
    """

    def __init__(self, backend: Backend) -> None:
        self.backend = backend

    def _linked(
        self,
        task_id: str,
        direction: str,
        link_type: str | None,
        depth: int,
        include_indirect: bool,
    ) -> list[TraversalRecord]:
        max_depth = coerce_depth(depth, 1) if include_indirect else 1
        link_types = {link_type} if link_type else None
        return walk(self.backend, task_id, max_depth=max_depth, direction=direction, link_types=link_types)

    def get_backlinks(
        self,
        task_id: str,
        link_type: str | None = None,
        depth: int = 1,
        include_indirect: bool = False,
    ) -> dict[str, Any]:
        """Get tasks that link to this task.

        Args:
            task_id: Target task ID
            link_type: Only follow links of this type (None follows all)
            depth: Maximum hop distance when ``include_indirect`` is set
            include_indirect: Follow backlinks of backlinks up to ``depth``

        Returns:
            Dictionary with ``task_id``, ``backlinks`` and ``count``
        """
        records = self._linked(task_id, INCOMING, link_type, depth, include_indirect)
        return {"task_id": task_id, "backlinks": records, "count": len(records)}

    def get_forward_links(
        self,
        task_id: str,
        link_type: str | None = None,
        depth: int = 1,
        include_indirect: bool = False,
    ) -> dict[str, Any]:
        """Get tasks this task links to.

        Same options as :meth:`get_backlinks`, following links in their own
        direction.

        Returns:
            Dictionary with ``task_id``, ``forward_links`` and ``count``
        """
        records = self._linked(task_id, OUTGOING, link_type, depth, include_indirect)
        return {"task_id": task_id, "forward_links": records, "count": len(records)}

    def get_neighborhood(self, task_id: str) -> dict[str, Any]:
        """Get the immediate neighbors of a task in both directions."""
        backlinks = self.get_backlinks(task_id)
        forward_links = self.get_forward_links(task_id)
        return {
            "task_id": task_id,
            "backlinks": backlinks["backlinks"],
            "forward_links": forward_links["forward_links"],
            "total_neighbors": backlinks["count"] + forward_links["count"],
        }

    def get_related_graph(
        self,
        task_id: str,
        depth: int = 2,
        link_types: Iterable[str] | str | None = None,
        include_projects: bool = False,
    ) -> GraphSnapshot:
        """Build the graph of tasks related to a task in either direction.

        Nodes are deduplicated by task ID and edges by link ID, so a link
        reached from both of its ends appears once. Cycles among the collected
        nodes and edges are attached to the snapshot.

        Args:
            task_id: Task to start from
            depth: Maximum hop distance from the task
            link_types: Only follow links of these types (None follows all, a
                single string is one type)
            include_projects: Add project nodes and task-to-project edges

        Returns:
            Graph snapshot
        """
        depth = coerce_depth(depth, 2)
        if isinstance(link_types, str):
            type_filter = {link_types}
        else:
            type_filter = set(link_types) if link_types is not None else None

        try:
            seed = self.backend.read_task(task_id)
        except TaskNotFoundError:
            logger.warning("Task not found, returning empty graph", task_id=task_id)
            return GraphSnapshot()

        nodes: dict[str, GraphNode] = {seed.id: _task_node(seed)}
        edges: dict[str, GraphEdge] = {}
        for record in walk(self.backend, task_id, max_depth=depth, direction=BOTH, link_types=type_filter):
            nodes.setdefault(record.task.id, _task_node(record.task))
            edges.setdefault(record.link.id, _link_edge(record.link))

        cycles = detect_cycles_in_graph(nodes.keys(), edges.values())

        if include_projects:
            self._add_projects(nodes, edges)

        snapshot = GraphSnapshot(nodes=list(nodes.values()), edges=list(edges.values()), cycles=cycles)
        logger.debug(
            "Related graph built",
            task_id=task_id,
            depth=depth,
            node_count=snapshot.node_count,
            edge_count=snapshot.edge_count,
            cycles=len(cycles),
        )
        return snapshot

    def _add_projects(self, nodes: dict[str, GraphNode], edges: dict[str, GraphEdge]) -> None:
        """Add a node for each task's project plus a task-to-project edge."""
        for node in list(nodes.values()):
            if node.type != "task" or not node.project_id:
                continue
            try:
                project = self.backend.read_project(node.project_id)
            except ProjectNotFoundError:
                logger.warning("Project not found, skipping", project_id=node.project_id, task_id=node.id)
                continue

            existing = nodes.get(project.id)
            if existing is not None and existing.type != "project":
                logger.warning("Project ID collides with a task, skipping", project_id=project.id, task_id=node.id)
                continue

            nodes.setdefault(
                project.id,
                GraphNode(id=project.id, type="project", content=project.name, status=project.status, symbol="△"),
            )
            edge_id = f"{node.id}:{PROJECT_LINK_TYPE}:{project.id}"
            edges[edge_id] = GraphEdge(id=edge_id, source=node.id, target=project.id, link_type=PROJECT_LINK_TYPE)

    def _chain(self, task_id: str, direction: str) -> list[TraversalRecord]:
        # Chain depths count the first hop as 0
        records = walk(
            self.backend,
            task_id,
            max_depth=CHAIN_DEPTH_CAP + 1,
            direction=direction,
            link_types=BLOCKING_LINK_TYPES,
        )
        return [replace(record, depth=record.depth - 1) for record in records]

    def get_blocking_chain(self, task_id: str) -> dict[str, Any]:
        """Find all tasks waiting on or blocked by a task, transitively.

        Returns:
            Dictionary with ``task_id``, ``blocked_tasks`` and ``count``
        """
        blocked = self._chain(task_id, INCOMING)
        return {"task_id": task_id, "blocked_tasks": blocked, "count": len(blocked)}

    def get_dependency_chain(self, task_id: str) -> dict[str, Any]:
        """Find all tasks a task waits on or is blocked by, transitively.

        Returns:
            Dictionary with ``task_id``, ``dependencies`` and ``count``
        """
        dependencies = self._chain(task_id, OUTGOING)
        return {"task_id": task_id, "dependencies": dependencies, "count": len(dependencies)}

    def detect_cycles(self, task_id: str) -> dict[str, Any]:
        """Detect cycles reachable along outgoing links from a task."""
        return detect_cycles(self.backend, task_id)

    def get_task_importance(self, task_id: str) -> ImportanceReport:
        """Score how important a task is from its backlinks and blocking chain."""
        backlinks = self.get_backlinks(task_id)
        forward_links = self.get_forward_links(task_id)
        blocking = self.get_blocking_chain(task_id)
        return score_importance(
            task_id,
            backlinks["backlinks"],
            forward_links["forward_links"],
            blocking["blocked_tasks"],
        )

    def get_orphan_tasks(self) -> list[Task]:
        """Find tasks with no links and no project."""
        linked: set[str] = set()
        for link in self.backend.list_links():
            linked.add(link.source_id)
            linked.add(link.target_id)

        orphans = [task for task in self.backend.list_tasks() if task.id not in linked and not task.project_id]
        logger.debug("Orphan tasks found", count=len(orphans))
        return orphans

    def get_tasks_in_cycles(self) -> dict[str, Any]:
        """Find every task that takes part in a cycle.

        Cycle detection runs from each task in turn, so a cycle reachable from
        several tasks is reported once per task.

        Returns:
            Dictionary with ``tasks`` (task IDs), ``cycles`` and ``count``
        """
        tasks: dict[str, None] = {}
        cycles: list[dict[str, Any]] = []

        for task in self.backend.list_tasks():
            result = detect_cycles(self.backend, task.id)
            for cycle in result["cycles"]:
                tasks.update(dict.fromkeys(cycle.path))
                cycles.append({**cycle.to_dict(), "involved_tasks": list(cycle.path)})

        logger.debug("Tasks in cycles found", count=len(tasks), cycles=len(cycles))
        return {"tasks": list(tasks), "cycles": cycles, "count": len(tasks)}
