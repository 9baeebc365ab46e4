"""Data models for the dashplus task graph."""

from dataclasses import dataclass, field
from typing import Any

LINK_TYPES = ("waiting", "delegated", "references", "moved", "blocks", "related")
TASK_STATUSES = ("active", "completed", "cancelled", "waiting")

# Link types that make up blocking and dependency chains
BLOCKING_LINK_TYPES = ("waiting", "blocks")


@dataclass
class Task:
    """Represents a task or note stored in the key-value store."""

    id: str
    content: str
    status: str = "active"
    project_id: str | None = None
    symbol: str = "-"
    type: str = "task"


@dataclass
class Project:
    """Represents a project that tasks may belong to."""

    id: str
    name: str
    status: str = "active"


@dataclass
class Link:
    """Represents a typed, directed link between two tasks."""

    id: str
    source_id: str
    target_id: str
    link_type: str = "related"
    label: str | None = None
    strength: float | None = None


@dataclass
class TraversalRecord:
    """A task reached during a traversal, with the link that reached it."""

    task: Task
    link: Link
    depth: int


@dataclass
class CycleRecord:
    """A closed loop of task ids, first id equal to the last."""

    path: list[str]
    link_types: list[str] = field(default_factory=list)

    @property
    def length(self) -> int:
        """Number of edges in the loop."""
        return len(self.path) - 1

    def to_dict(self) -> dict[str, Any]:
        return {"path": list(self.path), "length": self.length, "link_types": list(self.link_types)}


@dataclass
class GraphNode:
    """Node summary used in graph snapshots."""

    id: str
    type: str = "task"
    content: str = ""
    status: str = "active"
    symbol: str = "-"
    project_id: str | None = None


@dataclass
class GraphEdge:
    """Edge summary used in graph snapshots."""

    id: str
    source: str
    target: str
    link_type: str
    label: str | None = None
    strength: float | None = None


@dataclass
class GraphSnapshot:
    """Nodes, edges and cycles collected by a single related-graph query."""

    nodes: list[GraphNode] = field(default_factory=list)
    edges: list[GraphEdge] = field(default_factory=list)
    cycles: list[CycleRecord] = field(default_factory=list)

    @property
    def node_count(self) -> int:
        return len(self.nodes)

    @property
    def edge_count(self) -> int:
        return len(self.edges)

    def to_dict(self) -> dict[str, Any]:
        """Convert the snapshot to plain data for JSON output."""
        return {
            "nodes": [vars(node).copy() for node in self.nodes],
            "edges": [vars(edge).copy() for edge in self.edges],
            "cycles": [cycle.to_dict() for cycle in self.cycles],
            "node_count": self.node_count,
            "edge_count": self.edge_count,
        }


@dataclass
class ImportanceReport:
    """Heuristic importance of a single task."""

    task_id: str
    backlink_count: int
    forward_link_count: int
    blocking_count: int
    importance_score: float
    ranking: str
