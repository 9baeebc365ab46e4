"""Graph query engine over tasks and typed links."""

from dashplus.graph.cycles import detect_cycles, detect_cycles_in_graph
from dashplus.graph.export import to_dot, to_mermaid
from dashplus.graph.importance import calculate_ranking
from dashplus.graph.queries import GraphQueries

__all__ = [
    "GraphQueries",
    "calculate_ranking",
    "detect_cycles",
    "detect_cycles_in_graph",
    "to_dot",
    "to_mermaid",
]
