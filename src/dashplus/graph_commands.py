"""Graph query commands for the dashplus CLI."""

import json
from typing import Literal

from cyclopts import App

from dashplus.graph.export import to_dot, to_mermaid
from dashplus.models import TraversalRecord

graph_app = App(name="graph", help="Query relationships between tasks")

OutputFormat = Literal["text", "json", "dot", "mermaid"]


def _print_records(title: str, records: list[TraversalRecord]) -> None:
    if not records:
        return
    print(f"{title}:")
    for record in records:
        print(f"  [{record.depth}] {record.task.id} {record.task.content} ({record.link.link_type})")
    print()


@graph_app.command
def backlinks(
    task_id: str,
    type: str | None = None,
    depth: int = 1,
    indirect: bool = False,
) -> None:
    """List tasks linking to a task."""
    from dashplus.cli import get_queries

    result = get_queries().get_backlinks(task_id, link_type=type, depth=depth, include_indirect=indirect)
    if not result["count"]:
        print(f"No backlinks found for task {task_id}")
        return
    _print_records(f"Backlinks of {task_id}", result["backlinks"])


@graph_app.command
def forward(
    task_id: str,
    type: str | None = None,
    depth: int = 1,
    indirect: bool = False,
) -> None:
    """List tasks a task links to."""
    from dashplus.cli import get_queries

    result = get_queries().get_forward_links(task_id, link_type=type, depth=depth, include_indirect=indirect)
    if not result["count"]:
        print(f"No forward links found for task {task_id}")
        return
    _print_records(f"Forward links of {task_id}", result["forward_links"])


@graph_app.command
def neighborhood(task_id: str) -> None:
    """List the immediate neighbors of a task."""
    from dashplus.cli import get_queries

    result = get_queries().get_neighborhood(task_id)
    print(f"Task {task_id} has {result['total_neighbors']} neighbor(s)\n")
    _print_records("Backlinks", result["backlinks"])
    _print_records("Forward links", result["forward_links"])


@graph_app.command
def related(
    task_id: str,
    depth: int | None = None,
    types: str | None = None,
    projects: bool = False,
    format: OutputFormat | None = None,
) -> None:
    """Show the graph of tasks related to a task.

    Args:
        task_id: Task to start from
        depth: Maximum hop distance (defaults to graph.depth)
        types: Comma-separated link types to follow
        projects: Include project nodes
        format: Output format (defaults to graph.format)
    """
    from dashplus.cli import get_queries
    from dashplus.config import get_config

    config = get_config()
    depth = depth if depth is not None else config.get_int("graph.depth", 2)
    format = format or config.get("graph.format")
    link_types = [t.strip() for t in types.split(",") if t.strip()] if types else None

    graph = get_queries().get_related_graph(task_id, depth=depth, link_types=link_types, include_projects=projects)

    if format == "json":
        print(json.dumps(graph.to_dict(), indent=2, ensure_ascii=False))
    elif format == "dot":
        print(to_dot(graph), end="")
    elif format == "mermaid":
        print(to_mermaid(graph), end="")
    else:
        print(f"Graph around {task_id}: {graph.node_count} node(s), {graph.edge_count} edge(s)\n")
        for node in graph.nodes:
            print(f"  {node.symbol} {node.id} {node.content} ({node.status})")
        print()
        for edge in graph.edges:
            print(f"  {edge.source} --[{edge.link_type}]--> {edge.target}")
        for cycle in graph.cycles:
            print(f"\nCycle: {' -> '.join(cycle.path)}")


@graph_app.command
def blocking(task_id: str) -> None:
    """List tasks waiting on or blocked by a task."""
    from dashplus.cli import get_queries

    result = get_queries().get_blocking_chain(task_id)
    if not result["count"]:
        print(f"Task {task_id} blocks nothing")
        return
    _print_records(f"Blocked by {task_id}", result["blocked_tasks"])


@graph_app.command
def dependencies(task_id: str) -> None:
    """List tasks a task waits on or is blocked by."""
    from dashplus.cli import get_queries

    result = get_queries().get_dependency_chain(task_id)
    if not result["count"]:
        print(f"Task {task_id} has no dependencies")
        return
    _print_records(f"Dependencies of {task_id}", result["dependencies"])


@graph_app.command
def cycles(task_id: str | None = None) -> None:
    """Find cycles from one task, or across all tasks when no task is given."""
    from dashplus.cli import get_queries

    queries = get_queries()
    if task_id:
        found = [cycle.to_dict() for cycle in queries.detect_cycles(task_id)["cycles"]]
    else:
        found = queries.get_tasks_in_cycles()["cycles"]

    if not found:
        print("No cycles found")
        return

    print(f"Found {len(found)} cycle(s):\n")
    for i, cycle in enumerate(found, 1):
        types = ", ".join(cycle["link_types"])
        print(f"{i}. {' -> '.join(cycle['path'])} (length {cycle['length']}; {types})")


@graph_app.command
def importance(task_id: str) -> None:
    """Score how important a task is."""
    from dashplus.cli import get_queries

    report = get_queries().get_task_importance(task_id)
    print(f"Task: {report.task_id}")
    print(f"Ranking: {report.ranking}")
    print(f"Score: {report.importance_score:g}")
    print(f"Backlinks: {report.backlink_count}")
    print(f"Forward links: {report.forward_link_count}")
    print(f"Blocking: {report.blocking_count}")


@graph_app.command
def orphans() -> None:
    """List tasks with no links and no project."""
    from dashplus.cli import get_queries

    tasks = get_queries().get_orphan_tasks()
    if not tasks:
        print("No orphan tasks")
        return

    print(f"Found {len(tasks)} orphan task(s):\n")
    for task in tasks:
        print(f"{task.symbol} {task.id}: {task.content}")
