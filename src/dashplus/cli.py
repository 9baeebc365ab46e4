"""CLI for dashplus."""

from typing import Annotated, Literal

import structlog
from cyclopts import App, Parameter

from dashplus.backend import Backend, TaskNotFoundError
from dashplus.backends import YamlBackend
from dashplus.config import get_config
from dashplus.config_commands import config_app
from dashplus.graph import GraphQueries
from dashplus.graph_commands import graph_app

logger = structlog.get_logger()

app = App(
    help="dashplus - Query the link graph of a personal task store",
)

app.command(graph_app)
app.command(config_app)


def configure_logging(log_level: str) -> None:
    """Configure structlog with the specified log level."""
    structlog.configure(wrapper_class=structlog.make_filtering_bound_logger(min_level=log_level.lower()))


def get_backend() -> Backend:
    """Get the configured backend."""
    config = get_config()
    store_path = config.get("store.path")
    if not store_path:
        raise ValueError("Store path not configured. Set it using:\n  dashplus config set store.path <file>")
    return YamlBackend(path=store_path)


def get_queries() -> GraphQueries:
    """Get graph queries over the configured backend."""
    return GraphQueries(get_backend())


@app.command
def show(task_id: str) -> None:
    """Show a task and its immediate links."""
    backend = get_backend()
    try:
        task = backend.read_task(task_id)
    except TaskNotFoundError as e:
        print(e)
        return

    print(f"Task: {task.id}")
    print(f"Content: {task.symbol} {task.content}")
    print(f"Status: {task.status}")
    if task.project_id:
        print(f"Project: {task.project_id}")

    links = backend.links_by_entity(task.id)
    if links:
        print("Links:")
        for link in links:
            label = f" ({link.label})" if link.label else ""
            print(f"  {link.source_id} --[{link.link_type}]--> {link.target_id}{label}")


@app.command(name="list")
def list_tasks(status: str | None = None) -> None:
    """List tasks, optionally only those with the given status."""
    tasks = get_backend().list_tasks()
    if status:
        tasks = [task for task in tasks if task.status == status]

    print(f"Found {len(tasks)} task(s):\n")
    for task in tasks:
        status_marker = "●" if task.status == "active" else "○"
        print(f"{status_marker} {task.id}: {task.symbol} {task.content}")


@app.meta.default
def main(
    *tokens: Annotated[str, Parameter(show=False, allow_leading_hyphen=True)],
    log_level: Literal["debug", "info", "warning", "error", "critical"] = "critical",
) -> None:
    """Main entry point with global options."""
    configure_logging(log_level)
    app(tokens)


def run() -> None:
    """Console script entry point."""
    app.meta()


if __name__ == "__main__":
    run()
