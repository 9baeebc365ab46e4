"""Backend interface for read access to tasks, projects and links."""

from abc import ABC, abstractmethod

from dashplus.models import Link, Project, Task


class TaskNotFoundError(LookupError):
    """Raised when a task id does not resolve to a stored task."""

    def __init__(self, task_id: str) -> None:
        super().__init__(f"Task {task_id} not found")
        self.task_id = task_id


class ProjectNotFoundError(LookupError):
    """Raised when a project id does not resolve to a stored project."""

    def __init__(self, project_id: str) -> None:
        super().__init__(f"Project {project_id} not found")
        self.project_id = project_id


class Backend(ABC):
    """Abstract base class for entity stores consumed by the graph engine.

    Implementations only read. Lookups by id raise a ``LookupError`` subclass
    when nothing is stored under the id, so callers can tell a missing entity
    apart from an empty result.
    """

    @abstractmethod
    def read_task(self, task_id: str) -> Task:
        """Read a task by ID."""
        pass

    @abstractmethod
    def read_project(self, project_id: str) -> Project:
        """Read a project by ID."""
        pass

    @abstractmethod
    def list_tasks(self) -> list[Task]:
        """List all tasks."""
        pass

    @abstractmethod
    def list_links(self) -> list[Link]:
        """List all links."""
        pass

    @abstractmethod
    def links_by_source(self, task_id: str) -> list[Link]:
        """List links whose source is the given task."""
        pass

    @abstractmethod
    def links_by_target(self, task_id: str) -> list[Link]:
        """List links whose target is the given task."""
        pass

    def links_by_entity(self, task_id: str) -> list[Link]:
        """List links with the given task at either end."""
        return [link for link in self.list_links() if task_id in (link.source_id, link.target_id)]
