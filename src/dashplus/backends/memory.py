"""In-memory backend implementation."""

import uuid

import structlog

from dashplus.backend import Backend, ProjectNotFoundError, TaskNotFoundError
from dashplus.models import LINK_TYPES, Link, Project, Task

logger = structlog.get_logger()


class MemoryBackend(Backend):
    """Backend keeping tasks, projects and links in process memory.

    Links are indexed by source and target so the per-node lookups used by
    traversals do not scan the whole link list.
    """

    def __init__(self) -> None:
        self.tasks: dict[str, Task] = {}
        self.projects: dict[str, Project] = {}
        self.links: dict[str, Link] = {}
        self._by_source: dict[str, list[Link]] = {}
        self._by_target: dict[str, list[Link]] = {}

    def add_task(
        self,
        content: str,
        task_id: str | None = None,
        status: str = "active",
        project_id: str | None = None,
        symbol: str = "-",
        task_type: str = "task",
    ) -> Task:
        """Store a task and return it.

        Args:
            content: Task text
            task_id: Explicit ID (a random one is generated when omitted)
            status: Task status
            project_id: Optional project the task belongs to
            symbol: Display symbol
            task_type: Either "task" or "note"

        Returns:
            The stored task
        """
        task = Task(
            id=task_id or str(uuid.uuid4()),
            content=content,
            status=status,
            project_id=project_id,
            symbol=symbol,
            type=task_type,
        )
        self.tasks[task.id] = task
        logger.debug("Task stored", task_id=task.id)
        return task

    def add_project(self, name: str, project_id: str | None = None, status: str = "active") -> Project:
        """Store a project and return it."""
        project = Project(id=project_id or str(uuid.uuid4()), name=name, status=status)
        self.projects[project.id] = project
        logger.debug("Project stored", project_id=project.id)
        return project

    def add_link(
        self,
        source_id: str,
        target_id: str,
        link_type: str,
        label: str | None = None,
        strength: float | None = None,
        link_id: str | None = None,
    ) -> Link:
        """Store a link between two tasks.

        Self-loops, unknown link types and strengths that are not numbers in
        [0, 1] are rejected.
        Link ends are not checked against stored tasks.

        Raises:
            ValueError: If the link is invalid
        """
        if source_id == target_id:
            raise ValueError("Cannot create self-loop: source and target cannot be the same")
        if link_type not in LINK_TYPES:
            raise ValueError(f"Invalid link type: {link_type}")
        if strength is not None and (isinstance(strength, bool) or not isinstance(strength, (int, float))):
            raise ValueError(f"Link strength must be a number, got {strength!r}")
        if strength is not None and not 0 <= strength <= 1:
            raise ValueError("Link strength must be between 0 and 1")

        link = Link(
            id=link_id or str(uuid.uuid4()),
            source_id=source_id,
            target_id=target_id,
            link_type=link_type,
            label=label,
            strength=strength,
        )
        self.links[link.id] = link
        self._by_source.setdefault(source_id, []).append(link)
        self._by_target.setdefault(target_id, []).append(link)
        logger.debug("Link stored", link_id=link.id, source_id=source_id, target_id=target_id, link_type=link_type)
        return link

    def read_task(self, task_id: str) -> Task:
        try:
            return self.tasks[task_id]
        except KeyError:
            raise TaskNotFoundError(task_id) from None

    def read_project(self, project_id: str) -> Project:
        try:
            return self.projects[project_id]
        except KeyError:
            raise ProjectNotFoundError(project_id) from None

    def list_tasks(self) -> list[Task]:
        return list(self.tasks.values())

    def list_links(self) -> list[Link]:
        return list(self.links.values())

    def links_by_source(self, task_id: str) -> list[Link]:
        return list(self._by_source.get(task_id, []))

    def links_by_target(self, task_id: str) -> list[Link]:
        return list(self._by_target.get(task_id, []))

    def links_by_entity(self, task_id: str) -> list[Link]:
        links = self.links_by_source(task_id)
        links.extend(self.links_by_target(task_id))
        return links
