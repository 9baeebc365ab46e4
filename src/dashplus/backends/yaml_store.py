"""YAML file backend implementation."""

from pathlib import Path
from typing import Any

import structlog
import yaml

from dashplus.backends.memory import MemoryBackend

logger = structlog.get_logger()


def _pick(data: dict[str, Any], key: str, legacy_key: str, default: Any = None) -> Any:
    """Read a value stored under its snake_case key or its legacy camelCase key."""
    if key in data:
        return data[key]
    return data.get(legacy_key, default)


class YamlBackend(MemoryBackend):
    """Backend reading a snapshot of the task store from a YAML file.

    The file holds three top-level lists: ``tasks``, ``projects`` and
    ``links``. Keys may be written in snake_case (``source_id``) or in the
    camelCase used by the browser store export (``sourceId``).
    """

    def __init__(self, path: str | Path) -> None:
        """Initialize YAML backend.

        Args:
            path: Path to the YAML store file
        """
        super().__init__()
        self.path = Path(path)
        logger.debug("Initializing YAML backend", path=str(self.path))

        data = self._load()
        for item in data.get("projects") or []:
            self.add_project(name=item.get("name", ""), project_id=str(item["id"]), status=item.get("status", "active"))
        for item in data.get("tasks") or []:
            project_id = _pick(item, "project_id", "projectId")
            self.add_task(
                content=item.get("content", ""),
                task_id=str(item["id"]),
                status=item.get("status", "active"),
                project_id=str(project_id) if project_id is not None else None,
                symbol=item.get("symbol", "-"),
                task_type=item.get("type", "task"),
            )
        for item in data.get("links") or []:
            try:
                self.add_link(
                    source_id=str(_pick(item, "source_id", "sourceId")),
                    target_id=str(_pick(item, "target_id", "targetId")),
                    link_type=_pick(item, "link_type", "linkType", "related"),
                    label=item.get("label"),
                    strength=item.get("strength"),
                    link_id=str(item["id"]) if "id" in item else None,
                )
            except ValueError as e:
                logger.warning("Skipping invalid link in store", link_id=item.get("id"), error=str(e))

        logger.info(
            "YAML backend initialized",
            path=str(self.path),
            tasks=len(self.tasks),
            projects=len(self.projects),
            links=len(self.links),
        )

    def _load(self) -> dict[str, Any]:
        """Load the store file.

        Returns:
            Parsed store contents (empty when the file does not exist)

        Raises:
            ValueError: If the file cannot be read or parsed
        """
        if not self.path.exists():
            logger.debug("Store file does not exist, starting empty", path=str(self.path))
            return {}

        try:
            with open(self.path, "r") as f:
                data = yaml.safe_load(f) or {}
        except Exception as e:
            logger.error("Failed to load store", path=str(self.path), error=str(e))
            raise ValueError(f"Failed to load store from {self.path}: {e}") from e

        if not isinstance(data, dict):
            raise ValueError(f"Store file {self.path} must contain a mapping with tasks, projects and links")
        return data
