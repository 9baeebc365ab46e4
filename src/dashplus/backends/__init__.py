"""Backend implementations."""

from dashplus.backends.memory import MemoryBackend
from dashplus.backends.yaml_store import YamlBackend

__all__ = ["MemoryBackend", "YamlBackend"]
