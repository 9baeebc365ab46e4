"""dashplus - graph queries over a personal task and note store."""

__version__ = "0.1.0"
