"""Readers for task record exports from the external log store."""

from netinsights.sources.json_source import JSONTaskSource, LoadResult, load_tasks

__all__ = [
    "JSONTaskSource",
    "LoadResult",
    "load_tasks",
]
