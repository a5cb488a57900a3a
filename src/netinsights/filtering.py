# src/netinsights/filtering.py
"""Task filtering for an analysis scope.

A TaskFilter decides which task records belong to the current insights
scope ("all tasks", "failed requests to api.example.com", ...). Changing
the filter means the snapshot is rebuilt from scratch; the aggregator has
no way to remove a task once it has been inserted.

Empty criteria match everything. All configured criteria must match.
"""

from collections.abc import Iterable, Iterator

from pydantic import BaseModel, Field, field_validator

from netinsights.contracts.enums import TaskState
from netinsights.contracts.records import TaskRecord


class TaskFilter(BaseModel):
    """Predicate over task records."""

    model_config = {"frozen": True, "extra": "forbid"}

    states: frozenset[TaskState] = Field(
        default_factory=frozenset,
        description="Task states to include (empty = all states)",
    )
    host: str | None = Field(
        default=None,
        description="Exact host name the request URL must have",
    )
    url_contains: str | None = Field(
        default=None,
        description="Substring the request URL must contain",
    )
    methods: frozenset[str] = Field(
        default_factory=frozenset,
        description="HTTP methods to include, case-insensitive (empty = all methods)",
    )
    min_duration: float | None = Field(
        default=None,
        ge=0,
        description="Minimum task duration in seconds; tasks without a duration never match",
    )

    @field_validator("methods", mode="before")
    @classmethod
    def normalize_methods(cls, v: object) -> object:
        """Upper-case method names so matching is case-insensitive."""
        if isinstance(v, str):
            return frozenset({v.upper()})
        if isinstance(v, (list, tuple, set, frozenset)):
            return frozenset(str(m).upper() for m in v)
        return v

    @field_validator("host", mode="before")
    @classmethod
    def normalize_host(cls, v: object) -> object:
        if isinstance(v, str):
            return v.lower()
        return v

    @property
    def is_unrestricted(self) -> bool:
        return not self.states and not self.methods and self.host is None and self.url_contains is None and self.min_duration is None

    def matches(self, task: TaskRecord) -> bool:
        if self.states and task.state not in self.states:
            return False
        if self.methods and (task.method is None or task.method.upper() not in self.methods):
            return False
        if self.host is not None and task.host != self.host:
            return False
        if self.url_contains is not None and (task.url is None or self.url_contains not in task.url):
            return False
        if self.min_duration is not None:
            duration = task.duration
            if duration is None or duration < self.min_duration:
                return False
        return True

    def apply(self, tasks: Iterable[TaskRecord]) -> Iterator[TaskRecord]:
        """Yield the tasks that match, preserving order."""
        return (task for task in tasks if self.matches(task))
