"""Status values shared between the record contracts and the aggregator."""

from enum import StrEnum


class TaskState(StrEnum):
    """Lifecycle state of a network task.

    PENDING tasks are still in flight and are never aggregated.
    """

    PENDING = "pending"
    SUCCESS = "success"
    FAILURE = "failure"
