"""Failure tracking across a session."""

from dataclasses import dataclass

from netinsights.contracts.enums import TaskState
from netinsights.contracts.records import TaskId, TaskRecord


@dataclass(frozen=True, slots=True)
class FailureStats:
    """Identifiers of failed tasks in insertion order."""

    task_ids: tuple[TaskId, ...] = ()

    @property
    def count(self) -> int:
        return len(self.task_ids)

    def insert(self, task: TaskRecord) -> "FailureStats":
        if task.state != TaskState.FAILURE:
            return self
        return FailureStats(task_ids=(*self.task_ids, task.task_id))
