"""Redirect accounting across a session."""

from dataclasses import dataclass

from netinsights.contracts.records import TaskId, TaskRecord


@dataclass(frozen=True, slots=True)
class RedirectStats:
    """Redirects observed across inserted tasks.

    Attributes:
        count: Total redirects. A single task can be redirected multiple
            times, so this is a sum of redirect counts, not a task count.
        time_lost: Seconds spent in transactions answered with 302.
        task_ids: Tasks with at least one redirect, in insertion order.
            Inserting the same task twice lists it twice.
    """

    count: int = 0
    time_lost: float = 0.0
    task_ids: tuple[TaskId, ...] = ()

    def insert(self, task: TaskRecord) -> "RedirectStats":
        """Return stats including ``task``; unchanged if it was not redirected."""
        if task.redirect_count <= 0:
            return self
        lost = sum(t.duration or 0 for t in task.transactions if t.is_redirect)
        return RedirectStats(
            count=self.count + task.redirect_count,
            time_lost=self.time_lost + lost,
            task_ids=(*self.task_ids, task.task_id),
        )
