# src/netinsights/insights/aggregator.py
"""Session insights aggregation.

NetworkInsights is the snapshot handed to the presentation layer. It is
an immutable value composed of four independent sub-aggregates:

- transfer_size: element-wise sum of per-task byte counters
- duration: sorted durations with median/min/max
- redirects: redirect counts, time lost to 302s, redirected task ids
- failures: ids of failed tasks

Each insert derives a new snapshot from the previous one plus one record.
Pending tasks are the single early exit: they leave the snapshot untouched.

Thread Safety:
    Snapshots are immutable and can be shared freely. Whoever owns the
    "current" snapshot (see InsightsSession) must serialize replacing it.
"""

from collections.abc import Iterable
from dataclasses import dataclass, field
from functools import reduce

from netinsights.contracts.enums import TaskState
from netinsights.contracts.records import TaskRecord, TransferSizeInfo
from netinsights.insights.duration import DurationStats
from netinsights.insights.failures import FailureStats
from netinsights.insights.redirects import RedirectStats


@dataclass(frozen=True, slots=True)
class NetworkInsights:
    """Aggregated insights about a set of network tasks.

    Example:
        insights = NetworkInsights.from_tasks(store_tasks)
        insights = insights.insert(newly_completed_task)
        insights.duration.median
    """

    transfer_size: TransferSizeInfo = field(default_factory=TransferSizeInfo)
    duration: DurationStats = field(default_factory=DurationStats)
    redirects: RedirectStats = field(default_factory=RedirectStats)
    failures: FailureStats = field(default_factory=FailureStats)

    @classmethod
    def from_tasks(cls, tasks: Iterable[TaskRecord]) -> "NetworkInsights":
        """Fold ``insert`` over ``tasks`` in order, starting from empty."""
        return reduce(insert, tasks, cls())

    def insert(self, task: TaskRecord) -> "NetworkInsights":
        """Return a snapshot that also accounts for ``task``.

        Absent or non-positive durations are skipped rather than recorded,
        which covers unterminated and malformed intervals.
        """
        if task.state == TaskState.PENDING:
            return self

        duration = self.duration
        task_duration = task.duration
        if task_duration is not None and task_duration > 0:
            duration = duration.insert(task_duration, task.task_id)

        return NetworkInsights(
            transfer_size=self.transfer_size.merging(task.transfer_size),
            duration=duration,
            redirects=self.redirects.insert(task),
            failures=self.failures.insert(task),
        )

    @property
    def is_empty(self) -> bool:
        return self == NetworkInsights()


def insert(snapshot: NetworkInsights, task: TaskRecord) -> NetworkInsights:
    """Functional form of :meth:`NetworkInsights.insert`."""
    return snapshot.insert(task)


def construct(tasks: Iterable[TaskRecord]) -> NetworkInsights:
    """Build a snapshot from scratch for ``tasks`` in iteration order."""
    return NetworkInsights.from_tasks(tasks)
