# src/netinsights/insights/session.py
"""Owner of the current insights snapshot for one analysis scope.

The log store notifies its observers as tasks complete and the user changes
filters. InsightsSession turns those notifications into snapshot updates:

- scope changes (filter edits, store reloads) discard and rebuild
- newly completed tasks are inserted incrementally

Callers that build snapshots out of band (e.g. on a worker while the user
keeps typing a filter) take a generation token with begin_refresh() and hand
the result to commit(). Only the latest generation is accepted, so the last
scope requested wins.

Thread Safety:
    NOT thread-safe. The owning view model serializes all calls.
"""

from collections.abc import Iterable

from netinsights.contracts.records import TaskRecord
from netinsights.core.logging import get_logger
from netinsights.filtering import TaskFilter
from netinsights.insights.aggregator import NetworkInsights

logger = get_logger(__name__)


class InsightsSession:
    """Single-owner, incrementally updated insights for a filtered task set.

    Example:
        session = InsightsSession(TaskFilter(host="api.example.com"))
        session.reload(store.tasks())
        ...
        session.task_completed(task)
        render(session.snapshot)
    """

    def __init__(self, task_filter: TaskFilter | None = None) -> None:
        self._filter = task_filter if task_filter is not None else TaskFilter()
        self._snapshot = NetworkInsights()
        self._generation = 0

    @property
    def snapshot(self) -> NetworkInsights:
        return self._snapshot

    @property
    def task_filter(self) -> TaskFilter:
        return self._filter

    @property
    def generation(self) -> int:
        """Counter identifying the current scope. Bumped on every rebuild."""
        return self._generation

    def reload(self, tasks: Iterable[TaskRecord]) -> NetworkInsights:
        """Discard the current snapshot and rebuild it from ``tasks``."""
        generation = self.begin_refresh()
        snapshot = NetworkInsights.from_tasks(self._filter.apply(tasks))
        self.commit(generation, snapshot)
        logger.debug(
            "Insights rebuilt",
            generation=generation,
            durations=snapshot.duration.count,
            failures=snapshot.failures.count,
            redirects=snapshot.redirects.count,
        )
        return snapshot

    def set_filter(self, task_filter: TaskFilter, tasks: Iterable[TaskRecord]) -> NetworkInsights:
        """Switch to a new scope and rebuild from ``tasks``."""
        self._filter = task_filter
        return self.reload(tasks)

    def task_completed(self, task: TaskRecord) -> NetworkInsights:
        """Account for a task the store reports as updated.

        Tasks outside the filter are ignored. Pending tasks are ignored by the
        aggregator itself. Reporting the same completed task twice counts it
        twice; de-duplicating notifications is the store's job.
        """
        if self._filter.matches(task):
            self._snapshot = self._snapshot.insert(task)
        return self._snapshot

    def begin_refresh(self) -> int:
        """Start a new scope and return its generation token.

        Any refresh started earlier becomes stale. Until the new snapshot is
        committed, incremental inserts keep applying to the previous one.
        """
        self._generation += 1
        return self._generation

    def commit(self, generation: int, snapshot: NetworkInsights) -> bool:
        """Install ``snapshot`` if it belongs to the latest generation.

        Returns:
            True if the snapshot was installed, False if it was superseded.
        """
        if generation != self._generation:
            logger.debug(
                "Discarding superseded insights snapshot",
                generation=generation,
                current_generation=self._generation,
            )
            return False
        self._snapshot = snapshot
        return True

    def reset(self) -> None:
        """Forget everything, e.g. when the store is cleared."""
        self._generation += 1
        self._snapshot = NetworkInsights()
