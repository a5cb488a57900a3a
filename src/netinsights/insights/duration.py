# src/netinsights/insights/duration.py
"""Online order statistics over task durations.

DurationStats keeps every recorded duration in ascending order so that the
median and extrema can be read without re-sorting. Insertion is a binary
search for the position followed by an O(n) shift, which is fine for the
task counts a single log session holds.

Median convention:
    ``median`` is ``values[len(values) // 2]``. For an even number of values
    that is the element at index n // 2, not the mean of the two middle
    elements. Consumers rely on this exact value.
"""

from bisect import bisect_left
from dataclasses import dataclass

from netinsights.contracts.records import TaskId


@dataclass(frozen=True, slots=True)
class DurationStats:
    """Sorted durations with running median, minimum and maximum.

    Attributes:
        values: All recorded durations in seconds, ascending.
        task_ids: Source task of each value; ``task_ids[i]`` produced ``values[i]``.
        median: ``values[len // 2]``, None when empty.
        minimum: Smallest value, None when empty.
        maximum: Largest value, None when empty.
    """

    values: tuple[float, ...] = ()
    task_ids: tuple[TaskId, ...] = ()
    median: float | None = None
    minimum: float | None = None
    maximum: float | None = None

    def insert(self, duration: float, task_id: TaskId) -> "DurationStats":
        """Return new stats with ``duration`` recorded for ``task_id``.

        Ties go before existing equal values (leftmost insertion point).
        """
        index = bisect_left(self.values, duration)
        values = (*self.values[:index], duration, *self.values[index:])
        task_ids = (*self.task_ids[:index], task_id, *self.task_ids[index:])
        return DurationStats(
            values=values,
            task_ids=task_ids,
            median=values[len(values) // 2],
            minimum=duration if self.minimum is None else min(self.minimum, duration),
            maximum=duration if self.maximum is None else max(self.maximum, duration),
        )

    @property
    def count(self) -> int:
        return len(self.values)
