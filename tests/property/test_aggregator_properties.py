# tests/property/test_aggregator_properties.py
"""Property-based tests for insights aggregation.

Invariants checked over arbitrary task sequences:
1. Bulk construction equals the left fold of insert
2. Pending tasks never change a snapshot
3. Durations stay sorted, with median/min/max consistent with the values
4. Redirect and failure accounting match a direct recount
5. Transfer size merging is a commutative monoid
"""

from functools import reduce

from hypothesis import given
from hypothesis import strategies as st

from netinsights.contracts.enums import TaskState
from netinsights.contracts.records import TaskRecord, TransferSizeInfo
from netinsights.insights.aggregator import NetworkInsights, construct, insert
from netinsights.insights.duration import DurationStats
from tests.property.settings import STANDARD_SETTINGS
from tests.strategies import durations, task_ids, task_lists, task_records, transfer_sizes


def _completed(tasks: list[TaskRecord]) -> list[TaskRecord]:
    return [t for t in tasks if t.state != TaskState.PENDING]


class TestConstructionProperties:
    @given(tasks=task_lists)
    @STANDARD_SETTINGS
    def test_construct_equals_fold_of_insert(self, tasks: list[TaskRecord]) -> None:
        assert construct(tasks) == reduce(insert, tasks, NetworkInsights())

    @given(tasks=task_lists, split=st.integers(min_value=0, max_value=40))
    @STANDARD_SETTINGS
    def test_incremental_after_bulk_equals_bulk(self, tasks: list[TaskRecord], split: int) -> None:
        """Building from a prefix then inserting the rest gives the same snapshot."""
        head, tail = tasks[:split], tasks[split:]
        assert reduce(insert, tail, construct(head)) == construct(tasks)

    @given(tasks=task_lists, pending=task_records)
    @STANDARD_SETTINGS
    def test_pending_task_is_a_no_op(self, tasks: list[TaskRecord], pending: TaskRecord) -> None:
        snapshot = construct(tasks)
        pending = TaskRecord(
            task_id=pending.task_id,
            state=TaskState.PENDING,
            interval=pending.interval,
            redirect_count=pending.redirect_count,
            transactions=pending.transactions,
            transfer_size=pending.transfer_size,
        )

        assert snapshot.insert(pending) is snapshot

    @given(tasks=task_lists)
    @STANDARD_SETTINGS
    def test_pending_tasks_do_not_contribute(self, tasks: list[TaskRecord]) -> None:
        assert construct(tasks) == construct(_completed(tasks))


class TestDurationProperties:
    @given(tasks=task_lists)
    @STANDARD_SETTINGS
    def test_values_sorted_and_statistics_consistent(self, tasks: list[TaskRecord]) -> None:
        stats = construct(tasks).duration

        assert list(stats.values) == sorted(stats.values)
        assert len(stats.task_ids) == len(stats.values)
        if stats.values:
            assert stats.median == stats.values[len(stats.values) // 2]
            assert stats.minimum == min(stats.values)
            assert stats.maximum == max(stats.values)
        else:
            assert stats.median is None
            assert stats.minimum is None
            assert stats.maximum is None

    @given(tasks=task_lists)
    @STANDARD_SETTINGS
    def test_only_positive_completed_durations_are_recorded(self, tasks: list[TaskRecord]) -> None:
        expected = sorted(d for t in _completed(tasks) if (d := t.duration) is not None and d > 0)

        assert list(construct(tasks).duration.values) == expected

    @given(entries=st.lists(st.tuples(durations.filter(lambda d: d > 0), task_ids), max_size=50))
    @STANDARD_SETTINGS
    def test_each_task_id_stays_with_its_value(self, entries: list[tuple[float, object]]) -> None:
        stats = reduce(lambda acc, e: acc.insert(*e), entries, DurationStats())

        assert sorted(zip(stats.values, map(repr, stats.task_ids), strict=True)) == sorted(
            (value, repr(task_id)) for value, task_id in entries
        )


class TestRedirectAndFailureProperties:
    @given(tasks=task_lists)
    @STANDARD_SETTINGS
    def test_redirect_count_is_sum_over_completed_tasks(self, tasks: list[TaskRecord]) -> None:
        completed = _completed(tasks)
        redirects = construct(tasks).redirects

        assert redirects.count == sum(t.redirect_count for t in completed if t.redirect_count > 0)
        assert redirects.task_ids == tuple(t.task_id for t in completed if t.redirect_count > 0)

    @given(tasks=task_lists)
    @STANDARD_SETTINGS
    def test_failures_in_insertion_order_with_duplicates(self, tasks: list[TaskRecord]) -> None:
        failures = construct(tasks).failures

        assert failures.task_ids == tuple(t.task_id for t in tasks if t.state == TaskState.FAILURE)
        assert failures.count == len(failures.task_ids)


class TestTransferSizeProperties:
    @given(a=transfer_sizes, b=transfer_sizes)
    @STANDARD_SETTINGS
    def test_merging_is_commutative(self, a: TransferSizeInfo, b: TransferSizeInfo) -> None:
        assert a.merging(b) == b.merging(a)

    @given(a=transfer_sizes, b=transfer_sizes, c=transfer_sizes)
    @STANDARD_SETTINGS
    def test_merging_is_associative(self, a: TransferSizeInfo, b: TransferSizeInfo, c: TransferSizeInfo) -> None:
        assert (a + b) + c == a + (b + c)

    @given(a=transfer_sizes)
    @STANDARD_SETTINGS
    def test_zero_is_identity(self, a: TransferSizeInfo) -> None:
        assert a.merging(TransferSizeInfo()) == a

    @given(tasks=task_lists)
    @STANDARD_SETTINGS
    def test_snapshot_total_is_sum_of_completed_tasks(self, tasks: list[TaskRecord]) -> None:
        expected = reduce(TransferSizeInfo.merging, (t.transfer_size for t in _completed(tasks)), TransferSizeInfo())

        assert construct(tasks).transfer_size == expected
