# tests/strategies/__init__.py
"""Hypothesis strategies for property-based tests.

Re-exports commonly used strategies for convenience:
    from tests.strategies import task_records, task_lists
"""

from tests.strategies.records import durations, task_ids, task_lists, task_records, transfer_sizes

__all__ = [
    "durations",
    "task_ids",
    "task_lists",
    "task_records",
    "transfer_sizes",
]
