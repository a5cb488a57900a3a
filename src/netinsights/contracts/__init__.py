"""Shared contracts: task records, states and boundary errors."""

from netinsights.contracts.enums import TaskState
from netinsights.contracts.errors import RecordRejection, TaskRecordLoadError
from netinsights.contracts.records import (
    REDIRECT_STATUS_CODE,
    TaskId,
    TaskInterval,
    TaskRecord,
    TransactionRecord,
    TransferSizeInfo,
)

__all__ = [
    "REDIRECT_STATUS_CODE",
    "RecordRejection",
    "TaskId",
    "TaskInterval",
    "TaskRecord",
    "TaskRecordLoadError",
    "TaskState",
    "TransactionRecord",
    "TransferSizeInfo",
]
