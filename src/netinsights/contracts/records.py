# src/netinsights/contracts/records.py
"""Task record contracts consumed by the insights aggregator.

Records are read-only values supplied by an external log store. The
aggregator never mutates them and treats the task identifier as an opaque
hashable handle back into that store.
"""

from collections.abc import Hashable
from dataclasses import dataclass, field, fields
from datetime import datetime
from urllib.parse import urlsplit

from netinsights.contracts.enums import TaskState

TaskId = Hashable

# HTTP status that counts toward time lost to redirects.
REDIRECT_STATUS_CODE = 302


@dataclass(frozen=True, slots=True)
class TransferSizeInfo:
    """Byte counters for a task, or a sum over many tasks.

    Merging is element-wise addition. The all-zero instance is the identity.
    """

    total_bytes_sent: int = 0
    request_header_bytes_sent: int = 0
    request_body_bytes_before_encoding: int = 0
    request_body_bytes_sent: int = 0
    total_bytes_received: int = 0
    response_header_bytes_received: int = 0
    response_body_bytes_after_decoding: int = 0
    response_body_bytes_received: int = 0

    def merging(self, other: "TransferSizeInfo") -> "TransferSizeInfo":
        """Return the element-wise sum of both counters."""
        return TransferSizeInfo(**{f.name: getattr(self, f.name) + getattr(other, f.name) for f in fields(self)})

    def __add__(self, other: "TransferSizeInfo") -> "TransferSizeInfo":
        if not isinstance(other, TransferSizeInfo):
            return NotImplemented
        return self.merging(other)

    @property
    def is_zero(self) -> bool:
        return all(getattr(self, f.name) == 0 for f in fields(self))


@dataclass(frozen=True, slots=True)
class TaskInterval:
    """Start and (once the task terminates) end instant of a task."""

    start: datetime
    end: datetime | None = None

    def __post_init__(self) -> None:
        """Both instants must carry a timezone, or neither, so duration is computable."""
        if self.end is not None and (self.start.tzinfo is None) != (self.end.tzinfo is None):
            raise ValueError("interval start and end must both be timezone-aware or both naive")

    @property
    def duration(self) -> float | None:
        """Elapsed seconds, or None while the interval is unterminated."""
        if self.end is None:
            return None
        return (self.end - self.start).total_seconds()


@dataclass(frozen=True, slots=True)
class TransactionRecord:
    """One request attempt within a task.

    Attributes:
        status_code: HTTP status of the response, None if no response arrived.
        duration: Timing duration of the attempt in seconds, if measured.
        fetch_type: How the response was obtained (e.g. "network_load").
    """

    status_code: int | None = None
    duration: float | None = None
    fetch_type: str | None = None

    @property
    def is_redirect(self) -> bool:
        return self.status_code == REDIRECT_STATUS_CODE


@dataclass(frozen=True, slots=True)
class TaskRecord:
    """A network request/response cycle with timing, size and outcome.

    ``url``, ``method`` and ``status_code`` describe the request for
    filtering and display. They do not feed the statistics.
    """

    task_id: TaskId
    state: TaskState
    interval: TaskInterval | None = None
    redirect_count: int = 0
    transactions: tuple[TransactionRecord, ...] = ()
    transfer_size: TransferSizeInfo = field(default_factory=TransferSizeInfo)
    url: str | None = None
    method: str | None = None
    status_code: int | None = None

    @property
    def duration(self) -> float | None:
        if self.interval is None:
            return None
        return self.interval.duration

    @property
    def host(self) -> str | None:
        """Lower-cased host of ``url``; None when absent or unparseable."""
        if self.url is None:
            return None
        try:
            return urlsplit(self.url).hostname
        except ValueError:
            # Malformed netloc, e.g. an unclosed IPv6 bracket
            return None
