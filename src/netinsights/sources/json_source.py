# src/netinsights/sources/json_source.py
"""Load task records from a log store export.

Supports three layouts:
- JSON array of task objects
- JSON object holding the array under ``data_key`` (default "tasks")
- JSONL, one task object per line (auto-detected from the .jsonl suffix)

The export is external data. Entries are validated at this boundary and
converted to TaskRecord contracts; everything past this module trusts them.
Entries that fail validation are rejected and reported, not fatal, so one
bad line does not hide the insights of the rest of the session. Problems
with the file as a whole raise TaskRecordLoadError.

NOTE: Non-standard JSON constants (NaN, Infinity, -Infinity) are rejected
at parse time. Use null for missing values. Numbers that overflow to
infinity (1e400) and durations too large for datetime arithmetic reject the
entry instead.
"""

import json
from collections.abc import Iterator, Mapping
from dataclasses import dataclass
from datetime import UTC, datetime, timedelta
from pathlib import Path
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field, ValidationError, model_validator
from pydantic.alias_generators import to_camel

from netinsights.contracts.enums import TaskState
from netinsights.contracts.errors import RecordRejection, TaskRecordLoadError
from netinsights.contracts.records import TaskInterval, TaskRecord, TransactionRecord, TransferSizeInfo
from netinsights.core.config import SourceSettings
from netinsights.core.logging import get_logger

logger = get_logger(__name__)

_EPOCH = datetime(1970, 1, 1, tzinfo=UTC)


def _reject_nonfinite_constant(value: str) -> None:
    """Reject NaN/Infinity, which json accepts by default but RFC 8259 does not."""
    raise ValueError(f"Non-standard JSON constant '{value}' not allowed. Use null for missing values, not NaN/Infinity.")


# Export models accept the store's camelCase spelling as well as snake_case.
_EXPORT_MODEL_CONFIG = ConfigDict(
    alias_generator=to_camel,
    populate_by_name=True,
    extra="ignore",
    frozen=True,
    allow_inf_nan=False,
)


class _TransferSizeModel(BaseModel):
    model_config = _EXPORT_MODEL_CONFIG

    total_bytes_sent: int = Field(default=0, ge=0)
    request_header_bytes_sent: int = Field(default=0, ge=0)
    request_body_bytes_before_encoding: int = Field(default=0, ge=0)
    request_body_bytes_sent: int = Field(default=0, ge=0)
    total_bytes_received: int = Field(default=0, ge=0)
    response_header_bytes_received: int = Field(default=0, ge=0)
    response_body_bytes_after_decoding: int = Field(default=0, ge=0)
    response_body_bytes_received: int = Field(default=0, ge=0)

    def to_contract(self) -> TransferSizeInfo:
        return TransferSizeInfo(**self.model_dump())


class _IntervalModel(BaseModel):
    model_config = _EXPORT_MODEL_CONFIG

    start: datetime
    end: datetime | None = None

    @model_validator(mode="after")
    def validate_comparable(self) -> "_IntervalModel":
        """Both instants must carry a timezone, or neither."""
        if self.end is not None and (self.start.tzinfo is None) != (self.end.tzinfo is None):
            raise ValueError("interval start and end must both be timezone-aware or both naive")
        return self


class _TransactionModel(BaseModel):
    model_config = _EXPORT_MODEL_CONFIG

    status_code: int | None = None
    duration: float | None = Field(default=None, ge=0)
    fetch_type: str | None = None

    def to_contract(self) -> TransactionRecord:
        return TransactionRecord(status_code=self.status_code, duration=self.duration, fetch_type=self.fetch_type)


class _TaskModel(BaseModel):
    """One task entry of an export.

    The time interval may be given explicitly (``interval``) or as
    ``start_date`` plus ``duration`` in seconds. A bare ``duration`` is
    anchored at the Unix epoch; only its length matters to the insights.
    """

    model_config = _EXPORT_MODEL_CONFIG

    task_id: str | int
    state: TaskState
    interval: _IntervalModel | None = None
    start_date: datetime | None = None
    duration: float | None = None
    redirect_count: int = Field(default=0, ge=0)
    transactions: list[_TransactionModel] = Field(default_factory=list)
    transfer_size: _TransferSizeModel = Field(default_factory=_TransferSizeModel)
    url: str | None = None
    method: str | None = None
    status_code: int | None = None

    def _interval(self) -> TaskInterval | None:
        if self.interval is not None:
            return TaskInterval(start=self.interval.start, end=self.interval.end)
        if self.duration is None:
            if self.start_date is not None:
                return TaskInterval(start=self.start_date)
            return None
        start = self.start_date if self.start_date is not None else _EPOCH
        return TaskInterval(start=start, end=start + timedelta(seconds=self.duration))

    def to_contract(self) -> TaskRecord:
        return TaskRecord(
            task_id=self.task_id,
            state=self.state,
            interval=self._interval(),
            redirect_count=self.redirect_count,
            transactions=tuple(t.to_contract() for t in self.transactions),
            transfer_size=self.transfer_size.to_contract(),
            url=self.url,
            method=self.method,
            status_code=self.status_code,
        )


def _describe_validation_error(error: ValidationError) -> str:
    return "; ".join(f"{'.'.join(str(part) for part in e['loc']) or '<entry>'}: {e['msg']}" for e in error.errors())


@dataclass(frozen=True, slots=True)
class LoadResult:
    """Outcome of loading an export.

    Attributes:
        tasks: Valid task records in export order.
        rejections: Entries that failed validation, in export order.
    """

    tasks: tuple[TaskRecord, ...]
    rejections: tuple[RecordRejection, ...] = ()


class JSONTaskSource:
    """Read TaskRecords from a JSON or JSONL export.

    Usage:
        source = JSONTaskSource(Path("session.json"))
        result = source.load()
        insights = NetworkInsights.from_tasks(result.tasks)
    """

    def __init__(
        self,
        path: Path,
        *,
        format: Literal["json", "jsonl"] | None = None,
        data_key: str = "tasks",
        encoding: str = "utf-8",
    ) -> None:
        self._path = path
        self._data_key = data_key
        self._encoding = encoding
        if format is None:
            format = "jsonl" if path.suffix == ".jsonl" else "json"
        self._format = format

    @property
    def path(self) -> Path:
        return self._path

    @property
    def format(self) -> Literal["json", "jsonl"]:
        return self._format

    def load(self) -> LoadResult:
        """Load and validate every entry.

        Raises:
            TaskRecordLoadError: If the file is missing, unreadable, or not a
                collection of task entries.
        """
        if not self._path.exists():
            raise TaskRecordLoadError(self._path, "export file not found")

        tasks: list[TaskRecord] = []
        rejections: list[RecordRejection] = []
        entries = self._iter_jsonl() if self._format == "jsonl" else self._iter_json_array()
        for index, entry in entries:
            if isinstance(entry, RecordRejection):
                rejections.append(entry)
                continue
            try:
                tasks.append(self._validate(entry))
            except ValidationError as e:
                rejections.append(RecordRejection(index=index, reason=_describe_validation_error(e)))
            except TypeError as e:
                rejections.append(RecordRejection(index=index, reason=str(e)))
            except (OverflowError, ValueError) as e:
                # Values pydantic accepts but datetime arithmetic cannot represent
                rejections.append(RecordRejection(index=index, reason=f"unrepresentable timing: {e}"))

        for rejection in rejections:
            logger.warning(
                "Rejected task record",
                path=str(self._path),
                index=rejection.index,
                reason=rejection.reason,
            )
        logger.info(
            "Loaded task records",
            path=str(self._path),
            format=self._format,
            loaded=len(tasks),
            rejected=len(rejections),
        )
        return LoadResult(tasks=tuple(tasks), rejections=tuple(rejections))

    def _validate(self, entry: Any) -> TaskRecord:
        if not isinstance(entry, Mapping):
            raise TypeError(f"task entry must be a JSON object, got {type(entry).__name__}")
        return _TaskModel.model_validate(entry).to_contract()

    def _iter_jsonl(self) -> Iterator[tuple[int, Any]]:
        """Yield (index, entry) per non-blank line; unparseable lines become rejections."""
        try:
            with self._path.open(encoding=self._encoding, newline="") as f:
                for index, raw_line in enumerate(f):
                    line = raw_line.strip()
                    if not line:
                        continue
                    try:
                        yield index, json.loads(line, parse_constant=_reject_nonfinite_constant)
                    except ValueError as e:
                        yield index, RecordRejection(index=index, reason=f"JSON parse error at line {index + 1}: {e}")
        except (OSError, UnicodeDecodeError) as e:
            raise TaskRecordLoadError(self._path, f"cannot read export: {e}") from e

    def _iter_json_array(self) -> Iterator[tuple[int, Any]]:
        try:
            with self._path.open(encoding=self._encoding) as f:
                data = json.load(f, parse_constant=_reject_nonfinite_constant)
        except json.JSONDecodeError as e:
            raise TaskRecordLoadError(self._path, f"JSON parse error at line {e.lineno} col {e.colno}: {e.msg}") from e
        except (OSError, UnicodeDecodeError, ValueError) as e:
            raise TaskRecordLoadError(self._path, f"cannot read export: {e}") from e

        if isinstance(data, dict):
            if self._data_key not in data:
                raise TaskRecordLoadError(self._path, f"expected a '{self._data_key}' array in the export object")
            data = data[self._data_key]
        if not isinstance(data, list):
            raise TaskRecordLoadError(self._path, f"expected a JSON array of tasks, got {type(data).__name__}")
        yield from enumerate(data)


def load_tasks(path: Path, settings: SourceSettings | None = None) -> LoadResult:
    """Load an export using the given source settings (defaults if None)."""
    settings = settings if settings is not None else SourceSettings()
    source = JSONTaskSource(
        path,
        format=settings.format,
        data_key=settings.data_key,
        encoding=settings.encoding,
    )
    return source.load()
