"""Error types raised at the task record trust boundary.

The aggregator itself is total over well-typed records and raises nothing.
Everything here belongs to loading records from an external log store export.
"""

from dataclasses import dataclass
from pathlib import Path


@dataclass(frozen=True, slots=True)
class RecordRejection:
    """A single export entry that failed validation and was skipped.

    Attributes:
        index: Zero-based position of the entry in the export (line number
            minus one for JSONL).
        reason: Human-readable validation failure.
    """

    index: int
    reason: str


class TaskRecordLoadError(Exception):
    """Raised when an export cannot be read as a collection of task records.

    Covers file-level failures only (missing file, malformed document,
    unexpected top-level shape). Individual bad entries are rejected,
    not raised.

    Attributes:
        path: The export file being loaded.
    """

    def __init__(self, path: Path, message: str) -> None:
        self.path = path
        super().__init__(f"{path}: {message}")
