from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import List, Optional


class ErrorKind(str, Enum):
    NOT_FOUND = "not_found"
    READ_FAILURE = "read_failure"
    MINIFY_FAILURE = "minify_failure"
    WRITE_FAILURE = "write_failure"


@dataclass(frozen=True)
class ErrorRecord:
    """
    One recoverable failure.

    source is the offending file path, or the content type label
    ("JavaScript", "CSS", "HTML") for minifier failures.
    """
    kind: ErrorKind
    source: str
    message: str

    def __str__(self) -> str:
        return f"[{self.kind.value}] {self.source}: {self.message}"


@dataclass(frozen=True)
class ProcessResult:
    """Output of processing a single file."""
    src_path: Path
    kind: Optional[str]  # FileKind label, None if never read
    out_path: Optional[Path]  # None if nothing was written
    src_bytes: int
    out_bytes: int
    skipped_reason: Optional[str] = None

    @property
    def written(self) -> bool:
        return self.out_path is not None


@dataclass
class RunStats:
    """
    Running totals for one minification run.

    Created once per run and handed to every stage; only successful writes
    (pass-through writes included) move the size totals.
    """
    original_size_bytes: int = 0
    minified_size_bytes: int = 0
    files_processed: int = 0
    errors: List[ErrorRecord] = field(default_factory=list)

    def record_success(self, original_bytes: int, minified_bytes: int) -> None:
        self.original_size_bytes += original_bytes
        self.minified_size_bytes += minified_bytes
        self.files_processed += 1

    def record_error(self, kind: ErrorKind, source: str, message: str) -> ErrorRecord:
        record = ErrorRecord(kind=kind, source=source, message=message)
        self.errors.append(record)
        return record

    @property
    def reduction_percent(self) -> Optional[float]:
        # None when nothing was processed: the ratio is undefined
        if self.original_size_bytes <= 0:
            return None
        saved = self.original_size_bytes - self.minified_size_bytes
        return (saved / self.original_size_bytes) * 100.0
