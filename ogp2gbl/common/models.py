"""Data models used across the pipeline."""

from __future__ import annotations

from dataclasses import asdict, dataclass, field
from typing import Any

from ogp2gbl.common.errors import AuxiliaryDocumentError


@dataclass(frozen=True)
class TransformResult:
    record_id: str
    slug: str
    record: dict[str, Any]
    fgdc_xml: bytes | None = None
    fgdc_error: AuxiliaryDocumentError | None = None


@dataclass
class FileStats:
    source: str
    accepted: int = 0
    rejected: int = 0
    fgdc_written: int = 0
    fgdc_failed: int = 0
    failed: bool = False
    error_code: str | None = None
    rejections_by_code: dict[str, int] = field(default_factory=dict)

    def count_rejection(self, error_code: str) -> None:
        self.rejected += 1
        self.rejections_by_code[error_code] = self.rejections_by_code.get(error_code, 0) + 1

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


@dataclass
class RunStats:
    files: list[FileStats] = field(default_factory=list)

    @property
    def accepted(self) -> int:
        return sum(f.accepted for f in self.files)

    @property
    def rejected(self) -> int:
        return sum(f.rejected for f in self.files)

    @property
    def fgdc_written(self) -> int:
        return sum(f.fgdc_written for f in self.files)

    @property
    def fgdc_failed(self) -> int:
        return sum(f.fgdc_failed for f in self.files)

    @property
    def failed_files(self) -> list[str]:
        return [f.source for f in self.files if f.failed]

    def totals(self) -> dict[str, int]:
        return {
            "accepted": self.accepted,
            "rejected": self.rejected,
            "fgdc_written": self.fgdc_written,
            "fgdc_failed": self.fgdc_failed,
            "files": len(self.files),
            "failed_files": len(self.failed_files),
        }
