"""GeoBlacklight JSON array output."""

from __future__ import annotations

import json
from pathlib import Path
from types import TracebackType
from typing import Any, TextIO

from ogp2gbl.common.fs import ensure_dir


def _pretty(record: dict[str, Any]) -> str:
    return json.dumps(record, ensure_ascii=False, indent=2)


class RecordWriter:
    """Writes transformed records to a JSON array file.

    In legacy mode records are streamed as they arrive and every record is
    followed by a comma, so the array is closed with an empty ``{}`` entry.
    Otherwise records are buffered and written as a plain array on close.
    """

    def __init__(self, path: Path, *, legacy_sentinel: bool = True) -> None:
        self.path = path
        self.legacy_sentinel = legacy_sentinel
        self.count = 0
        self._buffer: list[dict[str, Any]] = []
        self._fh: TextIO | None = None

    def open(self) -> "RecordWriter":
        ensure_dir(self.path.parent)
        self._fh = self.path.open("w", encoding="utf-8")
        if self.legacy_sentinel:
            self._fh.write("[\n")
        return self

    def write(self, record: dict[str, Any]) -> None:
        if self._fh is None:
            raise RuntimeError(f"RecordWriter for {self.path} is not open")
        if self.legacy_sentinel:
            self._fh.write(_pretty(record))
            self._fh.write("\n,\n")
        else:
            self._buffer.append(record)
        self.count += 1

    def close(self) -> None:
        if self._fh is None:
            return
        try:
            if self.legacy_sentinel:
                self._fh.write("\n {} \n]\n")
            else:
                json.dump(self._buffer, self._fh, ensure_ascii=False, indent=2)
                self._fh.write("\n")
        finally:
            self._fh.close()
            self._fh = None
            self._buffer = []

    def __enter__(self) -> "RecordWriter":
        return self.open()

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.close()


def read_records(path: Path) -> list[dict[str, Any]]:
    """Load an output file, dropping the legacy ``{}`` sentinel."""
    with path.open("r", encoding="utf-8") as f:
        payload = json.load(f)
    return [record for record in payload if record]
