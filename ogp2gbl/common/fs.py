"""Filesystem helpers."""

from __future__ import annotations

import glob
import json
from pathlib import Path


def ensure_dir(path: Path) -> None:
    path.mkdir(parents=True, exist_ok=True)


def read_yaml(path: Path):
    import yaml

    with path.open("r", encoding="utf-8") as f:
        return yaml.safe_load(f)


def write_json(path: Path, payload) -> None:
    ensure_dir(path.parent)
    with path.open("w", encoding="utf-8") as f:
        json.dump(payload, f, ensure_ascii=False, indent=2, sort_keys=True)
        f.write("\n")


def read_json(path: Path):
    with path.open("r", encoding="utf-8") as f:
        return json.load(f)


def write_bytes(path: Path, payload: bytes) -> None:
    ensure_dir(path.parent)
    with path.open("wb") as f:
        f.write(payload)


def expand_inputs(patterns: list[str]) -> list[Path]:
    """Expand globs into a sorted, de-duplicated list of files.

    Literal paths that match nothing are kept so the caller reports them as
    unreadable instead of silently skipping them.
    """
    found: list[str] = []
    for pattern in patterns:
        matches = sorted(glob.glob(pattern))
        if matches:
            found.extend(matches)
        elif not glob.has_magic(pattern):
            found.append(pattern)
    return [Path(p) for p in dict.fromkeys(found)]
