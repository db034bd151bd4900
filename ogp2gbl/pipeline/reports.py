"""Run report aggregation."""

from __future__ import annotations

from pathlib import Path

from ogp2gbl.common.fs import write_json
from ogp2gbl.common.models import RunStats


def run_status(stats: RunStats) -> str:
    if stats.failed_files:
        return "partial"
    if stats.rejected > 0 or stats.fgdc_failed > 0:
        return "success_with_rejections"
    return "success"


def build_run_summary(stats: RunStats, *, run_id: str, output_path: Path) -> dict:
    return {
        "run_id": run_id,
        "status": run_status(stats),
        "output": str(output_path),
        "statistics": {
            "accepted": stats.accepted,
            "rejected": stats.rejected,
        },
        "totals": stats.totals(),
        "failed_files": stats.failed_files,
        "files": [file_stats.to_dict() for file_stats in stats.files],
    }


def write_run_summary(summary_path: Path, stats: RunStats, *, run_id: str, output_path: Path) -> Path:
    write_json(summary_path, build_run_summary(stats, run_id=run_id, output_path=output_path))
    return summary_path
