"""Batch orchestration with fail-soft semantics.

One record failing never stops its file; one file failing stops the run
only when ``strict`` is set.
"""

from __future__ import annotations

import json
import logging
from datetime import datetime
from pathlib import Path
from typing import Any, Iterable

from ogp2gbl.common.errors import AuxiliaryDocumentError, InputFileError, RecordRejected
from ogp2gbl.common.logging import log_event
from ogp2gbl.common.models import FileStats, RunStats
from ogp2gbl.pipeline.export import RecordWriter
from ogp2gbl.pipeline.fgdc import write_fgdc
from ogp2gbl.pipeline.transform import RecordTransformer

_DEFAULT_LOGGER = logging.getLogger(__name__)


def load_input_records(path: Path) -> list[Any]:
    try:
        with path.open("r", encoding="utf-8") as f:
            payload = json.load(f)
    except OSError as exc:
        raise InputFileError(f"Cannot read input file {path}: {exc}") from exc
    except ValueError as exc:
        raise InputFileError(f"Invalid JSON in input file {path}: {exc}") from exc
    if not isinstance(payload, list):
        raise InputFileError(f"Input file {path} does not hold a JSON array")
    return payload


def transform_records(
    records: Iterable[Any],
    transformer: RecordTransformer,
    writer: RecordWriter,
    *,
    stats: FileStats,
    fgdc_dir: Path | None = None,
    logger: logging.Logger = _DEFAULT_LOGGER,
    run_id: str | None = None,
    now: datetime | None = None,
) -> FileStats:
    for layer in records:
        if layer == {}:
            continue
        if not isinstance(layer, dict):
            stats.count_rejection(RecordRejected.error_code)
            log_event(
                logger,
                f"ERROR: record is not an object: {type(layer).__name__}",
                level=logging.WARNING,
                run_id=run_id,
                stage="transform",
                source=stats.source,
                event="RECORD_REJECTED",
                status="rejected",
                error_code=RecordRejected.error_code,
            )
            continue

        try:
            result = transformer.transform(layer, now=now)
        except RecordRejected as exc:
            stats.count_rejection(exc.error_code)
            log_event(
                logger,
                str(exc),
                level=logging.WARNING,
                run_id=run_id,
                stage="transform",
                source=stats.source,
                record_id=exc.record_id,
                event="RECORD_REJECTED",
                status="rejected",
                error_code=exc.error_code,
            )
            continue

        writer.write(result.record)
        stats.accepted += 1
        log_event(
            logger,
            f"Transformed {result.record_id}",
            level=logging.DEBUG,
            run_id=run_id,
            stage="transform",
            source=stats.source,
            record_id=result.record_id,
            slug=result.slug,
            event="RECORD_ACCEPTED",
            status="ok",
        )

        fgdc_error = result.fgdc_error
        if fgdc_error is None and result.fgdc_xml is not None and fgdc_dir is not None:
            try:
                write_fgdc(fgdc_dir, result.slug, result.fgdc_xml, result.record_id)
                stats.fgdc_written += 1
            except AuxiliaryDocumentError as exc:
                fgdc_error = exc
        if fgdc_error is not None:
            stats.fgdc_failed += 1
            log_event(
                logger,
                str(fgdc_error),
                level=logging.WARNING,
                run_id=run_id,
                stage="fgdc",
                source=stats.source,
                record_id=result.record_id,
                slug=result.slug,
                event="FGDC_FAILED",
                status="error",
                error_code=fgdc_error.error_code,
            )

    return stats


def transform_file(
    path: Path,
    transformer: RecordTransformer,
    writer: RecordWriter,
    *,
    fgdc_dir: Path | None = None,
    logger: logging.Logger = _DEFAULT_LOGGER,
    run_id: str | None = None,
    now: datetime | None = None,
) -> FileStats:
    """Transform every record of one input file.

    Raises InputFileError when the file itself is unusable.
    """
    log_event(
        logger,
        f"Parsing {path}",
        run_id=run_id,
        stage="transform",
        source=str(path),
        event="FILE_START",
        status="ok",
    )
    records = load_input_records(path)
    stats = transform_records(
        records,
        transformer,
        writer,
        stats=FileStats(source=str(path)),
        fgdc_dir=fgdc_dir,
        logger=logger,
        run_id=run_id,
        now=now,
    )
    log_event(
        logger,
        f"Finished {path}",
        run_id=run_id,
        stage="transform",
        source=str(path),
        event="FILE_END",
        status="ok",
        accepted=stats.accepted,
        rejected=stats.rejected,
    )
    return stats


def run_batch(
    inputs: list[Path],
    transformer: RecordTransformer,
    writer: RecordWriter,
    *,
    fgdc_dir: Path | None = None,
    strict: bool = False,
    logger: logging.Logger = _DEFAULT_LOGGER,
    run_id: str | None = None,
    now: datetime | None = None,
) -> RunStats:
    run_stats = RunStats()
    for path in inputs:
        try:
            file_stats = transform_file(
                path,
                transformer,
                writer,
                fgdc_dir=fgdc_dir,
                logger=logger,
                run_id=run_id,
                now=now,
            )
        except InputFileError as exc:
            run_stats.files.append(FileStats(source=str(path), failed=True, error_code=exc.error_code))
            log_event(
                logger,
                str(exc),
                level=logging.ERROR,
                run_id=run_id,
                stage="transform",
                source=str(path),
                event="FILE_FAILED",
                status="error",
                error_code=exc.error_code,
            )
            if strict:
                raise
            continue
        run_stats.files.append(file_stats)
    return run_stats
