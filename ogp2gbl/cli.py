"""Convert OGP layer metadata records into GeoBlacklight records."""

from __future__ import annotations

import argparse
import sys
from datetime import datetime
from pathlib import Path

from ogp2gbl.common.config_loader import apply_cli_overrides, load_run_config
from ogp2gbl.common.constants import DEFAULT_CONFIG_PATH, EXIT_HARD_FAIL, EXIT_PARTIAL, EXIT_SUCCESS
from ogp2gbl.common.errors import InputFileError, PipelineError
from ogp2gbl.common.fs import expand_inputs
from ogp2gbl.common.logging import build_logger, close_logger, log_event
from ogp2gbl.common.time_utils import generate_run_id
from ogp2gbl.pipeline.batch import run_batch
from ogp2gbl.pipeline.export import RecordWriter
from ogp2gbl.pipeline.reports import run_status, write_run_summary
from ogp2gbl.pipeline.slugs import SlugRegistry
from ogp2gbl.pipeline.transform import RecordTransformer


def parse_args(argv: list[str]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(prog="ogp2gbl", description=__doc__)
    parser.add_argument("inputs", nargs="*", help="OGP JSON files or globs (default: input.glob from config)")
    parser.add_argument("--config", default=DEFAULT_CONFIG_PATH)
    parser.add_argument("--overlay-config", default=None)
    parser.add_argument("-o", "--output", default=None)
    parser.add_argument("--fgdc-dir", default=None)
    parser.add_argument("--skip-fgdc", action="store_true")
    parser.add_argument("--validate-locations", action="store_true")
    parser.add_argument("--buffered", action="store_true", help="Write a plain JSON array without the {} sentinel")
    parser.add_argument("--run-id", default=None)
    parser.add_argument("--log-level", default=None, choices=["DEBUG", "INFO", "WARN", "ERROR"])
    parser.add_argument("--strict", action="store_true", help="Abort on the first unreadable input file")
    return parser.parse_args(argv)


def _cli_overrides(args: argparse.Namespace) -> dict:
    return {
        "output": {
            "path": args.output,
            "legacy_sentinel": False if args.buffered else None,
        },
        "fgdc": {
            "enabled": False if args.skip_fgdc else None,
            "dir": args.fgdc_dir,
        },
        "transform": {"validate_locations": True if args.validate_locations else None},
        "logging": {"level": args.log_level},
    }


def run_command(args: argparse.Namespace, *, now: datetime | None = None) -> int:
    run_id = args.run_id or generate_run_id()
    overlay = Path(args.overlay_config) if args.overlay_config else None
    cfg = load_run_config(Path(args.config), overlay_path=overlay)
    cfg = apply_cli_overrides(cfg, _cli_overrides(args))

    logger = build_logger(run_id, log_dir=Path(cfg["logging"]["dir"]), level=cfg["logging"]["level"])
    try:
        inputs = expand_inputs(args.inputs or [cfg["input"]["glob"]])
        output_path = Path(cfg["output"]["path"])
        fgdc_dir = Path(cfg["fgdc"]["dir"]) if cfg["fgdc"]["enabled"] else None
        transformer = RecordTransformer(
            SlugRegistry(),
            emit_auxiliary=cfg["fgdc"]["enabled"],
            issued_date=cfg["transform"]["issued_date"],
            validate=cfg["transform"]["validate_locations"],
        )

        log_event(
            logger,
            f"Transforming {len(inputs)} file(s) into {output_path}",
            run_id=run_id,
            stage="run",
            event="RUN_START",
            status="ok",
        )

        try:
            with RecordWriter(output_path, legacy_sentinel=cfg["output"]["legacy_sentinel"]) as writer:
                stats = run_batch(
                    inputs,
                    transformer,
                    writer,
                    fgdc_dir=fgdc_dir,
                    strict=args.strict,
                    logger=logger,
                    run_id=run_id,
                    now=now,
                )
        except InputFileError:
            log_event(logger, "run aborted", run_id=run_id, stage="run", event="RUN_END", status="error")
            return EXIT_HARD_FAIL

        write_run_summary(Path(cfg["output"]["summary_path"]), stats, run_id=run_id, output_path=output_path)
        log_event(
            logger,
            "run summary",
            run_id=run_id,
            stage="run",
            event="RUN_END",
            status=run_status(stats),
            accepted=stats.accepted,
            rejected=stats.rejected,
        )
        if stats.failed_files:
            return EXIT_PARTIAL
        return EXIT_SUCCESS
    finally:
        close_logger(logger)


def main(argv: list[str] | None = None) -> int:
    args = parse_args(sys.argv[1:] if argv is None else argv)
    try:
        return run_command(args)
    except PipelineError as exc:
        print(f"ogp2gbl: {exc}", file=sys.stderr)
        return EXIT_HARD_FAIL


if __name__ == "__main__":
    raise SystemExit(main())
