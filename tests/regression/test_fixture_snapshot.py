from __future__ import annotations

import json
from datetime import datetime, timezone
from pathlib import Path

import pytest

from ogp2gbl.cli import parse_args, run_command
from ogp2gbl.pipeline.export import read_records

FIXED_NOW = datetime(2026, 2, 17, 12, 0, 0, tzinfo=timezone.utc)
FIXTURE = Path("tests/fixtures/ogp_layers.json")
EXPECTED = Path("tests/fixtures/expected/geoblacklight_layers.json")


def _run_fixture(tmp_path: Path, run_id: str) -> Path:
    # The repo config writes the summary and logs relative to the working
    # directory; the overlay keeps them inside tmp_path.
    overlay = tmp_path / "overlay.yml"
    overlay.write_text(
        f"""output:
  summary_path: "{tmp_path}/{run_id}/summary.json"
logging:
  dir: "{tmp_path}/run_meta"
""",
        encoding="utf-8",
    )
    out = tmp_path / run_id / "transformed.json"
    args = parse_args(
        [
            "--config",
            "config/ogp2gbl.yml",
            "--overlay-config",
            str(overlay),
            "--run-id",
            run_id,
            "--output",
            str(out),
            "--skip-fgdc",
            str(FIXTURE),
        ]
    )
    assert run_command(args, now=FIXED_NOW) == 0
    return out


@pytest.mark.regression
def test_fixture_snapshot_matches_expected_records(tmp_path: Path):
    out = _run_fixture(tmp_path, "run-fixture")

    expected = json.loads(EXPECTED.read_text(encoding="utf-8"))
    assert read_records(out) == expected


@pytest.mark.regression
def test_fixture_output_is_byte_stable(tmp_path: Path):
    first = _run_fixture(tmp_path, "run-a").read_bytes()
    second = _run_fixture(tmp_path, "run-b").read_bytes()

    assert first == second
    assert first.startswith(b"[\n{\n")
    assert first.endswith(b"\n,\n\n {} \n]\n")
