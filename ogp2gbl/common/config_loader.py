"""Configuration loading and validation."""

from __future__ import annotations

from pathlib import Path
from typing import Any

import yaml

from ogp2gbl.common.errors import ConfigError
from ogp2gbl.common.fs import read_yaml
from ogp2gbl.common.schema import validate_run_config


def _deep_merge(base: Any, overlay: Any) -> Any:
    if isinstance(base, dict) and isinstance(overlay, dict):
        merged = dict(base)
        for key, value in overlay.items():
            if key in merged:
                merged[key] = _deep_merge(merged[key], value)
            else:
                merged[key] = value
        return merged
    return overlay


def _read_config_file(path: Path) -> Any:
    if not path.exists():
        raise ConfigError(f"Config file not found: {path}")
    try:
        return read_yaml(path)
    except yaml.YAMLError as exc:
        raise ConfigError(f"Invalid YAML in {path}: {exc}") from exc


def load_run_config(
    config_path: Path,
    *,
    overlay_path: Path | None = None,
    allow_unknown: bool = False,
) -> dict:
    base = _read_config_file(config_path)
    if overlay_path is not None and overlay_path.exists():
        overlay = _read_config_file(overlay_path)
        # An empty overlay file loads as None and changes nothing.
        if overlay is not None:
            if not isinstance(overlay, dict):
                raise ConfigError(f"Overlay config must be a mapping: {overlay_path}")
            base = _deep_merge(base, overlay)
    return validate_run_config(base, allow_unknown=allow_unknown)


def apply_cli_overrides(cfg: dict, overrides: dict[str, dict[str, Any]]) -> dict:
    """Merge non-None CLI values over the loaded config, section by section."""
    pruned = {
        section: {key: value for key, value in values.items() if value is not None}
        for section, values in overrides.items()
    }
    return validate_run_config(_deep_merge(cfg, pruned))
