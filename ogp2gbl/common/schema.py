"""Minimal strict schema for the YAML run configuration."""

from __future__ import annotations

from ogp2gbl.common.errors import ConfigError
from ogp2gbl.common.time_utils import parse_rfc3339

RUN_CONFIG_KEYS = {
    "input": {"glob"},
    "output": {"path", "legacy_sentinel", "summary_path"},
    "fgdc": {"enabled", "dir"},
    "transform": {"issued_date", "validate_locations"},
    "logging": {"dir", "level"},
}

LOG_LEVELS = {"DEBUG", "INFO", "WARN", "WARNING", "ERROR"}


def _assert_required_keys(obj: dict, required: set[str], ctx: str) -> None:
    missing = required - set(obj)
    if missing:
        missing_str = ", ".join(sorted(missing))
        raise ConfigError(f"Missing keys in {ctx}: {missing_str}")


def _assert_no_unknown_keys(obj: dict, known: set[str], ctx: str, allow_unknown: bool) -> None:
    if allow_unknown:
        return
    unknown = set(obj) - known
    if unknown:
        unknown_str = ", ".join(sorted(unknown))
        raise ConfigError(f"Unknown keys in {ctx}: {unknown_str}")


def _assert_mapping(obj, ctx: str) -> None:
    if not isinstance(obj, dict):
        raise ConfigError(f"{ctx} must be a mapping")


def _assert_bool(value, ctx: str) -> None:
    if not isinstance(value, bool):
        raise ConfigError(f"{ctx} must be true or false")


def validate_run_config(cfg, *, allow_unknown: bool = False) -> dict:
    _assert_mapping(cfg, "run config")
    _assert_required_keys(cfg, set(RUN_CONFIG_KEYS), "run config")
    _assert_no_unknown_keys(cfg, set(RUN_CONFIG_KEYS), "run config", allow_unknown)

    for section, keys in RUN_CONFIG_KEYS.items():
        _assert_mapping(cfg[section], section)
        _assert_required_keys(cfg[section], keys, section)
        _assert_no_unknown_keys(cfg[section], keys, section, allow_unknown)

    _assert_bool(cfg["output"]["legacy_sentinel"], "output.legacy_sentinel")
    _assert_bool(cfg["fgdc"]["enabled"], "fgdc.enabled")
    _assert_bool(cfg["transform"]["validate_locations"], "transform.validate_locations")

    try:
        parse_rfc3339(cfg["transform"]["issued_date"])
    except ValueError as exc:
        raise ConfigError(f"transform.issued_date is not RFC 3339: {exc}") from exc

    if str(cfg["logging"]["level"]).upper() not in LOG_LEVELS:
        raise ConfigError(f"Unknown logging.level: {cfg['logging']['level']}")

    return cfg
