"""UTC-focused helpers for record timestamps and run metadata."""

from __future__ import annotations

from datetime import datetime, timezone


def parse_rfc3339(value: str | None) -> datetime:
    """Parse an RFC 3339 timestamp into an aware datetime.

    Raises ValueError for anything that is not a full date-time with offset.
    """
    if not isinstance(value, str):
        raise ValueError(f"not an RFC 3339 timestamp: {value!r}")
    text = value.strip()
    if text[-1:] in ("Z", "z"):
        text = f"{text[:-1]}+00:00"
    # Leap seconds are clamped; datetime has no representation for :60.
    if text[16:19] == ":60":
        text = f"{text[:17]}59{text[19:]}"
    try:
        parsed = datetime.fromisoformat(text)
    except ValueError as exc:
        raise ValueError(f"not an RFC 3339 timestamp: {value!r}") from exc
    if len(text) < 19 or text[10] not in "Tt " or parsed.tzinfo is None:
        raise ValueError(f"not an RFC 3339 timestamp: {value!r}")
    return parsed


def format_solr_datetime(value: datetime) -> str:
    """Format as Solr expects, e.g. 1995-12-31T23:59:59Z."""
    return value.strftime("%Y-%m-%dT%H:%M:%SZ")


def utc_now() -> datetime:
    return datetime.now(tz=timezone.utc)


def utc_timestamp_iso() -> str:
    return utc_now().isoformat(timespec="milliseconds")


def generate_run_id() -> str:
    return utc_now().strftime("run-%Y%m%dT%H%M%S%fZ")
