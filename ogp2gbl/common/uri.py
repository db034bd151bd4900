"""URI normalisation and identifier encoding."""

from __future__ import annotations

from typing import Any
from urllib.parse import quote, urlsplit, urlunsplit

# RFC 2396 reserved characters and marks; everything else is percent-encoded.
_IDENTIFIER_SAFE = "!*'();/?:@&=+$,[]"


def encode_identifier(value: str) -> str:
    return quote(value, safe=_IDENTIFIER_SAFE)


def clean_uri(value: Any) -> str:
    """Return a normalised URI for a string or the first element of a list.

    Empty input gives an empty string. Raises ValueError when the value
    cannot be parsed as a URI.
    """
    if isinstance(value, (list, tuple)):
        value = value[0] if value else None
    if value is None:
        return ""
    if not isinstance(value, str):
        raise ValueError(f"URI must be a string: {value!r}")
    value = value.strip()
    if not value:
        return ""
    if any(ch.isspace() for ch in value):
        raise ValueError(f"URI contains whitespace: {value!r}")
    parts = urlsplit(value)
    # Raises ValueError on a malformed port.
    _ = parts.port
    return urlunsplit(parts)


def is_http_url(value: Any) -> bool:
    if not isinstance(value, str):
        return False
    try:
        parts = urlsplit(value.strip())
        _ = parts.port
    except ValueError:
        return False
    return parts.scheme in ("http", "https") and bool(parts.netloc)
