"""Keyword string splitting.

OGP stores keyword lists as free text. Most institutions delimit entries
with ``;``, ``,`` or ``>`` (thesaurus paths), but some only separate them
with spaces, which cannot be told apart from a single multi-word keyword.
"""

from __future__ import annotations

import re

_DELIMITER_RE = re.compile(r"[;,>]")
_SPLIT_RE = re.compile(r"\s*[;,>]\s*")

RESPACE_MIN_TOKENS = 4


def split_keywords(value) -> list[str] | None:
    if value is None:
        return None
    text = str(value).strip()
    if not text:
        return None
    if _DELIMITER_RE.search(text):
        parts = [part.strip() for part in _SPLIT_RE.split(text)]
        unique = list(dict.fromkeys(part for part in parts if part))
        return unique or None
    return [text]


def respace_keywords(value):
    """Turn a space-separated keyword run into a ``;`` delimited one.

    Applied only when no delimiter is present and there are at least
    RESPACE_MIN_TOKENS tokens; anything else is returned unchanged.
    """
    if not isinstance(value, str) or _DELIMITER_RE.search(value):
        return value
    tokens = value.split()
    if len(tokens) < RESPACE_MIN_TOKENS:
        return value
    return ";".join(tokens)
