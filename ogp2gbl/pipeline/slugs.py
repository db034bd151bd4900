"""Slug generation with per-run uniqueness."""

from __future__ import annotations

import random
import re

from ogp2gbl.common.constants import SLUG_NAME_PREFIXES

_INVALID_CHARS_RE = re.compile(r"[^a-zA-Z0-9\-]")
_DASH_RUN_RE = re.compile(r"-+")


def strip_name_prefixes(name: str) -> str:
    for prefix in SLUG_NAME_PREFIXES:
        name = name.replace(prefix, "", 1)
    return name


def base_slug(institution: str | None, raw_name: str | None, display_name: str | None) -> str:
    name = strip_name_prefixes(str(raw_name or ""))
    if len(name) < 2:
        # Use the first word of the title when the layer name is unusable.
        words = str(display_name or "").split()
        name = words[0] if words else ""
    slug = f"{institution or ''}-{name}"
    slug = _INVALID_CHARS_RE.sub("-", slug)
    slug = _DASH_RUN_RE.sub("-", slug)
    return slug.lower()


class SlugRegistry:
    """Slugs handed out during one run.

    Not thread-safe: the batch driver processes records sequentially.
    """

    def __init__(self, rng: random.Random | None = None) -> None:
        self._rng = rng or random.Random()
        self._slugs: dict[str, bool] = {}

    def __contains__(self, slug: str) -> bool:
        return slug in self._slugs

    def __len__(self) -> int:
        return len(self._slugs)

    def _suffixed(self, slug: str) -> str:
        return f"{slug}-{self._rng.randrange(1_000_000):06d}"

    def register(self, slug: str) -> str:
        candidate = slug
        while candidate in self._slugs:
            candidate = self._suffixed(slug)
        self._slugs[candidate] = True
        return candidate

    def slug(self, institution: str | None, raw_name: str | None, display_name: str | None) -> str:
        return self.register(base_slug(institution, raw_name, display_name))
