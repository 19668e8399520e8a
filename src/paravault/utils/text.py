"""Small text helpers shared by the formatter and the research chain."""

from __future__ import annotations

import re

_NON_ALNUM = re.compile(r"[^a-z0-9]+")
QUOTE_CHARS = "\"'“”‘’`"


def slugify(text: str, *, max_length: int = 50) -> str:
    """Lower-case, collapse non-alphanumeric runs to '-', trim, then truncate."""
    slug = _NON_ALNUM.sub("-", text.lower()).strip("-")
    return slug[:max_length]


def strip_quotes(text: str) -> str:
    """Remove quote characters wrapping ``text``."""
    return text.strip().strip(QUOTE_CHARS).strip()

