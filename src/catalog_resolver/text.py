from __future__ import annotations

import re
import unicodedata

_MULTISPACE_RE = re.compile(r"\s+")


def casefold_label(value: str) -> str:
    """Case-insensitive comparison key: trimmed, whitespace-collapsed, casefolded."""

    return _MULTISPACE_RE.sub(" ", value.strip()).casefold()


def fold_label(value: str) -> str:
    """Accent-insensitive comparison key used for approximate matching."""

    decomposed = unicodedata.normalize("NFD", casefold_label(value))
    return "".join(ch for ch in decomposed if not unicodedata.combining(ch))
