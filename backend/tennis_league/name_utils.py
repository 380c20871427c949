"""Name normalisation used for alphabetical tie-breaks."""

from __future__ import annotations

import re
import unicodedata


def normalize_name(name: str | None) -> str:
    if not name:
        return ""
    # Normalize to NFKD and remove diacritics (e.g., é -> e)
    s = unicodedata.normalize("NFKD", name)
    s = "".join(c for c in s if not unicodedata.combining(c))
    s = s.casefold()
    s = re.sub(r"\s+", " ", s).strip()
    return s


def collation_key(name: str | None) -> tuple[str, str]:
    """Return a locale-independent sort key for ``name``.

    Accents and case are ignored first ("Álvaro" sorts next to "alvaro"), the
    raw string then orders names that only differ by accent or case so the
    result never depends on the process locale.
    """

    return normalize_name(name), name or ""
