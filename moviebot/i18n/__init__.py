"""Chat texts in every supported locale.

Each locale is a nested JSON catalog next to this module. Keys are dotted
paths into it, e.g. ``t("movie.rating", "pt-BR")``.
"""

import json
from functools import lru_cache
from pathlib import Path
from typing import Any

CATALOG_DIR = Path(__file__).parent
FALLBACK_LOCALE = "en"


@lru_cache
def load_catalog(locale: str) -> dict[str, Any]:
    """Read a locale's catalog; unknown locales get the English one."""
    path = CATALOG_DIR / f"{locale}.json"
    if not path.exists():
        path = CATALOG_DIR / f"{FALLBACK_LOCALE}.json"
    return json.loads(path.read_text(encoding="utf-8"))


def lookup(key: str, locale: str = FALLBACK_LOCALE) -> str:
    """Text stored under a dotted key. A missing key is returned unchanged."""
    node: Any = load_catalog(locale)
    for part in key.split("."):
        if not isinstance(node, dict) or part not in node:
            return key
        node = node[part]
    return key if isinstance(node, dict) else str(node)


def t(key: str, locale: str = FALLBACK_LOCALE, **fields: Any) -> str:
    """Look up a text and fill in its ``{placeholders}``.

    A placeholder with no matching field leaves the text unformatted.
    """
    text = lookup(key, locale)
    if not fields:
        return text
    try:
        return text.format(**fields)
    except KeyError:
        return text
