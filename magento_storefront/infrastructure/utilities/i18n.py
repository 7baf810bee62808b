"""
UI string lookup for the Telegram front end.

Locale files live in ``infrastructure/locales/<lang>.json``. Telegram reports
the user's language as an IETF tag ("en-GB", "pt-br"), so lookups use the
primary subtag only. A key missing from the requested locale is taken from
English; a key missing everywhere is returned unchanged.
"""

import json
import os
from functools import lru_cache
from pathlib import Path
from typing import Dict, Optional

LOCALES_DIR = Path(__file__).resolve().parent.parent / "locales"
FALLBACK_LANG = "en"


def normalize_language(lang: Optional[str]) -> str:
    """Reduce a language tag to its lowercase primary subtag"""
    if not lang or not lang.strip():
        return os.getenv("BOT_DEFAULT_LANG", FALLBACK_LANG).lower()
    return lang.strip().replace("_", "-").split("-", 1)[0].lower()


@lru_cache(maxsize=None)
def _strings(lang: str) -> Dict[str, str]:
    path = LOCALES_DIR / f"{lang}.json"
    if not path.is_file():
        return {}
    return json.loads(path.read_text(encoding="utf-8"))


def tr(key: str, lang: Optional[str] = None) -> str:
    """Look up *key* for *lang*, then in English, then return *key*"""
    for code in (normalize_language(lang), FALLBACK_LANG):
        value = _strings(code).get(key)
        if value is not None:
            return value
    return key
