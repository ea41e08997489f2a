"""
Locale helpers for tests. Installed locales differ between hosts, so tests
pick the first one that exists and skip when none does.
"""

import locale
from typing import Optional

# Locales with currency conventions, most common first
CURRENCY_LOCALES = ["de_DE.UTF-8", "en_US.UTF-8", "en_GB.UTF-8", "fr_FR.UTF-8", "es_ES.UTF-8"]
ANY_LOCALES = CURRENCY_LOCALES + ["C.UTF-8", "C.utf8"]


def find_locale(candidates) -> Optional[str]:
    """First candidate the host can load for LC_MONETARY; leaves LC_MONETARY unchanged"""
    saved = locale.setlocale(locale.LC_MONETARY)
    try:
        for name in candidates:
            try:
                locale.setlocale(locale.LC_MONETARY, name)
            except locale.Error:
                continue
            return name
        return None
    finally:
        locale.setlocale(locale.LC_MONETARY, saved)


def clear_locale_environment(monkeypatch):
    for variable in ("LC_ALL", "LC_MONETARY", "LANG"):
        monkeypatch.delenv(variable, raising=False)
