"""CLDR plural categories backed by Babel.

``plural_category("en", 4)`` → ``"other"``; ``plural_category("ru", 3)``
→ ``"few"``.  Locales Babel has no data for (private or made-up codes)
behave like a language with a single ``other`` form.
"""

from __future__ import annotations

import functools

from babel import Locale, UnknownLocaleError
from babel.plural import PluralRule

from realm_i18n.i18n.locale import LocaleTag

_OTHER_ONLY = PluralRule({})


@functools.lru_cache(maxsize=128)
def _rule_for(locale: str) -> PluralRule:
    tag = LocaleTag.parse(locale)
    for candidate in dict.fromkeys((str(tag), tag.language)):
        try:
            return Locale.parse(candidate, sep="-").plural_form
        except (UnknownLocaleError, ValueError):
            continue
    return _OTHER_ONLY


def plural_category(locale: str | LocaleTag, count: int | float) -> str:
    """Return the plural category of *count* in *locale*."""
    return _rule_for(str(LocaleTag.parse(locale)))(count)


def plural_categories(locale: str | LocaleTag) -> frozenset[str]:
    """Return every category *locale* distinguishes (always includes ``other``)."""
    return frozenset(_rule_for(str(LocaleTag.parse(locale))).tags) | {"other"}
