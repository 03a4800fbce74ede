"""Exception hierarchy for the i18n layer.

Two kinds of failure exist:

- *configuration defects* (``ConfigurationError``): the theme bundle is
  broken, e.g. the fallback locale misses a key.  Surfaced at startup by
  ``ThemeBundle.validate()`` or, for keys nobody validated, by
  ``resolve()``.
- *caller defects* (``InvalidLocaleError`` / ``InvalidKeyError``): a
  malformed locale tag or key was passed to a registration boundary.
"""

from __future__ import annotations


class I18nError(Exception):
    """Base class for all i18n errors."""


class ConfigurationError(I18nError):
    """Theme bundle or settings are unusable."""


class MissingTranslationError(ConfigurationError, LookupError):
    """No tier of the fallback chain defines the key."""

    def __init__(self, locale: str, key: str) -> None:
        super().__init__(f"No translation for {key!r} (requested locale {locale!r})")
        self.locale = locale
        self.key = key


class InvalidLocaleError(I18nError, ValueError):
    """Locale tag is not ``language[-REGION]``."""


class InvalidKeyError(I18nError, ValueError):
    """Translation key is not ``namespace:name``."""


class RealmNotFoundError(I18nError, LookupError):
    """Realm name is not present in the store."""


class UserNotFoundError(I18nError, LookupError):
    """User id is not present in the store."""
