"""Theme-bundled translations.

The built-in theme lives in ``realm_i18n/i18n/locales/{locale}.py``
dictionaries, one module per locale, keyed by ``namespace:name``.
Bundles are immutable once built; realm overrides never touch them.
"""

from __future__ import annotations

import functools
from collections.abc import Mapping
from types import MappingProxyType

from realm_i18n.i18n.errors import ConfigurationError, I18nError
from realm_i18n.i18n.keys import DEFAULT_NAMESPACE, TranslationKey, normalize_key
from realm_i18n.i18n.locale import normalize_locale
from realm_i18n.i18n.locales.de import STRINGS as DE_STRINGS
from realm_i18n.i18n.locales.en import STRINGS as EN_STRINGS

# Registry of bundled locales.
_LOCALES: dict[str, dict[str, str]] = {
    "en": EN_STRINGS,
    "de": DE_STRINGS,
}


class ThemeBundle:
    """Read-only translations of one theme, per locale and key.

    Args:
        translations: ``{locale: {key: template}}``.  Tags and keys are
            normalised; malformed ones raise ``ConfigurationError``.
        fallback_locale: Locale that must define every key.
        default_namespace: Namespace for keys given without one.
    """

    __slots__ = ("_fallback", "_translations")

    def __init__(
        self,
        translations: Mapping[str, Mapping[str, str]],
        fallback_locale: str = "en",
        default_namespace: str = DEFAULT_NAMESPACE,
    ) -> None:
        try:
            self._fallback = normalize_locale(fallback_locale)
            self._translations = MappingProxyType(
                {
                    normalize_locale(locale): MappingProxyType(
                        {normalize_key(key, default_namespace): value for key, value in strings.items()}
                    )
                    for locale, strings in translations.items()
                }
            )
        except I18nError as exc:
            raise ConfigurationError(f"Invalid theme bundle: {exc}") from exc

    @property
    def fallback_locale(self) -> str:
        return self._fallback

    def get(self, locale: str, key: str) -> str | None:
        """Return the bundled template for *key* in exactly *locale*, or ``None``."""
        strings = self._translations.get(locale)
        if strings is None:
            return None
        return strings.get(key)

    def locales(self) -> list[str]:
        """Return the bundled locale tags, sorted."""
        return sorted(self._translations)

    def keys(self, locale: str) -> frozenset[str]:
        return frozenset(self._translations.get(locale, {}))

    def validate(self) -> None:
        """Check that the fallback locale can serve every bundled key.

        Plural variants are matched by base key: ``files_few`` in one
        locale is served by any ``files_<category>`` in the fallback
        locale, since each locale has its own set of plural categories.

        Raises:
            ConfigurationError: If the fallback locale is absent, or a key
                defined by another locale is missing from it.
        """
        if self._fallback not in self._translations:
            raise ConfigurationError(f"Fallback locale {self._fallback!r} is not bundled")

        fallback_keys = self.keys(self._fallback)
        fallback_plural_bases = {
            parsed.base for parsed in map(TranslationKey.parse, fallback_keys) if parsed.plural_category
        }

        def _served(key: str) -> bool:
            if key in fallback_keys:
                return True
            parsed = TranslationKey.parse(key)
            return parsed.plural_category is not None and parsed.base in fallback_plural_bases

        missing: dict[str, list[str]] = {}
        for locale, strings in self._translations.items():
            orphan = sorted(key for key in strings if not _served(key))
            if orphan:
                missing[locale] = orphan
        if missing:
            details = "; ".join(f"{loc}: {', '.join(keys)}" for loc, keys in sorted(missing.items()))
            raise ConfigurationError(
                f"Fallback locale {self._fallback!r} is missing keys defined elsewhere: {details}"
            )

    def __repr__(self) -> str:
        return f"<ThemeBundle locales={self.locales()} fallback={self._fallback}>"


@functools.cache
def default_theme(fallback_locale: str = "en", default_namespace: str = DEFAULT_NAMESPACE) -> ThemeBundle:
    """Return the validated built-in theme (cached per fallback locale and namespace)."""
    bundle = ThemeBundle(_LOCALES, fallback_locale=fallback_locale, default_namespace=default_namespace)
    bundle.validate()
    return bundle
