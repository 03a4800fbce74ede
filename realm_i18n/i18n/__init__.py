"""Internationalization layer: locale fallback over realm and theme strings.

A display string is looked up, most specific first, in::

    realm de-CH → theme de-CH → realm de → theme de → realm en → theme en

where *realm* values are tenant overrides stored in the database and
*theme* values are the built-in ``locales/{lang}.py`` dictionaries.

Fallback behaviour:
- Unknown *locale* → falls back to its language, then to ``en``.
- Unknown *key* in every tier → ``MissingTranslationError`` (a theme
  configuration defect, caught at startup by ``ThemeBundle.validate()``).

Usage::

    from realm_i18n.i18n import LocalizationContext, default_theme, resolve

    ctx = LocalizationContext.create({"en": {"common:realmSettings": "Realm"}}, default_theme())
    resolve(ctx, "fo", "common:realmSettings")                   # → "Realm"
    resolve(ctx, "de", "common:realmSettings")                   # → "Realm-Einstellungen"
    resolve(ctx, "en", "user-federation:addProvider",
            {"provider": "Ldap"}, count=4)                       # → "Add Ldap providers"
"""

from __future__ import annotations

from realm_i18n.i18n.errors import (
    ConfigurationError,
    I18nError,
    InvalidKeyError,
    InvalidLocaleError,
    MissingTranslationError,
)
from realm_i18n.i18n.keys import TranslationKey
from realm_i18n.i18n.locale import LocaleTag, is_valid_locale, specificity_chain
from realm_i18n.i18n.plurals import plural_categories, plural_category
from realm_i18n.i18n.resolver import LocalizationContext, Resolution, interpolate, lookup, resolve
from realm_i18n.i18n.theme import ThemeBundle, default_theme

__all__ = [
    "ConfigurationError",
    "I18nError",
    "InvalidKeyError",
    "InvalidLocaleError",
    "LocaleTag",
    "LocalizationContext",
    "MissingTranslationError",
    "Resolution",
    "ThemeBundle",
    "TranslationKey",
    "default_theme",
    "interpolate",
    "is_valid_locale",
    "lookup",
    "plural_categories",
    "plural_category",
    "resolve",
    "specificity_chain",
]
