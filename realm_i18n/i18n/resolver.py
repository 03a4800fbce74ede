"""Locale resolver: realm overrides over theme strings, with fallback.

Precedence is an ordered list of lookups, most specific first, realm
before theme at each specificity level::

    realm  de-CH → theme de-CH → realm de → theme de → realm en → theme en

The first lookup that yields a value wins.  Resolution is a pure
function of its arguments: the ``LocalizationContext`` is an immutable
snapshot and nothing is cached or logged here.

Usage::

    ctx = LocalizationContext.create({"de": {"common:realmSettings": "..."}}, default_theme())
    resolve(ctx, "de-CH", "common:realmSettings")
    resolve(ctx, "en", "user-federation:addProvider", {"provider": "Ldap"}, count=4)
"""

from __future__ import annotations

import re
from collections.abc import Callable, Mapping
from dataclasses import dataclass
from types import MappingProxyType
from typing import Any

from realm_i18n.i18n.errors import MissingTranslationError
from realm_i18n.i18n.keys import DEFAULT_NAMESPACE, TranslationKey, normalize_key
from realm_i18n.i18n.locale import LocaleTag, normalize_locale, specificity_chain
from realm_i18n.i18n.plurals import plural_category
from realm_i18n.i18n.theme import ThemeBundle

SOURCE_REALM = "realm"
SOURCE_THEME = "theme"

_PLACEHOLDER_RE = re.compile(r"\{\{\s*([A-Za-z_][\w.-]*)\s*\}\}")

# (locale, key) -> template or None
Lookup = Callable[[str, str], str | None]


@dataclass(frozen=True)
class LocalizationContext:
    """Everything resolution reads, snapshotted for one render.

    Build it with ``create()`` so that tags and keys are normalised and
    the override mapping is frozen.
    """

    overrides: Mapping[str, Mapping[str, str]]
    theme: ThemeBundle
    fallback_locale: str = "en"
    default_namespace: str = DEFAULT_NAMESPACE

    @classmethod
    def create(
        cls,
        overrides: Mapping[str, Mapping[str, str]] | None,
        theme: ThemeBundle,
        fallback_locale: str | None = None,
        default_namespace: str = DEFAULT_NAMESPACE,
    ) -> LocalizationContext:
        frozen = MappingProxyType(
            {
                normalize_locale(locale): MappingProxyType(
                    {normalize_key(key, default_namespace): value for key, value in strings.items()}
                )
                for locale, strings in (overrides or {}).items()
            }
        )
        return cls(
            overrides=frozen,
            theme=theme,
            fallback_locale=normalize_locale(fallback_locale or theme.fallback_locale),
            default_namespace=default_namespace,
        )

    def realm_value(self, locale: str, key: str) -> str | None:
        strings = self.overrides.get(locale)
        if strings is None:
            return None
        return strings.get(key)

    def theme_value(self, locale: str, key: str) -> str | None:
        return self.theme.get(locale, key)


@dataclass(frozen=True)
class Resolution:
    """Where a template came from."""

    template: str
    locale: str
    source: str
    key: str


def lookup_chain(context: LocalizationContext, requested_locale: str | LocaleTag) -> list[tuple[str, str, Lookup]]:
    """Return ``(locale, source, lookup)`` tiers in precedence order."""
    tiers: list[tuple[str, str, Lookup]] = []
    for locale in specificity_chain(requested_locale, context.fallback_locale):
        tiers.append((locale, SOURCE_REALM, context.realm_value))
        tiers.append((locale, SOURCE_THEME, context.theme_value))
    return tiers


def _candidate_keys(key: TranslationKey, locale: str, count: int | float | None) -> list[str]:
    if count is None or key.plural_category is not None:
        return [str(key)]
    category = plural_category(locale, count)
    return [str(key.with_category(category)), str(key)]


def lookup(
    context: LocalizationContext,
    requested_locale: str | LocaleTag,
    key: str | TranslationKey,
    count: int | float | None = None,
) -> Resolution:
    """Find the template for *key*, without interpolating it.

    Raises:
        InvalidLocaleError: *requested_locale* is malformed.
        InvalidKeyError: *key* is malformed.
        MissingTranslationError: no tier defines the key.
    """
    parsed = TranslationKey.parse(key, context.default_namespace)
    for locale, source, fetch in lookup_chain(context, requested_locale):
        for candidate in _candidate_keys(parsed, locale, count):
            template = fetch(locale, candidate)
            if template is not None:
                return Resolution(template=template, locale=locale, source=source, key=candidate)
    raise MissingTranslationError(str(LocaleTag.parse(requested_locale)), str(parsed))


def interpolate(template: str, values: Mapping[str, Any]) -> str:
    """Replace ``{{name}}`` placeholders; unknown names are left as they are."""

    def _sub(match: re.Match[str]) -> str:
        name = match.group(1)
        if name in values:
            return str(values[name])
        return match.group(0)

    return _PLACEHOLDER_RE.sub(_sub, template)


def resolve(
    context: LocalizationContext,
    requested_locale: str | LocaleTag,
    key: str | TranslationKey,
    args: Mapping[str, Any] | None = None,
    count: int | float | None = None,
) -> str:
    """Return the display string for *key* in *requested_locale*.

    Args:
        context: Overrides + theme snapshot.
        requested_locale: ``language[-REGION]`` tag.
        key: ``namespace:name``; a name without namespace uses the
            context's default namespace.
        args: Values for ``{{placeholder}}`` substitution.
        count: Selects the plural variant (``key_one``/``key_other``/...)
            and is exposed as ``{{count}}`` unless *args* sets it.
    """
    resolution = lookup(context, requested_locale, key, count)
    values: dict[str, Any] = {}
    if count is not None:
        values["count"] = count
    if args:
        values.update(args)
    return interpolate(resolution.template, values)
