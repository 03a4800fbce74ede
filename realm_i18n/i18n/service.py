"""Rendering-layer entry points: pick a user's locale and bind a translator.

The store is read once per render into an immutable
``LocalizationContext``; the returned ``Translator`` is then safe to share
across concurrent renders.

Usage::

    async with get_session() as session:
        tr = await translator_for_user(session, "master", user_id)
    tr.t("common:realmSettings")
    tr.t("user-federation:addProvider", count=4, provider="Ldap")
"""

from __future__ import annotations

import logging
import uuid
from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from typing import Any

from sqlalchemy.ext.asyncio import AsyncSession

from realm_i18n.core.config import get_settings
from realm_i18n.db.models import Realm
from realm_i18n.db.repos import LocalizationRepo, RealmRepo, UserRepo
from realm_i18n.i18n.errors import InvalidLocaleError
from realm_i18n.i18n.locale import LocaleTag, normalize_locale
from realm_i18n.i18n.resolver import LocalizationContext, Resolution, interpolate, lookup
from realm_i18n.i18n.theme import ThemeBundle, default_theme

logger = logging.getLogger(__name__)


def select_locale(
    requested: str | None,
    supported: Sequence[str],
    default_locale: str | None,
    fallback_locale: str,
) -> str:
    """Return the locale a realm will render for a *requested* preference.

    Order: the requested tag if supported, its language if supported, the
    realm default, the fallback.  An empty *supported* list means the
    realm has internationalization disabled.
    """
    supported_set = {normalize_locale(tag) for tag in supported}
    if requested and supported_set:
        try:
            tag = LocaleTag.parse(requested)
        except InvalidLocaleError:
            logger.warning(
                "Ignoring malformed stored locale %r",
                requested,
                extra={"event": "locale_invalid", "locale": requested},
            )
        else:
            for candidate in (str(tag), str(tag.language_tag)):
                if candidate in supported_set:
                    return candidate
    if default_locale:
        return normalize_locale(default_locale)
    return normalize_locale(fallback_locale)


@dataclass(frozen=True)
class Translator:
    """A ``LocalizationContext`` bound to one locale."""

    context: LocalizationContext
    locale: str

    def lookup(self, key: str, count: int | float | None = None) -> Resolution:
        return lookup(self.context, self.locale, key, count)

    def t(
        self,
        key: str,
        args: Mapping[str, Any] | None = None,
        /,
        count: int | float | None = None,
        **kwargs: Any,
    ) -> str:
        """Return the display string for *key*; see ``resolver.resolve``.

        Placeholder values come from *args* and then *kwargs*.  *key* and
        *args* are positional-only, so ``{{key}}`` can be filled by
        keyword; a ``{{count}}`` value other than *count* goes in *args*.
        """
        resolution = self.lookup(key, count)
        if resolution.locale != self.locale:
            logger.debug(
                "Served %s from %s %s",
                resolution.key,
                resolution.source,
                resolution.locale,
                extra={
                    "event": "i18n_fallback",
                    "locale": self.locale,
                    "resolved_locale": resolution.locale,
                    "key": resolution.key,
                    "source": resolution.source,
                },
            )
        values: dict[str, Any] = {}
        if count is not None:
            values["count"] = count
        if args:
            values.update(args)
        values.update(kwargs)
        return interpolate(resolution.template, values)


async def _load(
    session: AsyncSession,
    realm_name: str | None,
    theme: ThemeBundle | None,
) -> tuple[Realm, LocalizationContext]:
    settings = get_settings()
    realm = await RealmRepo.get_by_name(session, realm_name or settings.DEFAULT_REALM)
    overrides = await LocalizationRepo.snapshot(session, realm.id)
    context = LocalizationContext.create(
        overrides,
        theme or default_theme(settings.FALLBACK_LOCALE, settings.DEFAULT_NAMESPACE),
        fallback_locale=settings.FALLBACK_LOCALE,
        default_namespace=settings.DEFAULT_NAMESPACE,
    )
    return realm, context


async def load_context(
    session: AsyncSession,
    realm_name: str | None = None,
    theme: ThemeBundle | None = None,
) -> LocalizationContext:
    """Snapshot the realm's overrides together with *theme*.

    ``realm_name=None`` means ``Settings.DEFAULT_REALM``; ``theme=None``
    means the built-in theme.
    """
    _, context = await _load(session, realm_name, theme)
    return context


async def translator_for_locale(
    session: AsyncSession,
    realm_name: str | None,
    locale: str | None,
    theme: ThemeBundle | None = None,
) -> Translator:
    """Return a translator for an explicit *locale* preference."""
    realm, context = await _load(session, realm_name, theme)
    chosen = select_locale(locale, realm.supported_locales or [], realm.default_locale, context.fallback_locale)
    return Translator(context=context, locale=chosen)


async def translator_for_user(
    session: AsyncSession,
    realm_name: str | None,
    user_id: uuid.UUID,
    theme: ThemeBundle | None = None,
) -> Translator:
    """Return a translator for the user's stored locale preference."""
    requested = await UserRepo.get_locale(session, user_id)
    translator = await translator_for_locale(session, realm_name, requested, theme)
    logger.debug(
        "Translator bound to %s",
        translator.locale,
        extra={
            "event": "translator_bound",
            "realm": realm_name,
            "user_id": user_id,
            "locale": translator.locale,
        },
    )
    return translator
