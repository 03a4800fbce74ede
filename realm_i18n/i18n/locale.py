"""Locale tags: ``language[-REGION]`` parsing and the specificity chain.

Tags are normalised on parse (``DE-ch`` → ``de-CH``) so that lookups in
the theme bundle and in realm overrides compare equal strings.
"""

from __future__ import annotations

import re
from dataclasses import dataclass

from realm_i18n.i18n.errors import InvalidLocaleError

_TAG_RE = re.compile(r"^(?P<language>[A-Za-z]{2,3})(?:-(?P<region>[A-Za-z]{2}|\d{3}))?$")


@dataclass(frozen=True)
class LocaleTag:
    """A parsed locale tag.

    Attributes:
        language: Lower-case ISO 639 language code (``"de"``).
        region: Upper-case ISO 3166 region or UN M.49 area code
            (``"CH"``, ``"419"``), or ``None``.
    """

    language: str
    region: str | None = None

    @classmethod
    def parse(cls, raw: str | LocaleTag) -> LocaleTag:
        """Parse and normalise *raw*.

        Raises:
            InvalidLocaleError: If *raw* is not ``language[-region]``.
        """
        if isinstance(raw, LocaleTag):
            return raw
        if not isinstance(raw, str):
            raise InvalidLocaleError(f"Locale tag must be a string, got {type(raw).__name__}")
        match = _TAG_RE.match(raw.strip())
        if match is None:
            raise InvalidLocaleError(f"Malformed locale tag: {raw!r}")
        region = match.group("region")
        return cls(
            language=match.group("language").lower(),
            region=region.upper() if region else None,
        )

    @property
    def has_region(self) -> bool:
        return self.region is not None

    @property
    def language_tag(self) -> LocaleTag:
        """The same tag without its region."""
        return LocaleTag(self.language)

    def __str__(self) -> str:
        if self.region:
            return f"{self.language}-{self.region}"
        return self.language


def normalize_locale(raw: str) -> str:
    """Return the canonical string form of *raw*."""
    return str(LocaleTag.parse(raw))


def is_valid_locale(raw: object) -> bool:
    """Return ``True`` if *raw* parses as a locale tag."""
    try:
        LocaleTag.parse(raw)  # type: ignore[arg-type]
    except InvalidLocaleError:
        return False
    return True


def specificity_chain(requested: str | LocaleTag, fallback: str | LocaleTag) -> tuple[str, ...]:
    """Return the locales to try for *requested*, most specific first.

    ``de-CH`` with fallback ``en`` → ``("de-CH", "de", "en")``.
    Duplicates are dropped, so ``en`` → ``("en",)``.
    """
    tag = LocaleTag.parse(requested)
    chain = [str(tag)]
    if tag.has_region:
        chain.append(str(tag.language_tag))
    chain.append(str(LocaleTag.parse(fallback)))
    return tuple(dict.fromkeys(chain))
