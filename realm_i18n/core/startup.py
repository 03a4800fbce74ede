"""Process startup: logging, migrations, theme validation.

Call ``startup()`` once before serving renders.  A broken theme bundle
(fallback locale missing, or missing keys) fails here rather than on the
first request that needs the key.
"""

from __future__ import annotations

import logging
import subprocess
import sys

from realm_i18n.core.config import Settings, get_settings
from realm_i18n.core.logging import setup_logging
from realm_i18n.i18n.theme import ThemeBundle, default_theme

logger = logging.getLogger(__name__)


def run_migrations(revision: str = "head") -> None:
    """Upgrade the store schema to *revision* in a child process.

    ``alembic/env.py`` owns its event loop, so it cannot share one with
    an async caller.

    Raises:
        RuntimeError: If alembic exits non-zero; carries its stderr.
    """
    logger.info("Upgrading schema to %s", revision, extra={"event": "migrations_start"})
    proc = subprocess.run(
        [sys.executable, "-m", "alembic", "upgrade", revision],
        capture_output=True,
        text=True,
    )
    if proc.returncode:
        stderr = proc.stderr.strip()
        logger.error("Schema upgrade to %s failed", revision, extra={"event": "migrations_failed"})
        raise RuntimeError(f"alembic upgrade {revision} failed: {stderr}")
    logger.info("Schema at %s", revision, extra={"event": "migrations_done"})


def startup(migrate: bool = True) -> tuple[Settings, ThemeBundle]:
    """Configure logging, migrate the schema and load the theme.

    Returns:
        The settings in effect and the validated built-in theme.

    Raises:
        ConfigurationError: If the theme bundle is invalid.
    """
    settings = get_settings()
    setup_logging(settings.LOG_LEVEL)

    if migrate:
        run_migrations()

    theme = default_theme(settings.FALLBACK_LOCALE, settings.DEFAULT_NAMESPACE)
    logger.info(
        "Theme loaded: %s",
        ", ".join(theme.locales()),
        extra={"event": "theme_loaded", "locale": theme.fallback_locale},
    )
    return settings, theme
