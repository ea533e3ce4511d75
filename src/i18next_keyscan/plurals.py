"""
Plural categories per locale.

Categories come from the CLDR data shipped with Babel unless the
configuration overrides them for a locale.
"""

from __future__ import annotations

import logging
from functools import lru_cache

from babel import Locale, UnknownLocaleError

from .config.schema import KeyScanConfig
from .utils.core.exceptions import ConfigurationError

logger = logging.getLogger(__name__)

# CLDR order, which is also the order suffixed keys are emitted in.
CLDR_CATEGORIES = ("zero", "one", "two", "few", "many", "other")


@lru_cache(maxsize=128)
def cldr_plural_categories(locale: str) -> tuple[str, ...]:
    """
    Plural categories CLDR defines for ``locale`` (``en``, ``pt-BR``, ``ar_EG``).

    Raises:
        ConfigurationError: If Babel does not know the locale
    """
    sep = "-" if "-" in locale else "_"
    try:
        parsed = Locale.parse(locale, sep=sep)
    except (UnknownLocaleError, ValueError) as e:
        raise ConfigurationError(f"Unknown locale {locale!r}: {e}") from e

    # "other" is implicit in Babel's rule tags.
    tags = set(parsed.plural_form.tags) | {"other"}
    categories = tuple(c for c in CLDR_CATEGORIES if c in tags)
    logger.debug(f"Plural categories for {locale}: {', '.join(categories)}")
    return categories


def plural_categories(locale: str, config: KeyScanConfig) -> tuple[str, ...]:
    """Plural categories for ``locale``, honoring configured overrides."""
    override = config.plural_rules.get(locale)
    if override:
        return tuple(override)
    return cldr_plural_categories(locale)


def plural_suffixes(locale: str, config: KeyScanConfig) -> list[tuple[str, str]]:
    """
    ``(category, suffix)`` pairs for a plural key in ``locale``.

    v4 suffixes every category (``_one``, ``_other``). v3 keeps the bare key
    for the first form, then ``_plural`` for two-form locales or ``_N``
    numbering otherwise.
    """
    categories = plural_categories(locale, config)
    sep = config.plural_separator

    if config.compatibility_json == "v4":
        return [(category, f"{sep}{category}") for category in categories]

    if len(categories) == 2:
        return [(categories[0], ""), (categories[1], f"{sep}plural")]
    return [(category, f"{sep}{index}") for index, category in enumerate(categories)]
