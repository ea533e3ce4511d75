"""
Global test configuration fixtures for i18next-keyscan tests.

This module provides reusable pytest fixtures for creating KeyScanConfig
instances with different settings. All fixtures return validated
configuration objects.
"""

from __future__ import annotations

import pytest

from i18next_keyscan.config.schema import KeyScanConfig


@pytest.fixture
def base_config() -> KeyScanConfig:
    """
    Default configuration: one ``en`` locale, v4 plural suffixes.

    Returns:
        KeyScanConfig: Configuration with every default
    """
    return KeyScanConfig()


@pytest.fixture
def two_locale_config() -> KeyScanConfig:
    """
    Configuration deriving keys for English and a locale with a single plural form.

    The plural categories are pinned so the tests do not depend on the CLDR
    release shipped with Babel.

    Returns:
        KeyScanConfig: Configuration for ``en`` and ``ja``
    """
    return KeyScanConfig(
        locales=["en", "ja"],
        plural_rules={"en": ["one", "other"], "ja": ["other"]},
    )


@pytest.fixture
def v3_config() -> KeyScanConfig:
    """
    Configuration using the i18next v3 JSON plural suffixes.

    Returns:
        KeyScanConfig: Configuration with ``compatibility_json="v3"``
    """
    return KeyScanConfig(compatibility_json="v3")


@pytest.fixture
def key_as_default_config() -> KeyScanConfig:
    """
    Configuration using the key itself as default value.

    Returns:
        KeyScanConfig: Configuration with ``key_as_default_value`` enabled
    """
    return KeyScanConfig(key_as_default_value=True)


@pytest.fixture
def gendered_contexts_config() -> KeyScanConfig:
    """
    Configuration emitting placeholder contexts for dynamic context values.

    Returns:
        KeyScanConfig: Configuration with ``default_contexts`` of "", male, female
    """
    return KeyScanConfig(default_contexts=["", "male", "female"])
