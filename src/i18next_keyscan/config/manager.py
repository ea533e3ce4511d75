"""Configuration manager for i18next-keyscan.

This module provides functionality for loading and validating YAML
configuration files with Pydantic model validation, and for writing a
documented sample configuration.
"""

import logging
from collections.abc import Mapping
from pathlib import Path

import yaml
from pydantic import ValidationError

from ..utils.core.exceptions import ConfigurationError
from .schema import KeyScanConfig


logger = logging.getLogger(__name__)


class ConfigManager:
    """
    Configuration manager for handling YAML config files with Pydantic validation.

    All failures (missing file, YAML syntax, schema violations) surface as
    ``ConfigurationError`` so callers only need one except clause.
    """

    @staticmethod
    def load_config(config_path: Path) -> KeyScanConfig:
        """
        Load and validate configuration from a YAML file.

        Args:
            config_path: Path to the YAML configuration file

        Returns:
            KeyScanConfig: Validated configuration object

        Raises:
            ConfigurationError: If the file is missing, unreadable or invalid
        """
        if not config_path.exists():
            raise ConfigurationError(f"Configuration file not found: {config_path}")

        try:
            with config_path.open("r", encoding="utf-8") as f:
                raw_config_data: object = yaml.safe_load(f)  # pyright: ignore[reportAny]
        except yaml.YAMLError as e:
            raise ConfigurationError(f"Invalid YAML syntax in {config_path}: {e}") from e

        if raw_config_data is None:
            config_data: dict[str, object] = {}
        elif isinstance(raw_config_data, dict):
            config_data = raw_config_data  # pyright: ignore[reportUnknownVariableType]
        else:
            raise ConfigurationError(
                f"Configuration file must contain a YAML dictionary, got {type(raw_config_data).__name__}"
            )

        config = ConfigManager.from_mapping(config_data, source=str(config_path))
        logger.info(f"Loaded configuration from {config_path}")
        return config

    @staticmethod
    def from_mapping(
        config_data: Mapping[str, object], source: str = "<mapping>"
    ) -> KeyScanConfig:
        """
        Validate a plain mapping into a configuration object.

        Raises:
            ConfigurationError: If the mapping fails Pydantic validation
        """
        try:
            return KeyScanConfig.model_validate(dict(config_data))
        except ValidationError as e:
            raise ConfigurationError(f"Invalid configuration in {source}: {e}", context=e) from e

    @staticmethod
    def with_overrides(config: KeyScanConfig, **overrides: object) -> KeyScanConfig:
        """
        Return a re-validated copy of ``config`` with some fields replaced.

        Raises:
            ConfigurationError: If the result fails validation
        """
        merged: dict[str, object] = config.model_dump()
        merged.update(overrides)
        return ConfigManager.from_mapping(merged, source="overrides")

    @staticmethod
    def create_sample_config(sample_path: Path) -> None:
        """
        Create a sample configuration file with all options and documentation.

        Args:
            sample_path: Path where to create the sample configuration file
        """
        sample_content = ConfigManager._generate_sample_content()

        _ = sample_path.parent.mkdir(parents=True, exist_ok=True)
        _ = sample_path.write_text(sample_content, encoding="utf-8")

    @staticmethod
    def _generate_sample_content() -> str:
        """
        Generate sample configuration file content with documentation.

        Returns:
            str: Sample configuration file content
        """
        return """# i18next-keyscan configuration file
# Every option is optional; the values below are the defaults.

# ============================================================================
# Locales and namespaces
# ============================================================================

locales:
  - en
default_ns: translation
ns_separator: ":"
key_separator: "."

# ============================================================================
# Plural and context derivation
# ============================================================================

plural_separator: "_"
context_separator: "_"
# v4: key_one, key_other (CLDR categories); v3: key, key_plural / key_0, key_1
compatibility_json: v4
# Contexts emitted when a usage passes a context that is not statically known.
# "" stands for the base key. Add e.g. male/female to get placeholders.
default_contexts:
  - ""
# Override CLDR plural categories per locale
plural_rules: {}

# ============================================================================
# Default values
# ============================================================================

default_value: ""
use_i18next_default_value: true
use_i18next_default_value_for_derived_keys: false
key_as_default_value: false
key_as_default_value_for_derived_keys: true

# ============================================================================
# Recognized APIs
# ============================================================================

t_function_names:
  - t
i18next_modules:
  - i18next
custom_trans_components: []
custom_use_translation_hooks: []
trans_keep_basic_html_nodes_for:
  - br
  - strong
  - i
  - p
trans_max_depth: 64

# ============================================================================
# Comment hints
# ============================================================================

comment_hints:
  disable_line: i18next-extract-disable-line
  disable_next_line: i18next-extract-disable-next-line
  disable_section_start: i18next-extract-disable
  disable_section_stop: i18next-extract-enable
  default_value: i18next-extract-mark-default-value
  namespace: i18next-extract-mark-ns
  context: i18next-extract-mark-context
  plural: i18next-extract-mark-plural
"""
