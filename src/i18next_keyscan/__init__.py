"""
i18next-keyscan - Static extraction of i18next translation keys from React syntax trees.
"""

from .config import ConfigManager, KeyScanConfig
from .keys import ExtractedKey, ParsedOptions, TranslationKey, derive_keys
from .orchestrator import (
    Diagnostic,
    ExtractionPass,
    KeyCollector,
    PassResult,
    extract_program,
)
from .syntax import load_program, load_program_file
from .utils.core.exceptions import (
    ConfigurationError,
    ExtractionError,
    KeyScanError,
    SyntaxTreeError,
)
from .utils.core.version import get_project_version

__version__ = get_project_version()

__all__ = [
    "ConfigManager",
    "ConfigurationError",
    "Diagnostic",
    "ExtractedKey",
    "ExtractionError",
    "ExtractionPass",
    "KeyCollector",
    "KeyScanConfig",
    "KeyScanError",
    "ParsedOptions",
    "PassResult",
    "SyntaxTreeError",
    "TranslationKey",
    "derive_keys",
    "extract_program",
    "load_program",
    "load_program_file",
]
