"""Configuration schema and loading."""

from .manager import ConfigManager
from .schema import CommentHintKeywords, KeyScanConfig

__all__ = ["CommentHintKeywords", "ConfigManager", "KeyScanConfig"]
