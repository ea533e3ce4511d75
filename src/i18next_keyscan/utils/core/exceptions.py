"""
Basic exception classes for i18next-keyscan.

This module contains fundamental exception classes that are used throughout
the codebase without creating import cycles.
"""

from __future__ import annotations

from enum import Enum
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Sequence

    from ...keys import ExtractedKey
    from ...syntax.nodes import Node


class ErrorSeverity(Enum):
    """Error severity levels for classification and handling."""

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    CRITICAL = "critical"


class ErrorCategory(Enum):
    """Categories of errors for appropriate handling strategies."""

    EXTRACTION = "extraction"
    SYNTAX_TREE = "syntax_tree"
    CONFIGURATION = "configuration"
    UNKNOWN = "unknown"


class KeyScanError(Exception):
    """Base exception class for i18next-keyscan specific errors."""

    def __init__(
        self,
        message: str,
        category: ErrorCategory = ErrorCategory.UNKNOWN,
        severity: ErrorSeverity = ErrorSeverity.MEDIUM,
        context: object | None = None,
        recoverable: bool = True,
    ) -> None:
        super().__init__(message)
        self.category: ErrorCategory = category
        self.severity: ErrorSeverity = severity
        self.context: object | None = context
        self.recoverable: bool = recoverable


class ExtractionError(KeyScanError):
    """
    A key or option is present at a usage site but cannot be resolved statically.

    Raised by extractors and caught per site by the orchestrator, which logs
    it and moves on to the next site.
    """

    def __init__(self, message: str, node: Node | None = None) -> None:
        super().__init__(
            message,
            category=ErrorCategory.EXTRACTION,
            severity=ErrorSeverity.LOW,
            context=node,
            recoverable=True,
        )
        self.node: Node | None = node

    @property
    def line(self) -> int | None:
        """Source line of the offending node, if known."""
        if self.node is None or self.node.line <= 0:
            return None
        return self.node.line


class PartialExtractionError(ExtractionError):
    """
    Some sites handled by one extractor call failed, others succeeded.

    Extractors that find several sites from one node (a hook binding, a
    render prop, a wrapped component) raise this so the orchestrator can keep
    ``keys`` and report each entry of ``errors`` separately.
    """

    def __init__(
        self, errors: Sequence[ExtractionError], keys: Sequence[ExtractedKey]
    ) -> None:
        first = errors[0] if errors else None
        super().__init__(
            f"{len(errors)} usage site(s) could not be extracted",
            first.node if first else None,
        )
        self.errors: list[ExtractionError] = list(errors)
        self.keys: list[ExtractedKey] = list(keys)


class SyntaxTreeError(KeyScanError):
    """Malformed syntax tree input (unexpected node shape or JSON layout)."""

    def __init__(self, message: str, context: object | None = None) -> None:
        super().__init__(
            message,
            category=ErrorCategory.SYNTAX_TREE,
            severity=ErrorSeverity.HIGH,
            context=context,
            recoverable=False,
        )


class ConfigurationError(KeyScanError):
    """Configuration-related errors."""

    def __init__(self, message: str, context: object | None = None) -> None:
        super().__init__(
            message,
            category=ErrorCategory.CONFIGURATION,
            severity=ErrorSeverity.HIGH,
            context=context,
            recoverable=False,
        )
