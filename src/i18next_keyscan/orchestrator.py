"""
Extraction pass over one program and key collection across files.

``ExtractionPass`` walks a program, hands every node to the extractors
registered for its type (in priority order), keeps one extracted key per
usage site and derives the translation keys of every configured locale.
Extraction errors are reported and skipped; anything else propagates.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Sequence
from dataclasses import dataclass, field
from typing import final

from .comments import CommentHint, parse_comment_hints
from .config.schema import KeyScanConfig
from .extractors import ExtractorInfo, extractors_for, get_priority
from .keys import ExtractedKey, TranslationKey, derive_all
from .syntax.nodes import Node, Program
from .syntax.scope import analyze
from .utils.core.exceptions import ExtractionError, PartialExtractionError

logger = logging.getLogger(__name__)

UNKNOWN_FILE = "???"


@dataclass(frozen=True)
class Diagnostic:
    """A usage site that could not be extracted."""

    file: str
    line: int | None
    message: str

    def format(self) -> str:
        line = self.line if self.line is not None else UNKNOWN_FILE
        return f"Extraction error in {self.file} at line {line}. {self.message}"


@dataclass
class PassResult:
    """Outcome of one extraction pass."""

    extracted_keys: list[ExtractedKey] = field(default_factory=list)
    keys_by_locale: dict[str, list[TranslationKey]] = field(default_factory=dict)
    diagnostics: list[Diagnostic] = field(default_factory=list)


@final
class ExtractionPass:
    """
    Run every extractor over one program.

    Each usage site yields at most one extracted key. When two extractors
    claim the same site, the higher-priority one wins regardless of which
    ran first, and its key keeps the position of the first claim.
    """

    def __init__(self, program: Program, config: KeyScanConfig) -> None:
        self.program: Program = program
        self.config: KeyScanConfig = config
        self.filename: str = program.filename or UNKNOWN_FILE
        self._hints: list[CommentHint] = []
        self._keys: list[ExtractedKey] = []
        self._claims: dict[Node, int] = {}
        self._failed: set[Node] = set()
        self._diagnostics: list[Diagnostic] = []

    def run(self) -> PassResult:
        """
        Extract and derive the keys of the program.

        Raises:
            KeyScanError: For any failure other than an extraction error,
                e.g. an unknown locale in the configuration
        """
        self._keys = []
        self._claims = {}
        self._failed = set()
        self._diagnostics = []

        analyze(self.program)
        self._hints = parse_comment_hints(
            self.program.comments, self.config.comment_hints
        )
        logger.debug(
            f"Parsed {len(self._hints)} comment hints in {self.filename}"
        )

        for node in self.program.walk():
            for info in extractors_for(node):
                self._run_extractor(info, node)

        keys_by_locale = {
            locale: derive_all(self._keys, locale, self.config)
            for locale in self.config.locales
        }

        logger.info(
            f"Extracted {len(self._keys)} keys from {self.filename} "
            f"({len(self._diagnostics)} errors)"
        )
        return PassResult(
            extracted_keys=list(self._keys),
            keys_by_locale=keys_by_locale,
            diagnostics=list(self._diagnostics),
        )

    def _run_extractor(self, info: ExtractorInfo, node: Node) -> None:
        try:
            keys = info.function(node, self.config, self._hints)
        except PartialExtractionError as e:
            for error in e.errors:
                self._report(error, node)
            keys = e.keys
        except ExtractionError as e:
            self._report(e, node)
            return
        self._collect(keys)

    def _collect(self, keys: Iterable[ExtractedKey]) -> None:
        for key in keys:
            site = key.site
            index = self._claims.get(site)
            if index is None:
                self._claims[site] = len(self._keys)
                self._keys.append(key)
                continue

            current = self._keys[index]
            if get_priority(key.extractor_name) < get_priority(current.extractor_name):
                logger.debug(
                    f"{key.extractor_name} takes over the site at line {key.line} "
                    f"from {current.extractor_name}"
                )
                self._keys[index] = key

    def _report(self, error: ExtractionError, visited: Node) -> None:
        node = error.node or visited
        if node in self._failed:
            return
        self._failed.add(node)

        line = error.line or visited.line or None
        diagnostic = Diagnostic(self.filename, line, str(error))
        self._diagnostics.append(diagnostic)
        logger.warning(diagnostic.format())


def extract_program(program: Program, config: KeyScanConfig) -> PassResult:
    """Convenience wrapper running one ``ExtractionPass``."""
    return ExtractionPass(program, config).run()


@final
class KeyCollector:
    """
    Accumulates translation keys across files, per locale.

    The same ``(namespace, key)`` found in several files is kept once: the
    first occurrence fixes its position, and its default value is replaced
    only when the first one had none.
    """

    def __init__(self, config: KeyScanConfig) -> None:
        self.config: KeyScanConfig = config
        self._keys: dict[str, dict[tuple[str, str], TranslationKey]] = {
            locale: {} for locale in config.locales
        }
        self.diagnostics: list[Diagnostic] = []

    def add(self, result: PassResult) -> None:
        """Merge the keys and diagnostics of one pass."""
        for locale, keys in result.keys_by_locale.items():
            self.add_keys(locale, keys)
        self.diagnostics.extend(result.diagnostics)

    def add_keys(self, locale: str, keys: Sequence[TranslationKey]) -> None:
        collected = self._keys.setdefault(locale, {})
        for key in keys:
            identity = (key.namespace, key.key)
            existing = collected.get(identity)
            if existing is None or (
                not existing.default_value and key.default_value
            ):
                collected[identity] = key

    def keys(self, locale: str) -> list[TranslationKey]:
        return list(self._keys.get(locale, {}).values())

    def as_dict(self) -> dict[str, dict[str, dict[str, str | None]]]:
        """``{locale: {namespace: {key: default_value}}}``"""
        output: dict[str, dict[str, dict[str, str | None]]] = {}
        for locale, collected in self._keys.items():
            namespaces: dict[str, dict[str, str | None]] = {}
            for key in collected.values():
                namespaces.setdefault(key.namespace, {})[key.key] = key.default_value
            output[locale] = namespaces
        return output
