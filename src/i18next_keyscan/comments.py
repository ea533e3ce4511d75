"""
Comment hints: directives embedded in source comments.

A file's comments are parsed once into an ordered list of ``CommentHint``.
Each hint applies to an inclusive range of source lines; extractors look up
the hints whose range contains the start line of a usage site.

Usage Examples:
    Skip one usage::

        t('generated.' + id) // i18next-extract-disable-line

    Skip the next line::

        // i18next-extract-disable-next-line
        t(dynamicKey)

    Force options for a usage::

        // i18next-extract-mark-ns-next-line common
        // i18next-extract-mark-context-next-line ["male", "female"]
        t('friend', { context: gender })
"""

from __future__ import annotations

import json
import logging
import re
import sys
from collections.abc import Sequence
from dataclasses import dataclass
from enum import Enum

from .config.schema import CommentHintKeywords
from .syntax.nodes import Comment, Node

logger = logging.getLogger(__name__)

_DIRECTIVE_RE = re.compile(r"^\s*(\S+)\s*(.*?)\s*$", re.DOTALL)

# End line of a section that is never closed.
OPEN_END = sys.maxsize


class HintKind(Enum):
    """Kinds of comment hints."""

    DISABLE_LINE = "disable_line"
    DISABLE_NEXT_LINE = "disable_next_line"
    DISABLE_SECTION = "disable_section"
    DEFAULT_VALUE = "default_value"
    OPTIONS = "options"


DISABLE_KINDS = frozenset(
    {HintKind.DISABLE_LINE, HintKind.DISABLE_NEXT_LINE, HintKind.DISABLE_SECTION}
)


@dataclass(frozen=True)
class CommentHint:
    """
    One parsed directive.

    ``option`` names the ParsedOptions field an OPTIONS hint overrides
    (``ns``, ``contexts`` or ``has_count``); ``payload`` is the parsed value.
    """

    kind: HintKind
    line: int
    end_line: int
    payload: str | bool | tuple[str, ...] | None = None
    option: str | None = None
    comment: Comment | None = None

    def applies_to(self, line: int) -> bool:
        return self.line <= line <= self.end_line


def _parse_contexts(value: str) -> bool | tuple[str, ...]:
    if value in ("", "enable"):
        return True
    if value == "disable":
        return False
    try:
        parsed: object = json.loads(value)
    except json.JSONDecodeError:
        return tuple(part for part in re.split(r"[,\s]+", value) if part)
    if isinstance(parsed, list):
        return tuple(str(item) for item in parsed)  # pyright: ignore[reportUnknownVariableType, reportUnknownArgumentType]
    return (str(parsed),)


def _parse_plural(value: str) -> bool:
    return value != "disable"


def _parse_text_value(value: str) -> str:
    """Accept both bare words and JSON strings (to keep surrounding spaces)."""
    if len(value) >= 2 and value[0] == value[-1] == '"':
        try:
            parsed: object = json.loads(value)
        except json.JSONDecodeError:
            return value
        if isinstance(parsed, str):
            return parsed
    return value


@dataclass
class _OpenSection:
    order: int
    comment: Comment
    kind: HintKind
    option: str | None
    payload: str | bool | tuple[str, ...] | None


class _HintParser:
    """Single pass over a file's comments."""

    def __init__(self, keywords: CommentHintKeywords) -> None:
        self._keywords: CommentHintKeywords = keywords
        self._hints: list[tuple[int, CommentHint]] = []
        # Open sections keyed by option name, "disable" for disable sections.
        self._open: dict[str, list[_OpenSection]] = {}
        self._order: int = 0

    def parse(self, comments: Sequence[Comment]) -> list[CommentHint]:
        for comment in comments:
            match = _DIRECTIVE_RE.match(comment.value)
            if match is None:
                continue
            self._classify(comment, match.group(1), match.group(2))

        for pending in self._open.values():
            for section in pending:
                self._close(section, OPEN_END)

        return [hint for _, hint in sorted(self._hints, key=lambda item: item[0])]

    def _next_order(self) -> int:
        self._order += 1
        return self._order

    def _add_line_hint(
        self,
        kind: HintKind,
        comment: Comment,
        next_line: bool,
        payload: str | bool | tuple[str, ...] | None = None,
        option: str | None = None,
    ) -> None:
        if next_line:
            line = end_line = comment.end_line + 1
        else:
            line, end_line = comment.line, comment.end_line
        hint = CommentHint(kind, line, end_line, payload, option, comment)
        self._hints.append((self._next_order(), hint))

    def _classify(self, comment: Comment, keyword: str, value: str) -> None:
        kw = self._keywords

        if keyword == kw.disable_line:
            self._add_line_hint(HintKind.DISABLE_LINE, comment, next_line=False)
        elif keyword == kw.disable_next_line:
            self._add_line_hint(HintKind.DISABLE_NEXT_LINE, comment, next_line=True)
        elif keyword == kw.disable_section_start:
            self._open_section("disable", comment, HintKind.DISABLE_SECTION)
        elif keyword == kw.disable_section_stop:
            self._close_section("disable", comment)
        elif keyword in (f"{kw.default_value}-line", f"{kw.default_value}-next-line"):
            self._add_line_hint(
                HintKind.DEFAULT_VALUE,
                comment,
                next_line=keyword.endswith("-next-line"),
                payload=_parse_text_value(value),
            )
        else:
            self._classify_option(comment, keyword, value)

    def _classify_option(self, comment: Comment, keyword: str, value: str) -> None:
        kw = self._keywords
        for prefix, option in (
            (kw.namespace, "ns"),
            (kw.context, "contexts"),
            (kw.plural, "has_count"),
        ):
            if not keyword.startswith(f"{prefix}-"):
                continue
            scope = keyword[len(prefix) + 1 :]
            if scope == "stop":
                self._close_section(option, comment)
                return

            payload: str | bool | tuple[str, ...]
            match option:
                case "ns":
                    if not value:
                        logger.debug(f"Ignoring namespace hint without a value at line {comment.line}")
                        return
                    payload = _parse_text_value(value)
                case "contexts":
                    payload = _parse_contexts(value)
                case _:
                    payload = _parse_plural(value)

            match scope:
                case "line" | "next-line":
                    self._add_line_hint(
                        HintKind.OPTIONS,
                        comment,
                        next_line=scope == "next-line",
                        payload=payload,
                        option=option,
                    )
                case "start":
                    self._open_section(option, comment, HintKind.OPTIONS, option, payload)
                case _:
                    logger.debug(f"Unknown comment hint {keyword!r} at line {comment.line}")
            return

    def _open_section(
        self,
        name: str,
        comment: Comment,
        kind: HintKind,
        option: str | None = None,
        payload: str | bool | tuple[str, ...] | None = None,
    ) -> None:
        section = _OpenSection(self._next_order(), comment, kind, option, payload)
        self._open.setdefault(name, []).append(section)

    def _close_section(self, name: str, comment: Comment) -> None:
        pending = self._open.get(name)
        if not pending:
            logger.debug(f"Section end without a start at line {comment.line}")
            return
        self._close(pending.pop(), comment.line)

    def _close(self, section: _OpenSection, end_line: int) -> None:
        hint = CommentHint(
            section.kind,
            section.comment.line,
            end_line,
            section.payload,
            section.option,
            section.comment,
        )
        self._hints.append((section.order, hint))


def parse_comment_hints(
    comments: Sequence[Comment], keywords: CommentHintKeywords | None = None
) -> list[CommentHint]:
    """
    Classify a file's comments into hints, in comment order.

    Comments that carry no recognized keyword are ignored.
    """
    return _HintParser(keywords or CommentHintKeywords()).parse(comments)


def get_hint_for_node(
    node: Node,
    kinds: frozenset[HintKind],
    hints: Sequence[CommentHint],
    option: str | None = None,
) -> CommentHint | None:
    """
    Nearest hint of one of ``kinds`` covering the node's start line.

    When several hints cover the line, the one starting closest to it wins,
    so a line hint beats an enclosing section hint.
    """
    best: CommentHint | None = None
    for hint in hints:
        if hint.kind not in kinds or not hint.applies_to(node.line):
            continue
        if option is not None and hint.option != option:
            continue
        if best is None or hint.line >= best.line:
            best = hint
    return best


def is_disabled(node: Node, hints: Sequence[CommentHint]) -> bool:
    """Whether a disable hint (line, next line or section) covers the node."""
    return get_hint_for_node(node, DISABLE_KINDS, hints) is not None


def options_from_hints(
    node: Node, hints: Sequence[CommentHint]
) -> dict[str, str | bool | tuple[str, ...]]:
    """Option overrides that comment hints impose on the usage site at ``node``."""
    overrides: dict[str, str | bool | tuple[str, ...]] = {}

    for option in ("ns", "contexts", "has_count"):
        hint = get_hint_for_node(node, frozenset({HintKind.OPTIONS}), hints, option)
        if hint is not None and hint.payload is not None:
            overrides[option] = hint.payload

    default_hint = get_hint_for_node(node, frozenset({HintKind.DEFAULT_VALUE}), hints)
    if default_hint is not None and isinstance(default_hint.payload, str):
        overrides["default_value"] = default_hint.payload

    return overrides
