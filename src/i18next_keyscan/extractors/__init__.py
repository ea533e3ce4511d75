"""
Extractor registry for i18next-keyscan.

Each extractor recognizes one i18next/react-i18next usage convention. The
registry is the single source of truth for their names, the node types they
are dispatched on, and their priority: when two extractors claim the same
usage site, the one listed first wins.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Sequence
from typing import NamedTuple, TypeAlias

from ..comments import CommentHint
from ..config.schema import KeyScanConfig
from ..keys import ExtractedKey
from ..syntax.nodes import CallExpression, ClassDef, FunctionDef, JSXElement, Node
from .i18next_instance import extract_i18next_instance
from .t_function import extract_t_function
from .trans_component import extract_trans_component
from .translation_render_prop import extract_translation_render_prop
from .use_translation_hook import extract_use_translation_hook
from .with_translation_hoc import extract_with_translation_hoc

logger = logging.getLogger(__name__)

ExtractorFunction: TypeAlias = Callable[
    [Node, KeyScanConfig, Sequence[CommentHint]], list[ExtractedKey]
]


class ExtractorInfo(NamedTuple):
    """Information about an extractor."""

    name: str
    function: ExtractorFunction
    node_types: tuple[type[Node], ...]
    description: str


EXTRACTORS: tuple[ExtractorInfo, ...] = (
    ExtractorInfo(
        name=extract_trans_component.__name__,
        function=extract_trans_component,
        node_types=(JSXElement,),
        description="<Trans> component children and i18nKey",
    ),
    ExtractorInfo(
        name=extract_use_translation_hook.__name__,
        function=extract_use_translation_hook,
        node_types=(CallExpression,),
        description="t calls bound by the useTranslation hook",
    ),
    ExtractorInfo(
        name=extract_translation_render_prop.__name__,
        function=extract_translation_render_prop,
        node_types=(JSXElement,),
        description="t calls in the <Translation> render function",
    ),
    ExtractorInfo(
        name=extract_with_translation_hoc.__name__,
        function=extract_with_translation_hoc,
        node_types=(ClassDef, FunctionDef),
        description="t prop calls of components wrapped by withTranslation",
    ),
    ExtractorInfo(
        name=extract_i18next_instance.__name__,
        function=extract_i18next_instance,
        node_types=(CallExpression,),
        description="t calls on an i18next instance",
    ),
    ExtractorInfo(
        name=extract_t_function.__name__,
        function=extract_t_function,
        node_types=(CallExpression,),
        description="calls of any function named like a translation function",
    ),
)

EXTRACTORS_PRIORITIES: tuple[str, ...] = tuple(info.name for info in EXTRACTORS)


def get_priority(extractor_name: str) -> int:
    """
    Priority rank of an extractor, lower is stronger.

    Raises:
        ValueError: If the extractor is not registered
    """
    try:
        return EXTRACTORS_PRIORITIES.index(extractor_name)
    except ValueError:
        raise ValueError(f"Unknown extractor: {extractor_name}") from None


def extractors_for(node: Node) -> list[ExtractorInfo]:
    """Extractors dispatched on ``node``, in priority order."""
    return [info for info in EXTRACTORS if isinstance(node, info.node_types)]


__all__ = [
    "EXTRACTORS",
    "EXTRACTORS_PRIORITIES",
    "ExtractorFunction",
    "ExtractorInfo",
    "extract_i18next_instance",
    "extract_t_function",
    "extract_trans_component",
    "extract_translation_render_prop",
    "extract_use_translation_hook",
    "extract_with_translation_hoc",
    "extractors_for",
    "get_priority",
]
