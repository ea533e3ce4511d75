"""
Extraction of the ``<Translation>`` render prop::

    <Translation ns="common">
      {(t) => <p>{t('welcome')}</p>}
    </Translation>
"""

from __future__ import annotations

from collections.abc import Sequence

from ..comments import CommentHint, is_disabled
from ..config.schema import KeyScanConfig
from ..keys import ExtractedKey
from ..options import find_jsx_attribute, jsx_attribute_expression, static_string
from ..syntax.nodes import (
    AssignmentPattern,
    CallExpression,
    FunctionDef,
    Identifier,
    JSXElement,
    JSXExpressionContainer,
    Node,
)
from ..syntax.scope import get_binding, import_origin
from .commons import calls_of_binding, origin_in, parse_t_calls

RENDER_PROP_COMPONENTS = [("react-i18next", "Translation")]


def is_translation_render_prop(element: JSXElement) -> bool:
    return origin_in(import_origin(element.scope, element.name), RENDER_PROP_COMPONENTS)


def _render_functions(element: JSXElement) -> list[FunctionDef]:
    return [
        child.expression
        for child in element.children
        if isinstance(child, JSXExpressionContainer)
        and isinstance(child.expression, FunctionDef)
    ]


def extract_translation_render_prop(
    node: Node,
    config: KeyScanConfig,
    comment_hints: Sequence[CommentHint] = (),
) -> list[ExtractedKey]:
    """
    Extract the ``t`` calls made inside a ``Translation`` render function.

    Raises:
        PartialExtractionError: If some ``t`` calls could not be evaluated
    """
    if not isinstance(node, JSXElement):
        return []
    if is_disabled(node, comment_hints):
        return []
    if not is_translation_render_prop(node):
        return []

    ns: str | None = None
    ns_attribute = find_jsx_attribute(node, "ns")
    if ns_attribute is not None:
        ns = static_string(jsx_attribute_expression(ns_attribute))

    calls: list[CallExpression] = []
    for function in _render_functions(node):
        if not function.params:
            continue
        param = function.params[0]
        if isinstance(param, AssignmentPattern):
            param = param.target
        if not isinstance(param, Identifier):
            continue
        binding = get_binding(param)
        if binding is not None:
            calls.extend(calls_of_binding(binding))

    return parse_t_calls(
        calls,
        config,
        comment_hints,
        extract_translation_render_prop.__name__,
        ns=ns,
        extra_sources=(node,),
    )
