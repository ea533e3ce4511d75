"""
Extraction of ``useTranslation`` hook usages.

The hook call itself is not a usage site; the calls of the ``t`` function
it binds are::

    const { t } = useTranslation('common', { keyPrefix: 'home' });
    t('title');            // -> common:home.title

Supported bindings: ``const [t] = ...``, ``const { t } = ...``,
``const { t: translate } = ...`` and ``const x = ...`` followed by
``x.t(...)``.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence

from ..comments import CommentHint, is_disabled
from ..config.schema import KeyScanConfig
from ..keys import ExtractedKey
from ..options import find_property, static_string
from ..syntax.nodes import (
    ArrayPattern,
    AssignmentPattern,
    CallExpression,
    Identifier,
    Node,
    ObjectPattern,
    Property,
    VariableDeclarator,
)
from ..syntax.scope import get_binding
from .commons import (
    callee_origin,
    calls_of_binding,
    member_calls_of_binding,
    namespace_argument,
    origin_in,
    parse_t_calls,
)

logger = logging.getLogger(__name__)


def is_use_translation_hook(call: CallExpression, config: KeyScanConfig) -> bool:
    """Whether ``call`` calls a known useTranslation import."""
    return origin_in(callee_origin(call.callee), config.use_translation_hooks())


def _unwrap_default(node: Node | None) -> Node | None:
    if isinstance(node, AssignmentPattern):
        return node.target
    return node


def _bound_t_calls(
    declarator: VariableDeclarator, config: KeyScanConfig
) -> list[CallExpression]:
    """Calls of the translation function the hook result is bound to."""
    target = declarator.target

    match target:
        case ArrayPattern(elements=elements) if elements:
            t_identifier = _unwrap_default(elements[0])
        case ObjectPattern(properties=properties):
            t_identifier = None
            for prop in properties:
                if isinstance(prop, Property) and prop.key in config.t_function_names:
                    t_identifier = _unwrap_default(prop.value)
                    break
        case Identifier():
            binding = get_binding(target)
            if binding is None:
                return []
            return member_calls_of_binding(binding, config.t_function_names)
        case _:
            return []

    if not isinstance(t_identifier, Identifier):
        return []
    binding = get_binding(t_identifier)
    if binding is None:
        return []
    return calls_of_binding(binding)


def extract_use_translation_hook(
    node: Node,
    config: KeyScanConfig,
    comment_hints: Sequence[CommentHint] = (),
) -> list[ExtractedKey]:
    """
    Extract the keys of every ``t`` call bound by a ``useTranslation`` call.

    Raises:
        PartialExtractionError: If some of the bound ``t`` calls could not be
            evaluated
    """
    if not isinstance(node, CallExpression):
        return []
    if is_disabled(node, comment_hints):
        return []
    if not is_use_translation_hook(node, config):
        return []

    declarator = node.parent
    if not isinstance(declarator, VariableDeclarator) or declarator.init is not node:
        logger.debug(f"useTranslation result at line {node.line} is not bound to a variable")
        return []

    ns = namespace_argument(node.arguments)
    key_prefix: str | None = None
    if len(node.arguments) > 1:
        prefix_prop = find_property(node.arguments[1], "keyPrefix")
        if prefix_prop is not None:
            key_prefix = static_string(prefix_prop.value)

    return parse_t_calls(
        _bound_t_calls(declarator, config),
        config,
        comment_hints,
        extract_use_translation_hook.__name__,
        ns=ns,
        extra_sources=(node,),
        key_prefix=key_prefix,
    )
