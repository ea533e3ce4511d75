"""
Extraction of calls on an i18next instance::

    import i18next from 'i18next';
    i18next.t('errors.network');

    const i18n = i18next.createInstance();
    i18n.t('errors.timeout');

    import { t } from 'i18next';
    t('errors.unknown');
"""

from __future__ import annotations

from collections.abc import Sequence

from ..comments import CommentHint
from ..config.schema import KeyScanConfig
from ..keys import ExtractedKey
from ..syntax.nodes import CallExpression, Identifier, MemberExpression, Node
from ..syntax.scope import get_binding
from .commons import callee_origin, parse_t_call


def _is_i18next_module_object(node: Node | None, config: KeyScanConfig) -> bool:
    """Default or namespace import of an i18next module."""
    if not isinstance(node, Identifier):
        return False
    binding = get_binding(node)
    if binding is None or binding.origin is None:
        return False
    return (
        binding.origin.source in config.i18next_modules
        and binding.origin.imported in ("default", "*")
    )


def is_i18next_instance(node: Node | None, config: KeyScanConfig) -> bool:
    """
    Whether ``node`` is bound to an i18next instance.

    That is the imported module object itself, or a constant initialized
    with ``<module>.createInstance(...)``.
    """
    if _is_i18next_module_object(node, config):
        return True
    if not isinstance(node, Identifier):
        return False

    binding = get_binding(node)
    if binding is None or binding.declarator is None or not binding.is_constant:
        return False
    init = binding.declarator.init
    return (
        isinstance(init, CallExpression)
        and isinstance(init.callee, MemberExpression)
        and init.callee.property_name == "createInstance"
        and _is_i18next_module_object(init.callee.object, config)
    )


def is_i18next_t_call(call: CallExpression, config: KeyScanConfig) -> bool:
    callee = call.callee
    if isinstance(callee, MemberExpression):
        return callee.property_name == "t" and is_i18next_instance(callee.object, config)

    origin = callee_origin(callee)
    return (
        origin is not None
        and origin.source in config.i18next_modules
        and origin.imported == "t"
    )


def extract_i18next_instance(
    node: Node,
    config: KeyScanConfig,
    comment_hints: Sequence[CommentHint] = (),
) -> list[ExtractedKey]:
    """
    Extract the key of an ``i18next.t(...)`` call.

    Raises:
        ExtractionError: If the key is not statically evaluable
    """
    if not isinstance(node, CallExpression):
        return []
    if not is_i18next_t_call(node, config):
        return []
    return parse_t_call(node, config, comment_hints, extract_i18next_instance.__name__)
