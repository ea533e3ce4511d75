"""
Fallback extraction of bare translation function calls.

Matches ``t('key')`` and ``anything.t('key')`` by name only (see
``t_function_names``), without checking where ``t`` comes from. It is the
least reliable extractor and has the lowest priority: any other extractor
claiming the same call wins.
"""

from __future__ import annotations

from collections.abc import Sequence

from ..comments import CommentHint
from ..config.schema import KeyScanConfig
from ..keys import ExtractedKey
from ..syntax.nodes import CallExpression, Identifier, MemberExpression, Node
from .commons import parse_t_call


def is_t_function_call(call: CallExpression, config: KeyScanConfig) -> bool:
    match call.callee:
        case Identifier(name=name):
            return name in config.t_function_names
        case MemberExpression() as member:
            return member.property_name in config.t_function_names
        case _:
            return False


def extract_t_function(
    node: Node,
    config: KeyScanConfig,
    comment_hints: Sequence[CommentHint] = (),
) -> list[ExtractedKey]:
    """
    Extract the key of a call to a conventionally named translation function.

    Raises:
        ExtractionError: If the key is not statically evaluable
    """
    if not isinstance(node, CallExpression):
        return []
    if not is_t_function_call(node, config):
        return []
    return parse_t_call(node, config, comment_hints, extract_t_function.__name__)
