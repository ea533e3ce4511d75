"""
Helpers shared by the extractors.

The central piece is ``parse_t_call``: every convention except ``<Trans>``
ends up at a ``t(key, options)`` call, and this turns one such call into an
``ExtractedKey``.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Sequence

from ..comments import CommentHint, is_disabled
from ..config.schema import ImportRef, KeyScanConfig
from ..keys import ExtractedKey
from ..options import options_from_call_arguments, resolve_options, static_string
from ..syntax.evaluation import evaluate_if_confident
from ..syntax.nodes import (
    CallExpression,
    Identifier,
    MemberExpression,
    Node,
    ThisExpression,
)
from ..syntax.scope import Binding, ImportOrigin, import_origin
from ..utils.core.exceptions import ExtractionError, PartialExtractionError

logger = logging.getLogger(__name__)


def skip_hint_advice(config: KeyScanConfig) -> str:
    """Tail of error messages telling the user how to silence them."""
    hints = config.comment_hints
    return (
        f"skip the line using a skip comment (/* {hints.disable_line} */ or "
        f"/* {hints.disable_next_line} */)."
    )


def callee_origin(callee: Node) -> ImportOrigin | None:
    """
    Import a callee comes from: ``useTranslation`` or ``ns.useTranslation``
    where ``ns`` is a namespace import.
    """
    match callee:
        case Identifier(name=name):
            return import_origin(callee.scope, name)
        case MemberExpression(object=Identifier(name=obj), property=str(prop)):
            return import_origin(callee.scope, f"{obj}.{prop}")
        case _:
            return None


def origin_in(origin: ImportOrigin | None, refs: Iterable[ImportRef]) -> bool:
    return origin is not None and (origin.source, origin.imported) in set(refs)


def is_this_props(node: Node | None) -> bool:
    """``this.props``"""
    return (
        isinstance(node, MemberExpression)
        and isinstance(node.object, ThisExpression)
        and node.property_name == "props"
    )


def calls_of_binding(binding: Binding) -> list[CallExpression]:
    """Calls whose callee is a reference to ``binding``, in source order."""
    calls: list[CallExpression] = []
    for reference in binding.references:
        parent = reference.parent
        if isinstance(parent, CallExpression) and parent.callee is reference:
            calls.append(parent)
    return calls


def member_calls_of_binding(binding: Binding, names: Sequence[str]) -> list[CallExpression]:
    """Calls of ``<binding>.<name>(...)`` for any of ``names``."""
    calls: list[CallExpression] = []
    for reference in binding.references:
        member = reference.parent
        if not (
            isinstance(member, MemberExpression)
            and member.object is reference
            and member.property_name in names
        ):
            continue
        call = member.parent
        if isinstance(call, CallExpression) and call.callee is member:
            calls.append(call)
    return calls


def _prefixed(key: str, key_prefix: str | None, config: KeyScanConfig) -> str:
    if not key_prefix:
        return key
    sep = config.key_separator or "."
    ns_sep = config.ns_separator
    if ns_sep and ns_sep in key:
        ns, _, rest = key.partition(ns_sep)
        return f"{ns}{ns_sep}{key_prefix}{sep}{rest}"
    return f"{key_prefix}{sep}{key}"


def parse_t_call(
    call: CallExpression,
    config: KeyScanConfig,
    comment_hints: Sequence[CommentHint],
    extractor_name: str,
    ns: str | None = None,
    extra_sources: Sequence[Node] = (),
    key_prefix: str | None = None,
) -> list[ExtractedKey]:
    """
    Turn one ``t(key, options)`` call into an extracted key.

    Args:
        call: The call expression of the translation function
        config: Extraction configuration
        comment_hints: Parsed comment hints of the file
        extractor_name: Name recorded as provenance
        ns: Namespace implied by the convention (hook argument, HOC argument)
        extra_sources: Nodes recorded after the call in ``source_nodes``
        key_prefix: ``keyPrefix`` of the binding hook

    Returns:
        The extracted key, or an empty list when the site is disabled

    Raises:
        ExtractionError: If the key is missing or not statically evaluable
    """
    if is_disabled(call, comment_hints):
        return []

    if not call.arguments:
        raise ExtractionError(
            f"Translation function called without a key. You should pass a key or "
            f"{skip_hint_advice(config)}",
            call,
        )

    key_value = evaluate_if_confident(call.arguments[0])
    if isinstance(key_value, list):
        # Fallback keys: the first one is the key the file must define.
        key_value = key_value[0] if key_value else None
    if not isinstance(key_value, str):
        raise ExtractionError(
            f"Couldn't evaluate i18next key. You should either make the key "
            f"evaluable or {skip_hint_advice(config)}",
            call,
        )

    options = options_from_call_arguments(call.arguments)
    if options.ns is None and ns is not None:
        options = options.merged(ns=ns)
    options = resolve_options(options, call, comment_hints)

    return [
        ExtractedKey(
            key=_prefixed(key_value, key_prefix, config),
            parsed_options=options,
            source_nodes=(call, *extra_sources),
            extractor_name=extractor_name,
        )
    ]


def parse_t_calls(
    calls: Iterable[CallExpression],
    config: KeyScanConfig,
    comment_hints: Sequence[CommentHint],
    extractor_name: str,
    ns: str | None = None,
    extra_sources: Sequence[Node] = (),
    key_prefix: str | None = None,
) -> list[ExtractedKey]:
    """
    ``parse_t_call`` over several sites, isolating failures per site.

    Raises:
        PartialExtractionError: If any site failed; it carries the keys of
            the sites that succeeded
    """
    keys: list[ExtractedKey] = []
    errors: list[ExtractionError] = []
    for call in calls:
        try:
            keys.extend(
                parse_t_call(
                    call,
                    config,
                    comment_hints,
                    extractor_name,
                    ns=ns,
                    extra_sources=extra_sources,
                    key_prefix=key_prefix,
                )
            )
        except ExtractionError as e:
            errors.append(e)

    if errors:
        raise PartialExtractionError(errors, keys)
    return keys


def namespace_argument(arguments: Sequence[Node]) -> str | None:
    """Namespace passed as first argument: ``'ns'`` or ``['ns', 'other']``."""
    if not arguments:
        return None
    return static_string(arguments[0])
