"""
Options resolution for usage sites.

In-source options come from ``t()`` call arguments or ``<Trans>``
attributes; comment hints covering the site then replace whole fields.
Resolution never raises: a value that cannot be evaluated statically is
simply left unset.
"""

from __future__ import annotations

from collections.abc import Sequence

from .comments import CommentHint, options_from_hints
from .keys import ParsedOptions
from .syntax.evaluation import evaluate_if_confident
from .syntax.nodes import (
    JSXAttribute,
    JSXElement,
    JSXExpressionContainer,
    Node,
    ObjectExpression,
    Property,
)


def find_jsx_attribute(element: JSXElement, name: str) -> JSXAttribute | None:
    """First attribute of ``element`` called ``name``."""
    for attribute in element.attributes:
        if isinstance(attribute, JSXAttribute) and attribute.name == name:
            return attribute
    return None


def jsx_attribute_expression(attribute: JSXAttribute) -> Node | None:
    """The attribute value with any ``{...}`` container removed."""
    value = attribute.value
    if isinstance(value, JSXExpressionContainer):
        return value.expression
    return value


def find_property(obj: Node | None, key: str) -> Property | None:
    """Non-computed property ``key`` of an object literal."""
    if not isinstance(obj, ObjectExpression):
        return None
    for prop in obj.properties:
        if isinstance(prop, Property) and not prop.computed and prop.key == key:
            return prop
    return None


def static_string(node: Node | None) -> str | None:
    """
    Evaluate ``node`` to a string if that can be done confidently.

    Arrays evaluate to their first element (``ns={['common', 'extra']}``).
    """
    value = evaluate_if_confident(node)
    if isinstance(value, list):
        value = value[0] if value else None
    return value if isinstance(value, str) else None


def _context_option(value: Node | None) -> bool | tuple[str, ...]:
    context = static_string(value)
    if context is not None:
        return (context,)
    return True


def options_from_object(obj: Node | None) -> ParsedOptions:
    """Options carried by a ``t()`` options object literal."""
    if not isinstance(obj, ObjectExpression):
        return ParsedOptions()

    context = find_property(obj, "context")
    ns = find_property(obj, "ns")
    default_value = find_property(obj, "defaultValue")

    return ParsedOptions(
        contexts=_context_option(context.value) if context else False,
        has_count=find_property(obj, "count") is not None,
        ns=static_string(ns.value) if ns else None,
        default_value=static_string(default_value.value) if default_value else None,
    )


def options_from_call_arguments(arguments: Sequence[Node]) -> ParsedOptions:
    """
    Options of a ``t(key, ...)`` call.

    Supported shapes: ``t(key, {options})``, ``t(key, 'default')`` and
    ``t(key, 'default', {options})``.
    """
    if len(arguments) < 2:
        return ParsedOptions()

    second = arguments[1]
    if isinstance(second, ObjectExpression):
        return options_from_object(second)

    options = (
        options_from_object(arguments[2]) if len(arguments) > 2 else ParsedOptions()
    )
    default_value = static_string(second)
    if default_value is not None:
        options = options.merged(default_value=default_value)
    return options


def options_from_trans_attributes(element: JSXElement) -> ParsedOptions:
    """Options of a ``<Trans>`` element: count, context/tOptions, ns, defaults."""
    contexts: bool | tuple[str, ...] = False

    t_options = find_jsx_attribute(element, "tOptions")
    if t_options is not None:
        context = find_property(jsx_attribute_expression(t_options), "context")
        if context is not None:
            contexts = _context_option(context.value)

    context_attribute = find_jsx_attribute(element, "context")
    if context_attribute is not None:
        contexts = _context_option(jsx_attribute_expression(context_attribute))

    ns = find_jsx_attribute(element, "ns")
    defaults = find_jsx_attribute(element, "defaults")

    return ParsedOptions(
        contexts=contexts,
        has_count=find_jsx_attribute(element, "count") is not None,
        ns=static_string(jsx_attribute_expression(ns)) if ns else None,
        default_value=(
            static_string(jsx_attribute_expression(defaults)) if defaults else None
        ),
    )


def resolve_options(
    in_source: ParsedOptions, site: Node, hints: Sequence[CommentHint]
) -> ParsedOptions:
    """
    Overlay the comment hints covering ``site`` onto in-source options.

    Each hinted field replaces the in-source value entirely.
    """
    overrides = options_from_hints(site, hints)
    if not overrides:
        return in_source
    return in_source.merged(**overrides)
