"""
Extraction of react-i18next ``<Trans>`` components.

The key of a ``<Trans>`` element is either its ``i18nKey`` attribute or the
serialization of its children, which is also the default value::

    <Trans>Hello <strong>{{name}}</strong>, you have <Link>messages</Link></Trans>

serializes to ``Hello <strong>{{name}}</strong>, you have <3>messages</3>``:
nested elements are numbered by their position among the meaningful
children, except attribute-less tags listed in
``trans_keep_basic_html_nodes_for``, which keep their name.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Sequence

from ..comments import CommentHint, is_disabled
from ..config.schema import KeyScanConfig
from ..keys import ExtractedKey
from ..options import (
    find_jsx_attribute,
    jsx_attribute_expression,
    options_from_trans_attributes,
    resolve_options,
)
from ..syntax.evaluation import evaluate_if_confident, to_js_string
from ..syntax.nodes import (
    Identifier,
    JSXElement,
    JSXEmptyExpression,
    JSXExpressionContainer,
    JSXText,
    Node,
    ObjectExpression,
    Property,
)
from ..syntax.scope import import_origin, latest_assignment
from ..utils.core.exceptions import ExtractionError
from .commons import origin_in, skip_hint_advice

logger = logging.getLogger(__name__)

_LEADING_BREAKS_RE = re.compile(r"^\s*(\r?\n)+\s*")
_TRAILING_BREAKS_RE = re.compile(r"\s*(\r?\n)+\s*$")
_INNER_BREAKS_RE = re.compile(r"\s*(\r?\n)+\s*")


def is_trans_component(element: JSXElement, config: KeyScanConfig) -> bool:
    """Whether the element's tag is bound to a known Trans import."""
    origin = import_origin(element.scope, element.name)
    return origin_in(origin, config.trans_components())


def sanitize_text(text: str) -> str:
    """Drop line breaks around the text and fold inner ones into a space."""
    text = _LEADING_BREAKS_RE.sub("", text)
    text = _TRAILING_BREAKS_RE.sub("", text)
    return _INNER_BREAKS_RE.sub(" ", text)


def _is_scalar(value: object) -> bool:
    return isinstance(value, (str, int, float)) and not isinstance(value, bool)


def _is_meaningful(child: Node) -> bool:
    if isinstance(child, JSXText):
        return child.value.strip() != ""
    if isinstance(child, JSXExpressionContainer):
        return not isinstance(child.expression, JSXEmptyExpression)
    return True


class TransKeyFormatter:
    """Serializes the children of a Trans element into its key."""

    def __init__(self, config: KeyScanConfig) -> None:
        self._config: KeyScanConfig = config

    def _error(self, node: Node) -> ExtractionError:
        return ExtractionError(
            "Couldn't evaluate i18next key in Trans component. You should either "
            "set the i18nKey attribute to an evaluable value, or make the Trans "
            f"component content evaluable or {skip_hint_advice(self._config)}",
            node,
        )

    def format_children(self, element: JSXElement, depth: int = 0) -> str:
        """
        Serialize ``element``'s children.

        Raises:
            ExtractionError: If a child cannot be reduced to static text, or
                nesting goes deeper than ``trans_max_depth``
        """
        if depth > self._config.trans_max_depth:
            raise ExtractionError(
                f"Trans component content is nested deeper than "
                f"{self._config.trans_max_depth} levels",
                element,
            )

        children = [child for child in element.children if _is_meaningful(child)]
        parts: list[str] = []

        for index, child in enumerate(children):
            if isinstance(child, JSXExpressionContainer):
                resolved = self._format_expression(child.expression)
                if isinstance(resolved, str):
                    parts.append(resolved)
                    continue
                # An identifier bound to markup: format it as if written inline.
                child = resolved

            match child:
                case JSXText(value=value):
                    parts.append(sanitize_text(value))
                case JSXElement():
                    parts.append(self._format_element(child, index, depth))
                case _:
                    raise self._error(child)

        return "".join(parts)

    def _format_expression(self, expression: Node) -> str | JSXElement:
        value = evaluate_if_confident(expression)
        if _is_scalar(value):
            return to_js_string(value)  # pyright: ignore[reportArgumentType]

        match expression:
            case ObjectExpression(properties=properties):
                # {{name}} interpolation
                if len(properties) != 1:
                    raise self._error(expression)
                prop = properties[0]
                if not isinstance(prop, Property) or prop.computed:
                    raise self._error(expression)
                return f"{{{{{prop.key}}}}}"

            case Identifier():
                latest = latest_assignment(expression)
                if latest is None:
                    raise self._error(expression)
                value = evaluate_if_confident(latest)
                if _is_scalar(value):
                    return to_js_string(value)  # pyright: ignore[reportArgumentType]
                if isinstance(latest, JSXElement):
                    return latest
                raise self._error(expression)

            case _:
                raise self._error(expression)

    def _format_element(self, element: JSXElement, index: int, depth: int) -> str:
        tag = str(index)
        if (
            not element.attributes
            and "." not in element.name
            and element.name in self._config.trans_keep_basic_html_nodes_for
        ):
            tag = element.name
            if element.self_closing or not element.children:
                return f"<{tag}/>"

        inner = self.format_children(element, depth + 1)
        return f"<{tag}>{inner}</{tag}>"


def parse_key_from_attributes(element: JSXElement, config: KeyScanConfig) -> str | None:
    """
    The ``i18nKey`` attribute value, if the attribute is present.

    Raises:
        ExtractionError: If ``i18nKey`` is present but not evaluable
    """
    attribute = find_jsx_attribute(element, "i18nKey")
    if attribute is None:
        return None

    value = evaluate_if_confident(jsx_attribute_expression(attribute))
    if not isinstance(value, str):
        raise ExtractionError(
            "Couldn't evaluate i18next key in Trans component. You should either "
            f"make the i18nKey attribute evaluable or {skip_hint_advice(config)}",
            element,
        )
    return value


def extract_trans_component(
    node: Node,
    config: KeyScanConfig,
    comment_hints: Sequence[CommentHint] = (),
) -> list[ExtractedKey]:
    """
    Parse a ``Trans`` element into its key and i18next options.

    Raises:
        ExtractionError: If the key cannot be determined statically
    """
    if not isinstance(node, JSXElement):
        return []
    if is_disabled(node, comment_hints):
        return []
    if not is_trans_component(node, config):
        return []

    key_from_attribute = parse_key_from_attributes(node, config)
    key_from_children = TransKeyFormatter(config).format_children(node)

    options = resolve_options(
        options_from_trans_attributes(node), node, comment_hints
    )
    if options.default_value is None:
        options = options.merged(default_value=key_from_children)

    key = key_from_attribute or key_from_children
    if not key:
        raise ExtractionError(
            "Trans component has neither an i18nKey attribute nor content. You "
            f"should add one or {skip_hint_advice(config)}",
            node,
        )

    return [
        ExtractedKey(
            key=key,
            parsed_options=options,
            source_nodes=(node,),
            extractor_name=extract_trans_component.__name__,
        )
    ]
