"""
Extraction of components wrapped by the ``withTranslation`` HOC::

    class Header extends React.Component {
      render() {
        const { t } = this.props;
        return <h1>{t('title')}</h1>;
      }
    }
    export default withTranslation('common')(Header);

The extractor is dispatched on the component definition; it checks that
the component is passed to a ``withTranslation(...)`` call, then collects the
component's calls of the ``t`` prop.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence

from ..comments import CommentHint, is_disabled
from ..config.schema import KeyScanConfig
from ..keys import ExtractedKey
from ..syntax.nodes import (
    AssignmentPattern,
    CallExpression,
    ClassDef,
    FunctionDef,
    Identifier,
    MemberExpression,
    Node,
    ObjectPattern,
    Property,
    VariableDeclarator,
)
from ..syntax.scope import Binding, get_binding
from .commons import (
    callee_origin,
    calls_of_binding,
    is_this_props,
    member_calls_of_binding,
    namespace_argument,
    origin_in,
    parse_t_calls,
)

logger = logging.getLogger(__name__)

HOC_IMPORTS = [("react-i18next", "withTranslation"), ("react-i18next", "translate")]


def _component_binding(component: ClassDef | FunctionDef) -> Binding | None:
    parent = component.parent
    if (
        isinstance(parent, VariableDeclarator)
        and parent.init is component
        and isinstance(parent.target, Identifier)
    ):
        return get_binding(parent.target)
    if component.is_declaration and component.name and component.scope:
        return component.scope.lookup(component.name)
    return None


def find_hoc_call(component: ClassDef | FunctionDef) -> CallExpression | None:
    """
    The ``withTranslation(...)`` call wrapping ``component``, if any.

    Both ``withTranslation()(Component)`` and the inline form
    ``withTranslation()(function Component() {...})`` are recognized.
    """
    candidates: list[Node] = [component]
    binding = _component_binding(component)
    if binding is not None:
        candidates.extend(binding.references)

    for candidate in candidates:
        call = candidate.parent
        if not isinstance(call, CallExpression) or candidate not in call.arguments:
            continue
        hoc = call.callee
        if isinstance(hoc, CallExpression) and origin_in(
            callee_origin(hoc.callee), HOC_IMPORTS
        ):
            return hoc
    return None


def _t_from_pattern(pattern: Node | None, names: Sequence[str]) -> Binding | None:
    if not isinstance(pattern, ObjectPattern):
        return None
    for prop in pattern.properties:
        if isinstance(prop, Property) and prop.key in names:
            value = prop.value
            if isinstance(value, AssignmentPattern):
                value = value.target
            if isinstance(value, Identifier):
                return get_binding(value)
    return None


def component_t_calls(
    component: ClassDef | FunctionDef, config: KeyScanConfig
) -> list[CallExpression]:
    """
    Calls of the ``t`` prop inside a component, in source order.

    Recognized: ``this.props.t(...)``, ``props.t(...)``, and ``t(...)`` where
    ``t`` is destructured from ``this.props``, from ``props`` or in the
    parameter list.
    """
    names = config.t_function_names
    props_bindings: list[Binding] = []
    t_bindings: list[Binding] = []
    calls: list[CallExpression] = []

    if isinstance(component, FunctionDef) and component.params:
        first = component.params[0]
        if isinstance(first, AssignmentPattern):
            first = first.target
        if isinstance(first, Identifier):
            binding = get_binding(first)
            if binding is not None:
                props_bindings.append(binding)
        else:
            binding = _t_from_pattern(first, names)
            if binding is not None:
                t_bindings.append(binding)

    order: dict[Node, int] = {}
    for index, node in enumerate(component.walk()):
        order[node] = index
        match node:
            case VariableDeclarator(target=ObjectPattern() as pattern, init=init):
                from_props = is_this_props(init) or (
                    isinstance(init, Identifier)
                    and get_binding(init) in props_bindings
                )
                binding = _t_from_pattern(pattern, names) if from_props else None
                if binding is not None:
                    t_bindings.append(binding)
            case CallExpression(callee=MemberExpression() as callee) if (
                callee.property_name in names and is_this_props(callee.object)
            ):
                calls.append(node)
            case _:
                pass

    for binding in props_bindings:
        calls.extend(member_calls_of_binding(binding, names))
    for binding in t_bindings:
        calls.extend(calls_of_binding(binding))

    unique = {id(call): call for call in calls if call in order}
    return sorted(unique.values(), key=lambda call: order[call])


def extract_with_translation_hoc(
    node: Node,
    config: KeyScanConfig,
    comment_hints: Sequence[CommentHint] = (),
) -> list[ExtractedKey]:
    """
    Extract the ``t`` calls of a component wrapped by ``withTranslation``.

    Raises:
        PartialExtractionError: If some ``t`` calls could not be evaluated
    """
    if not isinstance(node, (ClassDef, FunctionDef)):
        return []
    if is_disabled(node, comment_hints):
        return []

    hoc = find_hoc_call(node)
    if hoc is None:
        return []

    logger.debug(f"Component at line {node.line} is wrapped by withTranslation at line {hoc.line}")
    return parse_t_calls(
        component_t_calls(node, config),
        config,
        comment_hints,
        extract_with_translation_hoc.__name__,
        ns=namespace_argument(hoc.arguments),
        extra_sources=(node, hoc),
    )
