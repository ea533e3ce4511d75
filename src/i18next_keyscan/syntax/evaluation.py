"""
Conservative static evaluation of expression nodes.

``evaluate_if_confident`` returns the value an expression is guaranteed to
produce, or None when that cannot be known without running the code.
Supported: literals, template literals, ``+`` on strings and numbers,
array and object literals, and identifiers bound once to an evaluable value.
"""

from __future__ import annotations

from typing import TypeAlias

from .nodes import (
    ArrayExpression,
    BinaryExpression,
    Identifier,
    JSXExpressionContainer,
    Literal,
    Node,
    ObjectExpression,
    Property,
    TemplateLiteral,
)
from .scope import Binding, get_binding, latest_assignment

StaticValue: TypeAlias = (
    "str | int | float | bool | list[StaticValue] | dict[str, StaticValue]"
)


def to_js_string(value: StaticValue) -> str:
    """Stringify a value the way JavaScript string concatenation would."""
    match value:
        case bool():
            return "true" if value else "false"
        case float() if value.is_integer():
            return str(int(value))
        case list():
            return ",".join(to_js_string(item) for item in value)
        case dict():
            return "[object Object]"
        case _:
            return str(value)


def evaluate_if_confident(node: Node | None) -> StaticValue | None:
    """Evaluate ``node`` statically; None when not confident."""
    return _evaluate(node, frozenset())


def evaluate_string(node: Node | None) -> str | None:
    """Evaluate ``node`` and keep the result only if it is a string."""
    value = evaluate_if_confident(node)
    return value if isinstance(value, str) else None


def _evaluate(node: Node | None, seen: frozenset[Binding]) -> StaticValue | None:
    match node:
        case None:
            return None

        case Literal(value=value):
            return value

        case JSXExpressionContainer(expression=expression):
            return _evaluate(expression, seen)

        case TemplateLiteral(quasis=quasis, expressions=expressions):
            parts: list[str] = []
            for index, quasi in enumerate(quasis):
                parts.append(quasi)
                if index < len(expressions):
                    value = _evaluate(expressions[index], seen)
                    if value is None:
                        return None
                    parts.append(to_js_string(value))
            return "".join(parts)

        case BinaryExpression(operator="+", left=left, right=right):
            lhs = _evaluate(left, seen)
            rhs = _evaluate(right, seen)
            if lhs is None or rhs is None:
                return None
            if isinstance(lhs, str) or isinstance(rhs, str):
                return to_js_string(lhs) + to_js_string(rhs)
            if isinstance(lhs, (int, float)) and isinstance(rhs, (int, float)):
                return lhs + rhs
            return None

        case ArrayExpression(elements=elements):
            items: list[StaticValue] = []
            for element in elements:
                value = _evaluate(element, seen)
                if value is None:
                    return None
                items.append(value)
            return items

        case ObjectExpression(properties=properties):
            result: dict[str, StaticValue] = {}
            for prop in properties:
                if not isinstance(prop, Property) or prop.computed:
                    return None
                value = _evaluate(prop.value, seen)
                if value is None:
                    return None
                result[prop.key] = value
            return result

        case Identifier():
            binding = get_binding(node)
            if binding is None or binding in seen or not binding.is_constant:
                return None
            if binding.binding_kind not in ("const", "let", "var"):
                return None
            return _evaluate(latest_assignment(node), seen | {binding})

        case _:
            return None
