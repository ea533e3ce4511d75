"""
Typed syntax-tree model consumed by the extraction core.

Parsing source text is left to an external parser (see ``syntax.estree`` for
the Babel/ESTree JSON loader). This module only defines the node kinds the
extractors inspect. Nodes compare and hash by identity, so a node can be used
directly as a member of a pass-local "already extracted" set.

Every node records the 1-based ``line`` it starts on; ``parent`` and ``scope``
are filled in by ``syntax.scope.analyze``.
"""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass, field, fields
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .scope import Scope


@dataclass(eq=False)
class Node:
    """Base class for all syntax nodes."""

    line: int = field(default=0, kw_only=True)
    parent: Node | None = field(default=None, init=False, repr=False)
    scope: Scope | None = field(default=None, init=False, repr=False)

    @property
    def kind(self) -> str:
        return type(self).__name__

    def child_nodes(self) -> Iterator[Node]:
        """Yield direct child nodes in source order."""
        for f in fields(self):
            if f.name in ("parent", "scope"):
                continue
            value = getattr(self, f.name)
            if isinstance(value, Node):
                yield value
            elif isinstance(value, list):
                for item in value:  # pyright: ignore[reportUnknownVariableType]
                    if isinstance(item, Node):
                        yield item

    def walk(self) -> Iterator[Node]:
        """Yield this node and all its descendants, depth first, pre-order."""
        stack: list[Node] = [self]
        while stack:
            node = stack.pop()
            yield node
            stack.extend(reversed(list(node.child_nodes())))


@dataclass(frozen=True)
class Comment:
    """A raw source comment, as reported by the parser."""

    value: str
    line: int
    end_line: int
    block: bool = False


# == Program structure ==


@dataclass(eq=False)
class Program(Node):
    body: list[Node] = field(default_factory=list)
    comments: list[Comment] = field(default_factory=list)
    filename: str | None = None


@dataclass(eq=False)
class ImportSpecifier(Node):
    """
    One imported binding.

    ``imported`` is the exported name, ``"default"`` for default imports and
    ``"*"`` for namespace imports.
    """

    local: str
    imported: str


@dataclass(eq=False)
class ImportDeclaration(Node):
    source: str
    specifiers: list[ImportSpecifier] = field(default_factory=list)


@dataclass(eq=False)
class VariableDeclarator(Node):
    target: Node
    init: Node | None = None


@dataclass(eq=False)
class VariableDeclaration(Node):
    declarations: list[VariableDeclarator] = field(default_factory=list)
    declaration_kind: str = "const"


@dataclass(eq=False)
class ExpressionStatement(Node):
    expression: Node


@dataclass(eq=False)
class ReturnStatement(Node):
    argument: Node | None = None


@dataclass(eq=False)
class BlockStatement(Node):
    body: list[Node] = field(default_factory=list)


@dataclass(eq=False)
class FunctionDef(Node):
    """Function declaration, function expression, arrow function or method."""

    name: str | None
    params: list[Node] = field(default_factory=list)
    body: Node | None = None
    is_declaration: bool = False
    is_arrow: bool = False
    is_method: bool = False


@dataclass(eq=False)
class ClassDef(Node):
    """Class declaration or expression; methods are ``FunctionDef`` members."""

    name: str | None
    superclass: Node | None = None
    body: list[Node] = field(default_factory=list)
    is_declaration: bool = False


@dataclass(eq=False)
class Opaque(Node):
    """
    A node kind the extractors do not inspect (if statements, loops, ...).

    Its children are kept so traversal and scope analysis still reach nested
    usage sites.
    """

    type_name: str
    nodes: list[Node] = field(default_factory=list)
    creates_scope: bool = False


# == Expressions ==


@dataclass(eq=False)
class Identifier(Node):
    name: str


@dataclass(eq=False)
class ThisExpression(Node):
    pass


@dataclass(eq=False)
class Literal(Node):
    """String, number, boolean or null literal."""

    value: str | int | float | bool | None


@dataclass(eq=False)
class TemplateLiteral(Node):
    quasis: list[str] = field(default_factory=list)
    expressions: list[Node] = field(default_factory=list)


@dataclass(eq=False)
class BinaryExpression(Node):
    operator: str
    left: Node
    right: Node


@dataclass(eq=False)
class MemberExpression(Node):
    """``object.property``; computed access keeps the property as a node."""

    object: Node
    property: str | Node
    computed: bool = False

    @property
    def property_name(self) -> str | None:
        if isinstance(self.property, str):
            return self.property
        return None


@dataclass(eq=False)
class CallExpression(Node):
    callee: Node
    arguments: list[Node] = field(default_factory=list)


@dataclass(eq=False)
class Property(Node):
    """
    Object literal member or object pattern member.

    Shorthand members (``{t}``, ``{{name}}``) set ``shorthand=True`` and carry
    an ``Identifier`` value, or no value at all when built by hand.
    """

    key: str
    value: Node | None = None
    shorthand: bool = False
    computed: bool = False


@dataclass(eq=False)
class SpreadElement(Node):
    argument: Node


@dataclass(eq=False)
class ObjectExpression(Node):
    properties: list[Node] = field(default_factory=list)


@dataclass(eq=False)
class ArrayExpression(Node):
    elements: list[Node] = field(default_factory=list)


@dataclass(eq=False)
class AssignmentExpression(Node):
    target: Node
    value: Node
    operator: str = "="


# == Patterns ==


@dataclass(eq=False)
class ObjectPattern(Node):
    properties: list[Node] = field(default_factory=list)


@dataclass(eq=False)
class ArrayPattern(Node):
    elements: list[Node | None] = field(default_factory=list)


@dataclass(eq=False)
class AssignmentPattern(Node):
    """``target = default`` inside a parameter list or pattern."""

    target: Node
    default: Node


# == JSX ==


@dataclass(eq=False)
class JSXText(Node):
    value: str


@dataclass(eq=False)
class JSXEmptyExpression(Node):
    pass


@dataclass(eq=False)
class JSXExpressionContainer(Node):
    expression: Node


@dataclass(eq=False)
class JSXAttribute(Node):
    """``name="value"``, ``name={expr}`` or a bare ``name`` (value None)."""

    name: str
    value: Node | None = None


@dataclass(eq=False)
class JSXSpreadAttribute(Node):
    argument: Node


@dataclass(eq=False)
class JSXElement(Node):
    """
    A markup element.

    ``name`` is the tag as written: ``Trans``, ``br`` or a dotted member
    name such as ``i18n.Trans``.
    """

    name: str
    attributes: list[Node] = field(default_factory=list)
    children: list[Node] = field(default_factory=list)
    self_closing: bool = False


@dataclass(eq=False)
class JSXFragment(Node):
    children: list[Node] = field(default_factory=list)
