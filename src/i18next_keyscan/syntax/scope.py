"""
Lexical scope model for the syntax tree.

``analyze`` links every node to its parent and enclosing scope, declares the
bindings introduced by imports, variable declarations, parameters, functions
and classes, and records the references and ``=`` assignments of each
binding. Extractors use it for two queries:

- ``import_origin``: which module/export an identifier was imported from,
  the basis of every provenance check.
- ``latest_assignment``: the most recent value bound to an identifier.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import NamedTuple

from .nodes import (
    ArrayPattern,
    AssignmentExpression,
    AssignmentPattern,
    BlockStatement,
    ClassDef,
    FunctionDef,
    Identifier,
    ImportDeclaration,
    Node,
    ObjectPattern,
    Opaque,
    Program,
    Property,
    SpreadElement,
    VariableDeclaration,
    VariableDeclarator,
)

logger = logging.getLogger(__name__)


class ImportOrigin(NamedTuple):
    """Module and exported name an identifier was imported from."""

    source: str
    imported: str


@dataclass(eq=False)
class Binding:
    """A name declared in a scope."""

    name: str
    binding_kind: str  # import, const, let, var, param, function, class
    node: Node
    scope: Scope
    declarator: VariableDeclarator | None = None
    origin: ImportOrigin | None = None
    references: list[Identifier] = field(default_factory=list)
    assignments: list[AssignmentExpression] = field(default_factory=list)
    # Writes with no single assigned value: i++, [a] = arr, ({ a } = obj)
    constant_violations: list[Node] = field(default_factory=list)

    @property
    def is_constant(self) -> bool:
        return not self.assignments and not self.constant_violations


class Scope:
    """One lexical scope: program, function, class or block."""

    def __init__(self, node: Node, parent: Scope | None, scope_kind: str) -> None:
        self.node: Node = node
        self.parent: Scope | None = parent
        self.scope_kind: str = scope_kind
        self.bindings: dict[str, Binding] = {}

    def lookup(self, name: str) -> Binding | None:
        """Find the binding visible under ``name`` from this scope."""
        scope: Scope | None = self
        while scope is not None:
            binding = scope.bindings.get(name)
            if binding is not None:
                return binding
            scope = scope.parent
        return None

    def function_scope(self) -> Scope:
        """Nearest enclosing function or program scope (``var`` target)."""
        scope = self
        while scope.scope_kind not in ("function", "program") and scope.parent:
            scope = scope.parent
        return scope

    def declare(self, binding: Binding) -> None:
        self.bindings[binding.name] = binding


def get_binding(identifier: Identifier) -> Binding | None:
    """Resolve an identifier to the binding it refers to."""
    if identifier.scope is None:
        return None
    return identifier.scope.lookup(identifier.name)


def import_origin(scope: Scope | None, name: str) -> ImportOrigin | None:
    """
    Resolve a (possibly dotted) name to the import it comes from.

    ``i18n.Trans`` resolves through a namespace import of its first segment,
    so ``import * as i18n from 'react-i18next'`` gives
    ``ImportOrigin('react-i18next', 'Trans')``.
    """
    if scope is None:
        return None

    head, _, rest = name.partition(".")
    binding = scope.lookup(head)
    if binding is None or binding.origin is None:
        return None

    if not rest:
        return binding.origin
    if binding.origin.imported == "*" and "." not in rest:
        return ImportOrigin(binding.origin.source, rest)
    return None


def references_import(
    node: Node | None, source: str, imported: str | None = None
) -> bool:
    """Check that ``node`` is an identifier bound to ``imported`` from ``source``."""
    if not isinstance(node, Identifier):
        return False
    origin = import_origin(node.scope, node.name)
    if origin is None or origin.source != source:
        return False
    return imported is None or origin.imported == imported


def latest_assignment(identifier: Identifier) -> Node | None:
    """
    Most recent value bound to ``identifier``.

    Candidates are the declarator initializer (for a plain ``name = init``
    declaration) followed by every later ``name = value`` assignment; the
    last candidate wins.
    """
    binding = get_binding(identifier)
    if binding is None:
        return None

    candidates: list[Node] = []
    declarator = binding.declarator
    if (
        declarator is not None
        and isinstance(declarator.target, Identifier)
        and declarator.init is not None
    ):
        candidates.append(declarator.init)
    candidates.extend(a.value for a in binding.assignments if a.operator == "=")

    if not candidates:
        return None
    return candidates[-1]


def pattern_identifiers(pattern: Node | None) -> list[Identifier]:
    """Identifiers declared by a binding pattern, in source order."""
    match pattern:
        case Identifier():
            return [pattern]
        case ObjectPattern(properties=properties):
            found: list[Identifier] = []
            for prop in properties:
                if isinstance(prop, Property):
                    found.extend(pattern_identifiers(prop.value))
                elif isinstance(prop, SpreadElement):
                    found.extend(pattern_identifiers(prop.argument))
            return found
        case ArrayPattern(elements=elements):
            found = []
            for element in elements:
                found.extend(pattern_identifiers(element))
            return found
        case AssignmentPattern(target=target):
            return pattern_identifiers(target)
        case SpreadElement(argument=argument):
            return pattern_identifiers(argument)
        case _:
            return []


class _ScopeBuilder:
    """Two-pass scope analysis: declare everything, then resolve references."""

    def __init__(self) -> None:
        self._declaring: set[Identifier] = set()

    def build(self, program: Program) -> Scope:
        root = Scope(program, None, "program")
        program.scope = root
        for child in program.child_nodes():
            self._visit(child, program, root)
        self._resolve(program)
        return root

    def _link(self, node: Node, parent: Node | None, scope: Scope) -> None:
        node.parent = parent
        node.scope = scope

    def _visit_children(self, node: Node, scope: Scope) -> None:
        for child in node.child_nodes():
            self._visit(child, node, scope)

    def _declare_pattern(
        self,
        pattern: Node | None,
        scope: Scope,
        binding_kind: str,
        declarator: VariableDeclarator | None = None,
    ) -> None:
        for identifier in pattern_identifiers(pattern):
            self._declaring.add(identifier)
            scope.declare(
                Binding(
                    name=identifier.name,
                    binding_kind=binding_kind,
                    node=identifier,
                    scope=scope,
                    declarator=declarator,
                )
            )

    def _visit(self, node: Node, parent: Node | None, scope: Scope) -> None:
        self._link(node, parent, scope)

        match node:
            case ImportDeclaration(source=source, specifiers=specifiers):
                for spec in specifiers:
                    self._link(spec, node, scope)
                    scope.declare(
                        Binding(
                            name=spec.local,
                            binding_kind="import",
                            node=spec,
                            scope=scope,
                            origin=ImportOrigin(source, spec.imported),
                        )
                    )

            case VariableDeclaration(declaration_kind=declaration_kind):
                target_scope = (
                    scope.function_scope() if declaration_kind == "var" else scope
                )
                for declarator in node.declarations:
                    self._declare_pattern(
                        declarator.target, target_scope, declaration_kind, declarator
                    )
                self._visit_children(node, scope)

            case FunctionDef():
                if node.is_declaration and node.name:
                    scope.declare(Binding(node.name, "function", node, scope))
                inner = Scope(node, scope, "function")
                if node.name and not node.is_declaration and not node.is_method:
                    inner.declare(Binding(node.name, "function", node, inner))
                for param in node.params:
                    self._declare_pattern(param, inner, "param")
                    self._visit(param, node, inner)
                if isinstance(node.body, BlockStatement):
                    # The body block shares the function scope.
                    self._link(node.body, node, inner)
                    self._visit_children(node.body, inner)
                elif node.body is not None:
                    self._visit(node.body, node, inner)

            case ClassDef():
                if node.is_declaration and node.name:
                    scope.declare(Binding(node.name, "class", node, scope))
                inner = Scope(node, scope, "class")
                if node.name and not node.is_declaration:
                    inner.declare(Binding(node.name, "class", node, inner))
                if node.superclass is not None:
                    self._visit(node.superclass, node, scope)
                for member in node.body:
                    self._visit(member, node, inner)

            case BlockStatement():
                self._visit_children(node, Scope(node, scope, "block"))

            case Opaque(creates_scope=True):
                self._visit_children(node, Scope(node, scope, "block"))

            case _:
                self._visit_children(node, scope)

    def _resolve(self, program: Program) -> None:
        write_targets: set[Identifier] = set()
        for node in program.walk():
            match node:
                case AssignmentExpression(target=Identifier() as target):
                    write_targets.add(target)
                    binding = get_binding(target)
                    if binding is not None:
                        binding.assignments.append(node)

                case AssignmentExpression(target=target):
                    targets = pattern_identifiers(target)
                    write_targets.update(targets)
                    self._record_violations(targets, node)

                case Opaque(type_name="UpdateExpression", nodes=operands):
                    # The operand is read as well, so it stays a reference.
                    self._record_violations(
                        [op for op in operands if isinstance(op, Identifier)], node
                    )

                case _:
                    pass

        for node in program.walk():
            if not isinstance(node, Identifier):
                continue
            if node in self._declaring or node in write_targets:
                continue
            binding = get_binding(node)
            if binding is not None:
                binding.references.append(node)

    @staticmethod
    def _record_violations(targets: list[Identifier], write: Node) -> None:
        for target in targets:
            binding = get_binding(target)
            if binding is not None:
                binding.constant_violations.append(write)


def analyze(program: Program) -> Scope:
    """
    Run scope analysis over a whole program.

    Returns the program scope. Safe to call again on the same tree: every
    link and binding is rebuilt from scratch.
    """
    scope = _ScopeBuilder().build(program)
    logger.debug(
        f"Scope analysis of {program.filename or '<program>'}: "
        f"{len(scope.bindings)} top-level bindings"
    )
    return scope
