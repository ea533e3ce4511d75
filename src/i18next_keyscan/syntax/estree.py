"""
Loader for Babel/ESTree JSON syntax trees.

Parsing JavaScript is the job of an external parser. This module accepts the
JSON it prints, for example::

    npx @babel/parser --plugins jsx src/App.jsx > App.ast.json

(or any ``@babel/parser`` / ESTree-compatible output with ``loc`` info) and
converts it into the ``syntax.nodes`` model. Node types the extractors never
inspect become ``Opaque`` nodes that keep their children, so usage sites
nested inside ``if`` blocks, loops or exports are still reached.
"""

from __future__ import annotations

import json
import logging
from collections.abc import Callable, Mapping
from pathlib import Path
from typing import TypeAlias, cast

from ..utils.core.exceptions import SyntaxTreeError
from .nodes import (
    ArrayExpression,
    ArrayPattern,
    AssignmentExpression,
    AssignmentPattern,
    BinaryExpression,
    BlockStatement,
    CallExpression,
    ClassDef,
    Comment,
    ExpressionStatement,
    FunctionDef,
    Identifier,
    ImportDeclaration,
    ImportSpecifier,
    JSXAttribute,
    JSXElement,
    JSXEmptyExpression,
    JSXExpressionContainer,
    JSXFragment,
    JSXSpreadAttribute,
    JSXText,
    Literal,
    MemberExpression,
    Node,
    ObjectExpression,
    ObjectPattern,
    Opaque,
    Program,
    Property,
    ReturnStatement,
    SpreadElement,
    TemplateLiteral,
    ThisExpression,
    VariableDeclaration,
    VariableDeclarator,
)

logger = logging.getLogger(__name__)

RawNode: TypeAlias = Mapping[str, object]

_SKIPPED_KEYS = frozenset(
    {
        "type",
        "loc",
        "start",
        "end",
        "range",
        "extra",
        "leadingComments",
        "trailingComments",
        "innerComments",
        "comments",
        "tokens",
    }
)

_SCOPED_STATEMENTS = frozenset(
    {
        "ForStatement",
        "ForInStatement",
        "ForOfStatement",
        "CatchClause",
        "SwitchStatement",
    }
)

# Wrappers that do not change the runtime value of their expression.
_TRANSPARENT_WRAPPERS = frozenset(
    {
        "ParenthesizedExpression",
        "TSAsExpression",
        "TSSatisfiesExpression",
        "TSNonNullExpression",
        "TypeCastExpression",
    }
)


def _line(raw: RawNode) -> int:
    loc = raw.get("loc")
    if isinstance(loc, Mapping):
        start = cast(Mapping[str, object], loc).get("start")
        if isinstance(start, Mapping):
            line = cast(Mapping[str, object], start).get("line")
            if isinstance(line, int):
                return line
    return 0


def _end_line(raw: RawNode) -> int:
    loc = raw.get("loc")
    if isinstance(loc, Mapping):
        end = cast(Mapping[str, object], loc).get("end")
        if isinstance(end, Mapping):
            line = cast(Mapping[str, object], end).get("line")
            if isinstance(line, int):
                return line
    return _line(raw)


def _is_raw_node(value: object) -> bool:
    return isinstance(value, Mapping) and "type" in value


class _Converter:
    """Recursive Babel JSON to ``syntax.nodes`` converter."""

    def __init__(self) -> None:
        self._handlers: dict[str, Callable[[RawNode], Node]] = {
            "Program": self._program,
            "ImportDeclaration": self._import_declaration,
            "VariableDeclaration": self._variable_declaration,
            "VariableDeclarator": self._variable_declarator,
            "ExpressionStatement": self._expression_statement,
            "ReturnStatement": self._return_statement,
            "BlockStatement": self._block_statement,
            "FunctionDeclaration": self._function,
            "FunctionExpression": self._function,
            "ArrowFunctionExpression": self._function,
            "ObjectMethod": self._method,
            "ClassMethod": self._method,
            "ClassPrivateMethod": self._method,
            "MethodDefinition": self._method_definition,
            "ClassDeclaration": self._class,
            "ClassExpression": self._class,
            "Identifier": self._identifier,
            "ThisExpression": lambda raw: ThisExpression(line=_line(raw)),
            "StringLiteral": self._literal,
            "NumericLiteral": self._literal,
            "BooleanLiteral": self._literal,
            "NullLiteral": lambda raw: Literal(None, line=_line(raw)),
            "Literal": self._literal,
            "TemplateLiteral": self._template_literal,
            "BinaryExpression": self._binary_expression,
            "MemberExpression": self._member_expression,
            "OptionalMemberExpression": self._member_expression,
            "CallExpression": self._call_expression,
            "OptionalCallExpression": self._call_expression,
            "ObjectExpression": self._object,
            "ObjectPattern": self._object,
            "ObjectProperty": self._property,
            "Property": self._property,
            "SpreadElement": self._spread,
            "RestElement": self._spread,
            "ArrayExpression": self._array_expression,
            "ArrayPattern": self._array_pattern,
            "AssignmentExpression": self._assignment_expression,
            "AssignmentPattern": self._assignment_pattern,
            "JSXElement": self._jsx_element,
            "JSXFragment": self._jsx_fragment,
            "JSXText": lambda raw: JSXText(str(raw.get("value", "")), line=_line(raw)),
            "JSXExpressionContainer": self._jsx_expression_container,
            "JSXEmptyExpression": lambda raw: JSXEmptyExpression(line=_line(raw)),
            "JSXAttribute": self._jsx_attribute,
            "JSXSpreadAttribute": self._jsx_spread_attribute,
        }

    # == Generic helpers ==

    def convert(self, raw: object) -> Node:
        if not _is_raw_node(raw):
            raise SyntaxTreeError(f"Expected a syntax tree node, got {raw!r:.80}")
        node = cast(RawNode, raw)
        node_type = str(node["type"])

        if node_type in _TRANSPARENT_WRAPPERS:
            return self.convert(node.get("expression"))

        handler = self._handlers.get(node_type)
        if handler is not None:
            return handler(node)
        return self._opaque(node)

    def convert_optional(self, raw: object) -> Node | None:
        if raw is None:
            return None
        return self.convert(raw)

    def convert_list(self, raw: object) -> list[Node]:
        if raw is None:
            return []
        if not isinstance(raw, list):
            raise SyntaxTreeError(f"Expected a list of nodes, got {raw!r:.80}")
        return [self.convert(item) for item in cast(list[object], raw) if item is not None]

    def _opaque(self, raw: RawNode) -> Opaque:
        children: list[Node] = []
        for key, value in raw.items():
            if key in _SKIPPED_KEYS:
                continue
            if _is_raw_node(value):
                children.append(self.convert(value))
            elif isinstance(value, list):
                children.extend(
                    self.convert(item)
                    for item in cast(list[object], value)
                    if _is_raw_node(item)
                )
        node_type = str(raw["type"])
        return Opaque(
            node_type,
            children,
            creates_scope=node_type in _SCOPED_STATEMENTS,
            line=_line(raw),
        )

    @staticmethod
    def _name_of(raw: object) -> str | None:
        """Name carried by an Identifier/StringLiteral/JSX name node."""
        if not isinstance(raw, Mapping):
            return None
        node = cast(RawNode, raw)
        match node.get("type"):
            case "Identifier" | "JSXIdentifier":
                return str(node["name"])
            case "StringLiteral" | "Literal" | "NumericLiteral":
                return str(node.get("value"))
            case "JSXMemberExpression":
                obj = _Converter._name_of(node.get("object"))
                prop = _Converter._name_of(node.get("property"))
                if obj is None or prop is None:
                    return None
                return f"{obj}.{prop}"
            case "JSXNamespacedName":
                ns = _Converter._name_of(node.get("namespace"))
                name = _Converter._name_of(node.get("name"))
                return f"{ns}:{name}"
            case _:
                return None

    # == Program structure ==

    def _program(self, raw: RawNode) -> Program:
        return Program(
            body=self.convert_list(raw.get("body")),
            comments=_comments(raw.get("comments")),
            line=_line(raw),
        )

    def _import_declaration(self, raw: RawNode) -> ImportDeclaration:
        source = _Converter._name_of(raw.get("source")) or ""
        specifiers: list[ImportSpecifier] = []
        for spec in cast(list[RawNode], raw.get("specifiers") or []):
            local = _Converter._name_of(spec.get("local")) or ""
            match spec.get("type"):
                case "ImportDefaultSpecifier":
                    imported = "default"
                case "ImportNamespaceSpecifier":
                    imported = "*"
                case _:
                    imported = _Converter._name_of(spec.get("imported")) or local
            specifiers.append(ImportSpecifier(local, imported, line=_line(spec)))
        return ImportDeclaration(source, specifiers, line=_line(raw))

    def _variable_declaration(self, raw: RawNode) -> VariableDeclaration:
        declarations = [
            cast(VariableDeclarator, self.convert(d))
            for d in cast(list[object], raw.get("declarations") or [])
        ]
        return VariableDeclaration(
            declarations,
            declaration_kind=str(raw.get("kind", "var")),
            line=_line(raw),
        )

    def _variable_declarator(self, raw: RawNode) -> VariableDeclarator:
        return VariableDeclarator(
            self.convert(raw.get("id")),
            self.convert_optional(raw.get("init")),
            line=_line(raw),
        )

    def _expression_statement(self, raw: RawNode) -> ExpressionStatement:
        return ExpressionStatement(self.convert(raw.get("expression")), line=_line(raw))

    def _return_statement(self, raw: RawNode) -> ReturnStatement:
        return ReturnStatement(self.convert_optional(raw.get("argument")), line=_line(raw))

    def _block_statement(self, raw: RawNode) -> BlockStatement:
        return BlockStatement(self.convert_list(raw.get("body")), line=_line(raw))

    def _function(self, raw: RawNode) -> FunctionDef:
        return FunctionDef(
            _Converter._name_of(raw.get("id")),
            self.convert_list(raw.get("params")),
            self.convert_optional(raw.get("body")),
            is_declaration=raw.get("type") == "FunctionDeclaration",
            is_arrow=raw.get("type") == "ArrowFunctionExpression",
            line=_line(raw),
        )

    def _method(self, raw: RawNode) -> FunctionDef:
        return FunctionDef(
            _Converter._name_of(raw.get("key")),
            self.convert_list(raw.get("params")),
            self.convert_optional(raw.get("body")),
            is_method=True,
            line=_line(raw),
        )

    def _method_definition(self, raw: RawNode) -> FunctionDef:
        # ESTree keeps the function under ``value``.
        value = cast(RawNode, raw.get("value") or {})
        return FunctionDef(
            _Converter._name_of(raw.get("key")),
            self.convert_list(value.get("params")),
            self.convert_optional(value.get("body")),
            is_method=True,
            line=_line(raw),
        )

    def _class(self, raw: RawNode) -> ClassDef:
        body = raw.get("body")
        members: object = None
        if isinstance(body, Mapping):
            members = cast(RawNode, body).get("body")
        return ClassDef(
            _Converter._name_of(raw.get("id")),
            self.convert_optional(raw.get("superClass")),
            self.convert_list(members),
            is_declaration=raw.get("type") == "ClassDeclaration",
            line=_line(raw),
        )

    # == Expressions ==

    def _identifier(self, raw: RawNode) -> Identifier:
        return Identifier(str(raw["name"]), line=_line(raw))

    def _literal(self, raw: RawNode) -> Node:
        if "regex" in raw:
            return Opaque("RegExpLiteral", [], line=_line(raw))
        value = raw.get("value")
        if value is not None and not isinstance(value, (str, int, float, bool)):
            return Opaque(str(raw["type"]), [], line=_line(raw))
        return Literal(value, line=_line(raw))

    def _template_literal(self, raw: RawNode) -> TemplateLiteral:
        quasis: list[str] = []
        for quasi in cast(list[RawNode], raw.get("quasis") or []):
            value = cast(Mapping[str, object], quasi.get("value") or {})
            cooked = value.get("cooked")
            quasis.append(str(cooked if cooked is not None else value.get("raw", "")))
        return TemplateLiteral(
            quasis, self.convert_list(raw.get("expressions")), line=_line(raw)
        )

    def _binary_expression(self, raw: RawNode) -> BinaryExpression:
        return BinaryExpression(
            str(raw.get("operator")),
            self.convert(raw.get("left")),
            self.convert(raw.get("right")),
            line=_line(raw),
        )

    def _member_expression(self, raw: RawNode) -> MemberExpression:
        computed = bool(raw.get("computed"))
        prop_raw = raw.get("property")
        prop: str | Node
        if not computed and isinstance(prop_raw, Mapping) and prop_raw.get("type") == "Identifier":
            prop = str(cast(RawNode, prop_raw)["name"])
        else:
            prop = self.convert(prop_raw)
        return MemberExpression(
            self.convert(raw.get("object")), prop, computed, line=_line(raw)
        )

    def _call_expression(self, raw: RawNode) -> CallExpression:
        return CallExpression(
            self.convert(raw.get("callee")),
            self.convert_list(raw.get("arguments")),
            line=_line(raw),
        )

    def _object(self, raw: RawNode) -> Node:
        properties = self.convert_list(raw.get("properties"))
        if raw.get("type") == "ObjectPattern":
            return ObjectPattern(properties, line=_line(raw))
        return ObjectExpression(properties, line=_line(raw))

    def _property(self, raw: RawNode) -> Node:
        if raw.get("kind") in ("get", "set") or raw.get("method"):
            return self._method_definition(raw)
        computed = bool(raw.get("computed"))
        key = "" if computed else (_Converter._name_of(raw.get("key")) or "")
        return Property(
            key,
            self.convert_optional(raw.get("value")),
            shorthand=bool(raw.get("shorthand")),
            computed=computed,
            line=_line(raw),
        )

    def _spread(self, raw: RawNode) -> SpreadElement:
        return SpreadElement(self.convert(raw.get("argument")), line=_line(raw))

    def _array_expression(self, raw: RawNode) -> ArrayExpression:
        return ArrayExpression(self.convert_list(raw.get("elements")), line=_line(raw))

    def _array_pattern(self, raw: RawNode) -> ArrayPattern:
        elements = [
            self.convert_optional(item)
            for item in cast(list[object], raw.get("elements") or [])
        ]
        return ArrayPattern(elements, line=_line(raw))

    def _assignment_expression(self, raw: RawNode) -> AssignmentExpression:
        return AssignmentExpression(
            self.convert(raw.get("left")),
            self.convert(raw.get("right")),
            str(raw.get("operator", "=")),
            line=_line(raw),
        )

    def _assignment_pattern(self, raw: RawNode) -> AssignmentPattern:
        return AssignmentPattern(
            self.convert(raw.get("left")),
            self.convert(raw.get("right")),
            line=_line(raw),
        )

    # == JSX ==

    def _jsx_element(self, raw: RawNode) -> JSXElement:
        opening = cast(RawNode, raw.get("openingElement") or {})
        name = _Converter._name_of(opening.get("name"))
        if name is None:
            raise SyntaxTreeError(f"JSX element without a readable name at line {_line(raw)}")
        return JSXElement(
            name,
            self.convert_list(opening.get("attributes")),
            self.convert_list(raw.get("children")),
            self_closing=bool(opening.get("selfClosing")),
            line=_line(raw),
        )

    def _jsx_fragment(self, raw: RawNode) -> JSXFragment:
        return JSXFragment(self.convert_list(raw.get("children")), line=_line(raw))

    def _jsx_expression_container(self, raw: RawNode) -> JSXExpressionContainer:
        return JSXExpressionContainer(self.convert(raw.get("expression")), line=_line(raw))

    def _jsx_attribute(self, raw: RawNode) -> JSXAttribute:
        name = _Converter._name_of(raw.get("name")) or ""
        return JSXAttribute(name, self.convert_optional(raw.get("value")), line=_line(raw))

    def _jsx_spread_attribute(self, raw: RawNode) -> JSXSpreadAttribute:
        return JSXSpreadAttribute(self.convert(raw.get("argument")), line=_line(raw))


def _comments(raw: object) -> list[Comment]:
    comments: list[Comment] = []
    if not isinstance(raw, list):
        return comments
    for item in cast(list[object], raw):
        if not isinstance(item, Mapping):
            continue
        comment = cast(RawNode, item)
        comments.append(
            Comment(
                value=str(comment.get("value", "")),
                line=_line(comment),
                end_line=_end_line(comment),
                block=comment.get("type") in ("CommentBlock", "Block"),
            )
        )
    return comments


def load_program(data: Mapping[str, object], filename: str | None = None) -> Program:
    """
    Convert a Babel ``File`` or ``Program`` JSON object into a ``Program``.

    Raises:
        SyntaxTreeError: If the JSON does not describe a program
    """
    converter = _Converter()

    match data.get("type"):
        case "File":
            program = converter.convert(data.get("program"))
            if not isinstance(program, Program):
                raise SyntaxTreeError("File node does not wrap a Program")
            file_comments = _comments(data.get("comments"))
            if file_comments:
                program.comments = file_comments
        case "Program":
            program = cast(Program, converter.convert(data))
        case other:
            raise SyntaxTreeError(f"Expected a File or Program node, got {other!r}")

    program.filename = filename
    logger.debug(
        f"Loaded {filename or '<memory>'}: {len(program.body)} statements, "
        f"{len(program.comments)} comments"
    )
    return program


def load_program_file(path: Path) -> Program:
    """
    Read a JSON syntax tree from disk.

    Raises:
        FileNotFoundError: If the file does not exist
        SyntaxTreeError: If the file is not valid JSON or not a program
    """
    if not path.exists():
        raise FileNotFoundError(f"Syntax tree file not found: {path}")

    try:
        with path.open("r", encoding="utf-8") as f:
            data: object = json.load(f)  # pyright: ignore[reportAny]
    except json.JSONDecodeError as e:
        raise SyntaxTreeError(f"Invalid JSON in {path}: {e}") from e

    if not isinstance(data, dict):
        raise SyntaxTreeError(
            f"Syntax tree file must contain a JSON object, got {type(data).__name__}"
        )

    # The original source path is nicer in diagnostics than the .json path.
    filename = str(path)
    if path.name.endswith(".ast.json"):
        filename = str(path.with_name(path.name.removesuffix(".ast.json")))
    return load_program(cast(dict[str, object], data), filename=filename)
