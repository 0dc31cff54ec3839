"""Syntax trees for the dynamic dialects.

tree-sitter trees are lowered into a small closed set of node kinds. Only the
kinds the version patterns and the walker care about get their own class;
everything else becomes an ``Opaque`` leaf. Parenthesized expressions are
transparent, so ``({...})`` lowers to the object literal itself.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass

from tree_sitter import Language, Parser, Tree
from tree_sitter import Node as TSNode

from versync.errors import SourceSyntaxError

_COMMENT_TYPES = frozenset({"comment", "html_comment", "hash_bang_line"})


@dataclass(frozen=True)
class Span:
    start_byte: int
    end_byte: int
    line: int  # 1-based


@dataclass(frozen=True)
class Node:
    span: Span


@dataclass(frozen=True)
class StatementList(Node):
    statements: tuple[Node, ...]


@dataclass(frozen=True)
class ExpressionStatement(Node):
    expression: Node


@dataclass(frozen=True)
class Return(Node):
    argument: Node | None


@dataclass(frozen=True)
class Call(Node):
    callee: Node
    arguments: tuple[Node, ...]


@dataclass(frozen=True)
class Function(Node):
    body: Node


@dataclass(frozen=True)
class Compound(Node):
    """A loop, labeled or ``with`` statement; only its body is kept."""

    kind: str
    body: Node


@dataclass(frozen=True)
class Declarator(Node):
    name: str | None
    init: Node | None


@dataclass(frozen=True)
class ExportNamed(Node):
    declarators: tuple[Declarator, ...]


@dataclass(frozen=True)
class VariableDeclaration(Node):
    declarators: tuple[Declarator, ...]


@dataclass(frozen=True)
class Assignment(Node):
    operator: str
    target: Node
    value: Node


@dataclass(frozen=True)
class Member(Node):
    object: Node
    property: str | None


@dataclass(frozen=True)
class Identifier(Node):
    name: str


@dataclass(frozen=True)
class Property(Node):
    key: str | None
    value: Node


@dataclass(frozen=True)
class ObjectLiteral(Node):
    properties: tuple[Property, ...]


@dataclass(frozen=True)
class Literal(Node):
    kind: str  # "string" or "number"
    value: str


@dataclass(frozen=True)
class Opaque(Node):
    kind: str


# ---------------------------------------------------------------------------
# Parsing
# ---------------------------------------------------------------------------


def _first_error(node: TSNode) -> TSNode:
    for child in node.children:
        if child.is_error or child.is_missing:
            return child
        if child.has_error:
            return _first_error(child)
    return node


def parse_tree(language: Language, source: bytes, filename: str) -> Tree:
    """Parse ``source`` and raise ``SourceSyntaxError`` if the tree contains errors."""
    tree = Parser(language).parse(source)
    root = tree.root_node
    if root.has_error:
        bad = _first_error(root)
        row, column = bad.start_point
        lines = source.splitlines()
        text = lines[row].decode("utf-8", errors="replace") if row < len(lines) else None
        raise SourceSyntaxError(filename, row + 1, column + 1, text)
    return tree


def parse_program(language: Language, source: bytes, filename: str) -> Node:
    tree = parse_tree(language, source, filename)
    return lower(tree.root_node, source)


# ---------------------------------------------------------------------------
# Lowering
# ---------------------------------------------------------------------------


def node_text(source: bytes, node: Node) -> str:
    return source[node.span.start_byte : node.span.end_byte].decode("utf-8")


def _text(node: TSNode, source: bytes) -> str:
    return source[node.start_byte : node.end_byte].decode("utf-8")


def _span(node: TSNode) -> Span:
    return Span(start_byte=node.start_byte, end_byte=node.end_byte, line=node.start_point[0] + 1)


def _named(node: TSNode) -> list[TSNode]:
    return [child for child in node.named_children if child.type not in _COMMENT_TYPES]


def _lower_statements(node: TSNode, source: bytes) -> Node:
    return StatementList(span=_span(node), statements=tuple(lower(child, source) for child in _named(node)))


def _lower_expression_statement(node: TSNode, source: bytes) -> Node:
    children = _named(node)
    if not children:
        return Opaque(span=_span(node), kind=node.type)
    return ExpressionStatement(span=_span(node), expression=lower(children[0], source))


def _lower_parenthesized(node: TSNode, source: bytes) -> Node:
    children = _named(node)
    if not children:
        return Opaque(span=_span(node), kind=node.type)
    return lower(children[0], source)


def _lower_return(node: TSNode, source: bytes) -> Node:
    children = _named(node)
    argument = lower(children[0], source) if children else None
    return Return(span=_span(node), argument=argument)


def _lower_call(node: TSNode, source: bytes) -> Node:
    callee = node.child_by_field_name("function") or node.child_by_field_name("constructor")
    args = node.child_by_field_name("arguments")
    arguments: tuple[Node, ...] = ()
    # tagged templates carry a template_string in place of an argument list
    if args is not None and args.type == "arguments":
        arguments = tuple(lower(child, source) for child in _named(args))
    if callee is None:
        return Opaque(span=_span(node), kind=node.type)
    return Call(span=_span(node), callee=lower(callee, source), arguments=arguments)


def _lower_function(node: TSNode, source: bytes) -> Node:
    body = node.child_by_field_name("body")
    if body is None:
        return Opaque(span=_span(node), kind=node.type)
    return Function(span=_span(node), body=lower(body, source))


def _lower_compound(node: TSNode, source: bytes) -> Node:
    body = node.child_by_field_name("body")
    if body is None:
        return Opaque(span=_span(node), kind=node.type)
    return Compound(span=_span(node), kind=node.type, body=lower(body, source))


def _lower_declarator(node: TSNode, source: bytes) -> Declarator:
    name = node.child_by_field_name("name")
    value = node.child_by_field_name("value")
    return Declarator(
        span=_span(node),
        name=_text(name, source) if name is not None and name.type == "identifier" else None,
        init=lower(value, source) if value is not None else None,
    )


def _declarators(node: TSNode, source: bytes) -> tuple[Declarator, ...]:
    return tuple(_lower_declarator(child, source) for child in _named(node) if child.type == "variable_declarator")


def _lower_variable_declaration(node: TSNode, source: bytes) -> Node:
    return VariableDeclaration(span=_span(node), declarators=_declarators(node, source))


def _lower_export(node: TSNode, source: bytes) -> Node:
    declaration = node.child_by_field_name("declaration")
    if declaration is None:
        # export default ..., export { ... }, export * from ...
        return Opaque(span=_span(node), kind=node.type)
    if declaration.type in ("lexical_declaration", "variable_declaration"):
        return ExportNamed(span=_span(node), declarators=_declarators(declaration, source))
    return ExportNamed(span=_span(node), declarators=())


def _lower_assignment(node: TSNode, source: bytes) -> Node:
    left = node.child_by_field_name("left")
    right = node.child_by_field_name("right")
    if left is None or right is None:
        return Opaque(span=_span(node), kind=node.type)
    operator = source[left.end_byte : right.start_byte].decode("utf-8").strip()
    return Assignment(span=_span(node), operator=operator, target=lower(left, source), value=lower(right, source))


def _lower_member(node: TSNode, source: bytes) -> Node:
    obj = node.child_by_field_name("object")
    prop = node.child_by_field_name("property")
    if obj is None:
        return Opaque(span=_span(node), kind=node.type)
    name = _text(prop, source) if prop is not None and prop.type == "property_identifier" else None
    return Member(span=_span(node), object=lower(obj, source), property=name)


def _lower_identifier(node: TSNode, source: bytes) -> Node:
    return Identifier(span=_span(node), name=_text(node, source))


def _property_key(key: TSNode, source: bytes) -> str | None:
    if key.type in ("property_identifier", "private_property_identifier", "number"):
        return _text(key, source)
    if key.type == "string":
        return source[key.start_byte + 1 : key.end_byte - 1].decode("utf-8")
    return None


def _lower_object(node: TSNode, source: bytes) -> Node:
    properties: list[Property] = []
    for child in _named(node):
        if child.type == "pair":
            key = child.child_by_field_name("key")
            value = child.child_by_field_name("value")
            if key is None or value is None:
                continue
            properties.append(Property(span=_span(child), key=_property_key(key, source), value=lower(value, source)))
        elif child.type == "shorthand_property_identifier":
            # { version } is sugar for { version: version }
            ident = Identifier(span=_span(child), name=_text(child, source))
            properties.append(Property(span=_span(child), key=ident.name, value=ident))
    return ObjectLiteral(span=_span(node), properties=tuple(properties))


def _lower_string(node: TSNode, source: bytes) -> Node:
    # escapes are kept as written, so the value is the exact text a rewrite replaces
    value = source[node.start_byte + 1 : node.end_byte - 1].decode("utf-8")
    return Literal(span=_span(node), kind="string", value=value)


def _lower_number(node: TSNode, source: bytes) -> Node:
    return Literal(span=_span(node), kind="number", value=_text(node, source))


_LOWERERS: dict[str, Callable[[TSNode, bytes], Node]] = {
    "program": _lower_statements,
    "statement_block": _lower_statements,
    "expression_statement": _lower_expression_statement,
    "parenthesized_expression": _lower_parenthesized,
    "return_statement": _lower_return,
    "call_expression": _lower_call,
    "new_expression": _lower_call,
    "function": _lower_function,
    "function_expression": _lower_function,
    "function_declaration": _lower_function,
    "generator_function": _lower_function,
    "generator_function_declaration": _lower_function,
    "arrow_function": _lower_function,
    "while_statement": _lower_compound,
    "do_statement": _lower_compound,
    "for_statement": _lower_compound,
    "for_in_statement": _lower_compound,
    "labeled_statement": _lower_compound,
    "with_statement": _lower_compound,
    "export_statement": _lower_export,
    "lexical_declaration": _lower_variable_declaration,
    "variable_declaration": _lower_variable_declaration,
    "assignment_expression": _lower_assignment,
    "augmented_assignment_expression": _lower_assignment,
    "member_expression": _lower_member,
    "identifier": _lower_identifier,
    "this": _lower_identifier,
    "object": _lower_object,
    "string": _lower_string,
    "number": _lower_number,
}


def lower(node: TSNode, source: bytes) -> Node:
    handler = _LOWERERS.get(node.type)
    if handler is None:
        return Opaque(span=_span(node), kind=node.type)
    return handler(node, source)
