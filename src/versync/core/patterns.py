"""Shapes a version declaration can take in JSON and JavaScript sources.

Each rule inspects a single node and returns a ``Hit`` pointing at the node
holding the version, or ``None``. Rules are tried in ``RULES`` order and the
first hit wins.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass

from versync.core.syntax import (
    Assignment,
    ExportNamed,
    Identifier,
    Literal,
    Member,
    Node,
    ObjectLiteral,
    Return,
    node_text,
)

_CANONICAL_MEMBER_TARGETS = frozenset({"exports.version", "module.exports.version"})
_CANONICAL_OBJECT_TARGETS = frozenset({"exports", "module.exports"})


@dataclass(frozen=True)
class Hit:
    node: Node
    qualifier: str | None = None
    canonical: bool = True


Rule = Callable[[bytes, Node], "Hit | None"]


def version_property(literal: ObjectLiteral) -> Node | None:
    for prop in literal.properties:
        if prop.key == "version":
            return prop.value
    return None


def version_from_node(source: bytes, node: Node) -> str:
    """Return the literal value of ``node``, or its source text for anything that is not a literal."""
    if isinstance(node, Literal):
        return node.value
    return node_text(source, node)


def version_start(node: Node) -> int:
    """Byte offset at which the text returned by ``version_from_node`` begins."""
    if isinstance(node, Literal) and node.kind == "string":
        return node.span.start_byte + 1
    return node.span.start_byte


def unparse_target(source: bytes, node: Node) -> str:
    if isinstance(node, Identifier):
        return node.name
    if isinstance(node, Member) and node.property is not None:
        return f"{unparse_target(source, node.object)}.{node.property}"
    return node_text(source, node)


def match_return_literal(source: bytes, node: Node) -> Hit | None:
    # return { ..., version: "...", ... }
    if isinstance(node, Return) and isinstance(node.argument, ObjectLiteral):
        value = version_property(node.argument)
        if value is not None:
            return Hit(value)
    return None


def match_export_declaration(source: bytes, node: Node) -> Hit | None:
    # export const version = "..."
    if isinstance(node, ExportNamed):
        for declarator in node.declarators:
            if declarator.name == "version" and declarator.init is not None:
                return Hit(declarator.init)
    return None


def match_assignment(source: bytes, node: Node) -> Hit | None:
    # exports.version = "..." or module.exports = { version: "..." }
    if not isinstance(node, Assignment):
        return None

    target = node.target
    if isinstance(target, Member) and target.property == "version":
        qualifier = unparse_target(source, target)
        return Hit(node.value, qualifier, qualifier in _CANONICAL_MEMBER_TARGETS)

    if node.operator == "=" and isinstance(node.value, ObjectLiteral):
        value = version_property(node.value)
        if value is not None:
            qualifier = unparse_target(source, target)
            return Hit(value, qualifier, qualifier in _CANONICAL_OBJECT_TARGETS)

    return None


def match_object_literal(source: bytes, node: Node) -> Hit | None:
    # { ..., "version": "...", ... }, which is what JSON data looks like
    if isinstance(node, ObjectLiteral):
        value = version_property(node)
        if value is not None:
            return Hit(value)
    return None


RULES: tuple[Rule, ...] = (
    match_return_literal,
    match_export_declaration,
    match_assignment,
    match_object_literal,
)


def match(source: bytes, node: Node) -> Hit | None:
    for rule in RULES:
        hit = rule(source, node)
        if hit is not None:
            return hit
    return None
