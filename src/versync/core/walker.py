from __future__ import annotations

from versync.core.patterns import Hit, match
from versync.core.syntax import Assignment, Call, Compound, ExpressionStatement, Function, Node, StatementList


def branches(node: Node) -> tuple[Node, ...]:
    """Return the children the search descends into, or an empty tuple for leaves.

    Only the first non-empty branch is followed, in this order: statement list,
    call arguments, body of a function, loop, labeled or ``with`` statement,
    statement expression, right-hand side of an assignment, callee.
    """
    if isinstance(node, StatementList) and node.statements:
        return node.statements
    if isinstance(node, Call) and node.arguments:
        return node.arguments
    if isinstance(node, (Function, Compound)):
        return (node.body,)
    if isinstance(node, ExpressionStatement):
        return (node.expression,)
    if isinstance(node, Assignment):
        return (node.value,)
    if isinstance(node, Call):
        return (node.callee,)
    return ()


def traverse(source: bytes, root: Node) -> Hit | None:
    """Depth-first search for the first node matching a version pattern."""
    stack = [root]
    while stack:
        node = stack.pop()
        hit = match(source, node)
        if hit is not None:
            return hit
        stack.extend(reversed(branches(node)))
    return None
