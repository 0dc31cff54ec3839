"""Unit tests for the depth-first version search."""

import pytest
from tree_sitter import Language

from versync.core.patterns import version_from_node
from versync.core.syntax import Compound, Span, StatementList, VariableDeclaration, parse_program
from versync.core.walker import branches, traverse


def _find(language: Language, code: str) -> str | None:
    source = code.encode("utf-8")
    hit = traverse(source, parse_program(language, source, "test.js"))
    return version_from_node(source, hit.node) if hit else None


def test_returns_none_without_version(javascript_language: Language) -> None:
    assert _find(javascript_language, "var a = 1;\nfunction f() { return a; }\n") is None


def test_first_match_in_document_order_wins(javascript_language: Language) -> None:
    code = 'exports.version = "1.0.0";\nexports.version = "2.0.0";\n'
    assert _find(javascript_language, code) == "1.0.0"


def test_descends_into_call_arguments(javascript_language: Language) -> None:
    code = 'define(["dep"], function (dep) {\n  return { version: "0.9.0" };\n});\n'
    assert _find(javascript_language, code) == "0.9.0"


def test_descends_into_callee_when_there_are_no_arguments(javascript_language: Language) -> None:
    code = '(function () {\n  this.lib = { version: "3.0.5" };\n})();\n'
    assert _find(javascript_language, code) == "3.0.5"


def test_arguments_take_priority_over_callee(javascript_language: Language) -> None:
    code = '(function () { return { version: "1.0.0" }; })({ version: "2.0.0" });'
    assert _find(javascript_language, code) == "2.0.0"


def test_descends_into_assignment_right_hand_side(javascript_language: Language) -> None:
    code = 'module.exports = function () {\n  return { version: "4.0.0" };\n};\n'
    assert _find(javascript_language, code) == "4.0.0"


def test_variable_declarations_are_not_searched(javascript_language: Language) -> None:
    assert _find(javascript_language, 'var lib = { version: "1.0.0" };') is None


def test_chained_assignment(javascript_language: Language) -> None:
    assert _find(javascript_language, 'a = module.exports = { version: "5.0.0" };') == "5.0.0"


def test_nested_bare_object_is_found_in_arguments(javascript_language: Language) -> None:
    assert _find(javascript_language, 'register({ name: "x", version: "6.0.0" });') == "6.0.0"


def test_leaf_nodes_have_no_branches() -> None:
    span = Span(start_byte=0, end_byte=0, line=1)
    assert branches(VariableDeclaration(span=span, declarators=())) == ()
    assert branches(StatementList(span=span, statements=())) == ()


@pytest.mark.parametrize(
    "code",
    [
        'while (true) {\n  exports.version = "7.0.0";\n  break;\n}\n',
        'do {\n  exports.version = "7.0.0";\n} while (false);\n',
        'for (var i = 0; i < 1; i++) {\n  exports.version = "7.0.0";\n}\n',
        'for (var k in o) exports.version = "7.0.0";\n',
        'for (const k of o) {\n  exports.version = "7.0.0";\n}\n',
        'outer: {\n  exports.version = "7.0.0";\n}\n',
        'with (o) {\n  exports.version = "7.0.0";\n}\n',
    ],
    ids=["while", "do-while", "for", "for-in", "for-of", "labeled", "with"],
)
def test_descends_into_statement_bodies(javascript_language: Language, code: str) -> None:
    assert _find(javascript_language, code) == "7.0.0"


def test_if_branches_are_not_searched(javascript_language: Language) -> None:
    assert _find(javascript_language, 'if (true) {\n  exports.version = "1.0.0";\n}\n') is None


def test_statement_body_is_a_branch() -> None:
    span = Span(start_byte=0, end_byte=0, line=1)
    body = StatementList(span=span, statements=())
    assert branches(Compound(span=span, kind="while_statement", body=body)) == (body,)
