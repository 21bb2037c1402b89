import dataclasses
import json

import hypothesis.strategies as st
import pytest
from hypothesis import given

from lbasic.lbasic_ast import (
    ASTNode,
    EndStatement,
    ForStatement,
    IfStatement,
    LetStatement,
    PrintStatement,
    RemStatement,
    StatementKind,
    Variable,
)
from lbasic.lbasic_parser import parse_line


def test_astnode_repr() -> None:
    node = ASTNode("number", 1)
    assert repr(node) == "ASTNode(number, value=1)"


def test_astnode_repr_with_children() -> None:
    node = ASTNode("neg", "-", [ASTNode("variable", "A")])
    assert repr(node) == "ASTNode(neg, value='-', children=[ASTNode(variable, value='A')])"


def test_astnode_children_are_a_tuple() -> None:
    node = ASTNode("call", "LEN", [ASTNode("variable", "A")])
    assert node.children == (ASTNode("variable", "A"),)


def test_astnode_eq_not_equal_children() -> None:
    n1 = ASTNode("arith", "+", [ASTNode("number", 1), ASTNode("number", 2)])
    n2 = ASTNode("arith", "+", [ASTNode("number", 1), ASTNode("number", 3)])
    assert n1 != n2


def test_astnode_eq_line_matters() -> None:
    assert ASTNode("number", 1, line=10) != ASTNode("number", 1, line=20)


def test_astnode_eq_non_astnode() -> None:
    assert ASTNode("number", 1) != 1


def test_astnode_to_dict() -> None:
    node = ASTNode("subscript", "A", [ASTNode("number", 1, line=5)], line=5)
    assert node.to_dict() == {
        "kind": "subscript",
        "value": "A",
        "line": 5,
        "children": [{"kind": "number", "value": 1, "line": 5, "children": []}],
    }


@given(st.text(min_size=1), st.integers())  # type: ignore[misc]
def test_astnode_equal_nodes_hash_equal(kind: str, value: int) -> None:
    assert hash(ASTNode(kind, value)) == hash(ASTNode(kind, value))
    assert ASTNode(kind, value) == ASTNode(kind, value)


def test_statement_kinds() -> None:
    assert PrintStatement.kind is StatementKind.PRINT
    assert EndStatement(1).kind is StatementKind.END
    assert IfStatement.kind is StatementKind.IF


def test_statements_are_frozen() -> None:
    stmt = RemStatement(10, "hi")
    with pytest.raises(dataclasses.FrozenInstanceError):
        stmt.comment = "changed"  # type: ignore[misc]


def test_statements_are_hashable() -> None:
    a = parse_line("10 LET A = B + 1")
    b = parse_line("10 LET A = B + 1")
    assert {a, b} == {a}


def test_different_kinds_never_compare_equal() -> None:
    assert EndStatement(10) != RemStatement(10)


def test_let_to_dict() -> None:
    stmt = LetStatement(10, Variable(10, "A"), ASTNode("number", 1, line=10))
    assert stmt.to_dict() == {
        "kind": "LET",
        "line_number": 10,
        "variable": {"line_number": 10, "name": "A", "subscript": None},
        "expression": {"kind": "number", "value": 1, "line": 10, "children": []},
    }


def test_variable_to_dict_keeps_line_number() -> None:
    stmt = parse_line("30 NEXT A[2]")
    assert stmt.to_dict()["variable"] == {
        "line_number": 30,
        "name": "A",
        "subscript": {"kind": "number", "value": 2, "line": 30, "children": []},
    }


def test_for_to_dict_without_step() -> None:
    stmt = parse_line("10 FOR I = 1 TO 3")
    assert isinstance(stmt, ForStatement)
    data = stmt.to_dict()
    assert data["kind"] == "FOR"
    assert data["step"] is None


def test_if_to_dict_is_nested_and_json_serialisable() -> None:
    stmt = parse_line('10 IF A[1] = 2 THEN PRINT "x"; ELSE END')
    data = stmt.to_dict()
    assert data["then"] == {
        "kind": "PRINT",
        "line_number": 10,
        "expression": {"kind": "string", "value": "x", "line": 10, "children": []},
        "line_mod": True,
    }
    assert data["otherwise"] == {"kind": "END", "line_number": 10}
    assert json.loads(json.dumps(data)) == data
