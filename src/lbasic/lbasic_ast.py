"""
Defines the syntax tree structures produced by the lbasic parser.

Classes:
    ASTNode:
        Expression tree node built by the expression translator. Kinds are
        ``number``, ``string``, ``constant``, ``variable``, ``subscript``,
        ``call``, ``neg``, ``arith``, ``compare`` and ``logic``.

    Variable:
        A variable reference (name plus optional subscript expression).

    StatementKind:
        Closed enumeration of the ten statement kinds.

    Statement and its subclasses:
        One frozen dataclass per statement kind. Every statement carries the
        line number of the source line it came from.

Each node can be converted to plain dictionaries with ``to_dict()`` for JSON
output or inspection. Nodes are never mutated after construction.

Example:
    LetStatement(10, Variable(10, "A"), ASTNode("number", 1, line=10))
"""

from __future__ import annotations

from dataclasses import dataclass, fields
from enum import Enum
from typing import Any, ClassVar


class ASTNode:
    """
    Represents a node in an lbasic expression tree.

    Args:
        kind (str): The type of node (e.g., "arith", "call", "variable").
        value (Any, optional): Literal value, name or operator symbol.
        children (Iterable[ASTNode], optional): Operand nodes, stored as a tuple.
        line (int): Source line number (default is 0).

    Attributes:
        kind (str): Type of the node.
        value (Any): Literal value, variable/function name, or operator symbol.
        children (tuple[ASTNode, ...]): Operands, call arguments or subscript index.
        line (int): Line number of the statement the expression belongs to.
    """

    __slots__ = ("kind", "value", "children", "line")

    def __init__(
        self,
        kind: str,
        value: Any = None,
        children: tuple[ASTNode, ...] | list[ASTNode] | None = None,
        line: int = 0,
    ):
        self.kind = kind
        self.value = value
        self.children: tuple[ASTNode, ...] = tuple(children or ())
        self.line = line

    def __repr__(self) -> str:
        parts = [f"{self.kind}"]
        if self.value is not None:
            parts.append(f"value={self.value!r}")
        if self.children:
            parts.append(f"children=[{', '.join(repr(c) for c in self.children)}]")
        return f"ASTNode({', '.join(parts)})"

    def __eq__(self, other: Any) -> bool:
        if not isinstance(other, ASTNode):
            return False
        return (
            self.kind == other.kind
            and self.value == other.value
            and self.line == other.line
            and self.children == other.children
        )

    def __hash__(self) -> int:
        return hash((self.kind, self.value, self.line, self.children))

    def to_dict(self) -> dict[str, Any]:
        return {
            "kind": self.kind,
            "value": self.value,
            "line": self.line,
            "children": [c.to_dict() for c in self.children],
        }


@dataclass(frozen=True)
class Variable:
    """A reference to a scalar variable or an array element."""

    line_number: int
    name: str
    subscript: ASTNode | None = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "line_number": self.line_number,
            "name": self.name,
            "subscript": None if self.subscript is None else self.subscript.to_dict(),
        }


class StatementKind(Enum):
    PRINT = "PRINT"
    LET = "LET"
    REM = "REM"
    PAUSE = "PAUSE"
    INPUT = "INPUT"
    FOR = "FOR"
    NEXT = "NEXT"
    GOTO = "GOTO"
    END = "END"
    IF = "IF"


def _serialize(value: Any) -> Any:
    if isinstance(value, (ASTNode, Variable, Statement)):
        return value.to_dict()
    return value


@dataclass(frozen=True)
class Statement:
    """Base class of all statement nodes.

    Attributes:
        line_number (int): The line number token that began the source line.
        kind (StatementKind): Class-level tag identifying the statement variant.
    """

    kind: ClassVar[StatementKind]

    line_number: int

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {"kind": self.kind.value}
        for f in fields(self):
            data[f.name] = _serialize(getattr(self, f.name))
        return data


@dataclass(frozen=True)
class PrintStatement(Statement):
    kind: ClassVar[StatementKind] = StatementKind.PRINT

    expression: ASTNode
    line_mod: bool = False


@dataclass(frozen=True)
class LetStatement(Statement):
    kind: ClassVar[StatementKind] = StatementKind.LET

    variable: Variable
    expression: ASTNode


@dataclass(frozen=True)
class RemStatement(Statement):
    kind: ClassVar[StatementKind] = StatementKind.REM

    comment: str = ""


@dataclass(frozen=True)
class PauseStatement(Statement):
    kind: ClassVar[StatementKind] = StatementKind.PAUSE

    expression: ASTNode


@dataclass(frozen=True)
class InputStatement(Statement):
    kind: ClassVar[StatementKind] = StatementKind.INPUT

    prompt: ASTNode
    variable: Variable


@dataclass(frozen=True)
class ForStatement(Statement):
    """``FOR var = start TO end [STEP step]``; ``step`` is None when omitted."""

    kind: ClassVar[StatementKind] = StatementKind.FOR

    variable: Variable
    start: ASTNode
    end: ASTNode
    step: ASTNode | None = None


@dataclass(frozen=True)
class NextStatement(Statement):
    kind: ClassVar[StatementKind] = StatementKind.NEXT

    variable: Variable


@dataclass(frozen=True)
class GotoStatement(Statement):
    kind: ClassVar[StatementKind] = StatementKind.GOTO

    target: ASTNode


@dataclass(frozen=True)
class EndStatement(Statement):
    kind: ClassVar[StatementKind] = StatementKind.END


@dataclass(frozen=True)
class IfStatement(Statement):
    """``IF cond THEN stmt [ELSE stmt]``; both branches are full statements."""

    kind: ClassVar[StatementKind] = StatementKind.IF

    condition: ASTNode
    then: Statement
    otherwise: Statement | None = None


__all__ = [
    "ASTNode",
    "EndStatement",
    "ForStatement",
    "GotoStatement",
    "IfStatement",
    "InputStatement",
    "LetStatement",
    "NextStatement",
    "PauseStatement",
    "PrintStatement",
    "RemStatement",
    "Statement",
    "StatementKind",
    "Variable",
]
