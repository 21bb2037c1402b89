"""
Expression translator for lbasic.

Turns an isolated, contiguous token slice (cut out of a line by the parser)
into an expression tree of ``ASTNode`` objects. The translator works on its
own copy of the slice and never touches the parser's cursor.

Grammar (loosest to tightest):

    expr        := or_expr
    or_expr     := and_expr ("OR" and_expr)*
    and_expr    := comparison ("AND" comparison)*
    comparison  := additive (("=" | "<>" | "<" | ">" | "<=" | ">=") additive)*
    additive    := term (("+" | "-") term)*
    term        := unary (("*" | "/" | "%") unary)*
    unary       := "-" unary | primary
    primary     := NUMBER | STRING | CONSTANT
                 | VARIABLE ["[" expr "]"]
                 | FUNCTION "(" [expr ("," expr)*] ")"
                 | "(" expr ")"

Every binary level is left associative. Subscripts (``A[1]``) and calls
(``LEN(A$)``) both use bracket pairs but produce distinct node kinds.

Raises:
    TranslationError: On empty input, mismatched brackets, trailing operators,
        empty operands, tokens left over after a complete expression, or
        groups, subscripts, calls and unary minus nested deeper than
        ``max_depth``.
"""

from __future__ import annotations

from collections.abc import Iterable

from lbasic.lbasic_ast import ASTNode
from lbasic.lbasic_constants import (
    ADDITIVE_OPS,
    COMPARISON_OPS,
    MAX_EXPR_DEPTH,
    MULTIPLICATIVE_OPS,
)
from lbasic.lbasic_errors import TranslationError
from lbasic.lbasic_lexer import EOF, Token, TokenType

# (token type, symbols, node kind), loosest level first.
BINARY_LEVELS: tuple[tuple[TokenType, tuple[str, ...], str], ...] = (
    (TokenType.LOGIC, ("OR",), "logic"),
    (TokenType.LOGIC, ("AND",), "logic"),
    (TokenType.OPERATOR, COMPARISON_OPS, "compare"),
    (TokenType.OPERATOR, ADDITIVE_OPS, "arith"),
    (TokenType.OPERATOR, MULTIPLICATIVE_OPS, "arith"),
)

_LITERALS = {
    TokenType.NUMBER: "number",
    TokenType.STRING: "string",
    TokenType.CONSTANT: "constant",
}


class ExpressionTranslator:
    """Recursive-descent translator from a token slice to an expression tree.

    Attributes:
        tokens (list[Token]): The expression tokens, without EOF.
        position (int): Index of the current token.
        line_number (int): Line number stamped on nodes and errors.
        max_depth (int): Maximum nesting of groups, subscripts, calls and unary minus.
        depth (int): Current nesting level.
    """

    def __init__(
        self,
        tokens: Iterable[Token],
        line_number: int = 0,
        max_depth: int = MAX_EXPR_DEPTH,
    ) -> None:
        self.tokens: list[Token] = list(tokens)
        self.position: int = 0
        self.line_number = line_number
        self.max_depth = max_depth
        self.depth = 0

    def current(self) -> Token:
        return (
            self.tokens[self.position] if self.position < len(self.tokens) else EOF
        )

    def advance(self) -> Token:
        tok = self.current()
        self.position += 1
        return tok

    def error(self, message: str) -> TranslationError:
        return TranslationError(self.line_number, message)

    def descend(self) -> None:
        self.depth += 1
        if self.depth > self.max_depth:
            raise self.error(f"Expression nested deeper than {self.max_depth}")

    def expect_operator(self, symbol: str) -> Token:
        tok = self.current()
        if not tok.is_operator(symbol):
            raise self.error(f"Expected '{symbol}' but got {tok.describe()}")
        return self.advance()

    def translate(self) -> ASTNode:
        """Translates the whole slice into one expression tree."""
        if not self.tokens:
            raise self.error("Empty expression")
        node = self.parse_binary(0)
        if self.current() is not EOF:
            raise self.error(f"Unexpected {self.current().describe()} in expression")
        return node

    def parse_binary(self, level: int) -> ASTNode:
        if level == len(BINARY_LEVELS):
            return self.parse_unary()

        type_, symbols, kind = BINARY_LEVELS[level]
        node = self.parse_binary(level + 1)
        while self.current().type is type_ and self.current().value in symbols:
            op = self.advance()
            right = self.parse_binary(level + 1)
            node = ASTNode(kind, op.value, (node, right), line=self.line_number)
        return node

    def parse_unary(self) -> ASTNode:
        if self.current().is_operator("-"):
            self.advance()
            self.descend()
            operand = self.parse_unary()
            self.depth -= 1
            return ASTNode("neg", "-", (operand,), line=self.line_number)
        return self.parse_primary()

    def parse_primary(self) -> ASTNode:
        tok = self.current()

        if tok.type in _LITERALS:
            self.advance()
            return ASTNode(_LITERALS[tok.type], tok.value, line=self.line_number)

        if tok.type is TokenType.VARIABLE:
            self.advance()
            if self.current().is_operator("["):
                self.advance()
                self.descend()
                index = self.parse_binary(0)
                self.expect_operator("]")
                self.depth -= 1
                return ASTNode("subscript", tok.value, (index,), line=self.line_number)
            return ASTNode("variable", tok.value, line=self.line_number)

        if tok.type is TokenType.FUNCTION:
            self.advance()
            return self.parse_call(tok)

        if tok.is_operator("("):
            self.advance()
            self.descend()
            inner = self.parse_binary(0)
            self.expect_operator(")")
            self.depth -= 1
            return inner

        if tok is EOF:
            raise self.error("Unexpected end of expression")
        raise self.error(f"Unexpected {tok.describe()} in expression")

    def parse_call(self, name: Token) -> ASTNode:
        self.expect_operator("(")
        self.descend()
        args: list[ASTNode] = []
        if not self.current().is_operator(")"):
            while True:
                args.append(self.parse_binary(0))
                if self.current().is_operator(","):
                    self.advance()
                else:
                    break
        self.expect_operator(")")
        self.depth -= 1
        return ASTNode("call", name.value, args, line=self.line_number)


def translate(
    tokens: Iterable[Token],
    line_number: int = 0,
    max_depth: int = MAX_EXPR_DEPTH,
) -> ASTNode:
    """Translates an isolated expression token slice into an expression tree."""
    return ExpressionTranslator(tokens, line_number, max_depth).translate()


__all__ = ["BINARY_LEVELS", "ExpressionTranslator", "translate"]
