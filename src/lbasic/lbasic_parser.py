"""
lbasic Statement Parser

Parses one tokenized lbasic line into exactly one statement node.

The parser reads a single leading keyword and dispatches to one of ten fixed
productions:

    PRINT expr [;]
    LET var = expr
    REM [comment]
    PAUSE expr
    INPUT expr ; var
    FOR var = expr TO expr [STEP expr]
    NEXT var
    GOTO expr
    END
    IF expr THEN stmt [ELSE stmt]

``IF`` is the only recursive production; its branches are parsed by the full
statement production, so an IF may guard any statement including another IF.
Nesting is bounded by ``max_depth``.

Expression boundaries
---------------------
Expressions have no terminator token. The parser greedily consumes tokens of
expression-compatible kinds and stops at the end of the line, at a token of
any other kind, or at a ``)`` / ``]`` seen while its own bracket depth is zero
(that closer belongs to an enclosing subscript or call). The collected slice
is handed to the expression translator.

Entry Points
------------
- ``Parser(stream, line_number).parse()``: parse a whole line after its LINENO token.
- ``parse_line(line)``: tokenize and parse one source line.
- ``parse_program(source)``: parse many lines, ordered by line number.

Raises
------
ParseError
    When the token sequence violates the grammar.
LexError
    From ``parse_line``/``parse_program`` when a line cannot be tokenized.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable

from lbasic.lbasic_ast import (
    ASTNode,
    EndStatement,
    ForStatement,
    GotoStatement,
    IfStatement,
    InputStatement,
    LetStatement,
    NextStatement,
    PauseStatement,
    PrintStatement,
    RemStatement,
    Statement,
    StatementKind,
    Variable,
)
from lbasic.lbasic_constants import CLOSERS, MAX_IF_DEPTH, OPENERS
from lbasic.lbasic_errors import ParseError
from lbasic.lbasic_expr import translate
from lbasic.lbasic_lexer import Lexer, Token, TokenStream, TokenType

logger = logging.getLogger(__name__)

EXPRESSION_TYPES: frozenset[TokenType] = frozenset(
    {
        TokenType.STRING,
        TokenType.FUNCTION,
        TokenType.OPERATOR,
        TokenType.NUMBER,
        TokenType.VARIABLE,
        TokenType.LOGIC,
        TokenType.CONSTANT,
    }
)


class Parser:
    """
    lbasic Parser Class

    Holds a cursor into one line's TokenStream and builds the statement node
    for that line.

    Attributes
    ----------
    stream : TokenStream
        Tokens of the line, positioned just after the LINENO token.
    line_number : int
        The line number stamped on every node and error.
    max_depth : int
        Maximum number of statements nested under IF branches.
    depth : int
        Current IF nesting depth.
    productions : dict[StatementKind, Callable[[], Statement]]
        One production per statement kind.
    """

    def __init__(
        self, stream: TokenStream, line_number: int, max_depth: int = MAX_IF_DEPTH
    ) -> None:
        self.stream = stream
        self.line_number = line_number
        self.max_depth = max_depth
        self.depth = 0
        self.productions: dict[StatementKind, Callable[[], Statement]] = {
            kind: getattr(self, f"parse_{kind.name.lower()}") for kind in StatementKind
        }

    def error(self, expected: str, found: Token) -> ParseError:
        return ParseError(
            self.line_number, f"Expected {expected} but got {found.describe()}"
        )

    def parse(self) -> Statement:
        """Parse the line's statement and require the line to be fully consumed."""
        statement = self.parse_statement()
        if not self.stream.at_end():
            raise self.error("end of line", self.stream.peek())
        return statement

    def parse_statement(self) -> Statement:
        """Parse a single statement starting at the cursor."""
        tok = self.stream.next()
        if tok.type is not TokenType.KEYWORD:
            raise self.error("keyword", tok)
        try:
            kind = StatementKind(tok.value)
        except ValueError:
            raise ParseError(
                self.line_number, f"Unexpected keyword {tok.value}"
            ) from None
        logger.debug(f"Line {self.line_number}: parsing {kind.value}")
        return self.productions[kind]()

    # Productions

    def parse_print(self) -> PrintStatement:
        return PrintStatement(
            self.line_number, self.expect_expr(), self.accept_line_mod()
        )

    def parse_let(self) -> LetStatement:
        variable = self.expect_variable()
        self.expect_operator("=")
        return LetStatement(self.line_number, variable, self.expect_expr())

    def parse_rem(self) -> RemStatement:
        return RemStatement(self.line_number, self.expect_comment())

    def parse_pause(self) -> PauseStatement:
        return PauseStatement(self.line_number, self.expect_expr())

    def parse_input(self) -> InputStatement:
        prompt = self.expect_expr()
        self.expect_line_mod()
        return InputStatement(self.line_number, prompt, self.expect_variable())

    def parse_for(self) -> ForStatement:
        variable = self.expect_variable()
        self.expect_operator("=")
        start = self.expect_expr()
        self.expect_keyword("TO")
        end = self.expect_expr()
        step = self.expect_expr() if self.accept_keyword("STEP") else None
        return ForStatement(self.line_number, variable, start, end, step)

    def parse_next(self) -> NextStatement:
        return NextStatement(self.line_number, self.expect_variable())

    def parse_goto(self) -> GotoStatement:
        return GotoStatement(self.line_number, self.expect_expr())

    def parse_end(self) -> EndStatement:
        return EndStatement(self.line_number)

    def parse_if(self) -> IfStatement:
        condition = self.expect_expr()
        self.expect_keyword("THEN")
        then = self.parse_nested()
        otherwise = self.parse_nested() if self.accept_keyword("ELSE") else None
        return IfStatement(self.line_number, condition, then, otherwise)

    def parse_nested(self) -> Statement:
        if self.depth >= self.max_depth:
            raise ParseError(
                self.line_number, f"IF statements nested deeper than {self.max_depth}"
            )
        self.depth += 1
        try:
            return self.parse_statement()
        finally:
            self.depth -= 1

    # Token helpers

    def accept_keyword(self, keyword: str) -> Token | None:
        tok = self.stream.peek()
        if tok.type is TokenType.KEYWORD and tok.value == keyword.upper():
            return self.stream.next()
        return None

    def expect_keyword(self, keyword: str) -> str:
        tok = self.accept_keyword(keyword)
        if tok is None:
            raise self.error(f"keyword {keyword.upper()}", self.stream.peek())
        return str(tok.value)

    def expect_operator(self, op: str) -> str:
        tok = self.stream.next()
        if not tok.is_operator(op):
            raise self.error(f"operator {op}", tok)
        return op

    def accept_line_mod(self) -> bool:
        if self.stream.peek().type is TokenType.LINEMOD:
            self.stream.next()
            return True
        return False

    def expect_line_mod(self) -> bool:
        if not self.accept_line_mod():
            raise self.error("';'", self.stream.peek())
        return True

    def expect_comment(self) -> str:
        if self.stream.peek().type is TokenType.COMMENT:
            return str(self.stream.next().value)
        return ""

    def expect_variable(self) -> Variable:
        tok = self.stream.next()
        if tok.type is not TokenType.VARIABLE:
            raise self.error("variable", tok)
        return Variable(self.line_number, str(tok.value), self.accept_subscript())

    def accept_subscript(self) -> ASTNode | None:
        if not self.stream.peek().is_operator("["):
            return None
        self.stream.next()
        index = self.expect_expr()
        closer = self.stream.next()
        if not closer.is_operator("]"):
            raise ParseError(
                self.line_number,
                f"Unterminated subscript: expected ']' but got {closer.describe()}",
            )
        return index

    def expect_expr(self) -> ASTNode:
        """Collect the longest expression slice at the cursor and translate it."""
        expr: list[Token] = []
        brackets = 0
        while not self.stream.at_end():
            tok = self.stream.peek()
            if tok.type not in EXPRESSION_TYPES:
                break

            # A closer at depth zero belongs to an enclosing subscript or call.
            is_closer = tok.type is TokenType.OPERATOR and tok.value in CLOSERS
            if brackets == 0 and is_closer:
                break

            self.stream.next()
            if tok.type is TokenType.OPERATOR and tok.value in OPENERS:
                brackets += 1
            elif is_closer:
                brackets -= 1
            expr.append(tok)

        if not expr:
            raise self.error("expression", self.stream.peek())
        return translate(expr, self.line_number)


# Every StatementKind must have a parse_<kind> production.
_missing = [
    kind.name
    for kind in StatementKind
    if not callable(getattr(Parser, f"parse_{kind.name.lower()}", None))
]
if _missing:
    raise ImportError(f"Parser has no production for {', '.join(_missing)}")


def _parse_tokens(stream: TokenStream, max_depth: int) -> Statement:
    first = stream.next()
    if first.type is not TokenType.LINENO or not isinstance(first.value, int):
        raise ParseError(None, f"Expected line number but got {first.describe()}")
    return Parser(stream, first.value, max_depth).parse()


def parse_line(
    line: str,
    functions: Iterable[str] | None = None,
    max_depth: int = MAX_IF_DEPTH,
) -> Statement:
    """Tokenize and parse a single source line.

    Args:
        line: Source text beginning with a line number.
        functions: Function-name registry for the lexer. Defaults to DEFAULT_FUNCTIONS.
        max_depth: Maximum IF nesting depth.

    Returns:
        The statement node for the line.

    Raises:
        LexError: If the line cannot be tokenized.
        ParseError: If the tokens do not form a valid statement.
    """
    return _parse_tokens(Lexer(functions).tokenize(line), max_depth)


def parse_program(
    source: str,
    functions: Iterable[str] | None = None,
    max_depth: int = MAX_IF_DEPTH,
) -> list[Statement]:
    """Parse multi-line source into statements ordered by line number.

    Blank lines are skipped. When a line number repeats, the later line
    replaces the earlier one. The first lexing or parsing error aborts the load.
    """
    lexer = Lexer(functions)
    program: dict[int, Statement] = {}
    for raw in source.splitlines():
        if not raw.strip():
            continue
        statement = _parse_tokens(lexer.tokenize(raw), max_depth)
        if statement.line_number in program:
            logger.warning(f"Line {statement.line_number} redefined; keeping the later one")
        program[statement.line_number] = statement
    logger.debug(f"Parsed program with {len(program)} lines")
    return [program[n] for n in sorted(program)]


__all__ = ["EXPRESSION_TYPES", "Parser", "parse_line", "parse_program"]
