"""
Lexical analyzer for the lbasic line-numbered BASIC dialect.

This module converts one raw source line into an ordered token sequence:

Classes:
    TokenType: Closed enumeration of token kinds.
    Token: Immutable (kind, value) pair.
    TokenStream: Peekable single-cursor view over a tokenized line.
    Lexer: Turns a source line into a TokenStream.

Features:
    - Every line must start with a non-negative integer line number.
    - Pattern classes are tried in a fixed priority order at each position:
      keyword, quoted string, logic operator, function name, named constant,
      variable, number, operator, line modifier.
    - Keywords, function names, constants and variables are case-insensitive
      and normalized to uppercase.
    - ``REM`` swallows the rest of the line as a single COMMENT token.
    - Two-character operators (``<>``, ``>=``, ``<=``) win over their prefixes.

Raises:
    LexError: If the line number is missing or no pattern matches.

Example:
    >>> stream = Lexer().tokenize('10 print "hi"')
    >>> stream.next(), stream.next(), stream.next()
    (Token(LINENO, 10), Token(KEYWORD, PRINT), Token(STRING, hi))

Exports:
    - TokenType
    - Token
    - TokenStream
    - Lexer
    - tokenize_line
"""

from __future__ import annotations

import logging
import re
from collections.abc import Callable, Iterable, Iterator
from dataclasses import dataclass
from enum import Enum

from lbasic.lbasic_constants import (
    CONSTANTS,
    DEFAULT_FUNCTIONS,
    KEYWORDS,
    LINE_MODIFIER,
    LOGIC_OPERATORS,
    OPERATORS,
)
from lbasic.lbasic_errors import LexError

logger = logging.getLogger(__name__)


class TokenType(Enum):
    """Kinds of tokens produced by the lexer."""

    LINENO = "lineno"
    KEYWORD = "keyword"
    COMMENT = "comment"
    STRING = "string"
    NUMBER = "number"
    VARIABLE = "variable"
    FUNCTION = "function"
    CONSTANT = "constant"
    OPERATOR = "operator"
    LOGIC = "logic"
    LINEMOD = "linemod"
    EOF = "eof"


@dataclass(frozen=True, repr=False)
class Token:
    """A single lexical token.

    Attributes:
        type (TokenType): The token kind.
        value (str | int | float): The lexeme. Numbers are ``int`` or ``float``,
            names are uppercase strings, strings hold the raw quoted body.
    """

    type: TokenType
    value: str | int | float

    def __repr__(self) -> str:
        return f"Token({self.type.name}, {self.value})"

    def describe(self) -> str:
        """Human-readable form used in error messages."""
        if self.type is TokenType.EOF:
            return "end of line"
        return f"{self.type.name} {self.value}"

    def is_operator(self, *symbols: str) -> bool:
        return self.type is TokenType.OPERATOR and self.value in symbols


EOF = Token(TokenType.EOF, "")


class TokenStream:
    """
    An ordered, peekable token sequence with a single read cursor.

    Reading past the end returns the shared EOF token instead of raising, so
    callers may peek or consume the end repeatedly.

    Attributes:
        tokens (list[Token]): The tokens of one line, without EOF.
        position (int): Index of the next token to be consumed.
    """

    def __init__(self, tokens: Iterable[Token]) -> None:
        self.tokens: list[Token] = list(tokens)
        self.position: int = 0

    def peek(self, offset: int = 0) -> Token:
        index = self.position + offset
        if index < 0 or index >= len(self.tokens):
            return EOF
        return self.tokens[index]

    def next(self) -> Token:
        if self.position >= len(self.tokens):
            return EOF
        tok = self.tokens[self.position]
        self.position += 1
        return tok

    def at_end(self) -> bool:
        return self.position >= len(self.tokens)

    def __len__(self) -> int:
        return len(self.tokens)

    def __iter__(self) -> Iterator[Token]:
        return iter(self.tokens)

    def __repr__(self) -> str:
        return f"TokenStream({self.tokens!r}, position={self.position})"


def _alternation(words: Iterable[str]) -> str:
    # Longest first so that no name is shadowed by one of its own prefixes.
    ordered = sorted(set(words), key=lambda w: (-len(w), w))
    return "|".join(re.escape(w) for w in ordered)


_LINE = re.compile(r"\s*(\d+)\s*")
_KEYWORD = re.compile(rf"({_alternation(KEYWORDS)})\s*", re.IGNORECASE)
_QUOTE = re.compile(r'"((?:\\.|[^"\\])*)"\s*')
_LOGIC = re.compile(rf"({_alternation(LOGIC_OPERATORS)})\s*", re.IGNORECASE)
_CONSTANT = re.compile(rf"({_alternation(CONSTANTS)})\s*", re.IGNORECASE)
_VARIABLE = re.compile(r"([a-z][0-9]*\$?)\s*", re.IGNORECASE)
_NUMBER = re.compile(r"(\d+(?:\.\d+)?)\s*")
_OPERATOR = re.compile(rf"({'|'.join(re.escape(op) for op in OPERATORS)})\s*")
_LINEMOD = re.compile(rf"({re.escape(LINE_MODIFIER)})\s*")

Match = tuple[list[Token], int]
"""Tokens produced by one matcher and the scan position after them."""


def _number(lexeme: str) -> int | float:
    return float(lexeme) if "." in lexeme else int(lexeme)


class Lexer:
    """Lexical analyzer for single lbasic source lines.

    A Lexer holds no per-line state and can tokenize any number of lines.

    Attributes:
        functions (frozenset[str]): Uppercase names that lex as FUNCTION tokens.
    """

    def __init__(self, functions: Iterable[str] | None = None) -> None:
        """Initializes the lexer with a function-name registry.

        Args:
            functions: Names of built-in functions (a mapping's keys are used).
                Defaults to DEFAULT_FUNCTIONS.
        """
        names = DEFAULT_FUNCTIONS if functions is None else functions
        self.functions: frozenset[str] = frozenset(name.upper() for name in names)
        self._function = (
            re.compile(rf"({_alternation(self.functions)})\s*", re.IGNORECASE)
            if self.functions
            else None
        )
        self._matchers: tuple[Callable[[str, int], Match | None], ...] = (
            self.match_keyword,
            self.match_quote,
            self.match_logic,
            self.match_function,
            self.match_constant,
            self.match_variable,
            self.match_number,
            self.match_operator,
            self.match_line_modifier,
        )

    def tokenize(self, line: str) -> TokenStream:
        """Tokenizes a whole source line.

        Args:
            line: One line of source text, starting with its line number.

        Returns:
            A TokenStream whose first token is the LINENO token.

        Raises:
            LexError: If the line number is missing or some input is unmatched.
        """
        m = _LINE.match(line)
        if not m:
            raise LexError(None, "Every line must start with a line number")

        lineno = int(m.group(1))
        tokens = [Token(TokenType.LINENO, lineno)]
        pos = m.end()

        while pos < len(line):
            for matcher in self._matchers:
                result = matcher(line, pos)
                if result is not None:
                    break
            else:
                raise LexError(lineno, f"Invalid syntax near: {line[pos:]!r}")
            eaten, pos = result
            tokens.extend(eaten)

        logger.debug(f"Tokenized line {lineno} into {len(tokens)} tokens")
        return TokenStream(tokens)

    def match_keyword(self, text: str, pos: int) -> Match | None:
        m = _KEYWORD.match(text, pos)
        if not m:
            return None
        keyword = m.group(1).upper()
        tokens = [Token(TokenType.KEYWORD, keyword)]
        if keyword == "REM":
            comment = text[m.end() :]
            if comment:
                tokens.append(Token(TokenType.COMMENT, comment))
            return tokens, len(text)
        return tokens, m.end()

    def match_quote(self, text: str, pos: int) -> Match | None:
        m = _QUOTE.match(text, pos)
        if not m:
            return None
        return [Token(TokenType.STRING, m.group(1))], m.end()

    def match_logic(self, text: str, pos: int) -> Match | None:
        m = _LOGIC.match(text, pos)
        if not m:
            return None
        return [Token(TokenType.LOGIC, m.group(1).upper())], m.end()

    def match_function(self, text: str, pos: int) -> Match | None:
        if self._function is None:
            return None
        m = self._function.match(text, pos)
        if not m:
            return None
        return [Token(TokenType.FUNCTION, m.group(1).upper())], m.end()

    def match_constant(self, text: str, pos: int) -> Match | None:
        m = _CONSTANT.match(text, pos)
        if not m:
            return None
        return [Token(TokenType.CONSTANT, m.group(1).upper())], m.end()

    def match_variable(self, text: str, pos: int) -> Match | None:
        m = _VARIABLE.match(text, pos)
        if not m:
            return None
        return [Token(TokenType.VARIABLE, m.group(1).upper())], m.end()

    def match_number(self, text: str, pos: int) -> Match | None:
        m = _NUMBER.match(text, pos)
        if not m:
            return None
        return [Token(TokenType.NUMBER, _number(m.group(1)))], m.end()

    def match_operator(self, text: str, pos: int) -> Match | None:
        m = _OPERATOR.match(text, pos)
        if not m:
            return None
        return [Token(TokenType.OPERATOR, m.group(1))], m.end()

    def match_line_modifier(self, text: str, pos: int) -> Match | None:
        m = _LINEMOD.match(text, pos)
        if not m:
            return None
        return [Token(TokenType.LINEMOD, m.group(1))], m.end()


def tokenize_line(line: str, functions: Iterable[str] | None = None) -> list[Token]:
    """Tokenizes one line and returns its tokens as a plain list."""
    return Lexer(functions).tokenize(line).tokens


__all__ = ["EOF", "Lexer", "Token", "TokenStream", "TokenType", "tokenize_line"]
