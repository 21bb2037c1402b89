"""
Language tables shared by the lbasic lexer, parser and expression translator.

Contents:
    KEYWORDS: The closed set of statement keywords recognised by the lexer.
    CONSTANTS: Named constants that lex as CONSTANT tokens.
    DEFAULT_FUNCTIONS: The built-in function registry (name -> arity) used when
        the caller does not supply its own.
    LOGIC_OPERATORS, OPERATORS: Symbol tables for the operator matchers.
    COMPARISON_OPS, ADDITIVE_OPS, MULTIPLICATIVE_OPS: Binary operator groups used
        by the expression translator, one per precedence level.
    OPENERS, CLOSERS: Grouping symbols tracked for expression bracket depth.
    MAX_IF_DEPTH: Default limit on nested IF statements per line.
    MAX_EXPR_DEPTH: Default limit on nested groups, subscripts, calls and unary
        minus within one expression.

All tables are immutable; nothing in this module changes after import.
"""

from types import MappingProxyType

KEYWORDS: frozenset[str] = frozenset(
    {
        "IF",
        "THEN",
        "ELSE",
        "FOR",
        "ON",
        "TO",
        "STEP",
        "GOTO",
        "GOSUB",
        "RETURN",
        "NEXT",
        "INPUT",
        "LET",
        "CLC",
        "CLT",
        "CLS",
        "END",
        "PRINT",
        "PLOT",
        "DRAW",
        "UNDRAW",
        "ARRAY",
        "DIM",
        "DATA",
        "READ",
        "REM",
        "PAUSE",
        "STOP",
    }
)

CONSTANTS: frozenset[str] = frozenset({"LEVEL", "PI"})

# Arity is informational only; the lexer uses the names for recognition.
DEFAULT_FUNCTIONS = MappingProxyType(
    {
        "ABS": 1,
        "ASC": 1,
        "ATN": 1,
        "CHR": 1,
        "COS": 1,
        "EXP": 1,
        "GETCHAR": 0,
        "GETCLICK": 0,
        "INT": 1,
        "LEFT": 2,
        "LEN": 1,
        "LOG": 1,
        "MID": 3,
        "RIGHT": 2,
        "RND": 1,
        "SGN": 1,
        "SIN": 1,
        "SQR": 1,
        "STR": 1,
        "TAN": 1,
        "VAL": 1,
    }
)

LOGIC_OPERATORS: tuple[str, ...] = ("AND", "OR")

# Two-character operators come first so they win over their prefixes.
OPERATORS: tuple[str, ...] = (
    "<>",
    ">=",
    "<=",
    ",",
    "+",
    "-",
    "*",
    "/",
    "%",
    "=",
    "<",
    ">",
    "(",
    ")",
    "[",
    "]",
)

LINE_MODIFIER = ";"

COMPARISON_OPS: tuple[str, ...] = ("=", "<>", "<", ">", "<=", ">=")
ADDITIVE_OPS: tuple[str, ...] = ("+", "-")
MULTIPLICATIVE_OPS: tuple[str, ...] = ("*", "/", "%")

OPENERS: frozenset[str] = frozenset({"(", "["})
CLOSERS: frozenset[str] = frozenset({")", "]"})

MAX_IF_DEPTH = 64
MAX_EXPR_DEPTH = 32


__all__ = [
    "ADDITIVE_OPS",
    "CLOSERS",
    "COMPARISON_OPS",
    "CONSTANTS",
    "DEFAULT_FUNCTIONS",
    "KEYWORDS",
    "LINE_MODIFIER",
    "LOGIC_OPERATORS",
    "MAX_EXPR_DEPTH",
    "MAX_IF_DEPTH",
    "MULTIPLICATIVE_OPS",
    "OPENERS",
    "OPERATORS",
]
