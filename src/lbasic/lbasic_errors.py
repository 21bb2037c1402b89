"""
Error hierarchy for the lbasic front end.

Exception Hierarchy
-------------------
BasicError (a SyntaxError, base for all lbasic errors)
├── LexError - no pattern matched, or the line has no leading line number
└── ParseError - wrong token at a grammar position, empty expression,
    │            unterminated subscript, unknown keyword, nesting too deep
    └── TranslationError - malformed expression token slice

Error Message Format
--------------------
    line 10: error: Expected keyword THEN but got NUMBER 5

When the line number could not be read (a LexError on a line without one) the
prefix is dropped:

    error: Every line must start with a line number

Errors never carry partially-built statement nodes.
"""


class BasicError(SyntaxError):
    """
    Base exception for all lbasic lexing and parsing failures.

    Derives from the built-in SyntaxError so callers that already guard
    parsing with ``except SyntaxError`` keep working.

    Attributes:
        line_number: The program line the error belongs to, or None if unknown.
        message: The bare error description, without location prefix.
    """

    def __init__(self, line_number: int | None, message: str):
        self.line_number = line_number
        self.message = message
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        if self.line_number is None:
            return f"error: {self.message}"
        return f"line {self.line_number}: error: {self.message}"

    def __str__(self) -> str:
        return self._format_message()


class LexError(BasicError):
    """Raised when a source line cannot be tokenized."""


class ParseError(BasicError):
    """Raised when a token sequence violates the statement grammar."""


class TranslationError(ParseError):
    """Raised when an isolated expression token slice is malformed."""


__all__ = ["BasicError", "LexError", "ParseError", "TranslationError"]
