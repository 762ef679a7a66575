"""
Error types for exprtree tokenizing, parsing, and reduction.
"""

from __future__ import annotations

from dataclasses import dataclass


class ExprTreeError(Exception):
    """Base exception for all exprtree errors."""

    kind = "error"

    def __init__(self, message: str, context: ErrorContext | None = None):
        self.message = message
        self.context = context
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        """Format error message with context if available."""
        if self.context:
            return f"{self.message}\n{self.context.format()}"
        return self.message


class LexError(ExprTreeError):
    """
    Raised when the tokenizer meets a character outside the alphabet.

    Examples:
    - Letters or identifiers
    - Operators such as '&' or '%'
    - A decimal point
    """

    kind = "invalid character"

    def __init__(self, char: str, pos: int, context: ErrorContext | None = None):
        self.char = char
        self.pos = pos
        super().__init__(f"Invalid character {char!r} at position {pos}", context)


class ParseError(ExprTreeError):
    """Raised when a token sequence does not match the grammar."""

    kind = "syntax error"


class UnexpectedTokenError(ParseError):
    """Raised when the parser expects one token kind and finds another."""

    kind = "unexpected token"

    def __init__(
        self,
        expected: str,
        actual: str,
        pos: int,
        context: ErrorContext | None = None,
    ):
        self.expected = expected
        self.actual = actual
        self.pos = pos
        super().__init__(
            f"Unexpected token: expected {expected}, got {actual} at position {pos}",
            context,
        )


class UnexpectedTokenInFactorError(ParseError):
    """Raised when a factor position holds neither a number nor '('."""

    kind = "unexpected token in factor"

    def __init__(self, actual: str, pos: int, context: ErrorContext | None = None):
        self.actual = actual
        self.pos = pos
        super().__init__(
            f"Unexpected token in factor: got {actual} at position {pos}",
            context,
        )


class NestingTooDeepError(ParseError):
    """Raised when parentheses nest deeper than the parser can descend."""

    kind = "expression too deeply nested"

    def __init__(self, pos: int, context: ErrorContext | None = None):
        self.pos = pos
        super().__init__(f"Expression too deeply nested at position {pos}", context)


class EvaluationError(ExprTreeError):
    """Raised when a well-formed tree cannot be reduced."""

    kind = "evaluation error"


class DivideByZeroError(EvaluationError):
    """Raised when the right operand of a division reduces to zero."""

    kind = "divide by zero"

    def __init__(self, dividend: int, context: ErrorContext | None = None):
        self.dividend = dividend
        super().__init__(f"Division by zero: {dividend} / 0", context)


class IntegerOverflowError(ExprTreeError):
    """Raised when a literal or result leaves the configured integer width."""

    kind = "integer overflow"

    def __init__(self, value: int, bits: int, context: ErrorContext | None = None):
        self.value = value
        self.bits = bits
        super().__init__(f"Value {value} does not fit in a {bits}-bit signed integer", context)


class ConfigError(ExprTreeError):
    """Raised when a configuration file cannot be read or is invalid."""

    kind = "configuration error"


@dataclass
class ErrorContext:
    """
    Context information for an error: the source text and failing offset.

    Attributes:
        source: The full expression text
        pos: Character offset (0-indexed) of the failure
    """

    source: str
    pos: int

    @property
    def line(self) -> int:
        """1-indexed line containing ``pos``."""
        return self.source.count("\n", 0, self.pos) + 1

    @property
    def column(self) -> int:
        """1-indexed column of ``pos`` within its line."""
        line_start = self.source.rfind("\n", 0, self.pos) + 1
        return self.pos - line_start + 1

    def format(self) -> str:
        """
        Format the source line with a caret under the failing column.

        Returns:
            Two lines like "  1 + & 2" and "      ^"
        """
        line_start = self.source.rfind("\n", 0, self.pos) + 1
        line_end = self.source.find("\n", self.pos)
        if line_end == -1:
            line_end = len(self.source)
        text = self.source[line_start:line_end]
        prefix = f"{self.line:4d} | "
        marker = " " * (len(prefix) + self.column - 1) + "^"
        return f"{prefix}{text}\n{marker}"


def attach_context(error: ExprTreeError, source: str) -> ExprTreeError:
    """
    Return ``error`` with an ErrorContext for ``source`` when it has a position.

    Errors without a ``pos`` attribute (for example DivideByZeroError) are
    returned unchanged.
    """
    pos = getattr(error, "pos", None)
    if pos is None or error.context is not None:
        return error
    error.context = ErrorContext(source=source, pos=pos)
    error.args = (error._format_message(),)
    return error
