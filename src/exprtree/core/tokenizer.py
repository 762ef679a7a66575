"""
Tokenizer for exprtree arithmetic expressions.

Converts an expression string into a lazy stream of typed tokens.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Iterator
from enum import StrEnum, auto

from exprtree.core.errors import ErrorContext, LexError

logger = logging.getLogger(__name__)


class TokenKind(StrEnum):
    """Token types for arithmetic expressions."""

    # Literals
    NUMBER = auto()

    # Operators
    PLUS = auto()
    MINUS = auto()
    STAR = auto()
    SLASH = auto()

    # Punctuation
    LPAREN = auto()
    RPAREN = auto()

    # End of input
    END = auto()


class Token:
    """A single token from the expression tokenizer."""

    __slots__ = ("kind", "value", "pos")

    def __init__(self, kind: TokenKind, value: str, pos: int) -> None:
        object.__setattr__(self, "kind", kind)
        object.__setattr__(self, "value", value)
        object.__setattr__(self, "pos", pos)

    def __setattr__(self, name: str, value: object) -> None:
        raise AttributeError(f"Token is immutable; cannot set {name!r}")

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Token):
            return NotImplemented
        return (self.kind, self.value, self.pos) == (other.kind, other.value, other.pos)

    def __hash__(self) -> int:
        return hash((self.kind, self.value, self.pos))

    def __repr__(self) -> str:
        return f"Token({self.kind}, {self.value!r}, pos={self.pos})"


_WHITESPACE = " \t\n\r\f\v"

# ASCII digits only; str.isdigit() also accepts superscripts and other scripts
_NUMBER_RE = re.compile(r"[0-9]+")

_SINGLE_CHAR: dict[str, TokenKind] = {
    "+": TokenKind.PLUS,
    "-": TokenKind.MINUS,
    "*": TokenKind.STAR,
    "/": TokenKind.SLASH,
    "(": TokenKind.LPAREN,
    ")": TokenKind.RPAREN,
}


class Tokenizer:
    """
    Lazy tokenizer over a single expression string.

    Each call to :meth:`next_token` scans exactly one token. Once the END
    token has been produced, further calls keep returning END.
    """

    def __init__(self, source: str) -> None:
        self.source = source
        self.pos = 0
        self._end: Token | None = None

    def next_token(self) -> Token:
        """Scan and return the next token."""
        if self._end is not None:
            return self._end

        source = self.source
        n = len(source)
        i = self.pos

        while i < n and source[i] in _WHITESPACE:
            i += 1
        self.pos = i

        if i >= n:
            self._end = Token(TokenKind.END, "", n)
            logger.debug(f"Token END at {n}")
            return self._end

        c = source[i]

        if "0" <= c <= "9":
            m = _NUMBER_RE.match(source, i)
            assert m is not None
            tok = Token(TokenKind.NUMBER, m.group(0), i)
            self.pos = m.end()
        elif c in _SINGLE_CHAR:
            tok = Token(_SINGLE_CHAR[c], c, i)
            self.pos = i + 1
        else:
            raise LexError(c, i, ErrorContext(source=source, pos=i))

        logger.debug(f"Token {tok.kind} {tok.value!r} at {tok.pos}")
        return tok

    def __iter__(self) -> Iterator[Token]:
        """Yield tokens up to and including the first END."""
        while True:
            tok = self.next_token()
            yield tok
            if tok.kind == TokenKind.END:
                return


def tokenize(source: str) -> list[Token]:
    """Tokenize an expression string into a list of tokens ending with END."""
    return list(Tokenizer(source))
