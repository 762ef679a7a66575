"""
exprtree - arithmetic expressions to abstract syntax trees.

Tokenizes an integer arithmetic expression, parses it into an AST, then
renders the tree fully parenthesized and reduces it to an integer.
"""

from __future__ import annotations

from ._version import get_version
from .core import ir
from .core.driver import Evaluation, drive, evaluate_source
from .core.errors import (
    DivideByZeroError,
    ExprTreeError,
    IntegerOverflowError,
    LexError,
    NestingTooDeepError,
    ParseError,
    UnexpectedTokenError,
    UnexpectedTokenInFactorError,
)
from .core.parser import parse_expr
from .core.tokenizer import tokenize

__version__ = get_version()

__all__ = [
    "__version__",
    "ir",
    "Evaluation",
    "drive",
    "evaluate_source",
    "parse_expr",
    "tokenize",
    "ExprTreeError",
    "LexError",
    "NestingTooDeepError",
    "ParseError",
    "UnexpectedTokenError",
    "UnexpectedTokenInFactorError",
    "DivideByZeroError",
    "IntegerOverflowError",
]
