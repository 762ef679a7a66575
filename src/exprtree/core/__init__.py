"""
exprtree core: tokenizer, parser, IR nodes, configuration and driver.

Usage:
    from exprtree.core import parse_expr

    expr = parse_expr("3 + 5 * (2 - 8)")
    expr.render()   # "(3 + (5 * (2 - 8)))"
    expr.reduce()   # -27
"""

from exprtree.core.driver import Evaluation, drive, evaluate_source
from exprtree.core.parser import Parser, parse_expr
from exprtree.core.tokenizer import Token, Tokenizer, TokenKind, tokenize

__all__ = [
    "Evaluation",
    "Parser",
    "Token",
    "TokenKind",
    "Tokenizer",
    "drive",
    "evaluate_source",
    "parse_expr",
    "tokenize",
]
