"""
Recursive descent parser for exprtree arithmetic expressions.

Grammar (precedence low to high):
    expression  → term (("+" | "-") term)*
    term        → factor (("*" | "/") factor)*
    factor      → NUMBER | "(" expression ")"

Binary operators are left-associative: ``8 - 3 - 2`` parses as
``(8 - 3) - 2``.
"""

from __future__ import annotations

import logging

from exprtree.core.errors import (
    ErrorContext,
    ExprTreeError,
    IntegerOverflowError,
    NestingTooDeepError,
    UnexpectedTokenError,
    UnexpectedTokenInFactorError,
    attach_context,
)
from exprtree.core.ir.expressions import BinaryExpr, BinaryOp, Expr, Literal, check_range
from exprtree.core.tokenizer import Token, Tokenizer, TokenKind

logger = logging.getLogger(__name__)

_ADDITIVE: dict[TokenKind, BinaryOp] = {
    TokenKind.PLUS: BinaryOp.ADD,
    TokenKind.MINUS: BinaryOp.SUB,
}

_MULTIPLICATIVE: dict[TokenKind, BinaryOp] = {
    TokenKind.STAR: BinaryOp.MUL,
    TokenKind.SLASH: BinaryOp.DIV,
}


class Parser:
    """
    Recursive descent parser with one token of lookahead.

    The lookahead lives in ``current`` and is refilled from the tokenizer
    each time a token is consumed.
    """

    def __init__(
        self,
        tokenizer: Tokenizer,
        *,
        require_end: bool = True,
        max_bits: int | None = None,
    ) -> None:
        self.tokenizer = tokenizer
        self.require_end = require_end
        self.max_bits = max_bits
        self.current: Token = tokenizer.next_token()

    def consume(self, kind: TokenKind) -> Token:
        """Consume the lookahead if it has ``kind``, else raise."""
        tok = self.current
        if tok.kind != kind:
            raise UnexpectedTokenError(str(kind), str(tok.kind), tok.pos)
        self.current = self.tokenizer.next_token()
        return tok

    # -- Grammar rules --

    def parse(self) -> Expr:
        """Parse one full expression, optionally requiring END afterwards."""
        try:
            expr = self.parse_expression()
            if self.require_end:
                self.consume(TokenKind.END)
            elif self.current.kind != TokenKind.END:
                logger.debug(f"Ignoring trailing input from position {self.current.pos}")
        except ExprTreeError as e:
            attach_context(e, self.tokenizer.source)
            raise
        except RecursionError:
            # Each '(' descends expression -> term -> factor
            pos = self.current.pos
            raise NestingTooDeepError(
                pos, ErrorContext(source=self.tokenizer.source, pos=pos)
            ) from None
        return expr

    def parse_expression(self) -> Expr:
        """term (('+' | '-') term)*"""
        left = self.parse_term()
        while self.current.kind in _ADDITIVE:
            op = _ADDITIVE[self.current.kind]
            self.consume(self.current.kind)
            right = self.parse_term()
            left = BinaryExpr(op=op, left=left, right=right)
        return left

    def parse_term(self) -> Expr:
        """factor (('*' | '/') factor)*"""
        left = self.parse_factor()
        while self.current.kind in _MULTIPLICATIVE:
            op = _MULTIPLICATIVE[self.current.kind]
            self.consume(self.current.kind)
            right = self.parse_factor()
            left = BinaryExpr(op=op, left=left, right=right)
        return left

    def parse_factor(self) -> Expr:
        """NUMBER | '(' expression ')'"""
        tok = self.current

        if tok.kind == TokenKind.NUMBER:
            self.consume(TokenKind.NUMBER)
            return self._make_literal(tok)

        if tok.kind == TokenKind.LPAREN:
            self.consume(TokenKind.LPAREN)
            expr = self.parse_expression()
            self.consume(TokenKind.RPAREN)
            return expr

        raise UnexpectedTokenInFactorError(str(tok.kind), tok.pos)

    def _make_literal(self, tok: Token) -> Literal:
        value = int(tok.value)
        try:
            check_range(value, self.max_bits)
        except IntegerOverflowError as e:
            e.pos = tok.pos
            raise
        return Literal(value=value)


def parse_expr(
    source: str,
    *,
    require_end: bool = True,
    max_bits: int | None = None,
) -> Expr:
    """Parse an expression string into an AST.

    Args:
        source: Expression string (e.g., "3 + 5 * (2 - 8)")
        require_end: Reject tokens left over after the expression.
        max_bits: Reject literals that do not fit a signed integer of
            this width. ``None`` means unbounded.

    Returns:
        Parsed expression AST.

    Raises:
        LexError: If the source contains an invalid character.
        UnexpectedTokenError: If a required token is missing.
        UnexpectedTokenInFactorError: If a factor is neither a number nor '('.
        IntegerOverflowError: If a literal exceeds ``max_bits``.
        NestingTooDeepError: If parentheses nest beyond the recursion limit.
    """
    parser = Parser(Tokenizer(source), require_end=require_end, max_bits=max_bits)
    expr = parser.parse()
    logger.debug(f"Parsed {source!r} into {expr.node_count()} nodes, depth {expr.depth()}")
    return expr
