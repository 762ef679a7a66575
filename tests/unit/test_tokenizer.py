"""Tests for the expression tokenizer."""

from __future__ import annotations

import pytest

from exprtree.core.errors import LexError
from exprtree.core.tokenizer import Token, Tokenizer, TokenKind, tokenize


class TestTokenizer:
    """Tokenizer produces correct token sequences."""

    def test_integer(self) -> None:
        tokens = tokenize("42")
        assert tokens[0].kind == TokenKind.NUMBER
        assert tokens[0].value == "42"
        assert tokens[1].kind == TokenKind.END

    def test_leading_zeros_kept_in_text(self) -> None:
        tokens = tokenize("007")
        assert tokens[0].value == "007"

    def test_maximal_digit_run(self) -> None:
        tokens = tokenize("12345678901234567890")
        assert [t.kind for t in tokens] == [TokenKind.NUMBER, TokenKind.END]
        assert tokens[0].value == "12345678901234567890"

    def test_operators_and_parens(self) -> None:
        tokens = tokenize("+ - * / ( )")
        assert [t.kind for t in tokens] == [
            TokenKind.PLUS,
            TokenKind.MINUS,
            TokenKind.STAR,
            TokenKind.SLASH,
            TokenKind.LPAREN,
            TokenKind.RPAREN,
            TokenKind.END,
        ]

    def test_no_whitespace_needed(self) -> None:
        tokens = tokenize("3+5*(2-8)")
        assert [t.value for t in tokens] == ["3", "+", "5", "*", "(", "2", "-", "8", ")", ""]

    def test_positions(self) -> None:
        tokens = tokenize("  12 +\t3")
        assert [t.pos for t in tokens] == [2, 5, 7, 8]

    def test_whitespace_kinds_skipped(self) -> None:
        tokens = tokenize(" \t\n\r\f\v1")
        assert tokens[0] == Token(TokenKind.NUMBER, "1", 6)

    def test_empty_input(self) -> None:
        tokens = tokenize("")
        assert tokens == [Token(TokenKind.END, "", 0)]

    def test_whitespace_only(self) -> None:
        tokens = tokenize("   ")
        assert tokens == [Token(TokenKind.END, "", 3)]

    def test_invalid_character(self) -> None:
        with pytest.raises(LexError, match="'&'") as exc_info:
            tokenize("1 & 2")
        assert exc_info.value.char == "&"
        assert exc_info.value.pos == 2

    def test_invalid_character_has_caret(self) -> None:
        with pytest.raises(LexError) as exc_info:
            tokenize("1 & 2")
        assert "   1 | 1 & 2\n         ^" in str(exc_info.value)

    def test_decimal_point_rejected(self) -> None:
        with pytest.raises(LexError, match="'.'"):
            tokenize("1.5")

    def test_non_ascii_digit_rejected(self) -> None:
        with pytest.raises(LexError):
            tokenize("2²")

    def test_tokens_are_immutable(self) -> None:
        tok = tokenize("1")[0]
        with pytest.raises(AttributeError):
            tok.value = "2"  # type: ignore[misc]


class TestLazyTokenizer:
    """next_token() is lazy and has an idempotent END tail."""

    def test_lazy_scanning(self) -> None:
        tokenizer = Tokenizer("1 + &")
        assert tokenizer.next_token().kind == TokenKind.NUMBER
        assert tokenizer.next_token().kind == TokenKind.PLUS
        with pytest.raises(LexError):
            tokenizer.next_token()

    def test_end_is_idempotent(self) -> None:
        tokenizer = Tokenizer("7")
        assert tokenizer.next_token().kind == TokenKind.NUMBER
        first_end = tokenizer.next_token()
        assert first_end.kind == TokenKind.END
        for _ in range(5):
            assert tokenizer.next_token() == first_end
        assert tokenizer.pos == 1

    def test_iteration_stops_after_end(self) -> None:
        kinds = [t.kind for t in Tokenizer("(1)")]
        assert kinds == [TokenKind.LPAREN, TokenKind.NUMBER, TokenKind.RPAREN, TokenKind.END]

    def test_cursor_is_monotonic(self) -> None:
        tokenizer = Tokenizer("10 * 20")
        positions = []
        for _ in range(4):
            tokenizer.next_token()
            positions.append(tokenizer.pos)
        assert positions == sorted(positions)
