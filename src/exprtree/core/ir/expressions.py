"""
Expression types for the exprtree IR.

The tree is a closed set of two node types sharing one contract:

- ``render()`` produces the fully-parenthesized text of the subtree
- ``reduce()`` computes its integer value

Supports:
- Integer literals: 0, 42, 007
- Arithmetic: +, -, *, / (integer division truncating toward zero)
"""

from __future__ import annotations

from collections.abc import Iterator
from enum import StrEnum

from pydantic import BaseModel, ConfigDict, Field

from exprtree.core.errors import DivideByZeroError, IntegerOverflowError

# ---------------------------------------------------------------------------
# Operators
# ---------------------------------------------------------------------------


class BinaryOp(StrEnum):
    """Binary operators; values are the rendered symbols."""

    ADD = "+"
    SUB = "-"
    MUL = "*"
    DIV = "/"


# ---------------------------------------------------------------------------
# Integer helpers
# ---------------------------------------------------------------------------


def int_bounds(bits: int) -> tuple[int, int]:
    """Inclusive (min, max) of a two's complement integer of ``bits`` width."""
    return -(1 << (bits - 1)), (1 << (bits - 1)) - 1


def check_range(value: int, bits: int | None) -> int:
    """Return ``value`` unchanged, or raise if it does not fit in ``bits``."""
    if bits is None:
        return value
    lo, hi = int_bounds(bits)
    if not lo <= value <= hi:
        raise IntegerOverflowError(value, bits)
    return value


def truncating_div(left: int, right: int) -> int:
    """Integer division rounding toward zero (``//`` rounds toward -inf)."""
    if right == 0:
        raise DivideByZeroError(left)
    quotient = abs(left) // abs(right)
    if (left < 0) != (right < 0):
        return -quotient
    return quotient


# ---------------------------------------------------------------------------
# AST node types
# ---------------------------------------------------------------------------


class Literal(BaseModel):
    """An integer literal."""

    value: int = Field(strict=True, description="The literal value")

    model_config = ConfigDict(frozen=True)

    def render(self) -> str:
        return str(self.value)

    def reduce(self, bits: int | None = None) -> int:
        return check_range(self.value, bits)

    def depth(self) -> int:
        return 1

    def node_count(self) -> int:
        return 1

    def __str__(self) -> str:
        return self.render()


class BinaryExpr(BaseModel):
    """Binary operation: left op right.

    Tree walks use an explicit stack, so long operator chains are not
    bounded by the interpreter's recursion limit.
    """

    op: BinaryOp
    left: Expr
    right: Expr

    model_config = ConfigDict(frozen=True)

    def render(self) -> str:
        parts: list[str] = []
        for node in iter_postorder(self):
            if isinstance(node, BinaryExpr):
                right = parts.pop()
                left = parts.pop()
                parts.append(f"({left} {node.op.value} {right})")
            else:
                parts.append(node.render())
        return parts[0]

    def reduce(self, bits: int | None = None) -> int:
        """
        Reduce both children, then apply the operator.

        Args:
            bits: Optional signed integer width; every intermediate result
                must fit or IntegerOverflowError is raised.

        Raises:
            DivideByZeroError: If the right operand of '/' reduces to 0.
        """
        values: list[int] = []
        for node in iter_postorder(self):
            if isinstance(node, BinaryExpr):
                right = values.pop()
                left = values.pop()
                values.append(check_range(_apply(node.op, left, right), bits))
            else:
                values.append(node.reduce(bits))
        return values[0]

    def depth(self) -> int:
        depths: list[int] = []
        for node in iter_postorder(self):
            if isinstance(node, BinaryExpr):
                right = depths.pop()
                left = depths.pop()
                depths.append(1 + max(left, right))
            else:
                depths.append(1)
        return depths[0]

    def node_count(self) -> int:
        return sum(1 for _ in iter_postorder(self))

    def __str__(self) -> str:
        return self.render()


# ---------------------------------------------------------------------------
# Union type
# ---------------------------------------------------------------------------

Expr = Literal | BinaryExpr

# Rebuild models for recursive forward references
BinaryExpr.model_rebuild()


# ---------------------------------------------------------------------------
# Tree walking
# ---------------------------------------------------------------------------


def _apply(op: BinaryOp, left: int, right: int) -> int:
    if op == BinaryOp.ADD:
        return left + right
    if op == BinaryOp.SUB:
        return left - right
    if op == BinaryOp.MUL:
        return left * right
    return truncating_div(left, right)


def iter_postorder(expr: Expr) -> Iterator[Expr]:
    """Yield every node children-first: left subtree, right subtree, node."""
    stack: list[tuple[Expr, bool]] = [(expr, False)]
    while stack:
        node, expanded = stack.pop()
        if isinstance(node, BinaryExpr) and not expanded:
            stack.append((node, True))
            stack.append((node.right, False))
            stack.append((node.left, False))
        else:
            yield node


class FlatNode(BaseModel):
    """One row of a flattened tree; children are indices of earlier rows."""

    value: int | None = None
    op: BinaryOp | None = None
    left: int | None = None
    right: int | None = None

    model_config = ConfigDict(frozen=True)


def flatten(expr: Expr) -> list[FlatNode]:
    """
    Flatten a tree into post-order rows.

    Every child row precedes its parent, so the root is the last row. The
    result has no nesting, so it serializes at any tree depth.
    """
    rows: list[FlatNode] = []
    pending: list[int] = []
    for node in iter_postorder(expr):
        if isinstance(node, BinaryExpr):
            right = pending.pop()
            left = pending.pop()
            rows.append(FlatNode(op=node.op, left=left, right=right))
        else:
            rows.append(FlatNode(value=node.value))
        pending.append(len(rows) - 1)
    return rows
