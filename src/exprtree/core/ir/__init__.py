"""
exprtree Intermediate Representation (IR) types.

All types are re-exported from this package.
"""

from .expressions import (
    BinaryExpr,
    BinaryOp,
    Expr,
    FlatNode,
    Literal,
    check_range,
    flatten,
    int_bounds,
    iter_postorder,
    truncating_div,
)

__all__ = [
    "BinaryExpr",
    "BinaryOp",
    "Expr",
    "FlatNode",
    "Literal",
    "check_range",
    "flatten",
    "int_bounds",
    "iter_postorder",
    "truncating_div",
]
