"""
Pipeline driver: tokenize, parse, render, reduce.

``evaluate_source`` runs the pipeline and raises on the first failure.
``drive`` is the reporting layer: it is the one place that catches
ExprTreeError, writes a message to the error stream, and turns the
outcome into an exit status.
"""

from __future__ import annotations

import logging
import sys
from typing import TextIO

from pydantic import BaseModel, ConfigDict

from exprtree.core.config import EngineConfig
from exprtree.core.errors import ExprTreeError
from exprtree.core.ir.expressions import Expr, FlatNode, flatten
from exprtree.core.parser import Parser
from exprtree.core.tokenizer import Tokenizer

logger = logging.getLogger(__name__)

OUTPUT_FORMATS = ("text", "json")


class Evaluation(BaseModel):
    """Result of a successful pipeline run."""

    source: str
    rendered: str
    value: int
    expr: Expr

    model_config = ConfigDict(frozen=True)

    def report(self) -> EvaluationReport:
        """Serializable view of this evaluation with the tree flattened."""
        nodes = flatten(self.expr)
        return EvaluationReport(
            source=self.source,
            rendered=self.rendered,
            value=self.value,
            root=len(nodes) - 1,
            nodes=nodes,
        )


class EvaluationReport(BaseModel):
    """
    JSON output of a pipeline run.

    ``nodes`` lists the tree in post-order; each operator row names its
    children by index and ``root`` is the index of the top node.
    """

    source: str
    rendered: str
    value: int
    root: int
    nodes: list[FlatNode]

    model_config = ConfigDict(frozen=True)


def evaluate_source(source: str, config: EngineConfig | None = None) -> Evaluation:
    """
    Parse, render and reduce one expression.

    Args:
        source: Expression text.
        config: Engine settings; defaults when omitted.

    Returns:
        Evaluation holding the rendered tree and its value.

    Raises:
        ExprTreeError: Any tokenizer, parser or reduction failure.
    """
    config = config or EngineConfig()

    parser = Parser(
        Tokenizer(source),
        require_end=config.require_end,
        max_bits=config.max_bits,
    )
    expr = parser.parse()
    logger.debug(f"Parsed tree: {expr.node_count()} nodes, depth {expr.depth()}")

    rendered = expr.render()
    value = expr.reduce(config.max_bits)
    logger.info(f"{rendered} = {value}")

    return Evaluation(source=source, rendered=rendered, value=value, expr=expr)


def format_error(error: ExprTreeError) -> str:
    """Human-readable report naming the failure kind."""
    return f"Error: {error.kind}: {error}"


def drive(
    source: str,
    config: EngineConfig | None = None,
    *,
    output_format: str = "text",
    out: TextIO | None = None,
    err: TextIO | None = None,
) -> int:
    """
    Run the pipeline and report the outcome.

    On success writes the rendered tree followed by ``Result: <value>``
    (or the Evaluation as JSON) to ``out`` and returns 0. On failure
    writes the error report to ``err`` and returns 1; nothing is written
    to ``out``.
    """
    if output_format not in OUTPUT_FORMATS:
        raise ValueError(f"Unknown output format: {output_format!r}")

    if out is None:
        out = sys.stdout
    if err is None:
        err = sys.stderr

    try:
        evaluation = evaluate_source(source, config)
    except ExprTreeError as e:
        logger.debug(f"Pipeline failed for {source!r}: {e.kind}")
        print(format_error(e), file=err)
        return 1

    if output_format == "json":
        print(evaluation.report().model_dump_json(indent=2, exclude_none=True), file=out)
    else:
        print(evaluation.rendered, file=out)
        print(f"Result: {evaluation.value}", file=out)
    return 0
