"""
Metrics: cyclomatic complexity, nesting, quality score, estimated time and space complexity.
"""

from __future__ import annotations

import re
from typing import Sequence

from snippetflow.analysis.data_model import NOT_APPLICABLE, AnalysisSettings, Metrics
from snippetflow.classify.statement import (
    BRANCH_KINDS,
    KIND_CONDITIONAL,
    KIND_FUNCTION,
    KIND_WHILE,
    LOOP_KINDS,
    ClassificationResult,
    Statement,
)
from snippetflow.graph.graph import ControlFlowGraph

_BOOLEAN_OPERATORS = re.compile(r"&&|\|\||\band\b|\bor\b")
_NESTING_KINDS = BRANCH_KINDS | {KIND_FUNCTION}
_SUPERSCRIPTS = {2: "²", 3: "³"}


def count_boolean_operators(condition: str | None) -> int:
    """Logical AND/OR tokens in a condition (&&, ||, and, or)."""
    if not condition:
        return 0
    return len(_BOOLEAN_OPERATORS.findall(condition))


def cyclomatic_complexity(statements: Sequence[Statement]) -> int:
    """1 + one per branching statement + one per extra boolean operator in a condition."""
    complexity = 1
    for s in statements:
        if s.kind in BRANCH_KINDS:
            complexity += 1
        if s.kind in (KIND_CONDITIONAL, KIND_WHILE):
            complexity += count_boolean_operators(s.condition)
    return complexity


def max_nesting_depth(statements: Sequence[Statement]) -> int:
    deepest = max(
        (s.indent_depth for s in statements if s.kind in _NESTING_KINDS),
        default=0,
    )
    return deepest // 2


def max_loop_depth(statements: Sequence[Statement]) -> int:
    """
    Deepest stack of enclosing loops. A loop stays open until a statement at or
    above its own depth; loops on separate branches are not distinguished.
    """
    open_loops: list[int] = []
    deepest = 0
    for s in statements:
        while open_loops and s.indent_depth <= open_loops[-1]:
            open_loops.pop()
        if s.kind in LOOP_KINDS:
            open_loops.append(s.indent_depth)
            deepest = max(deepest, len(open_loops))
    return deepest


def complexity_label(loop_depth: int) -> str:
    if loop_depth == 0:
        return "O(1)"
    if loop_depth == 1:
        return "O(n)"
    if loop_depth in _SUPERSCRIPTS:
        return f"O(n{_SUPERSCRIPTS[loop_depth]})"
    return f"O(n^{loop_depth})"


def estimate_time_complexity(statements: Sequence[Statement]) -> str:
    if not statements:
        return NOT_APPLICABLE
    return complexity_label(max_loop_depth(statements))


def estimate_space_complexity(
    variable_count: int,
    has_recursion: bool,
    threshold: int = 10,
) -> str:
    if has_recursion:
        return "O(n)"  # call stack
    if variable_count < threshold:
        return "O(1)"
    return "O(n)"


def distinct_variables(statements: Sequence[Statement]) -> set[str]:
    names: set[str] = set()
    for s in statements:
        names.update(s.referenced_variables)
    return names


def code_to_comment_ratio(code_lines: int, comment_lines: int) -> float:
    """Code lines per comment line; with no comments the ratio is the code line count."""
    if comment_lines > 0:
        return round(code_lines / comment_lines, 2)
    return float(code_lines)


def quality_score(
    complexity: int,
    nesting: int,
    comment_ratio: float,
    settings: AnalysisSettings | None = None,
) -> int:
    settings = settings or AnalysisSettings()
    score = 100
    if complexity > settings.complexity_threshold:
        score -= (complexity - settings.complexity_threshold) * 5
    if nesting > settings.nesting_threshold:
        score -= (nesting - settings.nesting_threshold) * 10
    if 3 < comment_ratio < 10:
        score += 10
    return max(0, min(100, score))


def compute_metrics(
    classification: ClassificationResult,
    graph: ControlFlowGraph,
    *,
    has_recursion: bool = False,
    settings: AnalysisSettings | None = None,
) -> Metrics:
    """
    Compute Metrics from the statement stream and its graph.
    has_recursion comes from the heuristic recursion detector and drives space complexity.
    """
    settings = settings or AnalysisSettings()
    statements = classification.statements
    loc = len(statements)
    cc = cyclomatic_complexity(statements)
    nesting = max_nesting_depth(statements)
    ratio = code_to_comment_ratio(loc, classification.comment_lines)
    variable_count = len(distinct_variables(statements))
    function_count = len({s.name for s in statements if s.kind == KIND_FUNCTION and s.name})

    if statements:
        space = estimate_space_complexity(
            variable_count, has_recursion, settings.variable_count_threshold
        )
    else:
        space = NOT_APPLICABLE

    return Metrics(
        total_statements=loc,
        total_lines=classification.total_lines,
        lines_of_code=loc,
        comment_lines=classification.comment_lines,
        code_to_comment_ratio=ratio,
        cyclomatic_complexity=cc,
        max_nesting_depth=nesting,
        max_loop_depth=max_loop_depth(statements),
        variable_count=variable_count,
        function_count=function_count,
        node_count=len(graph.nodes),
        edge_count=len(graph.edges),
        quality_score=quality_score(cc, nesting, ratio, settings),
        time_complexity=estimate_time_complexity(statements),
        space_complexity=space,
    )
