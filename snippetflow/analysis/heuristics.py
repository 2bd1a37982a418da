"""
Heuristic detectors over the statement stream: quality issues, code smells, algorithmic
and design patterns, performance bottlenecks, security smells, flow insights.

Each detector is independent and pattern-based; results are grouped into reports.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Sequence

from snippetflow.analysis.data_model import (
    AnalysisSettings,
    Bottleneck,
    EntryPoint,
    ExitPoint,
    Finding,
    FlowInsights,
    OptimizationSuggestion,
    PatternFinding,
    PerformanceReport,
    QualityReport,
    SecurityReport,
)
from snippetflow.classify.statement import (
    BRANCH_KINDS,
    KIND_CALL,
    KIND_FOR,
    KIND_FUNCTION,
    KIND_RETURN,
    Statement,
)

_INTEGER = re.compile(r"\b(\d+)\b")
_EVAL = re.compile(r"eval\(", re.IGNORECASE)
_INNER_HTML = re.compile(r"innerhtml", re.IGNORECASE)

PATH_COMPLEXITY_CAP = 10

PATTERN_NESTED_LOOPS = "nested_loops"
PATTERN_RECURSION = "recursion"
PATTERN_LONG_PARAMETER_LIST = "long_parameter_list"
PATTERN_FACTORY = "factory_pattern"
PATTERN_OBSERVER = "observer_pattern"


@dataclass(frozen=True)
class FunctionSpan:
    name: str
    start_line: int
    length: int


# --- Quality ---------------------------------------------------------------


def function_spans(statements: Sequence[Statement], total_lines: int) -> list[FunctionSpan]:
    """Each function runs to the next function definition, or to the end of input."""
    spans: list[FunctionSpan] = []
    current: Statement | None = None
    for s in statements:
        if s.kind != KIND_FUNCTION:
            continue
        if current is not None:
            spans.append(
                FunctionSpan(current.name or "", current.line_number, s.line_number - current.line_number)
            )
        current = s
    if current is not None:
        spans.append(
            FunctionSpan(current.name or "", current.line_number, total_lines - current.line_number)
        )
    return spans


def find_magic_numbers(
    statements: Sequence[Statement],
    exemptions: Sequence[int] = (100, 1000),
) -> list[tuple[int, int]]:
    """(value, line_number) for every integer literal > 1 that is not exempt."""
    found: list[tuple[int, int]] = []
    exempt = set(exemptions)
    for s in statements:
        for token in _INTEGER.findall(s.raw_text):
            value = int(token)
            if value > 1 and value not in exempt:
                found.append((value, s.line_number))
    return found


def overall_rating(issue_count: int) -> str:
    if issue_count == 0:
        return "excellent"
    if issue_count <= 2:
        return "good"
    if issue_count <= 5:
        return "fair"
    return "needs_improvement"


def assess_quality(
    statements: Sequence[Statement],
    total_lines: int,
    settings: AnalysisSettings | None = None,
) -> QualityReport:
    """Long functions and deep nesting are issues; magic numbers are suggestions."""
    settings = settings or AnalysisSettings()
    issues: list[Finding] = []
    suggestions: list[Finding] = []

    for span in function_spans(statements, total_lines):
        if span.length > settings.long_function_lines:
            issues.append(
                Finding(
                    kind="long_function",
                    message=(
                        f"Function '{span.name}' is {span.length} lines long. "
                        "Consider breaking it down."
                    ),
                    severity="warning",
                    line_number=span.start_line,
                )
            )

    deep = [s for s in statements if s.indent_depth > settings.deep_nesting_depth]
    if deep:
        issues.append(
            Finding(
                kind="deep_nesting",
                message="Deep nesting detected. Consider refactoring for better readability.",
                severity="warning",
                line_number=deep[0].line_number,
                count=len(deep),
            )
        )

    for value, line_number in find_magic_numbers(statements, settings.magic_number_exemptions):
        suggestions.append(
            Finding(
                kind="magic_number",
                message=f"Consider replacing magic number '{value}' with a named constant",
                severity="suggestion",
                line_number=line_number,
                value=value,
            )
        )

    return QualityReport(
        issues=tuple(issues),
        suggestions=tuple(suggestions),
        overall_rating=overall_rating(len(issues)),  # type: ignore[arg-type]
    )


# --- Patterns --------------------------------------------------------------


def find_recursive_functions(statements: Sequence[Statement]) -> tuple[str, ...]:
    """
    Defined function names that are also the target of some call statement in the
    same snippet. Calls are not restricted to the function's own body.
    """
    defined: list[str] = []
    for s in statements:
        if s.kind == KIND_FUNCTION and s.name and s.name not in defined:
            defined.append(s.name)
    called = {s.name for s in statements if s.kind == KIND_CALL and s.name}
    return tuple(name for name in defined if name in called)


def has_nested_loops(statements: Sequence[Statement]) -> bool:
    """A for-loop followed anywhere later by a strictly deeper for-loop."""
    for i, s in enumerate(statements):
        if s.kind != KIND_FOR:
            continue
        if any(t.kind == KIND_FOR and t.indent_depth > s.indent_depth for t in statements[i + 1 :]):
            return True
    return False


def identify_design_patterns(statements: Sequence[Statement]) -> list[PatternFinding]:
    names = [s.name.lower() for s in statements if s.kind == KIND_FUNCTION and s.name]
    patterns: list[PatternFinding] = []
    if any("create" in n or "factory" in n for n in names):
        patterns.append(
            PatternFinding(
                kind=PATTERN_FACTORY,
                category="design",
                description="Factory pattern detected - functions that create objects",
                confidence=0.6,
            )
        )
    if any("notify" in n or "observer" in n for n in names):
        patterns.append(
            PatternFinding(
                kind=PATTERN_OBSERVER,
                category="design",
                description="Observer pattern detected - notification mechanism found",
                confidence=0.7,
            )
        )
    return patterns


def identify_code_smells(
    statements: Sequence[Statement],
    settings: AnalysisSettings | None = None,
) -> list[PatternFinding]:
    settings = settings or AnalysisSettings()
    smells: list[PatternFinding] = []
    for s in statements:
        if s.kind != KIND_FUNCTION:
            continue
        commas = s.raw_text.count(",")
        if commas > settings.max_parameter_commas:
            smells.append(
                PatternFinding(
                    kind=PATTERN_LONG_PARAMETER_LIST,
                    category="smell",
                    description=f"Function has {commas + 1} parameters - consider using objects",
                    line_number=s.line_number,
                    severity="warning",
                )
            )
    return smells


def identify_algorithm_patterns(statements: Sequence[Statement]) -> list[PatternFinding]:
    patterns: list[PatternFinding] = []
    if has_nested_loops(statements):
        patterns.append(
            PatternFinding(
                kind=PATTERN_NESTED_LOOPS,
                category="algorithm",
                description="Nested loops detected - possible O(n²) complexity",
                complexity="quadratic",
            )
        )
    recursive = find_recursive_functions(statements)
    if recursive:
        patterns.append(
            PatternFinding(
                kind=PATTERN_RECURSION,
                category="algorithm",
                description="Recursive functions detected",
                functions=recursive,
            )
        )
    return patterns


def identify_patterns(
    statements: Sequence[Statement],
    settings: AnalysisSettings | None = None,
) -> tuple[PatternFinding, ...]:
    return tuple(
        identify_design_patterns(statements)
        + identify_code_smells(statements, settings)
        + identify_algorithm_patterns(statements)
    )


def has_pattern(patterns: Sequence[PatternFinding], kind: str) -> bool:
    return any(p.kind == kind for p in patterns)


# --- Performance -----------------------------------------------------------


def identify_bottlenecks(patterns: Sequence[PatternFinding]) -> tuple[Bottleneck, ...]:
    bottlenecks: list[Bottleneck] = []
    if has_pattern(patterns, PATTERN_NESTED_LOOPS):
        bottlenecks.append(
            Bottleneck(
                kind=PATTERN_NESTED_LOOPS,
                description="Nested loops may cause performance issues with large datasets",
                impact="high",
            )
        )
    if has_pattern(patterns, PATTERN_RECURSION):
        bottlenecks.append(
            Bottleneck(
                kind=PATTERN_RECURSION,
                description="Recursive functions may cause stack overflow with large inputs",
                impact="medium",
            )
        )
    return tuple(bottlenecks)


def optimization_suggestions(
    max_loop_depth: int,
    patterns: Sequence[PatternFinding],
) -> tuple[OptimizationSuggestion, ...]:
    suggestions: list[OptimizationSuggestion] = []
    if max_loop_depth >= 2:
        suggestions.append(
            OptimizationSuggestion(
                kind="algorithm_optimization",
                message="Consider using more efficient algorithms to reduce time complexity",
                priority="high",
            )
        )
    if has_pattern(patterns, PATTERN_RECURSION):
        suggestions.append(
            OptimizationSuggestion(
                kind="memoization",
                message="Consider adding memoization to recursive functions",
                priority="medium",
            )
        )
    return tuple(suggestions)


def analyze_performance(
    time_complexity: str,
    space_complexity: str,
    max_loop_depth: int,
    patterns: Sequence[PatternFinding],
) -> PerformanceReport:
    return PerformanceReport(
        time_complexity=time_complexity,
        space_complexity=space_complexity,
        bottlenecks=identify_bottlenecks(patterns),
        optimization_suggestions=optimization_suggestions(max_loop_depth, patterns),
    )


# --- Security --------------------------------------------------------------


def risk_level(issue_count: int) -> str:
    if issue_count == 0:
        return "low"
    if issue_count <= 2:
        return "medium"
    return "high"


def analyze_security(statements: Sequence[Statement]) -> SecurityReport:
    """Dynamic code evaluation is high severity; raw HTML assignment is medium."""
    issues: list[Finding] = []
    for s in statements:
        if _EVAL.search(s.raw_text):
            issues.append(
                Finding(
                    kind="eval_usage",
                    message="Use of eval() detected - potential security risk",
                    severity="high",
                    line_number=s.line_number,
                )
            )
        if _INNER_HTML.search(s.raw_text):
            issues.append(
                Finding(
                    kind="innerHTML_usage",
                    message="Use of innerHTML - potential XSS vulnerability",
                    severity="medium",
                    line_number=s.line_number,
                )
            )
    return SecurityReport(issues=tuple(issues), risk_level=risk_level(len(issues)))  # type: ignore[arg-type]


# --- Flow insights ---------------------------------------------------------


def generate_flow_insights(statements: Sequence[Statement]) -> FlowInsights:
    branches = sum(1 for s in statements if s.kind in BRANCH_KINDS)
    return FlowInsights(
        entry_points=tuple(
            EntryPoint(s.name or "", s.line_number) for s in statements if s.kind == KIND_FUNCTION
        ),
        exit_points=tuple(
            ExitPoint(s.line_number, s.raw_text) for s in statements if s.kind == KIND_RETURN
        ),
        branching_factor=branches,
        path_complexity=2 ** min(branches, PATH_COMPLEXITY_CAP),
    )
