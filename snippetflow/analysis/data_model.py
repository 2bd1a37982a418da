"""
Analysis data model: settings, metrics, findings, reports, execution steps, and the full result.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Literal

from snippetflow.classify.indentation import IndentationIssue
from snippetflow.classify.statement import Statement
from snippetflow.graph.graph import ControlFlowGraph

Severity = Literal["high", "medium", "low", "warning", "suggestion"]
RiskLevel = Literal["low", "medium", "high"]
QualityRating = Literal["excellent", "good", "fair", "needs_improvement"]
PatternCategory = Literal["design", "smell", "algorithm"]
StepCategory = Literal["memory", "definition", "control", "execution"]
MemoryAction = Literal["create", "update", "delete"]
FlowAction = Literal["declare", "modify"]

NOT_APPLICABLE = "N/A"


@dataclass(frozen=True)
class AnalysisSettings:
    """Thresholds for metrics and heuristics. Defaults reproduce the stock behavior."""

    long_function_lines: int = 50
    deep_nesting_depth: int = 8  # indent depth units, i.e. nesting level 4
    max_parameter_commas: int = 4
    magic_number_exemptions: tuple[int, ...] = (100, 1000)
    complexity_threshold: int = 10
    nesting_threshold: int = 4
    variable_count_threshold: int = 10
    label_max_length: int = 25
    cache_max_entries: int | None = None  # None = unbounded


@dataclass(frozen=True)
class Metrics:
    """Scalar measures over one snippet."""

    total_statements: int
    total_lines: int
    lines_of_code: int
    comment_lines: int
    code_to_comment_ratio: float
    cyclomatic_complexity: int
    max_nesting_depth: int
    max_loop_depth: int
    variable_count: int
    function_count: int
    node_count: int
    edge_count: int
    quality_score: int
    time_complexity: str
    space_complexity: str


@dataclass(frozen=True)
class Finding:
    """A quality issue, quality suggestion, or security issue."""

    kind: str
    message: str
    severity: Severity | None = None
    line_number: int | None = None
    count: int | None = None
    value: int | None = None


@dataclass(frozen=True)
class PatternFinding:
    """A detected design pattern, code smell, or algorithmic pattern."""

    kind: str
    category: PatternCategory
    description: str
    line_number: int | None = None
    severity: Severity | None = None
    complexity: str | None = None  # e.g. "quadratic" for nested loops
    functions: tuple[str, ...] = ()
    confidence: float | None = None


@dataclass(frozen=True)
class Bottleneck:
    kind: str
    description: str
    impact: Literal["high", "medium", "low"]


@dataclass(frozen=True)
class OptimizationSuggestion:
    kind: str
    message: str
    priority: Literal["high", "medium", "low"]


@dataclass(frozen=True)
class QualityReport:
    issues: tuple[Finding, ...]
    suggestions: tuple[Finding, ...]
    overall_rating: QualityRating


@dataclass(frozen=True)
class PerformanceReport:
    time_complexity: str
    space_complexity: str
    bottlenecks: tuple[Bottleneck, ...]
    optimization_suggestions: tuple[OptimizationSuggestion, ...]


@dataclass(frozen=True)
class SecurityReport:
    issues: tuple[Finding, ...]
    risk_level: RiskLevel


@dataclass(frozen=True)
class EntryPoint:
    name: str
    line_number: int


@dataclass(frozen=True)
class ExitPoint:
    line_number: int
    code: str


@dataclass(frozen=True)
class FlowInsights:
    """Entry/exit points and branching summary of the snippet."""

    entry_points: tuple[EntryPoint, ...]
    exit_points: tuple[ExitPoint, ...]
    branching_factor: int
    path_complexity: int


@dataclass(frozen=True)
class MemoryEvent:
    action: MemoryAction
    variable: str
    kind: str  # "variable", "assignment", "function", "loop_variable"


@dataclass(frozen=True)
class ExecutionStep:
    """Narrated rendering of one statement."""

    step_number: int
    kind: str
    description: str
    explanation: str
    code: str
    line_number: int
    indent_depth: int
    category: StepCategory
    complexity_weight: int
    memory_events: tuple[MemoryEvent, ...] = ()


@dataclass(frozen=True)
class VariableFlowEvent:
    line_number: int
    kind: str
    action: FlowAction


@dataclass(frozen=True)
class AnalysisResult:
    """Everything one analysis call produces. Owned by the caller; shared through the cache."""

    profile_id: str
    statements: tuple[Statement, ...]
    graph: ControlFlowGraph
    metrics: Metrics
    quality: QualityReport
    patterns: tuple[PatternFinding, ...]
    performance: PerformanceReport
    security: SecurityReport
    flow_insights: FlowInsights
    execution_steps: tuple[ExecutionStep, ...]
    variable_flow: dict[str, tuple[VariableFlowEvent, ...]] = field(default_factory=dict)
    indentation_issues: tuple[IndentationIssue, ...] = ()

    @property
    def statement_count(self) -> int:
        return len(self.statements)
