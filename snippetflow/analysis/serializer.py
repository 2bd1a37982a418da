"""
AnalysisResult serializer: JSON-serializable dict with deterministic ordering.
"""

from __future__ import annotations

from snippetflow.analysis.data_model import (
    AnalysisResult,
    Finding,
    Metrics,
    PatternFinding,
)
from snippetflow.classify.statement import Statement
from snippetflow.graph.graph import control_flow_graph_to_dict

SCHEMA_VERSION = "1.0"


def _statement_to_dict(s: Statement) -> dict:
    return {
        "kind": s.kind,
        "line_number": s.line_number,
        "indent_depth": s.indent_depth,
        "raw_text": s.raw_text,
        "name": s.name,
        "condition": s.condition,
        "loop_variable": s.loop_variable,
        "loop_header": s.loop_header,
        "arguments": list(s.arguments),
        "referenced_variables": list(s.referenced_variables),
    }


def _finding_to_dict(f: Finding) -> dict:
    return {
        "kind": f.kind,
        "message": f.message,
        "severity": f.severity,
        "line_number": f.line_number,
        "count": f.count,
        "value": f.value,
    }


def _pattern_to_dict(p: PatternFinding) -> dict:
    return {
        "kind": p.kind,
        "category": p.category,
        "description": p.description,
        "line_number": p.line_number,
        "severity": p.severity,
        "complexity": p.complexity,
        "functions": list(p.functions),
        "confidence": p.confidence,
    }


def _metrics_to_dict(m: Metrics) -> dict:
    return {
        "total_statements": m.total_statements,
        "total_lines": m.total_lines,
        "lines_of_code": m.lines_of_code,
        "comment_lines": m.comment_lines,
        "code_to_comment_ratio": m.code_to_comment_ratio,
        "cyclomatic_complexity": m.cyclomatic_complexity,
        "max_nesting_depth": m.max_nesting_depth,
        "max_loop_depth": m.max_loop_depth,
        "variable_count": m.variable_count,
        "function_count": m.function_count,
        "node_count": m.node_count,
        "edge_count": m.edge_count,
        "quality_score": m.quality_score,
        "time_complexity": m.time_complexity,
        "space_complexity": m.space_complexity,
    }


def analysis_result_to_dict(result: AnalysisResult) -> dict:
    """
    Return a JSON-serializable dict. Sequences keep source order; the variable-flow
    map is sorted by variable name. Same result -> same dict.
    """
    perf = result.performance
    insights = result.flow_insights
    return {
        "schema_version": SCHEMA_VERSION,
        "profile_id": result.profile_id,
        "statement_count": result.statement_count,
        "statements": [_statement_to_dict(s) for s in result.statements],
        "graph": control_flow_graph_to_dict(result.graph),
        "metrics": _metrics_to_dict(result.metrics),
        "quality": {
            "issues": [_finding_to_dict(f) for f in result.quality.issues],
            "suggestions": [_finding_to_dict(f) for f in result.quality.suggestions],
            "overall_rating": result.quality.overall_rating,
        },
        "patterns": [_pattern_to_dict(p) for p in result.patterns],
        "performance": {
            "time_complexity": perf.time_complexity,
            "space_complexity": perf.space_complexity,
            "bottlenecks": [
                {"kind": b.kind, "description": b.description, "impact": b.impact}
                for b in perf.bottlenecks
            ],
            "optimization_suggestions": [
                {"kind": o.kind, "message": o.message, "priority": o.priority}
                for o in perf.optimization_suggestions
            ],
        },
        "security": {
            "issues": [_finding_to_dict(f) for f in result.security.issues],
            "risk_level": result.security.risk_level,
        },
        "flow_insights": {
            "entry_points": [
                {"name": e.name, "line_number": e.line_number} for e in insights.entry_points
            ],
            "exit_points": [
                {"line_number": e.line_number, "code": e.code} for e in insights.exit_points
            ],
            "branching_factor": insights.branching_factor,
            "path_complexity": insights.path_complexity,
        },
        "execution_steps": [
            {
                "step_number": step.step_number,
                "kind": step.kind,
                "description": step.description,
                "explanation": step.explanation,
                "code": step.code,
                "line_number": step.line_number,
                "indent_depth": step.indent_depth,
                "category": step.category,
                "complexity_weight": step.complexity_weight,
                "memory_events": [
                    {"action": ev.action, "variable": ev.variable, "kind": ev.kind}
                    for ev in step.memory_events
                ],
            }
            for step in result.execution_steps
        ],
        "variable_flow": {
            variable: [
                {"line_number": ev.line_number, "kind": ev.kind, "action": ev.action}
                for ev in events
            ]
            for variable, events in sorted(result.variable_flow.items())
        },
        "indentation_issues": [
            {
                "line_number": issue.line_number,
                "issue_type": issue.issue_type,
                "message": issue.message,
            }
            for issue in result.indentation_issues
        ],
    }
