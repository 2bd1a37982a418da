"""Analysis: metrics, heuristics, narration, caching, and the CodeAnalyzer orchestrator."""

from snippetflow.analysis.analyzer import CodeAnalyzer, analyze_code
from snippetflow.analysis.cache import AnalysisCache, CacheStats, cache_key, rolling_hash
from snippetflow.analysis.data_model import (
    NOT_APPLICABLE,
    AnalysisResult,
    AnalysisSettings,
    Bottleneck,
    ExecutionStep,
    Finding,
    FlowInsights,
    MemoryEvent,
    Metrics,
    OptimizationSuggestion,
    PatternFinding,
    PerformanceReport,
    QualityReport,
    SecurityReport,
    VariableFlowEvent,
)
from snippetflow.analysis.heuristics import (
    analyze_performance,
    analyze_security,
    assess_quality,
    find_recursive_functions,
    generate_flow_insights,
    identify_patterns,
)
from snippetflow.analysis.metrics import compute_metrics
from snippetflow.analysis.narrator import generate_execution_steps, track_variable_flow
from snippetflow.analysis.serializer import SCHEMA_VERSION, analysis_result_to_dict
from snippetflow.analysis.settings_loader import default_settings, load_settings

__all__ = [
    "NOT_APPLICABLE",
    "SCHEMA_VERSION",
    "AnalysisCache",
    "AnalysisResult",
    "AnalysisSettings",
    "Bottleneck",
    "CacheStats",
    "CodeAnalyzer",
    "ExecutionStep",
    "Finding",
    "FlowInsights",
    "MemoryEvent",
    "Metrics",
    "OptimizationSuggestion",
    "PatternFinding",
    "PerformanceReport",
    "QualityReport",
    "SecurityReport",
    "VariableFlowEvent",
    "analysis_result_to_dict",
    "analyze_code",
    "analyze_performance",
    "analyze_security",
    "assess_quality",
    "cache_key",
    "compute_metrics",
    "default_settings",
    "find_recursive_functions",
    "generate_execution_steps",
    "generate_flow_insights",
    "identify_patterns",
    "load_settings",
    "rolling_hash",
    "track_variable_flow",
]
