"""
CodeAnalyzer: orchestrate classify, indentation check, graph build, patterns, metrics,
quality, performance, security, narration -> AnalysisResult, memoized in an AnalysisCache.
"""

from __future__ import annotations

from loguru import logger

from snippetflow.analysis.cache import AnalysisCache
from snippetflow.analysis.data_model import AnalysisResult, AnalysisSettings
from snippetflow.analysis.heuristics import (
    PATTERN_RECURSION,
    analyze_performance,
    analyze_security,
    assess_quality,
    generate_flow_insights,
    has_pattern,
    identify_patterns,
)
from snippetflow.analysis.metrics import compute_metrics
from snippetflow.analysis.narrator import generate_execution_steps, track_variable_flow
from snippetflow.classify.classifier import classify
from snippetflow.classify.indentation import check_indentation
from snippetflow.classify.profiles import DEFAULT_PROFILE_ID, resolve_profile_id
from snippetflow.graph.builder import build_control_flow_graph


class CodeAnalyzer:
    """Analyze snippets; identical (profile, content) pairs return the cached result object."""

    def __init__(
        self,
        *,
        cache: AnalysisCache | None = None,
        settings: AnalysisSettings | None = None,
    ) -> None:
        self.settings = settings or AnalysisSettings()
        self.cache = cache if cache is not None else AnalysisCache(self.settings.cache_max_entries)

    def analyze(self, text: str, profile_id: str | None = DEFAULT_PROFILE_ID) -> AnalysisResult:
        """
        Analyze one snippet.

        Pipeline:
        1. Resolve the profile (unknown ids fall back to the default profile)
        2. Return the cached result when this exact content was analyzed before
        3. Classify lines into statements
        4. Check indentation consistency
        5. Build the control-flow graph
        6. Detect patterns (recursion feeds space complexity)
        7. Compute metrics
        8. Quality, performance, security, flow insights
        9. Narrate execution steps and variable flow
        10. Cache and return

        Never raises for text input; empty text gives an empty result.
        """
        resolved = resolve_profile_id(profile_id)
        cached = self.cache.get(resolved, text)
        if cached is not None:
            return cached

        classification = classify(text, resolved)
        statements = classification.statements

        indentation_issues = check_indentation(text, resolved)
        for issue in indentation_issues:
            logger.warning(f"Indentation: {issue.message}")

        graph = build_control_flow_graph(
            statements,
            indentation_issues=indentation_issues,
            label_max_length=self.settings.label_max_length,
        )

        patterns = identify_patterns(statements, self.settings)
        metrics = compute_metrics(
            classification,
            graph,
            has_recursion=has_pattern(patterns, PATTERN_RECURSION),
            settings=self.settings,
        )

        result = AnalysisResult(
            profile_id=resolved,
            statements=statements,
            graph=graph,
            metrics=metrics,
            quality=assess_quality(statements, classification.total_lines, self.settings),
            patterns=patterns,
            performance=analyze_performance(
                metrics.time_complexity,
                metrics.space_complexity,
                metrics.max_loop_depth,
                patterns,
            ),
            security=analyze_security(statements),
            flow_insights=generate_flow_insights(statements),
            execution_steps=generate_execution_steps(statements),
            variable_flow=track_variable_flow(statements),
            indentation_issues=indentation_issues,
        )
        logger.debug(
            f"Analyzed {len(statements)} statements ({resolved}): "
            f"complexity={metrics.cyclomatic_complexity}, time={metrics.time_complexity}"
        )

        self.cache.put(resolved, text, result)
        return result

    def clear_cache(self) -> None:
        self.cache.clear()


def analyze_code(
    text: str,
    profile_id: str | None = DEFAULT_PROFILE_ID,
    *,
    settings: AnalysisSettings | None = None,
) -> AnalysisResult:
    """Convenience: CodeAnalyzer(settings=...).analyze(text, profile_id) with a fresh cache."""
    return CodeAnalyzer(settings=settings).analyze(text, profile_id)
