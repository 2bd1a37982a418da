"""snippetflow: control-flow graphs, execution steps and static metrics for code snippets."""

from snippetflow.analysis import AnalysisCache, AnalysisResult, CodeAnalyzer, analyze_code

__version__ = "0.1.0"

__all__ = [
    "AnalysisCache",
    "AnalysisResult",
    "CodeAnalyzer",
    "__version__",
    "analyze_code",
]
