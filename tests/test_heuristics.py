"""
Tests for heuristic detectors: quality, patterns, performance, security, flow insights.
"""

from pathlib import Path

from snippetflow.analysis.data_model import AnalysisSettings
from snippetflow.analysis.heuristics import (
    PATTERN_FACTORY,
    PATTERN_LONG_PARAMETER_LIST,
    PATTERN_NESTED_LOOPS,
    PATTERN_OBSERVER,
    PATTERN_RECURSION,
    analyze_performance,
    analyze_security,
    assess_quality,
    find_magic_numbers,
    find_recursive_functions,
    function_spans,
    generate_flow_insights,
    has_nested_loops,
    identify_patterns,
    overall_rating,
    risk_level,
)
from snippetflow.classify import classify_statements

FIXTURES = Path(__file__).resolve().parent / "fixtures" / "snippets"

RECURSIVE_FACTORIAL = """function factorial(n) {
  if (n <= 1) {
    return 1;
  }
  let rest = n - 1;
  factorial(rest);
}"""


def _js(text: str):
    return classify_statements(text, "javascript")


def _fixture(name: str, profile: str = "javascript"):
    return classify_statements((FIXTURES / name).read_text(encoding="utf-8"), profile)


# --- Quality ---------------------------------------------------------------


def test_function_spans():
    """A function runs to the next definition or to the end of input."""
    statements = _js("function a() {\n}\n\nfunction b() {\n}")
    spans = function_spans(statements, total_lines=5)
    assert [(s.name, s.start_line, s.length) for s in spans] == [("a", 1, 3), ("b", 4, 1)]


def test_find_magic_numbers():
    """Integers above one are reported unless exempt."""
    statements = _js("let a = 0;\nlet b = 1;\nlet c = 42;\nlet d = 100;\nlet e = 1000;")
    assert find_magic_numbers(statements) == [(42, 3)]
    assert find_magic_numbers(statements, exemptions=()) == [(42, 3), (100, 4), (1000, 5)]


def test_assess_quality_fibonacci():
    """Fibonacci has no issues; its literals 2 and 10 are suggestions."""
    report = assess_quality(_fixture("fibonacci.js"), total_lines=18)
    assert report.issues == ()
    assert report.overall_rating == "excellent"
    assert [(f.value, f.line_number) for f in report.suggestions] == [(2, 8), (10, 18), (10, 18)]
    assert all(f.kind == "magic_number" and f.severity == "suggestion" for f in report.suggestions)


def test_assess_quality_long_function():
    """A function longer than the limit is an issue."""
    body = "\n".join("  x = x + 1;" for _ in range(60))
    text = f"function big() {{\n{body}\n}}"
    statements = _js(text)
    report = assess_quality(statements, total_lines=len(text.split("\n")))
    assert [f.kind for f in report.issues] == ["long_function"]
    assert "'big' is 61 lines long" in report.issues[0].message
    assert report.overall_rating == "good"

    relaxed = assess_quality(
        statements, total_lines=62, settings=AnalysisSettings(long_function_lines=100)
    )
    assert relaxed.issues == ()


def test_assess_quality_deep_nesting():
    """Statements indented past the depth limit produce one aggregated issue."""
    text = "if (a) {\n" + " " * 18 + "x = 1;\n" + " " * 20 + "y = 2;\n}"
    report = assess_quality(_js(text), total_lines=4)
    assert len(report.issues) == 1
    issue = report.issues[0]
    assert issue.kind == "deep_nesting"
    assert issue.line_number == 2
    assert issue.count == 2


def test_overall_rating():
    """Rating bands by issue count."""
    assert overall_rating(0) == "excellent"
    assert overall_rating(2) == "good"
    assert overall_rating(5) == "fair"
    assert overall_rating(6) == "needs_improvement"


# --- Patterns --------------------------------------------------------------


def test_has_nested_loops():
    """Only for-loops count toward nesting."""
    assert has_nested_loops(_fixture("bubble_sort.js")) is True
    assert has_nested_loops(_fixture("fibonacci.js")) is False
    assert has_nested_loops(_js("while (a) {\n  for (;;) {\n  }\n}")) is False


def test_find_recursive_functions():
    """A defined function that is also a call target is recursive."""
    assert find_recursive_functions(_js(RECURSIVE_FACTORIAL)) == ("factorial",)
    assert find_recursive_functions(_fixture("fibonacci.js")) == ()


def test_identify_patterns_design():
    """Factory and observer naming conventions are reported with their confidences."""
    patterns = identify_patterns(_js("function createUser(name) {\n}\nfunction notifyAll() {\n}"))
    by_kind = {p.kind: p for p in patterns}
    assert by_kind[PATTERN_FACTORY].confidence == 0.6
    assert by_kind[PATTERN_FACTORY].category == "design"
    assert by_kind[PATTERN_OBSERVER].confidence == 0.7


def test_identify_patterns_long_parameter_list():
    """More than four commas in a definition line is a smell."""
    patterns = identify_patterns(_js("function f(a, b, c, d, e, g) {\n}"))
    assert [p.kind for p in patterns] == [PATTERN_LONG_PARAMETER_LIST]
    assert patterns[0].line_number == 1
    assert "6 parameters" in patterns[0].description
    assert identify_patterns(_js("function f(a, b, c, d, e) {\n}")) == ()


def test_identify_patterns_algorithmic():
    """Nested loops and recursion are algorithmic patterns."""
    nested = identify_patterns(_fixture("bubble_sort.js"))
    assert [p.kind for p in nested] == [PATTERN_NESTED_LOOPS]
    assert nested[0].complexity == "quadratic"

    recursive = identify_patterns(_js(RECURSIVE_FACTORIAL))
    assert [p.kind for p in recursive] == [PATTERN_RECURSION]
    assert recursive[0].functions == ("factorial",)


# --- Performance -----------------------------------------------------------


def test_analyze_performance_nested_loops():
    """Quadratic loops: high-impact bottleneck and algorithm optimization suggestion."""
    patterns = identify_patterns(_fixture("bubble_sort.js"))
    report = analyze_performance("O(n²)", "O(1)", 2, patterns)
    assert report.time_complexity == "O(n²)"
    assert [(b.kind, b.impact) for b in report.bottlenecks] == [(PATTERN_NESTED_LOOPS, "high")]
    assert [(s.kind, s.priority) for s in report.optimization_suggestions] == [
        ("algorithm_optimization", "high")
    ]


def test_analyze_performance_recursion():
    """Recursion: medium bottleneck and a memoization suggestion."""
    patterns = identify_patterns(_js(RECURSIVE_FACTORIAL))
    report = analyze_performance("O(1)", "O(n)", 0, patterns)
    assert [b.kind for b in report.bottlenecks] == [PATTERN_RECURSION]
    assert [s.kind for s in report.optimization_suggestions] == ["memoization"]


def test_analyze_performance_clean():
    """Linear code has nothing to report."""
    report = analyze_performance("O(n)", "O(1)", 1, ())
    assert report.bottlenecks == ()
    assert report.optimization_suggestions == ()


# --- Security --------------------------------------------------------------


def test_analyze_security_eval():
    """One eval call: one high finding, medium risk."""
    report = analyze_security(_fixture("unsafe.js"))
    assert [(f.kind, f.severity, f.line_number) for f in report.issues] == [
        ("eval_usage", "high", 2)
    ]
    assert report.risk_level == "medium"


def test_analyze_security_eval_substring():
    """Any eval( substring is flagged, including inside longer identifiers."""
    report = analyze_security(_js("myeval(x);\nlet y = medieval;\nlet z = evaluate;"))
    assert [(f.kind, f.line_number) for f in report.issues] == [("eval_usage", 1)]
    assert report.risk_level == "medium"


def test_analyze_security_risk_levels():
    """More than two findings raise the risk to high."""
    report = analyze_security(
        _js("el.innerHTML = data;\nEVAL(a);\nretrieval(b);")
    )
    assert [f.severity for f in report.issues] == ["medium", "high", "high"]
    assert report.risk_level == "high"
    assert risk_level(0) == "low"
    assert risk_level(2) == "medium"


# --- Flow insights ---------------------------------------------------------


def test_generate_flow_insights_fibonacci():
    """Entry points are functions, exit points are returns, paths double per branch."""
    insights = generate_flow_insights(_fixture("fibonacci.js"))
    assert [(e.name, e.line_number) for e in insights.entry_points] == [("fibonacci", 1)]
    assert [(e.line_number, e.code) for e in insights.exit_points] == [
        (3, "return n;"),
        (14, "return b;"),
    ]
    assert insights.branching_factor == 2
    assert insights.path_complexity == 4


def test_path_complexity_is_capped():
    """Path complexity stops growing after ten branches."""
    text = "\n".join(f"if (x{i}) {{\n}}" for i in range(12))
    insights = generate_flow_insights(_js(text))
    assert insights.branching_factor == 12
    assert insights.path_complexity == 1024
