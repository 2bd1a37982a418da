"""
Statement classifier: walk the lines of a snippet and emit one typed Statement per code line.
Never raises; unmatched lines become opaque statements.
"""

from __future__ import annotations

from loguru import logger

from snippetflow.classify.profiles import LanguageProfile, get_profile
from snippetflow.classify.statement import ClassificationResult, Statement

INDENT_UNIT = 2  # whitespace characters per depth unit


def leading_whitespace(line: str) -> int:
    """Number of leading whitespace characters (a tab counts as one)."""
    return len(line) - len(line.lstrip())


def indent_depth(line: str) -> int:
    return leading_whitespace(line) // INDENT_UNIT


def classify_line(
    profile: LanguageProfile, line: str, line_number: int
) -> Statement | None:
    """Classify one raw line; None for blank and comment lines."""
    stripped = line.strip()
    if not stripped or profile.is_comment(stripped):
        return None
    kind, fragment = profile.classify_line(stripped)
    return Statement(
        kind=kind,
        line_number=line_number,
        indent_depth=indent_depth(line),
        raw_text=stripped,
        name=fragment.name,
        condition=fragment.condition,
        loop_variable=fragment.loop_variable,
        loop_header=fragment.loop_header,
        arguments=fragment.arguments,
        referenced_variables=fragment.referenced_variables,
    )


def classify(text: str, profile_id: str | None = None) -> ClassificationResult:
    """
    Classify every non-blank, non-comment line of text with the given profile.

    Args:
        text: Snippet source text.
        profile_id: Registered profile id or alias; unknown ids use the default profile.

    Returns:
        ClassificationResult with statements in source order, total line count
        and the number of comment lines skipped.
    """
    profile = get_profile(profile_id)
    lines = text.split("\n")
    statements: list[Statement] = []
    comment_lines = 0

    for line_number, raw in enumerate(lines, start=1):
        line = raw.rstrip("\r")
        statement = classify_line(profile, line, line_number)
        if statement is not None:
            statements.append(statement)
        elif line.strip():
            comment_lines += 1

    logger.debug(
        f"Classified {len(statements)} statements from {len(lines)} lines "
        f"with profile '{profile.profile_id}'"
    )
    return ClassificationResult(
        profile_id=profile.profile_id,
        statements=tuple(statements),
        total_lines=len(lines),
        comment_lines=comment_lines,
    )


def classify_statements(text: str, profile_id: str | None = None) -> tuple[Statement, ...]:
    """Convenience: classify(text, profile_id).statements."""
    return classify(text, profile_id).statements
