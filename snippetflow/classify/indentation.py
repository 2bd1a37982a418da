"""
Optional indentation validation pass.

Block boundaries in the control-flow graph are inferred from indentation depth, which
assumes consistent indentation. This pass reports lines that break that assumption; it
does not change classification.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Literal

from snippetflow.classify.classifier import INDENT_UNIT
from snippetflow.classify.profiles import get_profile

IndentationIssueType = Literal[
    "mixed_tabs_spaces", "inconsistent_indent_char", "odd_indent_width", "tab_indent_width"
]

ISSUE_MIXED = "mixed_tabs_spaces"
ISSUE_INCONSISTENT = "inconsistent_indent_char"
ISSUE_ODD_WIDTH = "odd_indent_width"
ISSUE_TAB_WIDTH = "tab_indent_width"


@dataclass(frozen=True)
class IndentationIssue:
    """One line whose indentation makes depth-based block inference unreliable."""

    line_number: int
    issue_type: IndentationIssueType
    message: str


def _indent_name(char: str) -> str:
    return "tabs" if char == "\t" else "spaces"


def check_indentation(text: str, profile_id: str | None = None) -> tuple[IndentationIssue, ...]:
    """
    Report mixed tabs/spaces within a line, a switch between tab and space
    indentation across lines, tab indentation, and space indentation that is not
    a multiple of the depth unit. Blank and comment lines are ignored.
    """
    profile = get_profile(profile_id)
    issues: list[IndentationIssue] = []
    first_char: str | None = None

    for line_number, raw in enumerate(text.split("\n"), start=1):
        line = raw.rstrip("\r")
        stripped = line.strip()
        if not stripped or profile.is_comment(stripped):
            continue
        indent = line[: len(line) - len(line.lstrip())]
        if not indent:
            continue

        if " " in indent and "\t" in indent:
            issues.append(
                IndentationIssue(
                    line_number, ISSUE_MIXED, f"Line {line_number} mixes tabs and spaces"
                )
            )
            continue

        char = indent[0]
        if first_char is None:
            first_char = char
        elif char != first_char:
            issues.append(
                IndentationIssue(
                    line_number,
                    ISSUE_INCONSISTENT,
                    f"Line {line_number} indents with {_indent_name(char)} "
                    f"while earlier lines use {_indent_name(first_char)}",
                )
            )
            continue

        # A tab counts as one whitespace character, so tab levels collapse in pairs
        if char == "\t":
            issues.append(
                IndentationIssue(
                    line_number,
                    ISSUE_TAB_WIDTH,
                    f"Line {line_number} is indented with {len(indent)} tab(s); "
                    f"depth assumes {INDENT_UNIT}-space units",
                )
            )
        elif len(indent) % INDENT_UNIT:
            issues.append(
                IndentationIssue(
                    line_number,
                    ISSUE_ODD_WIDTH,
                    f"Line {line_number} is indented by {len(indent)} spaces, "
                    f"not a multiple of {INDENT_UNIT}",
                )
            )

    return tuple(issues)
