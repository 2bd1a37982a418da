"""Statement types produced by line classification."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Literal

StatementKind = Literal[
    "variable_declaration",
    "assignment",
    "function_definition",
    "conditional",
    "for_loop",
    "while_loop",
    "return",
    "call",
    "opaque",
]

KIND_VARIABLE = "variable_declaration"
KIND_ASSIGNMENT = "assignment"
KIND_FUNCTION = "function_definition"
KIND_CONDITIONAL = "conditional"
KIND_FOR = "for_loop"
KIND_WHILE = "while_loop"
KIND_RETURN = "return"
KIND_CALL = "call"
KIND_OPAQUE = "opaque"

LOOP_KINDS: frozenset[str] = frozenset({KIND_FOR, KIND_WHILE})
BRANCH_KINDS: frozenset[str] = frozenset({KIND_CONDITIONAL, KIND_FOR, KIND_WHILE})


@dataclass(frozen=True)
class StatementFragment:
    """What a single rule extracts from a line; kind and position are added by the classifier."""

    name: str | None = None
    condition: str | None = None
    loop_variable: str | None = None
    loop_header: str | None = None
    arguments: tuple[str, ...] = ()
    referenced_variables: tuple[str, ...] = ()


@dataclass(frozen=True)
class Statement:
    """One classified source line."""

    kind: StatementKind
    line_number: int
    indent_depth: int
    raw_text: str  # stripped line text
    name: str | None = None
    condition: str | None = None
    loop_variable: str | None = None
    loop_header: str | None = None  # "init; test; step" or "var in iterable"
    arguments: tuple[str, ...] = ()
    referenced_variables: tuple[str, ...] = ()


@dataclass(frozen=True)
class ClassificationResult:
    """Statement stream plus the line counts the metrics need."""

    profile_id: str
    statements: tuple[Statement, ...]
    total_lines: int
    comment_lines: int
