"""
Language profiles: one ordered table of line-shape rules per supported surface syntax.

A rule is a pure function from stripped-or-raw line text to an optional StatementFragment.
Profiles are composed from rule factories; the classifier never branches on the profile id.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from pathlib import Path
from typing import Callable

from loguru import logger

from snippetflow.classify.statement import (
    KIND_ASSIGNMENT,
    KIND_CALL,
    KIND_CONDITIONAL,
    KIND_FOR,
    KIND_FUNCTION,
    KIND_OPAQUE,
    KIND_RETURN,
    KIND_VARIABLE,
    KIND_WHILE,
    StatementFragment,
    StatementKind,
)

RuleMatcher = Callable[[str], "StatementFragment | None"]

# Fixed precedence; the first matching rule wins, opaque is the fallback.
RULE_PRECEDENCE: tuple[str, ...] = (
    KIND_VARIABLE,
    KIND_FUNCTION,
    KIND_CONDITIONAL,
    KIND_FOR,
    KIND_WHILE,
    KIND_RETURN,
    KIND_CALL,
    KIND_ASSIGNMENT,
)

# Never reported as call targets even though they are followed by "(".
CONTROL_KEYWORDS: frozenset[str] = frozenset(
    {
        "if",
        "elif",
        "else",
        "for",
        "while",
        "do",
        "switch",
        "case",
        "catch",
        "return",
        "function",
        "def",
        "sizeof",
        "typeof",
        "with",
        "except",
    }
)

DEFAULT_LOOP_VARIABLE = "i"
DEFAULT_LOOP_HEADER = "loop iteration"
DEFAULT_CONDITION = "condition"


@dataclass(frozen=True)
class ClassificationRule:
    """A statement kind and the matcher that recognizes it."""

    kind: StatementKind
    match: RuleMatcher


@dataclass(frozen=True)
class LanguageProfile:
    """Immutable rule table for one surface syntax."""

    profile_id: str
    display_name: str
    extensions: tuple[str, ...]
    comment_pattern: re.Pattern[str]
    rules: tuple[ClassificationRule, ...]

    def is_comment(self, line: str) -> bool:
        return self.comment_pattern.match(line) is not None

    def classify_line(self, line: str) -> tuple[StatementKind, StatementFragment]:
        """Return the kind and fragment of the first matching rule, or opaque."""
        for rule in self.rules:
            fragment = rule.match(line)
            if fragment is not None:
                return rule.kind, fragment
        return KIND_OPAQUE, StatementFragment()


def _ordered_rules(matchers: dict[str, RuleMatcher]) -> tuple[ClassificationRule, ...]:
    """Lay matchers out in RULE_PRECEDENCE order; kinds without a matcher are skipped."""
    return tuple(
        ClassificationRule(kind=kind, match=matchers[kind])  # type: ignore[arg-type]
        for kind in RULE_PRECEDENCE
        if kind in matchers
    )


def extract_parenthesized(line: str, start: int = 0) -> str | None:
    """Text inside the first balanced parenthesis pair at or after start, or None."""
    open_at = line.find("(", start)
    if open_at < 0:
        return None
    depth = 0
    for i in range(open_at, len(line)):
        ch = line[i]
        if ch == "(":
            depth += 1
        elif ch == ")":
            depth -= 1
            if depth == 0:
                return line[open_at + 1 : i].strip()
    # Unbalanced: keep what follows the opening paren
    return line[open_at + 1 :].strip() or None


def _split_names(names: str) -> tuple[str, ...]:
    return tuple(n.strip() for n in names.split(",") if n.strip())


# --- Rule factories ---------------------------------------------------------


def declaration_rule(pattern: re.Pattern[str]) -> RuleMatcher:
    """Pattern must define a "names" group (one name or a comma-separated target list)."""

    def match(line: str) -> StatementFragment | None:
        m = pattern.match(line)
        if m is None:
            return None
        names = _split_names(m.group("names"))
        return StatementFragment(name=names[0], referenced_variables=names)

    return match


def function_rule(pattern: re.Pattern[str]) -> RuleMatcher:
    """Pattern must define a "name" group."""

    def match(line: str) -> StatementFragment | None:
        m = pattern.match(line)
        if m is None:
            return None
        return StatementFragment(name=m.group("name"))

    return match


def paren_condition_rule(pattern: re.Pattern[str]) -> RuleMatcher:
    """Brace syntaxes: the condition is the balanced (...) right after the keyword."""

    def match(line: str) -> StatementFragment | None:
        m = pattern.match(line)
        if m is None:
            return None
        condition = extract_parenthesized(line, m.end() - 1)
        return StatementFragment(condition=condition or DEFAULT_CONDITION)

    return match


def colon_condition_rule(pattern: re.Pattern[str]) -> RuleMatcher:
    """Colon syntaxes: pattern matches the keyword; "cond" group is the text up to the colon."""
    header = re.compile(pattern.pattern + r"(?P<cond>.*?):")

    def match(line: str) -> StatementFragment | None:
        if pattern.match(line) is None:
            return None
        m = header.match(line)
        condition = m.group("cond").strip() if m else ""
        return StatementFragment(condition=condition or DEFAULT_CONDITION)

    return match


_ASSIGNED_NAME = re.compile(r"([A-Za-z_$][\w$]*)\s*=(?!=)")
_IDENTIFIER = re.compile(r"[A-Za-z_$][\w$]*")
_FOREACH_HEADER = re.compile(
    r"(?:(?:const|let|var|final|auto)\s+)?(?:[\w<>\[\]:&*]+\s+)?"
    r"(?P<var>[A-Za-z_$][\w$]*)\s*(?:\bof\b|\bin\b|:)\s*(?P<iterable>.+)$"
)


def brace_for_rule(pattern: re.Pattern[str]) -> RuleMatcher:
    """
    Brace for-loops: three-part headers yield "init; test; step" and the variable
    assigned in init; for-each headers yield "var in iterable".
    """

    def match(line: str) -> StatementFragment | None:
        m = pattern.match(line)
        if m is None:
            return None
        header = extract_parenthesized(line, m.end() - 1) or ""
        if header.count(";") >= 2:
            init, test, step = (part.strip() for part in header.split(";", 2))
            assigned = _ASSIGNED_NAME.search(init)
            if assigned:
                variable = assigned.group(1)
            else:
                idents = _IDENTIFIER.findall(init)
                variable = idents[-1] if idents else DEFAULT_LOOP_VARIABLE
            return StatementFragment(
                loop_variable=variable,
                loop_header=f"{init}; {test}; {step}",
                referenced_variables=(variable,),
            )
        each = _FOREACH_HEADER.match(header)
        if each:
            variable = each.group("var")
            return StatementFragment(
                loop_variable=variable,
                loop_header=f"{variable} in {each.group('iterable').strip()}",
                referenced_variables=(variable,),
            )
        return StatementFragment(
            loop_variable=DEFAULT_LOOP_VARIABLE,
            loop_header=DEFAULT_LOOP_HEADER,
            referenced_variables=(DEFAULT_LOOP_VARIABLE,),
        )

    return match


_COLON_FOR_HEADER = re.compile(
    r"^\s*(?:async\s+)?for\s+(?P<vars>\w+(?:\s*,\s*\w+)*)\s+in\s+(?P<iterable>.*?):"
)


def colon_for_rule(pattern: re.Pattern[str]) -> RuleMatcher:
    """Colon for-loops: "for var in iterable:"."""

    def match(line: str) -> StatementFragment | None:
        if pattern.match(line) is None:
            return None
        m = _COLON_FOR_HEADER.match(line)
        if m is None:
            return StatementFragment(
                loop_variable=DEFAULT_LOOP_VARIABLE,
                loop_header=DEFAULT_LOOP_HEADER,
                referenced_variables=(DEFAULT_LOOP_VARIABLE,),
            )
        names = _split_names(m.group("vars"))
        return StatementFragment(
            loop_variable=names[0],
            loop_header=f"{m.group('vars')} in {m.group('iterable').strip()}",
            referenced_variables=names,
        )

    return match


def keyword_rule(pattern: re.Pattern[str]) -> RuleMatcher:
    def match(line: str) -> StatementFragment | None:
        return StatementFragment() if pattern.match(line) else None

    return match


_CALL_PATTERN = re.compile(r"([A-Za-z_$][\w$]*)\s*\((.*?)\)")


def call_rule(line: str) -> StatementFragment | None:
    """First identifier directly followed by "(" that is not a control keyword."""
    for m in _CALL_PATTERN.finditer(line):
        name = m.group(1)
        if name in CONTROL_KEYWORDS:
            continue
        raw_args = m.group(2).strip()
        args = tuple(a.strip() for a in raw_args.split(",")) if raw_args else ()
        return StatementFragment(name=name, arguments=args)
    return None


def assignment_rule(pattern: re.Pattern[str]) -> RuleMatcher:
    """Pattern must define a "name" group: the base identifier being written."""

    def match(line: str) -> StatementFragment | None:
        m = pattern.match(line)
        if m is None:
            return None
        name = m.group("name")
        return StatementFragment(name=name, referenced_variables=(name,))

    return match


# --- Shared patterns --------------------------------------------------------

_BRACE_COMMENT = re.compile(r"^\s*(//|/\*)")
_BRACE_IF = re.compile(r"^\s*(?:\}\s*)?(?:else\s+)?if\s*\(")
_BRACE_FOR = re.compile(r"^\s*for\s*\(")
_BRACE_WHILE = re.compile(r"^\s*while\s*\(")
_RETURN = re.compile(r"^\s*return\b")
_BRACE_ASSIGNMENT = re.compile(
    r"^\s*(?P<name>[A-Za-z_$][\w$]*)(?:\[[^\]]*\]|\.[A-Za-z_$][\w$]*|->[A-Za-z_]\w*)*\s*"
    r"(?:(?:>>>|<<|>>|\*\*|[-+*/%&|^])?=(?!=)|(?:\+\+|--)\s*;?\s*$)"
)

JAVASCRIPT = LanguageProfile(
    profile_id="javascript",
    display_name="JavaScript",
    extensions=(".js", ".mjs", ".cjs", ".jsx", ".ts", ".tsx"),
    comment_pattern=_BRACE_COMMENT,
    rules=_ordered_rules(
        {
            KIND_VARIABLE: declaration_rule(
                re.compile(r"^\s*(?:export\s+)?(?:let|const|var)\s+(?P<names>[A-Za-z_$][\w$]*)")
            ),
            KIND_FUNCTION: function_rule(
                re.compile(
                    r"^\s*(?:export\s+)?(?:default\s+)?(?:async\s+)?function\s*\*?\s*"
                    r"(?P<name>[A-Za-z_$][\w$]*)\s*\("
                )
            ),
            KIND_CONDITIONAL: paren_condition_rule(_BRACE_IF),
            KIND_FOR: brace_for_rule(_BRACE_FOR),
            KIND_WHILE: paren_condition_rule(_BRACE_WHILE),
            KIND_RETURN: keyword_rule(_RETURN),
            KIND_CALL: call_rule,
            KIND_ASSIGNMENT: assignment_rule(_BRACE_ASSIGNMENT),
        }
    ),
)

PYTHON = LanguageProfile(
    profile_id="python",
    display_name="Python",
    extensions=(".py", ".pyw"),
    comment_pattern=re.compile(r"^\s*#"),
    rules=_ordered_rules(
        {
            KIND_VARIABLE: declaration_rule(
                re.compile(r"^\s*(?P<names>[A-Za-z_]\w*(?:\s*,\s*[A-Za-z_]\w*)*)\s*=(?!=)")
            ),
            KIND_FUNCTION: function_rule(
                re.compile(r"^\s*(?:async\s+)?def\s+(?P<name>\w+)\s*\(")
            ),
            KIND_CONDITIONAL: colon_condition_rule(re.compile(r"^\s*(?:if|elif)\s+")),
            KIND_FOR: colon_for_rule(re.compile(r"^\s*(?:async\s+)?for\s+")),
            KIND_WHILE: colon_condition_rule(re.compile(r"^\s*while\s+")),
            KIND_RETURN: keyword_rule(_RETURN),
            KIND_CALL: call_rule,
            KIND_ASSIGNMENT: assignment_rule(
                re.compile(
                    r"^\s*(?P<name>[A-Za-z_]\w*)(?:\[[^\]]*\]|\.[A-Za-z_]\w*)*\s*"
                    r"(?://|\*\*|<<|>>|[-+*/%&|^@])?=(?!=)"
                )
            ),
        }
    ),
)

JAVA = LanguageProfile(
    profile_id="java",
    display_name="Java",
    extensions=(".java",),
    comment_pattern=_BRACE_COMMENT,
    rules=_ordered_rules(
        {
            KIND_VARIABLE: declaration_rule(
                re.compile(
                    r"^\s*(?:final\s+)?(?:int|long|short|byte|float|double|String|boolean|char|var)"
                    r"(?:\[\])*\s+(?P<names>[A-Za-z_]\w*)\b(?!\s*\()"
                )
            ),
            KIND_FUNCTION: function_rule(
                re.compile(
                    r"^\s*(?:(?:public|private|protected|static|final|abstract|synchronized|native)\s+)*"
                    r"(?!(?:return|new|else|throw|case)\b)[\w<>\[\],.?]+\s+(?P<name>[A-Za-z_]\w*)\s*\("
                )
            ),
            KIND_CONDITIONAL: paren_condition_rule(_BRACE_IF),
            KIND_FOR: brace_for_rule(_BRACE_FOR),
            KIND_WHILE: paren_condition_rule(_BRACE_WHILE),
            KIND_RETURN: keyword_rule(_RETURN),
            KIND_CALL: call_rule,
            KIND_ASSIGNMENT: assignment_rule(_BRACE_ASSIGNMENT),
        }
    ),
)

CPP = LanguageProfile(
    profile_id="cpp",
    display_name="C++",
    extensions=(".cpp", ".cc", ".cxx", ".hpp", ".hh", ".h", ".c"),
    comment_pattern=_BRACE_COMMENT,
    rules=_ordered_rules(
        {
            KIND_VARIABLE: declaration_rule(
                re.compile(
                    r"^\s*(?:(?:const|static|unsigned|signed)\s+)*"
                    r"(?:int|long|short|float|double|string|std::string|char|bool|auto|size_t)"
                    r"(?:\s+|\s*[*&]+\s*)(?P<names>[A-Za-z_]\w*)\b(?!\s*\()"
                )
            ),
            KIND_FUNCTION: function_rule(
                re.compile(
                    r"^\s*(?:(?:static|inline|virtual|extern|constexpr|const|unsigned)\s+)*"
                    r"(?!(?:return|else|new|delete|throw|case|using)\b)[\w:<>]+[\s*&]+"
                    r"(?P<name>[A-Za-z_~][\w:]*)\s*\("
                )
            ),
            KIND_CONDITIONAL: paren_condition_rule(_BRACE_IF),
            KIND_FOR: brace_for_rule(_BRACE_FOR),
            KIND_WHILE: paren_condition_rule(_BRACE_WHILE),
            KIND_RETURN: keyword_rule(_RETURN),
            KIND_CALL: call_rule,
            KIND_ASSIGNMENT: assignment_rule(_BRACE_ASSIGNMENT),
        }
    ),
)

PROFILES: dict[str, LanguageProfile] = {
    p.profile_id: p for p in (JAVASCRIPT, PYTHON, JAVA, CPP)
}
DEFAULT_PROFILE_ID = JAVASCRIPT.profile_id
PROFILE_ALIASES: dict[str, str] = {"js": "javascript", "py": "python", "c++": "cpp"}


def supported_profiles() -> tuple[str, ...]:
    return tuple(PROFILES)


def resolve_profile_id(profile_id: str | None) -> str:
    """Map aliases and unknown ids onto a registered profile id (default for unknown)."""
    if profile_id is None:
        return DEFAULT_PROFILE_ID
    key = profile_id.strip().lower()
    key = PROFILE_ALIASES.get(key, key)
    if key in PROFILES:
        return key
    logger.warning(f"Unknown profile '{profile_id}', falling back to '{DEFAULT_PROFILE_ID}'")
    return DEFAULT_PROFILE_ID


def get_profile(profile_id: str | None) -> LanguageProfile:
    """Return the registered profile; unknown ids fall back to the default profile."""
    return PROFILES[resolve_profile_id(profile_id)]


def profile_for_path(path: str | Path) -> str | None:
    """Profile id for a file extension, or None when no profile claims it."""
    suffix = Path(path).suffix.lower()
    for profile in PROFILES.values():
        if suffix in profile.extensions:
            return profile.profile_id
    return None
