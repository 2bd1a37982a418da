"""Line classification: language profiles, statement classifier, indentation checks."""

from snippetflow.classify.classifier import (
    INDENT_UNIT,
    classify,
    classify_line,
    classify_statements,
    indent_depth,
)
from snippetflow.classify.indentation import IndentationIssue, check_indentation
from snippetflow.classify.profiles import (
    DEFAULT_PROFILE_ID,
    PROFILES,
    RULE_PRECEDENCE,
    ClassificationRule,
    LanguageProfile,
    get_profile,
    profile_for_path,
    resolve_profile_id,
    supported_profiles,
)
from snippetflow.classify.statement import (
    BRANCH_KINDS,
    LOOP_KINDS,
    ClassificationResult,
    Statement,
    StatementFragment,
)

__all__ = [
    "BRANCH_KINDS",
    "DEFAULT_PROFILE_ID",
    "INDENT_UNIT",
    "LOOP_KINDS",
    "PROFILES",
    "RULE_PRECEDENCE",
    "ClassificationResult",
    "ClassificationRule",
    "IndentationIssue",
    "LanguageProfile",
    "Statement",
    "StatementFragment",
    "check_indentation",
    "classify",
    "classify_line",
    "classify_statements",
    "get_profile",
    "indent_depth",
    "profile_for_path",
    "resolve_profile_id",
    "supported_profiles",
]
