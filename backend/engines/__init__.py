from engines.grammar_rules import (
    GrammarValidator,
    LinguisticMetadata,
    ValidationResult,
    build_rules,
)
from engines.content_audit import (
    audit_all_content,
    format_audit_report_as_markdown,
    scan_content_items,
    scan_grammar_lessons,
)
from engines.adaptive import (
    AdaptiveConfig,
    AdaptiveSessionState,
    create_adaptive_state,
    record_answer,
    select_next_exercise,
    serialize_adaptive_state,
    deserialize_adaptive_state,
)

__all__ = [
    "GrammarValidator",
    "LinguisticMetadata",
    "ValidationResult",
    "build_rules",
    "audit_all_content",
    "format_audit_report_as_markdown",
    "scan_content_items",
    "scan_grammar_lessons",
    "AdaptiveConfig",
    "AdaptiveSessionState",
    "create_adaptive_state",
    "record_answer",
    "select_next_exercise",
    "serialize_adaptive_state",
    "deserialize_adaptive_state",
]
