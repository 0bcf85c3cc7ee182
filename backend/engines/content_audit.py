"""Content Auditor

Scans authored learning content for grammar agreement errors and builds
audit reports. Used for QA before publishing and in CI.
"""
import re
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Iterable

from pydantic import ValidationError as SchemaError

from core.logging import qa_logger
from .grammar_rules import (
    AdjectiveMetadata,
    CamelSchema,
    GrammarRuleId,
    GrammarValidator,
    LinguisticMetadata,
    NounMetadata,
)

log = qa_logger()

# "Куќата е ___" style blanks: "___ е голем"
PREDICATE_BLANK_PATTERN = re.compile(r"___\s+е\s+(\w+)")

# Issues under these rules fail a CI run
CRITICAL_RULES: frozenset[GrammarRuleId] = frozenset({
    "adjective_agrees_with_noun_gender",
    "adjective_agrees_with_noun_number",
    "verb_agrees_with_subject_number",
})


class ContentAuditEntry(CamelSchema):
    feature: str
    content_id: str
    sentence: str
    current_answer: str
    correct_answer: str
    issue: str
    grammar_rule: GrammarRuleId
    fix_applied: bool = False
    notes: str | None = None


class ContentAuditReport(CamelSchema):
    timestamp: str
    total_items_scanned: int
    issues_found: int
    issues_fixed: int
    entries: list[ContentAuditEntry] = []

    @property
    def critical_entries(self) -> list[ContentAuditEntry]:
        return [e for e in self.entries if e.grammar_rule in CRITICAL_RULES]

    def to_dict(self) -> dict:
        return self.model_dump(by_alias=True, exclude_none=True)


@dataclass(slots=True)
class ScanResult:
    entries: list[ContentAuditEntry] = field(default_factory=list)
    items_scanned: int = 0


def check_predicate_agreement(
    sentence: str,
    correct_answer: str,
    feature: str,
    content_id: str,
    validator: GrammarValidator,
) -> list[ContentAuditEntry]:
    """Check a "___ е <adjective>" blank filled by a noun answer.

    Predicate adjectives take the indefinite form, so the metadata is built
    with indefinite definiteness whatever the answer's own article.
    """
    match = PREDICATE_BLANK_PATTERN.search(sentence)
    if not match:
        return []

    lexicon = validator.lexicon
    answer = correct_answer.strip().lower()
    adjective_form = match.group(1).lower()

    noun = lexicon.find_noun_by_form(answer)
    adjective = lexicon.find_adjective_by_form(adjective_form)
    if noun is None or adjective is None:
        return []

    metadata = LinguisticMetadata(
        noun=NounMetadata(
            lemma=noun.lemma,
            lemma_cyrillic=noun.lemma,
            gender=noun.gender,
            number="singular",
            definiteness="indefinite",
            inflected_form=answer,
        ),
        adjective=AdjectiveMetadata(lemma=adjective.lemma, form=adjective_form),
    )
    result = validator.validate_content(metadata)

    return [
        ContentAuditEntry(
            feature=feature,
            content_id=content_id,
            sentence=sentence,
            current_answer=f"{correct_answer} е {error.actual}",
            correct_answer=f"{correct_answer} е {error.expected}",
            issue=f'Adjective "{error.actual}" used with {noun.gender} noun "{answer}"',
            grammar_rule=error.rule,
            notes=error.suggestion,
        )
        for error in result.errors
    ]


def scan_grammar_lessons(lessons: Iterable[dict[str, Any]], validator: GrammarValidator) -> ScanResult:
    """Scan grammar lesson exercises for agreement issues."""
    scan = ScanResult()

    for lesson in lessons:
        lesson_id = str(lesson.get("id") or "unknown")
        for exercise in lesson.get("exercises") or []:
            scan.items_scanned += 1
            exercise_id = f"{lesson_id}/{exercise.get('id')}"
            sentence = str(exercise.get("sentenceMk") or exercise.get("questionMk") or "")
            answers = exercise.get("correctAnswers") or []

            if exercise.get("type") == "fill-blank" and answers:
                scan.entries.extend(
                    check_predicate_agreement(sentence, str(answers[0]), "grammar", exercise_id, validator)
                )

    log.debug("grammar_lessons_scanned", items=scan.items_scanned, issues=len(scan.entries))
    return scan


def scan_content_items(items: Iterable[dict[str, Any]], validator: GrammarValidator) -> ScanResult:
    """Validate content items that carry their own linguistic metadata."""
    scan = ScanResult()

    for item in items:
        scan.items_scanned += 1
        raw = item.get("linguisticMetadata")
        if not raw:
            continue

        content_id = str(item.get("id") or "unknown")
        try:
            result = validator.validate_content(raw)
        except SchemaError as e:
            log.warning("content_item_metadata_invalid", content_id=content_id, errors=e.error_count())
            continue

        for error in result.errors:
            scan.entries.append(ContentAuditEntry(
                feature=str(item.get("feature") or "unknown"),
                content_id=content_id,
                sentence=str(item.get("promptMk") or ""),
                current_answer=error.actual,
                correct_answer=error.expected,
                issue=error.message,
                grammar_rule=error.rule,
                notes=error.suggestion,
            ))

    log.debug("content_items_scanned", items=scan.items_scanned, issues=len(scan.entries))
    return scan


def audit_all_content(
    grammar_lessons: Iterable[dict[str, Any]],
    content_items: Iterable[dict[str, Any]],
    validator: GrammarValidator,
    now: datetime | None = None,
) -> ContentAuditReport:
    """Generate a full audit report across all content."""
    entries: list[ContentAuditEntry] = []
    total = 0

    for scan in (scan_grammar_lessons(grammar_lessons, validator), scan_content_items(content_items, validator)):
        entries.extend(scan.entries)
        total += scan.items_scanned

    report = ContentAuditReport(
        timestamp=(now or datetime.now(timezone.utc)).isoformat(),
        total_items_scanned=total,
        issues_found=len(entries),
        issues_fixed=sum(1 for e in entries if e.fix_applied),
        entries=entries,
    )
    log.info("content_audit_completed", scanned=total, issues=report.issues_found)
    return report


def format_audit_report_as_markdown(report: ContentAuditReport) -> str:
    """Format audit report as a Markdown table."""
    lines = [
        "# Content QA Audit Report",
        "",
        f"**Timestamp:** {report.timestamp}",
        f"**Items Scanned:** {report.total_items_scanned}",
        f"**Issues Found:** {report.issues_found}",
        f"**Issues Fixed:** {report.issues_fixed}",
        "",
        "## Issues",
        "",
        "| Feature | Content ID | Issue | Current | Correct | Rule | Fixed |",
        "|---------|------------|-------|---------|---------|------|-------|",
    ]

    for e in report.entries:
        fixed = "✅" if e.fix_applied else "❌"
        lines.append(
            f"| {e.feature} | {e.content_id} | {e.issue} | {e.current_answer} "
            f"| {e.correct_answer} | {e.grammar_rule} | {fixed} |"
        )

    if not report.entries:
        lines.append("| - | - | No issues found | - | - | - | - |")

    return "\n".join(lines)
