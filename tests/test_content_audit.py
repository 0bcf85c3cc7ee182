"""Tests for the content auditor and the validation CLI."""
import json
import logging
from datetime import datetime, timezone

import pytest

from core.config import settings
from engines.content_audit import (
    ContentAuditEntry,
    audit_all_content,
    check_predicate_agreement,
    format_audit_report_as_markdown,
    scan_content_items,
    scan_grammar_lessons,
)
from scripts.validate_content import exit_code, load_items, main

LESSONS = [
    {
        "id": "adjectives-gender",
        "exercises": [
            {"id": "ex-1", "type": "fill-blank", "sentenceMk": "___ е голема.", "correctAnswers": ["Куќата"]},
            {"id": "ex-2", "type": "fill-blank", "sentenceMk": "___ е мал.", "correctAnswers": ["Столот"]},
            {"id": "ex-3", "type": "fill-blank", "sentenceMk": "___ е убав.", "correctAnswers": ["Селото"]},
            {"id": "ex-4", "type": "multiple-choice", "questionMk": "___ е убав?", "correctAnswers": ["Селото"]},
        ],
    },
]

ITEMS = [
    {
        "id": "phrase-001",
        "feature": "practice",
        "promptMk": "голема куќа",
        "linguisticMetadata": {
            "noun": {"lemma": "kuka", "gender": "feminine", "number": "singular", "definiteness": "indefinite"},
            "adjective": {"lemma": "голем", "form": "голема"},
        },
    },
    {
        "id": "phrase-002",
        "feature": "practice",
        "promptMk": "нов град",
        "linguisticMetadata": {
            "noun": {"lemma": "grad", "gender": "masculine", "number": "singular", "definiteness": "indefinite"},
            "adjective": {"lemma": "нов", "form": "нова"},
        },
    },
    {"id": "phrase-003", "promptMk": "здраво"},
]


class TestPredicateCheck:
    def test_wrong_predicate_adjective(self, validator):
        entries = check_predicate_agreement("___ е убав.", "Селото", "grammar", "l/ex", validator)
        assert len(entries) == 1
        entry = entries[0]
        assert entry.current_answer == "Селото е убав"
        assert entry.correct_answer == "Селото е убаво"
        assert entry.grammar_rule == "adjective_agrees_with_noun_gender"
        assert entry.fix_applied is False

    def test_predicate_uses_indefinite_form(self, validator):
        # definite noun, indefinite predicate adjective
        assert check_predicate_agreement("___ е голема", "куќата", "grammar", "l/ex", validator) == []

    @pytest.mark.parametrize("sentence,answer", [
        ("Ова е ___.", "куќа"),
        ("___ е голема.", "планина"),
        ("___ е брза.", "куќа"),
    ])
    def test_skips_what_it_cannot_check(self, validator, sentence, answer):
        assert check_predicate_agreement(sentence, answer, "grammar", "l/ex", validator) == []


class TestScanners:
    def test_scan_grammar_lessons(self, validator):
        scan = scan_grammar_lessons(LESSONS, validator)
        assert scan.items_scanned == 4
        assert [e.content_id for e in scan.entries] == ["adjectives-gender/ex-3"]

    def test_scan_content_items(self, validator):
        scan = scan_content_items(ITEMS, validator)
        assert scan.items_scanned == 3
        assert len(scan.entries) == 1
        entry = scan.entries[0]
        assert entry.content_id == "phrase-002"
        assert entry.current_answer == "нова"
        assert entry.correct_answer == "нов"
        assert entry.sentence == "нов град"

    def test_invalid_item_metadata_skipped(self, validator):
        items = [{"id": "bad", "linguisticMetadata": {"noun": {"gender": "common"}}}]
        scan = scan_content_items(items, validator)
        assert scan.items_scanned == 1
        assert scan.entries == []


class TestAuditReport:
    def test_audit_all_content(self, validator):
        now = datetime(2026, 3, 1, tzinfo=timezone.utc)
        report = audit_all_content(LESSONS, ITEMS, validator, now=now)
        assert report.timestamp == now.isoformat()
        assert report.total_items_scanned == 7
        assert report.issues_found == 2
        assert report.issues_fixed == 0
        assert len(report.critical_entries) == 2

    def test_report_serializes_camel_case(self, validator):
        data = audit_all_content(LESSONS, ITEMS, validator).to_dict()
        assert data["totalItemsScanned"] == 7
        assert {"contentId", "currentAnswer", "correctAnswer", "grammarRule", "fixApplied"} <= set(data["entries"][0])

    def test_markdown(self, validator):
        report = audit_all_content(LESSONS, ITEMS, validator)
        markdown = format_audit_report_as_markdown(report)
        assert markdown.startswith("# Content QA Audit Report")
        assert "**Issues Found:** 2" in markdown
        assert "| adjectives-gender/ex-3 |" in markdown

    def test_markdown_without_issues(self, validator):
        report = audit_all_content([], [], validator)
        assert "No issues found" in format_audit_report_as_markdown(report)

    def test_entry_accepts_camel_case(self):
        entry = ContentAuditEntry.model_validate({
            "feature": "grammar", "contentId": "x", "sentence": "", "currentAnswer": "a",
            "correctAnswer": "b", "issue": "i", "grammarRule": "definiteness_suffix_rule",
        })
        assert entry.content_id == "x"


class TestValidateContentCli:
    @pytest.fixture(autouse=True)
    def quiet_cli_logging(self, monkeypatch):
        # main() reconfigures logging from settings
        monkeypatch.setattr(settings, "LOG_LEVEL", "WARNING")
        monkeypatch.setattr(settings, "LOG_JSON", False)

    @pytest.fixture
    def data_dir(self, tmp_path):
        data = tmp_path / "data"
        data.mkdir()
        (data / "grammar-lessons.json").write_text(json.dumps(LESSONS, ensure_ascii=False), encoding="utf-8")
        (data / "content-items.json").write_text(json.dumps({"items": ITEMS}, ensure_ascii=False), encoding="utf-8")
        return data

    def test_writes_reports(self, data_dir, tmp_path):
        reports = tmp_path / "reports"
        assert main(["--data-dir", str(data_dir), "--reports-dir", str(reports), "--quiet"]) == 0

        latest = json.loads((reports / "content-audit-latest.json").read_text(encoding="utf-8"))
        assert latest["issuesFound"] == 2
        assert (reports / "content-audit-latest.md").exists()
        assert len(list(reports.glob("content-audit-*.json"))) == 2

    def test_ci_mode_fails_on_critical(self, data_dir, tmp_path):
        args = ["--data-dir", str(data_dir), "--reports-dir", str(tmp_path / "r"), "--quiet"]
        assert main([*args, "--ci"]) == 1
        assert main([*args, "--strict"]) == 1

    def test_missing_files_are_empty(self, tmp_path):
        reports = tmp_path / "r"
        assert main(["--data-dir", str(tmp_path / "nowhere"), "--reports-dir", str(reports), "--ci"]) == 0
        latest = json.loads((reports / "content-audit-latest.json").read_text(encoding="utf-8"))
        assert latest["totalItemsScanned"] == 0

    def test_unwritable_reports_dir(self, data_dir, tmp_path):
        blocker = tmp_path / "reports"
        blocker.write_text("not a directory", encoding="utf-8")
        assert main(["--data-dir", str(data_dir), "--reports-dir", str(blocker), "--quiet"]) == 2

    def test_leaves_log_level_at_warning(self, data_dir, tmp_path):
        main(["--data-dir", str(data_dir), "--reports-dir", str(tmp_path / "r"), "--quiet"])
        assert logging.getLogger().level == logging.WARNING

    def test_explicit_language(self, data_dir, tmp_path):
        args = ["--data-dir", str(data_dir), "--reports-dir", str(tmp_path / "r"), "--quiet"]
        assert main([*args, "--language", "mk", "--ci"]) == 1

    def test_unknown_language_rejected(self, data_dir, tmp_path):
        with pytest.raises(SystemExit) as exc:
            main(["--data-dir", str(data_dir), "--reports-dir", str(tmp_path / "r"), "--language", "xx"])
        assert exc.value.code == 2

    def test_load_items_rejects_bad_json(self, tmp_path):
        path = tmp_path / "broken.json"
        path.write_text("{", encoding="utf-8")
        assert load_items(path, "items") == []

    def test_exit_code_rules(self, validator):
        clean = audit_all_content([], [], validator)
        assert exit_code(clean, ci=True, strict=True) == 0
