#!/usr/bin/env python3
"""Content QA validation.

Runs grammar agreement checks over authored learning content and writes
Markdown and JSON audit reports.

Usage (from backend/):
    python -m scripts.validate_content            # audit and write reports
    python -m scripts.validate_content --ci       # exit 1 on critical issues
    python -m scripts.validate_content --strict   # exit 1 on any issue
"""
import argparse
import json
import sys
from datetime import date
from pathlib import Path
from typing import Any

from core.config import settings
from core.errors import (
    AppError,
    ErrorCode,
    Ok,
    Result,
    file_not_found,
    file_read_error,
    from_exception,
    invalid_json,
)
from core.logging import bind_context, clear_context, configure_logging, get_logger
from engines.content_audit import (
    ContentAuditReport,
    audit_all_content,
    format_audit_report_as_markdown,
)
from languages import get_module, list_languages

log = get_logger("scripts.validate_content")

GRAMMAR_LESSONS_FILE = "grammar-lessons.json"
CONTENT_ITEMS_FILE = "content-items.json"


def load_json_file(path: Path) -> Result[Any, AppError]:
    if not path.exists():
        return file_not_found(path, origin="validate_content")
    try:
        text = path.read_text(encoding="utf-8")
    except OSError as e:
        return file_read_error(path, e, origin="validate_content")
    try:
        return Ok(json.loads(text))
    except json.JSONDecodeError as e:
        return invalid_json(f"{path.name}: {e.msg}", origin="validate_content", cause=e)


def load_items(path: Path, key: str) -> list[dict]:
    """Load a list of items, accepting either a bare list or {key: [...]}."""
    result = load_json_file(path)
    if result.is_err():
        log.warning("content_file_skipped", path=str(path), error=str(result.unwrap_err()))
        return []

    data = result.unwrap()
    if isinstance(data, dict):
        data = data.get(key, [])
    if not isinstance(data, list):
        log.warning("content_file_unexpected_shape", path=str(path))
        return []
    return [item for item in data if isinstance(item, dict)]


def save_reports(report: ContentAuditReport, reports_dir: Path) -> Result[list[Path], AppError]:
    """Write dated and latest Markdown/JSON reports."""
    markdown = format_audit_report_as_markdown(report)
    payload = json.dumps(report.to_dict(), ensure_ascii=False, indent=2)

    written = []
    try:
        reports_dir.mkdir(parents=True, exist_ok=True)
        for stem in (f"content-audit-{date.today().isoformat()}", "content-audit-latest"):
            md_path = reports_dir / f"{stem}.md"
            json_path = reports_dir / f"{stem}.json"
            md_path.write_text(markdown, encoding="utf-8")
            json_path.write_text(payload, encoding="utf-8")
            written.extend((md_path, json_path))
    except OSError as e:
        return from_exception(e, code=ErrorCode.E6000_RESOURCE_GENERIC, origin="validate_content", path=str(reports_dir))

    log.info("reports_written", reports_dir=str(reports_dir), files=len(written))
    return Ok(written)


def print_summary(report: ContentAuditReport) -> None:
    print("=" * 50)
    print("VALIDATION SUMMARY")
    print(f"  Total items scanned: {report.total_items_scanned}")
    print(f"  Issues found: {report.issues_found}")
    print(f"  Issues fixed: {report.issues_fixed}")

    critical = report.critical_entries
    if critical:
        print("\n  CRITICAL ISSUES DETECTED\n")
        for entry in critical:
            print(f"  ❌ {entry.content_id}")
            print(f"     Issue: {entry.issue}")
            print(f'     Current: "{entry.current_answer}"')
            print(f'     Should be: "{entry.correct_answer}"')
    elif report.entries:
        print("\n  Issues found (non-critical):\n")
        for entry in report.entries:
            print(f"  ⚡ {entry.content_id}: {entry.issue}")
    else:
        print("\n  ✅ All content passed validation!")


def exit_code(report: ContentAuditReport, ci: bool, strict: bool) -> int:
    if strict and report.issues_found > 0:
        return 1
    if ci and report.critical_entries:
        return 1
    return 0


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Validate learning content grammar")
    parser.add_argument("--data-dir", type=Path, default=Path(settings.QA_DATA_DIR), help="Content data directory")
    parser.add_argument("--reports-dir", type=Path, default=Path(settings.QA_REPORTS_DIR), help="Report output directory")
    parser.add_argument("--ci", action="store_true", help="Exit with error on critical issues")
    parser.add_argument("--strict", action="store_true", help="Exit with error on any issue")
    parser.add_argument("--quiet", action="store_true", help="Skip the printed summary")
    parser.add_argument(
        "--language",
        default="mk",
        choices=[lang["code"] for lang in list_languages()],
        help="Language module whose validator checks the content",
    )
    args = parser.parse_args(argv)

    configure_logging(level=settings.LOG_LEVEL, json_logs=settings.LOG_JSON)
    bind_context(data_dir=str(args.data_dir), language=args.language, ci=args.ci, strict=args.strict)

    try:
        lessons = load_items(args.data_dir / GRAMMAR_LESSONS_FILE, "lessons")
        items = load_items(args.data_dir / CONTENT_ITEMS_FILE, "items")
        log.info("content_loaded", lessons=len(lessons), items=len(items))

        validator = get_module(args.language).get_validator()
        report = audit_all_content(lessons, items, validator)

        if not args.quiet:
            print_summary(report)

        saved = save_reports(report, args.reports_dir)
        if saved.is_err():
            log.error("reports_not_written", error=str(saved.unwrap_err()))
            return 2

        code = exit_code(report, args.ci, args.strict)
        if code:
            log.error("content_validation_failed", issues=report.issues_found, critical=len(report.critical_entries))
        return code
    finally:
        clear_context()


if __name__ == "__main__":
    sys.exit(main())
