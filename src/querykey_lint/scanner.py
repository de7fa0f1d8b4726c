"""Project scanner: discovers JS/TS files, parses them and runs the rule on each."""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from datetime import datetime, timezone
from pathlib import Path

from querykey_lint.config import LintConfig, RuleConfig
from querykey_lint.models import FileReport, Finding, LintReport
from querykey_lint.rules import NO_PLAIN_QUERY_KEYS, analyze
from querykey_lint.syntax import Comment, Dialect, dialect_for_path, parse_source
from querykey_lint.utils import discover_files, snippet

log = logging.getLogger(__name__)

# // querykey-lint-disable-next-line
# // eslint-disable-line react-query-keys/no-plain-query-keys -- legacy cache
_DIRECTIVE_RE = re.compile(
    r"\b(?:querykey-lint|eslint)-disable-(next-line|line)\b([^\n]*)"
)


@dataclass
class ScanResult:
    """Lint report for a project plus the settings it was produced with."""
    report: LintReport
    project_path: Path
    config: LintConfig


def scan(project_path: Path, *, config: LintConfig | None = None) -> ScanResult:
    """Lint every JS/TS file under project_path.

    Args:
        project_path: Directory to scan.
        config: Effective settings. Defaults to LintConfig().

    Returns:
        ScanResult whose report lists one FileReport per discovered file.
    """
    project_path = project_path.resolve()
    config = config or LintConfig()

    log.info("Scanning %s", project_path)
    files = discover_files(
        project_path,
        set(config.include_extensions),
        set(config.exclude_dirs),
    )
    log.info("Discovered %d source files", len(files))

    report = LintReport(
        created_at=datetime.now(timezone.utc).isoformat(timespec="seconds"),
        client_identifier_name=config.rule.client_identifier_name,
        wrapper_function_name=config.rule.wrapper_function_name,
    )
    for fpath in files:
        report.files.append(lint_file(fpath, project_path, config.rule))

    log.info(
        "Scan complete: %d findings in %d of %d files",
        report.finding_count, report.files_with_findings, report.files_scanned,
    )
    return ScanResult(report=report, project_path=project_path, config=config)


def lint_file(fpath: Path, workspace: Path, config: RuleConfig | None = None) -> FileReport:
    """Lint one file. Read or analysis failures yield a skipped FileReport."""
    try:
        rel = str(fpath.relative_to(workspace))
    except ValueError:
        rel = str(fpath)
    dialect = dialect_for_path(fpath) or Dialect.JAVASCRIPT

    try:
        source = fpath.read_text(encoding="utf-8", errors="replace")
    except OSError as e:
        log.warning("Cannot read %s: %s", rel, e, exc_info=True)
        return FileReport(file=rel, dialect=dialect.value, skipped=True, skip_reason=f"unreadable: {e}")

    try:
        return lint_source(source, dialect=dialect, file=rel, config=config)
    except RecursionError:
        log.warning("Syntax tree too deep in %s, skipping", rel, exc_info=True)
        return FileReport(file=rel, dialect=dialect.value, skipped=True, skip_reason="syntax tree too deep")


def lint_source(
    source: str,
    *,
    dialect: Dialect = Dialect.JAVASCRIPT,
    file: str = "<input>",
    config: RuleConfig | None = None,
) -> FileReport:
    """Parse and lint source text, applying inline disable comments."""
    parsed = parse_source(source, dialect)
    if parsed.has_errors:
        log.warning("Syntax errors in %s; results may be incomplete", file)

    diagnostics = analyze(parsed.tree, config)
    disabled = disabled_lines(parsed.comments, NO_PLAIN_QUERY_KEYS.name)

    findings: list[Finding] = []
    suppressed = 0
    for d in diagnostics:
        if d.location.line in disabled:
            suppressed += 1
            continue
        findings.append(Finding(
            file=file,
            line=d.location.line,
            column=d.location.column,
            end_line=d.location.end_line,
            end_column=d.location.end_column,
            rule=d.rule,
            kind=d.kind,
            message_id=d.message_id,
            message=d.message,
            snippet=snippet(source, d.location.line),
        ))

    log.debug("%s: %d findings, %d suppressed", file, len(findings), suppressed)
    return FileReport(
        file=file,
        dialect=dialect.value,
        findings=findings,
        parse_errors=parsed.has_errors,
        suppressed=suppressed,
    )


def disabled_lines(comments: list[Comment], rule_name: str) -> set[int]:
    """Lines on which rule_name is switched off by a disable comment.

    A directive without a rule list disables every rule, so it applies here
    too. Rule names may carry a plugin prefix (`plugin/no-plain-query-keys`).
    """
    lines: set[int] = set()
    for comment in comments:
        m = _DIRECTIVE_RE.search(comment.text)
        if not m:
            continue
        scope, rest = m.group(1), m.group(2)
        if not _names_rule(rest, rule_name):
            continue
        if scope == "next-line":
            lines.add(comment.end_line + 1)
        else:
            lines.add(comment.line)
    return lines


def _names_rule(rule_list: str, rule_name: str) -> bool:
    # Drop block-comment terminator and the `-- reason` tail
    rule_list = rule_list.replace("*/", "").split("--", 1)[0].strip()
    if not rule_list:
        return True
    names = [n.strip() for n in rule_list.split(",") if n.strip()]
    return any(n == rule_name or n.endswith(f"/{rule_name}") for n in names)
