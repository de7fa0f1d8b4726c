"""Render lint results as a Markdown report."""

from __future__ import annotations

from querykey_lint.rules import RULES
from querykey_lint.scanner import ScanResult


def render_markdown(result: ScanResult) -> str:
    """Produce a full Markdown report from a ScanResult."""
    sections: list[str] = []
    r = result.report
    name = result.project_path.name

    # ── Title ────────────────────────────────────────────────────────────
    sections.append(f"# Query Key Report: {name}\n")

    # ── Summary box ──────────────────────────────────────────────────────
    summary_lines = [
        f"- **Project**: `{result.project_path}`",
        f"- **Files scanned**: {r.files_scanned}",
        f"- **Raw query keys**: {r.finding_count}",
        f"- **Files with findings**: {r.files_with_findings}",
        f"- **Query client identifier**: `{r.client_identifier_name}`",
        f"- **Options wrapper**: `{r.wrapper_function_name}()`",
    ]
    if r.suppressed_count:
        summary_lines.append(f"- **Suppressed by comments**: {r.suppressed_count}")
    sections.append("\n".join(summary_lines) + "\n")

    # ── Findings per file ────────────────────────────────────────────────
    if r.finding_count:
        sections.append("## Findings\n")
        for f in r.files:
            if not f.findings:
                continue
            sections.append(f"### `{f.file}`\n")
            sections.append("| Line | Column | Code |")
            sections.append("|---|---|---|")
            for finding in f.findings:
                code = _escape_cell(finding.snippet)
                sections.append(f"| {finding.line} | {finding.column} | `{code}` |")
            sections.append("")
    else:
        sections.append("No raw query keys found.\n")

    # ── Files with problems ──────────────────────────────────────────────
    skipped = [f for f in r.files if f.skipped]
    broken = [f for f in r.files if f.parse_errors and not f.skipped]
    if skipped or broken:
        sections.append("## Incomplete Coverage\n")
        for f in skipped:
            sections.append(f"- `{f.file}`: skipped ({f.skip_reason or 'unknown reason'})")
        for f in broken:
            sections.append(f"- `{f.file}`: syntax errors, results may be incomplete")
        sections.append("")

    # ── Rules ────────────────────────────────────────────────────────────
    sections.append("## Rules\n")
    for meta in RULES.values():
        sections.append(f"- **{meta.name}** ({meta.type}): {meta.description}. {meta.message}")
    sections.append("")

    return "\n".join(sections)


def _escape_cell(text: str) -> str:
    return text.replace("|", "\\|").replace("`", "'")
