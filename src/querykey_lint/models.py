"""Pydantic models for lint reports."""

from __future__ import annotations

from pydantic import BaseModel, Field, computed_field


class Finding(BaseModel):
    file: str
    line: int
    column: int
    end_line: int
    end_column: int
    rule: str
    kind: str           # "RAW_QUERY_KEY"
    message: str
    message_id: str = ""
    snippet: str = ""


class FileReport(BaseModel):
    file: str
    dialect: str = ""                  # "javascript", "typescript", "tsx"
    findings: list[Finding] = Field(default_factory=list)
    parse_errors: bool = False         # tree-sitter recovered from syntax errors
    suppressed: int = 0                # findings dropped by disable comments
    skipped: bool = False
    skip_reason: str | None = None


class LintReport(BaseModel):
    created_at: str = ""
    client_identifier_name: str = ""
    wrapper_function_name: str = ""
    files: list[FileReport] = Field(default_factory=list)

    @computed_field
    @property
    def finding_count(self) -> int:
        return sum(len(f.findings) for f in self.files)

    @computed_field
    @property
    def files_scanned(self) -> int:
        return sum(1 for f in self.files if not f.skipped)

    @computed_field
    @property
    def files_with_findings(self) -> int:
        return sum(1 for f in self.files if f.findings)

    @computed_field
    @property
    def suppressed_count(self) -> int:
        return sum(f.suppressed for f in self.files)

    def all_findings(self) -> list[Finding]:
        return [finding for f in self.files for finding in f.findings]
