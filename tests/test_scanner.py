"""Tests for the project scanner and inline disable comments."""

from __future__ import annotations

import os
import tempfile
from pathlib import Path
from unittest.mock import patch

from querykey_lint.config import LintConfig, RuleConfig
from querykey_lint.scanner import disabled_lines, lint_file, lint_source, scan
from querykey_lint.syntax import Comment, Dialect
from querykey_lint.utils import discover_files, is_declaration_file


def _write(tmpdir: Path, name: str, content: str) -> Path:
    p = tmpdir / name
    p.parent.mkdir(parents=True, exist_ok=True)
    p.write_text(content)
    return p


class TestLintSource:
    def test_findings_carry_snippet_and_position(self):
        report = lint_source('''
const a = 1;
queryClient.setQueryData(['users'], data);
''', file="app.js")
        assert len(report.findings) == 1
        f = report.findings[0]
        assert f.file == "app.js"
        assert f.line == 3
        assert f.column == 26
        assert f.kind == "RAW_QUERY_KEY"
        assert f.rule == "no-plain-query-keys"
        assert f.message_id == "noRawQueryKeys"
        assert f.snippet == "queryClient.setQueryData(['users'], data);"

    def test_rule_config_is_applied(self):
        report = lint_source("qc.invalidateQueries(['a']);", config=RuleConfig(client_identifier_name="qc"))
        assert len(report.findings) == 1

    def test_parse_errors_are_flagged(self):
        report = lint_source("queryClient.setQueryData(['a'], ;")
        assert report.parse_errors is True

    def test_dialect_recorded(self):
        report = lint_source("const k = ['a'] as const;", dialect=Dialect.TYPESCRIPT)
        assert report.dialect == "typescript"
        assert report.parse_errors is False


class TestDisableComments:
    def test_disable_next_line(self):
        report = lint_source('''
// querykey-lint-disable-next-line
queryClient.setQueryData(['a'], data);
queryClient.setQueryData(['b'], data);
''')
        assert [f.line for f in report.findings] == [4]
        assert report.suppressed == 1

    def test_disable_line(self):
        report = lint_source(
            "queryClient.setQueryData(['a'], data); // querykey-lint-disable-line\n"
        )
        assert report.findings == []
        assert report.suppressed == 1

    def test_eslint_directive_for_this_rule(self):
        report = lint_source('''
// eslint-disable-next-line react-query-keys/no-plain-query-keys -- legacy cache
queryClient.setQueryData(['a'], data);
''')
        assert report.findings == []

    def test_eslint_directive_for_other_rule(self):
        report = lint_source('''
// eslint-disable-next-line no-console
queryClient.setQueryData(['a'], data);
''')
        assert len(report.findings) == 1

    def test_bare_eslint_directive_disables_everything(self):
        report = lint_source('''
/* eslint-disable-next-line */
queryClient.setQueryData(['a'], data);
''')
        assert report.findings == []

    def test_block_comment_spanning_lines(self):
        comments = [Comment(line=1, end_line=3, text="/*\n querykey-lint-disable-next-line\n*/")]
        assert disabled_lines(comments, "no-plain-query-keys") == {4}

    def test_rule_list(self):
        comments = [Comment(line=5, end_line=5, text="// eslint-disable-line no-console, no-plain-query-keys")]
        assert disabled_lines(comments, "no-plain-query-keys") == {5}

    def test_plain_comments_ignored(self):
        comments = [Comment(line=1, end_line=1, text="// fetch users")]
        assert disabled_lines(comments, "no-plain-query-keys") == set()


class TestScan:
    def test_scans_js_and_ts_files(self):
        with tempfile.TemporaryDirectory() as d:
            ws = Path(d)
            _write(ws, "src/a.ts", "queryClient.invalidateQueries(['a']);\n")
            _write(ws, "src/b.jsx", "useQuery({ queryKey: ['b'] });\n")
            _write(ws, "src/c.js", "queryClient.invalidateQueries(keys.all);\n")
            _write(ws, "README.md", "queryClient.invalidateQueries(['x'])\n")

            result = scan(ws)
            report = result.report
            assert report.files_scanned == 3
            assert report.finding_count == 2
            assert report.files_with_findings == 2
            assert {f.file for f in report.all_findings()} == {"src/a.ts", "src/b.jsx"}
            assert report.client_identifier_name == "queryClient"
            assert report.created_at

    def test_skips_node_modules_and_declarations(self):
        with tempfile.TemporaryDirectory() as d:
            ws = Path(d)
            _write(ws, "node_modules/lib/index.js", "queryClient.invalidateQueries(['a']);\n")
            _write(ws, "src/types.d.ts", "declare const k: ['a'];\n")
            _write(ws, "src/app.ts", "queryClient.invalidateQueries(['a']);\n")

            report = scan(ws).report
            assert [f.file for f in report.files] == ["src/app.ts"]

    def test_config_exclude_dirs_and_extensions(self):
        with tempfile.TemporaryDirectory() as d:
            ws = Path(d)
            _write(ws, "generated/api.ts", "queryClient.invalidateQueries(['a']);\n")
            _write(ws, "src/app.ts", "queryClient.invalidateQueries(['a']);\n")
            _write(ws, "src/legacy.js", "queryClient.invalidateQueries(['a']);\n")

            config = LintConfig(include_extensions=[".ts"], exclude_dirs=["generated"])
            report = scan(ws, config=config).report
            assert [f.file for f in report.files] == ["src/app.ts"]

    def test_empty_project(self):
        with tempfile.TemporaryDirectory() as d:
            report = scan(Path(d)).report
            assert report.files == []
            assert report.finding_count == 0

    def test_too_deep_tree_is_skipped_not_fatal(self):
        with tempfile.TemporaryDirectory() as d:
            ws = Path(d)
            f = _write(ws, "deep.js", "queryClient.invalidateQueries(['a']);\n")
            with patch("querykey_lint.scanner.analyze", side_effect=RecursionError):
                report = lint_file(f, ws)
            assert report.skipped is True
            assert report.skip_reason == "syntax tree too deep"
            assert report.findings == []

    def test_deeply_nested_file_is_linted(self):
        with tempfile.TemporaryDirectory() as d:
            ws = Path(d)
            chain = "if (a) {}" + "".join(f" else if (a{i}) {{}}" for i in range(300))
            f = _write(ws, "deep.js", "queryClient.setQueryData(['x'], d);\n" + chain + "\n")
            report = lint_file(f, ws)
            assert report.skipped is False
            assert [x.line for x in report.findings] == [1]


class TestDiscovery:
    def test_ignored_dirs_are_pruned_not_listed(self):
        with tempfile.TemporaryDirectory() as d:
            ws = Path(d)
            _write(ws, "src/a.ts", "x;\n")
            for i in range(20):
                _write(ws, f"node_modules/pkg{i}/lib/index.js", "x;\n")
            _write(ws, "dist/bundle.js", "x;\n")

            visited: list[Path] = []
            real_walk = os.walk

            def recording_walk(top, *args, **kwargs):
                for entry in real_walk(top, *args, **kwargs):
                    visited.append(Path(entry[0]))
                    yield entry

            with patch("querykey_lint.utils.os.walk", side_effect=recording_walk):
                files = discover_files(ws, {".ts", ".js"})

            assert files == [ws / "src" / "a.ts"]
            rel = [p.relative_to(ws).parts for p in visited]
            assert not any("node_modules" in parts or "dist" in parts for parts in rel)

    def test_results_are_sorted(self):
        with tempfile.TemporaryDirectory() as d:
            ws = Path(d)
            for name in ("src/z.ts", "lib/b.js", "src/a/index.ts", "app.tsx"):
                _write(ws, name, "x;\n")
            files = discover_files(ws, {".ts", ".js", ".tsx"})
            assert files == sorted(files)
            assert len(files) == 4

    def test_all_declaration_flavours_skipped(self):
        with tempfile.TemporaryDirectory() as d:
            ws = Path(d)
            _write(ws, "types/a.d.ts", "declare const k: ['a'];\n")
            _write(ws, "types/b.d.mts", "declare const k: ['a'];\n")
            _write(ws, "types/c.d.cts", "declare const k: ['a'];\n")
            _write(ws, "src/app.mts", "queryClient.invalidateQueries(['a']);\n")

            report = scan(ws).report
            assert [f.file for f in report.files] == ["src/app.mts"]

    def test_is_declaration_file(self):
        assert is_declaration_file("api.d.ts")
        assert is_declaration_file("api.d.mts")
        assert is_declaration_file("API.D.CTS")
        assert not is_declaration_file("app.ts")
        assert not is_declaration_file("data.mts")
