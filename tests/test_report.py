"""Tests for report aggregation and rendering."""

from __future__ import annotations

from larahooks.models import Finding, Severity, StackLabel, ToolCommand, ToolResult
from larahooks.report import EXIT_BLOCKING, EXIT_OK, CheckReport, render_text, sort_findings


def _finding(rule: str, severity: Severity, line: int | None = None) -> Finding:
    return Finding(rule=rule, severity=severity, message=f"{rule} message", path="app/Foo.php", line=line)


def test_sort_findings_is_stable_by_severity_then_rule() -> None:
    findings = [
        _finding("b.rule", Severity.INFO, 1),
        _finding("a.rule", Severity.ERROR, 2),
        _finding("c.rule", Severity.WARN, 3),
        _finding("a.rule", Severity.ERROR, 1),
        _finding("a.rule", Severity.INFO, 4),
    ]

    ordered = sort_findings(findings)

    assert [(f.rule, f.severity, f.line) for f in ordered] == [
        ("a.rule", Severity.ERROR, 2),
        ("a.rule", Severity.ERROR, 1),
        ("c.rule", Severity.WARN, 3),
        ("a.rule", Severity.INFO, 4),
        ("b.rule", Severity.INFO, 1),
    ]


def test_report_passes_with_only_advisory_findings() -> None:
    report = CheckReport(
        label=StackLabel.API,
        findings=[_finding("api.route-resource", Severity.INFO), _finding("typescript.any", Severity.WARN)],
    )

    assert report.passed
    assert report.error_count == 0
    assert report.exit_code == EXIT_OK


def test_error_findings_and_failed_blocking_tools_count() -> None:
    blocking = ToolCommand(name="lint", argv=("composer", "test:types"))
    advisory = ToolCommand(name="annotate", argv=("composer", "refactor:annotate"), blocking=False)
    report = CheckReport(
        label=StackLabel.LIVEWIRE,
        findings=[_finding("livewire.polling", Severity.ERROR, 3)],
        tool_results=[
            ToolResult(command=blocking, exit_code=1, output="Found 2 errors"),
            ToolResult(command=advisory, exit_code=1, output="annotate failed"),
        ],
    )

    assert report.error_count == 2
    assert report.exit_code == EXIT_BLOCKING
    assert [result.command.name for result in report.failed_tools] == ["lint"]


def test_to_dict_shape() -> None:
    command = ToolCommand(name="format", argv=("composer", "refactor:lint"))
    report = CheckReport(
        label=StackLabel.FILAMENT,
        findings=[_finding("filament.polling", Severity.ERROR, 7)],
        tool_results=[ToolResult(command=command, exit_code=0)],
    )

    data = report.to_dict()

    assert data["stack"] == "filament"
    assert data["passed"] is False
    assert data["findings"][0] == {
        "rule": "filament.polling",
        "severity": "error",
        "message": "filament.polling message",
        "path": "app/Foo.php",
        "line": 7,
    }
    assert data["tools"][0]["command"] == "composer refactor:lint"


def test_render_text_summarises_findings_and_tools() -> None:
    command = ToolCommand(name="lint", argv=("composer", "test:types"))
    report = CheckReport(
        label=StackLabel.LIVEWIRE,
        findings=[
            Finding(
                rule="livewire.render-query",
                severity=Severity.ERROR,
                message="Database query in Livewire render method",
                path="app/Livewire/Counter.php",
                hint="Move queries to computed properties or component methods",
                line=12,
            )
        ],
        tool_results=[ToolResult(command=command, exit_code=1, output="Found 1 error\n")],
    )

    text = render_text(report)

    assert text.startswith("Stack: livewire\n")
    assert "ERROR Database query in Livewire render method (livewire.render-query) in app/Livewire/Counter.php:12" in text
    assert "    Move queries to computed properties" in text
    assert "lint: composer test:types -> failed (exit 1)" in text
    assert "Found 1 error" in text
    assert text.rstrip().endswith("Found 2 blocking issue(s) that must be fixed.")


def test_render_text_for_skipped_report() -> None:
    report = CheckReport(label=StackLabel.NONE, skipped_reason="larahooks disabled")

    assert render_text(report) == "Stack: none\nSkipped: larahooks disabled\n"


def test_render_text_for_clean_report() -> None:
    report = CheckReport(label=StackLabel.API)

    assert render_text(report).endswith("All checks passed.\n")
