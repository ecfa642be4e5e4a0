"""Finding ordering and pass/fail aggregation."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, Optional

from .models import Finding, Severity, StackLabel, ToolResult

EXIT_OK = 0
EXIT_BLOCKING = 2

_ICONS = {Severity.ERROR: "x", Severity.WARN: "!", Severity.INFO: "i"}


def sort_findings(findings: Iterable[Finding]) -> List[Finding]:
    """Order by severity (highest first) then rule id; ties keep insertion order."""
    return sorted(findings, key=lambda finding: (-finding.severity.rank, finding.rule))


@dataclass
class CheckReport:
    """Aggregate outcome of one hook invocation."""

    label: StackLabel
    findings: List[Finding] = field(default_factory=list)
    tool_results: List[ToolResult] = field(default_factory=list)
    skipped_reason: Optional[str] = None

    @property
    def error_findings(self) -> List[Finding]:
        return [finding for finding in self.findings if finding.severity is Severity.ERROR]

    @property
    def failed_tools(self) -> List[ToolResult]:
        return [
            result
            for result in self.tool_results
            if not result.ok and result.command.blocking
        ]

    @property
    def error_count(self) -> int:
        return len(self.error_findings) + len(self.failed_tools)

    @property
    def passed(self) -> bool:
        return self.error_count == 0

    @property
    def exit_code(self) -> int:
        return EXIT_OK if self.passed else EXIT_BLOCKING

    def to_dict(self) -> Dict[str, Any]:
        return {
            "stack": self.label.value,
            "passed": self.passed,
            "error_count": self.error_count,
            "skipped": self.skipped_reason,
            "findings": [finding.to_dict() for finding in self.findings],
            "tools": [result.to_dict() for result in self.tool_results],
        }


def render_text(report: CheckReport, *, show_output: bool = True) -> str:
    """Plain-text rendering of a report."""
    lines: List[str] = [f"Stack: {report.label.value}"]
    if report.skipped_reason:
        lines.append(f"Skipped: {report.skipped_reason}")
        return "\n".join(lines) + "\n"

    for finding in report.findings:
        location = finding.path if finding.line is None else f"{finding.path}:{finding.line}"
        lines.append(
            f"[{_ICONS[finding.severity]}] {finding.severity.value.upper()} {finding.message} ({finding.rule}) in {location}"
        )
        if finding.hint:
            lines.append(f"    {finding.hint}")

    for result in report.tool_results:
        status = "ok" if result.ok else f"failed (exit {result.exit_code})"
        suffix = "" if result.command.blocking else " [non-blocking]"
        lines.append(f"{result.command.name}: {result.command.display} -> {status}{suffix}")
        if show_output and not result.ok and result.output.strip():
            lines.append(result.output.rstrip())

    if report.passed:
        lines.append("All checks passed.")
    else:
        lines.append(f"Found {report.error_count} blocking issue(s) that must be fixed.")
    return "\n".join(lines) + "\n"


__all__ = [
    "CheckReport",
    "EXIT_BLOCKING",
    "EXIT_OK",
    "render_text",
    "sort_findings",
]
