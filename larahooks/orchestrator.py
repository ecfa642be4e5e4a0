"""Pipeline orchestration for the check, lint and test flows."""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import List, Mapping, Optional, Tuple

from .classifier import classify_facts
from .commands import lint_plan
from .config import HooksConfig, load_effective_config
from .dispatch import evaluate, test_locations_for
from .ignore import load_ignore_patterns, skip_reason
from .logging import get_logger
from .manifests import BACKEND_MANIFEST, FRONTEND_MANIFEST, MARKER_FILE, load_manifest_facts
from .models import Finding, ManifestFacts, Severity, SourceFile, StackLabel, TestLocationSet
from .paths import normalize_path
from .report import CheckReport, sort_findings
from .runner import ToolRunner
from .testmap import TestPlan, missing_test_finding, plan_tests

PROJECT_MARKERS = (MARKER_FILE, BACKEND_MANIFEST, FRONTEND_MANIFEST)


@dataclass
class Detection:
    """Classification result together with the facts it was based on."""

    label: StackLabel
    facts: ManifestFacts
    overridden: bool
    locations: TestLocationSet

    def to_dict(self) -> dict[str, object]:
        return {
            "stack": self.label.value,
            "overridden": self.overridden,
            "test_patterns": list(self.locations.patterns),
            "backend_test_command": self.locations.backend_command,
            "frontend_test_command": self.locations.frontend_command,
            "authoritative": self.locations.authoritative,
        }


def find_project_root(start: Path | str) -> Path:
    """Walk up from ``start`` to the nearest directory holding a project manifest."""
    current = Path(start).expanduser().resolve()
    if current.is_file() or not current.exists():
        current = current.parent
    for candidate in (current, *current.parents):
        if any((candidate / marker).is_file() for marker in PROJECT_MARKERS):
            return candidate
    return current


class Orchestrator:
    """Coordinates classification, rule dispatch, test planning and tool runs."""

    def __init__(
        self,
        runner: ToolRunner | None = None,
        environ: Optional[Mapping[str, str]] = None,
    ) -> None:
        self._runner = runner
        self._environ = environ
        self.logger = get_logger("orchestrator")

    @property
    def environ(self) -> Mapping[str, str]:
        return os.environ if self._environ is None else self._environ

    def load_config(self, root: Path | str) -> HooksConfig:
        return load_effective_config(Path(root), self.environ)

    def detect(self, root: Path | str, override: Optional[str] = None) -> Detection:
        """Classify the project at ``root``; ``override`` beats config and environment."""
        root_path = Path(root).expanduser().resolve()
        config = self.load_config(root_path)
        return self._detect(root_path, config, override)

    def run_check(
        self,
        root: Path | str,
        path: Path | str,
        content: Optional[str] = None,
    ) -> CheckReport:
        """Evaluate stack rules and the missing-test condition for one edited file."""
        root_path = Path(root).expanduser().resolve()
        config = self.load_config(root_path)
        detection = self._detect(root_path, config)
        label = detection.label
        rel_path = self._relative(root_path, path)
        self.logger.info("Checking %s (stack: %s)", rel_path, label.value)

        disabled = self._disabled_reason(config, label)
        if disabled:
            return CheckReport(label=label, skipped_reason=disabled)

        if content is None:
            content = self._read_source(root_path / rel_path)
        reason = skip_reason(rel_path, content, load_ignore_patterns(root_path))
        if reason:
            return CheckReport(label=label, skipped_reason=reason)

        findings: List[Finding] = list(evaluate(SourceFile(rel_path, content), label))
        self.logger.debug("Rules produced %d finding(s)", len(findings))
        if config.tests.enabled:
            severity = Severity.ERROR if config.tests.fail_on_missing else Severity.WARN
            missing = missing_test_finding(
                root_path, rel_path, label, severity=severity, config=config
            )
            if missing is not None:
                findings.append(missing)
        return CheckReport(label=label, findings=sort_findings(findings))

    def run_lint(self, root: Path | str, *, fast: bool = False) -> CheckReport:
        """Run the project's lint/format tool chain."""
        root_path = Path(root).expanduser().resolve()
        config = self.load_config(root_path)
        detection = self._detect(root_path, config)
        label = detection.label

        disabled = self._disabled_reason(config, label)
        if disabled:
            return CheckReport(label=label, skipped_reason=disabled)

        commands = lint_plan(detection.facts, config, fast=fast)
        if not commands:
            self.logger.debug("No lint tools configured for %s", root_path)
            return CheckReport(label=label)
        self.logger.info("Running %d lint tool(s) for %s", len(commands), label.value)
        results = self._runner_for(config).run_all(commands, root_path, fail_fast=config.fail_fast)
        return CheckReport(label=label, tool_results=results)

    def run_tests(self, root: Path | str, path: Path | str) -> CheckReport:
        """Run the tests an edit of ``path`` triggers."""
        root_path = Path(root).expanduser().resolve()
        config = self.load_config(root_path)
        detection = self._detect(root_path, config)
        label = detection.label
        rel_path = self._relative(root_path, path)

        disabled = self._disabled_reason(config, label)
        if disabled:
            return CheckReport(label=label, skipped_reason=disabled)
        if not config.tests.enabled:
            return CheckReport(label=label, skipped_reason="test-on-edit disabled")

        content = self._read_source(root_path / rel_path)
        reason = skip_reason(rel_path, content, load_ignore_patterns(root_path))
        if reason:
            return CheckReport(label=label, skipped_reason=reason)

        plan = plan_tests(root_path, rel_path, label, detection.facts, config)
        self.logger.debug(
            "Test plan for %s: %d command(s), test file %s",
            rel_path,
            len(plan.commands),
            plan.test_file or "none",
        )
        results = []
        if plan.commands:
            results = self._runner_for(config).run_all(
                plan.commands, root_path, fail_fast=config.fail_fast
            )
        return CheckReport(label=label, findings=sort_findings(plan.findings), tool_results=results)

    def test_plan(self, root: Path | str, path: Path | str) -> Tuple[StackLabel, TestPlan]:
        """Plan the tests an edit of ``path`` triggers without running them."""
        root_path = Path(root).expanduser().resolve()
        config = self.load_config(root_path)
        detection = self._detect(root_path, config)
        rel_path = self._relative(root_path, path)
        plan = plan_tests(root_path, rel_path, detection.label, detection.facts, config)
        return detection.label, plan

    def _detect(
        self,
        root_path: Path,
        config: HooksConfig,
        override: Optional[str] = None,
    ) -> Detection:
        facts = load_manifest_facts(root_path)
        # An unusable explicit override falls back to the configured stack.
        forced = override if StackLabel.parse(override) is not None else config.stack
        label = classify_facts(facts, forced)
        overridden = forced is not None and StackLabel.parse(forced) is label
        self.logger.debug("Detected stack %s for %s", label.value, root_path)
        return Detection(
            label=label,
            facts=facts,
            overridden=overridden,
            locations=test_locations_for(label, facts, config),
        )

    def _runner_for(self, config: HooksConfig) -> ToolRunner:
        if self._runner is not None:
            return self._runner
        return ToolRunner(timeout=config.tests.timeout)

    @staticmethod
    def _disabled_reason(config: HooksConfig, label: StackLabel) -> Optional[str]:
        if not config.enabled:
            return "larahooks disabled"
        if not config.stack_enabled(label):
            return f"{label.value} checks disabled"
        return None

    @staticmethod
    def _relative(root_path: Path, path: Path | str) -> str:
        candidate = Path(path).expanduser()
        if not candidate.is_absolute():
            return normalize_path(candidate)
        return normalize_path(candidate, root_path)

    def _read_source(self, path: Path) -> Optional[str]:
        try:
            return path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as exc:
            self.logger.debug("Could not read %s: %s", path, exc)
            return None


__all__ = ["Detection", "Orchestrator", "find_project_root"]
