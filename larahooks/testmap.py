"""Test-file lookup, exemption handling and test command planning."""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from pathlib import Path, PurePosixPath
from typing import List, Optional, Sequence, Set

from .commands import focused_test_command, to_tool
from .config import HooksConfig
from .dispatch import evaluate, exemptions_for, test_locations_for, tests_required_for
from .models import Finding, ManifestFacts, Severity, SourceFile, StackLabel, ToolCommand
from .paths import matches_any, pattern_matches
from .rules import PestStyleRule

MISSING_TEST_RULE = "tests.missing"

PHP_SUFFIXES = (".php",)
SCRIPT_SUFFIXES = (".js", ".ts", ".jsx", ".tsx", ".vue")
FRONTEND_ROOT = "resources/js"

_SCRIPT_TEST_EXTENSIONS = ("js", "ts", "jsx", "tsx")

# Exempt whatever the stack: third-party, generated, config, fixtures, build output.
GLOBAL_EXEMPT = (
    "vendor/",
    "node_modules/",
    "gen/",
    "generated/",
    ".gen/",
    "testdata/",
    "fixtures/",
    "examples/",
    "dist/",
    "build/",
    "coverage/",
    "docs/",
    "scripts/",
    "config/",
    "bootstrap/",
    "public/",
    "storage/",
    "*.d.ts",
    "*.config.js",
    "*.config.ts",
    "*.config.mjs",
)

_ENTRY_POINT_STEMS = {"index", "main", "app", "bootstrap", "setup", "ssr"}
_TEST_NAME = re.compile(r"(Test\.php|\.(test|spec)\.[cm]?[jt]sx?)$")


def is_test_file(path: str) -> bool:
    """Return True for test sources (PHP *Test.php, JS *.test/*.spec, tests dirs)."""
    if _TEST_NAME.search(path):
        return True
    parts = PurePosixPath(path).parts[:-1]
    return any(part.lower() == "tests" or part == "__tests__" for part in parts)


def is_exempt(path: str, label: StackLabel | str | None) -> bool:
    """Return True when ``path`` is not expected to have a test."""
    if matches_any(path, GLOBAL_EXEMPT):
        return True
    name = PurePosixPath(path)
    if name.suffix.lower() in SCRIPT_SUFFIXES and name.stem in _ENTRY_POINT_STEMS:
        return True
    return matches_any(path, exemptions_for(label))


def candidate_tests(
    path: str,
    label: StackLabel | str | None,
    config: Optional[HooksConfig] = None,
) -> List[str]:
    """Ordered project-relative locations where a test for ``path`` may live.

    Plain directories from the label's test locations are included; glob
    locations need the filesystem and are searched by ``find_existing_test``.
    """
    source = PurePosixPath(path)
    suffix = source.suffix.lower()
    directories = test_locations_for(label, config=config).directories()
    if suffix in PHP_SUFFIXES:
        return _php_candidates(source, directories)
    if suffix in SCRIPT_SUFFIXES:
        return _script_candidates(source, directories)
    return []


def _php_candidates(source: PurePosixPath, directories: Sequence[str]) -> List[str]:
    base = source.stem
    parent = source.parent.name
    candidates = [
        f"tests/Unit/{base}Test.php",
        f"tests/Feature/{base}Test.php",
    ]
    if parent:
        candidates.append(f"tests/Unit/{parent}/{base}Test.php")
        candidates.append(f"tests/Feature/{parent}/{base}Test.php")
    for directory in directories:
        if directory.startswith("tests/"):
            candidates.append(f"{directory}/{base}Test.php")
    return _unique(candidates)


def _script_candidates(source: PurePosixPath, directories: Sequence[str]) -> List[str]:
    base = _script_base(source.name)
    directory = str(source.parent)
    prefix = "" if directory in {"", "."} else f"{directory}/"
    candidates = [f"{prefix}{name}" for name in _script_test_names(base)]
    candidates.extend(f"{prefix}__tests__/{name}" for name in _script_test_names(base))

    # resources/js/Pages/Dashboard.vue may be mirrored as <dir>/Pages/Dashboard.test.js
    nested = ""
    if directory.startswith(f"{FRONTEND_ROOT}/"):
        nested = directory[len(FRONTEND_ROOT) + 1 :]
    for location in directories:
        if nested:
            candidates.extend(f"{location}/{nested}/{name}" for name in _script_test_names(base))
        candidates.extend(f"{location}/{name}" for name in _script_test_names(base))
    return _unique(candidates)


def _script_base(name: str) -> str:
    for suffix in SCRIPT_SUFFIXES:
        if name.lower().endswith(suffix):
            return name[: -len(suffix)]
    return name


def _script_test_names(base: str) -> List[str]:
    return [f"{base}.{kind}.{ext}" for ext in _SCRIPT_TEST_EXTENSIONS for kind in ("test", "spec")]


def _unique(items: Sequence[str]) -> List[str]:
    seen: Set[str] = set()
    ordered: List[str] = []
    for item in items:
        if item not in seen:
            seen.add(item)
            ordered.append(item)
    return ordered


def find_existing_test(
    root: Path | str,
    path: str,
    label: StackLabel | str | None,
    config: Optional[HooksConfig] = None,
) -> Optional[str]:
    """Return the first test for ``path`` that exists under ``root``.

    Concrete candidates are tried in order, then the label's glob locations
    are searched for a test file carrying the source's base name.
    """
    root_path = Path(root)
    for candidate in candidate_tests(path, label, config):
        try:
            if (root_path / candidate).is_file():
                return candidate
        except OSError:
            continue
    return _glob_test(root_path, path, test_locations_for(label, config=config).patterns)


def _glob_test(root_path: Path, path: str, patterns: Sequence[str]) -> Optional[str]:
    source = PurePosixPath(path)
    if source.suffix.lower() in PHP_SUFFIXES:
        names = {f"{source.stem}Test.php"}
    elif source.suffix.lower() in SCRIPT_SUFFIXES:
        names = set(_script_test_names(_script_base(source.name)))
    else:
        return None
    for pattern in patterns:
        static = _static_prefix(pattern)
        # Only globs anchored below a fixed directory are searched.
        if not static:
            continue
        search_root = root_path / static
        try:
            if not search_root.is_dir():
                continue
            found = sorted(
                match for match in search_root.rglob("*") if match.name in names and match.is_file()
            )
        except OSError:
            continue
        for match in found:
            relative = match.relative_to(root_path).as_posix()
            if pattern_matches(relative, pattern):
                return relative
    return None


def _static_prefix(pattern: str) -> Optional[str]:
    """Return the glob-free leading directories of ``pattern``; None for plain paths."""
    if not any(ch in pattern for ch in "*?["):
        return None
    parts: List[str] = []
    for part in PurePosixPath(pattern).parts[:-1]:
        if any(ch in part for ch in "*?["):
            break
        parts.append(part)
    return "/".join(parts)


def requires_test(path: str, label: StackLabel | str | None) -> bool:
    """Return True when a missing test for ``path`` is reportable under ``label``."""
    if not path.lower().endswith(PHP_SUFFIXES + SCRIPT_SUFFIXES):
        return False
    if is_test_file(path):
        return False
    if not tests_required_for(label):
        return False
    return not is_exempt(path, label)


def missing_test_finding(
    root: Path | str,
    path: str,
    label: StackLabel | str | None,
    *,
    severity: Severity = Severity.ERROR,
    config: Optional[HooksConfig] = None,
) -> Optional[Finding]:
    """Return a finding when ``path`` needs a test and none of the candidates exist."""
    if not requires_test(path, label):
        return None
    if find_existing_test(root, path, label, config) is not None:
        return None
    expected = candidate_tests(path, label, config)
    return Finding(
        rule=MISSING_TEST_RULE,
        severity=severity,
        message="Missing required test file",
        path=path,
        hint="Expected one of: " + ", ".join(expected),
    )


def pest_style_findings(
    root: Path | str,
    test_file: str,
    label: StackLabel | str | None,
) -> List[Finding]:
    """Return the Pest-style findings for an existing PHP test under ``root``."""
    if not test_file.lower().endswith(PHP_SUFFIXES):
        return []
    try:
        content = (Path(root) / test_file).read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError):
        return []
    findings = evaluate(SourceFile(test_file, content), label)
    return [finding for finding in findings if finding.rule == PestStyleRule.RULE_ID]


@dataclass
class TestPlan:
    """Test commands to run for an edited file plus findings raised while planning."""

    __test__ = False  # not a pytest test class

    commands: List[ToolCommand] = field(default_factory=list)
    findings: List[Finding] = field(default_factory=list)
    test_file: Optional[str] = None
    candidates: List[str] = field(default_factory=list)


def plan_tests(
    root: Path | str,
    path: str,
    label: StackLabel | str | None,
    facts: Optional[ManifestFacts] = None,
    config: Optional[HooksConfig] = None,
    *,
    modes: Optional[Sequence[str]] = None,
) -> TestPlan:
    """Decide which test commands an edit of ``path`` should trigger.

    Editing a test runs it directly. Otherwise ``focused`` runs the matching
    test and ``package`` runs the whole suite of the file's ecosystem. A PHP
    test written as a PHPUnit class is reported and not run.
    """
    plan = TestPlan()
    lower = path.lower()
    if lower.endswith(PHP_SUFFIXES):
        ecosystem = "backend"
    elif lower.endswith(SCRIPT_SUFFIXES):
        ecosystem = "frontend"
    else:
        return plan

    locations = test_locations_for(label, facts, config)
    command = locations.backend_command if ecosystem == "backend" else locations.frontend_command
    active_modes = list(modes) if modes is not None else (
        list(config.tests.modes) if config is not None else ["focused", "package"]
    )
    severity = Severity.ERROR
    if config is not None and not config.tests.fail_on_missing:
        severity = Severity.WARN

    if is_test_file(path):
        plan.test_file = path
        plan.findings.extend(pest_style_findings(root, path, label))
        if command and not plan.findings:
            plan.commands.append(
                to_tool("test", focused_test_command(command, path), ecosystem=ecosystem)
            )
        return plan

    plan.candidates = candidate_tests(path, label, config)
    plan.test_file = find_existing_test(root, path, label, config)
    for mode in active_modes:
        if mode == "focused":
            if plan.test_file is not None:
                style = pest_style_findings(root, plan.test_file, label)
                plan.findings.extend(style)
                if command and not style:
                    plan.commands.append(
                        to_tool(
                            "focused-tests",
                            focused_test_command(command, plan.test_file),
                            ecosystem=ecosystem,
                        )
                    )
            else:
                finding = missing_test_finding(root, path, label, severity=severity, config=config)
                if finding is not None:
                    plan.findings.append(finding)
        elif mode == "package" and command:
            plan.commands.append(to_tool("package-tests", command, ecosystem=ecosystem))
    return plan


__all__ = [
    "GLOBAL_EXEMPT",
    "MISSING_TEST_RULE",
    "TestPlan",
    "candidate_tests",
    "find_existing_test",
    "is_exempt",
    "is_test_file",
    "missing_test_finding",
    "pest_style_findings",
    "plan_tests",
    "requires_test",
]
