"""Rule primitives evaluated against edited files."""

from __future__ import annotations

import re
from abc import ABC, abstractmethod
from typing import Iterable, Iterator, List, Optional, Pattern, Sequence, Tuple

from ..models import Finding, Severity, SourceFile
from ..paths import matches_any

_FLAGS = re.MULTILINE
_REGION_END = re.compile(r"^[ \t]*\}")


def _compile(patterns: Iterable[str]) -> Tuple[Pattern[str], ...]:
    return tuple(re.compile(pattern, _FLAGS) for pattern in patterns)


def _line_of(content: str, offset: int) -> int:
    return content.count("\n", 0, offset) + 1


class CheckRule(ABC):
    """Contract for pure predicates over an edited file.

    A rule is scoped by path globs (any must match) and file suffixes; an
    empty scope means every file. Rules never touch the filesystem.
    """

    def __init__(
        self,
        rule_id: str,
        message: str,
        *,
        severity: Severity = Severity.INFO,
        hint: Optional[str] = None,
        paths: Sequence[str] = (),
        suffixes: Sequence[str] = (),
    ) -> None:
        self.rule_id = rule_id
        self.message = message
        self.severity = severity
        self.hint = hint
        self.paths = tuple(paths)
        self.suffixes = tuple(suffix.lower() for suffix in suffixes)

    def applies_to(self, path: str) -> bool:
        if self.suffixes and not path.lower().endswith(self.suffixes):
            return False
        if self.paths and not matches_any(path, self.paths):
            return False
        return True

    def check(self, source: SourceFile) -> List[Finding]:
        """Return findings for ``source``; unreadable content yields none."""
        if source.content is None or not self.applies_to(source.path):
            return []
        return list(self.scan(source.path, source.content))

    @abstractmethod
    def scan(self, path: str, content: str) -> Iterable[Finding]:
        """Produce findings for file content already known to be in scope."""

    def finding(self, path: str, *, line: Optional[int] = None) -> Finding:
        return Finding(
            rule=self.rule_id,
            severity=self.severity,
            message=self.message,
            path=path,
            hint=self.hint,
            line=line,
        )

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.rule_id!r})"


class ForbiddenPatternRule(CheckRule):
    """Reports every occurrence of a disallowed pattern."""

    def __init__(
        self,
        rule_id: str,
        message: str,
        *,
        pattern: str,
        requires: Sequence[str] = (),
        severity: Severity = Severity.ERROR,
        **kwargs: object,
    ) -> None:
        super().__init__(rule_id, message, severity=severity, **kwargs)  # type: ignore[arg-type]
        self.pattern = re.compile(pattern, _FLAGS)
        self.requires = _compile(requires)

    def scan(self, path: str, content: str) -> Iterator[Finding]:
        if not all(regex.search(content) for regex in self.requires):
            return
        for match in self.pattern.finditer(content):
            yield self.finding(path, line=_line_of(content, match.start()))


class RegionRule(CheckRule):
    """Reports once per method region that contains a forbidden call.

    A region opens on a line matching ``start`` and closes on the next line
    that begins with a closing brace.
    """

    def __init__(
        self,
        rule_id: str,
        message: str,
        *,
        start: str,
        forbidden: str,
        severity: Severity = Severity.ERROR,
        **kwargs: object,
    ) -> None:
        super().__init__(rule_id, message, severity=severity, **kwargs)  # type: ignore[arg-type]
        self.start = re.compile(start)
        self.forbidden = re.compile(forbidden)

    def scan(self, path: str, content: str) -> Iterator[Finding]:
        for start_line, body in self.regions(content):
            if self.forbidden.search(body):
                yield self.finding(path, line=start_line)

    def regions(self, content: str) -> List[Tuple[int, str]]:
        lines = content.splitlines()
        regions: List[Tuple[int, str]] = []
        index = 0
        while index < len(lines):
            if not self.start.search(lines[index]):
                index += 1
                continue
            start = index
            index += 1
            while index < len(lines) and not _REGION_END.match(lines[index]):
                index += 1
            end = min(index, len(lines) - 1)
            regions.append((start + 1, "\n".join(lines[start : end + 1])))
            index = end + 1
        return regions


class AdvisoryRule(CheckRule):
    """Annotates a file at most once when its content matches a shape.

    Fires when every ``present`` pattern matches and no ``absent`` pattern does.
    """

    def __init__(
        self,
        rule_id: str,
        message: str,
        *,
        present: Sequence[str] = (),
        absent: Sequence[str] = (),
        severity: Severity = Severity.INFO,
        **kwargs: object,
    ) -> None:
        super().__init__(rule_id, message, severity=severity, **kwargs)  # type: ignore[arg-type]
        self.present = _compile(present)
        self.absent = _compile(absent)

    def scan(self, path: str, content: str) -> Iterator[Finding]:
        if not all(regex.search(content) for regex in self.present):
            return
        if any(regex.search(content) for regex in self.absent):
            return
        line = None
        if self.present:
            match = self.present[0].search(content)
            if match is not None:
                line = _line_of(content, match.start())
        yield self.finding(path, line=line)


class TypeLoosenessRule(AdvisoryRule):
    """Flags the ``any`` escape hatch in statically-typed sources."""

    ANY_PATTERN = r"(:\s*any\b|\bas any\b|<any>)"
    TS_SCRIPT = re.compile(r"<script[^>]*\blang=[\"']ts[\"']")

    def __init__(
        self,
        rule_id: str = "typescript.any",
        message: str = "Avoid using the 'any' type in TypeScript",
        *,
        suffixes: Sequence[str] = (".ts", ".tsx", ".vue"),
        severity: Severity = Severity.WARN,
        hint: Optional[str] = "Describe the shape with an interface or a union type",
        paths: Sequence[str] = (),
    ) -> None:
        super().__init__(
            rule_id,
            message,
            present=(self.ANY_PATTERN,),
            severity=severity,
            suffixes=suffixes,
            hint=hint,
            paths=paths,
        )

    def scan(self, path: str, content: str) -> Iterator[Finding]:
        if path.lower().endswith(".vue") and not self.TS_SCRIPT.search(content):
            return iter(())
        return super().scan(path, content)


class PestStyleRule(CheckRule):
    """Requires PHP test files to be written with Pest rather than PHPUnit classes."""

    PHPUNIT_MARKERS = _compile(
        (
            r"extends\s+\w*TestCase",
            r"use\s+PHPUnit\\.*TestCase",
            r"public function test\w*\s*\(",
            r"@test\b",
            r"\$this->assert\w+\(",
            r"function setUp\(\)\s*:\s*void",
            r"function tearDown\(\)\s*:\s*void",
        )
    )
    PEST_MARKERS = _compile(
        (
            r"^\s*it\(",
            r"^\s*test\(",
            r"^\s*describe\(",
            r"^\s*beforeEach\(",
            r"^\s*afterEach\(",
            r"\bexpect\(",
            r"^\s*uses\(",
        )
    )

    RULE_ID = "laravel.pest-style"

    def __init__(self) -> None:
        super().__init__(
            self.RULE_ID,
            "PHPUnit-style test detected; this project requires Pest tests",
            severity=Severity.ERROR,
            hint="Use test()/it() with expect() assertions and beforeEach() instead of setUp()",
            paths=("tests/**",),
            suffixes=(".php",),
        )

    def scan(self, path: str, content: str) -> Iterator[Finding]:
        has_phpunit = any(regex.search(content) for regex in self.PHPUNIT_MARKERS)
        has_pest = any(regex.search(content) for regex in self.PEST_MARKERS)
        if has_phpunit and not has_pest:
            yield self.finding(path)


__all__ = [
    "AdvisoryRule",
    "CheckRule",
    "ForbiddenPatternRule",
    "PestStyleRule",
    "RegionRule",
    "TypeLoosenessRule",
]
