"""Core data models shared across larahooks components."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from pathlib import PurePosixPath
from typing import Any, Dict, FrozenSet, Optional, Tuple


class StackLabel(str, Enum):
    """Frontend integration pattern detected for a Laravel project."""

    LIVEWIRE = "livewire"
    FILAMENT = "filament"
    INERTIA = "inertia"
    INERTIA_VUE = "inertia-vue"
    INERTIA_REACT = "inertia-react"
    API = "api"
    NONE = "none"
    UNKNOWN = "unknown"

    @classmethod
    def parse(cls, value: object) -> Optional["StackLabel"]:
        """Return the label named by ``value`` or None when it is not one."""
        if isinstance(value, cls):
            return value
        if not isinstance(value, str):
            return None
        normalized = value.strip().lower()
        if not normalized:
            return None
        try:
            return cls(normalized)
        except ValueError:
            return None

    def __str__(self) -> str:
        return self.value


class Severity(str, Enum):
    INFO = "info"
    WARN = "warn"
    ERROR = "error"

    @property
    def rank(self) -> int:
        return _SEVERITY_RANK[self]

    def __str__(self) -> str:
        return self.value


_SEVERITY_RANK = {Severity.INFO: 0, Severity.WARN: 1, Severity.ERROR: 2}


@dataclass(frozen=True)
class ManifestFacts:
    """Read-only snapshot of a project's manifests."""

    root: str
    has_marker: bool = False
    has_backend_manifest: bool = False
    backend_packages: FrozenSet[str] = frozenset()
    frontend_packages: FrozenSet[str] = frozenset()
    backend_scripts: FrozenSet[str] = frozenset()
    frontend_scripts: FrozenSet[str] = frozenset()
    present_files: FrozenSet[str] = frozenset()

    def has_backend_package(self, name: str) -> bool:
        return name in self.backend_packages

    def has_frontend_package(self, name: str) -> bool:
        return name in self.frontend_packages

    def has_any_frontend_package(self, *names: str) -> bool:
        return any(name in self.frontend_packages for name in names)

    def has_file(self, name: str) -> bool:
        return name in self.present_files


@dataclass(frozen=True)
class SourceFile:
    """An edited file handed to rule evaluation.

    ``path`` is project-relative with forward slashes. ``content`` is None
    when the file could not be read.
    """

    path: str
    content: Optional[str] = None

    @property
    def name(self) -> str:
        return PurePosixPath(self.path).name

    @property
    def suffix(self) -> str:
        return PurePosixPath(self.path).suffix.lower()

    @property
    def stem(self) -> str:
        return PurePosixPath(self.path).stem


@dataclass(frozen=True)
class Finding:
    """Single observation reported by a check rule."""

    rule: str
    severity: Severity
    message: str
    path: str
    hint: Optional[str] = None
    line: Optional[int] = None

    def to_dict(self) -> Dict[str, Any]:
        payload: Dict[str, Any] = {
            "rule": self.rule,
            "severity": self.severity.value,
            "message": self.message,
            "path": self.path,
        }
        if self.hint:
            payload["hint"] = self.hint
        if self.line is not None:
            payload["line"] = self.line
        return payload


@dataclass(frozen=True)
class TestLocationSet:
    """Where tests for a stack live and how each ecosystem runs them."""

    __test__ = False  # not a pytest test class

    patterns: Tuple[str, ...]
    backend_command: Optional[str] = None
    frontend_command: Optional[str] = None
    authoritative: bool = True

    def directories(self) -> Tuple[str, ...]:
        """Return the patterns that name plain directories (no glob characters)."""
        return tuple(p for p in self.patterns if not any(ch in p for ch in "*?["))


@dataclass(frozen=True)
class ToolCommand:
    """External command the caller should execute."""

    name: str
    argv: Tuple[str, ...]
    blocking: bool = True
    ecosystem: str = "backend"

    @property
    def display(self) -> str:
        return " ".join(self.argv)


@dataclass(frozen=True)
class ToolResult:
    """Outcome of an executed ToolCommand."""

    command: ToolCommand
    exit_code: int
    output: str = ""

    @property
    def ok(self) -> bool:
        return self.exit_code == 0

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.command.name,
            "command": self.command.display,
            "blocking": self.command.blocking,
            "exit_code": self.exit_code,
            "output": self.output,
        }


@dataclass
class HookEvent:
    """Edit event extracted from an editor hook payload."""

    tool_name: str
    file_path: str
