"""Path normalisation and glob matching shared by rules, tests and ignore files."""

from __future__ import annotations

from fnmatch import fnmatchcase
from pathlib import Path, PurePosixPath
from typing import Iterable


def normalize_path(path: str | Path, root: str | Path | None = None) -> str:
    """Return ``path`` relative to ``root`` (when inside it) with forward slashes."""
    candidate = Path(path)
    if root is not None and candidate.is_absolute():
        try:
            candidate = candidate.resolve().relative_to(Path(root).resolve())
        except (OSError, ValueError):
            pass
    normalized = str(candidate).replace("\\", "/")
    while normalized.startswith("./"):
        normalized = normalized[2:]
    return normalized


def pattern_matches(path: str, pattern: str) -> bool:
    """Match a project-relative path against a gitignore-flavoured glob."""
    normalized = path.replace("\\", "/")
    if pattern.endswith("/**"):
        prefix = pattern[:-3]
        return normalized == prefix or normalized.startswith(f"{prefix}/") or f"/{prefix}/" in normalized
    if pattern.endswith("/"):
        return normalized.startswith(pattern) or f"/{pattern}" in f"/{normalized}"
    if pattern.startswith("**/"):
        suffix = pattern[3:]
        return fnmatchcase(normalized, suffix) or fnmatchcase(normalized, f"*/{suffix}")
    if "/" in pattern:
        return fnmatchcase(normalized, pattern) or fnmatchcase(normalized, f"*/{pattern}")
    if any(ch in pattern for ch in "*?["):
        return fnmatchcase(normalized, pattern) or fnmatchcase(PurePosixPath(normalized).name, pattern)
    if normalized == pattern:
        return True
    return normalized.endswith(f"/{pattern}")


def matches_any(path: str, patterns: Iterable[str]) -> bool:
    return any(pattern_matches(path, pattern) for pattern in patterns)


__all__ = ["matches_any", "normalize_path", "pattern_matches"]
