"""Per-project ignore patterns and inline disable markers."""

from __future__ import annotations

from pathlib import Path
from typing import List, Optional, Sequence

from .logging import get_logger
from .paths import pattern_matches

IGNORE_FILENAME = ".larahooks-ignore"
DISABLE_MARKER = "larahooks-disable"
MARKER_SCAN_LINES = 5

_logger = get_logger("ignore")


def load_ignore_patterns(root: Path | str) -> List[str]:
    """Read glob patterns from .larahooks-ignore, skipping blanks and comments."""
    path = Path(root) / IGNORE_FILENAME
    try:
        text = path.read_text(encoding="utf-8")
    except FileNotFoundError:
        return []
    except (OSError, UnicodeDecodeError) as exc:
        _logger.debug("Could not read %s: %s", path, exc)
        return []
    patterns: List[str] = []
    for line in text.splitlines():
        stripped = line.strip()
        if not stripped or stripped.startswith("#"):
            continue
        patterns.append(stripped)
    return patterns


def has_disable_marker(content: Optional[str]) -> bool:
    if not content:
        return False
    head = content.splitlines()[:MARKER_SCAN_LINES]
    return any(DISABLE_MARKER in line for line in head)


def skip_reason(path: str, content: Optional[str], patterns: Sequence[str]) -> Optional[str]:
    """Return why ``path`` should be skipped, or None when it should be checked."""
    for pattern in patterns:
        if pattern_matches(path, pattern):
            _logger.debug("Skipping %s due to %s pattern: %s", path, IGNORE_FILENAME, pattern)
            return f"matches {IGNORE_FILENAME} pattern {pattern!r}"
    if has_disable_marker(content):
        _logger.debug("Skipping %s due to inline %s comment", path, DISABLE_MARKER)
        return f"inline {DISABLE_MARKER} marker"
    return None


__all__ = [
    "DISABLE_MARKER",
    "IGNORE_FILENAME",
    "has_disable_marker",
    "load_ignore_patterns",
    "skip_reason",
]
