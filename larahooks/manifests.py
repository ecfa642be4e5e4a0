"""Manifest loading helpers for Laravel projects."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Dict, FrozenSet, Iterable, Set

from .logging import get_logger
from .models import ManifestFacts

MARKER_FILE = "artisan"
BACKEND_MANIFEST = "composer.json"
FRONTEND_MANIFEST = "package.json"

TOOL_CONFIG_FILES = (
    "vitest.config.js",
    "vitest.config.ts",
    "vitest.config.mjs",
    "jest.config.js",
    "jest.config.ts",
    ".prettierrc",
    ".prettierrc.json",
    "prettier.config.js",
)

_logger = get_logger("manifests")


def load_manifest_facts(root: Path | str) -> ManifestFacts:
    """Build a ManifestFacts snapshot for ``root``.

    Missing, unreadable or malformed manifests produce empty package sets.
    """
    root_path = Path(root)
    composer = _load_json_object(root_path / BACKEND_MANIFEST)
    package = _load_json_object(root_path / FRONTEND_MANIFEST)

    return ManifestFacts(
        root=str(root_path),
        has_marker=_is_file(root_path / MARKER_FILE),
        has_backend_manifest=_is_file(root_path / BACKEND_MANIFEST),
        backend_packages=_package_names(composer, ("require", "require-dev")),
        frontend_packages=_package_names(package, ("dependencies", "devDependencies")),
        backend_scripts=_package_names(composer, ("scripts",)),
        frontend_scripts=_package_names(package, ("scripts",)),
        present_files=frozenset(
            name for name in TOOL_CONFIG_FILES if _is_file(root_path / name)
        ),
    )


def _is_file(path: Path) -> bool:
    try:
        return path.is_file()
    except OSError:
        return False


def _load_json_object(path: Path) -> Dict[str, object]:
    if not _is_file(path):
        _logger.debug("Manifest %s not found", path)
        return {}
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, UnicodeDecodeError) as exc:
        _logger.debug("Manifest %s unreadable: %s", path, exc)
        return {}
    except json.JSONDecodeError as exc:
        _logger.debug("Manifest %s is not valid JSON: %s", path, exc)
        return {}
    if isinstance(data, dict):
        return data
    return {}


def _package_names(data: Dict[str, object], keys: Iterable[str]) -> FrozenSet[str]:
    names: Set[str] = set()
    for key in keys:
        section = data.get(key)
        if isinstance(section, dict):
            names.update(str(name) for name in section.keys())
    return frozenset(names)


__all__ = [
    "BACKEND_MANIFEST",
    "FRONTEND_MANIFEST",
    "MARKER_FILE",
    "TOOL_CONFIG_FILES",
    "load_manifest_facts",
]
