"""Laravel frontend stack detection."""

from __future__ import annotations

from pathlib import Path
from typing import Optional, Sequence, Tuple

from .logging import get_logger
from .manifests import BACKEND_MANIFEST, MARKER_FILE, load_manifest_facts
from .models import ManifestFacts, StackLabel

FILAMENT_PACKAGE = "filament/filament"
LIVEWIRE_PACKAGE = "livewire/livewire"
INERTIA_PACKAGE = "inertiajs/inertia-laravel"

VUE_ADAPTERS = ("@inertiajs/vue3", "@inertiajs/inertia-vue3")
REACT_ADAPTERS = ("@inertiajs/react", "@inertiajs/inertia-react")

# First match wins: filament ships livewire, so the more specific package is tested first.
BACKEND_PRIORITY: Sequence[Tuple[str, StackLabel]] = (
    (FILAMENT_PACKAGE, StackLabel.FILAMENT),
    (LIVEWIRE_PACKAGE, StackLabel.LIVEWIRE),
    (INERTIA_PACKAGE, StackLabel.INERTIA),
)

_logger = get_logger("classifier")


def classify(root: Path | str, override: Optional[str] = None) -> StackLabel:
    """Return the stack label for the project at ``root``.

    A valid ``override`` always wins, without consulting the manifests.
    """
    forced = _resolve_override(override)
    if forced is not None:
        return forced

    return classify_facts(load_manifest_facts(Path(root)))


def classify_facts(facts: ManifestFacts, override: Optional[str] = None) -> StackLabel:
    """Classify an already-loaded manifest snapshot."""
    forced = _resolve_override(override)
    if forced is not None:
        return forced

    if not facts.has_marker and not facts.has_backend_manifest:
        _logger.debug("No %s or %s in %s", MARKER_FILE, BACKEND_MANIFEST, facts.root)
        return StackLabel.NONE

    for package, label in BACKEND_PRIORITY:
        if facts.has_backend_package(package):
            if label is StackLabel.INERTIA:
                return _refine_inertia(facts)
            return label

    if facts.has_marker:
        return StackLabel.API

    return StackLabel.UNKNOWN


def _refine_inertia(facts: ManifestFacts) -> StackLabel:
    if facts.has_any_frontend_package(*VUE_ADAPTERS):
        return StackLabel.INERTIA_VUE
    if facts.has_any_frontend_package(*REACT_ADAPTERS):
        return StackLabel.INERTIA_REACT
    return StackLabel.INERTIA


def _resolve_override(override: Optional[str]) -> Optional[StackLabel]:
    if override is None or not override.strip():
        return None
    label = StackLabel.parse(override)
    if label is None:
        _logger.debug("Ignoring invalid stack override %r", override)
    return label


__all__ = [
    "BACKEND_PRIORITY",
    "FILAMENT_PACKAGE",
    "INERTIA_PACKAGE",
    "LIVEWIRE_PACKAGE",
    "REACT_ADAPTERS",
    "VUE_ADAPTERS",
    "classify",
    "classify_facts",
]
