"""Livewire component rules."""

from __future__ import annotations

from typing import Tuple

from .base import AdvisoryRule, CheckRule, ForbiddenPatternRule, RegionRule

COMPONENT_PATHS = ("*app/Livewire/*", "*app/Http/Livewire/*")

# Eloquent/query-builder calls that hit the database.
QUERY_CALLS = r"(DB::|->get\(\)|->first\(\)|->find\(|->all\(\)|->paginate\()"

LIFECYCLE_METHODS = ("mount", "render", "updated", "updating", "hydrate", "dehydrate", "boot")

LIVEWIRE_RULES: Tuple[CheckRule, ...] = (
    RegionRule(
        "livewire.render-query",
        "Database query in Livewire render method",
        start=r"public function render\b",
        forbidden=QUERY_CALLS,
        hint="Move queries to computed properties or component methods",
        paths=COMPONENT_PATHS,
    ),
    ForbiddenPatternRule(
        "livewire.polling",
        "Polling detected (wire:poll)",
        pattern=r"wire:poll\b",
        hint="Use Laravel Echo/Reverb for real-time updates",
    ),
    AdvisoryRule(
        "livewire.action-naming",
        "Consider using action naming convention for Livewire methods",
        present=(rf"public function (?!(?:{'|'.join(LIFECYCLE_METHODS)}))[a-z]",),
        paths=COMPONENT_PATHS,
    ),
)

__all__ = ["COMPONENT_PATHS", "LIVEWIRE_RULES", "QUERY_CALLS"]
