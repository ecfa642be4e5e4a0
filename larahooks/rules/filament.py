"""Filament admin panel rules. Filament builds on Livewire, whose rules are inherited."""

from __future__ import annotations

from typing import Tuple

from ..models import Severity
from .base import AdvisoryRule, CheckRule, ForbiddenPatternRule, RegionRule

RESOURCE_PATHS = ("*app/Filament/Resources/*",)

FILAMENT_RULES: Tuple[CheckRule, ...] = (
    RegionRule(
        "filament.resource-query",
        "Direct database query in Filament resource method",
        start=r"public (static )?function (form|table)\b",
        forbidden=r"(DB::|->get\(\)|->first\(\)|->find\(|->all\(\))",
        hint="Use relationships or query callbacks instead",
        paths=RESOURCE_PATHS,
    ),
    ForbiddenPatternRule(
        "filament.polling",
        "Polling detected in Filament resource",
        pattern=r"->poll\(",
        hint="Use Laravel Echo/Reverb for real-time updates",
        paths=RESOURCE_PATHS,
    ),
    AdvisoryRule(
        "filament.action-base",
        "Filament action should extend the appropriate Action class",
        absent=(r"extends\s+\S*Action\b",),
        paths=("*app/Filament/Actions/*",),
        suffixes=(".php",),
    ),
    ForbiddenPatternRule(
        "filament.string-constants",
        "String constants detected",
        pattern=r"const [A-Z_]+ = ['\"]",
        hint="Use Enum classes with getLabel(), getColor(), getIcon() methods",
        severity=Severity.ERROR,
        paths=("*app/Filament/*",),
    ),
)

__all__ = ["FILAMENT_RULES", "RESOURCE_PATHS"]
