"""Check rule primitives and the per-stack rule catalogs."""

from __future__ import annotations

from .api import API_RULES
from .base import (
    AdvisoryRule,
    CheckRule,
    ForbiddenPatternRule,
    PestStyleRule,
    RegionRule,
    TypeLoosenessRule,
)
from .filament import FILAMENT_RULES
from .inertia import INERTIA_RULES, REACT_RULES, VUE_RULES
from .laravel import LARAVEL_RULES
from .livewire import LIVEWIRE_RULES

__all__ = [
    "API_RULES",
    "AdvisoryRule",
    "CheckRule",
    "FILAMENT_RULES",
    "ForbiddenPatternRule",
    "INERTIA_RULES",
    "LARAVEL_RULES",
    "LIVEWIRE_RULES",
    "PestStyleRule",
    "REACT_RULES",
    "RegionRule",
    "TypeLoosenessRule",
    "VUE_RULES",
]
