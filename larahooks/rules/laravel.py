"""Rules shared by every Laravel stack."""

from __future__ import annotations

from typing import Tuple

from .base import CheckRule, PestStyleRule

LARAVEL_RULES: Tuple[CheckRule, ...] = (PestStyleRule(),)

__all__ = ["LARAVEL_RULES"]
