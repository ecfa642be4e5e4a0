"""Inertia.js rules shared by the Vue and React adapters, plus adapter-specific rules."""

from __future__ import annotations

from typing import Tuple

from ..models import Severity
from .base import AdvisoryRule, CheckRule, ForbiddenPatternRule, TypeLoosenessRule

PAGE_PATHS = ("*resources/js/Pages/*",)
CONTROLLER_PATHS = ("*app/Http/Controllers/*",)
SCRIPT_SUFFIXES = (".js", ".ts", ".jsx", ".tsx", ".vue")

INERTIA_RULES: Tuple[CheckRule, ...] = (
    AdvisoryRule(
        "inertia.direct-api-call",
        "Consider using Inertia visits instead of direct API calls",
        present=(r"(axios\.(get|post|put|delete)\(['\"]/|fetch\(['\"]/)",),
        suffixes=SCRIPT_SUFFIXES,
    ),
    AdvisoryRule(
        "inertia.render-usage",
        "Check Inertia::render usage",
        present=(r"return Inertia::render",),
        absent=(r"Inertia::render\([^,]+,\s*\[", r"Inertia::render\([^)]+\)"),
        paths=CONTROLLER_PATHS,
    ),
    AdvisoryRule(
        "inertia.json-response",
        "Consider if this should be an Inertia response",
        present=(r"return response\(\)->json",),
        paths=CONTROLLER_PATHS,
    ),
)

VUE_RULES: Tuple[CheckRule, ...] = (
    AdvisoryRule(
        "vue.script-setup",
        "Consider using <script setup> syntax",
        present=(r"<script>",),
        absent=(r"<script setup",),
        paths=PAGE_PATHS,
        suffixes=(".vue",),
    ),
    AdvisoryRule(
        "vue.page-layout",
        "Consider defining a layout for this Inertia page",
        absent=(r"(definePageProps|layout:|Layout)",),
        paths=PAGE_PATHS,
        suffixes=(".vue",),
    ),
    AdvisoryRule(
        "vue.options-api",
        "Consider migrating to the Composition API",
        present=(r"(export default \{|data\(\)|methods:|computed:|watch:)",),
        absent=(r"<script setup",),
        suffixes=(".vue",),
    ),
    TypeLoosenessRule(suffixes=(".ts", ".vue")),
)

REACT_RULES: Tuple[CheckRule, ...] = (
    AdvisoryRule(
        "react.function-component",
        "Use function components in React",
        absent=(r"(function|const) .* = .* => \{|export default function",),
        paths=PAGE_PATHS,
        suffixes=(".jsx", ".tsx"),
    ),
    AdvisoryRule(
        "react.page-layout",
        "Consider defining a layout for this Inertia page",
        absent=(r"\.layout = |Layout>|layout:",),
        paths=PAGE_PATHS,
        suffixes=(".jsx", ".tsx"),
    ),
    AdvisoryRule(
        "react.class-component",
        "Consider using function components with hooks",
        present=(r"class .* extends (React\.Component|Component)",),
        suffixes=(".jsx", ".tsx"),
    ),
    ForbiddenPatternRule(
        "react.conditional-hook",
        "Possible React hooks rule violation",
        pattern=r"if.*use[A-Z]",
        requires=(r"(useState|useEffect|useMemo|useCallback)",),
        hint="Hooks must not be called conditionally",
        suffixes=(".jsx", ".tsx"),
    ),
    TypeLoosenessRule(suffixes=(".ts", ".tsx")),
    AdvisoryRule(
        "react.prop-types",
        "Consider defining TypeScript interfaces for props",
        absent=(r"(interface|type) .*(Props|PageProps)",),
        paths=PAGE_PATHS,
        suffixes=(".ts", ".tsx"),
    ),
    AdvisoryRule(
        "react.list-keys",
        "Ensure list items have key props",
        present=(r"\.map\(",),
        absent=(r"key=",),
        severity=Severity.WARN,
        suffixes=(".jsx", ".tsx"),
    ),
)

__all__ = ["CONTROLLER_PATHS", "INERTIA_RULES", "PAGE_PATHS", "REACT_RULES", "VUE_RULES"]
