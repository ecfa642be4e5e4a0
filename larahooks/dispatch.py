"""Static registry mapping stack labels to rules and test locations."""

from __future__ import annotations

from dataclasses import dataclass
from types import MappingProxyType
from typing import Dict, List, Mapping, Optional, Set, Tuple

from .commands import backend_test_command, frontend_test_command
from .config import HooksConfig
from .logging import get_logger
from .models import Finding, ManifestFacts, SourceFile, StackLabel, TestLocationSet
from .report import sort_findings
from .rules import (
    API_RULES,
    FILAMENT_RULES,
    INERTIA_RULES,
    LARAVEL_RULES,
    LIVEWIRE_RULES,
    REACT_RULES,
    VUE_RULES,
    CheckRule,
)

LARAVEL_BASE = "laravel"
GENERIC_TEST_PATTERNS: Tuple[str, ...] = ("tests/Feature", "tests/Unit")

# Framework plumbing that rarely carries testable logic.
LARAVEL_FRAMEWORK_EXEMPT: Tuple[str, ...] = (
    "database/migrations/",
    "database/seeders/",
    "database/factories/",
    "routes/",
    "resources/views/",
    "resources/lang/",
    "resources/css/",
    "lang/",
    "app/Providers/",
    "*ServiceProvider.php",
    "app/Http/Middleware/",
    "*Middleware.php",
    "app/Console/Kernel.php",
    "app/Http/Kernel.php",
    "app/Exceptions/Handler.php",
)

# Simple data holders exempt by directory convention.
LARAVEL_DATA_HOLDERS_EXEMPT: Tuple[str, ...] = (
    "**/Enums/*.php",
    "**/Traits/*.php",
    "**/Interfaces/*.php",
    "**/Contracts/*.php",
    "**/DTOs/*.php",
    "**/ValueObjects/*.php",
    "**/Events/*.php",
    "**/Listeners/*.php",
    "**/Mail/*.php",
    "**/Notifications/*.php",
    "*Policy.php",
    "*Observer.php",
    "*Scope.php",
    "*Cast.php",
    "*Rule.php",
)

# HTTP payload shapes; API-only projects test these.
LARAVEL_HTTP_DATA_EXEMPT: Tuple[str, ...] = ("*Request.php", "*Resource.php", "*Collection.php")

# Frontend sources; Inertia projects test these.
FRONTEND_ASSETS_EXEMPT: Tuple[str, ...] = ("resources/js/",)


@dataclass(frozen=True)
class StackProfile:
    """Registry record for one stack label.

    ``rules`` are inherited through ``extends``; test patterns and exemptions
    belong to the profile itself.
    """

    name: str
    rules: Tuple[CheckRule, ...] = ()
    test_patterns: Tuple[str, ...] = GENERIC_TEST_PATTERNS
    extends: Tuple[str, ...] = ()
    exempt: Tuple[str, ...] = ()
    tests_required: bool = True
    backend_tests: bool = True
    frontend_tests: bool = False
    authoritative: bool = True


def _profiles() -> Dict[str, StackProfile]:
    backend_exempt = LARAVEL_FRAMEWORK_EXEMPT + LARAVEL_DATA_HOLDERS_EXEMPT
    inertia_patterns = ("tests/Feature/Pages", "tests/JavaScript", "resources/js/__tests__")
    profiles = (
        StackProfile(name=LARAVEL_BASE, rules=LARAVEL_RULES),
        StackProfile(
            name=StackLabel.LIVEWIRE.value,
            rules=LIVEWIRE_RULES,
            test_patterns=("tests/Feature/Livewire", "tests/Unit/Livewire"),
            extends=(LARAVEL_BASE,),
            exempt=backend_exempt + LARAVEL_HTTP_DATA_EXEMPT + FRONTEND_ASSETS_EXEMPT,
        ),
        StackProfile(
            name=StackLabel.FILAMENT.value,
            rules=FILAMENT_RULES,
            test_patterns=("tests/Feature/Filament", "tests/Feature/Livewire", "tests/Unit/Filament"),
            extends=(StackLabel.LIVEWIRE.value,),
            exempt=backend_exempt + LARAVEL_HTTP_DATA_EXEMPT + FRONTEND_ASSETS_EXEMPT,
        ),
        StackProfile(
            name=StackLabel.INERTIA.value,
            rules=INERTIA_RULES,
            test_patterns=inertia_patterns,
            extends=(LARAVEL_BASE,),
            exempt=backend_exempt + LARAVEL_HTTP_DATA_EXEMPT,
            frontend_tests=True,
        ),
        StackProfile(
            name=StackLabel.INERTIA_VUE.value,
            rules=VUE_RULES,
            test_patterns=inertia_patterns
            + ("resources/js/**/*.spec.js", "resources/js/**/*.test.js"),
            extends=(StackLabel.INERTIA.value,),
            exempt=backend_exempt + LARAVEL_HTTP_DATA_EXEMPT,
            frontend_tests=True,
        ),
        StackProfile(
            name=StackLabel.INERTIA_REACT.value,
            rules=REACT_RULES,
            test_patterns=inertia_patterns
            + (
                "resources/js/**/*.spec.tsx",
                "resources/js/**/*.test.tsx",
                "resources/js/**/*.spec.jsx",
                "resources/js/**/*.test.jsx",
            ),
            extends=(StackLabel.INERTIA.value,),
            exempt=backend_exempt + LARAVEL_HTTP_DATA_EXEMPT,
            frontend_tests=True,
        ),
        StackProfile(
            name=StackLabel.API.value,
            rules=API_RULES,
            test_patterns=("tests/Feature/Api", "tests/Unit"),
            extends=(LARAVEL_BASE,),
            exempt=backend_exempt + FRONTEND_ASSETS_EXEMPT,
        ),
        StackProfile(
            name=StackLabel.NONE.value,
            tests_required=False,
            backend_tests=False,
            frontend_tests=True,
            authoritative=False,
        ),
        StackProfile(
            name=StackLabel.UNKNOWN.value,
            tests_required=False,
            frontend_tests=True,
            authoritative=False,
        ),
    )
    return {profile.name: profile for profile in profiles}


PROFILES: Mapping[str, StackProfile] = MappingProxyType(_profiles())

FALLBACK_PROFILE = StackProfile(
    name="fallback",
    tests_required=False,
    frontend_tests=True,
    authoritative=False,
)

_logger = get_logger("dispatch")


def profile_for(label: StackLabel | str | None) -> Optional[StackProfile]:
    """Return the registered profile for ``label`` or None when it is unknown."""
    if label is None:
        return None
    key = label.value if isinstance(label, StackLabel) else str(label).strip().lower()
    return PROFILES.get(key)


def rules_for(label: StackLabel | str | None) -> Tuple[CheckRule, ...]:
    """Return the label's own rules followed by every inherited rule.

    Rules reached through more than one parent appear once. Unknown labels
    yield an empty tuple.
    """
    profile = profile_for(label)
    if profile is None:
        return ()
    collected: List[CheckRule] = []
    seen_rules: Set[str] = set()
    _collect_rules(profile, collected, seen_rules, set())
    return tuple(collected)


def _collect_rules(
    profile: StackProfile,
    collected: List[CheckRule],
    seen_rules: Set[str],
    visiting: Set[str],
) -> None:
    if profile.name in visiting:
        return
    visiting.add(profile.name)
    for rule in profile.rules:
        if rule.rule_id not in seen_rules:
            seen_rules.add(rule.rule_id)
            collected.append(rule)
    for parent_name in profile.extends:
        parent = PROFILES.get(parent_name)
        if parent is not None:
            _collect_rules(parent, collected, seen_rules, visiting)


def test_locations_for(
    label: StackLabel | str | None,
    facts: Optional[ManifestFacts] = None,
    config: Optional[HooksConfig] = None,
) -> TestLocationSet:
    """Return where tests for ``label`` live and the command per ecosystem.

    Unknown labels get the generic set flagged as non-authoritative.
    """
    profile = profile_for(label) or FALLBACK_PROFILE
    patterns = profile.test_patterns
    if (
        config is not None
        and config.tests.inertia_paths
        and profile.name.startswith(StackLabel.INERTIA.value)
    ):
        patterns = tuple(config.tests.inertia_paths)

    return TestLocationSet(
        patterns=patterns,
        backend_command=backend_test_command(config) if profile.backend_tests else None,
        frontend_command=frontend_test_command(facts) if profile.frontend_tests else None,
        authoritative=profile.authoritative,
    )


# Keep pytest from collecting the function above when it is imported into test modules.
test_locations_for.__test__ = False  # type: ignore[attr-defined]


def exemptions_for(label: StackLabel | str | None) -> Tuple[str, ...]:
    profile = profile_for(label) or FALLBACK_PROFILE
    return profile.exempt


def tests_required_for(label: StackLabel | str | None) -> bool:
    profile = profile_for(label) or FALLBACK_PROFILE
    return profile.tests_required


def evaluate(source: SourceFile, label: StackLabel | str | None) -> List[Finding]:
    """Run every rule for ``label`` against ``source``.

    A rule that raises contributes no findings; the others still run.
    Identical findings are reported once and the result is stably ordered.
    """
    findings: List[Finding] = []
    seen: Set[Tuple[str, str, Optional[int], str]] = set()
    for rule in rules_for(label):
        try:
            produced = rule.check(source)
        except Exception as exc:  # rule failures never abort the batch
            _logger.warning("Rule %s failed on %s: %s", rule.rule_id, source.path, exc)
            continue
        for finding in produced:
            key = (finding.rule, finding.path, finding.line, finding.message)
            if key in seen:
                continue
            seen.add(key)
            findings.append(finding)
    return sort_findings(findings)


__all__ = [
    "FALLBACK_PROFILE",
    "GENERIC_TEST_PATTERNS",
    "LARAVEL_BASE",
    "PROFILES",
    "StackProfile",
    "evaluate",
    "exemptions_for",
    "profile_for",
    "rules_for",
    "test_locations_for",
    "tests_required_for",
]
