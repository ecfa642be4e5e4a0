"""External tool commands for Laravel and JavaScript projects."""

from __future__ import annotations

import shlex
from typing import List, Optional

from .config import CommandsConfig, HooksConfig
from .models import ManifestFacts, ToolCommand

DEFAULT_BACKEND_TEST = CommandsConfig().test
FRONTEND_TEST = "npm run test"
FRONTEND_RUNNER_CONFIGS = (
    "vitest.config.js",
    "vitest.config.ts",
    "vitest.config.mjs",
    "jest.config.js",
    "jest.config.ts",
)
PRETTIER_CONFIGS = (".prettierrc", ".prettierrc.json", "prettier.config.js")
LARAVEL_FRAMEWORK = "laravel/framework"


def backend_test_command(config: Optional[HooksConfig] = None) -> str:
    if config is not None and config.commands.test.strip():
        return config.commands.test.strip()
    return DEFAULT_BACKEND_TEST


def frontend_test_command(facts: Optional[ManifestFacts]) -> Optional[str]:
    """Return the JavaScript test command when the project has a test runner."""
    if facts is None:
        return None
    if any(facts.has_file(name) for name in FRONTEND_RUNNER_CONFIGS):
        return FRONTEND_TEST
    if "test" in facts.frontend_scripts:
        return FRONTEND_TEST
    return None


def focused_test_command(command: str, test_path: str) -> str:
    """Forward a single test path to a composer/npm script."""
    return f"{command} -- {shlex.quote(test_path)}"


def to_tool(name: str, command: str, *, blocking: bool = True, ecosystem: str = "backend") -> ToolCommand:
    return ToolCommand(
        name=name,
        argv=tuple(shlex.split(command)),
        blocking=blocking,
        ecosystem=ecosystem,
    )


def is_laravel_project(facts: ManifestFacts) -> bool:
    return facts.has_marker and facts.has_backend_manifest


def lint_plan(
    facts: ManifestFacts,
    config: Optional[HooksConfig] = None,
    *,
    fast: bool = False,
) -> List[ToolCommand]:
    """Return the ordered lint/format commands for the project.

    Laravel projects run Rector, Pint and Larastan through composer scripts;
    the docblock annotation step never blocks and is skipped in fast mode.
    """
    commands = config.commands if config is not None else CommandsConfig()
    plan: List[ToolCommand] = []

    if is_laravel_project(facts):
        plan.append(to_tool("refactor", commands.refactor))
        plan.append(to_tool("format", commands.format))
        plan.append(to_tool("lint", commands.lint))
        annotate_script = _composer_script(commands.annotate)
        if not fast and annotate_script in facts.backend_scripts:
            plan.append(to_tool("annotate", commands.annotate, blocking=False))
    elif facts.has_backend_manifest:
        if "format" in facts.backend_scripts:
            plan.append(to_tool("format", "composer format"))
        if "lint" in facts.backend_scripts:
            plan.append(to_tool("lint", "composer lint"))

    if facts.has_frontend_package("eslint"):
        plan.append(to_tool("eslint", "npm run lint --if-present", ecosystem="frontend"))
    if any(facts.has_file(name) for name in PRETTIER_CONFIGS):
        plan.append(to_tool("prettier", "npx prettier --write .", ecosystem="frontend"))

    return plan


def _composer_script(command: str) -> Optional[str]:
    parts = shlex.split(command)
    if len(parts) >= 2 and parts[0] == "composer":
        return parts[1]
    return None


__all__ = [
    "DEFAULT_BACKEND_TEST",
    "FRONTEND_TEST",
    "backend_test_command",
    "focused_test_command",
    "frontend_test_command",
    "is_laravel_project",
    "lint_plan",
    "to_tool",
]
