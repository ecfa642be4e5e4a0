"""Configuration loading for larahooks (.larahooks.yml + LARAHOOKS_* environment)."""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional, Sequence

import yaml

from .models import StackLabel

CONFIG_FILENAME = ".larahooks.yml"
ENV_PREFIX = "LARAHOOKS_"
TEST_MODES = ("focused", "package")


class ConfigError(RuntimeError):
    """Raised when the configuration file cannot be parsed."""


@dataclass
class CommandsConfig:
    """External commands used for Laravel quality checks."""

    refactor: str = "composer refactor:rector"
    format: str = "composer refactor:lint"
    lint: str = "composer test:types"
    annotate: str = "composer refactor:annotate"
    test: str = "composer test"


@dataclass
class TestsConfig:
    """Test-on-edit behaviour."""

    __test__ = False  # not a pytest test class

    enabled: bool = True
    modes: List[str] = field(default_factory=lambda: list(TEST_MODES))
    fail_on_missing: bool = True
    inertia_paths: List[str] = field(default_factory=list)
    timeout: Optional[float] = None


@dataclass
class HooksConfig:
    """Represents the high-level settings defined in .larahooks.yml."""

    root: Path
    enabled: bool = True
    stack: Optional[str] = None
    fail_fast: bool = False
    stacks: Dict[str, bool] = field(default_factory=dict)
    commands: CommandsConfig = field(default_factory=CommandsConfig)
    tests: TestsConfig = field(default_factory=TestsConfig)

    def stack_enabled(self, label: StackLabel | str) -> bool:
        """Stacks are enabled unless explicitly switched off."""
        key = str(label).lower()
        return self.stacks.get(key, True)


def load_config(config_path: Path) -> HooksConfig:
    """Load configuration from disk."""
    config_file = _resolve_config_path(config_path)
    root = config_file.parent.resolve()

    if not config_file.exists():
        return HooksConfig(root=root)

    data = _read_config(config_file)
    if not isinstance(data, dict):
        raise ConfigError(f"{CONFIG_FILENAME} must contain a mapping at the root")

    config = HooksConfig(root=root)
    enabled = _as_bool(data.get("enabled"))
    if enabled is not None:
        config.enabled = enabled
    config.stack = _as_str(data.get("stack"))
    config.fail_fast = _as_bool(data.get("fail_fast")) or False

    for name, value in _as_dict(data.get("stacks")).items():
        if isinstance(value, Mapping):
            switch = _as_bool(value.get("enabled"))
        else:
            switch = _as_bool(value)
        if switch is not None:
            config.stacks[str(name).lower()] = switch

    commands_data = _as_dict(data.get("commands"))
    for key in ("refactor", "format", "lint", "annotate", "test"):
        value = _as_str(commands_data.get(key))
        if value:
            setattr(config.commands, key, value)

    tests_data = _as_dict(data.get("tests"))
    if tests_data:
        enabled = _as_bool(tests_data.get("enabled"))
        if enabled is not None:
            config.tests.enabled = enabled
        if "modes" in tests_data:
            config.tests.modes = _as_modes(tests_data.get("modes"))
        fail_on_missing = _as_bool(tests_data.get("fail_on_missing"))
        if fail_on_missing is not None:
            config.tests.fail_on_missing = fail_on_missing
        config.tests.inertia_paths = _as_str_list(tests_data.get("inertia_paths"))
        config.tests.timeout = _as_float(tests_data.get("timeout"))

    return config


def apply_environment(config: HooksConfig, environ: Mapping[str, str]) -> HooksConfig:
    """Return a copy of ``config`` with LARAHOOKS_* environment overrides applied."""
    updated = replace(
        config,
        stacks=dict(config.stacks),
        commands=replace(config.commands),
        tests=replace(
            config.tests,
            modes=list(config.tests.modes),
            inertia_paths=list(config.tests.inertia_paths),
        ),
    )

    enabled = _as_bool(environ.get(f"{ENV_PREFIX}ENABLED"))
    if enabled is not None:
        updated.enabled = enabled

    stack = environ.get(f"{ENV_PREFIX}STACK")
    if stack is not None and stack.strip():
        updated.stack = stack.strip()

    fail_fast = _as_bool(environ.get(f"{ENV_PREFIX}FAIL_FAST"))
    if fail_fast is not None:
        updated.fail_fast = fail_fast

    for label in StackLabel:
        env_name = f"{ENV_PREFIX}{label.value.upper().replace('-', '_')}_ENABLED"
        switch = _as_bool(environ.get(env_name))
        if switch is not None:
            updated.stacks[label.value] = switch

    for key in ("refactor", "format", "lint", "annotate", "test"):
        value = environ.get(f"{ENV_PREFIX}{key.upper()}_CMD")
        if value and value.strip():
            setattr(updated.commands, key, value.strip())

    test_on_edit = _as_bool(environ.get(f"{ENV_PREFIX}TEST_ON_EDIT"))
    if test_on_edit is not None:
        updated.tests.enabled = test_on_edit

    modes = environ.get(f"{ENV_PREFIX}TEST_MODES")
    if modes is not None:
        updated.tests.modes = _as_modes(modes.split(","))

    fail_on_missing = _as_bool(environ.get(f"{ENV_PREFIX}FAIL_ON_MISSING_TESTS"))
    if fail_on_missing is not None:
        updated.tests.fail_on_missing = fail_on_missing

    inertia_paths = environ.get(f"{ENV_PREFIX}INERTIA_TEST_PATHS")
    if inertia_paths and inertia_paths.strip():
        updated.tests.inertia_paths = inertia_paths.split()

    return updated


def load_effective_config(root: Path, environ: Mapping[str, str]) -> HooksConfig:
    """Load .larahooks.yml from ``root`` and layer environment overrides on top."""
    return apply_environment(load_config(root), environ)


def _resolve_config_path(config_path: Path) -> Path:
    config_path = config_path.expanduser()
    if config_path.is_dir():
        return (config_path / CONFIG_FILENAME).resolve()
    if config_path.name != CONFIG_FILENAME:
        return (config_path.parent / CONFIG_FILENAME).resolve()
    return config_path.resolve()


def _read_config(path: Path) -> Any:
    try:
        text = path.read_text(encoding="utf-8")
    except OSError as exc:
        raise ConfigError(f"Failed to read {path.name}: {exc}") from exc
    if not text.strip():
        return {}
    try:
        loaded = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise ConfigError(f"Failed to parse {path.name}: {exc}") from exc
    return {} if loaded is None else loaded


def _as_modes(value: Any) -> List[str]:
    modes: List[str] = []
    for item in _as_str_list(value):
        mode = item.strip().lower()
        if mode in TEST_MODES and mode not in modes:
            modes.append(mode)
    return modes


def _as_dict(value: Any) -> Dict[str, Any]:
    return value if isinstance(value, dict) else {}


def _as_str(value: Any) -> Optional[str]:
    if isinstance(value, bool):
        return None
    return str(value) if isinstance(value, (str, int, float)) else None


def _as_float(value: Any) -> Optional[float]:
    if isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        return float(value)
    if isinstance(value, str):
        try:
            return float(value)
        except ValueError:
            return None
    return None


def _as_bool(value: Any) -> Optional[bool]:
    if isinstance(value, bool):
        return value
    if isinstance(value, int):
        return bool(value)
    if isinstance(value, str):
        lowered = value.strip().lower()
        if lowered in {"true", "yes", "1", "on"}:
            return True
        if lowered in {"false", "no", "0", "off"}:
            return False
    return None


def _as_str_list(value: Any) -> List[str]:
    if value is None:
        return []
    if isinstance(value, str):
        return [value]
    if isinstance(value, Sequence):
        return [str(item) for item in value if isinstance(item, (str, int, float))]
    return []


__all__ = [
    "CONFIG_FILENAME",
    "CommandsConfig",
    "ConfigError",
    "HooksConfig",
    "TestsConfig",
    "apply_environment",
    "load_config",
    "load_effective_config",
]
