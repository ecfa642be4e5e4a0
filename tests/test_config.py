"""Tests for larahooks.config."""

from __future__ import annotations

from pathlib import Path

import pytest

from larahooks.config import (
    ConfigError,
    HooksConfig,
    apply_environment,
    load_config,
    load_effective_config,
)


def test_load_config_returns_defaults_when_missing(tmp_path: Path) -> None:
    config = load_config(tmp_path)

    assert isinstance(config, HooksConfig)
    assert config.root == tmp_path.resolve()
    assert config.enabled is True
    assert config.stack is None
    assert config.fail_fast is False
    assert config.stacks == {}
    assert config.commands.test == "composer test"
    assert config.commands.lint == "composer test:types"
    assert config.tests.modes == ["focused", "package"]
    assert config.tests.fail_on_missing is True
    assert config.tests.inertia_paths == []
    assert config.tests.timeout is None


def test_load_config_parses_expected_fields(tmp_path: Path) -> None:
    config_file = tmp_path / ".larahooks.yml"
    config_file.write_text(
        """
enabled: true
stack: inertia-vue
fail_fast: yes
stacks:
  livewire: {enabled: false}
  api: false
commands:
  format: vendor/bin/pint
  test: php artisan test
tests:
  enabled: true
  modes: [package, bogus]
  fail_on_missing: false
  inertia_paths:
    - tests/Feature/Pages
  timeout: 120
""",
        encoding="utf-8",
    )

    config = load_config(config_file)

    assert config.stack == "inertia-vue"
    assert config.fail_fast is True
    assert config.stacks == {"livewire": False, "api": False}
    assert config.stack_enabled("livewire") is False
    assert config.stack_enabled("filament") is True
    assert config.commands.format == "vendor/bin/pint"
    assert config.commands.test == "php artisan test"
    assert config.commands.refactor == "composer refactor:rector"
    assert config.tests.modes == ["package"]
    assert config.tests.fail_on_missing is False
    assert config.tests.inertia_paths == ["tests/Feature/Pages"]
    assert config.tests.timeout == pytest.approx(120.0)


def test_load_config_rejects_non_mapping(tmp_path: Path) -> None:
    (tmp_path / ".larahooks.yml").write_text("- just\n- a list\n", encoding="utf-8")

    with pytest.raises(ConfigError):
        load_config(tmp_path)


def test_load_config_rejects_invalid_yaml(tmp_path: Path) -> None:
    (tmp_path / ".larahooks.yml").write_text("stack: [unterminated\n", encoding="utf-8")

    with pytest.raises(ConfigError):
        load_config(tmp_path)


def test_empty_config_file_uses_defaults(tmp_path: Path) -> None:
    (tmp_path / ".larahooks.yml").write_text("\n", encoding="utf-8")

    assert load_config(tmp_path).enabled is True


def test_environment_overrides_file(tmp_path: Path) -> None:
    (tmp_path / ".larahooks.yml").write_text(
        "stack: livewire\ntests:\n  fail_on_missing: true\n", encoding="utf-8"
    )

    config = load_effective_config(
        tmp_path,
        {
            "LARAHOOKS_STACK": " api ",
            "LARAHOOKS_ENABLED": "false",
            "LARAHOOKS_INERTIA_REACT_ENABLED": "0",
            "LARAHOOKS_TEST_CMD": "php artisan test --parallel",
            "LARAHOOKS_TEST_MODES": "focused",
            "LARAHOOKS_FAIL_ON_MISSING_TESTS": "no",
            "LARAHOOKS_INERTIA_TEST_PATHS": "tests/Browser tests/JavaScript",
            "LARAHOOKS_TEST_ON_EDIT": "off",
        },
    )

    assert config.stack == "api"
    assert config.enabled is False
    assert config.stack_enabled("inertia-react") is False
    assert config.commands.test == "php artisan test --parallel"
    assert config.tests.modes == ["focused"]
    assert config.tests.fail_on_missing is False
    assert config.tests.inertia_paths == ["tests/Browser", "tests/JavaScript"]
    assert config.tests.enabled is False


def test_apply_environment_does_not_mutate_input(tmp_path: Path) -> None:
    base = HooksConfig(root=tmp_path)

    updated = apply_environment(base, {"LARAHOOKS_LIVEWIRE_ENABLED": "false", "LARAHOOKS_TEST_MODES": ""})

    assert base.stacks == {}
    assert base.tests.modes == ["focused", "package"]
    assert updated.stacks == {"livewire": False}
    assert updated.tests.modes == []


def test_unrecognised_environment_values_are_ignored(tmp_path: Path) -> None:
    config = apply_environment(HooksConfig(root=tmp_path), {"LARAHOOKS_ENABLED": "maybe", "LARAHOOKS_STACK": "  "})

    assert config.enabled is True
    assert config.stack is None
