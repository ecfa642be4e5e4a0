"""Tests for larahooks.classifier."""

from __future__ import annotations

import pytest

from larahooks.classifier import classify, classify_facts
from larahooks.models import ManifestFacts, StackLabel
from tests._fixtures.project_builder import ProjectBuilder


def test_empty_directory_is_none(project: ProjectBuilder) -> None:
    assert classify(project.path()) is StackLabel.NONE


def test_package_json_only_is_none(project: ProjectBuilder) -> None:
    project.package(["@inertiajs/vue3", "vue"])

    assert classify(project.path()) is StackLabel.NONE


def test_artisan_without_framework_package_is_api(project: ProjectBuilder) -> None:
    project.laravel()

    assert classify(project.path()) is StackLabel.API


def test_artisan_without_composer_is_api(project: ProjectBuilder) -> None:
    project.artisan()

    assert classify(project.path()) is StackLabel.API


def test_composer_without_artisan_is_unknown(project: ProjectBuilder) -> None:
    project.composer(["symfony/console"])

    assert classify(project.path()) is StackLabel.UNKNOWN


def test_livewire_detected(project: ProjectBuilder) -> None:
    project.laravel("livewire/livewire")

    assert classify(project.path()) is StackLabel.LIVEWIRE


def test_filament_wins_over_livewire(project: ProjectBuilder) -> None:
    project.laravel("livewire/livewire", "filament/filament")

    assert classify(project.path()) is StackLabel.FILAMENT


def test_livewire_wins_over_inertia(project: ProjectBuilder) -> None:
    project.laravel("inertiajs/inertia-laravel", "livewire/livewire")
    project.package(["@inertiajs/vue3"])

    assert classify(project.path()) is StackLabel.LIVEWIRE


def test_dev_requirements_count(project: ProjectBuilder) -> None:
    project.artisan()
    project.composer(["laravel/framework"], require_dev=["livewire/livewire"])

    assert classify(project.path()) is StackLabel.LIVEWIRE


@pytest.mark.parametrize(
    "adapter, expected",
    [
        ("@inertiajs/vue3", StackLabel.INERTIA_VUE),
        ("@inertiajs/inertia-vue3", StackLabel.INERTIA_VUE),
        ("@inertiajs/react", StackLabel.INERTIA_REACT),
        ("@inertiajs/inertia-react", StackLabel.INERTIA_REACT),
    ],
)
def test_inertia_refined_by_frontend_adapter(
    project: ProjectBuilder, adapter: str, expected: StackLabel
) -> None:
    project.laravel("inertiajs/inertia-laravel")
    project.package(dev_dependencies=[adapter])

    assert classify(project.path()) is expected


def test_vue_adapter_preferred_when_both_declared(project: ProjectBuilder) -> None:
    project.laravel("inertiajs/inertia-laravel")
    project.package(["@inertiajs/react", "@inertiajs/vue3"])

    assert classify(project.path()) is StackLabel.INERTIA_VUE


def test_inertia_without_adapter_is_generic(project: ProjectBuilder) -> None:
    project.laravel("inertiajs/inertia-laravel")

    assert classify(project.path()) is StackLabel.INERTIA


def test_inertia_with_invalid_package_json_is_generic(project: ProjectBuilder) -> None:
    project.laravel("inertiajs/inertia-laravel")
    project.write({"package.json": "{ not json"})

    assert classify(project.path()) is StackLabel.INERTIA


def test_malformed_composer_json_degrades_to_api(project: ProjectBuilder) -> None:
    project.artisan()
    project.write({"composer.json": "[1, 2"})

    assert classify(project.path()) is StackLabel.API


def test_override_beats_detection(project: ProjectBuilder) -> None:
    project.laravel("livewire/livewire")

    assert classify(project.path(), "api") is StackLabel.API


def test_override_applies_without_manifests(project: ProjectBuilder) -> None:
    assert classify(project.path(), "filament") is StackLabel.FILAMENT


def test_override_is_normalised(project: ProjectBuilder) -> None:
    assert classify(project.path(), "  Inertia-React ") is StackLabel.INERTIA_REACT


@pytest.mark.parametrize("override", ["", "   ", "svelte"])
def test_empty_or_invalid_override_is_ignored(project: ProjectBuilder, override: str) -> None:
    project.laravel("livewire/livewire")

    assert classify(project.path(), override) is StackLabel.LIVEWIRE


def test_classification_is_deterministic(project: ProjectBuilder) -> None:
    project.laravel("inertiajs/inertia-laravel")
    project.package(["@inertiajs/react"])

    results = {classify(project.path()) for _ in range(5)}

    assert results == {StackLabel.INERTIA_REACT}


def test_classify_facts_uses_snapshot() -> None:
    facts = ManifestFacts(
        root="/nowhere",
        has_marker=True,
        has_backend_manifest=True,
        backend_packages=frozenset({"inertiajs/inertia-laravel"}),
        frontend_packages=frozenset({"@inertiajs/vue3"}),
    )

    assert classify_facts(facts) is StackLabel.INERTIA_VUE
    assert classify_facts(facts, "livewire") is StackLabel.LIVEWIRE


def test_classify_facts_without_manifests_is_none() -> None:
    assert classify_facts(ManifestFacts(root="/nowhere")) is StackLabel.NONE


def test_unreadable_root_degrades_to_none(project: ProjectBuilder, monkeypatch: pytest.MonkeyPatch) -> None:
    project.laravel("livewire/livewire")
    root = project.path()

    def deny(self: object) -> bool:
        raise PermissionError("permission denied")

    with monkeypatch.context() as patch:
        patch.setattr("pathlib.Path.is_file", deny)
        label = classify(root)

    assert label is StackLabel.NONE
