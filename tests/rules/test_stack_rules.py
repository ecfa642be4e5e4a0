"""Tests for the per-stack rule catalogs."""

from __future__ import annotations

import textwrap
from typing import List

from larahooks.dispatch import evaluate
from larahooks.models import Severity, SourceFile, StackLabel


def _rules(path: str, content: str, label: StackLabel) -> List[str]:
    source = SourceFile(path, textwrap.dedent(content).lstrip("\n"))
    return [finding.rule for finding in evaluate(source, label)]


def test_livewire_polling_in_blade_view() -> None:
    rules = _rules(
        "resources/views/livewire/feed.blade.php",
        '<div wire:poll.5s="refresh">\n</div>\n',
        StackLabel.LIVEWIRE,
    )

    assert rules == ["livewire.polling"]


def test_livewire_action_naming_skips_lifecycle_methods() -> None:
    lifecycle = """
        <?php
        class Counter extends Component
        {
            public function mount() {}
            public function updatedSearch() {}
        }
        """
    action = """
        <?php
        class Counter extends Component
        {
            public function increment() {}
        }
        """

    assert _rules("app/Livewire/Counter.php", lifecycle, StackLabel.LIVEWIRE) == []
    assert _rules("app/Livewire/Counter.php", action, StackLabel.LIVEWIRE) == [
        "livewire.action-naming"
    ]


def test_filament_resource_query_and_polling() -> None:
    content = """
        <?php
        class UserResource extends Resource
        {
            public static function table(Table $table): Table
            {
                $roles = Role::query()->get();
                return $table->poll('10s');
            }
        }
        """

    rules = _rules("app/Filament/Resources/UserResource.php", content, StackLabel.FILAMENT)

    assert rules == ["filament.polling", "filament.resource-query"]


def test_filament_string_constants() -> None:
    content = """
        <?php
        class Status
        {
            const ACTIVE = 'active';
        }
        """

    assert _rules("app/Filament/Pages/Status.php", content, StackLabel.FILAMENT) == [
        "filament.string-constants"
    ]


def test_filament_inherits_livewire_rules() -> None:
    rules = _rules(
        "resources/views/filament/widget.blade.php",
        "<div wire:poll></div>\n",
        StackLabel.FILAMENT,
    )

    assert rules == ["livewire.polling"]


def test_filament_action_base_class() -> None:
    good = "<?php\nclass Approve extends Action {}\n"
    bad = "<?php\nclass Approve {}\n"

    assert _rules("app/Filament/Actions/Approve.php", good, StackLabel.FILAMENT) == []
    assert _rules("app/Filament/Actions/Approve.php", bad, StackLabel.FILAMENT) == [
        "filament.action-base"
    ]


def test_vue_page_advice() -> None:
    content = """
        <template><div>{{ title }}</div></template>
        <script>
        export default {
          data() { return { title: 'x' } },
        }
        </script>
        """

    rules = _rules("resources/js/Pages/Dashboard.vue", content, StackLabel.INERTIA_VUE)

    assert set(rules) == {"vue.script-setup", "vue.page-layout", "vue.options-api"}


def test_vue_typescript_any_is_warning() -> None:
    content = """
        <script setup lang="ts">
        import AppLayout from '@/Layouts/AppLayout.vue'
        const props = defineProps<{ user: any }>()
        </script>
        """
    source = SourceFile("resources/js/Pages/Profile.vue", textwrap.dedent(content).lstrip("\n"))

    findings = evaluate(source, StackLabel.INERTIA_VUE)

    assert [finding.rule for finding in findings] == ["typescript.any"]
    assert findings[0].severity is Severity.WARN


def test_inertia_direct_api_call_is_inherited_by_adapters() -> None:
    content = "axios.get('/api/users')\n"

    for label in (StackLabel.INERTIA, StackLabel.INERTIA_VUE, StackLabel.INERTIA_REACT):
        assert _rules("resources/js/users.js", content, label) == ["inertia.direct-api-call"]


def test_inertia_json_response_in_controller() -> None:
    content = """
        <?php
        class UserController
        {
            public function index()
            {
                return response()->json(User::all());
            }
        }
        """

    assert _rules("app/Http/Controllers/UserController.php", content, StackLabel.INERTIA) == [
        "inertia.json-response"
    ]


def test_react_conditional_hook_is_error() -> None:
    content = """
        import { useState } from 'react'
        export default function Dashboard({ user }) {
          if (user) useEffect(() => {}, [])
          const [a, setA] = useState(0)
          return <Layout>{a}</Layout>
        }
        """
    source = SourceFile("resources/js/Components/Dashboard.jsx", textwrap.dedent(content).lstrip("\n"))

    findings = evaluate(source, StackLabel.INERTIA_REACT)

    assert findings[0].rule == "react.conditional-hook"
    assert findings[0].severity is Severity.ERROR
    assert findings[0].line == 3


def test_react_list_keys_and_class_components() -> None:
    content = """
        class Items extends React.Component {
          render() { return this.props.items.map(item => <li>{item}</li>) }
        }
        """

    rules = _rules("resources/js/Components/Items.jsx", content, StackLabel.INERTIA_REACT)

    assert rules == ["react.list-keys", "react.class-component"]


def test_react_page_without_props_type() -> None:
    content = """
        export default function Show({ post }) {
          return <AppLayout>{post.title}</AppLayout>
        }
        """

    rules = _rules("resources/js/Pages/Posts/Show.tsx", content, StackLabel.INERTIA_REACT)

    assert rules == ["react.prop-types"]


def test_api_resource_without_to_array_is_error() -> None:
    content = "<?php\nclass UserResource extends JsonResource\n{\n}\n"

    source = SourceFile("app/Http/Resources/UserResource.php", content)
    findings = evaluate(source, StackLabel.API)

    assert [finding.rule for finding in findings] == ["api.resource-to-array"]
    assert findings[0].severity is Severity.ERROR


def test_api_controller_advice() -> None:
    content = """
        <?php
        class UserController
        {
            public function show()
            {
                return response()->json($user);
            }
        }
        """

    rules = _rules("app/Http/Controllers/UserController.php", content, StackLabel.API)

    assert rules == ["api.json-status-code", "api.json-without-resource"]


def test_api_form_request_advice() -> None:
    content = "<?php\nclass StoreUser extends FormRequest\n{\n    public function rules() {}\n}\n"

    rules = _rules("app/Http/Requests/StoreUser.php", content, StackLabel.API)

    assert rules == ["api.request-authorize", "api.request-messages"]


def test_api_routes_advice() -> None:
    content = "<?php\nRoute::get('/users', [UserController::class, 'index']);\n"

    rules = _rules("routes/api.php", content, StackLabel.API)

    assert rules == ["api.route-resource", "api.route-versioning"]


def test_rules_do_not_leak_across_stacks() -> None:
    content = "<div wire:poll></div>\n"

    assert _rules("resources/views/feed.blade.php", content, StackLabel.API) == []
    assert _rules("resources/views/feed.blade.php", content, StackLabel.NONE) == []
