"""
Unit tests for ARM template rendering.
"""

import json

from webapp_deployer import constants as CONSTANTS
from webapp_deployer.descriptor import build_descriptor, render_arm_template, write_arm_template


def _resource(template, resource_type):
    matches = [r for r in template["resources"] if r["type"] == resource_type]
    assert len(matches) == 1
    return matches[0]


def _settings(template):
    app = _resource(template, CONSTANTS.TYPE_WEB_APP)
    return {s["name"]: s["value"] for s in app["properties"]["siteConfig"]["appSettings"]}


class TestTemplateShape:
    """Tests for the overall template document."""

    def test_schema_and_metadata(self, params):
        template = render_arm_template(build_descriptor(params))
        assert template["$schema"] == CONSTANTS.ARM_TEMPLATE_SCHEMA
        assert template["contentVersion"] == CONSTANTS.ARM_CONTENT_VERSION
        assert template["metadata"] == {"resourceToken": "abc123"}

    def test_existing_account_not_rendered(self, params):
        """Only owned resources should appear; the OpenAI account is never created."""
        template = render_arm_template(build_descriptor(params))
        types = [r["type"] for r in template["resources"]]
        assert types == [
            CONSTANTS.TYPE_APP_SERVICE_PLAN,
            CONSTANTS.TYPE_LOG_WORKSPACE,
            CONSTANTS.TYPE_WEB_APP,
            CONSTANTS.TYPE_DIAGNOSTIC_SETTING,
        ]
        assert CONSTANTS.TYPE_COGNITIVE_ACCOUNT not in types

    def test_rendering_is_deterministic(self, params):
        first = json.dumps(render_arm_template(build_descriptor(params)), sort_keys=True)
        second = json.dumps(render_arm_template(build_descriptor(params)), sort_keys=True)
        assert first == second

    def test_outputs_are_strings(self, params):
        outputs = render_arm_template(build_descriptor(params))["outputs"]
        assert outputs["SERVICE_WEB_NAME"] == {"type": "string", "value": "app-abc123"}
        assert all(o["type"] == "string" for o in outputs.values())


class TestResourceRendering:
    """Tests for individual resource entries."""

    def test_plan(self, params):
        plan = _resource(render_arm_template(build_descriptor(params)), CONSTANTS.TYPE_APP_SERVICE_PLAN)
        assert plan["name"] == "plan-abc123"
        assert plan["location"] == "eastus2"
        assert plan["sku"] == {"name": "F1", "tier": "Free"}
        assert plan["tags"] == {"azd-env-name": "dev"}
        assert "dependsOn" not in plan

    def test_web_app_depends_on_plan_only(self, params):
        """The existing account should not appear in dependsOn."""
        app = _resource(render_arm_template(build_descriptor(params)), CONSTANTS.TYPE_WEB_APP)
        assert app["dependsOn"] == ["[resourceId('Microsoft.Web/serverfarms', 'plan-abc123')]"]
        assert app["identity"] == {"type": "SystemAssigned"}

    def test_diagnostics_scope(self, params):
        diagnostics = _resource(render_arm_template(build_descriptor(params)), CONSTANTS.TYPE_DIAGNOSTIC_SETTING)
        assert diagnostics["scope"] == "Microsoft.Web/sites/app-abc123"
        assert diagnostics["properties"]["workspaceId"].endswith(
            "/providers/Microsoft.OperationalInsights/workspaces/law-abc123"
        )
        assert sorted(diagnostics["dependsOn"]) == sorted([
            "[resourceId('Microsoft.Web/sites', 'app-abc123')]",
            "[resourceId('Microsoft.OperationalInsights/workspaces', 'law-abc123')]",
        ])


class TestValueRendering:
    """Tests for expressions and literal escaping."""

    def test_unresolved_endpoint_is_reference(self, params):
        template = render_arm_template(build_descriptor(params))
        endpoint = _settings(template)["AZURE_OPENAI_ENDPOINT"]
        assert endpoint.startswith("[reference(resourceId('sub-ai', 'rg-ai', ")
        assert endpoint.endswith(").endpoint]")
        assert template["outputs"]["AZURE_OPENAI_ENDPOINT"]["value"] == endpoint

    def test_resolved_endpoint_is_literal(self, params):
        endpoint = "https://shared-openai.openai.azure.com/"
        template = render_arm_template(build_descriptor(params, openai_endpoint=endpoint))
        assert _settings(template)["AZURE_OPENAI_ENDPOINT"] == endpoint

    def test_bracket_literal_escaped(self, make_params):
        """A literal starting with '[' must not be evaluated by ARM."""
        template = render_arm_template(build_descriptor(make_params(system_prompt="[beta] Answer briefly.")))
        assert _settings(template)["SYSTEM_PROMPT"] == "[[beta] Answer briefly."


class TestWriteTemplate:
    """Tests for write_arm_template()."""

    def test_writes_json(self, params, tmp_path):
        path = write_arm_template(build_descriptor(params), tmp_path / "out" / "azuredeploy.json")
        assert path.exists()
        with open(path, "r", encoding="utf-8") as f:
            written = json.load(f)
        assert written == render_arm_template(build_descriptor(params))
