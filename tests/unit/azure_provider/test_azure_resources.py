"""
Azure resource unit tests.

Covers the per-resource create/check functions:
- Happy path: create-or-update calls receive the declaration's body
- Validation: fail-fast for a missing provider
- Error handling: ResourceNotFoundError in checks, SDK errors propagate

Test Classes:
    - TestResourceGroup: create/check
    - TestAppServicePlan: create/check
    - TestWebApp: create/check
    - TestLogAnalyticsWorkspace: create/check
    - TestDiagnosticSetting: create/check on the web app scope
"""

import pytest
from unittest.mock import MagicMock

from azure.core.exceptions import ClientAuthenticationError, HttpResponseError, ResourceNotFoundError

from webapp_deployer.descriptor import build_descriptor
from webapp_deployer.providers.azure.resources.app_service import (
    create_app_service_plan,
    check_app_service_plan,
    create_web_app,
    check_web_app,
)
from webapp_deployer.providers.azure.resources.diagnostics import (
    create_diagnostic_setting,
    check_diagnostic_setting,
)
from webapp_deployer.providers.azure.resources.log_analytics import (
    create_log_analytics_workspace,
    check_log_analytics_workspace,
)
from webapp_deployer.providers.azure.resources.resource_group import (
    create_resource_group,
    check_resource_group,
)


@pytest.fixture
def descriptor(params):
    return build_descriptor(params, openai_endpoint="https://shared-openai.openai.azure.com/")


class TestResourceGroup:
    """Tests for the target resource group."""

    def test_create_resource_group(self, mock_provider):
        """Should create the group with location and tags."""
        result = create_resource_group(mock_provider, "rg-dev", "eastus2", {"azd-env-name": "dev"})

        assert result == "rg-dev"
        mock_provider.clients["resource"].resource_groups.create_or_update.assert_called_once_with(
            resource_group_name="rg-dev",
            parameters={"location": "eastus2", "tags": {"azd-env-name": "dev"}}
        )

    def test_create_resource_group_requires_provider(self):
        with pytest.raises(ValueError, match="provider is required"):
            create_resource_group(None, "rg-dev", "eastus2")

    def test_check_resource_group_missing(self, mock_provider):
        mock_provider.clients["resource"].resource_groups.get.side_effect = ResourceNotFoundError("Not found")
        assert check_resource_group(mock_provider, "rg-dev") is False

    def test_check_resource_group_exists(self, mock_provider):
        assert check_resource_group(mock_provider, "rg-dev") is True

    def test_check_resource_group_permission_denied(self, mock_provider):
        """Permission errors should propagate, not read as a missing group."""
        mock_provider.clients["resource"].resource_groups.get.side_effect = ClientAuthenticationError("denied")
        with pytest.raises(ClientAuthenticationError):
            check_resource_group(mock_provider, "rg-dev")


class TestAppServicePlan:
    """Tests for the App Service Plan."""

    def test_create_plan_success(self, mock_provider, descriptor):
        """Should call begin_create_or_update with the plan body and return its id."""
        plan = descriptor.get("appServicePlan")
        poller = mock_provider.clients["web"].app_service_plans.begin_create_or_update.return_value
        poller.result.return_value.id = plan.resource_id

        result = create_app_service_plan(mock_provider, plan)

        assert result == plan.resource_id
        call_kwargs = mock_provider.clients["web"].app_service_plans.begin_create_or_update.call_args.kwargs
        assert call_kwargs["resource_group_name"] == "rg-dev"
        assert call_kwargs["name"] == "plan-abc123"
        assert call_kwargs["app_service_plan"]["sku"] == {"name": "F1", "tier": "Free"}
        assert call_kwargs["app_service_plan"]["properties"] == {"reserved": True}

    def test_create_plan_requires_provider(self, descriptor):
        with pytest.raises(ValueError, match="provider is required"):
            create_app_service_plan(None, descriptor.get("appServicePlan"))

    def test_create_plan_propagates_http_error(self, mock_provider, descriptor):
        """Should propagate HttpResponseError."""
        mock_provider.clients["web"].app_service_plans.begin_create_or_update.side_effect = \
            HttpResponseError("Request failed")

        with pytest.raises(HttpResponseError):
            create_app_service_plan(mock_provider, descriptor.get("appServicePlan"))

    def test_check_plan_exists(self, mock_provider, descriptor):
        assert check_app_service_plan(mock_provider, descriptor.get("appServicePlan")) is True

    def test_check_plan_missing(self, mock_provider, descriptor):
        """Should return False when the plan does not exist."""
        mock_provider.clients["web"].app_service_plans.get.side_effect = ResourceNotFoundError("Not found")
        assert check_app_service_plan(mock_provider, descriptor.get("appServicePlan")) is False


class TestWebApp:
    """Tests for the web app."""

    def test_create_web_app_success(self, mock_provider, descriptor):
        """Should submit the site envelope with identity, plan and settings."""
        app = descriptor.get("appService")

        create_web_app(mock_provider, app)

        call_kwargs = mock_provider.clients["web"].web_apps.begin_create_or_update.call_args.kwargs
        envelope = call_kwargs["site_envelope"]
        assert call_kwargs["name"] == "app-abc123"
        assert envelope["identity"] == {"type": "SystemAssigned"}
        assert envelope["tags"]["azd-service-name"] == "web"
        assert envelope["properties"]["serverFarmId"] == descriptor.get("appServicePlan").resource_id
        settings = envelope["properties"]["siteConfig"]["appSettings"]
        assert settings[0] == {"name": "AZURE_OPENAI_ENDPOINT", "value": "https://shared-openai.openai.azure.com/"}

    def test_create_web_app_requires_provider(self, descriptor):
        with pytest.raises(ValueError, match="provider is required"):
            create_web_app(None, descriptor.get("appService"))

    def test_check_web_app_missing(self, mock_provider, descriptor):
        mock_provider.clients["web"].web_apps.get.side_effect = ResourceNotFoundError("Not found")
        assert check_web_app(mock_provider, descriptor.get("appService")) is False


class TestLogAnalyticsWorkspace:
    """Tests for the Log Analytics workspace."""

    def test_create_workspace_success(self, mock_provider, descriptor):
        create_log_analytics_workspace(mock_provider, descriptor.get("logAnalyticsWorkspace"))

        call_kwargs = mock_provider.clients["loganalytics"].workspaces.begin_create_or_update.call_args.kwargs
        assert call_kwargs["workspace_name"] == "law-abc123"
        assert call_kwargs["parameters"]["properties"] == {
            "sku": {"name": "PerGB2018"},
            "retentionInDays": 30,
        }

    def test_check_workspace_missing(self, mock_provider, descriptor):
        mock_provider.clients["loganalytics"].workspaces.get.side_effect = ResourceNotFoundError("Not found")
        assert check_log_analytics_workspace(mock_provider, descriptor.get("logAnalyticsWorkspace")) is False


class TestDiagnosticSetting:
    """Tests for the diagnostic setting on the web app."""

    def test_create_on_web_app_scope(self, mock_provider, descriptor):
        """Should address the setting by the web app's resource id."""
        diagnostics = descriptor.get("appServiceDiagnostics")

        create_diagnostic_setting(mock_provider, diagnostics)

        call_kwargs = mock_provider.clients["monitor"].diagnostic_settings.create_or_update.call_args.kwargs
        assert call_kwargs["resource_uri"] == descriptor.get("appService").resource_id
        assert call_kwargs["name"] == diagnostics.name
        assert call_kwargs["parameters"]["properties"]["workspaceId"] == \
            descriptor.get("logAnalyticsWorkspace").resource_id

    def test_create_without_scope(self, mock_provider, descriptor):
        diagnostics = descriptor.get("appServiceDiagnostics")
        diagnostics.scope = None
        with pytest.raises(ValueError, match="has no scope"):
            create_diagnostic_setting(mock_provider, diagnostics)
        mock_provider.clients["monitor"].diagnostic_settings.create_or_update.assert_not_called()

    def test_check_setting_exists(self, mock_provider, descriptor):
        diagnostics = descriptor.get("appServiceDiagnostics")
        assert check_diagnostic_setting(mock_provider, diagnostics) is True
        mock_provider.clients["monitor"].diagnostic_settings.get.assert_called_once_with(
            resource_uri=diagnostics.scope,
            name=diagnostics.name
        )

    def test_check_setting_missing(self, mock_provider, descriptor):
        mock_provider.clients["monitor"].diagnostic_settings.get.side_effect = ResourceNotFoundError("Not found")
        assert check_diagnostic_setting(mock_provider, descriptor.get("appServiceDiagnostics")) is False
