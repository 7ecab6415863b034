"""
Tests for config_loader: parameters files, ${ENV} substitution and credentials.
"""

import json
from pathlib import Path

import pytest

from webapp_deployer.core.config_loader import (
    load_credentials,
    load_parameters_file,
    parameters_from_dict,
    substitute_env,
)
from webapp_deployer.core.exceptions import ConfigurationError


def _write_parameters(tmp_path: Path, parameters: dict) -> Path:
    path = tmp_path / "main.parameters.json"
    path.write_text(json.dumps({
        "$schema": "https://schema.management.azure.com/schemas/2019-04-01/deploymentParameters.json#",
        "contentVersion": "1.0.0.0",
        "parameters": {key: {"value": value} for key, value in parameters.items()},
    }))
    return path


class TestSubstituteEnv:
    """Tests for ${NAME} placeholder substitution."""

    def test_replaces_placeholders(self):
        assert substitute_env("${AZURE_ENV_NAME}-app", {"AZURE_ENV_NAME": "dev"}) == "dev-app"

    def test_unset_variable_becomes_empty(self):
        assert substitute_env("${AZURE_PRINCIPAL_ID}", {}) == ""

    def test_recurses_into_dicts_and_lists(self):
        value = {"owner": "${OWNER}", "list": ["${OWNER}", 3]}
        assert substitute_env(value, {"OWNER": "team-a"}) == {"owner": "team-a", "list": ["team-a", 3]}

    def test_non_strings_unchanged(self):
        assert substitute_env(30, {}) == 30
        assert substitute_env(True, {}) is True


class TestLoadParametersFile:
    """Tests for load_parameters_file()."""

    def test_loads_and_substitutes(self, tmp_path):
        path = _write_parameters(tmp_path, {
            "environmentName": "${AZURE_ENV_NAME}",
            "location": "${AZURE_LOCATION}",
            "appServicePlanSku": "B1",
            "openAiAccountName": "shared-openai",
            "logRetentionDays": "60",
        })
        params = load_parameters_file(path, environ={"AZURE_ENV_NAME": "dev", "AZURE_LOCATION": "eastus2"})
        assert params.environment_name == "dev"
        assert params.location == "eastus2"
        assert params.app_service_plan_sku == "B1"
        assert params.openai_account_name == "shared-openai"
        assert params.log_retention_days == 60

    def test_empty_value_keeps_default(self, tmp_path):
        """An unset placeholder should leave the parameter at its default."""
        path = _write_parameters(tmp_path, {"appServicePlanSku": "${AZURE_APP_SERVICE_SKU}"})
        params = load_parameters_file(path, environ={})
        assert params.app_service_plan_sku == "F1"

    def test_overrides_win(self, tmp_path):
        path = _write_parameters(tmp_path, {"resourceGroupName": "rg-from-file"})
        params = load_parameters_file(path, environ={}, overrides={"resource_group": "rg-cli", "location": None})
        assert params.resource_group == "rg-cli"
        assert params.location == ""

    def test_missing_file(self, tmp_path):
        with pytest.raises(ConfigurationError, match="not found"):
            load_parameters_file(tmp_path / "missing.json")

    def test_invalid_json(self, tmp_path):
        path = tmp_path / "main.parameters.json"
        path.write_text("{not json")
        with pytest.raises(ConfigurationError, match="Invalid JSON"):
            load_parameters_file(path)

    def test_missing_parameters_object(self, tmp_path):
        path = tmp_path / "main.parameters.json"
        path.write_text(json.dumps({"contentVersion": "1.0.0.0"}))
        with pytest.raises(ConfigurationError, match="Missing 'parameters'"):
            load_parameters_file(path)

    def test_entry_without_value(self, tmp_path):
        path = tmp_path / "main.parameters.json"
        path.write_text(json.dumps({"parameters": {"location": "eastus2"}}))
        with pytest.raises(ConfigurationError, match="'value' field"):
            load_parameters_file(path)


class TestParametersFromDict:
    """Tests for parameters_from_dict()."""

    def test_unknown_key(self):
        with pytest.raises(ConfigurationError, match="Unknown parameters"):
            parameters_from_dict({"keyVaultName": "kv"})

    def test_non_numeric_retention(self):
        with pytest.raises(ConfigurationError, match="logRetentionDays"):
            parameters_from_dict({"logRetentionDays": "thirty"})

    def test_unknown_override(self):
        with pytest.raises(ConfigurationError, match="Unknown parameter overrides"):
            parameters_from_dict({}, overrides={"region": "eastus2"})

    def test_tags_and_categories_pass_through(self):
        params = parameters_from_dict({
            "tags": {"azd-env-name": "dev", "owner": "team-a"},
            "diagnosticCategories": {"AppServiceHTTPLogs": False},
        })
        assert params.tags == {"azd-env-name": "dev", "owner": "team-a"}
        assert params.category_enabled("AppServiceHTTPLogs") is False
        assert params.category_enabled("AppServiceConsoleLogs") is True


class TestLoadCredentials:
    """Tests for load_credentials()."""

    def test_from_environment(self):
        environ = {
            "AZURE_TENANT_ID": "tenant",
            "AZURE_CLIENT_ID": "client",
            "AZURE_CLIENT_SECRET": "secret",
        }
        assert load_credentials(environ=environ) == {
            "azure_tenant_id": "tenant",
            "azure_client_id": "client",
            "azure_client_secret": "secret",
        }

    def test_empty_environment(self):
        assert load_credentials(environ={}) == {}

    def test_from_file_ignores_unknown_keys(self, tmp_path):
        path = tmp_path / "config_credentials.json"
        path.write_text(json.dumps({"azure_tenant_id": "tenant", "aws_access_key_id": "x", "azure_client_id": ""}))
        assert load_credentials(path) == {"azure_tenant_id": "tenant"}

    def test_missing_file(self, tmp_path):
        with pytest.raises(ConfigurationError):
            load_credentials(tmp_path / "config_credentials.json")


class TestLoadedValueTypes:
    """Values loaded from a file are type-checked by validate()."""

    def test_list_valued_sku_fails_validation(self, tmp_path):
        from webapp_deployer.core.exceptions import ParameterValidationError

        path = _write_parameters(tmp_path, {
            "environmentName": "dev",
            "location": "eastus2",
            "subscriptionId": "sub-123",
            "resourceGroupName": "rg-dev",
            "openAiAccountName": "shared-openai",
            "openAiResourceGroupName": "rg-ai",
            "openAiSubscriptionId": "sub-ai",
            "appServicePlanSku": ["B1"],
            "diagnosticCategories": ["AllMetrics"],
        })
        params = load_parameters_file(path, environ={})

        with pytest.raises(ParameterValidationError) as exc_info:
            params.validate()
        assert len(exc_info.value.errors) == 2
