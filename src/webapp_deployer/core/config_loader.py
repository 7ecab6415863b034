"""
Configuration loading utilities.

This module loads descriptor parameters and Azure credentials from JSON files.

Parameters File Format (main.parameters.json):
    {
        "$schema": "https://schema.management.azure.com/schemas/2019-04-01/deploymentParameters.json#",
        "contentVersion": "1.0.0.0",
        "parameters": {
            "environmentName": {"value": "${AZURE_ENV_NAME}"},
            "location": {"value": "${AZURE_LOCATION}"},
            "appServicePlanSku": {"value": "B1"}
        }
    }

    ${NAME} placeholders are substituted from the environment. A value that is
    empty after substitution leaves the parameter at its default.

Usage:
    from webapp_deployer.core.config_loader import load_parameters_file

    params = load_parameters_file(Path("infra/main.parameters.json"))
"""

import json
import os
import re
from dataclasses import fields
from pathlib import Path
from typing import Any, Dict, Mapping, Optional

from .. import constants as CONSTANTS
from .context import DescriptorParameters
from .exceptions import ConfigurationError

# Parameter file key -> DescriptorParameters field
PARAMETER_FIELDS = {
    "location": "location",
    "environmentName": "environment_name",
    "subscriptionId": "subscription_id",
    "resourceGroupName": "resource_group",
    "resourceToken": "resource_token",
    "tags": "tags",
    "principalId": "principal_id",
    "appServiceName": "app_service_name",
    "appServicePlanSku": "app_service_plan_sku",
    "openAiServiceName": "openai_service_name",
    "openAiSkuName": "openai_sku_name",
    "openAiChatModelName": "openai_chat_model_name",
    "openAiChatModelVersion": "openai_chat_model_version",
    "openAiEmbeddingModelName": "openai_embedding_model_name",
    "openAiEmbeddingModelVersion": "openai_embedding_model_version",
    "openAiAccountName": "openai_account_name",
    "openAiResourceGroupName": "openai_resource_group",
    "openAiSubscriptionId": "openai_subscription_id",
    "searchEndpoint": "search_endpoint",
    "searchIndexName": "search_index_name",
    "systemPrompt": "system_prompt",
    "diagnosticCategories": "diagnostic_categories",
    "logRetentionDays": "log_retention_days",
}

_PLACEHOLDER = re.compile(r"\$\{([A-Za-z_][A-Za-z0-9_]*)\}")


def _load_json_file(file_path: Path, required: bool = True) -> Dict[str, Any]:
    """
    Load a JSON file and return its contents as a dictionary.

    Raises:
        ConfigurationError: If file is missing (when required) or has invalid JSON
    """
    if not file_path.exists():
        if required:
            raise ConfigurationError(
                f"Required configuration file not found: {file_path.name}",
                config_file=str(file_path)
            )
        return {}

    try:
        with open(file_path, "r", encoding="utf-8") as f:
            return json.load(f)
    except json.JSONDecodeError as e:
        raise ConfigurationError(
            f"Invalid JSON in configuration file: {e}",
            config_file=str(file_path)
        )


def substitute_env(value: Any, environ: Mapping[str, str]) -> Any:
    """Replace ${NAME} placeholders in strings, recursing into lists and dicts."""
    if isinstance(value, str):
        return _PLACEHOLDER.sub(lambda m: environ.get(m.group(1), ""), value)
    if isinstance(value, list):
        return [substitute_env(v, environ) for v in value]
    if isinstance(value, dict):
        return {k: substitute_env(v, environ) for k, v in value.items()}
    return value


def parameters_from_dict(
    raw: Dict[str, Any],
    overrides: Optional[Dict[str, Any]] = None,
    config_file: Optional[str] = None
) -> DescriptorParameters:
    """
    Build DescriptorParameters from already-substituted parameter values.

    Args:
        raw: Parameter file key -> value (without the {"value": ...} wrapper)
        overrides: DescriptorParameters field -> value, applied last
        config_file: File name used in error messages

    Raises:
        ConfigurationError: On unknown parameter keys or non-numeric retention
    """
    unknown = sorted(set(raw) - set(PARAMETER_FIELDS))
    if unknown:
        raise ConfigurationError(f"Unknown parameters: {unknown}", config_file=config_file)

    values: Dict[str, Any] = {}
    for key, value in raw.items():
        if value == "" or value is None:
            continue
        values[PARAMETER_FIELDS[key]] = value

    for name, value in (overrides or {}).items():
        if value is not None and value != "":
            values[name] = value

    retention = values.get("log_retention_days")
    if isinstance(retention, str):
        try:
            values["log_retention_days"] = int(retention)
        except ValueError:
            raise ConfigurationError(
                f"'logRetentionDays' must be a number, got '{retention}'",
                config_file=config_file
            )

    valid_fields = {f.name for f in fields(DescriptorParameters)}
    unknown_overrides = sorted(set(values) - valid_fields)
    if unknown_overrides:
        raise ConfigurationError(f"Unknown parameter overrides: {unknown_overrides}")

    return DescriptorParameters(**values)


def load_parameters_file(
    path: Path,
    environ: Optional[Mapping[str, str]] = None,
    overrides: Optional[Dict[str, Any]] = None
) -> DescriptorParameters:
    """
    Load descriptor parameters from a main.parameters.json file.

    Args:
        path: Path to the parameters file
        environ: Mapping used for ${NAME} substitution (default: os.environ)
        overrides: DescriptorParameters field -> value, applied after the file

    Returns:
        DescriptorParameters (not yet validated)

    Raises:
        ConfigurationError: If the file is missing, invalid, or malformed
    """
    path = Path(path)
    environ = os.environ if environ is None else environ
    content = _load_json_file(path, required=True)

    parameters = content.get("parameters")
    if not isinstance(parameters, dict):
        raise ConfigurationError("Missing 'parameters' object", config_file=str(path))

    raw: Dict[str, Any] = {}
    for key, entry in parameters.items():
        if not isinstance(entry, dict) or "value" not in entry:
            raise ConfigurationError(
                f"Parameter '{key}' must be an object with a 'value' field",
                config_file=str(path)
            )
        raw[key] = substitute_env(entry["value"], environ)

    return parameters_from_dict(raw, overrides=overrides, config_file=str(path))


def load_credentials(
    path: Optional[Path] = None,
    environ: Optional[Mapping[str, str]] = None
) -> Dict[str, str]:
    """
    Load Azure credentials.

    Reads the credentials JSON file when a path is given, otherwise the
    AZURE_* environment variables. Missing service principal fields are
    fine: the provider then falls back to DefaultAzureCredential.

    Raises:
        ConfigurationError: If the given file is missing or invalid
    """
    if path is not None:
        content = _load_json_file(Path(path), required=True)
        return {k: v for k, v in content.items() if k in CONSTANTS.CREDENTIALS_ENV_VARS and v}

    environ = os.environ if environ is None else environ
    return {
        key: environ[env_var]
        for key, env_var in CONSTANTS.CREDENTIALS_ENV_VARS.items()
        if environ.get(env_var)
    }
