"""
Deployment parameters and context.

Functions never read ambient state: the parsed parameters and the initialized
provider travel together in a DeploymentContext that is passed explicitly to
every deploy/check function.

Design Pattern: Dependency Injection
    - Parameters are loaded into DescriptorParameters at startup
    - DeploymentContext wraps parameters + credentials + initialized provider
    - Context is passed explicitly to all deployment functions
"""

from dataclasses import dataclass, field
from typing import Dict, Optional, TYPE_CHECKING
import re

from .. import constants as CONSTANTS
from .exceptions import ParameterValidationError

if TYPE_CHECKING:
    from ..providers.azure.provider import AzureProvider


_APP_NAME_PATTERN = re.compile(r"^[a-zA-Z0-9][a-zA-Z0-9-]{0,58}[a-zA-Z0-9]$")
_TOKEN_PATTERN = re.compile(r"^[a-z0-9]+$")


@dataclass
class DescriptorParameters:
    """
    Input parameters of the provisioning descriptor.

    Deployment scope:
        location: Azure region for all owned resources
        environment_name: Environment name, part of the resource token
        subscription_id: Subscription that receives the owned resources
        resource_group: Resource group that receives the owned resources

    Naming and tagging:
        resource_token: Uniqueness token; derived from the scope when empty
        tags: Base tag set; defaults to {"azd-env-name": environment_name}
        app_service_name: Web app name; defaults to "app-{token}"
        principal_id: Identity of the requesting user (optional)

    Compute:
        app_service_plan_sku: One of constants.APP_SERVICE_PLAN_SKUS

    External AI account (read-only, required coordinates):
        openai_account_name / openai_resource_group / openai_subscription_id

    Model deployments and app settings:
        openai_service_name, openai_sku_name, chat/embedding model names
        and versions, search_endpoint, search_index_name, system_prompt

    Diagnostics:
        diagnostic_categories: Category name -> enabled; unnamed categories
            stay enabled
        log_retention_days: Log Analytics retention
    """

    location: str = ""
    environment_name: str = ""
    subscription_id: str = ""
    resource_group: str = ""

    resource_token: str = ""
    tags: Optional[Dict[str, str]] = None
    principal_id: str = ""
    app_service_name: str = ""
    app_service_plan_sku: str = CONSTANTS.DEFAULT_APP_SERVICE_PLAN_SKU

    openai_service_name: str = ""
    openai_sku_name: str = CONSTANTS.DEFAULT_OPENAI_SKU
    openai_chat_model_name: str = CONSTANTS.DEFAULT_CHAT_MODEL_NAME
    openai_chat_model_version: str = CONSTANTS.DEFAULT_CHAT_MODEL_VERSION
    openai_embedding_model_name: str = CONSTANTS.DEFAULT_EMBEDDING_MODEL_NAME
    openai_embedding_model_version: str = CONSTANTS.DEFAULT_EMBEDDING_MODEL_VERSION

    openai_account_name: str = ""
    openai_resource_group: str = ""
    openai_subscription_id: str = ""

    search_endpoint: str = ""
    search_index_name: str = CONSTANTS.DEFAULT_SEARCH_INDEX_NAME
    system_prompt: str = CONSTANTS.DEFAULT_SYSTEM_PROMPT

    diagnostic_categories: Dict[str, bool] = field(default_factory=dict)
    log_retention_days: int = CONSTANTS.DEFAULT_LOG_RETENTION_DAYS

    @property
    def scope_id(self) -> str:
        """Resource id of the resource group the deployment targets."""
        return f"/subscriptions/{self.subscription_id}/resourceGroups/{self.resource_group}"

    @property
    def openai_scope_id(self) -> str:
        """Resource id of the resource group holding the external AI account."""
        return f"/subscriptions/{self.openai_subscription_id}/resourceGroups/{self.openai_resource_group}"

    def base_tags(self) -> Dict[str, str]:
        """Tag set applied to every owned resource."""
        if self.tags is None:
            return {CONSTANTS.ENV_NAME_TAG: self.environment_name}
        return dict(self.tags)

    def category_enabled(self, category: str) -> bool:
        return self.diagnostic_categories.get(category, True)

    def validate(self) -> None:
        """
        Validate all parameters in one pass.

        Raises:
            ParameterValidationError: listing every problem found
        """
        errors = []

        required = {
            "location": self.location,
            "environment_name": self.environment_name,
            "subscription_id": self.subscription_id,
            "resource_group": self.resource_group,
            "openai_account_name": self.openai_account_name,
            "openai_resource_group": self.openai_resource_group,
            "openai_subscription_id": self.openai_subscription_id,
        }
        for name, value in required.items():
            if not isinstance(value, str) or not value.strip():
                errors.append(f"'{name}' is required")

        optional_strings = {
            "resource_token": self.resource_token,
            "principal_id": self.principal_id,
            "app_service_name": self.app_service_name,
            "app_service_plan_sku": self.app_service_plan_sku,
            "openai_service_name": self.openai_service_name,
            "openai_sku_name": self.openai_sku_name,
            "openai_chat_model_name": self.openai_chat_model_name,
            "openai_chat_model_version": self.openai_chat_model_version,
            "openai_embedding_model_name": self.openai_embedding_model_name,
            "openai_embedding_model_version": self.openai_embedding_model_version,
            "search_endpoint": self.search_endpoint,
            "search_index_name": self.search_index_name,
            "system_prompt": self.system_prompt,
        }
        for name, value in optional_strings.items():
            if not isinstance(value, str):
                errors.append(f"'{name}' must be a string")

        sku = self.app_service_plan_sku
        if isinstance(sku, str) and sku not in CONSTANTS.APP_SERVICE_PLAN_SKUS:
            errors.append(
                f"'app_service_plan_sku' must be one of "
                f"{list(CONSTANTS.APP_SERVICE_PLAN_SKUS)}, got '{sku}'"
            )

        token = self.resource_token
        if isinstance(token, str) and token:
            if not _TOKEN_PATTERN.match(token):
                errors.append("'resource_token' must be lowercase alphanumeric")
            elif len(token) > CONSTANTS.MAX_RESOURCE_TOKEN_LENGTH:
                errors.append(
                    f"'resource_token' must be at most {CONSTANTS.MAX_RESOURCE_TOKEN_LENGTH} characters"
                )

        if isinstance(self.app_service_name, str) and self.app_service_name \
                and not _APP_NAME_PATTERN.match(self.app_service_name):
            errors.append(
                "'app_service_name' must be 2-60 characters of letters, digits "
                "and hyphens, starting and ending with a letter or digit"
            )

        if self.tags is not None:
            if not isinstance(self.tags, dict) or not all(
                isinstance(k, str) and isinstance(v, str) for k, v in self.tags.items()
            ):
                errors.append("'tags' must map strings to strings")

        known_categories = CONSTANTS.DIAGNOSTIC_LOG_CATEGORIES + CONSTANTS.DIAGNOSTIC_METRIC_CATEGORIES
        if not isinstance(self.diagnostic_categories, dict):
            errors.append("'diagnostic_categories' must map category names to true or false")
        else:
            for category, enabled in self.diagnostic_categories.items():
                if category not in known_categories:
                    errors.append(f"Unknown diagnostic category '{category}'")
                elif not isinstance(enabled, bool):
                    errors.append(f"Diagnostic category '{category}' must be true or false")

        if (
            isinstance(self.log_retention_days, bool)
            or not isinstance(self.log_retention_days, int)
            or not CONSTANTS.MIN_LOG_RETENTION_DAYS <= self.log_retention_days <= CONSTANTS.MAX_LOG_RETENTION_DAYS
        ):
            errors.append(
                f"'log_retention_days' must be between {CONSTANTS.MIN_LOG_RETENTION_DAYS} "
                f"and {CONSTANTS.MAX_LOG_RETENTION_DAYS}"
            )

        if errors:
            raise ParameterValidationError(errors)


@dataclass
class DeploymentContext:
    """
    Encapsulates all state needed for a deployment operation.

    Lifecycle:
        1. Created by the CLI/API from a parameters file or request body
        2. Provider is initialized with credentials
        3. Passed to deploy/status functions
        4. Discarded after the command completes

    Attributes:
        parameters: Descriptor input parameters
        credentials: Raw Azure credentials (service principal or empty)
        provider: Initialized AzureProvider, set by initialize_provider()
    """

    parameters: DescriptorParameters
    credentials: Dict[str, str] = field(default_factory=dict)
    provider: Optional['AzureProvider'] = None

    def initialize_provider(self) -> 'AzureProvider':
        """Create and initialize the Azure provider for the target subscription."""
        from ..providers.azure.provider import AzureProvider

        provider = AzureProvider()
        provider.initialize_clients(self.credentials, self.parameters.subscription_id)
        self.provider = provider
        return provider

    def get_provider(self) -> 'AzureProvider':
        """
        Get the initialized provider.

        Raises:
            ValueError: If initialize_provider() has not been called
        """
        if self.provider is None:
            raise ValueError("Provider has not been initialized. Call initialize_provider() first.")
        return self.provider
