"""
Azure deployer - applies a provisioning descriptor.

Two deployment paths submit the same desired state:

    deploy_descriptor()
        → validate parameters (no client is touched on failure)
        → openai_account.resolve_openai_account() (read-only)
        → openai_account.check_openai_model_deployments() (warnings only)
        → resource_group.create_resource_group()
        → build_descriptor(params, openai_endpoint)
        → apply_declaration() for every owned declaration, dependency-sorted

    deploy_arm_template()
        → render_arm_template()
        → ARM deployments API: begin_validate, begin_create_or_update (Incremental)

Failure Behavior:
    A failing resource raises ResourceCreationError. Resources applied before
    it stay in place; every call is create-or-update, so rerunning the
    deployment converges.
"""

from typing import TYPE_CHECKING, Callable, Dict, Optional
import logging

from azure.core.exceptions import AzureError

from ... import constants as CONSTANTS
from ...core.exceptions import DeploymentError, ResourceCreationError
from ...descriptor import build_descriptor, render_arm_template
from ...descriptor import resources
from .resources.app_service import (
    create_app_service_plan,
    check_app_service_plan,
    create_web_app,
    check_web_app,
)
from .resources.diagnostics import create_diagnostic_setting, check_diagnostic_setting
from .resources.log_analytics import create_log_analytics_workspace, check_log_analytics_workspace
from .resources.openai_account import (
    resolve_openai_account,
    check_openai_account,
    check_openai_model_deployments,
)
from .resources.resource_group import create_resource_group, check_resource_group

if TYPE_CHECKING:
    from ...core.context import DeploymentContext, DescriptorParameters
    from ...descriptor.resources import ResourceDeclaration
    from .provider import AzureProvider

logger = logging.getLogger(__name__)

_CREATORS: Dict[str, Callable[['AzureProvider', 'ResourceDeclaration'], str]] = {
    CONSTANTS.TYPE_APP_SERVICE_PLAN: create_app_service_plan,
    CONSTANTS.TYPE_WEB_APP: create_web_app,
    CONSTANTS.TYPE_LOG_WORKSPACE: create_log_analytics_workspace,
    CONSTANTS.TYPE_DIAGNOSTIC_SETTING: create_diagnostic_setting,
}

_CHECKERS: Dict[str, Callable[['AzureProvider', 'ResourceDeclaration'], bool]] = {
    CONSTANTS.TYPE_APP_SERVICE_PLAN: check_app_service_plan,
    CONSTANTS.TYPE_WEB_APP: check_web_app,
    CONSTANTS.TYPE_LOG_WORKSPACE: check_log_analytics_workspace,
    CONSTANTS.TYPE_DIAGNOSTIC_SETTING: check_diagnostic_setting,
    CONSTANTS.TYPE_COGNITIVE_ACCOUNT: check_openai_account,
}


def _get_provider(context: 'DeploymentContext') -> 'AzureProvider':
    if context.provider is None:
        return context.initialize_provider()
    return context.provider


def _ensure_resource_group(provider: 'AzureProvider', params: 'DescriptorParameters') -> None:
    try:
        create_resource_group(provider, params.resource_group, params.location, params.base_tags())
    except AzureError as e:
        raise ResourceCreationError("Microsoft.Resources/resourceGroups", params.resource_group, original_error=e) from e


def _resolve_account(provider: 'AzureProvider', params: 'DescriptorParameters') -> dict:
    """
    Resolve the external Azure OpenAI account and check it against the parameters.

    SKU and model deployment mismatches are warnings only.

    Raises:
        ExternalReferenceError: If the account does not exist
        DeploymentError: If the account cannot be read (permissions, throttling, ...)
    """
    declaration = resources.openai_account(params)
    try:
        account = resolve_openai_account(provider, declaration)
    except AzureError as e:
        raise DeploymentError(
            f"Failed to read {declaration.resource_type} '{declaration.name}': {e}",
            resource=declaration.symbol
        ) from e

    if account["sku"] and account["sku"] != params.openai_sku_name:
        logger.warning(
            f"  Azure OpenAI account SKU is {account['sku']}, expected {params.openai_sku_name}"
        )
    check_openai_model_deployments(provider, declaration, [
        (params.openai_chat_model_name, params.openai_chat_model_name, params.openai_chat_model_version),
        (params.openai_embedding_model_name, params.openai_embedding_model_name, params.openai_embedding_model_version),
    ])
    return account


def apply_declaration(provider: 'AzureProvider', declaration: 'ResourceDeclaration') -> str:
    """
    Create or update one owned declaration.

    Returns:
        Resource ID reported by Azure

    Raises:
        ValueError: If the declaration is an existing reference or has no creator
        ResourceCreationError: If the SDK call fails
    """
    if declaration.existing:
        raise ValueError(f"'{declaration.symbol}' is an existing resource and is never created")

    creator = _CREATORS.get(declaration.resource_type)
    if creator is None:
        raise ValueError(f"No creator registered for {declaration.resource_type}")

    try:
        return creator(provider, declaration)
    except AzureError as e:
        raise ResourceCreationError(
            declaration.resource_type,
            declaration.name,
            symbol=declaration.symbol,
            original_error=e
        ) from e


def deploy_descriptor(context: 'DeploymentContext') -> Dict[str, str]:
    """
    Deploy all owned resources through the management SDK.

    Args:
        context: Deployment context with parameters (and optionally an
            initialized provider)

    Returns:
        Descriptor outputs (names, URI, resolved endpoint, ...)

    Raises:
        ParameterValidationError: If parameters are invalid (nothing is created)
        ExternalReferenceError: If the Azure OpenAI account does not exist
        DeploymentError: If the Azure OpenAI account cannot be read
        ResourceCreationError: If a resource fails to apply
    """
    params = context.parameters
    params.validate()

    provider = _get_provider(context)
    logger.info(f"Deploying environment '{params.environment_name}' to {params.resource_group}")

    account = _resolve_account(provider, params)

    descriptor = build_descriptor(params, openai_endpoint=account["endpoint"])
    _ensure_resource_group(provider, params)

    for wave_number, wave in enumerate(descriptor.deployment_waves()):
        owned = [d for d in wave if not d.existing]
        if not owned:
            continue
        logger.debug(f"Wave {wave_number}: {[d.symbol for d in owned]}")
        for declaration in owned:
            apply_declaration(provider, declaration)

    logger.info(f"✓ Deployment complete: {descriptor.outputs['SERVICE_WEB_URI']}")
    return dict(descriptor.outputs)


def deploy_arm_template(context: 'DeploymentContext', deployment_name: Optional[str] = None) -> Dict[str, str]:
    """
    Deploy through the ARM engine with the rendered template.

    The OpenAI account is resolved first, so a missing account creates
    nothing. The endpoint stays an ARM reference() expression in the template.

    Returns:
        Template outputs as reported by the deployment

    Raises:
        ParameterValidationError: If parameters are invalid (nothing is submitted)
        ExternalReferenceError: If the Azure OpenAI account does not exist
        DeploymentError: If the Azure OpenAI account cannot be read
        ResourceCreationError: If validation or deployment fails
    """
    params = context.parameters
    descriptor = build_descriptor(params)

    provider = _get_provider(context)
    _resolve_account(provider, params)
    _ensure_resource_group(provider, params)

    name = deployment_name or f"{params.environment_name}-{descriptor.resource_token}"
    body = {
        "properties": {
            "template": render_arm_template(descriptor),
            "mode": "Incremental",
        }
    }
    deployments = provider.clients["resource"].deployments

    logger.info(f"Submitting ARM deployment: {name}")
    try:
        deployments.begin_validate(
            resource_group_name=params.resource_group,
            deployment_name=name,
            parameters=body
        ).result()
        logger.info("  ✓ Template validated")

        result = deployments.begin_create_or_update(
            resource_group_name=params.resource_group,
            deployment_name=name,
            parameters=body
        ).result()
    except AzureError as e:
        logger.error(f"ARM deployment failed: {type(e).__name__}: {e}")
        raise ResourceCreationError("Microsoft.Resources/deployments", name, original_error=e) from e

    outputs = (result.properties.outputs or {}) if result.properties else {}
    logger.info(f"✓ ARM deployment complete: {name}")
    return {key: value.get("value") for key, value in outputs.items()}


def info_deployment(context: 'DeploymentContext') -> Dict[str, bool]:
    """
    Check which resources of the descriptor exist.

    Returns:
        Declaration symbol -> exists, the OpenAI account included. Owned
        resources are reported missing without lookups when the target
        resource group does not exist.

    Raises:
        DeploymentError: If Azure rejects a lookup (permissions, throttling, ...)
    """
    params = context.parameters
    descriptor = build_descriptor(params)
    provider = _get_provider(context)

    logger.info(f"Checking deployment status for '{params.environment_name}' ({descriptor.resource_token})")

    status = {}
    try:
        group_exists = check_resource_group(provider, params.resource_group)
        for declaration in descriptor.deployment_order():
            if not declaration.existing and not group_exists:
                status[declaration.symbol] = False
                continue
            status[declaration.symbol] = _CHECKERS[declaration.resource_type](provider, declaration)
    except AzureError as e:
        raise DeploymentError(f"Failed to check deployment status: {e}") from e
    return status
