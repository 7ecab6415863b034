"""
External Azure OpenAI account (read-only).

The account is owned elsewhere and lives in its own subscription and resource
group. This module only reads it: the lookup fails the deployment when the
account is missing, and no function here creates, updates or deletes it.
"""

from typing import TYPE_CHECKING, Dict, List, Tuple
import logging

from azure.core.exceptions import (
    AzureError,
    ResourceNotFoundError,
    ClientAuthenticationError
)

from ....core.exceptions import ExternalReferenceError

if TYPE_CHECKING:
    from ..provider import AzureProvider
    from ....descriptor.resources import ResourceDeclaration

logger = logging.getLogger(__name__)


def _scope(declaration: 'ResourceDeclaration') -> str:
    return f"/subscriptions/{declaration.subscription_id}/resourceGroups/{declaration.resource_group}"


def resolve_openai_account(provider: 'AzureProvider', declaration: 'ResourceDeclaration') -> dict:
    """
    Look up the existing Azure OpenAI account.

    Args:
        provider: Initialized AzureProvider
        declaration: openAiAccount declaration (existing=True)

    Returns:
        Dictionary with account info: {id, name, endpoint, sku}

    Raises:
        ValueError: If provider is None or the declaration is not an existing reference
        ExternalReferenceError: If the account does not exist in its scope
        ClientAuthenticationError: If permission denied
    """
    if provider is None:
        raise ValueError("provider is required")
    if not declaration.existing:
        raise ValueError(f"'{declaration.symbol}' is not an existing-resource reference")

    scope = _scope(declaration)
    logger.info(f"Resolving Azure OpenAI account: {declaration.name} in {scope}")

    client = provider.openai_client(declaration.subscription_id)
    try:
        account = client.accounts.get(
            resource_group_name=declaration.resource_group,
            account_name=declaration.name
        )
    except ResourceNotFoundError as e:
        logger.error(f"✗ Azure OpenAI account not found: {declaration.name}")
        raise ExternalReferenceError(
            declaration.resource_type, declaration.name, scope, original_error=e
        ) from e
    except ClientAuthenticationError as e:
        logger.error(f"PERMISSION DENIED reading Azure OpenAI account: {e.message}")
        raise
    except AzureError as e:
        logger.error(f"Azure error reading Azure OpenAI account: {type(e).__name__}: {e}")
        raise

    result = {
        "id": account.id,
        "name": account.name,
        "endpoint": account.properties.endpoint,
        "sku": account.sku.name if account.sku else None,
    }
    logger.info(f"✓ Azure OpenAI account resolved: {declaration.name}")
    logger.info(f"  Endpoint: {result['endpoint']}")
    return result


def check_openai_account(provider: 'AzureProvider', declaration: 'ResourceDeclaration') -> bool:
    """
    Check if the Azure OpenAI account exists.

    Returns:
        True if the account exists, False otherwise
    """
    try:
        resolve_openai_account(provider, declaration)
        return True
    except ExternalReferenceError:
        return False


def check_openai_model_deployments(
    provider: 'AzureProvider',
    declaration: 'ResourceDeclaration',
    expected: List[Tuple[str, str, str]]
) -> Dict[str, bool]:
    """
    Check that the account serves the expected model deployments.

    Args:
        expected: (deployment name, model name, model version) tuples

    Returns:
        Deployment name -> True if deployed with that model and version.
        Missing or mismatched deployments are logged as warnings; the web
        app can still be provisioned without them. When the deployments
        cannot be listed, a warning is logged and the result is empty.
    """
    if provider is None:
        raise ValueError("provider is required")

    client = provider.openai_client(declaration.subscription_id)
    try:
        deployed = {
            d.name: d
            for d in client.deployments.list(
                resource_group_name=declaration.resource_group,
                account_name=declaration.name
            )
        }
    except AzureError as e:
        logger.warning(f"  Could not list model deployments on {declaration.name}: {type(e).__name__}: {e}")
        return {}

    status = {}
    for deployment_name, model_name, model_version in expected:
        deployment = deployed.get(deployment_name)
        if deployment is None:
            logger.warning(f"  Model deployment '{deployment_name}' not found on {declaration.name}")
            status[deployment_name] = False
            continue

        model = deployment.properties.model if deployment.properties else None
        if model is None:
            logger.warning(f"  Model deployment '{deployment_name}' reports no model")
            status[deployment_name] = False
        elif model.name != model_name or model.version != model_version:
            logger.warning(
                f"  Model deployment '{deployment_name}' runs {model.name} {model.version}, "
                f"expected {model_name} {model_version}"
            )
            status[deployment_name] = False
        else:
            logger.info(f"  ✓ Model deployment '{deployment_name}': {model_name} {model_version}")
            status[deployment_name] = True
    return status
