"""
Diagnostic setting of the web app.

A diagnostic setting is an extension resource: it lives under the resource id
of the web app (its scope) rather than in the resource group, so both calls
address it by that scope.
"""

from typing import TYPE_CHECKING
import logging

from azure.core.exceptions import (
    AzureError,
    ResourceNotFoundError,
    HttpResponseError,
    ClientAuthenticationError
)

if TYPE_CHECKING:
    from ..provider import AzureProvider
    from ....descriptor.resources import ResourceDeclaration

logger = logging.getLogger(__name__)


def create_diagnostic_setting(provider: 'AzureProvider', declaration: 'ResourceDeclaration') -> str:
    """
    Create or update the diagnostic setting on its scope.

    Returns:
        Diagnostic setting resource ID

    Raises:
        ValueError: If provider is None or the declaration has no scope
        HttpResponseError: If creation fails
        ClientAuthenticationError: If permission denied
    """
    if provider is None:
        raise ValueError("provider is required")
    if not declaration.scope:
        raise ValueError(f"Diagnostic setting '{declaration.name}' has no scope")

    properties = declaration.properties
    enabled = [c["category"] for c in properties["logs"] + properties["metrics"] if c["enabled"]]
    logger.info(f"Creating Diagnostic Setting: {declaration.name}")
    logger.info(f"  Enabled categories: {', '.join(enabled) or 'none'}")

    try:
        setting = provider.clients["monitor"].diagnostic_settings.create_or_update(
            resource_uri=declaration.scope,
            name=declaration.name,
            parameters=declaration.body()
        )
        logger.info(f"✓ Diagnostic Setting created: {declaration.name}")
        return setting.id
    except ClientAuthenticationError as e:
        logger.error(f"PERMISSION DENIED creating Diagnostic Setting: {e.message}")
        raise
    except HttpResponseError as e:
        logger.error(f"Failed to create Diagnostic Setting: {e.status_code} - {e.message}")
        raise
    except AzureError as e:
        logger.error(f"Azure error creating Diagnostic Setting: {type(e).__name__}: {e}")
        raise


def check_diagnostic_setting(provider: 'AzureProvider', declaration: 'ResourceDeclaration') -> bool:
    """
    Check if the diagnostic setting exists on its scope.

    Returns:
        True if the setting exists, False otherwise
    """
    if provider is None:
        raise ValueError("provider is required")

    try:
        provider.clients["monitor"].diagnostic_settings.get(
            resource_uri=declaration.scope,
            name=declaration.name
        )
        logger.info(f"✓ Diagnostic Setting exists: {declaration.name}")
        return True
    except ResourceNotFoundError:
        logger.info(f"✗ Diagnostic Setting not found: {declaration.name}")
        return False
    except ClientAuthenticationError as e:
        logger.error(f"PERMISSION DENIED checking Diagnostic Setting: {e.message}")
        raise
