"""
Target resource group.

The resource group is the deployment scope of every owned resource and must
exist before anything else is applied.
"""

from typing import TYPE_CHECKING, Dict, Optional
import logging

from azure.core.exceptions import (
    ResourceNotFoundError,
    HttpResponseError,
    ClientAuthenticationError,
    AzureError
)

if TYPE_CHECKING:
    from ..provider import AzureProvider

logger = logging.getLogger(__name__)


def create_resource_group(
    provider: 'AzureProvider',
    rg_name: str,
    location: str,
    tags: Optional[Dict[str, str]] = None
) -> str:
    """
    Create or update the resource group.

    Returns:
        The resource group name

    Raises:
        ValueError: If provider is None
        azure.core.exceptions.HttpResponseError: If creation fails
    """
    if provider is None:
        raise ValueError("provider is required")

    logger.info(f"Creating Resource Group: {rg_name} in {location}")

    try:
        # create_or_update is idempotent for existing groups
        provider.clients["resource"].resource_groups.create_or_update(
            resource_group_name=rg_name,
            parameters={"location": location, "tags": dict(tags or {})}
        )
        logger.info(f"✓ Resource Group ready: {rg_name}")
        return rg_name
    except ClientAuthenticationError as e:
        logger.error(f"PERMISSION DENIED creating Resource Group: {e.message}")
        raise
    except HttpResponseError as e:
        logger.error(f"Failed to create Resource Group: {e.status_code} - {e.message}")
        raise
    except AzureError as e:
        logger.error(f"Azure error creating Resource Group: {type(e).__name__}: {e}")
        raise


def check_resource_group(provider: 'AzureProvider', rg_name: str) -> bool:
    """
    Check if the resource group exists.

    Returns:
        True if the resource group exists, False otherwise
    """
    if provider is None:
        raise ValueError("provider is required")

    try:
        provider.clients["resource"].resource_groups.get(rg_name)
        logger.info(f"✓ Resource Group exists: {rg_name}")
        return True
    except ResourceNotFoundError:
        logger.info(f"✗ Resource Group not found: {rg_name}")
        return False
    except ClientAuthenticationError as e:
        logger.error(f"PERMISSION DENIED checking Resource Group: {e.message}")
        raise
