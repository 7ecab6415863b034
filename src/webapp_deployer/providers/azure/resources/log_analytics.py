"""Log Analytics workspace receiving the web app's diagnostics."""

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


def create_log_analytics_workspace(provider: 'AzureProvider', declaration: 'ResourceDeclaration') -> str:
    """
    Create or update the Log Analytics workspace.

    Returns:
        Workspace resource ID

    Raises:
        ValueError: If provider is None
        HttpResponseError: If creation fails
        ClientAuthenticationError: If permission denied
    """
    if provider is None:
        raise ValueError("provider is required")

    retention = declaration.properties["retentionInDays"]
    logger.info(f"Creating Log Analytics Workspace: {declaration.name} (retention {retention} days)")

    try:
        poller = provider.clients["loganalytics"].workspaces.begin_create_or_update(
            resource_group_name=declaration.resource_group,
            workspace_name=declaration.name,
            parameters=declaration.body()
        )
        workspace = poller.result()
        logger.info(f"✓ Log Analytics Workspace created: {declaration.name}")
        return workspace.id
    except ClientAuthenticationError as e:
        logger.error(f"PERMISSION DENIED creating Log Analytics Workspace: {e.message}")
        raise
    except HttpResponseError as e:
        logger.error(f"Failed to create Log Analytics Workspace: {e.status_code} - {e.message}")
        raise
    except AzureError as e:
        logger.error(f"Azure error creating Log Analytics Workspace: {type(e).__name__}: {e}")
        raise


def check_log_analytics_workspace(provider: 'AzureProvider', declaration: 'ResourceDeclaration') -> bool:
    """
    Check if the Log Analytics workspace exists.

    Returns:
        True if the workspace exists, False otherwise
    """
    if provider is None:
        raise ValueError("provider is required")

    try:
        provider.clients["loganalytics"].workspaces.get(
            resource_group_name=declaration.resource_group,
            workspace_name=declaration.name
        )
        logger.info(f"✓ Log Analytics Workspace exists: {declaration.name}")
        return True
    except ResourceNotFoundError:
        logger.info(f"✗ Log Analytics Workspace not found: {declaration.name}")
        return False
    except ClientAuthenticationError as e:
        logger.error(f"PERMISSION DENIED checking Log Analytics Workspace: {e.message}")
        raise
