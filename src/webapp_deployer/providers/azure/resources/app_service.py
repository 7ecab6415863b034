"""
App Service Plan and web app.

Components Managed:
    - App Service Plan: Linux plan, SKU chosen by app_service_plan_sku
    - Web App: Linux Python web app with system-assigned identity, HTTPS only,
      app settings from the descriptor

Both calls are create-or-update, so reapplying the same declaration converges
the existing resource instead of failing.
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


# ==========================================
# 1. App Service Plan
# ==========================================

def create_app_service_plan(provider: 'AzureProvider', declaration: 'ResourceDeclaration') -> str:
    """
    Create or update the App Service Plan.

    Args:
        provider: Initialized AzureProvider
        declaration: appServicePlan declaration

    Returns:
        App Service Plan resource ID

    Raises:
        ValueError: If provider is None
        HttpResponseError: If creation fails
        ClientAuthenticationError: If permission denied
    """
    if provider is None:
        raise ValueError("provider is required")

    logger.info(f"Creating App Service Plan: {declaration.name} ({declaration.sku['name']})")

    try:
        poller = provider.clients["web"].app_service_plans.begin_create_or_update(
            resource_group_name=declaration.resource_group,
            name=declaration.name,
            app_service_plan=declaration.body()
        )
        plan = poller.result()
        logger.info(f"✓ App Service Plan created: {declaration.name}")
        return plan.id
    except ClientAuthenticationError as e:
        logger.error(f"PERMISSION DENIED creating App Service Plan: {e.message}")
        raise
    except HttpResponseError as e:
        logger.error(f"Failed to create App Service Plan: {e.status_code} - {e.message}")
        raise
    except AzureError as e:
        logger.error(f"Azure error creating App Service Plan: {type(e).__name__}: {e}")
        raise


def check_app_service_plan(provider: 'AzureProvider', declaration: 'ResourceDeclaration') -> bool:
    """
    Check if the App Service Plan exists.

    Returns:
        True if the plan exists, False otherwise
    """
    if provider is None:
        raise ValueError("provider is required")

    try:
        provider.clients["web"].app_service_plans.get(
            resource_group_name=declaration.resource_group,
            name=declaration.name
        )
        logger.info(f"✓ App Service Plan exists: {declaration.name}")
        return True
    except ResourceNotFoundError:
        logger.info(f"✗ App Service Plan not found: {declaration.name}")
        return False
    except ClientAuthenticationError as e:
        logger.error(f"PERMISSION DENIED checking App Service Plan: {e.message}")
        raise


# ==========================================
# 2. Web App
# ==========================================

def create_web_app(provider: 'AzureProvider', declaration: 'ResourceDeclaration') -> str:
    """
    Create or update the web app, including its app settings.

    The plan referenced by serverFarmId must already exist.

    Returns:
        Web app resource ID

    Raises:
        ValueError: If provider is None
        HttpResponseError: If creation fails
        ClientAuthenticationError: If permission denied
    """
    if provider is None:
        raise ValueError("provider is required")

    settings = declaration.properties["siteConfig"]["appSettings"]
    logger.info(f"Creating Web App: {declaration.name}")
    logger.debug(f"  App settings: {[s['name'] for s in settings]}")

    try:
        poller = provider.clients["web"].web_apps.begin_create_or_update(
            resource_group_name=declaration.resource_group,
            name=declaration.name,
            site_envelope=declaration.body()
        )
        app = poller.result()
        logger.info(f"✓ Web App created: {declaration.name}")
        return app.id
    except ClientAuthenticationError as e:
        logger.error(f"PERMISSION DENIED creating Web App: {e.message}")
        raise
    except HttpResponseError as e:
        logger.error(f"Failed to create Web App: {e.status_code} - {e.message}")
        raise
    except AzureError as e:
        logger.error(f"Azure error creating Web App: {type(e).__name__}: {e}")
        raise


def check_web_app(provider: 'AzureProvider', declaration: 'ResourceDeclaration') -> bool:
    """
    Check if the web app exists.

    Returns:
        True if the web app exists, False otherwise
    """
    if provider is None:
        raise ValueError("provider is required")

    try:
        provider.clients["web"].web_apps.get(
            resource_group_name=declaration.resource_group,
            name=declaration.name
        )
        logger.info(f"✓ Web App exists: {declaration.name}")
        return True
    except ResourceNotFoundError:
        logger.info(f"✗ Web App not found: {declaration.name}")
        return False
    except ClientAuthenticationError as e:
        logger.error(f"PERMISSION DENIED checking Web App: {e.message}")
        raise
