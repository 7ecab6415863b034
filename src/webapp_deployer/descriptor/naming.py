"""
Azure resource naming conventions.

Every owned resource name carries the resource token, a deterministic hash of
the deployment scope and environment name. Redeploying with the same inputs
yields the same names; a different environment or resource group yields
different ones, so deployments never collide.

Naming Convention:
    - App Service Plan: plan-{token}
    - App Service: app-{token} (or the explicit app_service_name)
    - Log Analytics Workspace: law-{token}
    - Diagnostic Setting: diag-{token}

Usage:
    from webapp_deployer.descriptor.naming import ResourceNaming

    naming = ResourceNaming("abc123")
    naming.app_service_plan()  # "plan-abc123"
"""

from typing import Optional
import base64
import hashlib

TOKEN_LENGTH = 13


def derive_resource_token(scope_id: str, environment_name: str) -> str:
    """
    Derive the uniqueness token from the scope identity and environment name.

    SHA-256 of the "-"-joined inputs, base32-encoded, lowercased and cut to
    13 characters (the same shape as ARM's uniqueString()).

    Args:
        scope_id: Resource id of the target resource group
        environment_name: Environment name (e.g., "dev")

    Returns:
        13-character lowercase alphanumeric token
    """
    digest = hashlib.sha256(f"{scope_id}-{environment_name}".encode("utf-8")).digest()
    return base64.b32encode(digest).decode("ascii").lower()[:TOKEN_LENGTH]


class ResourceNaming:
    """
    Generates consistent names for the owned resources of one deployment.

    Attributes:
        token: The resource token every name is derived from
    """

    def __init__(self, token: str, app_service_name: Optional[str] = None):
        self._token = token
        self._app_service_name = app_service_name or None

    @property
    def token(self) -> str:
        """Get the resource token."""
        return self._token

    def app_service_plan(self) -> str:
        """App Service Plan name. Pattern: plan-{token}"""
        return f"plan-{self._token}"

    def app_service(self) -> str:
        """
        App Service name.

        The name is also the first label of {name}.azurewebsites.net, so the
        explicit override must already be globally unique.
        """
        return self._app_service_name or f"app-{self._token}"

    def log_workspace(self) -> str:
        """Log Analytics workspace name. Pattern: law-{token}"""
        return f"law-{self._token}"

    def diagnostic_setting(self) -> str:
        return f"diag-{self._token}"

    def app_service_uri(self) -> str:
        return f"https://{self.app_service()}.azurewebsites.net"
