"""
Azure provider package.

Usage:
    from webapp_deployer.providers.azure import AzureProvider, deploy_descriptor
"""

from .provider import AzureProvider
from .deployer import apply_declaration, deploy_descriptor, deploy_arm_template, info_deployment

__all__ = [
    "AzureProvider",
    "apply_declaration",
    "deploy_descriptor",
    "deploy_arm_template",
    "info_deployment",
]
