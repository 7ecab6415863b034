"""
Core abstractions for the web app deployer.

Modules:
    context: DescriptorParameters and DeploymentContext
    config_loader: Parameters file and credential loading
    exceptions: Custom exception types for deployment operations

Usage:
    from webapp_deployer.core import DeploymentContext, load_parameters_file

    params = load_parameters_file(Path("infra/main.parameters.json"))
    context = DeploymentContext(parameters=params)
"""

from .context import DescriptorParameters, DeploymentContext
from .config_loader import load_parameters_file, load_credentials
from .exceptions import (
    DeploymentError,
    ConfigurationError,
    ParameterValidationError,
    DependencyError,
    ExternalReferenceError,
    ResourceCreationError,
)

__all__ = [
    # Context
    "DescriptorParameters",
    "DeploymentContext",
    # Config
    "load_parameters_file",
    "load_credentials",
    # Exceptions
    "DeploymentError",
    "ConfigurationError",
    "ParameterValidationError",
    "DependencyError",
    "ExternalReferenceError",
    "ResourceCreationError",
]
