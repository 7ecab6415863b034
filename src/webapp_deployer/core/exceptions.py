"""
Custom exceptions for the web app deployer.

Exception Hierarchy:
    DeploymentError (base)
    ├── ConfigurationError - Invalid or missing configuration
    │   └── ParameterValidationError - Descriptor parameters failed validation
    ├── DependencyError - Unknown or cyclic dependency between declarations
    ├── ExternalReferenceError - A referenced existing resource was not found
    └── ResourceCreationError - Failed to create or update a cloud resource
"""

from typing import Optional


class DeploymentError(Exception):
    """
    Base exception for all deployment-related errors.

    Attributes:
        message: Human-readable error description
        resource: Optional symbol of the declaration involved
    """

    def __init__(self, message: str, resource: Optional[str] = None):
        self.message = message
        self.resource = resource

        if resource:
            full_message = f"{message} [resource={resource}]"
        else:
            full_message = message

        super().__init__(full_message)


class ConfigurationError(DeploymentError):
    """
    Raised when configuration is invalid or missing required fields.

    Example:
        >>> load_parameters_file(Path("nonexistent.json"))
        ConfigurationError: Parameters file not found (file: nonexistent.json)
    """

    def __init__(self, message: str, config_file: Optional[str] = None):
        self.config_file = config_file
        if config_file:
            message = f"{message} (file: {config_file})"
        super().__init__(message)


class ParameterValidationError(ConfigurationError):
    """
    Raised when descriptor parameters fail validation.

    All problems found in one validation pass are collected in ``errors`` so
    the caller sees every bad value at once, not just the first.
    """

    def __init__(self, errors: list[str]):
        self.errors = list(errors)
        super().__init__("Invalid parameters: " + "; ".join(self.errors))


class DependencyError(DeploymentError):
    """Raised when declarations reference unknown symbols or form a cycle."""


class ExternalReferenceError(DeploymentError):
    """
    Raised when an existing resource referenced by the descriptor cannot be
    found in its scope.

    Attributes:
        resource_type: ARM type of the referenced resource
        resource_name: Name that was looked up
        scope: Subscription/resource group the lookup ran in
    """

    def __init__(
        self,
        resource_type: str,
        resource_name: str,
        scope: str,
        original_error: Optional[Exception] = None
    ):
        self.resource_type = resource_type
        self.resource_name = resource_name
        self.scope = scope
        self.original_error = original_error

        message = f"Existing {resource_type} '{resource_name}' not found in {scope}"
        super().__init__(message)


class ResourceCreationError(DeploymentError):
    """
    Raised when a cloud resource fails to create or update.

    Wraps the Azure SDK error with the declaration that was being applied.
    Resources applied before the failure are left in place.

    Attributes:
        resource_type: ARM type (e.g., "Microsoft.Web/sites")
        resource_name: Name of the resource that failed
        original_error: The underlying SDK exception
    """

    def __init__(
        self,
        resource_type: str,
        resource_name: str,
        symbol: Optional[str] = None,
        original_error: Optional[Exception] = None
    ):
        self.resource_type = resource_type
        self.resource_name = resource_name
        self.original_error = original_error

        message = f"Failed to create {resource_type} '{resource_name}'"
        if original_error:
            message += f": {str(original_error)}"

        super().__init__(message, resource=symbol)
