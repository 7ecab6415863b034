"""
Provisioning descriptor.

build_descriptor() expands validated DescriptorParameters into the full set of
resource declarations and outputs. Evaluation is pure: the same parameters
always yield the same descriptor, and nothing is contacted while building it.
"""

from dataclasses import dataclass, field
from typing import Dict, List, Optional
import logging

from ..core.context import DescriptorParameters
from ..core.exceptions import DependencyError
from . import resources
from .graph import deployment_order, deployment_waves
from .naming import ResourceNaming, derive_resource_token
from .resources import ResourceDeclaration

logger = logging.getLogger(__name__)


@dataclass
class ProvisioningDescriptor:
    """
    Fully resolved desired state of one deployment.

    Attributes:
        parameters: Validated input parameters
        naming: Naming for the resolved resource token
        declarations: All declarations, existing references included
        outputs: Values handed back to the caller after deployment
    """

    parameters: DescriptorParameters
    naming: ResourceNaming
    declarations: List[ResourceDeclaration] = field(default_factory=list)
    outputs: Dict[str, str] = field(default_factory=dict)

    @property
    def resource_token(self) -> str:
        return self.naming.token

    def get(self, symbol: str) -> ResourceDeclaration:
        """
        Get a declaration by symbol.

        Raises:
            DependencyError: If no declaration has that symbol
        """
        for declaration in self.declarations:
            if declaration.symbol == symbol:
                return declaration
        raise DependencyError(f"No declaration with symbol '{symbol}'")

    def owned(self) -> List[ResourceDeclaration]:
        """Declarations this descriptor creates or updates."""
        return [d for d in self.declarations if not d.existing]

    def existing(self) -> List[ResourceDeclaration]:
        """Declarations that are only looked up."""
        return [d for d in self.declarations if d.existing]

    def deployment_order(self) -> List[ResourceDeclaration]:
        return deployment_order(self.declarations)

    def deployment_waves(self) -> List[List[ResourceDeclaration]]:
        return deployment_waves(self.declarations)


def resolve_resource_token(params: DescriptorParameters) -> str:
    """Explicit token if given, else the token derived from scope and environment."""
    if params.resource_token:
        return params.resource_token
    return derive_resource_token(params.scope_id, params.environment_name)


def build_descriptor(
    params: DescriptorParameters,
    openai_endpoint: Optional[str] = None
) -> ProvisioningDescriptor:
    """
    Build the provisioning descriptor.

    Args:
        params: Descriptor parameters (validated here)
        openai_endpoint: Resolved endpoint of the external OpenAI account.
            When None, the web app setting is an ARM reference() expression.

    Returns:
        ProvisioningDescriptor with declarations in definition order

    Raises:
        ParameterValidationError: If any parameter is invalid
    """
    params.validate()

    token = resolve_resource_token(params)
    naming = ResourceNaming(token, params.app_service_name)
    logger.debug(f"Resource token: {token}")

    account = resources.openai_account(params)
    plan = resources.app_service_plan(params, naming)
    workspace = resources.log_workspace(params, naming)
    app = resources.web_app(params, naming, plan, account, openai_endpoint)
    diagnostics = resources.diagnostic_setting(params, naming, app, workspace)

    if not params.search_endpoint:
        logger.warning("search_endpoint is empty; the web app will start without a search service")

    outputs = {
        "AZURE_LOCATION": params.location,
        "AZURE_RESOURCE_TOKEN": token,
        "SERVICE_WEB_NAME": app.name,
        "SERVICE_WEB_URI": naming.app_service_uri(),
        "AZURE_LOG_ANALYTICS_WORKSPACE_NAME": workspace.name,
        "AZURE_OPENAI_ENDPOINT": openai_endpoint or resources.openai_endpoint_expression(account),
        "AZURE_OPENAI_SERVICE": params.openai_service_name or account.name,
        "AZURE_PRINCIPAL_ID": params.principal_id,
    }

    descriptor = ProvisioningDescriptor(
        parameters=params,
        naming=naming,
        declarations=[account, plan, workspace, app, diagnostics],
        outputs=outputs,
    )
    # Raises DependencyError on unknown symbols or cycles
    descriptor.deployment_waves()
    return descriptor
