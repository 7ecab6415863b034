"""
Desired-state resource declarations.

Each builder function turns DescriptorParameters into one ResourceDeclaration
whose body uses the ARM REST shape ({"location", "tags", "sku", "properties",
...}). The same body is rendered into the ARM template and passed unchanged to
the Azure management SDK, so both deployment paths submit identical state.

Declarations:
    - openAiAccount: existing Azure OpenAI account (read-only reference)
    - appServicePlan: Linux App Service Plan
    - logAnalyticsWorkspace: Log Analytics workspace
    - appService: Linux web app with system-assigned identity
    - appServiceDiagnostics: diagnostic setting routing the web app's logs
      and metrics to the workspace
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Optional

from .. import constants as CONSTANTS
from ..core.context import DescriptorParameters
from .naming import ResourceNaming

SYMBOL_OPENAI_ACCOUNT = "openAiAccount"
SYMBOL_APP_SERVICE_PLAN = "appServicePlan"
SYMBOL_LOG_WORKSPACE = "logAnalyticsWorkspace"
SYMBOL_APP_SERVICE = "appService"
SYMBOL_DIAGNOSTICS = "appServiceDiagnostics"


class ArmExpression(str):
    """A string the ARM engine evaluates at deployment time (rendered as "[...]")."""


@dataclass
class DiagnosticCategory:
    name: str
    enabled: bool = True

    def to_dict(self) -> dict:
        return {"category": self.name, "enabled": self.enabled}


@dataclass
class ResourceDeclaration:
    """
    Desired state of one resource.

    Attributes:
        symbol: Identifier used for dependency edges (e.g., "appService")
        resource_type: ARM resource type (e.g., "Microsoft.Web/sites")
        name: Resource name
        api_version: ARM API version used to render the resource
        depends_on: Symbols that must be applied before this one
        scope: Resource id this extension resource attaches to
        existing: True for resources that are looked up, never created
        subscription_id / resource_group: Where the resource lives
    """

    symbol: str
    resource_type: str
    name: str
    api_version: str
    subscription_id: str
    resource_group: str
    location: Optional[str] = None
    tags: Dict[str, str] = field(default_factory=dict)
    sku: Optional[Dict[str, Any]] = None
    kind: Optional[str] = None
    identity: Optional[Dict[str, Any]] = None
    properties: Dict[str, Any] = field(default_factory=dict)
    depends_on: List[str] = field(default_factory=list)
    scope: Optional[str] = None
    existing: bool = False

    @property
    def resource_id(self) -> str:
        if self.scope:
            return f"{self.scope}/providers/{self.resource_type}/{self.name}"
        return (
            f"/subscriptions/{self.subscription_id}/resourceGroups/{self.resource_group}"
            f"/providers/{self.resource_type}/{self.name}"
        )

    def body(self) -> Dict[str, Any]:
        """Request body in ARM REST shape, without unset top-level fields."""
        body: Dict[str, Any] = {}
        if self.location is not None:
            body["location"] = self.location
        if self.tags:
            body["tags"] = dict(self.tags)
        if self.sku is not None:
            body["sku"] = dict(self.sku)
        if self.kind is not None:
            body["kind"] = self.kind
        if self.identity is not None:
            body["identity"] = dict(self.identity)
        body["properties"] = self.properties
        return body


def merge_tags(base: Mapping[str, str], extra: Mapping[str, str]) -> Dict[str, str]:
    """
    Union of two tag sets; values in ``extra`` win on key conflicts.

    Returns a new dict. Neither input is modified, and every base key is
    present in the result.
    """
    merged = dict(base)
    merged.update(extra)
    return merged


def diagnostic_categories(params: DescriptorParameters) -> tuple[list[DiagnosticCategory], list[DiagnosticCategory]]:
    """Log and metric categories with their enabled flags (all on by default)."""
    logs = [
        DiagnosticCategory(name, params.category_enabled(name))
        for name in CONSTANTS.DIAGNOSTIC_LOG_CATEGORIES
    ]
    metrics = [
        DiagnosticCategory(name, params.category_enabled(name))
        for name in CONSTANTS.DIAGNOSTIC_METRIC_CATEGORIES
    ]
    return logs, metrics


def openai_account(params: DescriptorParameters) -> ResourceDeclaration:
    """Reference to the pre-existing Azure OpenAI account in its own scope."""
    return ResourceDeclaration(
        symbol=SYMBOL_OPENAI_ACCOUNT,
        resource_type=CONSTANTS.TYPE_COGNITIVE_ACCOUNT,
        name=params.openai_account_name,
        api_version=CONSTANTS.API_VERSIONS[CONSTANTS.TYPE_COGNITIVE_ACCOUNT],
        subscription_id=params.openai_subscription_id,
        resource_group=params.openai_resource_group,
        existing=True,
    )


def openai_endpoint_expression(account: ResourceDeclaration) -> ArmExpression:
    """ARM expression reading the endpoint of the existing account at deployment time."""
    return ArmExpression(
        f"reference(resourceId('{account.subscription_id}', '{account.resource_group}', "
        f"'{account.resource_type}', '{account.name}'), '{account.api_version}').endpoint"
    )


def app_service_plan(params: DescriptorParameters, naming: ResourceNaming) -> ResourceDeclaration:
    sku = params.app_service_plan_sku
    return ResourceDeclaration(
        symbol=SYMBOL_APP_SERVICE_PLAN,
        resource_type=CONSTANTS.TYPE_APP_SERVICE_PLAN,
        name=naming.app_service_plan(),
        api_version=CONSTANTS.API_VERSIONS[CONSTANTS.TYPE_APP_SERVICE_PLAN],
        subscription_id=params.subscription_id,
        resource_group=params.resource_group,
        location=params.location,
        tags=params.base_tags(),
        sku={"name": sku, "tier": CONSTANTS.APP_SERVICE_PLAN_SKUS[sku]},
        kind="linux",
        properties={"reserved": True},  # Linux
    )


def log_workspace(params: DescriptorParameters, naming: ResourceNaming) -> ResourceDeclaration:
    return ResourceDeclaration(
        symbol=SYMBOL_LOG_WORKSPACE,
        resource_type=CONSTANTS.TYPE_LOG_WORKSPACE,
        name=naming.log_workspace(),
        api_version=CONSTANTS.API_VERSIONS[CONSTANTS.TYPE_LOG_WORKSPACE],
        subscription_id=params.subscription_id,
        resource_group=params.resource_group,
        location=params.location,
        tags=params.base_tags(),
        properties={
            "sku": {"name": CONSTANTS.LOG_WORKSPACE_SKU},
            "retentionInDays": params.log_retention_days,
        },
    )


def web_app_settings(params: DescriptorParameters, openai_endpoint: str) -> List[Dict[str, str]]:
    """Ordered name/value app settings pushed to the web app."""
    settings = [
        ("AZURE_OPENAI_ENDPOINT", openai_endpoint),
        ("AZURE_OPENAI_CHAT_DEPLOYMENT", params.openai_chat_model_name),
        ("AZURE_OPENAI_EMBEDDING_DEPLOYMENT", params.openai_embedding_model_name),
        ("AZURE_SEARCH_ENDPOINT", params.search_endpoint),
        ("AZURE_SEARCH_INDEX", params.search_index_name),
        ("SYSTEM_PROMPT", params.system_prompt),
    ]
    settings.extend(CONSTANTS.WEB_RUNTIME_SETTINGS)
    return [{"name": name, "value": value} for name, value in settings]


def web_app(
    params: DescriptorParameters,
    naming: ResourceNaming,
    plan: ResourceDeclaration,
    account: ResourceDeclaration,
    openai_endpoint: Optional[str] = None
) -> ResourceDeclaration:
    """
    Linux web app hosting the chat application.

    Args:
        openai_endpoint: Resolved endpoint of the OpenAI account. When None,
            the setting is an ARM expression resolved by the ARM engine.
    """
    endpoint = openai_endpoint if openai_endpoint else openai_endpoint_expression(account)

    return ResourceDeclaration(
        symbol=SYMBOL_APP_SERVICE,
        resource_type=CONSTANTS.TYPE_WEB_APP,
        name=naming.app_service(),
        api_version=CONSTANTS.API_VERSIONS[CONSTANTS.TYPE_WEB_APP],
        subscription_id=params.subscription_id,
        resource_group=params.resource_group,
        location=params.location,
        tags=merge_tags(
            params.base_tags(),
            {CONSTANTS.WEB_SERVICE_TAG_NAME: CONSTANTS.WEB_SERVICE_TAG_VALUE}
        ),
        kind="app,linux",
        identity={"type": "SystemAssigned"},
        properties={
            "serverFarmId": plan.resource_id,
            "httpsOnly": True,
            "siteConfig": {
                "linuxFxVersion": CONSTANTS.WEB_RUNTIME_STACK,
                # Free and Shared plans reject alwaysOn
                "alwaysOn": plan.sku["tier"] not in ("Free", "Shared"),
                "ftpsState": "Disabled",
                "minTlsVersion": "1.2",
                "appSettings": web_app_settings(params, endpoint),
            },
        },
        depends_on=[plan.symbol, account.symbol],
    )


def diagnostic_setting(
    params: DescriptorParameters,
    naming: ResourceNaming,
    app: ResourceDeclaration,
    workspace: ResourceDeclaration
) -> ResourceDeclaration:
    """Diagnostic setting attached to the web app, targeting the workspace."""
    logs, metrics = diagnostic_categories(params)
    return ResourceDeclaration(
        symbol=SYMBOL_DIAGNOSTICS,
        resource_type=CONSTANTS.TYPE_DIAGNOSTIC_SETTING,
        name=naming.diagnostic_setting(),
        api_version=CONSTANTS.API_VERSIONS[CONSTANTS.TYPE_DIAGNOSTIC_SETTING],
        subscription_id=params.subscription_id,
        resource_group=params.resource_group,
        scope=app.resource_id,
        properties={
            "workspaceId": workspace.resource_id,
            "logs": [c.to_dict() for c in logs],
            "metrics": [c.to_dict() for c in metrics],
        },
        depends_on=[app.symbol, workspace.symbol],
    )
