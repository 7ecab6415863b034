"""
Azure provider: credentials and management SDK clients.

SDK Clients Initialized:
    - ResourceManagementClient: Resource groups and ARM template deployments
    - WebSiteManagementClient: App Service Plan and web app
    - LogAnalyticsManagementClient: Log Analytics workspace
    - MonitorManagementClient: Diagnostic settings

    The external Azure OpenAI account usually lives in another subscription,
    so its CognitiveServicesManagementClient is created per subscription by
    openai_client() and cached.

Usage:
    provider = AzureProvider()
    provider.initialize_clients(credentials, subscription_id)
    provider.clients["web"].app_service_plans.get(...)
"""

from typing import Any, Dict, Optional


class AzureProvider:
    """
    Holds the Azure credential and management clients for one subscription.

    Attributes:
        name: Provider identifier ("azure")
        subscription_id: Subscription that receives the owned resources
        clients: Initialized SDK clients keyed by "resource", "web",
            "loganalytics", "monitor"
    """

    name: str = "azure"

    def __init__(self):
        self._subscription_id: str = ""
        self._credential: Optional[Any] = None
        self._clients: Dict[str, Any] = {}
        self._openai_clients: Dict[str, Any] = {}
        self._initialized: bool = False

    @property
    def subscription_id(self) -> str:
        """Get the Azure subscription ID."""
        return self._subscription_id

    @property
    def clients(self) -> Dict[str, Any]:
        """Get the dictionary of Azure SDK clients."""
        if not self._initialized:
            raise RuntimeError("Provider not initialized. Call initialize_clients() first.")
        return self._clients

    def initialize_clients(self, credentials: dict, subscription_id: str) -> None:
        """
        Initialize Azure SDK clients.

        Args:
            credentials: Azure credentials dictionary with optional
                azure_tenant_id, azure_client_id, azure_client_secret
            subscription_id: Target subscription (REQUIRED)

        Raises:
            ValueError: If subscription_id is missing
        """
        # Fail-fast: the subscription MUST be known
        if not subscription_id:
            raise ValueError(
                "Missing required 'subscription_id'. "
                "Set subscriptionId in the parameters file or AZURE_SUBSCRIPTION_ID."
            )
        self._subscription_id = subscription_id

        self._credential = self._get_credential(credentials or {})
        self._initialize_sdk_clients(self._credential)
        self._initialized = True

    def _get_credential(self, credentials: dict) -> Any:
        """Get Azure credential for SDK clients."""
        from azure.identity import DefaultAzureCredential, ClientSecretCredential

        client_id = credentials.get("azure_client_id")
        client_secret = credentials.get("azure_client_secret")
        tenant_id = credentials.get("azure_tenant_id")

        if client_id and client_secret and tenant_id:
            return ClientSecretCredential(
                tenant_id=tenant_id,
                client_id=client_id,
                client_secret=client_secret
            )
        else:
            return DefaultAzureCredential()

    def _initialize_sdk_clients(self, credential: Any) -> None:
        """Initialize all required Azure SDK clients."""
        from azure.mgmt.resource import ResourceManagementClient
        from azure.mgmt.web import WebSiteManagementClient
        from azure.mgmt.loganalytics import LogAnalyticsManagementClient
        from azure.mgmt.monitor import MonitorManagementClient

        subscription_id = self._subscription_id

        self._clients["resource"] = ResourceManagementClient(credential=credential, subscription_id=subscription_id)
        self._clients["web"] = WebSiteManagementClient(credential=credential, subscription_id=subscription_id)
        self._clients["loganalytics"] = LogAnalyticsManagementClient(credential=credential, subscription_id=subscription_id)
        self._clients["monitor"] = MonitorManagementClient(credential=credential, subscription_id=subscription_id)

    def openai_client(self, subscription_id: str) -> Any:
        """Get the Cognitive Services management client for a subscription."""
        if not self._initialized:
            raise RuntimeError("Provider not initialized. Call initialize_clients() first.")

        if subscription_id not in self._openai_clients:
            from azure.mgmt.cognitiveservices import CognitiveServicesManagementClient
            self._openai_clients[subscription_id] = CognitiveServicesManagementClient(
                credential=self._credential,
                subscription_id=subscription_id
            )
        return self._openai_clients[subscription_id]
